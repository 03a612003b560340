# -----------------------------------------------------------------------------
# THE REGISTRY - AZURE CONTAINER REGISTRY
# -----------------------------------------------------------------------------
# Responsibility: Create the private registry that holds the sample image and
# fetch the admin login Docker uses to push and pull.
# -----------------------------------------------------------------------------

from azure.mgmt.containerregistry import ContainerRegistryManagementClient
from rich.console import Console

from acr_sample.core.settings import SampleSettings
from acr_sample.domain.models import RegistryCredentials

console = Console()


class RegistryError(Exception):
    """Raised when a registry is unusable for push/pull."""

    pass


class RegistryManager:
    """Creates a container registry and reads its admin credentials."""

    def __init__(self, client: ContainerRegistryManagementClient, settings: SampleSettings) -> None:
        self._client = client
        self._settings = settings

    def create(self, resource_group: str, name: str, location: str):
        """
        Create an admin-enabled registry and wait until it is provisioned.

        Returns:
            The Registry model (login_server is set).
        """
        console.print(f"[cyan][REGISTRY] Creating an Azure Container Registry: {name}[/cyan]")
        poller = self._client.registries.begin_create(
            resource_group_name=resource_group,
            registry_name=name,
            registry={
                "location": location,
                "sku": {"name": self._settings.registry_sku},
                "admin_user_enabled": self._settings.registry_admin_enabled,
                "tags": dict(self._settings.registry_tags),
            },
        )
        registry = poller.result()
        console.print(f"[green][REGISTRY] Registry created: {registry.login_server}[/green]")
        return registry

    def get_credentials(self, resource_group: str, registry) -> RegistryCredentials:
        """
        Read the admin username and first password of a registry.

        Raises:
            RegistryError: If the registry has no admin login (admin user disabled).
        """
        result = self._client.registries.list_credentials(resource_group, registry.name)
        passwords = [p.value for p in (result.passwords or []) if p.value]

        if not result.username or not passwords:
            raise RegistryError(
                f"Registry {registry.name} returned no admin credentials; is the admin user enabled?"
            )

        console.print(f"[green][REGISTRY] Admin credentials retrieved for {registry.login_server}[/green]")
        return RegistryCredentials(
            login_server=registry.login_server,
            username=result.username,
            password=passwords[0],
        )
