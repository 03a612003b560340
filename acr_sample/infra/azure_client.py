# -----------------------------------------------------------------------------
# AZURE PROVIDER
# -----------------------------------------------------------------------------
# Responsibility: Authenticated Azure management clients for one subscription.
#
# Clients are created on first use so a run that never needs a VM never
# builds the compute or network clients.
# -----------------------------------------------------------------------------

from typing import TYPE_CHECKING

from azure.identity import ClientSecretCredential
from azure.mgmt.compute import ComputeManagementClient
from azure.mgmt.containerregistry import ContainerRegistryManagementClient
from azure.mgmt.network import NetworkManagementClient
from azure.mgmt.resource.resources import ResourceManagementClient
from rich.console import Console

if TYPE_CHECKING:
    from acr_sample.core.settings import AzureCredentials

console = Console()


class AzureClients:
    """
    Lazily-built management clients sharing one service principal credential.

    Attributes:
        subscription_id: Subscription every client targets.
    """

    def __init__(self, credentials: "AzureCredentials") -> None:
        self.subscription_id = credentials.subscription_id
        self._credential = ClientSecretCredential(
            tenant_id=credentials.tenant_id,
            client_id=credentials.client_id,
            client_secret=credentials.client_secret,
        )
        self._clients: dict = {}
        console.print(
            f"[green][AZURE] Service principal configured for subscription {self.subscription_id}[/green]"
        )

    def _get(self, key: str, factory):
        if key not in self._clients:
            self._clients[key] = factory(self._credential, self.subscription_id)
        return self._clients[key]

    @property
    def resources(self) -> ResourceManagementClient:
        return self._get("resources", ResourceManagementClient)

    @property
    def registries(self) -> ContainerRegistryManagementClient:
        return self._get("registries", ContainerRegistryManagementClient)

    @property
    def network(self) -> NetworkManagementClient:
        return self._get("network", NetworkManagementClient)

    @property
    def compute(self) -> ComputeManagementClient:
        return self._get("compute", ComputeManagementClient)

    def close(self) -> None:
        """
        Close every client that was created, then the credential.

        A client that fails to close is logged and does not stop the others.
        """
        clients = list(self._clients.items())
        self._clients.clear()
        try:
            for key, client in clients:
                try:
                    client.close()
                except Exception as e:
                    console.print(f"[yellow][AZURE] Failed to close {key} client: {e}[/yellow]")
        finally:
            self._credential.close()
