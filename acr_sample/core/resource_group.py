# -----------------------------------------------------------------------------
# RESOURCE GROUP - CREATE & CLEAN UP
# -----------------------------------------------------------------------------
# Responsibility: Owns the one resource group of a run. Everything the sample
# provisions lives inside it, so deleting it is the whole clean up.
#
# Clean up never raises. It does tell apart "nothing was created" from
# "the delete call failed" so a leaked group shows up in the log.
# -----------------------------------------------------------------------------

from azure.mgmt.resource.resources import ResourceManagementClient
from rich.console import Console

console = Console()


class ResourceGroupManager:
    """Creates the run's resource group and deletes it exactly once."""

    def __init__(self, client: ResourceManagementClient) -> None:
        self._client = client
        self.name: str | None = None
        self.id: str | None = None
        self._delete_attempted = False
        self._deleted = False

    @property
    def created(self) -> bool:
        return self.name is not None

    def create(self, name: str, location: str):
        """
        Create (or update) the resource group and record it for clean up.

        Returns:
            The ResourceGroup model returned by Azure.
        """
        console.print(f"[cyan][RESOURCE GROUP] Creating {name} in {location}...[/cyan]")
        group = self._client.resource_groups.create_or_update(name, {"location": location})
        self.name = name
        self.id = group.id
        console.print(f"[green][RESOURCE GROUP] Created a resource group with name: {name}[/green]")
        return group

    def cleanup(self) -> bool:
        """
        Delete the resource group if this run created one.

        Returns:
            True if the group was deleted, False if there was nothing to
            delete or the delete failed.
        """
        if not self.created:
            console.print(
                "[yellow][CLEANUP] Did not create any resources in Azure. No clean up is necessary[/yellow]"
            )
            return False

        if self._delete_attempted:
            return self._deleted

        console.print(f"[cyan][CLEANUP] Deleting Resource Group: {self.id}[/cyan]")
        self._delete_attempted = True
        try:
            self._client.resource_groups.begin_delete(self.name).result()
        except Exception as e:
            console.print(f"[red][CLEANUP] Failed to delete Resource Group {self.name}: {e}[/red]")
            console.print(
                f"[red][CLEANUP] Resources may still be billing. Delete '{self.name}' manually.[/red]"
            )
            return False

        self._deleted = True
        console.print(f"[green][CLEANUP] Deleted Resource Group: {self.id}[/green]")
        return True
