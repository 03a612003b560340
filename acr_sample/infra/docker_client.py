# -----------------------------------------------------------------------------
# DOCKER PROVIDER
# -----------------------------------------------------------------------------
# Responsibility: A thin wrapper around the Docker SDK with connection
# validation and deterministic release of the connection.
#
# Talks either to the local engine (DOCKER_HOST / default socket) or to a
# remote engine at an explicit base URL, such as the one on a sample VM.
# -----------------------------------------------------------------------------

import docker
from docker import DockerClient
from docker.errors import DockerException
from rich.console import Console

console = Console()

# Remote engines on a fresh VM can be slow to answer the first calls
REMOTE_TIMEOUT_SECONDS = 120


class DockerProviderError(Exception):
    """Raised when the Docker engine cannot be reached."""

    pass


class DockerProvider:
    """
    Docker SDK wrapper bound to one engine.

    Usable as a context manager; the connection is closed on exit.
    """

    def __init__(self, base_url: str | None = None) -> None:
        """
        Connect to a Docker engine.

        Args:
            base_url: Engine URL (e.g. 'tcp://1.2.3.4:2375'). None uses the
                local environment.

        Raises:
            DockerProviderError: If the engine does not answer a ping.
        """
        self.base_url = base_url
        self._client: DockerClient | None = None
        self._connect()

    @classmethod
    def try_local(cls) -> "DockerProvider | None":
        """Return a provider for the local engine, or None if none answers."""
        try:
            return cls()
        except DockerProviderError:
            console.print("[yellow][DOCKER] No local Docker engine found[/yellow]")
            return None

    @property
    def endpoint(self) -> str:
        """Engine URL as the SDK sees it, for logging."""
        if self._client is not None:
            return self._client.api.base_url
        return self.base_url or "local"

    def _connect(self) -> None:
        try:
            if self.base_url:
                self._client = docker.DockerClient(
                    base_url=self.base_url, timeout=REMOTE_TIMEOUT_SECONDS
                )
            else:
                self._client = docker.from_env()
            self._client.ping()
            console.print(f"[green][DOCKER] Connected to Docker Engine at {self.endpoint}[/green]")
        except DockerException as e:
            if self._client is not None:
                self._client.close()
                self._client = None
            raise DockerProviderError(
                f"Docker Engine at {self.base_url or 'local environment'} is not available: {e}"
            ) from e

    def get_client(self) -> DockerClient:
        """
        Get the Docker client, verifying connection is still active.

        Raises:
            DockerProviderError: If the client is closed or the engine stopped answering.
        """
        if self._client is None:
            raise DockerProviderError("Docker client not initialized")

        try:
            self._client.ping()
            return self._client
        except DockerException as e:
            console.print(f"[red][DOCKER] Connection lost: {e}[/red]")
            raise DockerProviderError(f"Docker connection lost: {e}") from e

    def is_connected(self) -> bool:
        if self._client is None:
            return False
        try:
            self._client.ping()
            return True
        except DockerException:
            return False

    def close(self) -> None:
        """Release the connection. Safe to call more than once."""
        if self._client is not None:
            self._client.close()
            self._client = None
            console.print("[cyan][DOCKER] Connection closed[/cyan]")

    def __enter__(self) -> "DockerProvider":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
