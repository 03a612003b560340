# -----------------------------------------------------------------------------
# IMAGE WORKFLOW - PULL, COMMIT, PUSH, PULL BACK
# -----------------------------------------------------------------------------
# Responsibility: The Docker half of the sample.
#
# 1. Pull the public image (hello-world:latest)
# 2. Create a container from it and commit the container into the private
#    repository '<login server>/<rel path>/<container name>'
# 3. Push that image to the registry, pull it back and create a second
#    container ('<container name>fromazure') from the registry copy
#
# Images and containers are listed after each stage so the log shows what
# the engine holds.
# -----------------------------------------------------------------------------

from docker import DockerClient
from rich.console import Console

from acr_sample.core.settings import SampleSettings
from acr_sample.domain.models import ImageRef, RegistryCredentials, private_repo_url

console = Console()

# Suffix of the container created from the registry copy
FROM_REGISTRY_SUFFIX = "fromazure"


class ImageWorkflowError(Exception):
    """Raised when the engine reports a failed push or pull."""

    pass


class ImageWorkflow:
    """Runs the fixed image sequence against one Docker engine."""

    def __init__(self, client: DockerClient, settings: SampleSettings, endpoint: str = "local") -> None:
        self._client = client
        self._settings = settings
        self._endpoint = endpoint

    @property
    def public_image(self) -> ImageRef:
        return ImageRef(
            repository=self._settings.docker_image_name, tag=self._settings.docker_image_tag
        )

    def private_image(self, login_server: str) -> ImageRef:
        return ImageRef(
            repository=private_repo_url(
                login_server,
                self._settings.docker_image_rel_path,
                self._settings.docker_container_name,
            ),
            tag=self._settings.docker_image_tag,
        )

    def run(self, credentials: RegistryCredentials) -> ImageRef:
        """
        Execute the whole sequence.

        Args:
            credentials: Admin login of the target registry.

        Returns:
            The private image that was pushed and pulled back.
        """
        public = self.public_image
        container_name = self._settings.docker_container_name

        self.pull(public)
        self.list_images()

        container = self.create_container(public, container_name)
        self.list_containers()

        private = self.private_image(credentials.login_server)
        self.commit(container, private)
        self.push(private, credentials)

        self.pull(private, credentials)
        self.list_images()

        self.create_container(private, container_name + FROM_REGISTRY_SUFFIX)
        self.list_containers()

        return private

    def pull(self, image: ImageRef, credentials: RegistryCredentials | None = None):
        console.print(f"[cyan][IMAGES] Pulling {image.reference}...[/cyan]")
        auth = credentials.auth_config() if credentials else None
        pulled = self._client.images.pull(image.repository, tag=image.tag, auth_config=auth)
        console.print(f"[green][IMAGES] Pulled {image.reference} (id:{pulled.id})[/green]")
        return pulled

    def list_images(self) -> list:
        console.print(f"[cyan][IMAGES] List Docker images for: {self._endpoint}[/cyan]")
        images = self._client.images.list(all=True)
        for img in images:
            tag = img.tags[0] if img.tags else "<none>"
            console.print(f"\tFound image {tag} (id:{img.id})")
        return images

    def create_container(self, image: ImageRef, name: str):
        console.print(f"[cyan][CONTAINERS] Creating container {name} from {image.reference}[/cyan]")
        return self._client.containers.create(image.reference, name=name)

    def list_containers(self) -> list:
        console.print(f"[cyan][CONTAINERS] List Docker containers for: {self._endpoint}[/cyan]")
        containers = self._client.containers.list(all=True)
        for container in containers:
            console.print(f"\tFound container {container.name} (id:{container.id})")
        return containers

    def commit(self, container, image: ImageRef):
        console.print(f"[cyan][IMAGES] Committing image at: {image.repository}[/cyan]")
        return container.commit(repository=image.repository, tag=image.tag)

    def push(self, image: ImageRef, credentials: RegistryCredentials) -> None:
        """
        Push an image to the private registry.

        Raises:
            ImageWorkflowError: If the engine streams back an error.
        """
        console.print(f"[cyan][IMAGES] Pushing {image.reference} to {credentials.login_server}...[/cyan]")
        for chunk in self._client.images.push(
            image.repository,
            tag=image.tag,
            auth_config=credentials.auth_config(),
            stream=True,
            decode=True,
        ):
            if "error" in chunk:
                console.print(f"[red][IMAGES] Push failed: {chunk['error']}[/red]")
                raise ImageWorkflowError(f"Push of {image.reference} failed: {chunk['error']}")
        console.print(f"[green][IMAGES] Pushed {image.reference}[/green]")
