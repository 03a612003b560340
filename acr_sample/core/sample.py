# Copyright 2026 Pramod Kumar Voola
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

# -----------------------------------------------------------------------------
# THE SAMPLE RUN - ORCHESTRATOR
# -----------------------------------------------------------------------------
# Responsibility: The linear sequence of the Azure Container Registry sample.
# Connects: Resource Group -> Registry -> Docker Host -> Image Workflow
#
# - Create an Azure Container Registry to hold the Docker images
# - If no local Docker engine is found, create a Linux VM hosting one
# - Pull hello-world:latest from the public Docker hub
# - Commit a container into the private registry, push it, pull it back
# - Create a new container from the image pulled from the registry
#
# Any failure aborts the remaining steps. The resource group is deleted in
# a finally block whether or not the run succeeded.
# -----------------------------------------------------------------------------

from rich.console import Console

from acr_sample.core.docker_host import DockerHostProvisioner
from acr_sample.core.image_ops import ImageWorkflow
from acr_sample.core.naming import NameGenerator
from acr_sample.core.registry import RegistryManager
from acr_sample.core.resource_group import ResourceGroupManager
from acr_sample.core.settings import SampleSettings
from acr_sample.domain.models import ImageRef
from acr_sample.infra.azure_client import AzureClients

console = Console()


def run_sample(
    clients: AzureClients,
    settings: SampleSettings,
    names: NameGenerator | None = None,
) -> ImageRef:
    """
    Run the sample end to end and clean up.

    Args:
        clients: Authenticated Azure management clients.
        settings: Run settings.
        names: Name generator (a fresh one per run if omitted).

    Returns:
        The private image pushed to and pulled from the registry.

    Raises:
        Whatever step failed; the resource group is cleaned up first.
    """
    names = names or NameGenerator()
    rg_name = names.create_random_name(settings.resource_group_prefix)
    acr_name = names.create_random_name(settings.registry_prefix)

    groups = ResourceGroupManager(clients.resources)
    try:
        groups.create(rg_name, settings.location)

        registries = RegistryManager(clients.registries, settings)
        registry = registries.create(rg_name, acr_name, settings.location)
        credentials = registries.get_credentials(rg_name, registry)

        provisioner = DockerHostProvisioner(clients, settings, names)
        with provisioner.acquire(rg_name) as docker:
            host = provisioner.host
            if host.is_remote:
                console.print(
                    f"[cyan][SAMPLE] Docker engine on VM {host.vm_name} at {host.base_url}[/cyan]"
                )
            else:
                console.print("[cyan][SAMPLE] Docker engine on this machine[/cyan]")

            endpoint = host.base_url or docker.endpoint
            workflow = ImageWorkflow(docker.get_client(), settings, endpoint=endpoint)
            image = workflow.run(credentials)

        console.print(f"[bold green][SAMPLE] Complete: {image.reference}[/bold green]")
        return image
    finally:
        groups.cleanup()
