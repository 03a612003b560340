# -----------------------------------------------------------------------------
# INFRASTRUCTURE LAYER
# -----------------------------------------------------------------------------
# Contains low-level infrastructure wrappers:
# - AzureClients: Lazily-built Azure management clients
# - DockerProvider: Docker SDK wrapper for a local or remote engine
# -----------------------------------------------------------------------------

from .azure_client import AzureClients
from .docker_client import DockerProvider, DockerProviderError

__all__ = ["AzureClients", "DockerProvider", "DockerProviderError"]
