# -----------------------------------------------------------------------------
# CORE LAYER
# -----------------------------------------------------------------------------
# The steps of the sample run:
# - ResourceGroupManager: Create and clean up the run's resource group
# - RegistryManager: Azure Container Registry and its admin login
# - DockerHostProvisioner: Local engine or a Docker host VM
# - ImageWorkflow: Pull, commit, push and pull back the sample image
# - run_sample: The orchestrator tying them together
# -----------------------------------------------------------------------------

from .docker_host import DockerHostProvisioner
from .image_ops import ImageWorkflow, ImageWorkflowError
from .naming import NameExhaustedError, NameGenerator
from .registry import RegistryError, RegistryManager
from .resource_group import ResourceGroupManager
from .sample import run_sample
from .settings import (
    AzureCredentials,
    CredentialsError,
    SampleSettings,
    SettingsError,
    load_settings,
)

__all__ = [
    "DockerHostProvisioner",
    "ImageWorkflow", "ImageWorkflowError",
    "NameExhaustedError", "NameGenerator",
    "RegistryError", "RegistryManager",
    "ResourceGroupManager",
    "run_sample",
    "AzureCredentials", "CredentialsError", "SampleSettings", "SettingsError", "load_settings",
]
