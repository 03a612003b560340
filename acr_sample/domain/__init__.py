# -----------------------------------------------------------------------------
# DOMAIN LAYER
# -----------------------------------------------------------------------------
# Pydantic handles passed between the steps of a sample run.
# -----------------------------------------------------------------------------

from .models import DockerHost, ImageRef, RegistryCredentials, private_repo_url

__all__ = ["DockerHost", "ImageRef", "RegistryCredentials", "private_repo_url"]
