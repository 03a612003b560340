"""Azure Container Registry sample: provision a registry, push and pull an image, clean up."""

__version__ = "1.0.0"
