"""
Pytest configuration and fixtures for ACR sample tests.
"""

import os
import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

# Set test environment variables
os.environ.setdefault("CLIENT_ID", "test-client-id")
os.environ.setdefault("CLIENT_SECRET", "test-client-secret")
os.environ.setdefault("TENANT_ID", "test-tenant-id")
os.environ.setdefault("SUBSCRIPTION_ID", "00000000-0000-0000-0000-000000000000")

LOGIN_SERVER = "acrsample42.azurecr.io"


@pytest.fixture
def settings():
    """Default run settings."""
    from acr_sample.core.settings import SampleSettings

    return SampleSettings()


@pytest.fixture
def registry_credentials():
    """Admin login for a fake registry."""
    from acr_sample.domain.models import RegistryCredentials

    return RegistryCredentials(login_server=LOGIN_SERVER, username="acrsample42", password="s3cret")


@pytest.fixture
def mock_docker_client():
    """Mock Docker client for testing."""
    client = MagicMock()
    client.ping.return_value = True
    client.api.base_url = "http+docker://localhost"

    image = MagicMock()
    image.id = "sha256:abc"
    image.tags = ["hello-world:latest"]
    client.images.pull.return_value = image
    client.images.list.return_value = [image]
    client.images.push.return_value = iter([{"status": "Pushed"}])

    container = MagicMock()
    container.id = "c0ffee"
    container.name = "sample-hello"
    client.containers.create.return_value = container
    client.containers.list.return_value = [container]

    return client


@pytest.fixture
def mock_azure_clients():
    """Mock AzureClients with succeeding long-running operations."""
    clients = MagicMock()
    clients.subscription_id = os.environ["SUBSCRIPTION_ID"]

    group = MagicMock()
    group.id = "/subscriptions/x/resourceGroups/ACRTemplateRG1"
    clients.resources.resource_groups.create_or_update.return_value = group

    registry = MagicMock()
    registry.name = "acrsample1"
    registry.login_server = LOGIN_SERVER
    clients.registries.registries.begin_create.return_value.result.return_value = registry

    password = MagicMock()
    password.value = "s3cret"
    creds = MagicMock()
    creds.username = "acrsample1"
    creds.passwords = [password]
    clients.registries.registries.list_credentials.return_value = creds

    return clients
