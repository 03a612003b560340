"""
Tests for Pydantic domain models.
"""

import pytest
from pydantic import ValidationError

from acr_sample.domain.models import DockerHost, ImageRef, RegistryCredentials, private_repo_url


class TestPrivateRepoUrl:
    """Tests for the private repository path."""

    def test_path_layout(self):
        """Path should be '{login_server}/{rel_path}/{container_name}'."""
        url = private_repo_url("acrsample42.azurecr.io", "samplesdotnet", "sample-hello")
        assert url == "acrsample42.azurecr.io/samplesdotnet/sample-hello"

    def test_deterministic(self):
        """Same inputs should always produce the same path."""
        args = ("r.azurecr.io", "rel", "c")
        assert private_repo_url(*args) == private_repo_url(*args)

    def test_stray_slashes_stripped(self):
        """Leading and trailing slashes should not double up."""
        assert private_repo_url("r.azurecr.io/", "/rel/", "c") == "r.azurecr.io/rel/c"

    @pytest.mark.parametrize("parts", [("", "rel", "c"), ("r.io", "", "c"), ("r.io", "rel", " ")])
    def test_empty_part_rejected(self, parts):
        """Empty parts should raise ValueError."""
        with pytest.raises(ValueError):
            private_repo_url(*parts)


class TestRegistryCredentials:
    """Tests for RegistryCredentials."""

    def test_auth_config(self):
        """auth_config should be in docker-py shape."""
        creds = RegistryCredentials(login_server="r.azurecr.io", username="u", password="p")
        assert creds.auth_config() == {"username": "u", "password": "p", "registry": "r.azurecr.io"}

    def test_password_hidden_from_repr(self):
        """Password should not leak into logs via repr."""
        creds = RegistryCredentials(login_server="r.azurecr.io", username="u", password="hunter2")
        assert "hunter2" not in repr(creds)

    def test_empty_username_rejected(self):
        with pytest.raises(ValidationError):
            RegistryCredentials(login_server="r.azurecr.io", username="", password="p")


class TestImageRef:
    """Tests for ImageRef."""

    def test_reference(self):
        assert ImageRef(repository="hello-world").reference == "hello-world:latest"

    def test_custom_tag(self):
        assert ImageRef(repository="r/x", tag="v1").reference == "r/x:v1"


class TestDockerHost:
    """Tests for DockerHost."""

    def test_local_host(self):
        host = DockerHost()
        assert host.base_url is None
        assert host.is_remote is False

    def test_vm_host(self):
        host = DockerHost(base_url="tcp://1.2.3.4:2375", vm_name="dockervm1")
        assert host.is_remote is True
