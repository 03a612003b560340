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
# DOMAIN MODELS - RUN HANDLES
# -----------------------------------------------------------------------------
# The transient handles a sample run passes from one step to the next.
# Azure and Docker own the real objects; we only keep names, ids and the
# registry login needed to push and pull.
# -----------------------------------------------------------------------------

from pydantic import BaseModel, Field


class RegistryCredentials(BaseModel):
    """
    Admin login for a container registry.

    Built from the registry's `list_credentials` response and handed to the
    Docker SDK for push/pull against the private registry.
    """

    login_server: str = Field(..., min_length=1, description="e.g. 'acrsample42.azurecr.io'")
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1, repr=False)

    def auth_config(self) -> dict:
        """Return the auth_config dict accepted by docker-py push/pull."""
        return {
            "username": self.username,
            "password": self.password,
            "registry": self.login_server,
        }


class DockerHost(BaseModel):
    """Where the Docker engine for this run lives."""

    base_url: str | None = Field(
        default=None, description="Engine URL; None means the local environment"
    )
    vm_name: str | None = Field(default=None, description="Hosting VM, if one was provisioned")

    @property
    def is_remote(self) -> bool:
        return self.vm_name is not None


class ImageRef(BaseModel):
    """A repository plus tag."""

    repository: str = Field(..., min_length=1)
    tag: str = Field(default="latest", min_length=1)

    @property
    def reference(self) -> str:
        return f"{self.repository}:{self.tag}"


def private_repo_url(login_server: str, rel_path: str, container_name: str) -> str:
    """
    Build the private repository path used for commit, push and pull.

    Always '{login_server}/{rel_path}/{container_name}'.

    Raises:
        ValueError: If any part is empty.
    """
    parts = [p.strip().strip("/") for p in (login_server, rel_path, container_name)]
    if not all(parts):
        raise ValueError(
            f"Cannot build repository path from {login_server!r}, {rel_path!r}, {container_name!r}"
        )
    return "/".join(parts)
