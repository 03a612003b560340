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
# SAMPLE SETTINGS
# -----------------------------------------------------------------------------
# Responsibility: Every tunable constant of a run, plus the service principal
# read from the environment.
#
# Settings come from an optional sample.yaml at the project root; anything
# not in the file keeps its default. Secrets only ever come from the
# environment (or a .env file loaded by the entry point).
# -----------------------------------------------------------------------------

import ipaddress
import os
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from rich.console import Console

console = Console()

# Settings file location
SETTINGS_PATH = Path(__file__).parent.parent.parent / "sample.yaml"

# Service principal environment variables
CREDENTIAL_ENV_VARS = ("CLIENT_ID", "CLIENT_SECRET", "TENANT_ID", "SUBSCRIPTION_ID")


class SettingsError(Exception):
    """Raised when the settings file cannot be read or fails validation."""

    pass


class CredentialsError(Exception):
    """Raised when service principal variables are missing."""

    def __init__(self, missing: list[str]) -> None:
        super().__init__(f"Missing environment variables: {', '.join(missing)}")
        self.missing = missing


class VmImage(BaseModel):
    """Marketplace image for the Docker host VM."""

    model_config = ConfigDict(extra="forbid")

    publisher: str = "Canonical"
    offer: str = "0001-com-ubuntu-server-jammy"
    sku: str = "22_04-lts-gen2"
    version: str = "latest"


class SampleSettings(BaseModel):
    """
    Pydantic model for the run configuration.

    Defaults reproduce the classic ACR walkthrough: a Basic registry in
    East US, hello-world pushed to '<login server>/samplesdotnet/sample-hello'.
    """

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    location: str = "eastus"

    # Name prefixes, suffixed with a random number per run
    resource_group_prefix: str = Field(
        default="ACRTemplateRG", pattern=r"^[-\w.()]+$", max_length=80
    )
    # Registry names are alphanumeric only, 5-50 characters with the suffix
    registry_prefix: str = Field(
        default="acrsample", pattern=r"^[a-zA-Z0-9]+$", min_length=4, max_length=46
    )
    vm_prefix: str = Field(
        default="dockervm", pattern=r"^[a-zA-Z][a-zA-Z0-9]*$", max_length=60
    )

    registry_sku: str = "Basic"
    registry_admin_enabled: bool = True
    registry_tags: dict[str, str] = Field(
        default_factory=lambda: {"key1": "value1", "key2": "value2"}
    )

    docker_image_name: str = Field(default="hello-world", min_length=1)
    docker_image_tag: str = Field(default="latest", min_length=1)
    docker_container_name: str = Field(default="sample-hello", min_length=1)
    docker_image_rel_path: str = Field(default="samplesdotnet", min_length=1)

    vm_size: str = "Standard_B4ms"
    vm_image: VmImage = Field(default_factory=VmImage)
    docker_port: int = Field(default=2375, ge=1, le=65535)
    docker_wait_seconds: int = Field(default=600, ge=0)

    # Source allowed through the VM firewall; None means this machine's public address
    allowed_source_prefix: str | None = None

    @field_validator("allowed_source_prefix")
    @classmethod
    def _check_source_prefix(cls, value: str | None) -> str | None:
        if value is None:
            return value
        network = ipaddress.ip_network(value, strict=False)
        if network.prefixlen == 0:
            raise ValueError("allowed_source_prefix must not open the VM to every address")
        return str(network)


class AzureCredentials(BaseModel):
    """Service principal used to authenticate against Azure Resource Manager."""

    client_id: str
    client_secret: str = Field(..., repr=False)
    tenant_id: str
    subscription_id: str

    @classmethod
    def from_env(cls) -> "AzureCredentials":
        """
        Read CLIENT_ID, CLIENT_SECRET, TENANT_ID and SUBSCRIPTION_ID.

        Raises:
            CredentialsError: Naming every variable that is missing or empty.
        """
        values = {name: os.getenv(name, "").strip() for name in CREDENTIAL_ENV_VARS}
        missing = [name for name, value in values.items() if not value]
        if missing:
            raise CredentialsError(missing)

        return cls(
            client_id=values["CLIENT_ID"],
            client_secret=values["CLIENT_SECRET"],
            tenant_id=values["TENANT_ID"],
            subscription_id=values["SUBSCRIPTION_ID"],
        )


def load_settings(path: Path = SETTINGS_PATH) -> SampleSettings:
    """
    Load settings from a YAML file.

    Args:
        path: Path to the settings YAML file.

    Returns:
        SampleSettings with validated values (defaults if the file is absent).

    Raises:
        SettingsError: If the file is not valid YAML or fails validation.
    """
    if not path.exists():
        console.print("[yellow][SETTINGS] Settings file not found, using defaults[/yellow]")
        return SampleSettings()

    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise SettingsError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise SettingsError(f"{path} must contain a mapping, got {type(data).__name__}")

    try:
        settings = SampleSettings(**data)
    except ValidationError as e:
        raise SettingsError(f"Invalid settings in {path}: {e}") from e

    console.print(f"[green][SETTINGS] Loaded: {path}[/green]")
    return settings
