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
# DOCKER HOST - LOCAL ENGINE OR SAMPLE VM
# -----------------------------------------------------------------------------
# Responsibility: Hand the sample a working Docker engine.
#
# A local engine is used when one answers. Otherwise a Linux VM is built in
# the run's resource group:
#   public IP -> virtual network -> NSG -> NIC -> VM (cloud-init installs Docker)
# and the sample waits until the engine on the VM answers /_ping.
#
# The VM engine listens on plain TCP without TLS, so the NSG only admits the
# caller's own egress address (or allowed_source_prefix from settings) on SSH
# and the Docker port.
# -----------------------------------------------------------------------------

import base64
import ipaddress
import time

import requests
import yaml
from rich.console import Console

from acr_sample.core.naming import NameGenerator, create_password, create_username
from acr_sample.core.settings import SampleSettings
from acr_sample.domain.models import DockerHost
from acr_sample.infra.azure_client import AzureClients
from acr_sample.infra.docker_client import DockerProvider, DockerProviderError

console = Console()

# Virtual network layout for the Docker host
VNET_ADDRESS_PREFIX = "10.10.0.0/16"
SUBNETS = [
    ("default", "10.10.1.0/24"),
    ("subnet1", "10.10.2.0/24"),
    ("subnet2", "10.10.3.0/24"),
]

# Seconds between engine readiness probes
PING_INTERVAL_SECONDS = 10

# Echoes the caller's public address as plain text
EGRESS_IP_URL = "https://api.ipify.org"


def build_cloud_init(docker_port: int) -> str:
    """
    Cloud-init user data that installs Docker and exposes it on TCP.

    Returns:
        The '#cloud-config' document as text.
    """
    override = (
        "[Service]\n"
        "ExecStart=\n"
        f"ExecStart=/usr/bin/dockerd -H fd:// -H tcp://0.0.0.0:{docker_port}\n"
    )
    config = {
        "package_update": True,
        "packages": ["docker.io"],
        "write_files": [
            {
                "path": "/etc/systemd/system/docker.service.d/override.conf",
                "content": override,
            }
        ],
        "runcmd": [
            "systemctl daemon-reload",
            "systemctl enable docker",
            "systemctl restart docker",
        ],
    }
    return "#cloud-config\n" + yaml.safe_dump(config, sort_keys=False)


class DockerHostProvisioner:
    """
    Finds or builds the Docker engine for a run.

    Args:
        clients: Azure management clients (network and compute are used
            only when a VM is needed).
        settings: Run settings (location, VM size/image, Docker port).
        names: The run's name generator.
    """

    def __init__(
        self, clients: AzureClients, settings: SampleSettings, names: NameGenerator
    ) -> None:
        self._clients = clients
        self._settings = settings
        self._names = names
        self.host: DockerHost | None = None

    def acquire(self, resource_group: str) -> DockerProvider:
        """
        Return a connected DockerProvider.

        Raises:
            DockerProviderError: If the VM engine never answers.
        """
        provider = DockerProvider.try_local()
        if provider is not None:
            self.host = DockerHost()
            return provider

        console.print(
            "[yellow][DOCKER HOST] Creating a Linux VM to host the Docker engine...[/yellow]"
        )
        vm_name, address = self._create_vm(resource_group)
        base_url = f"tcp://{address}:{self._settings.docker_port}"
        self.host = DockerHost(base_url=base_url, vm_name=vm_name)

        self._wait_for_engine(address)
        return DockerProvider(base_url=base_url)

    def _create_vm(self, resource_group: str) -> tuple[str, str]:
        """Build the network and VM; return (vm_name, public ip address)."""
        location = self._settings.location
        network = self._clients.network
        source_prefix = self._source_prefix()

        public_ip = self._create_public_ip(resource_group)

        vnet_name = self._names.create_random_name("vnet")
        console.print(f"[cyan][DOCKER HOST] Creating virtual network {vnet_name}...[/cyan]")
        vnet = network.virtual_networks.begin_create_or_update(
            resource_group,
            vnet_name,
            {
                "location": location,
                "address_space": {"address_prefixes": [VNET_ADDRESS_PREFIX]},
                "subnets": [{"name": name, "address_prefix": prefix} for name, prefix in SUBNETS],
            },
        ).result()

        nsg_name = self._names.create_random_name("nsg")
        console.print(f"[cyan][DOCKER HOST] Creating network security group {nsg_name}...[/cyan]")
        nsg = network.network_security_groups.begin_create_or_update(
            resource_group,
            nsg_name,
            {
                "location": location,
                "security_rules": [
                    _inbound_rule("allow-ssh", 22, source_prefix, priority=1000),
                    _inbound_rule(
                        "allow-docker", self._settings.docker_port, source_prefix, priority=1010
                    ),
                ],
            },
        ).result()

        nic_name = self._names.create_random_name("nic")
        console.print(f"[cyan][DOCKER HOST] Creating network interface {nic_name}...[/cyan]")
        nic = network.network_interfaces.begin_create_or_update(
            resource_group,
            nic_name,
            {
                "location": location,
                "network_security_group": {"id": nsg.id},
                "ip_configurations": [
                    {
                        "name": "default-config",
                        "private_ip_allocation_method": "Dynamic",
                        "subnet": {"id": vnet.subnets[0].id},
                        "public_ip_address": {"id": public_ip.id},
                    }
                ],
            },
        ).result()

        vm_name = self._names.create_random_name(self._settings.vm_prefix)
        console.print(f"[cyan][DOCKER HOST] Creating virtual machine {vm_name}...[/cyan]")
        self._clients.compute.virtual_machines.begin_create_or_update(
            resource_group, vm_name, self._vm_parameters(vm_name, nic.id)
        ).result()
        console.print(f"[green][DOCKER HOST] Created VM {vm_name} at {public_ip.ip_address}[/green]")

        return vm_name, public_ip.ip_address

    def _source_prefix(self) -> str:
        """
        Address prefix allowed to reach SSH and the Docker port on the VM.

        Uses allowed_source_prefix when set, otherwise the caller's public
        address as a /32 (or /128).

        Raises:
            DockerProviderError: If the public address cannot be determined.
        """
        if self._settings.allowed_source_prefix:
            return self._settings.allowed_source_prefix

        try:
            response = requests.get(EGRESS_IP_URL, timeout=10)
            response.raise_for_status()
            address = ipaddress.ip_address(response.text.strip())
        except (requests.RequestException, ValueError) as e:
            raise DockerProviderError(
                f"Could not determine this machine's public address for the VM firewall: {e}. "
                "Set allowed_source_prefix in sample.yaml."
            ) from e

        prefix = f"{address}/{address.max_prefixlen}"
        console.print(f"[cyan][DOCKER HOST] VM will only accept connections from {prefix}[/cyan]")
        return prefix

    def _create_public_ip(self, resource_group: str):
        pip_name = self._names.create_random_name("pip")
        console.print(f"[cyan][DOCKER HOST] Creating a public IP address {pip_name}...[/cyan]")
        poller = self._clients.network.public_ip_addresses.begin_create_or_update(
            resource_group,
            pip_name,
            {
                "location": self._settings.location,
                "sku": {"name": "Standard", "tier": "Regional"},
                "public_ip_allocation_method": "Static",
                "dns_settings": {"domain_name_label": pip_name.lower()},
            },
        )
        poller.result()
        # The create response may not carry the allocated address yet
        public_ip = self._clients.network.public_ip_addresses.get(resource_group, pip_name)
        console.print(f"[green][DOCKER HOST] Created a public IP address: {public_ip.ip_address}[/green]")
        return public_ip

    def _vm_parameters(self, vm_name: str, nic_id: str) -> dict:
        image = self._settings.vm_image
        custom_data = build_cloud_init(self._settings.docker_port)
        return {
            "location": self._settings.location,
            "hardware_profile": {"vm_size": self._settings.vm_size},
            "storage_profile": {
                "image_reference": {
                    "publisher": image.publisher,
                    "offer": image.offer,
                    "sku": image.sku,
                    "version": image.version,
                },
                "os_disk": {
                    "create_option": "FromImage",
                    "os_type": "Linux",
                    "caching": "ReadWrite",
                    "managed_disk": {"storage_account_type": "Standard_LRS"},
                },
            },
            "os_profile": {
                "computer_name": vm_name,
                "admin_username": create_username(),
                "admin_password": create_password(),
                "custom_data": base64.b64encode(custom_data.encode("utf-8")).decode("ascii"),
                "linux_configuration": {"disable_password_authentication": False},
            },
            "network_profile": {"network_interfaces": [{"id": nic_id, "primary": True}]},
        }

    def _wait_for_engine(self, address: str) -> None:
        """
        Poll the engine's /_ping until it answers OK.

        Raises:
            DockerProviderError: If the engine is not up within docker_wait_seconds.
        """
        url = f"http://{address}:{self._settings.docker_port}/_ping"
        deadline = time.monotonic() + self._settings.docker_wait_seconds

        with console.status(f"[yellow]Waiting for Docker Engine at {address}...[/yellow]", spinner="clock"):
            while True:
                try:
                    response = requests.get(url, timeout=5)
                    if response.status_code == 200:
                        console.print(f"[green][DOCKER HOST] Engine Online at {address}[/green]")
                        return
                except requests.RequestException:
                    pass

                if time.monotonic() >= deadline:
                    break
                time.sleep(PING_INTERVAL_SECONDS)

        raise DockerProviderError(
            f"Docker Engine on {address} did not answer within {self._settings.docker_wait_seconds}s"
        )


def _inbound_rule(name: str, port: int, source_prefix: str, priority: int) -> dict:
    return {
        "name": name,
        "protocol": "Tcp",
        "direction": "Inbound",
        "access": "Allow",
        "priority": priority,
        "source_address_prefix": source_prefix,
        "source_port_range": "*",
        "destination_address_prefix": "*",
        "destination_port_range": str(port),
    }
