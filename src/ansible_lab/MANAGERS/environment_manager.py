# Copyright 2024 Michael Maillet, Damien Davison, Sacha Davison
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

"""
Orchestration of the whole lab: setup and teardown of keys, network, image and containers.
"""
import time
from typing import List, Optional

import click

from ..BUILDERS.image_builder import ImageBuilder
from ..CONVERTERS.to_inventory import InventoryConverter
from ..MODELS.container_node import ContainerNode
from ..MODELS.lab_config import LabConfig
from ..RUNNERS.command_runner import CommandRunner
from ..UTILS.output import heading, print_info, print_success, print_warning
from .container_manager import ContainerManager
from .key_manager import KeyManager
from .network_manager import NetworkManager


class EnvironmentManager:
    """
    Sets up and destroys the lab. Every step runs sequentially and any failing
    external command aborts the run; nothing already created is rolled back.
    The current state is never stored, it is read back from the runtime and
    the filesystem on each run.
    """
    def __init__(self,
                 config: Optional[LabConfig] = None,
                 runner: Optional[CommandRunner] = None,
                 program_name: str = "ansible-lab"):
        """
        Initializes the environment manager.

        :param config: The lab configuration, defaults if omitted.
        :param runner: Runner for external commands.
        :param program_name: Name shown in the "destroy" hint of the report.
        """
        self.config = config or LabConfig()
        self.runner = runner or CommandRunner()
        self.program_name = program_name

        self.keys = KeyManager(self.config, self.runner)
        self.network = NetworkManager(self.config, self.runner)
        self.image_builder = ImageBuilder(self.config, self.runner)
        self.containers = ContainerManager(self.config, self.runner)
        self.inventory = InventoryConverter(self.config)

    def setup(self) -> List[ContainerNode]:
        """
        Creates or reuses every lab resource and prints connection details.

        :return: The lab containers with their IP addresses.
        """
        print_info("Setting up Ansible-ready environment...")

        # 1. Credentials
        self.keys.ensure_keys_dir()
        self.keys.ensure_keypair()

        # 2. Network
        self.network.ensure()

        # 3. Image
        public_key = self.keys.read_public_key()
        self.image_builder.write()
        self.image_builder.build()

        # 4. Containers, one after the other
        names = self.config.container_names()
        print_info(f"Starting {len(names)} Docker containers...")
        existing = set(self.containers.list_names())
        for name in names:
            if name in existing:
                print_warning(f"Container {name} already exists, reusing it")
                self.containers.start(name)
            else:
                print_info(f"Starting container: {name}")
                self.containers.run(name)

            self.containers.install_public_key(name, public_key)
            print_success(f"Container {name} started")

        # Let sshd come up before reporting addresses
        time.sleep(self.config.startup_delay)

        nodes = [
            ContainerNode(name=name, index=i, ip_address=self.containers.ip_address(name))
            for i, name in enumerate(names, start=1)
        ]
        self.inventory.convert(nodes, self.config.inventory_path)
        self.print_report(nodes)
        return nodes

    def destroy(self):
        """
        Removes the containers, the network and the keys directory.
        Resources that are already gone are skipped silently.
        """
        print_info("Cleaning up Ansible environment...")

        for name in self.config.container_names():
            self.containers.remove(name)

        self.network.remove()
        self.keys.remove_keys_dir()

        print_success("Cleanup completed!")

    def print_report(self, nodes: List[ContainerNode]):
        """
        Prints the private key path, a summary per container and the inventory.
        """
        key_path = self.config.private_key_path
        user = self.config.ssh_user

        click.echo("")
        click.echo("======================================")
        print_success("Ansible Environment Ready!")
        click.echo("======================================")
        click.echo("")
        click.echo(heading("Private Key Path:"))
        click.echo(f"  {key_path}")
        click.echo("")
        click.echo(heading("Container Details:"))
        click.echo("")

        for node in nodes:
            click.echo(f"  {heading(f'Container {node.index}:', 'blue')} {node.name}")
            click.echo(f"    IP Address: {node.ip_address}")
            click.echo(f"    SSH Command: {node.ssh_command(user, key_path)}")
            click.echo("")

        click.echo(heading("Ansible Inventory Example:"))
        click.echo("")
        click.echo(self.inventory.render(nodes), nl=False)
        click.echo("")
        click.echo(f"Inventory written to: {self.config.inventory_path}")
        click.echo("")
        click.echo(heading("To destroy this environment, run:", "yellow"))
        click.echo(f"  {self.program_name} destroy")
        click.echo("")
