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
Lifecycle management for lab containers: start, key injection, address lookup, removal.
"""
from typing import List
from ..MODELS.lab_config import LabConfig
from ..RUNNERS.command_runner import CommandRunner
from ..UTILS.output import print_info

IP_ADDRESS_FORMAT = "{{range .NetworkSettings.Networks}}{{.IPAddress}}{{end}}"


class ContainerManager:
    """
    Drives the container runtime for the lab's deterministically named containers.
    """
    def __init__(self, config: LabConfig, runner: CommandRunner):
        """
        Initializes the container manager.

        Args:
            config (LabConfig): The lab configuration.
            runner (CommandRunner): Runner used to talk to the container runtime.
        """
        self.config = config
        self.runner = runner

    def _runtime(self, *args: str) -> List[str]:
        return [self.config.runtime, *args]

    def list_names(self) -> List[str]:
        """
        Lists the names of all containers, running or stopped.
        """
        return self.runner.lines(self._runtime("ps", "-a", "--format", "{{.Names}}"))

    def exists(self, name: str) -> bool:
        return name in self.list_names()

    def run(self, name: str):
        """
        Starts a detached container on the lab network, using its name as hostname.

        Args:
            name (str): Container name.
        """
        self.runner.run(self._runtime(
            "run", "-d",
            "--name", name,
            "--network", self.config.network_name,
            "--hostname", name,
            self.config.image_name,
        ))

    def start(self, name: str):
        """
        Starts an existing container; a running container is left as is.
        """
        self.runner.run(self._runtime("start", name))

    def install_public_key(self, name: str, public_key: str):
        """
        Writes the public key into the provisioned user's authorized-keys file,
        then restricts its mode and hands it to that user.

        Args:
            name (str): Container name.
            public_key (str): Public key text.
        """
        path = self.config.authorized_keys_path
        user = self.config.ssh_user
        self.runner.run(
            self._runtime("exec", "-i", name, "sh", "-c", f"cat > {path}"),
            input_text=public_key + "\n",
        )
        self.runner.run(self._runtime("exec", name, "chmod", "600", path))
        self.runner.run(self._runtime("exec", name, "chown", f"{user}:{user}", path))

    def ip_address(self, name: str) -> str:
        """
        Returns the address the container was assigned on its network.
        """
        return self.runner.run(self._runtime("inspect", "-f", IP_ADDRESS_FORMAT, name)).strip()

    def remove(self, name: str) -> bool:
        """
        Force-removes a container if it exists.

        Returns:
            bool: True if a container was removed.
        """
        if not self.exists(name):
            return False
        print_info(f"Removing container: {name}")
        self.runner.run(self._runtime("rm", "-f", name))
        return True
