"""
Network management for the lab, backed by the container runtime's named networks.
"""
from ..MODELS.lab_config import LabConfig
from ..RUNNERS.command_runner import CommandRunner
from ..UTILS.output import print_info, print_success, print_warning


class NetworkManager:
    """
    Creates and removes the single network all lab containers share.
    """
    def __init__(self, config: LabConfig, runner: CommandRunner):
        """
        Initializes the network manager.

        :param config: The lab configuration.
        :param runner: Runner used to talk to the container runtime.
        """
        self.config = config
        self.runner = runner
        self.name = config.network_name

    def exists(self) -> bool:
        """
        Checks whether a network with exactly this name exists.
        """
        names = self.runner.lines([self.config.runtime, "network", "ls", "--format", "{{.Name}}"])
        return self.name in names

    def ensure(self) -> bool:
        """
        Creates the network if it is absent.

        :return: True if the network was created by this call.
        """
        if self.exists():
            print_warning(f"Network {self.name} already exists")
            return False

        print_info(f"Creating Docker network: {self.name}")
        self.runner.run([self.config.runtime, "network", "create", self.name])
        print_success("Network created")
        return True

    def remove(self) -> bool:
        """
        Removes the network if it exists.

        :return: True if a network was removed.
        """
        if not self.exists():
            return False
        print_info(f"Removing network: {self.name}")
        self.runner.run([self.config.runtime, "network", "rm", self.name])
        return True
