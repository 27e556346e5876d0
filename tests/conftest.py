"""
Shared fixtures: an in-memory stand-in for the container runtime and ssh-keygen.
"""
import os
from typing import Callable, List, Optional

import pytest

from ansible_lab.MODELS.lab_config import LabConfig
from ansible_lab.RUNNERS.command_runner import CommandError, CommandRunner


class FakeRunner(CommandRunner):
    """
    Records every command and keeps just enough runtime state
    (networks, images, containers) to answer existence checks.
    """

    def __init__(self, fail_when: Optional[Callable[[List[str]], bool]] = None, fail_code: int = 1):
        self.commands: List[List[str]] = []
        self.inputs: List[Optional[str]] = []
        self.networks: List[str] = []
        self.images: List[str] = []
        self.containers: List[str] = []
        self.fail_when = fail_when
        self.fail_code = fail_code

    def run(self, command, input_text=None):
        self.commands.append(list(command))
        self.inputs.append(input_text)
        if self.fail_when and self.fail_when(command):
            raise CommandError(command, self.fail_code, "simulated failure")

        if command[0] == "ssh-keygen":
            if "-y" in command:
                return "ssh-rsa AAAAB3Nza\n"
            path = command[command.index("-f") + 1]
            with open(path, "w") as f:
                f.write("PRIVATE KEY\n")
            with open(path + ".pub", "w") as f:
                f.write("ssh-rsa AAAAB3Nza fake@docker\n")
            return f"Your identification has been saved in {path}\n"

        args = command[1:]
        if args[:2] == ["network", "ls"]:
            return "".join(f"{n}\n" for n in self.networks)
        if args[:2] == ["network", "create"]:
            self.networks.append(args[2])
            return "netid\n"
        if args[:2] == ["network", "rm"]:
            self.networks.remove(args[2])
            return ""
        if args[0] == "build":
            self.images.append(args[args.index("-t") + 1])
            return ""
        if args[:2] == ["ps", "-a"]:
            return "".join(f"{n}\n" for n in self.containers)
        if args[0] == "run":
            self.containers.append(args[args.index("--name") + 1])
            return "containerid\n"
        if args[0] == "inspect":
            name = args[-1]
            return f"172.18.0.{self.containers.index(name) + 2}\n"
        if args[:2] == ["rm", "-f"]:
            self.containers.remove(args[2])
            return ""
        return ""

    def count(self, *prefix: str) -> int:
        """Number of recorded runtime commands starting with ``prefix`` after the binary."""
        return sum(1 for c in self.commands if tuple(c[1:1 + len(prefix)]) == prefix)


@pytest.fixture
def lab_config(tmp_path):
    return LabConfig(keys_dir=str(tmp_path / "keys"), startup_delay=0)


@pytest.fixture
def runner():
    return FakeRunner()


@pytest.fixture
def failing_runner():
    """Factory for a FakeRunner that fails on matching commands."""
    def make(fail_when, fail_code=1):
        return FakeRunner(fail_when=fail_when, fail_code=fail_code)
    return make


@pytest.fixture
def file_mode():
    def mode(path):
        return os.stat(path).st_mode & 0o777
    return mode
