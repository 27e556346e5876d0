"""
Models for the lab configuration: names, paths and provisioning details.
"""
import os
from typing import List
from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_PACKAGES = [
    "openssh-server",
    "sudo",
    "python3",
    "pip",
    "curl",
    "vim",
    "cron",
    "systemctl",
]


class LabConfig(BaseModel):
    """
    Complete configuration for one lab environment.
    Every resource the lab creates is named from these fields.
    """
    model_config = ConfigDict(extra="forbid")

    # Topology
    num_containers: int = Field(default=3, ge=1)
    container_prefix: str = Field(default="ansible_node", min_length=1)
    network_name: str = Field(default="ansible_network", min_length=1)
    image_name: str = Field(default="ansible-node", min_length=1)

    # Credentials
    keys_dir: str = Field(default="ansible_ssh_keys", validate_default=True)
    key_name: str = Field(default="ansible_key", min_length=1)
    key_comment: str = "ansible@docker"
    key_bits: int = Field(default=4096, ge=1024)
    ssh_user: str = Field(default="ansible", min_length=1)

    # Image contents
    base_image: str = "ubuntu:22.04"
    packages: List[str] = Field(default_factory=lambda: list(DEFAULT_PACKAGES))

    # Runtime
    runtime: str = "docker"
    startup_delay: float = Field(default=2.0, ge=0)
    inventory_group: str = "docker_nodes"

    @field_validator("keys_dir")
    @classmethod
    def _absolute_keys_dir(cls, value: str) -> str:
        return os.path.abspath(os.path.expanduser(value))

    @property
    def private_key_path(self) -> str:
        return os.path.join(self.keys_dir, self.key_name)

    @property
    def public_key_path(self) -> str:
        return self.private_key_path + ".pub"

    @property
    def dockerfile_path(self) -> str:
        return os.path.join(self.keys_dir, "Dockerfile")

    @property
    def inventory_path(self) -> str:
        return os.path.join(self.keys_dir, "inventory.ini")

    @property
    def authorized_keys_path(self) -> str:
        """Location of the authorized-keys file inside each container."""
        return f"/home/{self.ssh_user}/.ssh/authorized_keys"

    def container_names(self) -> List[str]:
        """
        Returns the deterministic container names, ``prefix_1`` .. ``prefix_N``.
        """
        return [f"{self.container_prefix}_{i}" for i in range(1, self.num_containers + 1)]
