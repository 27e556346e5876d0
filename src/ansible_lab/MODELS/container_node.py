"""
Models for containers started by the lab.
"""
from typing import Optional
from pydantic import BaseModel


class ContainerNode(BaseModel):
    """
    A running lab container and the address it was given on the lab network.
    """
    name: str
    index: int
    ip_address: Optional[str] = None

    def ssh_command(self, user: str, key_path: str) -> str:
        """
        Returns a ready-to-use SSH command line for this node.
        """
        return f"ssh -i {key_path} {user}@{self.ip_address}"
