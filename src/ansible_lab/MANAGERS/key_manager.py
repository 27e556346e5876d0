"""
Management of the SSH keypair shared by every lab container.
"""
import os
import shutil

import click

from ..MODELS.lab_config import LabConfig
from ..RUNNERS.command_runner import CommandRunner
from ..UTILS.output import print_info, print_success, print_warning


class KeyManager:
    """
    Creates, reuses and removes the keys directory and the keypair inside it.
    """
    def __init__(self, config: LabConfig, runner: CommandRunner):
        """
        Initializes the key manager.

        :param config: The lab configuration.
        :param runner: Runner used to invoke ssh-keygen.
        """
        self.config = config
        self.runner = runner

    def ensure_keys_dir(self):
        """
        Creates the keys directory if needed and restricts it to the owner.
        """
        os.makedirs(self.config.keys_dir, exist_ok=True)
        os.chmod(self.config.keys_dir, 0o700)

    def ensure_keypair(self) -> bool:
        """
        Generates the keypair unless the private key already exists.

        :return: True if a new keypair was generated.
        """
        private_key = self.config.private_key_path
        if os.path.isfile(private_key):
            print_warning("SSH keys already exist, reusing them")
            if not os.path.isfile(self.config.public_key_path):
                self.restore_public_key()
            return False

        print_info("Generating SSH key pair...")
        output = self.runner.run([
            "ssh-keygen",
            "-t", "rsa",
            "-b", str(self.config.key_bits),
            "-f", private_key,
            "-N", "",
            "-C", self.config.key_comment,
        ])
        # Fingerprint and randomart
        click.echo(output, nl=False)
        os.chmod(private_key, 0o600)
        os.chmod(self.config.public_key_path, 0o644)
        print_success("SSH keys generated")
        return True

    def restore_public_key(self):
        """
        Derives the public key from the existing private key.
        """
        print_warning("Public key missing, deriving it from the private key")
        public_key = self.runner.run(["ssh-keygen", "-y", "-f", self.config.private_key_path])
        with open(self.config.public_key_path, "w") as f:
            f.write(public_key.strip() + "\n")
        os.chmod(self.config.public_key_path, 0o644)

    def read_public_key(self) -> str:
        with open(self.config.public_key_path, "r") as f:
            return f.read().strip()

    def remove_keys_dir(self) -> bool:
        """
        Deletes the keys directory and everything in it, if present.
        """
        if not os.path.isdir(self.config.keys_dir):
            return False
        print_info(f"Removing SSH keys directory: {self.config.keys_dir}")
        shutil.rmtree(self.config.keys_dir)
        return True
