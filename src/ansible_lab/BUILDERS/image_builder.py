"""
Builders for generating the SSH node Dockerfile and building the lab image from it.
"""
import os
from jinja2 import Template
from ..MODELS.lab_config import LabConfig
from ..RUNNERS.command_runner import CommandRunner
from ..UTILS.output import print_info, print_success

DOCKERFILE_TEMPLATE = """FROM {{ base_image }}

ENV DEBIAN_FRONTEND=noninteractive

RUN apt-get update && \\
    apt-get install -y {{ packages | join(' ') }} && \\
    apt-get clean && \\
    rm -rf /var/lib/apt/lists/*

RUN mkdir -p /var/run/sshd

# Login user with passwordless sudo
RUN useradd -m -s /bin/bash {{ user }} && \\
    usermod -aG sudo {{ user }} && \\
    echo "{{ user }} ALL=(ALL) NOPASSWD:ALL" >> /etc/sudoers

# Key-only SSH, no root login
RUN sed -i 's/^#\\?PermitRootLogin .*/PermitRootLogin no/' /etc/ssh/sshd_config && \\
    sed -i 's/^#\\?PubkeyAuthentication .*/PubkeyAuthentication yes/' /etc/ssh/sshd_config && \\
    sed -i 's/^#\\?PasswordAuthentication .*/PasswordAuthentication no/' /etc/ssh/sshd_config

RUN mkdir -p /home/{{ user }}/.ssh && \\
    chmod 700 /home/{{ user }}/.ssh && \\
    chown {{ user }}:{{ user }} /home/{{ user }}/.ssh

EXPOSE 22

CMD ["/usr/sbin/sshd", "-D"]
"""


class ImageBuilder:
    """
    Writes the build definition into the keys directory and builds the tagged image.
    """
    def __init__(self, config: LabConfig, runner: CommandRunner):
        """
        Initializes the ImageBuilder.

        :param config: The lab configuration.
        :param runner: Runner used to invoke the container runtime.
        """
        self.config = config
        self.runner = runner
        self.template = Template(DOCKERFILE_TEMPLATE, keep_trailing_newline=True)

    def render(self) -> str:
        """
        Renders the Dockerfile for the configured base image, packages and user.
        """
        return self.template.render(
            base_image=self.config.base_image,
            packages=self.config.packages,
            user=self.config.ssh_user,
        )

    def write(self) -> str:
        """
        Writes the Dockerfile into the keys directory.

        :return: Path of the written Dockerfile.
        """
        print_info("Creating Dockerfile...")
        os.makedirs(self.config.keys_dir, exist_ok=True)
        with open(self.config.dockerfile_path, "w") as f:
            f.write(self.render())
        return self.config.dockerfile_path

    def build(self):
        """
        Builds and tags the image, using the keys directory as build context.
        """
        print_info("Building Docker image...")
        self.runner.run([self.config.runtime, "build", "-t", self.config.image_name, self.config.keys_dir])
        print_success("Docker image built")
