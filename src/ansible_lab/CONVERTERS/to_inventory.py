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
Converters for generating an Ansible INI inventory from the running lab containers.
"""
import os
from typing import List
from jinja2 import Template
from ..MODELS.container_node import ContainerNode
from ..MODELS.lab_config import LabConfig

HOST_LINE_TEMPLATE = (
    "{{ node.name }} ansible_host={{ node.ip_address }} "
    "ansible_user={{ user }} ansible_ssh_private_key_file={{ key_path }}"
)

INVENTORY_TEMPLATE = """[{{ group }}]
{% for line in host_lines %}{{ line }}
{% endfor %}"""


class InventoryConverter:
    """
    Converts lab containers into an Ansible inventory.
    """

    def __init__(self, config: LabConfig):
        """
        Initializes the inventory converter.

        :param config: The lab configuration.
        """
        self.config = config
        self.host_template = Template(HOST_LINE_TEMPLATE)
        self.template = Template(INVENTORY_TEMPLATE, keep_trailing_newline=True)

    def host_lines(self, nodes: List[ContainerNode]) -> List[str]:
        """
        One inventory line per node, in node order.
        """
        return [
            self.host_template.render(
                node=node,
                user=self.config.ssh_user,
                key_path=self.config.private_key_path,
            )
            for node in nodes
        ]

    def render(self, nodes: List[ContainerNode]) -> str:
        return self.template.render(group=self.config.inventory_group, host_lines=self.host_lines(nodes))

    def convert(self, nodes: List[ContainerNode], output_path: str) -> str:
        """
        Writes the inventory file.

        :param nodes: The inspected lab containers.
        :param output_path: Destination of the inventory file.
        :return: The path to the written file.
        """
        output_dir = os.path.dirname(output_path)
        if output_dir:
            os.makedirs(output_dir, exist_ok=True)

        with open(output_path, "w") as f:
            f.write(self.render(nodes))

        return output_path
