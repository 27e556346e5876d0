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
Execution of external tools (container runtime, ssh-keygen) with fail-fast semantics.
"""
import subprocess
from typing import List, Optional

from ..UTILS.logging_setup import get_logger

logger = get_logger(__name__)

# Exit status a shell reports for a command it cannot find.
COMMAND_NOT_FOUND = 127


class CommandError(RuntimeError):
    """
    Raised when an external command cannot be started or exits non-zero.
    """
    def __init__(self, command: List[str], returncode: int, stderr: str = ""):
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        message = f"Command '{' '.join(command)}' failed with exit code {returncode}"
        if stderr:
            message = f"{message}: {stderr.strip()}"
        super().__init__(message)


class CommandRunner:
    """
    Runs one external command at a time and waits for it to finish.
    No timeouts and no retries are applied.
    """

    def run(self, command: List[str], input_text: Optional[str] = None) -> str:
        """
        Runs a command and returns its standard output.

        Args:
            command (List[str]): Command and arguments to execute.
            input_text (Optional[str]): Text fed to the command's stdin.

        Returns:
            str: Captured standard output.

        Raises:
            CommandError: If the executable is missing or exits non-zero.
        """
        logger.debug("exec: %s", " ".join(command))

        try:
            result = subprocess.run(
                command,
                input=input_text,
                capture_output=True,
                text=True,
                # Avoid shell=True for security reasons (CWE-78)
                shell=False,
            )
        except FileNotFoundError as e:
            raise CommandError(command, COMMAND_NOT_FOUND, str(e)) from e

        if result.stderr:
            logger.debug("stderr: %s", result.stderr.strip())

        if result.returncode != 0:
            raise CommandError(command, result.returncode, result.stderr)

        return result.stdout

    def lines(self, command: List[str]) -> List[str]:
        """
        Runs a command and returns its non-empty output lines, stripped.
        """
        return [line.strip() for line in self.run(command).splitlines() if line.strip()]
