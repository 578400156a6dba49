#!/usr/bin/env python3
"""
Publishing of step outputs through envman
"""

import subprocess
from typing import List

from constants import ENVMAN_EXECUTABLE


class EnvmanError(Exception):
    """Raised when envman fails to register an output variable"""

    def __init__(self, message: str, output: str = ""):
        super().__init__(message)
        self.output = output


class EnvmanClient:
    def __init__(self, executable: str = ENVMAN_EXECUTABLE):
        self.executable = executable

    def command(self, key: str, value: str) -> List[str]:
        return [self.executable, "envman", "add", "--key", key, "--value", value]

    def add(self, key: str, value: str) -> str:
        """Register `key=value` for later steps and return the tool's combined output"""
        try:
            result = subprocess.run(
                self.command(key, value),
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
            )
        except OSError as e:
            raise EnvmanError(f"Failed to expose output with envman, error: {e}") from e

        if result.returncode != 0:
            raise EnvmanError(
                f"Failed to expose output with envman, exit status {result.returncode} | output: {result.stdout}",
                output=result.stdout,
            )

        return result.stdout
