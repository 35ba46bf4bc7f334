# SPDX-License-Identifier: MIT
"""Custom exceptions for larva.

All larva exceptions inherit from LarvaError. The CLI is the only place
that turns them into an exit status; library code lets them propagate so
a failing tool stops the build at once.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path


class LarvaError(Exception):
    """Base class for all larva exceptions.

    Attributes:
        message: The error message.
        path: Optional file the error refers to.
    """

    def __init__(self, message: str, path: Path | str | None = None) -> None:
        self.message = message
        self.path = path
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.path:
            return f"{self.path}: {self.message}"
        return self.message


class ConfigError(LarvaError):
    """The project file is missing, malformed or inconsistent."""


class ToolchainError(LarvaError):
    """Unknown compiler family requested by the project."""


class CommandError(LarvaError):
    """An external command exited with a non-zero status.

    Attributes:
        command: The full command line (executable first).
        returncode: Exit status of the process.
    """

    def __init__(self, command: Sequence[str], returncode: int) -> None:
        self.command = list(command)
        self.returncode = returncode
        super().__init__(
            f"command failed with exit code {returncode}: {' '.join(self.command)}"
        )


class ToolNotFoundError(CommandError):
    """An external command could not be launched at all.

    Attributes:
        tool: The executable that failed to start.
        reason: The operating system error text.
    """

    def __init__(self, command: Sequence[str], reason: str) -> None:
        self.tool = command[0] if command else ""
        self.reason = reason
        LarvaError.__init__(self, f"failed to run {self.tool}: {reason}")
        self.command = list(command)
        self.returncode = -1


class FileOperationError(LarvaError):
    """One or more filesystem operations failed.

    Attributes:
        failures: (path, reason) pairs for every failed operation.
    """

    def __init__(self, operation: str, failures: Sequence[tuple[str, str]]) -> None:
        self.operation = operation
        self.failures = list(failures)
        details = "; ".join(f"{path}: {reason}" for path, reason in self.failures)
        super().__init__(f"{operation} failed for {len(self.failures)} path(s): {details}")
