from __future__ import annotations

from typing import Sequence


class DistDockerError(Exception):
    """Base class for fatal build pipeline errors."""


class ConfigurationError(DistDockerError):
    """Raised when the build configuration is missing or invalid."""


class ExecutionFailed(DistDockerError):
    """Raised when an external command fails on its final attempt."""

    def __init__(
        self, command: Sequence[str], exit_code: int, killed: bool, timeout: float
    ) -> None:
        self.command = list(command)
        self.exit_code = exit_code
        self.killed = killed
        self.timeout = timeout
        joined = " ".join(self.command)
        if killed:
            message = f"Command '{joined}' was killed after {timeout:g} seconds"
        else:
            message = f"Command '{joined}' failed with exitCode {exit_code}"
        super().__init__(message)


class VersionParseFailed(DistDockerError):
    """Raised when the container binary reports an unrecognised version."""

    def __init__(self, output: str, reason: str | None = None) -> None:
        self.output = output
        first_line = output.splitlines()[0] if output.strip() else ""
        message = reason or f"Unrecognised container runtime version: {first_line!r}"
        super().__init__(message)
