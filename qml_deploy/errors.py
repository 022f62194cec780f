"""Exception types raised by the deployment routines."""

from __future__ import annotations

from typing import Sequence


class DeployError(Exception):
    """Base class for every fatal deployment failure."""


class ProfileError(DeployError):
    """The deployment profile is missing or malformed."""


class ToolError(DeployError):
    """An external tool is missing, failed, or printed something unexpected."""

    def __init__(
        self,
        message: str,
        *,
        command: Sequence[str] | None = None,
        returncode: int | None = None,
        stderr: str = "",
    ) -> None:
        super().__init__(message)
        self.command = list(command) if command else []
        self.returncode = returncode
        self.stderr = stderr


class RelinkError(DeployError):
    """Rewriting the linked-library table of a binary failed."""


__all__ = ["DeployError", "ProfileError", "ToolError", "RelinkError"]
