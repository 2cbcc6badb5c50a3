# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/dockctl/docker/errors.py
from __future__ import annotations

from typing import Iterable, Optional, Sequence


class DockerError(RuntimeError):
    """Base class for docker command failures."""


class MissingParameter(DockerError):
    """Raised when a required builder parameter is blank or invalid."""

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"missing required parameter: {detail}")


class PathResolutionError(DockerError):
    """Raised when the build file cannot be made relative to the build context."""


class ToolNotFound(DockerError):
    """Raised when the docker executable cannot be located."""

    def __init__(self, detail: str):
        super().__init__(f"unable to locate docker executable: {detail}")


class MissingCredential(DockerError):
    """Raised when login is asked to pass a password that was never supplied."""


class Cancelled(DockerError):
    """Raised when the execution context fires before or during a command."""

    def __init__(self, reason: str = "context canceled"):
        self.reason = reason
        super().__init__(reason)


class CommandFailed(DockerError):
    """Raised when the docker process exits non-zero."""

    def __init__(self, argv: Sequence[str], returncode: int):
        self.argv = list(argv)
        self.returncode = returncode
        super().__init__(f"docker failed (rc={returncode}) for {self.argv!r}")


class DryRunResult(DockerError):
    """
    Raised instead of launching docker when a DockerRef is in dry-run mode.

    str() renders the would-be command line; `args` exposes the raw argument
    vector (without the executable or any elevation prefix).
    """

    def __init__(
        self,
        args: Iterable[str],
        *,
        tool: str = "docker",
        cwd: Optional[str] = None,
    ):
        argv = tuple(args)
        super().__init__(*argv)
        self.tool = tool
        self.cwd = cwd

    def __str__(self) -> str:
        return f"dry run: {self.tool} " + " ".join(self.args)


class PrivilegeResolutionError(RuntimeError):
    """
    Group membership for the current user could not be read.

    Not a DockerError: this means the host environment is broken and every
    later command would fail the same way.
    """
