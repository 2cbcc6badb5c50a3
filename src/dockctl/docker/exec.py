# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/dockctl/docker/exec.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Optional, Tuple

from dockctl.docker.command import DockerCommand, blank, require
from dockctl.docker.errors import MissingParameter
from dockctl.utils.paths import PathLike, to_slash

if TYPE_CHECKING:
    from dockctl.docker.ref import DockerRef


class ExecMode(Enum):
    INTERACTIVE = ("-i",)
    INTERACTIVE_TTY = ("-i", "-t")
    DETACHED = ("-d",)

    @property
    def flags(self) -> Tuple[str, ...]:
        return self.value


@dataclass(frozen=True)
class DockerExec(DockerCommand):
    """
    `docker exec` in a running container.

    Detached and interactive+terminal are exclusive modes; the last call wins.
    """

    container: str = ""
    command_args: Tuple[str, ...] = ()
    mode: ExecMode = ExecMode.INTERACTIVE
    privileged_mode: bool = False
    user_spec: str = ""
    working_dir: str = ""

    @classmethod
    def new(cls, ref: "DockerRef", container: str, *cmd_and_args: str) -> "DockerExec":
        container = (container or "").strip()
        err = require(container, "container name")
        if err is None and (not cmd_and_args or blank(cmd_and_args[0])):
            err = MissingParameter("missing command")
        return cls(ref=ref, container=container, command_args=tuple(cmd_and_args), err=err)

    def detached(self) -> "DockerExec":
        return self._update(mode=ExecMode.DETACHED)

    def interactive_terminal(self) -> "DockerExec":
        return self._update(mode=ExecMode.INTERACTIVE_TTY)

    def privileged(self) -> "DockerExec":
        return self._update(privileged_mode=True)

    def user(self, user: str, group: Optional[str] = None) -> "DockerExec":
        if blank(user):
            return self._fail(MissingParameter(f"missing user '{user}'"))
        spec = user.strip()
        if not blank(group):
            spec = f"{spec}:{group.strip()}"
        return self._update(user_spec=spec)

    def working_directory(self, container_path: PathLike) -> "DockerExec":
        return self._update(working_dir=to_slash(container_path))

    def interactive(self) -> bool:
        return self.mode is not ExecMode.DETACHED

    def _lower(self) -> Tuple[str, ...]:
        args = ["exec", *self.mode.flags]
        if self.privileged_mode:
            args.append("--privileged")
        if self.user_spec:
            args += ["-u", self.user_spec]
        if self.working_dir:
            args += ["-w", self.working_dir]
        args.append(self.container)
        args += self.command_args
        return tuple(args)
