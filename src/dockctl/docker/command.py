# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/dockctl/docker/command.py
from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Tuple, TypeVar

from dockctl.docker.errors import DockerError, MissingParameter
from dockctl.utils.execution import ExecutionContext

if TYPE_CHECKING:
    from dockctl.docker.ref import DockerRef, Task

C = TypeVar("C", bound="DockerCommand")


def blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def require(value: Optional[str], what: str) -> Optional[MissingParameter]:
    if blank(value):
        return MissingParameter(f"missing {what}")
    return None


@dataclass(frozen=True)
class DockerCommand:
    """
    Base for all sub-command builders.

    Builders are immutable: every fluent method returns an updated copy. A
    validation failure is captured in `err` and only raised by `args()` or
    `run()`, so fluent chains are never interrupted.
    """

    ref: "DockerRef" = dataclasses.field(repr=False, compare=False)
    err: Optional[DockerError] = None

    def _update(self: C, **changes) -> C:
        if self.err is not None:
            return self
        return dataclasses.replace(self, **changes)

    def _fail(self: C, err: DockerError) -> C:
        if self.err is not None:
            return self
        return dataclasses.replace(self, err=err)

    def _lower(self) -> Tuple[str, ...]:
        raise NotImplementedError

    def args(self) -> Tuple[str, ...]:
        """Argument vector for this command, without the executable."""
        if self.err is not None:
            raise self.err
        return self._lower()

    def cwd(self) -> Optional[str]:
        return None

    def interactive(self) -> bool:
        return False

    def run(self, ctx: Optional[ExecutionContext] = None) -> None:
        ctx = ctx or ExecutionContext.background()
        argv = self.args()
        ctx.check()
        self.ref.command(*argv, cwd=self.cwd(), interactive=self.interactive())(ctx)

    def task(self) -> "Task":
        return self.run
