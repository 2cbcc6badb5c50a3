# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/dockctl/execution/runner.py
from __future__ import annotations

import logging
import subprocess
import time
from dataclasses import dataclass
from typing import List, Optional, Sequence

from dockctl.docker.errors import Cancelled, CommandFailed, ToolNotFound
from dockctl.utils.execution import ExecutionContext

log = logging.getLogger("dockctl")

SECRET_FLAGS = {"-p", "--password"}


def redact(argv: Sequence[str]) -> List[str]:
    """Copy of argv with values following password flags masked."""
    out: List[str] = []
    hide = False
    for a in argv:
        if hide:
            out.append("******")
            hide = False
            continue
        out.append(a)
        hide = a in SECRET_FLAGS
    return out


@dataclass
class CommandRunner:
    """
    Launches one docker process and waits for it.

    stdout/stderr are inherited so output streams straight to the terminal.
    stdin is connected only for interactive commands. The execution context
    is polled while the process runs; when it fires the process is killed.
    """

    label: str = "docker"
    poll_interval: float = 0.1

    def run(
        self,
        argv: Sequence[str],
        *,
        ctx: Optional[ExecutionContext] = None,
        cwd: Optional[str] = None,
        interactive: bool = False,
    ) -> None:
        ctx = ctx or ExecutionContext.background()
        ctx.check()

        log.info("[%s] $ %s", self.label, " ".join(redact(argv)))
        start = time.time()

        try:
            proc = subprocess.Popen(
                list(argv),
                cwd=cwd,
                stdin=None if interactive else subprocess.DEVNULL,
            )
        except FileNotFoundError as exc:
            raise ToolNotFound(str(exc)) from exc

        while True:
            try:
                rc = proc.wait(timeout=self.poll_interval)
                break
            except subprocess.TimeoutExpired:
                reason = ctx.err()
                if reason is not None:
                    log.warning("[%s] %s, killing pid %s", self.label, reason, proc.pid)
                    proc.kill()
                    proc.wait()
                    raise Cancelled(reason)

        elapsed = round(time.time() - start, 2)
        log.debug("[%s][exit %s] (%.2fs)", self.label, rc, elapsed)

        if rc != 0:
            raise CommandFailed(redact(argv), rc)
