# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/dockctl/utils/retry.py
from __future__ import annotations

import functools
import logging
from typing import Callable, Optional

from dockctl.docker.errors import CommandFailed
from dockctl.utils.execution import ExecutionContext

log = logging.getLogger("dockctl")

ContextTask = Callable[[ExecutionContext], None]


class RetryError(RuntimeError):
    """A step kept failing until it ran out of attempts."""

    def __init__(self, label: str, attempts: int):
        super().__init__(f"{label} failed after {attempts} attempts")
        self.label = label
        self.attempts = attempts


def retry(
    *,
    attempts: int,
    delay: float,
    retry_on: tuple[type[Exception], ...] = (CommandFailed,),
    on_retry: Callable[[int, Exception], None] | None = None,
    label: Optional[str] = None,
):
    """
    Retry a context-taking task.

    attempts: total number of tries
    delay: seconds to wait between tries; the wait ends early on cancel
    retry_on: exception types worth another try
    on_retry: callback(attempt, exception) after each failed try

    The context is checked before every try, so Cancelled surfaces as soon
    as the signal fires instead of after the remaining delays.
    """

    def decorator(fn: ContextTask) -> Callable[[Optional[ExecutionContext]], None]:
        name = label or getattr(fn, "__name__", "task")

        @functools.wraps(fn)
        def wrapper(ctx: Optional[ExecutionContext] = None) -> None:
            ctx = ctx or ExecutionContext.background()
            last_exc: Optional[Exception] = None
            for attempt in range(1, attempts + 1):
                ctx.check()
                try:
                    return fn(ctx)
                except retry_on as exc:
                    last_exc = exc
                    if on_retry:
                        on_retry(attempt, exc)
                    if attempt == attempts:
                        break
                    log.debug("[retry] %s: waiting %.1fs before attempt %d", name, delay, attempt + 1)
                    ctx.sleep(delay)
            raise RetryError(name, attempts) from last_exc

        return wrapper

    return decorator
