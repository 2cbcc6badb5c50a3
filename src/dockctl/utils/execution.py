# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/dockctl/utils/execution.py
from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field
from typing import Optional

from dockctl.docker.errors import Cancelled

DEADLINE_EXCEEDED = "context deadline exceeded"
CANCELED = "context canceled"


@dataclass(frozen=True)
class ExecutionContext:
    """
    Cancellation signal passed to every command execution.

    Contexts derived with `with_timeout` share the parent's cancel event, so
    cancelling the parent cancels the child; the child may carry a tighter
    deadline (monotonic clock).
    """

    event: threading.Event = field(default_factory=threading.Event)
    deadline: Optional[float] = None

    @classmethod
    def background(cls) -> "ExecutionContext":
        return cls()

    def with_timeout(self, seconds: float) -> "ExecutionContext":
        deadline = time.monotonic() + seconds
        if self.deadline is not None:
            deadline = min(deadline, self.deadline)
        return ExecutionContext(event=self.event, deadline=deadline)

    def cancel(self) -> None:
        self.event.set()

    def err(self) -> Optional[str]:
        """Return the cancellation reason, or None while the context is live."""
        if self.event.is_set():
            return CANCELED
        if self.deadline is not None and time.monotonic() >= self.deadline:
            return DEADLINE_EXCEEDED
        return None

    def done(self) -> bool:
        return self.err() is not None

    def check(self) -> None:
        reason = self.err()
        if reason is not None:
            raise Cancelled(reason)

    def sleep(self, seconds: float) -> None:
        """
        Wait up to `seconds`, waking early on cancel or deadline.

        Raises Cancelled if the context fired while waiting.
        """
        self.check()
        left = self.remaining()
        if left is not None:
            seconds = min(seconds, left)
        self.event.wait(max(0.0, seconds))
        self.check()

    def remaining(self) -> Optional[float]:
        if self.deadline is None:
            return None
        return max(0.0, self.deadline - time.monotonic())
