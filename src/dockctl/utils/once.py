# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/dockctl/utils/once.py
from __future__ import annotations

import threading
from typing import Callable, Generic, Optional, TypeVar

T = TypeVar("T")


class Once(Generic[T]):
    """
    Compute a value exactly once and hand the same result to every caller.

    Concurrent first callers block on the lock until the single computation
    finishes. If the computation raises, the exception is cached and re-raised
    to every caller; it is never retried.
    """

    def __init__(self, fn: Callable[[], T]):
        self._fn = fn
        self._lock = threading.Lock()
        self._done = False
        self._value: Optional[T] = None
        self._exc: Optional[BaseException] = None

    @property
    def done(self) -> bool:
        return self._done

    def get(self) -> T:
        if not self._done:
            with self._lock:
                if not self._done:
                    try:
                        self._value = self._fn()
                    except BaseException as exc:
                        self._exc = exc
                    self._done = True
        if self._exc is not None:
            raise self._exc
        return self._value  # type: ignore[return-value]

    __call__ = get
