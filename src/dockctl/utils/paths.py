# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/dockctl/utils/paths.py
from __future__ import annotations

import os
from pathlib import Path
from typing import Union

PathLike = Union[str, "os.PathLike[str]"]


def is_dir(path: PathLike) -> bool:
    s = os.fspath(path)
    return bool(s) and Path(s).is_dir()


def abs_path(path: PathLike) -> str:
    return os.path.abspath(os.fspath(path))


def rel_path(base: PathLike, target: PathLike) -> str:
    """Path of `target` relative to `base`. Raises ValueError when none exists."""
    return os.path.relpath(os.path.abspath(os.fspath(target)), os.path.abspath(os.fspath(base)))


def to_slash(path: PathLike) -> str:
    return os.fspath(path).replace(os.sep, "/")
