# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/dockctl/config/settings.py
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class DockerSettings:
    tool: str = "docker"
    admin_group: str = "docker"
    sudo: str = "sudo"
    dry_run: bool = False
    log_dir: Path = Path.home() / ".dockctl" / "logs"


def load_docker_settings() -> DockerSettings:
    # defaults match a stock docker install; override via env
    return DockerSettings(
        tool=os.getenv("DOCKCTL_TOOL", "docker"),
        admin_group=os.getenv("DOCKCTL_ADMIN_GROUP", "docker"),
        sudo=os.getenv("DOCKCTL_SUDO", "sudo"),
        dry_run=os.getenv("DOCKCTL_DRY_RUN", "0").strip().lower() in _TRUTHY,
        log_dir=Path(os.getenv("DOCKCTL_LOG_DIR", str(Path.home() / ".dockctl" / "logs"))),
    )
