# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/dockctl/docker/sudo.py
from __future__ import annotations

import logging
import os
import sys
from typing import Callable, Iterable, List, Optional

from dockctl.docker.errors import PrivilegeResolutionError
from dockctl.utils.once import Once

log = logging.getLogger("dockctl")

GroupsProvider = Callable[[], Iterable[str]]


def current_user_groups() -> List[str]:
    """Group names the current process owner belongs to (POSIX only)."""
    import grp
    import pwd

    user = pwd.getpwuid(os.getuid())
    names: List[str] = []
    for gid in os.getgrouplist(user.pw_name, user.pw_gid):
        try:
            names.append(grp.getgrgid(gid).gr_name)
        except KeyError:
            # gid with no group database entry
            names.append(str(gid))
    return names


class PrivilegeResolver:
    """
    Decides once whether docker must be invoked through sudo.

    Elevation is needed when the current user is not in the docker admin
    group. The lookup runs at most once per resolver.
    """

    def __init__(
        self,
        *,
        group: str = "docker",
        token: str = "sudo",
        groups_provider: GroupsProvider = current_user_groups,
        platform: Optional[str] = None,
    ):
        self.group = group
        self.token = token
        self._groups_provider = groups_provider
        self._platform = platform or sys.platform
        self._decision: Once[bool] = Once(self._resolve)

    def _resolve(self) -> bool:
        if self._platform == "win32":
            return False
        try:
            groups = [g.strip() for g in self._groups_provider()]
        except Exception as exc:
            log.critical("[sudo] failed to read group membership: %s", exc)
            raise PrivilegeResolutionError(
                f"failed to get group membership for current user: {exc}"
            ) from exc

        elevate = self.group not in groups
        log.debug(
            "[sudo] user groups=%s, admin group '%s' -> elevate=%s",
            groups, self.group, elevate,
        )
        return elevate

    def needs_elevation(self) -> bool:
        return self._decision.get()

    def prefix(self) -> List[str]:
        return [self.token] if self.needs_elevation() else []


_default_guard: Once[PrivilegeResolver] = Once(PrivilegeResolver)


def default_resolver() -> PrivilegeResolver:
    """Process-wide resolver shared by references that aren't given one."""
    return _default_guard.get()
