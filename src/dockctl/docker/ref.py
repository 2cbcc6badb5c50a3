# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/dockctl/docker/ref.py
from __future__ import annotations

import logging
import shutil
import threading
from typing import Callable, Optional

from dockctl.config.settings import DockerSettings, load_docker_settings
from dockctl.docker.build import DockerBuild
from dockctl.docker.errors import DryRunResult, ToolNotFound
from dockctl.docker.exec import DockerExec
from dockctl.docker.management import (
    DockerLogin,
    DockerPull,
    DockerPush,
    DockerRemoveContainer,
    DockerRemoveImage,
    DockerStart,
    DockerStop,
    DockerTag,
)
from dockctl.docker.run import DockerRun
from dockctl.docker.sudo import PrivilegeResolver, default_resolver
from dockctl.execution.runner import CommandRunner
from dockctl.utils.execution import ExecutionContext
from dockctl.utils.paths import PathLike

log = logging.getLogger("dockctl")

Task = Callable[[Optional[ExecutionContext]], None]


def _failed(exc: Exception) -> Task:
    def task(ctx: Optional[ExecutionContext] = None) -> None:
        raise exc
    return task


def _dry_run(tool: str, args: tuple[str, ...], cwd: Optional[str]) -> Task:
    def task(ctx: Optional[ExecutionContext] = None) -> None:
        log.debug("[docker] dry run intercepted: %s", " ".join(args))
        raise DryRunResult(args, tool=tool, cwd=cwd)
    return task


class DockerRef:
    """
    Reference to the docker CLI. Every sub-command funnels through `command`.

    The executable path is resolved on first real use and cached for the
    lifetime of the reference.
    """

    def __init__(
        self,
        settings: Optional[DockerSettings] = None,
        *,
        resolver: Optional[PrivilegeResolver] = None,
        runner: Optional[CommandRunner] = None,
    ):
        self.settings = settings or DockerSettings()
        self.tool = self.settings.tool
        self.dry_run = self.settings.dry_run
        self.resolver = resolver or self._resolver_for(self.settings)
        self.runner = runner or CommandRunner(label=self.tool)
        self._exe_path: Optional[str] = None
        self._exe_lock = threading.Lock()

    @classmethod
    def from_env(cls, **kwargs) -> "DockerRef":
        return cls(load_docker_settings(), **kwargs)

    @staticmethod
    def _resolver_for(settings: DockerSettings) -> PrivilegeResolver:
        shared = default_resolver()
        if shared.group == settings.admin_group and shared.token == settings.sudo:
            return shared
        return PrivilegeResolver(group=settings.admin_group, token=settings.sudo)

    def dry(self) -> DockerRef:
        """Enable dry-run mode for all later use of this reference."""
        self.dry_run = True
        return self

    def exe_path(self) -> str:
        if self._exe_path is None:
            with self._exe_lock:
                if self._exe_path is None:
                    found = shutil.which(self.tool)
                    if not found:
                        raise ToolNotFound(
                            f"unable to locate {self.tool}, and this is not a dry run"
                        )
                    log.debug("[docker] resolved %s -> %s", self.tool, found)
                    self._exe_path = found
        return self._exe_path

    def command(
        self,
        *args: str,
        cwd: Optional[str] = None,
        interactive: bool = False,
    ) -> Task:
        """
        Build a task that runs `docker <args...>`.

        In dry-run mode the task raises DryRunResult instead. Elevation is
        decided when the task runs, never for dry runs.
        """
        argv = tuple(args)
        if self.dry_run:
            return _dry_run(self.tool, argv, cwd)
        try:
            exe = self.exe_path()
        except ToolNotFound as exc:
            return _failed(exc)

        def task(ctx: Optional[ExecutionContext] = None) -> None:
            ctx = ctx or ExecutionContext.background()
            ctx.check()
            full = [*self.resolver.prefix(), exe, *argv]
            self.runner.run(full, ctx=ctx, cwd=cwd, interactive=interactive)

        return task

    # ------------------------- sub-commands -------------------------

    def build(self, image: str, context: PathLike = "") -> DockerBuild:
        return DockerBuild.new(self, image, context)

    def run(self, image: str, *args: str) -> DockerRun:
        return DockerRun.new(self, image, *args)

    def exec(self, container: str, *cmd_and_args: str) -> DockerExec:
        return DockerExec.new(self, container, *cmd_and_args)

    def remove_image(self, image: str) -> DockerRemoveImage:
        return DockerRemoveImage.new(self, image)

    def remove_container(self, name: str) -> DockerRemoveContainer:
        return DockerRemoveContainer.new(self, name)

    def start(self, name: str) -> DockerStart:
        return DockerStart.new(self, name)

    def stop(self, name: str) -> DockerStop:
        return DockerStop.new(self, name)

    def login(self, host: str) -> DockerLogin:
        return DockerLogin.new(self, host)

    def pull(self, image_and_tag: str) -> DockerPull:
        return DockerPull.new(self, image_and_tag)

    def tag(self, current_tag: str, new_tag: str) -> DockerTag:
        return DockerTag.new(self, current_tag, new_tag)

    def push(self, image_and_tag: str) -> DockerPush:
        return DockerPush.new(self, image_and_tag)
