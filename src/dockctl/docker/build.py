# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/dockctl/docker/build.py
from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Optional, Tuple

from dockctl.docker.command import DockerCommand, require
from dockctl.docker.errors import PathResolutionError
from dockctl.utils.paths import PathLike, is_dir, rel_path

if TYPE_CHECKING:
    from dockctl.docker.ref import DockerRef

TIMESTAMP_LABEL = "buildTimestamp"


def rfc3339_now() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


@dataclass(frozen=True)
class DockerBuild(DockerCommand):
    """
    `docker build -t <image> [-f file] [--build-arg k=v]... [--label k=v]... .`

    When the context is a directory docker runs inside it, so the build file
    is passed relative to the context.
    """

    image: str = ""
    context: str = ""
    build_file_path: str = ""
    build_args: Tuple[str, ...] = ()
    labels: Tuple[str, ...] = ()

    @classmethod
    def new(cls, ref: "DockerRef", image: str, context: PathLike = "") -> "DockerBuild":
        image = (image or "").strip()
        return cls(ref=ref, image=image, context=os.fspath(context), err=require(image, "image"))

    def build_arg(self, key: str, value: str) -> "DockerBuild":
        """Set a build argument. These are distinct from environment variables."""
        return self._update(build_args=self.build_args + (f"{key}={value}",))

    def build_file(self, path: PathLike) -> "DockerBuild":
        """Use a Dockerfile that isn't named "Dockerfile" at the root of the context."""
        return self._update(build_file_path=os.fspath(path))

    def label(self, key: str, value: str) -> "DockerBuild":
        return self._update(labels=self.labels + (f"{key}={value}",))

    def label_build_timestamp(self) -> "DockerBuild":
        return self.label(TIMESTAMP_LABEL, rfc3339_now())

    def cwd(self) -> Optional[str]:
        return self.context if is_dir(self.context) else None

    def _lower(self) -> Tuple[str, ...]:
        args = ["build", "-t", self.image]

        if self.build_file_path:
            if self.cwd() is not None:
                try:
                    rel = rel_path(self.context, self.build_file_path)
                except ValueError as exc:
                    raise PathResolutionError(
                        f"unable to make a relative path from '{self.context}' "
                        f"to '{self.build_file_path}'"
                    ) from exc
                args += ["-f", rel]
            else:
                args += ["-f", self.build_file_path]

        for arg in self.build_args:
            args += ["--build-arg", arg]

        for label in self.labels:
            args += ["--label", label]

        args.append(".")
        return tuple(args)
