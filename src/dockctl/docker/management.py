# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/dockctl/docker/management.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Tuple

from dockctl.docker.command import DockerCommand, blank, require
from dockctl.docker.errors import MissingCredential

if TYPE_CHECKING:
    from dockctl.docker.ref import DockerRef


@dataclass(frozen=True)
class DockerRemoveImage(DockerCommand):
    """`docker rmi [-f] <image>`. Use `force()` to remove images still in use."""

    image: str = ""
    forced: bool = False

    @classmethod
    def new(cls, ref: "DockerRef", image: str) -> "DockerRemoveImage":
        image = (image or "").strip()
        return cls(ref=ref, image=image, err=require(image, "image name/hash"))

    def force(self) -> "DockerRemoveImage":
        return self._update(forced=True)

    def _lower(self) -> Tuple[str, ...]:
        return ("rmi", "-f", self.image) if self.forced else ("rmi", self.image)


@dataclass(frozen=True)
class DockerRemoveContainer(DockerCommand):
    """`docker rm [-f] <container>`. `force()` also removes running containers."""

    name: str = ""
    forced: bool = False

    @classmethod
    def new(cls, ref: "DockerRef", name: str) -> "DockerRemoveContainer":
        name = (name or "").strip()
        return cls(ref=ref, name=name, err=require(name, "container name"))

    def force(self) -> "DockerRemoveContainer":
        return self._update(forced=True)

    def _lower(self) -> Tuple[str, ...]:
        return ("rm", "-f", self.name) if self.forced else ("rm", self.name)


@dataclass(frozen=True)
class _SingleTarget(DockerCommand):
    verb = ""
    what = ""

    target: str = ""

    @classmethod
    def new(cls, ref: "DockerRef", target: str):
        target = (target or "").strip()
        return cls(ref=ref, target=target, err=require(target, cls.what))

    def _lower(self) -> Tuple[str, ...]:
        return (self.verb, self.target)


class DockerStart(_SingleTarget):
    verb = "start"
    what = "container name"


class DockerStop(_SingleTarget):
    verb = "stop"
    what = "container name"


class DockerPull(_SingleTarget):
    verb = "pull"
    what = "image"


class DockerPush(_SingleTarget):
    verb = "push"
    what = "image"


@dataclass(frozen=True)
class DockerTag(DockerCommand):
    current: str = ""
    new_tag: str = ""

    @classmethod
    def new(cls, ref: "DockerRef", current: str, new_tag: str) -> "DockerTag":
        current = (current or "").strip()
        new_tag = (new_tag or "").strip()
        err = require(current, "source image") or require(new_tag, "target image")
        return cls(ref=ref, current=current, new_tag=new_tag, err=err)

    def _lower(self) -> Tuple[str, ...]:
        return ("tag", self.current, self.new_tag)


class CredentialSource(Enum):
    STDIN = "stdin"
    ARGUMENT = "argument"


@dataclass(frozen=True)
class DockerLogin(DockerCommand):
    """
    `docker login [-u user] [-p password] <host>`.

    By default docker reads the password from stdin. Calling `password()`
    switches to passing it with `-p`, which then must not be blank.
    """

    host: str = ""
    user: str = ""
    secret: str = ""
    source: CredentialSource = CredentialSource.STDIN

    @classmethod
    def new(cls, ref: "DockerRef", host: str) -> "DockerLogin":
        host = (host or "").strip()
        return cls(ref=ref, host=host, err=require(host, "host"))

    def username(self, username: str) -> "DockerLogin":
        if blank(username):
            return self
        return self._update(user=username.strip())

    def password(self, password: str) -> "DockerLogin":
        return self._update(secret=(password or "").strip(), source=CredentialSource.ARGUMENT)

    def password_stdin(self) -> "DockerLogin":
        return self._update(secret="", source=CredentialSource.STDIN)

    def interactive(self) -> bool:
        return self.source is CredentialSource.STDIN

    def _lower(self) -> Tuple[str, ...]:
        args = ["login"]
        if self.user:
            args += ["-u", self.user]
        if self.source is CredentialSource.ARGUMENT:
            if not self.secret:
                raise MissingCredential("missing password for login")
            args += ["-p", self.secret]
        args.append(self.host)
        return tuple(args)
