# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/dockctl/docker/run.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Optional, Tuple, Union

from dockctl.docker.command import DockerCommand, blank, require
from dockctl.docker.errors import MissingParameter
from dockctl.utils.paths import PathLike, abs_path, to_slash

if TYPE_CHECKING:
    from dockctl.docker.ref import DockerRef


class RestartPolicy(str, Enum):
    NEVER = "no"  # default
    ON_FAILURE = "on-failure"
    UNLESS_STOPPED = "unless-stopped"
    ALWAYS = "always"


@dataclass(frozen=True)
class RestartSpec:
    policy: RestartPolicy = RestartPolicy.NEVER
    max_retries: Optional[int] = None

    def flags(self) -> Tuple[str, ...]:
        if self.policy is RestartPolicy.NEVER:
            return ()
        value = self.policy.value
        if self.max_retries is not None:
            value = f"{value}:{self.max_retries}"
        return (f"--restart={value}",)


@dataclass(frozen=True)
class RemoveOnExit:
    def flags(self) -> Tuple[str, ...]:
        return ("--rm",)


# --rm and --restart are mutually exclusive; only one can be held at a time
ExitBehavior = Union[RestartSpec, RemoveOnExit]


@dataclass(frozen=True)
class DockerRun(DockerCommand):
    """Encapsulates a `docker run` command."""

    image: str = ""
    command_args: Tuple[str, ...] = ()
    container_name: str = ""
    hostname: str = ""
    working_dir: str = ""
    network: str = ""
    detach: bool = False
    interactive_tty: bool = False
    privileged: bool = False
    read_only: bool = False
    on_exit: ExitBehavior = RestartSpec()
    env: Tuple[str, ...] = ()
    port_mappings: Tuple[str, ...] = ()
    bind_mounts: Tuple[str, ...] = ()

    @classmethod
    def new(cls, ref: "DockerRef", image: str, *args: str) -> "DockerRun":
        image = (image or "").strip()
        return cls(ref=ref, image=image, command_args=tuple(args), err=require(image, "image"))

    def name(self, name: str) -> "DockerRun":
        return self._update(container_name=name.strip())

    def set_hostname(self, host: str) -> "DockerRun":
        """
        Host name other containers on the same network can use to reach this one.
        By default the container is reachable by its container name.
        """
        if blank(host):
            return self._fail(MissingParameter(f"missing host name '{host}'"))
        return self._update(hostname=host.strip())

    def working_directory(self, container_path: PathLike) -> "DockerRun":
        return self._update(working_dir=to_slash(container_path))

    def detached(self) -> "DockerRun":
        """Print the container ID instead of attaching to its output."""
        return self._update(detach=True)

    def interactive_terminal(self) -> "DockerRun":
        return self._update(interactive_tty=True)

    def privileged_container(self) -> "DockerRun":
        # only when an image genuinely requires it
        return self._update(privileged=True)

    def read_only_fs(self) -> "DockerRun":
        return self._update(read_only=True)

    def connect_network(self, network: str) -> "DockerRun":
        if blank(network):
            return self._fail(MissingParameter(f"invalid network param '{network}'"))
        return self._update(network=network.strip())

    def set_restart_policy(self, policy: Union[RestartPolicy, str]) -> "DockerRun":
        try:
            parsed = RestartPolicy(policy)
        except ValueError:
            value = getattr(policy, "value", policy)
            return self._fail(MissingParameter(f"unknown restart policy '{value}'"))
        return self._update(on_exit=RestartSpec(parsed))

    def set_restart_retries(self, retries: int) -> "DockerRun":
        """Restart on failure, at most `retries` times."""
        if retries < 1:
            return self._fail(MissingParameter(f"invalid retries '{retries}'"))
        return self._update(on_exit=RestartSpec(RestartPolicy.ON_FAILURE, retries))

    def remove_after_exit(self) -> "DockerRun":
        """Remove the container when it stops. Replaces any restart policy."""
        return self._update(on_exit=RemoveOnExit())

    def set_env_var(self, key: str, value: str) -> "DockerRun":
        return self._update(env=self.env + (f"{key.strip()}={value.strip()}",))

    def publish_port(self, host: int, container: int) -> "DockerRun":
        """Map a host port to a container port. The two don't have to match."""
        if host < 1 or container < 1:
            return self._fail(MissingParameter(f"invalid port value '{host}:{container}'"))
        return self._update(port_mappings=self.port_mappings + (f"{host}:{container}",))

    def volume_mount(self, host_path: PathLike, container_path: PathLike) -> "DockerRun":
        try:
            host = abs_path(host_path)
        except (OSError, ValueError) as exc:
            return self._fail(MissingParameter(f"invalid host path for bind mount: {exc}"))
        return self._update(bind_mounts=self.bind_mounts + (f"{host}:{to_slash(container_path)}",))

    def interactive(self) -> bool:
        return self.interactive_tty

    def _lower(self) -> Tuple[str, ...]:
        args = ["run"]
        if self.container_name:
            args.append(f"--name={self.container_name}")
        if self.hostname:
            args += ["-h", self.hostname]
        if self.working_dir:
            args += ["-w", self.working_dir]
        if self.detach:
            args.append("-d")
        if self.interactive_tty:
            args.append("-it")
        if self.privileged:
            args.append("--privileged")
        if self.read_only:
            args.append("--read-only")
        args += self.on_exit.flags()
        if self.network:
            args.append(f"--network={self.network}")

        for env in self.env:
            args += ["-e", env]
        for port in self.port_mappings:
            args += ["-p", port]
        for bind in self.bind_mounts:
            args += ["-v", bind]

        args.append(self.image)
        args += self.command_args
        return tuple(args)
