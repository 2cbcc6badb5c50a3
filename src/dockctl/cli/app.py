# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/dockctl/cli/app.py
from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer
import yaml
from pydantic import ValidationError

from dockctl.config.loader import load_pipeline
from dockctl.config.settings import load_docker_settings
from dockctl.deploy.pipeline import run_pipeline
from dockctl.docker.command import DockerCommand
from dockctl.docker.errors import DockerError, DryRunResult
from dockctl.docker.ref import DockerRef
from dockctl.logging.log import init_logging
from dockctl.utils.execution import ExecutionContext


# ------------------------------------------------------------------------------
# CLI setup
# ------------------------------------------------------------------------------

app = typer.Typer(help="dockctl: build and run docker commands")


class State:
    ref: Optional[DockerRef] = None
    timeout: Optional[float] = None


state = State()


@app.callback()
def main(
    dry_run: bool = typer.Option(
        False, "--dry-run", "-n", help="Print the docker command instead of running it"
    ),
    debug: bool = typer.Option(False, "--debug", "-d", help="Verbose console logging"),
    timeout: Optional[float] = typer.Option(
        None, "--timeout", help="Kill docker if it runs longer than this many seconds"
    ),
    log_dir: Optional[Path] = typer.Option(None, "--log-dir", help="Directory for run logs"),
):
    settings = load_docker_settings()
    init_logging(
        base_dir=log_dir or settings.log_dir,
        verbose=debug,
        tool=settings.tool,
        dry_run=dry_run or settings.dry_run,
    )

    ref = DockerRef(settings)
    if dry_run:
        ref.dry()
    state.ref = ref
    state.timeout = timeout


def _ctx() -> ExecutionContext:
    ctx = ExecutionContext.background()
    return ctx.with_timeout(state.timeout) if state.timeout else ctx


def _execute(cmd: DockerCommand) -> None:
    try:
        cmd.run(_ctx())
    except DryRunResult as dry:
        typer.echo(str(dry))
    except DockerError as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(code=1)


def _split_kv(pairs: List[str], what: str) -> List[tuple[str, str]]:
    out = []
    for p in pairs:
        if "=" not in p:
            raise typer.BadParameter(f"{what} must be KEY=VALUE, got '{p}'")
        k, v = p.split("=", 1)
        out.append((k, v))
    return out


# ------------------------------------------------------------------------------
# Sub-commands
# ------------------------------------------------------------------------------

@app.command()
def build(
    image: str = typer.Argument(..., help="Tag for the built image"),
    context: str = typer.Argument("", help="Build context directory"),
    file: Optional[str] = typer.Option(None, "--file", "-f", help="Alternate Dockerfile"),
    build_arg: List[str] = typer.Option([], "--build-arg", help="KEY=VALUE build argument"),
    label: List[str] = typer.Option([], "--label", help="KEY=VALUE image label"),
    timestamp: bool = typer.Option(False, "--timestamp", help="Label the image with the build time"),
):
    """Build an image."""
    cmd = state.ref.build(image, context)
    if file:
        cmd = cmd.build_file(file)
    for k, v in _split_kv(build_arg, "--build-arg"):
        cmd = cmd.build_arg(k, v)
    for k, v in _split_kv(label, "--label"):
        cmd = cmd.label(k, v)
    if timestamp:
        cmd = cmd.label_build_timestamp()
    _execute(cmd)


@app.command()
def run(
    image: str = typer.Argument(...),
    args: Optional[List[str]] = typer.Argument(None, help="Command and arguments for the container"),
    name: Optional[str] = typer.Option(None, "--name"),
    hostname: Optional[str] = typer.Option(None, "--hostname", "-h"),
    workdir: Optional[str] = typer.Option(None, "--workdir", "-w"),
    detach: bool = typer.Option(False, "--detach", "-d"),
    interactive: bool = typer.Option(False, "--interactive", "-it"),
    privileged: bool = typer.Option(False, "--privileged"),
    read_only: bool = typer.Option(False, "--read-only"),
    rm: bool = typer.Option(False, "--rm"),
    restart: Optional[str] = typer.Option(None, "--restart", help="no|on-failure|unless-stopped|always"),
    restart_retries: Optional[int] = typer.Option(None, "--restart-retries"),
    network: Optional[str] = typer.Option(None, "--network"),
    env: List[str] = typer.Option([], "--env", "-e", help="KEY=VALUE"),
    publish: List[str] = typer.Option([], "--publish", "-p", help="HOST:CONTAINER"),
    volume: List[str] = typer.Option([], "--volume", "-v", help="HOST_PATH:CONTAINER_PATH"),
):
    """Run a container."""
    cmd = state.ref.run(image, *(args or []))
    if name:
        cmd = cmd.name(name)
    if hostname:
        cmd = cmd.set_hostname(hostname)
    if workdir:
        cmd = cmd.working_directory(workdir)
    if detach:
        cmd = cmd.detached()
    if interactive:
        cmd = cmd.interactive_terminal()
    if privileged:
        cmd = cmd.privileged_container()
    if read_only:
        cmd = cmd.read_only_fs()
    if restart:
        cmd = cmd.set_restart_policy(restart)
    if restart_retries is not None:
        cmd = cmd.set_restart_retries(restart_retries)
    if rm:
        cmd = cmd.remove_after_exit()
    if network:
        cmd = cmd.connect_network(network)
    for k, v in _split_kv(env, "--env"):
        cmd = cmd.set_env_var(k, v)
    for p in publish:
        host, _, container = p.partition(":")
        try:
            cmd = cmd.publish_port(int(host), int(container))
        except ValueError:
            raise typer.BadParameter(f"--publish must be HOST:CONTAINER, got '{p}'")
    for v in volume:
        # split on the last ':' so Windows drive letters survive
        host, sep, container = v.rpartition(":")
        if not sep:
            raise typer.BadParameter(f"--volume must be HOST_PATH:CONTAINER_PATH, got '{v}'")
        cmd = cmd.volume_mount(host, container)
    _execute(cmd)


@app.command("exec")
def exec_(
    container: str = typer.Argument(...),
    command: List[str] = typer.Argument(..., help="Command and arguments"),
    detach: bool = typer.Option(False, "--detach", "-d"),
    tty: bool = typer.Option(False, "--tty", "-t", help="Allocate a terminal"),
    privileged: bool = typer.Option(False, "--privileged"),
    user: Optional[str] = typer.Option(None, "--user", "-u", help="USER or USER:GROUP"),
    workdir: Optional[str] = typer.Option(None, "--workdir", "-w"),
):
    """Run a command in a running container."""
    cmd = state.ref.exec(container, *command)
    if detach:
        cmd = cmd.detached()
    elif tty:
        cmd = cmd.interactive_terminal()
    if privileged:
        cmd = cmd.privileged()
    if user:
        u, _, g = user.partition(":")
        cmd = cmd.user(u, g or None)
    if workdir:
        cmd = cmd.working_directory(workdir)
    _execute(cmd)


@app.command()
def login(
    host: str = typer.Argument(...),
    username: Optional[str] = typer.Option(None, "--username", "-u"),
    password: Optional[str] = typer.Option(
        None, "--password", "-p", help="Pass the password as an argument instead of stdin"
    ),
):
    """Log in to a registry."""
    cmd = state.ref.login(host)
    if username:
        cmd = cmd.username(username)
    if password is not None:
        cmd = cmd.password(password)
    _execute(cmd)


@app.command()
def pull(image: str = typer.Argument(..., help="IMAGE[:TAG]")):
    """Pull an image."""
    _execute(state.ref.pull(image))


@app.command()
def push(image: str = typer.Argument(..., help="IMAGE[:TAG]")):
    """Push an image."""
    _execute(state.ref.push(image))


@app.command()
def tag(
    source: str = typer.Argument(...),
    target: str = typer.Argument(...),
):
    """Tag an image with a new name."""
    _execute(state.ref.tag(source, target))


@app.command()
def rm(
    container: str = typer.Argument(...),
    force: bool = typer.Option(False, "--force", "-f"),
):
    """Remove a container."""
    cmd = state.ref.remove_container(container)
    _execute(cmd.force() if force else cmd)


@app.command()
def rmi(
    image: str = typer.Argument(...),
    force: bool = typer.Option(False, "--force", "-f"),
):
    """Remove an image."""
    cmd = state.ref.remove_image(image)
    _execute(cmd.force() if force else cmd)


@app.command()
def start(container: str = typer.Argument(...)):
    """Start a stopped container."""
    _execute(state.ref.start(container))


@app.command()
def stop(container: str = typer.Argument(...)):
    """Stop a running container."""
    _execute(state.ref.stop(container))


@app.command()
def apply(
    pipeline: Path = typer.Argument(..., exists=True, dir_okay=False, help="Pipeline YAML file"),
):
    """Run every step of a pipeline file in order."""
    try:
        plan = load_pipeline(pipeline)
    except (ValidationError, yaml.YAMLError) as exc:
        typer.echo(f"error: invalid pipeline {pipeline}: {exc}", err=True)
        raise typer.Exit(code=1)

    report = run_pipeline(plan, state.ref, _ctx())

    for o in report.outcomes:
        line = f"[{o.status}] {o.name}"
        if o.command:
            line += f": {o.command}"
        if o.error:
            line += f": {o.error}"
        typer.echo(line)
    typer.echo(report.summary())

    if not report.ok:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
