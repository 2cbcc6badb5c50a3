# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/dockctl/deploy/pipeline.py
from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import List, Optional

from dockctl.config.models import (
    BuildStep,
    ContainerStep,
    ExecStep,
    ImageStep,
    LoginStep,
    Pipeline,
    RemoveStep,
    RunStep,
    Step,
    TagStep,
)
from dockctl.docker.command import DockerCommand
from dockctl.docker.errors import Cancelled, CommandFailed, DockerError, DryRunResult
from dockctl.docker.ref import DockerRef
from dockctl.utils.execution import ExecutionContext
from dockctl.utils.retry import RetryError, retry

log = logging.getLogger("dockctl")


@dataclass
class StepOutcome:
    name: str
    status: str                 # "OK" | "DRY_RUN" | "FAILED"
    attempts: int = 0
    command: Optional[str] = None
    error: Optional[str] = None


@dataclass
class PipelineReport:
    outcomes: List[StepOutcome] = field(default_factory=list)

    def add(self, outcome: StepOutcome) -> None:
        self.outcomes.append(outcome)

    @property
    def ok(self) -> bool:
        return all(o.status != "FAILED" for o in self.outcomes)

    def summary(self) -> str:
        counts = {"OK": 0, "DRY_RUN": 0, "FAILED": 0}
        for o in self.outcomes:
            counts[o.status] += 1
        return " ".join(f"{k}={v}" for k, v in counts.items())


def _build(ref: DockerRef, step: BuildStep) -> DockerCommand:
    cmd = ref.build(step.image, step.context)
    if step.build_file:
        cmd = cmd.build_file(step.build_file)
    for k, v in step.build_args.items():
        cmd = cmd.build_arg(k, v)
    for k, v in step.labels.items():
        cmd = cmd.label(k, v)
    if step.timestamp_label:
        cmd = cmd.label_build_timestamp()
    return cmd


def _run(ref: DockerRef, step: RunStep) -> DockerCommand:
    cmd = ref.run(step.image, *step.args)
    if step.container_name:
        cmd = cmd.name(step.container_name)
    if step.hostname:
        cmd = cmd.set_hostname(step.hostname)
    if step.workdir:
        cmd = cmd.working_directory(step.workdir)
    if step.detached:
        cmd = cmd.detached()
    if step.interactive:
        cmd = cmd.interactive_terminal()
    if step.privileged:
        cmd = cmd.privileged_container()
    if step.read_only:
        cmd = cmd.read_only_fs()
    if step.restart:
        cmd = cmd.set_restart_policy(step.restart)
    if step.restart_retries is not None:
        cmd = cmd.set_restart_retries(step.restart_retries)
    if step.remove:
        cmd = cmd.remove_after_exit()
    if step.network:
        cmd = cmd.connect_network(step.network)
    for k, v in step.env.items():
        cmd = cmd.set_env_var(k, v)
    for p in step.ports:
        cmd = cmd.publish_port(p.host, p.container)
    for m in step.mounts:
        cmd = cmd.volume_mount(m.host, m.container)
    return cmd


def _exec(ref: DockerRef, step: ExecStep) -> DockerCommand:
    cmd = ref.exec(step.container, *step.command)
    if step.detached:
        cmd = cmd.detached()
    elif step.tty:
        cmd = cmd.interactive_terminal()
    if step.privileged:
        cmd = cmd.privileged()
    if step.user:
        cmd = cmd.user(step.user, step.group)
    if step.workdir:
        cmd = cmd.working_directory(step.workdir)
    return cmd


def _login(ref: DockerRef, step: LoginStep) -> DockerCommand:
    cmd = ref.login(step.host)
    if step.username:
        cmd = cmd.username(step.username)
    if step.password is not None:
        cmd = cmd.password(step.password)
    return cmd


def to_command(ref: DockerRef, step: Step) -> DockerCommand:
    """Translate one validated pipeline step into a configured builder."""
    if isinstance(step, BuildStep):
        return _build(ref, step)
    if isinstance(step, RunStep):
        return _run(ref, step)
    if isinstance(step, ExecStep):
        return _exec(ref, step)
    if isinstance(step, LoginStep):
        return _login(ref, step)
    if isinstance(step, ImageStep):
        return ref.pull(step.image) if step.action == "pull" else ref.push(step.image)
    if isinstance(step, TagStep):
        return ref.tag(step.source, step.target)
    if isinstance(step, RemoveStep):
        if step.action == "rmi":
            cmd = ref.remove_image(step.target)
        else:
            cmd = ref.remove_container(step.target)
        return cmd.force() if step.force else cmd
    if isinstance(step, ContainerStep):
        return ref.start(step.container) if step.action == "start" else ref.stop(step.container)
    raise TypeError(f"unsupported step: {step!r}")


def run_pipeline(
    pipeline: Pipeline,
    ref: DockerRef,
    ctx: Optional[ExecutionContext] = None,
) -> PipelineReport:
    """
    Execute steps in order, stopping at the first failure.

    Steps are retried on CommandFailed only. In dry-run mode every step
    records its rendered command and the pipeline carries on.
    """
    ctx = ctx or ExecutionContext.background()
    report = PipelineReport()

    for idx, step in enumerate(pipeline.steps, start=1):
        name = step.name or f"{idx}:{step.action}"
        outcome = StepOutcome(name=name, status="OK")
        cmd = to_command(ref, step)

        def _on_retry(attempt: int, exc: Exception) -> None:
            outcome.attempts = attempt
            log.warning("[pipeline] %s attempt %d failed: %s", name, attempt, exc)

        attempt_run = retry(
            attempts=step.retries,
            delay=step.retry_delay_seconds,
            retry_on=(CommandFailed,),
            on_retry=_on_retry,
            label=name,
        )(cmd.run)

        log.info("[pipeline] %s", name)
        start = time.time()
        try:
            attempt_run(ctx)
            outcome.attempts += 1
        except DryRunResult as dry:
            outcome.status = "DRY_RUN"
            outcome.attempts = 1
            outcome.command = str(dry)
        except RetryError as exc:
            outcome.status = "FAILED"
            outcome.error = str(exc.__cause__ or exc)
        except Cancelled as exc:
            outcome.status = "FAILED"
            outcome.error = str(exc)
        except DockerError as exc:
            outcome.status = "FAILED"
            outcome.attempts += 1
            outcome.error = str(exc)

        log.debug("[pipeline] %s -> %s (%.2fs)", name, outcome.status, time.time() - start)
        report.add(outcome)
        if outcome.status == "FAILED":
            break

    log.info("[pipeline] %s", report.summary())
    return report
