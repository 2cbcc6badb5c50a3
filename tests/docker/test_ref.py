import shutil
import threading

import pytest

from dockctl.config.settings import DockerSettings
from dockctl.docker.errors import Cancelled, DockerError, DryRunResult, ToolNotFound
from dockctl.docker.ref import DockerRef
from dockctl.docker.sudo import PrivilegeResolver
from dockctl.utils.execution import ExecutionContext

from conftest import FakeRunner, member_resolver


def test_dry_run_renders_command(dry_ref):
    with pytest.raises(DryRunResult) as ei:
        dry_ref.command("do", "command")()
    assert str(ei.value) == "dry run: docker do command"
    assert ei.value.args == ("do", "command")
    assert isinstance(ei.value, DockerError)


def test_dry_run_joins_literally(dry_ref):
    with pytest.raises(DryRunResult) as ei:
        dry_ref.command("exec", "c1", "sh", "-c", "echo hi there")()
    assert str(ei.value) == "dry run: docker exec c1 sh -c echo hi there"
    assert ei.value.args[-1] == "echo hi there"


def test_dry_run_never_consults_resolver_or_path(monkeypatch):
    def boom():
        raise AssertionError("group lookup must not happen in dry run")

    monkeypatch.setattr(shutil, "which", lambda name: None)
    ref = DockerRef(resolver=PrivilegeResolver(groups_provider=boom, platform="linux")).dry()
    with pytest.raises(DryRunResult) as ei:
        ref.command("ps")()
    assert "sudo" not in str(ei.value)


def test_dry_returns_same_ref():
    ref = DockerRef(resolver=member_resolver("docker"))
    assert ref.dry() is ref
    assert ref.dry_run


def test_dry_run_from_settings():
    ref = DockerRef(DockerSettings(dry_run=True), resolver=member_resolver("docker"))
    with pytest.raises(DryRunResult):
        ref.command("ps")()


def test_missing_executable_fails_when_run(monkeypatch):
    monkeypatch.setattr(shutil, "which", lambda name: None)
    ref = DockerRef(resolver=member_resolver("docker"), runner=FakeRunner())
    task = ref.command("ps")  # building the task does not raise
    with pytest.raises(ToolNotFound) as ei:
        task()
    assert "not a dry run" in str(ei.value)


def test_executable_resolved_once(monkeypatch):
    lookups = []

    def fake_which(name):
        lookups.append(name)
        return "/opt/bin/docker"

    monkeypatch.setattr(shutil, "which", fake_which)
    runner = FakeRunner()
    ref = DockerRef(resolver=member_resolver("docker"), runner=runner)
    ref.command("ps")()
    ref.command("images")()
    assert lookups == ["docker"]
    assert [c["argv"][0] for c in runner.calls] == ["/opt/bin/docker", "/opt/bin/docker"]


def test_executable_resolution_is_race_safe(monkeypatch):
    monkeypatch.setattr(shutil, "which", lambda name: "/usr/bin/docker")
    ref = DockerRef(resolver=member_resolver("docker"), runner=FakeRunner())
    barrier = threading.Barrier(8)
    seen = []

    def worker():
        barrier.wait()
        seen.append(ref.exe_path())

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert seen == ["/usr/bin/docker"] * 8


def test_sudo_prefix_when_not_in_group(monkeypatch):
    monkeypatch.setattr(shutil, "which", lambda name: "/usr/bin/docker")
    runner = FakeRunner()
    ref = DockerRef(resolver=member_resolver("wheel", "users"), runner=runner)
    ref.command("ps", "-a")()
    assert runner.calls[0]["argv"] == ["sudo", "/usr/bin/docker", "ps", "-a"]


def test_no_sudo_for_group_member(live_ref, fake_runner):
    live_ref.command("ps")()
    assert fake_runner.calls[0]["argv"] == ["/usr/bin/docker", "ps"]


def test_cwd_and_interactive_forwarded(live_ref, fake_runner):
    live_ref.command("login", "host", cwd="/tmp", interactive=True)()
    assert fake_runner.calls[0]["cwd"] == "/tmp"
    assert fake_runner.calls[0]["interactive"] is True


def test_cancelled_context_never_spawns(live_ref, fake_runner):
    ctx = ExecutionContext.background()
    ctx.cancel()
    with pytest.raises(Cancelled) as ei:
        live_ref.command("ps")(ctx)
    assert str(ei.value) == "context canceled"
    assert fake_runner.calls == []


def test_expired_deadline_never_spawns(live_ref, fake_runner):
    ctx = ExecutionContext.background().with_timeout(0)
    with pytest.raises(Cancelled) as ei:
        live_ref.command("ps")(ctx)
    assert ei.value.reason == "context deadline exceeded"
    assert fake_runner.calls == []


def test_refs_share_default_resolver():
    assert DockerRef().resolver is DockerRef().resolver


def test_custom_admin_group_gets_own_resolver():
    ref = DockerRef(DockerSettings(admin_group="podman"))
    assert ref.resolver.group == "podman"
    assert ref.resolver is not DockerRef().resolver


def test_custom_tool_name_in_dry_run():
    ref = DockerRef(DockerSettings(tool="podman"), resolver=member_resolver()).dry()
    with pytest.raises(DryRunResult) as ei:
        ref.command("ps")()
    assert str(ei.value) == "dry run: podman ps"
