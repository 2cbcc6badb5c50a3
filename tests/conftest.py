import pytest

from dockctl.docker.ref import DockerRef
from dockctl.docker.sudo import PrivilegeResolver


class FakeRunner:
    """Records every argv handed to the process launcher."""

    def __init__(self, fail_times: int = 0, exc_factory=None):
        self.calls = []
        self.fail_times = fail_times
        self.exc_factory = exc_factory

    def run(self, argv, *, ctx=None, cwd=None, interactive=False):
        self.calls.append({"argv": list(argv), "cwd": cwd, "interactive": interactive})
        if len(self.calls) <= self.fail_times:
            raise self.exc_factory(argv)


def member_resolver(*groups):
    return PrivilegeResolver(groups_provider=lambda: list(groups), platform="linux")


@pytest.fixture
def dry_ref():
    return DockerRef(resolver=member_resolver("docker")).dry()


@pytest.fixture
def fake_runner():
    return FakeRunner()


@pytest.fixture
def live_ref(monkeypatch, fake_runner):
    """Non-dry reference with docker 'found' and a recording runner."""
    import shutil

    monkeypatch.setattr(shutil, "which", lambda name: f"/usr/bin/{name}")
    return DockerRef(resolver=member_resolver("docker"), runner=fake_runner)
