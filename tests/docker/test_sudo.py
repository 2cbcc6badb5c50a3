import sys
import threading
import time

import pytest

from dockctl.docker.errors import DockerError, PrivilegeResolutionError
from dockctl.docker.sudo import PrivilegeResolver, current_user_groups


def test_member_needs_no_elevation():
    r = PrivilegeResolver(groups_provider=lambda: ["users", "docker"], platform="linux")
    assert r.needs_elevation() is False
    assert r.prefix() == []


def test_non_member_gets_sudo():
    r = PrivilegeResolver(groups_provider=lambda: ["users"], platform="linux")
    assert r.prefix() == ["sudo"]


def test_group_names_are_trimmed():
    r = PrivilegeResolver(groups_provider=lambda: [" docker\n"], platform="linux")
    assert r.prefix() == []


def test_custom_group_and_token():
    r = PrivilegeResolver(
        group="podman", token="doas", groups_provider=lambda: ["docker"], platform="linux"
    )
    assert r.prefix() == ["doas"]


def test_lookup_happens_once_under_concurrency():
    calls = []

    def slow_groups():
        calls.append(1)
        time.sleep(0.05)
        return ["users"]

    r = PrivilegeResolver(groups_provider=slow_groups, platform="linux")
    barrier = threading.Barrier(10)
    results = []

    def worker():
        barrier.wait()
        results.append(r.needs_elevation())

    threads = [threading.Thread(target=worker) for _ in range(10)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(calls) == 1
    assert results == [True] * 10


def test_decision_is_stable_after_first_lookup():
    groups = ["docker"]
    r = PrivilegeResolver(groups_provider=lambda: list(groups), platform="linux")
    assert r.needs_elevation() is False
    groups.clear()
    assert r.needs_elevation() is False


def test_lookup_failure_is_fatal_and_not_retried():
    calls = []

    def broken():
        calls.append(1)
        raise KeyError("uid 4242 not in passwd")

    r = PrivilegeResolver(groups_provider=broken, platform="linux")
    with pytest.raises(PrivilegeResolutionError) as ei:
        r.prefix()
    assert not isinstance(ei.value, DockerError)
    with pytest.raises(PrivilegeResolutionError):
        r.prefix()
    assert len(calls) == 1


def test_windows_is_a_no_op():
    def never():
        raise AssertionError("groups must not be read on windows")

    r = PrivilegeResolver(groups_provider=never, platform="win32")
    assert r.prefix() == []


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX group database")
def test_current_user_groups_returns_names():
    groups = current_user_groups()
    assert groups
    assert all(isinstance(g, str) for g in groups)
