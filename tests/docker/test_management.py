import pytest

from dockctl.docker.errors import DryRunResult, MissingCredential, MissingParameter


def is_dry_run_cmd(cmd, command: str):
    with pytest.raises(DryRunResult) as ei:
        cmd.task()()
    assert str(ei.value) == "dry run: " + command
    return ei.value


def test_remove_image(dry_ref):
    is_dry_run_cmd(dry_ref.remove_image("some-image:latest"), "docker rmi some-image:latest")


def test_remove_image_force(dry_ref):
    is_dry_run_cmd(dry_ref.remove_image("some-image:latest").force(), "docker rmi -f some-image:latest")


def test_remove_container(dry_ref):
    is_dry_run_cmd(dry_ref.remove_container("some-container"), "docker rm some-container")


def test_remove_container_force(dry_ref):
    is_dry_run_cmd(dry_ref.remove_container("some-container").force(), "docker rm -f some-container")


def test_start_stop(dry_ref):
    is_dry_run_cmd(dry_ref.start("some-container"), "docker start some-container")
    is_dry_run_cmd(dry_ref.stop("some-container"), "docker stop some-container")


def test_pull_retag_push(dry_ref):
    is_dry_run_cmd(
        dry_ref.login("some-host.com").username("bob").password("secret"),
        "docker login -u bob -p secret some-host.com",
    )
    is_dry_run_cmd(dry_ref.pull("some-host.com/my-image:1"), "docker pull some-host.com/my-image:1")
    is_dry_run_cmd(
        dry_ref.tag("some-host.com/my-image:1", "some-host.com/my-image:latest"),
        "docker tag some-host.com/my-image:1 some-host.com/my-image:latest",
    )
    res = is_dry_run_cmd(
        dry_ref.push("some-host.com/my-image:latest"), "docker push some-host.com/my-image:latest"
    )
    assert res.args == ("push", "some-host.com/my-image:latest")


def test_login_reads_password_from_stdin_by_default(dry_ref):
    cmd = dry_ref.login("registry.example.com").username("ci")
    assert cmd.interactive()
    is_dry_run_cmd(cmd, "docker login -u ci registry.example.com")


def test_login_blank_username_ignored(dry_ref):
    is_dry_run_cmd(dry_ref.login("host").username("  "), "docker login host")


def test_login_blank_password_is_missing_credential(dry_ref):
    cmd = dry_ref.login("host").username("bob").password("   ")
    with pytest.raises(MissingCredential):
        cmd.run()


def test_login_back_to_stdin(dry_ref):
    cmd = dry_ref.login("host").password("secret").password_stdin()
    is_dry_run_cmd(cmd, "docker login host")


def test_login_password_mode_does_not_connect_stdin(live_ref, fake_runner):
    live_ref.login("host").password("pw").run()
    live_ref.login("host").run()
    assert fake_runner.calls[0]["interactive"] is False
    assert fake_runner.calls[1]["interactive"] is True


@pytest.mark.parametrize(
    "make",
    [
        lambda d: d.remove_image(" "),
        lambda d: d.remove_container(""),
        lambda d: d.start(" "),
        lambda d: d.stop(""),
        lambda d: d.pull(""),
        lambda d: d.push("  "),
        lambda d: d.tag("", "new"),
        lambda d: d.tag("old", " "),
        lambda d: d.login(""),
    ],
)
def test_blank_identifiers_fail_at_run(dry_ref, make):
    cmd = make(dry_ref)  # constructing never raises
    with pytest.raises(MissingParameter):
        cmd.run()


def test_identifiers_are_trimmed(dry_ref):
    assert dry_ref.stop("  web ").args() == ("stop", "web")
    assert dry_ref.tag(" a:1 ", " a:2").args() == ("tag", "a:1", "a:2")
