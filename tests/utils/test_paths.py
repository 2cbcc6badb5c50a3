import os

from dockctl.utils.paths import abs_path, is_dir, rel_path, to_slash


def test_is_dir(tmp_path):
    f = tmp_path / "Dockerfile"
    f.write_text("FROM scratch\n")
    assert is_dir(tmp_path)
    assert not is_dir(f)
    assert not is_dir("")
    assert not is_dir(tmp_path / "missing")


def test_rel_path(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "ctx" / "docker").mkdir(parents=True)
    assert rel_path("./ctx", "./ctx/Dockerfile") == "Dockerfile"
    assert rel_path("ctx", "ctx/docker/Dockerfile.prod") == os.path.join("docker", "Dockerfile.prod")
    assert rel_path("ctx", "other/Dockerfile") == os.path.join("..", "other", "Dockerfile")


def test_abs_path(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert abs_path("data") == os.path.join(os.getcwd(), "data")


def test_to_slash(monkeypatch):
    assert to_slash("/app/data") == "/app/data"
    monkeypatch.setattr(os, "sep", "\\")
    assert to_slash("C:\\app\\data") == "C:/app/data"
