"""Tests for the command line interface."""
from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from conftest import FakeGit, FakeHost, make_commit, make_pr_data, PARENT_SHA

from automerge_action import __version__
from automerge_action.cli import main
from automerge_action.cli.main import EXIT_CONFIGURATION, EXIT_FAILURE, EXIT_NEUTRAL, EXIT_OK, app
from automerge_action.git.local import DEFAULT_USER_EMAIL, DEFAULT_USER_NAME

runner = CliRunner()


@pytest.fixture
def fake_git(monkeypatch) -> FakeGit:
    git = FakeGit()

    def build(**kwargs):
        git.options = kwargs
        return git

    monkeypatch.setattr(main, "LocalGit", build)
    return git


@pytest.fixture
def fake_host(monkeypatch) -> FakeHost:
    host = FakeHost(
        pr_commits=[make_commit("f" * 40, "2024-02-01T00:00:00Z", parents=[PARENT_SHA])],
        commits=[make_commit(PARENT_SHA, "2024-01-15T12:00:00Z")],
    )
    monkeypatch.setattr(main, "GitHubClient", lambda **kwargs: host)
    return host


def _event(tmp_path: Path, **pr_overrides) -> Path:
    path = tmp_path / "event.json"
    path.write_text(json.dumps({"action": "labeled", "pull_request": make_pr_data(**pr_overrides)}))
    return path


def _run(*args: str):
    return runner.invoke(app, list(args), env={"GITHUB_TOKEN": "", "MERGE_METHOD": ""})


def test_version() -> None:
    result = _run("version")

    assert result.exit_code == 0
    assert __version__ in result.stdout


def test_merged_pr_exits_neutral(tmp_path: Path, fake_git: FakeGit, fake_host: FakeHost) -> None:
    result = _run("run", "--event-path", str(_event(tmp_path, merged=True)))

    assert result.exit_code == EXIT_NEUTRAL
    assert fake_git.calls == []


def test_event_without_pull_request_exits_neutral(tmp_path: Path) -> None:
    path = tmp_path / "event.json"
    path.write_text(json.dumps({"action": "push"}))

    result = _run("run", "--event-path", str(path))

    assert result.exit_code == EXIT_NEUTRAL


def test_unreadable_event_is_a_configuration_error(tmp_path: Path) -> None:
    path = tmp_path / "event.json"
    path.write_text("{not json")

    result = _run("run", "--event-path", str(path))

    assert result.exit_code == EXIT_CONFIGURATION


def test_ambiguous_labels_exit_with_configuration_error(
    tmp_path: Path, fake_git: FakeGit, fake_host: FakeHost
) -> None:
    event = _event(tmp_path, labels=[{"name": "automerge"}, {"name": "autorebase"}])

    result = _run("run", "--event-path", str(event))

    assert result.exit_code == EXIT_CONFIGURATION
    assert "ambiguous labels" in result.stdout


def test_invalid_merge_method(tmp_path: Path) -> None:
    result = _run("run", "--event-path", str(_event(tmp_path)), "--merge-method", "octopus")

    assert result.exit_code == EXIT_CONFIGURATION


def test_rebase_succeeds(tmp_path: Path, fake_git: FakeGit, fake_host: FakeHost) -> None:
    work = tmp_path / "work"

    result = _run("run", "--event-path", str(_event(tmp_path)), "--dir", str(work))

    assert result.exit_code == EXIT_OK
    assert fake_git.calls[0] == ("clone", "https://github.com/octo/widgets.git", str(work), "feature", 3)
    assert fake_git.call_names[-2:] == ["rebase", "push"]


def test_rebase_in_temporary_directory(tmp_path: Path, fake_git: FakeGit, fake_host: FakeHost) -> None:
    result = _run("run", "--event-path", str(_event(tmp_path)), "--url", "file:///srv/widgets.git")

    assert result.exit_code == EXIT_OK
    clone = fake_git.calls[0]
    assert clone[1] == "file:///srv/widgets.git"
    assert clone[2].endswith("repo")


def test_git_failure_exits_with_failure(tmp_path: Path, fake_host: FakeHost, monkeypatch) -> None:
    git = FakeGit(fail_on="push")
    monkeypatch.setattr(main, "LocalGit", lambda **kwargs: git)

    result = _run("run", "--event-path", str(_event(tmp_path)), "--dir", str(tmp_path / "work"))

    assert result.exit_code == EXIT_FAILURE


def test_automerge_without_merge_method_fails(tmp_path: Path, fake_git: FakeGit, fake_host: FakeHost) -> None:
    event = _event(tmp_path, labels=[{"name": "automerge"}])

    result = _run("run", "--event-path", str(event), "--dir", str(tmp_path / "work"))

    assert result.exit_code == EXIT_FAILURE
    assert fake_host.merged == []


def test_automerge_with_merge_method(tmp_path: Path, fake_git: FakeGit, fake_host: FakeHost) -> None:
    event = _event(tmp_path, labels=[{"name": "automerge"}])

    result = _run(
        "run", "--event-path", str(event), "--dir", str(tmp_path / "work"), "--merge-method", "squash"
    )

    assert result.exit_code == EXIT_OK
    assert fake_host.merged == [(7, "a" * 40, "squash")]


def test_update_rejects_bad_url() -> None:
    result = _run("update", "--pr-url", "https://example.com/not-a-pr")

    assert result.exit_code == EXIT_CONFIGURATION
    assert "Invalid GitHub PR URL" in result.stdout


def test_rebase_uses_bot_identity_by_default(tmp_path: Path, fake_git: FakeGit, fake_host: FakeHost) -> None:
    result = _run("run", "--event-path", str(_event(tmp_path)), "--dir", str(tmp_path / "work"))

    assert result.exit_code == EXIT_OK
    assert fake_git.options == {"user_name": DEFAULT_USER_NAME, "user_email": DEFAULT_USER_EMAIL}


def test_git_identity_can_be_overridden(tmp_path: Path, fake_git: FakeGit, fake_host: FakeHost) -> None:
    result = _run(
        "run",
        "--event-path",
        str(_event(tmp_path)),
        "--dir",
        str(tmp_path / "work"),
        "--git-user-name",
        "Release Bot",
        "--git-user-email",
        "release@example.com",
    )

    assert result.exit_code == EXIT_OK
    assert fake_git.options == {"user_name": "Release Bot", "user_email": "release@example.com"}


def test_server_url_sets_clone_remote(tmp_path: Path, fake_git: FakeGit, fake_host: FakeHost) -> None:
    result = _run(
        "run",
        "--event-path",
        str(_event(tmp_path)),
        "--dir",
        str(tmp_path / "work"),
        "--server-url",
        "https://ghe.example.com",
    )

    assert result.exit_code == EXIT_OK
    assert fake_git.calls[0][1] == "https://ghe.example.com/octo/widgets.git"
