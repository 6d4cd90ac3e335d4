"""Shared fixtures: pull request factory and in-memory fakes for git and GitHub."""
from __future__ import annotations

from typing import Any

import pytest

from automerge_action.errors import GitError, HostError
from automerge_action.git.base import BaseVersionControl
from automerge_action.github.base import BaseRepositoryHost
from automerge_action.models.commit import Commit
from automerge_action.models.pr import PullRequest

HEAD_SHA = "a" * 40
BASE_SHA = "b" * 40
PARENT_SHA = "c" * 40


def make_pr_data(**overrides: Any) -> dict[str, Any]:
    """GitHub-shaped pull request payload; top-level keys can be overridden."""
    repo = {
        "full_name": "octo/widgets",
        "name": "widgets",
        "owner": {"login": "octo"},
        "clone_url": "https://github.com/octo/widgets.git",
    }
    data: dict[str, Any] = {
        "number": 7,
        "title": "Add sprockets",
        "merged": False,
        "commits": 2,
        "head": {"ref": "feature", "sha": HEAD_SHA, "repo": dict(repo)},
        "base": {"ref": "main", "sha": PARENT_SHA, "repo": dict(repo)},
        "labels": [{"name": "autorebase"}],
        "state": "open",
    }
    data.update(overrides)
    return data


def make_pr(labels: list[str] | None = None, **overrides: Any) -> PullRequest:
    if labels is not None:
        overrides["labels"] = [{"name": name} for name in labels]
    return PullRequest.model_validate(make_pr_data(**overrides))


def make_commit(sha: str, date: str | None = None, parents: list[str] | None = None) -> Commit:
    return Commit(
        sha=sha,
        parents=[{"sha": parent} for parent in parents or []],
        committer={"name": "Octo", "email": "octo@example.com", "date": date} if date else None,
    )


class FakeGit(BaseVersionControl):
    """Records every call; head/base tips are configurable."""

    def __init__(self, head_sha: str = HEAD_SHA, base_sha: str = BASE_SHA, fail_on: str | None = None):
        self.head_sha = head_sha
        self.base_sha = base_sha
        self.fail_on = fail_on
        self.calls: list[tuple] = []

    def _record(self, name: str, *args: Any) -> None:
        self.calls.append((name, *args))
        if name == self.fail_on:
            raise GitError([name], 1, f"{name} failed")

    @property
    def call_names(self) -> list[str]:
        return [call[0] for call in self.calls]

    async def clone(self, url: str, directory: str, ref: str, depth: int) -> None:
        self._record("clone", url, directory, ref, depth)

    async def fetch(self, directory: str, ref: str) -> None:
        self._record("fetch", directory, ref)

    async def fetch_since(self, directory: str, ref: str, since: str) -> None:
        self._record("fetch_since", directory, ref, since)

    async def head(self, directory: str) -> str:
        self._record("head", directory)
        return self.head_sha

    async def sha(self, directory: str, ref: str) -> str:
        self._record("sha", directory, ref)
        return self.base_sha

    async def rebase(self, directory: str, onto: str) -> None:
        self._record("rebase", directory, onto)

    async def push(self, directory: str, force: bool, ref: str) -> None:
        self._record("push", directory, force, ref)


class FakeHost(BaseRepositoryHost):
    """Serves commits from a dict keyed by SHA."""

    def __init__(self, pr_commits: list[Commit] | None = None, commits: list[Commit] | None = None):
        self.pr_commits = pr_commits or []
        self.commits = {commit.sha: commit for commit in commits or []}
        self.calls: list[tuple] = []
        self.merged: list[tuple] = []

    async def list_commits(self, owner: str, repo: str, number: int, per_page: int = 30) -> list[Commit]:
        self.calls.append(("list_commits", owner, repo, number, per_page))
        return self.pr_commits[:per_page]

    async def get_commit(self, owner: str, repo: str, sha: str) -> Commit:
        self.calls.append(("get_commit", owner, repo, sha))
        if sha not in self.commits:
            raise HostError(f"commit {sha} not found", status_code=404)
        return self.commits[sha]

    async def merge_pull_request(
        self, owner: str, repo: str, number: int, sha: str, merge_method: str = "merge"
    ) -> str:
        self.calls.append(("merge_pull_request", owner, repo, number, sha, merge_method))
        self.merged.append((number, sha, merge_method))
        return "m" * 40


@pytest.fixture
def git() -> FakeGit:
    return FakeGit()


@pytest.fixture
def host() -> FakeHost:
    """PR whose first commit has a single parent PARENT_SHA."""
    return FakeHost(
        pr_commits=[make_commit("f" * 40, "2024-02-01T00:00:00Z", parents=[PARENT_SHA])],
        commits=[make_commit(PARENT_SHA, "2024-01-15T12:00:00Z", parents=["d" * 40])],
    )
