"""The autorebase action.

Only as much history as the rebase needs is transferred: the head branch is
cloned with one commit more than the PR has (exposing the commit the PR was
branched from), and the base branch is fetched back to the date of the PR's
base commits rather than in full.
"""

import logging
from collections.abc import Iterable

from automerge_action.errors import HostError
from automerge_action.git.base import BaseVersionControl
from automerge_action.github.base import BaseRepositoryHost
from automerge_action.models.action import Action
from automerge_action.models.commit import Commit
from automerge_action.models.pr import PullRequest
from automerge_action.models.result import SkipReason, UpdateResult

logger = logging.getLogger(__name__)


def earliest_date(commits: Iterable[Commit] | None) -> str | None:
    """
    Find the oldest committer date among commits.

    ISO-8601 timestamps order chronologically when compared as strings.

    Args:
        commits: Commits to inspect, may be None

    Returns:
        The earliest committer date, or None if there is none
    """
    date = None
    for commit in commits or []:
        commit_date = commit.committer_date
        if commit_date is None:
            continue
        if date is None or commit_date < date:
            date = commit_date
    return date


async def list_base_commits(host: BaseRepositoryHost, pull_request: PullRequest) -> list[Commit]:
    """
    Fetch the parents of the earliest commit on a PR.

    Raises:
        HostError: If the PR has no commits
    """
    repo = pull_request.head.repo
    owner = repo.owner.login

    logger.debug("Listing commits...")
    commits = await host.list_commits(owner, repo.name, pull_request.number, per_page=1)
    if not commits:
        raise HostError(f"PR #{pull_request.number} has no commits")
    tail_commit = commits[0]
    logger.debug("Tail commit: %s", tail_commit.sha)

    logger.debug("Getting base commits...")
    base_commits = []
    for parent in tail_commit.parents:
        base_commits.append(await host.get_commit(owner, repo.name, parent.sha))

    logger.debug("Base commits: %s", [commit.sha for commit in base_commits])
    return base_commits


class Rebaser:
    """Rebases a PR branch onto the tip of its base branch and force pushes it."""

    def __init__(self, git: BaseVersionControl):
        self.git = git

    async def rebase(
        self,
        directory: str,
        url: str,
        pull_request: PullRequest,
        base_commits: list[Commit],
    ) -> UpdateResult:
        """
        Rebase the PR.

        Args:
            directory: Empty directory to clone into
            url: Remote URL
            pull_request: PR to rebase
            base_commits: Parents of the PR's earliest commit

        Returns:
            ok after a push, or a skip when the head moved or nothing changed
        """
        logger.info("Rebasing PR #%s %s", pull_request.number, pull_request.title)

        head_ref = pull_request.head.ref
        base_ref = pull_request.base.ref

        logger.debug("Cloning into %s (%s)", directory, head_ref)
        await self.git.clone(url, directory, head_ref, pull_request.commits + 1)

        logger.debug("Fetching %s ...", base_ref)
        since = earliest_date(base_commits)
        if since is None:
            await self.git.fetch(directory, base_ref)
        else:
            await self.git.fetch_since(directory, base_ref, since)

        head = await self.git.head(directory)
        if head != pull_request.head.sha:
            logger.info("HEAD changed to %s, skipping", head)
            return UpdateResult.skip(SkipReason.HEAD_CHANGED, Action.REBASE)

        logger.info("%s HEAD: %s (%s commits)", head_ref, head, pull_request.commits)

        onto = await self.git.sha(directory, base_ref)

        if len(base_commits) == 1 and base_commits[0].sha == onto:
            logger.info("Already up to date: %s -> %s %s", head_ref, base_ref, onto)
            return UpdateResult.skip(SkipReason.UP_TO_DATE, Action.REBASE)

        logger.info("Rebasing onto %s %s", base_ref, onto)
        await self.git.rebase(directory, onto)

        logger.debug("Pushing changes...")
        await self.git.push(directory, True, head_ref)
        return UpdateResult.ok(Action.REBASE)
