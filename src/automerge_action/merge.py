"""The automerge action."""

import logging
from abc import ABC, abstractmethod

from automerge_action.git.base import BaseVersionControl
from automerge_action.github.base import BaseRepositoryHost
from automerge_action.models.action import Action
from automerge_action.models.pr import PullRequest
from automerge_action.models.result import UpdateResult

logger = logging.getLogger(__name__)


class MergeStrategy(ABC):
    """How a prepared PR workspace gets merged."""

    @abstractmethod
    async def apply(self, directory: str, pull_request: PullRequest) -> None:
        """
        Merge the PR.

        Args:
            directory: Clone with the head branch checked out and the base fetched
            pull_request: PR to merge
        """
        pass


class ApiMergeStrategy(MergeStrategy):
    """Merge through the repository host's merge endpoint."""

    def __init__(self, host: BaseRepositoryHost, merge_method: str = "merge"):
        self.host = host
        self.merge_method = merge_method

    async def apply(self, directory: str, pull_request: PullRequest) -> None:
        repo = pull_request.base.repo
        logger.info(
            "Merging PR #%s %s (%s)",
            pull_request.number,
            pull_request.title,
            self.merge_method,
        )
        # Pinning the head SHA makes the host reject the merge if the branch moved
        sha = await self.host.merge_pull_request(
            owner=repo.owner.login,
            repo=repo.name,
            number=pull_request.number,
            sha=pull_request.head.sha,
            merge_method=self.merge_method,
        )
        logger.info("Merged PR #%s as %s", pull_request.number, sha)


class Merger:
    """Prepares a workspace for a PR and merges it with a strategy."""

    def __init__(self, git: BaseVersionControl, strategy: MergeStrategy | None = None):
        self.git = git
        self.strategy = strategy

    async def merge(self, directory: str, url: str, pull_request: PullRequest) -> UpdateResult:
        """
        Clone the head branch, fetch the base branch and merge.

        Raises:
            NotImplementedError: If no merge strategy was configured
        """
        head_ref = pull_request.head.ref
        base_ref = pull_request.base.ref

        logger.debug("Cloning into %s (%s)", directory, head_ref)
        await self.git.clone(url, directory, head_ref, 1)
        await self.git.fetch(directory, base_ref)

        if self.strategy is None:
            raise NotImplementedError(
                "automerge requires a merge strategy; set a merge method to enable it"
            )

        await self.strategy.apply(directory, pull_request)
        return UpdateResult.ok(Action.MERGE)
