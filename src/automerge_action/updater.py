"""Decide what to do with a pull request and do it."""

from automerge_action.errors import ConfigurationError
from automerge_action.git.base import BaseVersionControl
from automerge_action.git.local import LocalGit
from automerge_action.github.base import BaseRepositoryHost
from automerge_action.guard import check_preconditions
from automerge_action.merge import Merger, MergeStrategy
from automerge_action.models.action import Action
from automerge_action.models.pr import PullRequest
from automerge_action.models.result import UpdateResult
from automerge_action.rebase import Rebaser, list_base_commits


class Updater:
    """Merges or rebases a pull request depending on its labels."""

    def __init__(
        self,
        host: BaseRepositoryHost | None,
        git: BaseVersionControl,
        merge_strategy: MergeStrategy | None = None,
    ):
        """
        Initialize updater.

        Args:
            host: Repository host API used to look up commits
            git: Version control backend operating on the working clone
            merge_strategy: Strategy for automerge, None leaves merging unsupported
        """
        self.host = host
        self.git = git
        self.merger = Merger(git, merge_strategy)
        self.rebaser = Rebaser(git)

    async def update(
        self, directory: str | None, url: str | None, pull_request: PullRequest
    ) -> UpdateResult:
        """
        Process a single PR.

        Args:
            directory: Empty directory the working clone is created in
            url: Remote URL of the repository
            pull_request: PR to process

        Returns:
            ok when the action ran, skipped when there was nothing to do

        Raises:
            ConfigurationError: Ambiguous labels or missing arguments
            CollaboratorError: git or the repository host failed
        """
        action, skipped = check_preconditions(pull_request, self.host, directory, url)
        if skipped is not None:
            return skipped

        if action is Action.MERGE:
            return await self.merger.merge(directory, url, pull_request)
        elif action is Action.REBASE:
            base_commits = await list_base_commits(self.host, pull_request)
            return await self.rebaser.rebase(directory, url, pull_request, base_commits)
        else:
            raise ConfigurationError(f"invalid action: {action}")


async def update(
    host_client: BaseRepositoryHost | None,
    directory: str | None,
    url: str | None,
    pull_request: PullRequest,
    git: BaseVersionControl | None = None,
    merge_strategy: MergeStrategy | None = None,
) -> UpdateResult:
    """Merge or rebase ``pull_request`` according to its labels."""
    updater = Updater(host_client, git or LocalGit(), merge_strategy)
    return await updater.update(directory, url, pull_request)
