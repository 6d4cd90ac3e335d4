"""Base repository host interface."""

from abc import ABC, abstractmethod

from automerge_action.models.commit import Commit


class BaseRepositoryHost(ABC):
    """Base class for repository hosting APIs."""

    @abstractmethod
    async def list_commits(
        self, owner: str, repo: str, number: int, per_page: int = 30
    ) -> list[Commit]:
        """
        List the first page of commits on a pull request, oldest first.

        Args:
            owner: Repository owner
            repo: Repository name
            number: PR number
            per_page: Page size

        Returns:
            Commits with their parents
        """
        pass

    @abstractmethod
    async def get_commit(self, owner: str, repo: str, sha: str) -> Commit:
        """
        Fetch a single commit object.

        Args:
            owner: Repository owner
            repo: Repository name
            sha: Commit SHA

        Returns:
            Commit including parents and committer date
        """
        pass

    @abstractmethod
    async def merge_pull_request(
        self, owner: str, repo: str, number: int, sha: str, merge_method: str = "merge"
    ) -> str:
        """
        Merge a pull request, provided its head still points at ``sha``.

        Args:
            owner: Repository owner
            repo: Repository name
            number: PR number
            sha: Expected head SHA
            merge_method: merge, squash or rebase

        Returns:
            SHA of the merge commit
        """
        pass
