"""Base version control interface."""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass
class ExecResult:
    """Result of running a version control command."""

    stdout: str
    stderr: str
    return_code: int
    duration_sec: float = 0.0


class BaseVersionControl(ABC):
    """Base class for version control backends operating on a working clone."""

    @abstractmethod
    async def clone(self, url: str, directory: str, ref: str, depth: int) -> None:
        """
        Shallow clone a single branch.

        Args:
            url: Remote URL
            directory: Target directory for the clone
            ref: Branch to check out
            depth: Number of commits of history to fetch
        """
        pass

    @abstractmethod
    async def fetch(self, directory: str, ref: str) -> None:
        """
        Fetch the full history of a remote branch into an existing clone.

        Args:
            directory: Clone directory
            ref: Remote branch name
        """
        pass

    @abstractmethod
    async def fetch_since(self, directory: str, ref: str, since: str) -> None:
        """
        Fetch a remote branch, limited to commits no older than a date.

        Args:
            directory: Clone directory
            ref: Remote branch name
            since: ISO-8601 date of the oldest commit to fetch
        """
        pass

    @abstractmethod
    async def head(self, directory: str) -> str:
        """Return the SHA of the checked-out commit."""
        pass

    @abstractmethod
    async def sha(self, directory: str, ref: str) -> str:
        """Return the tip SHA of a fetched remote branch."""
        pass

    @abstractmethod
    async def rebase(self, directory: str, onto: str) -> None:
        """
        Rebase the current branch onto a commit.

        Args:
            directory: Clone directory
            onto: Commit SHA to rebase onto

        Raises:
            GitError: On conflicts or any other git failure
        """
        pass

    @abstractmethod
    async def push(self, directory: str, force: bool, ref: str) -> None:
        """
        Push a local branch to the remote.

        Args:
            directory: Clone directory
            force: Overwrite the remote branch even if not a fast-forward
            ref: Branch to push
        """
        pass
