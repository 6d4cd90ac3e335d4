"""Exceptions raised by automerge-action.

Benign "nothing to do" outcomes are not exceptions; they are returned as
skipped :class:`~automerge_action.models.result.UpdateResult` values.
"""


class AutomergeError(Exception):
    """Base class for all automerge-action errors."""


class ConfigurationError(AutomergeError):
    """The PR or the caller is misconfigured. Retrying will not help."""


class AmbiguousLabelsError(ConfigurationError):
    """More than one action label is attached to the PR."""

    def __init__(self, first: str, second: str):
        self.labels = (first, second)
        super().__init__(f"ambiguous labels: {first} + {second}")


class InvalidArgumentsError(ConfigurationError):
    """A required collaborator (API client, directory, remote URL) is missing."""


class CollaboratorError(AutomergeError):
    """Failure reported by git or by the repository host."""


class GitError(CollaboratorError):
    """A git command exited with a non-zero status."""

    def __init__(self, command: list[str], return_code: int, stderr: str = ""):
        self.command = command
        self.return_code = return_code
        self.stderr = stderr
        message = f"git {command[0] if command else ''} failed with exit code {return_code}"
        if stderr:
            message = f"{message}: {stderr.strip()}"
        super().__init__(message)


class HostError(CollaboratorError):
    """The repository host API returned an error."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)
