"""Version control backends."""

from automerge_action.git.base import BaseVersionControl, ExecResult
from automerge_action.git.local import LocalGit

__all__ = ["BaseVersionControl", "ExecResult", "LocalGit"]
