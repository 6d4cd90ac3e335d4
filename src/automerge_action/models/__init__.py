"""Data models for automerge-action."""

from automerge_action.models.action import LABEL_ACTIONS, Action
from automerge_action.models.commit import Commit, CommitActor, CommitParent
from automerge_action.models.pr import Branch, Label, Owner, PullRequest, Repository
from automerge_action.models.result import SkipReason, UpdateResult, UpdateStatus

__all__ = [
    "Action",
    "Branch",
    "Commit",
    "CommitActor",
    "CommitParent",
    "LABEL_ACTIONS",
    "Label",
    "Owner",
    "PullRequest",
    "Repository",
    "SkipReason",
    "UpdateResult",
    "UpdateStatus",
]
