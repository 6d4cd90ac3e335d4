"""Outcome of processing a single pull request."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from automerge_action.models.action import Action


class UpdateStatus(str, Enum):
    """Terminal status of an update."""

    OK = "ok"
    SKIPPED = "skipped"


class SkipReason(str, Enum):
    """Why nothing was done. Skips are successful no-ops, not failures."""

    ALREADY_MERGED = "already merged"
    EXTERNAL_REPOSITORY = "external repository"
    NO_MATCHING_LABEL = "no matching label"
    HEAD_CHANGED = "HEAD changed"
    UP_TO_DATE = "already up to date"


class UpdateResult(BaseModel):
    """Result of an update: either the action ran, or it was skipped."""

    model_config = ConfigDict(frozen=True)

    status: UpdateStatus = Field(..., description="ok or skipped")
    action: Action = Field(default=Action.NONE, description="Resolved action")
    reason: SkipReason | None = Field(default=None, description="Skip reason")

    @classmethod
    def ok(cls, action: Action) -> "UpdateResult":
        return cls(status=UpdateStatus.OK, action=action)

    @classmethod
    def skip(cls, reason: SkipReason, action: Action = Action.NONE) -> "UpdateResult":
        return cls(status=UpdateStatus.SKIPPED, action=action, reason=reason)

    @property
    def skipped(self) -> bool:
        return self.status is UpdateStatus.SKIPPED
