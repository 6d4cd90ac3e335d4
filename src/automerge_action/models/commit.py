"""Commit models returned by the repository host."""

from pydantic import BaseModel, ConfigDict, Field


class CommitActor(BaseModel):
    """Committer (or author) of a commit."""

    model_config = ConfigDict(frozen=True)

    name: str | None = None
    email: str | None = None
    date: str | None = Field(default=None, description="ISO-8601 timestamp")


class CommitParent(BaseModel):
    """Reference to a parent commit."""

    model_config = ConfigDict(frozen=True)

    sha: str


class Commit(BaseModel):
    """A git commit object."""

    model_config = ConfigDict(frozen=True)

    sha: str = Field(..., description="Commit SHA")
    parents: list[CommitParent] = Field(default_factory=list, description="Parent commits")
    committer: CommitActor | None = Field(default=None, description="Committer details")

    @property
    def committer_date(self) -> str | None:
        return self.committer.date if self.committer else None
