"""Pull request models."""

from pydantic import BaseModel, ConfigDict, Field


class Owner(BaseModel):
    """Owner of a GitHub repository."""

    model_config = ConfigDict(frozen=True)

    login: str = Field(..., description="User or organization login")


class Repository(BaseModel):
    """GitHub repository a branch lives in."""

    model_config = ConfigDict(frozen=True)

    full_name: str = Field(..., description="owner/name")
    name: str = Field(..., description="Repository name")
    owner: Owner = Field(..., description="Repository owner")
    clone_url: str | None = Field(default=None, description="HTTPS clone URL")


class Branch(BaseModel):
    """One side (head or base) of a pull request."""

    model_config = ConfigDict(frozen=True)

    ref: str = Field(..., description="Branch name")
    sha: str = Field(..., description="Tip commit SHA when the PR was captured")
    repo: Repository | None = Field(
        default=None, description="Repository, None when a fork was deleted"
    )


class Label(BaseModel):
    """Label attached to a pull request."""

    model_config = ConfigDict(frozen=True)

    name: str


class PullRequest(BaseModel):
    """A GitHub Pull Request as delivered by the API or an event payload."""

    model_config = ConfigDict(frozen=True)

    number: int = Field(..., description="PR number")
    title: str = Field(default="", description="PR title")
    merged: bool = Field(default=False, description="Has the PR been merged?")
    commits: int = Field(default=0, description="Number of commits on the PR")

    head: Branch = Field(..., description="PR source branch")
    base: Branch = Field(..., description="PR target branch (e.g., main)")

    labels: list[Label] = Field(default_factory=list, description="Labels in order")

    @property
    def is_external(self) -> bool:
        """True when the head branch lives in another repository (a fork)."""
        if self.head.repo is None or self.base.repo is None:
            return True
        return self.head.repo.full_name != self.base.repo.full_name
