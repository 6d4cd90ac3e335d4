"""Runtime settings."""

from typing import Literal

from pydantic import BaseModel, Field

from automerge_action.git.local import DEFAULT_USER_EMAIL, DEFAULT_USER_NAME

MergeMethod = Literal["merge", "squash", "rebase"]


class Settings(BaseModel):
    """Settings for a single automerge-action run."""

    github_token: str | None = Field(default=None, description="GitHub API token")
    api_url: str = Field(default="https://api.github.com", description="GitHub API base URL")
    server_url: str = Field(default="https://github.com", description="GitHub web URL")
    timeout_sec: float = Field(default=30.0, description="HTTP request timeout")

    # Merging is opt-in: without a method, automerge only prepares the workspace
    merge_method: MergeMethod | None = Field(
        default=None, description="Merge method used for automerge (merge, squash, rebase)"
    )

    git_user_name: str = Field(default=DEFAULT_USER_NAME, description="Committer name for rebases")
    git_user_email: str = Field(default=DEFAULT_USER_EMAIL, description="Committer email for rebases")

    log_level: str = Field(default="INFO", description="Logging level")

    def clone_url(self, full_name: str) -> str:
        """
        Build the HTTPS remote URL for a repository.

        Args:
            full_name: Repository full name (owner/name)

        Returns:
            Clone URL, authenticated with the token when one is configured
        """
        host = self.server_url.split("://", 1)[-1].rstrip("/")
        if self.github_token:
            return f"https://x-access-token:{self.github_token}@{host}/{full_name}.git"
        return f"https://{host}/{full_name}.git"
