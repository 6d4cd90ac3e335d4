"""GitHub API client for pull requests and commits."""

import logging
import os
import re
from typing import Any

import httpx

from automerge_action.errors import HostError
from automerge_action.github.base import BaseRepositoryHost
from automerge_action.models.commit import Commit
from automerge_action.models.pr import PullRequest

logger = logging.getLogger(__name__)


class GitHubClient(BaseRepositoryHost):
    """Client for interacting with GitHub API."""

    def __init__(
        self,
        token: str | None = None,
        base_url: str = "https://api.github.com",
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize GitHub client.

        Args:
            token: GitHub API token. If None, reads from GITHUB_TOKEN env var.
            base_url: API base URL (GitHub Enterprise uses a different one)
            timeout: Request timeout in seconds
            transport: Optional httpx transport, used by tests
        """
        self.token = token or os.getenv("GITHUB_TOKEN")
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport
        self.headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
            "User-Agent": "automerge-action",
        }
        if self.token:
            self.headers["Authorization"] = f"Bearer {self.token}"

    @staticmethod
    def parse_pr_url(pr_url: str) -> tuple[str, str, int]:
        """
        Parse PR URL to extract owner, repo, and PR number.

        Args:
            pr_url: GitHub PR URL (e.g., https://github.com/owner/repo/pull/123)

        Returns:
            Tuple of (owner, repo, pr_number)

        Raises:
            ValueError: If URL format is invalid
        """
        pattern = r"https?://[^/]+/([^/]+)/([^/]+)/pull/(\d+)"
        match = re.search(pattern, pr_url)
        if not match:
            raise ValueError(f"Invalid GitHub PR URL: {pr_url}")

        owner, repo, pr_number = match.groups()
        return owner, repo, int(pr_number)

    async def _request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> Any:
        async with httpx.AsyncClient(
            base_url=self.base_url,
            headers=self.headers,
            timeout=self.timeout,
            transport=self.transport,
        ) as client:
            try:
                response = await client.request(method, path, params=params, json=json)
            except httpx.HTTPError as e:
                raise HostError(f"{method} {path} failed: {e}") from e

            if response.is_error:
                try:
                    message = response.json().get("message", response.text)
                except ValueError:
                    message = response.text
                raise HostError(
                    f"{method} {path} returned {response.status_code}: {message}",
                    status_code=response.status_code,
                )
            return response.json()

    async def get_pull_request(self, owner: str, repo: str, number: int) -> PullRequest:
        """Fetch a pull request."""
        data = await self._request("GET", f"/repos/{owner}/{repo}/pulls/{number}")
        return PullRequest.model_validate(data)

    async def list_commits(
        self, owner: str, repo: str, number: int, per_page: int = 30
    ) -> list[Commit]:
        data = await self._request(
            "GET",
            f"/repos/{owner}/{repo}/pulls/{number}/commits",
            params={"per_page": per_page},
        )
        # The top-level committer here is a GitHub user; the git committer
        # (with its date) sits under "commit".
        return [
            Commit(
                sha=item["sha"],
                parents=item.get("parents", []),
                committer=(item.get("commit") or {}).get("committer"),
            )
            for item in data
        ]

    async def get_commit(self, owner: str, repo: str, sha: str) -> Commit:
        data = await self._request("GET", f"/repos/{owner}/{repo}/git/commits/{sha}")
        return Commit.model_validate(data)

    async def merge_pull_request(
        self, owner: str, repo: str, number: int, sha: str, merge_method: str = "merge"
    ) -> str:
        data = await self._request(
            "PUT",
            f"/repos/{owner}/{repo}/pulls/{number}/merge",
            json={"sha": sha, "merge_method": merge_method},
        )
        if not data.get("merged"):
            raise HostError(f"PR #{number} was not merged: {data.get('message', '')}")
        logger.debug("Merge response: %s", data.get("message"))
        return data["sha"]
