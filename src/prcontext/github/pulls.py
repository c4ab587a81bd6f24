"""Pull request lookup against the GitHub REST API."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

import requests
from pydantic import BaseModel, ValidationError

from prcontext.exceptions import ApiError

logger = logging.getLogger("prcontext.github")

NO_DESCRIPTION = "No description provided"


class PullRequestSummary(BaseModel):
    """The fields of an open pull request that go into a report."""

    number: int
    title: str
    author: str
    state: str
    url: str
    body: str = NO_DESCRIPTION

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> PullRequestSummary:
        """Build a summary from one element of ``GET /repos/{o}/{r}/pulls``."""
        user = payload.get("user") or {}
        body = payload.get("body")
        return cls(
            number=payload["number"],
            title=payload.get("title") or "",
            author=user.get("login") or "",
            state=payload.get("state") or "",
            url=payload.get("html_url") or "",
            body=body if body and body.strip() else NO_DESCRIPTION,
        )


class PullRequestSource(ABC):
    """Abstract source of pull request metadata."""

    @abstractmethod
    def find_open_pull_request(self, owner: str, repo: str, branch: str) -> PullRequestSummary | None:
        """Return the open pull request whose head is ``owner:branch``, or None."""
        ...


def make_headers(token: str) -> dict[str, str]:
    return {
        "Authorization": f"token {token}",
        "Accept": "application/vnd.github.v3+json",
    }


class GitHubPullRequestSource(PullRequestSource):
    """PullRequestSource for github.com or a GitHub Enterprise API root.

    When several open pull requests share a head, the first entry in API
    response order wins. GitHub returns newest first by default but does not
    document that ordering as stable, so no stricter recency is assumed.
    """

    def __init__(
        self,
        token: str,
        api_url: str = "https://api.github.com",
        timeout: float = 30.0,
        session: requests.Session | None = None,
    ) -> None:
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update(make_headers(token))

    def find_open_pull_request(self, owner: str, repo: str, branch: str) -> PullRequestSummary | None:
        url = f"{self.api_url}/repos/{owner}/{repo}/pulls"
        params = {"head": f"{owner}:{branch}", "state": "open"}

        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise ApiError(f"Request for pull requests of {owner}/{repo} failed: {e}") from e

        if response.status_code != 200:
            raise ApiError(
                f"GitHub API returned {response.status_code} for {owner}/{repo} "
                f"branch '{branch}'",
                status_code=response.status_code,
            )

        try:
            pulls = response.json()
        except ValueError as e:
            raise ApiError(f"GitHub API returned invalid JSON for {owner}/{repo}: {e}") from e

        if not isinstance(pulls, list):
            raise ApiError(f"Unexpected GitHub API payload for {owner}/{repo}: expected a list")
        if not pulls:
            logger.debug("No open pull request for %s:%s", owner, branch)
            return None

        try:
            return PullRequestSummary.from_api(pulls[0])
        except (KeyError, TypeError, AttributeError, ValidationError) as e:
            raise ApiError(f"Malformed pull request in GitHub API response: {e}") from e
