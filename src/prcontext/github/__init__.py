"""GitHub integration: open pull request lookup by head branch."""

from prcontext.github.pulls import (
    NO_DESCRIPTION,
    GitHubPullRequestSource,
    PullRequestSource,
    PullRequestSummary,
)

__all__ = [
    "NO_DESCRIPTION",
    "GitHubPullRequestSource",
    "PullRequestSource",
    "PullRequestSummary",
]
