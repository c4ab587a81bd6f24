"""Data models for the pull request context report."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from pydantic import BaseModel, Field

from prcontext.git.remote import RemoteIdentity
from prcontext.github.pulls import PullRequestSummary


def diff_error_placeholder(branch: str) -> str:
    return f"Error: Could not generate diff for {branch}"


class DiffResult(BaseModel):
    """Changed files and unified diff of one branch against the base."""

    changed_files: list[str] = Field(default_factory=list)
    diff: str = ""
    error: bool = False

    @classmethod
    def failed(cls, branch: str) -> DiffResult:
        """Result used when the comparison could not be computed."""
        return cls(changed_files=[], diff=diff_error_placeholder(branch), error=True)


class ReportSection(BaseModel):
    """One branch's worth of report content."""

    branch: str
    pull_request: PullRequestSummary | None = None
    diff: DiffResult = Field(default_factory=DiffResult)

    @property
    def has_pull_request(self) -> bool:
        return self.pull_request is not None


class Report(BaseModel):
    """A full report: header fields plus one section per requested branch."""

    generated_at: datetime
    owner: str
    repository: str
    base_branch: str
    branches: list[str] = Field(default_factory=list)
    sections: list[ReportSection] = Field(default_factory=list)

    @classmethod
    def for_remote(cls, remote: RemoteIdentity, base_branch: str, branches: list[str],
                   generated_at: datetime) -> Report:
        return cls(
            generated_at=generated_at,
            owner=remote.owner,
            repository=remote.name,
            base_branch=base_branch,
            branches=list(branches),
        )

    @property
    def slug(self) -> str:
        return f"{self.owner}/{self.repository}"


class ReportResult(BaseModel):
    """What a finished run hands back to the caller."""

    path: Path
    size_bytes: int
    report: Report

    @property
    def human_size(self) -> str:
        if self.size_bytes < 1024:
            return f"{self.size_bytes}B"
        size = float(self.size_bytes)
        for unit in ("K", "M"):
            size /= 1024
            if size < 1024:
                return f"{size:.1f}{unit}"
        return f"{size / 1024:.1f}G"
