"""Shared test fixtures for pr-context."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

import pytest

from prcontext.config import RunConfig
from prcontext.exceptions import ApiError, DiffError, SyncError
from prcontext.git.client import VersionControlClient
from prcontext.github.pulls import PullRequestSource, PullRequestSummary

FIXED_NOW = datetime(2024, 5, 1, 12, 30, 45, tzinfo=timezone.utc)

SAMPLE_DIFF = """\
diff --git a/src/x.py b/src/x.py
--- a/src/x.py
+++ b/src/x.py
@@ -1 +1 @@
-x = 1
+x = 2
"""


def make_pr_payload(**overrides) -> dict:
    payload = {
        "number": 42,
        "title": "Add X",
        "user": {"login": "alice"},
        "state": "open",
        "html_url": "https://github.com/acme/widgets/pull/42",
        "body": "Adds the X feature.",
    }
    payload.update(overrides)
    return payload


class FakeVersionControl(VersionControlClient):
    """In-memory VersionControlClient that records every call."""

    def __init__(
        self,
        remote_url: str = "git@github.com:acme/widgets.git",
        diffs: dict[str, tuple[list[str], str]] | None = None,
        failing_diffs: set[str] | None = None,
        sync_error: str | None = None,
        repository: bool = True,
    ) -> None:
        self.remote_url = remote_url
        self.diffs = diffs or {}
        self.failing_diffs = failing_diffs or set()
        self.sync_error = sync_error
        self.repository = repository
        self.sync_calls: list[tuple[str, list[str]]] = []
        self.diff_calls: list[tuple[str, str]] = []

    def is_repository(self) -> bool:
        return self.repository

    def resolve_remote(self, remote: str) -> str:
        return self.remote_url

    def sync_refs(self, remote: str, branches: list[str]) -> None:
        self.sync_calls.append((remote, list(branches)))
        if self.sync_error:
            raise SyncError("Failed to fetch branches from remote.", output=self.sync_error)

    def _lookup(self, base_ref: str, target_ref: str) -> tuple[list[str], str]:
        self.diff_calls.append((base_ref, target_ref))
        branch = target_ref.split("/", 1)[1]
        if branch in self.failing_diffs:
            raise DiffError(f"fatal: bad revision '{base_ref}...{target_ref}'")
        return self.diffs.get(branch, ([], ""))

    def diff(self, base_ref: str, target_ref: str) -> str:
        return self._lookup(base_ref, target_ref)[1]

    def changed_files(self, base_ref: str, target_ref: str) -> list[str]:
        return list(self._lookup(base_ref, target_ref)[0])


class FakePullRequestSource(PullRequestSource):
    """PullRequestSource serving fixture payloads keyed by branch."""

    def __init__(
        self,
        pulls: dict[str, list[dict]] | None = None,
        failing: set[str] | None = None,
    ) -> None:
        self.pulls = pulls or {}
        self.failing = failing or set()
        self.calls: list[tuple[str, str, str]] = []

    def find_open_pull_request(self, owner: str, repo: str, branch: str) -> PullRequestSummary | None:
        self.calls.append((owner, repo, branch))
        if branch in self.failing:
            raise ApiError("GitHub API returned 502", status_code=502)
        entries = self.pulls.get(branch, [])
        return PullRequestSummary.from_api(entries[0]) if entries else None


@pytest.fixture
def run_config(tmp_path: Path) -> RunConfig:
    """A config with a token, no external tool requirements and a temp output dir."""
    return RunConfig(
        token="ghp_test",
        output_dir=str(tmp_path / "out"),
        required_tools=[],
    )


@pytest.fixture
def fake_vcs() -> FakeVersionControl:
    return FakeVersionControl(
        diffs={
            "feature/x": (["src/x.py", "tests/test_x.py"], SAMPLE_DIFF),
        }
    )


@pytest.fixture
def fake_pulls() -> FakePullRequestSource:
    return FakePullRequestSource(pulls={"feature/x": [make_pr_payload()]})
