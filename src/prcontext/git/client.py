"""Version control access - fetch refs and compute diffs without touching the checkout.

Every operation here reads from or writes to ``refs/remotes/*`` only. The
user's current branch, index and working tree are never modified, so the
tool is safe to run in the middle of other work.
"""

from __future__ import annotations

import logging
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path

from prcontext.exceptions import ConfigurationError, DiffError, SyncError

logger = logging.getLogger("prcontext.git")


class VersionControlClient(ABC):
    """Abstract client for the version control operations a report needs."""

    @abstractmethod
    def is_repository(self) -> bool:
        """Whether the working directory is inside a repository."""
        ...

    @abstractmethod
    def resolve_remote(self, remote: str) -> str:
        """Return the URL configured for ``remote``."""
        ...

    @abstractmethod
    def sync_refs(self, remote: str, branches: list[str]) -> None:
        """Update remote-tracking refs for all ``branches`` in one fetch."""
        ...

    @abstractmethod
    def diff(self, base_ref: str, target_ref: str) -> str:
        """Unified diff of ``target_ref`` against its merge base with ``base_ref``."""
        ...

    @abstractmethod
    def changed_files(self, base_ref: str, target_ref: str) -> list[str]:
        """Paths changed on ``target_ref`` since its merge base with ``base_ref``."""
        ...


def fetch_refspecs(remote: str, branches: list[str]) -> list[str]:
    """Forced refspecs mapping each branch head onto its tracking ref."""
    return [f"+refs/heads/{branch}:refs/remotes/{remote}/{branch}" for branch in branches]


def three_dot_range(base_ref: str, target_ref: str) -> str:
    return f"{base_ref}...{target_ref}"


def decode_output(data: bytes | None) -> str:
    """UTF-8 decode without newline translation; undecodable bytes become U+FFFD."""
    return (data or b"").decode("utf-8", errors="replace")


class GitClient(VersionControlClient):
    """VersionControlClient backed by the ``git`` command line."""

    def __init__(self, root: Path | None = None, timeout: float = 120.0, executable: str = "git") -> None:
        self.root = (root or Path.cwd()).resolve()
        self.timeout = timeout
        self.executable = executable

    def _run(self, *args: str) -> subprocess.CompletedProcess[str]:
        # Output is captured as bytes: diffs may hold non-UTF-8 content and
        # CRLF line endings, both of which must survive into the report.
        argv = [self.executable, *args]
        logger.debug("Running %s", " ".join(argv))
        result = subprocess.run(
            argv,
            shell=False,
            cwd=str(self.root),
            capture_output=True,
            timeout=self.timeout,
        )
        return subprocess.CompletedProcess(
            argv,
            result.returncode,
            stdout=decode_output(result.stdout),
            stderr=decode_output(result.stderr),
        )

    def is_repository(self) -> bool:
        try:
            result = self._run("rev-parse", "--git-dir")
        except (subprocess.TimeoutExpired, FileNotFoundError):
            return False
        return result.returncode == 0

    def resolve_remote(self, remote: str) -> str:
        try:
            result = self._run("remote", "get-url", remote)
        except (subprocess.TimeoutExpired, FileNotFoundError) as e:
            raise ConfigurationError(f"Could not query git remote '{remote}': {e}") from e

        url = result.stdout.strip()
        if result.returncode != 0 or not url:
            raise ConfigurationError(
                f"Could not determine git remote. Are you in a git repository "
                f"with an '{remote}' remote?"
            )
        return url

    def sync_refs(self, remote: str, branches: list[str]) -> None:
        refspecs = fetch_refspecs(remote, branches)
        try:
            result = self._run("fetch", remote, *refspecs)
        except subprocess.TimeoutExpired as e:
            raise SyncError(
                f"Fetching branches from '{remote}' timed out after {self.timeout:.0f}s."
            ) from e
        except FileNotFoundError as e:
            raise SyncError(f"Could not run {self.executable}: {e}") from e

        if result.returncode != 0:
            raise SyncError(
                "Failed to fetch branches from remote.",
                output="\n".join(part for part in (result.stdout, result.stderr) if part),
            )
        logger.debug("Fetched %d ref(s) from %s", len(refspecs), remote)

    def _diff(self, *args: str) -> str:
        try:
            result = self._run("diff", *args)
        except (subprocess.TimeoutExpired, FileNotFoundError) as e:
            raise DiffError(f"git diff {' '.join(args)} failed: {e}") from e
        if result.returncode != 0:
            raise DiffError(result.stderr.strip() or f"git diff exited with {result.returncode}")
        return result.stdout

    def diff(self, base_ref: str, target_ref: str) -> str:
        return self._diff(three_dot_range(base_ref, target_ref))

    def changed_files(self, base_ref: str, target_ref: str) -> list[str]:
        output = self._diff("--name-only", three_dot_range(base_ref, target_ref))
        return [line for line in output.splitlines() if line.strip()]
