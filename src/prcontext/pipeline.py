"""Report pipeline - wires remote resolution, ref sync, lookups and diffs together.

A run has a small number of fatal points (preconditions, remote resolution,
ref sync, report write). Everything that happens per branch is best effort:
a failed PR lookup becomes "no open PR" and a failed diff becomes an in-band
placeholder, so one bad branch never loses the rest of the report.
"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Callable
from datetime import datetime, timezone

from prcontext.config import TOKEN_ENV, RunConfig
from prcontext.exceptions import ApiError, ConfigurationError, DiffError
from prcontext.git.client import VersionControlClient
from prcontext.git.remote import RemoteIdentity, parse_remote_url
from prcontext.github.pulls import PullRequestSource, PullRequestSummary
from prcontext.report.models import DiffResult, Report, ReportResult, ReportSection
from prcontext.report.renderer import render_report
from prcontext.report.writer import write_report

logger = logging.getLogger("prcontext.pipeline")

ProgressCallback = Callable[[str], None]


def collect_diff(vcs: VersionControlClient, base_ref: str, target_ref: str, branch: str) -> DiffResult:
    """Changed files and three-dot diff for one branch; never raises DiffError."""
    try:
        files = vcs.changed_files(base_ref, target_ref)
        diff = vcs.diff(base_ref, target_ref)
    except DiffError as e:
        logger.warning("Could not diff %s against %s: %s", target_ref, base_ref, e)
        return DiffResult.failed(branch)
    return DiffResult(changed_files=files, diff=diff)


def lookup_pull_request(
    pulls: PullRequestSource, remote: RemoteIdentity, branch: str
) -> PullRequestSummary | None:
    """Open PR for ``branch``, or None when there is none or the lookup failed."""
    try:
        return pulls.find_open_pull_request(remote.owner, remote.name, branch)
    except ApiError as e:
        logger.warning("PR lookup for '%s' failed: %s", branch, e)
        return None


class ReportPipeline:
    """Build and write a pull request context report for a list of branches."""

    def __init__(
        self,
        config: RunConfig,
        vcs: VersionControlClient,
        pulls: PullRequestSource,
        on_progress: ProgressCallback | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.config = config
        self.vcs = vcs
        self.pulls = pulls
        self.on_progress = on_progress
        self.clock = clock or (lambda: datetime.now(timezone.utc))

    def _progress(self, message: str) -> None:
        logger.info(message)
        if self.on_progress:
            self.on_progress(message)

    def check_preconditions(self, branches: list[str]) -> None:
        """Fail fast on anything that makes the run impossible."""
        if not branches:
            raise ConfigurationError("No branches specified. Use --help for usage.")

        missing = [tool for tool in self.config.required_tools if shutil.which(tool) is None]
        if missing:
            raise ConfigurationError(
                f"Missing required commands: {' '.join(missing)}\n"
                "Install them and make sure they are on your PATH."
            )

        if not self.config.has_token:
            raise ConfigurationError(
                f"{TOKEN_ENV} not set.\n"
                "Create a token at: https://github.com/settings/tokens\n"
                f"Then set it with: export {TOKEN_ENV}='ghp_your_token_here'"
            )

        if not self.vcs.is_repository():
            raise ConfigurationError("Not in a git repository")

    def resolve_remote(self) -> RemoteIdentity:
        url = self.vcs.resolve_remote(self.config.remote)
        identity = parse_remote_url(url, host=self.config.host)
        self._progress(f"Detected repository: {identity.slug}")
        return identity

    def sync(self, branches: list[str]) -> None:
        self._progress("Fetching latest from remote...")
        self.vcs.sync_refs(self.config.remote, [*branches, self.config.base_branch])

    def build_section(self, remote: RemoteIdentity, branch: str) -> ReportSection:
        self._progress(f"Processing branch: {branch}")
        pull_request = lookup_pull_request(self.pulls, remote, branch)
        diff = collect_diff(
            self.vcs,
            self.config.tracking_ref(self.config.base_branch),
            self.config.tracking_ref(branch),
            branch,
        )
        return ReportSection(branch=branch, pull_request=pull_request, diff=diff)

    def build_report(self, remote: RemoteIdentity, branches: list[str]) -> Report:
        report = Report.for_remote(remote, self.config.base_branch, branches, self.clock())
        for branch in branches:
            report.sections.append(self.build_section(remote, branch))
        return report

    def run(self, branches: list[str]) -> ReportResult:
        """Execute the full pipeline and return where the report went."""
        branches = list(branches)
        self.check_preconditions(branches)
        remote = self.resolve_remote()
        self.sync(branches)

        report = self.build_report(remote, branches)
        path, size = write_report(
            render_report(report),
            output_path=self.config.output_path,
            output_dir=self.config.output_dir,
            now=report.generated_at,
        )
        logger.info("Report for %d branch(es) written to %s", len(branches), path)
        return ReportResult(path=path, size_bytes=size, report=report)
