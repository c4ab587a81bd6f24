"""Plain-text renderer for pull request context reports.

The layout is fixed so the same inputs always produce the same bytes:
  - Header with generation time, repository, base branch and branch list
  - One section per branch, in request order
  - PR metadata (or a "no open PR" notice), changed files, raw diff
"""

from __future__ import annotations

from datetime import timezone

from prcontext.report.models import Report, ReportSection

RULE_WIDTH = 80
RULE = "=" * RULE_WIDTH
SUB_RULE = "-" * RULE_WIDTH
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"
NO_PR_MARKER = "No open PR found"


def render_report(report: Report) -> str:
    """Render the whole report, header first."""
    parts = [render_header(report)]
    parts.extend(render_section(section) for section in report.sections)
    return "".join(parts)


def render_header(report: Report) -> str:
    lines = [
        f"Generated: {report.generated_at.astimezone(timezone.utc).strftime(TIMESTAMP_FORMAT)}",
        f"Repository: {report.slug}",
        f"Base Branch: {report.base_branch}",
        f"Branches: {' '.join(report.branches)}",
        RULE,
        "",
    ]
    return "\n".join(lines) + "\n"


def render_section(section: ReportSection) -> str:
    """Render one branch section, including its trailing blank lines."""
    lines: list[str] = [RULE, f"BRANCH: {section.branch}", RULE, ""]

    lines.extend(_pull_request_block(section))
    lines.append("")

    files = section.diff.changed_files
    lines.append(f"CHANGED FILES ({len(files)}):")
    lines.append(SUB_RULE)
    lines.extend(f"  • {path}" for path in files)
    lines.append(SUB_RULE)
    lines.append("")

    lines.append("DIFF:")
    lines.append(SUB_RULE)
    lines.append(section.diff.diff.rstrip("\n"))
    lines.append(SUB_RULE)
    lines.append("")
    lines.append("")

    return "\n".join(lines) + "\n"


def _pull_request_block(section: ReportSection) -> list[str]:
    if not section.has_pull_request:
        return [
            f"⚠ {NO_PR_MARKER} for branch '{section.branch}'",
            "This may be a local-only branch or a closed PR",
            SUB_RULE,
        ]

    pr = section.pull_request
    return [
        f"PR #{pr.number}: {pr.title}",
        f"Author: {pr.author}",
        f"Status: {pr.state}",
        f"URL: {pr.url}",
        "",
        "DESCRIPTION:",
        SUB_RULE,
        pr.body.rstrip("\n"),
        SUB_RULE,
    ]
