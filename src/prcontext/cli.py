"""Command-line interface for pr-context."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from prcontext import __version__
from prcontext.config import load_config
from prcontext.exceptions import PRContextError
from prcontext.git.client import GitClient
from prcontext.github.pulls import GitHubPullRequestSource
from prcontext.pipeline import ReportPipeline
from prcontext.ui.console import Console

console = Console()

EPILOG = """\b
Environment:
  GITHUB_TOKEN           GitHub personal access token (required)
  PR_CONTEXT_OUTPUT_DIR  Default output directory (default: .pr_context)
  BASE_BRANCH            Default base branch (default: main)
  GITHUB_API_URL         API root for GitHub Enterprise

\b
Examples:
  pr-context feature/my-branch
  pr-context feature/foo feature/bar -o /tmp/context.txt
"""


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logger = logging.getLogger("prcontext")
    logger.handlers.clear()
    logger.addHandler(console.logging_handler(level))
    logger.setLevel(level)
    logger.propagate = False


@click.command(epilog=EPILOG, context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="pr-context")
@click.argument("branches", nargs=-1, required=True)
@click.option("--output", "-o", default=None, type=click.Path(dir_okay=False),
              help="Output file path (default: .pr_context/context_TIMESTAMP.txt).")
@click.option("--base", "-b", default=None, help="Base branch for comparison (default: main).")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging.")
def main(branches: tuple[str, ...], output: str | None, base: str | None, verbose: bool):
    """Generate PR context for LLM consumption.

    Fetches PR metadata and diffs for one or more BRANCHES into a single
    text file without affecting your local git state.
    """
    _configure_logging(verbose)
    config = load_config(base_branch=base, output_path=output)

    pipeline = ReportPipeline(
        config,
        vcs=GitClient(Path.cwd(), timeout=config.git_timeout),
        pulls=GitHubPullRequestSource(
            config.token or "", api_url=config.api_url, timeout=config.api_timeout,
        ),
        on_progress=console.info,
    )

    try:
        result = pipeline.run(list(branches))
    except PRContextError as e:
        console.error(str(e))
        sys.exit(1)

    for section in result.report.sections:
        if not section.has_pull_request:
            console.warning(f"No open PR found for branch '{section.branch}'")
        if section.diff.error:
            console.warning(f"Diff unavailable for branch '{section.branch}'")

    console.success(f"Context written to: {result.path}")
    console.info(f"Total size: {result.human_size} ({result.size_bytes} bytes)")
    click.echo(str(result.path))


if __name__ == "__main__":
    main()
