"""Persist a rendered report to disk."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path

from prcontext.exceptions import ReportWriteError

logger = logging.getLogger("prcontext.report")

FILENAME_TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"


def default_report_path(output_dir: str | Path, now: datetime | None = None) -> Path:
    """``<output_dir>/context_<UTC timestamp>.txt``."""
    stamp = (now or datetime.now(timezone.utc)).astimezone(timezone.utc)
    return Path(output_dir) / f"context_{stamp.strftime(FILENAME_TIMESTAMP_FORMAT)}.txt"


def write_report(
    text: str,
    output_path: str | Path | None = None,
    output_dir: str | Path = ".pr_context",
    now: datetime | None = None,
) -> tuple[Path, int]:
    """Write ``text`` as UTF-8 and return (resolved path, size in bytes).

    Missing parent directories are created. Any OS-level failure is raised
    as ReportWriteError.
    """
    path = Path(output_path) if output_path else default_report_path(output_dir, now)
    data = text.encode("utf-8")

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "wb") as f:
            f.write(data)
    except OSError as e:
        raise ReportWriteError(f"Could not write report to {path}: {e.strerror or e}") from e

    resolved = path.resolve()
    logger.debug("Wrote %d bytes to %s", len(data), resolved)
    return resolved, len(data)
