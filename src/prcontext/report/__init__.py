"""Report assembly: data models, plain-text rendering and writing.

Usage:
    from prcontext.report import render_report, write_report

    text = render_report(report)
    path, size = write_report(text, output_dir=".pr_context")
"""

from prcontext.report.models import DiffResult, Report, ReportResult, ReportSection
from prcontext.report.renderer import render_report, render_section
from prcontext.report.writer import default_report_path, write_report

__all__ = [
    "DiffResult",
    "Report",
    "ReportResult",
    "ReportSection",
    "default_report_path",
    "render_report",
    "render_section",
    "write_report",
]
