"""Reporting an ``IndexCheckReport`` the way a GitHub Actions runner reads it.

Events become workflow commands on stdout (``::debug::``, ``::error::``),
and the ``indexed`` output is appended to the ``$GITHUB_OUTPUT`` file.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import TextIO

from nuget_index_checker.domain.entities import IndexCheckReport, ReportEvent

_LEADING_INT_RE = re.compile(r"\s*([+-]?[0-9]+)")


def parse_attempts(raw: str | int | None, default: int) -> int:
    """Leading integer of *raw*; *default* when missing, non-numeric or zero.

    ``"3abc"`` -> 3, ``"abc"`` -> default, ``"0"`` -> default, ``"-1"`` -> -1
    (left for the validator to reject).
    """
    if raw is None:
        return default
    if isinstance(raw, int):
        return raw or default
    match = _LEADING_INT_RE.match(raw)
    if match is None:
        return default
    try:
        value = int(match.group(1))
    except ValueError:
        # Beyond the interpreter's int digit limit; no usable budget.
        return default
    return value or default


def _escape(message: str) -> str:
    return message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def format_event(event: ReportEvent) -> str:
    if event.level == "info":
        return event.message
    return f"::{event.level}::{_escape(event.message)}"


def write_output(name: str, value: str, output_path: Path) -> None:
    with output_path.open("a", encoding="utf-8") as f:
        f.write(f"{name}={value}\n")


def emit_report(
    report: IndexCheckReport,
    stream: TextIO,
    output_path: Path | None = None,
) -> None:
    """Write events, the ``indexed`` output and, if failed, the failure."""
    for event in report.events:
        print(format_event(event), file=stream)

    print(f"indexed={report.output}", file=stream)
    if output_path is not None:
        write_output("indexed", report.output, output_path)

    if report.failed and report.message:
        print(format_event(ReportEvent("error", report.message)), file=stream)
