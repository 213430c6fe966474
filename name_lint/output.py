"""Output rendering."""

from __future__ import annotations

import json
from datetime import UTC, datetime
from itertools import groupby
from typing import Any

import click

from name_lint import __version__
from name_lint.linter import LintFinding, LintReport
from name_lint.rules.base import Violation


def render_human(report: LintReport) -> str:
    """Render a compact colorized report grouped by file."""
    lines: list[str] = []
    for path, group in groupby(report.findings, key=lambda item: item.path):
        lines.append(click.style(path, bold=True))
        for finding in group:
            lines.append(_format_finding(finding))

    if lines:
        lines.append("")
    count = report.violation_count
    noun = "violation" if count == 1 else "violations"
    summary = (
        f"{count} {noun} in {report.files_scanned} files "
        f"({report.identifiers_checked} identifiers checked)"
    )
    lines.append(click.style(summary, fg="red" if count else "green", bold=True))
    return "\n".join(lines)


def render_json(report: LintReport, *, config_source: str | None) -> str:
    """Render stable JSON output for CI and automation."""
    return json.dumps(build_json_payload(report, config_source=config_source), sort_keys=True)


def build_json_payload(report: LintReport, *, config_source: str | None) -> dict[str, Any]:
    """Build stable JSON payload for CI and automation."""
    return {
        "violations": [finding.to_dict() for finding in report.findings],
        "summary": {
            "files_scanned": report.files_scanned,
            "identifiers_checked": report.identifiers_checked,
            "violation_count": report.violation_count,
            "by_kind": report.counts_by_kind(),
        },
        "meta": {
            "generated_at": datetime.now(tz=UTC)
            .replace(microsecond=0)
            .isoformat()
            .replace("+00:00", "Z"),
            "config_source": config_source,
            "version": __version__,
        },
    }


def render_check_human(identifier: str, category: str, violation: Violation | None) -> str:
    """Render the result of checking a single identifier."""
    if violation is None:
        return click.style(f"ok: {identifier} ({category})", fg="green")
    detail = _violation_detail(violation)
    return click.style(
        f"{violation.kind.value}: {identifier} ({category}) - {violation.reason}{detail}",
        fg="red",
    )


def _format_finding(finding: LintFinding) -> str:
    violation = finding.violation
    location = "file" if finding.line == 0 else f"{finding.line}:{finding.column}"
    kind = click.style(violation.kind.value, fg="yellow")
    return (
        f"  {location} {kind} {violation.identifier} [{violation.category}] "
        f"{violation.reason}{_violation_detail(violation)}"
    )


def _violation_detail(violation: Violation) -> str:
    if violation.slot is not None:
        return f" (slot: {violation.slot})"
    if violation.token is not None:
        return f" (token: {violation.token})"
    return ""
