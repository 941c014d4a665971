"""Text rendering for lint reports.

Rendering is pure: the same report always yields the same bytes, so CI logs
can be diffed between runs. Writing the text anywhere is the caller's job.
"""

from __future__ import annotations

import json

from style_lint.errors import LoadError, ParseError
from style_lint.models import LintRun, Report

FORMATS = ("human", "machine")


def render(report: Report, fmt: str) -> str:
    _check_format(fmt)
    if fmt == "machine":
        lines = [_json_line({"path": report.path, **item.to_dict()}) for item in report.findings]
        lines.extend(
            _json_line({"kind": "rule_failure", **failure.to_dict()}) for failure in report.rule_failures
        )
        return "".join(f"{line}\n" for line in lines)

    lines = [
        f"{report.path}:{item.line}:{item.column}: {item.severity.value} [{item.rule_id}] {item.message}"
        for item in report.findings
    ]
    lines.extend(
        f"{report.path}: internal [{failure.rule_id}] {failure.message}" for failure in report.rule_failures
    )
    return "".join(f"{line}\n" for line in lines)


def render_parse_error(error: ParseError, fmt: str) -> str:
    _check_format(fmt)
    if fmt == "machine":
        return _json_line({"kind": "parse_error", **error.to_dict()}) + "\n"
    return f"{error.path}:{error.line}:{error.column}: error [parse-error] {error.message}\n"


def render_load_error(error: LoadError, fmt: str) -> str:
    _check_format(fmt)
    if fmt == "machine":
        return _json_line({"kind": "load_error", **error.to_dict()}) + "\n"
    return f"{error.path}: error [load-error] {error.reason}\n"


def render_run(run: LintRun, fmt: str) -> str:
    chunks = [render_load_error(error, fmt) for error in run.load_errors]
    chunks.extend(render_parse_error(error, fmt) for error in run.parse_errors)
    chunks.extend(render(report, fmt) for report in run.reports)
    return "".join(chunks)


def render_summary(run: LintRun) -> str:
    errors = sum(len(report.errors) for report in run.reports)
    warnings = sum(len(report.warnings) for report in run.reports)
    if not run.has_findings and not run.has_failures:
        return f"All checks passed ({run.files_checked} files).\n"
    parts = [
        f"{run.findings_count} findings ({errors} errors, {warnings} warnings)",
        f"in {run.files_checked} files",
    ]
    if run.parse_errors:
        parts.append(f"{len(run.parse_errors)} unparsable")
    if run.load_errors:
        parts.append(f"{len(run.load_errors)} unreadable")
    failures = sum(len(report.rule_failures) for report in run.reports)
    if failures:
        parts.append(f"{failures} rule failures")
    return ", ".join(parts) + ".\n"


def _check_format(fmt: str) -> None:
    if fmt not in FORMATS:
        raise ValueError(f"format must be one of: {', '.join(FORMATS)}")


def _json_line(payload: dict) -> str:
    return json.dumps(payload, sort_keys=True, ensure_ascii=True)
