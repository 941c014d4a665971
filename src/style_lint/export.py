from __future__ import annotations

import csv
import json
from pathlib import Path

from style_lint.models import LintRun
from style_lint.rules.registry import RuleRegistry


FINDING_FIELDS = ("path", "rule_id", "line", "column", "message", "severity")


def export_reports(run: LintRun, registry: RuleRegistry, output_dir: str | Path) -> dict:
    out_dir = Path(output_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    findings = [
        {"path": report.path, **item.to_dict()}
        for report in run.reports
        for item in report.findings
    ]

    by_rule: dict[str, int] = {rule_id: 0 for rule_id in registry.rule_ids()}
    for row in findings:
        by_rule[row["rule_id"]] = by_rule.get(row["rule_id"], 0) + 1

    by_file = [
        {"path": report.path, "finding_count": len(report.findings)}
        for report in run.reports
        if report.findings
    ]
    by_file.sort(key=lambda row: (-row["finding_count"], row["path"]))

    summary = {
        "rules": list(registry.rule_ids()),
        "counts": {
            "files_checked": run.files_checked,
            "files_with_findings": len(by_file),
            "findings": len(findings),
            "parse_errors": len(run.parse_errors),
            "load_errors": len(run.load_errors),
        },
        "findings_by_rule": by_rule,
        "findings_by_file": by_file,
        **run.to_dict(),
        "files": {},
    }

    summary_json = out_dir / "summary.json"
    findings_csv = out_dir / "findings.csv"

    _write_csv(findings_csv, findings)
    summary["files"] = {
        "summary": summary_json.name,
        "findings": findings_csv.name,
    }
    _write_json(summary_json, summary)

    return summary


def _write_json(path: Path, payload: dict) -> None:
    with path.open("w", encoding="utf-8") as handle:
        json.dump(payload, handle, indent=2, ensure_ascii=True, sort_keys=True)
        handle.write("\n")


def _write_csv(path: Path, rows: list[dict]) -> None:
    with path.open("w", encoding="utf-8", newline="") as handle:
        writer = csv.DictWriter(handle, fieldnames=FINDING_FIELDS)
        writer.writeheader()
        for row in rows:
            writer.writerow(row)
