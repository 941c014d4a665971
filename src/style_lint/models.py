from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any

from style_lint.errors import LoadError, ParseError


class Severity(str, Enum):
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class SourceUnit:
    path: str
    text: str


@dataclass(frozen=True)
class Finding:
    rule_id: str
    line: int
    column: int
    message: str
    severity: Severity

    def sort_key(self) -> tuple[int, int, str]:
        return (self.line, self.column, self.rule_id)

    def to_dict(self) -> dict[str, Any]:
        payload = asdict(self)
        payload["severity"] = self.severity.value
        return payload


@dataclass(frozen=True)
class RuleFailure:
    rule_id: str
    path: str
    message: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Report:
    path: str
    findings: tuple[Finding, ...] = ()
    rule_failures: tuple[RuleFailure, ...] = ()

    @property
    def is_clean(self) -> bool:
        return not self.findings and not self.rule_failures

    @property
    def errors(self) -> list[Finding]:
        return [item for item in self.findings if item.severity is Severity.ERROR]

    @property
    def warnings(self) -> list[Finding]:
        return [item for item in self.findings if item.severity is Severity.WARNING]


@dataclass(frozen=True)
class ScanSettings:
    include_extensions: tuple[str, ...] = (".py",)
    exclude_dirs: tuple[str, ...] = (
        ".git",
        ".mypy_cache",
        ".pytest_cache",
        ".tox",
        ".venv",
        "__pycache__",
        "build",
        "dist",
        "node_modules",
        "venv",
    )
    max_file_size_bytes: int = 2_000_000


@dataclass(frozen=True)
class RuleSetting:
    enabled: bool = True
    severity: Severity | None = None


@dataclass(frozen=True)
class AppConfig:
    rules: dict[str, RuleSetting] = field(default_factory=dict)
    import_allowlist: tuple[str, ...] = (
        "__future__",
        "collections.abc",
        "six.moves",
        "typing",
        "typing_extensions",
    )
    scan: ScanSettings = field(default_factory=ScanSettings)
    source: str | None = None

    def rule_setting(self, rule_id: str) -> RuleSetting:
        return self.rules.get(rule_id, RuleSetting())


@dataclass(frozen=True)
class LintRun:
    reports: tuple[Report, ...]
    parse_errors: tuple[ParseError, ...] = ()
    load_errors: tuple[LoadError, ...] = ()

    @property
    def files_checked(self) -> int:
        return len(self.reports) + len(self.parse_errors)

    @property
    def findings_count(self) -> int:
        return sum(len(report.findings) for report in self.reports)

    @property
    def has_findings(self) -> bool:
        return self.findings_count > 0 or bool(self.parse_errors)

    @property
    def has_failures(self) -> bool:
        return bool(self.load_errors) or any(report.rule_failures for report in self.reports)

    def to_dict(self) -> dict[str, Any]:
        return {
            "files_checked": self.files_checked,
            "findings_count": self.findings_count,
            "parse_errors": [item.to_dict() for item in self.parse_errors],
            "load_errors": [item.to_dict() for item in self.load_errors],
            "rule_failures": [
                failure.to_dict() for report in self.reports for failure in report.rule_failures
            ],
        }
