from __future__ import annotations

import json
import logging
import tomllib
from dataclasses import replace
from pathlib import Path

from style_lint.errors import ConfigurationError
from style_lint.models import AppConfig, RuleSetting, ScanSettings, Severity
from style_lint.rules.registry import validate_rule_ids


logger = logging.getLogger(__name__)

PYPROJECT_TABLE = "style-lint"

TOP_LEVEL_KEYS = ("rules", "import_allowlist", "extend_import_allowlist", "scan")
SCAN_KEYS = ("include_extensions", "exclude_dirs", "max_file_size_bytes")


def load_config(path: str | Path | None, *, cwd: Path | None = None) -> AppConfig:
    if path is None:
        candidate = (cwd or Path.cwd()) / "pyproject.toml"
        if candidate.is_file():
            raw = _read_pyproject(candidate, required=False)
            if raw is not None:
                logger.debug("Using [tool.%s] from %s", PYPROJECT_TABLE, candidate)
                return parse_config(raw, source=str(candidate))
        return AppConfig()

    config_path = Path(path)
    if not config_path.exists():
        raise ConfigurationError(f"Config file not found: {config_path}")

    if config_path.suffix.lower() == ".toml":
        raw = _read_pyproject(config_path, required=True)
    else:
        try:
            with config_path.open("r", encoding="utf-8") as handle:
                raw = json.load(handle)
        except json.JSONDecodeError as exc:
            raise ConfigurationError(f"Invalid JSON in {config_path}: {exc}") from exc

    return parse_config(raw, source=str(config_path))


def parse_config(raw: object, *, source: str | None = None) -> AppConfig:
    if not isinstance(raw, dict):
        raise ConfigurationError("Config must be an object")
    _reject_unknown_keys(raw, TOP_LEVEL_KEYS, "config")

    rules_raw = raw.get("rules", {})
    if not isinstance(rules_raw, dict):
        raise ConfigurationError("'rules' must be an object mapping rule ids to settings")
    validate_rule_ids(rules_raw)

    rules: dict[str, RuleSetting] = {}
    for rule_id, item in rules_raw.items():
        rules[str(rule_id)] = _parse_rule_setting(str(rule_id), item)

    defaults = AppConfig()
    import_allowlist = defaults.import_allowlist
    if "import_allowlist" in raw:
        import_allowlist = tuple(_ensure_string_list(raw["import_allowlist"], "import_allowlist"))
    if "extend_import_allowlist" in raw:
        import_allowlist = import_allowlist + tuple(
            _ensure_string_list(raw["extend_import_allowlist"], "extend_import_allowlist")
        )

    scan_raw = raw.get("scan", {})
    if not isinstance(scan_raw, dict):
        raise ConfigurationError("'scan' must be an object")
    _reject_unknown_keys(scan_raw, SCAN_KEYS, "scan")

    scan_defaults = ScanSettings()
    extensions = scan_defaults.include_extensions
    if "include_extensions" in scan_raw:
        extensions = tuple(
            _normalize_extension(item)
            for item in _ensure_string_list(scan_raw["include_extensions"], "scan.include_extensions")
        )
    exclude_dirs = scan_defaults.exclude_dirs
    if "exclude_dirs" in scan_raw:
        exclude_dirs = tuple(_ensure_string_list(scan_raw["exclude_dirs"], "scan.exclude_dirs"))

    try:
        max_file_size_bytes = int(scan_raw.get("max_file_size_bytes", scan_defaults.max_file_size_bytes))
    except (TypeError, ValueError) as exc:
        raise ConfigurationError("'scan.max_file_size_bytes' must be an integer") from exc
    if max_file_size_bytes <= 0:
        raise ConfigurationError("'scan.max_file_size_bytes' must be positive")

    return AppConfig(
        rules=rules,
        import_allowlist=import_allowlist,
        scan=ScanSettings(
            include_extensions=extensions,
            exclude_dirs=exclude_dirs,
            max_file_size_bytes=max_file_size_bytes,
        ),
        source=source,
    )


def apply_overrides(config: AppConfig, *, enable: list[str], disable: list[str]) -> AppConfig:
    validate_rule_ids([*enable, *disable])
    overlap = sorted(set(enable) & set(disable))
    if overlap:
        raise ConfigurationError(f"Rule(s) both enabled and disabled: {', '.join(overlap)}")

    rules = dict(config.rules)
    for rule_id in enable:
        rules[rule_id] = replace(rules.get(rule_id, RuleSetting()), enabled=True)
    for rule_id in disable:
        rules[rule_id] = replace(rules.get(rule_id, RuleSetting()), enabled=False)
    return replace(config, rules=rules)


def _read_pyproject(path: Path, *, required: bool) -> dict | None:
    try:
        with path.open("rb") as handle:
            document = tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigurationError(f"Invalid TOML in {path}: {exc}") from exc

    table = document.get("tool", {}).get(PYPROJECT_TABLE)
    if table is None:
        if required:
            raise ConfigurationError(f"{path} has no [tool.{PYPROJECT_TABLE}] table")
        return None
    return table


def _parse_rule_setting(rule_id: str, item: object) -> RuleSetting:
    if isinstance(item, bool):
        return RuleSetting(enabled=item)
    if not isinstance(item, dict):
        raise ConfigurationError(f"Setting for rule '{rule_id}' must be a boolean or an object")

    enabled = item.get("enabled", True)
    if not isinstance(enabled, bool):
        raise ConfigurationError(f"'enabled' for rule '{rule_id}' must be a boolean")

    severity = None
    if "severity" in item:
        try:
            severity = Severity(str(item["severity"]).strip().lower())
        except ValueError as exc:
            choices = ", ".join(level.value for level in Severity)
            raise ConfigurationError(
                f"Unknown severity {item['severity']!r} for rule '{rule_id}' (expected one of: {choices})"
            ) from exc

    return RuleSetting(enabled=enabled, severity=severity)


def _normalize_extension(value: str) -> str:
    text = value.strip().lower()
    return text if text.startswith(".") else f".{text}"


def _ensure_string_list(value: object, key: str) -> list[str]:
    if not isinstance(value, list):
        raise ConfigurationError(f"'{key}' must be a list of strings")
    return [str(item) for item in value]


def _reject_unknown_keys(raw: dict, allowed: tuple[str, ...], where: str) -> None:
    unknown = sorted(str(key) for key in raw if key not in allowed)
    if unknown:
        raise ConfigurationError(
            f"Unknown key(s) in {where}: {', '.join(unknown)}. Allowed: {', '.join(allowed)}"
        )
