import json
from pathlib import Path

import pytest

from style_lint.config import apply_overrides, load_config, parse_config
from style_lint.errors import ConfigurationError
from style_lint.models import AppConfig, Severity
from style_lint.rules.registry import build_registry, known_rule_ids


def test_defaults_enable_every_rule_in_catalog_order(tmp_path: Path):
    config = load_config(None, cwd=tmp_path)
    registry = build_registry(config)

    assert config == AppConfig()
    assert registry.rule_ids() == known_rule_ids()
    assert "typing" in registry.options.import_allowlist


def test_json_config_disables_rules_and_overrides_severity(tmp_path: Path):
    path = tmp_path / "style-lint.json"
    path.write_text(
        json.dumps(
            {
                "rules": {
                    "no-global-statement": False,
                    "stable-order-literal": {"severity": "error"},
                },
                "extend_import_allowlist": ["dataclasses"],
                "scan": {"include_extensions": ["py", ".pyi"], "max_file_size_bytes": 1024},
            }
        ),
        encoding="utf-8",
    )

    config = load_config(path)
    registry = build_registry(config)

    assert "no-global-statement" not in registry.rule_ids()
    ordering = next(rule for rule in registry.rules() if rule.rule_id == "stable-order-literal")
    assert ordering.severity is Severity.ERROR
    assert registry.options.import_allowlist[-1] == "dataclasses"
    assert config.scan.include_extensions == (".py", ".pyi")
    assert config.scan.max_file_size_bytes == 1024
    assert config.source == str(path)


def test_pyproject_table_is_picked_up_from_cwd(tmp_path: Path):
    (tmp_path / "pyproject.toml").write_text(
        "[project]\n"
        "name = 'demo'\n"
        "\n"
        "[tool.style-lint]\n"
        "import_allowlist = ['os']\n"
        "\n"
        "[tool.style-lint.rules]\n"
        "no-default-args = false\n",
        encoding="utf-8",
    )

    config = load_config(None, cwd=tmp_path)

    assert config.import_allowlist == ("os",)
    assert "no-default-args" not in build_registry(config).rule_ids()


def test_pyproject_without_table_falls_back_to_defaults(tmp_path: Path):
    (tmp_path / "pyproject.toml").write_text("[project]\nname = 'demo'\n", encoding="utf-8")
    assert load_config(None, cwd=tmp_path) == AppConfig()


def test_explicit_toml_without_table_is_an_error(tmp_path: Path):
    path = tmp_path / "pyproject.toml"
    path.write_text("[project]\nname = 'demo'\n", encoding="utf-8")

    with pytest.raises(ConfigurationError, match="tool.style-lint"):
        load_config(path)


def test_unknown_rule_id_is_rejected():
    with pytest.raises(ConfigurationError, match="no-such-rule"):
        parse_config({"rules": {"no-such-rule": True}})


def test_bad_severity_is_rejected():
    with pytest.raises(ConfigurationError, match="severity"):
        parse_config({"rules": {"no-default-args": {"severity": "fatal"}}})


def test_bad_shapes_are_rejected():
    with pytest.raises(ConfigurationError):
        parse_config([])
    with pytest.raises(ConfigurationError):
        parse_config({"rules": {"no-default-args": "yes"}})
    with pytest.raises(ConfigurationError):
        parse_config({"import_allowlist": "typing"})
    with pytest.raises(ConfigurationError):
        parse_config({"scan": {"max_file_size_bytes": 0}})


def test_unknown_keys_are_rejected():
    with pytest.raises(ConfigurationError, match="rulez"):
        parse_config({"rulez": {"no-default-args": False}})
    with pytest.raises(ConfigurationError, match="exclude_dirs"):
        parse_config({"exclude_dirs": ["vendor"]})
    with pytest.raises(ConfigurationError, match="exclude_dir"):
        parse_config({"scan": {"exclude_dir": ["vendor"]}})

    config = parse_config({"scan": {"exclude_dirs": ["vendor"], "include_extensions": ["pyi"]}})
    assert config.scan.exclude_dirs == ("vendor",)
    assert config.scan.include_extensions == (".pyi",)


def test_missing_and_malformed_files_are_rejected(tmp_path: Path):
    with pytest.raises(ConfigurationError, match="not found"):
        load_config(tmp_path / "missing.json")

    broken = tmp_path / "broken.json"
    broken.write_text("{", encoding="utf-8")
    with pytest.raises(ConfigurationError, match="Invalid JSON"):
        load_config(broken)


def test_cli_overrides_are_validated():
    config = parse_config({"rules": {"no-default-args": False}})

    enabled = apply_overrides(config, enable=["no-default-args"], disable=["no-global-statement"])
    ids = build_registry(enabled).rule_ids()
    assert "no-default-args" in ids
    assert "no-global-statement" not in ids

    with pytest.raises(ConfigurationError, match="Unknown"):
        apply_overrides(config, enable=["bogus"], disable=[])
    with pytest.raises(ConfigurationError, match="both"):
        apply_overrides(config, enable=["no-default-args"], disable=["no-default-args"])
