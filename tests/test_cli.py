import json
from pathlib import Path

from style_lint.cli import EXIT_CLEAN, EXIT_FAILURE, EXIT_FINDINGS, main


def test_clean_file_exits_zero(tmp_path: Path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    Path("clean.py").write_text("import os\n\nSEP = os.sep\n", encoding="utf-8")

    assert main(["check", "clean.py"]) == EXIT_CLEAN
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "All checks passed" in captured.err


def test_findings_exit_one_and_render_human_lines(tmp_path: Path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    Path("mod.py").write_text("from json import dumps\n", encoding="utf-8")

    assert main(["check", "mod.py"]) == EXIT_FINDINGS
    out = capsys.readouterr().out
    assert out.startswith("mod.py:1:18: warning [import-module-not-names]")


def test_machine_format_and_parse_errors(tmp_path: Path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    Path("src").mkdir()
    Path("src/a.py").write_text("def f(a=1):\n    return a\n", encoding="utf-8")
    Path("src/z.py").write_text("def broken(:\n", encoding="utf-8")

    assert main(["check", "src", "--format", "machine"]) == EXIT_FINDINGS
    records = [json.loads(line) for line in capsys.readouterr().out.splitlines()]
    assert records[0]["kind"] == "parse_error"
    assert records[0]["path"] == "src/z.py"
    assert records[1]["rule_id"] == "no-default-args"
    assert records[1]["path"] == "src/a.py"


def test_disable_flag_and_output_dir(tmp_path: Path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    Path("mod.py").write_text("def f(a=1):\n    return a\n", encoding="utf-8")

    code = main(["check", "mod.py", "--disable", "no-default-args", "--output-dir", "out"])

    assert code == EXIT_CLEAN
    assert (tmp_path / "out" / "summary.json").exists()
    capsys.readouterr()


def test_configuration_errors_exit_two(tmp_path: Path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    Path("mod.py").write_text("x = 1\n", encoding="utf-8")
    Path("cfg.json").write_text(json.dumps({"rules": {"made-up": False}}), encoding="utf-8")

    assert main(["check", "mod.py", "--config", "cfg.json"]) == EXIT_FAILURE
    assert "made-up" in capsys.readouterr().err
    assert main(["check", "mod.py", "--enable", "also-made-up"]) == EXIT_FAILURE


def test_missing_target_exits_two(tmp_path: Path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)

    assert main(["check", "nowhere.py"]) == EXIT_FAILURE
    assert "nowhere.py" in capsys.readouterr().err


def test_rules_command_lists_catalog(tmp_path: Path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    Path("cfg.json").write_text(json.dumps({"rules": {"no-global-statement": False}}), encoding="utf-8")

    assert main(["rules", "--config", "cfg.json", "--format", "machine"]) == EXIT_CLEAN
    rows = [json.loads(line) for line in capsys.readouterr().out.splitlines()]
    assert [row["rule_id"] for row in rows] == [
        "no-default-args",
        "no-mutable-module-state",
        "import-module-not-names",
        "no-global-memoization",
        "stable-order-literal",
        "no-global-statement",
    ]
    assert rows[-1]["enabled"] is False
