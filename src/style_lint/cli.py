from __future__ import annotations

import argparse
import json
import logging
import sys

from style_lint import __version__
from style_lint.config import apply_overrides, load_config
from style_lint.errors import ConfigurationError, LoadError
from style_lint.export import export_reports
from style_lint.pipeline import run_lint
from style_lint.reporting import FORMATS, render_run, render_summary
from style_lint.rules.registry import ALL_RULES, RuleRegistry, build_registry


logger = logging.getLogger("style_lint")

EXIT_CLEAN = 0
EXIT_FINDINGS = 1
EXIT_FAILURE = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="style-lint",
        description="Deterministic style-conformance linter for functional-style Python",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    check_parser = subparsers.add_parser("check", help="Lint files, directories or glob patterns")
    check_parser.add_argument("paths", nargs="+", help="Files, directories or glob patterns")
    check_parser.add_argument("--format", choices=FORMATS, default="human")
    check_parser.add_argument("--config", default=None, help="JSON or pyproject.toml config path")
    check_parser.add_argument("--enable", action="append", default=[], metavar="RULE_ID")
    check_parser.add_argument("--disable", action="append", default=[], metavar="RULE_ID")
    check_parser.add_argument("--jobs", type=int, default=1, help="Worker processes for analysis")
    check_parser.add_argument("--output-dir", default=None, help="Also write summary.json and findings.csv")
    check_parser.add_argument("-v", "--verbose", action="store_true")

    rules_parser = subparsers.add_parser("rules", help="List available rules")
    rules_parser.add_argument("--config", default=None)
    rules_parser.add_argument("--format", choices=FORMATS, default="human")

    return parser


def configure_logging(verbose: bool) -> None:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    logger.handlers[:] = [handler]
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(getattr(args, "verbose", False))

    try:
        config = load_config(args.config)
        if args.command == "check":
            config = apply_overrides(config, enable=args.enable, disable=args.disable)
        registry = build_registry(config)
    except ConfigurationError as exc:
        print(f"style-lint: configuration error: {exc}", file=sys.stderr)
        return EXIT_FAILURE

    if args.command == "rules":
        return _list_rules(registry, args.format)

    if args.command == "check":
        if args.jobs < 1:
            parser.error("--jobs must be at least 1")

        try:
            run = run_lint(args.paths, registry, config.scan, jobs=args.jobs)
        except LoadError as exc:
            print(f"style-lint: {exc}", file=sys.stderr)
            return EXIT_FAILURE

        sys.stdout.write(render_run(run, args.format))
        if args.format == "human":
            sys.stderr.write(render_summary(run))

        if args.output_dir:
            export_reports(run, registry, args.output_dir)

        if run.has_failures:
            return EXIT_FAILURE
        if run.has_findings:
            return EXIT_FINDINGS
        return EXIT_CLEAN

    parser.error(f"Unsupported command: {args.command}")
    return EXIT_FAILURE


def _list_rules(registry: RuleRegistry, fmt: str) -> int:
    enabled = {rule.rule_id: rule for rule in registry.rules()}
    rows = []
    for rule in ALL_RULES:
        active = enabled.get(rule.rule_id)
        rows.append(
            {
                "rule_id": rule.rule_id,
                "enabled": active is not None,
                "severity": (active or rule).severity.value,
                "description": rule.description,
            }
        )

    if fmt == "machine":
        for row in rows:
            print(json.dumps(row, sort_keys=True, ensure_ascii=True))
        return EXIT_CLEAN

    for row in rows:
        state = "on " if row["enabled"] else "off"
        print(f"{state} {row['severity']:<7} {row['rule_id']:<26} {row['description']}")
    return EXIT_CLEAN


if __name__ == "__main__":
    raise SystemExit(main())
