from __future__ import annotations

import ast
import io
import logging
import re
import tokenize
from dataclasses import replace

from style_lint.errors import ParseError, RuleEvaluationError
from style_lint.models import Finding, Report, RuleFailure, SourceUnit
from style_lint.rules.base import Rule
from style_lint.rules.registry import RuleRegistry


logger = logging.getLogger(__name__)

SUPPRESSION_PATTERN = re.compile(r"style-lint:\s*disable=([\w\-]+(?:\s*,\s*[\w\-]+)*)")


def analyze(unit: SourceUnit, registry: RuleRegistry) -> Report:
    tree = parse_unit(unit)
    suppressions = _suppressions(unit)

    findings: list[Finding] = []
    failures: list[RuleFailure] = []

    for rule in registry.rules():
        try:
            produced = _evaluate(rule, tree, registry, unit)
        except RuleEvaluationError as exc:
            logger.error("%s", exc, exc_info=exc.cause)
            cause = f"{type(exc.cause).__name__}: {exc.cause}"
            failures.append(RuleFailure(rule_id=rule.rule_id, path=unit.path, message=cause))
            continue

        for item in produced:
            if _is_suppressed(item, suppressions):
                logger.debug("Suppressed %s at %s:%s", item.rule_id, unit.path, item.line)
                continue
            if item.severity != rule.severity:
                item = replace(item, severity=rule.severity)
            findings.append(item)

    findings.sort(key=Finding.sort_key)
    return Report(path=unit.path, findings=tuple(findings), rule_failures=tuple(failures))


def parse_unit(unit: SourceUnit) -> ast.Module:
    try:
        return ast.parse(unit.text, filename=unit.path)
    except SyntaxError as exc:
        raise ParseError(
            unit.path,
            exc.lineno or 1,
            exc.offset or 1,
            exc.msg or "invalid syntax",
        ) from exc
    except ValueError as exc:
        # Older interpreters reject NUL bytes with ValueError instead of SyntaxError.
        raise ParseError(unit.path, 1, 1, str(exc)) from exc
    except (RecursionError, MemoryError) as exc:
        raise ParseError(unit.path, 1, 1, f"source too deeply nested to parse: {type(exc).__name__}") from exc


def _evaluate(rule: Rule, tree: ast.Module, registry: RuleRegistry, unit: SourceUnit) -> list[Finding]:
    try:
        return list(rule.evaluate(tree, registry.options))
    except Exception as exc:
        raise RuleEvaluationError(rule.rule_id, unit.path, exc) from exc


def _suppressions(unit: SourceUnit) -> dict[int, set[str]]:
    suppressed: dict[int, set[str]] = {}
    if "style-lint:" not in unit.text:
        return suppressed

    tokens = tokenize.generate_tokens(io.StringIO(unit.text).readline)
    try:
        for token in tokens:
            if token.type != tokenize.COMMENT:
                continue
            match = SUPPRESSION_PATTERN.search(token.string)
            if not match:
                continue
            ids = {item.strip() for item in match.group(1).split(",") if item.strip()}
            suppressed.setdefault(token.start[0], set()).update(ids)
    except (tokenize.TokenError, SyntaxError) as exc:
        logger.debug("Stopped reading suppression comments in %s: %s", unit.path, exc)

    return suppressed


def _is_suppressed(finding: Finding, suppressions: dict[int, set[str]]) -> bool:
    ids = suppressions.get(finding.line)
    if not ids:
        return False
    return "all" in ids or finding.rule_id in ids
