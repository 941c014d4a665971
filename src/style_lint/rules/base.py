from __future__ import annotations

import ast
from dataclasses import dataclass
from typing import Callable

from style_lint.models import Finding, Severity


@dataclass(frozen=True)
class RuleOptions:
    import_allowlist: tuple[str, ...] = ()


CheckFunction = Callable[[ast.Module, RuleOptions], list[Finding]]


@dataclass(frozen=True)
class Rule:
    """A named, pure check over a parsed module.

    ``check`` must be a module-level function so registries stay picklable
    for the process pool in :mod:`style_lint.pipeline`.
    """

    rule_id: str
    description: str
    severity: Severity
    check: CheckFunction

    def evaluate(self, tree: ast.Module, options: RuleOptions) -> list[Finding]:
        return self.check(tree, options)


def to_finding(rule_id: str, node: ast.AST, message: str, severity: Severity) -> Finding:
    return Finding(
        rule_id=rule_id,
        line=getattr(node, "lineno", 1),
        column=getattr(node, "col_offset", 0) + 1,
        message=message,
        severity=severity,
    )


def dotted_name(node: ast.AST) -> str | None:
    if isinstance(node, ast.Name):
        return node.id
    if isinstance(node, ast.Attribute):
        base = dotted_name(node.value)
        if base is None:
            return None
        return f"{base}.{node.attr}"
    return None


def module_level_statements(body: list[ast.stmt]):
    # Descends into top-level control flow blocks but never into defs.
    for stmt in body:
        yield stmt
        if isinstance(stmt, ast.If):
            yield from module_level_statements(stmt.body)
            yield from module_level_statements(stmt.orelse)
        elif isinstance(stmt, (ast.Try, ast.TryStar)):
            yield from module_level_statements(stmt.body)
            for handler in stmt.handlers:
                yield from module_level_statements(handler.body)
            yield from module_level_statements(stmt.orelse)
            yield from module_level_statements(stmt.finalbody)
        elif isinstance(stmt, (ast.With, ast.AsyncWith)):
            yield from module_level_statements(stmt.body)
