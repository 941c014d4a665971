from __future__ import annotations

import ast

from style_lint.models import Finding, Severity
from style_lint.rules.base import Rule, RuleOptions, dotted_name, module_level_statements, to_finding


RULE_ID = "no-global-memoization"
SEVERITY = Severity.ERROR

MEMOIZERS = {"cache", "lru_cache", "functools.cache", "functools.lru_cache"}


def check_global_memoization(tree: ast.Module, options: RuleOptions) -> list[Finding]:
    findings: list[Finding] = []

    for func in _unnested_functions(tree.body):
        for decorator in func.decorator_list:
            memoizer = _memoizer_name(decorator)
            if memoizer:
                findings.append(
                    to_finding(
                        RULE_ID,
                        decorator,
                        f"'{func.name}' is memoized with process-wide '{memoizer}'; "
                        "pass an explicit cache instead",
                        SEVERITY,
                    )
                )

    for stmt in module_level_statements(tree.body):
        if not isinstance(stmt, (ast.Assign, ast.AnnAssign)) or stmt.value is None:
            continue
        value = stmt.value
        if not isinstance(value, ast.Call):
            continue
        memoizer = _memoizer_name(value.func)
        if memoizer:
            findings.append(
                to_finding(
                    RULE_ID,
                    value,
                    f"module-level callable is wrapped by process-wide '{memoizer}'; "
                    "pass an explicit cache instead",
                    SEVERITY,
                )
            )

    return findings


def _unnested_functions(body: list[ast.stmt]):
    for stmt in module_level_statements(body):
        if isinstance(stmt, (ast.FunctionDef, ast.AsyncFunctionDef)):
            yield stmt
        elif isinstance(stmt, ast.ClassDef):
            yield from _unnested_functions(stmt.body)


def _memoizer_name(node: ast.AST) -> str | None:
    # Accepts both "@lru_cache" and the factory form "@lru_cache(maxsize=128)".
    if isinstance(node, ast.Call):
        node = node.func
    name = dotted_name(node)
    if name in MEMOIZERS:
        return name
    return None


RULE = Rule(
    rule_id=RULE_ID,
    description="top-level declaration is wrapped by a memoizing adapter",
    severity=SEVERITY,
    check=check_global_memoization,
)
