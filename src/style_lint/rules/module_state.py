from __future__ import annotations

import ast

from style_lint.models import Finding, Severity
from style_lint.rules.base import Rule, RuleOptions, module_level_statements, to_finding


RULE_ID = "no-mutable-module-state"
SEVERITY = Severity.ERROR

MUTABLE_DISPLAYS = {
    ast.List: "list literal",
    ast.Dict: "dict literal",
    ast.Set: "set literal",
    ast.ListComp: "list comprehension",
    ast.DictComp: "dict comprehension",
    ast.SetComp: "set comprehension",
}

MUTABLE_CONSTRUCTORS = {"list", "dict", "set", "bytearray"}


def check_module_state(tree: ast.Module, options: RuleOptions) -> list[Finding]:
    findings: list[Finding] = []
    for stmt in module_level_statements(tree.body):
        if isinstance(stmt, ast.Assign):
            pairs = [pair for target in stmt.targets for pair in _bindings(target, stmt.value)]
        elif isinstance(stmt, ast.AnnAssign) and stmt.value is not None:
            pairs = _bindings(stmt.target, stmt.value)
        else:
            continue

        for name_node, value in pairs:
            kind = _mutable_kind(value)
            if kind is None or _is_dunder(name_node.id):
                continue
            findings.append(
                to_finding(
                    RULE_ID,
                    name_node,
                    f"module-level name '{name_node.id}' is bound to a mutable {kind}; "
                    "use an immutable tuple, frozenset or mapping proxy",
                    SEVERITY,
                )
            )

    return findings


def _bindings(target: ast.expr, value: ast.expr) -> list[tuple[ast.Name, ast.expr]]:
    if isinstance(target, ast.Name):
        return [(target, value)]
    if (
        isinstance(target, (ast.Tuple, ast.List))
        and isinstance(value, (ast.Tuple, ast.List))
        and len(target.elts) == len(value.elts)
        and not any(isinstance(item, ast.Starred) for item in target.elts)
    ):
        pairs: list[tuple[ast.Name, ast.expr]] = []
        for sub_target, sub_value in zip(target.elts, value.elts):
            pairs.extend(_bindings(sub_target, sub_value))
        return pairs
    return []


def _mutable_kind(value: ast.expr) -> str | None:
    for node_type, kind in MUTABLE_DISPLAYS.items():
        if isinstance(value, node_type):
            return kind
    if (
        isinstance(value, ast.Call)
        and isinstance(value.func, ast.Name)
        and value.func.id in MUTABLE_CONSTRUCTORS
    ):
        return f"{value.func.id}() instance"
    return None


def _is_dunder(name: str) -> bool:
    return name.startswith("__") and name.endswith("__")


RULE = Rule(
    rule_id=RULE_ID,
    description="module-level binding holds a mutable container",
    severity=SEVERITY,
    check=check_module_state,
)
