from __future__ import annotations

import ast

from style_lint.models import Finding, Severity
from style_lint.rules.base import Rule, RuleOptions, to_finding


RULE_ID = "stable-order-literal"
SEVERITY = Severity.WARNING

UNORDERED_CONSTRUCTORS = {"set", "frozenset"}
ORDER_SENSITIVE_CALLS = {"list", "tuple", "enumerate"}
ORDER_INSENSITIVE_CONSUMERS = {"sorted", "set", "frozenset", "any", "all", "sum", "min", "max", "len"}


def check_stable_order(tree: ast.Module, options: RuleOptions) -> list[Finding]:
    findings: list[Finding] = []
    exempt = _comprehensions_fed_to_reducers(tree)

    for node in ast.walk(tree):
        if isinstance(node, (ast.For, ast.AsyncFor)):
            if _is_unordered(node.iter):
                findings.append(_finding(node.iter, "for loop"))

        elif isinstance(node, (ast.ListComp, ast.GeneratorExp, ast.DictComp)):
            if id(node) in exempt:
                continue
            for generator in node.generators:
                if _is_unordered(generator.iter):
                    findings.append(_finding(generator.iter, "comprehension"))

        elif isinstance(node, ast.Call) and node.args and _is_unordered(node.args[0]):
            func = node.func
            if isinstance(func, ast.Name) and func.id in ORDER_SENSITIVE_CALLS:
                findings.append(_finding(node.args[0], f"{func.id}()"))
            elif (
                isinstance(func, ast.Attribute)
                and func.attr == "join"
                and isinstance(func.value, ast.Constant)
                and isinstance(func.value.value, str)
            ):
                findings.append(_finding(node.args[0], "str.join()"))

    return findings


def _comprehensions_fed_to_reducers(tree: ast.Module) -> set[int]:
    exempt: set[int] = set()
    for node in ast.walk(tree):
        if (
            isinstance(node, ast.Call)
            and isinstance(node.func, ast.Name)
            and node.func.id in ORDER_INSENSITIVE_CONSUMERS
        ):
            for arg in node.args:
                if isinstance(arg, (ast.ListComp, ast.GeneratorExp)):
                    exempt.add(id(arg))
    return exempt


def _is_unordered(node: ast.AST) -> bool:
    if isinstance(node, (ast.Set, ast.SetComp)):
        return True
    return (
        isinstance(node, ast.Call)
        and isinstance(node.func, ast.Name)
        and node.func.id in UNORDERED_CONSTRUCTORS
    )


def _finding(node: ast.AST, context: str) -> Finding:
    return to_finding(
        RULE_ID,
        node,
        f"set iteration order is arbitrary but feeds an order-sensitive {context}; wrap it in sorted()",
        SEVERITY,
    )


RULE = Rule(
    rule_id=RULE_ID,
    description="unordered set iterated where output order matters",
    severity=SEVERITY,
    check=check_stable_order,
)
