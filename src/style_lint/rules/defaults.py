from __future__ import annotations

import ast

from style_lint.models import Finding, Severity
from style_lint.rules.base import Rule, RuleOptions, to_finding


RULE_ID = "no-default-args"
SEVERITY = Severity.ERROR


def check_default_args(tree: ast.Module, options: RuleOptions) -> list[Finding]:
    findings: list[Finding] = []
    for node in ast.walk(tree):
        if not isinstance(node, (ast.FunctionDef, ast.AsyncFunctionDef, ast.Lambda)):
            continue

        owner = "lambda" if isinstance(node, ast.Lambda) else f"function '{node.name}'"
        for arg in _defaulted_parameters(node.args):
            findings.append(
                to_finding(
                    RULE_ID,
                    arg,
                    f"parameter '{arg.arg}' of {owner} has a default value; "
                    "pass it explicitly at every call site",
                    SEVERITY,
                )
            )

    return findings


def _defaulted_parameters(args: ast.arguments) -> list[ast.arg]:
    positional = [*args.posonlyargs, *args.args]
    defaulted = positional[len(positional) - len(args.defaults):] if args.defaults else []
    for arg, default in zip(args.kwonlyargs, args.kw_defaults):
        if default is not None:
            defaulted.append(arg)
    return defaulted


RULE = Rule(
    rule_id=RULE_ID,
    description="function, method or lambda parameter declares a default value",
    severity=SEVERITY,
    check=check_default_args,
)
