from __future__ import annotations

import ast

from style_lint.models import Finding, Severity
from style_lint.rules.base import Rule, RuleOptions, to_finding


RULE_ID = "no-global-statement"
SEVERITY = Severity.ERROR


def check_global_statement(tree: ast.Module, options: RuleOptions) -> list[Finding]:
    findings: list[Finding] = []
    for node in ast.walk(tree):
        if isinstance(node, ast.Global):
            names = ", ".join(node.names)
            findings.append(
                to_finding(
                    RULE_ID,
                    node,
                    f"'global {names}' rebinds module state; return the new value instead",
                    SEVERITY,
                )
            )
    return findings


RULE = Rule(
    rule_id=RULE_ID,
    description="global statement rebinds module-level state",
    severity=SEVERITY,
    check=check_global_statement,
)
