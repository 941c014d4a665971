from __future__ import annotations

import ast

from style_lint.models import Finding, Severity
from style_lint.rules.base import Rule, RuleOptions, to_finding


RULE_ID = "import-module-not-names"
SEVERITY = Severity.WARNING


def check_import_names(tree: ast.Module, options: RuleOptions) -> list[Finding]:
    findings: list[Finding] = []
    for node in ast.walk(tree):
        if not isinstance(node, ast.ImportFrom):
            continue

        # "from . import sibling" binds a module of the current package.
        if node.level and not node.module:
            continue

        module = node.module or ""
        if not node.level and _is_allowlisted(module, options.import_allowlist):
            continue

        source = "." * node.level + module
        for alias in node.names:
            if alias.name == "*":
                message = f"wildcard import binds every public name of '{source}'; import the module instead"
            else:
                message = (
                    f"'from {source} import {alias.name}' binds an inner name; "
                    f"import '{source}' and refer to '{alias.name}' through it"
                )
            findings.append(to_finding(RULE_ID, alias, message, SEVERITY))

    return findings


def _is_allowlisted(module: str, allowlist: tuple[str, ...]) -> bool:
    return any(module == entry or module.startswith(f"{entry}.") for entry in allowlist)


RULE = Rule(
    rule_id=RULE_ID,
    description="from-import binds a symbol instead of the module (allowlist exempt)",
    severity=SEVERITY,
    check=check_import_names,
)
