from __future__ import annotations

from style_lint.rules.base import Rule, RuleOptions
from style_lint.rules.registry import ALL_RULES, RuleRegistry, build_registry, known_rule_ids

__all__ = [
    "ALL_RULES",
    "Rule",
    "RuleOptions",
    "RuleRegistry",
    "build_registry",
    "known_rule_ids",
]
