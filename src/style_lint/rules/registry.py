from __future__ import annotations

from dataclasses import dataclass, replace

from style_lint.errors import ConfigurationError
from style_lint.models import AppConfig
from style_lint.rules import defaults, global_statement, imports, memoization, module_state, ordering
from style_lint.rules.base import Rule, RuleOptions


ALL_RULES: tuple[Rule, ...] = (
    defaults.RULE,
    module_state.RULE,
    imports.RULE,
    memoization.RULE,
    ordering.RULE,
    global_statement.RULE,
)


@dataclass(frozen=True)
class RuleRegistry:
    enabled: tuple[Rule, ...]
    options: RuleOptions

    def rules(self) -> tuple[Rule, ...]:
        return self.enabled

    def rule_ids(self) -> tuple[str, ...]:
        return tuple(rule.rule_id for rule in self.enabled)


def known_rule_ids() -> tuple[str, ...]:
    return tuple(rule.rule_id for rule in ALL_RULES)


def validate_rule_ids(rule_ids) -> None:
    known = set(known_rule_ids())
    unknown = sorted(str(item) for item in rule_ids if item not in known)
    if unknown:
        raise ConfigurationError(
            f"Unknown rule id(s): {', '.join(unknown)}. Known rules: {', '.join(known_rule_ids())}"
        )


def build_registry(config: AppConfig) -> RuleRegistry:
    validate_rule_ids(config.rules)

    enabled: list[Rule] = []
    for rule in ALL_RULES:
        setting = config.rule_setting(rule.rule_id)
        if not setting.enabled:
            continue
        if setting.severity is not None and setting.severity != rule.severity:
            rule = replace(rule, severity=setting.severity)
        enabled.append(rule)

    return RuleRegistry(
        enabled=tuple(enabled),
        options=RuleOptions(import_allowlist=config.import_allowlist),
    )
