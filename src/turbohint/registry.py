"""Rule definitions and the registry that holds them.

Registries are ordinary objects: build one, register rules on it, and hand
it to a `Linter`. Several registries can coexist in one process.

Usage:
    registry = RuleRegistry()

    @registry.rule("no-empty-text", "Text nodes must not be empty.")
    def no_empty_text(context):
        context.add_listener("text", ...)
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)

RULE_LINK_TEMPLATE = "https://github.com/yaniswang/HTMLHint/wiki/{id}"


@dataclass(frozen=True, slots=True)
class Rule:
    id: str
    description: str
    # Called once per verify() with a RuleContext; subscribes listeners.
    init: Callable[[Any], None]
    link: str | None = None

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("rule id must be a non-empty string")
        if self.link is None:
            object.__setattr__(self, "link", RULE_LINK_TEMPLATE.format(id=self.id))


class RuleRegistry:
    __slots__ = ("_rules",)

    def __init__(self, rules=None):
        self._rules: dict[str, Rule] = {}
        for rule in rules or ():
            self.add_rule(rule)

    def add_rule(self, rule: Rule) -> Rule:
        """Register `rule`, replacing any rule with the same id.

        A replaced rule keeps its original position in the iteration order.
        """
        if rule.id in self._rules:
            logger.warning("Rule %r is already registered; replacing it", rule.id)
        else:
            logger.debug("Registered rule %r", rule.id)
        self._rules[rule.id] = rule
        return rule

    def rule(self, rule_id: str, description: str, link: str | None = None) -> Callable:
        """Decorator registering a plain `init(context)` function as a rule."""

        def decorator(init):
            self.add_rule(Rule(rule_id, description, init, link))
            return init

        return decorator

    def get_rule(self, rule_id: str) -> Rule | None:
        return self._rules.get(rule_id)

    def get_rule_list(self) -> list[str]:
        return list(self._rules)

    def __contains__(self, rule_id: object) -> bool:
        return rule_id in self._rules

    def __iter__(self) -> Iterator[Rule]:
        return iter(list(self._rules.values()))

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        return f"RuleRegistry({', '.join(self._rules)})"
