"""Built-in rules."""

from ..registry import RuleRegistry
from . import space_tab_mixed_disabled

BUILTIN_RULES = (space_tab_mixed_disabled.RULE,)


def register_builtin_rules(registry):
    for rule in BUILTIN_RULES:
        registry.add_rule(rule)
    return registry


def default_registry():
    """A new registry holding every built-in rule."""
    return register_builtin_rules(RuleRegistry())
