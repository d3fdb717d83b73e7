from .context import RuleContext
from .events import EventType
from .linter import Linter, LinterOpts, LintResult, RuleInitError, parse_inline_ruleset, verify
from .parser import HTMLParser
from .positions import Position, fix_pos
from .registry import Rule, RuleRegistry
from .reporter import Message, Reporter
from .rules import default_registry
from .scanner import Scanner, scan

__all__ = [
    "EventType",
    "HTMLParser",
    "LintResult",
    "Linter",
    "LinterOpts",
    "Message",
    "Position",
    "Reporter",
    "Rule",
    "RuleContext",
    "RuleInitError",
    "RuleRegistry",
    "Scanner",
    "default_registry",
    "fix_pos",
    "parse_inline_ruleset",
    "scan",
    "verify",
]
