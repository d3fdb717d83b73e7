"""Rule runtime: runs a ruleset over one document and collects messages."""

import json
import logging
import re

from .context import RuleContext
from .parser import HTMLParser
from .reporter import Reporter
from .rules import default_registry

logger = logging.getLogger(__name__)

_INLINE_RULESET_PATTERN = re.compile(r"^\s*<!--\s*htmlhint\s+([^\r\n]+?)\s*-->", re.IGNORECASE)
_INLINE_RULE_PATTERN = re.compile(r"(?:^|,)\s*([^:,]+?)\s*(?::\s*([^,\s]+))?\s*(?=,|$)")


class RuleInitError(Exception):
    """A rule's `init` raised while subscribing to the parser."""

    def __init__(self, rule_id, error):
        self.rule_id = rule_id
        self.error = error
        super().__init__(f"Rule {rule_id!r} failed to initialize: {error}")


class LinterOpts:
    __slots__ = ("inline_config", "strict")

    def __init__(self, strict=False, inline_config=True):
        # Raise RuleInitError instead of skipping a rule whose init fails.
        self.strict = bool(strict)
        # Honour a leading <!-- htmlhint rule:value --> comment.
        self.inline_config = bool(inline_config)


class LintResult:
    __slots__ = ("failures", "messages", "ruleset")

    def __init__(self, messages, failures, ruleset):
        self.messages = messages
        self.failures = failures
        self.ruleset = ruleset

    def __repr__(self):
        return f"LintResult(messages={len(self.messages)}, failures={len(self.failures)})"


def parse_inline_ruleset(html):
    """Read the ruleset from a leading ``<!-- htmlhint ... -->`` comment.

    Items are ``rule-id`` or ``rule-id:value``; a bare id enables the rule.
    Values are decoded as JSON where possible and kept as strings otherwise.
    """
    match = _INLINE_RULESET_PATTERN.match(html or "")
    if match is None:
        return {}
    ruleset = {}
    for item in _INLINE_RULE_PATTERN.finditer(match.group(1)):
        key, value = item.group(1), item.group(2)
        if value is None:
            ruleset[key] = True
            continue
        try:
            ruleset[key] = json.loads(value)
        except ValueError:
            ruleset[key] = value
    return ruleset


class Linter:
    """Runs the rules of a registry over documents.

    Every call builds a fresh parser, reporter and rule contexts, so no
    state carries over between documents. The registry must not be
    modified while a call is running.
    """

    __slots__ = ("opts", "registry")

    def __init__(self, registry=None, opts=None):
        self.registry = registry if registry is not None else default_registry()
        self.opts = opts or LinterOpts()

    def verify(self, html, ruleset=None):
        return self.lint(html, ruleset).messages

    def lint(self, html, ruleset=None):
        html = html or ""
        ruleset = self.resolve_ruleset(html, ruleset)
        parser = HTMLParser()
        reporter = Reporter(html, ruleset)
        failures = []

        for rule in self.registry:
            if rule.id not in ruleset:
                continue
            options = ruleset[rule.id]
            if options is False:
                continue
            context = RuleContext(parser, reporter, rule, options)
            try:
                rule.init(context)
            except Exception as exc:
                failure = RuleInitError(rule.id, exc)
                if self.opts.strict:
                    raise failure from exc
                logger.exception("Rule %r failed to initialize; skipping it", rule.id)
                failure.__cause__ = exc
                context.detach()
                failures.append(failure)
                continue
            logger.debug("Activated rule %r", rule.id)

        parser.parse(html)
        return LintResult(reporter.messages, failures, ruleset)

    def resolve_ruleset(self, html, ruleset=None):
        if ruleset:
            resolved = dict(ruleset)
        else:
            resolved = {rule_id: True for rule_id in self.registry.get_rule_list()}
        if self.opts.inline_config:
            resolved.update(parse_inline_ruleset(html))
        unknown = [rule_id for rule_id in resolved if rule_id not in self.registry]
        if unknown:
            logger.warning("Ignoring unknown rules: %s", ", ".join(unknown))
        return resolved


def verify(html, ruleset=None):
    """Lint `html` with the built-in rules."""
    return Linter().verify(html, ruleset)
