"""Diagnostic collection for a single verify pass."""

import re

from .constants import LINE_TERMINATOR_PATTERN

_LINE_TERMINATOR = re.compile(LINE_TERMINATOR_PATTERN)


class Message:
    """One reported finding with its position and originating rule."""

    __slots__ = ("col", "evidence", "line", "message", "raw", "rule", "rule_description", "rule_link", "type")

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"

    def __init__(self, type, message, line, col, rule, raw="", evidence="", rule_description="", rule_link=None):
        self.type = type
        self.message = message
        self.line = line
        self.col = col
        self.rule = rule
        self.raw = raw
        self.evidence = evidence
        self.rule_description = rule_description
        self.rule_link = rule_link

    def as_dict(self):
        return {
            "type": self.type,
            "message": self.message,
            "raw": self.raw,
            "evidence": self.evidence,
            "line": self.line,
            "col": self.col,
            "column": self.col,
            "rule": self.rule,
        }

    def __repr__(self):
        return f"Message({self.rule!r}, line={self.line}, col={self.col}, type={self.type!r})"

    def __str__(self):
        return f"({self.line},{self.col}): {self.type} {self.rule} - {self.message}"

    def __eq__(self, other):
        if not isinstance(other, Message):
            return NotImplemented
        return self.as_dict() == other.as_dict()

    __hash__ = None  # Unhashable since we define __eq__


class Reporter:
    """Accumulates messages in emission order.

    Reporting never raises and never deduplicates: a rule that reports the
    same location twice produces two messages.
    """

    __slots__ = ("html", "line_break_width", "lines", "messages", "ruleset")

    def __init__(self, html, ruleset=None):
        self.html = html or ""
        self.lines = _LINE_TERMINATOR.split(self.html)
        match = _LINE_TERMINATOR.search(self.html)
        self.line_break_width = len(match.group(0)) if match else 1
        self.ruleset = dict(ruleset) if ruleset else {}
        self.messages = []

    def error(self, message, line, col, rule, raw=""):
        self.report(Message.ERROR, message, line, col, rule, raw)

    def warn(self, message, line, col, rule, raw=""):
        self.report(Message.WARNING, message, line, col, rule, raw)

    def info(self, message, line, col, rule, raw=""):
        self.report(Message.INFO, message, line, col, rule, raw)

    def report(self, type, message, line, col, rule, raw=""):
        lines = self.lines
        line_count = len(lines)
        # A column past the end of its line is carried onto the next lines.
        while 1 <= line < line_count:
            length = len(lines[line - 1])
            if col <= length:
                break
            line += 1
            col -= length
            if col != 1:
                col -= self.line_break_width
        evidence = lines[line - 1] if 1 <= line <= line_count else ""

        if isinstance(rule, str):
            rule_id, description, link = rule, "", None
        else:
            rule_id = getattr(rule, "id", None)
            description = getattr(rule, "description", "")
            link = getattr(rule, "link", None)

        self.messages.append(
            Message(
                type,
                message,
                line,
                col,
                rule_id,
                raw=raw,
                evidence=evidence,
                rule_description=description,
                rule_link=link,
            )
        )
