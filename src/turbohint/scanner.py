from __future__ import annotations

import re
from collections.abc import Iterator

from .constants import CDATA_ELEMENTS
from .tokens import Attribute, CData, Comment, ConditionalComment, Doctype, EndTag, StartTag, Text, Token

_TAG_NAME_PATTERN = re.compile(r"<([\w\-:]+)", re.ASCII)
_ATTR_PATTERN = re.compile(
    r"""(\s+)([^\s"'<>/=\x00-\x0F\x7F\x80-\x9F]+)(?:\s*=\s*(?:"([^"]*)"|'([^']*)'|([^\s"'>]*)))?"""
)
_TAG_CLOSE_PATTERN = re.compile(r"\s*(/?)>")
_END_TAG_PATTERN = re.compile(r"</([^\s>]+)\s*>")
_DOCTYPE_PATTERN = re.compile(r"DOCTYPE(?![^\s>])\s*([^\s>]*)", re.IGNORECASE)
_CONDITION_PATTERN = re.compile(r"(?:<!)?\[\s*(if\b[^\]]*?|endif)\s*\]", re.IGNORECASE)
_CDATA_END_PATTERNS = {name: re.compile(rf"</({name})\s*>", re.IGNORECASE) for name in CDATA_ELEMENTS}


class Scanner:
    """Lazy, lossless lexer over a complete document buffer.

    Markup that cannot be recognised stays part of the surrounding text, so
    scanning never fails and the raw text of the yielded tokens always
    concatenates back to the input.
    """

    __slots__ = ("buffer", "length")

    buffer: str
    length: int

    def __init__(self, html: str | None) -> None:
        self.buffer = html or ""
        self.length = len(self.buffer)

    def __iter__(self) -> Iterator[Token]:
        return self.tokens()

    def tokens(self) -> Iterator[Token]:
        buffer = self.buffer
        length = self.length
        text_start = 0
        pos = 0
        # Every iteration moves `pos` strictly forward: either past a
        # rejected "<" or to the end of a recognised token.
        while pos < length:
            lt = buffer.find("<", pos)
            if lt == -1:
                break
            token = self._scan_markup(lt)
            if token is None:
                pos = lt + 1
                continue
            if lt > text_start:
                yield Text(buffer[text_start:lt], text_start, lt)
            yield token
            pos = text_start = token.end

            if isinstance(token, StartTag):
                end_pattern = _CDATA_END_PATTERNS.get(token.name.lower())
                if end_pattern is not None:
                    cdata, end_tag = self._scan_cdata(token.name, end_pattern, pos)
                    yield cdata
                    if end_tag is None:
                        return
                    yield end_tag
                    pos = text_start = end_tag.end

        if text_start < length:
            yield Text(buffer[text_start:], text_start, length)

    # ---------------------
    # Markup scanners
    # ---------------------

    def _scan_markup(self, pos: int) -> Token | None:
        following = self.buffer[pos + 1 : pos + 2]
        if following == "/":
            return self._scan_end_tag(pos)
        if following == "!":
            return self._scan_declaration(pos)
        return self._scan_start_tag(pos)

    def _scan_start_tag(self, pos: int) -> StartTag | None:
        buffer = self.buffer
        match = _TAG_NAME_PATTERN.match(buffer, pos)
        if match is None:
            return None
        cursor = match.end()
        attrs = []
        while True:
            attr_match = _ATTR_PATTERN.match(buffer, cursor)
            if attr_match is None:
                break
            attrs.append(self._make_attribute(attr_match, pos))
            cursor = attr_match.end()
        close = _TAG_CLOSE_PATTERN.match(buffer, cursor)
        if close is None:
            return None
        end = close.end()
        return StartTag(match.group(1), tuple(attrs), close.group(1) == "/", buffer[pos:end], pos, end)

    def _make_attribute(self, match: re.Match[str], tag_start: int) -> Attribute:
        name = match.group(2)
        if match.group(3) is not None:
            quote, value = '"', match.group(3)
        elif match.group(4) is not None:
            quote, value = "'", match.group(4)
        else:
            quote, value = "", match.group(5) or ""
        start = match.start(2)
        end = match.end()
        return Attribute(name, value, quote, start - tag_start, self.buffer[start:end], start, end)

    def _scan_end_tag(self, pos: int) -> EndTag | None:
        match = _END_TAG_PATTERN.match(self.buffer, pos)
        if match is None:
            return None
        return EndTag(match.group(1), match.group(0), pos, match.end())

    def _scan_declaration(self, pos: int) -> Comment | ConditionalComment | Doctype | None:
        buffer = self.buffer
        if buffer.startswith("<!--", pos):
            close = buffer.find("-->", pos + 4)
            if close != -1:
                end = close + 3
                content = buffer[pos + 4 : close]
                condition = _match_condition(content)
                if condition is not None:
                    return ConditionalComment(content, condition, False, buffer[pos:end], pos, end)
                return Comment(content, True, buffer[pos:end], pos, end)
            # An unterminated "<!--" falls through to the short <!...> form.

        close = buffer.find(">", pos + 2)
        if close == -1 or close == pos + 2:
            return None
        end = close + 1
        content = buffer[pos + 2 : close]
        raw = buffer[pos:end]
        if content[0] == "[":
            condition = _match_condition(content)
            if condition is not None:
                return ConditionalComment(content, condition, True, raw, pos, end)
        doctype = _DOCTYPE_PATTERN.match(content)
        if doctype is not None:
            return Doctype(content, doctype.group(1) or None, raw, pos, end)
        return Comment(content, False, raw, pos, end)

    def _scan_cdata(self, tag_name: str, end_pattern: re.Pattern[str], pos: int) -> tuple[CData, EndTag | None]:
        buffer = self.buffer
        match = end_pattern.search(buffer, pos)
        if match is None:
            return CData(tag_name, buffer[pos:], pos, self.length), None
        start = match.start()
        cdata = CData(tag_name, buffer[pos:start], pos, start)
        return cdata, EndTag(match.group(1), match.group(0), start, match.end())


def _match_condition(content: str) -> str | None:
    match = _CONDITION_PATTERN.match(content)
    if match is None:
        return None
    return match.group(1).strip()


def scan(html: str | None) -> list[Token]:
    """Return the top-level tokens of `html` as a list."""
    return list(Scanner(html))
