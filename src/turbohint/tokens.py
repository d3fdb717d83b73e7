"""Lexical tokens produced by the scanner.

Every token carries the exact source slice it was scanned from (`raw`) and
its absolute offsets (`start` inclusive, `end` exclusive), so the top-level
token stream concatenates back to the original document.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Attribute:
    name: str
    value: str
    quote: str
    # Offset of `raw` within the owning tag's raw text.
    index: int
    raw: str
    start: int
    end: int


@dataclass(frozen=True, slots=True)
class StartTag:
    name: str
    attrs: tuple[Attribute, ...]
    self_closing: bool
    raw: str
    start: int
    end: int

    def __repr__(self) -> str:
        attrs = " ".join(f"{attr.name}={attr.value!r}" for attr in self.attrs)
        closing = " /" if self.self_closing else ""
        return f"<start:{self.name}{closing} {attrs}>"


@dataclass(frozen=True, slots=True)
class EndTag:
    name: str
    raw: str
    start: int
    end: int

    def __repr__(self) -> str:
        return f"<end:{self.name}>"


@dataclass(frozen=True, slots=True)
class Text:
    raw: str
    start: int
    end: int


@dataclass(frozen=True, slots=True)
class Comment:
    content: str
    # True for <!-- ... -->, False for other <!...> declarations.
    long: bool
    raw: str
    start: int
    end: int


@dataclass(frozen=True, slots=True)
class ConditionalComment:
    content: str
    condition: str
    # True for the <![if ...]> / <![endif]> forms that are not hidden inside
    # a regular comment.
    downlevel: bool
    raw: str
    start: int
    end: int


@dataclass(frozen=True, slots=True)
class Doctype:
    content: str
    name: str | None
    raw: str
    start: int
    end: int


@dataclass(frozen=True, slots=True)
class CData:
    """Opaque content of a script or style element."""

    tag_name: str
    raw: str
    start: int
    end: int


Token = StartTag | EndTag | Text | Comment | ConditionalComment | Doctype | CData
