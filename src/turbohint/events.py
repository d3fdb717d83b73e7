"""Events dispatched by the parser to rule listeners.

Each event is a read-only snapshot. `pos` is the absolute offset of the
event's first character and `line`/`col` its 1-based position.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from .tokens import Attribute


class _StrEnum(str, Enum):
    """Backport of enum.StrEnum (Python 3.11+)."""


class EventType(_StrEnum):
    START = "start"
    END = "end"
    TAG_START = "tagstart"
    TAG_END = "tagend"
    ATTR = "attr"
    TEXT = "text"
    COMMENT = "comment"
    DOCTYPE = "doctype"
    CDATA = "cdata"
    # Wildcard: listeners receive every event after the type-specific ones.
    ALL = "all"


# Event types that can be narrowed to a single element name.
TAG_SCOPED_EVENTS = frozenset([EventType.TAG_START, EventType.TAG_END, EventType.ATTR, EventType.CDATA])

_EVENT_NAME_SEPARATOR = re.compile(r"[,\s]+")


def parse_event_types(types):
    """Normalize an event type, a "text,comment" style string, or an iterable
    of either into a list of `EventType` members.

    Raises ValueError for unknown names.
    """
    if isinstance(types, EventType):
        return [types]
    if isinstance(types, str):
        names = [name for name in _EVENT_NAME_SEPARATOR.split(types) if name]
        if not names:
            raise ValueError("no event type given")
        return [EventType(name) for name in names]
    result = []
    for item in types:
        result.extend(parse_event_types(item))
    return result


@dataclass(frozen=True, slots=True)
class Event:
    type: EventType
    raw: str
    pos: int
    line: int
    col: int


@dataclass(frozen=True, slots=True)
class TagStartEvent(Event):
    tag_name: str
    attrs: tuple[Attribute, ...]
    # "/" for self-closing tags, "" otherwise.
    close: str


@dataclass(frozen=True, slots=True)
class TagEndEvent(Event):
    tag_name: str


@dataclass(frozen=True, slots=True)
class AttrEvent(Event):
    tag_name: str
    name: str
    value: str
    quote: str
    index: int


@dataclass(frozen=True, slots=True)
class TextEvent(Event):
    pass


@dataclass(frozen=True, slots=True)
class CommentEvent(Event):
    content: str
    long: bool
    conditional: bool


@dataclass(frozen=True, slots=True)
class DoctypeEvent(Event):
    content: str
    name: str | None


@dataclass(frozen=True, slots=True)
class CDataEvent(Event):
    tag_name: str
    attrs: tuple[Attribute, ...]
