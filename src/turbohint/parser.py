"""Event-dispatching HTML parser used by the linter."""

from __future__ import annotations

from collections.abc import Callable, Iterable

from .constants import VOID_ELEMENTS
from .events import (
    TAG_SCOPED_EVENTS,
    AttrEvent,
    CDataEvent,
    CommentEvent,
    DoctypeEvent,
    Event,
    EventType,
    TagEndEvent,
    TagStartEvent,
    TextEvent,
    parse_event_types,
)
from .positions import LineTracker, Position, fix_pos
from .scanner import Scanner
from .tokens import Attribute, CData, Comment, ConditionalComment, Doctype, EndTag, StartTag, Text, Token

Handler = Callable[[Event], object]


class _Listener:
    __slots__ = ("event_type", "handler", "tag_name")

    event_type: EventType
    handler: Handler
    tag_name: str | None

    def __init__(self, event_type: EventType, handler: Handler, tag_name: str | None) -> None:
        self.event_type = event_type
        self.handler = handler
        self.tag_name = tag_name


class HTMLParser:
    """Drives the scanner and fans events out to registered listeners.

    Listeners for an event type run synchronously in registration order,
    followed by the wildcard (`EventType.ALL`) listeners. A listener
    registered with a `tag_name` only sees events for that element.
    """

    __slots__ = ("_cdata_attrs", "_listeners", "_lines", "_open_tags")

    _cdata_attrs: tuple[Attribute, ...]
    _listeners: dict[EventType, list[_Listener]]
    _lines: LineTracker
    _open_tags: list[str]

    def __init__(self) -> None:
        self._listeners = {event_type: [] for event_type in EventType}
        self._lines = LineTracker()
        self._open_tags = []
        self._cdata_attrs = ()

    # ---------------------
    # Listener registry
    # ---------------------

    def add_listener(
        self, types: EventType | str | Iterable[EventType | str], handler: Handler, tag_name: str | None = None
    ) -> tuple[_Listener, ...]:
        event_types = parse_event_types(types)
        if tag_name is not None:
            unscoped = [event_type.value for event_type in event_types if event_type not in TAG_SCOPED_EVENTS]
            if unscoped:
                raise ValueError(f"tag_name cannot narrow event types: {', '.join(unscoped)}")
            tag_name = tag_name.lower()
        added = []
        for event_type in event_types:
            listener = _Listener(event_type, handler, tag_name)
            self._listeners[event_type].append(listener)
            added.append(listener)
        return tuple(added)

    def remove_listener(self, types: EventType | str | Iterable[EventType | str], handler: Handler) -> None:
        for event_type in parse_event_types(types):
            listeners = self._listeners[event_type]
            for index, listener in enumerate(listeners):
                if listener.handler == handler:
                    del listeners[index]
                    break

    def detach_listeners(self, listeners: Iterable[_Listener]) -> None:
        """Remove exactly the listener records returned by `add_listener`."""
        for listener in listeners:
            registered = self._listeners[listener.event_type]
            for index, candidate in enumerate(registered):
                if candidate is listener:
                    del registered[index]
                    break

    @property
    def open_tags(self) -> tuple[str, ...]:
        """Names of the elements currently open, outermost first."""
        return tuple(self._open_tags)

    # ---------------------
    # Parsing
    # ---------------------

    def parse(self, html: str | None) -> None:
        html = html or ""
        self._lines.reset()
        self._open_tags.clear()
        self._cdata_attrs = ()

        self._fire(Event(EventType.START, "", 0, 1, 1))
        for token in Scanner(html):
            self._process_token(token)
        position = self._lines.position(len(html))
        self._fire(Event(EventType.END, "", len(html), position.line, position.col))

    def fix_pos(self, event: Event, offset: int) -> Position:
        return fix_pos(event, offset)

    @staticmethod
    def get_map_attrs(attrs: Iterable[Attribute]) -> dict[str, str]:
        """Map attribute names to values; later duplicates win."""
        return {attr.name: attr.value for attr in attrs}

    def _process_token(self, token: Token) -> None:
        pos = token.start
        position = self._lines.position(pos)
        line, col = position.line, position.col
        raw = token.raw

        if isinstance(token, Text):
            self._fire(TextEvent(EventType.TEXT, raw, pos, line, col))
        elif isinstance(token, StartTag):
            self._handle_start_tag(token, line, col)
        elif isinstance(token, EndTag):
            self._pop_open_tag(token.name.lower())
            self._fire(TagEndEvent(EventType.TAG_END, raw, pos, line, col, token.name), token.name)
        elif isinstance(token, CData):
            attrs = self._cdata_attrs
            self._cdata_attrs = ()
            self._fire(CDataEvent(EventType.CDATA, raw, pos, line, col, token.tag_name, attrs), token.tag_name)
        elif isinstance(token, ConditionalComment):
            self._fire(CommentEvent(EventType.COMMENT, raw, pos, line, col, token.content, not token.downlevel, True))
        elif isinstance(token, Comment):
            self._fire(CommentEvent(EventType.COMMENT, raw, pos, line, col, token.content, token.long, False))
        elif isinstance(token, Doctype):
            self._fire(DoctypeEvent(EventType.DOCTYPE, raw, pos, line, col, token.content, token.name))
        else:
            raise TypeError(f"unexpected token: {token!r}")

        self._lines.advance(raw, pos)

    def _handle_start_tag(self, token: StartTag, line: int, col: int) -> None:
        name = token.name
        close = "/" if token.self_closing else ""
        event = TagStartEvent(EventType.TAG_START, token.raw, token.start, line, col, name, token.attrs, close)
        lowered = name.lower()
        if not token.self_closing and lowered not in VOID_ELEMENTS:
            self._open_tags.append(lowered)
        # Attributes of a script/style tag travel with its CDATA event.
        self._cdata_attrs = token.attrs
        self._fire(event, name)
        for attr in token.attrs:
            position = fix_pos(event, attr.index)
            self._fire(
                AttrEvent(
                    EventType.ATTR,
                    attr.raw,
                    attr.start,
                    position.line,
                    position.col,
                    name,
                    attr.name,
                    attr.value,
                    attr.quote,
                    attr.index,
                ),
                name,
            )

    def _pop_open_tag(self, name: str) -> None:
        stack = self._open_tags
        for index in range(len(stack) - 1, -1, -1):
            if stack[index] == name:
                del stack[index:]
                return

    def _fire(self, event: Event, tag_name: str | None = None) -> None:
        if tag_name is not None:
            tag_name = tag_name.lower()
        # Copy so listeners added during dispatch only see later events.
        for listener in list(self._listeners[event.type]):
            if listener.tag_name is None or listener.tag_name == tag_name:
                listener.handler(event)
        for listener in list(self._listeners[EventType.ALL]):
            listener.handler(event)
