"""Tests for event dispatch in the HTML parser."""

from __future__ import annotations

import unittest

from turbohint.events import EventType
from turbohint.parser import HTMLParser
from turbohint.positions import Position


def _record(parser, types="all", **kwargs):
    events = []
    parser.add_listener(types, events.append, **kwargs)
    return events


class TestDispatch(unittest.TestCase):
    """Event order, positions and listener bookkeeping."""

    def test_event_sequence(self) -> None:
        """Events fire in document order between start and end."""
        parser = HTMLParser()
        events = _record(parser)
        parser.parse('<!DOCTYPE html>\n<p class="a">hi</p><!-- c -->')
        assert [event.type for event in events] == [
            EventType.START,
            EventType.DOCTYPE,
            EventType.TEXT,
            EventType.TAG_START,
            EventType.ATTR,
            EventType.TEXT,
            EventType.TAG_END,
            EventType.COMMENT,
            EventType.END,
        ]

    def test_event_positions(self) -> None:
        """Events carry absolute offsets and line/column positions."""
        parser = HTMLParser()
        events = _record(parser)
        parser.parse('<!DOCTYPE html>\n<p class="a">hi</p>')
        by_type = {}
        for event in events:
            by_type.setdefault(event.type, event)
        tag = by_type[EventType.TAG_START]
        assert (tag.line, tag.col, tag.pos) == (2, 1, 16)
        assert tag.tag_name == "p"
        assert tag.close == ""
        attr = by_type[EventType.ATTR]
        assert (attr.line, attr.col) == (2, 4)
        assert (attr.name, attr.value, attr.quote, attr.tag_name) == ("class", "a", '"', "p")
        text = [event for event in events if event.type == EventType.TEXT][-1]
        assert text.raw == "hi"
        assert (text.line, text.col) == (2, 14)

    def test_start_and_end_events(self) -> None:
        """The end event sits just past the last character."""
        parser = HTMLParser()
        events = _record(parser, "start, end")
        parser.parse("a\r\nbc")
        start, end = events
        assert (start.line, start.col, start.pos) == (1, 1, 0)
        assert (end.line, end.col, end.pos) == (2, 3, 5)

    def test_listeners_run_in_registration_order(self) -> None:
        """Typed listeners run in registration order, wildcards last."""
        parser = HTMLParser()
        calls = []
        parser.add_listener("all", lambda event: calls.append(("all", event.type)))
        parser.add_listener("text", lambda event: calls.append(("first", event.type)))
        parser.add_listener(EventType.TEXT, lambda event: calls.append(("second", event.type)))
        parser.parse("x")
        assert calls == [
            ("all", EventType.START),
            ("first", EventType.TEXT),
            ("second", EventType.TEXT),
            ("all", EventType.TEXT),
            ("all", EventType.END),
        ]

    def test_multiple_event_names(self) -> None:
        """A comma separated string subscribes to several events."""
        parser = HTMLParser()
        events = _record(parser, "text, comment")
        parser.parse("a<!--b--><i>")
        assert [event.type for event in events] == [EventType.TEXT, EventType.COMMENT]

    def test_event_type_list(self) -> None:
        """A list may mix enum members and names."""
        parser = HTMLParser()
        events = _record(parser, [EventType.TAG_START, "tagend"])
        parser.parse("<i>x</i>")
        assert [event.type for event in events] == [EventType.TAG_START, EventType.TAG_END]

    def test_unknown_event_name_raises(self) -> None:
        """Unknown or empty event names are rejected."""
        parser = HTMLParser()
        with self.assertRaises(ValueError):
            parser.add_listener("tagopen", print)
        with self.assertRaises(ValueError):
            parser.add_listener("", print)

    def test_remove_listener(self) -> None:
        """A removed listener receives no events."""
        parser = HTMLParser()
        events = []
        parser.add_listener("text", events.append)
        parser.remove_listener("text", events.append)
        parser.parse("x")
        assert events == []

    def test_add_listener_returns_one_record_per_event_type(self) -> None:
        """add_listener returns the records it registered."""
        parser = HTMLParser()
        records = parser.add_listener("text, comment", print)
        assert [record.event_type for record in records] == [EventType.TEXT, EventType.COMMENT]
        assert all(record.handler is print for record in records)

    def test_detach_listeners_removes_only_given_records(self) -> None:
        """Detaching by record leaves other registrations of the same handler."""
        parser = HTMLParser()
        seen = []

        def on_tag(event):
            seen.append(event.tag_name)

        parser.add_listener("tagstart", on_tag, tag_name="a")
        unscoped = parser.add_listener("tagstart", on_tag)
        parser.detach_listeners(unscoped)
        parser.parse("<a></a><b></b>")
        assert seen == ["a"]

    def test_listener_errors_propagate(self) -> None:
        """Exceptions raised by listeners reach the caller."""
        parser = HTMLParser()

        def explode(event):
            raise RuntimeError("boom")

        parser.add_listener("text", explode)
        with self.assertRaises(RuntimeError):
            parser.parse("x")


class TestTagScopedListeners(unittest.TestCase):
    """Listeners narrowed to a single element name."""

    def test_per_tag_listener(self) -> None:
        """A tag-scoped listener matches names case-insensitively."""
        parser = HTMLParser()
        anchors = _record(parser, "tagstart", tag_name="a")
        parser.parse("<a href=x><b></b></a><A>")
        assert [event.tag_name for event in anchors] == ["a", "A"]

    def test_per_tag_attr_listener(self) -> None:
        """Attribute events can be narrowed to one element."""
        parser = HTMLParser()
        attrs = _record(parser, "attr", tag_name="img")
        parser.parse("<img src=a alt=b><a href=c>")
        assert [event.name for event in attrs] == ["src", "alt"]

    def test_tag_name_rejected_for_unscoped_events(self) -> None:
        """tag_name cannot narrow events that have no element."""
        parser = HTMLParser()
        with self.assertRaises(ValueError):
            parser.add_listener("text", print, tag_name="p")


class TestEventPayloads(unittest.TestCase):
    """Fields carried by each event variant."""

    def test_cdata_carries_opening_tag_attrs(self) -> None:
        """CDATA events carry the attributes of their opening tag."""
        parser = HTMLParser()
        events = _record(parser, "cdata")
        parser.parse('<script type="module">\nlet a;</script><p>')
        (event,) = events
        assert event.tag_name == "script"
        assert event.raw == "\nlet a;"
        assert parser.get_map_attrs(event.attrs) == {"type": "module"}
        assert (event.line, event.col) == (1, 23)

    def test_comment_flags(self) -> None:
        """Comment events report long and conditional forms."""
        parser = HTMLParser()
        events = _record(parser, "comment")
        parser.parse("<!-- a --><!ENTITY x><!--[if IE]>y<![endif]--><![if !IE]>")
        assert [(event.long, event.conditional) for event in events] == [
            (True, False),
            (False, False),
            (True, True),
            (False, True),
        ]

    def test_doctype_event(self) -> None:
        """Doctype events expose name and content."""
        parser = HTMLParser()
        events = _record(parser, "doctype")
        parser.parse("<!doctype html>")
        assert events[0].name == "html"
        assert events[0].content == "doctype html"

    def test_self_closing_close_marker(self) -> None:
        """Self-closing tags report a slash close marker."""
        parser = HTMLParser()
        events = _record(parser, "tagstart")
        parser.parse("<br/><br>")
        assert [event.close for event in events] == ["/", ""]

    def test_get_map_attrs_last_wins(self) -> None:
        """Later duplicate attributes win in the mapping."""
        parser = HTMLParser()
        events = _record(parser, "tagstart")
        parser.parse("<p id=a id=b class=c>")
        assert parser.get_map_attrs(events[0].attrs) == {"id": "b", "class": "c"}


class TestParserState(unittest.TestCase):
    """Open-tag stack and per-parse state."""

    def test_open_tags(self) -> None:
        """Void and self-closing tags never open; stray end tags are ignored."""
        parser = HTMLParser()
        snapshots = {}
        parser.add_listener("text", lambda event: snapshots.setdefault(event.raw, parser.open_tags))
        parser.parse("<div><P>x</p><br><img/>y</span>z</div>w")
        assert snapshots["x"] == ("div", "p")
        assert snapshots["y"] == ("div",)
        assert snapshots["z"] == ("div",)
        assert snapshots["w"] == ()

    def test_end_tag_closes_unclosed_children(self) -> None:
        """An end tag pops everything above its match."""
        parser = HTMLParser()
        snapshots = []
        parser.add_listener("text", lambda event: snapshots.append(parser.open_tags))
        parser.parse("<ul><li><li>a</ul>b")
        assert snapshots == [("ul", "li", "li"), ()]

    def test_parse_resets_state(self) -> None:
        """Parsing the same input twice gives the same events."""
        parser = HTMLParser()
        events = _record(parser, "text")
        parser.parse("<div>\n\nx")
        first = [(event.raw, event.line, event.col) for event in events]
        snapshot = parser.open_tags
        events.clear()
        parser.parse("<div>\n\nx")
        assert [(event.raw, event.line, event.col) for event in events] == first
        assert parser.open_tags == snapshot == ("div",)

    def test_fix_pos(self) -> None:
        """The parser exposes fix_pos to rules."""
        parser = HTMLParser()
        events = _record(parser, "text")
        parser.parse("<p>ab\r\n cd</p>")
        (event,) = events
        assert parser.fix_pos(event, 1) == Position(1, 5)
        assert parser.fix_pos(event, 5) == Position(2, 2)


if __name__ == "__main__":
    unittest.main()
