"""HTML element and pattern constants shared by the scanner and parser.

Usage:
    from turbohint.constants import VOID_ELEMENTS, CDATA_ELEMENTS

References:
    - https://html.spec.whatwg.org/multipage/syntax.html#void-elements
"""

# Elements that never have an end tag, so they are not pushed on the
# parser's open-tag stack. Includes the legacy names older documents use.
VOID_ELEMENTS = frozenset(
    [
        "area",
        "base",
        "basefont",
        "br",
        "col",
        "command",
        "embed",
        "frame",
        "hr",
        "img",
        "input",
        "isindex",
        "keygen",
        "link",
        "meta",
        "param",
        "source",
        "track",
        "wbr",
    ]
)

# Elements whose content is scanned as a single opaque CDATA run.
CDATA_ELEMENTS = frozenset(["script", "style"])

# Line terminators recognised for position mapping: "\n" and "\r\n".
LINE_TERMINATOR_PATTERN = r"\r?\n"

