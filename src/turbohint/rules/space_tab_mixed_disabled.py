import re

from ..registry import Rule

MESSAGE = "There were spaces and tabs used together in front of a line."

# Group 1 is the line start ("" or the terminator), group 2 the mixed run.
_MIXED_INDENT_PATTERN = re.compile(r"(^|\r?\n)( +\t|\t+ )")


def find_mixed_indents(raw):
    """Offsets in `raw` where a line starts with mixed spaces and tabs.

    Only the first space/tab boundary of each line is reported.
    """
    offsets = []
    pos = 0
    length = len(raw)
    while pos < length:
        match = _MIXED_INDENT_PATTERN.search(raw, pos)
        if match is None:
            break
        offsets.append(match.end(1))
        # The mixed run is never empty, so the cursor always moves forward.
        pos = max(match.end(), pos + 1)
    return offsets


def init(context):
    def on_text(event):
        for offset in find_mixed_indents(event.raw):
            position = context.fix_pos(event, offset)
            context.warn(MESSAGE, position.line, 1, event.raw)

    context.add_listener("text", on_text)


RULE = Rule(
    id="space-tab-mixed-disabled",
    description="Spaces and tabs cannot be used together in front of a line.",
    init=init,
)
