class RuleContext:
    """Per-verify handle given to a rule's `init`.

    Bundles the parser and reporter of one verify pass with the rule being
    initialized and its options. `state` is scratch space that lives exactly
    as long as the pass.
    """

    __slots__ = ("_subscriptions", "options", "parser", "reporter", "rule", "state")

    def __init__(self, parser, reporter, rule, options=True):
        self.parser = parser
        self.reporter = reporter
        self.rule = rule
        self.options = options
        self.state = {}
        self._subscriptions = []

    def __repr__(self):
        return f"RuleContext({self.rule.id})"

    def add_listener(self, types, handler, tag_name=None):
        listeners = self.parser.add_listener(types, handler, tag_name=tag_name)
        self._subscriptions.extend(listeners)
        return listeners

    def detach(self):
        """Remove every listener added through this context."""
        self.parser.detach_listeners(self._subscriptions)
        self._subscriptions.clear()

    def fix_pos(self, event, offset):
        return self.parser.fix_pos(event, offset)

    def error(self, message, line, col, raw=""):
        self.reporter.error(message, line, col, self.rule, raw)

    def warn(self, message, line, col, raw=""):
        self.reporter.warn(message, line, col, self.rule, raw)

    def info(self, message, line, col, raw=""):
        self.reporter.info(message, line, col, self.rule, raw)
