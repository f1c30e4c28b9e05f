"""Match requested positions against the calls of a parsed Go file."""

import logging
from gettext import gettext as _

from tree_sitter import Node, Tree

from gurutext import diagnostics
from gurutext.catalog import Entry
from gurutext.comments import CommentAssociator, CommentMap
from gurutext.literals import ArgumentKind, classify_argument, decode_argument
from gurutext.parsing import iter_nodes
from gurutext.positions import Location, MatchState, PositionIndex

logger = logging.getLogger(__name__)

CALL_TYPE = "call_expression"
NON_ARGUMENT_TYPES = frozenset({"comment"})


def node_location(node: Node) -> Location:
    """Return the 1-based location of a node's first byte."""
    row, column = node.start_point
    return Location(line=row + 1, column=column + 1)


def call_arguments(call: Node) -> tuple[Node | None, list[Node]]:
    """Return a call's argument list node and its argument expressions."""
    arguments = call.child_by_field_name("arguments")
    if arguments is None:
        return None, []
    return arguments, [
        child
        for child in arguments.named_children
        if child.type not in NON_ARGUMENT_TYPES
    ]


class CallMatcher:
    """Resolve the positions of one file in a single pass over its tree."""

    def __init__(
        self,
        index: PositionIndex,
        reporter: diagnostics.DiagnosticsReporter,
        associator: CommentAssociator | None = None,
    ):
        self.index = index
        self.reporter = reporter
        self.associator = associator or CommentAssociator(CommentMap())

    @property
    def filename(self) -> str:
        """Return the file whose positions are matched."""
        return self.index.filename

    def match(self, tree: Tree) -> list[Entry]:
        """Return one entry per requested position, in discovery order.

        Calls are visited in document order. Positions left pending after
        the walk are reported NOT_FOUND, in the order they were requested.
        """
        entries = []
        for node in iter_nodes(tree.root_node):
            if node.type != CALL_TYPE:
                continue
            entry = self.match_call(node)
            if entry is not None:
                entries.append(entry)
        for location in self.index.close():
            entries.append(Entry(self.filename, location, MatchState.NOT_FOUND))
        return entries

    def match_call(self, call: Node) -> Entry | None:
        """Try to resolve the position of a call's opening parenthesis."""
        arguments, args = call_arguments(call)
        if arguments is None:
            return None
        location = node_location(arguments)
        if not self.index.is_pending(location):
            return None

        call_line = node_location(call).line
        if self.associator.is_ignored(call_line):
            ignored_at = node_location(args[0]) if args else location
            logger.info(
                _("Ignoring call at %(position)s."),
                {"position": f"{self.filename}:{ignored_at}"},
            )
            self.index.resolve(location, MatchState.IGNORED)
            return Entry(self.filename, location, MatchState.IGNORED)

        if not args:
            self.reporter.report(
                diagnostics.no_argument(self.filename, node_location(call))
            )
            return None

        argument = classify_argument(args[0])
        if argument.kind is ArgumentKind.NON_LITERAL_REFERENCE:
            self.reporter.report(
                diagnostics.not_a_literal(
                    self.filename, node_location(argument.node), argument.node_type
                )
            )
            return None
        if argument.kind is ArgumentKind.UNSUPPORTED:
            self.reporter.report(
                diagnostics.unhandled_expression(
                    self.filename, node_location(argument.node), argument.node_type
                )
            )
            return None

        msgid = decode_argument(argument)
        self.index.resolve(location, MatchState.FOUND)
        logger.debug(
            _("Found %(msgid)s at %(position)s."),
            {"msgid": msgid, "position": f"{self.filename}:{location}"},
        )
        return Entry(
            self.filename,
            location,
            MatchState.FOUND,
            msgid=msgid,
            comment=self.associator.comment_for(call_line),
        )
