"""Parse Go source files with tree-sitter."""

import logging
import pathlib
from gettext import gettext as _

from tree_sitter import Language, Node, Parser, Tree

from gurutext.errors import GoSyntaxError, SourceUnavailableError

logger = logging.getLogger(__name__)

_PARSER: Parser | None = None


def get_parser() -> Parser:
    """Return a cached tree-sitter parser for Go."""
    global _PARSER
    if _PARSER is None:
        import tree_sitter_go  # noqa: PLC0415

        _PARSER = Parser(Language(tree_sitter_go.language()))
    return _PARSER


def iter_nodes(node: Node):
    """Yield a node and all of its descendants in document order."""
    cursor = node.walk()
    visited_children = False
    while True:
        if not visited_children:
            yield cursor.node
            if cursor.goto_first_child():
                continue
        if cursor.goto_next_sibling():
            visited_children = False
        elif cursor.goto_parent():
            visited_children = True
        else:
            return


def find_error(node: Node) -> Node | None:
    """Return the first ERROR or MISSING node below node, if any."""
    if not node.has_error:
        return None
    for candidate in iter_nodes(node):
        if candidate.is_error or candidate.is_missing:
            return candidate
    return node


def parse_source(filename: str, source: bytes) -> Tree:
    """Parse Go source code, raising GoSyntaxError if it is not valid."""
    logger.debug(_("Parsing %(filename)s"), {"filename": filename})
    tree = get_parser().parse(source)
    error_node = find_error(tree.root_node)
    if error_node is not None:
        row, column = error_node.start_point
        if error_node.is_missing:
            detail = _("missing %(type)s") % {"type": error_node.type}
        else:
            detail = _("syntax error")
        raise GoSyntaxError(
            "%(filename)s:%(line)d:%(column)d: %(detail)s"
            % {
                "filename": filename,
                "line": row + 1,
                "column": column + 1,
                "detail": detail,
            }
        )
    return tree


def read_source(filename: str) -> bytes:
    """Read the bytes of a source file."""
    try:
        return pathlib.Path(filename).read_bytes()
    except OSError as error:
        raise SourceUnavailableError(
            _("%(filename)s: %(error)s") % {"filename": filename, "error": error}
        ) from error
