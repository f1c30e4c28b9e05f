"""Decode Go string literals and `+` concatenations into msgid values."""

import re
from dataclasses import dataclass
from enum import Enum
from gettext import gettext as _

from babel.messages.pofile import escape
from tree_sitter import Node

from gurutext.errors import InternalConsistencyError

INTERPRETED_STRING = "interpreted_string_literal"
RAW_STRING = "raw_string_literal"
STRING_LITERAL_TYPES = frozenset({INTERPRETED_STRING, RAW_STRING})
CONCATENATION_TYPES = frozenset({"binary_expression"})
REFERENCE_TYPES = frozenset({"identifier", "selector_expression", "call_expression"})

_SIMPLE_ESCAPES = {
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
    "\\": "\\",
    "'": "'",
    '"': '"',
}
_ESCAPE_RE = re.compile(
    r"""\\(?:
        (?P<simple>[abfnrtv\\'"])
        |(?P<octal>[0-7]{3})
        |x(?P<hex>[0-9a-fA-F]{2})
        |u(?P<short>[0-9a-fA-F]{4})
        |U(?P<long>[0-9a-fA-F]{8})
    )""",
    re.VERBOSE,
)
_CONTROL_ESCAPES = {"\a": "\\a", "\b": "\\b", "\f": "\\f", "\v": "\\v"}
_CONTROL_RE = re.compile(r"[\x00-\x1f\x7f]")


class ArgumentKind(Enum):
    """Shapes a call's first argument can take."""

    LITERAL = "literal"
    CONCATENATION = "concatenation"
    NON_LITERAL_REFERENCE = "non_literal_reference"
    UNSUPPORTED = "unsupported"

    @property
    def is_decodable(self) -> bool:
        """Return True if arguments of this kind yield a msgid."""
        return self in (ArgumentKind.LITERAL, ArgumentKind.CONCATENATION)


@dataclass(frozen=True)
class Argument:
    """A classified argument expression."""

    kind: ArgumentKind
    node: Node

    @property
    def node_type(self) -> str:
        """Return the grammar name of the expression."""
        return self.node.type


def classify_argument(node: Node) -> Argument:
    """Classify an argument expression by its syntax node type."""
    if node.type in STRING_LITERAL_TYPES:
        kind = ArgumentKind.LITERAL
    elif node.type in CONCATENATION_TYPES:
        kind = ArgumentKind.CONCATENATION
    elif node.type in REFERENCE_TYPES:
        kind = ArgumentKind.NON_LITERAL_REFERENCE
    else:
        kind = ArgumentKind.UNSUPPORTED
    return Argument(kind, node)


def decode_interpreted(literal: str) -> str:
    """Return the value of a double-quoted Go string literal."""
    body = literal[1:-1]
    value = bytearray()
    position = 0
    for match in _ESCAPE_RE.finditer(body):
        value += body[position : match.start()].encode("utf-8")
        if match["simple"]:
            value += _SIMPLE_ESCAPES[match["simple"]].encode("utf-8")
        elif match["octal"]:
            code = int(match["octal"], 8)
            if code > 0xFF:
                raise InternalConsistencyError(
                    _("octal escape value > 255: %(escape)s")
                    % {"escape": match.group()}
                )
            value.append(code)
        elif match["hex"]:
            value.append(int(match["hex"], 16))
        else:
            code = int(match["short"] or match["long"], 16)
            if code > 0x10FFFF:
                raise InternalConsistencyError(
                    _("escape sequence is invalid Unicode code point: %(escape)s")
                    % {"escape": match.group()}
                )
            value += chr(code).encode("utf-8", errors="replace")
        position = match.end()
    value += body[position:].encode("utf-8")
    return value.decode("utf-8", errors="replace")


def decode_raw(literal: str) -> str:
    """Return the value of a backquoted Go string literal."""
    # Go drops carriage returns from raw string literals.
    return literal[1:-1].replace("\r", "")


def decode_literal(node: Node) -> str:
    """Return the value of a string literal node."""
    text = node.text.decode("utf-8")
    if node.type == INTERPRETED_STRING:
        return decode_interpreted(text)
    if node.type == RAW_STRING:
        return decode_raw(text)
    raise InternalConsistencyError(
        _("%(position)s: not a string literal: %(type)s")
        % {"position": node_position(node), "type": node.type}
    )


def fold_concatenation(node: Node) -> str:
    """Return the value of a chain of `+` operations over string literals."""
    if node.type in STRING_LITERAL_TYPES:
        return decode_literal(node)
    if node.type not in CONCATENATION_TYPES:
        raise InternalConsistencyError(
            _("%(position)s: unhandled expression type %(type)s")
            % {"position": node_position(node), "type": node.type}
        )
    operator = node.child_by_field_name("operator")
    if operator is None or operator.type != "+":
        position = node_position(operator or node)
        raise InternalConsistencyError(
            _("%(position)s: not an add operation") % {"position": position}
        )
    left = node.child_by_field_name("left")
    right = node.child_by_field_name("right")
    if left is None or right is None:
        raise InternalConsistencyError(
            _("%(position)s: incomplete binary expression")
            % {"position": node_position(node)}
        )
    return fold_concatenation(left) + fold_concatenation(right)


def _escape_control(match: re.Match) -> str:
    char = match.group()
    return _CONTROL_ESCAPES.get(char, f"\\{ord(char):03o}")


def quote(value: str) -> str:
    """Quote a value for use as a msgid.

    Control characters Babel leaves alone are written as C escapes.
    """
    return _CONTROL_RE.sub(_escape_control, escape(value))


def decode_argument(argument: Argument) -> str:
    """Return the quoted msgid for a literal or concatenation argument."""
    if argument.kind is ArgumentKind.LITERAL:
        return quote(decode_literal(argument.node))
    if argument.kind is ArgumentKind.CONCATENATION:
        return quote(fold_concatenation(argument.node))
    raise InternalConsistencyError(
        _("%(position)s: %(kind)s argument cannot be decoded")
        % {"position": node_position(argument.node), "kind": argument.kind.value}
    )


def node_position(node: Node) -> str:
    """Return the 1-based line:column of a node's first byte."""
    row, column = node.start_point
    return f"{row + 1}:{column + 1}"
