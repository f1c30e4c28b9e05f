"""Associate comment blocks with the calls that follow them."""

import logging
import re
from dataclasses import dataclass
from gettext import gettext as _

from tree_sitter import Node

from gurutext import settings
from gurutext.parsing import iter_nodes

logger = logging.getLogger(__name__)

COMMENT_TYPE = "comment"
_DIRECTIVE_RE = re.compile(r"^[a-z0-9]+:[a-z0-9]")
_DIRECTIVE_PREFIXES = ("line ", "extern ", "export ")


@dataclass(frozen=True)
class CommentGroup:
    """A run of adjacent comments with no code or blank line between them."""

    start_line: int
    end_line: int
    comments: tuple[str, ...]

    def raw_lines(self) -> list[str]:
        """Return every source line of the group, markers included."""
        return [line for comment in self.comments for line in comment.splitlines()]

    def contains(self, marker: str) -> bool:
        """Return True if any line of the group contains marker."""
        return any(marker in line for line in self.raw_lines())

    def text_lines(self) -> list[str]:
        """Return the comment text with markers stripped.

        Leading blank lines are removed, runs of blank lines collapse into one
        and a trailing blank line is dropped.
        """
        lines = []
        for comment in self.comments:
            if comment.startswith("//"):
                text = comment[2:]
                if text.startswith(" "):
                    text = text[1:]
                elif _is_directive(text):
                    continue
            else:
                text = comment[2:-2]
            text = text.replace("\r\n", "\n")
            lines.extend(line.rstrip() for line in text.split("\n"))

        collapsed = []
        for line in lines:
            if line or (collapsed and collapsed[-1]):
                collapsed.append(line)
        if collapsed and not collapsed[-1]:
            collapsed.pop()
        return collapsed

    def select(self, prefix: str) -> tuple[str, ...] | None:
        """Return the lines from the first one starting with prefix to the end."""
        lines = self.text_lines()
        for index, line in enumerate(lines):
            if line.startswith(prefix):
                return tuple(lines[index:])
        return None


def _is_directive(text: str) -> bool:
    return text.startswith(_DIRECTIVE_PREFIXES) or bool(_DIRECTIVE_RE.match(text))


def _line_starts_with_code(source: bytes, node: Node) -> bool:
    line_start = source.rfind(b"\n", 0, node.start_byte) + 1
    return bool(source[line_start : node.start_byte].strip())


def collect_comment_groups(root: Node, source: bytes) -> list[CommentGroup]:
    """Group the comments of a syntax tree the way the Go parser does."""
    groups = []
    current: list[Node] = []
    trailing = False

    def flush():
        if current:
            groups.append(
                CommentGroup(
                    start_line=current[0].start_point[0] + 1,
                    end_line=current[-1].end_point[0] + 1,
                    comments=tuple(node.text.decode("utf-8") for node in current),
                )
            )
            current.clear()

    for node in iter_nodes(root):
        if node.type != COMMENT_TYPE:
            continue
        if current:
            previous = current[-1]
            gap = source[previous.end_byte : node.start_byte]
            same_line = node.start_point[0] == previous.end_point[0]
            adjacent = node.start_point[0] - previous.end_point[0] <= 1
            if gap.strip() or not adjacent or (trailing and not same_line):
                flush()
        if not current:
            trailing = _line_starts_with_code(source, node)
        current.append(node)
    flush()
    return groups


class CommentMap:
    """Look up comment groups by the line their last comment ends on."""

    def __init__(self, groups=()):
        self._by_end_line = {group.end_line: group for group in groups}

    @classmethod
    def from_tree(cls, root: Node, source: bytes) -> "CommentMap":
        """Build a map from every comment in a syntax tree."""
        return cls(collect_comment_groups(root, source))

    def __len__(self) -> int:
        return len(self._by_end_line)

    def preceding(self, line: int) -> CommentGroup | None:
        """Return the group ending on the line immediately above line."""
        return self._by_end_line.get(line - 1)


class CommentAssociator:
    """Apply the ignore marker and comment selection to matched calls."""

    def __init__(
        self, comment_map: CommentMap, prefix: str = "", ignore_marker: str = ""
    ):
        self.comment_map = comment_map
        self.prefix = prefix
        self.ignore_marker = ignore_marker

    @classmethod
    def from_settings(
        cls, root: Node, source: bytes, extraction: settings.ExtractionSettings
    ) -> "CommentAssociator":
        """Build an associator for one parsed file."""
        if extraction.needs_comment_map:
            comment_map = CommentMap.from_tree(root, source)
        else:
            comment_map = CommentMap()
        return cls(comment_map, extraction.comment_prefix, extraction.ignore_marker)

    def is_ignored(self, line: int) -> bool:
        """Return True if the comment above line carries the ignore marker.

        The marker is only honoured while comment extraction is enabled.
        """
        if not (self.prefix and self.ignore_marker):
            return False
        group = self.comment_map.preceding(line)
        return group is not None and group.contains(self.ignore_marker)

    def comment_for(self, line: int) -> tuple[str, ...] | None:
        """Return the selected translator comment for a call on line."""
        if not self.prefix:
            return None
        group = self.comment_map.preceding(line)
        if group is None:
            return None
        selected = group.select(self.prefix)
        if selected is None:
            logger.debug(
                _("Comment above line %(line)s has no line starting with %(prefix)r."),
                {"line": line, "prefix": self.prefix},
            )
        return selected
