"""Report call sites that could not be turned into catalog entries."""

import logging
import pathlib
from dataclasses import dataclass
from enum import Enum
from gettext import gettext as _

from gurutext.errors import SourceUnavailableError
from gurutext.positions import Location

logger = logging.getLogger(__name__)


class DiagnosticKind(Enum):
    """Recoverable problems found at a requested call site."""

    NO_ARGUMENT = "no_argument"
    NOT_A_LITERAL = "not_a_literal"
    UNHANDLED_EXPRESSION = "unhandled_expression"


@dataclass(frozen=True)
class Diagnostic:
    """A recoverable problem and the source position it refers to."""

    kind: DiagnosticKind
    message: str
    filename: str
    location: Location

    @property
    def position(self) -> str:
        """Return the position as `file:line:column`."""
        return f"{self.filename}:{self.location}"


def no_argument(filename: str, location: Location) -> Diagnostic:
    """Build the diagnostic for a call without arguments."""
    return Diagnostic(
        DiagnosticKind.NO_ARGUMENT,
        _("no argument in function call"),
        filename,
        location,
    )


def not_a_literal(filename: str, location: Location, node_type: str) -> Diagnostic:
    """Build the diagnostic for an identifier, selector or call argument."""
    return Diagnostic(
        DiagnosticKind.NOT_A_LITERAL,
        _("argument not a string literal (%(type)s)") % {"type": node_type},
        filename,
        location,
    )


def unhandled_expression(
    filename: str, location: Location, node_type: str
) -> Diagnostic:
    """Build the diagnostic for an argument of any other kind."""
    return Diagnostic(
        DiagnosticKind.UNHANDLED_EXPRESSION,
        _("unhandled argument expression (%(type)s)") % {"type": node_type},
        filename,
        location,
    )


class SourceLineCache:
    """Lazily loaded source lines, keyed by file path.

    With `strict` unset, files that cannot be read simply have no lines.
    """

    def __init__(self, strict: bool = True):
        self.strict = strict
        self._lines: dict[str, list[str] | None] = {}

    def seed(self, filename: str, text: str) -> None:
        """Provide the content of a file instead of reading it."""
        self._lines[filename] = text.split("\n")

    def __contains__(self, filename: str) -> bool:
        return filename in self._lines

    def _load(self, filename: str) -> list[str] | None:
        try:
            content = pathlib.Path(filename).read_bytes()
        except OSError as error:
            if self.strict:
                raise SourceUnavailableError(
                    _("%(filename)s: %(error)s")
                    % {"filename": filename, "error": error}
                ) from error
            logger.debug(
                _("Cannot read %(filename)s to show context: %(error)s"),
                {"filename": filename, "error": error},
            )
            return None
        return content.decode("utf-8", errors="replace").split("\n")

    def line(self, filename: str, number: int) -> str | None:
        """Return the 1-based line of a file, or None if it is unavailable."""
        if filename not in self._lines:
            self._lines[filename] = self._load(filename)
        lines = self._lines[filename]
        if lines is None or not 0 < number <= len(lines):
            return None
        return lines[number - 1]


def caret_line(line: str, column: int) -> str:
    """Return a line pointing at a 1-based byte column of line."""
    prefix = line.encode("utf-8")[: column - 1].decode("utf-8", errors="ignore")
    return "".join("\t" if char == "\t" else " " for char in prefix) + "^"


class DiagnosticsReporter:
    """Log diagnostics along with the source line they point at."""

    def __init__(self, cache: SourceLineCache | None = None):
        self.cache = cache if cache is not None else SourceLineCache()
        self.reported: list[Diagnostic] = []

    def render(self, diagnostic: Diagnostic) -> str:
        """Return the message, position, source line and caret of a diagnostic."""
        lines = [diagnostic.message, f"{diagnostic.position}:"]
        source_line = self.cache.line(diagnostic.filename, diagnostic.location.line)
        if source_line is not None:
            lines.append(source_line)
            lines.append(caret_line(source_line, diagnostic.location.column))
        return "\n".join(lines)

    def report(self, diagnostic: Diagnostic) -> None:
        """Log a diagnostic as a warning and remember it."""
        self.reported.append(diagnostic)
        logger.warning("%s", self.render(diagnostic))
