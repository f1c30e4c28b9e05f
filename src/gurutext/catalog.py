"""Catalog entries and their message template text."""

from dataclasses import dataclass

from gurutext import settings
from gurutext.positions import Location, MatchState


@dataclass(frozen=True)
class Entry:
    """One requested call site and what was extracted for it.

    `msgid` is the quoted message text and is only set for FOUND entries.
    """

    filename: str
    location: Location
    state: MatchState
    msgid: str | None = None
    comment: tuple[str, ...] | None = None

    def __post_init__(self):
        if (self.msgid is not None) != (self.state is MatchState.FOUND):
            raise ValueError(f"msgid must be set exactly for found entries: {self}")

    @property
    def is_found(self) -> bool:
        """Return True if the entry belongs in the catalog."""
        return self.state is MatchState.FOUND

    @property
    def position(self) -> str:
        """Return the position as `file:line:column`."""
        return f"{self.filename}:{self.location}"

    def as_gettext(self) -> str:
        """Return the entry as message template text."""
        return as_gettext(self)


def comment_lines(comment) -> list[str]:
    """Render translator comment lines, dropping one trailing blank line."""
    lines = list(comment)
    if lines and not lines[-1]:
        lines.pop()
    marker = settings.TRANSLATOR_COMMENT_MARKER
    return [f"{marker} {line}" if line else marker for line in lines]


def as_gettext(entry: Entry) -> str:
    """Return the comment, reference, msgid and msgstr lines of an entry."""
    if not entry.is_found:
        raise ValueError(f"{entry.position} has no message ({entry.state.value})")
    lines = comment_lines(entry.comment) if entry.comment else []
    lines.append(f"{settings.REFERENCE_COMMENT_MARKER} {entry.position}")
    lines.append(f"msgid {entry.msgid}")
    lines.append('msgstr ""')
    return "\n".join(lines) + "\n"


class Catalog:
    """Entries grouped by file in discovery order."""

    def __init__(self):
        self._entries: dict[str, list[Entry]] = {}

    def add(self, filename: str, entries) -> None:
        """Append the entries extracted from a file."""
        self._entries.setdefault(filename, []).extend(entries)

    def files(self) -> list[str]:
        """Return the files in the order they were added."""
        return list(self._entries)

    def entries(self, filename: str | None = None) -> list[Entry]:
        """Return every entry, whatever its state, of one file or of all files."""
        if filename is not None:
            return list(self._entries.get(filename, []))
        return [entry for entries in self._entries.values() for entry in entries]

    def found(self) -> list[Entry]:
        """Return the catalog entries, file by file in discovery order."""
        return [entry for entry in self.entries() if entry.is_found]

    def __iter__(self):
        return iter(self.found())

    def __len__(self) -> int:
        return len(self.found())

    def sorted(self) -> list[Entry]:
        """Return the catalog entries ordered by msgid."""
        return sorted(self.found(), key=lambda entry: entry.msgid)

    def render(self, sort: bool = False) -> str:
        """Return the catalog text, each entry followed by a blank line."""
        entries = self.sorted() if sort else self.found()
        return "".join(f"{entry.as_gettext()}\n" for entry in entries)
