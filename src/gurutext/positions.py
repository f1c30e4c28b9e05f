"""Requested call-site positions and their resolution state."""

import logging
from dataclasses import dataclass
from enum import Enum
from gettext import gettext as _

logger = logging.getLogger(__name__)


class MatchState(Enum):
    """Resolution state of a requested position."""

    PENDING = "pending"
    FOUND = "found"
    NOT_FOUND = "not_found"
    IGNORED = "ignored"

    @property
    def is_terminal(self) -> bool:
        """Return True for states that can no longer change."""
        return self is not MatchState.PENDING


@dataclass(frozen=True, order=True)
class Location:
    """A 1-based line and byte column in a source file."""

    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


@dataclass(frozen=True)
class RequestedPosition:
    """A call site submitted for extraction."""

    filename: str
    location: Location

    def __str__(self) -> str:
        return f"{self.filename}:{self.location}"


class PositionIndex:
    """Per-file map of line -> column -> MatchState.

    Every location starts PENDING and moves to exactly one terminal state.
    """

    def __init__(self, filename: str, locations=()):
        self.filename = filename
        self._states: dict[int, dict[int, MatchState]] = {}
        self._order: list[Location] = []
        for location in locations:
            self.add(location)

    def add(self, location: Location) -> None:
        """Request a location; repeated requests are ignored."""
        columns = self._states.setdefault(location.line, {})
        if location.column not in columns:
            columns[location.column] = MatchState.PENDING
            self._order.append(location)

    def __len__(self) -> int:
        return len(self._order)

    def __iter__(self):
        return iter(self._order)

    def __contains__(self, location: Location) -> bool:
        return location.column in self._states.get(location.line, {})

    def state(self, location: Location) -> MatchState | None:
        """Return the state of a location, or None if it was never requested."""
        return self._states.get(location.line, {}).get(location.column)

    def is_pending(self, location: Location) -> bool:
        """Return True if the location was requested and is not resolved yet."""
        return self.state(location) is MatchState.PENDING

    def resolve(self, location: Location, state: MatchState) -> None:
        """Move a pending location to a terminal state."""
        current = self.state(location)
        if current is None:
            raise KeyError(location)
        if current is not MatchState.PENDING:
            raise ValueError(
                _("%(position)s is already %(state)s")
                % {
                    "position": f"{self.filename}:{location}",
                    "state": current.value,
                }
            )
        if not state.is_terminal:
            raise ValueError(_("cannot resolve a position to pending"))
        self._states[location.line][location.column] = state

    def pending(self) -> list[Location]:
        """Return still-pending locations in the order they were requested."""
        return [location for location in self._order if self.is_pending(location)]

    def close(self) -> list[Location]:
        """Mark every pending location NOT_FOUND and return those locations."""
        missing = self.pending()
        for location in missing:
            logger.debug(
                _("No usable call found at %(position)s."),
                {"position": f"{self.filename}:{location}"},
            )
            self._states[location.line][location.column] = MatchState.NOT_FOUND
        return missing
