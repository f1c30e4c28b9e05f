"""Turn requested call-site positions into a catalog."""

import logging
from gettext import gettext as _

from gurutext import parsing, settings
from gurutext.catalog import Catalog, Entry
from gurutext.comments import CommentAssociator
from gurutext.diagnostics import DiagnosticsReporter, SourceLineCache
from gurutext.matcher import CallMatcher
from gurutext.positions import Location, PositionIndex, RequestedPosition

logger = logging.getLogger(__name__)


class Extractor:
    """Collect requested positions per file, then extract them file by file."""

    def __init__(
        self,
        extraction: settings.ExtractionSettings | None = None,
        reporter: DiagnosticsReporter | None = None,
    ):
        self.settings = extraction or settings.ExtractionSettings()
        self.reporter = reporter or DiagnosticsReporter(
            SourceLineCache(strict=self.settings.strict_sources)
        )
        self.requests: dict[str, list[Location]] = {}

    def add(self, filename: str, line: int, column: int) -> bool:
        """Request a position; return False if the file is excluded."""
        if self.settings.is_excluded(filename):
            logger.debug(_("Excluding %(filename)s"), {"filename": filename})
            return False
        self.requests.setdefault(filename, []).append(
            Location(line=line, column=column)
        )
        return True

    def add_position(self, position: RequestedPosition) -> bool:
        """Request a position given as a RequestedPosition."""
        return self.add(
            position.filename, position.location.line, position.location.column
        )

    def extract_source(self, filename: str, source: bytes) -> list[Entry]:
        """Extract the requested positions of one file from its source code."""
        index = PositionIndex(filename, self.requests.get(filename, ()))
        if not len(index):
            return []
        tree = parsing.parse_source(filename, source)
        associator = CommentAssociator.from_settings(
            tree.root_node, source, self.settings
        )
        return CallMatcher(index, self.reporter, associator).match(tree)

    def extract(self) -> Catalog:
        """Read, parse and match every requested file once."""
        catalog = Catalog()
        for filename, locations in self.requests.items():
            logger.debug(
                _("Extracting %(count)s positions from %(filename)s"),
                {"count": len(locations), "filename": filename},
            )
            source = parsing.read_source(filename)
            catalog.add(filename, self.extract_source(filename, source))
        return catalog
