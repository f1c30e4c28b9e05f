"""Options and output shared by the extraction commands."""

import argparse
import logging
import pathlib
import sys
from gettext import gettext as _

from gurutext import argparse_utils, settings
from gurutext.catalog import Catalog
from gurutext.extractor import Extractor
from gurutext.positions import RequestedPosition

NOT_A_COMMAND = True
STDIO = "-"

logger = logging.getLogger(__name__)


def add_extraction_arguments(parser: argparse.ArgumentParser) -> None:
    """Add the options every extraction command understands."""
    parser.add_argument(
        "--exclude",
        type=argparse_utils.regex,
        default=None,
        metavar="REGEX",
        help=_("Exclude files matching the given regular expression"),
    )
    parser.add_argument(
        "--sort",
        action="store_true",
        default=False,
        help=_("Sort messages alphabetically"),
    )
    parser.add_argument(
        "--comment",
        default="",
        metavar="KEYWORD",
        help=_("Extract comments that start with the given keyword"),
    )
    parser.add_argument(
        "--ignore",
        default=settings.DEFAULT_IGNORE_MARKER,
        metavar="TEXT",
        help=_(
            "With --comment, ignore calls whose preceding comment contains "
            "this text (default: %(default)s)"
        ),
    )
    parser.add_argument(
        "-o",
        "--output",
        default=STDIO,
        help=_("Write the message template to this file (default: stdout)"),
    )


def extraction_settings(args: argparse.Namespace) -> settings.ExtractionSettings:
    """Build the extraction settings from parsed arguments."""
    return settings.ExtractionSettings(
        comment_prefix=args.comment,
        ignore_marker=args.ignore,
        exclude=args.exclude,
        sort=args.sort,
    )


def extract(
    positions, extraction: settings.ExtractionSettings
) -> tuple[Extractor, Catalog]:
    """Request every position and extract the catalog."""
    extractor = Extractor(extraction)
    requested = 0
    for position in positions:
        if extractor.add_position(position):
            requested += 1
    logger.info(
        _("Extracting %(count)s call sites from %(files)s files."),
        {"count": requested, "files": len(extractor.requests)},
    )
    return extractor, extractor.extract()


def write_catalog(catalog: Catalog, args: argparse.Namespace) -> bool:
    """Write the catalog where the user asked for it."""
    text = catalog.render(sort=args.sort)
    if args.output == STDIO:
        sys.stdout.write(text)
    else:
        pathlib.Path(args.output).write_text(text, encoding="utf-8")
        logger.info(
            _("Wrote %(count)s messages to %(path)s."),
            {"count": len(catalog), "path": args.output},
        )
    return True


def run_extraction(
    positions: list[RequestedPosition], args: argparse.Namespace
) -> bool:
    """Extract the given positions and write the catalog."""
    extractor, catalog = extract(positions, extraction_settings(args))
    if extractor.reporter.reported:
        logger.info(
            _("%(count)s call sites could not be extracted."),
            {"count": len(extractor.reporter.reported)},
        )
    return write_catalog(catalog, args)
