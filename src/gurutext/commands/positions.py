"""Extract the strings passed to calls at explicit positions."""

import argparse
import pathlib
import sys
from gettext import gettext as _

from gurutext import guru
from gurutext.commands import common
from gurutext.errors import SourceUnavailableError
from gurutext.positions import RequestedPosition


def get_help() -> str:
    """Get the help/docstring for this command."""
    return _("Extract strings passed to calls at the given positions.")


def setup_parser(parser: argparse.ArgumentParser) -> None:
    """Add arguments to this command's argparse subparser."""
    common.add_extraction_arguments(parser)
    parser.add_argument(
        "files",
        nargs="*",
        default=[common.STDIO],
        metavar="FILE",
        help=_(
            "Files listing one path:line:column position per line "
            "(default: read standard input)"
        ),
    )


def parse_positions(lines) -> list[RequestedPosition]:
    """Split position lines, skipping blank lines and `#` comments."""
    positions = []
    for line in lines:
        line = line.strip()
        if line and not line.startswith("#"):
            positions.append(guru.split_position(line))
    return positions


def read_positions(files: list[str]) -> list[RequestedPosition]:
    """Read positions from files, where `-` is standard input."""
    positions = []
    for name in files:
        if name == common.STDIO:
            positions.extend(parse_positions(sys.stdin))
        else:
            try:
                text = pathlib.Path(name).read_text(encoding="utf-8")
            except OSError as error:
                raise SourceUnavailableError(
                    _("%(filename)s: %(error)s") % {"filename": name, "error": error}
                ) from error
            positions.extend(parse_positions(text.splitlines()))
    return positions


def run(args: argparse.Namespace) -> bool:
    """Extract the strings passed to calls at every listed position."""
    return common.run_extraction(read_positions(args.files), args)
