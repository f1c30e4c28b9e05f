"""Extract the strings passed to the callers of Go functions."""

import argparse
from gettext import gettext as _

from gurutext import argparse_utils, guru
from gurutext.commands import common


def get_help() -> str:
    """Get the help/docstring for this command."""
    return _("Extract strings passed to the functions at the given offsets.")


def setup_parser(parser: argparse.ArgumentParser) -> None:
    """Add arguments to this command's argparse subparser."""
    parser.add_argument(
        "--scope",
        default="",
        metavar="PATTERNS",
        help=_("Package patterns for guru's -scope argument"),
    )
    common.add_extraction_arguments(parser)
    parser.add_argument(
        "offsets",
        nargs="+",
        type=argparse_utils.guru_offset,
        metavar="file.go:#offset",
        help=_("Position of a function declaration whose callers to extract"),
    )


def collect_positions(offsets: list[str], scope: str = "") -> list:
    """Ask guru for the callers at every offset and split their positions."""
    positions = []
    for offset in offsets:
        for caller in guru.run_guru(offset, scope or None):
            positions.append(guru.split_position(caller.pos))
    return positions


def run(args: argparse.Namespace) -> bool:
    """Extract the strings passed to every caller of the given functions."""
    positions = collect_positions(args.offsets, args.scope)
    return common.run_extraction(positions, args)
