"""Helper functions to support argparse."""

import argparse
import re
from gettext import gettext as _

GURU_OFFSET_RE = re.compile(r".+:#\d+(,#\d+)?")


def regex(value: str) -> re.Pattern:
    """Compile a regular expression argument."""
    try:
        return re.compile(value)
    except re.error as error:
        raise argparse.ArgumentTypeError(
            _("invalid regular expression '%(value)s': %(error)s")
            % {"value": value, "error": error}
        ) from error


def guru_offset(value: str) -> str:
    """Enforce the `file.go:#offset` form guru expects."""
    if not GURU_OFFSET_RE.fullmatch(value):
        raise argparse.ArgumentTypeError(
            _("invalid offset '%(value)s', expected file.go:#offset")
            % {"value": value}
        )
    return value
