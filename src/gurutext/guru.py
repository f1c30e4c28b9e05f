"""Find call sites with the `guru` caller analysis tool."""

import json
import logging
from dataclasses import dataclass
from gettext import gettext as _

from gurutext import settings, shell_utils
from gurutext.errors import CallerQueryError, PositionFormatError
from gurutext.positions import Location, RequestedPosition

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CallLocation:
    """One caller reported by `guru callers`."""

    pos: str
    desc: str = ""
    caller: str = ""


def split_position(position: str) -> RequestedPosition:
    """Split a `path:line:column` string."""
    chunks = position.split(":")
    if len(chunks) != 3:  # noqa: PLR2004
        raise PositionFormatError(
            _("pos not in /path/to/file.go:line:column format: %(position)s")
            % {"position": position}
        )
    filename, line, column = chunks
    try:
        location = Location(line=int(line), column=int(column))
    except ValueError as error:
        raise PositionFormatError(
            _("%(position)s: %(error)s") % {"position": position, "error": error}
        ) from error
    return RequestedPosition(filename, location)


def guru_command() -> str:
    """Return the guru executable, which may be overridden by the environment."""
    return shell_utils.get_env(settings.GURU_COMMAND_ENV_VAR) or settings.GURU_COMMAND


def callers_command(offset: str, scope: str | None = None) -> list[str]:
    """Build the guru command line listing the callers of the function at offset."""
    command = [guru_command(), "-json"]
    if scope:
        command.extend(["-scope", scope])
    command.extend(["callers", offset])
    return command


def parse_callers(output: str) -> list[CallLocation]:
    """Decode the JSON list printed by `guru -json callers`."""
    try:
        decoded = json.loads(output)
    except json.JSONDecodeError as error:
        raise CallerQueryError(
            _("guru output is not valid JSON: %(error)s") % {"error": error}
        ) from error
    if decoded is None:
        return []
    if not isinstance(decoded, list):
        raise CallerQueryError(_("guru output is not a list of callers"))

    callers = []
    for item in decoded:
        if not isinstance(item, dict):
            raise CallerQueryError(
                _("guru caller is not an object: %(item)s") % {"item": item}
            )
        # guru's field names are capitalised in some versions
        fields = {key.lower(): value for key, value in item.items()}
        if "pos" not in fields:
            raise CallerQueryError(
                _("guru caller has no position: %(item)s") % {"item": item}
            )
        callers.append(
            CallLocation(
                pos=fields["pos"],
                desc=fields.get("desc", ""),
                caller=fields.get("caller", ""),
            )
        )
    return callers


def run_guru(offset: str, scope: str | None = None) -> list[CallLocation]:
    """Return the callers of the function at a `file.go:#offset` position."""
    stdout, __, __ = shell_utils.run_command(callers_command(offset, scope))
    callers = parse_callers(stdout)
    logger.info(
        _("guru found %(count)s callers for %(offset)s."),
        {"count": len(callers), "offset": offset},
    )
    for caller in callers:
        logger.debug("%s: %s (%s)", caller.pos, caller.desc, caller.caller)
    return callers
