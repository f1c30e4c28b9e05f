"""Utilities for interacting with user's shell and external programs."""

import logging
import os
import shlex
import subprocess
from gettext import gettext as _

from gurutext import settings

logger = logging.getLogger(__name__)


def get_env(name: str) -> str | None:
    """Get the value of the specified environment variable."""
    if value := os.environ.get(name):
        logger.debug(_("Environment variable '%(name)s' found."), {"name": name})
        return value
    else:
        logger.debug(_("Environment variable '%(name)s' not found."), {"name": name})
        return None


def format_message(message: str, *args) -> str:
    """Format a message and trim a single trailing newline."""
    text = message % args if args else message
    if text.endswith("\n"):
        text = text[:-1]
    return text


def run_command(
    command: list[str],
    *,
    raise_error: bool = True,
    wait_timeout: int | None = None,
) -> tuple[str, str, int]:
    """Run an external program and capture its output."""
    if not all(isinstance(arg, str) for arg in command):
        raise TypeError(_("Command arguments must be strings. Got: %r") % command)
    logger.debug(_("Invoking subprocess: %s"), " ".join(map(shlex.quote, command)))
    if wait_timeout is None:
        wait_timeout = settings.DEFAULT_SUBPROCESS_WAIT_TIMEOUT
    try:
        process = subprocess.Popen(
            args=command,  # a list like ["guru", "-json", "callers", "a.go:#42"]
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            shell=False,
        )
        stdout, stderr = process.communicate(timeout=wait_timeout)
        exit_code = process.returncode
    except subprocess.TimeoutExpired as error:
        logger.error(
            _(
                "Subprocess with arguments %(command)s timed out after "
                "%(wait_timeout)s seconds."
            ),
            {"command": command, "wait_timeout": wait_timeout},
        )
        raise error

    for line in stderr.strip().splitlines():
        logger.debug(line)

    if raise_error and exit_code != 0:
        logger.debug(
            _(
                "Subprocess with arguments %(command)s failed "
                "with exit code %(exit_code)s"
            ),
            {"command": command, "exit_code": exit_code},
        )
        raise subprocess.CalledProcessError(exit_code, command, stdout, stderr)

    return stdout, stderr, exit_code
