"""Global configuration settings for gurutext."""

import dataclasses
import logging
import pathlib
import re

PROGRAM_NAME = "gurutext"  # this program's executable command
ENV_VAR_PREFIX = "GURUTEXT_"  # used to construct env vars overriding defaults

COMMANDS_PACKAGE_PATH = str(pathlib.Path(__file__).parent.resolve() / "commands")

DEFAULT_LOG_LEVEL = logging.WARNING
DEFAULT_SUBPROCESS_WAIT_TIMEOUT = 600  # seconds; guru can be slow on big scopes

GURU_COMMAND = "guru"
GURU_COMMAND_ENV_VAR = f"{ENV_VAR_PREFIX}GURU"

DEFAULT_IGNORE_MARKER = "GURUTEXT_IGNORE"
TRANSLATOR_COMMENT_MARKER = "#."
REFERENCE_COMMENT_MARKER = "#:"


@dataclasses.dataclass(frozen=True)
class ExtractionSettings:
    """Options that change how call sites are turned into catalog entries."""

    comment_prefix: str = ""
    ignore_marker: str = DEFAULT_IGNORE_MARKER
    exclude: re.Pattern | None = None
    sort: bool = False
    strict_sources: bool = True

    @property
    def needs_comment_map(self) -> bool:
        """Return True if comment blocks must be collected at all."""
        return bool(self.comment_prefix)

    def is_excluded(self, path: str) -> bool:
        """Return True if the path matches the configured exclusion pattern."""
        return bool(self.exclude and self.exclude.search(path))
