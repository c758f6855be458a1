from __future__ import annotations

import logging
import os

ENV_LOG_LEVEL = "LIGHTCTL_LOG_LEVEL"


def configure_logging(*, cli_level: str | None = None, cfg_level: str | None = None) -> None:
    """Configure root logging for the CLI.

    Precedence:
    1) `cli_level` (from --log-level)
    2) env var `LIGHTCTL_LOG_LEVEL`
    3) `cfg_level` (from the config file)
    4) default WARNING

    Records go to stderr so that --get and --list output stays clean.
    """

    level_name = (cli_level or os.environ.get(ENV_LOG_LEVEL) or cfg_level or "WARNING").upper()
    level = getattr(logging, level_name, None)
    # Names like BASIC_FORMAT are module attributes but not levels.
    if not isinstance(level, int):
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
        force=True,
    )
