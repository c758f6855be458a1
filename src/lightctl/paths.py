from __future__ import annotations

import os
from pathlib import Path

APP_NAME = "lightctl"


def config_home() -> Path:
    """Base directory for per-user config.

    XDG_CONFIG_HOME is only honoured when absolute; relative values are
    invalid under the XDG base directory rules and fall back to ~/.config.
    """

    env = os.environ.get("XDG_CONFIG_HOME", "")
    if env and os.path.isabs(env):
        return Path(env)
    return Path.home() / ".config"


def default_config_path() -> Path:
    return config_home() / APP_NAME / "config.yaml"
