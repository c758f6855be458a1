from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from lightctl.controllers import CONTROLLER_TYPES

DEFAULTS: dict[str, Any] = {
    "type": "lin",
    "device": None,
    "log_level": None,
}

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigError(ValueError):
    pass


def load(path: str | Path, *, missing_ok: bool = False) -> dict[str, Any]:
    p = Path(path)
    if missing_ok and not p.exists():
        return normalize({})

    try:
        data = yaml.safe_load(p.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(f"Cannot read config {p}: {e.strerror or e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {p}: {e}") from e

    # An empty file is a valid, empty config.
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError("Top-level config must be a mapping")
    validate(data)
    return normalize(data)


def validate(cfg: dict[str, Any]) -> None:
    unknown = sorted(set(cfg) - set(DEFAULTS))
    if unknown:
        raise ConfigError(f"Unknown config key(s): {', '.join(map(str, unknown))}")

    kind = cfg.get("type")
    if kind is not None and kind not in CONTROLLER_TYPES:
        raise ConfigError(f"type must be one of {', '.join(CONTROLLER_TYPES)}: {kind!r}")

    device = cfg.get("device")
    if device is not None and (not isinstance(device, str) or not device.strip()):
        raise ConfigError("device must be a non-empty string")

    level = cfg.get("log_level")
    if level is not None and str(level).upper() not in LOG_LEVELS:
        raise ConfigError(f"log_level must be one of {', '.join(LOG_LEVELS)}: {level!r}")


def normalize(cfg: dict[str, Any]) -> dict[str, Any]:
    """Fill in defaults and strip stray whitespace. Mutates and returns `cfg`."""

    for key, value in DEFAULTS.items():
        if cfg.get(key) is None:
            cfg[key] = value

    if isinstance(cfg["device"], str):
        cfg["device"] = cfg["device"].strip()
    if cfg["log_level"] is not None:
        cfg["log_level"] = str(cfg["log_level"]).upper()
    return cfg
