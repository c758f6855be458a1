from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from pathlib import Path

log = logging.getLogger(__name__)

# Scanned in this order; the first device found becomes the default.
SYSFS_ROOTS: tuple[str, ...] = ("/sys/class/backlight", "/sys/class/leds")


class NoDevicesError(RuntimeError):
    pass


def _scan_root(root: Path) -> list[Path]:
    if not root.is_dir():
        log.debug("skipping missing root %s", root)
        return []
    # Native listing order; class entries are symlinks into /sys/devices.
    with os.scandir(root) as it:
        return [Path(e.path).absolute() for e in it if e.is_dir()]


def discover(roots: Iterable[str | Path] | None = None) -> tuple[str, dict[str, Path]]:
    """Return the default device name and an ordered name -> directory mapping.

    Roots are enumerated fully one after another. When two roots hold a device
    with the same name the first one scanned is kept.
    """

    roots = SYSFS_ROOTS if roots is None else roots

    devices: dict[str, Path] = {}
    for root in roots:
        for path in _scan_root(Path(root)):
            if path.name in devices:
                log.warning("device %s in %s shadowed by %s", path.name, root, devices[path.name])
                continue
            devices[path.name] = path

    if not devices:
        raise NoDevicesError("no backlight or led devices found")

    default = next(iter(devices))
    log.debug("discovered %d device(s), default %s", len(devices), default)
    return default, devices
