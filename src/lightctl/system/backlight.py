from __future__ import annotations

import errno
import logging
import os
from dataclasses import dataclass
from pathlib import Path

log = logging.getLogger(__name__)


class DeviceIOError(OSError):
    """A device attribute file could not be opened, read or written."""

    def __init__(self, path: Path, op: str, cause: OSError) -> None:
        reason = errno.errorcode.get(cause.errno or 0, type(cause).__name__)
        super().__init__(f"couldn't {op} '{path}': {reason}")
        self.path = path
        self.op = op
        self.cause = cause


class DeviceValueError(ValueError):
    """A device attribute file does not hold a decimal integer."""

    def __init__(self, path: Path, text: str) -> None:
        super().__init__(f"couldn't parse '{path}': {text.strip()!r} is not an integer")
        self.path = path


@dataclass(frozen=True)
class Backlight:
    sysfs_dir: Path

    @property
    def _brightness(self) -> Path:
        return self.sysfs_dir / "brightness"

    @property
    def _max_brightness(self) -> Path:
        return self.sysfs_dir / "max_brightness"

    def read_brightness(self) -> int:
        return self._read_int(self._brightness)

    def read_max_brightness(self) -> int:
        return self._read_int(self._max_brightness)

    def write_brightness(self, value: int) -> None:
        path = self._brightness
        try:
            # Read+write without O_CREAT: a missing attribute is a device error.
            fd = os.open(path, os.O_RDWR | os.O_TRUNC)
        except OSError as e:
            raise DeviceIOError(path, "open", e) from e

        # sysfs reports rejected values when the buffer is flushed on close.
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(str(int(value)))
        except OSError as e:
            raise DeviceIOError(path, "write", e) from e
        log.debug("wrote %d to %s", value, path)

    @staticmethod
    def _read_int(path: Path) -> int:
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise DeviceIOError(path, "read", e) from e
        try:
            return int(text.strip())
        except ValueError as e:
            raise DeviceValueError(path, text) from e
