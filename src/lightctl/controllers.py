from __future__ import annotations

import abc
import logging
import math
from pathlib import Path

from lightctl.system.backlight import Backlight

log = logging.getLogger(__name__)

CONTROLLER_TYPES = ("raw", "lin", "log")

PERCENT_MAX = 100


class UnreachableStateError(RuntimeError):
    pass


class BrightnessValueError(ValueError):
    pass


class BrightnessTooHighError(BrightnessValueError):
    def __init__(self, value: int, maximum: int, sep: str = ":") -> None:
        super().__init__(f"brightness value too high{sep} {value} > {maximum}")
        self.value = value
        self.maximum = maximum


class BrightnessTooLowError(BrightnessValueError):
    def __init__(self, value: int) -> None:
        super().__init__(f"brightness value too low: {value}")
        self.value = value


class Controller(abc.ABC):
    """Maps a brightness unit onto one device's raw range."""

    @abc.abstractmethod
    def get_brightness(self) -> int:
        raise NotImplementedError

    @abc.abstractmethod
    def get_max_brightness(self) -> int:
        raise NotImplementedError

    @abc.abstractmethod
    def set_brightness(self, value: int) -> None:
        raise NotImplementedError

    def check_brightness_value(self, value: int) -> None:
        maximum = self.get_max_brightness()
        if value > maximum:
            raise BrightnessTooHighError(value, maximum)
        if value < 0:
            raise BrightnessTooLowError(value)


class RawController(Controller):
    """Uses the values found in the device files as-is."""

    def __init__(self, sysfs_dir: str | Path):
        self._backlight = Backlight(Path(sysfs_dir))

    @property
    def sysfs_dir(self) -> Path:
        return self._backlight.sysfs_dir

    def get_brightness(self) -> int:
        return self._backlight.read_brightness()

    def get_max_brightness(self) -> int:
        return self._backlight.read_max_brightness()

    def set_brightness(self, value: int) -> None:
        self.check_brightness_value(value)
        self._backlight.write_brightness(value)


class _PercentController(Controller):
    def __init__(self, sysfs_dir: str | Path):
        self._raw = RawController(sysfs_dir)

    @property
    def sysfs_dir(self) -> Path:
        return self._raw.sysfs_dir

    def get_max_brightness(self) -> int:
        return PERCENT_MAX

    def set_brightness(self, value: int) -> None:
        self.check_brightness_value(value)
        if value > PERCENT_MAX:
            raise BrightnessTooHighError(value, PERCENT_MAX, sep="!")

        raw_value = self._to_raw(value, self._raw.get_max_brightness())
        log.debug("%s: %d%% -> raw %d", type(self).__name__, value, raw_value)
        self._raw.set_brightness(raw_value)

    @abc.abstractmethod
    def _to_raw(self, value: int, raw_max: int) -> int:
        raise NotImplementedError


def _clamp_percent(value: int) -> int:
    return max(0, min(PERCENT_MAX, value))


class LinearController(_PercentController):
    """Percentage with a linear curve over the raw range."""

    def get_brightness(self) -> int:
        raw_max = self._raw.get_max_brightness()
        if raw_max <= 0:
            return 0
        current = self._raw.get_brightness()
        return _clamp_percent(int((current / raw_max) * PERCENT_MAX))

    def _to_raw(self, value: int, raw_max: int) -> int:
        # Multiply first; both operands are non-negative so // truncates.
        return (value * raw_max) // PERCENT_MAX


class LogarithmicController(_PercentController):
    """Percentage with a logarithmic curve over the raw range.

    Perceived brightness is roughly logarithmic in emitted light, so equal steps
    on this scale should look like equal steps to the eye.

    A raw value of 0 has no logarithm and reads as 0%. On a device whose
    maximum is 1 the scale collapses to off (0%) and on (100%).
    """

    def get_brightness(self) -> int:
        raw_max = self._raw.get_max_brightness()
        if raw_max <= 0:
            return 0
        current = self._raw.get_brightness()
        if current <= 0:
            return 0
        if raw_max == 1:
            return PERCENT_MAX
        return _clamp_percent(int(math.log10(current) / math.log10(raw_max) * PERCENT_MAX))

    def _to_raw(self, value: int, raw_max: int) -> int:
        if raw_max <= 0:
            return 0
        return int(10 ** ((value / PERCENT_MAX) * math.log10(raw_max)))


_CONTROLLERS: dict[str, type[Controller]] = {
    "raw": RawController,
    "lin": LinearController,
    "log": LogarithmicController,
}


def make_controller(kind: str, sysfs_dir: str | Path) -> Controller:
    try:
        cls = _CONTROLLERS[kind]
    except KeyError:
        raise UnreachableStateError(f"unknown controller type: {kind!r}") from None
    return cls(sysfs_dir)
