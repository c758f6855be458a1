from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Any

from lightctl import __version__
from lightctl.config import LOG_LEVELS, ConfigError, load
from lightctl.controllers import (
    CONTROLLER_TYPES,
    BrightnessValueError,
    Controller,
    UnreachableStateError,
    make_controller,
)
from lightctl.devices import NoDevicesError, discover
from lightctl.logging_setup import configure_logging
from lightctl.paths import default_config_path
from lightctl.system.backlight import DeviceIOError, DeviceValueError

log = logging.getLogger(__name__)

UNREACHABLE_MSG = """
    ERROR!

    If you're seeing this, the code is in what I thought was an unreachable state.

    I could give you advice for what to do, but honestly, why should you trust me?
    I clearly screwed this up. I'm writing a message that should never appear,
    yet I know it will probably appear someday.

    On a deep level, I know I'm not up to this task. I'm so sorry.
"""

TYPE_HELP = """controller type (default: lin)
  raw: the raw values found in the device files
  lin: percentage (0-100) with a linear curve over the raw range
  log: percentage (0-100) with a logarithmic curve; perceived brightness
       should change linearly with this controller"""


class UnknownDeviceError(LookupError):
    pass


class ArgumentValueError(ValueError):
    pass


# First match wins.
_EXIT_CODES: tuple[tuple[type[BaseException] | tuple[type[BaseException], ...], int], ...] = (
    ((NoDevicesError, UnknownDeviceError, ConfigError), os.EX_CONFIG),
    ((BrightnessValueError, ArgumentValueError, DeviceValueError), os.EX_DATAERR),
    (DeviceIOError, os.EX_OSFILE),
)


def _build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="lightctl",
        description="Utility to interact with backlight and LED brightness",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    ap.add_argument("--version", action="version", version=__version__)

    action = ap.add_mutually_exclusive_group()
    action.add_argument("-s", "--set", metavar="VALUE", help="set brightness to given value")
    action.add_argument("-i", "--increase", metavar="PERCENT", help="increase brightness")
    action.add_argument("-d", "--decrease", metavar="PERCENT", help="decrease brightness")
    action.add_argument("-g", "--get", action="store_true", help="print current brightness")
    action.add_argument("-z", "--zero", action="store_true", help="set brightness to lowest value")
    action.add_argument("-f", "--full", action="store_true", help="set brightness to highest value")
    action.add_argument(
        "-l",
        "--list",
        action="store_true",
        help="list all available backlight and led devices",
    )

    ap.add_argument("-t", "--type", choices=CONTROLLER_TYPES, help=TYPE_HELP)
    ap.add_argument("-D", "--device", help="device to control (default: first one found)")
    ap.add_argument("-c", "--config", help=f"config file (default: {default_config_path()})")
    ap.add_argument("--log-level", type=str.upper, choices=LOG_LEVELS, help="logging threshold")

    return ap


def _parse_int(option: str, text: str) -> int:
    try:
        return int(text)
    except ValueError:
        raise ArgumentValueError(f"invalid value for {option}: {text!r}") from None


def _dispatch(args: argparse.Namespace, cfg: dict[str, Any]) -> int:
    default, devices = discover()

    if args.list:
        for name in devices:
            print(name)
        return os.EX_OK

    name = args.device or cfg["device"] or default
    if name not in devices:
        raise UnknownDeviceError(f"no such device: {name}")

    kind = args.type or cfg["type"]
    controller: Controller = make_controller(kind, devices[name])
    log.debug("using %s controller on %s (%s)", kind, name, devices[name])

    if args.set is not None:
        controller.set_brightness(_parse_int("--set", args.set))
    elif args.increase is not None:
        value = controller.get_brightness() + _parse_int("--increase", args.increase)
        controller.set_brightness(min(value, controller.get_max_brightness()))
    elif args.decrease is not None:
        value = controller.get_brightness() - _parse_int("--decrease", args.decrease)
        controller.set_brightness(max(value, 0))
    elif args.get:
        print(controller.get_brightness())
    elif args.zero:
        controller.set_brightness(0)
    elif args.full:
        controller.set_brightness(controller.get_max_brightness())
    else:
        raise UnreachableStateError("no action selected")

    return os.EX_OK


def run(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    try:
        if args.config:
            cfg = load(args.config)
        else:
            cfg = load(default_config_path(), missing_ok=True)
    except ConfigError as e:
        print(f"lightctl: {e}", file=sys.stderr)
        return os.EX_CONFIG

    configure_logging(cli_level=args.log_level, cfg_level=cfg["log_level"])

    try:
        return _dispatch(args, cfg)
    except UnreachableStateError:
        log.debug("unreachable state", exc_info=True)
        print(UNREACHABLE_MSG, file=sys.stderr)
        return os.EX_SOFTWARE
    except Exception as e:
        for exc_types, code in _EXIT_CODES:
            if isinstance(e, exc_types):
                print(f"lightctl: {e}", file=sys.stderr)
                return code
        raise


def main() -> None:
    raise SystemExit(run())
