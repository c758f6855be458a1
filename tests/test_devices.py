from __future__ import annotations

import logging
import os
from pathlib import Path

import pytest

from lightctl import devices
from lightctl.devices import NoDevicesError, discover


def _mkdirs(root: Path, *names: str) -> Path:
    for name in names:
        (root / name).mkdir(parents=True)
    return root


def _listing(root: Path) -> list[str]:
    with os.scandir(root) as it:
        return [e.name for e in it]


def test_merges_roots_in_scan_order(tmp_path: Path) -> None:
    a = _mkdirs(tmp_path / "backlight", "intel_backlight", "acpi_video0")
    b = _mkdirs(tmp_path / "leds", "input0::capslock", "tpacpi::power", "phy0-led")

    default, found = discover([a, b])

    expected = _listing(a) + _listing(b)
    assert list(found) == expected
    assert len(found) == 5
    assert default == expected[0]
    assert found["phy0-led"] == (b / "phy0-led").absolute()


def test_default_comes_from_first_root(tmp_path: Path) -> None:
    a = _mkdirs(tmp_path / "backlight", "intel_backlight")
    b = _mkdirs(tmp_path / "leds", "aaa::first")

    default, _ = discover([a, b])
    assert default == "intel_backlight"


def test_missing_and_empty_roots_are_skipped(tmp_path: Path) -> None:
    empty = tmp_path / "backlight"
    empty.mkdir()
    b = _mkdirs(tmp_path / "leds", "led0")

    default, found = discover([tmp_path / "nope", empty, b])
    assert default == "led0"
    assert list(found) == ["led0"]


def test_plain_files_are_not_devices(tmp_path: Path) -> None:
    a = _mkdirs(tmp_path / "backlight", "panel")
    (a / "README").write_text("x", encoding="utf-8")

    _, found = discover([a])
    assert list(found) == ["panel"]


def test_name_collision_keeps_first_root(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    a = _mkdirs(tmp_path / "backlight", "shared")
    b = _mkdirs(tmp_path / "leds", "shared", "other")

    with caplog.at_level(logging.WARNING, logger="lightctl.devices"):
        _, found = discover([a, b])

    assert found["shared"] == (a / "shared").absolute()
    assert len(found) == 2
    assert "shadowed" in caplog.text


def test_no_devices_is_fatal(tmp_path: Path) -> None:
    with pytest.raises(NoDevicesError):
        discover([tmp_path / "backlight", tmp_path / "leds"])


def test_default_roots_table(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    assert devices.SYSFS_ROOTS == ("/sys/class/backlight", "/sys/class/leds")

    monkeypatch.setattr(devices, "SYSFS_ROOTS", (str(_mkdirs(tmp_path / "bl", "dev")),))
    assert discover()[0] == "dev"
