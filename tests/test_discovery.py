"""Tests for INA channel discovery, predicates and listing mode."""

from __future__ import annotations

import io

import pytest

from powermon.monitor.backends import HwmonBackend
from powermon.monitor.channels import Channel, ReadingKind, SubReading
from powermon.monitor.discovery import (
    discover,
    has_any_reading,
    has_sensor_prefix,
    list_channels,
)
from powermon.monitor.emitter import header
from powermon.monitor.errors import NoSensorsFound


@pytest.mark.parametrize(
    "name, expected",
    [("ina0", True), ("ina3221", True), ("ina", True), ("INA226", False), ("coretemp", False), ("", False), ("xina", False)],
)
def test_has_sensor_prefix(name, expected):
    assert has_sensor_prefix(name) is expected


def test_has_any_reading():
    empty = Channel(locator="/x", name="ina0")
    with_power = Channel(
        locator="/x", name="ina0", power=SubReading(ReadingKind.POWER, "/x/power1_input", 1e6)
    )

    assert has_any_reading(empty) is False
    assert has_any_reading(with_power) is True


def test_discover_filters_and_sorts_by_locator(hwmon_root, make_hwmon_device):
    make_hwmon_device("hwmon3", "ina226", {"curr1_input": "1", "in2_input": "2", "power1_input": "3"})
    make_hwmon_device("hwmon0", "coretemp", {"curr1_input": "1"})
    make_hwmon_device("hwmon1", "ina219", {"power1_input": "3"})
    make_hwmon_device("hwmon2", "ina3221", {})
    make_hwmon_device("hwmon4", None, {"curr1_input": "1"})

    with HwmonBackend(hwmon_root) as backend:
        channels = discover(backend)

    assert [(c.locator, c.name) for c in channels] == [
        (str(hwmon_root / "hwmon1"), "ina219"),
        (str(hwmon_root / "hwmon3"), "ina226"),
    ]
    assert [r.kind for r in channels[0].readings()] == [ReadingKind.POWER]
    assert [r.kind for r in channels[1].readings()] == list(ReadingKind)


def test_discover_is_repeatable(hwmon_root, make_hwmon_device):
    for index in (5, 1, 3):
        make_hwmon_device(f"hwmon{index}", f"ina{index}", {"curr1_input": "10", "power1_input": "20"})

    with HwmonBackend(hwmon_root) as backend:
        first = discover(backend)
        second = discover(backend)

    assert first == second
    assert header(first) == header(second)
    assert header(first) == (
        "Time,ina1-Curr(A),ina1-Power(W),ina3-Curr(A),ina3-Power(W),ina5-Curr(A),ina5-Power(W)"
    )


def test_discover_without_ina_devices_raises(hwmon_root, make_hwmon_device):
    make_hwmon_device("hwmon0", "nvme", {"curr1_input": "1"})

    with HwmonBackend(hwmon_root) as backend, pytest.raises(NoSensorsFound):
        discover(backend)


def test_list_channels_writes_path_and_name():
    channels = [
        Channel(locator="/sys/class/hwmon/hwmon1", name="ina219", current=SubReading(ReadingKind.CURRENT, "c", 1e3)),
        Channel(locator="/sys/class/hwmon/hwmon3", name="ina226", power=SubReading(ReadingKind.POWER, "p", 1e6)),
    ]
    stream = io.StringIO()

    list_channels(channels, stream)

    assert stream.getvalue().splitlines() == [
        "Path: /sys/class/hwmon/hwmon1, Name: ina219",
        "Path: /sys/class/hwmon/hwmon3, Name: ina226",
    ]


def test_undecodable_device_name_is_filtered_out(hwmon_root, make_hwmon_device):
    make_hwmon_device("hwmon0", "ina0", {"curr1_input": "150"})
    broken = make_hwmon_device("hwmon1", None, {"curr1_input": "1"})
    (broken / "name").write_bytes(b"\xffbad\n")

    with HwmonBackend(hwmon_root) as backend:
        channels = discover(backend)

    assert [c.name for c in channels] == ["ina0"]
