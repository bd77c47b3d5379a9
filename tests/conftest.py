"""Shared fixtures: a fake sysfs hwmon tree under tmp_path."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Mapping, Optional

import pytest

HwmonFactory = Callable[..., Path]


@pytest.fixture()
def hwmon_root(tmp_path) -> Path:
    root = tmp_path / "hwmon"
    root.mkdir()
    return root


@pytest.fixture()
def make_hwmon_device(hwmon_root) -> HwmonFactory:
    """Create ``hwmonN`` with a ``name`` file and the given ``*_input`` files."""

    def factory(
        dirname: str,
        name: Optional[str],
        inputs: Optional[Mapping[str, str]] = None,
    ) -> Path:
        device = hwmon_root / dirname
        device.mkdir()
        if name is not None:
            (device / "name").write_text(name + "\n")
        for filename, value in (inputs or {}).items():
            (device / filename).write_text(value + "\n")
        return device

    return factory
