"""Detección de canales INA y modo listado."""

from __future__ import annotations

import logging
import sys
from typing import List, Optional, Sequence, TextIO

from .backends.base import DeviceEntry, SensorBackend
from .channels import Channel, ReadingKind
from .errors import NoSensorsFound

logger = logging.getLogger(__name__)

SENSOR_PREFIX = "ina"


def has_sensor_prefix(name: str) -> bool:
    """True when the device name belongs to the INA family."""

    return name.startswith(SENSOR_PREFIX)


def has_any_reading(channel: Channel) -> bool:
    """True when at least one of current, voltage or power is present."""

    return bool(channel.readings())


def probe_channel(backend: SensorBackend, device: DeviceEntry) -> Channel:
    """Build a channel with whatever sub-readings the backend exposes."""

    return Channel(
        locator=device.locator,
        name=device.name,
        current=backend.probe_subfeature(device, ReadingKind.CURRENT),
        voltage=backend.probe_subfeature(device, ReadingKind.VOLTAGE),
        power=backend.probe_subfeature(device, ReadingKind.POWER),
    )


def discover(backend: SensorBackend) -> List[Channel]:
    """Return the INA channels exposed by ``backend``, sorted by locator.

    Raises NoSensorsFound when nothing qualifies.
    """

    channels: List[Channel] = []
    for device in backend.enumerate_devices():
        if not has_sensor_prefix(device.name):
            logger.debug("Se omite %s (%r): no es un sensor INA", device.locator, device.name)
            continue
        channel = probe_channel(backend, device)
        if not has_any_reading(channel):
            logger.debug("Se omite %s (%s): sin corriente, voltaje ni potencia", device.locator, device.name)
            continue
        channels.append(channel)

    if not channels:
        raise NoSensorsFound("Power monitor is not found")

    channels.sort()
    logger.info(
        "Detectados %d canales INA con %d columnas mediante backend %s",
        len(channels),
        sum(len(channel.readings()) for channel in channels),
        getattr(backend, "name", type(backend).__name__),
    )
    return channels


def list_channels(channels: Sequence[Channel], stream: Optional[TextIO] = None) -> None:
    """Write ``Path: <locator>, Name: <name>`` per channel to the diagnostic stream."""

    out = stream if stream is not None else sys.stderr
    for channel in channels:
        out.write(f"Path: {channel.locator}, Name: {channel.name}\n")
    out.flush()
