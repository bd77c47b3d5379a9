"""Registro de backends disponibles y utilidades de construcción."""

from __future__ import annotations

import logging

from powermon.config.schema import SamplerConfig

from ..errors import ArgumentError
from .base import DeviceEntry, SensorBackend
from .hwmon import HwmonBackend
from .libsensors import LibSensorsBackend

logger = logging.getLogger(__name__)

__all__ = [
    "DeviceEntry",
    "SensorBackend",
    "HwmonBackend",
    "LibSensorsBackend",
    "build_backend",
]


def build_backend(config: SamplerConfig) -> SensorBackend:
    """Instancia el backend indicado en la configuración (sin abrirlo)."""

    name = (config.backend or "auto").lower()
    if name == "auto":
        if HwmonBackend.is_supported(config.hwmon_root):
            name = "hwmon"
        else:
            logger.info(
                "%s no existe; se intenta el backend libsensors.", config.hwmon_root
            )
            name = "libsensors"

    if name == "hwmon":
        return HwmonBackend(config.hwmon_root)
    if name == "libsensors":
        return LibSensorsBackend(config.libsensors_config)
    raise ArgumentError(f"Backend '{config.backend}' no está soportado")
