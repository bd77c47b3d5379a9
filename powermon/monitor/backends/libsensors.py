"""Backend sobre libsensors (lm-sensors) mediante el binding PySensors."""

from __future__ import annotations

import importlib
import logging
from types import ModuleType
from typing import Any, List, Optional

from ..channels import ReadingKind, SubReading
from ..errors import BackendInitError, ChannelReadError
from .base import DeviceEntry, SensorBackend

logger = logging.getLogger(__name__)

# sensors_feature_type / sensors_subfeature_type values from <sensors/sensors.h>
FEATURE_TYPES = {
    ReadingKind.CURRENT: 0x05,
    ReadingKind.VOLTAGE: 0x00,
    ReadingKind.POWER: 0x03,
}
INPUT_SUBFEATURE_TYPES = {
    ReadingKind.CURRENT: 0x500,
    ReadingKind.VOLTAGE: 0x000,
    ReadingKind.POWER: 0x303,
}


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return str(value)


class LibSensorsBackend(SensorBackend):
    """Detected chips become devices; values already arrive in SI units."""

    name = "libsensors"

    def __init__(self, config_path: Optional[str] = None, *, module: Optional[ModuleType] = None) -> None:
        self.config_path = config_path
        self._module = module
        self._session: Optional[ModuleType] = None

    @staticmethod
    def _import_module() -> ModuleType:
        try:
            return importlib.import_module("sensors")
        except (ImportError, OSError, AttributeError) as exc:
            raise BackendInitError(f"PySensors/libsensors no disponible: {exc}") from exc

    def open(self) -> None:
        if self._session is not None:
            return
        module = self._module or self._import_module()
        try:
            if self.config_path:
                module.init(self.config_path)
            else:
                module.init()
        except Exception as exc:
            raise BackendInitError(f"sensors_init() falló: {exc}") from exc
        self._session = module
        logger.debug("Sesión libsensors inicializada")

    def close(self) -> None:
        module = self._session
        if module is None:
            return
        self._session = None
        try:
            module.cleanup()
        except Exception:  # pragma: no cover - best effort
            logger.exception("Error al liberar la sesión libsensors")

    def enumerate_devices(self) -> List[DeviceEntry]:
        module = self._require_session()
        try:
            chips = list(module.iter_detected_chips())
        except Exception as exc:
            raise BackendInitError(f"No se pudieron enumerar los chips: {exc}") from exc
        return [
            DeviceEntry(locator=_text(chip.path), name=_text(chip.prefix), handle=chip)
            for chip in chips
        ]

    def probe_subfeature(self, device: DeviceEntry, kind: ReadingKind) -> Optional[SubReading]:
        chip = device.handle
        if chip is None:
            return None
        for feature in chip:
            if _text(feature.name) != kind.feature or feature.type != FEATURE_TYPES[kind]:
                continue
            for subfeature in feature:
                if (
                    subfeature.type == INPUT_SUBFEATURE_TYPES[kind]
                    or _text(subfeature.name) == kind.input_name
                ):
                    return SubReading(kind=kind, locator=subfeature, scale=1.0)
        return None

    def read(self, reading: SubReading) -> float:
        try:
            value = reading.locator.get_value()
        except Exception as exc:
            raise ChannelReadError(f"sensors_get_value() falló: {exc}") from exc
        return reading.convert(value)

    def _require_session(self) -> ModuleType:
        if self._session is None:
            raise BackendInitError("La sesión libsensors no está abierta")
        return self._session
