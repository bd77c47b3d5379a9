"""Backend que lee los sensores INA desde el árbol sysfs ``/sys/class/hwmon``."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

from powermon.config.schema import DEFAULT_HWMON_ROOT

from ..channels import ReadingKind, SubReading
from ..errors import BackendInitError, ChannelReadError
from .base import DeviceEntry, SensorBackend

logger = logging.getLogger(__name__)


class HwmonBackend(SensorBackend):
    """Enumerate ``hwmonN`` directories and read integer milli/micro units."""

    name = "hwmon"

    def __init__(self, root: str | Path = DEFAULT_HWMON_ROOT) -> None:
        self.root = Path(root)
        self._opened = False

    @staticmethod
    def is_supported(root: str | Path = DEFAULT_HWMON_ROOT) -> bool:
        return Path(root).is_dir()

    def open(self) -> None:
        if not self.root.is_dir():
            raise BackendInitError(f"Directorio hwmon no disponible: {self.root}")
        self._opened = True
        logger.debug("Backend hwmon abierto en %s", self.root)

    def close(self) -> None:
        self._opened = False

    def enumerate_devices(self) -> List[DeviceEntry]:
        devices: List[DeviceEntry] = []
        try:
            entries = list(self.root.iterdir())
        except OSError as exc:
            raise BackendInitError(f"No se pudo listar {self.root}: {exc}") from exc
        for entry in entries:
            if not entry.is_dir():
                continue
            devices.append(DeviceEntry(locator=str(entry), name=self._read_name(entry)))
        return devices

    def probe_subfeature(self, device: DeviceEntry, kind: ReadingKind) -> Optional[SubReading]:
        path = Path(device.locator) / kind.input_name
        if not path.is_file():
            return None
        return SubReading(kind=kind, locator=path, scale=kind.raw_divisor)

    def read(self, reading: SubReading) -> float:
        path = Path(reading.locator)
        try:
            raw = path.read_bytes().strip()
        except OSError as exc:
            raise ChannelReadError(f"No se pudo leer {path}: {exc}") from exc
        if not raw:
            raise ChannelReadError(f"Lectura vacía en {path}")
        try:
            value = int(raw)
        except ValueError as exc:
            raise ChannelReadError(f"Lectura inválida en {path}: {raw!r}") from exc
        return reading.convert(value)

    @staticmethod
    def _read_name(entry: Path) -> str:
        name_file = entry / "name"
        if not name_file.is_file():
            return ""
        try:
            return name_file.read_text().strip()
        except (OSError, UnicodeDecodeError):
            logger.debug("No se pudo leer el nombre de %s", entry)
            return ""
