"""Interfaces comunes para los backends de sensores."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional, Protocol, runtime_checkable

from ..channels import ReadingKind, SubReading


@dataclass(frozen=True)
class DeviceEntry:
    """Dispositivo enumerado por un backend, antes de filtrar por nombre."""

    locator: str
    name: str
    handle: Any = field(default=None, compare=False, repr=False)


@runtime_checkable
class SensorBackend(Protocol):
    """Contrato mínimo que la detección y el muestreo esperan de un backend."""

    name: str

    def open(self) -> None:
        """Adquiere la sesión del backend (una vez por ejecución)."""

    def close(self) -> None:
        """Libera la sesión del backend."""

    def enumerate_devices(self) -> List[DeviceEntry]:
        """Lista todos los dispositivos expuestos, sin filtrar."""

    def probe_subfeature(self, device: DeviceEntry, kind: ReadingKind) -> Optional[SubReading]:
        """Devuelve el localizador de lectura para ``kind`` o None si no existe."""

    def read(self, reading: SubReading) -> float:
        """Lee un valor en unidades SI; lanza ChannelReadError si falla."""

    def __enter__(self) -> "SensorBackend":
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
