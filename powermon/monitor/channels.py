"""Modelo uniforme de canales INA y de las muestras por tick."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Iterator, Optional, Sequence, Tuple


class ReadingKind(Enum):
    """Sub-readings a channel may expose, in the fixed column order."""

    CURRENT = ("Curr", "A", 1e3, "curr1")
    VOLTAGE = ("Voltage", "V", 1e3, "in2")
    POWER = ("Power", "W", 1e6, "power1")

    def __init__(self, label: str, unit: str, raw_divisor: float, feature: str) -> None:
        self.label = label
        self.unit = unit
        # hwmon exposes mA, mV and uW as integers
        self.raw_divisor = raw_divisor
        self.feature = feature

    @property
    def input_name(self) -> str:
        return f"{self.feature}_input"


@dataclass(frozen=True)
class SubReading:
    """Backend locator for one readable value plus the divisor to reach SI units."""

    kind: ReadingKind
    locator: Any
    scale: float = 1.0

    def convert(self, raw: float) -> float:
        return float(raw) / self.scale


@dataclass(frozen=True)
class Channel:
    """Dispositivo físico con hasta tres sub-lecturas (corriente, voltaje, potencia)."""

    locator: str
    name: str
    current: Optional[SubReading] = None
    voltage: Optional[SubReading] = None
    power: Optional[SubReading] = None

    def __lt__(self, other: "Channel") -> bool:
        if not isinstance(other, Channel):
            return NotImplemented
        return self.locator < other.locator

    def reading(self, kind: ReadingKind) -> Optional[SubReading]:
        if kind is ReadingKind.CURRENT:
            return self.current
        if kind is ReadingKind.VOLTAGE:
            return self.voltage
        return self.power

    def readings(self) -> Tuple[SubReading, ...]:
        """Present sub-readings in current, voltage, power order."""

        return tuple(
            reading
            for reading in (self.reading(kind) for kind in ReadingKind)
            if reading is not None
        )

    def column_name(self, kind: ReadingKind) -> str:
        return f"{self.name}-{kind.label}({kind.unit})"


def iter_readings(channels: Sequence[Channel]) -> Iterator[Tuple[Channel, SubReading]]:
    """Yield every present sub-reading in column order."""

    for channel in channels:
        for reading in channel.readings():
            yield channel, reading


@dataclass(frozen=True)
class Sample:
    """Resultado de un tick: marca temporal y un valor (o None) por columna."""

    timestamp: datetime
    values: Tuple[Optional[float], ...]

    @property
    def missing(self) -> int:
        return sum(1 for value in self.values if value is None)
