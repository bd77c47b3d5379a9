"""Typed configuration models implemented with dataclasses."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

DEFAULT_HWMON_ROOT = "/sys/class/hwmon"
BACKEND_CHOICES = ("auto", "hwmon", "libsensors")


def _as_str(value: Any, field_name: str, *, optional: bool = False) -> Optional[str]:
    if value is None:
        if optional:
            return None
        raise ValueError(f"'{field_name}' es obligatorio")
    text = str(value).strip()
    if not text and not optional:
        raise ValueError(f"'{field_name}' no puede estar vacío")
    return text or None


def _as_int(value: Any, field_name: str) -> int:
    if value is None:
        raise ValueError(f"'{field_name}' es obligatorio")
    if isinstance(value, bool):
        raise ValueError(f"'{field_name}' debe ser un entero válido")
    try:
        result = int(str(value).strip()) if isinstance(value, str) else int(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"'{field_name}' debe ser un entero válido") from exc
    return result


def _as_float(value: Any, field_name: str) -> float:
    if value is None:
        raise ValueError(f"'{field_name}' es obligatorio")
    try:
        result = float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"'{field_name}' debe ser numérico") from exc
    return result


def _as_optional_float(value: Any, field_name: str) -> Optional[float]:
    if value is None or value == "":
        return None
    if isinstance(value, str) and value.strip().lower() in {"none", "off", "null"}:
        return None
    return _as_float(value, field_name)


def _as_bool(value: Any, default: bool = True) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in {"1", "true", "yes", "si", "sí"}:
        return True
    if text in {"0", "false", "no"}:
        return False
    return default


@dataclass(frozen=True)
class SamplerConfig:
    """Parámetros de muestreo; inmutable una vez construido."""

    interval_ms: int = 100
    max_iterations: int = -1
    list_only: bool = False
    backend: str = "auto"
    hwmon_root: str = DEFAULT_HWMON_ROOT
    libsensors_config: Optional[str] = None
    output: Optional[str] = None
    log_level: str = "INFO"
    metrics_interval_s: Optional[float] = 60.0

    @property
    def unbounded(self) -> bool:
        return self.max_iterations < 0

    @property
    def interval_s(self) -> float:
        return self.interval_ms / 1000.0

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> "SamplerConfig":
        if not data:
            return cls()
        interval_ms = _as_int(data.get("interval_ms", 100), "interval_ms")
        if interval_ms < 0:
            raise ValueError("interval_ms debe ser >= 0")
        max_iterations = _as_int(data.get("max_iterations", -1), "max_iterations")
        list_only = _as_bool(data.get("list_only"), False)

        backend = _as_str(data.get("backend", "auto"), "backend") or "auto"
        backend = backend.lower()
        if backend not in BACKEND_CHOICES:
            raise ValueError(
                "backend debe ser uno de: " + ", ".join(BACKEND_CHOICES)
            )
        hwmon_root = _as_str(data.get("hwmon_root", DEFAULT_HWMON_ROOT), "hwmon_root")
        libsensors_config = _as_str(
            data.get("libsensors_config"), "libsensors_config", optional=True
        )
        output = _as_str(data.get("output"), "output", optional=True)

        log_level = (_as_str(data.get("log_level", "INFO"), "log_level") or "INFO").upper()
        if not isinstance(logging.getLevelName(log_level), int):
            raise ValueError(f"log_level '{log_level}' no es un nivel de logging válido")

        metrics_interval = _as_optional_float(
            data.get("metrics_interval_s", 60.0), "metrics_interval_s"
        )
        if metrics_interval is not None and metrics_interval <= 0:
            raise ValueError("metrics_interval_s debe ser > 0")

        return cls(
            interval_ms=interval_ms,
            max_iterations=max_iterations,
            list_only=list_only,
            backend=backend,
            hwmon_root=hwmon_root,
            libsensors_config=libsensors_config,
            output=output,
            log_level=log_level,
            metrics_interval_s=metrics_interval,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "interval_ms": self.interval_ms,
            "max_iterations": self.max_iterations,
            "list_only": self.list_only,
            "backend": self.backend,
            "hwmon_root": self.hwmon_root,
            "libsensors_config": self.libsensors_config,
            "output": self.output,
            "log_level": self.log_level,
            "metrics_interval_s": self.metrics_interval_s,
        }
