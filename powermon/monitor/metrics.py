import json
import logging
import time
from typing import Dict, Optional


class SamplerMetrics:
    """Accumulator for tick and read-failure counters, logged periodically."""

    def __init__(self, log_interval_s: Optional[float] = 60.0, logger: logging.Logger | None = None) -> None:
        self.log_interval_s = None if log_interval_s is None else max(0.0, float(log_interval_s))
        self._logger = logger or logging.getLogger(__name__)
        self._start_time = time.monotonic()
        self._last_log_time = self._start_time
        self._counters = self._initial_counters()
        self._last_snapshot = self._counters.copy()

    @staticmethod
    def _initial_counters() -> Dict[str, int]:
        return {
            "ticks": 0,
            "cells_read": 0,
            "read_failures": 0,
        }

    @property
    def counters(self) -> Dict[str, int]:
        return self._counters.copy()

    def record_tick(self, cells: int, failures: int) -> None:
        self._counters["ticks"] += 1
        self._counters["cells_read"] += max(0, cells - failures)
        self._counters["read_failures"] += max(0, failures)
        self.maybe_log()

    def maybe_log(self, force: bool = False) -> None:
        if self.log_interval_s is None and not force:
            return
        now = time.monotonic()
        interval = now - self._last_log_time
        if not force and self.log_interval_s and interval < self.log_interval_s:
            return

        payload = self._build_payload(now, interval)
        self._last_log_time = now
        self._last_snapshot = self._counters.copy()
        self._logger.info("sampler_metrics %s", json.dumps(payload, sort_keys=True))

    def _build_payload(self, now: float, interval: float) -> Dict[str, object]:
        delta = {
            key: self._counters[key] - self._last_snapshot.get(key, 0)
            for key in self._counters
        }
        return {
            "type": "sampler_metrics",
            "uptime_s": round(now - self._start_time, 3),
            "interval_s": round(interval, 3),
            "counters": self._counters.copy(),
            "delta": delta,
        }
