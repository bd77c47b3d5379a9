"""Bucle de muestreo: un tick lee todos los canales y emite una fila CSV."""

from __future__ import annotations

import enum
import logging
import time
from datetime import datetime
from typing import Callable, List, Optional, Sequence

from powermon.config.schema import SamplerConfig

from .backends.base import SensorBackend
from .channels import Channel, Sample, iter_readings
from .emitter import CSVEmitter
from .errors import ChannelReadError
from .metrics import SamplerMetrics

logger = logging.getLogger(__name__)


class SamplerState(enum.Enum):
    IDLE = "idle"
    RUNNING = "running"
    STOPPED = "stopped"
    TERMINATED = "terminated"


class Sampler:
    """Drive the fixed-delay sampling loop over an immutable channel list."""

    def __init__(
        self,
        config: SamplerConfig,
        backend: SensorBackend,
        channels: Sequence[Channel],
        emitter: CSVEmitter,
        *,
        metrics: Optional[SamplerMetrics] = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.config = config
        self.backend = backend
        self.channels = tuple(channels)
        self.emitter = emitter
        self.metrics = metrics or SamplerMetrics(config.metrics_interval_s)
        self._sleep = sleep
        self._clock = clock
        self._readings = list(iter_readings(self.channels))
        self._stop_requested = False
        self.state = SamplerState.IDLE
        self.ticks = 0

    def request_stop(self) -> None:
        """Signal the sampler to stop before the next tick."""

        self._stop_requested = True

    def run(self) -> int:
        """Emit the header, then tick until the bound or a stop request.

        Returns the number of rows written.
        """

        if self.state is not SamplerState.IDLE:
            raise RuntimeError(f"El muestreador ya fue ejecutado (estado {self.state.value})")

        self.state = SamplerState.RUNNING
        try:
            self.emitter.write_header()
            while True:
                if self.config.max_iterations >= 0 and self.ticks >= self.config.max_iterations:
                    logger.info("Límite de %d iteraciones alcanzado.", self.config.max_iterations)
                    break
                if self._stop_requested:
                    logger.info("Stop requested; ending sampling loop.")
                    break
                self.tick()
                self._sleep(self.config.interval_s)
        except KeyboardInterrupt:
            self.state = SamplerState.STOPPED
            raise
        except Exception:
            self.state = SamplerState.TERMINATED
            logger.exception("Error irrecuperable tras %d ticks", self.ticks)
            raise
        finally:
            self.metrics.maybe_log(force=True)

        self.state = SamplerState.STOPPED
        return self.ticks

    def tick(self) -> Sample:
        """Read every sub-reading once and write one complete row."""

        sample = self.read_sample()
        self.emitter.write_row(sample)
        self.ticks += 1
        self.metrics.record_tick(len(sample.values), sample.missing)
        return sample

    def read_sample(self) -> Sample:
        timestamp = self._clock()
        values: List[Optional[float]] = []
        for channel, reading in self._readings:
            try:
                values.append(self.backend.read(reading))
            except ChannelReadError as exc:
                logger.debug("Lectura fallida %s %s: %s", channel.name, reading.kind.name, exc)
                values.append(None)
        return Sample(timestamp=timestamp, values=tuple(values))
