"""Jerarquía de errores del monitor de potencia."""


class PowerMonitorError(RuntimeError):
    """Base class for every error raised by the sampler."""


class ArgumentError(PowerMonitorError):
    """Raised when a flag or configuration value is invalid."""


class BackendInitError(PowerMonitorError):
    """Raised when a sensor backend cannot be initialised."""


class NoSensorsFound(PowerMonitorError):
    """Raised when discovery finds no usable INA channel."""


class ChannelReadError(PowerMonitorError):
    """Raised by a backend when a single sub-reading cannot be read.

    The sampler recovers from it by leaving the cell empty.
    """
