"""Runtime of the INA power sampler: discovery, sampling and CSV output."""

__all__ = [
    "backends",
    "channels",
    "cli",
    "discovery",
    "emitter",
    "errors",
    "metrics",
    "sampler",
]
