"""Configuration schema and persistence helpers for the power sampler."""

from .schema import BACKEND_CHOICES, DEFAULT_HWMON_ROOT, SamplerConfig
from .store import (
    env_overrides,
    load_env_file,
    load_sampler_config,
    merge_config,
    sampler_config_from_env,
    save_sampler_config,
)

__all__ = [
    "BACKEND_CHOICES",
    "DEFAULT_HWMON_ROOT",
    "SamplerConfig",
    "env_overrides",
    "load_env_file",
    "load_sampler_config",
    "merge_config",
    "sampler_config_from_env",
    "save_sampler_config",
]
