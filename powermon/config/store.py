"""Helpers to load, validate and persist the sampler configuration."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml
from dotenv import dotenv_values

from .schema import SamplerConfig

CONFIG_DIR = Path(__file__).resolve().parent
DEFAULT_CONFIG_PATH = CONFIG_DIR / "powermon.yaml"

ENV_PREFIX = "POWERMON_"
ENV_KEYS = {
    "INTERVAL_MS": "interval_ms",
    "MAX_ITERATIONS": "max_iterations",
    "BACKEND": "backend",
    "HWMON_ROOT": "hwmon_root",
    "LIBSENSORS_CONFIG": "libsensors_config",
    "OUTPUT": "output",
    "LOG_LEVEL": "log_level",
    "METRICS_INTERVAL_S": "metrics_interval_s",
}


def _read_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(path)
    with path.open("r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping at {path}, found {type(data).__name__}")
    return data


def _write_yaml(path: Path, payload: Mapping[str, Any]):
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as fh:
        yaml.safe_dump(payload, fh, sort_keys=False, allow_unicode=True)


def load_sampler_config(path: Optional[Path] = None) -> SamplerConfig:
    """Read and validate the sampler configuration from powermon.yaml.

    An explicit path must exist. When no path is given the packaged
    ``powermon.yaml`` is used if present, otherwise the defaults apply.
    """

    if path is None:
        if not DEFAULT_CONFIG_PATH.exists():
            return SamplerConfig()
        path = DEFAULT_CONFIG_PATH
    raw = _read_yaml(Path(path))
    payload = raw.get("sampler", raw)
    if not isinstance(payload, Mapping):
        raise ValueError(f"El bloque 'sampler' de {path} debe ser un mapeo")
    return SamplerConfig.from_mapping(payload)


def save_sampler_config(config: SamplerConfig, path: Optional[Path] = None):
    """Persist the sampler configuration using the canonical schema."""

    cfg_path = Path(path) if path is not None else DEFAULT_CONFIG_PATH
    _write_yaml(cfg_path, {"sampler": config.to_dict()})


def env_overrides(env: Mapping[str, Any]) -> Dict[str, Any]:
    """Extract ``POWERMON_*`` variables as configuration keys."""

    overrides: Dict[str, Any] = {}
    for suffix, key in ENV_KEYS.items():
        value = env.get(ENV_PREFIX + suffix)
        if value is None or value == "":
            continue
        overrides[key] = value
    return overrides


def merge_config(base: SamplerConfig, overrides: Mapping[str, Any]) -> SamplerConfig:
    """Return a new, validated config with ``overrides`` applied over ``base``."""

    if not overrides:
        return base
    payload = base.to_dict()
    payload.update(overrides)
    return SamplerConfig.from_mapping(payload)


def sampler_config_from_env(
    env: Mapping[str, Any], base: Optional[SamplerConfig] = None
) -> SamplerConfig:
    """Create sampler settings from environment variables."""

    return merge_config(base or SamplerConfig(), env_overrides(env))


def load_env_file(path: Path) -> Mapping[str, str]:
    """Load key/value pairs from a dotenv file."""

    values = dotenv_values(str(path))
    return {k: v for k, v in values.items() if v is not None}
