"""Unit tests for the typed sampler configuration."""

from __future__ import annotations

import dataclasses

import pytest

from powermon.config.schema import DEFAULT_HWMON_ROOT, SamplerConfig


def test_defaults_match_command_line_defaults():
    config = SamplerConfig.from_mapping(None)

    assert config.interval_ms == 100
    assert config.max_iterations == -1
    assert config.list_only is False
    assert config.backend == "auto"
    assert config.hwmon_root == DEFAULT_HWMON_ROOT
    assert config.unbounded is True
    assert config.interval_s == pytest.approx(0.1)


def test_config_is_immutable():
    config = SamplerConfig()

    with pytest.raises(dataclasses.FrozenInstanceError):
        config.interval_ms = 5  # type: ignore[misc]


def test_negative_interval_is_rejected():
    with pytest.raises(ValueError, match="interval_ms debe ser >= 0"):
        SamplerConfig.from_mapping({"interval_ms": -1})


def test_zero_interval_and_bound_are_valid():
    config = SamplerConfig.from_mapping({"interval_ms": 0, "max_iterations": 0})

    assert config.interval_ms == 0
    assert config.max_iterations == 0
    assert config.unbounded is False


def test_string_values_are_coerced():
    config = SamplerConfig.from_mapping(
        {
            "interval_ms": " 250 ",
            "max_iterations": "10",
            "list_only": "yes",
            "backend": "HWMON",
            "log_level": "debug",
            "metrics_interval_s": "off",
        }
    )

    assert config.interval_ms == 250
    assert config.max_iterations == 10
    assert config.list_only is True
    assert config.backend == "hwmon"
    assert config.log_level == "DEBUG"
    assert config.metrics_interval_s is None


def test_unknown_backend_is_rejected():
    with pytest.raises(ValueError, match="backend debe ser uno de"):
        SamplerConfig.from_mapping({"backend": "nvml"})


def test_invalid_log_level_is_rejected():
    with pytest.raises(ValueError, match="log_level"):
        SamplerConfig.from_mapping({"log_level": "verbose"})


def test_non_numeric_iterations_are_rejected():
    with pytest.raises(ValueError, match="'max_iterations' debe ser un entero válido"):
        SamplerConfig.from_mapping({"max_iterations": "many"})


def test_round_trip_through_dict():
    config = SamplerConfig.from_mapping({"interval_ms": 20, "output": "/tmp/out.csv"})

    assert SamplerConfig.from_mapping(config.to_dict()) == config
