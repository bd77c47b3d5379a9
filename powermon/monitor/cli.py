"""Simple power monitor tool: sample INA current/voltage/power sensors as CSV."""

from __future__ import annotations

import argparse
import contextlib
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, TextIO

from powermon.config import (
    BACKEND_CHOICES,
    SamplerConfig,
    env_overrides,
    load_env_file,
    load_sampler_config,
    merge_config,
)

from .backends import build_backend
from .discovery import discover, list_channels
from .emitter import CSVEmitter
from .errors import ArgumentError, BackendInitError, NoSensorsFound
from .sampler import Sampler

logger = logging.getLogger(__name__)

EPILOG = """\
Usage (example):
  powermon > out.csv
  powermon -n 100 -t 50 -o out.csv
  powermon -l
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="powermon",
        description=__doc__,
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-n",
        dest="max_iterations",
        type=int,
        default=None,
        metavar="N",
        help="Number of samples (default: -1). Negative value runs the program infinitely",
    )
    parser.add_argument(
        "-t",
        dest="interval_ms",
        type=int,
        default=None,
        metavar="INTERVAL",
        help="Period between samples in milliseconds (default: 100)",
    )
    parser.add_argument(
        "-l",
        dest="list_only",
        action="store_true",
        default=None,
        help="List all found INA devices and exit",
    )
    parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Append the CSV to this file instead of stdout",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=None,
        help="YAML configuration file (default: powermon.yaml next to the package config)",
    )
    parser.add_argument(
        "--env",
        type=Path,
        default=None,
        help="Optional .env file with POWERMON_* variables",
    )
    parser.add_argument(
        "-b",
        "--backend",
        choices=BACKEND_CHOICES,
        default=None,
        help="Sensor backend (default: auto)",
    )
    parser.add_argument("--hwmon-root", default=None, help="Root of the hwmon sysfs tree")
    parser.add_argument("--log-level", default=None, help="Logging level for diagnostics")
    return parser


def _cli_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    keys = ("max_iterations", "interval_ms", "list_only", "output", "backend", "hwmon_root", "log_level")
    return {key: getattr(args, key) for key in keys if getattr(args, key) is not None}


def resolve_config(args: argparse.Namespace, environ: Optional[Dict[str, str]] = None) -> SamplerConfig:
    """Merge defaults, YAML file, environment and flags (in that precedence)."""

    if args.interval_ms is not None and args.interval_ms < 0:
        raise ArgumentError(f"Invalid interval: {args.interval_ms}ms")

    env: Dict[str, str] = {}
    try:
        config = load_sampler_config(args.config)
        if args.env is not None:
            env.update(load_env_file(args.env))
        env.update(os.environ if environ is None else environ)
        config = merge_config(config, env_overrides(env))
        return merge_config(config, _cli_overrides(args))
    except FileNotFoundError as exc:
        raise ArgumentError(f"Archivo de configuración no encontrado: {exc}") from exc
    except ValueError as exc:
        raise ArgumentError(str(exc)) from exc


def configure_logging(level: str) -> None:
    if not logging.getLogger().hasHandlers():
        logging.basicConfig(
            level=level,
            stream=sys.stderr,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
    else:
        logging.getLogger().setLevel(level)


@contextlib.contextmanager
def open_output(path: Optional[str]) -> Iterator[TextIO]:
    if not path:
        yield sys.stdout
        return
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    with target.open("a", encoding="utf-8", newline="") as fh:
        yield fh


def run(config: SamplerConfig) -> int:
    with build_backend(config) as backend:
        logger.info("Backend %s inicializado", backend.name)
        channels = discover(backend)
        if config.list_only:
            list_channels(channels)
            return 0
        with open_output(config.output) as stream:
            sampler = Sampler(config, backend, channels, CSVEmitter(channels, stream))
            try:
                sampler.run()
            except KeyboardInterrupt:
                logger.info("Muestreo interrumpido por el usuario tras %d filas.", sampler.ticks)
    return 0


def main(argv: List[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = resolve_config(args)
    except ArgumentError as exc:
        print(exc, file=sys.stderr)
        return 1

    configure_logging(config.log_level)
    try:
        return run(config)
    except (ArgumentError, BackendInitError, NoSensorsFound) as exc:
        print(exc, file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
