"""Emisor CSV con cabecera estable y orden de columnas determinista."""

from __future__ import annotations

import csv
import logging
import sys
from datetime import datetime
from typing import List, Optional, Sequence, TextIO

from .channels import Channel, Sample, iter_readings

logger = logging.getLogger(__name__)

TIME_COLUMN = "Time"
DELIMITER = ","


def format_timestamp(ts: datetime) -> str:
    """``YYYY-MM-DD-HH-MM-SS-mmm`` in local time."""

    return ts.strftime("%Y-%m-%d-%H-%M-%S") + f"-{ts.microsecond // 1000:03d}"


def format_value(value: Optional[float]) -> str:
    if value is None:
        return ""
    return f"{value:f}"


def header_fields(channels: Sequence[Channel]) -> List[str]:
    fields = [TIME_COLUMN]
    fields.extend(channel.column_name(reading.kind) for channel, reading in iter_readings(channels))
    return fields


def row_fields(sample: Sample) -> List[str]:
    fields = [format_timestamp(sample.timestamp)]
    fields.extend(format_value(value) for value in sample.values)
    return fields


def header(channels: Sequence[Channel]) -> str:
    return DELIMITER.join(header_fields(channels))


def row(sample: Sample) -> str:
    return DELIMITER.join(row_fields(sample))


class CSVEmitter:
    """Write the header once and one complete line per sample to ``stream``."""

    def __init__(self, channels: Sequence[Channel], stream: Optional[TextIO] = None) -> None:
        self.channels = tuple(channels)
        self.stream = stream if stream is not None else sys.stdout
        self.columns = header_fields(self.channels)
        self._writer = csv.writer(
            self.stream,
            delimiter=DELIMITER,
            quoting=csv.QUOTE_NONE,
            quotechar=None,
            lineterminator="\n",
        )
        self._header_written = False
        self.rows_written = 0

    def write_header(self) -> None:
        if self._header_written:
            raise RuntimeError("La cabecera CSV ya fue escrita")
        self._writer.writerow(self.columns)
        self.stream.flush()
        self._header_written = True

    def write_row(self, sample: Sample) -> None:
        if not self._header_written:
            raise RuntimeError("Se debe escribir la cabecera antes de las filas")
        fields = row_fields(sample)
        if len(fields) != len(self.columns):
            raise ValueError(
                f"La fila tiene {len(fields)} campos y la cabecera {len(self.columns)}"
            )
        self._writer.writerow(fields)
        self.stream.flush()
        self.rows_written += 1
