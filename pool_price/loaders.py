from __future__ import annotations

import csv
import logging
import math
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Iterable, Iterator, List, Tuple

from .errors import MalformedRecordError
from .models import RawRecord
from .timestamps import truncate_to_hour

logger = logging.getLogger(__name__)

RecordReader = Iterable[Tuple[str, str]]


@dataclass(frozen=True)
class SeriesFormat:
    """Timestamp pattern and value quirks of one source file."""

    name: str
    timestamp_format: str
    minus_glyphs: str = ""


# DD/MM/YYYY HH:mm:ss;price, prices may use U+2212 as minus sign.
PRICE_FORMAT = SeriesFormat(
    name="price",
    timestamp_format="%d/%m/%Y %H:%M:%S",
    minus_glyphs="−",
)
# D.M.YYYY HH:mm;energy
ENERGY_FORMAT = SeriesFormat(name="energy", timestamp_format="%d.%m.%Y %H:%M")


def load_series(reader: RecordReader, series_format: SeriesFormat) -> Iterator[RawRecord]:
    """Parse raw (timestamp, value) text pairs into hour-truncated records.

    Records are produced lazily and in input order. The first record that
    cannot be parsed raises :class:`MalformedRecordError`.
    """

    count = 0
    for position, (raw_timestamp, raw_value) in enumerate(reader, start=1):
        timestamp = _parse_timestamp(raw_timestamp, series_format, position)
        value = _parse_value(raw_value, series_format, position)
        count += 1
        yield RawRecord(timestamp=truncate_to_hour(timestamp), value=value)
    logger.debug("Read %d %s records", count, series_format.name)


def load_price_series(reader: RecordReader) -> Iterator[RawRecord]:
    return load_series(reader, PRICE_FORMAT)


def load_energy_series(reader: RecordReader) -> Iterator[RawRecord]:
    return load_series(reader, ENERGY_FORMAT)


def read_records_from_lines(
    lines: Iterable[str],
    *,
    delimiter: str = ";",
    skip_header: bool = False,
    source: str = "input",
) -> Iterator[Tuple[str, str]]:
    """Split delimited text lines into (timestamp, value) pairs.

    Blank rows are skipped. Only the first two fields of a row are used.
    """

    header_pending = skip_header
    position = 0
    for row in csv.reader(lines, delimiter=delimiter):
        if not row or all(not cell.strip() for cell in row):
            continue
        if header_pending:
            header_pending = False
            continue
        position += 1
        if len(row) < 2:
            raise MalformedRecordError(
                source, f"Expected timestamp and value, got {row!r}.", position
            )
        yield row[0], row[1]


def read_price_csv(path: str | Path, *, skip_header: bool = False) -> List[RawRecord]:
    """Read a spot price export (cents/kWh per hour)."""

    return _read_csv(path, PRICE_FORMAT, skip_header)


def read_energy_csv(path: str | Path, *, skip_header: bool = False) -> List[RawRecord]:
    """Read an hourly consumption report (kWh per hour)."""

    return _read_csv(path, ENERGY_FORMAT, skip_header)


def _read_csv(path: str | Path, series_format: SeriesFormat, skip_header: bool) -> List[RawRecord]:
    with Path(path).open(newline="", encoding="utf-8-sig") as handle:
        pairs = read_records_from_lines(
            handle, skip_header=skip_header, source=series_format.name
        )
        return list(load_series(pairs, series_format))


def _parse_timestamp(raw: str, series_format: SeriesFormat, position: int) -> datetime:
    text = raw.strip()
    try:
        return datetime.strptime(text, series_format.timestamp_format)
    except ValueError as exc:
        raise MalformedRecordError(
            series_format.name,
            f"Invalid timestamp {raw!r}, expected {series_format.timestamp_format!r}.",
            position,
        ) from exc


def _parse_value(raw: str, series_format: SeriesFormat, position: int) -> float:
    cleaned = raw.strip().replace(",", ".", 1)
    for glyph in series_format.minus_glyphs:
        cleaned = cleaned.replace(glyph, "-")
    try:
        value = float(cleaned)
    except ValueError as exc:
        raise MalformedRecordError(
            series_format.name, f"Invalid value {raw!r}.", position
        ) from exc
    if not math.isfinite(value):
        raise MalformedRecordError(
            series_format.name, f"Value {raw!r} is not a finite number.", position
        )
    return value
