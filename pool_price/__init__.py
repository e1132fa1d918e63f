"""Hourly spot price and consumption merge with monthly, yearly and winter cost summaries."""

from .aggregates import aggregate_records
from .config import Settings
from .errors import DegenerateAverageError, MalformedRecordError, PoolPriceError
from .loaders import (
    ENERGY_FORMAT,
    PRICE_FORMAT,
    SeriesFormat,
    load_energy_series,
    load_price_series,
    load_series,
    read_energy_csv,
    read_price_csv,
    read_records_from_lines,
)
from .merge import complete_records, compute_cost, merge_series
from .models import Aggregation, Bucket, RawRecord, UnifiedRecord
from .pipeline import build_report
from .reporting import PriceReport, build_price_report, render_text, report_to_dict
from .timestamps import truncate_to_hour

__all__ = [
    "aggregate_records",
    "Aggregation",
    "Bucket",
    "build_price_report",
    "build_report",
    "complete_records",
    "compute_cost",
    "DegenerateAverageError",
    "ENERGY_FORMAT",
    "load_energy_series",
    "load_price_series",
    "load_series",
    "MalformedRecordError",
    "merge_series",
    "PoolPriceError",
    "PRICE_FORMAT",
    "PriceReport",
    "RawRecord",
    "read_energy_csv",
    "read_price_csv",
    "read_records_from_lines",
    "render_text",
    "report_to_dict",
    "SeriesFormat",
    "Settings",
    "truncate_to_hour",
    "UnifiedRecord",
]
