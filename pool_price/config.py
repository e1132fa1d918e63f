from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Mapping

# Cents per kWh added to the spot price before the hourly cost is derived.
PRICE_MARGIN_CENTS = 0.5
# Fixed-contract price in cents per kWh, used for comparison in reports only.
FIXED_PRICE_REFERENCE_CENTS = 8.0
# Calendar months folded into the seasonal summary. April is part of the set.
WINTER_MONTHS: FrozenSet[int] = frozenset({1, 2, 3, 4, 10, 11, 12})


@dataclass(frozen=True)
class Settings:
    """Constants consumed by the merge, aggregation and reporting steps."""

    price_margin_cents: float = PRICE_MARGIN_CENTS
    fixed_price_reference_cents: float = FIXED_PRICE_REFERENCE_CENTS
    winter_months: FrozenSet[int] = field(default=WINTER_MONTHS)

    @classmethod
    def from_mapping(cls, values: Mapping[str, object]) -> "Settings":
        """Build settings from optional string overrides (form fields, options)."""

        defaults = cls()
        margin = _parse_float(
            values.get("price_margin"), "price_margin", defaults.price_margin_cents
        )
        reference = _parse_float(
            values.get("fixed_price_reference"),
            "fixed_price_reference",
            defaults.fixed_price_reference_cents,
        )
        months = _parse_months(values.get("winter_months"), defaults.winter_months)
        return cls(
            price_margin_cents=margin,
            fixed_price_reference_cents=reference,
            winter_months=months,
        )


def _parse_float(raw: object, name: str, default: float) -> float:
    if raw is None:
        return default
    text = str(raw).strip()
    if not text:
        return default
    try:
        value = float(text.replace(",", "."))
    except ValueError as exc:
        raise ValueError(f"Value for {name.replace('_', ' ')} is invalid.") from exc
    if value < 0:
        raise ValueError(f"Value for {name.replace('_', ' ')} must be at least 0.")
    return value


def _parse_months(raw: object, default: FrozenSet[int]) -> FrozenSet[int]:
    if raw is None:
        return default
    text = str(raw).strip()
    if not text:
        return default
    months = set()
    for part in text.split(","):
        part = part.strip()
        if not part:
            continue
        try:
            month = int(part)
        except ValueError as exc:
            raise ValueError(f"Winter month {part!r} is not a number.") from exc
        if not 1 <= month <= 12:
            raise ValueError(f"Winter month {month} must be between 1 and 12.")
        months.add(month)
    return frozenset(months)
