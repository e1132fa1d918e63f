from __future__ import annotations

import pytest

from pool_price.config import (
    FIXED_PRICE_REFERENCE_CENTS,
    PRICE_MARGIN_CENTS,
    WINTER_MONTHS,
    Settings,
)


def test_defaults():
    settings = Settings()

    assert settings.price_margin_cents == PRICE_MARGIN_CENTS == 0.5
    assert settings.fixed_price_reference_cents == FIXED_PRICE_REFERENCE_CENTS
    assert settings.winter_months == frozenset({1, 2, 3, 4, 10, 11, 12})
    assert WINTER_MONTHS == settings.winter_months


def test_from_mapping_ignores_missing_and_blank_values():
    assert Settings.from_mapping({}) == Settings()
    assert Settings.from_mapping({"price_margin": "  ", "winter_months": None}) == Settings()


def test_from_mapping_parses_overrides():
    settings = Settings.from_mapping(
        {"price_margin": "0,75", "fixed_price_reference": "9.5", "winter_months": "11, 12,1"}
    )

    assert settings.price_margin_cents == 0.75
    assert settings.fixed_price_reference_cents == 9.5
    assert settings.winter_months == frozenset({1, 11, 12})


@pytest.mark.parametrize(
    "values",
    [
        {"price_margin": "abc"},
        {"price_margin": "-1"},
        {"fixed_price_reference": "-0.1"},
        {"winter_months": "0"},
        {"winter_months": "13"},
        {"winter_months": "jan"},
    ],
)
def test_from_mapping_rejects_invalid_values(values):
    with pytest.raises(ValueError):
        Settings.from_mapping(values)
