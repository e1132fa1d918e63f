from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pytest

from pool_price.models import UnifiedRecord


@pytest.fixture
def write_csv(tmp_path: Path):
    """Return a helper that writes semicolon-separated lines to a temp file."""

    def _write(name: str, lines: list[str]) -> Path:
        path = tmp_path / name
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    return _write


@pytest.fixture
def make_record():
    def _make(
        timestamp: str,
        price: float | None = None,
        energy: float | None = None,
        cost: float | None = None,
    ) -> UnifiedRecord:
        return UnifiedRecord(
            timestamp=datetime.fromisoformat(timestamp),
            price=price,
            energy=energy,
            cost=cost,
        )

    return _make
