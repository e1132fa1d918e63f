from __future__ import annotations


class PoolPriceError(Exception):
    """Base class for errors raised while building a price report."""


class MalformedRecordError(PoolPriceError):
    """A source record whose timestamp or value could not be parsed."""

    def __init__(self, source: str, message: str, position: int | None = None) -> None:
        self.source = source
        self.position = position
        self.message = message
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.position is None:
            return f"{self.source}: {self.message}"
        return f"{self.source} record {self.position}: {self.message}"


class DegenerateAverageError(PoolPriceError, ZeroDivisionError):
    """Average price requested for a bucket without any consumed energy."""
