"""Exception types raised by the ingestion layer and the decode core."""

from __future__ import annotations

from typing import Optional


class PulseInsightError(Exception):
    """Base class for all pulseinsight failures."""


class InputError(PulseInsightError, OSError):
    """The capture could not be read (I/O failure or malformed file)."""


class ParseError(InputError):
    """A numeric field of the capture could not be parsed."""

    def __init__(self, message: str, *, row: int, column: int, value: Optional[str] = None):
        super().__init__(f"{message} (row {row}, column {column}: {value!r})")
        self.row = row
        self.column = column
        self.value = value


class InsufficientData(PulseInsightError, ValueError):
    """Fewer samples than the smoothing window needs."""


class DataInconsistency(PulseInsightError, RuntimeError):
    """A symbol interval's boundary levels disagree; the decode is aborted."""

    def __init__(self, message: str, *, interval_index: int):
        super().__init__(f"{message} (interval {interval_index})")
        self.interval_index = interval_index
