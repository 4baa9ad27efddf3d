"""Record types shared by the ingestion, segmentation, and framing layers."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Sequence, Tuple

import numpy as np

from pulseinsight.errors import InputError
from pulseinsight.util.logging import get_logger

logger = get_logger(__name__)

# (voltage_a, voltage_b)
Levels = Tuple[float, float]

EXPECTED_COLUMNS = 3


@dataclass(frozen=True)
class Sample:
    time: float
    voltage_a: float
    voltage_b: float


@dataclass
class SampleSeries:
    """Column-oriented (time, voltage_a, voltage_b) samples ordered by time."""

    time: np.ndarray
    voltage_a: np.ndarray
    voltage_b: np.ndarray

    def __post_init__(self) -> None:
        self.time = np.asarray(self.time, dtype=np.float64)
        self.voltage_a = np.asarray(self.voltage_a, dtype=np.float64)
        self.voltage_b = np.asarray(self.voltage_b, dtype=np.float64)
        if not (self.time.shape == self.voltage_a.shape == self.voltage_b.shape) or self.time.ndim != 1:
            raise ValueError("time, voltage_a and voltage_b must be 1D arrays of equal length")

    @classmethod
    def from_array(cls, matrix: np.ndarray) -> "SampleSeries":
        """Build a series from a rows x columns matrix laid out as time, A, B."""
        data = np.asarray(matrix, dtype=np.float64)
        if data.ndim != 2:
            raise InputError(f"expected a 2D sample matrix, got {data.ndim} dimension(s)")
        cols = data.shape[1]
        if cols < EXPECTED_COLUMNS:
            raise InputError(f"expected {EXPECTED_COLUMNS} columns (time, A, B), got {cols}")
        if cols != EXPECTED_COLUMNS:
            logger.warning("column count mismatch: expected %d, got %d; extra columns ignored", EXPECTED_COLUMNS, cols)
        return cls(data[:, 0], data[:, 1], data[:, 2])

    def __len__(self) -> int:
        return int(self.time.size)

    def __getitem__(self, index: int) -> Sample:
        return Sample(float(self.time[index]), float(self.voltage_a[index]), float(self.voltage_b[index]))

    def __iter__(self) -> Iterator[Sample]:
        for i in range(len(self)):
            yield self[i]

    @property
    def differential(self) -> np.ndarray:
        return self.voltage_a - self.voltage_b


class Symbol(Enum):
    MARK = 1
    SPACE = 0

    @property
    def bit(self) -> int:
        return self.value

    @property
    def levels(self) -> Levels:
        """Normalized (A, B) levels: Mark drives A high, Space drives B high."""
        if self is Symbol.MARK:
            return (1.0, -1.0)
        return (-1.0, 1.0)


@dataclass(frozen=True)
class SymbolInterval:
    start_time: float
    end_time: float
    symbol: Symbol
    start_levels: Levels
    end_levels: Levels

    @classmethod
    def of(cls, start_time: float, end_time: float, symbol: Symbol) -> "SymbolInterval":
        return cls(start_time, end_time, symbol, symbol.levels, symbol.levels)


class FramerState(Enum):
    IDLE = "IDLE"
    START = "START"
    BIT0 = "Bit#0"
    BIT1 = "Bit#1"
    BIT2 = "Bit#2"
    BIT3 = "Bit#3"
    BIT4 = "Bit#4"
    BIT5 = "Bit#5"
    BIT6 = "Bit#6"
    BIT7 = "Bit#7"
    STOP = "STOP"
    ERROR = "X"

    @property
    def label(self) -> str:
        return self.value


DATA_BIT_STATES: Tuple[FramerState, ...] = (
    FramerState.BIT0,
    FramerState.BIT1,
    FramerState.BIT2,
    FramerState.BIT3,
    FramerState.BIT4,
    FramerState.BIT5,
    FramerState.BIT6,
    FramerState.BIT7,
)


@dataclass(frozen=True)
class DecodedBit:
    start_time: float
    end_time: float
    state: FramerState
    bit: int

    def label(self) -> str:
        return f"{self.bit} ({self.state.label})"


@dataclass(frozen=True)
class DecodedByte:
    start_time: float
    end_time: float
    octet: int

    def label(self) -> str:
        char = chr(self.octet) if 32 <= self.octet <= 126 else "."
        return f"({self.octet:08b})\n{self.octet}, 0x{self.octet:02x}, '{char}'"


@dataclass
class DecodeResult:
    bits: List[DecodedBit] = field(default_factory=list)
    codes: List[DecodedByte] = field(default_factory=list)

    def payload(self) -> bytes:
        return bytes(code.octet for code in self.codes)


def intervals_span(intervals: Sequence[SymbolInterval]) -> Tuple[float, float]:
    """Return (first start_time, last end_time), or (0.0, 0.0) when empty."""
    if not intervals:
        return 0.0, 0.0
    return intervals[0].start_time, intervals[-1].end_time
