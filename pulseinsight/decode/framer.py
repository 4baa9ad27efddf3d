"""UART (8N1) framing state machine over segmented symbol intervals."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Tuple

from pulseinsight.decode.types import (
    DATA_BIT_STATES,
    DecodedBit,
    DecodedByte,
    DecodeResult,
    FramerState,
    Symbol,
    SymbolInterval,
)
from pulseinsight.errors import DataInconsistency
from pulseinsight.util.logging import get_logger

logger = get_logger(__name__)


def _build_transitions() -> Dict[Tuple[FramerState, int], FramerState]:
    table: Dict[Tuple[FramerState, int], FramerState] = {
        # a falling A line on an idle bus opens a frame
        (FramerState.IDLE, 0): FramerState.START,
        (FramerState.IDLE, 1): FramerState.IDLE,
        (FramerState.START, 0): FramerState.BIT0,
        (FramerState.START, 1): FramerState.BIT0,
        # no parity, so the stop bit follows Bit#7 directly
        (FramerState.BIT7, 0): FramerState.ERROR,
        (FramerState.BIT7, 1): FramerState.STOP,
        # back-to-back frames: a Space right after STOP/ERROR is the next start bit
        (FramerState.STOP, 0): FramerState.START,
        (FramerState.STOP, 1): FramerState.IDLE,
        (FramerState.ERROR, 0): FramerState.START,
        (FramerState.ERROR, 1): FramerState.STOP,
    }
    for current, following in zip(DATA_BIT_STATES[:-1], DATA_BIT_STATES[1:]):
        table[(current, 0)] = following
        table[(current, 1)] = following
    return table


TRANSITIONS: Dict[Tuple[FramerState, int], FramerState] = _build_transitions()

# bit position stored when entering each data-bit state
_BIT_POSITION: Dict[FramerState, int] = {state: i for i, state in enumerate(DATA_BIT_STATES)}


def next_state(state: FramerState, bit: int) -> FramerState:
    return TRANSITIONS[(state, bit & 1)]


@dataclass
class UartFramer:
    """Mutable decoder state owned by a single decode invocation."""

    state: FramerState = FramerState.IDLE
    octet: int = 0
    start_octet_time: float = 0.0

    def step(self, interval: SymbolInterval) -> Tuple[DecodedBit, Optional[DecodedByte]]:
        """Consume one interval; return its bit and the byte it completed, if any."""
        bit = interval.symbol.bit
        self.state = next_state(self.state, bit)

        code: Optional[DecodedByte] = None
        if self.state is FramerState.START:
            self.octet = 0
            self.start_octet_time = interval.start_time
        elif self.state in _BIT_POSITION:
            self.octet |= bit << _BIT_POSITION[self.state]
        elif self.state is FramerState.STOP:
            code = DecodedByte(self.start_octet_time, interval.end_time, self.octet)

        return DecodedBit(interval.start_time, interval.end_time, self.state, bit), code


def check_interval(interval: SymbolInterval, index: int) -> None:
    """Raise DataInconsistency unless both boundaries carry the interval's own levels."""
    if interval.start_levels != interval.end_levels:
        raise DataInconsistency(
            f"boundary levels differ: start={interval.start_levels} end={interval.end_levels}",
            interval_index=index,
        )
    start_a, start_b = interval.start_levels
    if (start_a - start_b > 0) != (interval.symbol is Symbol.MARK) or start_a == start_b:
        raise DataInconsistency(
            f"levels {interval.start_levels} do not match symbol {interval.symbol.name}",
            interval_index=index,
        )


def decode_intervals(intervals: Iterable[SymbolInterval]) -> DecodeResult:
    """Run a fresh framer over ``intervals`` and collect the bit and byte traces.

    Any inconsistent interval aborts the whole decode; nothing decoded before
    it is returned.
    """
    framer = UartFramer()
    result = DecodeResult()
    for index, interval in enumerate(intervals):
        check_interval(interval, index)
        decoded_bit, code = framer.step(interval)
        result.bits.append(decoded_bit)
        if code is not None:
            result.codes.append(code)
    logger.debug("framer consumed %d intervals, emitted %d bytes", len(result.bits), len(result.codes))
    return result
