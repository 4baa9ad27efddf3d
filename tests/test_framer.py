from typing import List, Sequence

import pytest

from pulseinsight.decode.framer import TRANSITIONS, UartFramer, decode_intervals, next_state
from pulseinsight.decode.types import FramerState, Symbol, SymbolInterval
from pulseinsight.errors import DataInconsistency

T = 1.0 / 9600


def _intervals(symbols: Sequence[Symbol], t_start: float = 0.0) -> List[SymbolInterval]:
    return [
        SymbolInterval.of(t_start + i * T, t_start + i * T + 0.9 * T, symbol)
        for i, symbol in enumerate(symbols)
    ]


def _frame(octet: int, stop: Symbol = Symbol.MARK) -> List[Symbol]:
    data = [Symbol.MARK if (octet >> i) & 1 else Symbol.SPACE for i in range(8)]
    return [Symbol.SPACE] + data + [stop]


M, S = Symbol.MARK, Symbol.SPACE


def test_transition_table_is_total() -> None:
    for state in FramerState:
        for bit in (0, 1):
            assert (state, bit) in TRANSITIONS


def test_decodes_0x41_frame() -> None:
    symbols = [S, M, S, S, S, S, S, M, S, M]
    intervals = _intervals(symbols)
    result = decode_intervals(intervals)
    assert [code.octet for code in result.codes] == [0x41]
    code = result.codes[0]
    assert code.start_time == intervals[0].start_time
    assert code.end_time == intervals[-1].end_time
    assert [bit.state for bit in result.bits] == [
        FramerState.START,
        FramerState.BIT0,
        FramerState.BIT1,
        FramerState.BIT2,
        FramerState.BIT3,
        FramerState.BIT4,
        FramerState.BIT5,
        FramerState.BIT6,
        FramerState.BIT7,
        FramerState.STOP,
    ]
    assert [bit.bit for bit in result.bits] == [0, 1, 0, 0, 0, 0, 0, 1, 0, 1]


def test_every_interval_yields_one_bit() -> None:
    intervals = _intervals([M, M, S, M, S, S, M])
    result = decode_intervals(intervals)
    assert len(result.bits) == len(intervals)
    for bit, interval in zip(result.bits, intervals):
        assert (bit.start_time, bit.end_time) == (interval.start_time, interval.end_time)


def test_idle_marks_keep_framer_idle() -> None:
    result = decode_intervals(_intervals([M, M, M]))
    assert [bit.state for bit in result.bits] == [FramerState.IDLE] * 3
    assert result.codes == []


def test_space_in_stop_slot_enters_error_then_resyncs_on_space() -> None:
    symbols = [S] + [M] * 8 + [S, S]
    result = decode_intervals(_intervals(symbols))
    assert result.bits[9].state is FramerState.ERROR
    assert result.bits[10].state is FramerState.START
    assert result.codes == []


def test_resync_after_error_decodes_next_frame() -> None:
    symbols = [S] + [M] * 8 + [S] + _frame(0x5A)
    result = decode_intervals(_intervals(symbols))
    assert result.bits[10].state is FramerState.START
    assert [code.octet for code in result.codes] == [0x5A]


def test_mark_after_error_enters_stop_and_emits_octet() -> None:
    symbols = [S] + [M] * 8 + [S, M]
    result = decode_intervals(_intervals(symbols))
    assert result.bits[-1].state is FramerState.STOP
    assert [code.octet for code in result.codes] == [0xFF]


def test_back_to_back_frames_without_idle_gap() -> None:
    symbols = _frame(0x41) + _frame(0x00) + _frame(0x7E)
    result = decode_intervals(_intervals(symbols))
    assert [code.octet for code in result.codes] == [0x41, 0x00, 0x7E]


def test_stop_then_mark_returns_to_idle() -> None:
    assert next_state(FramerState.STOP, 1) is FramerState.IDLE
    assert next_state(FramerState.STOP, 0) is FramerState.START


def test_new_start_resets_octet() -> None:
    framer = UartFramer()
    for interval in _intervals(_frame(0xFF)):
        framer.step(interval)
    assert framer.octet == 0xFF
    framer.step(SymbolInterval.of(1.0, 1.0 + 0.5 * T, S))
    assert framer.state is FramerState.START
    assert framer.octet == 0
    assert framer.start_octet_time == 1.0


def test_mismatched_boundary_levels_abort_decode() -> None:
    intervals = _intervals(_frame(0x41))
    intervals.append(SymbolInterval(20 * T, 20.5 * T, Symbol.SPACE, (-1.0, 1.0), (1.0, -1.0)))
    with pytest.raises(DataInconsistency) as excinfo:
        decode_intervals(intervals)
    assert excinfo.value.interval_index == 10


def test_levels_contradicting_symbol_abort_decode() -> None:
    bad = SymbolInterval(0.0, 0.5 * T, Symbol.MARK, (-1.0, 1.0), (-1.0, 1.0))
    with pytest.raises(DataInconsistency):
        decode_intervals([bad])


def test_empty_interval_sequence() -> None:
    result = decode_intervals([])
    assert result.bits == []
    assert result.codes == []
    assert result.payload() == b""


def test_independent_decodes_do_not_share_state() -> None:
    first = decode_intervals(_intervals(_frame(0x41)[:5]))
    second = decode_intervals(_intervals(_frame(0x41)[:5]))
    assert first.bits == second.bits
    assert first.bits[0].state is FramerState.START
