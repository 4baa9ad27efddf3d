"""Shared builders for synthetic RS-485 captures."""

from typing import List, Sequence, Tuple

import numpy as np
import pytest

from pulseinsight.decode.types import SampleSeries

MARK_LEVELS = (3.0, 0.5)
SPACE_LEVELS = (0.5, 3.0)


def frame_bits(octets: Sequence[int], idle_bits: int = 2) -> List[int]:
    """Line bits for back-to-back 8N1 frames, LSB first, with idle Mark around them."""
    bits = [1] * idle_bits
    for octet in octets:
        bits.append(0)
        bits.extend((octet >> i) & 1 for i in range(8))
        bits.append(1)
    bits.extend([1] * idle_bits)
    return bits


def build_uart_waveform(
    octets: Sequence[int],
    *,
    tx_baud: float = 9590.0,
    samples_per_bit: int = 8,
    idle_bits: int = 2,
    t_offset: float = 1e-3,
    mark: Tuple[float, float] = MARK_LEVELS,
    space: Tuple[float, float] = SPACE_LEVELS,
) -> SampleSeries:
    """Sample a transmitter running slightly slower than 9600 baud.

    Samples sit mid-slot, so every bit contributes ``samples_per_bit`` samples
    spanning less than one nominal bit period, and the first sample of the next
    bit lands just over one nominal bit period after the first of this one.
    """
    bits = frame_bits(octets, idle_bits)
    t_bit = 1.0 / tx_baud
    times = []
    wire_a = []
    wire_b = []
    for b, bit in enumerate(bits):
        a, v = mark if bit else space
        for k in range(samples_per_bit):
            times.append(t_offset + b * t_bit + (k + 0.5) * t_bit / samples_per_bit)
            wire_a.append(a)
            wire_b.append(v)
    return SampleSeries(np.array(times), np.array(wire_a), np.array(wire_b))


def write_capture_csv(path, series: SampleSeries) -> None:
    lines = ["X,CH1,CH2", "Second,Volt,Volt"]
    for sample in series:
        lines.append(f"{sample.time!r},{sample.voltage_a!r},{sample.voltage_b!r}")
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")


@pytest.fixture
def uart_waveform():
    return build_uart_waveform


@pytest.fixture
def capture_csv():
    return write_capture_csv
