"""PNG charts of A/B line voltages with optional UART annotations."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402

from pulseinsight.decode.types import DecodedBit, DecodedByte, SampleSeries  # noqa: E402
from pulseinsight.util.logging import get_logger  # noqa: E402

logger = get_logger(__name__)

# matplotlib sizes figures in inches; the CLI passes points.
_POINTS_PER_INCH = 72.0


@dataclass
class ChartOption:
    title_text: str = ""
    x_label_text: str = ""
    y_label_text: str = ""
    uart_bits: List[DecodedBit] = field(default_factory=list)
    uart_codes: List[DecodedByte] = field(default_factory=list)


def save_chart(path: str, series: SampleSeries, option: ChartOption, width: int, height: int) -> str:
    """Render ``series`` (and any bit/byte labels in ``option``) to ``path``."""
    fig, ax = plt.subplots(
        figsize=(width / _POINTS_PER_INCH, height / _POINTS_PER_INCH),
        dpi=_POINTS_PER_INCH,
    )
    try:
        fig.patch.set_facecolor("snow")
        ax.set_facecolor("snow")
        ax.set_title(option.title_text)
        ax.set_xlabel(option.x_label_text)
        ax.set_ylabel(option.y_label_text)

        ax.plot(series.time, series.voltage_a, color="darkmagenta", marker="x", label="A line")
        ax.plot(series.time, series.voltage_b, color="darkcyan", marker="x", label="B line")
        ax.legend(loc="lower right", borderpad=0.5)

        for bit in option.uart_bits:
            ax.text(bit.start_time, 0.0, bit.label(), rotation=-90, va="top", ha="center", fontsize=8)

        for code in option.uart_codes:
            ax.text(code.start_time, -1.0, code.label(), color="darkgreen", fontsize=22, va="top")

        fig.savefig(path, facecolor=fig.get_facecolor())
    finally:
        plt.close(fig)

    logger.info("saved chart %s", path, extra={"path": path})
    return path
