"""High-level runner that takes one CSV capture through charting and decoding."""

from __future__ import annotations

import os
import sys
from typing import Optional, TextIO

from pulseinsight.config import InsightConfig
from pulseinsight.decode.pipeline import decode_waveform
from pulseinsight.decode.types import DecodeResult, SampleSeries
from pulseinsight.dsp.segmenter import intervals_to_series
from pulseinsight.dsp.smoothing import smooth
from pulseinsight.errors import DataInconsistency, InputError, InsufficientData
from pulseinsight.io.csv_loader import load_csv
from pulseinsight.render.chart import ChartOption, save_chart
from pulseinsight.util.hexdump import hex_dump
from pulseinsight.util.logging import get_logger, log_exception

logger = get_logger(__name__)


def chart_path(csv_path: str, suffix: str) -> str:
    """``capture.csv`` + ``voltage`` -> ``capture_csv_voltage.png``."""
    basename, ext = os.path.splitext(csv_path)
    ext_tag = ext[1:] if ext else "data"
    return f"{basename}_{ext_tag}_{suffix}.png"


class InsightRunner:
    """Bind a configuration to the load, chart, smooth, segment, decode sequence."""

    def __init__(self, config: Optional[InsightConfig] = None, out: Optional[TextIO] = None):
        self.config = config or InsightConfig()
        self.config.validate()
        self.out = out

    def _chart(self, csv_path: str, suffix: str, series: SampleSeries, option: ChartOption) -> None:
        if not self.config.render:
            return
        save_chart(chart_path(csv_path, suffix), series, option, self.config.image_width, self.config.image_height)

    def run(self, csv_path: str) -> DecodeResult:
        out = self.out or sys.stdout
        print(f'input file "{csv_path}"', file=out)
        option = self._chart_option()

        try:
            series = load_csv(csv_path)
        except InputError:
            log_exception(logger, f"failed to load {csv_path}", error_type="input", path=csv_path)
            raise
        self._chart(csv_path, "voltage", series, option)

        try:
            filtered = smooth(series, self.config.window_size)
        except InsufficientData:
            log_exception(logger, "smoothing failed", error_type="decode", window_size=self.config.window_size)
            raise
        option.title_text = "After low-pass filter"
        self._chart(csv_path, "filtered", filtered, option)

        try:
            intervals, result = decode_waveform(series, self.config.baud_rate)
        except DataInconsistency as exc:
            log_exception(
                logger,
                "decoding failed",
                error_type="decode",
                baud_rate=self.config.baud_rate,
                interval_index=exc.interval_index,
            )
            raise

        reshaped = intervals_to_series(intervals)
        option.title_text = "After reshaping"
        option.y_label_text = "normalized [1,-1]"
        self._chart(csv_path, "reshaped", reshaped, option)

        option.title_text = "UART"
        option.uart_bits = result.bits
        option.uart_codes = result.codes
        self._chart(csv_path, "uart", reshaped, option)

        payload = result.payload()
        if payload:
            out.write(hex_dump(payload))
        return result

    @staticmethod
    def _chart_option() -> ChartOption:
        return ChartOption(
            title_text="A/B line voltage over time",
            x_label_text="time (s)",
            y_label_text="voltage (V)",
        )


def run_insight(csv_path: str, config: Optional[InsightConfig] = None) -> DecodeResult:
    runner = InsightRunner(config)
    return runner.run(csv_path)
