"""
Configuration constants and environment parsing for pulseinsight.

All PULSEINSIGHT_* environment variables are parsed here and exported as
module-level defaults. The CLI builds an InsightConfig from these defaults
and its own flags; the decode core never reads configuration itself.
"""
from __future__ import annotations

import os
from dataclasses import dataclass

from pulseinsight.dsp.segmenter import THRESHOLD_V, bit_period_for


def _int_env(name: str, default: int) -> int:
    """Parse a positive integer from environment, returning default on missing/invalid."""
    val = os.getenv(name)
    if not val:
        return default
    try:
        return max(1, int(float(val)))
    except Exception:
        return default


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------
BAUD_RATE: int = _int_env("PULSEINSIGHT_BAUD_RATE", 9600)
"""Symbol rate of the captured bus."""

WINDOW_SIZE: int = _int_env("PULSEINSIGHT_WINDOW_SIZE", 8)
"""Samples averaged by the smoothing filter."""

THRESHOLD: float = THRESHOLD_V
"""Mark/Space decision boundary in volts (fixed)."""


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------
IMAGE_WIDTH: int = _int_env("PULSEINSIGHT_IMAGE_WIDTH", 640 * 16)
"""Chart width in points."""

IMAGE_HEIGHT: int = _int_env("PULSEINSIGHT_IMAGE_HEIGHT", 640)
"""Chart height in points."""


@dataclass
class InsightConfig:
    baud_rate: int = BAUD_RATE
    window_size: int = WINDOW_SIZE
    image_width: int = IMAGE_WIDTH
    image_height: int = IMAGE_HEIGHT
    render: bool = True

    @property
    def bit_period(self) -> float:
        return bit_period_for(self.baud_rate)

    def validate(self) -> None:
        if self.baud_rate <= 0:
            raise ValueError("baud_rate must be positive")
        if self.window_size < 1:
            raise ValueError("window_size must be >= 1")
        if self.image_width <= 0 or self.image_height <= 0:
            raise ValueError("image size must be positive")
