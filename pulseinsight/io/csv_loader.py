"""Oscilloscope CSV capture loading."""

from __future__ import annotations

import csv
from typing import List

from pulseinsight.decode.types import EXPECTED_COLUMNS, SampleSeries
from pulseinsight.errors import InputError, ParseError
from pulseinsight.util.logging import get_logger

logger = get_logger(__name__)

# header line and channel-name line written by the scope export
HEADER_LINES = 2


def load_csv(path: str) -> SampleSeries:
    """Read ``time, A, B`` rows after the two header lines.

    Empty or missing fields are read as 0.0 and logged; extra columns are
    logged once and ignored. Non-numeric fields raise ParseError.
    """
    try:
        with open(path, newline="", encoding="utf-8") as f:
            reader = csv.reader(f)
            for skipped in range(HEADER_LINES):
                if next(reader, None) is None:
                    raise InputError(f"{path}: expected {HEADER_LINES} header lines, found {skipped}")
            records = list(reader)
    except InputError:
        raise
    except OSError as exc:
        raise InputError(f"{path}: {exc}") from exc
    except (csv.Error, UnicodeDecodeError) as exc:
        raise InputError(f"{path}: {exc}") from exc

    times: List[float] = []
    wire_a: List[float] = []
    wire_b: List[float] = []
    warned_columns = False
    for r, record in enumerate(records):
        row = HEADER_LINES + 1 + r
        if not record:
            continue
        if len(record) > EXPECTED_COLUMNS and not warned_columns:
            logger.warning(
                "column count mismatch: expected %d, got %d; extra columns ignored",
                EXPECTED_COLUMNS,
                len(record),
                extra={"row": row},
            )
            warned_columns = True
        values: List[float] = []
        for c in range(EXPECTED_COLUMNS):
            text = record[c].strip() if c < len(record) else ""
            if text == "":
                logger.warning("assigned to zero", extra={"row": row, "column": c + 1})
                values.append(0.0)
                continue
            try:
                values.append(float(text))
            except ValueError as exc:
                raise ParseError("not a number", row=row, column=c + 1, value=text) from exc
        times.append(values[0])
        wire_a.append(values[1])
        wire_b.append(values[2])

    logger.info("loaded %d samples from %s", len(times), path, extra={"path": path})
    return SampleSeries(times, wire_a, wire_b)
