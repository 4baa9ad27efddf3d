"""Canonical hex+ASCII dump of decoded payloads."""

from __future__ import annotations

from typing import List


def _printable(b: int) -> str:
    return chr(b) if 32 <= b <= 126 else "."


def hex_dump(data: bytes) -> str:
    """Return a `hexdump -C` style dump, one line per 16 bytes."""
    lines: List[str] = []
    for offset in range(0, len(data), 16):
        chunk = data[offset : offset + 16]
        left = " ".join(f"{b:02x}" for b in chunk[:8])
        right = " ".join(f"{b:02x}" for b in chunk[8:])
        text = "".join(_printable(b) for b in chunk)
        lines.append(f"{offset:08x}  {left:<23}  {right:<23}  |{text}|\n")
    return "".join(lines)
