"""Deterministic string hash used to seed fallback and salvage scores."""

from __future__ import annotations

_MASK32 = 0xFFFFFFFF


def string_hash31(text: str) -> int:
    """Polynomial rolling hash (h * 31 + unit) over UTF-16 code units.

    Wraps to a signed 32-bit integer after every step and returns the
    absolute value, so results match the browser-side hash for any input,
    including characters outside the BMP (hashed as surrogate pairs).
    """
    h = 0
    data = text.encode("utf-16-le", "surrogatepass")
    for i in range(0, len(data), 2):
        unit = data[i] | (data[i + 1] << 8)
        h = ((h << 5) - h + unit) & _MASK32
        if h & 0x80000000:
            h -= 1 << 32
    return abs(h)
