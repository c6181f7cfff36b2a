"""WCAG contrast helpers for hex colours."""

from __future__ import annotations

import re

_HEX_RE = re.compile(r"^#([0-9a-fA-F]{6})$")


def parse_hex(color: str) -> tuple[int, int, int] | None:
    """Return the RGB triple for ``#RRGGBB``, or *None* for anything else."""
    m = _HEX_RE.match(color.strip())
    if not m:
        return None
    digits = m.group(1)
    return int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16)


def relative_luminance(rgb: tuple[int, int, int]) -> float:
    def channel(value: int) -> float:
        c = value / 255.0
        return c / 12.92 if c <= 0.03928 else ((c + 0.055) / 1.055) ** 2.4

    r, g, b = (channel(v) for v in rgb)
    return 0.2126 * r + 0.7152 * g + 0.0722 * b


def contrast_ratio(first: str, second: str) -> float | None:
    """WCAG contrast ratio between two hex colours, rounded to 2 places.

    Returns *None* when either colour is not ``#RRGGBB``.
    """
    a, b = parse_hex(first), parse_hex(second)
    if a is None or b is None:
        return None
    lighter, darker = sorted((relative_luminance(a), relative_luminance(b)), reverse=True)
    return round((lighter + 0.05) / (darker + 0.05), 2)
