"""Token extraction — dimensions, spacing hints and keyword tokens from raw text."""

from __future__ import annotations

import re

from promptcraft.nlp.schema import (
    Alignment,
    DimensionHint,
    Dimensions,
    ExtractedTokens,
    LayoutDirection,
)
from promptcraft.nlp.vocabulary import (
    ALIGNMENT_WORDS,
    COLOR_NAMES,
    COUNT_RE,
    COUNT_WORDS,
    DIRECTION_WORDS,
    PLATFORM_WORDS,
    SIZE_WORDS,
    SPACING_TOKEN_ALIASES,
    TONE_SYNONYMS,
    WRAP_WORDS,
)

_NUM = r"(\d+(?:\.\d+)?)"
_PX = r"(?:\s*(?:px|pixels?))?"

# ---------------------------------------------------------------------------
# Numeric patterns
# ---------------------------------------------------------------------------

# "320x480", "320 x 480px", "320×480", "320*480"
_PAIR_RE = re.compile(
    r"(?<![\w#.])" + _NUM + _PX + r"\s*[x×*]\s*" + _NUM + _PX + r"(?![\w.])",
    re.I,
)

# "320 by 480", "320px by 480px"
_BY_RE = re.compile(
    r"(?<![\w#.])" + _NUM + _PX + r"\s+by\s+" + _NUM + _PX + r"\b",
    re.I,
)

# "300px wide", "40 tall"
_AXIS_AFTER_RE = re.compile(
    r"(?<![\w#.])" + _NUM + _PX + r"\s*(wide|width|tall|high|height)\b",
    re.I,
)

# "width 300", "height: 40px"
_AXIS_BEFORE_RE = re.compile(
    r"\b(width|height)\s*(?:of|is|:|=)?\s*" + _NUM + _PX + r"(?![\w.])",
    re.I,
)

_AXIS_NAMES = {
    "wide": "width",
    "width": "width",
    "tall": "height",
    "high": "height",
    "height": "height",
}

# "16px gap", "24 spacing", "gap of 12px", "spacing: 8"
_SPACING_AFTER_RE = re.compile(
    r"(?<![\w#.])" + _NUM + _PX + r"\s*(?:spacing|gap|gutter|apart)\b",
    re.I,
)
_SPACING_BEFORE_RE = re.compile(
    r"\b(?:spacing|gap|gutter)\s*(?:of|is|:|=)?\s*" + _NUM + _PX + r"(?![\w.])",
    re.I,
)
_SPACING_NAME_RE = re.compile(
    r"\b(xs|sm|md|lg|xl|none)\s+(?:spacing|gap)\b|\b("
    + "|".join(SPACING_TOKEN_ALIASES)
    + r")\b",
    re.I,
)

_HEX_RE = re.compile(r"#([0-9a-f]{6}|[0-9a-f]{3})\b", re.I)

# Double quotes, curly quotes, or single quotes not used as apostrophes
_QUOTED_RE = re.compile(r"\"([^\"]+)\"|“([^”]+)”|(?<!\w)'([^']+)'(?!\w)")

# Private-use delimiters, stripped from input before labels are marked
_MARKER_OPEN = "\ue000"
_MARKER_CLOSE = "\ue001"
LABEL_MARKER = _MARKER_OPEN + "{}" + _MARKER_CLOSE
LABEL_MARKER_RE = re.compile(_MARKER_OPEN + r"(\d+)" + _MARKER_CLOSE)


def _phrase_re(words) -> re.Pattern[str]:
    """Compile a whole-word alternation, longest phrases first."""
    ordered = sorted(words, key=len, reverse=True)
    return re.compile(r"\b(" + "|".join(re.escape(w) for w in ordered) + r")\b", re.I)


_COLOR_RE = _phrase_re(COLOR_NAMES)
_SIZE_RE = _phrase_re(SIZE_WORDS)
_DIRECTION_RE = _phrase_re(DIRECTION_WORDS)
_WRAP_RE = _phrase_re(WRAP_WORDS)
_TONE_RE = _phrase_re(TONE_SYNONYMS)
_ALIGNMENT_RE = _phrase_re(ALIGNMENT_WORDS)
_PLATFORM_RE = _phrase_re(PLATFORM_WORDS)


def _to_px(value: str) -> int:
    return int(round(float(value)))


def _blank(text: str, start: int, end: int) -> str:
    """Replace ``text[start:end]`` with spaces, keeping offsets stable."""
    return text[:start] + " " * (end - start) + text[end:]


# ---------------------------------------------------------------------------
# Public helpers
# ---------------------------------------------------------------------------


def parse_count(fragment: str) -> int | None:
    """Return the last count found in *fragment* ("3", "3x", "two"), or None."""
    count = None
    for m in COUNT_RE.finditer(fragment.lower()):
        if m.group(1):
            count = int(m.group(1))
        else:
            count = COUNT_WORDS[m.group(2)]
    return count


def extract_dimensions(text: str) -> tuple[list[Dimensions], list[DimensionHint], str]:
    """Pull explicit sizes out of *text*.

    Returns ``(pairs, axis_hints, residual)`` where *residual* is *text*
    with every matched fragment blanked out.  Bare numbers with no unit
    or partner are left alone and never reported.
    """
    found: list[tuple[int, Dimensions]] = []
    hints: list[tuple[int, DimensionHint]] = []
    residual = text

    for pattern in (_PAIR_RE, _BY_RE):
        for m in pattern.finditer(residual):
            width, height = _to_px(m.group(1)), _to_px(m.group(2))
            if width >= 1 and height >= 1:
                found.append((m.start(), Dimensions(width=width, height=height)))
            residual = _blank(residual, m.start(), m.end())

    for m in _AXIS_AFTER_RE.finditer(residual):
        value = _to_px(m.group(1))
        if value >= 1:
            hints.append((m.start(), DimensionHint(axis=_AXIS_NAMES[m.group(2).lower()], value=value)))
        residual = _blank(residual, m.start(), m.end())

    for m in _AXIS_BEFORE_RE.finditer(residual):
        value = _to_px(m.group(2))
        if value >= 1:
            hints.append((m.start(), DimensionHint(axis=_AXIS_NAMES[m.group(1).lower()], value=value)))
        residual = _blank(residual, m.start(), m.end())

    found.sort(key=lambda item: item[0])
    hints.sort(key=lambda item: item[0])
    return [d for _, d in found], [h for _, h in hints], residual


def extract_spacing(text: str) -> tuple[list[int | str], str]:
    """Return spacing hints (pixels or token names) and *text* with them blanked."""
    hints: list[tuple[int, int | str]] = []
    residual = text

    for pattern in (_SPACING_AFTER_RE, _SPACING_BEFORE_RE):
        for m in pattern.finditer(residual):
            hints.append((m.start(), _to_px(m.group(1))))
            residual = _blank(residual, m.start(), m.end())

    for m in _SPACING_NAME_RE.finditer(residual):
        if m.group(1):
            hints.append((m.start(), m.group(1).lower()))
        else:
            hints.append((m.start(), SPACING_TOKEN_ALIASES[m.group(2).lower()]))
        residual = _blank(residual, m.start(), m.end())

    hints.sort(key=lambda item: item[0])
    return [h for _, h in hints], residual


def extract_labels(text: str) -> tuple[list[str], str]:
    """Return quoted strings and *text* with each replaced by a numbered marker.

    Marker delimiters already present in *text* are blanked first, so only
    markers created here ever match :data:`LABEL_MARKER_RE`.
    """
    labels: list[str] = []
    text = text.replace(_MARKER_OPEN, " ").replace(_MARKER_CLOSE, " ")

    def _mark(m: re.Match[str]) -> str:
        labels.append(next(g for g in m.groups() if g is not None).strip())
        return " " + LABEL_MARKER.format(len(labels) - 1) + " "

    return labels, _QUOTED_RE.sub(_mark, text)


def extract_tokens(text: str) -> ExtractedTokens:
    """Extract every recognised token from *text*.

    Pure function of its input.  The returned ``residual_text`` is the
    lower-cased prompt with quoted labels replaced by markers and all
    dimension and spacing fragments blanked, ready for structure parsing.
    """
    labels, marked = extract_labels(text)
    lowered = marked.lower()

    hex_colors: list[str] = []
    for m in _HEX_RE.finditer(lowered):
        digits = m.group(1)
        if len(digits) == 3:
            digits = "".join(c * 2 for c in digits)
        hex_colors.append(f"#{digits.upper()}")
        lowered = _blank(lowered, m.start(), m.end())

    dimensions, axis_hints, residual = extract_dimensions(lowered)
    spacing_hints, residual = extract_spacing(residual)

    counts: list[int] = []
    for m in COUNT_RE.finditer(residual):
        if m.group(1):
            counts.append(int(m.group(1)))
        elif m.group(2) not in ("a", "an"):
            counts.append(COUNT_WORDS[m.group(2)])

    return ExtractedTokens(
        dimensions=tuple(dimensions),
        axis_hints=tuple(axis_hints),
        colors=tuple(m.group(1).lower() for m in _COLOR_RE.finditer(residual)),
        hex_colors=tuple(hex_colors),
        sizes=tuple(SIZE_WORDS[m.group(1).lower()] for m in _SIZE_RE.finditer(residual)),
        counts=tuple(counts),
        directions=tuple(
            DIRECTION_WORDS[m.group(1).lower()] for m in _DIRECTION_RE.finditer(residual)
        ),
        wrap=bool(_WRAP_RE.search(residual)),
        tones=tuple(TONE_SYNONYMS[m.group(1).lower()] for m in _TONE_RE.finditer(residual)),
        alignments=tuple(
            ALIGNMENT_WORDS[m.group(1).lower()] for m in _ALIGNMENT_RE.finditer(residual)
        ),
        platforms=tuple(
            PLATFORM_WORDS[m.group(1).lower()] for m in _PLATFORM_RE.finditer(residual)
        ),
        spacing_hints=tuple(spacing_hints),
        labels=tuple(labels),
        residual_text=residual,
    )


def first_direction(tokens: ExtractedTokens) -> LayoutDirection:
    return tokens.directions[0] if tokens.directions else LayoutDirection.UNSPECIFIED


def first_alignment(tokens: ExtractedTokens) -> Alignment | None:
    return tokens.alignments[0] if tokens.alignments else None
