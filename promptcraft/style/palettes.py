"""Declarative style tables: palettes, tone rules, kind rules, type scales.

Adding a tone or a component kind means adding a row here; the inferrer
has no per-kind or per-tone branches.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import NamedTuple

from promptcraft.context.presets import DARK_THEME_TOKENS, LIGHT_THEME_TOKENS

# ---------------------------------------------------------------------------
# Palettes
# ---------------------------------------------------------------------------

TONE_PALETTES: MappingProxyType[str, MappingProxyType[str, str]] = MappingProxyType({
    "dark": MappingProxyType({**DARK_THEME_TOKENS, "accent": "#22D3EE"}),
    "light": MappingProxyType({**LIGHT_THEME_TOKENS, "accent": "#0EA5E9"}),
    "minimal": MappingProxyType({
        "primary": "#18181B",
        "secondary": "#52525B",
        "accent": "#18181B",
        "background": "#FFFFFF",
        "surface": "#FAFAFA",
        "foreground": "#18181B",
        "muted": "#71717A",
        "border": "#E4E4E7",
        "error": "#DC2626",
        "success": "#16A34A",
        "warning": "#D97706",
    }),
    "vibrant": MappingProxyType({
        "primary": "#E11D48",
        "secondary": "#7C3AED",
        "accent": "#F59E0B",
        "background": "#FFFBEB",
        "surface": "#FFFFFF",
        "foreground": "#1C1917",
        "muted": "#57534E",
        "border": "#FDE68A",
        "error": "#DC2626",
        "success": "#059669",
        "warning": "#EA580C",
    }),
})

DEFAULT_TONE = "light"

# Words that follow a colour to assign it a palette role ("blue background").
COLOR_ROLE_WORDS: MappingProxyType[str, str] = MappingProxyType({
    "background": "background",
    "bg": "background",
    "backdrop": "background",
    "text": "foreground",
    "font": "foreground",
    "foreground": "foreground",
    "accent": "accent",
    "accents": "accent",
    "border": "border",
    "borders": "border",
    "outline": "border",
    "primary": "primary",
    "secondary": "secondary",
    "surface": "surface",
})

# ---------------------------------------------------------------------------
# Tone and kind rules
# ---------------------------------------------------------------------------


class ToneRule(NamedTuple):
    corner_radius: int
    elevation_cap: int | None = None
    elevation_bonus: int = 0


TONE_RULES: MappingProxyType[str, ToneRule] = MappingProxyType({
    "dark": ToneRule(corner_radius=8),
    "light": ToneRule(corner_radius=8),
    "minimal": ToneRule(corner_radius=4, elevation_cap=1),
    "vibrant": ToneRule(corner_radius=12, elevation_bonus=1),
})


class KindStyle(NamedTuple):
    elevation: int = 0
    base_size: int | None = None
    """Fixed body size for the kind; None defers to screen/device scales."""

    scale_ratio: float | None = None
    corner_radius: int | None = None


KIND_STYLE_RULES: MappingProxyType[str, KindStyle] = MappingProxyType({
    "card": KindStyle(elevation=2, corner_radius=12),
    "dialog": KindStyle(elevation=4, scale_ratio=1.25, corner_radius=12),
    "dropdown-menu": KindStyle(elevation=3, base_size=14, scale_ratio=1.125),
    "tooltip": KindStyle(elevation=3, base_size=12, scale_ratio=1.125, corner_radius=6),
    "alert": KindStyle(elevation=1, base_size=14, scale_ratio=1.2),
    "navigation-bar": KindStyle(elevation=1),
    "tab-bar": KindStyle(elevation=1, base_size=12, scale_ratio=1.125),
    "sidebar": KindStyle(elevation=1, base_size=14),
    "header": KindStyle(elevation=1),
    "button": KindStyle(base_size=14, scale_ratio=1.125, corner_radius=8),
    "input": KindStyle(base_size=14, scale_ratio=1.125, corner_radius=6),
    "badge": KindStyle(base_size=12, scale_ratio=1.125, corner_radius=999),
    "avatar": KindStyle(corner_radius=999),
    "hero": KindStyle(base_size=18, scale_ratio=1.333),
    "heading": KindStyle(base_size=24, scale_ratio=1.25),
})

# ---------------------------------------------------------------------------
# Type scales
# ---------------------------------------------------------------------------


class TypeScale(NamedTuple):
    base_size: int
    scale_ratio: float


SCREEN_TYPE_SCALES: MappingProxyType[str, TypeScale] = MappingProxyType({
    "landing": TypeScale(18, 1.333),
    "dashboard": TypeScale(14, 1.2),
})

DEVICE_TYPE_SCALES: MappingProxyType[str, TypeScale] = MappingProxyType({
    "mobile": TypeScale(14, 1.2),
    "tablet": TypeScale(15, 1.25),
    "desktop": TypeScale(16, 1.25),
})

DEFAULT_TYPE_SCALE = TypeScale(16, 1.25)

FONT_FAMILIES: MappingProxyType[str, str] = MappingProxyType({
    "ios": "SF Pro Text",
    "macos": "SF Pro Text",
    "liquid-glass": "SF Pro Display",
    "shadcn": "Inter",
})
