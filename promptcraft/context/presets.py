"""Device presets and default theme tokens.

Read-only process-wide tables; never mutated after import.
"""

from __future__ import annotations

from types import MappingProxyType

from promptcraft.context.schema import DevicePreset


def _preset(key: str, name: str, kind: str, width: int, height: int, platform: str) -> DevicePreset:
    return DevicePreset(key=key, name=name, kind=kind, width=width, height=height, platform=platform)


DEVICE_PRESETS: MappingProxyType[str, DevicePreset] = MappingProxyType({
    # iOS
    "iphone-se": _preset("iphone-se", "iPhone SE", "mobile", 375, 667, "ios"),
    "iphone-14": _preset("iphone-14", "iPhone 14", "mobile", 393, 852, "ios"),
    "iphone-14-pro-max": _preset("iphone-14-pro-max", "iPhone 14 Pro Max", "mobile", 430, 932, "ios"),
    "iphone-15": _preset("iphone-15", "iPhone 15", "mobile", 393, 852, "ios"),
    "iphone-15-pro": _preset("iphone-15-pro", "iPhone 15 Pro", "mobile", 393, 852, "ios"),
    "iphone-15-pro-max": _preset("iphone-15-pro-max", "iPhone 15 Pro Max", "mobile", 430, 932, "ios"),
    # Android
    "pixel-8": _preset("pixel-8", "Google Pixel 8", "mobile", 412, 915, "android"),
    "pixel-8-pro": _preset("pixel-8-pro", "Google Pixel 8 Pro", "mobile", 448, 998, "android"),
    "samsung-s24": _preset("samsung-s24", "Samsung Galaxy S24", "mobile", 412, 915, "android"),
    # Tablets
    "ipad-mini": _preset("ipad-mini", "iPad Mini", "tablet", 744, 1133, "ios"),
    "ipad-pro-11": _preset("ipad-pro-11", 'iPad Pro 11"', "tablet", 834, 1194, "ios"),
    "ipad-pro-12": _preset("ipad-pro-12", 'iPad Pro 12.9"', "tablet", 1024, 1366, "ios"),
    "tablet": _preset("tablet", "Tablet", "tablet", 768, 1024, "web"),
    # Desktop
    "laptop": _preset("laptop", "Laptop", "desktop", 1280, 800, "web"),
    "desktop": _preset("desktop", "Desktop", "desktop", 1440, 900, "web"),
    "desktop-hd": _preset("desktop-hd", "Desktop HD", "desktop", 1920, 1080, "web"),
    # Generic
    "mobile-small": _preset("mobile-small", "Mobile Small", "mobile", 320, 568, "web"),
    "mobile-medium": _preset("mobile-medium", "Mobile Medium", "mobile", 375, 812, "web"),
    "mobile-large": _preset("mobile-large", "Mobile Large", "mobile", 428, 926, "web"),
})

# Preset used when a device kind is known but no specific model is named.
DEVICE_KIND_DEFAULTS: MappingProxyType[str, str] = MappingProxyType({
    "mobile": "iphone-15",
    "tablet": "ipad-pro-11",
    "desktop": "desktop",
})

# Phrases naming a device in prompt text, checked in order.
DEVICE_MENTIONS: tuple[tuple[str, str], ...] = (
    ("iphone se", "iphone-se"),
    ("iphone 15 pro max", "iphone-15-pro-max"),
    ("iphone 15 pro", "iphone-15-pro"),
    ("iphone 14 pro max", "iphone-14-pro-max"),
    ("iphone 14", "iphone-14"),
    ("pixel 8 pro", "pixel-8-pro"),
    ("pixel", "pixel-8"),
    ("galaxy", "samsung-s24"),
    ("ipad mini", "ipad-mini"),
    ("ipad pro", "ipad-pro-12"),
    ("ipad", "ipad-pro-11"),
    ("iphone", "iphone-15"),
    ("android", "pixel-8"),
    ("smartphone", "iphone-15"),
    ("mobile", "iphone-15"),
    ("phone", "iphone-15"),
    ("tablet", "tablet"),
    ("laptop", "laptop"),
    ("desktop", "desktop"),
    ("website", "desktop"),
    ("web", "desktop"),
)

# Width breakpoints used to guess a device kind from explicit dimensions.
WIDTH_BREAKPOINTS: tuple[tuple[int, str], ...] = (
    (430, "mobile"),
    (1024, "tablet"),
)

# Default spacing per device kind, before snapping.
DEVICE_SPACING: MappingProxyType[str, int] = MappingProxyType({
    "mobile": 16,
    "tablet": 20,
    "desktop": 24,
})

SPACING_TOKENS: MappingProxyType[str, int] = MappingProxyType({
    "none": 0,
    "xs": 4,
    "sm": 8,
    "md": 16,
    "lg": 24,
    "xl": 32,
})

DARK_THEME_TOKENS: MappingProxyType[str, str] = MappingProxyType({
    "primary": "#8B5CF6",
    "secondary": "#6366F1",
    "background": "#09090B",
    "surface": "#18181B",
    "foreground": "#FAFAFA",
    "muted": "#A1A1AA",
    "border": "#27272A",
    "error": "#EF4444",
    "success": "#22C55E",
    "warning": "#F59E0B",
})

LIGHT_THEME_TOKENS: MappingProxyType[str, str] = MappingProxyType({
    "primary": "#8B5CF6",
    "secondary": "#6366F1",
    "background": "#FFFFFF",
    "surface": "#F4F4F5",
    "foreground": "#09090B",
    "muted": "#71717A",
    "border": "#E4E4E7",
    "error": "#EF4444",
    "success": "#22C55E",
    "warning": "#F59E0B",
})

# Session theme keys mapped onto palette roles.
THEME_TOKEN_ALIASES: MappingProxyType[str, str] = MappingProxyType({
    "text": "foreground",
    "textsecondary": "muted",
    "text_secondary": "muted",
    "text-secondary": "muted",
    "fg": "foreground",
    "bg": "background",
})
