"""Static keyword tables shared by the extractor and the parser.

Every table is read-only.  New vocabulary is added by extending a table,
never by adding branches to the code that reads it.
"""

from __future__ import annotations

import re
from types import MappingProxyType

from promptcraft.nlp.schema import Alignment, LayoutDirection

# ---------------------------------------------------------------------------
# Component kinds
# ---------------------------------------------------------------------------

KIND_SYNONYMS: MappingProxyType[str, str] = MappingProxyType({
    # Buttons
    "button": "button",
    "btn": "button",
    "cta": "button",
    # Inputs
    "input": "input",
    "input field": "input",
    "text field": "input",
    "textfield": "input",
    "text box": "input",
    "textbox": "input",
    "field": "input",
    "textarea": "textarea",
    "text area": "textarea",
    # Containers
    "card": "card",
    "tile": "card",
    "form": "form",
    "frame": "frame",
    "container": "frame",
    "box": "frame",
    "section": "frame",
    "panel": "frame",
    "group": "frame",
    "screen": "screen",
    "page": "screen",
    "modal": "dialog",
    "dialog": "dialog",
    "popup": "dialog",
    "sidebar": "sidebar",
    "side bar": "sidebar",
    "header": "header",
    "footer": "footer",
    "hero": "hero",
    "list": "list",
    "table": "table",
    # Navigation
    "navbar": "navigation-bar",
    "nav bar": "navigation-bar",
    "navigation bar": "navigation-bar",
    "navigation": "navigation-bar",
    "tab bar": "tab-bar",
    "tabbar": "tab-bar",
    "tab": "tabs",
    "tabs": "tabs",
    "toolbar": "toolbar",
    "breadcrumb": "breadcrumb",
    "pagination": "pagination",
    "search bar": "search-bar",
    "searchbar": "search-bar",
    "search field": "search-bar",
    # Controls
    "checkbox": "checkbox",
    "toggle": "toggle",
    "switch": "switch",
    "slider": "slider",
    "dropdown": "dropdown-menu",
    "dropdown menu": "dropdown-menu",
    "menu": "dropdown-menu",
    "select": "select",
    "picker": "select",
    "radio": "radio",
    "radio button": "radio",
    # Display
    "avatar": "avatar",
    "badge": "badge",
    "chip": "badge",
    "pill": "badge",
    "tag": "badge",
    "alert": "alert",
    "banner": "alert",
    "toast": "alert",
    "tooltip": "tooltip",
    "accordion": "accordion",
    "progress bar": "progress",
    "progress": "progress",
    "image": "image",
    "img": "image",
    "picture": "image",
    "photo": "image",
    "icon": "icon",
    "divider": "divider",
    "separator": "divider",
    "text": "text",
    "label": "text",
    "paragraph": "text",
    "caption": "text",
    "link": "text",
    "heading": "heading",
    "headline": "heading",
    "title": "heading",
})

# Kinds that hold other components and are emitted as frames.
CONTAINER_KINDS: frozenset[str] = frozenset({
    "frame", "screen", "card", "form", "dialog", "sidebar", "header",
    "footer", "hero", "list", "toolbar",
})

# Longest synonyms first so "text field" wins over "text".
_KIND_PATTERN = "|".join(
    re.escape(k) for k in sorted(KIND_SYNONYMS, key=len, reverse=True)
)
KIND_RE = re.compile(r"\b(" + _KIND_PATTERN + r")(?:s|es)?\b")

# ---------------------------------------------------------------------------
# Counts
# ---------------------------------------------------------------------------

COUNT_WORDS: MappingProxyType[str, int] = MappingProxyType({
    "a": 1,
    "an": 1,
    "one": 1,
    "single": 1,
    "two": 2,
    "pair": 2,
    "couple": 2,
    "three": 3,
    "few": 3,
    "several": 3,
    "four": 4,
    "five": 5,
    "six": 6,
    "seven": 7,
    "eight": 8,
    "nine": 9,
    "ten": 10,
    "eleven": 11,
    "twelve": 12,
    "dozen": 12,
})

COUNT_RE = re.compile(
    r"(?<![\w#.\ue000])(\d+)\s*x?(?=\s|$)|\b(" + "|".join(COUNT_WORDS) + r")\b"
)

# ---------------------------------------------------------------------------
# Variants, sizes
# ---------------------------------------------------------------------------

VARIANT_KEYWORDS: MappingProxyType[str, MappingProxyType[str, tuple[str, ...]]] = MappingProxyType({
    "button": MappingProxyType({
        "primary": ("primary", "main"),
        "secondary": ("secondary",),
        "outline": ("outline", "outlined", "bordered"),
        "ghost": ("ghost", "transparent"),
        "destructive": ("destructive", "danger", "delete"),
        "link": ("link-style", "text-only"),
    }),
    "badge": MappingProxyType({
        "success": ("success",),
        "warning": ("warning",),
        "error": ("error",),
        "outline": ("outline", "outlined"),
    }),
    "alert": MappingProxyType({
        "destructive": ("destructive", "error", "danger"),
        "warning": ("warning",),
        "info": ("info", "informational"),
    }),
})

SIZE_WORDS: MappingProxyType[str, str] = MappingProxyType({
    "tiny": "xs",
    "small": "sm",
    "compact": "sm",
    "medium": "md",
    "regular": "md",
    "large": "lg",
    "big": "lg",
    "huge": "xl",
})

# Multiplier applied to a kind's default size for each size token.
SIZE_SCALE: MappingProxyType[str, float] = MappingProxyType({
    "xs": 0.5,
    "sm": 0.75,
    "md": 1.0,
    "lg": 1.25,
    "xl": 1.5,
})

# ---------------------------------------------------------------------------
# Layout words
# ---------------------------------------------------------------------------

DIRECTION_WORDS: MappingProxyType[str, LayoutDirection] = MappingProxyType({
    "side by side": LayoutDirection.HORIZONTAL,
    "horizontal": LayoutDirection.HORIZONTAL,
    "horizontally": LayoutDirection.HORIZONTAL,
    "row": LayoutDirection.HORIZONTAL,
    "inline": LayoutDirection.HORIZONTAL,
    "vertical": LayoutDirection.VERTICAL,
    "vertically": LayoutDirection.VERTICAL,
    "column": LayoutDirection.VERTICAL,
    "stack": LayoutDirection.VERTICAL,
    "stacked": LayoutDirection.VERTICAL,
})

WRAP_WORDS: tuple[str, ...] = ("grid", "wrap", "wrapped", "wrapping")

ALIGNMENT_WORDS: MappingProxyType[str, Alignment] = MappingProxyType({
    "space between": Alignment.SPACE_BETWEEN,
    "spread out": Alignment.SPACE_BETWEEN,
    "justified": Alignment.SPACE_BETWEEN,
    "centered": Alignment.CENTER,
    "centred": Alignment.CENTER,
    "center": Alignment.CENTER,
    "centre": Alignment.CENTER,
    "middle": Alignment.CENTER,
    "left-aligned": Alignment.START,
    "left aligned": Alignment.START,
    "right-aligned": Alignment.END,
    "right aligned": Alignment.END,
})

SPACING_TOKEN_ALIASES: MappingProxyType[str, str] = MappingProxyType({
    "tight": "xs",
    "snug": "sm",
    "comfortable": "md",
    "roomy": "lg",
    "airy": "lg",
    "spacious": "xl",
})

# ---------------------------------------------------------------------------
# Style words
# ---------------------------------------------------------------------------

TONE_SYNONYMS: MappingProxyType[str, str] = MappingProxyType({
    "dark mode": "dark",
    "dark": "dark",
    "night": "dark",
    "midnight": "dark",
    "light mode": "light",
    "light": "light",
    "minimalist": "minimal",
    "minimal": "minimal",
    "clean": "minimal",
    "vibrant": "vibrant",
    "colorful": "vibrant",
    "colourful": "vibrant",
    "playful": "vibrant",
})

COLOR_NAMES: MappingProxyType[str, str] = MappingProxyType({
    "blue": "#3B82F6",
    "red": "#EF4444",
    "green": "#22C55E",
    "yellow": "#EAB308",
    "purple": "#A855F7",
    "violet": "#8B5CF6",
    "indigo": "#6366F1",
    "teal": "#14B8A6",
    "pink": "#EC4899",
    "orange": "#F97316",
    "black": "#000000",
    "white": "#FFFFFF",
    "gray": "#6B7280",
    "grey": "#6B7280",
    "brand": "#6366F1",
})

PLATFORM_WORDS: MappingProxyType[str, str] = MappingProxyType({
    "liquid glass": "liquid-glass",
    "glassmorphism": "liquid-glass",
    "glass": "liquid-glass",
    "ios": "ios",
    "iphone": "ios",
    "macos": "macos",
    "mac": "macos",
    "shadcn": "shadcn",
    "radix": "shadcn",
})

# ---------------------------------------------------------------------------
# Words that never name a component
# ---------------------------------------------------------------------------

ATTRIBUTE_NOUNS: frozenset[str] = frozenset({
    "corner", "corners", "shadow", "shadows", "border", "borders", "padding",
    "margin", "margins", "spacing", "gap", "radius", "background", "color",
    "colors", "colour", "colours", "gradient", "font", "fonts", "style",
    "styling", "theme", "elevation", "blur", "opacity", "contrast", "accent",
    "size", "width", "height", "px", "pixels", "layout", "mode",
})

FILLER_WORDS: frozenset[str] = frozenset({
    "a", "an", "the", "and", "or", "of", "for", "to", "in", "on", "at", "by",
    "with", "some", "my", "our", "your", "me", "i", "we", "you", "us",
    "please", "this", "that", "it", "these", "those", "is", "are", "be",
    "can", "could", "would", "should", "will", "do", "does", "did", "has",
    "have", "what", "which", "where", "why", "who", "whose", "how", "there",
    "here", "need", "want", "like", "just", "very", "really", "so", "too",
    "also", "then", "into", "inside", "under", "below", "above", "over",
    "top", "bottom", "each", "every", "all", "its", "labeled", "labelled",
    "called", "named", "saying", "reads", "says",
    # Evaluative adjectives
    "nice", "good", "beautiful", "cool", "simple", "modern", "pretty",
    "great", "fancy", "new", "sleek", "elegant", "basic", "little",
    "rounded", "round", "bold", "subtle", "soft", "awesome", "lovely",
    # Verbs
    "create", "make", "build", "add", "design", "generate", "draw", "insert",
    "place", "put", "sketch", "mock", "change", "modify", "update", "edit",
    "adjust", "resize", "recolor", "recolour", "rename", "move", "replace",
    "tweak", "restyle", "set", "turn", "convert", "increase", "decrease",
    "align", "swap", "fix", "improve", "show", "give", "get", "use",
    # Comparatives
    "bigger", "smaller", "larger", "wider", "narrower", "taller", "shorter",
    "darker", "lighter", "brighter", "rounder", "bolder",
})
