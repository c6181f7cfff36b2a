"""Context resolution — placement, device and spacing decisions.

Pure functions of their inputs plus the static tables in
:mod:`promptcraft.context.presets`.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import Any

from promptcraft.config import DEFAULT_DEVICE_KEY, SPACING_BASE_GRID, SPACING_SCALE
from promptcraft.context.presets import (
    DEVICE_KIND_DEFAULTS,
    DEVICE_MENTIONS,
    DEVICE_PRESETS,
    DEVICE_SPACING,
    SPACING_TOKENS,
    THEME_TOKEN_ALIASES,
    WIDTH_BREAKPOINTS,
)
from promptcraft.context.schema import ContextSpec, DevicePreset, PageKind
from promptcraft.errors import InvalidHintsError
from promptcraft.nlp.schema import ComponentSpec, LayoutDirection, LayoutSpec, ParsedPrompt, PromptIntent

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Keyword tables
# ---------------------------------------------------------------------------

SCREEN_PATTERNS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("landing", ("landing", "homepage", "home page", "hero")),
    ("dashboard", ("dashboard", "analytics", "metrics", "admin")),
    ("form", ("form", "login", "log in", "sign in", "signup", "sign up", "register", "contact")),
    ("profile", ("profile", "account", "user")),
    ("settings", ("settings", "preferences", "config")),
    ("checkout", ("checkout", "payment", "cart")),
    ("list", ("list", "items", "products", "feed")),
    ("detail", ("detail", "details")),
)

INDUSTRY_PATTERNS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("fintech", ("finance", "bank", "banking", "payment", "crypto", "trading", "wallet")),
    ("ecommerce", ("ecommerce", "e-commerce", "shop", "store", "product", "cart")),
    ("healthcare", ("health", "medical", "hospital", "doctor", "clinic")),
    ("education", ("education", "course", "learn", "learning", "school")),
    ("social", ("social", "chat", "message", "messages", "feed", "timeline")),
    ("saas", ("saas", "dashboard", "analytics", "workspace", "team", "project")),
)


def _phrase_search(phrase: str, text: str) -> bool:
    return re.search(r"\b" + re.escape(phrase) + r"\b", text) is not None


# ---------------------------------------------------------------------------
# Hints
# ---------------------------------------------------------------------------


def coerce_hints(hints: ContextSpec | Mapping[str, Any] | None) -> ContextSpec:
    """Turn caller hints into a :class:`ContextSpec`.

    A mapping may name its device by preset key (``{"device": "iphone-se"}``)
    or by device kind (``{"device": "tablet"}``).
    Unknown keys are logged and ignored so that the resolver falls back.
    Raises :class:`InvalidHintsError` when *hints* is not a mapping, and
    ``pydantic.ValidationError`` for malformed fields.
    """
    if hints is None:
        return ContextSpec()
    if isinstance(hints, ContextSpec):
        return hints
    if not isinstance(hints, Mapping):
        raise InvalidHintsError(f"Context hints must be a mapping, got {type(hints).__name__}")

    data = dict(hints)
    device_key = data.pop("device", None)
    if isinstance(device_key, str) and "device_preset" not in data:
        key = device_key.strip().lower()
        preset = DEVICE_PRESETS.get(key) or DEVICE_PRESETS.get(DEVICE_KIND_DEFAULTS.get(key, ""))
        if preset is None:
            logger.warning("Unknown device preset %r in context hints", device_key)
        else:
            data["device_preset"] = preset
    return ContextSpec.model_validate(data)


def normalize_theme_tokens(tokens: Mapping[str, str]) -> dict[str, str]:
    """Lower-case token names and map session aliases ('text') to palette roles."""
    normalized: dict[str, str] = {}
    for name, value in tokens.items():
        if not isinstance(value, str):
            continue
        key = name.strip().lower()
        role = THEME_TOKEN_ALIASES.get(key, key)
        normalized[role] = value.upper() if value.startswith("#") else value
    return normalized


# ---------------------------------------------------------------------------
# Detection
# ---------------------------------------------------------------------------


def detect_device(text: str) -> DevicePreset | None:
    """Return the preset for the first device named in *text*, if any."""
    for phrase, key in DEVICE_MENTIONS:
        if _phrase_search(phrase, text):
            return DEVICE_PRESETS[key]
    return None


def _device_from_dimensions(root: ComponentSpec) -> DevicePreset | None:
    """Guess a custom device when the root is a screen with an explicit size."""
    dims = root.explicit_dimensions
    if root.kind != "screen" or dims is None or dims.width is None or dims.height is None:
        return None
    kind = "desktop"
    for limit, name in WIDTH_BREAKPOINTS:
        if dims.width <= limit:
            kind = name
            break
    return DevicePreset(
        key="custom",
        name=f"Custom {dims.width}x{dims.height}",
        kind=kind,
        width=dims.width,
        height=dims.height,
    )


def detect_screen_kind(text: str, root: ComponentSpec) -> str | None:
    """Detect the screen type from keywords, then from the component tree."""
    for screen_kind, phrases in SCREEN_PATTERNS:
        if any(_phrase_search(p, text) for p in phrases):
            return screen_kind

    kinds = [node.kind for node in root.walk()]
    if "form" in kinds or "input" in kinds:
        return "form"
    if kinds.count("card") > 1 or (root.kind == "card" and len(root.children) > 2):
        return "dashboard"
    if "hero" in kinds:
        return "landing"
    return None


def detect_industry(text: str) -> str | None:
    for industry, phrases in INDUSTRY_PATTERNS:
        if any(_phrase_search(p, text) for p in phrases):
            return industry
    return None


# ---------------------------------------------------------------------------
# Main resolution
# ---------------------------------------------------------------------------


def resolve_context(
    parsed: ParsedPrompt,
    hints: ContextSpec | Mapping[str, Any] | None = None,
    snapshot: ContextSpec | None = None,
    *,
    default_device: str = DEFAULT_DEVICE_KEY,
) -> ContextSpec:
    """Derive the concrete context for *parsed*.

    Device precedence: caller hint, device named in the prompt, session
    snapshot, size of an explicit screen, then the built-in default (which
    is recorded in ``defaulted``).  Other fields take the caller hint,
    then the snapshot, then keyword detection.

    Parameters
    ----------
    parsed:
        Parser output.
    hints:
        Caller-supplied partial context.
    snapshot:
        Session state read once by the caller.
    default_device:
        Preset key used when nothing else names a device.
    """
    caller = coerce_hints(hints)
    merged = caller.merged_over(snapshot)
    text = parsed.tokens.residual_text or parsed.raw_text.lower()
    root = parsed.component_spec
    defaulted: list[str] = []

    device = (
        caller.device_preset
        or detect_device(text)
        or (snapshot.device_preset if snapshot is not None else None)
        or _device_from_dimensions(root)
    )
    if device is None:
        device = DEVICE_PRESETS.get(default_device) or DEVICE_PRESETS[DEFAULT_DEVICE_KEY]
        defaulted.append("device_preset")
        logger.debug("No device in hints, prompt or session; using %s", device.key)

    context = ContextSpec(
        page_kind=merged.page_kind or PageKind.DESIGN,
        device_preset=device,
        existing_theme_tokens=normalize_theme_tokens(merged.existing_theme_tokens),
        ancestor_spacing=merged.ancestor_spacing,
        screen_kind=merged.screen_kind or detect_screen_kind(text, root),
        industry=merged.industry or detect_industry(text),
        target_node_id=merged.target_node_id,
        defaulted=tuple(defaulted),
    )
    logger.debug(
        "Resolved context: device=%s page=%s screen=%s",
        device.key, context.page_kind.value, context.screen_kind,
    )
    return context


# ---------------------------------------------------------------------------
# Spacing
# ---------------------------------------------------------------------------


def snap_spacing(value: float) -> int:
    """Snap *value* to the nearest token in the spacing scale.

    Ties go to the nonzero token on the 8px base grid; when both or
    neither candidates are, the larger token wins.  So 10 snaps to 8,
    20 to 24 and 2 to 4.
    """
    if value <= SPACING_SCALE[0]:
        return SPACING_SCALE[0]
    if value >= SPACING_SCALE[-1]:
        return SPACING_SCALE[-1]

    best = SPACING_SCALE[0]
    for token in SPACING_SCALE:
        distance, best_distance = abs(value - token), abs(value - best)
        if distance < best_distance:
            best = token
        elif distance == best_distance:
            on_grid = token > 0 and token % SPACING_BASE_GRID == 0
            best_on_grid = best > 0 and best % SPACING_BASE_GRID == 0
            if on_grid == best_on_grid:
                best = max(best, token)
            elif on_grid:
                best = token
    return best


def get_spacing_recommendation(context: ContextSpec, layout: LayoutSpec | None = None) -> int:
    """Recommend a spacing value (pixels) from the spacing scale.

    An explicit hint in *layout* wins: pixel hints are snapped (a hint
    already on the scale comes back unchanged) and token names map to
    their value.  Otherwise the ancestor's spacing is snapped, and failing
    that the device default is used.
    """
    hint = layout.spacing_hint if layout is not None else None
    if isinstance(hint, int):
        return snap_spacing(hint)
    if isinstance(hint, str) and hint in SPACING_TOKENS:
        return SPACING_TOKENS[hint]

    if context.ancestor_spacing is not None:
        return snap_spacing(context.ancestor_spacing)

    device_kind = context.device_preset.kind if context.device_preset else "mobile"
    return snap_spacing(DEVICE_SPACING.get(device_kind, DEVICE_SPACING["mobile"]))


# ---------------------------------------------------------------------------
# Recommendations
# ---------------------------------------------------------------------------


def get_platform_recommendation(context: ContextSpec) -> str:
    """Recommend a component library for the context."""
    device = context.device_preset
    if device is not None and device.kind == "mobile" and device.platform == "ios":
        return "ios"
    if context.industry in ("fintech", "saas"):
        return "shadcn"
    if context.screen_kind == "landing":
        return "liquid-glass"
    return "shadcn"


def generate_layout_recommendations(parsed: ParsedPrompt, context: ContextSpec) -> list[str]:
    """Advisory layout notes.  Never changes the inputs."""
    recommendations: list[str] = []
    root = parsed.component_spec
    device = context.device_preset

    if len(root.children) > 4:
        recommendations.append("Consider grouping related components to reduce visual complexity")

    if (
        device is not None
        and device.kind == "mobile"
        and parsed.layout_spec.direction is LayoutDirection.HORIZONTAL
    ):
        recommendations.append(
            "Horizontal layouts may cause overflow on mobile - consider vertical stacking"
        )

    if (
        parsed.intent is PromptIntent.CREATE
        and root.kind == "screen"
        and not any(node.kind == "navigation-bar" for node in root.walk())
    ):
        recommendations.append("Consider adding a navigation bar for better screen structure")

    dims = root.explicit_dimensions
    if device is not None and dims is not None and dims.width is not None and dims.width > device.width:
        recommendations.append(
            f"Requested width {dims.width}px is wider than the {device.name} "
            f"viewport ({device.width}px)"
        )

    return recommendations
