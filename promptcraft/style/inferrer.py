"""Style inference — palette, type scale and elevation from prompt and context."""

from __future__ import annotations

import logging
import re

from promptcraft.context.resolver import (
    detect_device,
    detect_industry,
    detect_screen_kind,
    get_platform_recommendation,
    normalize_theme_tokens,
)
from promptcraft.context.schema import ContextSpec
from promptcraft.nlp.schema import ParsedPrompt
from promptcraft.nlp.tokens import extract_labels
from promptcraft.nlp.vocabulary import COLOR_NAMES
from promptcraft.style.contrast import contrast_ratio
from promptcraft.style.palettes import (
    COLOR_ROLE_WORDS,
    DEFAULT_TONE,
    DEFAULT_TYPE_SCALE,
    DEVICE_TYPE_SCALES,
    FONT_FAMILIES,
    KIND_STYLE_RULES,
    SCREEN_TYPE_SCALES,
    TONE_PALETTES,
    TONE_RULES,
    KindStyle,
    TypeScale,
)
from promptcraft.style.schema import StyleSpec, Typography

logger = logging.getLogger(__name__)

_COLOR_ROLE_RE = re.compile(
    r"(#[0-9a-f]{6}\b|#[0-9a-f]{3}\b|\b(?:"
    + "|".join(sorted(COLOR_NAMES, key=len, reverse=True))
    + r")\b)(?:\s+("
    + "|".join(sorted(COLOR_ROLE_WORDS, key=len, reverse=True))
    + r")\b)?"
)


def _normalize_color(value: str) -> str:
    if value.startswith("#"):
        digits = value[1:]
        if len(digits) == 3:
            digits = "".join(c * 2 for c in digits)
        return f"#{digits.upper()}"
    return COLOR_NAMES[value]


def extract_color_overrides(text: str) -> dict[str, str]:
    """Map colours named in *text* to palette roles.

    A colour followed by a role word ("blue background") takes that role;
    the first colour without one becomes ``primary``.  Quoted labels are
    text content, not styling, and are skipped.
    """
    _, unquoted = extract_labels(text)
    overrides: dict[str, str] = {}
    unassigned: list[str] = []
    for m in _COLOR_ROLE_RE.finditer(unquoted.lower()):
        color = _normalize_color(m.group(1))
        if m.group(2):
            overrides[COLOR_ROLE_WORDS[m.group(2)]] = color
        else:
            unassigned.append(color)
    if unassigned and "primary" not in overrides:
        overrides["primary"] = unassigned[0]
    return overrides


def _type_scale(kind_rule: KindStyle, screen_kind: str | None, device_kind: str | None) -> TypeScale:
    scale = DEFAULT_TYPE_SCALE
    if device_kind in DEVICE_TYPE_SCALES:
        scale = DEVICE_TYPE_SCALES[device_kind]
    if screen_kind in SCREEN_TYPE_SCALES:
        scale = SCREEN_TYPE_SCALES[screen_kind]
    return TypeScale(
        kind_rule.base_size if kind_rule.base_size is not None else scale.base_size,
        kind_rule.scale_ratio if kind_rule.scale_ratio is not None else scale.scale_ratio,
    )


def infer_style(parsed: ParsedPrompt, context: ContextSpec | None = None) -> StyleSpec:
    """Derive a fully resolved :class:`StyleSpec`.

    Palette: first tone word in the prompt, else the context's theme
    tokens (over the light palette for missing roles), else the light
    palette, recorded as ``defaulted``.  Colours named in the prompt then
    override individual roles.  Typography, elevation and corner radius
    come from the tables in :mod:`promptcraft.style.palettes`.
    """
    context = context or ContextSpec()
    tokens = parsed.tokens
    text = tokens.residual_text or parsed.raw_text.lower()
    root = parsed.component_spec
    defaulted: list[str] = []

    tone = tokens.tones[0] if tokens.tones else None
    theme_tokens = normalize_theme_tokens(context.existing_theme_tokens)
    if tone is not None:
        palette = dict(TONE_PALETTES[tone])
    elif theme_tokens:
        palette = {**TONE_PALETTES[DEFAULT_TONE], **theme_tokens}
    else:
        palette = dict(TONE_PALETTES[DEFAULT_TONE])
        defaulted.append("palette")
        logger.debug("No tone or theme tokens; using the %s palette", DEFAULT_TONE)
    palette.update(extract_color_overrides(parsed.raw_text))

    device = context.device_preset or detect_device(text)
    screen_kind = context.screen_kind or detect_screen_kind(text, root)
    if tokens.platforms:
        platform = tokens.platforms[0]
    else:
        platform = get_platform_recommendation(ContextSpec(
            device_preset=device,
            screen_kind=screen_kind,
            industry=context.industry or detect_industry(text),
        ))

    kind_rule = KIND_STYLE_RULES.get(root.kind, KindStyle())
    scale = _type_scale(kind_rule, screen_kind, device.kind if device else None)
    typography = Typography(
        base_size=scale.base_size,
        scale_ratio=scale.scale_ratio,
        font_family=FONT_FAMILIES.get(platform, FONT_FAMILIES["shadcn"]),
        heading_size=round(scale.base_size * scale.scale_ratio ** 3),
    )

    tone_rule = TONE_RULES[tone or DEFAULT_TONE]
    elevation = kind_rule.elevation + tone_rule.elevation_bonus if kind_rule.elevation else 0
    if tone_rule.elevation_cap is not None:
        elevation = min(elevation, tone_rule.elevation_cap)

    return StyleSpec(
        palette=palette,
        typography=typography,
        elevation=elevation,
        tone=tone,
        platform=platform,
        corner_radius=(
            kind_rule.corner_radius if kind_rule.corner_radius is not None
            else tone_rule.corner_radius
        ),
        defaulted=tuple(defaulted),
    )


def generate_style_recommendations(style: StyleSpec, context: ContextSpec | None = None) -> list[str]:
    """Advisory notes about *style*.  Never changes it."""
    context = context or ContextSpec()
    recommendations: list[str] = []

    if style.tone == "dark":
        recommendations.append("Using dark theme - ensure sufficient contrast for text (min 4.5:1)")

    text_ratio = contrast_ratio(style.palette["foreground"], style.palette["background"])
    if text_ratio is not None and text_ratio < 4.5:
        recommendations.append(
            f"Foreground/background contrast is {text_ratio}:1, below the WCAG AA minimum of 4.5:1"
        )

    primary = style.palette.get("primary")
    if primary is not None:
        ui_ratio = contrast_ratio(primary, style.palette["background"])
        if ui_ratio is not None and ui_ratio < 3.0:
            recommendations.append(
                f"Primary colour contrast against the background is {ui_ratio}:1; "
                "interactive elements need at least 3:1"
            )

    device = context.device_preset
    if style.platform == "ios" and device is not None and device.kind != "mobile":
        recommendations.append("iOS components work best on mobile dimensions (390x844)")

    if style.platform == "liquid-glass":
        recommendations.append("Liquid Glass works best with background images or gradients")

    if style.elevation >= 4:
        recommendations.append("High elevation reads as an overlay; reserve it for dialogs and menus")

    if context.industry == "fintech":
        recommendations.append("Consider using professional color palette (blues, grays) for fintech")

    if context.screen_kind == "form":
        recommendations.append("Form screens benefit from clear visual hierarchy and consistent spacing")

    return recommendations
