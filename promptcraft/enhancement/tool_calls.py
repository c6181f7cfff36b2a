"""Translation of a resolved prompt into ordered design-tool calls.

One call per component node, emitted depth-first with parents before
children.  A child refers to the call that creates its parent through a
``{{call:<order>}}`` placeholder, resolved by the dispatcher at execution
time.
"""

from __future__ import annotations

import logging
import re
from types import MappingProxyType
from typing import Any, NamedTuple

from promptcraft.context.resolver import snap_spacing
from promptcraft.context.schema import ContextSpec, DevicePreset
from promptcraft.enhancement.schema import EnhancedToolCall
from promptcraft.nlp.schema import (
    Alignment,
    ComponentSpec,
    LayoutDirection,
    ParsedPrompt,
    PromptIntent,
)
from promptcraft.nlp.vocabulary import CONTAINER_KINDS, SIZE_SCALE
from promptcraft.style.inferrer import extract_color_overrides
from promptcraft.style.palettes import KIND_STYLE_RULES
from promptcraft.style.schema import StyleSpec

logger = logging.getLogger(__name__)

SELECTION_PLACEHOLDER = "{{selection}}"

# ---------------------------------------------------------------------------
# Tool tables
# ---------------------------------------------------------------------------

FRAME_TOOL = "figma_create_frame"
TEXT_TOOL = "figma_create_text"
MODIFY_TOOL = "figma_modify_node"
SMART_LAYOUT_TOOL = "figma_smart_layout"

# Kinds each component library can build.
LIBRARY_TOOLS: MappingProxyType[str, tuple[str, frozenset[str]]] = MappingProxyType({
    "shadcn": ("figma_create_shadcn_component", frozenset({
        "accordion", "alert", "avatar", "badge", "breadcrumb", "button",
        "checkbox", "dropdown-menu", "input", "pagination", "progress",
        "select", "switch", "table", "tabs", "textarea", "toggle", "tooltip",
        "radio", "slider",
    })),
    "ios": ("figma_create_apple_component", frozenset({
        "button", "navigation-bar", "tab-bar", "toggle", "switch", "slider",
        "search-bar", "list",
    })),
    "macos": ("figma_create_apple_component", frozenset({
        "button", "toggle", "switch", "checkbox", "slider",
    })),
    "liquid-glass": ("figma_create_liquid_glass_component", frozenset({
        "button", "navigation-bar", "search-bar", "sidebar", "tab-bar",
        "toggle", "toolbar",
    })),
})

# Leaf kinds with a dedicated primitive tool.
PRIMITIVE_TOOLS: MappingProxyType[str, str] = MappingProxyType({
    "text": TEXT_TOOL,
    "heading": TEXT_TOOL,
    "image": "figma_create_image",
    "icon": "figma_create_icon",
    "divider": "figma_create_line",
})

DEFAULT_TEXT: MappingProxyType[str, str] = MappingProxyType({
    "button": "Button",
    "input": "Placeholder",
    "textarea": "Type your message here.",
    "search-bar": "Search",
    "badge": "Badge",
    "alert": "Heads up!",
    "tooltip": "Tooltip",
    "heading": "Heading",
    "text": "Text",
    "navigation-bar": "Title",
})

# ---------------------------------------------------------------------------
# Sizing
# ---------------------------------------------------------------------------


class KindSize(NamedTuple):
    """Default size of a kind.  *None* takes the device's dimension."""

    width: int | None
    height: int | None


KIND_SIZES: MappingProxyType[str, KindSize] = MappingProxyType({
    "screen": KindSize(None, None),
    "frame": KindSize(400, 300),
    "card": KindSize(360, 240),
    "form": KindSize(360, 400),
    "dialog": KindSize(480, 320),
    "sidebar": KindSize(280, None),
    "header": KindSize(None, 64),
    "footer": KindSize(None, 80),
    "hero": KindSize(None, 480),
    "list": KindSize(360, 400),
    "toolbar": KindSize(None, 48),
    "navigation-bar": KindSize(None, 56),
    "tab-bar": KindSize(None, 64),
    "table": KindSize(560, 320),
    "button": KindSize(120, 40),
    "input": KindSize(280, 40),
    "textarea": KindSize(280, 96),
    "search-bar": KindSize(320, 40),
    "select": KindSize(240, 40),
    "dropdown-menu": KindSize(200, 160),
    "checkbox": KindSize(20, 20),
    "radio": KindSize(20, 20),
    "toggle": KindSize(44, 24),
    "switch": KindSize(44, 24),
    "slider": KindSize(240, 20),
    "badge": KindSize(64, 24),
    "avatar": KindSize(40, 40),
    "alert": KindSize(360, 64),
    "tooltip": KindSize(160, 32),
    "progress": KindSize(240, 8),
    "tabs": KindSize(360, 40),
    "accordion": KindSize(360, 160),
    "pagination": KindSize(320, 40),
    "breadcrumb": KindSize(320, 24),
    "image": KindSize(320, 200),
    "icon": KindSize(24, 24),
    "divider": KindSize(320, 1),
    "text": KindSize(240, 24),
    "heading": KindSize(320, 40),
})

_FALLBACK_SIZE = KindSize(200, 40)


class Shadow(NamedTuple):
    offset_y: int
    blur: int
    opacity: float


ELEVATION_SHADOWS: tuple[Shadow, ...] = (
    Shadow(1, 3, 0.10),
    Shadow(4, 8, 0.12),
    Shadow(8, 16, 0.14),
    Shadow(16, 32, 0.16),
)

_PRIMARY_AXIS_ALIGN: MappingProxyType[Alignment, str] = MappingProxyType({
    Alignment.START: "MIN",
    Alignment.CENTER: "CENTER",
    Alignment.END: "MAX",
    Alignment.SPACE_BETWEEN: "SPACE_BETWEEN",
})

# Comparative words in MODIFY prompts, mapped to property changes.
COMPARATIVE_CHANGES: tuple[tuple[re.Pattern[str], dict[str, float]], ...] = (
    (re.compile(r"\b(?:bigger|larger)\b"), {"scale": 1.25}),
    (re.compile(r"\bsmaller\b"), {"scale": 0.8}),
    (re.compile(r"\bwider\b"), {"widthScale": 1.25}),
    (re.compile(r"\bnarrower\b"), {"widthScale": 0.8}),
    (re.compile(r"\btaller\b"), {"heightScale": 1.25}),
    (re.compile(r"\bshorter\b"), {"heightScale": 0.8}),
)


def node_size(node: ComponentSpec, device: DevicePreset | None) -> tuple[int, int]:
    """Return the pixel size for *node*.

    Explicit dimensions win axis by axis; the rest comes from
    :data:`KIND_SIZES`, scaled by the node's size word.
    """
    default = KIND_SIZES.get(node.kind, _FALLBACK_SIZE)
    scale = SIZE_SCALE.get(node.size or "md", 1.0)
    width = default.width if default.width is not None else (device.width if device else 393)
    height = default.height if default.height is not None else (device.height if device else 852)
    if default.width is not None:
        width = round(width * scale)
    if default.height is not None:
        height = max(1, round(height * scale))

    dims = node.explicit_dimensions
    if dims is not None:
        width = dims.width or width
        height = dims.height or height
    return width, height


def _display_name(kind: str) -> str:
    return " ".join(part.capitalize() for part in kind.split("-"))


def _shadow(elevation: int) -> list[dict[str, Any]]:
    if elevation <= 0:
        return []
    shadow = ELEVATION_SHADOWS[min(elevation, len(ELEVATION_SHADOWS)) - 1]
    return [{
        "type": "DROP_SHADOW",
        "color": "#000000",
        "opacity": shadow.opacity,
        "offset": {"x": 0, "y": shadow.offset_y},
        "radius": shadow.blur,
    }]


def choose_tool(node: ComponentSpec, platform: str) -> str:
    """Pick the tool that creates *node* on *platform*.

    Containers become frames, text-like kinds use primitives, and anything
    else goes to the platform's component library, then shadcn, then a
    plain frame.
    """
    if node.kind in CONTAINER_KINDS and node.kind not in LIBRARY_TOOLS.get(platform, ("", frozenset()))[1]:
        return FRAME_TOOL
    if node.kind in PRIMITIVE_TOOLS:
        return PRIMITIVE_TOOLS[node.kind]
    for library in (platform, "shadcn"):
        tool, kinds = LIBRARY_TOOLS.get(library, ("", frozenset()))
        if node.kind in kinds:
            return tool
    return FRAME_TOOL


# ---------------------------------------------------------------------------
# Parameter builders
# ---------------------------------------------------------------------------


class _Translation:
    """Walk state for one translation."""

    def __init__(
        self,
        parsed: ParsedPrompt,
        context: ContextSpec,
        style: StyleSpec,
        spacing: int,
    ) -> None:
        self.parsed = parsed
        self.context = context
        self.style = style
        self.spacing = spacing
        self.calls: list[EnhancedToolCall] = []

    def emit(self, tool_name: str, parameters: dict[str, Any], rationale: str) -> int:
        order = len(self.calls)
        self.calls.append(EnhancedToolCall(
            tool_name=tool_name, parameters=parameters, rationale=rationale, order=order,
        ))
        return order

    # -- frames ----------------------------------------------------------

    def frame_parameters(self, node: ComponentSpec, is_root: bool) -> dict[str, Any]:
        palette = self.style.palette
        width, height = node_size(node, self.context.device_preset)
        layout = self.parsed.layout_spec
        direction = layout.direction if is_root else LayoutDirection.UNSPECIFIED
        if direction is LayoutDirection.UNSPECIFIED:
            direction = LayoutDirection.VERTICAL

        auto_layout: dict[str, Any] = {
            "mode": direction.value,
            "spacing": self.spacing,
            "padding": snap_spacing(self.spacing * 1.5),
        }
        if is_root and layout.alignment is not None:
            auto_layout["primaryAxisAlign"] = _PRIMARY_AXIS_ALIGN[layout.alignment]
            if layout.alignment is Alignment.CENTER:
                auto_layout["counterAxisAlign"] = "CENTER"
        if is_root and layout.wrap:
            auto_layout["wrap"] = True

        kind_rule = KIND_STYLE_RULES.get(node.kind)
        if is_root:
            elevation = self.style.elevation
        else:
            elevation = kind_rule.elevation if kind_rule is not None else 0
        fill_role = "background" if node.kind in ("screen", "frame") else "surface"
        params: dict[str, Any] = {
            "name": _display_name(node.kind),
            "width": width,
            "height": height,
            "fill": palette.get(fill_role, palette["background"]),
            "cornerRadius": 0 if node.kind == "screen" else self.style.corner_radius,
            "autoLayout": auto_layout,
        }
        if node.kind not in ("screen", "frame") and "border" in palette:
            params["stroke"] = palette["border"]
        if elevation:
            params["effects"] = _shadow(elevation)
        return params

    # -- leaves ----------------------------------------------------------

    def component_parameters(self, node: ComponentSpec) -> dict[str, Any]:
        width, height = node_size(node, self.context.device_preset)
        params: dict[str, Any] = {
            "component": node.kind,
            "name": _display_name(node.kind),
            "variant": node.variant or "default",
            "theme": "dark" if self.style.tone == "dark" else "light",
            "width": width,
            "height": height,
        }
        text = node.label or DEFAULT_TEXT.get(node.kind)
        if text is not None:
            params["text"] = text
        if node.size is not None:
            params["size"] = node.size
        if "primary" in self.style.palette:
            params["primaryColor"] = self.style.palette["primary"]
        return params

    def text_parameters(self, node: ComponentSpec) -> dict[str, Any]:
        typography = self.style.typography
        kind_rule = KIND_STYLE_RULES.get(node.kind)
        if node.kind == "heading":
            font_size = typography.heading_size
        elif kind_rule is not None and kind_rule.base_size is not None:
            font_size = kind_rule.base_size
        else:
            font_size = typography.base_size
        if node.size is not None:
            font_size = max(8, round(font_size * SIZE_SCALE[node.size]))
        return {
            "name": _display_name(node.kind),
            "text": node.label or DEFAULT_TEXT[node.kind],
            "fontSize": font_size,
            "fontFamily": typography.font_family,
            "fontWeight": 700 if node.kind == "heading" else 400,
            "fill": self.style.palette["foreground"],
        }

    def primitive_parameters(self, node: ComponentSpec) -> dict[str, Any]:
        width, height = node_size(node, self.context.device_preset)
        palette = self.style.palette
        if node.kind == "icon":
            return {"name": node.label or "star", "size": width, "color": palette["foreground"]}
        if node.kind == "divider":
            return {"name": "Divider", "length": width, "stroke": palette.get("border", palette["foreground"])}
        return {
            "name": node.label or "Image",
            "width": width,
            "height": height,
            "placeholder": True,
            "cornerRadius": self.style.corner_radius,
        }

    def parameters_for(self, node: ComponentSpec, tool: str, is_root: bool) -> dict[str, Any]:
        if tool == FRAME_TOOL:
            return self.frame_parameters(node, is_root)
        if tool == TEXT_TOOL:
            return self.text_parameters(node)
        if node.kind in PRIMITIVE_TOOLS:
            return self.primitive_parameters(node)
        return self.component_parameters(node)

    # -- walk ------------------------------------------------------------

    def rationale_for(self, node: ComponentSpec, tool: str, is_root: bool) -> str:
        where = "root" if is_root else "child"
        origin = f" from '{node.source}'" if node.source else ""
        if node.explicit_dimensions is not None:
            sizing = "explicit size"
        elif node.kind == "screen" and self.context.device_preset is not None:
            sizing = f"{self.context.device_preset.name} viewport"
        else:
            sizing = f"default {node.kind} size"
        extra = f", {self.style.platform} library" if tool not in (FRAME_TOOL, TEXT_TOOL) else ""
        return f"Create {where} {node.kind}{origin} ({sizing}{extra})"

    def create(self, node: ComponentSpec, parent: str | None, is_root: bool) -> None:
        tool = choose_tool(node, self.style.platform)
        params = self.parameters_for(node, tool, is_root)
        if parent is not None:
            params["parentId"] = parent
        if node.count > 1:
            params["count"] = node.count
        order = self.emit(tool, params, self.rationale_for(node, tool, is_root))
        for child in node.children:
            self.create(child, f"{{{{call:{order}}}}}", is_root=False)

    def modify(self, root: ComponentSpec) -> None:
        target = self.context.target_node_id or SELECTION_PLACEHOLDER
        properties = modify_properties(self.parsed, self.style)
        changed = ", ".join(sorted(properties)) or "no recognised properties"
        self.emit(
            MODIFY_TOOL,
            {"nodeId": target, "properties": properties},
            f"Modify {root.kind} {target} ({changed})",
        )
        for child in root.children:
            self.create(child, target, is_root=False)


def modify_properties(parsed: ParsedPrompt, style: StyleSpec) -> dict[str, Any]:
    """Return only the properties the prompt actually asks to change."""
    tokens = parsed.tokens
    properties: dict[str, Any] = {}

    dims = parsed.component_spec.explicit_dimensions
    if dims is not None:
        if dims.width is not None:
            properties["width"] = dims.width
        if dims.height is not None:
            properties["height"] = dims.height

    overrides = extract_color_overrides(parsed.raw_text)
    if "background" in overrides:
        properties["fill"] = overrides["background"]
    elif "primary" in overrides:
        properties["fill"] = overrides["primary"]
    elif tokens.tones:
        properties["fill"] = style.palette["background"]
    if "foreground" in overrides or (tokens.tones and "fill" in properties):
        properties["textColor"] = style.palette["foreground"]
    if "border" in overrides:
        properties["stroke"] = overrides["border"]

    layout = parsed.layout_spec
    auto_layout: dict[str, Any] = {}
    if layout.direction is not LayoutDirection.UNSPECIFIED:
        auto_layout["mode"] = layout.direction.value
    if layout.spacing_hint is not None:
        auto_layout["spacing"] = (
            snap_spacing(layout.spacing_hint) if isinstance(layout.spacing_hint, int)
            else layout.spacing_hint
        )
    if layout.alignment is not None:
        auto_layout["primaryAxisAlign"] = _PRIMARY_AXIS_ALIGN[layout.alignment]
    if auto_layout:
        properties["autoLayout"] = auto_layout

    text = tokens.residual_text
    for pattern, change in COMPARATIVE_CHANGES:
        if pattern.search(text):
            properties.update(change)
    return properties


def build_tool_calls(
    parsed: ParsedPrompt,
    context: ContextSpec,
    style: StyleSpec,
    spacing: int,
) -> list[EnhancedToolCall]:
    """Translate a resolved prompt into ordered tool calls.

    Parameters
    ----------
    parsed:
        Parser output.  QUERY prompts produce no calls.
    context:
        Resolved context; supplies the device and the MODIFY target.
    style:
        Resolved style; supplies palette, typography and platform.
    spacing:
        Spacing recommendation applied to auto-layout containers.
    """
    if parsed.intent is PromptIntent.QUERY:
        return []

    translation = _Translation(parsed, context, style, spacing)
    root = parsed.component_spec
    if parsed.intent is PromptIntent.MODIFY:
        translation.modify(root)
    else:
        translation.create(root, None, is_root=True)
        if len(root.children) > 2:
            translation.emit(
                SMART_LAYOUT_TOOL,
                {
                    "nodeId": "{{call:0}}",
                    "strategy": "AUTO_DETECT",
                    "targetPlatform": "ios" if style.platform in ("ios", "liquid-glass") else "web",
                    "spacing": spacing,
                },
                f"Arrange the {len(root.children)} children of the root {root.kind}",
            )

    logger.debug("Translated %s prompt into %d calls", parsed.intent.value, len(translation.calls))
    return translation.calls
