"""Parsed prompt types — the structured output of the prompt parser."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class PromptIntent(str, Enum):
    """What the user wants done."""

    CREATE = "CREATE"
    MODIFY = "MODIFY"
    QUERY = "QUERY"
    UNKNOWN = "UNKNOWN"


class LayoutDirection(str, Enum):
    HORIZONTAL = "HORIZONTAL"
    VERTICAL = "VERTICAL"
    UNSPECIFIED = "UNSPECIFIED"


class Alignment(str, Enum):
    START = "START"
    CENTER = "CENTER"
    END = "END"
    SPACE_BETWEEN = "SPACE_BETWEEN"


class Dimensions(BaseModel):
    """Explicit pixel size.  At least one axis is always set."""

    model_config = ConfigDict(frozen=True)

    width: int | None = Field(default=None, ge=1)
    height: int | None = Field(default=None, ge=1)

    @model_validator(mode="after")
    def _require_an_axis(self) -> Dimensions:
        if self.width is None and self.height is None:
            raise ValueError("Dimensions needs a width or a height")
        return self


class ComponentSpec(BaseModel):
    """One UI element mentioned in the prompt, with its nested children."""

    model_config = ConfigDict(frozen=True)

    kind: str = "frame"
    """Canonical component kind (e.g. 'card', 'button', 'frame')."""

    count: int = Field(default=1, ge=1)
    """Instances requested.  Greater than 1 only when the count was too large to expand."""

    explicit_dimensions: Dimensions | None = None
    children: tuple[ComponentSpec, ...] = ()

    variant: str | None = None
    """Style variant such as 'primary', 'outline' or 'destructive'."""

    size: str | None = None
    """Size adjective found next to the component ('small', 'large', ...)."""

    label: str | None = None
    """Quoted text content for the component."""

    source: str = ""
    """Prompt fragment this node was parsed from."""

    def walk(self) -> list[ComponentSpec]:
        """Return this node and all descendants, parent first, children in order."""
        nodes = [self]
        for child in self.children:
            nodes.extend(child.walk())
        return nodes


class LayoutSpec(BaseModel):
    model_config = ConfigDict(frozen=True)

    direction: LayoutDirection = LayoutDirection.UNSPECIFIED
    spacing_hint: int | str | None = None
    """Pixel value or spacing token name ('sm', 'lg', ...)."""

    alignment: Alignment | None = None
    wrap: bool = False


class DimensionHint(BaseModel):
    """A single-axis size mention such as '300px wide'."""

    model_config = ConfigDict(frozen=True)

    axis: str
    """'width' or 'height'."""

    value: int


class ExtractedTokens(BaseModel):
    """Everything the token extractor recognised in a prompt."""

    model_config = ConfigDict(frozen=True)

    dimensions: tuple[Dimensions, ...] = ()
    axis_hints: tuple[DimensionHint, ...] = ()
    colors: tuple[str, ...] = ()
    """Named colours in order of appearance (lower-case)."""

    hex_colors: tuple[str, ...] = ()
    sizes: tuple[str, ...] = ()
    counts: tuple[int, ...] = ()
    directions: tuple[LayoutDirection, ...] = ()
    wrap: bool = False
    tones: tuple[str, ...] = ()
    alignments: tuple[Alignment, ...] = ()
    platforms: tuple[str, ...] = ()
    spacing_hints: tuple[int | str, ...] = ()
    labels: tuple[str, ...] = ()
    residual_text: str = ""
    """Lower-cased text with dimension, spacing and quoted fragments blanked out."""


class ParsedPrompt(BaseModel):
    """Immutable result of parsing one prompt."""

    model_config = ConfigDict(frozen=True)

    raw_text: str
    intent: PromptIntent = PromptIntent.UNKNOWN
    component_spec: ComponentSpec = Field(default_factory=ComponentSpec)
    layout_spec: LayoutSpec = Field(default_factory=LayoutSpec)
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    tokens: ExtractedTokens = Field(default_factory=ExtractedTokens)
    warnings: tuple[str, ...] = ()
    """Parse ambiguities, without the category prefix."""

    intent_rule: str = ""
    """Name of the intent rule that matched, empty when none did."""
