"""Context types — the document/session snapshot the engine reads."""

from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class PageKind(str, Enum):
    DESIGN = "DESIGN"
    DEV_MODE = "DEV_MODE"
    FIGJAM = "FIGJAM"


class DevicePreset(BaseModel):
    """A named target screen size."""

    model_config = ConfigDict(frozen=True)

    key: str
    name: str
    kind: Literal["mobile", "tablet", "desktop"]
    width: int = Field(ge=1)
    height: int = Field(ge=1)
    platform: Literal["ios", "android", "web"] = "web"


class ContextSpec(BaseModel):
    """Read-only context snapshot.

    Used both for caller hints (any field may be missing) and for the
    resolver's output (device preset and page kind always set).
    """

    model_config = ConfigDict(frozen=True)

    page_kind: PageKind | None = None
    device_preset: DevicePreset | None = None
    existing_theme_tokens: dict[str, str] = Field(default_factory=dict)
    """Theme colours already defined in the document, by token name."""

    ancestor_spacing: int | None = Field(default=None, ge=0)
    """Spacing used by the container the new nodes will land in."""

    screen_kind: str | None = None
    """'landing', 'dashboard', 'form', ... when recognisable."""

    industry: str | None = None
    target_node_id: str | None = None
    """Node that MODIFY prompts act on."""

    defaulted: tuple[str, ...] = ()
    """Names of fields filled from built-in defaults."""

    def merged_over(self, base: ContextSpec | None) -> ContextSpec:
        """Return a copy where fields unset here are taken from *base*."""
        if base is None:
            return self
        updates = {
            name: getattr(base, name)
            for name in ("page_kind", "device_preset", "ancestor_spacing", "screen_kind",
                         "industry", "target_node_id")
            if getattr(self, name) is None and getattr(base, name) is not None
        }
        if not self.existing_theme_tokens and base.existing_theme_tokens:
            updates["existing_theme_tokens"] = dict(base.existing_theme_tokens)
        return self.model_copy(update=updates) if updates else self
