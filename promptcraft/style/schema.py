"""Style types — the fully resolved palette, type scale and elevation."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

REQUIRED_ROLES = ("background", "foreground")


class Typography(BaseModel):
    model_config = ConfigDict(frozen=True)

    base_size: int = Field(default=16, ge=1)
    scale_ratio: float = Field(default=1.25, gt=1.0)
    font_family: str = "Inter"
    heading_size: int = Field(default=31, ge=1)
    """Third step of the scale above ``base_size``."""


class StyleSpec(BaseModel):
    """Palette, type scale and elevation.  No further lookups needed downstream."""

    model_config = ConfigDict(frozen=True)

    palette: dict[str, str]
    """Semantic role ('background', 'foreground', 'primary', ...) -> colour."""

    typography: Typography = Field(default_factory=Typography)
    elevation: int = Field(default=0, ge=0)
    tone: str | None = None
    platform: str = "shadcn"
    corner_radius: int = Field(default=8, ge=0)
    defaulted: tuple[str, ...] = ()
    """Names of fields filled from built-in defaults."""

    @field_validator("palette")
    @classmethod
    def _require_base_roles(cls, palette: dict[str, str]) -> dict[str, str]:
        missing = [role for role in REQUIRED_ROLES if role not in palette]
        if missing:
            raise ValueError(f"palette is missing required roles: {', '.join(missing)}")
        return palette
