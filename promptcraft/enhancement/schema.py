"""Enhancement output types consumed by the external command dispatcher."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from promptcraft.context.schema import ContextSpec
from promptcraft.nlp.schema import ParsedPrompt
from promptcraft.style.schema import StyleSpec


class DegradationKind(str, Enum):
    """Categories of non-fatal degradation reported in ``warnings``."""

    PARSE_AMBIGUITY = "ParseAmbiguity"
    CONTEXT_FALLBACK = "ContextFallback"
    STYLE_FALLBACK = "StyleFallback"
    MISSING_TARGET = "MissingTarget"


def format_warning(kind: DegradationKind, message: str) -> str:
    return f"{kind.value}: {message}"


class EnhancedToolCall(BaseModel):
    """One fully parameterised design-tool command."""

    model_config = ConfigDict(frozen=True)

    tool_name: str
    parameters: dict[str, Any] = Field(default_factory=dict)
    rationale: str = ""
    order: int = Field(ge=0)


class PromptEnhancementResult(BaseModel):
    """Outcome of one ``enhance`` call.

    ``error`` is set only for unusable input; every other outcome, however
    uncertain, is a valid result with ``ok == True``.
    """

    model_config = ConfigDict(frozen=True)

    raw_text: str = ""
    calls: tuple[EnhancedToolCall, ...] = ()
    overall_confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    warnings: tuple[str, ...] = ()
    parsed: ParsedPrompt | None = None
    context: ContextSpec | None = None
    style: StyleSpec | None = None
    spacing: int | None = None
    style_recommendations: tuple[str, ...] = ()
    layout_recommendations: tuple[str, ...] = ()
    error: str | None = None

    @model_validator(mode="after")
    def _check_order(self) -> PromptEnhancementResult:
        orders = [call.order for call in self.calls]
        if orders != list(range(len(orders))):
            raise ValueError(f"call order must run 0..{len(orders) - 1} without gaps, got {orders}")
        return self

    @property
    def ok(self) -> bool:
        return self.error is None

    def has_warning(self, kind: DegradationKind) -> bool:
        prefix = f"{kind.value}:"
        return any(w.startswith(prefix) for w in self.warnings)

    def to_dispatch(self) -> list[dict[str, Any]]:
        """Return ``[{"toolName", "parameters"}]`` in execution order."""
        return [
            {"toolName": call.tool_name, "parameters": call.parameters}
            for call in sorted(self.calls, key=lambda c: c.order)
        ]

    @classmethod
    def failure(cls, message: str, raw_text: str = "") -> PromptEnhancementResult:
        return cls(raw_text=raw_text, error=message)
