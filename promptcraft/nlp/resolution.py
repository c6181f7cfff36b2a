"""Ambiguity detection and confidence scoring for parsed prompts."""

from __future__ import annotations

from promptcraft.config import (
    DIMENSION_WEIGHT,
    INTENT_WEIGHT,
    KIND_WEIGHT,
    MAX_EXPANDED_INSTANCES,
    MAX_NESTING_DEPTH,
    QUERY_CONFIDENCE,
    UNKNOWN_CONFIDENCE_CAP,
)
from promptcraft.nlp.schema import Dimensions, PromptIntent


def compute_confidence(
    intent: PromptIntent,
    intent_strength: float,
    resolved: int,
    unresolved: int,
    has_dimensions: bool,
) -> float:
    """Compute the parser confidence score (0.0–1.0).

    Weighted combination of:
      - intent rule strength:            0.4
      - fraction of nouns resolved:      0.4
      - explicit dimensions present:     0.2

    QUERY prompts score ``QUERY_CONFIDENCE`` scaled by rule strength since
    they need no components.  UNKNOWN is capped below 0.5.
    """
    if intent is PromptIntent.QUERY:
        return round(QUERY_CONFIDENCE * intent_strength, 2)

    mentions = resolved + unresolved
    fraction = resolved / mentions if mentions else 0.0
    score = (
        INTENT_WEIGHT * intent_strength
        + KIND_WEIGHT * fraction
        + (DIMENSION_WEIGHT if has_dimensions else 0.0)
    )
    if intent is PromptIntent.UNKNOWN:
        score = min(score, UNKNOWN_CONFIDENCE_CAP)
    return round(max(0.0, min(score, 1.0)), 2)


def detect_ambiguities(
    text: str,
    intent: PromptIntent,
    unresolved_nouns: list[str],
    found_component: bool,
    oversized_counts: list[tuple[str, int]],
    dimensions: tuple[Dimensions, ...],
    nesting_capped: bool = False,
) -> list[str]:
    """Return warnings about ambiguities or assumptions.

    Checks for:
      - No intent rule matched
      - No component mentioned at all
      - Nouns that did not resolve to a known kind
      - Counts too large to expand
      - Containment nested past the depth limit
      - Several sizes given for one root
      - Very brief input
    """
    warnings: list[str] = []

    if intent is PromptIntent.UNKNOWN:
        warnings.append("Could not determine what the prompt asks for; treating it as a create request.")

    if intent is PromptIntent.QUERY:
        return warnings

    if not found_component:
        warnings.append("No recognisable component in prompt; defaulting to a frame.")

    for noun in unresolved_nouns:
        warnings.append(f"Unrecognised component '{noun}'; using a generic frame.")

    for kind, count in oversized_counts:
        warnings.append(
            f"Count {count} for '{kind}' exceeds the expansion limit of "
            f"{MAX_EXPANDED_INSTANCES}; emitting a single node."
        )

    if nesting_capped:
        warnings.append(
            f"Containment nested more than {MAX_NESTING_DEPTH} levels deep; "
            "deeper components were flattened into siblings."
        )

    if len(dimensions) > 1:
        first = dimensions[0]
        warnings.append(f"Several sizes given; using {first.width}x{first.height} for the root.")

    if len(text.split()) < 2:
        warnings.append("Input is very brief; interpretation may be incomplete.")

    return warnings
