"""PromptEnhancer — the single entry point of the engine.

Pipeline: validate -> parse -> snapshot -> (context | style) -> translate.
QUERY prompts stop after parsing and never read the session.
Only unusable input produces an error result; every other degradation is
reported as a prefixed warning with a confidence penalty.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from concurrent.futures import ThreadPoolExecutor
from typing import Any

from pydantic import ValidationError

from promptcraft.config import FALLBACK_PENALTY, EngineSettings, load_settings
from promptcraft.context.resolver import (
    coerce_hints,
    generate_layout_recommendations,
    get_spacing_recommendation,
    resolve_context,
)
from promptcraft.context.schema import ContextSpec
from promptcraft.context.session import SessionStateProvider
from promptcraft.enhancement.schema import (
    DegradationKind,
    PromptEnhancementResult,
    format_warning,
)
from promptcraft.enhancement.tool_calls import build_tool_calls
from promptcraft.errors import InvalidHintsError, InvalidPromptError
from promptcraft.nlp.parser import PromptParser, validate_prompt
from promptcraft.nlp.schema import ParsedPrompt, PromptIntent
from promptcraft.style.inferrer import generate_style_recommendations, infer_style
from promptcraft.style.schema import StyleSpec

logger = logging.getLogger(__name__)

# One penalty per degraded stage, however many warnings it raised.
_PENALISED_KINDS = (
    DegradationKind.CONTEXT_FALLBACK,
    DegradationKind.STYLE_FALLBACK,
    DegradationKind.MISSING_TARGET,
)


class PromptEnhancer:
    """Turn free-text prompts into ordered, parameterised tool calls.

    Parameters
    ----------
    session:
        Optional provider of the current document context.  Read once per
        :meth:`enhance` call.
    settings:
        Engine settings.  Loaded from the environment when omitted.
    parallel:
        Overrides ``settings.parallel_stages``.
    """

    def __init__(
        self,
        session: SessionStateProvider | None = None,
        settings: EngineSettings | None = None,
        parallel: bool | None = None,
    ) -> None:
        self.settings = settings or load_settings()
        self.session = session
        self.parallel = self.settings.parallel_stages if parallel is None else parallel
        self._parser = PromptParser()

    # -- public ------------------------------------------------------------

    def enhance(
        self,
        raw_text: Any,
        hints: ContextSpec | Mapping[str, Any] | None = None,
    ) -> PromptEnhancementResult:
        """Enhance one prompt.

        Never raises for bad input: non-text prompts and malformed hints
        come back as a result with ``error`` set and no calls.
        """
        try:
            text = validate_prompt(raw_text)
        except InvalidPromptError as exc:
            logger.warning("Rejected prompt: %s", exc)
            return PromptEnhancementResult.failure(str(exc))

        try:
            caller = coerce_hints(hints)
        except (ValidationError, InvalidHintsError) as exc:
            logger.warning("Rejected context hints: %s", exc)
            return PromptEnhancementResult.failure(f"Invalid context hints: {exc}", raw_text=text)

        parsed = self._parser.parse(text)
        warnings = [format_warning(DegradationKind.PARSE_AMBIGUITY, w) for w in parsed.warnings]

        if parsed.intent is PromptIntent.QUERY:
            logger.info("Query prompt; no tool calls generated")
            return PromptEnhancementResult(
                raw_text=text,
                overall_confidence=parsed.confidence,
                warnings=tuple(warnings),
                parsed=parsed,
            )

        snapshot = self._take_snapshot(warnings)
        context, style = self._run_stages(parsed, caller, snapshot)
        if context.defaulted:
            device = context.device_preset
            warnings.append(format_warning(
                DegradationKind.CONTEXT_FALLBACK,
                f"No device in hints, prompt or session; using {device.name if device else 'default'}.",
            ))
        if style.defaulted:
            warnings.append(format_warning(
                DegradationKind.STYLE_FALLBACK,
                "No tone words or theme tokens; using the default light palette.",
            ))
        if parsed.intent is PromptIntent.MODIFY and context.target_node_id is None:
            warnings.append(format_warning(
                DegradationKind.MISSING_TARGET,
                "No target node given; changes apply to the current selection.",
            ))

        spacing = get_spacing_recommendation(context, parsed.layout_spec)
        calls = build_tool_calls(parsed, context, style, spacing)
        penalties = sum(
            1 for kind in _PENALISED_KINDS
            if any(w.startswith(f"{kind.value}:") for w in warnings)
        )
        confidence = min(1.0, max(0.0, round(parsed.confidence - penalties * FALLBACK_PENALTY, 2)))

        result = PromptEnhancementResult(
            raw_text=text,
            calls=tuple(calls),
            overall_confidence=confidence,
            warnings=tuple(warnings),
            parsed=parsed,
            context=context,
            style=style,
            spacing=spacing,
            style_recommendations=tuple(generate_style_recommendations(style, context)),
            layout_recommendations=tuple(generate_layout_recommendations(parsed, context)),
        )
        logger.info(
            "Enhanced %s prompt into %d calls (confidence %.2f, %d warnings)",
            parsed.intent.value, len(calls), confidence, len(warnings),
        )
        return result

    # -- internals ---------------------------------------------------------

    def _take_snapshot(self, warnings: list[str]) -> ContextSpec | None:
        if self.session is None:
            return None
        try:
            if not self.session.is_available():
                logger.debug("Session provider unavailable; continuing without a snapshot")
                return None
            return self.session.snapshot()
        except Exception:
            logger.warning("Session snapshot failed; continuing without it", exc_info=True)
            warnings.append(format_warning(
                DegradationKind.CONTEXT_FALLBACK,
                "Session state could not be read.",
            ))
            return None

    def _run_stages(
        self,
        parsed: ParsedPrompt,
        caller: ContextSpec,
        snapshot: ContextSpec | None,
    ) -> tuple[ContextSpec, StyleSpec]:
        # The style stage reads the same snapshot as the resolver, never its output.
        style_context = caller.merged_over(snapshot)
        device_key = self.settings.default_device
        if not self.parallel:
            context = resolve_context(parsed, caller, snapshot, default_device=device_key)
            return context, infer_style(parsed, style_context)

        with ThreadPoolExecutor(max_workers=2, thread_name_prefix="promptcraft") as pool:
            context_future = pool.submit(
                resolve_context, parsed, caller, snapshot, default_device=device_key,
            )
            style_future = pool.submit(infer_style, parsed, style_context)
            return context_future.result(), style_future.result()


def enhance_prompt(
    raw_text: Any,
    hints: ContextSpec | Mapping[str, Any] | None = None,
    session: SessionStateProvider | None = None,
) -> PromptEnhancementResult:
    """Enhance *raw_text* with a freshly configured :class:`PromptEnhancer`."""
    return PromptEnhancer(session=session).enhance(raw_text, hints)
