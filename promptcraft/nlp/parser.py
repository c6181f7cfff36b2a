"""PromptParser — main entry point for prompt parsing.

Usage::

    from promptcraft.nlp import PromptParser

    parser = PromptParser()
    parsed = parser.parse("a dark login card 320x480 with two inputs and a button")
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from promptcraft.config import MAX_EXPANDED_INSTANCES, MAX_NESTING_DEPTH
from promptcraft.errors import InvalidPromptError
from promptcraft.nlp.intent import classify_intent
from promptcraft.nlp.resolution import compute_confidence, detect_ambiguities
from promptcraft.nlp.schema import (
    ComponentSpec,
    Dimensions,
    ExtractedTokens,
    LayoutSpec,
    ParsedPrompt,
)
from promptcraft.nlp.tokens import (
    LABEL_MARKER_RE,
    extract_tokens,
    first_alignment,
    first_direction,
    parse_count,
)
from promptcraft.nlp.vocabulary import (
    ALIGNMENT_WORDS,
    ATTRIBUTE_NOUNS,
    COLOR_NAMES,
    COUNT_WORDS,
    DIRECTION_WORDS,
    FILLER_WORDS,
    KIND_RE,
    KIND_SYNONYMS,
    PLATFORM_WORDS,
    SIZE_WORDS,
    SPACING_TOKEN_ALIASES,
    TONE_SYNONYMS,
    VARIANT_KEYWORDS,
    WRAP_WORDS,
)

logger = logging.getLogger(__name__)

_CONTAINMENT_RE = re.compile(
    r"\b(?:with|containing|including|that\s+has|which\s+has|that\s+contains|"
    r"holding|featuring)\b"
)
_ITEM_SPLIT_RE = re.compile(r",|;|&|\band\b|\bplus\b|\bthen\b")
_WORD_RE = re.compile(r"[a-z][a-z'-]*")
_SIZE_WORD_RE = re.compile(r"\b(" + "|".join(SIZE_WORDS) + r")\b")


def _words_of(phrases) -> set[str]:
    return {word for phrase in phrases for word in phrase.split()}


# Words that can never be the head noun of an unrecognised component
_NON_COMPONENT_WORDS: frozenset[str] = frozenset(
    FILLER_WORDS
    | ATTRIBUTE_NOUNS
    | set(COUNT_WORDS)
    | set(SIZE_WORDS)
    | set(COLOR_NAMES)
    | _words_of(TONE_SYNONYMS)
    | _words_of(DIRECTION_WORDS)
    | _words_of(ALIGNMENT_WORDS)
    | _words_of(PLATFORM_WORDS)
    | set(SPACING_TOKEN_ALIASES)
    | set(WRAP_WORDS)
    | {"left", "right", "mode", "px"}
)


def validate_prompt(text: object) -> str:
    """Return *text* as ``str`` or raise :class:`InvalidPromptError`.

    UTF-8 ``bytes`` are decoded; any other non-text input is rejected.
    """
    if isinstance(text, str):
        return text
    if isinstance(text, (bytes, bytearray)):
        try:
            return bytes(text).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise InvalidPromptError(f"Prompt bytes are not valid UTF-8: {exc}") from exc
    raise InvalidPromptError(f"Prompt must be text, got {type(text).__name__}")


# ---------------------------------------------------------------------------
# Structure parsing
# ---------------------------------------------------------------------------


@dataclass
class _Mention:
    """Mutable builder for a ComponentSpec node."""

    kind: str
    count: int = 1
    variant: str | None = None
    size: str | None = None
    label: str | None = None
    source: str = ""
    children: list[_Mention] = field(default_factory=list)


@dataclass
class _ParseState:
    labels: tuple[str, ...]
    resolved: int = 0
    unresolved: list[str] = field(default_factory=list)
    oversized: list[tuple[str, int]] = field(default_factory=list)
    nesting_capped: bool = False


def _find_variant(kind: str, item: str) -> str | None:
    for variant, keywords in VARIANT_KEYWORDS.get(kind, {}).items():
        if any(re.search(r"\b" + re.escape(kw) + r"\b", item) for kw in keywords):
            return variant
    return None


def _find_size(item: str) -> str | None:
    m = _SIZE_WORD_RE.search(item)
    return SIZE_WORDS[m.group(1)] if m else None


def _label_at(m: re.Match[str], labels: tuple[str, ...]) -> str | None:
    index = int(m.group(1))
    return labels[index] if index < len(labels) else None


def _find_label(item: str, labels: tuple[str, ...]) -> str | None:
    m = LABEL_MARKER_RE.search(item)
    return _label_at(m, labels) if m else None


def _restore_labels(item: str, labels: tuple[str, ...]) -> str:
    """Put quoted labels back in place of their markers, dropping stray ones."""

    def _quote(m: re.Match[str]) -> str:
        label = _label_at(m, labels)
        return "" if label is None else f'"{label}"'

    return " ".join(LABEL_MARKER_RE.sub(_quote, item).split())


def _candidate_noun(item: str) -> tuple[str, int] | None:
    """Return the last word of *item* that could name a component, with its offset."""
    candidate = None
    for m in _WORD_RE.finditer(item):
        word = m.group(0).strip("'-")
        if word and word not in _NON_COMPONENT_WORDS:
            candidate = (word, m.start())
    return candidate


def _parse_item(item: str, state: _ParseState) -> _Mention | None:
    """Turn one list item ("two primary buttons") into a mention."""
    source = _restore_labels(item, state.labels)
    matches = list(KIND_RE.finditer(item))
    if matches:
        # The head noun is the last kind named ("icon button" is a button)
        head = matches[-1]
        kind = KIND_SYNONYMS[head.group(1)]
        count = parse_count(item[:head.start()]) or 1
        state.resolved += 1
    else:
        candidate = _candidate_noun(item)
        if candidate is None:
            return None
        noun, offset = candidate
        kind = "frame"
        count = parse_count(item[:offset]) or 1
        state.unresolved.append(noun)

    if count > MAX_EXPANDED_INSTANCES:
        state.oversized.append((kind, count))

    return _Mention(
        kind=kind,
        count=count,
        variant=_find_variant(kind, item),
        size=_find_size(item),
        label=_find_label(item, state.labels),
        source=source,
    )


def _parse_items(text: str, state: _ParseState) -> list[_Mention]:
    return [
        mention
        for mention in (_parse_item(item, state) for item in _ITEM_SPLIT_RE.split(text))
        if mention is not None
    ]


def _parse_segment(segment: str, state: _ParseState, depth: int = 0) -> list[_Mention]:
    """Parse a list of mentions, recursing into containment phrases.

    At ``MAX_NESTING_DEPTH`` the rest of the segment is read as one flat
    list of siblings.
    """
    m = _CONTAINMENT_RE.search(segment)
    if m and depth >= MAX_NESTING_DEPTH:
        state.nesting_capped = True
        return _parse_items(_CONTAINMENT_RE.sub(",", segment), state)

    head, tail = (segment[:m.start()], segment[m.end():]) if m else (segment, "")

    mentions = _parse_items(head, state)
    if tail.strip():
        children = _parse_segment(tail, state, depth + 1)
        if mentions:
            mentions[-1].children.extend(children)
        else:
            mentions = children
    return mentions


def _freeze(mentions: list[_Mention]) -> list[ComponentSpec]:
    """Build immutable specs, expanding small counts into sibling nodes."""
    specs: list[ComponentSpec] = []
    for mention in mentions:
        children = tuple(_freeze(mention.children))
        expand = mention.count <= MAX_EXPANDED_INSTANCES
        spec = ComponentSpec(
            kind=mention.kind,
            count=1 if expand else mention.count,
            children=children,
            variant=mention.variant,
            size=mention.size,
            label=mention.label,
            source=mention.source,
        )
        specs.extend([spec] * mention.count if expand else [spec])
    return specs


def _root_dimensions(tokens: ExtractedTokens) -> Dimensions | None:
    if tokens.dimensions:
        return tokens.dimensions[0]
    width = next((h.value for h in tokens.axis_hints if h.axis == "width"), None)
    height = next((h.value for h in tokens.axis_hints if h.axis == "height"), None)
    if width is None and height is None:
        return None
    return Dimensions(width=width, height=height)


def _build_layout(tokens: ExtractedTokens) -> LayoutSpec:
    return LayoutSpec(
        direction=first_direction(tokens),
        spacing_hint=tokens.spacing_hints[0] if tokens.spacing_hints else None,
        alignment=first_alignment(tokens),
        wrap=tokens.wrap,
    )


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


class PromptParser:
    """Rule-based parser for design prompts.

    Deterministic: identical text always yields an identical
    :class:`ParsedPrompt`.  Never raises on ambiguous text; the worst case
    is ``UNKNOWN`` intent, a default frame and zero confidence.
    """

    def parse(self, text: str, tokens: ExtractedTokens | None = None) -> ParsedPrompt:
        """Parse *text* into a :class:`ParsedPrompt`.

        Parameters
        ----------
        text:
            Raw prompt text.
        tokens:
            Pre-computed extractor output.  Extracted from *text* when
            omitted.

        Raises
        ------
        InvalidPromptError
            If *text* is not text.
        """
        text = validate_prompt(text)
        if not text.strip():
            return ParsedPrompt(raw_text=text, warnings=("Empty prompt; nothing to interpret.",))

        if tokens is None:
            tokens = extract_tokens(text)

        match = classify_intent(tokens.residual_text)
        logger.debug("Intent %s via rule %r for: %s", match.intent.value, match.rule, text[:80])

        state = _ParseState(labels=tokens.labels)
        top_level = _freeze(_parse_segment(tokens.residual_text, state))
        dimensions = _root_dimensions(tokens)

        if len(top_level) == 1:
            root = top_level[0].model_copy(update={"explicit_dimensions": dimensions})
        else:
            # Several top-level components share a generic group frame
            root = ComponentSpec(
                kind="frame",
                explicit_dimensions=dimensions,
                children=tuple(top_level),
                source=" ".join(text.split()),
            )

        confidence = compute_confidence(
            match.intent,
            match.strength,
            state.resolved,
            len(state.unresolved),
            dimensions is not None,
        )
        warnings = detect_ambiguities(
            text,
            match.intent,
            state.unresolved,
            state.resolved > 0,
            state.oversized,
            tokens.dimensions,
            nesting_capped=state.nesting_capped,
        )
        for warning in warnings:
            logger.debug("Parse ambiguity: %s", warning)

        return ParsedPrompt(
            raw_text=text,
            intent=match.intent,
            component_spec=root,
            layout_spec=_build_layout(tokens),
            confidence=confidence,
            tokens=tokens,
            warnings=tuple(warnings),
            intent_rule=match.rule,
        )


_DEFAULT_PARSER = PromptParser()


def parse_prompt(text: str, tokens: ExtractedTokens | None = None) -> ParsedPrompt:
    """Parse *text* with the default parser."""
    return _DEFAULT_PARSER.parse(text, tokens)
