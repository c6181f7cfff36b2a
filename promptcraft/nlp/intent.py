"""Intent classification — determine the user's desired action.

Rules are an ordered table of ``(name, predicate, intent, strength)``
entries evaluated top to bottom; the first predicate that matches wins.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from typing import NamedTuple

from promptcraft.nlp.schema import PromptIntent
from promptcraft.nlp.vocabulary import KIND_RE, KIND_SYNONYMS

_INTERROGATIVE_LEAD_RE = re.compile(r"^\s*(what|which|where|why|who|whose|how)\b", re.I)

_QUESTION_LEAD_RE = re.compile(
    r"^\s*(is|are|does|do|did|can|could|should|will|would|has|have)\b", re.I,
)

_CREATE_RE = re.compile(
    r"\b(create|make|build|add|design|generate|draw|insert|place|put|sketch|"
    r"mock\s*up|lay\s*out|give\s+me|i\s+(?:need|want))\b",
    re.I,
)

# Opening verbs that only ever ask for something new ("make", "add" and
# "put" also start edits such as "make it bigger")
_CREATE_LEAD_RE = re.compile(
    r"^\s*(?:please\s+)?(create|build|design|generate|draw|insert|sketch|"
    r"mock\s*up|lay\s*out|give\s+me|i\s+(?:need|want))\b",
    re.I,
)

_MODIFY_RE = re.compile(
    r"\b(change|modify|update|edit|adjust|resize|recolou?r|rename|move|replace|"
    r"tweak|restyle|set|turn|convert|increase|decrease|align|swap|fix|improve)\b",
    re.I,
)

_COMPARATIVE_RE = re.compile(
    r"\b(bigger|smaller|larger|wider|narrower|taller|shorter|darker|lighter|"
    r"brighter|rounder|bolder)\b",
    re.I,
)

_TARGET_RE = re.compile(
    r"\b(this|that|it|these|those|selected|selection|existing|current)\b|\bthe\s+(?:"
    + "|".join(re.escape(k) for k in sorted(KIND_SYNONYMS, key=len, reverse=True))
    + r")s?\b",
    re.I,
)


class IntentRule(NamedTuple):
    name: str
    predicate: Callable[[str], bool]
    intent: PromptIntent
    strength: float


class IntentMatch(NamedTuple):
    intent: PromptIntent
    rule: str
    strength: float


def _modify_with_target(text: str) -> bool:
    edits = _MODIFY_RE.search(text) or _COMPARATIVE_RE.search(text)
    return bool(edits and _TARGET_RE.search(text))


def _question_form(text: str) -> bool:
    return bool(_QUESTION_LEAD_RE.search(text)) or text.rstrip().endswith("?")


# Ordered by priority
INTENT_RULES: tuple[IntentRule, ...] = (
    IntentRule(
        "interrogative-lead",
        lambda t: bool(_INTERROGATIVE_LEAD_RE.search(t)),
        PromptIntent.QUERY,
        1.0,
    ),
    IntentRule(
        "create-lead",
        lambda t: bool(_CREATE_LEAD_RE.search(t)),
        PromptIntent.CREATE,
        1.0,
    ),
    IntentRule("modify-target", _modify_with_target, PromptIntent.MODIFY, 1.0),
    IntentRule("create-verb", lambda t: bool(_CREATE_RE.search(t)), PromptIntent.CREATE, 1.0),
    IntentRule("question-form", _question_form, PromptIntent.QUERY, 0.8),
    IntentRule("modify-verb", lambda t: bool(_MODIFY_RE.search(t)), PromptIntent.MODIFY, 0.6),
    IntentRule("component-noun", lambda t: bool(KIND_RE.search(t)), PromptIntent.CREATE, 0.7),
)

NO_MATCH = IntentMatch(PromptIntent.UNKNOWN, "", 0.0)


def classify_intent(text: str, rules: tuple[IntentRule, ...] = INTENT_RULES) -> IntentMatch:
    """Return the first matching rule's intent for *text*.

    Returns :data:`NO_MATCH` (``UNKNOWN`` with zero strength) when no
    rule applies.
    """
    normalized = text.lower().strip()
    for rule in rules:
        if rule.predicate(normalized):
            return IntentMatch(rule.intent, rule.name, rule.strength)
    return NO_MATCH
