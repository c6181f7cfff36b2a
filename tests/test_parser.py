"""Tests for the prompt parser — intent, component tree, layout and confidence."""

from __future__ import annotations

import pytest

from promptcraft.config import MAX_NESTING_DEPTH
from promptcraft.errors import InvalidPromptError
from promptcraft.nlp import ParsedPrompt, PromptParser, parse_prompt
from promptcraft.nlp.intent import NO_MATCH, classify_intent
from promptcraft.nlp.parser import validate_prompt
from promptcraft.nlp.resolution import compute_confidence, detect_ambiguities
from promptcraft.nlp.schema import Dimensions, LayoutDirection, PromptIntent


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def parser() -> PromptParser:
    return PromptParser()


@pytest.fixture
def login_card(parser: PromptParser) -> ParsedPrompt:
    return parser.parse("a dark login card 320x480 with two inputs and a button")


# ---------------------------------------------------------------------------
# Intent
# ---------------------------------------------------------------------------


class TestIntentClassification:
    @pytest.mark.parametrize(
        "text,intent,rule",
        [
            ("create a card", PromptIntent.CREATE, "create-lead"),
            ("create a form to edit the selected user", PromptIntent.CREATE, "create-lead"),
            ("make a card", PromptIntent.CREATE, "create-verb"),
            ("what is this", PromptIntent.QUERY, "interrogative-lead"),
            ("is this accessible?", PromptIntent.QUERY, "question-form"),
            ("change the button color to red", PromptIntent.MODIFY, "modify-target"),
            ("make it bigger", PromptIntent.MODIFY, "modify-target"),
            ("resize to fit", PromptIntent.MODIFY, "modify-verb"),
            ("a login card", PromptIntent.CREATE, "component-noun"),
        ],
    )
    def test_rules(self, text: str, intent: PromptIntent, rule: str) -> None:
        match = classify_intent(text)
        assert match.intent is intent
        assert match.rule == rule

    def test_no_match(self) -> None:
        assert classify_intent("hello world") == NO_MATCH

    def test_verb_beats_noun(self) -> None:
        assert classify_intent("add a button").strength == 1.0
        assert classify_intent("a button").strength == 0.7


# ---------------------------------------------------------------------------
# Structure
# ---------------------------------------------------------------------------


class TestComponentTree:
    def test_login_card(self, login_card: ParsedPrompt) -> None:
        root = login_card.component_spec
        assert login_card.intent is PromptIntent.CREATE
        assert root.kind == "card"
        assert root.explicit_dimensions == Dimensions(width=320, height=480)
        assert [c.kind for c in root.children] == ["input", "input", "button"]
        assert all(c.count == 1 for c in root.children)
        assert login_card.warnings == ()

    def test_dimensions_only(self, parser: PromptParser) -> None:
        parsed = parser.parse("a frame 320x480")
        assert parsed.component_spec.explicit_dimensions == Dimensions(width=320, height=480)

    def test_single_axis(self, parser: PromptParser) -> None:
        parsed = parser.parse("a button 120px wide")
        dims = parsed.component_spec.explicit_dimensions
        assert dims.width == 120
        assert dims.height is None

    def test_several_top_level_components_share_a_group(self, parser: PromptParser) -> None:
        parsed = parser.parse("three buttons side by side")
        root = parsed.component_spec
        assert root.kind == "frame"
        assert [c.kind for c in root.children] == ["button"] * 3
        assert parsed.layout_spec.direction is LayoutDirection.HORIZONTAL

    def test_nested_containment(self, parser: PromptParser) -> None:
        parsed = parser.parse("a card with a button, and a form with two inputs")
        root = parsed.component_spec
        assert root.kind == "card"
        assert [c.kind for c in root.children] == ["button", "form"]
        assert [c.kind for c in root.children[1].children] == ["input", "input"]

    def test_deep_containment_is_flattened(self, parser: PromptParser) -> None:
        parsed = parser.parse("a card " + "with a card " * 1500)
        depth, node = 0, parsed.component_spec
        while node.children:
            depth, node = depth + 1, node.children[0]
        assert depth == MAX_NESTING_DEPTH
        assert len(list(parsed.component_spec.walk())) == 1501
        assert any("flattened" in w for w in parsed.warnings)

    def test_shallow_containment_has_no_depth_warning(self, parser: PromptParser) -> None:
        parsed = parser.parse("a card " + "with a card " * 5)
        assert not any("flattened" in w for w in parsed.warnings)

    def test_walk_is_parent_first(self, parser: PromptParser) -> None:
        parsed = parser.parse("a card with a button, and a form with two inputs")
        kinds = [n.kind for n in parsed.component_spec.walk()]
        assert kinds == ["card", "button", "form", "input", "input"]

    def test_large_count_stays_single_node(self, parser: PromptParser) -> None:
        parsed = parser.parse("20 buttons")
        root = parsed.component_spec
        assert root.kind == "button"
        assert root.count == 20
        assert any("expansion limit" in w for w in parsed.warnings)

    def test_variant_and_label(self, parser: PromptParser) -> None:
        parsed = parser.parse('a primary button "Sign in"')
        root = parsed.component_spec
        assert root.kind == "button"
        assert root.variant == "primary"
        assert root.label == "Sign in"

    def test_size_word(self, parser: PromptParser) -> None:
        assert parser.parse("a large button").component_spec.size == "lg"

    def test_synonyms(self, parser: PromptParser) -> None:
        parsed = parser.parse("a modal with a cta")
        assert parsed.component_spec.kind == "dialog"
        assert parsed.component_spec.children[0].kind == "button"

    def test_spacing_hint_reaches_layout(self, parser: PromptParser) -> None:
        parsed = parser.parse("a card with two buttons, 10px gap")
        assert parsed.layout_spec.spacing_hint == 10


# ---------------------------------------------------------------------------
# Ambiguity and edge cases
# ---------------------------------------------------------------------------


class TestAmbiguity:
    def test_vague_prompt(self, parser: PromptParser) -> None:
        parsed = parser.parse("make something nice")
        assert parsed.component_spec.kind == "frame"
        assert parsed.confidence < 0.5
        assert parsed.warnings

    def test_query_has_no_warnings(self, parser: PromptParser) -> None:
        parsed = parser.parse("what is this")
        assert parsed.intent is PromptIntent.QUERY
        assert parsed.confidence == pytest.approx(0.6)
        assert parsed.warnings == ()

    def test_empty_prompt(self, parser: PromptParser) -> None:
        parsed = parser.parse("")
        assert parsed.intent is PromptIntent.UNKNOWN
        assert parsed.confidence == 0.0
        assert parsed.warnings

    def test_unrecognised_noun(self, parser: PromptParser) -> None:
        parsed = parser.parse("add a carousel")
        assert parsed.component_spec.kind == "frame"
        assert any("carousel" in w for w in parsed.warnings)

    @pytest.mark.parametrize("text", ["a button <<3>>", 'a button "Go" <<1>>'])
    def test_marker_like_text_does_not_raise(self, parser: PromptParser, text: str) -> None:
        root = parser.parse(text).component_spec
        assert root.kind == "button"
        assert "<<" in root.source

    def test_bytes_are_decoded(self, parser: PromptParser) -> None:
        assert parser.parse(b"a card").component_spec.kind == "card"

    def test_non_text_rejected(self, parser: PromptParser) -> None:
        with pytest.raises(InvalidPromptError):
            parser.parse(42)

    def test_invalid_utf8_rejected(self) -> None:
        with pytest.raises(InvalidPromptError):
            validate_prompt(b"\xff\xfe")

    def test_deterministic(self) -> None:
        text = "a dark login card 320x480 with two inputs and a button"
        assert parse_prompt(text) == parse_prompt(text)


# ---------------------------------------------------------------------------
# Confidence
# ---------------------------------------------------------------------------


class TestConfidence:
    def test_login_card_score(self, login_card: ParsedPrompt) -> None:
        # component-noun rule (0.7) + all nouns resolved + explicit size
        assert login_card.confidence == pytest.approx(0.88)

    def test_full_score(self) -> None:
        assert compute_confidence(PromptIntent.CREATE, 1.0, 2, 0, True) == 1.0

    def test_query_score(self) -> None:
        assert compute_confidence(PromptIntent.QUERY, 0.8, 0, 0, False) == pytest.approx(0.48)

    def test_unknown_is_capped(self) -> None:
        assert compute_confidence(PromptIntent.UNKNOWN, 0.0, 1, 0, True) == pytest.approx(0.45)

    def test_unresolved_nouns_lower_score(self) -> None:
        full = compute_confidence(PromptIntent.CREATE, 1.0, 2, 0, False)
        partial = compute_confidence(PromptIntent.CREATE, 1.0, 1, 1, False)
        assert partial < full

    def test_query_ambiguities_are_empty(self) -> None:
        assert detect_ambiguities("what is this", PromptIntent.QUERY, [], False, [], ()) == []

    def test_unknown_intent_warned(self) -> None:
        warnings = detect_ambiguities("hello world", PromptIntent.UNKNOWN, [], False, [], ())
        assert any("treating it as a create request" in w for w in warnings)
