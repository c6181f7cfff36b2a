"""Tests for token extraction — dimensions, spacing, colours, labels and keywords."""

from __future__ import annotations

import pytest

from promptcraft.nlp.schema import Alignment, Dimensions, LayoutDirection
from promptcraft.nlp.tokens import (
    LABEL_MARKER,
    LABEL_MARKER_RE,
    extract_dimensions,
    extract_labels,
    extract_spacing,
    extract_tokens,
    parse_count,
)


# ---------------------------------------------------------------------------
# Dimensions
# ---------------------------------------------------------------------------


class TestExtractDimensions:
    """Explicit width/height patterns."""

    @pytest.mark.parametrize(
        "text",
        ["a card 320x480", "a card 320 x 480px", "a card 320×480", "a card 320px by 480px"],
    )
    def test_pair_forms(self, text: str) -> None:
        pairs, hints, _ = extract_dimensions(text)
        assert pairs == [Dimensions(width=320, height=480)]
        assert hints == []

    def test_axis_after_value(self) -> None:
        _, hints, _ = extract_dimensions("a button 120px wide")
        assert [(h.axis, h.value) for h in hints] == [("width", 120)]

    def test_axis_before_value(self) -> None:
        _, hints, _ = extract_dimensions("a banner with height: 64px")
        assert [(h.axis, h.value) for h in hints] == [("height", 64)]

    def test_bare_numbers_are_not_dimensions(self) -> None:
        pairs, hints, residual = extract_dimensions("3 buttons")
        assert pairs == []
        assert hints == []
        assert residual == "3 buttons"

    def test_matched_fragment_is_blanked(self) -> None:
        _, _, residual = extract_dimensions("card 320x480 now")
        assert "320" not in residual
        assert len(residual) == len("card 320x480 now")

    def test_several_pairs_keep_order(self) -> None:
        pairs, _, _ = extract_dimensions("100x200 and 300x400")
        assert [p.width for p in pairs] == [100, 300]


# ---------------------------------------------------------------------------
# Spacing and labels
# ---------------------------------------------------------------------------


class TestExtractSpacing:
    def test_pixel_gap(self) -> None:
        hints, residual = extract_spacing("two buttons 16px gap")
        assert hints == [16]
        assert "16" not in residual

    def test_gap_of(self) -> None:
        hints, _ = extract_spacing("cards with a gap of 10")
        assert hints == [10]

    def test_token_name(self) -> None:
        hints, _ = extract_spacing("lg spacing between items")
        assert hints == ["lg"]

    def test_alias_word(self) -> None:
        hints, _ = extract_spacing("a roomy list")
        assert hints == ["lg"]


class TestExtractLabels:
    def test_double_quotes(self) -> None:
        labels, marked = extract_labels('a button "Sign in"')
        assert labels == ["Sign in"]
        assert LABEL_MARKER.format(0) in marked
        assert "Sign" not in marked

    def test_typed_markers_are_ignored(self) -> None:
        labels, marked = extract_labels('a "Go" button <<0>> \ue0005\ue001')
        assert labels == ["Go"]
        assert LABEL_MARKER_RE.findall(marked) == ["0"]
        assert "<<0>>" in marked

    def test_apostrophes_are_not_quotes(self) -> None:
        labels, _ = extract_labels("the user's profile card")
        assert labels == []


# ---------------------------------------------------------------------------
# Counts
# ---------------------------------------------------------------------------


class TestParseCount:
    @pytest.mark.parametrize(
        "fragment,expected",
        [("two", 2), ("3", 3), ("3x", 3), ("a dozen", 12), ("a", 1), ("nothing", None)],
    )
    def test_counts(self, fragment: str, expected: int | None) -> None:
        assert parse_count(fragment) == expected


# ---------------------------------------------------------------------------
# Full extraction
# ---------------------------------------------------------------------------


class TestExtractTokens:
    def test_login_card_tokens(self) -> None:
        tokens = extract_tokens("a dark login card 320x480 with two inputs and a button")
        assert tokens.dimensions == (Dimensions(width=320, height=480),)
        assert tokens.tones == ("dark",)
        assert tokens.counts == (2,)

    def test_hex_colors_normalised(self) -> None:
        tokens = extract_tokens("a card with #fff text and #1a2b3c border")
        assert tokens.hex_colors == ("#FFFFFF", "#1A2B3C")

    def test_named_colors(self) -> None:
        tokens = extract_tokens("a Blue button on a white card")
        assert tokens.colors == ("blue", "white")

    def test_layout_words(self) -> None:
        tokens = extract_tokens("three buttons side by side, centered, in a grid")
        assert tokens.directions == (LayoutDirection.HORIZONTAL,)
        assert tokens.alignments == (Alignment.CENTER,)
        assert tokens.wrap is True

    def test_size_and_platform(self) -> None:
        tokens = extract_tokens("a large ios button")
        assert tokens.sizes == ("lg",)
        assert tokens.platforms == ("ios",)

    def test_residual_is_lower_case(self) -> None:
        tokens = extract_tokens('A Card "Hello World"')
        assert tokens.residual_text.strip().startswith("a card")
        assert tokens.labels == ("Hello World",)

    def test_pure(self) -> None:
        text = "a dark card 300x200 with 16px gap"
        assert extract_tokens(text) == extract_tokens(text)

    def test_empty(self) -> None:
        tokens = extract_tokens("")
        assert tokens.dimensions == ()
        assert tokens.residual_text == ""
