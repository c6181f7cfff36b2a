"""Tests for the enhancement pipeline — orchestration, tool calls and degradation."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from pydantic import ValidationError

from promptcraft import PromptEnhancer, enhance_prompt
from promptcraft.config import EngineSettings
from promptcraft.context.presets import DARK_THEME_TOKENS, DEVICE_PRESETS
from promptcraft.context.schema import ContextSpec
from promptcraft.context.session import SessionStateProvider
from promptcraft.enhancement.schema import (
    DegradationKind,
    EnhancedToolCall,
    PromptEnhancementResult,
)
from promptcraft.enhancement.tool_calls import (
    FRAME_TOOL,
    MODIFY_TOOL,
    SELECTION_PLACEHOLDER,
    SMART_LAYOUT_TOOL,
    TEXT_TOOL,
    choose_tool,
    node_size,
)
from promptcraft.nlp.schema import ComponentSpec, Dimensions, PromptIntent

LOGIN_CARD = "a dark login card 320x480 with two inputs and a button"


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def settings() -> EngineSettings:
    return EngineSettings(env="testing", log_level="DEBUG")


@pytest.fixture
def enhancer(settings: EngineSettings) -> PromptEnhancer:
    return PromptEnhancer(settings=settings)


@pytest.fixture
def session() -> MagicMock:
    provider = MagicMock(spec=SessionStateProvider)
    provider.is_available.return_value = True
    provider.snapshot.return_value = ContextSpec(
        device_preset=DEVICE_PRESETS["desktop"],
        existing_theme_tokens={"background": "#101010", "foreground": "#FAFAFA"},
    )
    return provider


# ---------------------------------------------------------------------------
# Scenarios
# ---------------------------------------------------------------------------


class TestLoginCardScenario:
    @pytest.fixture
    def result(self, enhancer: PromptEnhancer) -> PromptEnhancementResult:
        return enhancer.enhance(LOGIN_CARD)

    def test_structure(self, result: PromptEnhancementResult) -> None:
        assert result.ok
        assert result.parsed.intent is PromptIntent.CREATE
        assert result.parsed.component_spec.kind == "card"
        assert len(result.calls) >= 4

    def test_calls_parent_first(self, result: PromptEnhancementResult) -> None:
        tools = [c.tool_name for c in result.calls]
        assert tools == [
            FRAME_TOOL,
            "figma_create_shadcn_component",
            "figma_create_shadcn_component",
            "figma_create_shadcn_component",
            SMART_LAYOUT_TOOL,
        ]
        assert [c.order for c in result.calls] == [0, 1, 2, 3, 4]
        assert all(c.parameters["parentId"] == "{{call:0}}" for c in result.calls[1:4])
        assert [c.parameters["component"] for c in result.calls[1:4]] == ["input", "input", "button"]

    def test_root_frame_parameters(self, result: PromptEnhancementResult) -> None:
        params = result.calls[0].parameters
        assert params["width"] == 320
        assert params["height"] == 480
        assert params["fill"] == DARK_THEME_TOKENS["surface"]
        assert params["cornerRadius"] == 12
        assert params["effects"][0]["type"] == "DROP_SHADOW"
        assert params["autoLayout"] == {"mode": "VERTICAL", "spacing": 16, "padding": 24}

    def test_dark_palette(self, result: PromptEnhancementResult) -> None:
        assert result.style.tone == "dark"
        assert result.style.palette["background"] == DARK_THEME_TOKENS["background"]
        assert all(c.parameters.get("theme", "dark") == "dark" for c in result.calls[1:4])

    def test_confidence_and_warnings(self, result: PromptEnhancementResult) -> None:
        # Parser score 0.88 less one fallback penalty for the default device
        assert result.overall_confidence == pytest.approx(0.78)
        assert result.has_warning(DegradationKind.CONTEXT_FALLBACK)
        assert not result.has_warning(DegradationKind.STYLE_FALLBACK)
        assert not result.has_warning(DegradationKind.PARSE_AMBIGUITY)

    def test_every_call_has_a_rationale(self, result: PromptEnhancementResult) -> None:
        assert all(c.rationale for c in result.calls)

    def test_recommendations(self, result: PromptEnhancementResult) -> None:
        assert any("dark theme" in n for n in result.style_recommendations)
        assert any("Form screens" in n for n in result.style_recommendations)


class TestQuery:
    def test_query_produces_no_calls(self, enhancer: PromptEnhancer) -> None:
        result = enhancer.enhance("what is this")
        assert result.ok
        assert result.calls == ()
        assert result.overall_confidence == pytest.approx(0.6)
        assert result.context is None
        assert result.style is None
        assert not result.has_warning(DegradationKind.CONTEXT_FALLBACK)
        assert not result.has_warning(DegradationKind.STYLE_FALLBACK)

    def test_query_skips_session(self, settings: EngineSettings, session: MagicMock) -> None:
        result = PromptEnhancer(session=session, settings=settings).enhance("what is this")
        assert result.calls == ()
        session.snapshot.assert_not_called()

    def test_query_ignores_failing_session(self, settings: EngineSettings, session: MagicMock) -> None:
        session.snapshot.side_effect = RuntimeError("plugin disconnected")
        result = PromptEnhancer(session=session, settings=settings).enhance("what is this")
        assert result.ok
        assert not result.has_warning(DegradationKind.CONTEXT_FALLBACK)
        assert not result.has_warning(DegradationKind.STYLE_FALLBACK)


class TestVaguePrompt:
    def test_make_something_nice(self, enhancer: PromptEnhancer) -> None:
        result = enhancer.enhance("make something nice")
        assert result.ok
        assert result.parsed.component_spec.kind == "frame"
        assert result.calls[0].tool_name == FRAME_TOOL
        assert result.has_warning(DegradationKind.PARSE_AMBIGUITY)
        assert result.overall_confidence < 0.5

    def test_empty_prompt_still_produces_a_frame(self, enhancer: PromptEnhancer) -> None:
        result = enhancer.enhance("")
        assert result.ok
        assert len(result.calls) == 1
        assert result.calls[0].parameters["width"] == 400


# ---------------------------------------------------------------------------
# MODIFY
# ---------------------------------------------------------------------------


class TestModify:
    def test_modify_with_target(self, enhancer: PromptEnhancer) -> None:
        result = enhancer.enhance("change the button color to red", {"target_node_id": "12:34"})
        call = result.calls[0]
        assert call.tool_name == MODIFY_TOOL
        assert call.parameters == {"nodeId": "12:34", "properties": {"fill": "#EF4444"}}
        assert not result.has_warning(DegradationKind.MISSING_TARGET)

    def test_missing_target_uses_selection(self, enhancer: PromptEnhancer) -> None:
        with_target = enhancer.enhance("make it bigger", {"target_node_id": "1:1"})
        result = enhancer.enhance("make it bigger")
        assert result.calls[0].parameters["nodeId"] == SELECTION_PLACEHOLDER
        assert result.calls[0].parameters["properties"] == {"scale": 1.25}
        assert result.has_warning(DegradationKind.MISSING_TARGET)
        assert result.overall_confidence == pytest.approx(with_target.overall_confidence - 0.1)

    def test_children_created_inside_target(self, enhancer: PromptEnhancer) -> None:
        result = enhancer.enhance("update the card with a button", {"target_node_id": "n1"})
        assert [c.tool_name for c in result.calls] == [MODIFY_TOOL, "figma_create_shadcn_component"]
        assert result.calls[1].parameters["parentId"] == "n1"

    def test_leading_create_verb_is_not_a_modify(self, enhancer: PromptEnhancer) -> None:
        result = enhancer.enhance("create a form to edit the selected user")
        assert result.parsed.intent is PromptIntent.CREATE
        assert result.calls[0].tool_name == FRAME_TOOL
        assert MODIFY_TOOL not in [c.tool_name for c in result.calls]
        assert not result.has_warning(DegradationKind.MISSING_TARGET)

    def test_quoted_colour_is_not_a_fill(self, enhancer: PromptEnhancer) -> None:
        result = enhancer.enhance('rename it to "Red Alert"', {"target_node_id": "1:1"})
        assert result.calls[0].tool_name == MODIFY_TOOL
        assert "fill" not in result.calls[0].parameters["properties"]


# ---------------------------------------------------------------------------
# Session and hints
# ---------------------------------------------------------------------------


class TestSessionContext:
    def test_snapshot_read_once(self, settings: EngineSettings, session: MagicMock) -> None:
        result = PromptEnhancer(session=session, settings=settings).enhance("a card")
        session.snapshot.assert_called_once()
        assert result.context.device_preset.key == "desktop"
        assert result.style.palette["background"] == "#101010"
        assert not result.has_warning(DegradationKind.CONTEXT_FALLBACK)
        assert not result.has_warning(DegradationKind.STYLE_FALLBACK)

    def test_snapshot_failure_degrades(self, settings: EngineSettings, session: MagicMock) -> None:
        session.snapshot.side_effect = RuntimeError("plugin disconnected")
        result = PromptEnhancer(session=session, settings=settings).enhance("a card")
        assert result.ok
        assert result.has_warning(DegradationKind.CONTEXT_FALLBACK)
        assert result.calls

    def test_unavailable_provider_not_queried(self, settings: EngineSettings, session: MagicMock) -> None:
        session.is_available.return_value = False
        PromptEnhancer(session=session, settings=settings).enhance("a card")
        session.snapshot.assert_not_called()

    def test_caller_device_hint(self, enhancer: PromptEnhancer) -> None:
        result = enhancer.enhance("a card", {"device": "desktop"})
        assert result.context.device_preset.key == "desktop"
        assert not result.has_warning(DegradationKind.CONTEXT_FALLBACK)

    def test_configured_default_device(self) -> None:
        enhancer = PromptEnhancer(settings=EngineSettings(default_device="pixel-8"))
        assert enhancer.enhance("a screen").context.device_preset.key == "pixel-8"


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class TestErrors:
    @pytest.mark.parametrize("bad", [None, 42, ["a card"]])
    def test_non_text_is_an_error_result(self, enhancer: PromptEnhancer, bad: object) -> None:
        result = enhancer.enhance(bad)
        assert not result.ok
        assert result.error
        assert result.calls == ()

    def test_malformed_hints(self, enhancer: PromptEnhancer) -> None:
        result = enhancer.enhance("a card", {"ancestor_spacing": -1})
        assert not result.ok
        assert "hints" in result.error

    @pytest.mark.parametrize("hints", ["desktop", 42, ["device", "desktop"]])
    def test_non_mapping_hints(self, enhancer: PromptEnhancer, hints: object) -> None:
        result = enhancer.enhance("a card", hints)
        assert not result.ok
        assert "hints" in result.error
        assert result.calls == ()

    def test_bytes_accepted(self, enhancer: PromptEnhancer) -> None:
        assert enhancer.enhance(b"a card").ok

    def test_order_must_be_gap_free(self) -> None:
        with pytest.raises(ValidationError):
            PromptEnhancementResult(calls=(EnhancedToolCall(tool_name=FRAME_TOOL, order=1),))


# ---------------------------------------------------------------------------
# Output properties
# ---------------------------------------------------------------------------


class TestOutputProperties:
    @pytest.mark.parametrize(
        "text",
        [LOGIN_CARD, "three buttons side by side", "a card with a button, and a form with two inputs"],
    )
    def test_order_strictly_increasing(self, enhancer: PromptEnhancer, text: str) -> None:
        orders = [c.order for c in enhancer.enhance(text).calls]
        assert orders == list(range(len(orders)))
        assert orders

    def test_idempotent(self, enhancer: PromptEnhancer) -> None:
        assert enhancer.enhance(LOGIN_CARD).model_dump_json() == enhancer.enhance(LOGIN_CARD).model_dump_json()

    def test_parallel_matches_sequential(self, settings: EngineSettings, session: MagicMock) -> None:
        sequential = PromptEnhancer(session=session, settings=settings, parallel=False)
        parallel = PromptEnhancer(session=session, settings=settings, parallel=True)
        assert sequential.enhance(LOGIN_CARD).model_dump_json() == parallel.enhance(LOGIN_CARD).model_dump_json()

    def test_to_dispatch(self, enhancer: PromptEnhancer) -> None:
        dispatch = enhancer.enhance("a card with a button").to_dispatch()
        assert [d["toolName"] for d in dispatch] == [FRAME_TOOL, "figma_create_shadcn_component"]
        assert set(dispatch[0]) == {"toolName", "parameters"}

    def test_smart_layout_only_for_busy_roots(self, enhancer: PromptEnhancer) -> None:
        tools = [c.tool_name for c in enhancer.enhance("a card with a button").calls]
        assert SMART_LAYOUT_TOOL not in tools

    def test_spacing_hint_applied(self, enhancer: PromptEnhancer) -> None:
        result = enhancer.enhance("a card with two buttons, 10px gap")
        assert result.spacing == 8
        assert result.calls[0].parameters["autoLayout"]["spacing"] == 8

    def test_oversized_count_single_call(self, enhancer: PromptEnhancer) -> None:
        result = enhancer.enhance("20 buttons")
        assert len(result.calls) == 1
        assert result.calls[0].parameters["count"] == 20

    @pytest.mark.parametrize("text", ["a button <<3>>", "a button \ue0003\ue001"])
    def test_marker_like_text_is_plain_text(self, enhancer: PromptEnhancer, text: str) -> None:
        result = enhancer.enhance(text)
        assert result.ok
        assert result.parsed.component_spec.kind == "button"
        assert result.parsed.component_spec.label is None

    def test_deep_containment_is_enhanced(self, enhancer: PromptEnhancer) -> None:
        result = enhancer.enhance("a card " + "with a card " * 1500)
        assert result.ok
        assert result.has_warning(DegradationKind.PARSE_AMBIGUITY)
        assert sum(c.tool_name != SMART_LAYOUT_TOOL for c in result.calls) == 1501

    def test_heading_uses_type_scale(self, enhancer: PromptEnhancer) -> None:
        result = enhancer.enhance("a card with a heading and a button")
        heading = result.calls[1]
        assert heading.tool_name == TEXT_TOOL
        assert heading.parameters["fontSize"] == result.style.typography.heading_size

    def test_module_level_helper(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PROMPTCRAFT_ENV", "testing")
        assert enhance_prompt("a card").ok


# ---------------------------------------------------------------------------
# Translation helpers
# ---------------------------------------------------------------------------


class TestTranslationHelpers:
    @pytest.mark.parametrize(
        "kind,platform,tool",
        [
            ("card", "shadcn", FRAME_TOOL),
            ("button", "ios", "figma_create_apple_component"),
            ("input", "ios", "figma_create_shadcn_component"),
            ("sidebar", "liquid-glass", "figma_create_liquid_glass_component"),
            ("heading", "shadcn", TEXT_TOOL),
            ("icon", "shadcn", "figma_create_icon"),
            ("hero", "ios", FRAME_TOOL),
        ],
    )
    def test_choose_tool(self, kind: str, platform: str, tool: str) -> None:
        assert choose_tool(ComponentSpec(kind=kind), platform) == tool

    def test_node_size_defaults(self) -> None:
        assert node_size(ComponentSpec(kind="button"), None) == (120, 40)

    def test_node_size_scaled(self) -> None:
        assert node_size(ComponentSpec(kind="button", size="lg"), None) == (150, 50)

    def test_screen_takes_device_size(self) -> None:
        assert node_size(ComponentSpec(kind="screen"), DEVICE_PRESETS["desktop"]) == (1440, 900)

    def test_explicit_axis_wins(self) -> None:
        node = ComponentSpec(kind="card", explicit_dimensions=Dimensions(width=500))
        assert node_size(node, None) == (500, 240)
