"""Promptcraft — turn free-text design prompts into ordered design-tool calls."""

__version__ = "0.3.0"

from promptcraft.config import EngineSettings, configure_logging, load_settings
from promptcraft.context.resolver import get_spacing_recommendation, resolve_context
from promptcraft.context.schema import ContextSpec, DevicePreset, PageKind
from promptcraft.context.session import SessionStateProvider, StaticSessionProvider
from promptcraft.enhancement.engine import PromptEnhancer, enhance_prompt
from promptcraft.enhancement.schema import (
    DegradationKind,
    EnhancedToolCall,
    PromptEnhancementResult,
)
from promptcraft.errors import InvalidHintsError, InvalidPromptError, PromptEngineError
from promptcraft.nlp.parser import PromptParser, parse_prompt
from promptcraft.nlp.schema import ComponentSpec, LayoutSpec, ParsedPrompt, PromptIntent
from promptcraft.style.inferrer import infer_style
from promptcraft.style.schema import StyleSpec, Typography

__all__ = [
    "__version__",
    # Engine
    "PromptEnhancer",
    "enhance_prompt",
    "EnhancedToolCall",
    "PromptEnhancementResult",
    "DegradationKind",
    # Parsing
    "PromptParser",
    "parse_prompt",
    "ParsedPrompt",
    "PromptIntent",
    "ComponentSpec",
    "LayoutSpec",
    # Context
    "ContextSpec",
    "DevicePreset",
    "PageKind",
    "SessionStateProvider",
    "StaticSessionProvider",
    "resolve_context",
    "get_spacing_recommendation",
    # Style
    "StyleSpec",
    "Typography",
    "infer_style",
    # Config and errors
    "EngineSettings",
    "load_settings",
    "configure_logging",
    "PromptEngineError",
    "InvalidPromptError",
    "InvalidHintsError",
]
