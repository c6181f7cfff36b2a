"""Enhancement — orchestration and translation into tool calls."""

from promptcraft.enhancement.engine import PromptEnhancer, enhance_prompt
from promptcraft.enhancement.schema import EnhancedToolCall, PromptEnhancementResult

__all__ = ["EnhancedToolCall", "PromptEnhancer", "PromptEnhancementResult", "enhance_prompt"]
