"""Prompt parsing — free text to a structured component tree."""

from promptcraft.nlp.parser import PromptParser, parse_prompt
from promptcraft.nlp.schema import ParsedPrompt

__all__ = ["PromptParser", "ParsedPrompt", "parse_prompt"]
