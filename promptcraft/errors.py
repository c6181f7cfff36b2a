"""Exception hierarchy for the prompt enhancement engine."""

from __future__ import annotations


class PromptEngineError(Exception):
    """Base class for engine errors."""


class InvalidPromptError(PromptEngineError):
    """Raised when the input is not usable prompt text (wrong type, not decodable)."""


class InvalidHintsError(PromptEngineError):
    """Raised when context hints are neither a mapping nor a ContextSpec."""
