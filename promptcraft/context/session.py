"""Session-state provider interface.

The engine reads one snapshot per call from a provider; it never queries
the provider again mid-pipeline.
"""

from __future__ import annotations

import abc

from promptcraft.context.schema import ContextSpec


class SessionStateProvider(abc.ABC):
    """Base class for sources of the current document/session context.

    Implementations return the current page kind, device preset and theme
    tokens as a partial :class:`ContextSpec`, or *None* if nothing is known.
    """

    @abc.abstractmethod
    def snapshot(self) -> ContextSpec | None:
        """Return the current session context."""

    def is_available(self) -> bool:
        """Return *True* if the provider can serve snapshots."""
        return True


class StaticSessionProvider(SessionStateProvider):
    """Provider that always returns the same snapshot."""

    def __init__(self, context: ContextSpec | None = None) -> None:
        self._context = context

    def snapshot(self) -> ContextSpec | None:
        return self._context
