from __future__ import annotations

import logging

from command_finder.constants import (
    CURRENT_MARKER,
    NO_DOCUMENTATION,
    NO_MATCH,
    NOT_A_FUNCTION,
)
from command_finder.exceptions import SessionClosedError, StoreUnavailableError
from command_finder.resolver import QueryResolver
from command_finder.types import (
    ActionRegistry,
    MatchTier,
    RenderCallback,
    Resolution,
    SessionState,
)

logger = logging.getLogger(__name__)


class QuerySession:
    """State of one interactive query-and-confirm interaction.

    Every keystroke re-runs the resolver and replaces the candidate list while
    keeping the rotation offset, so a chosen rotation survives retyping. The
    selected candidate is ``candidates[offset % len(candidates)]``; Python's
    modulo is non-negative for a positive divisor, so negative offsets rotate
    backwards through the list.
    """

    def __init__(
        self,
        resolver: QueryResolver,
        registry: ActionRegistry,
        previous: str | None = None,
        on_render: RenderCallback | None = None,
    ) -> None:
        self._resolver = resolver
        self._registry = registry
        self._previous = previous
        self._on_render = on_render
        self._raw_input = ""
        self._offset = 0
        self._resolution = Resolution(query="", tier=MatchTier.NONE)
        self._closed = False

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def raw_input(self) -> str:
        return self._raw_input

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def candidates(self) -> list[str]:
        return list(self._resolution.names)

    @property
    def resolution(self) -> Resolution:
        return self._resolution

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def state(self) -> SessionState:
        count = len(self._resolution)
        if count == 0:
            return SessionState.EMPTY
        if count == 1:
            return SessionState.SINGLETON
        return SessionState.MULTIPLE

    @property
    def selected(self) -> str | None:
        names = self._resolution.names
        if not names:
            return None
        return names[self._offset % len(names)]

    def rotated_candidates(self) -> list[str]:
        """Candidates reordered so the selected one comes first."""
        names = list(self._resolution.names)
        if not names:
            return []
        start = self._offset % len(names)
        return names[start:] + names[:start]

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def start(self, query: str = "") -> None:
        """Begin a fresh invocation: reset the offset, then run the first query."""
        self._check_open()
        self._offset = 0
        self.on_input(query)

    def on_input(self, query: str) -> None:
        """Re-resolve for *query*. An unreadable catalog yields zero candidates."""
        self._check_open()
        self._raw_input = query
        try:
            self._resolution = self._resolver.resolve(query)
        except StoreUnavailableError as e:
            logger.warning("Catalog unavailable, treating %r as no match: %s", query, e)
            self._resolution = Resolution(query=query, tier=MatchTier.NONE)
        self._render()

    def rotate(self, delta: int) -> None:
        self._check_open()
        self._offset += delta
        self._render()

    def rotate_next(self) -> None:
        self.rotate(1)

    def rotate_previous(self) -> None:
        self.rotate(-1)

    def confirm(self) -> str | None:
        """End the session and return the selected name, or None when nothing matched."""
        self._check_open()
        self._closed = True
        self._render()
        return self.selected

    def cancel(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._render()

    # ------------------------------------------------------------------
    # Annotation
    # ------------------------------------------------------------------

    def annotate(self, name: str) -> str:
        """Render *name* with its current marker and first documentation line."""
        label = name
        if self._previous is not None and name == self._previous:
            label += CURRENT_MARKER

        if not self._registry.is_invocable(name):
            detail = NOT_A_FUNCTION
        else:
            detail = self._registry.documentation_first_line(name) or NO_DOCUMENTATION
        return f"{label}: {detail}"

    def display_text(self) -> str:
        selected = self.selected
        if selected is None:
            return NO_MATCH
        return self.annotate(selected)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _check_open(self) -> None:
        if self._closed:
            raise SessionClosedError("Session has already ended")

    def _render(self) -> None:
        if self._on_render is not None:
            self._on_render(self.display_text())
