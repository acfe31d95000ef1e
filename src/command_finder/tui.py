from __future__ import annotations

from typing import Any

from prompt_toolkit import PromptSession
from prompt_toolkit.application.current import get_app_or_none
from prompt_toolkit.formatted_text import HTML
from prompt_toolkit.key_binding import KeyBindings
from rich.console import Console
from rich.text import Text

from command_finder.session import QuerySession
from command_finder.types import Config, SessionState

# Candidates after the selected one listed in the toolbar.
_UPCOMING_LIMIT = 4


def _position_hint(session: QuerySession) -> str:
    """Return e.g. ``[2/5]`` for a session with several candidates, else ``""``."""
    if session.state is not SessionState.MULTIPLE:
        return ""
    count = len(session.candidates)
    return f"[{session.offset % count + 1}/{count}]"


class TUIShell:
    """Rich-based output rendering and the prompt_toolkit command picker.

    ``select()`` is the presentation adapter for a QuerySession: buffer edits
    are forwarded to ``on_input``, Tab/Ctrl+S and Shift+Tab/Ctrl+R rotate, and
    Enter confirms. Feedback and the next few candidates are shown in the
    bottom toolbar so they never block typing.
    """

    def __init__(self, config: Config, console: Console | None = None) -> None:
        self._config = config
        self._theme = config.theme
        self._console = console or Console()
        self._feedback: str = ""

    @property
    def console(self) -> Console:
        """Expose console for testing."""
        return self._console

    @property
    def feedback(self) -> str:
        """Most recent text passed to render_feedback."""
        return self._feedback

    def show_banner(self, app_name: str, version: str, command_count: int) -> None:
        """Render startup banner with app info and key hints."""
        self._console.print(Text(f"{app_name} v{version}", style="bold"))
        self._console.print(
            Text(f"{command_count} commands indexed.", style=self._theme.info_color)
        )
        self._console.print(
            Text("Tab/C-s next, S-Tab/C-r previous, Enter run, C-c cancel.", style="dim"),
        )

    def show_info(self, text: str) -> None:
        """Render an informational message."""
        self._console.print(Text(text, style=self._theme.info_color))

    def show_error(self, text: str) -> None:
        """Render an error message."""
        self._console.print(Text(text, style=self._theme.error_color))

    # ------------------------------------------------------------------
    # Presentation adapter
    # ------------------------------------------------------------------

    def render_feedback(self, text: str) -> None:
        """Record the session's feedback line and repaint the prompt if one is running."""
        self._feedback = text
        app = get_app_or_none()
        if app is not None and app.is_running:
            app.invalidate()

    def _build_key_bindings(self, session: QuerySession) -> KeyBindings:
        kb = KeyBindings()

        @kb.add("tab")
        @kb.add("c-s")
        def _next(event: Any) -> None:
            session.rotate_next()

        @kb.add("s-tab")
        @kb.add("c-r")
        def _previous(event: Any) -> None:
            session.rotate_previous()

        return kb

    def _toolbar(self, session: QuerySession) -> HTML:
        hint = _position_hint(session)
        text = f"{self._feedback} {hint}".rstrip()
        upcoming = session.rotated_candidates()[1 : _UPCOMING_LIMIT + 1]
        if not upcoming:
            return HTML("<b>{}</b>").format(text)
        return HTML(
            f"<b>{{}}</b>  <style fg='{self._theme.marker_color}'>{{}}</style>"
        ).format(text, "  ".join(upcoming))

    async def select(self, session: QuerySession) -> str | None:
        """Drive *session* from keyboard input until the user confirms or cancels.

        Returns the confirmed command name, or None when nothing matched or
        the prompt was cancelled.
        """
        prompt_session: PromptSession[str] = PromptSession(
            key_bindings=self._build_key_bindings(session),
        )

        def _on_text_changed(buffer: Any) -> None:
            session.on_input(buffer.text)

        prompt_session.default_buffer.on_text_changed += _on_text_changed
        session.start()

        try:
            text = await prompt_session.prompt_async(
                HTML(f"<style fg='{self._theme.prompt_color}'>M-x </style>"),
                bottom_toolbar=lambda: self._toolbar(session),
            )
        except (EOFError, KeyboardInterrupt):
            session.cancel()
            return None

        if text != session.raw_input:
            session.on_input(text)
        return session.confirm()
