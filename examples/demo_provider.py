"""Demo action provider for command_finder showcasing documented commands.

Implements the ActionProvider protocol and exposes a create_provider()
factory function at module level, so it can be listed in the config file:

    [providers]
    paths = ["examples.demo_provider"]
"""

from __future__ import annotations

from datetime import datetime

from command_finder.types import Action, ActionContext


class DemoProvider:
    """Example provider with a handful of editor-style commands."""

    name: str = "demo"
    description: str = "Example actions for command_finder"

    def __init__(self) -> None:
        self.buffers: dict[str, str] = {"notes.txt": "", "todo.txt": ""}
        self.saved: list[str] = []

    def get_actions(self) -> list[Action]:
        return [
            Action(
                name="save-file",
                description="Save the current buffer.\nWrites the buffer to its file on disk.",
                handler=self._save_file,
            ),
            Action(
                name="save-all",
                description="Save every open buffer.",
                handler=self._save_all,
            ),
            Action(
                name="show-time",
                description="Display the current date and time.",
                handler=self._show_time,
            ),
            Action(
                name="list-buffers",
                description="",
                handler=self._list_buffers,
            ),
        ]

    def _save_file(self, ctx: ActionContext) -> None:
        target = ctx.args or "notes.txt"
        self.saved.append(target)
        if ctx.tui is not None:
            ctx.tui.show_info(f"Saved {target}")

    def _save_all(self, ctx: ActionContext) -> None:
        self.saved.extend(self.buffers)
        if ctx.tui is not None:
            ctx.tui.show_info(f"Saved {len(self.buffers)} buffers")

    async def _show_time(self, ctx: ActionContext) -> None:
        if ctx.tui is not None:
            ctx.tui.show_info(datetime.now().strftime("%Y-%m-%d %H:%M:%S"))

    def _list_buffers(self, ctx: ActionContext) -> None:
        if ctx.tui is not None:
            for name in self.buffers:
                ctx.tui.show_info(f"  {name}")


def create_provider() -> DemoProvider:
    """Factory function for provider discovery."""
    return DemoProvider()
