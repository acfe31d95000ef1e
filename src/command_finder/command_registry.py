"""Action registry for command_finder - stores, documents, and invokes named actions."""

from __future__ import annotations

import asyncio
import logging

from command_finder.exceptions import InvocationError
from command_finder.types import Action, ActionContext, CommandRecord

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Registry of invocable actions, keyed by name.

    Implements the ActionRegistry capability the catalog core depends on.
    Registration order is preserved so the catalog is indexed in the order
    actions were registered.
    """

    def __init__(self) -> None:
        self._actions: dict[str, Action] = {}

    def register(self, action: Action) -> None:
        """Register an action by name. A later registration replaces an earlier one."""
        self._actions[action.name] = action

    def unregister(self, name: str) -> None:
        self._actions.pop(name, None)

    def get(self, name: str) -> Action | None:
        """Look up an action by name. Returns None if not found."""
        return self._actions.get(name)

    def list_all(self) -> list[Action]:
        """Return all registered actions sorted by name."""
        return sorted(self._actions.values(), key=lambda a: a.name)

    def __len__(self) -> int:
        return len(self._actions)

    def __contains__(self, name: object) -> bool:
        return name in self._actions

    # ------------------------------------------------------------------
    # ActionRegistry capability
    # ------------------------------------------------------------------

    def enumerate(self) -> list[CommandRecord]:
        """Return one record per registered action, in registration order."""
        return [action.to_record() for action in self._actions.values()]

    def is_invocable(self, name: str) -> bool:
        action = self._actions.get(name)
        return action is not None and callable(action.handler)

    def documentation_first_line(self, name: str) -> str | None:
        action = self._actions.get(name)
        if action is None or not action.description:
            return None
        return action.to_record().short_description or None

    async def invoke(self, name: str, ctx: ActionContext) -> None:
        """Run the action's handler; sync and async handlers are both supported.

        Raises InvocationError when the name is not invocable or the handler fails.
        """
        if not self.is_invocable(name):
            raise InvocationError(f"{name} is not an invocable command")

        action = self._actions[name]
        logger.debug("Invoking %s", name)
        try:
            result = action.handler(ctx)
            if asyncio.iscoroutine(result):
                await result
        except (SystemExit, KeyboardInterrupt):
            raise
        except Exception as e:
            raise InvocationError(f"Command {name} failed: {e}") from e
