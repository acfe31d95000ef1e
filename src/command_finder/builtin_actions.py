from __future__ import annotations

from command_finder.exceptions import CommandFinderError, StoreUnavailableError
from command_finder.types import Action, ActionContext


class BuiltinActionsProvider:
    """Actions every command_finder application carries."""

    name: str = "builtin"
    description: str = "Built-in catalog actions"

    def get_actions(self) -> list[Action]:
        return [
            Action(
                name="help",
                description="List every available command with its summary.",
                handler=_handle_help,
            ),
            Action(
                name="version",
                description="Show the application name and version.",
                handler=_handle_version,
            ),
            Action(
                name="catalog-info",
                description="Show where the command catalog lives and how many records it holds.",
                handler=_handle_catalog_info,
            ),
            Action(
                name="rebuild-catalog",
                description="Re-index every registered command.\n"
                "Drops the current catalog and builds a new one from the registry.",
                handler=_handle_rebuild,
            ),
        ]


def _require_app(ctx: ActionContext):
    if ctx.app is None:
        raise CommandFinderError("This command needs a running application")
    return ctx.app


def _handle_help(ctx: ActionContext) -> None:
    app = _require_app(ctx)
    actions = app.registry.list_all()
    if not actions:
        app.tui.show_info("No commands registered.")
        return
    for action in actions:
        summary = app.registry.documentation_first_line(action.name) or ""
        app.tui.show_info(f"  {action.name}  {summary}".rstrip())


def _handle_version(ctx: ActionContext) -> None:
    app = _require_app(ctx)
    app.tui.show_info(f"{ctx.config.app_name} v{ctx.config.app_version}")


def _handle_catalog_info(ctx: ActionContext) -> None:
    app = _require_app(ctx)
    try:
        count = app.store.count()
    except StoreUnavailableError as e:
        app.tui.show_error(str(e))
        return
    app.tui.show_info(f"Catalog: {app.store.path}")
    app.tui.show_info(f"Records: {count}")


def _handle_rebuild(ctx: ActionContext) -> None:
    app = _require_app(ctx)
    count = app.initialize(force=True)
    app.tui.show_info(f"Catalog rebuilt with {count} commands.")
