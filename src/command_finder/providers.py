"""Action providers - modules that contribute named actions to the registry."""

from __future__ import annotations

import importlib
import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from command_finder.command_registry import CommandRegistry
    from command_finder.types import ActionProvider

logger = logging.getLogger(__name__)

FACTORY_NAME = "create_provider"


def load_provider(dotted_path: str) -> ActionProvider | None:
    """Import *dotted_path* and return the result of its ``create_provider()``.

    Returns None, after logging a warning, when the module cannot be
    imported, has no callable factory, or the factory raises.
    """
    try:
        module = importlib.import_module(dotted_path)
    except ImportError as e:
        logger.warning("Failed to import provider module '%s': %s", dotted_path, e)
        return None

    factory = getattr(module, FACTORY_NAME, None)
    if not callable(factory):
        logger.warning(
            "Provider module '%s' has no callable %s()", dotted_path, FACTORY_NAME
        )
        return None

    try:
        return factory()
    except Exception as e:
        logger.warning("%s() in '%s' raised an error: %s", FACTORY_NAME, dotted_path, e)
        return None


def register_provider(
    provider: ActionProvider,
    registry: CommandRegistry,
    override: bool = True,
) -> int:
    """Register every action *provider* offers. Returns how many were registered.

    With *override* false, names the registry already holds are left alone.
    """
    registered = 0
    for action in provider.get_actions():
        if not override and action.name in registry:
            logger.debug(
                "Keeping existing '%s' over provider '%s'", action.name, provider.name
            )
            continue
        registry.register(action)
        registered += 1
    logger.debug("Provider '%s' registered %d actions", provider.name, registered)
    return registered


def load_providers(paths: Iterable[str], registry: CommandRegistry) -> list[ActionProvider]:
    """Load and register each provider in *paths*, skipping the ones that fail."""
    loaded: list[ActionProvider] = []
    for dotted_path in paths:
        provider = load_provider(dotted_path)
        if provider is None:
            continue
        try:
            register_provider(provider, registry)
        except Exception as e:
            logger.warning("Provider '%s' failed to register actions: %s", dotted_path, e)
            continue
        loaded.append(provider)
    return loaded
