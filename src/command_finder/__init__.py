"""command_finder - find and run documented commands by name or description."""

from command_finder.app import Application
from command_finder.catalog_store import CatalogStore
from command_finder.command_registry import CommandRegistry
from command_finder.indexer import Indexer
from command_finder.resolver import QueryResolver
from command_finder.session import QuerySession
from command_finder.types import (
    Action,
    ActionContext,
    CommandRecord,
    Config,
    MatchTier,
    Resolution,
    SessionState,
)

__all__ = [
    "Action",
    "ActionContext",
    "Application",
    "CatalogStore",
    "CommandRecord",
    "CommandRegistry",
    "Config",
    "Indexer",
    "MatchTier",
    "QueryResolver",
    "QuerySession",
    "Resolution",
    "SessionState",
]
