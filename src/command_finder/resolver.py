"""Query resolver - two-tier name/description matching against the catalog."""

from __future__ import annotations

import logging

from command_finder.catalog_store import CatalogStore
from command_finder.types import MatchTier, Resolution

logger = logging.getLogger(__name__)


class QueryResolver:
    """Resolves a raw query into an ordered list of command names.

    The name field is searched first. The description field is consulted only
    when no name matches, and its results are returned on their own, never
    merged with name matches. Order within a tier is the catalog's insertion
    order.

    A query with no searchable terms (empty, whitespace, punctuation) matches
    every record through the name tier.
    """

    def __init__(self, store: CatalogStore) -> None:
        self._store = store

    def resolve(self, query: str) -> Resolution:
        """Resolve *query*. Raises StoreUnavailableError if the catalog cannot be read."""
        names = self._store.match("name", query)
        if names:
            return Resolution(query=query, tier=MatchTier.NAME, names=tuple(names))

        names = self._store.match("description", query)
        if names:
            logger.debug("No name match for %r; %d description matches", query, len(names))
            return Resolution(query=query, tier=MatchTier.DESCRIPTION, names=tuple(names))

        return Resolution(query=query, tier=MatchTier.NONE)

    def names(self, query: str) -> list[str]:
        return list(self.resolve(query).names)
