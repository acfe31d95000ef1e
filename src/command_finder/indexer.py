from __future__ import annotations

import logging
from collections.abc import Iterable

from command_finder.catalog_store import CatalogStore
from command_finder.constants import DEFAULT_BATCH_SIZE
from command_finder.exceptions import BuildFailedError
from command_finder.types import CommandRecord

logger = logging.getLogger(__name__)


class Indexer:
    """Rebuilds the catalog store wholesale from an enumeration of command records."""

    def __init__(self, store: CatalogStore, batch_size: int = DEFAULT_BATCH_SIZE) -> None:
        if batch_size <= 0:
            raise ValueError(f"batch_size must be positive, got {batch_size}")
        self._store = store
        self._batch_size = batch_size

    @property
    def batch_size(self) -> int:
        return self._batch_size

    def build(self, records: Iterable[CommandRecord]) -> int:
        """Drop the existing catalog and index *records*. Returns the number indexed.

        Duplicate names collapse to one entry: the last record wins but keeps
        the position of the first occurrence. Raises BuildFailedError if the
        store cannot be written; the catalog is then never partially visible.
        """
        unique = self._dedupe(records)
        logger.debug(
            "Building catalog from %d records (batch size %d)",
            len(unique), self._batch_size,
        )
        try:
            return self._store.replace(unique, batch_size=self._batch_size)
        except BuildFailedError:
            logger.error("Catalog build failed for %s", self._store.path)
            raise

    @staticmethod
    def _dedupe(records: Iterable[CommandRecord]) -> list[CommandRecord]:
        by_name: dict[str, CommandRecord] = {}
        for record in records:
            if not isinstance(record, CommandRecord):
                raise BuildFailedError(f"Not a CommandRecord: {record!r}")
            if record.name in by_name:
                logger.warning("Duplicate command name %r; keeping the last record", record.name)
            by_name[record.name] = record
        return list(by_name.values())
