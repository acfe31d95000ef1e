"""Tests for the indexer: wholesale rebuilds, batching, de-duplication and failures."""

from __future__ import annotations

import logging
from unittest.mock import MagicMock

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from command_finder.catalog_store import CatalogStore
from command_finder.exceptions import BuildFailedError
from command_finder.indexer import Indexer
from command_finder.types import CommandRecord


class TestBuild:
    def test_build_indexes_all_records(self, store: CatalogStore, sample_records):
        indexer = Indexer(store)
        assert indexer.build(sample_records) == 2
        assert store.all_names() == ["save-file", "save-all"]

    def test_rebuild_replaces(self, store: CatalogStore, sample_records):
        indexer = Indexer(store)
        indexer.build(sample_records)
        indexer.build([CommandRecord("quit", "Exit.")])
        assert store.all_names() == ["quit"]

    def test_default_batch_size(self, store: CatalogStore):
        assert Indexer(store).batch_size == 500

    def test_batch_size_passed_to_store(self, sample_records):
        store = MagicMock(spec=CatalogStore)
        store.replace.return_value = 2
        Indexer(store, batch_size=17).build(sample_records)
        _, kwargs = store.replace.call_args
        assert kwargs["batch_size"] == 17

    def test_invalid_batch_size(self, store: CatalogStore):
        with pytest.raises(ValueError):
            Indexer(store, batch_size=0)

    def test_large_catalog(self, store: CatalogStore):
        records = [CommandRecord(f"cmd-{i}", f"Does thing number {i}.") for i in range(20000)]
        assert Indexer(store).build(records) == 20000
        assert store.count() == 20000
        assert store.match("name", "cmd 19999") == ["cmd-19999"]


class TestDeduplication:
    def test_last_record_wins_first_position_kept(self, store: CatalogStore):
        records = [
            CommandRecord("open", "first"),
            CommandRecord("close", "close it"),
            CommandRecord("open", "second"),
        ]
        assert Indexer(store).build(records) == 2
        assert store.all_names() == ["open", "close"]
        assert store.match("description", "second") == ["open"]
        assert store.match("description", "first") == []

    def test_duplicate_logged(self, store: CatalogStore, caplog: pytest.LogCaptureFixture):
        with caplog.at_level(logging.WARNING):
            Indexer(store).build([CommandRecord("a"), CommandRecord("a")])
        assert "Duplicate command name" in caplog.text


class TestFailures:
    def test_non_record_rejected(self, store: CatalogStore):
        with pytest.raises(BuildFailedError):
            Indexer(store).build([("name", "description")])  # type: ignore[list-item]

    def test_store_failure_propagates(self, sample_records):
        store = MagicMock(spec=CatalogStore)
        store.replace.side_effect = BuildFailedError("cannot write")
        with pytest.raises(BuildFailedError, match="cannot write"):
            Indexer(store).build(sample_records)

    def test_failure_leaves_previous_catalog_queryable(self, store: CatalogStore, sample_records):
        indexer = Indexer(store)
        indexer.build(sample_records)
        with pytest.raises(BuildFailedError):
            indexer.build([CommandRecord("ok"), "broken"])  # type: ignore[list-item]
        assert store.all_names() == ["save-file", "save-all"]


_names = st.text(alphabet="abcdefghij-", min_size=1, max_size=8)


@pytest.mark.property
class TestIndexerProperties:
    @given(
        names=st.lists(_names, min_size=0, max_size=40),
        batch_size=st.integers(min_value=1, max_value=10),
    )
    @settings(max_examples=30, deadline=None)
    def test_every_record_present_exactly_once(self, tmp_path_factory, names, batch_size):
        store = CatalogStore(tmp_path_factory.mktemp("idx") / "catalog.db")
        records = [CommandRecord(name) for name in names]
        Indexer(store, batch_size=batch_size).build(records)

        expected = list(dict.fromkeys(names))
        assert store.all_names() == expected
