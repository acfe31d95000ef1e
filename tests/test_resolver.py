"""Tests for the two-tier query resolver.

Covers tier strictness, fallback, ordering and the empty-query policy.
"""

from __future__ import annotations

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from command_finder.catalog_store import CatalogStore
from command_finder.exceptions import StoreUnavailableError
from command_finder.resolver import QueryResolver
from command_finder.types import CommandRecord, MatchTier


class TestResolve:
    def test_name_tier(self, resolver: QueryResolver):
        result = resolver.resolve("save")
        assert result.tier is MatchTier.NAME
        assert result.names == ("save-file", "save-all")

    def test_description_fallback(self, resolver: QueryResolver):
        result = resolver.resolve("buffer")
        assert result.tier is MatchTier.DESCRIPTION
        assert result.names == ("save-file", "save-all")

    def test_no_match(self, resolver: QueryResolver):
        result = resolver.resolve("zzz")
        assert result.tier is MatchTier.NONE
        assert result.names == ()
        assert not result

    def test_query_kept_on_result(self, resolver: QueryResolver):
        assert resolver.resolve("save").query == "save"

    def test_names_helper(self, resolver: QueryResolver):
        assert resolver.names("every") == ["save-all"]

    def test_tier_strictness(self, store: CatalogStore):
        store.replace([
            CommandRecord("open-window", "Create a frame for the project."),
            CommandRecord("project-find", "Search files."),
        ])
        resolver = QueryResolver(store)
        result = resolver.resolve("project")
        assert result.tier is MatchTier.NAME
        assert result.names == ("project-find",)

    def test_name_match_does_not_depend_on_description(self, store: CatalogStore):
        store.replace([CommandRecord("quit", "")])
        assert QueryResolver(store).resolve("quit").names == ("quit",)

    def test_store_unavailable(self, store: CatalogStore):
        with pytest.raises(StoreUnavailableError):
            QueryResolver(store).resolve("save")


class TestEmptyQuery:
    def test_matches_all_in_store_order(self, resolver: QueryResolver):
        result = resolver.resolve("")
        assert result.tier is MatchTier.NAME
        assert result.names == ("save-file", "save-all")

    def test_idempotent(self, resolver: QueryResolver):
        assert resolver.resolve("") == resolver.resolve("") == resolver.resolve("")

    def test_punctuation_only_treated_as_empty(self, resolver: QueryResolver):
        assert resolver.resolve(" - ").names == resolver.resolve("").names
        assert resolver.resolve("_").names == resolver.resolve("").names
        assert resolver.resolve("__").tier is MatchTier.NAME

    def test_trailing_underscore_ignored(self, resolver: QueryResolver):
        result = resolver.resolve("save _")
        assert result.tier is MatchTier.NAME
        assert result.names == resolver.resolve("save -").names == ("save-file", "save-all")

    def test_empty_catalog(self, store: CatalogStore):
        store.replace([])
        result = QueryResolver(store).resolve("")
        assert result.tier is MatchTier.NONE


_word = st.text(alphabet="abcdefgh", min_size=3, max_size=6)


@pytest.mark.property
class TestResolverProperties:
    @given(term=_word, other=_word)
    @settings(max_examples=30, deadline=None)
    def test_name_matches_exclude_description_only_matches(self, tmp_path_factory, term, other):
        """A description-only match is never returned alongside name matches."""
        if other.startswith(term):
            return
        store = CatalogStore(tmp_path_factory.mktemp("res") / "catalog.db")
        store.replace([
            CommandRecord(f"{other}-cmd", f"Mentions {term} in its documentation."),
            CommandRecord(f"{term}-cmd", "Unrelated text."),
        ])
        assert QueryResolver(store).resolve(term).names == (f"{term}-cmd",)
