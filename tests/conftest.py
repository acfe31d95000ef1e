from io import StringIO
from pathlib import Path

import pytest
from rich.console import Console

from command_finder.catalog_store import CatalogStore
from command_finder.command_registry import CommandRegistry
from command_finder.resolver import QueryResolver
from command_finder.tui import TUIShell
from command_finder.types import Action, CommandRecord, Config


def _noop(ctx):
    pass


@pytest.fixture
def sample_records():
    return [
        CommandRecord(name="save-file", description="Save the current buffer.\nMore text."),
        CommandRecord(name="save-all", description="Save every open buffer."),
    ]


@pytest.fixture
def store(tmp_path: Path) -> CatalogStore:
    return CatalogStore(tmp_path / "catalog.db")


@pytest.fixture
def sample_store(store: CatalogStore, sample_records) -> CatalogStore:
    store.replace(sample_records)
    return store


@pytest.fixture
def resolver(sample_store: CatalogStore) -> QueryResolver:
    return QueryResolver(sample_store)


@pytest.fixture
def registry(sample_records) -> CommandRegistry:
    reg = CommandRegistry()
    for record in sample_records:
        reg.register(Action(name=record.name, description=record.description, handler=_noop))
    return reg


@pytest.fixture
def config(tmp_path: Path) -> Config:
    return Config(storage_path=str(tmp_path / "app" / "catalog.db"))


@pytest.fixture
def tui(config: Config) -> TUIShell:
    return TUIShell(config, console=Console(file=StringIO(), width=120))
