from __future__ import annotations

import logging

from command_finder.builtin_actions import BuiltinActionsProvider
from command_finder.catalog_store import CatalogStore
from command_finder.command_registry import CommandRegistry
from command_finder.exceptions import BuildFailedError, InvocationError
from command_finder.indexer import Indexer
from command_finder.providers import load_providers, register_provider
from command_finder.resolver import QueryResolver
from command_finder.session import QuerySession
from command_finder.tui import TUIShell
from command_finder.types import ActionContext, ActionProvider, Config, Resolution

logger = logging.getLogger(__name__)


class Application:
    """Top-level context; wires the registry, catalog, resolver and TUI together.

    Lifecycle: ``initialize()`` loads providers and builds the catalog once
    per instance (``force=True`` rebuilds), ``invoke_interactive()`` runs one
    pick-and-run interaction, ``teardown()`` marks the catalog stale and can
    remove it from disk.
    """

    def __init__(
        self,
        config: Config | None = None,
        registry: CommandRegistry | None = None,
        tui: TUIShell | None = None,
    ) -> None:
        self._config = config or Config()
        self._registry = registry if registry is not None else CommandRegistry()
        self._tui = tui or TUIShell(self._config)
        self._store = CatalogStore(
            self._config.storage_path, query_timeout=self._config.query_timeout,
        )
        self._indexer = Indexer(self._store, batch_size=self._config.batch_size)
        self._resolver = QueryResolver(self._store)
        self._providers: list[ActionProvider] = []
        self._providers_loaded = False
        self._initialized = False
        self._record_count = 0
        self._last_command: str | None = None

    @property
    def config(self) -> Config:
        return self._config

    @property
    def registry(self) -> CommandRegistry:
        return self._registry

    @property
    def store(self) -> CatalogStore:
        return self._store

    @property
    def resolver(self) -> QueryResolver:
        return self._resolver

    @property
    def tui(self) -> TUIShell:
        return self._tui

    @property
    def providers(self) -> list[ActionProvider]:
        return list(self._providers)

    @property
    def initialized(self) -> bool:
        return self._initialized

    @property
    def last_command(self) -> str | None:
        return self._last_command

    def _load_providers(self) -> None:
        """Register built-in actions, then every configured provider.

        Built-ins never replace an action the caller registered under the same
        name; configured providers do.
        """
        builtin = BuiltinActionsProvider()
        register_provider(builtin, self._registry, override=False)
        self._providers = [builtin]
        self._providers.extend(load_providers(self._config.providers, self._registry))
        self._providers_loaded = True

    def initialize(self, force: bool = False) -> int:
        """Build the catalog from the registry. Returns the number of indexed commands.

        A second call is a no-op unless *force* is set. Raises BuildFailedError;
        the application then stays uninitialized.
        """
        if self._initialized and not force:
            return self._record_count

        if not self._providers_loaded:
            self._load_providers()

        self._initialized = False
        try:
            self._record_count = self._indexer.build(self._registry.enumerate())
        except BuildFailedError as e:
            logger.error("Initialization failed: %s", e)
            raise
        self._initialized = True
        return self._record_count

    def teardown(self, remove_catalog: bool = False) -> None:
        self._initialized = False
        self._record_count = 0
        if remove_catalog:
            self._store.clear()

    def new_session(self) -> QuerySession:
        return QuerySession(
            self._resolver,
            self._registry,
            previous=self._last_command,
            on_render=self._tui.render_feedback,
        )

    def query(self, text: str) -> Resolution:
        """Resolve *text* against the catalog. Raises StoreUnavailableError."""
        return self._resolver.resolve(text)

    async def invoke_interactive(self) -> str | None:
        """Run one full interaction: pick a command, then invoke it.

        Returns the confirmed name, or None when nothing was selected.
        """
        if not self._initialized:
            self.initialize()

        session = self.new_session()
        name = await self._tui.select(session)
        if name is None:
            self._tui.show_info("No command selected.")
            return None

        await self.run_command(name)
        return name

    async def run_command(self, name: str, args: str = "") -> bool:
        """Invoke *name*, reporting failures to the user. Returns True on success."""
        self._last_command = name
        ctx = ActionContext(args=args, config=self._config, tui=self._tui, app=self)
        try:
            await self._registry.invoke(name, ctx)
        except InvocationError as e:
            logger.warning("Invocation of %s failed: %s", name, e)
            self._tui.show_error(str(e))
            return False
        return True
