"""Core data types, protocols, and enums for command_finder."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from command_finder.constants import (
    DEFAULT_BATCH_SIZE,
    DEFAULT_QUERY_TIMEOUT,
    DEFAULT_STORAGE_PATH,
)

if TYPE_CHECKING:
    from command_finder.app import Application
    from command_finder.tui import TUIShell


# --- Configuration ---


@dataclass
class Theme:
    prompt_color: str = "green"
    info_color: str = "cyan"
    error_color: str = "red"
    marker_color: str = "yellow"


@dataclass
class Config:
    app_name: str = "command_finder"
    app_version: str = "0.1.0"
    storage_path: str = DEFAULT_STORAGE_PATH
    batch_size: int = DEFAULT_BATCH_SIZE
    query_timeout: float = DEFAULT_QUERY_TIMEOUT
    providers: list[str] = field(default_factory=list)
    theme: Theme = field(default_factory=Theme)


# --- Catalog ---


@dataclass(frozen=True)
class CommandRecord:
    name: str
    description: str = ""

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("CommandRecord name must be non-empty")

    @property
    def short_description(self) -> str:
        """First line of the description, or an empty string."""
        return self.description.split("\n", 1)[0].strip()


class MatchTier(Enum):
    NAME = "name"
    DESCRIPTION = "description"
    NONE = "none"


@dataclass(frozen=True)
class Resolution:
    """Result of one resolver call: which tier matched and the names it produced."""

    query: str
    tier: MatchTier
    names: tuple[str, ...] = ()

    def __len__(self) -> int:
        return len(self.names)

    def __bool__(self) -> bool:
        return bool(self.names)


class SessionState(Enum):
    EMPTY = "empty"
    SINGLETON = "singleton"
    MULTIPLE = "multiple"


# --- Actions ---


@dataclass
class Action:
    name: str
    description: str
    handler: ActionHandler

    def to_record(self) -> CommandRecord:
        return CommandRecord(name=self.name, description=self.description or "")


@dataclass
class ActionContext:
    args: str = ""
    config: Config = field(default_factory=Config)
    tui: TUIShell | None = None
    app: Application | None = None


ActionHandler = Callable[[ActionContext], Awaitable[None] | None]


@runtime_checkable
class ActionRegistry(Protocol):
    """Capability interface the core needs from the set of invocable actions."""

    def enumerate(self) -> list[CommandRecord]: ...

    def is_invocable(self, name: str) -> bool: ...

    def documentation_first_line(self, name: str) -> str | None: ...

    async def invoke(self, name: str, ctx: ActionContext) -> None: ...


class ActionProvider(Protocol):
    @property
    def name(self) -> str: ...

    @property
    def description(self) -> str: ...

    def get_actions(self) -> list[Action]: ...


# Signature of the presentation feedback callback.
RenderCallback = Callable[[str], Any]
