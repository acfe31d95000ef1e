class CommandFinderError(Exception):
    """Base exception for all command_finder errors."""


class BuildFailedError(CommandFinderError):
    """Raised when the catalog cannot be (re)built."""


class StoreUnavailableError(CommandFinderError):
    """Raised when the catalog store cannot be opened or queried."""


class InvocationError(CommandFinderError):
    """Raised when a selected action cannot be invoked."""


class SessionClosedError(CommandFinderError):
    """Raised when a confirmed or cancelled session is driven again."""

