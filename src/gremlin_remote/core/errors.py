"""Exception types raised by the gremlin-remote client."""

from __future__ import annotations


class GremlinRemoteError(Exception):
    """Base class for client-side errors."""


class StrategyConfigurationError(GremlinRemoteError, ValueError):
    """A traversal strategy was constructed with an invalid configuration.

    Raised at construction time, never deferred to apply time.
    """

    def __init__(self, fqcn: str, message: str) -> None:
        super().__init__(f"{fqcn}: {message}")
        self.fqcn = fqcn
