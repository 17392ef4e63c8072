from __future__ import annotations


class CommandError(Exception):
    """Raised when an ENS command cannot complete."""

    kind = "command"


class UsageError(CommandError):
    """A flag is missing or malformed; raised before any network activity."""

    kind = "usage"


class PreconditionError(CommandError):
    """The chain state or run mode does not allow the operation."""

    kind = "precondition"


class ExternalCallError(CommandError):
    """A registry, resolver, keystore or submission call failed."""

    kind = "external"


__all__ = [
    "CommandError",
    "UsageError",
    "PreconditionError",
    "ExternalCallError",
]
