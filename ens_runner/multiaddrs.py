from __future__ import annotations

from multiaddr import Multiaddr
from multiaddr import exceptions as multiaddr_exceptions

from .errors import ExternalCallError, UsageError


def encode_multiaddr(text: str) -> Multiaddr:
    """Parse a textual multiaddr such as ``/ip4/1.2.3.4/tcp/4001``."""

    if not text or not text.strip():
        raise UsageError("--multiaddr is required")
    try:
        return Multiaddr(text.strip())
    except (ValueError, multiaddr_exceptions.Error) as exc:
        raise UsageError(f"invalid multiaddr {text}") from exc


def decode_multiaddr(data: bytes) -> str:
    try:
        return str(Multiaddr(bytes(data)))
    except (ValueError, multiaddr_exceptions.Error) as exc:
        raise ExternalCallError(f"stored multiaddr is not valid: {exc}") from exc
