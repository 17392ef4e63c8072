from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from typing import Optional

from web3 import Web3

from .errors import UsageError

_GAS_PRICE_PATTERN = re.compile(r"^\s*([0-9][0-9_]*(?:\.[0-9]+)?)\s*([a-zA-Z]*)\s*$")


def parse_int(token: str) -> Optional[int]:
    """Read a decimal (underscores allowed) or 0x-prefixed hex integer."""
    cleaned = token.strip().replace("_", "") if token else ""
    base = 16 if cleaned[:2].lower() == "0x" else 10
    try:
        return int(cleaned, base)
    except ValueError:
        return None


def parse_gas_price(value: Optional[str]) -> Optional[int]:
    """Convert ``20gwei``, ``1.5 gwei``, ``0x3b9aca00`` or a bare wei amount to wei."""

    if value is None or not value.strip():
        return None
    as_int = parse_int(value.strip())
    if as_int is not None:
        return as_int

    match = _GAS_PRICE_PATTERN.match(value)
    if not match:
        raise UsageError(f"invalid gas price {value}")
    amount, unit = match.groups()
    unit = (unit or "wei").lower()
    try:
        return int(Web3.to_wei(Decimal(amount.replace("_", "")), unit))
    except (InvalidOperation, ValueError) as exc:
        raise UsageError(f"invalid gas price {value}") from exc


def parse_count(value: Optional[str], label: str) -> Optional[int]:
    if value is None or not value.strip():
        return None
    parsed = parse_int(value.strip())
    if parsed is None or parsed < 0:
        raise UsageError(f"invalid {label} {value}")
    return parsed
