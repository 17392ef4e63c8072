from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional

from eth_account import Account
from eth_account.signers.local import LocalAccount
from web3 import Web3

from .errors import ExternalCallError, PreconditionError


def _normalise_address(value: str) -> str:
    cleaned = value.strip().lower()
    if not cleaned.startswith("0x"):
        cleaned = f"0x{cleaned}"
    return cleaned


def find_keyfile(keystore: Path, address: str) -> Optional[Dict[str, Any]]:
    """Return the decoded keystore entry for ``address``, if one is present."""

    if not keystore.is_dir():
        return None
    wanted = _normalise_address(address)
    for path in sorted(keystore.iterdir()):
        if not path.is_file():
            continue
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError):
            continue
        if isinstance(data, dict) and _normalise_address(str(data.get("address", ""))) == wanted:
            return data
    return None


def unlock_account(keystore: Path, address: str, passphrase: str) -> LocalAccount:
    checksum = Web3.to_checksum_address(address)
    keyfile = find_keyfile(keystore, checksum)
    if keyfile is None:
        raise PreconditionError(f"no keystore entry for {checksum} in {keystore}")
    try:
        private_key = Account.decrypt(keyfile, passphrase)
    except ValueError as exc:
        raise ExternalCallError(f"failed to unlock account {checksum}: {exc}") from exc
    return Account.from_key(private_key)
