"""Transaction options, signing and submission for ENS write commands."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from eth_account import Account
from eth_account.signers.local import LocalAccount
from web3 import Web3

from .errors import ExternalCallError, PreconditionError, UsageError
from .keystore import unlock_account
from .units import parse_count, parse_gas_price

DEFAULT_RECEIPT_TIMEOUT = 300


@dataclass(frozen=True)
class TransactionSettings:
    """User-supplied transaction flags, already parsed."""

    passphrase: Optional[str] = None
    private_key: Optional[str] = None
    gas_price: Optional[int] = None
    gas_limit: Optional[int] = None
    nonce: Optional[int] = None
    wait: bool = False

    @classmethod
    def from_flags(
        cls,
        *,
        passphrase: Optional[str] = None,
        privatekey: Optional[str] = None,
        gasprice: Optional[str] = None,
        gaslimit: Optional[str] = None,
        nonce: Optional[str] = None,
        wait: bool = False,
        default_private_key: Optional[str] = None,
    ) -> "TransactionSettings":
        # The environment key only stands in when no signing flag was given
        if not privatekey and not passphrase:
            privatekey = default_private_key
        return cls(
            passphrase=passphrase or None,
            private_key=privatekey or None,
            gas_price=parse_gas_price(gasprice),
            gas_limit=parse_count(gaslimit, "gas limit"),
            nonce=parse_count(nonce, "nonce"),
            wait=wait,
        )


@dataclass(frozen=True)
class TxOptions:
    sender: str
    signer: LocalAccount
    nonce: int
    chain_id: int
    gas_limit: Optional[int] = None
    gas_price: Optional[int] = None
    wait: bool = False

    def as_params(self) -> Dict[str, Any]:
        params: Dict[str, Any] = {
            "from": self.sender,
            "nonce": self.nonce,
            "chainId": self.chain_id,
        }
        if self.gas_limit is not None:
            params["gas"] = self.gas_limit
        if self.gas_price is not None:
            params["gasPrice"] = self.gas_price
        return params


@dataclass(frozen=True)
class SignedTransaction:
    hash: str
    gas: int
    gas_price: int


def load_signer(owner: str, settings: TransactionSettings, keystore: Path) -> LocalAccount:
    """Obtain a signing account for ``owner`` from a private key or the keystore."""

    if settings.private_key:
        try:
            account = Account.from_key(settings.private_key)
        except ValueError as exc:
            raise UsageError("private key could not be parsed") from exc
        if account.address.lower() != owner.lower():
            raise PreconditionError(f"private key is for {account.address}, not the domain owner {owner}")
        return account
    if settings.passphrase:
        return unlock_account(keystore, owner, settings.passphrase)
    raise UsageError("--passphrase or --privatekey is required")


def normalise_tx_hash(tx_hash: str) -> str:
    cleaned = tx_hash.strip()
    if not cleaned:
        raise ExternalCallError("Transaction hash is empty.")
    if not cleaned.startswith(("0x", "0X")):
        cleaned = f"0x{cleaned}"
    return cleaned.lower()


def _apply_gas_values(tx: Dict[str, Any], gas_limit: Optional[int], gas_price: Optional[int]) -> None:
    tx.setdefault("value", 0)
    if gas_limit is not None:
        tx["gas"] = gas_limit
    if gas_price is not None:
        tx["gasPrice"] = gas_price
        # Legacy transaction; the signer infers the type from the fee fields
        tx.pop("type", None)
        tx.pop("maxFeePerGas", None)
        tx.pop("maxPriorityFeePerGas", None)


def send_transaction(w3: Web3, contract_fn: Any, opts: TxOptions) -> SignedTransaction:
    """Build, sign and broadcast a single contract call."""

    try:
        tx = dict(contract_fn.build_transaction(opts.as_params()))
    except Exception as exc:
        raise ExternalCallError(f"failed to build transaction: {exc}") from exc
    _apply_gas_values(tx, opts.gas_limit, opts.gas_price)

    try:
        signed_tx = opts.signer.sign_transaction(tx)
    except Exception as exc:
        raise ExternalCallError(f"failed to sign transaction: {exc}") from exc

    raw_tx = getattr(signed_tx, "raw_transaction", None)
    if raw_tx is None:
        raw_tx = getattr(signed_tx, "rawTransaction", None)

    try:
        tx_hash = w3.eth.send_raw_transaction(raw_tx)
    except Exception as exc:
        raise ExternalCallError(f"failed to send transaction: {exc}") from exc

    if opts.wait:
        try:
            receipt = w3.eth.wait_for_transaction_receipt(tx_hash, timeout=DEFAULT_RECEIPT_TIMEOUT)
        except Exception as exc:
            raise ExternalCallError(f"transaction not confirmed: {exc}") from exc
        if receipt.status != 1:
            raise ExternalCallError(f"transaction {Web3.to_hex(tx_hash)} reverted on-chain")

    return SignedTransaction(
        hash=normalise_tx_hash(Web3.to_hex(tx_hash)),
        gas=int(tx.get("gas", 0)),
        gas_price=int(tx.get("gasPrice") or tx.get("maxFeePerGas") or 0),
    )
