"""ENS registry and resolver bindings over web3.py."""
from __future__ import annotations

from typing import Optional

from ens import ENS
from ens.exceptions import ENSException
from eth_account.signers.local import LocalAccount
from web3 import Web3
from web3.contract import Contract

from .config import RunnerConfig
from .constants import ENS_REGISTRY_ABI, ENS_REGISTRY_ADDRESS, MULTIADDR_RESOLVER_ABI
from .errors import ExternalCallError, PreconditionError, UsageError
from .transactions import SignedTransaction, TransactionSettings, TxOptions, send_transaction


def is_unset(address: Optional[str]) -> bool:
    return not address or int(str(address), 16) == 0


def namehash(domain: str) -> bytes:
    try:
        return bytes(ENS.namehash(domain))
    except (ENSException, ValueError) as exc:
        raise UsageError(f"invalid domain {domain}: {exc}") from exc


def _init_web3(connection: str) -> Web3:
    if connection.endswith(".ipc"):
        return Web3(Web3.IPCProvider(connection))
    return Web3(Web3.HTTPProvider(connection))


def registry_address(registry: Optional[str]) -> str:
    if not registry:
        return ENS_REGISTRY_ADDRESS
    if not Web3.is_address(registry):
        raise UsageError(f"invalid registry address {registry}")
    return Web3.to_checksum_address(registry)


class EnsClient:
    def __init__(self, w3: Web3, registry: Optional[str] = None) -> None:
        self.w3 = w3
        self.registry: Contract = w3.eth.contract(address=registry_address(registry), abi=ENS_REGISTRY_ABI)
        try:
            self.chain_id = int(w3.eth.chain_id)
        except Exception as exc:
            raise ExternalCallError(f"cannot obtain chain id: {exc}") from exc

    def owner(self, domain: str) -> str:
        node = namehash(domain)
        try:
            owner = self.registry.functions.owner(node).call()
        except Exception as exc:
            raise ExternalCallError(f"cannot obtain owner: {exc}") from exc
        return Web3.to_checksum_address(owner)

    def resolver(self, domain: str) -> str:
        node = namehash(domain)
        try:
            resolver = self.registry.functions.resolver(node).call()
        except Exception as exc:
            raise ExternalCallError(f"cannot obtain resolver: {exc}") from exc
        return Web3.to_checksum_address(resolver)

    def require_resolver(self, domain: str) -> str:
        address = self.resolver(domain)
        if is_unset(address):
            raise PreconditionError("No resolver for that name")
        return address

    def _multiaddr_resolver(self, address: str) -> Contract:
        return self.w3.eth.contract(address=Web3.to_checksum_address(address), abi=MULTIADDR_RESOLVER_ABI)

    def multiaddr(self, domain: str) -> bytes:
        resolver = self._multiaddr_resolver(self.require_resolver(domain))
        try:
            return bytes(resolver.functions.multiaddr(namehash(domain)).call())
        except Exception as exc:
            raise ExternalCallError(f"cannot obtain multiaddr: {exc}") from exc

    def transaction_options(
        self, sender: str, signer: LocalAccount, settings: TransactionSettings
    ) -> TxOptions:
        nonce = settings.nonce
        if nonce is None:
            try:
                nonce = self.w3.eth.get_transaction_count(sender, "pending")
            except Exception as exc:
                raise ExternalCallError(f"cannot obtain nonce: {exc}") from exc
        return TxOptions(
            sender=sender,
            signer=signer,
            nonce=int(nonce),
            chain_id=self.chain_id,
            gas_limit=settings.gas_limit,
            gas_price=settings.gas_price,
            wait=settings.wait,
        )

    def set_resolver(self, opts: TxOptions, domain: str, address: str) -> SignedTransaction:
        fn = self.registry.functions.setResolver(namehash(domain), Web3.to_checksum_address(address))
        return send_transaction(self.w3, fn, opts)

    def set_multiaddr(
        self, opts: TxOptions, domain: str, value: bytes, resolver_address: Optional[str] = None
    ) -> SignedTransaction:
        resolver = self._multiaddr_resolver(resolver_address or self.require_resolver(domain))
        fn = resolver.functions.setMultiaddr(namehash(domain), value)
        return send_transaction(self.w3, fn, opts)


def connect(config: RunnerConfig) -> EnsClient:
    if not config.connection:
        raise PreconditionError("no connection configured; set --connection or ENS_RUNNER_CONNECTION")
    registry = registry_address(config.registry)
    try:
        w3 = _init_web3(config.connection)
    except Exception as exc:
        raise ExternalCallError(f"Unable to connect to {config.connection}: {exc}") from exc
    return EnsClient(w3, registry)
