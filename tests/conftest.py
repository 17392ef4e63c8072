from __future__ import annotations

from typing import Any, List, Optional, Tuple

import pytest
from click.testing import CliRunner
from eth_account import Account
from web3 import Web3

from ens_runner import cli as cli_module
from ens_runner.constants import UNKNOWN_ADDRESS
from ens_runner.ens_client import is_unset
from ens_runner.errors import PreconditionError
from ens_runner.logging_utils import setup_logging
from ens_runner.transactions import SignedTransaction, TxOptions

OWNER_KEY = "0x4c0883a69102937d6231471b5dbb6204fe5129617082792ae468d01a3f362318"
OWNER_ADDRESS = Account.from_key(OWNER_KEY).address
RESOLVER_ADDRESS = Web3.to_checksum_address("0x4976fb03c32e5b8cfe2b6ccb31c09ba78ebaba41")
TX_HASH = "0x" + "ab" * 32


class FakeEnsClient:
    """In-memory stand-in for EnsClient that records every contract write."""

    chain_id = 11155111

    def __init__(
        self,
        owner: str = OWNER_ADDRESS,
        resolver: str = RESOLVER_ADDRESS,
        multiaddr: bytes = b"",
    ) -> None:
        self._owner = owner
        self._resolver = resolver
        self._multiaddr = multiaddr
        self.writes: List[Tuple[str, str, Any]] = []
        self.options: Optional[TxOptions] = None

    def owner(self, domain: str) -> str:
        return self._owner

    def resolver(self, domain: str) -> str:
        return self._resolver

    def require_resolver(self, domain: str) -> str:
        if is_unset(self._resolver):
            raise PreconditionError("No resolver for that name")
        return self._resolver

    def multiaddr(self, domain: str) -> bytes:
        self.require_resolver(domain)
        return self._multiaddr

    def transaction_options(self, sender, signer, settings) -> TxOptions:
        self.options = TxOptions(
            sender=sender,
            signer=signer,
            nonce=7 if settings.nonce is None else settings.nonce,
            chain_id=self.chain_id,
            gas_limit=settings.gas_limit,
            gas_price=settings.gas_price,
            wait=settings.wait,
        )
        return self.options

    def _signed(self) -> SignedTransaction:
        return SignedTransaction(hash=TX_HASH, gas=48_000, gas_price=2_000_000_000)

    def set_resolver(self, opts: TxOptions, domain: str, address: str) -> SignedTransaction:
        self.writes.append(("setResolver", domain, address))
        return self._signed()

    def set_multiaddr(self, opts: TxOptions, domain: str, value: bytes, resolver_address=None) -> SignedTransaction:
        self.writes.append(("setMultiaddr", domain, value))
        return self._signed()


class ClientFactory:
    def __init__(self, client: FakeEnsClient) -> None:
        self.client = client
        self.calls = 0

    def __call__(self, config) -> FakeEnsClient:
        self.calls += 1
        return self.client


@pytest.fixture
def fake_client() -> FakeEnsClient:
    return FakeEnsClient()


@pytest.fixture
def factory(monkeypatch: pytest.MonkeyPatch, fake_client: FakeEnsClient) -> ClientFactory:
    factory = ClientFactory(fake_client)
    monkeypatch.setattr(cli_module, "connect", factory)
    return factory


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner(
        env={
            "ENS_RUNNER_CONNECTION": "http://localhost:8545",
            "ENS_RUNNER_PRIVATE_KEY": None,
            "PRIVATE_KEY": None,
            "ENS_RUNNER_LOG": None,
        }
    )


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    setup_logging()


__all__ = ["OWNER_KEY", "OWNER_ADDRESS", "RESOLVER_ADDRESS", "TX_HASH", "UNKNOWN_ADDRESS", "FakeEnsClient"]
