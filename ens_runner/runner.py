"""Shared pipeline behind every ENS subcommand.

Write commands run the same fail-fast sequence: offline check, domain check,
operation validation, connect, owner lookup, secondary lookups, transaction
options, one contract write, then reporting. The first ``CommandError`` raised
by any step ends the invocation with exit status 1.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, NoReturn, Optional

import click

from .config import RunnerConfig
from .ens_client import EnsClient, is_unset
from .errors import CommandError, PreconditionError, UsageError
from .logging_utils import get_logger, log_transaction
from .transactions import SignedTransaction, TransactionSettings, TxOptions, load_signer

OFFLINE_MESSAGE = "Offline mode not supported at current with this command"

ClientFactory = Callable[[RunnerConfig], EnsClient]

logger = get_logger(__name__)


@dataclass
class TransactionCommand:
    group: str
    command: str
    domain: Optional[str]
    submit: Callable[[EnsClient, TxOptions, Any], SignedTransaction]
    # Runs before any network call; returns the operation's log fields
    validate: Optional[Callable[[], Dict[str, Any]]] = None
    # Runs after the owner check; its result is handed to ``submit``
    prepare: Optional[Callable[[EnsClient, str], Any]] = None


def check_preconditions(config: RunnerConfig, domain: Optional[str]) -> str:
    if config.offline:
        raise PreconditionError(OFFLINE_MESSAGE)
    if not domain or not domain.strip():
        raise UsageError("--domain is required")
    return domain.strip()


def require_owner(client: EnsClient, domain: str) -> str:
    owner = client.owner(domain)
    if is_unset(owner):
        raise PreconditionError(f"owner of {domain} is not set")
    return owner


def execute(
    config: RunnerConfig,
    client_factory: ClientFactory,
    command: TransactionCommand,
    settings: TransactionSettings,
) -> SignedTransaction:
    domain = check_preconditions(config, command.domain)
    fields = command.validate() if command.validate else {}

    client = client_factory(config)
    owner = require_owner(client, domain)
    prepared = command.prepare(client, domain) if command.prepare else None

    signer = load_signer(owner, settings, config.keystore)
    opts = client.transaction_options(owner, signer, settings)
    signed_tx = command.submit(client, opts, prepared)

    log_transaction(
        {
            "group": command.group,
            "command": command.command,
            "domain": domain,
            **fields,
            "networkid": client.chain_id,
            "gas": signed_tx.gas,
            "gasprice": str(signed_tx.gas_price),
            "transactionid": signed_tx.hash,
        }
    )
    return signed_tx


def fail(config: RunnerConfig, error: CommandError) -> NoReturn:
    logger.error("%s error: %s", error.kind, error)
    if not config.quiet:
        click.echo(str(error), err=True)
    raise click.exceptions.Exit(1)


def report(config: RunnerConfig, text: str) -> None:
    if not config.quiet:
        click.echo(text)


def run_transaction(
    config: RunnerConfig,
    client_factory: ClientFactory,
    command: TransactionCommand,
    flags: Dict[str, Any],
) -> None:
    try:
        settings = TransactionSettings.from_flags(default_private_key=config.private_key, **flags)
        signed_tx = execute(config, client_factory, command, settings)
    except CommandError as exc:
        fail(config, exc)
    report(config, signed_tx.hash)


def run_query(
    config: RunnerConfig,
    client_factory: ClientFactory,
    domain: Optional[str],
    query: Callable[[EnsClient, str], str],
) -> None:
    try:
        checked = check_preconditions(config, domain)
        client = client_factory(config)
        result = query(client, checked)
    except CommandError as exc:
        fail(config, exc)
    report(config, result)
