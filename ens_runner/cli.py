from __future__ import annotations

import functools
import sys
from typing import Any, Callable, Dict, NoReturn, Optional, Sequence

import click
from web3 import Web3

from .config import RunnerConfig, load_config, load_env_file
from .constants import UNKNOWN_ADDRESS
from .ens_client import EnsClient, connect, is_unset
from .errors import PreconditionError, UsageError
from .logging_utils import setup_logging
from .multiaddrs import decode_multiaddr, encode_multiaddr
from .runner import TransactionCommand, run_query, run_transaction
from .transactions import TxOptions

TRANSACTION_FLAGS = ("passphrase", "privatekey", "gasprice", "gaslimit", "nonce", "wait")


def transaction_flags(passphrase_help: str) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Attach the signing and gas options shared by every write command."""

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        options = [
            click.option("--passphrase", default=None, help=passphrase_help),
            click.option("--privatekey", default=None, help="private key of the account that owns the domain"),
            click.option("--gasprice", default=None, help="gas price, e.g. 20gwei (default: network suggestion)"),
            click.option("--gaslimit", default=None, help="gas limit (default: estimated)"),
            click.option("--nonce", default=None, help="nonce (default: next pending nonce)"),
            click.option("--wait", is_flag=True, help="wait for the transaction to be mined"),
        ]
        for option in reversed(options):
            func = option(func)

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            flags = {name: kwargs.pop(name) for name in TRANSACTION_FLAGS}
            return func(*args, flags=flags, **kwargs)

        return wrapper

    return decorator


def domain_option(func: Callable[..., Any]) -> Callable[..., Any]:
    return click.option("--domain", default="", help="ENS domain, e.g. enstest.eth")(func)


def _submit(config: RunnerConfig, command: TransactionCommand, flags: Dict[str, Any]) -> None:
    run_transaction(config, connect, command, flags)


class RunnerGroup(click.Group):
    """Root group whose failures always exit 1 and stay silent under --quiet.

    Click reports its own parse errors with status 2 before the root callback
    has built a ``RunnerConfig``, so quiet mode is read from the raw arguments.
    """

    def main(self, args: Optional[Sequence[str]] = None, *main_args: Any, **extra: Any) -> NoReturn:
        argv = list(args) if args is not None else sys.argv[1:]
        quiet = "--quiet" in argv
        extra["standalone_mode"] = False
        try:
            rv = super().main(args, *main_args, **extra)
        except click.ClickException as exc:
            if not quiet:
                exc.show()
            sys.exit(1)
        except click.exceptions.Abort:
            if not quiet:
                click.echo("Aborted!", err=True)
            sys.exit(1)
        # Without standalone mode click returns the code of an Exit instead of raising it
        sys.exit(rv if isinstance(rv, int) else 0)


@click.group(cls=RunnerGroup)
@click.option("--quiet", is_flag=True, help="no output; the exit status reports success (0) or failure (1)")
@click.option("--offline", is_flag=True, help="do not contact the network")
@click.option("--connection", default=None, help="JSON-RPC endpoint (HTTP URL or IPC path)")
@click.option("--registry", default=None, help="ENS registry address override")
@click.option("--keystore", default=None, help="directory holding encrypted account keys")
@click.option("--log", "log_file", default=None, help="file receiving one JSON record per transaction")
@click.option("--verbose", is_flag=True, help="mirror log records to stderr")
@click.pass_context
def cli(
    ctx: click.Context,
    quiet: bool,
    offline: bool,
    connection: str | None,
    registry: str | None,
    keystore: str | None,
    log_file: str | None,
    verbose: bool,
) -> None:
    """Manage Ethereum Name Service domains from the command line."""
    config = load_config(
        quiet=quiet,
        offline=offline,
        connection=connection,
        registry=registry,
        keystore=keystore,
        log_file=log_file,
        verbose=verbose,
    )
    # Quiet mode silences stderr entirely, including the verbose mirror
    setup_logging(config.log_file, config.verbose and not config.quiet)
    ctx.obj = config


@cli.group()
def ens() -> None:
    """Ethereum Name Service commands."""


@ens.group()
def multiaddr() -> None:
    """Manage the multiaddr record of an ENS domain."""


@ens.group()
def resolver() -> None:
    """Manage the resolver of an ENS domain."""


@ens.group()
def owner() -> None:
    """Inspect the owner of an ENS domain."""


@multiaddr.command("set")
@domain_option
@click.option("--multiaddr", "multiaddr_text", default="", help="The multiaddr to set")
@transaction_flags("passphrase for the account that owns the domain")
@click.pass_obj
def multiaddr_set(config: RunnerConfig, domain: str, multiaddr_text: str, flags: Dict[str, Any]) -> None:
    """Set the multiaddr of an ENS domain.

    For example:

        ens-runner ens multiaddr set --domain=enstest.eth --multiaddr=/ip4/1.2.3.4 --passphrase="my secret passphrase"

    The keystore for the account that owns the name must be local and
    unlockable with the supplied passphrase.

    In quiet mode this will return 0 if the transaction to set the multiaddr
    is sent successfully, otherwise 1.
    """
    parsed: Dict[str, Any] = {}

    def validate() -> Dict[str, Any]:
        parsed["value"] = encode_multiaddr(multiaddr_text)
        return {"multiaddr": str(parsed["value"])}

    def submit(client: EnsClient, opts: TxOptions, resolver_address: str):
        return client.set_multiaddr(opts, domain, parsed["value"].to_bytes(), resolver_address)

    _submit(
        config,
        TransactionCommand(
            group="ens/multiaddr",
            command="set",
            domain=domain,
            validate=validate,
            prepare=lambda client, name: client.require_resolver(name),
            submit=submit,
        ),
        flags,
    )


@multiaddr.command("clear")
@domain_option
@transaction_flags("passphrase for the account that owns the domain")
@click.pass_obj
def multiaddr_clear(config: RunnerConfig, domain: str, flags: Dict[str, Any]) -> None:
    """Clear the multiaddr of an ENS domain.

    In quiet mode this will return 0 if the transaction to clear the
    multiaddr is sent successfully, otherwise 1.
    """
    _submit(
        config,
        TransactionCommand(
            group="ens/multiaddr",
            command="clear",
            domain=domain,
            prepare=lambda client, name: client.require_resolver(name),
            submit=lambda client, opts, resolver_address: client.set_multiaddr(
                opts, domain, b"", resolver_address
            ),
        ),
        flags,
    )


@multiaddr.command("get")
@domain_option
@click.pass_obj
def multiaddr_get(config: RunnerConfig, domain: str) -> None:
    """Obtain the multiaddr of an ENS domain.

    In quiet mode this will return 0 if the domain has a multiaddr, otherwise 1.
    """

    def query(client: EnsClient, name: str) -> str:
        data = client.multiaddr(name)
        if not data:
            raise PreconditionError(f"no multiaddr for {name}")
        return decode_multiaddr(data)

    run_query(config, connect, domain, query)


@resolver.command("set")
@domain_option
@click.option("--resolver", "resolver_address", default="", help="The resolver address to set")
@transaction_flags("passphrase for the account that owns the domain")
@click.pass_obj
def resolver_set(config: RunnerConfig, domain: str, resolver_address: str, flags: Dict[str, Any]) -> None:
    """Set the resolver of an ENS domain.

    In quiet mode this will return 0 if the transaction to set the resolver
    is sent successfully, otherwise 1.
    """
    parsed: Dict[str, str] = {}

    def validate() -> Dict[str, Any]:
        if not resolver_address:
            raise UsageError("--resolver is required")
        if not Web3.is_address(resolver_address):
            raise UsageError(f"invalid resolver address {resolver_address}")
        if is_unset(resolver_address):
            raise UsageError("use 'ens resolver clear' to remove the resolver")
        parsed["address"] = Web3.to_checksum_address(resolver_address)
        return {"resolver": parsed["address"]}

    _submit(
        config,
        TransactionCommand(
            group="ens/resolver",
            command="set",
            domain=domain,
            validate=validate,
            submit=lambda client, opts, _: client.set_resolver(opts, domain, parsed["address"]),
        ),
        flags,
    )


@resolver.command("clear")
@domain_option
@transaction_flags("passphrase for the account that owns the domain")
@click.pass_obj
def resolver_clear(config: RunnerConfig, domain: str, flags: Dict[str, Any]) -> None:
    """Clear the resolver of an ENS domain.

    For example:

        ens-runner ens resolver clear --domain=enstest.eth --passphrase="my secret passphrase"

    In quiet mode this will return 0 if the transaction to clear the resolver
    is sent successfully, otherwise 1.
    """
    _submit(
        config,
        TransactionCommand(
            group="ens/resolver",
            command="clear",
            domain=domain,
            submit=lambda client, opts, _: client.set_resolver(opts, domain, UNKNOWN_ADDRESS),
        ),
        flags,
    )


@resolver.command("get")
@domain_option
@click.pass_obj
def resolver_get(config: RunnerConfig, domain: str) -> None:
    """Obtain the resolver of an ENS domain."""
    run_query(config, connect, domain, lambda client, name: client.require_resolver(name))


@owner.command("get")
@domain_option
@click.pass_obj
def owner_get(config: RunnerConfig, domain: str) -> None:
    """Obtain the owner of an ENS domain."""

    def query(client: EnsClient, name: str) -> str:
        address = client.owner(name)
        if is_unset(address):
            raise PreconditionError(f"owner of {name} is not set")
        return address

    run_query(config, connect, domain, query)


def main() -> None:
    load_env_file()
    cli()
