from __future__ import annotations

from .config import RunnerConfig, load_config
from .ens_client import EnsClient, connect, namehash
from .errors import CommandError, ExternalCallError, PreconditionError, UsageError
from .runner import TransactionCommand, execute
from .transactions import SignedTransaction, TransactionSettings, TxOptions

__version__ = "0.1.0"
