from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

from .constants import (
    CONNECTION_ENV,
    DEFAULT_ENV_FILE,
    DEFAULT_KEYSTORE_DIR,
    KEYSTORE_ENV,
    LOG_FILE_ENV,
    PRIVATE_KEY_ENV,
    REGISTRY_ENV,
)
from .env_utils import resolve_env_value, resolve_flag


@dataclass(frozen=True)
class RunnerConfig:
    """Settings shared by every subcommand of a single invocation."""

    quiet: bool = False
    offline: bool = False
    connection: Optional[str] = None
    registry: Optional[str] = None
    keystore: Path = DEFAULT_KEYSTORE_DIR.expanduser()
    log_file: Optional[Path] = None
    verbose: bool = False
    private_key: Optional[str] = field(default=None, repr=False)


def load_env_file(path: str | os.PathLike[str] = DEFAULT_ENV_FILE) -> bool:
    """Load a .env file without overriding variables already exported."""

    env_path = Path(path).expanduser()
    if not env_path.exists():
        return False
    return load_dotenv(env_path, override=False)


def load_config(
    *,
    quiet: bool = False,
    offline: bool = False,
    connection: Optional[str] = None,
    registry: Optional[str] = None,
    keystore: Optional[str] = None,
    log_file: Optional[str] = None,
    verbose: bool = False,
    env: Optional[Mapping[str, str]] = None,
) -> RunnerConfig:
    env = os.environ if env is None else env

    keystore_value = resolve_flag(keystore, KEYSTORE_ENV, env)
    log_value = resolve_flag(log_file, LOG_FILE_ENV, env)
    return RunnerConfig(
        quiet=quiet,
        offline=offline,
        connection=resolve_flag(connection, CONNECTION_ENV, env),
        registry=resolve_flag(registry, REGISTRY_ENV, env),
        keystore=Path(keystore_value).expanduser() if keystore_value else DEFAULT_KEYSTORE_DIR.expanduser(),
        log_file=Path(log_value).expanduser() if log_value else None,
        verbose=verbose,
        private_key=resolve_env_value(PRIVATE_KEY_ENV, env),
    )
