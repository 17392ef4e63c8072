from __future__ import annotations

from typing import Dict, Mapping, Optional

from .constants import PLACEHOLDER_MARKERS

# Map canonical env names to alternative aliases commonly set by other tooling
ENV_ALIASES: Dict[str, list[str]] = {
    "ENS_RUNNER_CONNECTION": ["ETH_RPC_URL", "RPC_URL"],
    "ENS_RUNNER_KEYSTORE": ["KEYSTORE_DIR"],
    "ENS_RUNNER_PRIVATE_KEY": ["PRIVATE_KEY"],
}


def is_placeholder(value: str) -> bool:
    upper_value = value.upper()
    return any(marker in upper_value for marker in PLACEHOLDER_MARKERS)


def resolve_env_value(name: str, env: Mapping[str, str]) -> Optional[str]:
    """Return the first non-placeholder value for ``name`` or one of its aliases."""

    for candidate in [name, *ENV_ALIASES.get(name, [])]:
        value = (env.get(candidate) or "").strip()
        if value and not is_placeholder(value):
            return value
    return None


def resolve_flag(flag_value: Optional[str], name: str, env: Mapping[str, str]) -> Optional[str]:
    if flag_value:
        return flag_value
    return resolve_env_value(name, env)
