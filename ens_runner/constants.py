from __future__ import annotations

from pathlib import Path

# Unset sentinel returned by the registry for unregistered names
UNKNOWN_ADDRESS = "0x0000000000000000000000000000000000000000"
ENS_REGISTRY_ADDRESS = "0x00000000000C2E074eC69A0dFb2997BA6C7d2e1e"

DEFAULT_KEYSTORE_DIR = Path("~/.ethereum/keystore")
DEFAULT_ENV_FILE = ".env"

CONNECTION_ENV = "ENS_RUNNER_CONNECTION"
REGISTRY_ENV = "ENS_RUNNER_REGISTRY"
KEYSTORE_ENV = "ENS_RUNNER_KEYSTORE"
LOG_FILE_ENV = "ENS_RUNNER_LOG"
PRIVATE_KEY_ENV = "ENS_RUNNER_PRIVATE_KEY"

PLACEHOLDER_MARKERS = ("YOUR", "REPLACE", "<", ">")

LOGGER_NAME = "ens_runner"
TRANSACTION_LOGGER_NAME = "ens_runner.transactions"

# Registry methods used by the ens commands
ENS_REGISTRY_ABI = [
    {
        "inputs": [{"internalType": "bytes32", "name": "node", "type": "bytes32"}],
        "name": "owner",
        "outputs": [{"internalType": "address", "name": "", "type": "address"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [{"internalType": "bytes32", "name": "node", "type": "bytes32"}],
        "name": "resolver",
        "outputs": [{"internalType": "address", "name": "", "type": "address"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [
            {"internalType": "bytes32", "name": "node", "type": "bytes32"},
            {"internalType": "address", "name": "resolver", "type": "address"},
        ],
        "name": "setResolver",
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function",
    },
]

# Resolver interface exposing the multiaddr record
MULTIADDR_RESOLVER_ABI = [
    {
        "inputs": [{"internalType": "bytes32", "name": "node", "type": "bytes32"}],
        "name": "multiaddr",
        "outputs": [{"internalType": "bytes", "name": "", "type": "bytes"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [
            {"internalType": "bytes32", "name": "node", "type": "bytes32"},
            {"internalType": "bytes", "name": "multiaddr", "type": "bytes"},
        ],
        "name": "setMultiaddr",
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function",
    },
]


__all__ = [
    "UNKNOWN_ADDRESS",
    "ENS_REGISTRY_ADDRESS",
    "DEFAULT_KEYSTORE_DIR",
    "DEFAULT_ENV_FILE",
    "CONNECTION_ENV",
    "REGISTRY_ENV",
    "KEYSTORE_ENV",
    "LOG_FILE_ENV",
    "PRIVATE_KEY_ENV",
    "PLACEHOLDER_MARKERS",
    "LOGGER_NAME",
    "TRANSACTION_LOGGER_NAME",
    "ENS_REGISTRY_ABI",
    "MULTIADDR_RESOLVER_ABI",
]
