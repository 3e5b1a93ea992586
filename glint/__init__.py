"""Expiration index, gas and state rules, RLP slicing and sidecar helpers for ephemeral entities."""

__version__ = "0.1.0"

__all__ = [
    "accumulator",
    "cli",
    "crud_rules",
    "expiration",
    "gas",
    "health",
    "ipc_client",
    "query",
    "rlp",
    "state",
]