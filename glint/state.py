"""State changes written by the entity processor and charged to senders."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from collections.abc import Mapping

U64_MAX = (1 << 64) - 1
U256_MAX = (1 << 256) - 1
SLOT_LEN = 32


class CounterError(ArithmeticError):
    """Raised when a storage counter would overflow or underflow."""


@dataclass(frozen=True)
class StorageSlot:
    """One storage slot's value before and after a transaction."""

    original_value: int
    present_value: int
    transaction_id: int = 0

    def is_changed(self) -> bool:
        """True when the present value differs from the original."""
        return self.original_value != self.present_value


@dataclass(frozen=True)
class AccountInfo:
    """Balance and nonce of an account."""

    balance: int = 0
    nonce: int = 0


@dataclass
class Account:
    """An account touched by a transaction, with its changed storage."""

    info: AccountInfo
    original_info: AccountInfo = field(default_factory=AccountInfo)
    storage: dict[int, StorageSlot] = field(default_factory=dict)
    touched: bool = True
    transaction_id: int = 0


def _slot_index(slot: bytes) -> int:
    slot = bytes(slot)
    if len(slot) != SLOT_LEN:
        raise ValueError(f"storage slot must be {SLOT_LEN} bytes, got {len(slot)}")
    return int.from_bytes(slot, "big")


def build_processor_state(
    changes: Mapping[bytes, int], processor_address: bytes
) -> dict[bytes, Account]:
    """Build the processor account carrying ``changes`` as changed storage.

    Each slot's original value is chosen to differ from its new value so that
    a commit never drops it, including slots being cleared to zero. The
    account nonce is 1 so that empty-account clearing leaves its storage alone.
    """
    storage: dict[int, StorageSlot] = {}
    for slot, value in changes.items():
        if not 0 <= value <= U256_MAX:
            raise ValueError(f"storage value out of 256-bit range: {value}")
        original = 1 if value == 0 else 0
        storage[_slot_index(slot)] = StorageSlot(original, value)

    account = Account(
        info=AccountInfo(nonce=1),
        original_info=AccountInfo(),
        storage=storage,
        touched=True,
    )
    return {bytes(processor_address): account}


def apply_counter_delta(current: int, delta: int, name: str) -> int:
    """Return ``current + delta`` checked against the 256-bit range.

    ``name`` labels the counter in the error, e.g. ``"slot"`` or ``"entity"``.
    """
    if delta == 0:
        return current
    new_value = current + delta
    if new_value > U256_MAX:
        raise CounterError(f"{name} counter overflow")
    if new_value < 0:
        raise CounterError(f"{name} counter underflow")
    return new_value


def charge_sender(original_info: AccountInfo, gas_cost: int) -> Account:
    """Bump the sender's nonce and subtract ``gas_cost`` from its balance.

    Both operations saturate: the nonce stays at the 64-bit maximum and the
    balance does not go below zero.
    """
    info = replace(
        original_info,
        nonce=min(original_info.nonce + 1, U64_MAX),
        balance=max(original_info.balance - gas_cost, 0),
    )
    return Account(info=info, original_info=original_info, storage={}, touched=True)