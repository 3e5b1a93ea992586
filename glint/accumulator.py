"""Staged effects of one entity-processor transaction before they are committed."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from glint.expiration import ExpirationIndex
from glint.gas import saturating_add


class ExpirationChangeKind(Enum):
    """Whether an expiration entry is added to or removed from the index."""

    INSERT = "insert"
    REMOVE = "remove"


@dataclass(frozen=True)
class ExpirationChange:
    """One pending change to the expiration index."""

    kind: ExpirationChangeKind
    block_number: int
    entity_key: bytes

    @classmethod
    def insert(cls, block_number: int, entity_key: bytes) -> ExpirationChange:
        """A change that schedules ``entity_key`` to expire at ``block_number``."""
        return cls(ExpirationChangeKind.INSERT, block_number, bytes(entity_key))

    @classmethod
    def remove(cls, block_number: int, entity_key: bytes) -> ExpirationChange:
        """A change that unschedules ``entity_key`` from ``block_number``."""
        return cls(ExpirationChangeKind.REMOVE, block_number, bytes(entity_key))


@dataclass
class CrudAccumulator:
    """Logs, gas, storage writes and counter deltas gathered for a transaction.

    Nothing here touches shared state until the transaction is known to fit
    its gas limit; then the expiration changes are applied in order.
    """

    logs: list[Any] = field(default_factory=list)
    gas_used: int = 0
    exp_changes: list[ExpirationChange] = field(default_factory=list)
    state_changes: dict[bytes, int] = field(default_factory=dict)
    slot_counter_delta: int = 0
    entity_counter_delta: int = 0

    def add_gas(self, amount: int) -> int:
        """Add ``amount`` to the gas used, saturating at the 64-bit maximum."""
        self.gas_used = saturating_add(self.gas_used, amount)
        return self.gas_used

    def apply_expiration_changes(self, index: ExpirationIndex) -> None:
        """Apply the staged expiration changes to ``index`` in the order staged."""
        for change in self.exp_changes:
            if change.kind is ExpirationChangeKind.INSERT:
                index.insert(change.block_number, change.entity_key)
            else:
                index.remove(change.block_number, change.entity_key)