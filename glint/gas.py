"""Gas accounting for entity-processor transactions and per-block expiry draining."""

from __future__ import annotations

from glint.expiration import ExpirationIndex

U64_MAX = (1 << 64) - 1
U128_MAX = (1 << 128) - 1
U256_MAX = (1 << 256) - 1

GLINT_GAS_PER_CREATE = 50_000
GLINT_GAS_PER_UPDATE = 40_000
GLINT_GAS_PER_DELETE = 10_000
GLINT_GAS_PER_EXTEND = 10_000
GLINT_GAS_PER_CHANGE_OWNER = 10_000
GAS_OPERATOR_WRITE = 20_000
GAS_SLOAD = 2_100

INTRINSIC_GAS = 21_000
GAS_PER_DATA_BYTE = 16
GAS_PER_BTL_BLOCK = 10


def _check_u64(value: int, what: str) -> int:
    if not 0 <= value <= U64_MAX:
        raise ValueError(f"{what} out of 64-bit unsigned range: {value}")
    return value


def saturating_add(a: int, b: int) -> int:
    """Add two 64-bit unsigned values, clamping at the 64-bit maximum."""
    _check_u64(a, "left operand")
    _check_u64(b, "right operand")
    return min(a + b, U64_MAX)


def saturating_mul(a: int, b: int) -> int:
    """Multiply two 64-bit unsigned values, clamping at the 64-bit maximum."""
    _check_u64(a, "left operand")
    _check_u64(b, "right operand")
    return min(a * b, U64_MAX)


def intrinsic_gas(calldata_len: int) -> int:
    """Base cost of a processor transaction: a flat fee plus a per-byte charge."""
    if calldata_len < 0:
        raise ValueError(f"calldata length must not be negative: {calldata_len}")
    return saturating_add(INTRINSIC_GAS, saturating_mul(calldata_len, GAS_PER_DATA_BYTE))


def compute_gas_cost(
    gas_used: int, base_fee: int, max_fee: int, priority_fee: int | None = None
) -> int:
    """Return ``gas_used * min(max_fee, base_fee + priority_fee)``.

    The fee sum saturates at 128 bits and the product at 256 bits. A missing
    priority fee counts as zero.
    """
    for value, what in (
        (gas_used, "gas_used"),
        (base_fee, "base_fee"),
        (max_fee, "max_fee"),
    ):
        if value < 0:
            raise ValueError(f"{what} must not be negative: {value}")
    priority = 0 if priority_fee is None else priority_fee
    if priority < 0:
        raise ValueError(f"priority_fee must not be negative: {priority}")
    effective_price = min(max_fee, min(base_fee + priority, U128_MAX))
    return min(gas_used * effective_price, U256_MAX)


def housekeeping_drain(index: ExpirationIndex, current_block: int) -> list[bytes]:
    """Drain the keys expiring at ``current_block``.

    If the block is at or below the last drained block a reorg happened; only
    the drain cursor is reset, so pending future expirations stay in place.
    """
    last = index.last_drained_block()
    if last is not None and current_block <= last:
        index.reset_last_drained()
    return index.drain_block(current_block)