import pytest

from glint.accumulator import CrudAccumulator, ExpirationChange, ExpirationChangeKind
from glint.expiration import ExpirationIndex
from glint.gas import (
    GAS_PER_BTL_BLOCK,
    GAS_PER_DATA_BYTE,
    GLINT_GAS_PER_CREATE,
    U64_MAX,
    saturating_mul,
)

KEY_A = bytes([0x01]) * 32
KEY_B = bytes([0x02]) * 32


def test_gas_accumulation_saturates_instead_of_overflowing():
    acc = CrudAccumulator(gas_used=U64_MAX - 100)
    acc.add_gas(GLINT_GAS_PER_CREATE)
    acc.add_gas(saturating_mul(1000, GAS_PER_DATA_BYTE))
    acc.add_gas(saturating_mul(302_400, GAS_PER_BTL_BLOCK))
    assert acc.gas_used == U64_MAX


def test_add_gas_returns_running_total():
    acc = CrudAccumulator()
    first = acc.add_gas(GLINT_GAS_PER_CREATE)
    second = acc.add_gas(GLINT_GAS_PER_CREATE)
    assert first == GLINT_GAS_PER_CREATE
    assert second == acc.gas_used == 2 * GLINT_GAS_PER_CREATE


def test_add_gas_rejects_negative():
    acc = CrudAccumulator()
    with pytest.raises(ValueError):
        acc.add_gas(-1)


def test_new_accumulator_is_empty():
    acc = CrudAccumulator()
    assert acc.logs == []
    assert acc.exp_changes == []
    assert acc.state_changes == {}
    assert acc.gas_used == 0
    assert acc.slot_counter_delta == 0
    assert acc.entity_counter_delta == 0


def test_change_constructors_set_kind():
    ins = ExpirationChange.insert(100, KEY_A)
    rem = ExpirationChange.remove(100, KEY_A)
    assert ins.kind is ExpirationChangeKind.INSERT
    assert rem.kind is ExpirationChangeKind.REMOVE
    assert ins.entity_key == rem.entity_key == KEY_A


def test_apply_inserts_into_index():
    acc = CrudAccumulator()
    acc.exp_changes.append(ExpirationChange.insert(100, KEY_A))
    acc.exp_changes.append(ExpirationChange.insert(100, KEY_B))
    index = ExpirationIndex()
    acc.apply_expiration_changes(index)
    assert index.get_expired(100) == [KEY_A, KEY_B]


def test_apply_update_moves_expiration():
    index = ExpirationIndex()
    index.insert(100, KEY_A)
    acc = CrudAccumulator()
    acc.exp_changes.append(ExpirationChange.remove(100, KEY_A))
    acc.exp_changes.append(ExpirationChange.insert(200, KEY_A))
    acc.apply_expiration_changes(index)
    assert index.get_expired(100) is None
    assert index.get_expired(200) == [KEY_A]


def test_apply_respects_order():
    index = ExpirationIndex()
    acc = CrudAccumulator()
    acc.exp_changes.append(ExpirationChange.insert(100, KEY_A))
    acc.exp_changes.append(ExpirationChange.remove(100, KEY_A))
    acc.apply_expiration_changes(index)
    assert index.get_expired(100) is None