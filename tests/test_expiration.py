import pytest

from glint.expiration import ExpirationIndex


def key(byte: int) -> bytes:
    return bytes([byte]) * 32


def test_insert_and_get():
    idx = ExpirationIndex()
    k = key(0x01)
    idx.insert(100, k)
    expired = idx.get_expired(100)
    assert k in expired
    assert len(expired) == 1


def test_get_nonexistent_block_returns_none():
    idx = ExpirationIndex()
    assert idx.get_expired(999) is None


def test_drain_returns_sorted_keys():
    idx = ExpirationIndex()
    key_a, key_b, key_c = key(0xAA), key(0x11), key(0x55)
    idx.insert(100, key_a)
    idx.insert(100, key_b)
    idx.insert(100, key_c)
    assert idx.drain_block(100) == [key_b, key_c, key_a]


def test_drain_removes_block_entry():
    idx = ExpirationIndex()
    idx.insert(100, key(0x01))
    idx.drain_block(100)
    assert idx.get_expired(100) is None


def test_drain_missing_block_returns_empty():
    idx = ExpirationIndex()
    assert idx.drain_block(42) == []
    assert idx.last_drained_block() == 42


def test_remove_specific_entity():
    idx = ExpirationIndex()
    key_a, key_b = key(0x01), key(0x02)
    idx.insert(100, key_a)
    idx.insert(100, key_b)
    idx.remove(100, key_a)
    remaining = idx.get_expired(100)
    assert key_b in remaining
    assert key_a not in remaining
    assert len(remaining) == 1


def test_remove_last_entity_removes_block_entry():
    idx = ExpirationIndex()
    k = key(0x01)
    idx.insert(100, k)
    idx.remove(100, k)
    assert idx.get_expired(100) is None


def test_remove_from_missing_block_is_harmless():
    idx = ExpirationIndex()
    idx.insert(100, key(0x01))
    idx.remove(200, key(0x01))
    assert idx.get_expired(100) == [key(0x01)]


def test_clear_range_removes_blocks_in_range():
    idx = ExpirationIndex()
    idx.insert(100, key(0x01))
    idx.insert(101, key(0x02))
    idx.insert(102, key(0x03))
    idx.insert(200, key(0x04))
    idx.clear_range(100, 102)
    assert idx.get_expired(100) is None
    assert idx.get_expired(101) is None
    assert idx.get_expired(102) is None
    assert len(idx.get_expired(200)) == 1


def test_last_drained_block_tracks_highest_drain():
    idx = ExpirationIndex()
    assert idx.last_drained_block() is None
    idx.insert(100, key(0x01))
    idx.drain_block(100)
    assert idx.last_drained_block() == 100
    idx.insert(200, key(0x02))
    idx.drain_block(200)
    assert idx.last_drained_block() == 200


def test_reset_drained_clears_tracking():
    idx = ExpirationIndex()
    idx.insert(100, key(0x01))
    idx.drain_block(100)
    idx.reset_last_drained()
    assert idx.last_drained_block() is None


def test_rebuild_from_logs():
    idx = ExpirationIndex()
    logs = [(key(0x01), 100), (key(0x02), 200), (key(0x03), 100)]
    idx.rebuild_from_logs(iter(logs))
    assert len(idx.get_expired(100)) == 2
    assert len(idx.get_expired(200)) == 1
    assert idx.get_expired(300) is None


def test_reorg_reset_preserves_future_expirations():
    idx = ExpirationIndex()
    key_103, key_104, key_105 = key(0x03), key(0x04), key(0x05)
    idx.insert(103, key_103)
    idx.insert(104, key_104)
    idx.insert(105, key_105)

    idx.drain_block(100)
    idx.drain_block(101)
    idx.drain_block(102)
    assert idx.drain_block(103) == [key_103]
    assert idx.last_drained_block() == 103

    idx.reset_last_drained()
    assert idx.last_drained_block() is None

    assert key_104 in idx.get_expired(104)
    assert key_105 in idx.get_expired(105)
    assert idx.get_expired(103) is None

    assert idx.drain_block(104) == [key_104]


def test_iter_entries_yields_all_blocks():
    idx = ExpirationIndex()
    idx.insert(100, key(0x01))
    idx.insert(100, key(0x02))
    idx.insert(200, key(0x03))
    entries = sorted((block, len(keys)) for block, keys in idx.iter_entries())
    assert entries == [(100, 2), (200, 1)]


@pytest.mark.parametrize("blocks", [[100], [100, 200], [100, 200, 300]])
def test_remove_entities_removes_everywhere(blocks):
    idx = ExpirationIndex()
    target, other = key(0x07), key(0x08)
    for block in blocks:
        idx.insert(block, target)
    idx.insert(blocks[0], other)
    idx.remove_entities({target})
    assert idx.get_expired(blocks[0]) == [other]
    for block in blocks[1:]:
        assert idx.get_expired(block) is None