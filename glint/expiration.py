"""In-memory index of entity expirations keyed by block number."""

from __future__ import annotations

from collections.abc import Iterable, Iterator


class ExpirationIndex:
    """Maps block numbers to the set of entity keys that expire at that block.

    The index is not persisted on its own. It is rebuilt from event logs on a
    cold start, or restored from a checkpoint.
    """

    def __init__(self) -> None:
        self._index: dict[int, set[bytes]] = {}
        self._last_drained: int | None = None

    def insert(self, block_number: int, entity_key: bytes) -> None:
        """Record that ``entity_key`` expires at ``block_number``."""
        self._index.setdefault(block_number, set()).add(bytes(entity_key))

    def remove(self, block_number: int, entity_key: bytes) -> None:
        """Forget one expiration; drops the block entry once it is empty."""
        keys = self._index.get(block_number)
        if keys is None:
            return
        keys.discard(bytes(entity_key))
        if not keys:
            del self._index[block_number]

    def get_expired(self, block_number: int) -> list[bytes] | None:
        """Return the keys expiring at ``block_number`` in ascending order, or None."""
        keys = self._index.get(block_number)
        if keys is None:
            return None
        return sorted(keys)

    def drain_block(self, block_number: int) -> list[bytes]:
        """Remove and return the keys expiring at ``block_number``, sorted."""
        self._last_drained = block_number
        return sorted(self._index.pop(block_number, ()))

    def last_drained_block(self) -> int | None:
        """Return the block most recently drained, if any."""
        return self._last_drained

    def reset_last_drained(self) -> None:
        """Forget the drain cursor without touching pending expirations."""
        self._last_drained = None

    def clear_range(self, start: int, end: int) -> None:
        """Drop every block entry in the inclusive range ``start..=end``."""
        self._index = {
            block: keys
            for block, keys in self._index.items()
            if not start <= block <= end
        }

    def rebuild_from_logs(self, logs: Iterable[tuple[bytes, int]]) -> None:
        """Repopulate the index from ``(entity_key, expires_at_block)`` pairs.

        Callers must pass only live entities with their latest expiration.
        """
        for entity_key, expires_at_block in logs:
            self.insert(expires_at_block, entity_key)

    def remove_entities(self, keys: Iterable[bytes]) -> None:
        """Remove every occurrence of the given keys from every block."""
        doomed = {bytes(k) for k in keys}
        remaining: dict[int, set[bytes]] = {}
        for block, block_keys in self._index.items():
            kept = block_keys - doomed
            if kept:
                remaining[block] = kept
        self._index = remaining

    def iter_entries(self) -> Iterator[tuple[int, list[bytes]]]:
        """Yield ``(block_number, sorted_keys)`` for each block in the index."""
        for block, keys in list(self._index.items()):
            yield block, sorted(keys)