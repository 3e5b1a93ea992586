# glint

The core rules of an ephemeral entity layer, in plain Python with no
dependencies beyond the standard library. An entity carries an expiration
block; when the chain reaches that block the entity is dropped. This
package holds the bookkeeping for that, the gas and state arithmetic
around entity transactions, and a few helpers for a query sidecar.

## Modules

- `glint.expiration.ExpirationIndex` maps block numbers to the entity keys
  (bytes) that expire there.
  - `insert(block, key)` and `remove(block, key)`. Removing the last key of
    a block drops that block's entry.
  - `get_expired(block)` returns the keys, sorted, or `None`.
  - `drain_block(block)` removes and returns the keys in ascending order,
    and records the block as the last drained one.
  - `last_drained_block()` returns that block. `reset_last_drained()`
    forgets it and leaves pending expirations in place.
  - `clear_range(start, end)` drops blocks in the range, both ends included.
  - `rebuild_from_logs(pairs)` takes `(entity_key, expires_at_block)` pairs.
  - `remove_entities(keys)` removes keys from every block.
  - `iter_entries()` yields `(block, sorted_keys)`.
- `glint.gas` holds the gas constants and arithmetic:
  - `saturating_add` and `saturating_mul`. Both work on 64-bit unsigned
    values and clamp at the maximum.
  - `intrinsic_gas(calldata_len)` is 21,000 plus 16 per calldata byte.
  - `compute_gas_cost(gas_used, base_fee, max_fee, priority_fee=None)`
    charges at `min(max_fee, base_fee + priority_fee)`.
  - `housekeeping_drain(index, block)` drains a block. If the block is at or
    below the last drained one, a reorg happened, so it first resets the
    drain cursor.
- `glint.state` holds the records for accounts and storage:
  - `StorageSlot`, `AccountInfo` and `Account`.
  - `build_processor_state(changes, processor_address)` builds the
    processor account. Its nonce is 1, and every slot is marked as changed,
    including slots cleared to zero.
  - `apply_counter_delta(current, delta, name)` is checked against 256 bits
    and raises `CounterError` on overflow or underflow.
  - `charge_sender(info, gas_cost)` adds one to the nonce and takes the gas
    cost from the balance. Both saturate.
- `glint.crud_rules`:
  - `StringAnnotation`, `NumericAnnotation` and `LogAnnotations`.
  - `authorize_mutation(sender, owner, operator)` allows the owner or the
    operator.
  - `annotation_gas_bytes` counts the UTF-8 bytes of each key and value,
    with 8 bytes for each numeric value.
  - `unzip_annotations` splits annotations into the parallel lists used in
    logs.
- `glint.rlp` decodes RLP:
  - `decode_header(data, offset)` and `skip_item(data, offset)`. Malformed
    or non-canonical input raises `RlpError`.
  - `decode_raw_slices(calldata)` returns a `DecodedSlices`. It holds one
    `RawContentSlices` for each create and each update. Each carries the
    encoded content type, payload, string annotations and numeric
    annotations.
- `glint.accumulator.CrudAccumulator` collects the logs, gas, storage
  writes, counter deltas and `ExpirationChange`s of one transaction.
  - `add_gas` saturates.
  - `apply_expiration_changes(index)` applies the staged changes in order.
- Sidecar helpers:
  - `glint.cli.parse_args(argv)` parses the `run` and `db rebuild|status|prune`
    options, with their defaults. It only parses; it runs nothing.
  - `glint.health.route_status(path, ready)` gives the status for a path.
    `glint.health.HealthServer(port, ready)` serves `/health` and `/ready`
    from a background thread. Here `ready` is a `threading.Event`.
  - `glint.ipc_client` handles the subscribe and handshake exchange over a
    Unix socket: `encode_subscribe`, `decode_handshake` and
    `connect_and_subscribe`.
  - `glint.query.validate_query` accepts only read-only SQL of at most
    16,384 UTF-8 bytes. Anything else raises `QueryRejected`, which carries
    a `kind`.

## Examples

```python
from glint.expiration import ExpirationIndex
from glint.gas import housekeeping_drain

index = ExpirationIndex()
index.insert(100, b"\xaa" * 32)
index.insert(100, b"\x11" * 32)

assert housekeeping_drain(index, 100) == [b"\x11" * 32, b"\xaa" * 32]
assert index.last_drained_block() == 100
```

```python
from glint.ipc_client import decode_handshake, encode_subscribe

assert encode_subscribe(5) == b"\x01" + (5).to_bytes(8, "little")
hs = decode_handshake(b"\x01" + (10).to_bytes(8, "little") + (20).to_bytes(8, "little"))
assert (hs.oldest_block, hs.tip_block) == (10, 20)
```

```python
from glint.query import QueryRejected, validate_query

validate_query("SELECT * FROM entities")
try:
    validate_query("DELETE FROM entities")
except QueryRejected as exc:
    print(exc.kind, exc)
```

```python
import threading
import urllib.request

from glint.health import HealthServer, route_status

assert route_status("/ready", ready=False) == 503

ready = threading.Event()
ready.set()
with HealthServer(0, ready) as server:
    url = f"http://127.0.0.1:{server.port}/ready"
    assert urllib.request.urlopen(url).status == 200
```

## What it does not do

- The expiration index lives only in memory. Nothing here saves it to disk
  or loads it back.
- There is no block executor. The gas, state, RLP and accumulator pieces
  are the rules such an executor applies. Nothing here reads chain state
  or runs transactions.
- There is no query engine and no query server. `glint.query` only decides
  whether a query may be run.
- There is no sidecar program. `glint.cli` parses its options, but no
  command is installed and nothing acts on them.

## Tests

The tests use pytest, listed under the `test` extra:

```
pip install -e .[test]
pytest
```