"""Bloom filter on a Redis bitmap.

The bitmap lives at ``{name}`` and the item counter at ``{name}:c``; the hash
tag keeps both in one cluster slot. Bit positions are derived client-side by
double hashing a 128-bit BLAKE2b digest of each item, and Lua scripts set or
test them atomically.
"""

from __future__ import annotations

import hashlib
import math
from typing import TYPE_CHECKING

from packaging.version import Version

from redisson.exceptions import ArgumentError, is_nil
from redisson.results import to_int

if TYPE_CHECKING:
    from collections.abc import Sequence

    from redisson.client.default import Client

READ_OPERATION_VERSION = "7.0.0"

# Largest bitmap Redis can hold.
MAX_BITS = 1 << 32

_ADD_MULTI = """
local k = tonumber(ARGV[1])
local added = 0
for i = 2, #ARGV, k do
    local fresh = 0
    for j = i, i + k - 1 do
        if redis.call('SETBIT', KEYS[1], ARGV[j], 1) == 0 then
            fresh = 1
        end
    end
    added = added + fresh
end
if added > 0 then
    redis.call('INCRBY', KEYS[2], added)
end
return added
"""

_EXISTS_MULTI = """
local k = tonumber(ARGV[1])
local found = {}
for i = 2, #ARGV, k do
    local hit = 1
    for j = i, i + k - 1 do
        if redis.call('GETBIT', KEYS[1], ARGV[j]) == 0 then
            hit = 0
            break
        end
    end
    found[#found + 1] = hit
end
return found
"""

_RESET = """
redis.call('DEL', KEYS[1])
redis.call('SET', KEYS[2], 0)
return 1
"""


def optimal_size(expected_items: int, fp_rate: float) -> tuple[int, int]:
    """Return the bitmap size in bits and the number of hashes per item."""
    if expected_items <= 0:
        msg = "expected_items must be positive"
        raise ArgumentError(msg)
    if not 0 < fp_rate < 1:
        msg = "fp_rate must be between 0 and 1"
        raise ArgumentError(msg)
    bits = math.ceil(-expected_items * math.log(fp_rate) / (math.log(2) ** 2))
    if bits > MAX_BITS:
        msg = f"bloom filter needs {bits} bits, more than a redis bitmap holds"
        raise ArgumentError(msg)
    hashes = max(1, round(bits / expected_items * math.log(2)))
    return bits, hashes


class BloomFilter:
    """Probabilistic set membership with a bounded false-positive rate.

    ``exists`` may answer True for an item never added, with probability
    about ``fp_rate`` while fewer than ``expected_items`` were added. It never
    answers False for an added item. ``count`` counts adds that set at least
    one new bit, so it can undercount.

    With ``enable_read_operation`` the lookups use ``EVALSHA_RO`` and can run
    on replicas; this needs Redis 7.
    """

    def __init__(
        self,
        client: Client,
        name: str,
        expected_items: int,
        fp_rate: float,
        *,
        enable_read_operation: bool = False,
    ) -> None:
        if enable_read_operation and client.version is not None and client.version < Version(READ_OPERATION_VERSION):
            msg = f"enable_read_operation needs redis >= {READ_OPERATION_VERSION}, server is {client.version}"
            raise ArgumentError(msg)
        self.name = name
        self.size, self.hashes = optimal_size(expected_items, fp_rate)
        self.enable_read_operation = enable_read_operation
        self._client = client
        self._keys = [f"{{{name}}}", f"{{{name}}}:c"]
        self._add = client.create_script_with_name("bloom_add", _ADD_MULTI)
        self._exists = client.create_script_with_name("bloom_exists", _EXISTS_MULTI)
        self._reset = client.create_script_with_name("bloom_reset", _RESET)

    def positions(self, item: str | bytes) -> list[int]:
        """Bit positions of ``item``."""
        data = item if isinstance(item, bytes) else item.encode()
        digest = hashlib.blake2b(data, digest_size=16).digest()
        h1 = int.from_bytes(digest[:8], "little")
        h2 = int.from_bytes(digest[8:], "little")
        return [(h1 + i * h2) % self.size for i in range(self.hashes)]

    def _argv(self, items: Sequence[str | bytes]) -> list[int]:
        argv = [self.hashes]
        for item in items:
            argv.extend(self.positions(item))
        return argv

    def add(self, item: str | bytes) -> None:
        self.add_multi([item])

    def add_multi(self, items: Sequence[str | bytes]) -> None:
        """Add several items in one script call.

        Large batches run as a single script and block the server meanwhile.
        """
        if not items:
            return
        self._add.run(self._keys, *self._argv(items)).result()

    def exists(self, item: str | bytes) -> bool:
        return self.exists_multi([item])[0]

    def exists_multi(self, items: Sequence[str | bytes]) -> list[bool]:
        if not items:
            return []
        argv = self._argv(items)
        if self.enable_read_operation:
            result = self._exists.run_ro(self._keys, *argv)
        else:
            result = self._exists.run(self._keys, *argv)
        return result.bool_slice()

    def reset(self) -> None:
        """Clear every item, keeping the filter with a zero count."""
        self._reset.run(self._keys).result()

    def delete(self) -> None:
        self._client.delete(*self._keys).result()

    def count(self) -> int:
        result = self._client.get(self._keys[1])
        if is_nil(result.err):
            return 0
        return to_int(result.result())
