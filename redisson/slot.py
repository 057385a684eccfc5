"""Redis cluster hash slot computation."""

from __future__ import annotations

from binascii import crc_hqx
from collections import defaultdict

REDIS_CLUSTER_HASH_SLOTS = 16384


def _encode(key: str | bytes) -> bytes:
    if isinstance(key, bytes):
        return key
    return key.encode("utf-8", "surrogateescape")


def slot(key: str | bytes) -> int:
    """Return the cluster hash slot of ``key``.

    Only the first ``{...}`` with a non-empty body is treated as a hash tag.
    A ``}`` before the first ``{`` never anchors hashing.
    """
    k = _encode(key)
    start = k.find(b"{")
    if start > -1:
        end = k.find(b"}", start + 1)
        if end > start + 1:
            k = k[start + 1 : end]
    return crc_hqx(k, 0) % REDIS_CLUSTER_HASH_SLOTS


def group_by_slot(keys: list[str]) -> dict[int, list[int]]:
    """Map each slot to the indexes of ``keys`` hashing to it, in input order."""
    groups: dict[int, list[int]] = defaultdict(list)
    for i, key in enumerate(keys):
        groups[slot(key)].append(i)
    return dict(groups)
