"""Client-side cache of read replies, and the read-only view serving them."""

from __future__ import annotations

import threading
import uuid
from collections import defaultdict
from typing import TYPE_CHECKING, Any

from django.core.cache.backends.locmem import LocMemCache

if TYPE_CHECKING:
    from collections.abc import Iterable

    from redisson.client.default import Client

MISSING = object()

# LocMemCache's own default when MAX_ENTRIES is unset.
DEFAULT_MAX_ENTRIES = 300


def _index_key(key: Any) -> str:
    if isinstance(key, bytes):
        return key.decode("utf-8", "surrogateescape")
    return str(key)


class LocalCache:
    """Reply cache shared by a client and its copies.

    Replies are stored in a Django ``LocMemCache`` under a digest of their
    argv and indexed by the Redis keys they read. ``invalidate`` drops every
    reply reading one of the given keys. Each invalidation bumps
    ``generation``; ``put`` ignores replies fetched under an older one, so a
    read racing a write cannot cache the value from before the write.
    """

    def __init__(self, max_entries: int = 0) -> None:
        self.max_entries = max_entries if max_entries > 0 else DEFAULT_MAX_ENTRIES
        self._store = LocMemCache(
            f"redisson-{uuid.uuid4().hex}",
            {"TIMEOUT": None, "OPTIONS": {"MAX_ENTRIES": self.max_entries}},
        )
        self._index: defaultdict[str, set[str]] = defaultdict(set)
        self._lock = threading.Lock()
        self._generation = 0

    @property
    def generation(self) -> int:
        return self._generation

    def get(self, entry: str) -> Any:
        """Cached reply of ``entry``, or ``MISSING``."""
        return self._store.get(entry, MISSING)

    def put(self, keys: Iterable[Any], entry: str, reply: Any, timeout: float, generation: int) -> None:
        with self._lock:
            if generation != self._generation:
                return
            # the store culls silently, so the index is rebuilt once it outgrows it
            if len(self._index) > 4 * self.max_entries:
                self._index.clear()
                self._store.clear()
            for key in keys:
                self._index[_index_key(key)].add(entry)
            self._store.set(entry, reply, timeout=timeout)

    def invalidate(self, keys: Iterable[Any]) -> None:
        with self._lock:
            self._generation += 1
            entries: set[str] = set()
            for key in keys:
                entries |= self._index.pop(_index_key(key), set())
            if entries:
                self._store.delete_many(list(entries))

    def clear(self) -> None:
        with self._lock:
            self._generation += 1
            self._index.clear()
            self._store.clear()


# Client methods whose commands are marked cacheable in the registry.
CACHEABLE_METHODS = frozenset(
    {
        # Bitmap
        "bit_count",
        "bit_pos",
        "bit_pos_span",
        "get_bit",
        # Generic
        "exists",
        "pttl",
        "ttl",
        "type",
        # Geo
        "geo_dist",
        "geo_hash",
        "geo_pos",
        "geo_radius",
        "geo_radius_by_member",
        "geo_search",
        "geo_search_location",
        # Hash
        "h_exists",
        "h_get",
        "h_get_all",
        "h_keys",
        "h_len",
        "h_m_get",
        "h_str_len",
        "h_vals",
        # List
        "l_index",
        "l_len",
        "l_pos",
        "l_range",
        # Set
        "s_card",
        "s_is_member",
        "s_m_is_member",
        "s_members",
        "s_members_set",
        # Sorted set
        "z_card",
        "z_count",
        "z_lex_count",
        "z_m_score",
        "z_range",
        "z_range_with_scores",
        "z_range_args",
        "z_range_args_with_scores",
        "z_range_by_lex",
        "z_range_by_score",
        "z_range_by_score_with_scores",
        "z_rank",
        "z_rank_with_score",
        "z_rev_range",
        "z_rev_range_with_scores",
        "z_rev_range_by_lex",
        "z_rev_range_by_score",
        "z_rev_range_by_score_with_scores",
        "z_rev_rank",
        "z_rev_rank_with_score",
        "z_score",
        # String
        "get",
        "get_range",
        "str_len",
    },
)


class CacheView:
    """Exposes only the cacheable reads of a client.

    Calls go to a client carrying the view's TTL, so their replies are kept in
    the client-side cache for that long. Staleness is bounded by the TTL only;
    writes through other clients do not invalidate cached replies.
    """

    def __init__(self, client: Client) -> None:
        self._client = client

    @property
    def ttl(self) -> Any:
        return self._client.ttl

    def __getattr__(self, name: str) -> Any:
        if name in CACHEABLE_METHODS:
            return getattr(self._client, name)
        msg = f"{type(self).__name__!r} has no cacheable command {name!r}"
        raise AttributeError(msg)

    def __dir__(self) -> list[str]:
        return sorted({*super().__dir__(), *CACHEABLE_METHODS})
