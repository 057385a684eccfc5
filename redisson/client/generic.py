from __future__ import annotations

from typing import TYPE_CHECKING, Any

from redisson import args as _args
from redisson import commands as c
from redisson.client.base import DEFAULT_NODE
from redisson.exceptions import ArgumentError
from redisson.results import (
    BoolCmd,
    DurationCmd,
    IntCmd,
    ScanCmd,
    SliceCmd,
    StatusCmd,
    StringCmd,
    StringSliceCmd,
)

if TYPE_CHECKING:
    from datetime import datetime

    from redisson.commands import Command
    from redisson.types import Duration, KeyT, Sort


class GenericCommandsMixin:
    """Keyspace operations that apply to every value type."""

    # Type hints for base class attributes
    _run: Any
    _block_ms: Any

    def copy(self, source: KeyT, destination: KeyT, db: int = 0, replace: bool = False) -> IntCmd:
        argv: list[Any] = [source, destination, "DB", db]
        if replace:
            argv.append("REPLACE")
        return self._run(c.COPY, argv, IntCmd, keys=[source, destination])

    def delete(self, *keys: KeyT) -> IntCmd:
        return self._run(c.DEL, keys, IntCmd, keys=keys)

    def dump(self, key: KeyT) -> StringCmd:
        return self._run(c.DUMP, [key], StringCmd)

    def exists(self, *keys: KeyT) -> IntCmd:
        """Number of the given keys that exist.

        Several keys are observed separately from the single-key form.
        """
        if len(keys) > 1:
            return self._run(c.EXISTS_MULTIPLE_KEYS, keys, IntCmd, keys=keys)
        return self._run(c.EXISTS, keys, IntCmd)

    # =========================================================================
    # Expiry
    # =========================================================================

    def _expire(self, command: Command, key: KeyT, expiration: Duration, *flags: str) -> BoolCmd:
        return self._run(command, [key, _args.format_sec(expiration), *flags], BoolCmd)

    def expire(self, key: KeyT, expiration: Duration) -> BoolCmd:
        return self._expire(c.EXPIRE, key, expiration)

    def expire_nx(self, key: KeyT, expiration: Duration) -> BoolCmd:
        """Set the expiry only when the key has none."""
        return self._expire(c.EXPIRE_NX, key, expiration, "NX")

    def expire_xx(self, key: KeyT, expiration: Duration) -> BoolCmd:
        """Set the expiry only when the key already has one."""
        return self._expire(c.EXPIRE_XX, key, expiration, "XX")

    def expire_gt(self, key: KeyT, expiration: Duration) -> BoolCmd:
        return self._expire(c.EXPIRE_GT, key, expiration, "GT")

    def expire_lt(self, key: KeyT, expiration: Duration) -> BoolCmd:
        return self._expire(c.EXPIRE_LT, key, expiration, "LT")

    def expire_at(self, key: KeyT, at: datetime) -> BoolCmd:
        return self._run(c.EXPIRE_AT, [key, _args.unix_seconds(at)], BoolCmd)

    def expire_time(self, key: KeyT) -> DurationCmd:
        """Absolute expiry as time since the epoch, or the -1/-2 sentinels."""
        return self._run(c.EXPIRE_TIME, [key], DurationCmd, precision="s")

    def persist(self, key: KeyT) -> BoolCmd:
        return self._run(c.PERSIST, [key], BoolCmd)

    def p_expire(self, key: KeyT, expiration: Duration) -> BoolCmd:
        return self._run(c.P_EXPIRE, [key, _args.format_ms(expiration)], BoolCmd)

    def p_expire_at(self, key: KeyT, at: datetime) -> BoolCmd:
        return self._run(c.P_EXPIRE_AT, [key, _args.unix_ms(at)], BoolCmd)

    def p_expire_time(self, key: KeyT) -> DurationCmd:
        return self._run(c.P_EXPIRE_TIME, [key], DurationCmd, precision="ms")

    def ttl(self, key: KeyT) -> DurationCmd:
        """Remaining time to live.

        ``timedelta(seconds=-1)`` means no expiry and ``-2`` a missing key.
        """
        return self._run(c.TTL, [key], DurationCmd, precision="s")

    def pttl(self, key: KeyT) -> DurationCmd:
        return self._run(c.PTTL, [key], DurationCmd, precision="ms")

    # =========================================================================
    # Keyspace
    # =========================================================================

    def keys(self, pattern: str) -> StringSliceCmd:
        return self._run(c.KEYS, [pattern], StringSliceCmd)

    def migrate(self, host: str, port: int, key: KeyT, db: int, timeout: Duration) -> StatusCmd:
        return self._run(c.MIGRATE, [host, port, key, db, _args.format_ms(timeout)], StatusCmd)

    def move(self, key: KeyT, db: int) -> BoolCmd:
        return self._run(c.MOVE, [key, db], BoolCmd)

    def object_encoding(self, key: KeyT) -> StringCmd:
        return self._run(c.OBJECT_ENCODING, [key], StringCmd)

    def object_idle_time(self, key: KeyT) -> DurationCmd:
        return self._run(c.OBJECT_IDLE_TIME, [key], DurationCmd, precision="s")

    def object_ref_count(self, key: KeyT) -> IntCmd:
        return self._run(c.OBJECT_REF_COUNT, [key], IntCmd)

    def random_key(self) -> StringCmd:
        return self._run(c.RANDOM_KEY, [], StringCmd, target=DEFAULT_NODE)

    def rename(self, key: KeyT, new_key: KeyT) -> StatusCmd:
        return self._run(c.RENAME, [key, new_key], StatusCmd, keys=[key, new_key])

    def rename_nx(self, key: KeyT, new_key: KeyT) -> BoolCmd:
        return self._run(c.RENAME_NX, [key, new_key], BoolCmd, keys=[key, new_key])

    def restore(self, key: KeyT, ttl: Duration, value: bytes) -> StatusCmd:
        return self._run(c.RESTORE, [key, _args.format_ms(ttl), value], StatusCmd)

    def restore_replace(self, key: KeyT, ttl: Duration, value: bytes) -> StatusCmd:
        return self._run(c.RESTORE_REPLACE, [key, _args.format_ms(ttl), value, "REPLACE"], StatusCmd)

    def scan(self, cursor: int, match: str = "", count: int = 0) -> ScanCmd:
        """One ``SCAN`` page. On a cluster this scans a single node."""
        return self._run(c.SCAN, [cursor, *_scan_args(match, count)], ScanCmd, target=DEFAULT_NODE)

    def scan_type(self, cursor: int, match: str = "", count: int = 0, key_type: str = "") -> ScanCmd:
        argv: list[Any] = [cursor, *_scan_args(match, count)]
        if key_type:
            argv.extend(["TYPE", key_type])
        return self._run(c.SCAN_TYPE, argv, ScanCmd, target=DEFAULT_NODE)

    def touch(self, *keys: KeyT) -> IntCmd:
        return self._run(c.TOUCH, keys, IntCmd, keys=keys)

    def type(self, key: KeyT) -> StatusCmd:
        return self._run(c.TYPE, [key], StatusCmd)

    def unlink(self, *keys: KeyT) -> IntCmd:
        return self._run(c.UNLINK, keys, IntCmd, keys=keys)

    def wait(self, num_replicas: int, timeout: Duration) -> IntCmd:
        """Block until ``num_replicas`` acknowledged the previous writes."""
        return self._run(c.WAIT, [num_replicas, self._block_ms(timeout)], IntCmd, target=DEFAULT_NODE)

    # =========================================================================
    # Sort
    # =========================================================================

    def sort(self, key: KeyT, sort: Sort) -> StringSliceCmd:
        return self._run(c.SORT, [key, *_sort_args(sort)], StringSliceCmd)

    def sort_values(self, key: KeyT, sort: Sort) -> SliceCmd:
        """Like ``sort``, but ``GET`` patterns matching no key yield None."""
        return self._run(c.SORT, [key, *_sort_args(sort)], SliceCmd)

    def sort_ro(self, key: KeyT, sort: Sort) -> StringSliceCmd:
        return self._run(c.SORT_RO, [key, *_sort_args(sort)], StringSliceCmd)

    def sort_store(self, key: KeyT, store: KeyT, sort: Sort) -> IntCmd:
        return self._run(c.SORT_STORE, [key, *_sort_args(sort), "STORE", store], IntCmd, keys=[key, store])


def _scan_args(match: str, count: int) -> list[Any]:
    argv: list[Any] = []
    if match:
        argv.extend(["MATCH", match])
    if count > 0:
        argv.extend(["COUNT", count])
    return argv


def _sort_args(sort: Sort) -> list[Any]:
    argv: list[Any] = []
    if sort.by:
        argv.extend(["BY", sort.by])
    if sort.offset != 0 or sort.count != 0:
        argv.extend(["LIMIT", sort.offset, sort.count])
    for pattern in sort.get:
        argv.extend(["GET", pattern])
    if sort.order:
        order = sort.order.upper()
        if order not in ("ASC", "DESC"):
            msg = f"SORT order must be ASC or DESC, got {sort.order!r}"
            raise ArgumentError(msg)
        argv.append(order)
    if sort.alpha:
        argv.append("ALPHA")
    return argv
