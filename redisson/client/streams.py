from __future__ import annotations

from typing import TYPE_CHECKING, Any

from redisson import args as _args
from redisson import commands as c
from redisson.exceptions import ArgumentError
from redisson.results import (
    IntCmd,
    StatusCmd,
    StringCmd,
    StringSliceCmd,
    XAutoClaimCmd,
    XAutoClaimJustIDCmd,
    XInfoConsumersCmd,
    XInfoGroupsCmd,
    XInfoStreamCmd,
    XInfoStreamFullCmd,
    XMessageSliceCmd,
    XPendingCmd,
    XPendingExtCmd,
    XStreamSliceCmd,
)
from redisson.types import XReadArgs

if TYPE_CHECKING:
    from redisson.types import (
        XAddArgs,
        XAutoClaimArgs,
        XClaimArgs,
        XPendingExtArgs,
        XReadGroupArgs,
    )


def _stream_keys(streams: list[str]) -> list[str]:
    if len(streams) % 2:
        msg = "streams must list every stream key followed by one id per key"
        raise ArgumentError(msg)
    return streams[: len(streams) // 2]


class StreamCommandsMixin:
    """Redis stream operations."""

    # Type hints for base class attributes
    _run: Any
    _block_ms: Any

    def x_ack(self, stream: str, group: str, *ids: str) -> IntCmd:
        return self._run(c.X_ACK, [stream, group, *ids], IntCmd)

    def x_add(self, a: XAddArgs) -> StringCmd:
        """Append an entry; ``val`` is the entry id.

        The trimming strategy is ``max_len`` or ``min_id``, with ``approx``
        adding ``~``; ``limit`` needs ``approx``.
        """
        if a.max_len and a.min_id:
            msg = "XADD takes MAXLEN or MINID, not both"
            raise ArgumentError(msg)
        if a.limit and not a.approx:
            msg = "XADD LIMIT requires approximate trimming"
            raise ArgumentError(msg)

        command = c.X_ADD
        argv: list[Any] = [a.stream]
        if a.no_mk_stream:
            argv.append("NOMKSTREAM")
            command = c.X_ADD_NO_MK_STREAM
        if a.max_len > 0:
            argv.extend(["MAXLEN", "~" if a.approx else "=", a.max_len])
            command = c.X_ADD_MAX_LEN
        elif a.min_id:
            argv.extend(["MINID", "~" if a.approx else "=", a.min_id])
            command = c.X_ADD_MIN_ID
        if a.limit > 0:
            argv.extend(["LIMIT", a.limit])
            command = c.X_ADD_LIMIT
        argv.append(a.id or "*")
        argv.extend(_args.flatten(a.values))
        return self._run(command, argv, StringCmd)

    def x_auto_claim(self, a: XAutoClaimArgs) -> XAutoClaimCmd:
        """``val`` is ``(messages, next_start)``."""
        return self._run(c.X_AUTO_CLAIM, _auto_claim_args(a), XAutoClaimCmd)

    def x_auto_claim_just_id(self, a: XAutoClaimArgs) -> XAutoClaimJustIDCmd:
        return self._run(c.X_AUTO_CLAIM_JUST_ID, [*_auto_claim_args(a), "JUSTID"], XAutoClaimJustIDCmd)

    def x_claim(self, a: XClaimArgs) -> XMessageSliceCmd:
        return self._run(c.X_CLAIM, _claim_args(a), XMessageSliceCmd)

    def x_claim_just_id(self, a: XClaimArgs) -> StringSliceCmd:
        return self._run(c.X_CLAIM_JUST_ID, [*_claim_args(a), "JUSTID"], StringSliceCmd)

    def x_del(self, stream: str, *ids: str) -> IntCmd:
        return self._run(c.X_DEL, [stream, *ids], IntCmd)

    # =========================================================================
    # Consumer groups
    # =========================================================================

    def x_group_create(self, stream: str, group: str, start: str) -> StatusCmd:
        return self._run(c.X_GROUP_CREATE, [stream, group, start], StatusCmd)

    def x_group_create_mk_stream(self, stream: str, group: str, start: str) -> StatusCmd:
        return self._run(c.X_GROUP_CREATE_MK_STREAM, [stream, group, start, "MKSTREAM"], StatusCmd)

    def x_group_create_consumer(self, stream: str, group: str, consumer: str) -> IntCmd:
        return self._run(c.X_GROUP_CREATE_CONSUMER, [stream, group, consumer], IntCmd)

    def x_group_del_consumer(self, stream: str, group: str, consumer: str) -> IntCmd:
        return self._run(c.X_GROUP_DEL_CONSUMER, [stream, group, consumer], IntCmd)

    def x_group_destroy(self, stream: str, group: str) -> IntCmd:
        return self._run(c.X_GROUP_DESTROY, [stream, group], IntCmd)

    def x_group_set_id(self, stream: str, group: str, start: str) -> StatusCmd:
        return self._run(c.X_GROUP_SET_ID, [stream, group, start], StatusCmd)

    # =========================================================================
    # Introspection
    # =========================================================================

    def x_info_consumers(self, key: str, group: str) -> XInfoConsumersCmd:
        return self._run(c.X_INFO_CONSUMERS, [key, group], XInfoConsumersCmd)

    def x_info_groups(self, key: str) -> XInfoGroupsCmd:
        return self._run(c.X_INFO_GROUPS, [key], XInfoGroupsCmd)

    def x_info_stream(self, key: str) -> XInfoStreamCmd:
        return self._run(c.X_INFO_STREAM, [key], XInfoStreamCmd)

    def x_info_stream_full(self, key: str, count: int = 0) -> XInfoStreamFullCmd:
        argv: list[Any] = [key, "FULL"]
        if count > 0:
            argv.extend(["COUNT", count])
        return self._run(c.X_INFO_STREAM_FULL, argv, XInfoStreamFullCmd)

    def x_len(self, stream: str) -> IntCmd:
        return self._run(c.X_LEN, [stream], IntCmd)

    def x_pending(self, stream: str, group: str) -> XPendingCmd:
        return self._run(c.X_PENDING, [stream, group], XPendingCmd)

    def x_pending_ext(self, a: XPendingExtArgs) -> XPendingExtCmd:
        argv: list[Any] = [a.stream, a.group]
        if _args.is_positive(a.idle):
            argv.extend(["IDLE", _args.format_ms(a.idle)])
        argv.extend([a.start, a.end, a.count])
        if a.consumer:
            argv.append(a.consumer)
        return self._run(c.X_PENDING_EXT, argv, XPendingExtCmd)

    # =========================================================================
    # Reads
    # =========================================================================

    def x_range(self, stream: str, start: str, stop: str) -> XMessageSliceCmd:
        return self._run(c.X_RANGE, [stream, start, stop], XMessageSliceCmd)

    def x_range_n(self, stream: str, start: str, stop: str, count: int) -> XMessageSliceCmd:
        return self._run(c.X_RANGE_N, [stream, start, stop, "COUNT", count], XMessageSliceCmd)

    def x_rev_range(self, stream: str, start: str, stop: str) -> XMessageSliceCmd:
        return self._run(c.X_REV_RANGE, [stream, start, stop], XMessageSliceCmd)

    def x_rev_range_n(self, stream: str, start: str, stop: str, count: int) -> XMessageSliceCmd:
        return self._run(c.X_REV_RANGE_N, [stream, start, stop, "COUNT", count], XMessageSliceCmd)

    def x_read(self, a: XReadArgs) -> XStreamSliceCmd:
        """``XREAD``; a set ``block`` waits, bounded by the ambient deadline."""
        keys = _stream_keys(a.streams)
        argv: list[Any] = []
        if a.count > 0:
            argv.extend(["COUNT", a.count])
        if a.block is not None:
            argv.extend(["BLOCK", self._block_ms(a.block)])
        argv.extend(["STREAMS", *a.streams])
        return self._run(c.X_READ, argv, XStreamSliceCmd, keys=keys)

    def x_read_streams(self, *streams: str) -> XStreamSliceCmd:
        return self.x_read(XReadArgs(streams=list(streams)))

    def x_read_group(self, a: XReadGroupArgs) -> XStreamSliceCmd:
        keys = _stream_keys(a.streams)
        argv: list[Any] = ["GROUP", a.group, a.consumer]
        if a.count > 0:
            argv.extend(["COUNT", a.count])
        if a.block is not None:
            argv.extend(["BLOCK", self._block_ms(a.block)])
        if a.no_ack:
            argv.append("NOACK")
        argv.extend(["STREAMS", *a.streams])
        return self._run(c.X_READ_GROUP, argv, XStreamSliceCmd, keys=keys)

    # =========================================================================
    # Trimming
    # =========================================================================

    def x_trim_max_len(self, key: str, max_len: int) -> IntCmd:
        return self._run(c.X_TRIM_MAX_LEN, [key, "MAXLEN", max_len], IntCmd)

    def x_trim_max_len_approx(self, key: str, max_len: int, limit: int = 0) -> IntCmd:
        argv: list[Any] = [key, "MAXLEN", "~", max_len]
        if limit > 0:
            argv.extend(["LIMIT", limit])
        return self._run(c.X_TRIM_MAX_LEN_APPROX, argv, IntCmd)

    def x_trim_min_id(self, key: str, min_id: str) -> IntCmd:
        return self._run(c.X_TRIM_MIN_ID, [key, "MINID", min_id], IntCmd)

    def x_trim_min_id_approx(self, key: str, min_id: str, limit: int = 0) -> IntCmd:
        argv: list[Any] = [key, "MINID", "~", min_id]
        if limit > 0:
            argv.extend(["LIMIT", limit])
        return self._run(c.X_TRIM_MIN_ID_APPROX, argv, IntCmd)


def _auto_claim_args(a: XAutoClaimArgs) -> list[Any]:
    argv: list[Any] = [a.stream, a.group, a.consumer, _args.format_ms(a.min_idle), a.start]
    if a.count > 0:
        argv.extend(["COUNT", a.count])
    return argv


def _claim_args(a: XClaimArgs) -> list[Any]:
    return [a.stream, a.group, a.consumer, _args.format_ms(a.min_idle), *a.messages]
