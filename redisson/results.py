"""Typed result wrappers.

Every command method returns one of the ``Cmd`` classes below. A wrapper holds
the decoded value, the error (``None`` on success) and the argv that was sent.
Server and driver errors are stored, never raised, until ``result()`` is
called. A null reply stores a ``Nil`` error and leaves ``val`` at the zero
value of the shape.

Replies arrive raw from redis-py, in either RESP2 or RESP3 form, and the
``parse`` classmethods accept both: maps may be flat arrays or dicts, doubles
may be bulk strings or floats, booleans may be integers or native bools.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime, timedelta
from typing import Any

from redisson.exceptions import Nil
from redisson.types import (
    ClusterNode,
    ClusterShard,
    ClusterSlot,
    CommandInfo,
    Function,
    GeoLocation,
    GeoPos,
    KeyFlags,
    KeyValue,
    KeyValues,
    Library,
    RankScore,
    ShardNode,
    SlotRange,
    XInfoConsumer,
    XInfoGroup,
    XInfoStream,
    XInfoStreamConsumer,
    XInfoStreamConsumerPending,
    XInfoStreamFull,
    XInfoStreamGroup,
    XInfoStreamGroupPending,
    XMessage,
    XPending,
    XPendingExt,
    XStream,
    Z,
    ZWithKey,
)

logger = logging.getLogger(__name__)

OK = "OK"

# =============================================================================
# Reply helpers
# =============================================================================


def to_str(value: Any) -> str:
    """Decode a reply element to ``str``; binary data survives via surrogateescape."""
    if value is None:
        return ""
    if isinstance(value, bytes):
        return value.decode("utf-8", "surrogateescape")
    if isinstance(value, bool):
        return "1" if value else "0"
    return str(value)


def to_int(value: Any) -> int:
    if value is None:
        return 0
    if isinstance(value, int):
        return int(value)
    if isinstance(value, float):
        return int(value)
    return int(to_str(value))


def to_float(value: Any) -> float:
    if value is None:
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)
    return float(to_str(value))


def to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    if value is None:
        return False
    text = to_str(value)
    if text == OK:
        return True
    return text not in ("", "0")


def to_any(value: Any) -> Any:
    """Recursively decode bytes to ``str`` keeping the reply structure."""
    if isinstance(value, bytes):
        return to_str(value)
    if isinstance(value, list):
        return [to_any(v) for v in value]
    if isinstance(value, dict):
        return {to_any(k): to_any(v) for k, v in value.items()}
    if isinstance(value, (set, frozenset)):
        return [to_any(v) for v in value]
    return value


def to_list(value: Any) -> list[Any]:
    if value is None:
        return []
    if isinstance(value, dict):
        out: list[Any] = []
        for k, v in value.items():
            out.extend((k, v))
        return out
    if isinstance(value, (set, frozenset, tuple)):
        return list(value)
    return value


def pairs(value: Any) -> list[tuple[Any, Any]]:
    """Key/value pairs from a RESP3 map, a flat array or an array of pairs."""
    if value is None:
        return []
    if isinstance(value, dict):
        return list(value.items())
    items = to_list(value)
    if items and all(isinstance(i, list) and len(i) == 2 for i in items):
        return [(i[0], i[1]) for i in items]
    return [(items[i], items[i + 1]) for i in range(0, len(items) - 1, 2)]


def to_map(value: Any) -> dict[str, Any]:
    return {to_str(k): v for k, v in pairs(value)}


def ms_to_time(value: Any) -> datetime:
    return datetime.fromtimestamp(to_int(value) / 1000, tz=UTC)


# =============================================================================
# Base
# =============================================================================


class Cmd:
    """Result of a command, value type ``Any``.

    Attributes:
        val: Decoded value, or the zero value on error.
        err: Error of the call, ``None`` on success.
        args: The argv sent to the server.
    """

    def __init__(self, val: Any = None, err: BaseException | None = None, args: Any = ()) -> None:
        self.val = self.zero() if val is None and err is not None else val
        self.err = err
        self.args = list(args)

    @classmethod
    def zero(cls) -> Any:
        return None

    @classmethod
    def parse(cls, reply: Any, **options: Any) -> Any:
        return to_any(reply)

    @classmethod
    def from_reply(cls, reply: Any, args: Any = (), **options: Any) -> Cmd:
        """Wrap a raw reply, an exception instance or a null."""
        if isinstance(reply, BaseException):
            return cls.from_error(reply, args)
        if reply is None:
            return cls(cls.zero(), Nil(), args)
        try:
            return cls(cls.parse(reply, **options), None, args)
        except (ValueError, TypeError, IndexError, KeyError, AttributeError) as e:
            logger.debug("unexpected reply for %s: %r", args[:1], reply)
            return cls.from_error(e, args)

    @classmethod
    def from_error(cls, err: BaseException, args: Any = ()) -> Cmd:
        return cls(cls.zero(), err, args)

    def result(self) -> Any:
        """Return ``val`` or raise ``err``."""
        if self.err is not None:
            raise self.err
        return self.val

    def __repr__(self) -> str:
        if self.err is not None:
            return f"<{type(self).__name__} {self.args!r}: {self.err}>"
        return f"<{type(self).__name__} {self.args!r}: {self.val!r}>"

    # Conversions on the generic value, mirroring the typed shapes.

    def text(self) -> str:
        return to_str(self.result())

    def int(self) -> int:
        return to_int(self.result())

    def float(self) -> float:
        return to_float(self.result())

    def bool(self) -> bool:
        return to_bool(self.result())

    def slice(self) -> list[Any]:
        return to_list(self.result())

    def string_slice(self) -> list[str]:
        return [to_str(v) for v in self.slice()]

    def int_slice(self) -> list[int]:
        return [to_int(v) for v in self.slice()]

    def float_slice(self) -> list[float]:
        return [to_float(v) for v in self.slice()]

    def bool_slice(self) -> list[bool]:
        return [to_bool(v) for v in self.slice()]


# =============================================================================
# Scalars
# =============================================================================


class StatusCmd(Cmd):
    @classmethod
    def zero(cls) -> str:
        return ""

    @classmethod
    def parse(cls, reply: Any, **options: Any) -> str:
        return to_str(reply)

    @classmethod
    def ok(cls, args: Any = ()) -> StatusCmd:
        return cls(OK, None, args)


class StringCmd(Cmd):
    def __init__(
        self,
        val: Any = None,
        err: BaseException | None = None,
        args: Any = (),
        raw: bytes | None = None,
    ) -> None:
        super().__init__(val, err, args)
        self._raw = raw

    @classmethod
    def zero(cls) -> str:
        return ""

    @classmethod
    def parse(cls, reply: Any, **options: Any) -> str:
        return to_str(reply)

    @classmethod
    def from_reply(cls, reply: Any, args: Any = (), **options: Any) -> Cmd:
        cmd = super().from_reply(reply, args, **options)
        if isinstance(reply, bytes):
            cmd._raw = reply  # type: ignore[attr-defined]
        return cmd

    def bytes(self) -> bytes:
        """Return the value as received, without decoding."""
        if self.err is not None:
            raise self.err
        if self._raw is not None:
            return self._raw
        return self.val.encode("utf-8", "surrogateescape")


class IntCmd(Cmd):
    @classmethod
    def zero(cls) -> int:
        return 0

    @classmethod
    def parse(cls, reply: Any, **options: Any) -> int:
        return to_int(reply)


class FloatCmd(Cmd):
    @classmethod
    def zero(cls) -> float:
        return 0.0

    @classmethod
    def parse(cls, reply: Any, **options: Any) -> float:
        return to_float(reply)


class BoolCmd(Cmd):
    @classmethod
    def zero(cls) -> bool:
        return False

    @classmethod
    def parse(cls, reply: Any, **options: Any) -> bool:
        return to_bool(reply)


class DurationCmd(Cmd):
    """Duration reply. ``-1`` and ``-2`` sentinels map to ``timedelta(seconds=-1|-2)``.

    The ``precision`` option is the unit of the reply: ``"s"`` or ``"ms"``.
    """

    @classmethod
    def zero(cls) -> timedelta:
        return timedelta(0)

    @classmethod
    def parse(cls, reply: Any, precision: str = "s", **options: Any) -> timedelta:
        return _duration(to_int(reply), precision)


def _duration(n: int, precision: str) -> timedelta:
    if n in (-1, -2):
        return timedelta(seconds=n)
    if precision == "ms":
        return timedelta(milliseconds=n)
    return timedelta(seconds=n)


class TimeCmd(Cmd):
    """``TIME`` (seconds and microseconds) or a unix timestamp in seconds."""

    @classmethod
    def zero(cls) -> datetime:
        return datetime.fromtimestamp(0, tz=UTC)

    @classmethod
    def parse(cls, reply: Any, **options: Any) -> datetime:
        if isinstance(reply, list):
            secs, micros = to_int(reply[0]), to_int(reply[1])
            return datetime.fromtimestamp(secs, tz=UTC) + timedelta(microseconds=micros)
        return datetime.fromtimestamp(to_int(reply), tz=UTC)


# =============================================================================
# Slices
# =============================================================================


class SliceCmd(Cmd):
    """Heterogeneous array; null elements stay ``None``."""

    @classmethod
    def zero(cls) -> list[Any]:
        return []

    @classmethod
    def parse(cls, reply: Any, **options: Any) -> list[Any]:
        return [to_any(v) for v in to_list(reply)]


class StringSliceCmd(Cmd):
    @classmethod
    def zero(cls) -> list[str]:
        return []

    @classmethod
    def parse(cls, reply: Any, **options: Any) -> list[str]:
        return [to_str(v) for v in to_list(reply)]


class StringSetCmd(Cmd):
    """Array reply collected into a set, e.g. ``SMEMBERS``."""

    @classmethod
    def zero(cls) -> set[str]:
        return set()

    @classmethod
    def parse(cls, reply: Any, **options: Any) -> set[str]:
        return {to_str(v) for v in to_list(reply)}


class IntSliceCmd(Cmd):
    @classmethod
    def zero(cls) -> list[int]:
        return []

    @classmethod
    def parse(cls, reply: Any, **options: Any) -> list[int]:
        return [to_int(v) for v in to_list(reply)]


class FloatSliceCmd(Cmd):
    @classmethod
    def zero(cls) -> list[float]:
        return []

    @classmethod
    def parse(cls, reply: Any, **options: Any) -> list[float]:
        return [to_float(v) for v in to_list(reply)]


class BoolSliceCmd(Cmd):
    @classmethod
    def zero(cls) -> list[bool]:
        return []

    @classmethod
    def parse(cls, reply: Any, **options: Any) -> list[bool]:
        return [to_bool(v) for v in to_list(reply)]


class DurationSliceCmd(Cmd):
    @classmethod
    def zero(cls) -> list[timedelta]:
        return []

    @classmethod
    def parse(cls, reply: Any, precision: str = "s", **options: Any) -> list[timedelta]:
        return [_duration(to_int(v), precision) for v in to_list(reply)]


class KeyValueSliceCmd(Cmd):
    @classmethod
    def zero(cls) -> list[KeyValue]:
        return []

    @classmethod
    def parse(cls, reply: Any, **options: Any) -> list[KeyValue]:
        return [KeyValue(to_str(k), to_str(v)) for k, v in pairs(reply)]


class KeyValuesCmd(Cmd):
    """``LMPOP``-style reply: a key and the values popped from it."""

    @classmethod
    def zero(cls) -> KeyValues:
        return KeyValues("", [])

    @classmethod
    def parse(cls, reply: Any, **options: Any) -> KeyValues:
        return KeyValues(to_str(reply[0]), [to_str(v) for v in to_list(reply[1])])


class StringStringMapCmd(Cmd):
    @classmethod
    def zero(cls) -> dict[str, str]:
        return {}

    @classmethod
    def parse(cls, reply: Any, **options: Any) -> dict[str, str]:
        return {to_str(k): to_str(v) for k, v in pairs(reply)}


class StringIntMapCmd(Cmd):
    @classmethod
    def zero(cls) -> dict[str, int]:
        return {}

    @classmethod
    def parse(cls, reply: Any, **options: Any) -> dict[str, int]:
        return {to_str(k): to_int(v) for k, v in pairs(reply)}


class ScanCmd(Cmd):
    """``SCAN``-family reply. ``val`` holds the page, ``cursor`` the next cursor."""

    def __init__(self, val: Any = None, err: BaseException | None = None, args: Any = (), cursor: int = 0) -> None:
        super().__init__(val, err, args)
        self.cursor = cursor

    @classmethod
    def zero(cls) -> list[str]:
        return []

    @classmethod
    def parse(cls, reply: Any, **options: Any) -> tuple[list[str], int]:
        items = reply[1]
        if isinstance(items, dict):
            items = to_list(items)
        return [to_str(v) for v in items], to_int(reply[0])

    @classmethod
    def from_reply(cls, reply: Any, args: Any = (), **options: Any) -> Cmd:
        cmd = super().from_reply(reply, args, **options)
        if cmd.err is None:
            cmd.val, cmd.cursor = cmd.val  # type: ignore[attr-defined]
        return cmd

    def result(self) -> tuple[list[str], int]:  # type: ignore[override]
        if self.err is not None:
            raise self.err
        return self.val, self.cursor


# =============================================================================
# Sorted sets
# =============================================================================


def _z_slice(reply: Any) -> list[Z]:
    items = to_list(reply)
    if items and all(isinstance(i, list) for i in items):
        return [Z(score=to_float(i[1]), member=to_str(i[0])) for i in items]
    return [Z(score=to_float(items[i + 1]), member=to_str(items[i])) for i in range(0, len(items) - 1, 2)]


class ZSliceCmd(Cmd):
    @classmethod
    def zero(cls) -> list[Z]:
        return []

    @classmethod
    def parse(cls, reply: Any, **options: Any) -> list[Z]:
        return _z_slice(reply)


class ZWithKeyCmd(Cmd):
    """``BZPOPMIN``/``BZPOPMAX`` reply."""

    @classmethod
    def zero(cls) -> ZWithKey:
        return ZWithKey("", Z(0.0, ""))

    @classmethod
    def parse(cls, reply: Any, **options: Any) -> ZWithKey:
        return ZWithKey(to_str(reply[0]), Z(score=to_float(reply[2]), member=to_str(reply[1])))


class ZSliceWithKeyCmd(Cmd):
    """``ZMPOP``/``BZMPOP`` reply, ``val`` is ``(key, members)``."""

    @classmethod
    def zero(cls) -> tuple[str, list[Z]]:
        return "", []

    @classmethod
    def parse(cls, reply: Any, **options: Any) -> tuple[str, list[Z]]:
        return to_str(reply[0]), _z_slice(reply[1])


class RankWithScoreCmd(Cmd):
    @classmethod
    def zero(cls) -> RankScore:
        return RankScore(0, 0.0)

    @classmethod
    def parse(cls, reply: Any, **options: Any) -> RankScore:
        return RankScore(rank=to_int(reply[0]), score=to_float(reply[1]))


# =============================================================================
# Geo
# =============================================================================


class GeoPosCmd(Cmd):
    """``GEOPOS`` reply; missing members are ``None``."""

    @classmethod
    def zero(cls) -> list[GeoPos | None]:
        return []

    @classmethod
    def parse(cls, reply: Any, **options: Any) -> list[GeoPos | None]:
        out: list[GeoPos | None] = []
        for item in to_list(reply):
            if item is None:
                out.append(None)
            else:
                out.append(GeoPos(longitude=to_float(item[0]), latitude=to_float(item[1])))
        return out


class GeoLocationCmd(Cmd):
    """Geo query reply. Options ``with_dist``, ``with_hash`` and ``with_coord``
    describe which fields follow each member name, in that order.
    """

    @classmethod
    def zero(cls) -> list[GeoLocation]:
        return []

    @classmethod
    def parse(
        cls,
        reply: Any,
        with_dist: bool = False,
        with_hash: bool = False,
        with_coord: bool = False,
        **options: Any,
    ) -> list[GeoLocation]:
        out = []
        for item in to_list(reply):
            if not isinstance(item, list):
                out.append(GeoLocation(name=to_str(item)))
                continue
            loc = GeoLocation(name=to_str(item[0]))
            i = 1
            if with_dist:
                loc.dist = to_float(item[i])
                i += 1
            if with_hash:
                loc.geo_hash = to_int(item[i])
                i += 1
            if with_coord:
                loc.longitude = to_float(item[i][0])
                loc.latitude = to_float(item[i][1])
            out.append(loc)
        return out


# =============================================================================
# Streams
# =============================================================================


def _x_message(item: Any) -> XMessage:
    fields = item[1]
    values: dict[str, Any] = {}
    if fields is not None:
        values = {to_str(k): to_str(v) for k, v in pairs(fields)}
    return XMessage(id=to_str(item[0]), values=values)


def _x_messages(reply: Any) -> list[XMessage]:
    return [_x_message(item) for item in to_list(reply) if item is not None]


class XMessageSliceCmd(Cmd):
    @classmethod
    def zero(cls) -> list[XMessage]:
        return []

    @classmethod
    def parse(cls, reply: Any, **options: Any) -> list[XMessage]:
        return _x_messages(reply)


class XStreamSliceCmd(Cmd):
    @classmethod
    def zero(cls) -> list[XStream]:
        return []

    @classmethod
    def parse(cls, reply: Any, **options: Any) -> list[XStream]:
        if isinstance(reply, dict):
            items = list(reply.items())
        else:
            items = [(i[0], i[1]) for i in reply]
        return [XStream(stream=to_str(k), messages=_x_messages(v)) for k, v in items]


class XPendingCmd(Cmd):
    @classmethod
    def zero(cls) -> XPending:
        return XPending(0, "", "", {})

    @classmethod
    def parse(cls, reply: Any, **options: Any) -> XPending:
        consumers = {to_str(c[0]): to_int(c[1]) for c in to_list(reply[3])}
        return XPending(count=to_int(reply[0]), lower=to_str(reply[1]), higher=to_str(reply[2]), consumers=consumers)


class XPendingExtCmd(Cmd):
    @classmethod
    def zero(cls) -> list[XPendingExt]:
        return []

    @classmethod
    def parse(cls, reply: Any, **options: Any) -> list[XPendingExt]:
        return [
            XPendingExt(
                id=to_str(i[0]),
                consumer=to_str(i[1]),
                idle=timedelta(milliseconds=to_int(i[2])),
                retry_count=to_int(i[3]),
            )
            for i in to_list(reply)
        ]


class XAutoClaimCmd(Cmd):
    """``XAUTOCLAIM`` reply, ``val`` is ``(messages, next_start)``."""

    @classmethod
    def zero(cls) -> tuple[list[XMessage], str]:
        return [], ""

    @classmethod
    def parse(cls, reply: Any, **options: Any) -> tuple[list[XMessage], str]:
        return _x_messages(reply[1]), to_str(reply[0])


class XAutoClaimJustIDCmd(Cmd):
    """``XAUTOCLAIM ... JUSTID`` reply, ``val`` is ``(ids, next_start)``."""

    @classmethod
    def zero(cls) -> tuple[list[str], str]:
        return [], ""

    @classmethod
    def parse(cls, reply: Any, **options: Any) -> tuple[list[str], str]:
        return [to_str(i) for i in to_list(reply[1])], to_str(reply[0])


class XInfoConsumersCmd(Cmd):
    @classmethod
    def zero(cls) -> list[XInfoConsumer]:
        return []

    @classmethod
    def parse(cls, reply: Any, **options: Any) -> list[XInfoConsumer]:
        out = []
        for item in to_list(reply):
            m = to_map(item)
            out.append(
                XInfoConsumer(
                    name=to_str(m.get("name")),
                    pending=to_int(m.get("pending")),
                    idle=timedelta(milliseconds=to_int(m.get("idle"))),
                    inactive=timedelta(milliseconds=to_int(m.get("inactive", -1))),
                ),
            )
        return out


class XInfoGroupsCmd(Cmd):
    @classmethod
    def zero(cls) -> list[XInfoGroup]:
        return []

    @classmethod
    def parse(cls, reply: Any, **options: Any) -> list[XInfoGroup]:
        out = []
        for item in to_list(reply):
            m = to_map(item)
            out.append(
                XInfoGroup(
                    name=to_str(m.get("name")),
                    consumers=to_int(m.get("consumers")),
                    pending=to_int(m.get("pending")),
                    last_delivered_id=to_str(m.get("last-delivered-id")),
                    entries_read=to_int(m.get("entries-read")),
                    lag=to_int(m.get("lag")),
                ),
            )
        return out


class XInfoStreamCmd(Cmd):
    @classmethod
    def zero(cls) -> XInfoStream:
        return XInfoStream(0, 0, 0, 0, "")

    @classmethod
    def parse(cls, reply: Any, **options: Any) -> XInfoStream:
        m = to_map(reply)
        first = m.get("first-entry")
        last = m.get("last-entry")
        return XInfoStream(
            length=to_int(m.get("length")),
            radix_tree_keys=to_int(m.get("radix-tree-keys")),
            radix_tree_nodes=to_int(m.get("radix-tree-nodes")),
            groups=to_int(m.get("groups")),
            last_generated_id=to_str(m.get("last-generated-id")),
            max_deleted_entry_id=to_str(m.get("max-deleted-entry-id")),
            entries_added=to_int(m.get("entries-added")),
            first_entry=_x_message(first) if first else None,
            last_entry=_x_message(last) if last else None,
            recorded_first_entry_id=to_str(m.get("recorded-first-entry-id")),
        )


class XInfoStreamFullCmd(Cmd):
    @classmethod
    def zero(cls) -> XInfoStreamFull:
        return XInfoStreamFull(0, 0, 0, "", "", 0, [], [])

    @classmethod
    def parse(cls, reply: Any, **options: Any) -> XInfoStreamFull:
        m = to_map(reply)
        groups = []
        for g in to_list(m.get("groups")):
            gm = to_map(g)
            consumers = []
            for c in to_list(gm.get("consumers")):
                cm = to_map(c)
                active = cm.get("active-time")
                consumers.append(
                    XInfoStreamConsumer(
                        name=to_str(cm.get("name")),
                        seen_time=ms_to_time(cm.get("seen-time")),
                        active_time=ms_to_time(active) if active is not None else None,
                        pel_count=to_int(cm.get("pel-count")),
                        pending=[
                            XInfoStreamConsumerPending(
                                id=to_str(p[0]),
                                delivery_time=ms_to_time(p[1]),
                                delivery_count=to_int(p[2]),
                            )
                            for p in to_list(cm.get("pending"))
                        ],
                    ),
                )
            groups.append(
                XInfoStreamGroup(
                    name=to_str(gm.get("name")),
                    last_delivered_id=to_str(gm.get("last-delivered-id")),
                    entries_read=to_int(gm.get("entries-read")),
                    lag=to_int(gm.get("lag")),
                    pel_count=to_int(gm.get("pel-count")),
                    pending=[
                        XInfoStreamGroupPending(
                            id=to_str(p[0]),
                            consumer=to_str(p[1]),
                            delivery_time=ms_to_time(p[2]),
                            delivery_count=to_int(p[3]),
                        )
                        for p in to_list(gm.get("pending"))
                    ],
                    consumers=consumers,
                ),
            )
        return XInfoStreamFull(
            length=to_int(m.get("length")),
            radix_tree_keys=to_int(m.get("radix-tree-keys")),
            radix_tree_nodes=to_int(m.get("radix-tree-nodes")),
            last_generated_id=to_str(m.get("last-generated-id")),
            max_deleted_entry_id=to_str(m.get("max-deleted-entry-id")),
            entries_added=to_int(m.get("entries-added")),
            entries=_x_messages(m.get("entries")),
            groups=groups,
            recorded_first_entry_id=to_str(m.get("recorded-first-entry-id")),
        )


# =============================================================================
# Server, scripting and cluster
# =============================================================================


class CommandsInfoCmd(Cmd):
    """``COMMAND`` reply keyed by lower-case command name."""

    @classmethod
    def zero(cls) -> dict[str, CommandInfo]:
        return {}

    @classmethod
    def parse(cls, reply: Any, **options: Any) -> dict[str, CommandInfo]:
        out = {}
        for item in to_list(reply):
            if not item:
                continue
            flags = [to_str(f) for f in to_list(item[2])]
            info = CommandInfo(
                name=to_str(item[0]),
                arity=to_int(item[1]),
                flags=flags,
                acl_flags=[to_str(f) for f in to_list(item[6])] if len(item) > 6 else [],
                first_key_pos=to_int(item[3]),
                last_key_pos=to_int(item[4]),
                step_count=to_int(item[5]),
                read_only="readonly" in flags,
            )
            out[info.name.lower()] = info
        return out


class KeyFlagsCmd(Cmd):
    @classmethod
    def zero(cls) -> list[KeyFlags]:
        return []

    @classmethod
    def parse(cls, reply: Any, **options: Any) -> list[KeyFlags]:
        return [KeyFlags(key=to_str(i[0]), flags=[to_str(f) for f in to_list(i[1])]) for i in to_list(reply)]


class FunctionListCmd(Cmd):
    @classmethod
    def zero(cls) -> list[Library]:
        return []

    @classmethod
    def parse(cls, reply: Any, **options: Any) -> list[Library]:
        out = []
        for item in to_list(reply):
            m = to_map(item)
            functions = []
            for f in to_list(m.get("functions")):
                fm = to_map(f)
                functions.append(
                    Function(
                        name=to_str(fm.get("name")),
                        description=to_str(fm.get("description")),
                        flags=[to_str(x) for x in to_list(fm.get("flags"))],
                    ),
                )
            out.append(
                Library(
                    name=to_str(m.get("library_name")),
                    engine=to_str(m.get("engine")),
                    functions=functions,
                    code=to_str(m.get("library_code")),
                ),
            )
        return out


class ClusterSlotsCmd(Cmd):
    @classmethod
    def zero(cls) -> list[ClusterSlot]:
        return []

    @classmethod
    def parse(cls, reply: Any, **options: Any) -> list[ClusterSlot]:
        out = []
        for item in to_list(reply):
            nodes = []
            for node in item[2:]:
                addr = f"{to_str(node[0])}:{to_int(node[1])}"
                node_id = to_str(node[2]) if len(node) > 2 else ""
                nodes.append(ClusterNode(id=node_id, addr=addr))
            out.append(ClusterSlot(start=to_int(item[0]), end=to_int(item[1]), nodes=nodes))
        return out


class ClusterShardsCmd(Cmd):
    @classmethod
    def zero(cls) -> list[ClusterShard]:
        return []

    @classmethod
    def parse(cls, reply: Any, **options: Any) -> list[ClusterShard]:
        out = []
        for item in to_list(reply):
            m = to_map(item)
            bounds = [to_int(s) for s in to_list(m.get("slots"))]
            slots = [SlotRange(start=bounds[i], end=bounds[i + 1]) for i in range(0, len(bounds) - 1, 2)]
            nodes = []
            for n in to_list(m.get("nodes")):
                nm = to_map(n)
                nodes.append(
                    ShardNode(
                        id=to_str(nm.get("id")),
                        endpoint=to_str(nm.get("endpoint")),
                        ip=to_str(nm.get("ip")),
                        hostname=to_str(nm.get("hostname")),
                        port=to_int(nm.get("port")),
                        tls_port=to_int(nm.get("tls-port")),
                        role=to_str(nm.get("role")),
                        replication_offset=to_int(nm.get("replication-offset")),
                        health=to_str(nm.get("health")),
                    ),
                )
            out.append(ClusterShard(slots=slots, nodes=nodes))
        return out
