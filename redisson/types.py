"""Option records and reply value types."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any

# =============================================================================
# Aliases
# =============================================================================

KeyT = str
ValueT = str | bytes | int | float | bool | datetime
Duration = timedelta | int | float

# Geo units
M = "M"
KM = "KM"
FT = "FT"
MI = "MI"

BIT_COUNT_INDEX_BYTE = "BYTE"
BIT_COUNT_INDEX_BIT = "BIT"

BEFORE = "BEFORE"
AFTER = "AFTER"
LEFT = "LEFT"
RIGHT = "RIGHT"

# =============================================================================
# Command options
# =============================================================================


@dataclass
class SetArgs:
    """Options of ``SET``.

    ``mode`` is ``"NX"``, ``"XX"`` or empty. Only one expiry is sent:
    ``keep_ttl`` wins over ``expire_at``, which wins over ``ttl``.
    """

    mode: str = ""
    ttl: Duration = 0
    expire_at: datetime | None = None
    get: bool = False
    keep_ttl: bool = False


@dataclass
class BitCount:
    start: int = 0
    end: int = -1
    unit: str = ""


@dataclass
class Sort:
    by: str = ""
    offset: int = 0
    count: int = 0
    get: list[str] = field(default_factory=list)
    order: str = ""
    alpha: bool = False


@dataclass
class LPosArgs:
    rank: int = 0
    max_len: int = 0


@dataclass
class Z:
    """A sorted set member with its score."""

    score: float
    member: Any


@dataclass
class ZWithKey:
    key: str
    z: Z


@dataclass
class ZStore:
    keys: list[str]
    weights: list[float] = field(default_factory=list)
    aggregate: str = ""


@dataclass
class ZAddArgs:
    nx: bool = False
    xx: bool = False
    lt: bool = False
    gt: bool = False
    ch: bool = False
    members: list[Z] = field(default_factory=list)


@dataclass
class ZRangeBy:
    min: str = "-inf"
    max: str = "+inf"
    offset: int = 0
    count: int = 0


@dataclass
class ZRangeArgs:
    """Options of the unified ``ZRANGE``.

    ``start``/``stop`` are indexes by default, scores with ``by_score`` and
    lexicographical bounds with ``by_lex``.
    """

    key: str
    start: Any
    stop: Any
    by_score: bool = False
    by_lex: bool = False
    rev: bool = False
    offset: int = 0
    count: int = 0


@dataclass
class RankScore:
    rank: int
    score: float


@dataclass
class KeyValue:
    key: str
    value: str


@dataclass
class KeyValues:
    key: str
    values: list[str]


@dataclass
class GeoPos:
    longitude: float
    latitude: float


@dataclass
class GeoLocation:
    name: str
    longitude: float = 0.0
    latitude: float = 0.0
    dist: float = 0.0
    geo_hash: int = 0


@dataclass
class GeoRadiusQuery:
    radius: float
    unit: str = ""
    with_coord: bool = False
    with_dist: bool = False
    with_geo_hash: bool = False
    count: int = 0
    sort: str = ""
    store: str = ""
    store_dist: str = ""


@dataclass
class GeoSearchQuery:
    member: str = ""
    longitude: float = 0.0
    latitude: float = 0.0
    radius: float = 0.0
    radius_unit: str = ""
    box_width: float = 0.0
    box_height: float = 0.0
    box_unit: str = ""
    sort: str = ""
    count: int = 0
    count_any: bool = False


@dataclass
class GeoSearchLocationQuery(GeoSearchQuery):
    with_coord: bool = False
    with_dist: bool = False
    with_hash: bool = False


@dataclass
class GeoSearchStoreQuery(GeoSearchQuery):
    store_dist: bool = False


@dataclass
class XAddArgs:
    """Options of ``XADD``.

    ``values`` is a mapping or a flat field/value sequence. ``max_len`` and
    ``min_id`` are mutually exclusive; ``approx`` adds ``~`` to either.
    """

    stream: str
    values: Any
    no_mk_stream: bool = False
    max_len: int = 0
    min_id: str = ""
    approx: bool = False
    limit: int = 0
    id: str = ""


@dataclass
class XReadArgs:
    """``streams`` lists the stream keys followed by one id per key."""

    streams: list[str]
    count: int = 0
    block: Duration | None = None


@dataclass
class XReadGroupArgs:
    group: str
    consumer: str
    streams: list[str]
    count: int = 0
    block: Duration | None = None
    no_ack: bool = False


@dataclass
class XClaimArgs:
    stream: str
    group: str
    consumer: str
    min_idle: Duration
    messages: list[str]


@dataclass
class XAutoClaimArgs:
    stream: str
    group: str
    min_idle: Duration
    start: str
    consumer: str
    count: int = 0


@dataclass
class XPendingExtArgs:
    stream: str
    group: str
    start: str
    end: str
    count: int
    idle: Duration = 0
    consumer: str = ""


@dataclass
class FunctionListQuery:
    library_name_pattern: str = ""
    with_code: bool = False


# =============================================================================
# Stream replies
# =============================================================================


@dataclass
class XMessage:
    id: str
    values: dict[str, Any]


@dataclass
class XStream:
    stream: str
    messages: list[XMessage]


@dataclass
class XPending:
    count: int
    lower: str
    higher: str
    consumers: dict[str, int]


@dataclass
class XPendingExt:
    id: str
    consumer: str
    idle: timedelta
    retry_count: int


@dataclass
class XInfoConsumer:
    name: str
    pending: int
    idle: timedelta
    inactive: timedelta


@dataclass
class XInfoGroup:
    name: str
    consumers: int
    pending: int
    last_delivered_id: str
    entries_read: int = 0
    lag: int = 0


@dataclass
class XInfoStream:
    length: int
    radix_tree_keys: int
    radix_tree_nodes: int
    groups: int
    last_generated_id: str
    max_deleted_entry_id: str = ""
    entries_added: int = 0
    first_entry: XMessage | None = None
    last_entry: XMessage | None = None
    recorded_first_entry_id: str = ""


@dataclass
class XInfoStreamConsumerPending:
    id: str
    delivery_time: datetime
    delivery_count: int


@dataclass
class XInfoStreamConsumer:
    name: str
    seen_time: datetime
    active_time: datetime | None
    pel_count: int
    pending: list[XInfoStreamConsumerPending]


@dataclass
class XInfoStreamGroupPending:
    id: str
    consumer: str
    delivery_time: datetime
    delivery_count: int


@dataclass
class XInfoStreamGroup:
    name: str
    last_delivered_id: str
    entries_read: int
    lag: int
    pel_count: int
    pending: list[XInfoStreamGroupPending]
    consumers: list[XInfoStreamConsumer]


@dataclass
class XInfoStreamFull:
    length: int
    radix_tree_keys: int
    radix_tree_nodes: int
    last_generated_id: str
    max_deleted_entry_id: str
    entries_added: int
    entries: list[XMessage]
    groups: list[XInfoStreamGroup]
    recorded_first_entry_id: str = ""


# =============================================================================
# Server, scripting and cluster replies
# =============================================================================


@dataclass
class CommandInfo:
    name: str
    arity: int
    flags: list[str]
    acl_flags: list[str]
    first_key_pos: int
    last_key_pos: int
    step_count: int
    read_only: bool


@dataclass
class KeyFlags:
    key: str
    flags: list[str]


@dataclass
class Function:
    name: str
    description: str
    flags: list[str]


@dataclass
class Library:
    name: str
    engine: str
    functions: list[Function]
    code: str = ""


@dataclass
class ClusterNode:
    id: str
    addr: str


@dataclass
class ClusterSlot:
    start: int
    end: int
    nodes: list[ClusterNode]


@dataclass
class SlotRange:
    start: int
    end: int


@dataclass
class ShardNode:
    id: str
    endpoint: str
    ip: str
    hostname: str
    port: int
    tls_port: int
    role: str
    replication_offset: int
    health: str


@dataclass
class ClusterShard:
    slots: list[SlotRange]
    nodes: list[ShardNode]
