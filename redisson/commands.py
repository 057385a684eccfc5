"""Command registry.

Every public client method dispatches under one of the handles defined here.
A handle carries the canonical verb (used for metrics and logs), the metric
group, the command category, how it touches keys, whether a cache view may
serve it, and the version metadata used by development-mode checks.

Variants of a verb that are worth observing separately (``SET ... KEEPTTL``,
``EXISTS`` with several keys, ``ZADD ... INCR``) get their own handle with a
``variant`` suffix; the verb stays the same.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class Category(StrEnum):
    """Command categories."""

    READ = "read"
    WRITE = "write"
    ADMIN = "admin"
    BLOCKING = "blocking"
    SCRIPTING = "scripting"
    PUBSUB = "pubsub"
    CONNECTION = "connection"


class Keyed(StrEnum):
    """How a command addresses keys."""

    SINGLE = "single"
    MULTI = "multi"
    NONE = "none"


@dataclass(frozen=True, slots=True)
class Command:
    """A command identifier.

    Attributes:
        name: Canonical uppercase verb, e.g. ``"CLIENT KILL"``.
        group: Metric class label, e.g. ``"String"``.
        category: Command category.
        keyed: Whether the command addresses one key, several keys or none.
        cacheable: Whether a cache view exposes the command.
        variant: Optional option-shape suffix observed separately.
        require_version: First server version supporting this shape.
        forbid: Refuse the command in development mode.
        warn_version: Warn in development mode when the server is newer.
        warning: Warning text.
        instead: Suggested replacement.
        etc: Extra hint appended to the warning.
        warning_once: Emit the warning once per process.
    """

    name: str
    group: str
    category: Category
    keyed: Keyed = Keyed.SINGLE
    cacheable: bool = False
    variant: str = ""
    require_version: str = "0.0.0"
    forbid: bool = False
    warn_version: str = ""
    warning: str = ""
    instead: str = ""
    etc: str = ""
    warning_once: bool = True

    def __str__(self) -> str:
        if self.variant:
            return f"{self.name} {self.variant}"
        return self.name

    @property
    def argv(self) -> list[str]:
        """Verb tokens, e.g. ``["CLIENT", "KILL"]``."""
        return self.name.split()


R = Category.READ
W = Category.WRITE
A = Category.ADMIN
B = Category.BLOCKING
S = Category.SCRIPTING
P = Category.PUBSUB
C = Category.CONNECTION

ONE = Keyed.SINGLE
MANY = Keyed.MULTI
NONE = Keyed.NONE


def _deprecated(since: str, instead: str = "", etc: str = "") -> dict:
    return {
        "warn_version": since,
        "warning": f"deprecated since redis {since}",
        "instead": instead,
        "etc": etc,
    }


# =============================================================================
# Bitmap
# =============================================================================


def _bitmap(name: str, category: Category, **kw) -> Command:
    return Command(name, "Bitmap", category, **kw)


BIT_COUNT = _bitmap("BITCOUNT", R, cacheable=True, require_version="2.6.0")
BIT_COUNT_BYTE = _bitmap("BITCOUNT", R, cacheable=True, variant="BYTE", require_version="7.0.0")
BIT_COUNT_BIT = _bitmap("BITCOUNT", R, cacheable=True, variant="BIT", require_version="7.0.0")
BIT_FIELD = _bitmap("BITFIELD", W, require_version="3.2.0")
BIT_OP_AND = _bitmap("BITOP", W, keyed=MANY, variant="AND", require_version="2.6.0")
BIT_OP_OR = _bitmap("BITOP", W, keyed=MANY, variant="OR", require_version="2.6.0")
BIT_OP_XOR = _bitmap("BITOP", W, keyed=MANY, variant="XOR", require_version="2.6.0")
BIT_OP_NOT = _bitmap("BITOP", W, keyed=MANY, variant="NOT", require_version="2.6.0")
BIT_POS = _bitmap("BITPOS", R, cacheable=True, require_version="2.8.7")
BIT_POS_SPAN = _bitmap("BITPOS", R, cacheable=True, variant="SPAN", require_version="7.0.0")
GET_BIT = _bitmap("GETBIT", R, cacheable=True, require_version="2.2.0")
SET_BIT = _bitmap("SETBIT", W, require_version="2.2.0")

# =============================================================================
# Generic
# =============================================================================


def _generic(name: str, category: Category, **kw) -> Command:
    return Command(name, "Generic", category, **kw)


COPY = _generic("COPY", W, keyed=MANY, require_version="6.2.0")
DEL = _generic("DEL", W, keyed=MANY, require_version="1.0.0")
DUMP = _generic("DUMP", R, require_version="2.6.0")
EXISTS = _generic("EXISTS", R, cacheable=True, require_version="1.0.0")
EXISTS_MULTIPLE_KEYS = _generic("EXISTS", R, keyed=MANY, cacheable=True, variant="MULTIPLE", require_version="3.0.3")
EXPIRE = _generic("EXPIRE", W, require_version="1.0.0")
EXPIRE_NX = _generic("EXPIRE", W, variant="NX", require_version="7.0.0")
EXPIRE_XX = _generic("EXPIRE", W, variant="XX", require_version="7.0.0")
EXPIRE_GT = _generic("EXPIRE", W, variant="GT", require_version="7.0.0")
EXPIRE_LT = _generic("EXPIRE", W, variant="LT", require_version="7.0.0")
EXPIRE_AT = _generic("EXPIREAT", W, require_version="1.2.0")
EXPIRE_TIME = _generic("EXPIRETIME", R, require_version="7.0.0")
KEYS = _generic(
    "KEYS",
    R,
    keyed=NONE,
    require_version="1.0.0",
    warn_version="1.0.0",
    warning="KEYS walks the whole keyspace and blocks the server",
    instead="SCAN",
)
MIGRATE = _generic("MIGRATE", W, require_version="2.6.0")
MOVE = _generic("MOVE", W, require_version="1.0.0")
OBJECT_ENCODING = _generic("OBJECT ENCODING", R, require_version="2.2.3")
OBJECT_IDLE_TIME = _generic("OBJECT IDLETIME", R, require_version="2.2.3")
OBJECT_REF_COUNT = _generic("OBJECT REFCOUNT", R, require_version="2.2.3")
PERSIST = _generic("PERSIST", W, require_version="2.2.0")
P_EXPIRE = _generic("PEXPIRE", W, require_version="2.6.0")
P_EXPIRE_AT = _generic("PEXPIREAT", W, require_version="2.6.0")
P_EXPIRE_TIME = _generic("PEXPIRETIME", R, require_version="7.0.0")
PTTL = _generic("PTTL", R, cacheable=True, require_version="2.6.0")
RANDOM_KEY = _generic("RANDOMKEY", R, keyed=NONE, require_version="1.0.0")
RENAME = _generic("RENAME", W, keyed=MANY, require_version="1.0.0")
RENAME_NX = _generic("RENAMENX", W, keyed=MANY, require_version="1.0.0")
RESTORE = _generic("RESTORE", W, require_version="2.6.0")
RESTORE_REPLACE = _generic("RESTORE", W, variant="REPLACE", require_version="3.0.0")
SCAN = _generic("SCAN", R, keyed=NONE, require_version="2.8.0")
SCAN_TYPE = _generic("SCAN", R, keyed=NONE, variant="TYPE", require_version="6.0.0")
SORT = _generic("SORT", W, require_version="1.0.0")
SORT_RO = _generic("SORT_RO", R, require_version="7.0.0")
SORT_STORE = _generic("SORT", W, keyed=MANY, variant="STORE", require_version="1.0.0")
TOUCH = _generic("TOUCH", R, keyed=MANY, require_version="3.2.1")
TTL = _generic("TTL", R, cacheable=True, require_version="1.0.0")
TYPE = _generic("TYPE", R, cacheable=True, require_version="1.0.0")
UNLINK = _generic("UNLINK", W, keyed=MANY, require_version="4.0.0")
WAIT = _generic("WAIT", B, keyed=NONE, require_version="3.0.0")

# =============================================================================
# Geospatial
# =============================================================================


def _geo(name: str, category: Category, **kw) -> Command:
    return Command(name, "Geospatial", category, **kw)


GEO_ADD = _geo("GEOADD", W, require_version="3.2.0")
GEO_DIST = _geo("GEODIST", R, cacheable=True, require_version="3.2.0")
GEO_HASH = _geo("GEOHASH", R, cacheable=True, require_version="3.2.0")
GEO_POS = _geo("GEOPOS", R, cacheable=True, require_version="3.2.0")
GEO_RADIUS_RO = _geo(
    "GEORADIUS_RO", R, cacheable=True, require_version="3.2.10", **_deprecated("6.2.0", "GEOSEARCH BYRADIUS")
)
GEO_RADIUS_STORE = _geo(
    "GEORADIUS", W, keyed=MANY, variant="STORE", require_version="3.2.0", **_deprecated("6.2.0", "GEOSEARCHSTORE")
)
GEO_RADIUS_BY_MEMBER_RO = _geo(
    "GEORADIUSBYMEMBER_RO",
    R,
    cacheable=True,
    require_version="3.2.10",
    **_deprecated("6.2.0", "GEOSEARCH FROMMEMBER BYRADIUS"),
)
GEO_RADIUS_BY_MEMBER_STORE = _geo(
    "GEORADIUSBYMEMBER",
    W,
    keyed=MANY,
    variant="STORE",
    require_version="3.2.0",
    **_deprecated("6.2.0", "GEOSEARCHSTORE FROMMEMBER"),
)
GEO_SEARCH = _geo("GEOSEARCH", R, cacheable=True, require_version="6.2.0")
GEO_SEARCH_LOCATION = _geo("GEOSEARCH", R, cacheable=True, variant="LOCATION", require_version="6.2.0")
GEO_SEARCH_STORE = _geo("GEOSEARCHSTORE", W, keyed=MANY, require_version="6.2.0")

# =============================================================================
# Hash
# =============================================================================


def _hash(name: str, category: Category, **kw) -> Command:
    return Command(name, "Hash", category, **kw)


H_DEL = _hash("HDEL", W, require_version="2.0.0")
H_M_DEL = _hash("HDEL", W, variant="MULTIPLE", require_version="2.4.0")
H_EXISTS = _hash("HEXISTS", R, cacheable=True, require_version="2.0.0")
H_GET = _hash("HGET", R, cacheable=True, require_version="2.0.0")
H_GET_ALL = _hash("HGETALL", R, cacheable=True, require_version="2.0.0")
H_INCR_BY = _hash("HINCRBY", W, require_version="2.0.0")
H_INCR_BY_FLOAT = _hash("HINCRBYFLOAT", W, require_version="2.6.0")
H_KEYS = _hash("HKEYS", R, cacheable=True, require_version="2.0.0")
H_LEN = _hash("HLEN", R, cacheable=True, require_version="2.0.0")
H_M_GET = _hash("HMGET", R, cacheable=True, require_version="2.0.0")
H_M_SET = _hash("HMSET", W, require_version="2.0.0", **_deprecated("4.0.0", "HSET"))
H_SET = _hash("HSET", W, require_version="2.0.0")
H_M_SET_X = _hash("HSET", W, variant="MULTIPLE", require_version="4.0.0")
H_SET_NX = _hash("HSETNX", W, require_version="2.0.0")
H_STR_LEN = _hash("HSTRLEN", R, cacheable=True, require_version="3.2.0")
H_VALS = _hash("HVALS", R, cacheable=True, require_version="2.0.0")
H_RAND_FIELD = _hash("HRANDFIELD", R, require_version="6.2.0")
H_RAND_FIELD_WITH_VALUES = _hash("HRANDFIELD", R, variant="WITHVALUES", require_version="6.2.0")
H_SCAN = _hash("HSCAN", R, require_version="2.8.0")
H_EXPIRE = _hash("HEXPIRE", W, require_version="7.4.0")
H_EXPIRE_NX = _hash("HEXPIRE", W, variant="NX", require_version="7.4.0")
H_EXPIRE_XX = _hash("HEXPIRE", W, variant="XX", require_version="7.4.0")
H_EXPIRE_GT = _hash("HEXPIRE", W, variant="GT", require_version="7.4.0")
H_EXPIRE_LT = _hash("HEXPIRE", W, variant="LT", require_version="7.4.0")
H_EXPIRE_AT = _hash("HEXPIREAT", W, require_version="7.4.0")
H_EXPIRE_AT_NX = _hash("HEXPIREAT", W, variant="NX", require_version="7.4.0")
H_EXPIRE_AT_XX = _hash("HEXPIREAT", W, variant="XX", require_version="7.4.0")
H_EXPIRE_AT_GT = _hash("HEXPIREAT", W, variant="GT", require_version="7.4.0")
H_EXPIRE_AT_LT = _hash("HEXPIREAT", W, variant="LT", require_version="7.4.0")
H_P_EXPIRE = _hash("HPEXPIRE", W, require_version="7.4.0")
H_P_EXPIRE_NX = _hash("HPEXPIRE", W, variant="NX", require_version="7.4.0")
H_P_EXPIRE_XX = _hash("HPEXPIRE", W, variant="XX", require_version="7.4.0")
H_P_EXPIRE_GT = _hash("HPEXPIRE", W, variant="GT", require_version="7.4.0")
H_P_EXPIRE_LT = _hash("HPEXPIRE", W, variant="LT", require_version="7.4.0")
H_P_EXPIRE_AT = _hash("HPEXPIREAT", W, require_version="7.4.0")
H_P_EXPIRE_AT_NX = _hash("HPEXPIREAT", W, variant="NX", require_version="7.4.0")
H_P_EXPIRE_AT_XX = _hash("HPEXPIREAT", W, variant="XX", require_version="7.4.0")
H_P_EXPIRE_AT_GT = _hash("HPEXPIREAT", W, variant="GT", require_version="7.4.0")
H_P_EXPIRE_AT_LT = _hash("HPEXPIREAT", W, variant="LT", require_version="7.4.0")
H_EXPIRE_TIME = _hash("HEXPIRETIME", R, require_version="7.4.0")
H_P_EXPIRE_TIME = _hash("HPEXPIRETIME", R, require_version="7.4.0")
H_PERSIST = _hash("HPERSIST", W, require_version="7.4.0")
H_TTL = _hash("HTTL", R, require_version="7.4.0")
H_PTTL = _hash("HPTTL", R, require_version="7.4.0")

# =============================================================================
# HyperLogLog
# =============================================================================

PF_ADD = Command("PFADD", "HyperLogLog", W, require_version="2.8.9")
PF_COUNT = Command("PFCOUNT", "HyperLogLog", R, keyed=MANY, require_version="2.8.9")
PF_MERGE = Command("PFMERGE", "HyperLogLog", W, keyed=MANY, require_version="2.8.9")

# =============================================================================
# List
# =============================================================================


def _list(name: str, category: Category, **kw) -> Command:
    return Command(name, "List", category, **kw)


BL_MOVE = _list("BLMOVE", B, keyed=MANY, require_version="6.2.0")
BL_M_POP = _list("BLMPOP", B, keyed=MANY, require_version="7.0.0")
BL_POP = _list("BLPOP", B, keyed=MANY, require_version="2.0.0")
BR_POP = _list("BRPOP", B, keyed=MANY, require_version="2.0.0")
BR_POP_L_PUSH = _list("BRPOPLPUSH", B, keyed=MANY, require_version="2.2.0", **_deprecated("6.2.0", "BLMOVE"))
L_INDEX = _list("LINDEX", R, cacheable=True, require_version="1.0.0")
L_INSERT = _list("LINSERT", W, require_version="2.2.0")
L_INSERT_BEFORE = _list("LINSERT", W, variant="BEFORE", require_version="2.2.0")
L_INSERT_AFTER = _list("LINSERT", W, variant="AFTER", require_version="2.2.0")
L_LEN = _list("LLEN", R, cacheable=True, require_version="1.0.0")
L_MOVE = _list("LMOVE", W, keyed=MANY, require_version="6.2.0")
L_M_POP = _list("LMPOP", W, keyed=MANY, require_version="7.0.0")
L_POP = _list("LPOP", W, require_version="1.0.0")
L_POP_COUNT = _list("LPOP", W, variant="COUNT", require_version="6.2.0")
L_POS = _list("LPOS", R, cacheable=True, require_version="6.0.6")
L_POS_COUNT = _list("LPOS", R, variant="COUNT", require_version="6.0.6")
L_PUSH = _list("LPUSH", W, require_version="1.0.0")
L_M_PUSH = _list("LPUSH", W, variant="MULTIPLE", require_version="2.4.0")
L_PUSH_X = _list("LPUSHX", W, require_version="2.2.0")
L_M_PUSH_X = _list("LPUSHX", W, variant="MULTIPLE", require_version="4.0.0")
L_RANGE = _list("LRANGE", R, cacheable=True, require_version="1.0.0")
L_REM = _list("LREM", W, require_version="1.0.0")
L_SET = _list("LSET", W, require_version="1.0.0")
L_TRIM = _list("LTRIM", W, require_version="1.0.0")
R_POP = _list("RPOP", W, require_version="1.0.0")
R_POP_COUNT = _list("RPOP", W, variant="COUNT", require_version="6.2.0")
R_POP_L_PUSH = _list("RPOPLPUSH", W, keyed=MANY, require_version="1.2.0", **_deprecated("6.2.0", "LMOVE"))
R_PUSH = _list("RPUSH", W, require_version="1.0.0")
R_M_PUSH = _list("RPUSH", W, variant="MULTIPLE", require_version="2.4.0")
R_PUSH_X = _list("RPUSHX", W, require_version="2.2.0")
R_M_PUSH_X = _list("RPUSHX", W, variant="MULTIPLE", require_version="4.0.0")

# =============================================================================
# Pub/Sub
# =============================================================================


def _pubsub(name: str, **kw) -> Command:
    return Command(name, "PubSub", P, keyed=NONE, **kw)


PUBLISH = _pubsub("PUBLISH", require_version="2.0.0")
S_PUBLISH = _pubsub("SPUBLISH", require_version="7.0.0")
PUB_SUB_CHANNELS = _pubsub("PUBSUB CHANNELS", require_version="2.8.0")
PUB_SUB_NUM_PAT = _pubsub("PUBSUB NUMPAT", require_version="2.8.0")
PUB_SUB_NUM_SUB = _pubsub("PUBSUB NUMSUB", require_version="2.8.0")
PUB_SUB_SHARD_CHANNELS = _pubsub("PUBSUB SHARDCHANNELS", require_version="7.0.0")
PUB_SUB_SHARD_NUM_SUB = _pubsub("PUBSUB SHARDNUMSUB", require_version="7.0.0")
SUBSCRIBE = _pubsub("SUBSCRIBE", require_version="2.0.0")
P_SUBSCRIBE = _pubsub("PSUBSCRIBE", require_version="2.0.0")
UNSUBSCRIBE = _pubsub("UNSUBSCRIBE", require_version="2.0.0")
P_UNSUBSCRIBE = _pubsub("PUNSUBSCRIBE", require_version="2.0.0")

# =============================================================================
# Scripting and functions
# =============================================================================


def _script(name: str, keyed: Keyed = MANY, **kw) -> Command:
    return Command(name, "Script", S, keyed=keyed, **kw)


EVAL = _script("EVAL", require_version="2.6.0")
EVAL_RO = _script("EVAL_RO", require_version="7.0.0")
EVAL_SHA = _script("EVALSHA", require_version="2.6.0")
EVAL_SHA_RO = _script("EVALSHA_RO", require_version="7.0.0")
F_CALL = _script("FCALL", require_version="7.0.0")
F_CALL_RO = _script("FCALL_RO", require_version="7.0.0")
FUNCTION_DELETE = _script("FUNCTION DELETE", NONE, require_version="7.0.0")
FUNCTION_DUMP = _script("FUNCTION DUMP", NONE, require_version="7.0.0")
FUNCTION_FLUSH = _script("FUNCTION FLUSH", NONE, require_version="7.0.0")
FUNCTION_FLUSH_ASYNC = _script("FUNCTION FLUSH", NONE, variant="ASYNC", require_version="7.0.0")
FUNCTION_KILL = _script("FUNCTION KILL", NONE, require_version="7.0.0")
FUNCTION_LIST = _script("FUNCTION LIST", NONE, require_version="7.0.0")
FUNCTION_LOAD = _script("FUNCTION LOAD", NONE, require_version="7.0.0")
FUNCTION_LOAD_REPLACE = _script("FUNCTION LOAD", NONE, variant="REPLACE", require_version="7.0.0")
FUNCTION_RESTORE = _script("FUNCTION RESTORE", NONE, require_version="7.0.0")
SCRIPT_EXISTS = _script("SCRIPT EXISTS", NONE, require_version="2.6.0")
SCRIPT_FLUSH = _script("SCRIPT FLUSH", NONE, require_version="2.6.0")
SCRIPT_KILL = _script("SCRIPT KILL", NONE, require_version="2.6.0")
SCRIPT_LOAD = _script("SCRIPT LOAD", NONE, require_version="2.6.0")

# =============================================================================
# Server
# =============================================================================


def _server(name: str, keyed: Keyed = NONE, **kw) -> Command:
    return Command(name, "Server", A, keyed=keyed, **kw)


ACL_DRY_RUN = _server("ACL DRYRUN", require_version="7.0.0")
BG_REWRITE_AOF = _server("BGREWRITEAOF", require_version="1.0.0")
BG_SAVE = _server("BGSAVE", require_version="1.0.0")
COMMAND = _server("COMMAND", require_version="2.8.13")
COMMAND_LIST = _server("COMMAND LIST", require_version="7.0.0")
COMMAND_GET_KEYS = _server("COMMAND GETKEYS", require_version="2.8.13")
COMMAND_GET_KEYS_AND_FLAGS = _server("COMMAND GETKEYSANDFLAGS", require_version="7.0.0")
CONFIG_GET = _server("CONFIG GET", require_version="2.0.0")
CONFIG_RESET_STAT = _server("CONFIG RESETSTAT", require_version="2.0.0")
CONFIG_REWRITE = _server("CONFIG REWRITE", require_version="2.8.0")
CONFIG_SET = _server("CONFIG SET", require_version="2.0.0")
DB_SIZE = _server("DBSIZE", require_version="1.0.0")
FLUSH_ALL = _server("FLUSHALL", require_version="1.0.0")
FLUSH_ALL_ASYNC = _server("FLUSHALL", variant="ASYNC", require_version="4.0.0")
FLUSH_DB = _server("FLUSHDB", require_version="1.0.0")
FLUSH_DB_ASYNC = _server("FLUSHDB", variant="ASYNC", require_version="4.0.0")
INFO = _server("INFO", require_version="1.0.0")
M_SERVER_INFO = _server("INFO", variant="MULTIPLE", require_version="7.0.0")
LAST_SAVE = _server("LASTSAVE", require_version="1.0.0")
MEMORY_USAGE = _server("MEMORY USAGE", keyed=ONE, require_version="4.0.0")
SAVE = _server("SAVE", require_version="1.0.0")
SHUTDOWN = _server("SHUTDOWN", require_version="1.0.0")
SHUTDOWN_SAVE = _server("SHUTDOWN", variant="SAVE", require_version="1.0.0")
SHUTDOWN_NO_SAVE = _server("SHUTDOWN", variant="NOSAVE", require_version="1.0.0")
TIME = _server("TIME", require_version="2.6.0")
DEBUG_OBJECT = _server("DEBUG OBJECT", keyed=ONE, require_version="1.0.0")

# =============================================================================
# Set
# =============================================================================


def _set(name: str, category: Category, **kw) -> Command:
    return Command(name, "Set", category, **kw)


S_ADD = _set("SADD", W, require_version="1.0.0")
S_ADD_MULTIPLE = _set("SADD", W, variant="MULTIPLE", require_version="2.4.0")
S_CARD = _set("SCARD", R, cacheable=True, require_version="1.0.0")
S_DIFF = _set("SDIFF", R, keyed=MANY, require_version="1.0.0")
S_DIFF_STORE = _set("SDIFFSTORE", W, keyed=MANY, require_version="1.0.0")
S_INTER = _set("SINTER", R, keyed=MANY, require_version="1.0.0")
S_INTER_STORE = _set("SINTERSTORE", W, keyed=MANY, require_version="1.0.0")
S_IS_MEMBER = _set("SISMEMBER", R, cacheable=True, require_version="1.0.0")
S_M_IS_MEMBER = _set("SMISMEMBER", R, cacheable=True, require_version="6.2.0")
S_MEMBERS = _set("SMEMBERS", R, cacheable=True, require_version="1.0.0")
S_MEMBERS_SET = _set("SMEMBERS", R, cacheable=True, variant="SET", require_version="1.0.0")
S_MOVE = _set("SMOVE", W, keyed=MANY, require_version="1.0.0")
S_POP = _set("SPOP", W, require_version="1.0.0")
S_POP_N = _set("SPOP", W, variant="COUNT", require_version="3.2.0")
S_RAND_MEMBER = _set("SRANDMEMBER", R, require_version="1.0.0")
S_RAND_MEMBER_N = _set("SRANDMEMBER", R, variant="COUNT", require_version="2.6.0")
S_REM = _set("SREM", W, require_version="1.0.0")
S_REM_MULTIPLE = _set("SREM", W, variant="MULTIPLE", require_version="2.4.0")
S_SCAN = _set("SSCAN", R, require_version="2.8.0")
S_UNION = _set("SUNION", R, keyed=MANY, require_version="1.0.0")
S_UNION_STORE = _set("SUNIONSTORE", W, keyed=MANY, require_version="1.0.0")

# =============================================================================
# Sorted set
# =============================================================================


def _zset(name: str, category: Category, **kw) -> Command:
    return Command(name, "SortedSet", category, **kw)


BZ_M_POP = _zset("BZMPOP", B, keyed=MANY, require_version="7.0.0")
BZ_POP_MAX = _zset("BZPOPMAX", B, keyed=MANY, require_version="5.0.0")
BZ_POP_MIN = _zset("BZPOPMIN", B, keyed=MANY, require_version="5.0.0")
Z_ADD = _zset("ZADD", W, require_version="1.2.0")
Z_M_ADD = _zset("ZADD", W, variant="MULTIPLE", require_version="2.4.0")
Z_ADD_NX = _zset("ZADD", W, variant="NX", require_version="3.0.2")
Z_ADD_XX = _zset("ZADD", W, variant="XX", require_version="3.0.2")
Z_ADD_GT = _zset("ZADD", W, variant="GT", require_version="6.2.0")
Z_ADD_LT = _zset("ZADD", W, variant="LT", require_version="6.2.0")
Z_ADD_CH = _zset("ZADD", W, variant="CH", require_version="3.0.2")
Z_ADD_INCR = _zset("ZADD", W, variant="INCR", require_version="3.0.2")
Z_CARD = _zset("ZCARD", R, cacheable=True, require_version="1.2.0")
Z_COUNT = _zset("ZCOUNT", R, cacheable=True, require_version="2.0.0")
Z_DIFF = _zset("ZDIFF", R, keyed=MANY, require_version="6.2.0")
Z_DIFF_WITH_SCORES = _zset("ZDIFF", R, keyed=MANY, variant="WITHSCORES", require_version="6.2.0")
Z_DIFF_STORE = _zset("ZDIFFSTORE", W, keyed=MANY, require_version="6.2.0")
Z_INCR_BY = _zset("ZINCRBY", W, require_version="1.2.0")
Z_INTER = _zset("ZINTER", R, keyed=MANY, require_version="6.2.0")
Z_INTER_WITH_SCORES = _zset("ZINTER", R, keyed=MANY, variant="WITHSCORES", require_version="6.2.0")
Z_INTER_CARD = _zset("ZINTERCARD", R, keyed=MANY, require_version="7.0.0")
Z_INTER_STORE = _zset("ZINTERSTORE", W, keyed=MANY, require_version="2.0.0")
Z_LEX_COUNT = _zset("ZLEXCOUNT", R, cacheable=True, require_version="2.8.9")
Z_M_POP = _zset("ZMPOP", W, keyed=MANY, require_version="7.0.0")
Z_M_SCORE = _zset("ZMSCORE", R, cacheable=True, require_version="6.2.0")
Z_POP_MAX = _zset("ZPOPMAX", W, require_version="5.0.0")
Z_POP_MIN = _zset("ZPOPMIN", W, require_version="5.0.0")
Z_RAND_MEMBER = _zset("ZRANDMEMBER", R, require_version="6.2.0")
Z_RAND_MEMBER_WITH_SCORES = _zset("ZRANDMEMBER", R, variant="WITHSCORES", require_version="6.2.0")
Z_RANGE = _zset("ZRANGE", R, cacheable=True, require_version="1.2.0")
Z_RANGE_WITH_SCORES = _zset("ZRANGE", R, cacheable=True, variant="WITHSCORES", require_version="1.2.0")
Z_RANGE_ARGS = _zset("ZRANGE", R, cacheable=True, variant="ARGS", require_version="6.2.0")
Z_RANGE_ARGS_WITH_SCORES = _zset("ZRANGE", R, cacheable=True, variant="ARGS WITHSCORES", require_version="6.2.0")
Z_RANGE_BY_LEX = _zset(
    "ZRANGEBYLEX", R, cacheable=True, require_version="2.8.9", **_deprecated("6.2.0", "ZRANGE with BYLEX")
)
Z_RANGE_BY_SCORE = _zset(
    "ZRANGEBYSCORE", R, cacheable=True, require_version="1.0.5", **_deprecated("6.2.0", "ZRANGE with BYSCORE")
)
Z_RANGE_BY_SCORE_WITH_SCORES = _zset(
    "ZRANGEBYSCORE",
    R,
    cacheable=True,
    variant="WITHSCORES",
    require_version="2.0.0",
    **_deprecated("6.2.0", "ZRANGE with BYSCORE"),
)
Z_RANGE_STORE = _zset("ZRANGESTORE", W, keyed=MANY, require_version="6.2.0")
Z_RANK = _zset("ZRANK", R, cacheable=True, require_version="2.0.0")
Z_RANK_WITH_SCORE = _zset("ZRANK", R, cacheable=True, variant="WITHSCORE", require_version="7.2.0")
Z_REM = _zset("ZREM", W, require_version="1.2.0")
Z_M_REM = _zset("ZREM", W, variant="MULTIPLE", require_version="2.4.0")
Z_REM_RANGE_BY_LEX = _zset("ZREMRANGEBYLEX", W, require_version="2.8.9")
Z_REM_RANGE_BY_RANK = _zset("ZREMRANGEBYRANK", W, require_version="2.0.0")
Z_REM_RANGE_BY_SCORE = _zset("ZREMRANGEBYSCORE", W, require_version="1.2.0")
Z_REV_RANGE = _zset("ZREVRANGE", R, cacheable=True, require_version="1.2.0", **_deprecated("6.2.0", "ZRANGE with REV"))
Z_REV_RANGE_WITH_SCORES = _zset(
    "ZREVRANGE",
    R,
    cacheable=True,
    variant="WITHSCORES",
    require_version="1.2.0",
    **_deprecated("6.2.0", "ZRANGE with REV"),
)
Z_REV_RANGE_BY_LEX = _zset(
    "ZREVRANGEBYLEX", R, cacheable=True, require_version="2.8.9", **_deprecated("6.2.0", "ZRANGE with REV BYLEX")
)
Z_REV_RANGE_BY_SCORE = _zset(
    "ZREVRANGEBYSCORE", R, cacheable=True, require_version="2.2.0", **_deprecated("6.2.0", "ZRANGE with REV BYSCORE")
)
Z_REV_RANGE_BY_SCORE_WITH_SCORES = _zset(
    "ZREVRANGEBYSCORE",
    R,
    cacheable=True,
    variant="WITHSCORES",
    require_version="2.2.0",
    **_deprecated("6.2.0", "ZRANGE with REV BYSCORE"),
)
Z_REV_RANK = _zset("ZREVRANK", R, cacheable=True, require_version="2.0.0")
Z_REV_RANK_WITH_SCORE = _zset("ZREVRANK", R, cacheable=True, variant="WITHSCORE", require_version="7.2.0")
Z_SCAN = _zset("ZSCAN", R, require_version="2.8.0")
Z_SCORE = _zset("ZSCORE", R, cacheable=True, require_version="1.2.0")
Z_UNION = _zset("ZUNION", R, keyed=MANY, require_version="6.2.0")
Z_UNION_WITH_SCORES = _zset("ZUNION", R, keyed=MANY, variant="WITHSCORES", require_version="6.2.0")
Z_UNION_STORE = _zset("ZUNIONSTORE", W, keyed=MANY, require_version="2.0.0")

# =============================================================================
# Stream
# =============================================================================


def _stream(name: str, category: Category, **kw) -> Command:
    return Command(name, "Stream", category, **kw)


X_ACK = _stream("XACK", W, require_version="5.0.0")
X_ADD = _stream("XADD", W, require_version="5.0.0")
X_ADD_NO_MK_STREAM = _stream("XADD", W, variant="NOMKSTREAM", require_version="6.2.0")
X_ADD_MAX_LEN = _stream("XADD", W, variant="MAXLEN", require_version="5.0.0")
X_ADD_MIN_ID = _stream("XADD", W, variant="MINID", require_version="6.2.0")
X_ADD_LIMIT = _stream("XADD", W, variant="LIMIT", require_version="6.2.0")
X_AUTO_CLAIM = _stream("XAUTOCLAIM", W, require_version="6.2.0")
X_AUTO_CLAIM_JUST_ID = _stream("XAUTOCLAIM", W, variant="JUSTID", require_version="6.2.0")
X_CLAIM = _stream("XCLAIM", W, require_version="5.0.0")
X_CLAIM_JUST_ID = _stream("XCLAIM", W, variant="JUSTID", require_version="5.0.0")
X_DEL = _stream("XDEL", W, require_version="5.0.0")
X_GROUP_CREATE = _stream("XGROUP CREATE", W, require_version="5.0.0")
X_GROUP_CREATE_MK_STREAM = _stream("XGROUP CREATE", W, variant="MKSTREAM", require_version="5.0.0")
X_GROUP_CREATE_CONSUMER = _stream("XGROUP CREATECONSUMER", W, require_version="6.2.0")
X_GROUP_DEL_CONSUMER = _stream("XGROUP DELCONSUMER", W, require_version="5.0.0")
X_GROUP_DESTROY = _stream("XGROUP DESTROY", W, require_version="5.0.0")
X_GROUP_SET_ID = _stream("XGROUP SETID", W, require_version="5.0.0")
X_INFO_CONSUMERS = _stream("XINFO CONSUMERS", R, require_version="5.0.0")
X_INFO_GROUPS = _stream("XINFO GROUPS", R, require_version="5.0.0")
X_INFO_STREAM = _stream("XINFO STREAM", R, require_version="5.0.0")
X_INFO_STREAM_FULL = _stream("XINFO STREAM", R, variant="FULL", require_version="6.0.0")
X_LEN = _stream("XLEN", R, require_version="5.0.0")
X_PENDING = _stream("XPENDING", R, require_version="5.0.0")
X_PENDING_EXT = _stream("XPENDING", R, variant="EXT", require_version="5.0.0")
X_RANGE = _stream("XRANGE", R, require_version="5.0.0")
X_RANGE_N = _stream("XRANGE", R, variant="COUNT", require_version="5.0.0")
X_READ = _stream("XREAD", B, keyed=MANY, require_version="5.0.0")
X_READ_GROUP = _stream("XREADGROUP", B, keyed=MANY, require_version="5.0.0")
X_REV_RANGE = _stream("XREVRANGE", R, require_version="5.0.0")
X_REV_RANGE_N = _stream("XREVRANGE", R, variant="COUNT", require_version="5.0.0")
X_TRIM_MAX_LEN = _stream("XTRIM", W, variant="MAXLEN", require_version="5.0.0")
X_TRIM_MAX_LEN_APPROX = _stream("XTRIM", W, variant="MAXLEN APPROX", require_version="6.2.0")
X_TRIM_MIN_ID = _stream("XTRIM", W, variant="MINID", require_version="6.2.0")
X_TRIM_MIN_ID_APPROX = _stream("XTRIM", W, variant="MINID APPROX", require_version="6.2.0")

# =============================================================================
# String
# =============================================================================


def _string(name: str, category: Category, **kw) -> Command:
    return Command(name, "String", category, **kw)


APPEND = _string("APPEND", W, require_version="2.0.0")
DECR = _string("DECR", W, require_version="1.0.0")
DECR_BY = _string("DECRBY", W, require_version="1.0.0")
GET = _string("GET", R, cacheable=True, require_version="1.0.0")
GET_DEL = _string("GETDEL", W, require_version="6.2.0")
GET_EX = _string("GETEX", W, require_version="6.2.0")
GET_RANGE = _string("GETRANGE", R, cacheable=True, require_version="2.4.0")
GET_SET = _string("GETSET", W, require_version="1.0.0", **_deprecated("6.2.0", "SET with the GET argument"))
INCR = _string("INCR", W, require_version="1.0.0")
INCR_BY = _string("INCRBY", W, require_version="1.0.0")
INCR_BY_FLOAT = _string("INCRBYFLOAT", W, require_version="2.6.0")
M_GET = _string("MGET", R, keyed=MANY, require_version="1.0.0")
M_SET = _string("MSET", W, keyed=MANY, require_version="1.0.1")
M_SET_NX = _string("MSETNX", W, keyed=MANY, require_version="1.0.1")
SET = _string("SET", W, require_version="1.0.0")
SET_EX = _string("SET", W, variant="EX", require_version="2.6.12")
SET_KEEP_TTL = _string("SET", W, variant="KEEPTTL", require_version="6.0.0")
SET_NX = _string("SET", W, variant="NX", require_version="2.6.12")
SET_XX = _string("SET", W, variant="XX", require_version="2.6.12")
SET_GET = _string("SET", W, variant="GET", require_version="6.2.0")
SET_NX_GET = _string("SET", W, variant="NX GET", require_version="7.0.0")
SET_ARGS_EX = _string("SET", W, variant="EXAT", require_version="6.2.0")
SET_RANGE = _string("SETRANGE", W, require_version="2.2.0")
STR_LEN = _string("STRLEN", R, cacheable=True, require_version="2.2.0")

# =============================================================================
# Cluster
# =============================================================================


def _cluster(name: str, keyed: Keyed = NONE, **kw) -> Command:
    return Command(name, "Cluster", A, keyed=keyed, **kw)


CLUSTER_ADD_SLOTS = _cluster("CLUSTER ADDSLOTS", require_version="3.0.0")
CLUSTER_ADD_SLOTS_RANGE = _cluster("CLUSTER ADDSLOTSRANGE", require_version="7.0.0")
CLUSTER_COUNT_FAILURE_REPORTS = _cluster("CLUSTER COUNT-FAILURE-REPORTS", require_version="3.0.0")
CLUSTER_COUNT_KEYS_IN_SLOT = _cluster("CLUSTER COUNTKEYSINSLOT", require_version="3.0.0")
CLUSTER_DEL_SLOTS = _cluster("CLUSTER DELSLOTS", require_version="3.0.0")
CLUSTER_DEL_SLOTS_RANGE = _cluster("CLUSTER DELSLOTSRANGE", require_version="7.0.0")
CLUSTER_FAILOVER = _cluster("CLUSTER FAILOVER", require_version="3.0.0")
CLUSTER_FORGET = _cluster("CLUSTER FORGET", require_version="3.0.0")
CLUSTER_GET_KEYS_IN_SLOT = _cluster("CLUSTER GETKEYSINSLOT", require_version="3.0.0")
CLUSTER_INFO = _cluster("CLUSTER INFO", require_version="3.0.0")
CLUSTER_KEY_SLOT = _cluster("CLUSTER KEYSLOT", require_version="3.0.0")
CLUSTER_MEET = _cluster("CLUSTER MEET", require_version="3.0.0")
CLUSTER_NODES = _cluster("CLUSTER NODES", require_version="3.0.0")
CLUSTER_REPLICATE = _cluster("CLUSTER REPLICATE", require_version="3.0.0")
CLUSTER_RESET_SOFT = _cluster("CLUSTER RESET", variant="SOFT", require_version="3.0.0")
CLUSTER_RESET_HARD = _cluster("CLUSTER RESET", variant="HARD", require_version="3.0.0")
CLUSTER_SAVE_CONFIG = _cluster("CLUSTER SAVECONFIG", require_version="3.0.0")
CLUSTER_SLAVES = _cluster("CLUSTER SLAVES", require_version="3.0.0", **_deprecated("5.0.0", "CLUSTER REPLICAS"))
CLUSTER_SLOTS = _cluster("CLUSTER SLOTS", require_version="3.0.0", **_deprecated("7.0.0", "CLUSTER SHARDS"))
CLUSTER_SHARDS = _cluster("CLUSTER SHARDS", require_version="7.0.0")
READ_ONLY = _cluster("READONLY", require_version="3.0.0")
READ_WRITE = _cluster("READWRITE", require_version="3.0.0")

# =============================================================================
# Connection
# =============================================================================


def _connection(name: str, **kw) -> Command:
    return Command(name, "Connection", C, keyed=NONE, **kw)


CLIENT_GET_NAME = _connection("CLIENT GETNAME", require_version="2.6.9")
CLIENT_ID = _connection("CLIENT ID", require_version="5.0.0")
CLIENT_KILL = _connection("CLIENT KILL", require_version="2.4.0")
CLIENT_KILL_BY_FILTER = _connection("CLIENT KILL", variant="FILTER", require_version="2.8.12")
CLIENT_KILL_BY_FILTER_WITH_LADDR = _connection("CLIENT KILL", variant="LADDR", require_version="6.2.0")
CLIENT_KILL_BY_FILTER_WITH_TYPE = _connection("CLIENT KILL", variant="TYPE", require_version="2.8.12")
CLIENT_LIST = _connection("CLIENT LIST", require_version="2.4.0")
CLIENT_PAUSE = _connection("CLIENT PAUSE", require_version="2.9.50")
CLIENT_SET_NAME = _connection("CLIENT SETNAME", require_version="2.6.9")
CLIENT_UNBLOCK = _connection("CLIENT UNBLOCK", require_version="5.0.0")
CLIENT_UNBLOCK_WITH_ERROR = _connection("CLIENT UNBLOCK", variant="ERROR", require_version="5.0.0")
CLIENT_UNPAUSE = _connection("CLIENT UNPAUSE", require_version="6.2.0")
ECHO = _connection("ECHO", require_version="1.0.0")
PING = _connection("PING", require_version="1.0.0")
QUIT = _connection(
    "QUIT",
    require_version="1.0.0",
    **_deprecated("7.2.0", etc="clients should close the connection when no longer needed"),
)

# =============================================================================
# Composite
# =============================================================================

PIPELINE = Command("PIPELINE", "Pipeline", W, keyed=MANY)
COMPLETED = Command("COMPLETED", "Completed", W, keyed=NONE)

REGISTRY: dict[str, Command] = {
    name: value for name, value in list(globals().items()) if isinstance(value, Command) and name.isupper()
}


def cacheable() -> list[Command]:
    """Return every handle a cache view may serve."""
    return [cmd for cmd in REGISTRY.values() if cmd.cacheable]
