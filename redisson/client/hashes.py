from __future__ import annotations

from typing import TYPE_CHECKING, Any

from redisson import args as _args
from redisson import commands as c
from redisson.exceptions import ArgumentError
from redisson.results import (
    BoolCmd,
    FloatCmd,
    IntCmd,
    IntSliceCmd,
    KeyValueSliceCmd,
    ScanCmd,
    SliceCmd,
    StringCmd,
    StringSliceCmd,
    StringStringMapCmd,
)

if TYPE_CHECKING:
    from datetime import datetime

    from redisson.commands import Command
    from redisson.types import Duration, KeyT

# Per-field expiry handles by condition flag.
_H_EXPIRE = {"": c.H_EXPIRE, "NX": c.H_EXPIRE_NX, "XX": c.H_EXPIRE_XX, "GT": c.H_EXPIRE_GT, "LT": c.H_EXPIRE_LT}
_H_EXPIRE_AT = {
    "": c.H_EXPIRE_AT,
    "NX": c.H_EXPIRE_AT_NX,
    "XX": c.H_EXPIRE_AT_XX,
    "GT": c.H_EXPIRE_AT_GT,
    "LT": c.H_EXPIRE_AT_LT,
}
_H_P_EXPIRE = {
    "": c.H_P_EXPIRE,
    "NX": c.H_P_EXPIRE_NX,
    "XX": c.H_P_EXPIRE_XX,
    "GT": c.H_P_EXPIRE_GT,
    "LT": c.H_P_EXPIRE_LT,
}
_H_P_EXPIRE_AT = {
    "": c.H_P_EXPIRE_AT,
    "NX": c.H_P_EXPIRE_AT_NX,
    "XX": c.H_P_EXPIRE_AT_XX,
    "GT": c.H_P_EXPIRE_AT_GT,
    "LT": c.H_P_EXPIRE_AT_LT,
}


def _fields_args(fields: tuple[str, ...]) -> list[Any]:
    return ["FIELDS", len(fields), *fields]


def _pick(table: dict[str, Command], condition: str) -> tuple[Command, list[str]]:
    flag = condition.upper()
    if flag not in table:
        msg = f"expiry condition must be NX, XX, GT or LT, got {condition!r}"
        raise ArgumentError(msg)
    return table[flag], [flag] if flag else []


class HashCommandsMixin:
    """Redis hash operations."""

    # Type hints for base class attributes
    _run: Any

    def h_del(self, key: KeyT, *fields: str) -> IntCmd:
        command = c.H_M_DEL if len(fields) > 1 else c.H_DEL
        return self._run(command, [key, *fields], IntCmd)

    def h_exists(self, key: KeyT, field: str) -> BoolCmd:
        return self._run(c.H_EXISTS, [key, field], BoolCmd)

    def h_get(self, key: KeyT, field: str) -> StringCmd:
        return self._run(c.H_GET, [key, field], StringCmd)

    def h_get_all(self, key: KeyT) -> StringStringMapCmd:
        return self._run(c.H_GET_ALL, [key], StringStringMapCmd)

    def h_incr_by(self, key: KeyT, field: str, increment: int) -> IntCmd:
        return self._run(c.H_INCR_BY, [key, field, increment], IntCmd)

    def h_incr_by_float(self, key: KeyT, field: str, increment: float) -> FloatCmd:
        return self._run(c.H_INCR_BY_FLOAT, [key, field, float(increment)], FloatCmd)

    def h_keys(self, key: KeyT) -> StringSliceCmd:
        return self._run(c.H_KEYS, [key], StringSliceCmd)

    def h_len(self, key: KeyT) -> IntCmd:
        return self._run(c.H_LEN, [key], IntCmd)

    def h_m_get(self, key: KeyT, *fields: str) -> SliceCmd:
        """Values of ``fields``; missing fields are ``None``."""
        return self._run(c.H_M_GET, [key, *fields], SliceCmd)

    def h_m_set(self, key: KeyT, *values: Any) -> BoolCmd:
        """Deprecated ``HMSET``; prefer ``h_set`` which takes the same input."""
        return self._run(c.H_M_SET, [key, *_args.flatten_pairs(*values)], BoolCmd)

    def h_set(self, key: KeyT, *values: Any) -> IntCmd:
        """Set fields from a mapping, pairs or alternating fields and values.

        Returns the number of fields that were added.
        """
        flat = _args.flatten_pairs(*values)
        command = c.H_M_SET_X if len(flat) > 2 else c.H_SET
        return self._run(command, [key, *flat], IntCmd)

    def h_set_nx(self, key: KeyT, field: str, value: Any) -> BoolCmd:
        return self._run(c.H_SET_NX, [key, field, value], BoolCmd)

    def h_str_len(self, key: KeyT, field: str) -> IntCmd:
        return self._run(c.H_STR_LEN, [key, field], IntCmd)

    def h_vals(self, key: KeyT) -> StringSliceCmd:
        return self._run(c.H_VALS, [key], StringSliceCmd)

    def h_rand_field(self, key: KeyT, count: int) -> StringSliceCmd:
        return self._run(c.H_RAND_FIELD, [key, count], StringSliceCmd)

    def h_rand_field_with_values(self, key: KeyT, count: int) -> KeyValueSliceCmd:
        return self._run(c.H_RAND_FIELD_WITH_VALUES, [key, count, "WITHVALUES"], KeyValueSliceCmd)

    def h_scan(self, key: KeyT, cursor: int, match: str = "", count: int = 0) -> ScanCmd:
        """One ``HSCAN`` page; the page alternates fields and values."""
        argv: list[Any] = [key, cursor]
        if match:
            argv.extend(["MATCH", match])
        if count > 0:
            argv.extend(["COUNT", count])
        return self._run(c.H_SCAN, argv, ScanCmd)

    # =========================================================================
    # Field expiry
    # =========================================================================

    def h_expire(self, key: KeyT, expiration: Duration, *fields: str, condition: str = "") -> IntSliceCmd:
        """Per-field expiry in seconds. ``condition`` is ``NX``, ``XX``, ``GT`` or ``LT``."""
        command, flag = _pick(_H_EXPIRE, condition)
        argv = [key, _args.format_sec(expiration), *flag, *_fields_args(fields)]
        return self._run(command, argv, IntSliceCmd)

    def h_expire_at(self, key: KeyT, at: datetime, *fields: str, condition: str = "") -> IntSliceCmd:
        command, flag = _pick(_H_EXPIRE_AT, condition)
        argv = [key, _args.unix_seconds(at), *flag, *_fields_args(fields)]
        return self._run(command, argv, IntSliceCmd)

    def h_p_expire(self, key: KeyT, expiration: Duration, *fields: str, condition: str = "") -> IntSliceCmd:
        command, flag = _pick(_H_P_EXPIRE, condition)
        argv = [key, _args.format_ms(expiration), *flag, *_fields_args(fields)]
        return self._run(command, argv, IntSliceCmd)

    def h_p_expire_at(self, key: KeyT, at: datetime, *fields: str, condition: str = "") -> IntSliceCmd:
        command, flag = _pick(_H_P_EXPIRE_AT, condition)
        argv = [key, _args.unix_ms(at), *flag, *_fields_args(fields)]
        return self._run(command, argv, IntSliceCmd)

    def h_expire_time(self, key: KeyT, *fields: str) -> IntSliceCmd:
        return self._run(c.H_EXPIRE_TIME, [key, *_fields_args(fields)], IntSliceCmd)

    def h_p_expire_time(self, key: KeyT, *fields: str) -> IntSliceCmd:
        return self._run(c.H_P_EXPIRE_TIME, [key, *_fields_args(fields)], IntSliceCmd)

    def h_persist(self, key: KeyT, *fields: str) -> IntSliceCmd:
        return self._run(c.H_PERSIST, [key, *_fields_args(fields)], IntSliceCmd)

    def h_ttl(self, key: KeyT, *fields: str) -> IntSliceCmd:
        return self._run(c.H_TTL, [key, *_fields_args(fields)], IntSliceCmd)

    def h_pttl(self, key: KeyT, *fields: str) -> IntSliceCmd:
        return self._run(c.H_PTTL, [key, *_fields_args(fields)], IntSliceCmd)
