from __future__ import annotations

from typing import TYPE_CHECKING, Any

from redisson import args as _args
from redisson import commands as c
from redisson.exceptions import ArgumentError, is_nil
from redisson.results import (
    BoolCmd,
    FloatCmd,
    IntCmd,
    SliceCmd,
    StatusCmd,
    StringCmd,
)

if TYPE_CHECKING:
    from datetime import datetime

    from redisson.types import Duration, KeyT, SetArgs


class StringCommandsMixin:
    """Redis string operations."""

    # Type hints for base class attributes
    _run: Any

    def append(self, key: KeyT, value: Any) -> IntCmd:
        return self._run(c.APPEND, [key, value], IntCmd)

    def decr(self, key: KeyT) -> IntCmd:
        return self._run(c.DECR, [key], IntCmd)

    def decr_by(self, key: KeyT, decrement: int) -> IntCmd:
        return self._run(c.DECR_BY, [key, decrement], IntCmd)

    def get(self, key: KeyT) -> StringCmd:
        return self._run(c.GET, [key], StringCmd)

    def get_del(self, key: KeyT) -> StringCmd:
        return self._run(c.GET_DEL, [key], StringCmd)

    def get_ex(self, key: KeyT, expiration: Duration) -> StringCmd:
        """Get the value and set or clear its expiry.

        A positive ``expiration`` sends ``EX``/``PX``; zero sends ``PERSIST``.
        """
        if _args.is_positive(expiration):
            tail = _args.expiry_args(expiration)
        else:
            tail = ["PERSIST"]
        return self._run(c.GET_EX, [key, *tail], StringCmd)

    def get_range(self, key: KeyT, start: int, end: int) -> StringCmd:
        return self._run(c.GET_RANGE, [key, start, end], StringCmd)

    def get_set(self, key: KeyT, value: Any) -> StringCmd:
        return self._run(c.GET_SET, [key, value], StringCmd)

    def incr(self, key: KeyT) -> IntCmd:
        return self._run(c.INCR, [key], IntCmd)

    def incr_by(self, key: KeyT, increment: int) -> IntCmd:
        return self._run(c.INCR_BY, [key, increment], IntCmd)

    def incr_by_float(self, key: KeyT, increment: float) -> FloatCmd:
        return self._run(c.INCR_BY_FLOAT, [key, float(increment)], FloatCmd)

    def m_get(self, *keys: KeyT) -> SliceCmd:
        """``MGET``; missing keys come back as ``None`` in their position."""
        return self._run(c.M_GET, keys, SliceCmd, keys=keys)

    def m_set(self, *values: Any) -> StatusCmd:
        """``MSET`` from a mapping, a list of pairs or alternating keys and values."""
        flat = _args.flatten_pairs(*values)
        return self._run(c.M_SET, flat, StatusCmd, keys=flat[::2])

    def m_set_nx(self, *values: Any) -> BoolCmd:
        flat = _args.flatten_pairs(*values)
        return self._run(c.M_SET_NX, flat, BoolCmd, keys=flat[::2])

    def set(self, key: KeyT, value: Any, expiration: Duration = 0) -> StatusCmd:
        """``SET`` with an optional expiry.

        ``KEEP_TTL`` keeps the current expiry, zero sets none.
        """
        if _args.is_keep_ttl(expiration):
            return self._run(c.SET_KEEP_TTL, [key, value, "KEEPTTL"], StatusCmd)
        tail = _args.expiry_args(expiration)
        command = c.SET_EX if tail else c.SET
        return self._run(command, [key, value, *tail], StatusCmd)

    def set_ex(self, key: KeyT, value: Any, expiration: Duration) -> StatusCmd:
        return self._run(c.SET_EX, [key, value, *_args.expiry_args(expiration)], StatusCmd)

    def set_nx(self, key: KeyT, value: Any, expiration: Duration = 0) -> BoolCmd:
        """Set only if the key does not exist. ``val`` tells whether it was set."""
        if _args.is_keep_ttl(expiration):
            tail = ["KEEPTTL"]
        else:
            tail = _args.expiry_args(expiration)
        return _nil_as_false(self._run(c.SET_NX, [key, value, *tail, "NX"], BoolCmd))

    def set_xx(self, key: KeyT, value: Any, expiration: Duration = 0) -> BoolCmd:
        """Set only if the key exists. ``val`` tells whether it was set."""
        if _args.is_keep_ttl(expiration):
            tail = ["KEEPTTL"]
        else:
            tail = _args.expiry_args(expiration)
        return _nil_as_false(self._run(c.SET_XX, [key, value, *tail, "XX"], BoolCmd))

    def set_get(self, key: KeyT, value: Any, expiration: Duration = 0) -> StringCmd:
        """``SET ... GET``, returning the previous value."""
        if _args.is_keep_ttl(expiration):
            tail = ["KEEPTTL"]
        else:
            tail = _args.expiry_args(expiration)
        return self._run(c.SET_GET, [key, value, *tail, "GET"], StringCmd)

    def set_nx_get(self, key: KeyT, value: Any, expiration: Duration = 0) -> StringCmd:
        tail = _args.expiry_args(expiration)
        return self._run(c.SET_NX_GET, [key, value, *tail, "NX", "GET"], StringCmd)

    def set_args(self, key: KeyT, value: Any, a: SetArgs) -> StringCmd:
        """``SET`` with the full option set of ``SetArgs``.

        The value is the previous one when ``a.get`` is set, ``"OK"`` when the
        write happened otherwise, and a ``Nil`` error when a condition failed.
        """
        mode = a.mode.upper()
        if mode not in ("", "NX", "XX"):
            msg = f"SET mode must be NX or XX, got {a.mode!r}"
            raise ArgumentError(msg)

        tail: list[Any] = []
        command = c.SET
        if a.keep_ttl:
            tail.append("KEEPTTL")
            command = c.SET_KEEP_TTL
        elif a.expire_at is not None:
            tail.extend(_expire_at_args(a.expire_at))
            command = c.SET_ARGS_EX
        elif _args.is_positive(a.ttl):
            tail.extend(_args.expiry_args(a.ttl))
            command = c.SET_EX
        if mode:
            tail.append(mode)
        if a.get:
            tail.append("GET")
            command = c.SET_NX_GET if mode == "NX" else c.SET_GET
        return self._run(command, [key, value, *tail], StringCmd)

    def set_range(self, key: KeyT, offset: int, value: Any) -> IntCmd:
        return self._run(c.SET_RANGE, [key, offset, value], IntCmd)

    def str_len(self, key: KeyT) -> IntCmd:
        return self._run(c.STR_LEN, [key], IntCmd)


def _expire_at_args(at: datetime) -> list[Any]:
    if at.microsecond:
        return ["PXAT", _args.unix_ms(at)]
    return ["EXAT", _args.unix_seconds(at)]


def _nil_as_false(cmd: BoolCmd) -> BoolCmd:
    # a refused conditional SET replies nil, which is a plain False here
    if is_nil(cmd.err):
        cmd.err = None
        cmd.val = False
    return cmd
