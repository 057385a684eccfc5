from __future__ import annotations

from typing import TYPE_CHECKING, Any

from redisson import commands as c
from redisson.exceptions import ArgumentError
from redisson.results import (
    FloatCmd,
    FloatSliceCmd,
    IntCmd,
    RankWithScoreCmd,
    ScanCmd,
    StringSliceCmd,
    ZSliceCmd,
    ZSliceWithKeyCmd,
    ZWithKeyCmd,
)

if TYPE_CHECKING:
    from redisson.types import Duration, KeyT, Z, ZAddArgs, ZRangeArgs, ZRangeBy, ZStore


def _members_args(members: tuple[Z, ...] | list[Z]) -> list[Any]:
    argv: list[Any] = []
    for z in members:
        argv.extend((float(z.score), z.member))
    return argv


def _store_args(store: ZStore) -> list[Any]:
    argv: list[Any] = [len(store.keys), *store.keys]
    if store.weights:
        argv.append("WEIGHTS")
        argv.extend(float(w) for w in store.weights)
    if store.aggregate:
        aggregate = store.aggregate.upper()
        if aggregate not in ("SUM", "MIN", "MAX"):
            msg = f"AGGREGATE must be SUM, MIN or MAX, got {store.aggregate!r}"
            raise ArgumentError(msg)
        argv.extend(["AGGREGATE", aggregate])
    return argv


def _limit_args(offset: int, count: int) -> list[Any]:
    if offset != 0 or count != 0:
        return ["LIMIT", offset, count]
    return []


def _range_by_args(key: KeyT, opt: ZRangeBy, rev: bool) -> list[Any]:
    bounds = [opt.max, opt.min] if rev else [opt.min, opt.max]
    return [key, *bounds, *_limit_args(opt.offset, opt.count)]


def _range_args(z: ZRangeArgs) -> list[Any]:
    """``ZRANGE`` argv. With ``rev`` and a score or lex range, the bounds swap
    so callers always pass the low bound as ``start``.
    """
    if z.by_score and z.by_lex:
        msg = "ZRANGE takes BYSCORE or BYLEX, not both"
        raise ArgumentError(msg)
    if z.rev and (z.by_score or z.by_lex):
        argv: list[Any] = [z.key, z.stop, z.start]
    else:
        argv = [z.key, z.start, z.stop]
    if z.by_score:
        argv.append("BYSCORE")
    elif z.by_lex:
        argv.append("BYLEX")
    if z.rev:
        argv.append("REV")
    if z.offset != 0 or z.count != 0:
        if not (z.by_score or z.by_lex):
            msg = "ZRANGE LIMIT needs BYSCORE or BYLEX"
            raise ArgumentError(msg)
        argv.extend(_limit_args(z.offset, z.count))
    return argv


def _side(order: str) -> str:
    side = order.upper()
    if side not in ("MIN", "MAX"):
        msg = f"pop order must be MIN or MAX, got {order!r}"
        raise ArgumentError(msg)
    return side


class SortedSetCommandsMixin:
    """Redis sorted set operations."""

    # Type hints for base class attributes
    _run: Any
    _block_timeout: Any

    # =========================================================================
    # Blocking
    # =========================================================================

    def bz_m_pop(self, timeout: Duration, order: str, count: int, *keys: KeyT) -> ZSliceWithKeyCmd:
        argv: list[Any] = [self._block_timeout(timeout), len(keys), *keys, _side(order)]
        if count > 0:
            argv.extend(["COUNT", count])
        return self._run(c.BZ_M_POP, argv, ZSliceWithKeyCmd, keys=keys)

    def bz_pop_max(self, timeout: Duration, *keys: KeyT) -> ZWithKeyCmd:
        return self._run(c.BZ_POP_MAX, [*keys, self._block_timeout(timeout)], ZWithKeyCmd, keys=keys)

    def bz_pop_min(self, timeout: Duration, *keys: KeyT) -> ZWithKeyCmd:
        return self._run(c.BZ_POP_MIN, [*keys, self._block_timeout(timeout)], ZWithKeyCmd, keys=keys)

    # =========================================================================
    # ZADD
    # =========================================================================

    def z_add(self, key: KeyT, *members: Z) -> IntCmd:
        command = c.Z_M_ADD if len(members) > 1 else c.Z_ADD
        return self._run(command, [key, *_members_args(members)], IntCmd)

    def z_add_nx(self, key: KeyT, *members: Z) -> IntCmd:
        return self._run(c.Z_ADD_NX, [key, "NX", *_members_args(members)], IntCmd)

    def z_add_xx(self, key: KeyT, *members: Z) -> IntCmd:
        return self._run(c.Z_ADD_XX, [key, "XX", *_members_args(members)], IntCmd)

    def z_add_gt(self, key: KeyT, *members: Z) -> IntCmd:
        return self._run(c.Z_ADD_GT, [key, "GT", *_members_args(members)], IntCmd)

    def z_add_lt(self, key: KeyT, *members: Z) -> IntCmd:
        return self._run(c.Z_ADD_LT, [key, "LT", *_members_args(members)], IntCmd)

    def z_add_ch(self, key: KeyT, *members: Z) -> IntCmd:
        return self._run(c.Z_ADD_CH, [key, "CH", *_members_args(members)], IntCmd)

    def z_add_args(self, key: KeyT, a: ZAddArgs) -> IntCmd:
        """``ZADD`` with any valid combination of ``NX|XX``, ``GT|LT`` and ``CH``."""
        command, flags = _z_add_flags(a)
        return self._run(command, [key, *flags, *_members_args(a.members)], IntCmd)

    def z_add_args_incr(self, key: KeyT, a: ZAddArgs) -> FloatCmd:
        """``ZADD ... INCR``; a ``Nil`` error when a condition refused it."""
        if len(a.members) != 1:
            msg = "ZADD INCR takes exactly one member"
            raise ArgumentError(msg)
        _, flags = _z_add_flags(a)
        return self._run(c.Z_ADD_INCR, [key, *flags, "INCR", *_members_args(a.members)], FloatCmd)

    # =========================================================================
    # Reads
    # =========================================================================

    def z_card(self, key: KeyT) -> IntCmd:
        return self._run(c.Z_CARD, [key], IntCmd)

    def z_count(self, key: KeyT, min: str, max: str) -> IntCmd:
        return self._run(c.Z_COUNT, [key, min, max], IntCmd)

    def z_lex_count(self, key: KeyT, min: str, max: str) -> IntCmd:
        return self._run(c.Z_LEX_COUNT, [key, min, max], IntCmd)

    def z_m_score(self, key: KeyT, *members: Any) -> FloatSliceCmd:
        """Scores of ``members``; missing members score ``0.0``."""
        return self._run(c.Z_M_SCORE, [key, *members], FloatSliceCmd)

    def z_rand_member(self, key: KeyT, count: int) -> StringSliceCmd:
        return self._run(c.Z_RAND_MEMBER, [key, count], StringSliceCmd)

    def z_rand_member_with_scores(self, key: KeyT, count: int) -> ZSliceCmd:
        return self._run(c.Z_RAND_MEMBER_WITH_SCORES, [key, count, "WITHSCORES"], ZSliceCmd)

    def z_range(self, key: KeyT, start: int, stop: int) -> StringSliceCmd:
        return self._run(c.Z_RANGE, [key, start, stop], StringSliceCmd)

    def z_range_with_scores(self, key: KeyT, start: int, stop: int) -> ZSliceCmd:
        return self._run(c.Z_RANGE_WITH_SCORES, [key, start, stop, "WITHSCORES"], ZSliceCmd)

    def z_range_args(self, z: ZRangeArgs) -> StringSliceCmd:
        return self._run(c.Z_RANGE_ARGS, _range_args(z), StringSliceCmd)

    def z_range_args_with_scores(self, z: ZRangeArgs) -> ZSliceCmd:
        return self._run(c.Z_RANGE_ARGS_WITH_SCORES, [*_range_args(z), "WITHSCORES"], ZSliceCmd)

    def z_range_by_lex(self, key: KeyT, opt: ZRangeBy) -> StringSliceCmd:
        return self._run(c.Z_RANGE_BY_LEX, _range_by_args(key, opt, rev=False), StringSliceCmd)

    def z_range_by_score(self, key: KeyT, opt: ZRangeBy) -> StringSliceCmd:
        return self._run(c.Z_RANGE_BY_SCORE, _range_by_args(key, opt, rev=False), StringSliceCmd)

    def z_range_by_score_with_scores(self, key: KeyT, opt: ZRangeBy) -> ZSliceCmd:
        argv = [*_range_by_args(key, opt, rev=False), "WITHSCORES"]
        return self._run(c.Z_RANGE_BY_SCORE_WITH_SCORES, argv, ZSliceCmd)

    def z_rank(self, key: KeyT, member: Any) -> IntCmd:
        return self._run(c.Z_RANK, [key, member], IntCmd)

    def z_rank_with_score(self, key: KeyT, member: Any) -> RankWithScoreCmd:
        return self._run(c.Z_RANK_WITH_SCORE, [key, member, "WITHSCORE"], RankWithScoreCmd)

    def z_rev_range(self, key: KeyT, start: int, stop: int) -> StringSliceCmd:
        return self._run(c.Z_REV_RANGE, [key, start, stop], StringSliceCmd)

    def z_rev_range_with_scores(self, key: KeyT, start: int, stop: int) -> ZSliceCmd:
        return self._run(c.Z_REV_RANGE_WITH_SCORES, [key, start, stop, "WITHSCORES"], ZSliceCmd)

    def z_rev_range_by_lex(self, key: KeyT, opt: ZRangeBy) -> StringSliceCmd:
        return self._run(c.Z_REV_RANGE_BY_LEX, _range_by_args(key, opt, rev=True), StringSliceCmd)

    def z_rev_range_by_score(self, key: KeyT, opt: ZRangeBy) -> StringSliceCmd:
        return self._run(c.Z_REV_RANGE_BY_SCORE, _range_by_args(key, opt, rev=True), StringSliceCmd)

    def z_rev_range_by_score_with_scores(self, key: KeyT, opt: ZRangeBy) -> ZSliceCmd:
        argv = [*_range_by_args(key, opt, rev=True), "WITHSCORES"]
        return self._run(c.Z_REV_RANGE_BY_SCORE_WITH_SCORES, argv, ZSliceCmd)

    def z_rev_rank(self, key: KeyT, member: Any) -> IntCmd:
        return self._run(c.Z_REV_RANK, [key, member], IntCmd)

    def z_rev_rank_with_score(self, key: KeyT, member: Any) -> RankWithScoreCmd:
        return self._run(c.Z_REV_RANK_WITH_SCORE, [key, member, "WITHSCORE"], RankWithScoreCmd)

    def z_scan(self, key: KeyT, cursor: int, match: str = "", count: int = 0) -> ScanCmd:
        argv: list[Any] = [key, cursor]
        if match:
            argv.extend(["MATCH", match])
        if count > 0:
            argv.extend(["COUNT", count])
        return self._run(c.Z_SCAN, argv, ScanCmd)

    def z_score(self, key: KeyT, member: Any) -> FloatCmd:
        return self._run(c.Z_SCORE, [key, member], FloatCmd)

    # =========================================================================
    # Writes
    # =========================================================================

    def z_incr_by(self, key: KeyT, increment: float, member: Any) -> FloatCmd:
        return self._run(c.Z_INCR_BY, [key, float(increment), member], FloatCmd)

    def z_m_pop(self, order: str, count: int, *keys: KeyT) -> ZSliceWithKeyCmd:
        argv: list[Any] = [len(keys), *keys, _side(order)]
        if count > 0:
            argv.extend(["COUNT", count])
        return self._run(c.Z_M_POP, argv, ZSliceWithKeyCmd, keys=keys)

    def z_pop_max(self, key: KeyT, count: int = 0) -> ZSliceCmd:
        argv: list[Any] = [key]
        if count > 0:
            argv.append(count)
        return self._run(c.Z_POP_MAX, argv, ZSliceCmd)

    def z_pop_min(self, key: KeyT, count: int = 0) -> ZSliceCmd:
        argv: list[Any] = [key]
        if count > 0:
            argv.append(count)
        return self._run(c.Z_POP_MIN, argv, ZSliceCmd)

    def z_range_store(self, destination: KeyT, z: ZRangeArgs) -> IntCmd:
        return self._run(c.Z_RANGE_STORE, [destination, *_range_args(z)], IntCmd, keys=[destination, z.key])

    def z_rem(self, key: KeyT, *members: Any) -> IntCmd:
        command = c.Z_M_REM if len(members) > 1 else c.Z_REM
        return self._run(command, [key, *members], IntCmd)

    def z_rem_range_by_lex(self, key: KeyT, min: str, max: str) -> IntCmd:
        return self._run(c.Z_REM_RANGE_BY_LEX, [key, min, max], IntCmd)

    def z_rem_range_by_rank(self, key: KeyT, start: int, stop: int) -> IntCmd:
        return self._run(c.Z_REM_RANGE_BY_RANK, [key, start, stop], IntCmd)

    def z_rem_range_by_score(self, key: KeyT, min: str, max: str) -> IntCmd:
        return self._run(c.Z_REM_RANGE_BY_SCORE, [key, min, max], IntCmd)

    # =========================================================================
    # Set algebra
    # =========================================================================

    def z_diff(self, *keys: KeyT) -> StringSliceCmd:
        return self._run(c.Z_DIFF, [len(keys), *keys], StringSliceCmd, keys=keys)

    def z_diff_with_scores(self, *keys: KeyT) -> ZSliceCmd:
        return self._run(c.Z_DIFF_WITH_SCORES, [len(keys), *keys, "WITHSCORES"], ZSliceCmd, keys=keys)

    def z_diff_store(self, destination: KeyT, *keys: KeyT) -> IntCmd:
        return self._run(c.Z_DIFF_STORE, [destination, len(keys), *keys], IntCmd, keys=[destination, *keys])

    def z_inter(self, store: ZStore) -> StringSliceCmd:
        return self._run(c.Z_INTER, _store_args(store), StringSliceCmd, keys=store.keys)

    def z_inter_with_scores(self, store: ZStore) -> ZSliceCmd:
        return self._run(c.Z_INTER_WITH_SCORES, [*_store_args(store), "WITHSCORES"], ZSliceCmd, keys=store.keys)

    def z_inter_card(self, limit: int, *keys: KeyT) -> IntCmd:
        argv: list[Any] = [len(keys), *keys]
        if limit > 0:
            argv.extend(["LIMIT", limit])
        return self._run(c.Z_INTER_CARD, argv, IntCmd, keys=keys)

    def z_inter_store(self, destination: KeyT, store: ZStore) -> IntCmd:
        argv = [destination, *_store_args(store)]
        return self._run(c.Z_INTER_STORE, argv, IntCmd, keys=[destination, *store.keys])

    def z_union(self, store: ZStore) -> StringSliceCmd:
        return self._run(c.Z_UNION, _store_args(store), StringSliceCmd, keys=store.keys)

    def z_union_with_scores(self, store: ZStore) -> ZSliceCmd:
        return self._run(c.Z_UNION_WITH_SCORES, [*_store_args(store), "WITHSCORES"], ZSliceCmd, keys=store.keys)

    def z_union_store(self, destination: KeyT, store: ZStore) -> IntCmd:
        argv = [destination, *_store_args(store)]
        return self._run(c.Z_UNION_STORE, argv, IntCmd, keys=[destination, *store.keys])


def _z_add_flags(a: ZAddArgs) -> tuple[Any, list[str]]:
    if a.nx and a.xx:
        msg = "ZADD takes NX or XX, not both"
        raise ArgumentError(msg)
    if a.gt and a.lt:
        msg = "ZADD takes GT or LT, not both"
        raise ArgumentError(msg)
    if a.nx and (a.gt or a.lt):
        msg = "ZADD NX cannot be combined with GT or LT"
        raise ArgumentError(msg)

    flags: list[str] = []
    command = c.Z_M_ADD if len(a.members) > 1 else c.Z_ADD
    if a.nx:
        flags.append("NX")
        command = c.Z_ADD_NX
    elif a.xx:
        flags.append("XX")
        command = c.Z_ADD_XX
    if a.gt:
        flags.append("GT")
        command = c.Z_ADD_GT
    elif a.lt:
        flags.append("LT")
        command = c.Z_ADD_LT
    if a.ch:
        flags.append("CH")
        if command in (c.Z_ADD, c.Z_M_ADD):
            command = c.Z_ADD_CH
    return command, flags
