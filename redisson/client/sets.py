from __future__ import annotations

from typing import TYPE_CHECKING, Any

from redisson import commands as c
from redisson.results import (
    BoolCmd,
    BoolSliceCmd,
    IntCmd,
    ScanCmd,
    StringCmd,
    StringSetCmd,
    StringSliceCmd,
)

if TYPE_CHECKING:
    from redisson.types import KeyT


class SetCommandsMixin:
    """Redis set operations."""

    # Type hints for base class attributes
    _run: Any

    def s_add(self, key: KeyT, *members: Any) -> IntCmd:
        command = c.S_ADD_MULTIPLE if len(members) > 1 else c.S_ADD
        return self._run(command, [key, *members], IntCmd)

    def s_card(self, key: KeyT) -> IntCmd:
        return self._run(c.S_CARD, [key], IntCmd)

    def s_diff(self, *keys: KeyT) -> StringSliceCmd:
        return self._run(c.S_DIFF, keys, StringSliceCmd, keys=keys)

    def s_diff_store(self, destination: KeyT, *keys: KeyT) -> IntCmd:
        return self._run(c.S_DIFF_STORE, [destination, *keys], IntCmd, keys=[destination, *keys])

    def s_inter(self, *keys: KeyT) -> StringSliceCmd:
        return self._run(c.S_INTER, keys, StringSliceCmd, keys=keys)

    def s_inter_store(self, destination: KeyT, *keys: KeyT) -> IntCmd:
        return self._run(c.S_INTER_STORE, [destination, *keys], IntCmd, keys=[destination, *keys])

    def s_is_member(self, key: KeyT, member: Any) -> BoolCmd:
        return self._run(c.S_IS_MEMBER, [key, member], BoolCmd)

    def s_m_is_member(self, key: KeyT, *members: Any) -> BoolSliceCmd:
        return self._run(c.S_M_IS_MEMBER, [key, *members], BoolSliceCmd)

    def s_members(self, key: KeyT) -> StringSliceCmd:
        return self._run(c.S_MEMBERS, [key], StringSliceCmd)

    def s_members_set(self, key: KeyT) -> StringSetCmd:
        return self._run(c.S_MEMBERS_SET, [key], StringSetCmd)

    def s_move(self, source: KeyT, destination: KeyT, member: Any) -> BoolCmd:
        return self._run(c.S_MOVE, [source, destination, member], BoolCmd, keys=[source, destination])

    def s_pop(self, key: KeyT) -> StringCmd:
        return self._run(c.S_POP, [key], StringCmd)

    def s_pop_n(self, key: KeyT, count: int) -> StringSliceCmd:
        return self._run(c.S_POP_N, [key, count], StringSliceCmd)

    def s_rand_member(self, key: KeyT) -> StringCmd:
        return self._run(c.S_RAND_MEMBER, [key], StringCmd)

    def s_rand_member_n(self, key: KeyT, count: int) -> StringSliceCmd:
        return self._run(c.S_RAND_MEMBER_N, [key, count], StringSliceCmd)

    def s_rem(self, key: KeyT, *members: Any) -> IntCmd:
        command = c.S_REM_MULTIPLE if len(members) > 1 else c.S_REM
        return self._run(command, [key, *members], IntCmd)

    def s_scan(self, key: KeyT, cursor: int, match: str = "", count: int = 0) -> ScanCmd:
        argv: list[Any] = [key, cursor]
        if match:
            argv.extend(["MATCH", match])
        if count > 0:
            argv.extend(["COUNT", count])
        return self._run(c.S_SCAN, argv, ScanCmd)

    def s_union(self, *keys: KeyT) -> StringSliceCmd:
        return self._run(c.S_UNION, keys, StringSliceCmd, keys=keys)

    def s_union_store(self, destination: KeyT, *keys: KeyT) -> IntCmd:
        return self._run(c.S_UNION_STORE, [destination, *keys], IntCmd, keys=[destination, *keys])
