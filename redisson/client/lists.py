from __future__ import annotations

from typing import TYPE_CHECKING, Any

from redisson import commands as c
from redisson.exceptions import ArgumentError
from redisson.results import (
    IntCmd,
    IntSliceCmd,
    KeyValuesCmd,
    StatusCmd,
    StringCmd,
    StringSliceCmd,
)
from redisson.types import AFTER, BEFORE, LEFT, RIGHT

if TYPE_CHECKING:
    from redisson.commands import Command
    from redisson.types import Duration, KeyT, LPosArgs


def _side(value: str) -> str:
    side = value.upper()
    if side not in (LEFT, RIGHT):
        msg = f"list side must be LEFT or RIGHT, got {value!r}"
        raise ArgumentError(msg)
    return side


def _pos_args(a: LPosArgs | None) -> list[Any]:
    if a is None:
        return []
    argv: list[Any] = []
    if a.rank != 0:
        argv.extend(["RANK", a.rank])
    if a.max_len != 0:
        argv.extend(["MAXLEN", a.max_len])
    return argv


class ListCommandsMixin:
    """Redis list operations.

    Blocking pops take a ``timeout`` (zero blocks forever) that is clamped to
    the ambient deadline, if any.
    """

    # Type hints for base class attributes
    _run: Any
    _block_timeout: Any

    # =========================================================================
    # Blocking
    # =========================================================================

    def bl_move(self, source: KeyT, destination: KeyT, src_pos: str, dest_pos: str, timeout: Duration) -> StringCmd:
        argv = [source, destination, _side(src_pos), _side(dest_pos), self._block_timeout(timeout)]
        return self._run(c.BL_MOVE, argv, StringCmd, keys=[source, destination])

    def bl_m_pop(self, timeout: Duration, direction: str, count: int, *keys: KeyT) -> KeyValuesCmd:
        argv: list[Any] = [self._block_timeout(timeout), len(keys), *keys, _side(direction)]
        if count > 0:
            argv.extend(["COUNT", count])
        return self._run(c.BL_M_POP, argv, KeyValuesCmd, keys=keys)

    def bl_pop(self, timeout: Duration, *keys: KeyT) -> StringSliceCmd:
        """Pop from the first non-empty list; ``val`` is ``[key, value]``."""
        return self._run(c.BL_POP, [*keys, self._block_timeout(timeout)], StringSliceCmd, keys=keys)

    def br_pop(self, timeout: Duration, *keys: KeyT) -> StringSliceCmd:
        return self._run(c.BR_POP, [*keys, self._block_timeout(timeout)], StringSliceCmd, keys=keys)

    def br_pop_l_push(self, source: KeyT, destination: KeyT, timeout: Duration) -> StringCmd:
        argv = [source, destination, self._block_timeout(timeout)]
        return self._run(c.BR_POP_L_PUSH, argv, StringCmd, keys=[source, destination])

    # =========================================================================
    # Non-blocking
    # =========================================================================

    def l_index(self, key: KeyT, index: int) -> StringCmd:
        return self._run(c.L_INDEX, [key, index], StringCmd)

    def l_insert(self, key: KeyT, op: str, pivot: Any, value: Any) -> IntCmd:
        where = op.upper()
        if where not in (BEFORE, AFTER):
            msg = f"LINSERT position must be BEFORE or AFTER, got {op!r}"
            raise ArgumentError(msg)
        return self._run(c.L_INSERT, [key, where, pivot, value], IntCmd)

    def l_insert_before(self, key: KeyT, pivot: Any, value: Any) -> IntCmd:
        return self._run(c.L_INSERT_BEFORE, [key, BEFORE, pivot, value], IntCmd)

    def l_insert_after(self, key: KeyT, pivot: Any, value: Any) -> IntCmd:
        return self._run(c.L_INSERT_AFTER, [key, AFTER, pivot, value], IntCmd)

    def l_len(self, key: KeyT) -> IntCmd:
        return self._run(c.L_LEN, [key], IntCmd)

    def l_move(self, source: KeyT, destination: KeyT, src_pos: str, dest_pos: str) -> StringCmd:
        argv = [source, destination, _side(src_pos), _side(dest_pos)]
        return self._run(c.L_MOVE, argv, StringCmd, keys=[source, destination])

    def l_m_pop(self, direction: str, count: int, *keys: KeyT) -> KeyValuesCmd:
        argv: list[Any] = [len(keys), *keys, _side(direction)]
        if count > 0:
            argv.extend(["COUNT", count])
        return self._run(c.L_M_POP, argv, KeyValuesCmd, keys=keys)

    def l_pop(self, key: KeyT) -> StringCmd:
        return self._run(c.L_POP, [key], StringCmd)

    def l_pop_count(self, key: KeyT, count: int) -> StringSliceCmd:
        return self._run(c.L_POP_COUNT, [key, count], StringSliceCmd)

    def l_pos(self, key: KeyT, value: Any, a: LPosArgs | None = None) -> IntCmd:
        """Index of the first match; a ``Nil`` error when there is none."""
        return self._run(c.L_POS, [key, value, *_pos_args(a)], IntCmd)

    def l_pos_count(self, key: KeyT, value: Any, count: int, a: LPosArgs | None = None) -> IntSliceCmd:
        return self._run(c.L_POS_COUNT, [key, value, "COUNT", count, *_pos_args(a)], IntSliceCmd)

    def _push(self, single: Command, multi: Command, key: KeyT, values: tuple[Any, ...]) -> IntCmd:
        command = multi if len(values) > 1 else single
        return self._run(command, [key, *values], IntCmd)

    def l_push(self, key: KeyT, *values: Any) -> IntCmd:
        return self._push(c.L_PUSH, c.L_M_PUSH, key, values)

    def l_push_x(self, key: KeyT, *values: Any) -> IntCmd:
        return self._push(c.L_PUSH_X, c.L_M_PUSH_X, key, values)

    def r_push(self, key: KeyT, *values: Any) -> IntCmd:
        return self._push(c.R_PUSH, c.R_M_PUSH, key, values)

    def r_push_x(self, key: KeyT, *values: Any) -> IntCmd:
        return self._push(c.R_PUSH_X, c.R_M_PUSH_X, key, values)

    def l_range(self, key: KeyT, start: int, stop: int) -> StringSliceCmd:
        return self._run(c.L_RANGE, [key, start, stop], StringSliceCmd)

    def l_rem(self, key: KeyT, count: int, value: Any) -> IntCmd:
        return self._run(c.L_REM, [key, count, value], IntCmd)

    def l_set(self, key: KeyT, index: int, value: Any) -> StatusCmd:
        return self._run(c.L_SET, [key, index, value], StatusCmd)

    def l_trim(self, key: KeyT, start: int, stop: int) -> StatusCmd:
        return self._run(c.L_TRIM, [key, start, stop], StatusCmd)

    def r_pop(self, key: KeyT) -> StringCmd:
        return self._run(c.R_POP, [key], StringCmd)

    def r_pop_count(self, key: KeyT, count: int) -> StringSliceCmd:
        return self._run(c.R_POP_COUNT, [key, count], StringSliceCmd)

    def r_pop_l_push(self, source: KeyT, destination: KeyT) -> StringCmd:
        return self._run(c.R_POP_L_PUSH, [source, destination], StringCmd, keys=[source, destination])
