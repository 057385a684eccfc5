from __future__ import annotations

from typing import TYPE_CHECKING, Any

from redisson import commands as c
from redisson.exceptions import ArgumentError
from redisson.results import IntCmd, IntSliceCmd
from redisson.types import BIT_COUNT_INDEX_BIT, BIT_COUNT_INDEX_BYTE

if TYPE_CHECKING:
    from redisson.commands import Command
    from redisson.types import BitCount, KeyT


class BitmapCommandsMixin:
    """Bit operations on string values."""

    # Type hints for base class attributes
    _run: Any

    def bit_count(self, key: KeyT, bit_count: BitCount | None = None) -> IntCmd:
        """Count set bits, optionally within a byte or bit range."""
        if bit_count is None:
            return self._run(c.BIT_COUNT, [key], IntCmd)
        argv: list[Any] = [key, bit_count.start, bit_count.end]
        unit = bit_count.unit.upper()
        if unit == BIT_COUNT_INDEX_BYTE:
            return self._run(c.BIT_COUNT_BYTE, [*argv, unit], IntCmd)
        if unit == BIT_COUNT_INDEX_BIT:
            return self._run(c.BIT_COUNT_BIT, [*argv, unit], IntCmd)
        if unit:
            msg = f"BITCOUNT unit must be BYTE or BIT, got {bit_count.unit!r}"
            raise ArgumentError(msg)
        return self._run(c.BIT_COUNT, argv, IntCmd)

    def bit_field(self, key: KeyT, *values: Any) -> IntSliceCmd:
        """``BITFIELD`` with raw sub-commands, e.g. ``"INCRBY", "i5", 100, 1``."""
        return self._run(c.BIT_FIELD, [key, *values], IntSliceCmd)

    def _bit_op(self, command: Command, op: str, dest: KeyT, keys: tuple[KeyT, ...]) -> IntCmd:
        return self._run(command, [op, dest, *keys], IntCmd, keys=[dest, *keys])

    def bit_op_and(self, dest: KeyT, *keys: KeyT) -> IntCmd:
        return self._bit_op(c.BIT_OP_AND, "AND", dest, keys)

    def bit_op_or(self, dest: KeyT, *keys: KeyT) -> IntCmd:
        return self._bit_op(c.BIT_OP_OR, "OR", dest, keys)

    def bit_op_xor(self, dest: KeyT, *keys: KeyT) -> IntCmd:
        return self._bit_op(c.BIT_OP_XOR, "XOR", dest, keys)

    def bit_op_not(self, dest: KeyT, key: KeyT) -> IntCmd:
        return self._bit_op(c.BIT_OP_NOT, "NOT", dest, (key,))

    def bit_pos(self, key: KeyT, bit: int, *pos: int) -> IntCmd:
        """Position of the first ``bit``, searching an optional byte range.

        ``pos`` is empty, ``(start,)`` or ``(start, end)``.
        """
        if len(pos) > 2:
            msg = "BITPOS takes at most a start and an end position"
            raise ArgumentError(msg)
        return self._run(c.BIT_POS, [key, bit, *pos], IntCmd)

    def bit_pos_span(self, key: KeyT, bit: int, start: int, end: int, span: str) -> IntCmd:
        """``BITPOS`` over a range measured in ``"BYTE"`` or ``"BIT"`` units."""
        unit = span.upper()
        if unit not in (BIT_COUNT_INDEX_BYTE, BIT_COUNT_INDEX_BIT):
            msg = f"BITPOS span must be BYTE or BIT, got {span!r}"
            raise ArgumentError(msg)
        return self._run(c.BIT_POS_SPAN, [key, bit, start, end, unit], IntCmd)

    def get_bit(self, key: KeyT, offset: int) -> IntCmd:
        return self._run(c.GET_BIT, [key, offset], IntCmd)

    def set_bit(self, key: KeyT, offset: int, value: int) -> IntCmd:
        return self._run(c.SET_BIT, [key, offset, value], IntCmd)
