from __future__ import annotations

from typing import TYPE_CHECKING, Any

from redisson import commands as c
from redisson.results import IntCmd, StatusCmd

if TYPE_CHECKING:
    from redisson.types import KeyT


class HyperLogLogCommandsMixin:
    # Type hints for base class attributes
    _run: Any

    def pf_add(self, key: KeyT, *elements: Any) -> IntCmd:
        return self._run(c.PF_ADD, [key, *elements], IntCmd)

    def pf_count(self, *keys: KeyT) -> IntCmd:
        return self._run(c.PF_COUNT, keys, IntCmd, keys=keys)

    def pf_merge(self, dest: KeyT, *keys: KeyT) -> StatusCmd:
        return self._run(c.PF_MERGE, [dest, *keys], StatusCmd, keys=[dest, *keys])
