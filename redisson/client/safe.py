"""Slot-safe multi-key batchers.

``MSET`` and ``MGET`` refuse keys spanning several cluster slots. The safe
variants split the keys by slot and run one sub-call per slot in parallel.
Per-slot groups are atomic, the batch as a whole is not, and the groups run
in no particular order.
"""

from __future__ import annotations

import contextvars
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING, Any

from redisson import args as _args
from redisson import context
from redisson.results import SliceCmd, StatusCmd
from redisson.slot import group_by_slot

if TYPE_CHECKING:
    from collections.abc import Callable

    from redisson.results import Cmd
    from redisson.types import KeyT

# Upper bound on threads used for one batch.
MAX_WORKERS = 16


def _fan_out(fn: Callable[[list[Any]], Cmd], groups: list[list[Any]]) -> list[Cmd]:
    """Run ``fn`` once per group in parallel, preserving group order.

    Each task runs in a copy of the caller's context, so deadlines and labels
    carry over.
    """
    with ThreadPoolExecutor(max_workers=min(len(groups), MAX_WORKERS)) as pool:
        futures = [pool.submit(contextvars.copy_context().run, fn, group) for group in groups]
        return [f.result() for f in futures]


class SafeCommandsMixin:
    # Type hints for base class attributes
    m_get: Any
    m_set: Any

    def safe_m_set(self, *values: Any) -> StatusCmd:
        """``MSET`` that tolerates keys in different slots.

        Returns the first sub-call failure, or a synthetic ``OK``.
        """
        flat = _args.flatten_pairs(*values)
        with context.skip_check():
            if len(flat) <= 2:
                return self.m_set(flat)
            keys = flat[::2]
            by_slot = group_by_slot(keys)
            if len(by_slot) == 1:
                return self.m_set(flat)

            groups = []
            for indexes in by_slot.values():
                group: list[Any] = []
                for i in indexes:
                    group.extend((flat[2 * i], flat[2 * i + 1]))
                groups.append(group)
            results = _fan_out(self.m_set, groups)

        for result in results:
            if result.err is not None:
                return result  # type: ignore[return-value]
        return StatusCmd.ok(["MSET", *flat])

    def safe_m_get(self, *keys: KeyT) -> SliceCmd:
        """``MGET`` that tolerates keys in different slots.

        Values come back in the order of ``keys``; missing keys are ``None``.
        If any sub-call fails, the result carries that error and no values.
        """
        with context.skip_check():
            if len(keys) <= 1:
                return self.m_get(*keys)
            by_slot = group_by_slot(list(keys))
            if len(by_slot) == 1:
                return self.m_get(*keys)

            slots = list(by_slot)
            groups = [[keys[i] for i in by_slot[s]] for s in slots]
            results = _fan_out(lambda group: self.m_get(*group), groups)

        argv = ["MGET", *keys]
        values: list[Any] = [None] * len(keys)
        for s, result in zip(slots, results, strict=True):
            if result.err is not None:
                return SliceCmd(None, result.err, argv)
            for i, value in zip(by_slot[s], result.val, strict=False):
                values[i] = value
        return SliceCmd(values, None, argv)
