"""Ambient call context.

Calls never take an explicit context argument. Per-call settings live in
``contextvars`` so they follow threads started with ``copy_context`` and
nest naturally::

    with deadline(0.5), with_sub_command_name("rate_limit"):
        client.eval(src, ["k"])
"""

from __future__ import annotations

import time
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from functools import cached_property
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from redisson.commands import Command

_skip_check: ContextVar[bool] = ContextVar("redisson_skip_check", default=False)
_sub_command: ContextVar[str] = ContextVar("redisson_sub_command", default="")
_deadline: ContextVar[float | None] = ContextVar("redisson_deadline", default=None)


@contextmanager
def skip_check() -> Iterator[None]:
    """Disable development-mode checks for the enclosed calls."""
    token = _skip_check.set(True)
    try:
        yield
    finally:
        _skip_check.reset(token)


@contextmanager
def with_sub_command_name(name: str) -> Iterator[None]:
    """Label the enclosed calls, e.g. with a script name."""
    token = _sub_command.set(name)
    try:
        yield
    finally:
        _sub_command.reset(token)


@contextmanager
def deadline(seconds: float) -> Iterator[None]:
    """Bound the enclosed calls. Nested deadlines keep the earliest one."""
    at = time.monotonic() + seconds
    current = _deadline.get()
    if current is not None:
        at = min(at, current)
    token = _deadline.set(at)
    try:
        yield
    finally:
        _deadline.reset(token)


def is_skip_check() -> bool:
    return _skip_check.get()


def sub_command_name() -> str:
    return _sub_command.get()


def remaining() -> float | None:
    """Seconds left before the ambient deadline, or None without one."""
    at = _deadline.get()
    if at is None:
        return None
    return at - time.monotonic()


@dataclass
class CallContext:
    """State of one public call, from ``before`` to ``after``.

    Attributes:
        command: The command identifier.
        sub_command: Optional label attached with ``with_sub_command_name``.
        start: Value of ``now_func`` when the call started.
        err: The error recorded on the result, set by the dispatcher.
    """

    command: Command
    get_keys: Callable[[], list[Any]] | None = None
    sub_command: str = ""
    start: float = 0.0
    err: BaseException | None = field(default=None, repr=False)

    @cached_property
    def keys(self) -> list[Any]:
        """Keys touched by the call, materialized on first access."""
        if self.get_keys is None:
            return []
        return list(self.get_keys())

    @property
    def label(self) -> str:
        """Value of the ``s_command`` metric label."""
        return self.sub_command or str(self.command)
