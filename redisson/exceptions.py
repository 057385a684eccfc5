"""Exceptions for redisson.

Driver and server errors are never raised by command methods: they are stored
on the returned result wrapper. The classes below cover the remaining cases:
the nil-reply marker, programmer errors raised at the call site, and the
aggregate used by multi-node helpers.
"""

from __future__ import annotations

import socket
from typing import TYPE_CHECKING

from redis.exceptions import NoScriptError, RedisClusterException, RedisError
from redis.exceptions import TimeoutError as RedisTimeoutError

if TYPE_CHECKING:
    from collections.abc import Callable

# Exceptions the dispatcher captures onto result wrappers.
_main_exceptions = (socket.timeout, OSError, RedisError, RedisClusterException)

NO_SCRIPT_PREFIX = "NOSCRIPT "


class RedissonError(Exception):
    """Base class for errors raised by redisson itself."""


class Nil(RedissonError):  # noqa: N818
    """Marker stored on a result when Redis replied with a null value."""

    def __init__(self, message: str = "redis nil") -> None:
        super().__init__(message)


def is_nil(err: BaseException | None) -> bool:
    """Return True if ``err`` is the nil-reply marker."""
    return isinstance(err, Nil)


def is_no_script_error(err: BaseException | None) -> bool:
    """Return True for ``NOSCRIPT`` server errors.

    redis-py raises ``NoScriptError`` with the error code stripped; other
    errors are matched by message prefix.
    """
    if err is None:
        return False
    if isinstance(err, NoScriptError):
        return True
    return str(err).startswith(NO_SCRIPT_PREFIX)


class ArgumentError(RedissonError, ValueError):
    """Raised when a command receives conflicting or invalid options.

    This is a programmer error and is raised at the call site instead of being
    returned on the result.

    Example:
        Store is not allowed on the read-only variant::

            client.geo_radius("Sicily", 15, 37, GeoRadiusQuery(radius=200, store="dst"))
            # ArgumentError: GEORADIUS does not support STORE, use geo_radius_store
    """


class CommandForbiddenError(ArgumentError):
    """Raised in development mode when a forbidden command is used."""

    def __init__(self, command: str) -> None:
        self.command = command
        super().__init__(f"[{command}]: redis command are not allowed")


class CommandVersionError(ArgumentError):
    """Raised in development mode when the server is too old for a command.

    Attributes:
        command: The command name.
        version: The connected server version.
        require_version: The first server version supporting the command.
    """

    def __init__(self, command: str, version: str, require_version: str) -> None:
        self.command = command
        self.version = version
        self.require_version = require_version
        super().__init__(
            f"[{command}]: redis command are not supported in version {version!r}, available since {require_version}",
        )


class CrossSlotError(ArgumentError):
    """Raised in development mode on a cluster when keys span several slots."""

    def __init__(self, command: str, keys: list[str]) -> None:
        self.command = command
        self.keys = keys
        super().__init__(f"[{command}]: multiple keys command with different key slots are not allowed")


class DeadlineExceededError(RedisTimeoutError):
    """Stored on a result when the ambient deadline passed before the call."""

    def __init__(self, message: str = "context deadline exceeded") -> None:
        super().__init__(message)


class NotLockedError(RedissonError):
    """Raised by ``Locker.try_lock`` when the lock is held by someone else."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"lock {name!r} is held by another owner")


class InvalidClientConfigError(RedissonError):
    """Raised when the ``REDISSON`` setting cannot be turned into a client."""


def list_format_func(errors: list[BaseException]) -> str:
    """Format errors as a numbered list.

    Example output::

        2 errors occurred:
        #1: error 1
        #2: error 2
    """
    points = "\n".join(f"#{i}: {err}" for i, err in enumerate(errors, start=1))
    return f"{len(errors)} errors occurred:\n{points}"


def dot_format_func(errors: list[BaseException]) -> str:
    """Format errors joined by commas."""
    return ",".join(str(err) for err in errors)


class Errors(RedissonError):
    """Aggregate of several errors that can be raised or stored as one.

    Attributes:
        format_func: Callable rendering the wrapped errors, defaults to
            ``list_format_func``.

    Example:
        Collect failures from every node::

            errs = Errors()
            for node in nodes:
                errs.push(node.ping().err)
            if errs.err() is not None:
                raise errs
    """

    def __init__(
        self,
        errors: list[BaseException] | None = None,
        format_func: Callable[[list[BaseException]], str] | None = None,
    ) -> None:
        self._errors: list[BaseException] = list(errors or [])
        self.format_func = format_func
        super().__init__()

    def __str__(self) -> str:
        fn = self.format_func or list_format_func
        return fn(self._errors)

    def __len__(self) -> int:
        return len(self._errors)

    def push(self, err: BaseException | None) -> None:
        """Append an error; ``None`` is ignored."""
        if err is None:
            return
        self._errors.append(err)

    def last_err(self) -> BaseException | None:
        """Return the most recently pushed error, or None."""
        if not self._errors:
            return None
        return self._errors[-1]

    def err(self) -> Errors | None:
        """Return self when at least one error was pushed, else None."""
        if not self._errors:
            return None
        return self

    def wrapped_errors(self) -> list[BaseException]:
        """Return the wrapped errors in push order."""
        return list(self._errors)

    def set_format_func(self, fn: Callable[[list[BaseException]], str]) -> None:
        self.format_func = fn


__all__ = [
    "NO_SCRIPT_PREFIX",
    "ArgumentError",
    "CommandForbiddenError",
    "CommandVersionError",
    "CrossSlotError",
    "DeadlineExceededError",
    "Errors",
    "InvalidClientConfigError",
    "Nil",
    "NotLockedError",
    "RedissonError",
    "dot_format_func",
    "is_nil",
    "is_no_script_error",
    "list_format_func",
]
