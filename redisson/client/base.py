"""Command dispatch.

Every public command method funnels into ``BaseClient._run``, which opens the
handler scope, checks the ambient deadline, serves cacheable reads from the
client-side cache, executes the argv on the redis-py driver and wraps the raw
reply in the requested result class.
"""

from __future__ import annotations

import hashlib
import logging
from datetime import timedelta
from typing import TYPE_CHECKING, Any

from redis.cluster import RedisCluster

from redisson import args as _args
from redisson import context
from redisson.cache import MISSING
from redisson.commands import Category, Keyed
from redisson.exceptions import DeadlineExceededError, _main_exceptions
from redisson.pool import strip_callbacks
from redisson.results import Cmd

if TYPE_CHECKING:
    from collections.abc import Sequence

    from redisson.cache import LocalCache
    from redisson.commands import Command
    from redisson.conf import Conf
    from redisson.handler import Handler

logger = logging.getLogger(__name__)

# Node flag for keyless commands redis-py cannot route on its own.
DEFAULT_NODE = RedisCluster.DEFAULT_NODE

# Commands whose keys drop their cached replies.
WRITING_CATEGORIES = frozenset({Category.WRITE, Category.BLOCKING, Category.SCRIPTING})

# Commands emptying the whole client-side cache.
KEYSPACE_RESETS = frozenset({"FLUSHALL", "FLUSHDB"})


def touched_keys(command: Command, args: Sequence[Any], keys: Sequence[Any] | None) -> list[Any] | None:
    """Keys a call reads or writes, or None when they cannot be told from its arguments."""
    if keys is not None:
        return list(keys)
    if command.keyed is Keyed.SINGLE:
        return [args[0]] if args else []
    if command.keyed is Keyed.NONE:
        return []
    return None


def cache_key(argv: Sequence[Any]) -> str:
    """Stable cache key of an argv, safe for any Django cache backend."""
    digest = hashlib.sha1()  # noqa: S324
    for arg in argv:
        digest.update(arg if isinstance(arg, bytes) else str(arg).encode("utf-8", "surrogateescape"))
        digest.update(b"\x00")
    return digest.hexdigest()


class BaseClient:
    """Dispatcher shared by the client, its cache views and mixins.

    Attributes:
        conf: Client options.
        driver: The redis-py client executing commands.
        handler: Pre/post hooks.
        ttl: Client-side cache TTL for cacheable reads, zero to disable.
    """

    def __init__(
        self,
        conf: Conf,
        driver: Any,
        handler: Handler,
        local_cache: LocalCache | None = None,
        ttl: timedelta | None = None,
    ) -> None:
        self.conf = conf
        self.driver = driver
        self.handler = handler
        self._local_cache = local_cache
        self.ttl = conf.ttl if ttl is None else ttl

    @property
    def is_cluster(self) -> bool:
        return isinstance(self.driver, RedisCluster)

    # =========================================================================
    # Dispatch
    # =========================================================================

    def _run(
        self,
        command: Command,
        args: Sequence[Any],
        result_cls: type[Cmd] = Cmd,
        keys: Sequence[Any] | None = None,
        target: Any = None,
        **parse_options: Any,
    ) -> Any:
        """Dispatch ``command`` with argument tail ``args``.

        The verb tokens of ``command`` are prepended. ``keys`` lists the keys
        of multi-key commands; it feeds the cross-slot check and client-side
        cache invalidation. ``target`` selects cluster nodes (a node or a
        redis-py node flag); it is ignored on a single server.
        ``parse_options`` are forwarded to ``result_cls.parse``.
        """
        argv = [*command.argv, *(_args.stringify(a) for a in args)]
        touched = touched_keys(command, args, keys)
        get_keys = None
        if keys is not None and command.keyed is Keyed.MULTI:
            key_list = list(keys)

            def get_keys() -> list[Any]:
                return key_list

        with self.handler.scope(command, get_keys) as ctx:
            result = self._execute(ctx, argv, result_cls, target, parse_options, touched)
            ctx.err = result.err
        return result

    def _execute(
        self,
        ctx: context.CallContext,
        argv: list[Any],
        result_cls: type[Cmd],
        target: Any,
        parse_options: dict[str, Any],
        touched: list[Any] | None = None,
    ) -> Cmd:
        """Execute one argv. ``touched`` is None when its keys are unknown."""
        left = context.remaining()
        if left is not None and left <= 0:
            return result_cls.from_error(DeadlineExceededError(), argv)

        cache = self._local_cache
        entry = None
        generation = 0
        if touched and self._cacheable(ctx.command):
            entry = cache_key(argv)
            generation = cache.generation  # type: ignore[union-attr]
            reply = cache.get(entry)  # type: ignore[union-attr]
            self.handler.cache(ctx, reply is not MISSING)
            if reply is not MISSING:
                return result_cls.from_reply(reply, argv, **parse_options)

        try:
            reply = self._execute_command(argv, target)
        except _main_exceptions as e:
            logger.debug("%s failed: %s", ctx.command, e)
            self._invalidate(ctx.command, touched)
            return result_cls.from_error(e, argv)
        self._invalidate(ctx.command, touched)

        if entry is not None:
            cache.put(touched, entry, reply, self.ttl.total_seconds(), generation)  # type: ignore[union-attr]
        return result_cls.from_reply(reply, argv, **parse_options)

    def _cacheable(self, command: Command) -> bool:
        return (
            command.cacheable
            and self._local_cache is not None
            and self.conf.enable_cache
            and self.ttl > timedelta(0)
        )

    def _invalidate(self, command: Command, touched: list[Any] | None) -> None:
        """Drop cached replies a command may have made stale."""
        cache = self._local_cache
        if cache is None:
            return
        if command.name in KEYSPACE_RESETS:
            cache.clear()
        elif command.category in WRITING_CATEGORIES:
            if touched is None:
                cache.clear()
            elif touched:
                cache.invalidate(touched)

    def _execute_command(self, argv: list[Any], target: Any = None) -> Any:
        options: dict[str, Any] = {}
        if self.is_cluster:
            strip_callbacks(self.driver)
            if target is not None:
                options["target_nodes"] = target
        return self.driver.execute_command(*argv, **options)

    # =========================================================================
    # Helpers for command mixins
    # =========================================================================

    def _block_timeout(self, timeout: _args.Duration) -> float:
        """Server-side block timeout in seconds, clamped to the ambient deadline.

        Zero means block forever; with a deadline it becomes the time left.
        """
        secs = _args.seconds(timeout)
        left = context.remaining()
        if left is None:
            return secs
        left = max(left, 0.001)
        if secs == 0:
            return left
        return min(secs, left)

    def _block_ms(self, timeout: _args.Duration) -> int:
        if context.remaining() is None:
            return _args.format_ms(timeout)
        return max(int(self._block_timeout(timeout) * 1000), 1)
