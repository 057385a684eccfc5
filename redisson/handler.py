"""Pre/post hooks around every command call."""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import TYPE_CHECKING

from packaging.version import Version

from redisson import args as _args
from redisson import context
from redisson import metrics
from redisson.exceptions import CommandForbiddenError, CommandVersionError, CrossSlotError, is_nil
from redisson.slot import slot

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from typing import Any

    from redisson.commands import Command
    from redisson.conf import Conf

logger = logging.getLogger(__name__)


def format_warning(command: Command) -> str:
    """Render the development-mode warning of ``command``."""
    head = f"[{command}]: {command.warning}"
    if command.instead and command.etc:
        return f"{head} \n\t\t use '{command.instead}' instead. \n\t\t {command.etc}, etc."
    if command.instead:
        return f"{head} \n\t\t use '{command.instead}' instead."
    if command.etc:
        return f"{head} \n\t\t {command.etc}, etc."
    return head


class Handler:
    """Tags each call with its command and reports the outcome.

    In development mode ``check`` refuses forbidden commands, commands newer
    than the connected server, and cross-slot keys on a cluster. It also logs
    deprecation warnings. With ``enable_monitor`` the outcome of every call is
    recorded in the ``redis_exec_*`` metrics.
    """

    def __init__(self, conf: Conf) -> None:
        self.conf = conf
        self.version: Version | None = None
        self.cluster = False
        self.silent_err: Callable[[BaseException], bool] = is_nil
        self._warned: set[str] = set()
        self._lock = threading.Lock()

    def set_version(self, version: Version | str | None) -> None:
        if isinstance(version, str):
            version = Version(version)
        self.version = version

    def set_is_cluster(self, cluster: bool) -> None:
        self.cluster = cluster

    def is_cluster(self) -> bool:
        return self.cluster

    # =========================================================================
    # Hooks
    # =========================================================================

    def before(self, command: Command) -> context.CallContext:
        """Return a context tagged with ``command``. No I/O."""
        return self.before_with_keys(command, None)

    def before_with_keys(
        self,
        command: Command,
        get_keys: Callable[[], list[Any]] | None,
    ) -> context.CallContext:
        """Like ``before``, with a deferred accessor for the touched keys."""
        return context.CallContext(
            command=command,
            get_keys=get_keys,
            sub_command=context.sub_command_name(),
            start=_args.now_func(),
        )

    def check(self, ctx: context.CallContext) -> None:
        """Run development-mode checks. Raises programmer errors."""
        if not self.conf.development or context.is_skip_check():
            return
        command = ctx.command
        if command.forbid:
            raise CommandForbiddenError(str(command))
        if self.version is not None and self.version < Version(command.require_version):
            raise CommandVersionError(str(command), str(self.version), command.require_version)
        if self.cluster and ctx.get_keys is not None:
            keys = ctx.keys
            if len({slot(k) for k in keys}) > 1:
                raise CrossSlotError(str(command), keys)
        if self.version is not None and command.warn_version and Version(command.warn_version) < self.version:
            self._warn(command)

    def _warn(self, command: Command) -> None:
        if command.warning_once:
            name = str(command)
            with self._lock:
                if name in self._warned:
                    return
                self._warned.add(name)
        logger.warning(format_warning(command))

    def after(self, ctx: context.CallContext, err: BaseException | None) -> None:
        """Record the outcome of the call. Never raises."""
        if not self.conf.enable_monitor:
            return
        try:
            if err is not None and not self.silent_err(err):
                metrics.exec_error.labels(ctx.command.group, ctx.label).inc()
            else:
                metrics.exec_timing.labels(ctx.command.group, ctx.label).observe(_args.since_func(ctx.start))
        except Exception:
            logger.exception("failed to record metrics for %s", ctx.command)

    def cache(self, ctx: context.CallContext, hit: bool) -> None:
        """Record a client-side cache hit or miss. Never raises."""
        if not self.conf.enable_monitor:
            return
        try:
            counter = metrics.cache_hits if hit else metrics.cache_miss
            counter.labels(ctx.command.group, ctx.label).inc()
        except Exception:
            logger.exception("failed to record cache metrics for %s", ctx.command)

    @contextmanager
    def scope(
        self,
        command: Command,
        get_keys: Callable[[], list[Any]] | None = None,
    ) -> Iterator[context.CallContext]:
        """Pair ``before`` and ``after`` around one call.

        The dispatcher stores the result error on ``ctx.err``. Exceptions
        escaping the block, including failed checks, are reported as the
        call error and re-raised.
        """
        ctx = self.before_with_keys(command, get_keys)
        err: BaseException | None = None
        try:
            self.check(ctx)
            yield ctx
            err = ctx.err
        except BaseException as e:
            err = e
            raise
        finally:
            self.after(ctx, err)
