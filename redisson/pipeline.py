from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Any, Self

from redisson import args as _args
from redisson import commands as c
from redisson import context
from redisson.exceptions import DeadlineExceededError, Nil, _main_exceptions
from redisson.pool import strip_callbacks
from redisson.results import to_any

if TYPE_CHECKING:
    from collections.abc import Sequence

    from redisson.client.default import Client
    from redisson.commands import Command

logger = logging.getLogger(__name__)


class Pipeline:
    """Queue of arbitrary commands sent in one round trip.

    ``put`` may be called from several threads. ``exec`` sends what was
    queued so far and is observed once, under the ``PIPELINE`` command.

    Example::

        pipe = client.pipeline()
        pipe.put(commands.SET, ["a"], "1")
        pipe.put(commands.INCR, ["b"])
        results, err = pipe.exec()
    """

    def __init__(self, client: Client) -> None:
        self._client = client
        self._queue: list[list[Any]] = []
        self._touched: list[tuple[Command, list[Any]]] = []
        self._lock = threading.Lock()

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *args: object) -> None:
        self.reset()

    def __len__(self) -> int:
        with self._lock:
            return len(self._queue)

    def put(self, cmd: Command, keys: Sequence[Any], *args: Any) -> None:
        """Queue ``cmd`` with its keys followed by the remaining arguments."""
        argv = [*cmd.argv, *(_args.stringify(k) for k in keys), *(_args.stringify(a) for a in args)]
        with self._lock:
            self._queue.append(argv)
            self._touched.append((cmd, list(keys)))

    def reset(self) -> None:
        with self._lock:
            self._queue = []
            self._touched = []

    def exec(self) -> tuple[list[Any], BaseException | None]:
        """Send the queued commands.

        Returns the decoded replies in queue order, with an exception instance
        in place of each failed reply, and the first error or None. A nil
        reply is a ``Nil`` instance and counts as an error.
        """
        with self._lock:
            queue = list(self._queue)
            touched = list(self._touched)

        with self._client.handler.scope(c.PIPELINE) as ctx:
            results, first_err = self._send(queue)
            ctx.err = first_err
        if queue and not isinstance(first_err, DeadlineExceededError):
            for cmd, keys in touched:
                self._client._invalidate(cmd, keys)
        return results, first_err

    def _send(self, queue: list[list[Any]]) -> tuple[list[Any], BaseException | None]:
        if not queue:
            return [], None
        left = context.remaining()
        if left is not None and left <= 0:
            err = DeadlineExceededError()
            return [err] * len(queue), err

        if len(queue) == 1:
            try:
                replies = [self._client._execute_command(queue[0])]
            except _main_exceptions as e:
                return [e], e
        else:
            try:
                replies = self._execute_pipeline(queue)
            except _main_exceptions as e:
                logger.debug("pipeline of %d commands failed: %s", len(queue), e)
                return [e] * len(queue), e

        results: list[Any] = []
        first_err: BaseException | None = None
        for reply in replies:
            if reply is None:
                reply = Nil()
            if isinstance(reply, BaseException):
                if first_err is None:
                    first_err = reply
                results.append(reply)
            else:
                results.append(to_any(reply))
        return results, first_err

    def _execute_pipeline(self, queue: list[list[Any]]) -> list[Any]:
        driver = self._client.driver
        strip_callbacks(driver)
        pipe = driver.pipeline(transaction=False)
        for argv in queue:
            pipe.execute_command(*argv)
        return pipe.execute(raise_on_error=False)
