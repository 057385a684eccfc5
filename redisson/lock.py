"""Named distributed locks.

Locks are redis-py ``Lock`` objects on ``<key_prefix>:<name>`` keys. While a
lock is held, a background thread extends its expiry, so the key only lapses
when the owner dies or stops extending it.

Example::

    locker = client.new_locker(key_validity=timedelta(seconds=10))
    with locker.lock("orders:42") as held:
        ...
        if held.lost:
            raise RuntimeError("lock expired")
"""

from __future__ import annotations

import logging
import threading
from datetime import timedelta
from typing import TYPE_CHECKING, Self

from redis.exceptions import LockError

from redisson import args as _args
from redisson import context
from redisson.exceptions import DeadlineExceededError, NotLockedError, _main_exceptions

if TYPE_CHECKING:
    from redis.lock import Lock

    from redisson.client.default import Client
    from redisson.types import Duration

logger = logging.getLogger(__name__)

DEFAULT_KEY_PREFIX = "redislock"
DEFAULT_KEY_VALIDITY = timedelta(seconds=5)
DEFAULT_TRY_NEXT_AFTER = timedelta(milliseconds=20)
DEFAULT_EXTEND_INTERVAL = timedelta(seconds=1)


class HeldLock:
    """A lock owned by this process, kept alive until released.

    Attributes:
        name: The lock name, without the key prefix.
    """

    def __init__(self, locker: Locker, name: str, lock: Lock, extend_interval: float) -> None:
        self.name = name
        self._locker = locker
        self._lock = lock
        self._interval = extend_interval
        self._stop = threading.Event()
        self._lost = threading.Event()
        self._thread = threading.Thread(target=self._keep_alive, name=f"redisson-lock-{name}", daemon=True)
        self._thread.start()

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *args: object) -> None:
        self.release()

    @property
    def lost(self) -> bool:
        """True once an extension found the key gone or owned by someone else."""
        return self._lost.is_set()

    def _keep_alive(self) -> None:
        while not self._stop.wait(self._interval):
            try:
                self._lock.reacquire()
            except LockError as e:
                logger.warning("lock %r lost: %s", self.name, e)
                self._lost.set()
                return
            except _main_exceptions as e:
                logger.warning("failed to extend lock %r, retrying: %s", self.name, e)

    def release(self) -> None:
        """Stop extending and delete the key.

        Raises ``redis.exceptions.LockNotOwnedError`` if the lock had already
        been lost.
        """
        if self._stop.is_set():
            return
        self._stop.set()
        self._thread.join()
        self._locker._forget(self)
        self._lock.release()


class Locker:
    """Factory of named locks sharing one set of options.

    Attributes:
        key_prefix: Prefix of the lock keys.
        key_validity: Expiry of a lock key, extended while held.
        try_next_after: Pause between attempts while waiting for a lock.
        extend_interval: Pause between two extensions of a held lock.
    """

    def __init__(
        self,
        client: Client,
        *,
        key_prefix: str = DEFAULT_KEY_PREFIX,
        key_validity: Duration = DEFAULT_KEY_VALIDITY,
        try_next_after: Duration = DEFAULT_TRY_NEXT_AFTER,
        extend_interval: Duration = DEFAULT_EXTEND_INTERVAL,
    ) -> None:
        self._client = client
        self.key_prefix = key_prefix
        self.key_validity = _args.to_timedelta(key_validity)
        self.try_next_after = _args.to_timedelta(try_next_after)
        self.extend_interval = min(_args.to_timedelta(extend_interval), self.key_validity / 2)
        self._held: list[HeldLock] = []
        self._mutex = threading.Lock()

    def _key(self, name: str) -> str:
        return f"{self.key_prefix}:{name}"

    def _new_lock(self, name: str, *, blocking: bool, blocking_timeout: float | None) -> Lock:
        return self._client.driver.lock(
            self._key(name),
            timeout=self.key_validity.total_seconds(),
            sleep=self.try_next_after.total_seconds(),
            blocking=blocking,
            blocking_timeout=blocking_timeout,
            thread_local=False,
        )

    def _hold(self, name: str, lock: Lock) -> HeldLock:
        held = HeldLock(self, name, lock, self.extend_interval.total_seconds())
        with self._mutex:
            self._held.append(held)
        return held

    def _forget(self, held: HeldLock) -> None:
        with self._mutex:
            if held in self._held:
                self._held.remove(held)

    def lock(self, name: str) -> HeldLock:
        """Wait for the lock ``name``.

        Waits at most until the ambient deadline, then raises
        ``DeadlineExceededError``.
        """
        left = context.remaining()
        if left is not None and left <= 0:
            raise DeadlineExceededError
        lock = self._new_lock(name, blocking=True, blocking_timeout=left)
        if not lock.acquire():
            raise DeadlineExceededError
        return self._hold(name, lock)

    def try_lock(self, name: str) -> HeldLock:
        """Take the lock ``name`` or raise ``NotLockedError`` if it is busy."""
        lock = self._new_lock(name, blocking=False, blocking_timeout=None)
        if not lock.acquire():
            raise NotLockedError(name)
        return self._hold(name, lock)

    def close(self) -> None:
        """Release every lock still held through this locker."""
        with self._mutex:
            held = list(self._held)
        for h in held:
            try:
                h.release()
            except LockError as e:
                logger.warning("lock %r was lost before close: %s", h.name, e)
