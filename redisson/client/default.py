"""The Redis client.

``Client`` composes the per-family command mixins on top of the dispatcher in
``redisson.client.base``. Build one with ``Client.connect(conf)`` or take a
configured one from ``redisson.clients``.
"""

from __future__ import annotations

import copy
import logging
import threading
from typing import TYPE_CHECKING, Any

from redisson import args as _args
from redisson import commands as c
from redisson.cache import CacheView, LocalCache
from redisson.client.base import BaseClient
from redisson.client.bitmap import BitmapCommandsMixin
from redisson.client.cluster import ClusterCommandsMixin
from redisson.client.connection import ConnectionCommandsMixin
from redisson.client.generic import GenericCommandsMixin
from redisson.client.geo import GeoCommandsMixin
from redisson.client.hashes import HashCommandsMixin
from redisson.client.hyperloglog import HyperLogLogCommandsMixin
from redisson.client.lists import ListCommandsMixin
from redisson.client.pubsub import PubSubCommandsMixin
from redisson.client.safe import SafeCommandsMixin
from redisson.client.scripting import ScriptingCommandsMixin
from redisson.client.server import ServerCommandsMixin
from redisson.client.sets import SetCommandsMixin
from redisson.client.sorted_sets import SortedSetCommandsMixin
from redisson.client.streams import StreamCommandsMixin
from redisson.client.strings import StringCommandsMixin
from redisson.exceptions import Errors, RedissonError, _main_exceptions
from redisson.handler import Handler
from redisson.metrics import PoolStatsCollector, register_metrics
from redisson.pool import get_connection_factory, pool_stats, strip_callbacks
from redisson.results import Cmd

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from datetime import timedelta

    from packaging.version import Version

    from redisson.bloom import BloomFilter
    from redisson.conf import Conf
    from redisson.lock import Locker
    from redisson.metrics import PoolStats, RegisterCollectorFunc
    from redisson.pipeline import Pipeline
    from redisson.script import Script
    from redisson.types import Duration

logger = logging.getLogger(__name__)


def new_local_cache(conf: Conf) -> LocalCache | None:
    """Client-side cache of one client, or None when caching is disabled."""
    if not conf.enable_cache:
        return None
    return LocalCache(conf.cache_size_each_conn)


class Client(
    StringCommandsMixin,
    GenericCommandsMixin,
    BitmapCommandsMixin,
    HashCommandsMixin,
    HyperLogLogCommandsMixin,
    ListCommandsMixin,
    SetCommandsMixin,
    SortedSetCommandsMixin,
    GeoCommandsMixin,
    StreamCommandsMixin,
    ScriptingCommandsMixin,
    ServerCommandsMixin,
    PubSubCommandsMixin,
    ClusterCommandsMixin,
    ConnectionCommandsMixin,
    SafeCommandsMixin,
    BaseClient,
):
    """Redis client over a standalone server, a cluster or a sentinel master.

    Every command method returns a result wrapper from ``redisson.results``;
    server and driver errors are stored on it rather than raised. Invalid
    option combinations raise ``ArgumentError`` at the call site.

    Example::

        client = Client.connect(Conf(addrs=["127.0.0.1:6379"]))
        client.set("greeting", "hello", 60)
        client.get("greeting").result()  # "hello"
    """

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._collector: PoolStatsCollector | None = None
        self._collector_lock = threading.Lock()

    @classmethod
    def connect(cls, conf: Conf, connection_factory: str | type | None = None) -> Client:
        """Open the driver, discover the server and return a ready client.

        Connection failures are raised.
        """
        factory = get_connection_factory(conf, connection_factory)
        driver, info = factory.open()
        conf = factory.conf
        handler = Handler(conf)
        handler.set_version(info.version)
        handler.set_is_cluster(info.cluster)
        logger.debug("connected to redis %s (cluster=%s)", info.version, info.cluster)
        return cls(conf, driver, handler, local_cache=new_local_cache(conf))

    @property
    def version(self) -> Version | None:
        return self.handler.version

    # =========================================================================
    # Views and helpers
    # =========================================================================

    def cache(self, ttl: Duration) -> CacheView:
        """Return a view serving cacheable reads from the client-side cache for ``ttl``."""
        ttl = _args.to_timedelta(ttl)
        if not self.conf.enable_cache or ttl == self.ttl:
            return CacheView(self)
        return CacheView(self.with_ttl(ttl))

    def with_ttl(self, ttl: timedelta) -> Client:
        """Shallow copy sharing the driver, the handler and the local cache."""
        clone = copy.copy(self)
        clone.ttl = ttl
        return clone

    def pipeline(self) -> Pipeline:
        from redisson.pipeline import Pipeline

        return Pipeline(self)

    def create_script(self, src: str) -> Script:
        from redisson.script import Script

        return Script(self, src)

    def create_script_with_name(self, name: str, src: str) -> Script:
        from redisson.script import Script

        return Script(self, src, name=name)

    def new_locker(self, **options: Any) -> Locker:
        """Return a ``Locker``; see ``redisson.lock.Locker`` for the options."""
        from redisson.lock import Locker

        return Locker(self, **options)

    def new_bloom_filter(
        self,
        name: str,
        expected_items: int,
        fp_rate: float,
        *,
        enable_read_operation: bool = False,
    ) -> BloomFilter:
        from redisson.bloom import BloomFilter

        return BloomFilter(self, name, expected_items, fp_rate, enable_read_operation=enable_read_operation)

    # =========================================================================
    # Raw access
    # =========================================================================

    def do(self, *argv: Any) -> Cmd:
        """Send an arbitrary command, e.g. ``client.do("OBJECT", "FREQ", key)``.

        Its keys are unknown, so it empties the client-side cache.
        """
        argv_list = [_args.stringify(a) for a in argv]
        with self.handler.scope(c.COMPLETED) as ctx:
            result = self._execute(ctx, argv_list, Cmd, None, {})
            ctx.err = result.err
        return result

    def for_each_nodes(self, fn: Callable[[Client], BaseException | None]) -> Errors | None:
        """Call ``fn`` with a client bound to each cluster primary in turn.

        On a standalone server ``fn`` is called once with this client. ``fn``
        returns an error or None; errors it returns or raises are collected
        and returned as one ``Errors``, or None when every node succeeded.
        """
        errs = Errors()
        for name, node_client in self._node_clients():
            try:
                errs.push(fn(node_client))
            except (*_main_exceptions, RedissonError) as e:
                logger.debug("for_each_nodes failed on %s: %s", name, e)
                errs.push(e)
        return errs.err()

    def _node_clients(self) -> Iterator[tuple[str, Client]]:
        if not self.is_cluster:
            yield ",".join(self.conf.addrs), self
            return
        for node in self.driver.get_primaries():
            node_driver = self.driver.get_redis_connection(node)
            strip_callbacks(node_driver)
            node_client = type(self)(self.conf, node_driver, self.handler, local_cache=self._local_cache, ttl=self.ttl)
            yield node.name, node_client

    def close(self) -> None:
        """Release the driver's connection pools."""
        if self.is_cluster:
            self.driver.close()
        else:
            self.driver.connection_pool.disconnect()
        if self._local_cache is not None:
            self._local_cache.clear()

    # =========================================================================
    # Metrics
    # =========================================================================

    def pool_stats(self) -> PoolStats:
        return pool_stats(self.driver)

    def register_collector(self, register: RegisterCollectorFunc) -> None:
        """Register the command metrics and this client's pool gauges.

        ``register`` is typically ``prometheus_client.REGISTRY.register``.
        Calling it again on the same client does nothing.
        """
        with self._collector_lock:
            if self._collector is not None:
                return
            self._collector = PoolStatsCollector(self.pool_stats, self.conf.name)
        register_metrics(register)
        register(self._collector)
