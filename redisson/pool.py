"""Driver construction and server discovery.

The connection factory turns a ``Conf`` into a redis-py client (standalone,
cluster or sentinel master), strips its response callbacks so replies arrive
raw, and discovers the server version and cluster mode.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from django.utils.module_loading import import_string
from packaging.version import Version
from redis import Redis
from redis.cluster import ClusterNode, RedisCluster
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import ResponseError
from redis.sentinel import Sentinel

from redisson.conf import DEFAULT_CONNECTION_FACTORY, RESP2
from redisson.metrics import PoolStats

if TYPE_CHECKING:
    from redis.connection import ConnectionPool

    from redisson.conf import Conf

logger = logging.getLogger(__name__)

_VERSION_RE = re.compile(rb"redis_version:(.+)")
_CLUSTER_ENABLED_RE = re.compile(rb"cluster_enabled:(.+)")


@dataclass(frozen=True)
class ServerInfo:
    version: Version
    cluster: bool


def parse_address(addr: str) -> tuple[str, int]:
    host, _, port = addr.rpartition(":")
    if not host:
        return addr, 6379
    return host.strip("[]"), int(port)


def parse_info(info: bytes | str) -> ServerInfo:
    """Extract the server version and cluster flag from ``INFO`` output."""
    if isinstance(info, str):
        info = info.encode()
    match = _VERSION_RE.search(info)
    if match is None:
        msg = "could not extract redis server version"
        raise ResponseError(msg)
    version = Version(match.group(1).strip().decode())
    cluster_match = _CLUSTER_ENABLED_RE.search(info)
    cluster = cluster_match is not None and cluster_match.group(1).strip() not in (b"", b"0")
    return ServerInfo(version=version, cluster=cluster)


def strip_callbacks(driver: Any) -> None:
    """Drop redis-py response callbacks so every reply is returned raw.

    Cluster clients create node clients lazily, so this runs before each call.
    """
    if isinstance(driver, RedisCluster):
        driver.cluster_response_callbacks.clear()
        for node in driver.get_nodes():
            conn = node.redis_connection
            if conn is not None and conn.response_callbacks:
                conn.response_callbacks.clear()
    elif driver.response_callbacks:
        driver.response_callbacks.clear()


def _pool_stats(pool: ConnectionPool) -> PoolStats:
    idle = len(getattr(pool, "_available_connections", ()))
    in_use = len(getattr(pool, "_in_use_connections", ()))
    return PoolStats(total_conns=idle + in_use, idle_conns=idle, in_use_conns=in_use)


def pool_stats(driver: Any) -> PoolStats:
    """Sum connection counts over every pool of ``driver``."""
    if isinstance(driver, RedisCluster):
        total = idle = in_use = 0
        for node in driver.get_nodes():
            if node.redis_connection is None:
                continue
            stats = _pool_stats(node.redis_connection.connection_pool)
            total += stats.total_conns
            idle += stats.idle_conns
            in_use += stats.in_use_conns
        return PoolStats(total_conns=total, idle_conns=idle, in_use_conns=in_use)
    return _pool_stats(driver.connection_pool)


class ConnectionFactory:
    """Builds redis-py clients for a ``Conf``.

    Subclass and point ``CONNECTION_FACTORY`` at the subclass to customise
    the driver, for example to add TLS options.
    """

    cluster_class = RedisCluster
    client_class = Redis
    sentinel_class = Sentinel

    def __init__(self, conf: Conf) -> None:
        self.conf = conf

    def _common_options(self) -> dict[str, Any]:
        conf = self.conf
        options: dict[str, Any] = {
            "protocol": conf.resp,
            # no socket_timeout: it would also bound the server-side block of BLPOP and friends
            "socket_connect_timeout": conf.write_timeout.total_seconds(),
        }
        if conf.username:
            options["username"] = conf.username
        if conf.password:
            options["password"] = conf.password
        if conf.name:
            options["client_name"] = conf.name
        if conf.conn_pool_size:
            options["max_connections"] = conf.conn_pool_size
        return options

    def connect_single(self) -> Redis:
        options = self._common_options()
        options["db"] = self.conf.db
        addr = self.conf.addrs[0]
        if self.conf.net.lower() == "unix":
            options.pop("socket_connect_timeout", None)
            return self.client_class(unix_socket_path=addr, **options)
        host, port = parse_address(addr)
        return self.client_class(host=host, port=port, **options)

    def connect_cluster(self) -> RedisCluster:
        options = self._common_options()
        nodes = [ClusterNode(*parse_address(addr)) for addr in self.conf.addrs]
        return self.cluster_class(startup_nodes=nodes, **options)

    def connect_sentinel(self) -> Redis:
        options = self._common_options()
        options["db"] = self.conf.db
        sentinel_kwargs = {}
        if self.conf.username:
            sentinel_kwargs["username"] = self.conf.username
        if self.conf.password:
            sentinel_kwargs["password"] = self.conf.password
        sentinel = self.sentinel_class(
            [parse_address(addr) for addr in self.conf.addrs],
            sentinel_kwargs=sentinel_kwargs,
            **options,
        )
        return sentinel.master_for(self.conf.master_name)

    def connect(self, cluster: bool | None = None) -> Any:
        """Create the driver. ``cluster=None`` picks by address count."""
        if self.conf.master_name:
            driver = self.connect_sentinel()
        elif cluster or (cluster is None and len(self.conf.addrs) > 1 and not self.conf.force_single_client):
            driver = self.connect_cluster()
        else:
            driver = self.connect_single()
        strip_callbacks(driver)
        return driver

    def discover(self, driver: Any) -> ServerInfo:
        """Run ``INFO server`` and ``INFO cluster`` on one node."""
        options: dict[str, Any] = {}
        if isinstance(driver, RedisCluster):
            options["target_nodes"] = RedisCluster.DEFAULT_NODE
        strip_callbacks(driver)
        server = driver.execute_command("INFO", "server", **options)
        cluster = driver.execute_command("INFO", "cluster", **options)
        return parse_info(_as_bytes(server) + b"\r\n" + _as_bytes(cluster))

    def disconnect(self, driver: Any) -> None:
        if isinstance(driver, RedisCluster):
            driver.close()
        else:
            driver.connection_pool.disconnect()

    def open(self) -> tuple[Any, ServerInfo]:
        """Connect, discover and apply the fallbacks.

        A RESP3 request rejected by the server is retried with RESP2. A
        standalone seed that reports ``cluster_enabled:1`` is reopened as a
        cluster client unless ``force_single_client`` is set.
        """
        driver = self.connect()
        try:
            info = self.discover(driver)
        except (ResponseError, RedisConnectionError) as e:
            self.disconnect(driver)
            if self.conf.resp == RESP2 or "hello" not in str(e).lower():
                raise
            logger.warning("%s, reconnect...", e)
            self.conf = self.conf.with_options(resp=RESP2)
            driver = self.connect()
            info = self.discover(driver)
        if info.cluster and not isinstance(driver, RedisCluster) and not self.conf.force_single_client:
            if not self.conf.master_name:
                logger.info("cluster mode enabled on %s, reconnect as cluster client", self.conf.addrs)
                self.disconnect(driver)
                driver = self.connect(cluster=True)
        return driver, info


def _as_bytes(value: Any) -> bytes:
    if isinstance(value, bytes):
        return value
    if isinstance(value, str):
        return value.encode()
    return b""


def get_connection_factory(conf: Conf, path: str | type | None = None) -> ConnectionFactory:
    """Resolve a factory class from a dotted path, a class, or the default."""
    factory = path or DEFAULT_CONNECTION_FACTORY
    if isinstance(factory, str):
        factory = import_string(factory)
    return factory(conf)
