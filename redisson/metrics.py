"""Prometheus metrics.

Collectors are created unregistered. ``register_metrics`` hands them to a
caller-supplied register callable (for example ``REGISTRY.register``), once
per callable.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import TYPE_CHECKING

from prometheus_client import Counter, Histogram
from prometheus_client.core import GaugeMetricFamily

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from prometheus_client.registry import Collector

    RegisterCollectorFunc = Callable[[Collector], object]

logger = logging.getLogger(__name__)

TIMING_METRIC = "redis_exec_timing"
ERROR_METRIC = "redis_exec_error"
HITS_METRIC = "redis_cache_hits"
MISS_METRIC = "redis_cache_miss"

LABEL_KEYS = ("command", "s_command")

POOL_NAMESPACE = "go_redis_pool_stats"
POOL_SUBSYSTEM = "connections"
DEFAULT_POOL_NAME = "default_redis"

exec_timing = Histogram(TIMING_METRIC, "Redis command execution time in seconds.", LABEL_KEYS, registry=None)
exec_error = Counter(ERROR_METRIC, "Redis command errors.", LABEL_KEYS, registry=None)
cache_hits = Counter(HITS_METRIC, "Client-side cache hits.", LABEL_KEYS, registry=None)
cache_miss = Counter(MISS_METRIC, "Client-side cache misses.", LABEL_KEYS, registry=None)

_registered: list[RegisterCollectorFunc] = []
_registered_lock = threading.Lock()


def register_metrics(register: RegisterCollectorFunc) -> bool:
    """Register the command metrics with ``register``; repeated calls are no-ops."""
    with _registered_lock:
        if register in _registered:
            return False
        _registered.append(register)
    for collector in (exec_error, cache_hits, cache_miss, exec_timing):
        register(collector)
    return True


@dataclass(frozen=True)
class PoolStats:
    """Connection counts summed over every pool of a client."""

    total_conns: int = 0
    idle_conns: int = 0
    in_use_conns: int = 0


class PoolStatsCollector:
    """Exposes connection pool gauges for one client."""

    def __init__(self, stats: Callable[[], PoolStats], name: str = "") -> None:
        self._stats = stats
        self._name = name or DEFAULT_POOL_NAME

    def _metric_name(self, suffix: str) -> str:
        return f"{POOL_NAMESPACE}_{POOL_SUBSYSTEM}_{suffix}"

    def describe(self) -> Iterator[GaugeMetricFamily]:
        yield from self._families(PoolStats())

    def collect(self) -> Iterator[GaugeMetricFamily]:
        yield from self._families(self._stats())

    def _families(self, stats: PoolStats) -> Iterator[GaugeMetricFamily]:
        for suffix, doc, value in (
            ("total_conns", "number of total connections in the pool.", stats.total_conns),
            ("idle_conns", "number of idle connections in the pool.", stats.idle_conns),
            ("in_use_conns", "number of connections checked out of the pool.", stats.in_use_conns),
        ):
            family = GaugeMetricFamily(self._metric_name(suffix), doc, labels=["name"])
            family.add_metric([self._name], value)
            yield family
