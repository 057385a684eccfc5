"""Test fixtures for redisson."""

from tests.fixtures.client import client, resp, standalone_client, topology
from tests.fixtures.containers import (
    RedisServer,
    cluster_container,
    cluster_container_factory,
    redis_container,
    redis_container_factory,
)
from tests.fixtures.fake import driver, fake_client

__all__ = [
    "RedisServer",
    "client",
    "cluster_container",
    "cluster_container_factory",
    "driver",
    "fake_client",
    "redis_container",
    "redis_container_factory",
    "resp",
    "standalone_client",
    "topology",
]
