"""Pytest configuration for redisson tests."""

from tests.fixtures import (
    client,
    cluster_container,
    cluster_container_factory,
    driver,
    fake_client,
    redis_container,
    redis_container_factory,
    resp,
    standalone_client,
    topology,
)

# Re-export fixtures so pytest can discover them
__all__ = [
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
