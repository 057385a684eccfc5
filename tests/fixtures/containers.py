"""Redis servers for integration tests, started on demand with testcontainers.

The standalone image can be overridden with ``REDISSON_TEST_IMAGE`` to run the
suite against an older server, e.g. ``redis:6.2``.
"""

import time
from collections.abc import Callable, Iterator
from contextlib import suppress
from os import environ
from typing import NamedTuple

import docker
import pytest
import redis
from docker.errors import DockerException
from testcontainers.core.container import DockerContainer
from testcontainers.core.waiting_utils import wait_for_logs

from redisson.pool import parse_info, strip_callbacks

REDIS_IMAGE = environ.get("REDISSON_TEST_IMAGE", "redis:latest")

# 3 primaries + 3 replicas in one container, see https://github.com/Grokzen/docker-redis-cluster
CLUSTER_IMAGE = "grokzen/redis-cluster:7.0.10"
CLUSTER_NODES = 6
CLUSTER_FIRST_PORT = 17000
CLUSTER_ATTEMPTS = 3
CLUSTER_ATTEMPT_STRIDE = 100
CLUSTER_WORKER_STRIDE = 10
READY_TIMEOUT = 30.0
READY_POLL = 0.5


class RedisServer(NamedTuple):
    host: str
    port: int
    container: DockerContainer

    @property
    def address(self) -> tuple[str, int]:
        return self.host, self.port


ServerFactory = Callable[[], tuple[str, int]]


def _require_docker() -> None:
    try:
        docker.from_env().ping()
    except DockerException as e:
        pytest.skip(f"docker is not available: {e}")


def _worker_index() -> int:
    worker = environ.get("PYTEST_XDIST_WORKER", "gw0")
    return int(worker.removeprefix("gw") or 0)


def _wait_until_serving(host: str, port: int) -> None:
    """Poll a cluster node until it reports cluster mode and ``cluster_state:ok``.

    The container logs its "state changed" line before every node answers.
    """
    give_up = time.monotonic() + READY_TIMEOUT
    last_error: Exception | None = None
    while time.monotonic() < give_up:
        conn = redis.Redis(host=host, port=port, socket_connect_timeout=2)
        strip_callbacks(conn)
        try:
            if parse_info(conn.execute_command("INFO", "server", "cluster")).cluster:
                state = conn.execute_command("CLUSTER", "INFO")
                if b"cluster_state:ok" in state:
                    return
        except (redis.RedisError, ValueError) as e:
            last_error = e
        finally:
            conn.close()
        time.sleep(READY_POLL)
    msg = f"redis cluster on {host}:{port} not serving after {READY_TIMEOUT}s"
    raise RuntimeError(msg) from last_error


def start_standalone() -> RedisServer:
    container = (
        DockerContainer(REDIS_IMAGE)
        .with_exposed_ports(6379)
        .with_command("redis-server --protected-mode no --enable-debug-command yes")
    )
    container.start()
    wait_for_logs(container, "Ready to accept connections")
    return RedisServer(container.get_container_host_ip(), int(container.get_exposed_port(6379)), container)


def start_cluster() -> RedisServer:
    """Start the cluster image on fixed host ports.

    Nodes advertise their own ports in ``CLUSTER SLOTS``, so the bindings
    mirror them one to one. A busy port range moves the next attempt up.
    """
    first = CLUSTER_FIRST_PORT + _worker_index() * CLUSTER_WORKER_STRIDE
    last_error: Exception | None = None
    for attempt in range(CLUSTER_ATTEMPTS):
        base = first + attempt * CLUSTER_ATTEMPT_STRIDE
        container = DockerContainer(CLUSTER_IMAGE).with_env("IP", "0.0.0.0")  # noqa: S104
        container.with_env("INITIAL_PORT", str(base))
        for port in range(base, base + CLUSTER_NODES):
            container.with_bind_ports(port, port)
        try:
            container.start()
        except DockerException as e:
            last_error = e
            with suppress(DockerException):
                container.stop()
            continue
        wait_for_logs(container, "Cluster state changed: ok")
        host = container.get_container_host_ip()
        _wait_until_serving(host, base)
        return RedisServer(host, base, container)
    msg = f"could not start {CLUSTER_IMAGE} after {CLUSTER_ATTEMPTS} attempts"
    raise RuntimeError(msg) from last_error


def _lazy_server(start: Callable[[], RedisServer]) -> Iterator[ServerFactory]:
    servers: list[RedisServer] = []

    def address() -> tuple[str, int]:
        if not servers:
            _require_docker()
            servers.append(start())
        return servers[0].address

    yield address

    for server in servers:
        with suppress(DockerException):
            server.container.stop()


@pytest.fixture(scope="session")
def redis_container_factory() -> Iterator[ServerFactory]:
    """Starts the standalone server on first use and stops it at session end."""
    yield from _lazy_server(start_standalone)


@pytest.fixture(scope="session")
def cluster_container_factory() -> Iterator[ServerFactory]:
    """Starts the cluster on first use and stops it at session end."""
    yield from _lazy_server(start_cluster)


@pytest.fixture
def redis_container(redis_container_factory: ServerFactory) -> tuple[str, int]:
    return redis_container_factory()


@pytest.fixture
def cluster_container(cluster_container_factory: ServerFactory) -> tuple[str, int]:
    """Address of the first cluster primary, used as the seed."""
    return cluster_container_factory()
