"""Client fixtures, parametrized over topology and protocol."""

from collections.abc import Iterator

import pytest

from redisson import Client, Conf
from redisson.conf import RESP2, RESP3


def flush(client: Client) -> None:
    errs = client.for_each_nodes(lambda node: node.flush_all().err)
    if errs is not None:
        raise errs


@pytest.fixture(params=["standalone", "cluster"])
def topology(request) -> str:
    """Parametrized topology fixture."""
    return request.param


@pytest.fixture(params=[RESP3, RESP2], ids=["resp3", "resp2"])
def resp(request) -> int:
    """Parametrized protocol fixture."""
    return request.param


def build_conf(host: str, port: int, **options) -> Conf:
    return Conf(addrs=[f"{host}:{port}"], **options)


@pytest.fixture
def client(request: pytest.FixtureRequest, topology: str, resp: int) -> Iterator[Client]:
    """A connected client on an empty database.

    The cluster is reached through a single seed, so the client discovers
    cluster mode and reconnects as a cluster client.
    """
    fixture = "cluster_container" if topology == "cluster" else "redis_container"
    host, port = request.getfixturevalue(fixture)
    c = Client.connect(build_conf(host, port, resp=resp, name=f"test_{topology}_resp{resp}"))
    flush(c)
    yield c
    flush(c)
    c.close()


@pytest.fixture
def standalone_client(redis_container: tuple[str, int]) -> Iterator[Client]:
    """A RESP3 client on the standalone container only."""
    host, port = redis_container
    c = Client.connect(build_conf(host, port, name="test_standalone"))
    flush(c)
    yield c
    flush(c)
    c.close()
