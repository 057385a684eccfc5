"""Client configuration and the Django-settings client registry.

Clients are configured through the ``REDISSON`` setting, one entry per alias::

    REDISSON = {
        "default": {
            "ADDRS": ["127.0.0.1:6379"],
            "RESP": 3,
            "DEVELOPMENT": DEBUG,
        },
        "sessions": {
            "ADDRS": ["10.0.0.1:7000", "10.0.0.2:7000"],
            "CLIENT_CLASS": "myproject.redis.TracedClient",
        },
    }

``clients["sessions"]`` then returns a per-thread client, connected on first
access. ``get_client()`` is a shortcut for the default alias.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields, replace
from datetime import timedelta
from typing import TYPE_CHECKING, Any

from django.utils.connection import BaseConnectionHandler, ConnectionDoesNotExist
from django.utils.module_loading import import_string

from redisson.args import to_timedelta
from redisson.exceptions import InvalidClientConfigError

if TYPE_CHECKING:
    from redisson.client.default import Client

logger = logging.getLogger(__name__)

DEFAULT_CLIENT_ALIAS = "default"
DEFAULT_CLIENT_CLASS = "redisson.client.default.Client"
DEFAULT_CONNECTION_FACTORY = "redisson.pool.ConnectionFactory"

RESP2 = 2
RESP3 = 3


@dataclass
class Conf:
    """Options of one client.

    Attributes:
        resp: Protocol version requested first; falls back to 2 when the
            server rejects ``HELLO``.
        name: Client name sent with ``CLIENT SETNAME`` and used as the pool
            metrics label.
        master_name: Sentinel master set. When set, ``addrs`` are sentinels.
        enable_monitor: Record ``redis_exec_*`` metrics.
        addrs: ``host:port`` seeds, or socket paths when ``net`` is ``"unix"``.
        write_timeout: Connect timeout of new TCP connections. Replies are
            not bounded by it, since a socket timeout would also cut blocking
            commands short. Blocking commands clamp their server-side
            timeout to the ambient ``redisson.context.deadline`` instead.
        conn_pool_size: Maximum connections per node pool, 0 for unbounded.
        enable_cache: Allow cacheable reads to be served client-side.
        cache_size_each_conn: Maximum entries of the client-side cache.
        development: Run version, slot and deprecation checks on each call.
        force_single_client: Never upgrade a standalone seed to a cluster client.
        ttl: Client-side cache TTL applied to cacheable reads, 0 to disable.
    """

    resp: int = RESP3
    name: str = ""
    master_name: str = ""
    enable_monitor: bool = True
    addrs: list[str] = field(default_factory=lambda: ["127.0.0.1:6379"])
    db: int = 0
    username: str = ""
    password: str = ""
    write_timeout: timedelta = timedelta(seconds=10)
    conn_pool_size: int = 0
    enable_cache: bool = True
    cache_size_each_conn: int = 0
    development: bool = True
    force_single_client: bool = False
    ttl: timedelta = timedelta(0)
    net: str = "tcp"

    def __post_init__(self) -> None:
        self.write_timeout = to_timedelta(self.write_timeout)
        self.ttl = to_timedelta(self.ttl)
        if isinstance(self.addrs, str):
            self.addrs = [self.addrs]
        if self.resp not in (RESP2, RESP3):
            msg = f"RESP must be 2 or 3, got {self.resp!r}"
            raise InvalidClientConfigError(msg)
        if self.net.lower() not in ("tcp", "unix"):
            msg = f"NET must be 'tcp' or 'unix', got {self.net!r}"
            raise InvalidClientConfigError(msg)

    @classmethod
    def from_dict(cls, options: dict[str, Any]) -> Conf:
        """Build a Conf from a settings entry.

        Keys are matched case-insensitively, so both ``"ADDRS"`` and
        ``"addrs"`` work. ``CLIENT_CLASS`` and ``CONNECTION_FACTORY`` are
        ignored here. Unknown keys raise ``InvalidClientConfigError``.
        """
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in options.items():
            name = key.lower()
            if name in ("client_class", "connection_factory"):
                continue
            if name not in known:
                msg = f"unknown redisson option {key!r}"
                raise InvalidClientConfigError(msg)
            kwargs[name] = value
        return cls(**kwargs)

    def with_options(self, **changes: Any) -> Conf:
        return replace(self, **changes)


class ClientHandler(BaseConnectionHandler):
    """Per-thread clients keyed by alias, configured from ``settings.REDISSON``."""

    settings_name = "REDISSON"
    exception_class = ConnectionDoesNotExist

    def configure_settings(self, settings: dict[str, Any] | None) -> dict[str, Any]:
        settings = super().configure_settings(settings)
        if not isinstance(settings, dict):
            msg = "REDISSON must be a dict of aliases to client options"
            raise InvalidClientConfigError(msg)
        return settings

    def create_connection(self, alias: str) -> Client:
        options = dict(self.settings[alias])
        client_class = options.pop("CLIENT_CLASS", options.pop("client_class", DEFAULT_CLIENT_CLASS))
        if isinstance(client_class, str):
            client_class = import_string(client_class)
        factory = options.pop("CONNECTION_FACTORY", options.pop("connection_factory", None))
        conf = Conf.from_dict(options)
        if not conf.name:
            conf.name = alias
        logger.debug("connecting redisson client %r to %s", alias, conf.addrs)
        return client_class.connect(conf, connection_factory=factory)


clients = ClientHandler()


def get_client(alias: str = DEFAULT_CLIENT_ALIAS) -> Client:
    """Return the client configured under ``alias`` for the current thread."""
    return clients[alias]
