from __future__ import annotations

from typing import TYPE_CHECKING, Any

from redisson import args as _args
from redisson import commands as c
from redisson.client.base import DEFAULT_NODE
from redisson.results import BoolCmd, IntCmd, StatusCmd, StringCmd

if TYPE_CHECKING:
    from redisson.types import Duration


class ConnectionCommandsMixin:
    """Connection commands.

    Each call borrows one pooled connection, so per-connection state such
    as ``CLIENT SETNAME`` only sticks to whichever connection ran it.
    """

    # Type hints for base class attributes
    _run: Any

    def _conn(self, command: Any, argv: list[Any], result_cls: type = StatusCmd) -> Any:
        return self._run(command, argv, result_cls, target=DEFAULT_NODE)

    def client_get_name(self) -> StringCmd:
        return self._conn(c.CLIENT_GET_NAME, [], StringCmd)

    def client_id(self) -> IntCmd:
        return self._conn(c.CLIENT_ID, [], IntCmd)

    def client_kill(self, ip_port: str) -> StatusCmd:
        return self._conn(c.CLIENT_KILL, [ip_port])

    def client_kill_by_filter(self, *filters: Any) -> IntCmd:
        """``CLIENT KILL`` with filter pairs, e.g. ``"TYPE", "pubsub"``."""
        names = {str(f).upper() for f in filters[::2]}
        if "LADDR" in names:
            command = c.CLIENT_KILL_BY_FILTER_WITH_LADDR
        elif "TYPE" in names:
            command = c.CLIENT_KILL_BY_FILTER_WITH_TYPE
        else:
            command = c.CLIENT_KILL_BY_FILTER
        return self._conn(command, list(filters), IntCmd)

    def client_list(self) -> StringCmd:
        return self._conn(c.CLIENT_LIST, [], StringCmd)

    def client_pause(self, duration: Duration) -> BoolCmd:
        return self._conn(c.CLIENT_PAUSE, [_args.format_ms(duration)], BoolCmd)

    def client_set_name(self, name: str) -> BoolCmd:
        return self._conn(c.CLIENT_SET_NAME, [name], BoolCmd)

    def client_unblock(self, client_id: int) -> IntCmd:
        return self._conn(c.CLIENT_UNBLOCK, [client_id], IntCmd)

    def client_unblock_with_error(self, client_id: int) -> IntCmd:
        return self._conn(c.CLIENT_UNBLOCK_WITH_ERROR, [client_id, "ERROR"], IntCmd)

    def client_unpause(self) -> BoolCmd:
        return self._conn(c.CLIENT_UNPAUSE, [], BoolCmd)

    def echo(self, message: Any) -> StringCmd:
        return self._conn(c.ECHO, [message], StringCmd)

    def ping(self) -> StatusCmd:
        return self._conn(c.PING, [])

    def quit(self) -> StatusCmd:
        return self._conn(c.QUIT, [])
