from __future__ import annotations

from typing import TYPE_CHECKING, Any

from redisson import commands as c
from redisson.client.base import DEFAULT_NODE
from redisson.results import (
    CommandsInfoCmd,
    IntCmd,
    KeyFlagsCmd,
    StatusCmd,
    StringCmd,
    StringSliceCmd,
    StringStringMapCmd,
    TimeCmd,
)

if TYPE_CHECKING:
    from redisson.types import KeyT


class ServerCommandsMixin:
    """Server administration.

    On a cluster these run against a single node; use ``for_each_nodes`` to
    reach every primary.
    """

    # Type hints for base class attributes
    _run: Any

    def _admin(self, command: Any, argv: list[Any], result_cls: type = StatusCmd) -> Any:
        return self._run(command, argv, result_cls, target=DEFAULT_NODE)

    def acl_dry_run(self, username: str, *command: Any) -> StringCmd:
        return self._admin(c.ACL_DRY_RUN, [username, *command], StringCmd)

    def bg_rewrite_aof(self) -> StatusCmd:
        return self._admin(c.BG_REWRITE_AOF, [])

    def bg_save(self) -> StatusCmd:
        return self._admin(c.BG_SAVE, [])

    def command(self) -> CommandsInfoCmd:
        return self._admin(c.COMMAND, [], CommandsInfoCmd)

    def command_list(self, filter_by: str = "", value: str = "") -> StringSliceCmd:
        """``COMMAND LIST``, optionally ``FILTERBY MODULE|ACLCAT|PATTERN value``."""
        argv: list[Any] = []
        if filter_by:
            argv.extend(["FILTERBY", filter_by.upper(), value])
        return self._admin(c.COMMAND_LIST, argv, StringSliceCmd)

    def command_get_keys(self, *command: Any) -> StringSliceCmd:
        return self._admin(c.COMMAND_GET_KEYS, list(command), StringSliceCmd)

    def command_get_keys_and_flags(self, *command: Any) -> KeyFlagsCmd:
        return self._admin(c.COMMAND_GET_KEYS_AND_FLAGS, list(command), KeyFlagsCmd)

    def config_get(self, parameter: str) -> StringStringMapCmd:
        return self._admin(c.CONFIG_GET, [parameter], StringStringMapCmd)

    def config_reset_stat(self) -> StatusCmd:
        return self._admin(c.CONFIG_RESET_STAT, [])

    def config_rewrite(self) -> StatusCmd:
        return self._admin(c.CONFIG_REWRITE, [])

    def config_set(self, parameter: str, value: Any) -> StatusCmd:
        return self._admin(c.CONFIG_SET, [parameter, value])

    def db_size(self) -> IntCmd:
        return self._admin(c.DB_SIZE, [], IntCmd)

    def flush_all(self) -> StatusCmd:
        return self._admin(c.FLUSH_ALL, [])

    def flush_all_async(self) -> StatusCmd:
        return self._admin(c.FLUSH_ALL_ASYNC, ["ASYNC"])

    def flush_db(self) -> StatusCmd:
        return self._admin(c.FLUSH_DB, [])

    def flush_db_async(self) -> StatusCmd:
        return self._admin(c.FLUSH_DB_ASYNC, ["ASYNC"])

    def info(self, *sections: str) -> StringCmd:
        """``INFO``; several sections at once need Redis 7."""
        command = c.M_SERVER_INFO if len(sections) > 1 else c.INFO
        return self._admin(command, list(sections), StringCmd)

    def last_save(self) -> IntCmd:
        return self._admin(c.LAST_SAVE, [], IntCmd)

    def memory_usage(self, key: KeyT, samples: int = 0) -> IntCmd:
        argv: list[Any] = [key]
        if samples > 0:
            argv.extend(["SAMPLES", samples])
        return self._run(c.MEMORY_USAGE, argv, IntCmd)

    def save(self) -> StatusCmd:
        return self._admin(c.SAVE, [])

    def shutdown(self) -> StatusCmd:
        return self._admin(c.SHUTDOWN, [])

    def shutdown_save(self) -> StatusCmd:
        return self._admin(c.SHUTDOWN_SAVE, ["SAVE"])

    def shutdown_no_save(self) -> StatusCmd:
        return self._admin(c.SHUTDOWN_NO_SAVE, ["NOSAVE"])

    def time(self) -> TimeCmd:
        return self._admin(c.TIME, [], TimeCmd)

    def debug_object(self, key: KeyT) -> StringCmd:
        return self._run(c.DEBUG_OBJECT, [key], StringCmd)
