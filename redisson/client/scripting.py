from __future__ import annotations

from typing import TYPE_CHECKING, Any

from redisson import commands as c
from redisson.results import BoolSliceCmd, Cmd, FunctionListCmd, StatusCmd, StringCmd

if TYPE_CHECKING:
    from collections.abc import Sequence

    from redisson.commands import Command
    from redisson.types import FunctionListQuery, KeyT


class ScriptingCommandsMixin:
    """Lua scripts and functions.

    ``Script`` objects built by ``create_script`` wrap these calls with the
    ``EVALSHA`` to ``EVAL`` fallback; the raw commands are exposed as well.
    """

    # Type hints for base class attributes
    _run: Any

    def _eval(self, command: Command, body: str, keys: Sequence[KeyT], args: Sequence[Any]) -> Cmd:
        keys = list(keys)
        return self._run(command, [body, len(keys), *keys, *args], Cmd, keys=keys)

    def eval(self, script: str, keys: Sequence[KeyT], *args: Any) -> Cmd:
        return self._eval(c.EVAL, script, keys, args)

    def eval_ro(self, script: str, keys: Sequence[KeyT], *args: Any) -> Cmd:
        return self._eval(c.EVAL_RO, script, keys, args)

    def eval_sha(self, sha1: str, keys: Sequence[KeyT], *args: Any) -> Cmd:
        return self._eval(c.EVAL_SHA, sha1, keys, args)

    def eval_sha_ro(self, sha1: str, keys: Sequence[KeyT], *args: Any) -> Cmd:
        return self._eval(c.EVAL_SHA_RO, sha1, keys, args)

    def f_call(self, function: str, keys: Sequence[KeyT], *args: Any) -> Cmd:
        return self._eval(c.F_CALL, function, keys, args)

    def f_call_ro(self, function: str, keys: Sequence[KeyT], *args: Any) -> Cmd:
        return self._eval(c.F_CALL_RO, function, keys, args)

    # =========================================================================
    # Functions
    # =========================================================================

    def function_delete(self, library_name: str) -> StatusCmd:
        return self._run(c.FUNCTION_DELETE, [library_name], StatusCmd)

    def function_dump(self) -> StringCmd:
        return self._run(c.FUNCTION_DUMP, [], StringCmd)

    def function_flush(self) -> StatusCmd:
        return self._run(c.FUNCTION_FLUSH, [], StatusCmd)

    def function_flush_async(self) -> StatusCmd:
        return self._run(c.FUNCTION_FLUSH_ASYNC, ["ASYNC"], StatusCmd)

    def function_kill(self) -> StatusCmd:
        return self._run(c.FUNCTION_KILL, [], StatusCmd)

    def function_list(self, q: FunctionListQuery | None = None) -> FunctionListCmd:
        argv: list[Any] = []
        if q is not None:
            if q.library_name_pattern:
                argv.extend(["LIBRARYNAME", q.library_name_pattern])
            if q.with_code:
                argv.append("WITHCODE")
        return self._run(c.FUNCTION_LIST, argv, FunctionListCmd)

    def function_load(self, code: str) -> StringCmd:
        """Load a library; ``val`` is the library name."""
        return self._run(c.FUNCTION_LOAD, [code], StringCmd)

    def function_load_replace(self, code: str) -> StringCmd:
        return self._run(c.FUNCTION_LOAD_REPLACE, ["REPLACE", code], StringCmd)

    def function_restore(self, payload: bytes) -> StatusCmd:
        return self._run(c.FUNCTION_RESTORE, [payload], StatusCmd)

    # =========================================================================
    # Script cache
    # =========================================================================

    def script_exists(self, *hashes: str) -> BoolSliceCmd:
        return self._run(c.SCRIPT_EXISTS, hashes, BoolSliceCmd)

    def script_flush(self) -> StatusCmd:
        return self._run(c.SCRIPT_FLUSH, [], StatusCmd)

    def script_kill(self) -> StatusCmd:
        return self._run(c.SCRIPT_KILL, [], StatusCmd)

    def script_load(self, script: str) -> StringCmd:
        """Cache ``script`` on the server; ``val`` is its SHA1."""
        return self._run(c.SCRIPT_LOAD, [script], StringCmd)
