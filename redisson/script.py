"""Lua scripts addressed by their SHA1.

Example:
    Run a script without loading it first::

        script = client.create_script_with_name("echo", "return ARGV[1]")
        script.run([], "hello").result()  # "hello"

``run`` sends ``EVALSHA`` and falls back to ``EVAL`` with the full source when
the server answers ``NOSCRIPT``. The ``EVAL`` also caches the script, so later
``run`` calls succeed on the first try.
"""

from __future__ import annotations

import contextlib
import hashlib
from typing import TYPE_CHECKING, Any

from redisson import context
from redisson.exceptions import is_no_script_error

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

    from redisson.client.default import Client
    from redisson.results import BoolSliceCmd, Cmd, StringCmd
    from redisson.types import KeyT


def script_hash(src: str) -> str:
    """Lowercase hex SHA1 of ``src``, as Redis computes it."""
    return hashlib.sha1(src.encode()).hexdigest()  # noqa: S324


class Script:
    """A Lua script bound to a client.

    Attributes:
        src: The Lua source.
        name: Optional label recorded as the ``s_command`` of every call.
    """

    def __init__(self, client: Client, src: str, name: str = "") -> None:
        self._client = client
        self.src = src
        self.name = name
        self._hash = script_hash(src)

    def __repr__(self) -> str:
        return f"<Script {self.name or self._hash}>"

    def hash(self) -> str:
        return self._hash

    @contextlib.contextmanager
    def _labelled(self) -> Iterator[None]:
        if not self.name:
            yield
            return
        with context.with_sub_command_name(self.name):
            yield

    def load(self) -> StringCmd:
        with self._labelled():
            return self._client.script_load(self.src)

    def exists(self) -> BoolSliceCmd:
        with self._labelled():
            return self._client.script_exists(self._hash)

    def eval(self, keys: Sequence[KeyT], *args: Any) -> Cmd:
        with self._labelled():
            return self._client.eval(self.src, keys, *args)

    def eval_ro(self, keys: Sequence[KeyT], *args: Any) -> Cmd:
        with self._labelled():
            return self._client.eval_ro(self.src, keys, *args)

    def eval_sha(self, keys: Sequence[KeyT], *args: Any) -> Cmd:
        with self._labelled():
            return self._client.eval_sha(self._hash, keys, *args)

    def eval_sha_ro(self, keys: Sequence[KeyT], *args: Any) -> Cmd:
        with self._labelled():
            return self._client.eval_sha_ro(self._hash, keys, *args)

    def run(self, keys: Sequence[KeyT], *args: Any) -> Cmd:
        """``EVALSHA``, retried once as ``EVAL`` on ``NOSCRIPT``."""
        result = self.eval_sha(keys, *args)
        if is_no_script_error(result.err):
            return self.eval(keys, *args)
        return result

    def run_ro(self, keys: Sequence[KeyT], *args: Any) -> Cmd:
        """Read-only ``run``; needs Redis 7."""
        result = self.eval_sha_ro(keys, *args)
        if is_no_script_error(result.err):
            return self.eval_ro(keys, *args)
        return result
