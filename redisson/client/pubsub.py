from __future__ import annotations

from typing import TYPE_CHECKING, Any

from redisson import commands as c
from redisson.client.base import DEFAULT_NODE
from redisson.results import IntCmd, StringIntMapCmd, StringSliceCmd

if TYPE_CHECKING:
    from redis.client import PubSub

    from redisson.commands import Command


class PubSubCommandsMixin:
    """Publish/subscribe.

    ``subscribe`` and ``p_subscribe`` hand back a redis-py ``PubSub`` already
    listening on the channels; read it with ``get_message`` or ``listen``.
    """

    # Type hints for base class attributes
    _run: Any
    driver: Any
    handler: Any

    def publish(self, channel: str, message: Any) -> IntCmd:
        return self._run(c.PUBLISH, [channel, message], IntCmd, target=DEFAULT_NODE)

    def s_publish(self, channel: str, message: Any) -> IntCmd:
        """Sharded publish; routed by the channel's slot on a cluster."""
        return self._run(c.S_PUBLISH, [channel, message], IntCmd)

    def pub_sub_channels(self, pattern: str = "") -> StringSliceCmd:
        argv = [pattern] if pattern else []
        return self._run(c.PUB_SUB_CHANNELS, argv, StringSliceCmd, target=DEFAULT_NODE)

    def pub_sub_num_pat(self) -> IntCmd:
        return self._run(c.PUB_SUB_NUM_PAT, [], IntCmd, target=DEFAULT_NODE)

    def pub_sub_num_sub(self, *channels: str) -> StringIntMapCmd:
        return self._run(c.PUB_SUB_NUM_SUB, channels, StringIntMapCmd, target=DEFAULT_NODE)

    def pub_sub_shard_channels(self, pattern: str = "") -> StringSliceCmd:
        argv = [pattern] if pattern else []
        return self._run(c.PUB_SUB_SHARD_CHANNELS, argv, StringSliceCmd, target=DEFAULT_NODE)

    def pub_sub_shard_num_sub(self, *channels: str) -> StringIntMapCmd:
        return self._run(c.PUB_SUB_SHARD_NUM_SUB, channels, StringIntMapCmd, target=DEFAULT_NODE)

    # =========================================================================
    # Subscriptions
    # =========================================================================

    def _listen(self, command: Command, pubsub: PubSub, method: str, channels: tuple[str, ...]) -> None:
        with self.handler.scope(command, None):
            getattr(pubsub, method)(*channels)

    def subscribe(self, *channels: str) -> PubSub:
        pubsub = self.driver.pubsub()
        self._listen(c.SUBSCRIBE, pubsub, "subscribe", channels)
        return pubsub

    def p_subscribe(self, *patterns: str) -> PubSub:
        pubsub = self.driver.pubsub()
        self._listen(c.P_SUBSCRIBE, pubsub, "psubscribe", patterns)
        return pubsub

    def unsubscribe(self, pubsub: PubSub, *channels: str) -> None:
        self._listen(c.UNSUBSCRIBE, pubsub, "unsubscribe", channels)

    def p_unsubscribe(self, pubsub: PubSub, *patterns: str) -> None:
        self._listen(c.P_UNSUBSCRIBE, pubsub, "punsubscribe", patterns)
