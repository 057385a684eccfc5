from __future__ import annotations

from typing import TYPE_CHECKING, Any

from redisson import commands as c
from redisson.client.base import DEFAULT_NODE
from redisson.results import (
    ClusterShardsCmd,
    ClusterSlotsCmd,
    IntCmd,
    StatusCmd,
    StringCmd,
    StringSliceCmd,
)

if TYPE_CHECKING:
    from redisson.types import KeyT


class ClusterCommandsMixin:
    """``CLUSTER`` administration, sent to one node of the cluster."""

    # Type hints for base class attributes
    _run: Any

    def _cluster(self, command: Any, argv: list[Any], result_cls: type = StatusCmd) -> Any:
        return self._run(command, argv, result_cls, target=DEFAULT_NODE)

    def cluster_add_slots(self, *slots: int) -> StatusCmd:
        return self._cluster(c.CLUSTER_ADD_SLOTS, list(slots))

    def cluster_add_slots_range(self, start: int, end: int) -> StatusCmd:
        return self._cluster(c.CLUSTER_ADD_SLOTS_RANGE, [start, end])

    def cluster_count_failure_reports(self, node_id: str) -> IntCmd:
        return self._cluster(c.CLUSTER_COUNT_FAILURE_REPORTS, [node_id], IntCmd)

    def cluster_count_keys_in_slot(self, slot: int) -> IntCmd:
        return self._cluster(c.CLUSTER_COUNT_KEYS_IN_SLOT, [slot], IntCmd)

    def cluster_del_slots(self, *slots: int) -> StatusCmd:
        return self._cluster(c.CLUSTER_DEL_SLOTS, list(slots))

    def cluster_del_slots_range(self, start: int, end: int) -> StatusCmd:
        return self._cluster(c.CLUSTER_DEL_SLOTS_RANGE, [start, end])

    def cluster_failover(self) -> StatusCmd:
        return self._cluster(c.CLUSTER_FAILOVER, [])

    def cluster_forget(self, node_id: str) -> StatusCmd:
        return self._cluster(c.CLUSTER_FORGET, [node_id])

    def cluster_get_keys_in_slot(self, slot: int, count: int) -> StringSliceCmd:
        return self._cluster(c.CLUSTER_GET_KEYS_IN_SLOT, [slot, count], StringSliceCmd)

    def cluster_info(self) -> StringCmd:
        return self._cluster(c.CLUSTER_INFO, [], StringCmd)

    def cluster_key_slot(self, key: KeyT) -> IntCmd:
        return self._cluster(c.CLUSTER_KEY_SLOT, [key], IntCmd)

    def cluster_meet(self, host: str, port: int) -> StatusCmd:
        return self._cluster(c.CLUSTER_MEET, [host, port])

    def cluster_nodes(self) -> StringCmd:
        return self._cluster(c.CLUSTER_NODES, [], StringCmd)

    def cluster_replicate(self, node_id: str) -> StatusCmd:
        return self._cluster(c.CLUSTER_REPLICATE, [node_id])

    def cluster_reset_soft(self) -> StatusCmd:
        return self._cluster(c.CLUSTER_RESET_SOFT, ["SOFT"])

    def cluster_reset_hard(self) -> StatusCmd:
        return self._cluster(c.CLUSTER_RESET_HARD, ["HARD"])

    def cluster_save_config(self) -> StatusCmd:
        return self._cluster(c.CLUSTER_SAVE_CONFIG, [])

    def cluster_slaves(self, node_id: str) -> StringSliceCmd:
        return self._cluster(c.CLUSTER_SLAVES, [node_id], StringSliceCmd)

    def cluster_slots(self) -> ClusterSlotsCmd:
        return self._cluster(c.CLUSTER_SLOTS, [], ClusterSlotsCmd)

    def cluster_shards(self) -> ClusterShardsCmd:
        return self._cluster(c.CLUSTER_SHARDS, [], ClusterShardsCmd)

    def read_only(self) -> StatusCmd:
        return self._cluster(c.READ_ONLY, [])

    def read_write(self) -> StatusCmd:
        return self._cluster(c.READ_WRITE, [])
