"""Dispatch tests against a mocked driver: argv shaping, errors, deadlines and caching."""

from datetime import timedelta
from unittest.mock import MagicMock

import pytest
from redis.cluster import RedisCluster
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import ResponseError

from redisson import commands as c
from redisson.args import KEEP_TTL
from redisson.cache import MISSING, LocalCache
from redisson.context import deadline
from redisson.exceptions import ArgumentError, CrossSlotError, DeadlineExceededError, is_nil
from redisson.types import GeoRadiusQuery, SetArgs
from tests.fixtures.fake import make_client, sent


class TestArgv:
    def test_set_and_get(self, fake_client, driver):
        driver.execute_command.return_value = b"OK"
        assert fake_client.set("k", "v").result() == "OK"
        driver.execute_command.return_value = b"v"
        assert fake_client.get("k").result() == "v"
        assert sent(driver) == [["SET", "k", "v"], ["GET", "k"]]

    @pytest.mark.parametrize(
        ("expiration", "tail"),
        [
            (5, ["EX", "5"]),
            (1.5, ["PX", "1500"]),
            (timedelta(minutes=1), ["EX", "60"]),
            (KEEP_TTL, ["KEEPTTL"]),
        ],
    )
    def test_set_expiry(self, fake_client, driver, expiration, tail):
        fake_client.set("k", 1, expiration)
        assert sent(driver) == [["SET", "k", "1", *tail]]

    def test_set_args_keep_ttl_wins(self, fake_client, driver):
        fake_client.set_args("k", "v", SetArgs(mode="xx", ttl=10, keep_ttl=True, get=True))
        assert sent(driver) == [["SET", "k", "v", "KEEPTTL", "XX", "GET"]]

    def test_set_nx_refused_is_false(self, fake_client, driver):
        driver.execute_command.return_value = None
        result = fake_client.set_nx("k", "v")
        assert result.err is None
        assert result.val is False

    def test_exists_multiple_keys(self, fake_client, driver):
        driver.execute_command.return_value = 2
        assert fake_client.exists("a", "b").result() == 2
        assert sent(driver) == [["EXISTS", "a", "b"]]

    def test_nil_reply(self, fake_client, driver):
        driver.execute_command.return_value = None
        result = fake_client.get("missing")
        assert is_nil(result.err)
        assert result.val == ""

    def test_do(self, fake_client, driver):
        driver.execute_command.return_value = 5
        result = fake_client.do("OBJECT", "FREQ", "k")
        assert result.val == 5
        assert sent(driver) == [["OBJECT", "FREQ", "k"]]


class TestProgrammerErrors:
    def test_invalid_set_mode(self, fake_client, driver):
        with pytest.raises(ArgumentError):
            fake_client.set_args("k", "v", SetArgs(mode="EX"))
        driver.execute_command.assert_not_called()

    def test_geo_radius_rejects_store(self, fake_client):
        with pytest.raises(ArgumentError, match="geo_radius_store"):
            fake_client.geo_radius("Sicily", 15, 37, GeoRadiusQuery(radius=200, store="dst"))

    def test_cross_slot_on_cluster(self, driver):
        client = make_client(driver, cluster=True, enable_monitor=False)
        with pytest.raises(CrossSlotError):
            client.m_get("a", "b")
        driver.execute_command.assert_not_called()

    def test_unsupported_argument_type(self, fake_client):
        with pytest.raises(TypeError):
            fake_client.set("k", object())


class TestErrors:
    def test_driver_error_is_stored(self, fake_client, driver):
        driver.execute_command.side_effect = RedisConnectionError("connection refused")
        result = fake_client.incr("k")
        assert isinstance(result.err, RedisConnectionError)
        assert result.val == 0
        assert result.args == ["INCR", "k"]

    def test_server_error_is_stored(self, fake_client, driver):
        driver.execute_command.side_effect = ResponseError("ERR value is not an integer or out of range")
        result = fake_client.incr("k")
        with pytest.raises(ResponseError):
            result.result()


class TestDeadline:
    def test_expired_deadline_skips_io(self, fake_client, driver):
        with deadline(0):
            result = fake_client.get("k")
        assert isinstance(result.err, DeadlineExceededError)
        driver.execute_command.assert_not_called()

    def test_blocking_timeout_clamped(self, fake_client, driver):
        with deadline(0.5):
            fake_client.bl_pop(0, "queue")
        timeout = float(sent(driver)[0][-1])
        assert 0 < timeout <= 0.5

    def test_blocking_timeout_without_deadline(self, fake_client, driver):
        fake_client.bl_pop(2, "queue")
        assert sent(driver) == [["BLPOP", "queue", "2"]]

    def test_nested_deadline_keeps_earliest(self, fake_client, driver):
        with deadline(0.2), deadline(10):
            fake_client.bl_pop(5, "queue")
        assert float(sent(driver)[0][-1]) <= 0.2


class TestCacheView:
    def test_repeated_read_served_from_cache(self, fake_client, driver):
        driver.execute_command.return_value = b"v"
        view = fake_client.cache(30)
        assert view.get("k").result() == "v"
        assert view.get("k").result() == "v"
        assert len(sent(driver)) == 1
        assert view.ttl == timedelta(seconds=30)

    def test_client_itself_does_not_cache(self, fake_client, driver):
        driver.execute_command.return_value = b"v"
        fake_client.cache(30).get("k")
        fake_client.get("k")
        assert len(sent(driver)) == 2

    def test_cached_nil(self, fake_client, driver):
        driver.execute_command.return_value = None
        view = fake_client.cache(30)
        assert is_nil(view.get("k").err)
        assert is_nil(view.get("k").err)
        assert len(sent(driver)) == 1

    def test_rejects_writes(self, fake_client):
        view = fake_client.cache(30)
        with pytest.raises(AttributeError):
            view.set("k", "v")
        assert "h_get_all" in dir(view)

    def test_cache_disabled(self, driver):
        client = make_client(driver, enable_cache=False, enable_monitor=False)
        driver.execute_command.return_value = b"v"
        view = client.cache(30)
        view.get("k")
        view.get("k")
        assert len(sent(driver)) == 2

    def test_same_ttl_reuses_client(self, driver):
        client = make_client(driver, ttl=30, enable_monitor=False)
        assert client.cache(30)._client is client

    def test_every_cacheable_handle_is_exposed(self):
        from redisson.cache import CACHEABLE_METHODS
        from redisson.client import Client

        for name in CACHEABLE_METHODS:
            assert callable(getattr(Client, name)), name
        assert all(cmd.category is c.Category.READ for cmd in c.cacheable())


class TestCacheInvalidation:
    @pytest.fixture
    def caching_client(self, driver):
        return make_client(driver, ttl=timedelta(seconds=30), enable_monitor=False)

    def test_own_write_refreshes_read(self, caching_client, driver):
        driver.execute_command.side_effect = [b"OK", b"v1", b"OK", b"v2"]
        caching_client.set("k", "v1")
        assert caching_client.get("k").result() == "v1"
        caching_client.set("k", "v2")
        assert caching_client.get("k").result() == "v2"
        assert len(sent(driver)) == 4

    def test_other_keys_stay_cached(self, caching_client, driver):
        driver.execute_command.side_effect = [b"a", b"b", b"OK"]
        caching_client.get("a")
        caching_client.get("b")
        caching_client.set("a", "x")
        assert caching_client.get("b").result() == "b"
        assert len(sent(driver)) == 3

    def test_delete(self, caching_client, driver):
        driver.execute_command.side_effect = [b"v", 1, None]
        caching_client.get("k")
        caching_client.delete("k")
        assert is_nil(caching_client.get("k").err)
        assert len(sent(driver)) == 3

    def test_failed_write_still_invalidates(self, caching_client, driver):
        driver.execute_command.side_effect = [b"1", RedisConnectionError("reset"), b"2"]
        caching_client.get("n")
        assert caching_client.incr("n").err is not None
        assert caching_client.get("n").result() == "2"

    def test_flush_all_clears_everything(self, caching_client, driver):
        driver.execute_command.side_effect = [b"a", b"b", b"OK", b"a2", b"b2"]
        caching_client.get("a")
        caching_client.get("b")
        caching_client.flush_all()
        assert caching_client.get("a").result() == "a2"
        assert caching_client.get("b").result() == "b2"

    def test_raw_command_clears_everything(self, caching_client, driver):
        driver.execute_command.side_effect = [b"v1", b"OK", b"v2"]
        caching_client.get("k")
        caching_client.do("SET", "k", "v2")
        assert caching_client.get("k").result() == "v2"

    def test_pipeline_write(self, caching_client, driver):
        driver.execute_command.side_effect = [b"v1", b"OK", b"v2"]
        caching_client.get("k")
        with caching_client.pipeline() as pipe:
            pipe.put(c.SET, ["k"], "v2")
            pipe.exec()
        assert caching_client.get("k").result() == "v2"

    def test_view_sees_owner_writes(self, fake_client, driver):
        driver.execute_command.side_effect = [b"v1", b"OK", b"v2"]
        view = fake_client.cache(30)
        view.get("k")
        fake_client.set("k", "v2")
        assert view.get("k").result() == "v2"

    def test_read_racing_a_write_is_not_cached(self):
        cache = LocalCache()
        generation = cache.generation
        cache.invalidate(["k"])
        cache.put(["k"], "entry", b"old", 30, generation)
        assert cache.get("entry") is MISSING

    def test_invalidate_drops_only_indexed_entries(self):
        cache = LocalCache()
        cache.put(["a"], "ea", b"1", 30, cache.generation)
        cache.put(["a", "b"], "eab", [b"1", b"2"], 30, cache.generation)
        cache.put([b"c"], "ec", b"3", 30, cache.generation)
        cache.invalidate([b"a"])
        assert cache.get("ea") is MISSING
        assert cache.get("eab") is MISSING
        assert cache.get("ec") == b"3"


class TestPipeline:
    def test_nil_reply_is_an_error(self, fake_client, driver):
        driver.pipeline.return_value.execute.return_value = [b"OK", None, b"v"]
        pipe = fake_client.pipeline()
        pipe.put(c.SET, ["a"], "1")
        pipe.put(c.GET, ["missing"])
        pipe.put(c.GET, ["a"])
        results, err = pipe.exec()
        assert is_nil(results[1])
        assert err is results[1]
        assert results[2] == "v"

    def test_single_command(self, fake_client, driver):
        driver.execute_command.return_value = b"OK"
        with fake_client.pipeline() as pipe:
            pipe.put(c.SET, ["a"], 1)
            results, err = pipe.exec()
        assert results == ["OK"]
        assert err is None
        assert sent(driver) == [["SET", "a", "1"]]

    def test_several_commands(self, fake_client, driver):
        failure = ResponseError("WRONGTYPE Operation against a key holding the wrong kind of value")
        pipe_driver = driver.pipeline.return_value
        pipe_driver.execute.return_value = [b"OK", failure, [b"x", None]]

        pipe = fake_client.pipeline()
        pipe.put(c.SET, ["a"], "1")
        pipe.put(c.INCR, ["b"])
        pipe.put(c.M_GET, ["c", "d"])
        assert len(pipe) == 3
        results, err = pipe.exec()

        assert results == ["OK", failure, ["x", None]]
        assert err is failure
        driver.pipeline.assert_called_once_with(transaction=False)
        assert [list(call.args) for call in pipe_driver.execute_command.call_args_list] == [
            ["SET", "a", "1"],
            ["INCR", "b"],
            ["MGET", "c", "d"],
        ]

    def test_empty(self, fake_client, driver):
        assert fake_client.pipeline().exec() == ([], None)
        driver.execute_command.assert_not_called()

    def test_expired_deadline(self, fake_client, driver):
        pipe = fake_client.pipeline()
        pipe.put(c.GET, ["a"])
        pipe.put(c.GET, ["b"])
        with deadline(0):
            results, err = pipe.exec()
        assert isinstance(err, DeadlineExceededError)
        assert len(results) == 2
        driver.pipeline.assert_not_called()


class TestClusterRouting:
    @pytest.fixture
    def cluster_driver(self):
        driver = MagicMock(spec=RedisCluster)
        driver.cluster_response_callbacks = {}
        driver.get_nodes.return_value = []
        return driver

    def test_keyless_command_goes_to_default_node(self, cluster_driver):
        client = make_client(cluster_driver, cluster=True, enable_monitor=False)
        client.random_key()
        cluster_driver.execute_command.assert_called_once_with("RANDOMKEY", target_nodes=RedisCluster.DEFAULT_NODE)

    def test_keyed_command_routed_by_driver(self, cluster_driver):
        client = make_client(cluster_driver, cluster=True, enable_monitor=False)
        client.get("k")
        cluster_driver.execute_command.assert_called_once_with("GET", "k")


class TestNodesAndMetrics:
    def test_for_each_nodes_standalone(self, fake_client):
        seen = []
        assert fake_client.for_each_nodes(lambda node: seen.append(node)) is None
        assert seen == [fake_client]

    def test_for_each_nodes_collects_errors(self):
        driver = MagicMock(spec=RedisCluster)
        driver.cluster_response_callbacks = {}
        driver.get_nodes.return_value = []
        nodes = [MagicMock(name="node-a"), MagicMock(name="node-b")]
        driver.get_primaries.return_value = nodes
        client = make_client(driver, cluster=True, enable_monitor=False)

        errors = client.for_each_nodes(lambda node: ResponseError("boom"))
        assert len(errors) == 2
        assert driver.get_redis_connection.call_count == 2

    def test_register_collector_once(self, fake_client):
        register = MagicMock()
        fake_client.register_collector(register)
        fake_client.register_collector(register)
        # four command metrics plus the pool gauges
        assert register.call_count == 5
