"""Pipelines, cache views, locks, bloom filters and server helpers against real servers."""

import threading
from datetime import timedelta

import pytest
from prometheus_client import CollectorRegistry
from redis.exceptions import ResponseError

from redisson import Client
from redisson import commands as c
from redisson.context import deadline
from redisson.exceptions import DeadlineExceededError, NotLockedError


class TestPipeline:
    def test_exec(self, client: Client):
        with client.pipeline() as pipe:
            pipe.put(c.SET, ["{p}a"], "1")
            pipe.put(c.INCR, ["{p}a"])
            pipe.put(c.GET, ["{p}a"])
            results, err = pipe.exec()
        assert err is None
        assert results == ["OK", 2, "2"]

    def test_error_in_place(self, client: Client):
        client.set("{p}a", "abc").result()
        pipe = client.pipeline()
        pipe.put(c.INCR, ["{p}a"])
        pipe.put(c.GET, ["{p}a"])
        results, err = pipe.exec()
        assert isinstance(err, ResponseError)
        assert results[0] is err
        assert results[1] == "abc"

    def test_concurrent_put(self, client: Client):
        pipe = client.pipeline()

        def worker(n):
            for i in range(10):
                pipe.put(c.INCR, [f"{{p}}n{n}"])

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert len(pipe) == 40
        results, err = pipe.exec()
        assert err is None
        assert len(results) == 40


class TestCacheView:
    def test_own_writes_refresh_view(self, client: Client):
        client.set("k", "v1").result()
        view = client.cache(timedelta(seconds=30))
        assert view.get("k").result() == "v1"
        client.set("k", "v2").result()
        assert view.get("k").result() == "v2"
        client.delete("k").result()
        assert view.get("k").val == ""

    def test_foreign_writes_served_until_ttl(self, client: Client):
        client.set("k", "v1").result()
        view = client.cache(timedelta(seconds=30))
        assert view.get("k").result() == "v1"
        client.driver.execute_command("SET", "k", "v2")
        # no server-assisted tracking, so stale until the entry expires
        assert view.get("k").result() == "v1"
        assert client.get("k").result() == "v2"

    def test_views_with_different_ttls_share_entries(self, client: Client):
        client.h_set("h", "f", "1").result()
        assert client.cache(10).h_get("h", "f").result() == "1"
        assert client.cache(10).h_get_all("h").result() == {"f": "1"}


class TestRawCommands:
    def test_do(self, client: Client):
        client.do("SET", "k", "v").result()
        assert client.do("GET", "k").result() == "v"

    def test_deadline(self, client: Client):
        with deadline(0):
            assert isinstance(client.get("k").err, DeadlineExceededError)


class TestServer:
    def test_ping_and_info(self, client: Client):
        assert client.ping().result() == "PONG"
        assert "redis_version" in client.info("server").result()
        assert client.version is not None

    def test_time(self, client: Client):
        assert client.time().result().year >= 2024

    def test_for_each_nodes(self, client: Client):
        seen = []

        def visit(node: Client):
            seen.append(node.ping().result())

        assert client.for_each_nodes(visit) is None
        assert len(seen) == (3 if client.is_cluster else 1)

    def test_for_each_nodes_errors(self, client: Client):
        errs = client.for_each_nodes(lambda node: node.do("NOT-A-COMMAND").err)
        assert errs is not None
        assert isinstance(errs.last_err(), ResponseError)

    def test_db_size_per_node(self, client: Client):
        client.safe_m_set({f"k{i}": i for i in range(20)}).result()
        sizes = []
        client.for_each_nodes(lambda node: sizes.append(node.db_size().result()))
        assert sum(sizes) == 20

    def test_register_collector(self, client: Client):
        registry = CollectorRegistry()
        client.register_collector(registry.register)
        client.register_collector(registry.register)
        client.get("k")
        labels = {"command": "String", "s_command": "GET"}
        assert registry.get_sample_value("redis_exec_timing_count", labels) >= 1
        total = registry.get_sample_value("go_redis_pool_stats_connections_total_conns", {"name": client.conf.name})
        assert total >= 1


class TestLocker:
    def test_lock_and_release(self, standalone_client: Client):
        locker = standalone_client.new_locker()
        with locker.lock("job") as held:
            assert standalone_client.exists("redislock:job").result() == 1
            assert not held.lost
        assert standalone_client.exists("redislock:job").result() == 0

    def test_try_lock_busy(self, standalone_client: Client):
        locker = standalone_client.new_locker()
        held = locker.try_lock("job")
        with pytest.raises(NotLockedError):
            locker.try_lock("job")
        held.release()
        locker.try_lock("job").release()

    def test_lock_waits_until_deadline(self, standalone_client: Client):
        locker = standalone_client.new_locker()
        held = locker.try_lock("job")
        with deadline(0.2), pytest.raises(DeadlineExceededError):
            locker.lock("job")
        held.release()

    def test_extended_while_held(self, standalone_client: Client):
        locker = standalone_client.new_locker(
            key_validity=timedelta(milliseconds=400),
            extend_interval=timedelta(milliseconds=100),
        )
        with locker.lock("job") as held:
            threading.Event().wait(1.0)
            assert standalone_client.exists("redislock:job").result() == 1
            assert not held.lost

    def test_lost_lock(self, standalone_client: Client):
        locker = standalone_client.new_locker(
            key_validity=timedelta(milliseconds=400),
            extend_interval=timedelta(milliseconds=100),
        )
        held = locker.lock("job")
        standalone_client.delete("redislock:job").result()
        threading.Event().wait(0.5)
        assert held.lost
        locker.close()

    def test_close_releases_everything(self, standalone_client: Client):
        locker = standalone_client.new_locker(key_prefix="app")
        locker.lock("a")
        locker.lock("b")
        locker.close()
        assert standalone_client.exists("app:a", "app:b").result() == 0


class TestBloomFilter:
    def test_membership(self, client: Client):
        bf = client.new_bloom_filter("users", 1000, 0.01)
        bf.add("alice")
        bf.add_multi(["bob", "carol"])
        assert bf.exists("alice")
        assert bf.exists_multi(["bob", "carol"]) == [True, True]
        assert bf.count() == 3

    def test_false_positive_rate(self, client: Client):
        bf = client.new_bloom_filter("numbers", 500, 0.01)
        bf.add_multi([f"in-{i}" for i in range(500)])
        hits = bf.exists_multi([f"out-{i}" for i in range(1000)])
        assert sum(hits) < 50

    def test_read_operation(self, client: Client):
        bf = client.new_bloom_filter("ro", 100, 0.01, enable_read_operation=True)
        bf.add("x")
        assert bf.exists("x")

    def test_reset_and_delete(self, client: Client):
        bf = client.new_bloom_filter("users", 1000, 0.01)
        bf.add("alice")
        bf.reset()
        assert not bf.exists("alice")
        assert bf.count() == 0
        bf.delete()
        assert client.exists("{users}").result() == 0
