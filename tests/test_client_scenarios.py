"""End-to-end behaviour against real servers, on every topology and protocol."""

import uuid
from datetime import timedelta

import pytest
from redis.exceptions import ResponseError

from redisson import Client
from redisson.args import KEEP_TTL
from redisson.exceptions import is_nil, is_no_script_error
from redisson.types import BitCount, Sort


class TestBitmap:
    def test_bit_count(self, client: Client):
        client.set("mykey", "foobar").result()
        assert client.bit_count("mykey").result() == 26
        assert client.bit_count("mykey", BitCount(start=0, end=0)).result() == 4
        assert client.bit_count("mykey", BitCount(start=1, end=1)).result() == 6
        assert client.bit_count("foobar").result() == 0

    def test_bit_count_bit_unit(self, client: Client):
        client.set("mykey", "foobar").result()
        assert client.bit_count("mykey", BitCount(start=1, end=1, unit="bit")).result() == 1

    def test_bit_pos(self, client: Client):
        client.set("key1", b"\xff\xf0\x00").result()
        assert client.bit_pos("key1", 0).result() == 12
        assert client.bit_pos("key1", 1).result() == 0
        assert client.bit_pos("key1", 0, 2).result() == 16
        assert client.bit_pos("key1", 1, 2).result() == -1
        assert client.bit_pos("key1", 0, 0, 0).result() == -1

    def test_bit_pos_span(self, client: Client):
        client.set("key1", b"\x00\xff\xf0").result()
        assert client.bit_pos_span("key1", 1, 7, 15, "bit").result() == 8


class TestSafeBatch:
    def test_safe_m_set_and_get_across_slots(self, client: Client):
        keys = ["key1:{1}", "key2", "key3", "key4:{1}"]
        assert client.safe_m_set("key1:{1}", "v1", "key3", "v3", "key4:{1}", "v4").result() == "OK"
        assert client.safe_m_get(*keys).result() == ["v1", None, "v3", "v4"]
        for key in keys:
            assert client.safe_m_get(key).result() == client.m_get(key).result()


class TestSort:
    def test_sort_limit(self, client: Client):
        client.l_push("list", "1", "3", "2").result()
        assert client.sort("list", Sort(offset=0, count=2, order="ASC")).result() == ["1", "2"]

    def test_sort_get_patterns(self, standalone_client: Client):
        client = standalone_client
        client.l_push("list", "1", "3", "2").result()
        client.set("object_2", "value2").result()
        client.set("hello_3", "value3").result()
        result = client.sort("list", Sort(get=["object_*", "hello_*"])).result()
        assert result == ["", "", "value2", "", "", "value3"]

        values = client.sort_values("list", Sort(get=["object_*", "hello_*"])).result()
        assert values == [None, None, "value2", None, None, "value3"]


class TestScriptFallback:
    def test_run_loads_script(self, client: Client):
        # a fresh source is never cached on any node
        script = client.create_script(f"-- {uuid.uuid4().hex}\nreturn ARGV[1]")
        result = script.eval_sha([], "hello")
        assert is_no_script_error(result.err)

        assert script.run([], "hello").result() == "hello"
        assert script.eval([], "hello").result() == script.run([], "hello").result()

    def test_script_exists_after_run(self, standalone_client: Client):
        script = standalone_client.create_script(f"-- {uuid.uuid4().hex}\nreturn ARGV[1]")
        assert script.exists().result() == [False]
        assert script.run([], "hello").result() == "hello"
        assert script.exists().result() == [True]
        assert standalone_client.script_load(script.src).result() == script.hash()

    def test_run_with_keys(self, client: Client):
        src = "redis.call('INCR', KEYS[1])\nreturn redis.call('INCR', KEYS[1])"
        script = client.create_script_with_name("incr_twice", src)
        assert script.run(["counter"]).result() == 2
        assert client.get("counter").result() == "2"


class TestExpiry:
    def test_set_keep_ttl(self, client: Client):
        client.set("k", "v", 5).result()
        client.set("k", "v2", KEEP_TTL).result()
        assert client.ttl("k").result() > timedelta(0)
        assert client.ttl("k").result() <= timedelta(seconds=5)
        assert client.get("k").result() == "v2"

    def test_set_ex_ttl_bounds(self, client: Client):
        client.set("k", "v", 5).result()
        ttl = client.ttl("k").result()
        assert timedelta(0) < ttl <= timedelta(seconds=5)

    def test_set_px_pttl_bounds(self, client: Client):
        client.set("k", "v", timedelta(milliseconds=1500)).result()
        pttl = client.pttl("k").result()
        assert timedelta(0) < pttl <= timedelta(milliseconds=1500)

    def test_ttl_sentinels(self, client: Client):
        client.set("persistent", "v").result()
        assert client.ttl("persistent").result() == timedelta(seconds=-1)
        assert client.ttl("missing").result() == timedelta(seconds=-2)

    def test_set_without_expiration_clears_it(self, client: Client):
        client.set("k", "v", 5).result()
        client.set("k", "v").result()
        assert client.ttl("k").result() == timedelta(seconds=-1)


class TestCounters:
    @pytest.mark.parametrize(
        ("call", "message"),
        [
            (lambda cl: cl.incr("k"), "ERR value is not an integer or out of range"),
            (lambda cl: cl.decr("k"), "ERR value is not an integer or out of range"),
            (lambda cl: cl.incr_by("k", 5), "ERR value is not an integer or out of range"),
            (lambda cl: cl.decr_by("k", 5), "ERR value is not an integer or out of range"),
            (lambda cl: cl.incr_by_float("k", 1.5), "ERR value is not a valid float"),
        ],
    )
    def test_non_numeric_value(self, client: Client, call, message):
        client.set("k", "abc").result()
        result = call(client)
        assert isinstance(result.err, ResponseError)
        assert message in str(result.err)

    def test_incr(self, client: Client):
        assert client.incr("n").result() == 1
        assert client.incr_by("n", 9).result() == 10
        assert client.incr_by_float("n", 0.5).result() == 10.5


class TestStrings:
    def test_get_missing(self, client: Client):
        result = client.get("missing")
        assert is_nil(result.err)
        assert result.val == ""

    def test_binary_value(self, client: Client):
        client.set("bin", b"\x00\xff\xfe").result()
        assert client.get("bin").bytes() == b"\x00\xff\xfe"

    def test_set_nx(self, client: Client):
        assert client.set_nx("k", "v").result() is True
        assert client.set_nx("k", "v").result() is False

    def test_set_get(self, client: Client):
        client.set("k", "old").result()
        assert client.set_get("k", "new").result() == "old"
        assert client.get("k").result() == "new"

    def test_m_set_same_slot(self, client: Client):
        client.m_set({"{u}a": "1", "{u}b": "2"}).result()
        assert client.m_get("{u}a", "{u}b", "{u}c").result() == ["1", "2", None]

    def test_exists(self, client: Client):
        client.m_set({"{u}a": "1", "{u}b": "2"}).result()
        assert client.exists("{u}a").result() == 1
        assert client.exists("{u}a", "{u}b", "{u}c").result() == 2
