"""Tests for development-mode checks and command metrics."""

import logging

import pytest

from redisson import commands as c
from redisson import metrics
from redisson.commands import Category, Command, Keyed
from redisson.conf import Conf
from redisson.context import skip_check, with_sub_command_name
from redisson.exceptions import CommandForbiddenError, CommandVersionError, CrossSlotError, Nil
from redisson.handler import Handler, format_warning

FLUSH_ALL = Command("FLUSHALL", "Server", Category.ADMIN, keyed=Keyed.NONE, forbid=True)


def sample(metric, name: str, **labels) -> float:
    for family in metric.collect():
        for s in family.samples:
            if s.name == name and s.labels == labels:
                return s.value
    return 0.0


def make_handler(version: str = "7.2.0", cluster: bool = False, **options) -> Handler:
    handler = Handler(Conf(**options))
    handler.set_version(version)
    handler.set_is_cluster(cluster)
    return handler


class TestChecks:
    def test_forbidden_command(self):
        handler = make_handler()
        with pytest.raises(CommandForbiddenError, match="FLUSHALL"), handler.scope(FLUSH_ALL):
            pass

    def test_version_too_old(self):
        handler = make_handler(version="6.0.0")
        with pytest.raises(CommandVersionError) as exc_info, handler.scope(c.GET_DEL):
            pass
        assert exc_info.value.require_version == "6.2.0"
        assert exc_info.value.version == "6.0.0"

    def test_cross_slot_on_cluster(self):
        handler = make_handler(cluster=True)
        with pytest.raises(CrossSlotError), handler.scope(c.M_GET, lambda: ["a", "b"]):
            pass

    def test_same_slot_on_cluster(self):
        handler = make_handler(cluster=True)
        with handler.scope(c.M_GET, lambda: ["{u}a", "{u}b"]):
            pass

    def test_cross_slot_ignored_on_standalone(self):
        """Keys are never materialized off a cluster."""
        handler = make_handler()
        calls = []

        def get_keys():
            calls.append(1)
            return ["a", "b"]

        with handler.scope(c.M_GET, get_keys):
            pass
        assert calls == []

    def test_skip_check(self):
        handler = make_handler(version="6.0.0", cluster=True)
        with skip_check():
            with handler.scope(FLUSH_ALL):
                pass
            with handler.scope(c.M_GET, lambda: ["a", "b"]):
                pass

    def test_production_mode(self):
        handler = make_handler(version="6.0.0", development=False)
        with handler.scope(FLUSH_ALL), handler.scope(c.GET_DEL):
            pass


class TestWarnings:
    def test_deprecation_logged_once(self, caplog):
        handler = make_handler()
        caplog.set_level(logging.WARNING, logger="redisson.handler")
        for _ in range(3):
            with handler.scope(c.GET_SET):
                pass
        records = [r for r in caplog.records if "GETSET" in r.getMessage()]
        assert len(records) == 1
        assert "SET with the GET argument" in records[0].getMessage()

    def test_no_warning_on_older_server(self, caplog):
        handler = make_handler(version="6.0.0")
        caplog.set_level(logging.WARNING, logger="redisson.handler")
        with handler.scope(c.GET_SET):
            pass
        assert caplog.records == []

    def test_format_warning_with_hint(self):
        text = format_warning(c.QUIT)
        assert text.startswith("[QUIT]: deprecated since redis 7.2.0")
        assert "clients should close the connection" in text


class TestMetrics:
    def test_success_observed(self):
        handler = make_handler()
        before = sample(metrics.exec_timing, "redis_exec_timing_count", command="String", s_command="GET")
        with handler.scope(c.GET):
            pass
        after = sample(metrics.exec_timing, "redis_exec_timing_count", command="String", s_command="GET")
        assert after == before + 1

    def test_error_counted(self):
        handler = make_handler()
        labels = {"command": "String", "s_command": "INCR"}
        before = sample(metrics.exec_error, "redis_exec_error_total", **labels)
        with handler.scope(c.INCR) as ctx:
            ctx.err = ValueError("not an integer")
        assert sample(metrics.exec_error, "redis_exec_error_total", **labels) == before + 1

    def test_nil_is_not_an_error(self):
        handler = make_handler()
        labels = {"command": "String", "s_command": "STRLEN"}
        before = sample(metrics.exec_error, "redis_exec_error_total", **labels)
        with handler.scope(c.STR_LEN) as ctx:
            ctx.err = Nil()
        assert sample(metrics.exec_error, "redis_exec_error_total", **labels) == before

    def test_sub_command_label(self):
        handler = make_handler()
        labels = {"command": "Script", "s_command": "rate_limit"}
        before = sample(metrics.exec_timing, "redis_exec_timing_count", **labels)
        with with_sub_command_name("rate_limit"), handler.scope(c.EVAL_SHA):
            pass
        assert sample(metrics.exec_timing, "redis_exec_timing_count", **labels) == before + 1

    def test_failed_check_still_reported(self):
        handler = make_handler()
        labels = {"command": "Server", "s_command": "FLUSHALL"}
        before = sample(metrics.exec_error, "redis_exec_error_total", **labels)
        with pytest.raises(CommandForbiddenError), handler.scope(FLUSH_ALL):
            pass
        assert sample(metrics.exec_error, "redis_exec_error_total", **labels) == before + 1

    def test_monitor_disabled(self):
        handler = make_handler(enable_monitor=False)
        labels = {"command": "String", "s_command": "APPEND"}
        before = sample(metrics.exec_timing, "redis_exec_timing_count", **labels)
        with handler.scope(c.APPEND):
            pass
        assert sample(metrics.exec_timing, "redis_exec_timing_count", **labels) == before


class TestRegisterMetrics:
    def test_once_per_register(self):
        registered = []

        def register(collector):
            registered.append(collector)

        assert metrics.register_metrics(register) is True
        assert metrics.register_metrics(register) is False
        assert len(registered) == 4

    def test_pool_collector(self):
        collector = metrics.PoolStatsCollector(lambda: metrics.PoolStats(3, 2, 1), "cache")
        values = {f.name: f.samples[0].value for f in collector.collect()}
        assert values == {
            "go_redis_pool_stats_connections_total_conns": 3,
            "go_redis_pool_stats_connections_idle_conns": 2,
            "go_redis_pool_stats_connections_in_use_conns": 1,
        }
        assert next(iter(collector.collect())).samples[0].labels == {"name": "cache"}
