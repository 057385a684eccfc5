"""Tests for argument encoding."""

from datetime import UTC, datetime, timedelta

import pytest

from redisson import args


class TestStringify:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("x", "x"),
            (b"\xff", b"\xff"),
            (True, "1"),
            (False, "0"),
            (42, "42"),
            (-7, "-7"),
            (1.5, "1.5"),
            (1.0, "1"),
            (0.1, "0.1"),
            (1e-7, "0.0000001"),
            (float("inf"), "+inf"),
            (float("-inf"), "-inf"),
        ],
    )
    def test_values(self, value, expected):
        assert args.stringify(value) == expected

    def test_datetime_is_rfc3339(self):
        value = datetime(2024, 1, 2, 3, 4, 5, 123456, tzinfo=UTC)
        assert args.stringify(value) == "2024-01-02T03:04:05.123456Z"

    def test_rejects_other_types(self):
        with pytest.raises(TypeError):
            args.stringify(object())
        with pytest.raises(TypeError):
            args.stringify(None)

    def test_rejects_nan(self):
        with pytest.raises(ValueError):
            args.stringify(float("nan"))


class TestFlatten:
    def test_mapping(self):
        assert args.flatten_pairs({"a": 1, "b": 2}) == ["a", "1", "b", "2"]

    def test_alternating(self):
        assert args.flatten_pairs("a", 1, "b", 2) == ["a", "1", "b", "2"]

    def test_pairs(self):
        assert args.flatten_pairs([("a", 1), ("b", 2)]) == ["a", "1", "b", "2"]

    def test_pairs_from_odd_length(self):
        with pytest.raises(ValueError):
            args.pairs_from(["a", 1, "b"])


class TestDurations:
    def test_seconds_and_timedelta(self):
        assert args.to_timedelta(2) == timedelta(seconds=2)
        assert args.to_timedelta(0.5) == timedelta(milliseconds=500)
        assert args.to_timedelta(timedelta(minutes=1)) == timedelta(minutes=1)

    def test_bool_is_not_a_duration(self):
        with pytest.raises(TypeError):
            args.to_timedelta(True)

    @pytest.mark.parametrize(
        ("expiration", "expected"),
        [
            (5, ["EX", "5"]),
            (timedelta(seconds=10), ["EX", "10"]),
            (timedelta(milliseconds=1500), ["PX", "1500"]),
            (0.25, ["PX", "250"]),
            (0, []),
            (args.KEEP_TTL, ["KEEPTTL"]),
        ],
    )
    def test_expiry_args(self, expiration, expected):
        assert args.expiry_args(expiration) == expected

    def test_use_precise(self):
        assert args.use_precise(timedelta(milliseconds=999))
        assert args.use_precise(timedelta(milliseconds=1001))
        assert not args.use_precise(timedelta(seconds=3))

    def test_sub_millisecond_rounds_up(self, caplog):
        assert args.format_ms(timedelta(microseconds=10)) == 1
        assert "minimal supported value is 1ms" in caplog.text

    def test_sub_second_rounds_up(self):
        assert args.format_sec(timedelta(milliseconds=10)) == 1

    def test_keep_ttl_timedelta_is_not_sentinel(self):
        assert args.is_keep_ttl(-1)
        assert not args.is_keep_ttl(timedelta(seconds=-1))


class TestInstants:
    def test_unix(self):
        at = datetime(2030, 1, 1, tzinfo=UTC)
        assert args.unix_seconds(at) == 1893456000
        assert args.unix_ms(at) == 1893456000000

    def test_from_unix_ms(self):
        assert args.from_unix_ms(1893456000000) == datetime(2030, 1, 1, tzinfo=UTC)
