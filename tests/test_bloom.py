"""Unit tests for bloom filter sizing, hashing and argv."""

import pytest

from redisson.bloom import MAX_BITS, optimal_size
from redisson.exceptions import ArgumentError
from tests.fixtures.fake import make_client, sent


class TestOptimalSize:
    def test_known_values(self):
        assert optimal_size(1000, 0.01) == (9586, 7)

    def test_lower_rate_needs_more_bits(self):
        bits_1, hashes_1 = optimal_size(1000, 0.01)
        bits_2, hashes_2 = optimal_size(1000, 0.001)
        assert bits_2 > bits_1
        assert hashes_2 > hashes_1

    @pytest.mark.parametrize(("n", "p"), [(0, 0.01), (-1, 0.01), (10, 0), (10, 1), (10, 1.5)])
    def test_invalid(self, n, p):
        with pytest.raises(ArgumentError):
            optimal_size(n, p)

    def test_too_large(self):
        with pytest.raises(ArgumentError):
            optimal_size(10**10, 1e-9)
        assert MAX_BITS == 2**32


class TestFilter:
    def test_positions(self, fake_client):
        bf = fake_client.new_bloom_filter("users", 1000, 0.01)
        positions = bf.positions("alice")
        assert len(positions) == bf.hashes == 7
        assert all(0 <= p < bf.size for p in positions)
        assert positions == bf.positions(b"alice")
        assert positions != bf.positions("bob")

    def test_exists_multi_argv(self, fake_client, driver):
        driver.execute_command.return_value = [1, 0]
        bf = fake_client.new_bloom_filter("users", 1000, 0.01)
        assert bf.exists_multi(["alice", "bob"]) == [True, False]
        argv = sent(driver)[0]
        assert argv[0] == "EVALSHA"
        assert argv[2:5] == ["2", "{users}", "{users}:c"]
        assert argv[5] == "7"
        assert len(argv) == 6 + 2 * 7

    def test_read_operation_uses_ro_script(self, fake_client, driver):
        driver.execute_command.return_value = [1]
        bf = fake_client.new_bloom_filter("users", 1000, 0.01, enable_read_operation=True)
        assert bf.exists("alice") is True
        assert sent(driver)[0][0] == "EVALSHA_RO"

    def test_read_operation_needs_redis_7(self, driver):
        client = make_client(driver, version="6.2.0")
        with pytest.raises(ArgumentError, match="7.0.0"):
            client.new_bloom_filter("users", 1000, 0.01, enable_read_operation=True)

    def test_empty_batches_skip_io(self, fake_client, driver):
        bf = fake_client.new_bloom_filter("users", 1000, 0.01)
        bf.add_multi([])
        assert bf.exists_multi([]) == []
        driver.execute_command.assert_not_called()

    def test_count_of_missing_filter(self, fake_client, driver):
        driver.execute_command.return_value = None
        assert fake_client.new_bloom_filter("users", 1000, 0.01).count() == 0
