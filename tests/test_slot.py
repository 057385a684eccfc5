"""Tests for cluster hash slot computation."""

import pytest

from redisson.slot import REDIS_CLUSTER_HASH_SLOTS, group_by_slot, slot


class TestSlot:
    @pytest.mark.parametrize(
        ("key", "expected"),
        [
            ("123456789", 12739),
            ("foo", 12182),
            ("somekey", 11058),
            ("foo{hash_tag}", 2515),
        ],
    )
    def test_known_slots(self, key, expected):
        """Slots match CLUSTER KEYSLOT."""
        assert slot(key) == expected

    def test_range(self):
        """Every slot lies in [0, 16383]."""
        for i in range(2000):
            assert 0 <= slot(f"key:{i}") < REDIS_CLUSTER_HASH_SLOTS

    def test_hash_tag(self):
        """Keys sharing a hash tag share a slot."""
        assert slot("{user1000}.following") == slot("{user1000}.followers")
        assert slot("key1:{1}") == slot("key4:{1}") == slot("1")

    def test_empty_hash_tag_hashes_whole_key(self):
        """``{}`` is not a hash tag."""
        assert slot("foo{}{bar}") != slot("bar")
        assert slot("foo{}{bar}") == slot(b"foo{}{bar}")

    def test_first_hash_tag_wins(self):
        assert slot("foo{bar}{zap}") == slot("bar")
        assert slot("foo{{bar}}zap") == slot("{bar")

    def test_unclosed_brace(self):
        assert slot("foo{bar") == slot("foo{bar")
        assert slot("foo{bar") != slot("bar")

    def test_bytes_and_str_agree(self):
        assert slot("héllo") == slot("héllo".encode())


class TestGroupBySlot:
    def test_groups_keep_input_order(self):
        keys = ["a{1}", "b", "c{1}", "d"]
        groups = group_by_slot(keys)
        assert groups[slot("1")] == [0, 2]
        assert sum(len(v) for v in groups.values()) == 4

    def test_duplicate_keys(self):
        """Duplicates keep one index each."""
        groups = group_by_slot(["k", "k", "k"])
        assert groups == {slot("k"): [0, 1, 2]}

    def test_empty(self):
        assert group_by_slot([]) == {}
