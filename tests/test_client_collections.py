"""Hash, list, set, sorted set, geo and HyperLogLog commands against real servers."""

from datetime import timedelta

import pytest

from redisson import Client
from redisson.context import deadline
from redisson.exceptions import is_nil
from redisson.types import LEFT, RIGHT, GeoLocation, GeoRadiusQuery, GeoSearchLocationQuery, RankScore, Z, ZRangeBy


class TestHashes:
    def test_h_set_and_get_all(self, client: Client):
        assert client.h_set("h", {"a": "1", "b": "2"}).result() == 2
        assert client.h_get_all("h").result() == {"a": "1", "b": "2"}
        assert client.h_len("h").result() == 2

    def test_h_get(self, client: Client):
        client.h_set("h", "a", "1").result()
        assert client.h_get("h", "a").result() == "1"
        assert is_nil(client.h_get("h", "missing").err)
        assert client.h_m_get("h", "a", "missing").result() == ["1", None]

    def test_h_exists_and_del(self, client: Client):
        client.h_set("h", "a", "1", "b", "2").result()
        assert client.h_exists("h", "a").result() is True
        assert client.h_del("h", "a").result() == 1
        assert client.h_exists("h", "a").result() is False

    def test_h_incr(self, client: Client):
        assert client.h_incr_by("h", "n", 5).result() == 5
        assert client.h_incr_by_float("h", "n", 0.5).result() == 5.5

    def test_h_keys_and_vals(self, client: Client):
        client.h_set("h", [("a", 1), ("b", 2)]).result()
        assert sorted(client.h_keys("h").result()) == ["a", "b"]
        assert sorted(client.h_vals("h").result()) == ["1", "2"]

    def test_h_scan(self, client: Client):
        client.h_set("h", {f"f{i}": i for i in range(5)}).result()
        fields, cursor = client.h_scan("h", 0, count=100).result()
        assert cursor == 0
        assert len(fields) == 10


class TestLists:
    def test_push_and_range(self, client: Client):
        assert client.r_push("l", "a", "b", "c").result() == 3
        assert client.l_push("l", "z").result() == 4
        assert client.l_range("l", 0, -1).result() == ["z", "a", "b", "c"]
        assert client.l_index("l", 1).result() == "a"
        assert client.l_len("l").result() == 4

    def test_pop(self, client: Client):
        client.r_push("l", "a", "b", "c").result()
        assert client.l_pop("l").result() == "a"
        assert client.r_pop_count("l", 2).result() == ["c", "b"]
        assert is_nil(client.l_pop("l").err)

    def test_l_pos(self, client: Client):
        client.r_push("l", "a", "b", "a").result()
        assert client.l_pos("l", "a").result() == 0
        assert client.l_pos_count("l", "a", 0).result() == [0, 2]

    def test_l_m_pop(self, client: Client):
        client.r_push("{q}b", "x", "y").result()
        result = client.l_m_pop(LEFT, 5, "{q}a", "{q}b").result()
        assert result.key == "{q}b"
        assert result.values == ["x", "y"]

    def test_l_move(self, client: Client):
        client.r_push("{q}src", "a", "b").result()
        assert client.l_move("{q}src", "{q}dst", RIGHT, LEFT).result() == "b"
        assert client.l_range("{q}dst", 0, -1).result() == ["b"]

    def test_bl_pop_times_out_with_nil(self, client: Client):
        result = client.bl_pop(timedelta(milliseconds=100), "empty")
        assert is_nil(result.err)

    def test_bl_pop_bounded_by_deadline(self, client: Client):
        with deadline(0.2):
            result = client.bl_pop(0, "empty")
        assert is_nil(result.err)

    def test_bl_pop(self, client: Client):
        client.r_push("queue", "job").result()
        assert client.bl_pop(1, "queue").result() == ["queue", "job"]


class TestSets:
    def test_add_and_members(self, client: Client):
        assert client.s_add("s", "a", "b", "c").result() == 3
        assert sorted(client.s_members("s").result()) == ["a", "b", "c"]
        assert client.s_members_set("s").result() == {"a", "b", "c"}
        assert client.s_members_set("missing").result() == set()
        assert client.s_card("s").result() == 3

    def test_membership(self, client: Client):
        client.s_add("s", "a").result()
        assert client.s_is_member("s", "a").result() is True
        assert client.s_m_is_member("s", "a", "z").result() == [True, False]

    def test_inter_and_union(self, client: Client):
        client.s_add("{s}1", "a", "b").result()
        client.s_add("{s}2", "b", "c").result()
        assert client.s_inter("{s}1", "{s}2").result() == ["b"]
        assert sorted(client.s_union("{s}1", "{s}2").result()) == ["a", "b", "c"]
        assert client.s_diff_store("{s}3", "{s}1", "{s}2").result() == 1


class TestSortedSets:
    def test_add_and_range(self, client: Client):
        assert client.z_add("z", Z(1, "one"), Z(2, "two"), Z(3, "three")).result() == 3
        assert client.z_range("z", 0, -1).result() == ["one", "two", "three"]
        assert client.z_range_with_scores("z", 0, 0).result() == [Z(score=1.0, member="one")]
        assert client.z_rev_range("z", 0, 0).result() == ["three"]

    def test_scores_and_ranks(self, client: Client):
        client.z_add("z", Z(1, "one"), Z(2.5, "two")).result()
        assert client.z_score("z", "two").result() == 2.5
        assert client.z_rank("z", "two").result() == 1
        assert client.z_rank_with_score("z", "two").result() == RankScore(rank=1, score=2.5)
        assert is_nil(client.z_rank("z", "missing").err)

    def test_range_by_score(self, client: Client):
        client.z_add("z", Z(1, "one"), Z(2, "two"), Z(3, "three")).result()
        assert client.z_range_by_score("z", ZRangeBy(min="2", max="+inf")).result() == ["two", "three"]
        assert client.z_count("z", "-inf", "(3").result() == 2

    def test_incr_and_pop(self, client: Client):
        client.z_add("z", Z(1, "one")).result()
        assert client.z_incr_by("z", 2, "one").result() == 3.0
        assert client.z_pop_min("z").result() == [Z(score=3.0, member="one")]

    def test_bz_pop_min(self, client: Client):
        client.z_add("z", Z(1, "one")).result()
        popped = client.bz_pop_min(1, "z").result()
        assert popped.key == "z"
        assert popped.z == Z(score=1.0, member="one")


class TestGeo:
    @pytest.fixture
    def sicily(self, client: Client) -> Client:
        client.geo_add(
            "Sicily",
            GeoLocation(name="Palermo", longitude=13.361389, latitude=38.115556),
            GeoLocation(name="Catania", longitude=15.087269, latitude=37.502669),
        ).result()
        return client

    def test_dist(self, sicily: Client):
        assert sicily.geo_dist("Sicily", "Palermo", "Catania").result() == pytest.approx(166.2742, abs=0.01)
        assert sicily.geo_dist("Sicily", "Palermo", "Catania", "m").result() == pytest.approx(166274.15, abs=1)

    def test_pos(self, sicily: Client):
        palermo, missing = sicily.geo_pos("Sicily", "Palermo", "Nowhere").result()
        assert palermo.longitude == pytest.approx(13.361389, abs=1e-5)
        assert missing is None

    def test_radius(self, sicily: Client):
        result = sicily.geo_radius("Sicily", 15, 37, GeoRadiusQuery(radius=200, with_dist=True, sort="asc")).result()
        assert [loc.name for loc in result] == ["Catania", "Palermo"]
        assert result[0].dist == pytest.approx(56.4413, abs=0.01)

    def test_search_location(self, sicily: Client):
        q = GeoSearchLocationQuery(longitude=15, latitude=37, radius=100, with_coord=True)
        result = sicily.geo_search_location("Sicily", q).result()
        assert [loc.name for loc in result] == ["Catania"]
        assert result[0].latitude == pytest.approx(37.502669, abs=1e-5)


class TestHyperLogLog:
    def test_count(self, client: Client):
        assert client.pf_add("{hll}a", "x", "y", "z").result() == 1
        client.pf_add("{hll}b", "z", "w").result()
        assert client.pf_count("{hll}a").result() == 3
        assert client.pf_count("{hll}a", "{hll}b").result() == 4
