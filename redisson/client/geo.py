from __future__ import annotations

from typing import TYPE_CHECKING, Any

from redisson import commands as c
from redisson.exceptions import ArgumentError
from redisson.results import FloatCmd, GeoLocationCmd, GeoPosCmd, IntCmd, StringSliceCmd
from redisson.types import FT, KM, MI, M

if TYPE_CHECKING:
    from redisson.types import (
        GeoLocation,
        GeoRadiusQuery,
        GeoSearchLocationQuery,
        GeoSearchQuery,
        GeoSearchStoreQuery,
        KeyT,
    )

_UNITS = (M, KM, FT, MI)


def _unit(value: str) -> str:
    # an empty unit means kilometers
    if not value:
        return KM
    unit = value.upper()
    if unit not in _UNITS:
        msg = f"geo unit must be one of M, KM, FT, MI, got {value!r}"
        raise ArgumentError(msg)
    return unit


def _radius_args(q: GeoRadiusQuery) -> list[Any]:
    argv: list[Any] = [float(q.radius), _unit(q.unit)]
    if q.with_coord:
        argv.append("WITHCOORD")
    if q.with_dist:
        argv.append("WITHDIST")
    if q.with_geo_hash:
        argv.append("WITHHASH")
    if q.count > 0:
        argv.extend(["COUNT", q.count])
    if q.sort:
        argv.append(q.sort.upper())
    if q.store:
        argv.extend(["STORE", q.store])
    if q.store_dist:
        argv.extend(["STOREDIST", q.store_dist])
    return argv


def _search_args(q: GeoSearchQuery) -> list[Any]:
    argv: list[Any] = []
    if q.member:
        argv.extend(["FROMMEMBER", q.member])
    else:
        argv.extend(["FROMLONLAT", float(q.longitude), float(q.latitude)])
    if q.radius > 0:
        argv.extend(["BYRADIUS", float(q.radius), _unit(q.radius_unit)])
    else:
        argv.extend(["BYBOX", float(q.box_width), float(q.box_height), _unit(q.box_unit)])
    if q.sort:
        argv.append(q.sort.upper())
    if q.count > 0:
        argv.extend(["COUNT", q.count])
        if q.count_any:
            argv.append("ANY")
    return argv


def _store_keys(key: KeyT, q: GeoRadiusQuery) -> list[KeyT]:
    return [key, *(k for k in (q.store, q.store_dist) if k)]


def _parse_options(q: GeoRadiusQuery) -> dict[str, bool]:
    return {"with_dist": q.with_dist, "with_hash": q.with_geo_hash, "with_coord": q.with_coord}


class GeoCommandsMixin:
    """Geospatial index operations.

    Radius and box units default to kilometers when left empty.
    """

    # Type hints for base class attributes
    _run: Any

    def geo_add(self, key: KeyT, *locations: GeoLocation) -> IntCmd:
        argv: list[Any] = [key]
        for loc in locations:
            argv.extend((float(loc.longitude), float(loc.latitude), loc.name))
        return self._run(c.GEO_ADD, argv, IntCmd)

    def geo_dist(self, key: KeyT, member1: str, member2: str, unit: str = "") -> FloatCmd:
        return self._run(c.GEO_DIST, [key, member1, member2, _unit(unit)], FloatCmd)

    def geo_hash(self, key: KeyT, *members: str) -> StringSliceCmd:
        return self._run(c.GEO_HASH, [key, *members], StringSliceCmd)

    def geo_pos(self, key: KeyT, *members: str) -> GeoPosCmd:
        return self._run(c.GEO_POS, [key, *members], GeoPosCmd)

    def geo_radius(self, key: KeyT, longitude: float, latitude: float, q: GeoRadiusQuery) -> GeoLocationCmd:
        """Read-only radius query. Use ``geo_radius_store`` to store results."""
        if q.store or q.store_dist:
            msg = "GEORADIUS does not support STORE, use geo_radius_store"
            raise ArgumentError(msg)
        argv = [key, float(longitude), float(latitude), *_radius_args(q)]
        return self._run(c.GEO_RADIUS_RO, argv, GeoLocationCmd, **_parse_options(q))

    def geo_radius_store(self, key: KeyT, longitude: float, latitude: float, q: GeoRadiusQuery) -> IntCmd:
        if not (q.store or q.store_dist):
            msg = "GEORADIUS STORE requires store or store_dist"
            raise ArgumentError(msg)
        argv = [key, float(longitude), float(latitude), *_radius_args(q)]
        return self._run(c.GEO_RADIUS_STORE, argv, IntCmd, keys=_store_keys(key, q))

    def geo_radius_by_member(self, key: KeyT, member: str, q: GeoRadiusQuery) -> GeoLocationCmd:
        if q.store or q.store_dist:
            msg = "GEORADIUSBYMEMBER does not support STORE, use geo_radius_by_member_store"
            raise ArgumentError(msg)
        argv = [key, member, *_radius_args(q)]
        return self._run(c.GEO_RADIUS_BY_MEMBER_RO, argv, GeoLocationCmd, **_parse_options(q))

    def geo_radius_by_member_store(self, key: KeyT, member: str, q: GeoRadiusQuery) -> IntCmd:
        if not (q.store or q.store_dist):
            msg = "GEORADIUSBYMEMBER STORE requires store or store_dist"
            raise ArgumentError(msg)
        argv = [key, member, *_radius_args(q)]
        return self._run(c.GEO_RADIUS_BY_MEMBER_STORE, argv, IntCmd, keys=_store_keys(key, q))

    def geo_search(self, key: KeyT, q: GeoSearchQuery) -> StringSliceCmd:
        return self._run(c.GEO_SEARCH, [key, *_search_args(q)], StringSliceCmd)

    def geo_search_location(self, key: KeyT, q: GeoSearchLocationQuery) -> GeoLocationCmd:
        argv: list[Any] = [key, *_search_args(q)]
        if q.with_coord:
            argv.append("WITHCOORD")
        if q.with_dist:
            argv.append("WITHDIST")
        if q.with_hash:
            argv.append("WITHHASH")
        options = {"with_dist": q.with_dist, "with_hash": q.with_hash, "with_coord": q.with_coord}
        return self._run(c.GEO_SEARCH_LOCATION, argv, GeoLocationCmd, **options)

    def geo_search_store(self, key: KeyT, store: KeyT, q: GeoSearchStoreQuery) -> IntCmd:
        argv: list[Any] = [store, key, *_search_args(q)]
        if q.store_dist:
            argv.append("STOREDIST")
        return self._run(c.GEO_SEARCH_STORE, argv, IntCmd, keys=[store, key])
