"""
Filter predicates for select queries.

Each filter knows two things:
- render(): its textual form in the index's native query syntax (one fq)
- matches(doc): how to evaluate itself against a raw index document

The Solr client only uses render(); the in-memory client only uses matches().
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Protocol, runtime_checkable

from geonotes_index.codec.coordinates import decode_coordinates, format_coordinate
from geonotes_index.core.errors import MalformedCoordinate
from geonotes_index.query.geo import haversine_km


@runtime_checkable
class Filter(Protocol):
    """A single filter query clause."""

    def render(self) -> str:
        ...

    def matches(self, doc: Mapping[str, Any]) -> bool:
        ...


def _quote(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


@dataclass(frozen=True)
class TermFilter:
    """Exact match on a string or boolean field, optionally negated."""

    field: str
    value: str | bool
    negate: bool = False

    def render(self) -> str:
        if isinstance(self.value, bool):
            term = "true" if self.value else "false"
        else:
            term = _quote(self.value)
        clause = f"{self.field}:{term}"
        return f"-{clause}" if self.negate else clause

    def matches(self, doc: Mapping[str, Any]) -> bool:
        raw = doc.get(self.field)
        if isinstance(self.value, bool):
            hit = isinstance(raw, bool) and raw is self.value
        else:
            hit = raw is not None and str(raw) == self.value
        return hit != self.negate


@dataclass(frozen=True)
class GeoFilter:
    """Circle of radius_km around (latitude, longitude) on a point field."""

    field: str
    latitude: float
    longitude: float
    radius_km: float

    def render(self) -> str:
        return (
            f"{{!geofilt sfield={self.field} "
            f"pt={format_coordinate(self.latitude)},{format_coordinate(self.longitude)} "
            f"d={format_coordinate(self.radius_km)}}}"
        )

    def matches(self, doc: Mapping[str, Any]) -> bool:
        try:
            lat, lon = decode_coordinates(doc.get(self.field))
        except MalformedCoordinate:
            return False
        return haversine_km(self.latitude, self.longitude, lat, lon) <= self.radius_km
