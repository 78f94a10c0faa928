"""
Query module - building requests for the index.

This module provides:
- Filter predicates (TermFilter, GeoFilter)
- SelectQuery and the query shape builders
- Update payload builders
- haversine_km for great-circle distances
"""

from geonotes_index.query.filters import Filter, TermFilter, GeoFilter
from geonotes_index.query.builder import (
    SelectQuery,
    by_id_query,
    nearby_query,
    add_payload,
    delete_payload,
)
from geonotes_index.query.geo import EARTH_MEAN_RADIUS_KM, haversine_km

__all__ = [
    # Filters
    "Filter",
    "TermFilter",
    "GeoFilter",
    # Queries
    "SelectQuery",
    "by_id_query",
    "nearby_query",
    # Payloads
    "add_payload",
    "delete_payload",
    # Geo
    "EARTH_MEAN_RADIUS_KM",
    "haversine_km",
]
