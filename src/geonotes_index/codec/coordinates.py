"""
Coordinate codec - one "<lat>,<lon>" string per point.

Each number is written with the shortest digit string that parses back to
the identical 64-bit float, in positional notation (the index's point parser
does not accept exponents). Decoding does no range checks; out-of-range
values come back unchanged.
"""

from __future__ import annotations

from typing import Any

import numpy as np

from geonotes_index.core.errors import MalformedCoordinate

SEPARATOR = ","


def format_coordinate(value: float) -> str:
    """Shortest round-tripping positional decimal for value."""
    return np.format_float_positional(float(value), unique=True, trim="-")


def encode_coordinates(latitude: float, longitude: float) -> str:
    """Encode a (latitude, longitude) pair as a single field value."""
    return format_coordinate(latitude) + SEPARATOR + format_coordinate(longitude)


def decode_coordinates(value: Any) -> tuple[float, float]:
    """
    Parse a "<lat>,<lon>" field value.

    Raises:
        MalformedCoordinate: value is not a string, does not split into exactly
            two tokens, or a token is not a plain decimal number.
    """
    if not isinstance(value, str):
        raise MalformedCoordinate(value, f"expected str, got {type(value).__name__}")

    tokens = value.split(SEPARATOR)
    if len(tokens) != 2:
        raise MalformedCoordinate(value, f"expected 2 tokens, got {len(tokens)} tokens")

    # float() also takes padding and digit separators; stored values never have them
    for token in tokens:
        if any(ch.isspace() or ch == "_" for ch in token):
            raise MalformedCoordinate(value, f"unexpected whitespace or '_' in {token!r}")

    try:
        latitude = float(tokens[0])
        longitude = float(tokens[1])
    except ValueError as e:
        raise MalformedCoordinate(value, str(e)) from e

    return latitude, longitude
