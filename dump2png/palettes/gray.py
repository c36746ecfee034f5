# dump2png/palettes/gray.py
from __future__ import annotations

"""
Grayscale palettes.

gray      : R=G=B=byte
gray16b/l : 2-byte units, most significant byte (big/little endian) as grey
gray32b/l : 4-byte units, most significant byte (big/little endian) as grey

The multi-byte variants consume the whole unit but only show the most
significant byte; the rest is discarded.
"""

import numpy as np

from ..core_types import ChannelRows, U8Units, UnitMapper
from .tables import build_lut, lut_mapper, stack_channels


def grey_channels(values: np.ndarray) -> ChannelRows:
    v = values.astype(np.int64, copy=False)
    return stack_channels(v, v, v)


GRAY_LUT = build_lut(grey_channels)

map_gray: UnitMapper = lut_mapper(GRAY_LUT)


def significant_byte_mapper(index: int) -> UnitMapper:
    """Grey mapper that keeps byte `index` of each unit."""

    def _map(units: U8Units, previous: int) -> ChannelRows:
        return GRAY_LUT[units[:, index]]

    return _map


map_gray16b = significant_byte_mapper(0)
map_gray16l = significant_byte_mapper(1)
map_gray32b = significant_byte_mapper(0)
map_gray32l = significant_byte_mapper(3)


__all__ = [
    "GRAY_LUT",
    "grey_channels",
    "significant_byte_mapper",
    "map_gray",
    "map_gray16b",
    "map_gray16l",
    "map_gray32b",
    "map_gray32l",
]
