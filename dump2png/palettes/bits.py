# dump2png/palettes/bits.py
from __future__ import annotations

"""
Bit-sliced and raw colour palettes.

Channels are cut straight out of the bit pattern, no numeric scaling:

color   : 8-bit  RRRGGGBB   -> R=b&0xe0, G=(b&0x1c)<<3, B=(b&0x03)<<6
color16 : 16-bit LE value   -> R=bits 10..15, G=bits 6..9, B=bits 0..4
color32 : 32-bit LE value   -> R=bits 24..31, G=bits 13..20, B=bits 1..8
rgb     : three bytes taken as R, G, B unchanged
"""

import numpy as np

from ..core_types import ChannelRows, U8Units, UnitMapper
from .tables import build_lut, lut_mapper, stack_channels


def color_channels(values: np.ndarray) -> ChannelRows:
    v = values.astype(np.int64, copy=False)
    return stack_channels(v & 0xE0, (v & 0x1C) << 3, (v & 0x03) << 6)


COLOR_LUT = build_lut(color_channels)

map_color: UnitMapper = lut_mapper(COLOR_LUT)


def little_endian_values(units: U8Units) -> np.ndarray:
    """Assemble (N,C) bytes into (N,) int64 little-endian integers."""
    u = units.astype(np.int64, copy=False)
    out = np.zeros(u.shape[0], dtype=np.int64)
    for i in range(u.shape[1]):
        out |= u[:, i] << (8 * i)
    return out


def color16_channels(values: np.ndarray) -> ChannelRows:
    v = values.astype(np.int64, copy=False)
    return stack_channels((v & 0xFC00) >> 8, (v & 0x03C0) >> 2, (v & 0x001F) << 3)


def color32_channels(values: np.ndarray) -> ChannelRows:
    v = values.astype(np.int64, copy=False)
    return stack_channels(
        (v & 0xFF000000) >> 24, (v & 0x001FE000) >> 13, (v & 0x000001FE) >> 1
    )


def map_color16(units: U8Units, previous: int) -> ChannelRows:
    return color16_channels(little_endian_values(units))


def map_color32(units: U8Units, previous: int) -> ChannelRows:
    return color32_channels(little_endian_values(units))


def map_rgb(units: U8Units, previous: int) -> ChannelRows:
    return units.astype(np.int64)


__all__ = [
    "COLOR_LUT",
    "color_channels",
    "color16_channels",
    "color32_channels",
    "little_endian_values",
    "map_color",
    "map_color16",
    "map_color32",
    "map_rgb",
]
