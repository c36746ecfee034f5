# dump2png/palettes/tables.py
from __future__ import annotations

"""
Lookup-table helpers for one-byte palettes.

Every one-byte palette is a pure function of the byte value, so it is
evaluated once over 0..255 and applied with a single fancy-index per row.
"""

from typing import Callable

import numpy as np

from ..core_types import ChannelRows, U8Units, UnitMapper

ALL_BYTES = np.arange(256, dtype=np.int64)


def build_lut(channels_of: Callable[[np.ndarray], ChannelRows]) -> ChannelRows:
    """Evaluate a vectorised byte->(R,G,B) function over all 256 byte values."""
    lut = np.asarray(channels_of(ALL_BYTES), dtype=np.int64)
    if lut.shape != (256, 3):
        raise ValueError(f"lookup table must be (256,3), got {lut.shape}")
    if lut.min() < 0 or lut.max() > 255:
        raise ValueError("lookup table values must be within 0..255")
    lut.setflags(write=False)
    return lut


def lut_mapper(lut: ChannelRows) -> UnitMapper:
    """Mapper for (N,1) units through a (256,3) table; history is ignored."""

    def _map(units: U8Units, previous: int) -> ChannelRows:
        return lut[units[:, 0]]

    return _map


def stack_channels(r: np.ndarray, g: np.ndarray, b: np.ndarray) -> ChannelRows:
    """Stack three (N,) channel arrays into (N,3) int64."""
    return np.stack([r, g, b], axis=1).astype(np.int64, copy=False)


__all__ = ["ALL_BYTES", "build_lut", "lut_mapper", "stack_channels"]
