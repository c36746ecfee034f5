# dump2png/core_types.py
from __future__ import annotations

"""
Core type aliases, small value objects, and lightweight helpers.
"""

from dataclasses import dataclass
from typing import Callable, Sequence, Tuple, Union

import numpy as np
from numpy.typing import NDArray

# Basic aliases

RGBTuple = Tuple[int, int, int]

U8Row = NDArray[np.uint8]  # (W, 3)
U8Image = NDArray[np.uint8]  # (H, W, 3)
U8Units = NDArray[np.uint8]  # (N, C) raw units of C bytes
ChannelRows = NDArray[np.int64]  # (N, 3) unclipped channel values

# Callable signatures

# (units, previous byte) -> (N, 3) channel values in 0..255
UnitMapper = Callable[[U8Units, int], ChannelRows]

# (rows_done, rows_total) -> None
ProgressHook = Callable[[int, int], None]


# Value objects


@dataclass(frozen=True)
class Palette:
    """Byte-to-colour scheme with the number of input bytes per sample."""

    name: str
    bytes_per_pixel: int  # 1..4
    summary: str
    mapper: UnitMapper
    zoom_safe: bool = True

    def map_units(self, units: U8Units, previous: int = 0) -> ChannelRows:
        """Vectorised map of (N, bytes_per_pixel) units to (N, 3) channels."""
        if units.ndim != 2 or units.shape[1] != self.bytes_per_pixel:
            raise ValueError(
                f"{self.name}: expected (N,{self.bytes_per_pixel}) units, got {units.shape}"
            )
        return self.mapper(units, int(previous))

    def map(self, data: Union[bytes, Sequence[int]], previous: int = 0) -> RGBTuple:
        """Map exactly one unit of raw bytes to a pixel."""
        raw = np.frombuffer(bytes(data), dtype=np.uint8)
        if raw.size != self.bytes_per_pixel:
            raise ValueError(
                f"{self.name}: needs {self.bytes_per_pixel} byte(s), got {raw.size}"
            )
        return coerce_to_rgb_tuple(self.map_units(raw.reshape(1, -1), previous)[0])


@dataclass(frozen=True)
class RenderConfig:
    """Fixed parameters of one render."""

    width: int
    height: int
    zoom: int = 1
    skip: int = 1
    seek: int = 0
    mask: bool = True
    autoscale: bool = True

    def __post_init__(self) -> None:
        if self.width <= 0:
            raise ValueError("width must be > 0")
        if self.height <= 0:
            raise ValueError("height must be > 0")
        if self.zoom < 1:
            raise ValueError("zoom must be >= 1")
        if self.skip < 1:
            raise ValueError("skip must be >= 1")
        if self.seek < 0:
            raise ValueError("seek must be >= 0")

    def chunk_size(self, bytes_per_pixel: int) -> int:
        """Raw bytes consumed per output row."""
        return self.width * bytes_per_pixel * self.skip * self.zoom


@dataclass
class SampleHistory:
    """Byte of the last decoded sample, carried across rows for a whole run."""

    previous: int = 0


@dataclass(frozen=True)
class HeightPlan:
    """Outcome of fitting the input size to the image height."""

    height: int
    full_height: int
    truncated: bool
    shown_bytes: int
    total_bytes: int


@dataclass(frozen=True)
class RenderStats:
    rows: int
    bytes_read: int
    data_pixels: int  # pixels built from at least one input sample


# Small helpers


def coerce_to_rgb_tuple(value: Union[Sequence[int], NDArray[np.generic]]) -> RGBTuple:
    """
    Coerce a 3-length sequence or array to an (int, int, int) RGB tuple.
    Helpful when extracting values from NumPy rows.
    """
    if isinstance(value, np.ndarray):
        if value.size < 3:
            raise ValueError("array too small for RGB")
        return (int(value[..., 0]), int(value[..., 1]), int(value[..., 2]))
    if len(value) < 3:  # type: ignore[arg-type]
        raise ValueError("sequence too small for RGB")
    v = value  # type: ignore[assignment]
    return (int(v[0]), int(v[1]), int(v[2]))


def assert_u8_row_rgb(row: np.ndarray, width: int) -> U8Row:
    """Validate a uint8 (W,3) row and return it typed as U8Row."""
    if row.dtype != np.uint8 or row.shape != (width, 3):
        raise ValueError(f"expected uint8 ({width},3) row, got {row.dtype} {row.shape}")
    return row  # type: ignore[return-value]


__all__ = [
    # aliases / types
    "RGBTuple",
    "U8Row",
    "U8Image",
    "U8Units",
    "ChannelRows",
    # value objects
    "Palette",
    "RenderConfig",
    "SampleHistory",
    "HeightPlan",
    "RenderStats",
    # helpers
    "coerce_to_rgb_tuple",
    "assert_u8_row_rgb",
    # callable signatures
    "UnitMapper",
    "ProgressHook",
]
