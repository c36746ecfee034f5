# dump2png/assemble.py
from __future__ import annotations

"""
Pixel assembler: one raw row chunk in, one RGB row out.

Layout of a row chunk (C = bytes_per_pixel, Z = zoom, K = skip):

  pixel x owns bytes [x*C*Z*K, (x+1)*C*Z*K)
    first C*Z bytes -> Z samples of C bytes, averaged into the pixel
    remaining (K-1)*C*Z bytes -> discarded (downsampling)

A sample is decoded only if all C of its bytes are present. Sample offsets
grow with (x, z), so the decodable samples are always a prefix. A pixel whose
first sample is missing is black; missing later samples add 0 to the sums.
"""

from dataclasses import dataclass

import numpy as np

from .constants import BYTE_MASK
from .core_types import Palette, SampleHistory, U8Row, assert_u8_row_rgb


@dataclass(frozen=True)
class RowLayout:
    """Precomputed sample offsets for one row geometry."""

    width: int
    bytes_per_pixel: int
    zoom: int
    skip: int
    starts: np.ndarray  # int64 [width*zoom], byte offset of each sample

    @classmethod
    def build(cls, width: int, bytes_per_pixel: int, zoom: int, skip: int) -> "RowLayout":
        if width <= 0 or bytes_per_pixel <= 0 or zoom < 1 or skip < 1:
            raise ValueError("invalid row geometry")
        stride = bytes_per_pixel * zoom * skip
        pixel_base = np.arange(width, dtype=np.int64)[:, None] * stride
        sample_off = np.arange(zoom, dtype=np.int64)[None, :] * bytes_per_pixel
        starts = (pixel_base + sample_off).reshape(-1)
        starts.setflags(write=False)
        return cls(width, bytes_per_pixel, zoom, skip, starts)

    def decodable_samples(self, n_bytes: int) -> int:
        """Number of leading samples fully contained in n_bytes."""
        if n_bytes < self.bytes_per_pixel:
            return 0
        limit = n_bytes - self.bytes_per_pixel
        return int(np.searchsorted(self.starts, limit, side="right"))

    def data_pixels(self, n_bytes: int) -> int:
        """Pixels built from at least one sample when n_bytes are available."""
        n = self.decodable_samples(n_bytes)
        return (n + self.zoom - 1) // self.zoom


def new_row_buffer(width: int) -> U8Row:
    """Row buffer reused across rows by the driver."""
    return np.zeros((width, 3), dtype=np.uint8)


def assemble_row(
    chunk: bytes,
    out: U8Row,
    palette: Palette,
    layout: RowLayout,
    *,
    mask: bool = True,
    history: SampleHistory | None = None,
) -> U8Row:
    """
    Fill `out` with one row of pixels decoded from `chunk`.

    Args:
      chunk   : raw bytes for this row; shorter than a full row at EOF
      out     : uint8 [W,3] row buffer, overwritten in place
      palette : palette whose bytes_per_pixel matches the layout
      layout  : RowLayout for (width, bytes_per_pixel, zoom, skip)
      mask    : clear the low bit of every channel
      history : previous-sample state carried across rows (dvi)
    Returns:
      `out`
    """
    if palette.bytes_per_pixel != layout.bytes_per_pixel:
        raise ValueError("palette and layout disagree on bytes_per_pixel")
    assert_u8_row_rgb(out, layout.width)
    if history is None:
        history = SampleHistory()

    data = np.frombuffer(chunk, dtype=np.uint8)
    chrs = layout.bytes_per_pixel
    zoom = layout.zoom
    n_samples = layout.decodable_samples(int(data.size))

    sums = np.zeros((layout.width * zoom, 3), dtype=np.int64)
    if n_samples:
        gather = layout.starts[:n_samples, None] + np.arange(chrs, dtype=np.int64)
        units = data[gather]
        sums[:n_samples] = palette.map_units(units, history.previous)
        history.previous = int(units[-1, -1])

    pixels = sums.reshape(layout.width, zoom, 3).sum(axis=1)
    if zoom > 1:
        pixels //= zoom
    if mask:
        pixels &= BYTE_MASK

    out[...] = pixels.astype(np.uint8)
    return out


__all__ = ["RowLayout", "new_row_buffer", "assemble_row"]
