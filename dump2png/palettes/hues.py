# dump2png/palettes/hues.py
from __future__ import annotations

"""
Hue-banded palettes.

The byte is scaled (x3 or x6) and the scaled value picks a band of 256;
within a band the ramp channel is `scaled % 256`.

hues  : x3, bands red -> green -> blue. Zoom safe.
fhues : x6, bands red, white-ish red, green, white-ish green, blue,
        white-ish blue. Each band is a smooth ramp, so averaging neighbours
        stays within the expected hue. Zoom safe.
hues6 : x6, bands red, green, blue, cyan, magenta, yellow. NOT zoom safe:
        averaging bytes that straddle a band boundary mixes unrelated hues
        (for example red and green averaging to a dark yellow).
"""

from typing import Sequence, Tuple

import numpy as np

from ..core_types import ChannelRows, UnitMapper
from .tables import build_lut, lut_mapper

# Per band: what each channel carries. "ramp" = scaled % 256, "full" = 255.
Band = Tuple[str, str, str]

HUES_BANDS: Sequence[Band] = (
    ("ramp", "zero", "zero"),
    ("zero", "ramp", "zero"),
    ("zero", "zero", "ramp"),
)

FHUES_BANDS: Sequence[Band] = (
    ("ramp", "zero", "zero"),
    ("full", "ramp", "ramp"),
    ("zero", "ramp", "zero"),
    ("ramp", "full", "ramp"),
    ("zero", "zero", "ramp"),
    ("ramp", "ramp", "full"),
)

HUES6_BANDS: Sequence[Band] = (
    ("ramp", "zero", "zero"),
    ("zero", "ramp", "zero"),
    ("zero", "zero", "ramp"),
    ("zero", "ramp", "ramp"),
    ("ramp", "zero", "ramp"),
    ("ramp", "ramp", "zero"),
)


def banded_channels(
    values: np.ndarray, scale: int, bands: Sequence[Band]
) -> ChannelRows:
    """
    Vectorised band mapping.

    Args:
      values: int array of byte values (N,)
      scale : multiplier applied before banding
      bands : per-band channel roles, indexed by scaled // 256
    Returns:
      (N,3) int64 channels
    """
    scaled = values.astype(np.int64, copy=False) * scale
    band = scaled // 256
    if int(band.max(initial=0)) >= len(bands):
        raise ValueError(f"scale {scale} overruns {len(bands)} bands")
    ramp = scaled % 256

    out = np.zeros((scaled.shape[0], 3), dtype=np.int64)
    for b, roles in enumerate(bands):
        sel = band == b
        if not np.any(sel):
            continue
        for ch, role in enumerate(roles):
            if role == "ramp":
                out[sel, ch] = ramp[sel]
            elif role == "full":
                out[sel, ch] = 255
    return out


def hues_channels(values: np.ndarray) -> ChannelRows:
    return banded_channels(values, 3, HUES_BANDS)


def fhues_channels(values: np.ndarray) -> ChannelRows:
    return banded_channels(values, 6, FHUES_BANDS)


def hues6_channels(values: np.ndarray) -> ChannelRows:
    return banded_channels(values, 6, HUES6_BANDS)


HUES_LUT = build_lut(hues_channels)
FHUES_LUT = build_lut(fhues_channels)
HUES6_LUT = build_lut(hues6_channels)

map_hues: UnitMapper = lut_mapper(HUES_LUT)
map_fhues: UnitMapper = lut_mapper(FHUES_LUT)
map_hues6: UnitMapper = lut_mapper(HUES6_LUT)


__all__ = [
    "banded_channels",
    "hues_channels",
    "fhues_channels",
    "hues6_channels",
    "HUES_LUT",
    "FHUES_LUT",
    "HUES6_LUT",
    "map_hues",
    "map_fhues",
    "map_hues6",
]
