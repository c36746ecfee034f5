# dump2png/palettes/composite.py
from __future__ import annotations

"""
Composite palettes.

dvi : R = |byte - previous|      (differential)
      G = byte                   (value)
      B = (byte + previous) // 2 (integral)
      `previous` is the previous decoded sample, 0 before the first one.

x86 : grayscale with nine highlighted values. R flags common x86 opcodes
      (movl, call, testl), G common English letters ('e', 't', 'a'),
      B small binary values (1, 2, 3). Bytes matching none stay grey.
"""

from typing import Mapping

import numpy as np

from ..constants import BINARY_VALUES, ENGLISH_CHARS, X86_OPCODES
from ..core_types import ChannelRows, U8Units, UnitMapper
from .tables import build_lut, lut_mapper, stack_channels


def map_dvi(units: U8Units, previous: int) -> ChannelRows:
    current = units[:, 0].astype(np.int64)
    if current.size == 0:
        return np.zeros((0, 3), dtype=np.int64)
    before = np.empty_like(current)
    before[0] = previous
    before[1:] = current[:-1]
    return stack_channels(
        np.abs(current - before), current, (current + before) // 2
    )


def _indicator(values: np.ndarray, table: Mapping[int, int]) -> np.ndarray:
    out = np.zeros(values.shape[0], dtype=np.int64)
    for byte, level in table.items():
        out[values == byte] = level
    return out


def x86_channels(values: np.ndarray) -> ChannelRows:
    v = values.astype(np.int64, copy=False)
    out = stack_channels(
        _indicator(v, X86_OPCODES),
        _indicator(v, ENGLISH_CHARS),
        _indicator(v, BINARY_VALUES),
    )
    # default to grayscale
    plain = out.sum(axis=1) == 0
    out[plain] = v[plain][:, None]
    return out


X86_LUT = build_lut(x86_channels)

map_x86: UnitMapper = lut_mapper(X86_LUT)


__all__ = ["map_dvi", "x86_channels", "X86_LUT", "map_x86"]
