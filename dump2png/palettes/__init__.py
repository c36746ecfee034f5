"""
Palette mapper API.

Provides one UnitMapper per palette family:
  mapper(units, previous) -> int64 [N,3]

    Args:
      units    : uint8 [N,C], N samples of C = bytes_per_pixel bytes
      previous : int, byte of the sample preceding units[0] (dvi only)

    Returns:
      int64 [N,3] channel values in 0..255. Averaging, masking and clipping
      to uint8 are left to the assembler.

Families:
  gray      : gray, gray16b, gray16l, gray32b, gray32l
  hues      : hues, hues6, fhues
  bits      : color, color16, color32, rgb
  composite : dvi, x86
"""

from .bits import map_color, map_color16, map_color32, map_rgb
from .composite import map_dvi, map_x86
from .gray import map_gray, map_gray16b, map_gray16l, map_gray32b, map_gray32l
from .hues import map_fhues, map_hues, map_hues6

__all__ = [
    "map_gray",
    "map_gray16b",
    "map_gray16l",
    "map_gray32b",
    "map_gray32l",
    "map_hues",
    "map_hues6",
    "map_fhues",
    "map_color",
    "map_color16",
    "map_color32",
    "map_rgb",
    "map_dvi",
    "map_x86",
]
