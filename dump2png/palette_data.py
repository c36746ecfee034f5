# dump2png/palette_data.py
from __future__ import annotations

"""
Palette definitions and lookups.

Exports:
  PALETTE_TABLE: list[tuple[str, int, str, UnitMapper, bool]]
                 # [(name, bytes_per_pixel, summary, mapper, zoom_safe), ...]
  PALETTES: dict[str, Palette], in PALETTE_TABLE order
  build_palettes(table=PALETTE_TABLE) -> dict[str, Palette]
  get_palette(name) -> Palette
  palette_names() -> list[str]
  describe_palettes() -> list[str]
"""

from typing import Dict, List, Tuple

from .core_types import Palette, UnitMapper
from .palettes import (
    map_color,
    map_color16,
    map_color32,
    map_dvi,
    map_fhues,
    map_gray,
    map_gray16b,
    map_gray16l,
    map_gray32b,
    map_gray32l,
    map_hues,
    map_hues6,
    map_rgb,
    map_x86,
)


PALETTE_TABLE: List[Tuple[str, int, str, UnitMapper, bool]] = [
    ("gray", 1, "grayscale, per byte", map_gray, True),
    ("gray16b", 2, "grayscale, per short (big-endian)", map_gray16b, True),
    ("gray16l", 2, "grayscale, per short (little-endian)", map_gray16l, True),
    ("gray32b", 4, "grayscale, per long (big-endian)", map_gray32b, True),
    ("gray32l", 4, "grayscale, per long (little-endian)", map_gray32l, True),
    ("hues", 1, "map to 3 hue ranges (rgb), per byte (zoom safe)", map_hues, True),
    ("hues6", 1, "map to 6 hue ranges (rgbcmy), per byte", map_hues6, False),
    (
        "fhues",
        1,
        "map to 3 full hue ranges (rgb), per byte (zoom safe)",
        map_fhues,
        True,
    ),
    ("color", 1, "full colorized scale, per byte", map_color, True),
    ("color16", 2, "full colorized scale, per short (16-bit)", map_color16, True),
    ("color32", 4, "full colorized scale, per long (32-bit)", map_color32, True),
    ("rgb", 3, "treat 3 sequential bytes as RGB", map_rgb, True),
    ("dvi", 1, "use RGB to convey differential, value, integral", map_dvi, True),
    (
        "x86",
        1,
        "grayscale with some (9) color indicators: red = x86 movl/call/testl, "
        "green = 'e'/'t'/'a', blue = 0x01/0x02/0x03",
        map_x86,
        True,
    ),
]


def build_palettes(
    table: List[Tuple[str, int, str, UnitMapper, bool]] = PALETTE_TABLE,
) -> Dict[str, Palette]:
    """Convert table rows into Palette objects keyed by name."""
    out: Dict[str, Palette] = {}
    for name, chrs, summary, mapper, zoom_safe in table:
        if name in out:
            raise ValueError(f"duplicate palette name: {name}")
        if not 1 <= chrs <= 4:
            raise ValueError(f"{name}: bytes_per_pixel must be 1..4")
        out[name] = Palette(
            name=name,
            bytes_per_pixel=chrs,
            summary=summary,
            mapper=mapper,
            zoom_safe=zoom_safe,
        )
    return out


PALETTES: Dict[str, Palette] = build_palettes()


def get_palette(name: str) -> Palette:
    """Look up a palette by name; raises ValueError for unknown names."""
    try:
        return PALETTES[name]
    except KeyError:
        raise ValueError(
            f"invalid palette {name!r}; choose from: {', '.join(PALETTES)}"
        ) from None


def palette_names() -> List[str]:
    return list(PALETTES)


def describe_palettes() -> List[str]:
    """One help line per palette: name padded, then its summary."""
    width = max(len(n) for n in PALETTES)
    return [f"{p.name:<{width}}  {p.summary}" for p in PALETTES.values()]


__all__ = [
    "PALETTE_TABLE",
    "PALETTES",
    "build_palettes",
    "get_palette",
    "palette_names",
    "describe_palettes",
]
