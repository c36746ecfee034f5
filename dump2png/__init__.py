# dump2png/__init__.py
"""
dump2png package.

Purpose:
  Visualise file data as a PNG by colouring each byte (or small group of
  bytes) with a selectable palette. See dump2png.cli for the command line.

Public API:
  Palette / RenderConfig : core value objects (core_types).
  PALETTES / get_palette : the 14 named palettes (palette_data).
  palettes               : vectorised per-family mappers.
  assemble_row / RowLayout : one raw row chunk -> one RGB row.
  compute_height / plan_file / render_stream / render_file : the row driver.
  PngRowWriter           : row-at-a-time PNG output (image_io).
  utils                  : formatting and logging helpers.

Quick start:
  from dump2png import RenderConfig, get_palette, plan_file, render_file
  pal = get_palette("x86")
  cfg, plan = plan_file("core.dump", pal, RenderConfig(width=1024, height=10240))
  render_file("core.dump", "core.png", pal, cfg)
"""

__version__ = "0.1.0"

# Re-export namespaces for convenience.
from . import core_types
from . import palette_data
from . import palettes
from . import utils

from .assemble import RowLayout, assemble_row, new_row_buffer  # noqa: E402
from .core_types import Palette, RenderConfig, SampleHistory  # noqa: E402
from .image_io import PngRowWriter, load_png_rgb  # noqa: E402
from .palette_data import PALETTES, get_palette, palette_names  # noqa: E402
from .render import (  # noqa: E402
    compute_height,
    plan_file,
    plan_render,
    render_file,
    render_stream,
)

__all__ = [
    "__version__",
    "core_types",
    "palette_data",
    "palettes",
    "utils",
    "Palette",
    "RenderConfig",
    "SampleHistory",
    "PALETTES",
    "get_palette",
    "palette_names",
    "RowLayout",
    "assemble_row",
    "new_row_buffer",
    "compute_height",
    "plan_render",
    "plan_file",
    "render_stream",
    "render_file",
    "PngRowWriter",
    "load_png_rgb",
]
