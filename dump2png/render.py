# dump2png/render.py
from __future__ import annotations

"""
Row/image driver.

Plans the image height from the input size, then streams the input one row
chunk at a time through the assembler into a PngRowWriter.

Exports:
- compute_height(total_bytes, width, zoom, skip, bytes_per_pixel, max_height, autoscale) -> HeightPlan
- plan_render(total_bytes, palette, request) -> (RenderConfig, HeightPlan)
- plan_file(path, palette, request) -> (RenderConfig, HeightPlan)
- read_chunk(stream, size) -> bytes
- render_stream(stream, writer, palette, config, progress=None) -> RenderStats
- render_file(in_path, out_path, palette, config, progress=None) -> RenderStats
"""

import os
from dataclasses import replace
from pathlib import Path
from typing import BinaryIO, Optional, Tuple, Union

from .assemble import RowLayout, assemble_row, new_row_buffer
from .constants import PNG_TITLE, PROGRESS_EVERY_ROWS
from .core_types import (
    HeightPlan,
    Palette,
    ProgressHook,
    RenderConfig,
    RenderStats,
    SampleHistory,
)
from .image_io import PngRowWriter


def compute_height(
    total_bytes: int,
    width: int,
    zoom: int,
    skip: int,
    bytes_per_pixel: int,
    max_height: int,
    autoscale: bool = True,
) -> HeightPlan:
    """
    Rows needed to show `total_bytes`, clamped to `max_height`.

    full_height = ceil((total_bytes // (zoom*skip*C)) / width), at least 1.
    Above max_height the plan is truncated to max_height. Otherwise the
    height is full_height with autoscale, else max_height.
    """
    bytes_per_col = zoom * skip * bytes_per_pixel
    samples = max(0, int(total_bytes)) // bytes_per_col
    full_height = max(1, -(-samples // width))

    if full_height > max_height:
        return HeightPlan(
            height=max_height,
            full_height=full_height,
            truncated=True,
            shown_bytes=width * max_height * bytes_per_col,
            total_bytes=int(total_bytes),
        )
    return HeightPlan(
        height=full_height if autoscale else max_height,
        full_height=full_height,
        truncated=False,
        shown_bytes=int(total_bytes),
        total_bytes=int(total_bytes),
    )


def plan_render(
    total_bytes: int, palette: Palette, request: RenderConfig
) -> Tuple[RenderConfig, HeightPlan]:
    """Resolve `request.height` (the maximum) into the rendered height."""
    plan = compute_height(
        total_bytes,
        request.width,
        request.zoom,
        request.skip,
        palette.bytes_per_pixel,
        request.height,
        request.autoscale,
    )
    return replace(request, height=plan.height), plan


def plan_file(
    path: Union[str, Path], palette: Palette, request: RenderConfig
) -> Tuple[RenderConfig, HeightPlan]:
    """plan_render() for the bytes of `path` that follow the seek offset."""
    size = os.stat(path).st_size
    return plan_render(max(0, size - request.seek), palette, request)


def read_chunk(stream: BinaryIO, size: int) -> bytes:
    """Read up to `size` bytes, retrying short reads until EOF."""
    parts = []
    remaining = size
    while remaining > 0:
        block = stream.read(remaining)
        if not block:
            break
        parts.append(block)
        remaining -= len(block)
    return b"".join(parts)


def render_stream(
    stream: BinaryIO,
    writer: PngRowWriter,
    palette: Palette,
    config: RenderConfig,
    progress: Optional[ProgressHook] = None,
) -> RenderStats:
    """
    Render `config.height` rows from `stream` into `writer`.

    Input is read from the stream's current position. Once the stream is
    exhausted every remaining pixel is black. The writer is not closed.
    """
    layout = RowLayout.build(
        config.width, palette.bytes_per_pixel, config.zoom, config.skip
    )
    chunk_size = config.chunk_size(palette.bytes_per_pixel)
    row = new_row_buffer(config.width)
    history = SampleHistory()
    bytes_read = 0
    data_pixels = 0

    for y in range(config.height):
        chunk = read_chunk(stream, chunk_size)
        bytes_read += len(chunk)
        data_pixels += layout.data_pixels(len(chunk))
        assemble_row(chunk, row, palette, layout, mask=config.mask, history=history)
        writer.write_row(row)
        if progress is not None and (
            (y + 1) % PROGRESS_EVERY_ROWS == 0 or y + 1 == config.height
        ):
            progress(y + 1, config.height)

    return RenderStats(rows=config.height, bytes_read=bytes_read, data_pixels=data_pixels)


def render_file(
    in_path: Union[str, Path],
    out_path: Union[str, Path],
    palette: Palette,
    config: RenderConfig,
    progress: Optional[ProgressHook] = None,
    title: str = PNG_TITLE,
) -> RenderStats:
    """
    Open `in_path`, seek to `config.seek`, and write the PNG to `out_path`.

    OSError from opening, seeking or writing propagates. On any failure the
    output is released without being encoded.
    """
    with open(in_path, "rb") as stream:
        if config.seek:
            stream.seek(config.seek, os.SEEK_SET)
        with PngRowWriter(out_path, config.width, config.height, title=title) as writer:
            return render_stream(stream, writer, palette, config, progress)


__all__ = [
    "compute_height",
    "plan_render",
    "plan_file",
    "read_chunk",
    "render_stream",
    "render_file",
]
