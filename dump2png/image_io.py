# dump2png/image_io.py
from __future__ import annotations

from pathlib import Path
from typing import BinaryIO, Optional, Union

import numpy as np
from PIL import Image
from PIL.PngImagePlugin import PngInfo

from .constants import PNG_TITLE, PNG_TITLE_KEY
from .core_types import U8Image, U8Row, assert_u8_row_rgb

"""
PNG output (8-bit RGB, non-interlaced, with a Title text chunk) and readback.

PngRowWriter takes rows one at a time into a preallocated image buffer and
encodes with Pillow when closed. The output file is opened on construction,
so an unwritable path fails before any rows are produced.
"""


class PngRowWriter:
    def __init__(
        self,
        path: Union[str, Path],
        width: int,
        height: int,
        title: str = PNG_TITLE,
    ) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"invalid image size {width}x{height}")
        self.path = Path(path)
        self.width = int(width)
        self.height = int(height)
        self.title = title
        self.rows_written = 0
        self._image: Optional[U8Image] = np.zeros(
            (self.height, self.width, 3), dtype=np.uint8
        )
        self._handle: Optional[BinaryIO] = open(self.path, "wb")

    def __enter__(self) -> "PngRowWriter":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            self.close()
        else:
            self.abort()

    @property
    def closed(self) -> bool:
        return self._handle is None

    def write_row(self, row: U8Row) -> None:
        """Copy one (W,3) uint8 row into the next image line."""
        if self._image is None:
            raise ValueError("write to a closed PngRowWriter")
        if self.rows_written >= self.height:
            raise ValueError(f"image already has {self.height} rows")
        assert_u8_row_rgb(row, self.width)
        self._image[self.rows_written] = row
        self.rows_written += 1

    def close(self) -> Path:
        """Encode the finished image to the output file and release resources."""
        if self._handle is None or self._image is None:
            return self.path
        try:
            if self.rows_written != self.height:
                raise ValueError(
                    f"image incomplete: {self.rows_written} of {self.height} rows written"
                )
            info = PngInfo()
            info.add_text(PNG_TITLE_KEY, self.title)
            Image.fromarray(self._image).save(
                self._handle, format="PNG", pnginfo=info
            )
        finally:
            self._release()
        return self.path

    def abort(self) -> None:
        """Release resources without encoding; the output file may be empty."""
        self._release()

    def _release(self) -> None:
        handle, self._handle = self._handle, None
        self._image = None
        if handle is not None:
            handle.close()


def load_png_rgb(path: Union[str, Path]) -> U8Image:
    """Load an image with Pillow and return uint8 [H,W,3]."""
    with Image.open(path) as im:
        return np.array(im.convert("RGB"), dtype=np.uint8)


def read_png_title(path: Union[str, Path]) -> Optional[str]:
    """Return the PNG Title text chunk, or None."""
    with Image.open(path) as im:
        im.load()
        text = getattr(im, "text", {}) or {}
        return text.get(PNG_TITLE_KEY)


__all__ = ["PngRowWriter", "load_png_rgb", "read_png_title"]
