"""
Defaults and fixed tables used across the project.

- Render defaults (DEFAULT_*)
- Output container settings (PNG_*)
- Indicator tables for the x86 palette
"""
from __future__ import annotations

from typing import Dict

# =========================
# Render defaults
# =========================
DEFAULT_WIDTH: int = 1024
DEFAULT_MAX_HEIGHT: int = 1024 * 10
DEFAULT_ZOOM: int = 1
DEFAULT_SKIP: int = 1
DEFAULT_SEEK: int = 0
DEFAULT_PALETTE: str = "x86"
DEFAULT_OUTPUT: str = "dump2png.png"

# Cleared from every output channel unless masking is disabled, so the image
# cannot be turned back into the input bytes.
BYTE_MASK: int = 0xFE

# =========================
# Output container
# =========================
PNG_TITLE_KEY: str = "Title"
PNG_TITLE: str = "dump2png"

# =========================
# x86 palette indicators
# =========================
# byte -> channel level, one table per channel (R, G, B)
X86_OPCODES: Dict[int, int] = {
    0x8B: 0xFF,  # movl
    0xE8: 0xCF,  # call
    0x85: 0xAF,  # testl
}
ENGLISH_CHARS: Dict[int, int] = {
    ord("e"): 0xFF,
    ord("t"): 0xCF,
    ord("a"): 0xAF,
}
BINARY_VALUES: Dict[int, int] = {
    0x01: 0xFF,
    0x02: 0xCF,
    0x03: 0xAF,
}

# Progress line refresh, in rows
PROGRESS_EVERY_ROWS: int = 256
