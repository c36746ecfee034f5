from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest


@pytest.fixture
def write_input(tmp_path: Path) -> Callable[[bytes], Path]:
    """Write raw bytes to a fresh input file and return its path."""
    counter = {"n": 0}

    def _write(data: bytes, name: str = "") -> Path:
        counter["n"] += 1
        path = tmp_path / (name or f"input_{counter['n']}.bin")
        path.write_bytes(data)
        return path

    return _write


@pytest.fixture
def out_png(tmp_path: Path) -> Path:
    return tmp_path / "out.png"
