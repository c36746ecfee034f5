from __future__ import annotations

import numpy as np
import pytest

from dump2png.assemble import RowLayout, assemble_row, new_row_buffer
from dump2png.core_types import SampleHistory
from dump2png.palette_data import get_palette


def _row(chunk, name="gray", width=4, zoom=1, skip=1, mask=False, history=None):
    pal = get_palette(name)
    layout = RowLayout.build(width, pal.bytes_per_pixel, zoom, skip)
    out = new_row_buffer(width)
    return assemble_row(chunk, out, pal, layout, mask=mask, history=history)


def test_layout_offsets():
    layout = RowLayout.build(3, 2, zoom=2, skip=3)
    assert layout.starts.tolist() == [0, 2, 12, 14, 24, 26]


def test_layout_rejects_bad_geometry():
    with pytest.raises(ValueError):
        RowLayout.build(0, 1, 1, 1)
    with pytest.raises(ValueError):
        RowLayout.build(4, 1, 0, 1)


def test_decodable_samples_counts_complete_units_only():
    layout = RowLayout.build(4, 3, zoom=1, skip=1)
    assert layout.decodable_samples(0) == 0
    assert layout.decodable_samples(2) == 0
    assert layout.decodable_samples(3) == 1
    assert layout.decodable_samples(8) == 2
    assert layout.decodable_samples(12) == 4
    assert layout.data_pixels(8) == 2


def test_gray_row_without_zoom_or_mask():
    row = _row(bytes([0, 1, 2, 3]))
    assert row.dtype == np.uint8
    assert row.tolist() == [[0, 0, 0], [1, 1, 1], [2, 2, 2], [3, 3, 3]]


def test_zoom_one_equals_per_sample_colour():
    pal = get_palette("fhues")
    data = bytes([0, 50, 100, 250])
    row = _row(data, name="fhues")
    assert [tuple(px) for px in row.tolist()] == [pal.map([b]) for b in data]


@pytest.mark.parametrize("name", ["gray", "hues", "hues6", "fhues", "color", "x86"])
def test_zoom_of_identical_samples_keeps_the_colour(name):
    pal = get_palette(name)
    zoom = 5
    value = 0x8B
    row = _row(bytes([value]) * (4 * zoom), name=name, zoom=zoom)
    assert all(tuple(px) == pal.map([value]) for px in row.tolist())


def test_zoom_averages_with_truncating_division():
    row = _row(bytes([1, 2, 10, 13]), width=2, zoom=2)
    assert row.tolist() == [[1, 1, 1], [11, 11, 11]]


def test_zoom_over_multibyte_units():
    # rgb, two samples per pixel
    row = _row(bytes([10, 20, 30, 30, 40, 51]), name="rgb", width=1, zoom=2)
    assert row.tolist() == [[20, 30, 40]]


def test_mask_clears_low_bit_of_every_channel():
    rng = np.random.default_rng(3)
    data = rng.integers(0, 256, size=3 * 64, dtype=np.uint8).tobytes()
    row = _row(data, name="rgb", width=64, mask=True)
    assert np.all(row % 2 == 0)


def test_mask_off_keeps_odd_values():
    row = _row(bytes([1, 3, 5, 7]), mask=False)
    assert row[:, 0].tolist() == [1, 3, 5, 7]


def test_mask_applies_after_averaging():
    row = _row(bytes([2, 4]), width=1, zoom=2, mask=True)
    assert row.tolist() == [[2, 2, 2]]
    row = _row(bytes([3, 4]), width=1, zoom=2, mask=True)
    assert row.tolist() == [[2, 2, 2]]


def test_short_chunk_fills_black():
    row = _row(bytes([200, 201]), width=4)
    assert row.tolist() == [[200, 200, 200], [201, 201, 201], [0, 0, 0], [0, 0, 0]]


def test_partial_unit_is_black():
    # 7 bytes: two full rgb units, one stray byte
    row = _row(bytes([1, 2, 3, 4, 5, 6, 7]), name="rgb", width=3)
    assert row.tolist() == [[1, 2, 3], [4, 5, 6], [0, 0, 0]]


def test_empty_chunk_is_all_black():
    row = _row(b"", name="x86", width=10)
    assert not row.any()


def test_missing_zoom_samples_count_as_zero():
    row = _row(bytes([100, 100, 50]), width=2, zoom=2)
    assert row.tolist() == [[100, 100, 100], [25, 25, 25]]


def test_skip_discards_windows_between_pixels():
    row = _row(bytes(range(6)), width=3, skip=2)
    assert row[:, 0].tolist() == [0, 2, 4]


def test_skip_with_zoom_uses_head_of_each_window():
    # stride 4: samples (0,1) (4,5)
    row = _row(bytes([10, 20, 99, 99, 30, 40, 99, 99]), width=2, zoom=2, skip=2)
    assert row[:, 0].tolist() == [15, 35]


def test_row_buffer_is_overwritten_in_place():
    pal = get_palette("gray")
    layout = RowLayout.build(3, 1, 1, 1)
    out = new_row_buffer(3)
    first = assemble_row(bytes([9, 9, 9]), out, pal, layout, mask=False)
    assert first is out
    assemble_row(bytes([7]), out, pal, layout, mask=False)
    assert out.tolist() == [[7, 7, 7], [0, 0, 0], [0, 0, 0]]


def test_dvi_history_carries_across_rows():
    history = SampleHistory()
    assert history.previous == 0
    first = _row(bytes([10, 20]), name="dvi", width=2, history=history)
    assert first.tolist() == [[10, 10, 5], [10, 20, 15]]
    assert history.previous == 20
    second = _row(bytes([30, 40]), name="dvi", width=2, history=history)
    assert second.tolist() == [[10, 30, 25], [10, 40, 35]]


def test_dvi_history_unchanged_by_empty_chunk():
    history = SampleHistory(previous=42)
    _row(b"", name="dvi", width=2, history=history)
    assert history.previous == 42


def test_layout_palette_mismatch_is_rejected():
    layout = RowLayout.build(2, 1, 1, 1)
    with pytest.raises(ValueError):
        assemble_row(b"\x00" * 6, new_row_buffer(2), get_palette("rgb"), layout)


def test_wrong_row_buffer_is_rejected():
    layout = RowLayout.build(2, 1, 1, 1)
    with pytest.raises(ValueError):
        assemble_row(b"\x00\x00", new_row_buffer(3), get_palette("gray"), layout)
