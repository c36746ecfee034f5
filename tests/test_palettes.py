from __future__ import annotations

import numpy as np
import pytest

from dump2png.constants import BINARY_VALUES, ENGLISH_CHARS, X86_OPCODES
from dump2png.palette_data import (
    PALETTES,
    build_palettes,
    describe_palettes,
    get_palette,
    palette_names,
)
from dump2png.palettes.tables import build_lut


def test_registry_has_all_palettes_in_order():
    assert palette_names() == [
        "gray",
        "gray16b",
        "gray16l",
        "gray32b",
        "gray32l",
        "hues",
        "hues6",
        "fhues",
        "color",
        "color16",
        "color32",
        "rgb",
        "dvi",
        "x86",
    ]
    assert len(describe_palettes()) == 14


@pytest.mark.parametrize(
    "name, chrs",
    [
        ("gray", 1),
        ("gray16b", 2),
        ("gray16l", 2),
        ("gray32b", 4),
        ("gray32l", 4),
        ("hues", 1),
        ("hues6", 1),
        ("fhues", 1),
        ("color", 1),
        ("color16", 2),
        ("color32", 4),
        ("rgb", 3),
        ("dvi", 1),
        ("x86", 1),
    ],
)
def test_bytes_per_pixel(name, chrs):
    assert get_palette(name).bytes_per_pixel == chrs


def test_unknown_palette_is_rejected():
    with pytest.raises(ValueError, match="invalid palette"):
        get_palette("sepia")


def test_duplicate_palette_rows_are_rejected():
    row = ("gray", 1, "x", PALETTES["gray"].mapper, True)
    with pytest.raises(ValueError, match="duplicate"):
        build_palettes([row, row])


def test_only_hues6_is_flagged_not_zoom_safe():
    unsafe = [p.name for p in PALETTES.values() if not p.zoom_safe]
    assert unsafe == ["hues6"]


def test_map_rejects_wrong_unit_length():
    with pytest.raises(ValueError):
        get_palette("rgb").map(b"\x01\x02")


def test_map_units_rejects_wrong_shape():
    with pytest.raises(ValueError):
        get_palette("gray16b").map_units(np.zeros((4, 1), dtype=np.uint8))


def test_build_lut_checks_shape_and_range():
    with pytest.raises(ValueError):
        build_lut(lambda v: np.stack([v, v], axis=1))
    with pytest.raises(ValueError):
        build_lut(lambda v: np.stack([v, v, v * 2], axis=1))


# gray family


def test_gray_is_identity_for_every_byte():
    pal = get_palette("gray")
    for b in range(256):
        assert pal.map([b]) == (b, b, b)


def test_gray_vectorised_matches_scalar():
    units = np.arange(256, dtype=np.uint8).reshape(-1, 1)
    out = get_palette("gray").map_units(units)
    assert out.shape == (256, 3)
    assert np.array_equal(out[:, 0], np.arange(256))
    assert np.array_equal(out[:, 0], out[:, 2])


@pytest.mark.parametrize(
    "name, data, grey",
    [
        ("gray16b", b"\x12\x34", 0x12),
        ("gray16l", b"\x12\x34", 0x34),
        ("gray32b", b"\x01\x02\x03\x04", 0x01),
        ("gray32l", b"\x01\x02\x03\x04", 0x04),
    ],
)
def test_multibyte_gray_shows_most_significant_byte(name, data, grey):
    assert get_palette(name).map(data) == (grey, grey, grey)


# hue bands


@pytest.mark.parametrize(
    "byte, rgb",
    [
        (0, (0, 0, 0)),
        (85, (255, 0, 0)),
        (86, (0, 2, 0)),
        (170, (0, 254, 0)),
        (171, (0, 0, 1)),
        (255, (0, 0, 253)),
    ],
)
def test_hues(byte, rgb):
    assert get_palette("hues").map([byte]) == rgb


def test_hues_is_monotonic_within_each_band():
    pal = get_palette("hues")
    for lo, hi, ch in ((0, 86, 0), (86, 171, 1), (171, 256, 2)):
        vals = [pal.map([b])[ch] for b in range(lo, hi)]
        assert vals == sorted(vals)


@pytest.mark.parametrize(
    "byte, rgb",
    [
        (42, (252, 0, 0)),
        (43, (255, 2, 2)),
        (86, (0, 4, 0)),
        (128, (0, 255, 0)),
        (171, (0, 0, 2)),
        (255, (250, 250, 255)),
    ],
)
def test_fhues(byte, rgb):
    assert get_palette("fhues").map([byte]) == rgb


@pytest.mark.parametrize(
    "byte, rgb",
    [
        (42, (252, 0, 0)),
        (43, (0, 2, 0)),
        (86, (0, 0, 4)),
        (129, (0, 6, 6)),
        (171, (2, 0, 2)),
        (255, (250, 250, 0)),
    ],
)
def test_hues6(byte, rgb):
    assert get_palette("hues6").map([byte]) == rgb


# bit slices


@pytest.mark.parametrize(
    "byte, rgb",
    [
        (0x00, (0x00, 0x00, 0x00)),
        (0xFF, (0xE0, 0xE0, 0xC0)),
        (0xA5, (0xA0, 0x20, 0x40)),
    ],
)
def test_color(byte, rgb):
    assert get_palette("color").map([byte]) == rgb


@pytest.mark.parametrize(
    "data, rgb",
    [
        (b"\xff\xff", (0xFC, 0xF0, 0xF8)),
        (b"\x00\x04", (0x04, 0x00, 0x00)),
        (b"\x40\x00", (0x00, 0x10, 0x00)),
        (b"\x01\x00", (0x00, 0x00, 0x08)),
    ],
)
def test_color16_is_little_endian_bit_slices(data, rgb):
    assert get_palette("color16").map(data) == rgb


@pytest.mark.parametrize(
    "data, rgb",
    [
        (b"\x00\x00\x00\xab", (0xAB, 0x00, 0x00)),
        (b"\x00\xe0\x1f\x00", (0x00, 0xFF, 0x00)),
        (b"\xfe\x01\x00\x00", (0x00, 0x00, 0xFF)),
        (b"\x01\x00\x00\x00", (0x00, 0x00, 0x00)),
    ],
)
def test_color32_is_little_endian_bit_slices(data, rgb):
    assert get_palette("color32").map(data) == rgb


def test_rgb_passes_bytes_through():
    assert get_palette("rgb").map(b"\x01\x80\xff") == (1, 128, 255)


# composites


def test_dvi_single_sample_uses_previous():
    assert get_palette("dvi").map([10], previous=4) == (6, 10, 7)


def test_dvi_first_sample_defaults_to_zero_history():
    assert get_palette("dvi").map([9]) == (9, 9, 4)


def test_dvi_chains_history_through_units():
    units = np.array([[5], [3], [8]], dtype=np.uint8)
    out = get_palette("dvi").map_units(units, previous=0)
    assert out.tolist() == [[5, 5, 2], [2, 3, 4], [5, 8, 5]]


def test_dvi_handles_empty_units():
    out = get_palette("dvi").map_units(np.zeros((0, 1), dtype=np.uint8))
    assert out.shape == (0, 3)


def test_x86_every_byte_value():
    pal = get_palette("x86")
    flagged = {}
    for table, ch in ((X86_OPCODES, 0), (ENGLISH_CHARS, 1), (BINARY_VALUES, 2)):
        for byte, level in table.items():
            rgb = [0, 0, 0]
            rgb[ch] = level
            flagged[byte] = tuple(rgb)

    for b in range(256):
        rgb = pal.map([b])
        if b in flagged:
            assert rgb == flagged[b]
            assert any(rgb)
        else:
            assert rgb == (b, b, b)


def test_x86_indicator_levels():
    pal = get_palette("x86")
    assert pal.map([0x8B]) == (0xFF, 0, 0)
    assert pal.map([0xE8]) == (0xCF, 0, 0)
    assert pal.map([0x85]) == (0xAF, 0, 0)
    assert pal.map(b"t") == (0, 0xCF, 0)
    assert pal.map([0x03]) == (0, 0, 0xAF)
    assert pal.map([0x00]) == (0, 0, 0)


@pytest.mark.parametrize("name", list(PALETTES))
def test_all_palettes_stay_in_byte_range(name):
    pal = get_palette(name)
    rng = np.random.default_rng(7)
    units = rng.integers(0, 256, size=(512, pal.bytes_per_pixel), dtype=np.uint8)
    out = pal.map_units(units, previous=255)
    assert out.shape == (512, 3)
    assert out.min() >= 0 and out.max() <= 255
