from __future__ import annotations

import numpy as np
import pytest

from pigment_match import convert, models
from pigment_match.convert import (
    InvalidColorError,
    hex_to_rgb,
    lab_to_rgb,
    parse_hex,
    rgb_array_to_lab,
    rgb_to_hex,
    rgb_to_lab,
    to_rgb,
)


def test_hex_to_rgb_is_case_insensitive():
    assert hex_to_rgb("#ff8800") == (255, 136, 0)
    assert hex_to_rgb("#FF8800") == (255, 136, 0)
    assert hex_to_rgb("1b2d5b") == (27, 45, 91)


@pytest.mark.parametrize("value", ["#12345", "#GGGGGG", "", "#1234567", "red", None, 123])
def test_parse_hex_reports_invalid_input(value):
    assert parse_hex(value) is None


def test_hex_to_rgb_raises_instead_of_defaulting_to_black():
    with pytest.raises(InvalidColorError):
        hex_to_rgb("#zz0000")


def test_rgb_to_hex_pads_and_uppercases():
    assert rgb_to_hex((1, 2, 3)) == "#010203"
    assert rgb_to_hex((171, 205, 239)) == "#ABCDEF"


def test_rgb_to_hex_clamps_and_rounds_half_up():
    assert rgb_to_hex((-5, 300, 12.5)) == "#00FF0D"
    assert rgb_to_hex((127.5, 127.4, 0.49)) == "#807F00"


def test_hex_round_trip():
    rng = np.random.default_rng(11)
    for rgb in rng.integers(0, 256, size=(200, 3)):
        triple = tuple(int(v) for v in rgb)
        assert hex_to_rgb(rgb_to_hex(triple)) == triple


def test_rgb_to_lab_reference_values():
    assert rgb_to_lab((0, 0, 0)) == pytest.approx((0.0, 0.0, 0.0), abs=1e-6)
    assert rgb_to_lab((255, 255, 255)) == pytest.approx((100.0, 0.0, 0.0), abs=1e-3)
    assert rgb_to_lab((255, 0, 0)) == pytest.approx((53.2408, 80.0925, 67.2032), abs=0.01)
    assert rgb_to_lab((0, 0, 255)) == pytest.approx((32.2970, 79.1875, -107.8602), abs=0.01)


def test_rgb_to_lab_returns_floats():
    result = rgb_to_lab((128, 64, 200))
    assert len(result) == 3
    assert all(isinstance(v, float) for v in result)


def test_rgb_array_to_lab_matches_scalar_conversion():
    colors = np.array([[10, 200, 30], [250, 250, 5], [60, 60, 60]])
    batch = rgb_array_to_lab(colors)

    assert batch.shape == (3, 3)
    for row, rgb in zip(batch, colors):
        assert tuple(row) == pytest.approx(rgb_to_lab(tuple(rgb)))


@pytest.mark.parametrize("rgb", [(255, 0, 0), (27, 45, 91), (200, 180, 160), (0, 0, 0)])
def test_lab_to_rgb_inverts_rgb_to_lab(rgb):
    assert lab_to_rgb(rgb_to_lab(rgb)) == rgb


def test_to_rgb_accepts_hex_and_triples():
    assert to_rgb("#00FF00") == (0, 255, 0)
    assert to_rgb([300, -1, 12.4]) == (255, 0, 12)


@pytest.mark.parametrize("value", [(1, 2), (1, 2, 3, 4), ("a", "b", "c"), "#12"])
def test_to_rgb_rejects_malformed_colors(value):
    with pytest.raises(InvalidColorError):
        to_rgb(value)


def test_model_color_fields_use_convert_helpers():
    pigment = models.Pigment(id="x", name="Signal", rgb=(255, 0, 0))

    assert models.RGB is convert.RGB
    assert models.LAB is convert.LAB
    assert pigment.hex == "#FF0000"
    assert pigment.lab == rgb_to_lab((255, 0, 0))
