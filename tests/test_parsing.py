import math

import pytest

from splatimport.parsing import (
    Metadata,
    Property,
    PropertyFormat,
    SplatParser,
    to_alpha_linear,
    to_color_linear,
    to_scale_linear,
)


def test_color_of_zero_dc_is_mid_grey_in_linear_space():
    assert to_color_linear(0.0) == 55


def test_color_saturates_for_large_dc():
    assert to_color_linear(100.0) == 255
    assert to_color_linear(1e30) == 255


def test_color_is_black_for_very_negative_dc():
    assert to_color_linear(-100.0) == 0
    assert to_color_linear(-1e30) == 0


def test_color_is_monotonic_and_in_range():
    values = [to_color_linear(x / 4.0) for x in range(-20, 21)]
    assert values == sorted(values)
    assert all(0 <= v <= 255 for v in values)


def test_color_accepts_integers():
    assert to_color_linear(0) == to_color_linear(0.0)


def test_alpha_of_zero_opacity_is_half():
    assert to_alpha_linear(0.0) == 127


def test_alpha_bounds():
    assert to_alpha_linear(1000.0) == 255
    assert to_alpha_linear(-1000.0) == 0
    assert to_alpha_linear(-1e30) == 0


def test_alpha_is_monotonic_and_in_range():
    values = [to_alpha_linear(x / 2.0) for x in range(-30, 31)]
    assert values == sorted(values)
    assert all(0 <= v <= 255 for v in values)


def test_alpha_is_symmetric_around_zero():
    for x in (0.5, 1.0, 2.0, 3.0):
        assert abs(to_alpha_linear(x) + to_alpha_linear(-x) - 255) <= 1


def test_scale_of_zero_is_one():
    assert to_scale_linear(0.0) == 1.0


def test_scale_inverts_log():
    for value in (0.01, 0.5, 2.0, 10.0):
        assert math.isclose(to_scale_linear(math.log(value)), value, rel_tol=1e-6)


def test_scale_is_positive_and_monotonic():
    values = [to_scale_linear(x / 3.0) for x in range(-30, 31)]
    assert all(v > 0 for v in values)
    assert values == sorted(values)


def test_scale_overflows_to_infinity():
    assert to_scale_linear(1000.0) == math.inf


def test_metadata_defaults_are_empty_and_independent():
    first = Metadata()
    second = Metadata()
    first.properties[Property.X] = PropertyFormat.F32
    assert first.num_splats == 0
    assert second.properties == {}


def test_parser_interface_cannot_be_instantiated():
    with pytest.raises(TypeError):
        SplatParser()