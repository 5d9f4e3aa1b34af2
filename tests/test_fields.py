import math

import numpy as np
import pytest

from glyphfield.core import fields
from glyphfield.core.fields import Pattern, PatternParams, evaluate, evaluate_grid, pattern_names
from glyphfield.errors import UnknownPatternError

ALL = pattern_names()


def test_registry_lists_every_pattern_once():
    assert len(ALL) == 16
    assert len(set(ALL)) == 16
    assert set(ALL) == {p.value for p in Pattern}
    assert ALL[0] == "waves"


def test_waves_at_time_zero_is_separable():
    p = PatternParams(scale=0.37, speed=9.0, width=40, height=20, density=1.0)
    for x, y in [(0, 0), (3, 7), (39, 19), (12, 4)]:
        expected = np.sin(float(x) * p.scale) * np.cos(float(y) * p.scale * 0.8)
        assert evaluate("waves", x, y, 0.0, p) == float(expected)


def test_unknown_pattern_raises():
    p = PatternParams()
    with pytest.raises(UnknownPatternError) as info:
        evaluate("nope", 0, 0, 0.0, p)
    assert info.value.name == "nope"
    assert isinstance(info.value, KeyError)
    with pytest.raises(UnknownPatternError):
        evaluate_grid("nope", 0.0, p)


def test_enum_and_string_names_are_interchangeable(params):
    a = evaluate(Pattern.SPIRAL, 5, 9, 1.25, params)
    b = evaluate("spiral", 5, 9, 1.25, params)
    assert a == b


@pytest.mark.parametrize("name", ALL)
@pytest.mark.parametrize("t", [0.0, 0.05, 3.7, 250.0])
def test_fields_are_finite_over_the_grid(name, t, params):
    values = evaluate_grid(name, t, params)
    assert values.shape == (params.height, params.width)
    assert np.all(np.isfinite(values))


@pytest.mark.parametrize("name", ALL)
def test_grid_matches_single_cell_evaluation(name, small_params):
    t = 2.35
    grid = evaluate_grid(name, t, small_params)
    for x, y in [(0, 0), (6, 3), (11, 6), (2, 5)]:
        assert grid[y, x] == pytest.approx(evaluate(name, x, y, t, small_params), abs=1e-12)


def test_tunnel_center_is_finite():
    p = PatternParams(scale=0.2, speed=5.0, width=60, height=30, density=0.3)
    assert evaluate("tunnel", 30, 15, 1.0, p) == 0.0
    assert math.isfinite(evaluate("tunnel", 31, 15, 1.0, p))


def test_maze_has_no_radial_component():
    a = PatternParams(scale=0.3, speed=4.0, width=20, height=10)
    b = PatternParams(scale=0.3, speed=4.0, width=120, height=60)
    assert evaluate("maze", 7, 3, 2.0, a) == evaluate("maze", 7, 3, 2.0, b)


def test_golden_rectangles_is_zero_outside_every_rectangle(params):
    assert evaluate("golden_rectangles", 0, 0, 0.0, params) == 0.0
    assert evaluate("golden_rectangles", 30, 15, 0.0, params) != 0.0


def test_fibonacci_grid_first_cell():
    s = 0.4
    p = PatternParams(scale=s, speed=3.0, width=30, height=20)
    expected = 0.4 * 0.0 + 0.4 * 1.0 + 0.2 * math.sin(s) * math.cos(s)
    assert evaluate("fibonacci_grid", 0, 0, 0.0, p) == pytest.approx(expected)


def test_fibonacci_grid_wraps_sequence():
    p = PatternParams(scale=0.4, speed=0.0, width=300, height=20)
    # floor(x / 5) == 11 wraps to the first entry again
    a = evaluate("fibonacci_grid", 0, 0, 0.0, p)
    b = evaluate("fibonacci_grid", 55, 0, 0.0, p)
    gx_a = 0.4 * math.sin(0 * 0.4 / fields.PHI)
    gx_b = 0.4 * math.sin(55 * 0.4 / fields.PHI)
    assert a - gx_a == pytest.approx(b - gx_b)


def test_golden_constants():
    assert fields.PHI == pytest.approx(1.6180339887)
    assert math.degrees(fields.GOLDEN_ANGLE) == pytest.approx(137.5077640)


def test_mavignier_dots_is_constant_inside_snapped_cell_along_ray():
    p = PatternParams(scale=0.3, speed=0.0, width=30, height=30)
    # same grid block and same angle (on the diagonal through the centre)
    assert evaluate("mavignier_dots", 18, 18, 0.0, p) == pytest.approx(
        evaluate("mavignier_dots", 19, 19, 0.0, p)
    )


def test_geometric_rotation_is_identity_at_time_zero(params):
    dx, dy = 7.0, -3.0
    x, y = params.width / 2 + dx, params.height / 2 + dy
    expected = 0.6 * math.sin((abs(dx) + abs(dy)) * params.scale) + 0.4 * math.cos(
        max(abs(dx), abs(dy)) * params.scale * 0.8
    )
    assert evaluate("mavignier_geometric", x, y, 0.0, params) == pytest.approx(expected)


@pytest.mark.parametrize(
    "kwargs",
    [
        dict(width=0),
        dict(height=-1),
        dict(density=0.0),
        dict(density=-0.5),
        dict(scale=float("nan")),
    ],
)
def test_params_validation(kwargs):
    with pytest.raises(ValueError):
        PatternParams(**kwargs).validate()


def test_params_are_immutable(params):
    with pytest.raises(AttributeError):
        params.scale = 1.0
