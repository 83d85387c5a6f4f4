import numpy as np
import pytest

from airfoil_definitions.definitions import NACA4, coordinates
from airfoil_definitions.errors import InvalidFormatError, InvalidParameterError
from airfoil_definitions.naca4 import (
    camber_line,
    camber_slope,
    half_thickness,
    naca4_coordinates,
    parse_designation,
)


def _surfaces_at_stations(xy):
    """Upper and lower points per station for an odd point count."""
    n_le = xy.shape[0] // 2
    lower = xy[n_le:]
    upper = xy[:n_le][::-1]
    return upper, lower


def test_parse_designation():
    m, p, t = parse_designation("2412")
    assert np.isclose(m, 0.02) and np.isclose(p, 0.4) and np.isclose(t, 0.12)
    assert parse_designation("0012") == (0.0, 0.0, 0.12)


@pytest.mark.parametrize("s", ["021", "24120", "24a2", "", "-012", "２４１２"])
def test_invalid_designation_format(s):
    with pytest.raises(InvalidFormatError):
        NACA4.from_designation(s)


@pytest.mark.parametrize(
    "m, p, t",
    [
        (0.0, 0.1, 0.1),   # p without camber
        (0.02, 0.0, 0.12),  # camber without position
        (0.1, 0.4, 0.12),
        (-0.01, 0.4, 0.12),
        (0.02, 1.0, 0.12),
        (0.02, 0.4, 1.0),
        (0.02, 0.4, -0.1),
    ],
)
def test_invalid_parameters(m, p, t):
    with pytest.raises(InvalidParameterError):
        NACA4(m, p, t)


def test_designation_with_camber_but_no_position_is_rejected():
    with pytest.raises(InvalidParameterError):
        NACA4.from_designation("2012")


def test_designation_roundtrip():
    assert NACA4.from_designation("2412").designation == "2412"
    assert NACA4.from_designation("0006").designation == "0006"
    assert NACA4(0.025, 0.4, 0.12).designation is None


@pytest.mark.parametrize("n", [3, 4, 10, 11, 160, 199, 200])
def test_point_count_matches_request(n):
    xy = coordinates(NACA4.from_designation("2412"), num_points=n)
    assert xy.shape == (n, 2)
    assert np.all(np.isfinite(xy))


def test_symmetric_section_mirrors():
    xy = coordinates(NACA4(0.0, 0.0, 0.15), num_points=199)
    upper, lower = _surfaces_at_stations(xy)

    # Upper stations 1..99, lower stations 0..99
    assert np.allclose(upper[:, 0], lower[1:, 0])
    assert np.allclose(upper[:, 1], -lower[1:, 1])


def test_naca0012_open_trailing_edge():
    """Maximum thickness 0.12 near 30% chord, LE at origin and TE midpoint at (1, 0)."""
    xy = coordinates(NACA4.from_designation("0012", open_trailing_edge=True), num_points=199)
    lower = xy[99:]

    thickness = -2.0 * lower[:, 1]
    i_max = int(np.argmax(thickness))
    assert np.isclose(thickness[i_max], 0.12, atol=5e-4)
    assert abs(lower[i_max, 0] - 0.30) < 0.02

    assert np.allclose(xy[99], [0.0, 0.0])
    assert np.allclose(0.5 * (xy[0] + xy[-1]), [1.0, 0.0])
    assert np.allclose(xy[0, 1], -xy[-1, 1])

    # Open trailing edge: finite gap of 10 t (0.1036 - 0.1015)
    assert np.isclose(xy[0, 1] - xy[-1, 1], 10 * 0.12 * 0.0021, atol=1e-9)


def test_closed_trailing_edge_has_no_gap():
    xy = coordinates(NACA4.from_designation("0012", open_trailing_edge=False))
    assert abs(xy[0, 1]) < 1e-12
    assert abs(xy[-1, 1]) < 1e-12


def test_naca2412_camber_line():
    foil = NACA4.from_designation("2412", open_trailing_edge=True)
    x = np.linspace(0.0, 1.0, 1001)
    yc = camber_line(x, foil.max_camber, foil.max_camber_position)

    i_max = int(np.argmax(yc))
    assert np.isclose(yc[i_max], 0.02, atol=1e-6)
    assert np.isclose(x[i_max], 0.4, atol=1e-3)
    assert np.isclose(yc[0], 0.0) and np.isclose(yc[-1], 0.0)

    # Slope vanishes at the point of maximum camber
    assert np.isclose(camber_slope(0.4, foil.max_camber, foil.max_camber_position), 0.0)


def test_naca2412_surfaces_enclose_camber_line():
    xy = coordinates(NACA4.from_designation("2412"), num_points=199)
    upper = xy[:99]
    lower = xy[99:]

    assert upper[:, 1].max() > 0.07
    assert lower[:, 1].min() < -0.03
    assert np.all(np.isfinite(xy))
    assert np.allclose(xy[99], [0.0, 0.0])


def test_naca0000_collapses_to_chord_line():
    xy = coordinates(NACA4.from_designation("0000"), num_points=199)
    assert np.all(np.isfinite(xy))
    assert np.all(xy[:, 1] == 0.0)
    assert xy[:, 0].min() == 0.0 and np.isclose(xy[:, 0].max(), 1.0)


def test_half_thickness_matches_closed_form():
    x = 0.3
    expected = 5 * 0.12 * (0.2969 * np.sqrt(x) - 0.126 * x - 0.3516 * x**2 + 0.2843 * x**3 - 0.1015 * x**4)
    assert np.isclose(half_thickness(x, 0.12, True), expected)


def test_naca4_coordinates_function_matches_definition():
    direct = naca4_coordinates(0.02, 0.4, 0.12, True, 101)
    via_definition = coordinates(NACA4(0.02, 0.4, 0.12), num_points=101)
    assert np.array_equal(direct, via_definition)
