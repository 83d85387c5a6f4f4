import dataclasses

import numpy as np
import pytest

from airfoil_definitions.config import GenerationOptions
from airfoil_definitions.definitions import (
    CST,
    NACA4,
    AirfoilFile,
    CanonicalAirfoil,
    UnitAirfoil,
    coordinates,
    naca4,
    to_canonical,
)
from airfoil_definitions.errors import DegenerateGeometryError, InvalidParameterError
from airfoil_definitions.geometry import normalize
from airfoil_definitions.io import write_dat


def test_default_point_count():
    assert coordinates(NACA4.from_designation("2412")).shape == (199, 2)
    assert coordinates(CST((0.2,) * 4, (-0.2,) * 4, 0.0, 0.0)).shape == (199, 2)


def test_options_object_and_keyword_override_agree():
    foil = naca4("4412")
    a = coordinates(foil, GenerationOptions(num_points=61))
    b = coordinates(foil, num_points=61)
    c = coordinates(foil, GenerationOptions(num_points=199), num_points=61)
    assert a.shape == (61, 2)
    assert np.array_equal(a, b) and np.array_equal(a, c)


def test_invalid_point_counts():
    with pytest.raises(InvalidParameterError):
        GenerationOptions(num_points=0)
    with pytest.raises(InvalidParameterError):
        coordinates(naca4("0012"), num_points=-3)
    with pytest.raises(InvalidParameterError):
        GenerationOptions(num_points=10.5)


@pytest.mark.parametrize("n", [1, 2])
def test_smallest_point_counts_keep_only_the_leading_edge(n):
    """One station per surface: odd drops the upper copy, even keeps both."""
    for foil in (naca4("0012"), naca4("2412"), CST((0.2,) * 4, (-0.2,) * 4, 0.1, 0.0)):
        xy = coordinates(foil, num_points=n)
        assert xy.shape == (n, 2)
        assert np.allclose(xy, 0.0)


def test_generation_is_pure():
    foil = naca4("2412")
    first = coordinates(foil)
    first[:] = 0.0
    assert np.any(coordinates(foil) != 0.0)


def test_definitions_are_immutable():
    foil = naca4("0012")
    with pytest.raises(dataclasses.FrozenInstanceError):
        foil.max_thickness = 0.2

    c = CST([0.1, 0.2], [-0.1, -0.2], 0.0, 0.0)
    assert c.upper_weights == (0.1, 0.2)
    with pytest.raises(dataclasses.FrozenInstanceError):
        c.N1 = 1.0


def test_definitions_compare_by_value():
    assert naca4("2412") == NACA4(0.02, 0.4, 0.12)
    assert naca4("2412") != naca4("2412", open_trailing_edge=False)
    assert CST([0.1], [-0.1], 0, 0) == CST((0.1,), (-0.1,), 0.0, 0.0)


def test_cst_requires_weights():
    with pytest.raises(InvalidParameterError):
        CST([], [-0.1], 0.0, 0.0)


def test_cst_defaults():
    c = CST((0.2,), (-0.2,), 0.0, 0.0)
    assert c.N1 == 0.5 and c.N2 == 1.0


def test_to_canonical_wraps_coordinates():
    foil = naca4("2412")
    unit = to_canonical(foil, num_points=101)

    assert isinstance(unit, UnitAirfoil)
    assert CanonicalAirfoil is UnitAirfoil
    assert unit.definition == foil
    assert len(unit) == 101
    assert np.array_equal(unit.coordinates, coordinates(foil, num_points=101))
    assert np.array_equal(unit.x, unit.coordinates[:, 0])
    assert to_canonical(unit) is unit


def test_unit_airfoil_coordinates_are_read_only():
    unit = to_canonical(naca4("0012"))
    with pytest.raises(ValueError):
        unit.coordinates[0, 0] = 5.0

    copy = coordinates(unit)
    copy[0, 0] = 5.0
    assert unit.coordinates[0, 0] != 5.0


def test_unit_airfoil_does_not_alias_input():
    xy = coordinates(naca4("0012"), num_points=21)
    unit = UnitAirfoil(naca4("0012"), xy)
    xy[:] = 0.0
    assert np.any(unit.coordinates != 0.0)


def test_file_backed_definition_is_normalized(tmp_path):
    xy = coordinates(naca4("2412"), num_points=121)
    a = np.radians(-6.0)
    R = np.array([[np.cos(a), -np.sin(a)], [np.sin(a), np.cos(a)]])
    raw = 2.0 * xy @ R.T + np.array([0.5, 0.25])
    path = write_dat(raw, tmp_path / "moved.dat", name="MOVED 2412")

    foil = AirfoilFile(str(path))
    out = coordinates(foil)

    assert foil.path == path
    assert out.shape == (121, 2)
    assert np.allclose(out, normalize(raw), atol=1e-5)
    assert np.allclose(0.5 * (out[0] + out[-1]), [1.0, 0.0], atol=1e-12)

    unit = to_canonical(foil)
    assert unit.definition is foil
    assert np.allclose(unit.coordinates, out)


def test_file_backed_raw_frame_with_integer_first_row(tmp_path):
    """A leading row such as "4.0 2.0" is a coordinate, not a Lednicer header."""
    path = tmp_path / "raw.dat"
    path.write_text("4.0 2.0\n3.0 2.2\n2.0 2.0\n3.0 1.8\n4.0 2.0\n")

    out = coordinates(AirfoilFile(path))
    expected = [(1.0, 0.0), (0.5, 0.1), (0.0, 0.0), (0.5, -0.1), (1.0, 0.0)]
    assert np.allclose(out, expected, atol=1e-12)


def test_file_backed_ignores_point_count(tmp_path):
    path = write_dat(coordinates(naca4("0012"), num_points=51), tmp_path / "a.dat")
    assert coordinates(AirfoilFile(path), num_points=199).shape == (51, 2)


def test_file_backed_errors_propagate(tmp_path):
    with pytest.raises(OSError):
        coordinates(AirfoilFile(tmp_path / "missing.dat"))

    path = tmp_path / "flat.dat"
    path.write_text("POINT\n0.5 0.5\n0.5 0.5\n0.5 0.5\n")
    with pytest.raises(DegenerateGeometryError):
        coordinates(AirfoilFile(path))


def test_unsupported_definition():
    with pytest.raises(TypeError):
        coordinates("2412")


def test_cst_from_other_definition():
    fitted = CST.from_definition(naca4("0012"))
    assert isinstance(fitted, CST)
    assert len(fitted.upper_weights) == 8
