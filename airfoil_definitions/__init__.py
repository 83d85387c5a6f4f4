"""
airfoil_definitions -- two-dimensional, chord-normalized airfoil geometry
from parametric definitions.

    from airfoil_definitions import NACA4, CST, coordinates, to_canonical

    foil = NACA4.from_designation("2412")
    xy = coordinates(foil, num_points=199)      # (199, 2) array, Selig ordering
    fitted = CST.fit(xy)                        # CST parameters recovered from xy
"""
from airfoil_definitions.config import CSTFitOptions, GenerationOptions
from airfoil_definitions.cst import bernstein, class_function, cst, shape_function
from airfoil_definitions.cst_fit import CSTFitResult, fit_cst_parameters
from airfoil_definitions.database import AirfoilDatabase
from airfoil_definitions.definitions import (
    CST,
    NACA4,
    AirfoilDefinition,
    AirfoilFile,
    CanonicalAirfoil,
    UnitAirfoil,
    coordinates,
    fit_cst,
    naca4,
    to_canonical,
)
from airfoil_definitions.errors import (
    AirfoilDefinitionError,
    DegenerateGeometryError,
    FitDidNotConvergeError,
    InvalidFormatError,
    InvalidParameterError,
)
from airfoil_definitions.geometry import normalize, normalize_inplace, split_surfaces
from airfoil_definitions.io import read_coordinates, write_dat

__version__ = "0.1.0"

__all__ = [
    "AirfoilDatabase",
    "AirfoilDefinition",
    "AirfoilDefinitionError",
    "AirfoilFile",
    "CST",
    "CSTFitOptions",
    "CSTFitResult",
    "CanonicalAirfoil",
    "DegenerateGeometryError",
    "FitDidNotConvergeError",
    "GenerationOptions",
    "InvalidFormatError",
    "InvalidParameterError",
    "NACA4",
    "UnitAirfoil",
    "bernstein",
    "class_function",
    "coordinates",
    "cst",
    "fit_cst",
    "fit_cst_parameters",
    "naca4",
    "normalize",
    "normalize_inplace",
    "read_coordinates",
    "shape_function",
    "split_surfaces",
    "to_canonical",
    "write_dat",
]
