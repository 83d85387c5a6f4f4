"""
Airfoil definitions and the canonical airfoil value.

A definition describes *how* an airfoil is obtained (a coordinate file, a
NACA 4-digit designation or a set of CST parameters). `coordinates()`
turns any definition into a unit-chord contour in boundary ordering and
`to_canonical()` bundles that contour with its definition.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple, Union

import numpy as np

from airfoil_definitions.config import (
    DEFAULT_N1,
    DEFAULT_N2,
    CSTFitOptions,
    GenerationOptions,
    resolve_generation_options,
)
from airfoil_definitions.cst import cst_coordinates
from airfoil_definitions.cst_fit import fit_cst_parameters
from airfoil_definitions.errors import InvalidParameterError
from airfoil_definitions.geometry import normalize_inplace
from airfoil_definitions.io import read_coordinates
from airfoil_definitions.naca4 import naca4_coordinates, parse_designation, validate_params


@dataclass(frozen=True)
class AirfoilFile:
    """Airfoil stored as a two-column coordinate file; normalized when read."""
    path: Path

    def __post_init__(self):
        object.__setattr__(self, "path", Path(self.path))


@dataclass(frozen=True)
class NACA4:
    """
    NACA 4-digit airfoil definition.

    Attributes
    ----------
    max_camber : float
        Maximum camber m as a fraction of the chord, in [0, 0.1).
    max_camber_position : float
        Chordwise position p of maximum camber, in [0, 1).
    max_thickness : float
        Maximum thickness t as a fraction of the chord, in [0, 1).
    open_trailing_edge : bool
        Use the classical open trailing-edge thickness polynomial
        (x^4 coefficient 0.1015) instead of the closed one (0.1036).
    """
    max_camber: float
    max_camber_position: float
    max_thickness: float
    open_trailing_edge: bool = True

    def __post_init__(self):
        m = float(self.max_camber)
        p = float(self.max_camber_position)
        t = float(self.max_thickness)
        validate_params(m, p, t)
        object.__setattr__(self, "max_camber", m)
        object.__setattr__(self, "max_camber_position", p)
        object.__setattr__(self, "max_thickness", t)
        object.__setattr__(self, "open_trailing_edge", bool(self.open_trailing_edge))

    @classmethod
    def from_designation(cls, designation: str, open_trailing_edge: bool = True) -> "NACA4":
        """Build from a four-digit string, e.g. NACA4.from_designation("2412")."""
        m, p, t = parse_designation(designation)
        return cls(m, p, t, open_trailing_edge=open_trailing_edge)

    @property
    def designation(self) -> Optional[str]:
        """Four-digit designation, or None when the parameters have no exact one."""
        digits = (self.max_camber * 100, self.max_camber_position * 10, self.max_thickness * 100)
        rounded = [round(d) for d in digits]
        if not all(np.isclose(d, r, rtol=0.0, atol=1e-9) for d, r in zip(digits, rounded)):
            return None
        return f"{rounded[0]}{rounded[1]}{rounded[2]:02d}"


@dataclass(frozen=True)
class CST:
    """
    Class-Shape Transformation airfoil definition.

    Attributes
    ----------
    upper_weights, lower_weights : tuple of float
        Bernstein weights of the upper and lower surface shape functions.
    leading_edge_weight : float
        Scale of the leading-edge modification term shared by both surfaces.
    trailing_edge_thickness : float
        Total trailing-edge gap, split evenly above and below the chord line.
    N1, N2 : float
        Class function exponents (0.5 and 1.0 give a round nose and a
        sharp tail).
    """
    upper_weights: Tuple[float, ...]
    lower_weights: Tuple[float, ...]
    leading_edge_weight: float
    trailing_edge_thickness: float
    N1: float = DEFAULT_N1
    N2: float = DEFAULT_N2

    def __post_init__(self):
        upper = tuple(float(w) for w in self.upper_weights)
        lower = tuple(float(w) for w in self.lower_weights)
        if not upper or not lower:
            raise InvalidParameterError("upper_weights and lower_weights must not be empty")
        object.__setattr__(self, "upper_weights", upper)
        object.__setattr__(self, "lower_weights", lower)
        object.__setattr__(self, "leading_edge_weight", float(self.leading_edge_weight))
        object.__setattr__(self, "trailing_edge_thickness", float(self.trailing_edge_thickness))
        object.__setattr__(self, "N1", float(self.N1))
        object.__setattr__(self, "N2", float(self.N2))

    @classmethod
    def fit(cls, coords, options: Optional[CSTFitOptions] = None) -> "CST":
        """
        Fit a CST definition to arbitrary airfoil coordinates.

        The coordinates are normalized first. N1 and N2 come from `options`
        and are held fixed. A negative fitted trailing-edge thickness is
        replaced by a refit with the thickness fixed at 0.
        """
        options = options or CSTFitOptions()
        result = fit_cst_parameters(coords, options)
        return cls(
            upper_weights=tuple(result.upper_weights),
            lower_weights=tuple(result.lower_weights),
            leading_edge_weight=result.leading_edge_weight,
            trailing_edge_thickness=result.trailing_edge_thickness,
            N1=options.N1,
            N2=options.N2,
        )

    @classmethod
    def from_definition(
        cls,
        definition: "AirfoilDefinition",
        options: Optional[CSTFitOptions] = None,
        generation: Optional[GenerationOptions] = None,
    ) -> "CST":
        """Fit a CST definition to the coordinates produced by another definition."""
        return cls.fit(coordinates(definition, generation), options)


AirfoilDefinition = Union[AirfoilFile, NACA4, CST]


@dataclass(frozen=True, eq=False)
class UnitAirfoil:
    """
    Canonical representation of a unit-chord airfoil.

    Coordinates are stored in the normalized frame (leading edge at (0, 0),
    trailing edge at (1, 0), boundary ordering) together with the definition
    that produced them. The stored array is read-only.
    """
    definition: AirfoilDefinition
    coordinates: np.ndarray = field(repr=False)

    def __post_init__(self):
        coords = np.array(self.coordinates, dtype=float, copy=True)
        coords.setflags(write=False)
        object.__setattr__(self, "coordinates", coords)

    @property
    def x(self) -> np.ndarray:
        return self.coordinates[:, 0]

    @property
    def y(self) -> np.ndarray:
        return self.coordinates[:, 1]

    def __len__(self) -> int:
        return self.coordinates.shape[0]


CanonicalAirfoil = UnitAirfoil


def coordinates(
    definition: Union[AirfoilDefinition, UnitAirfoil],
    options: Optional[GenerationOptions] = None,
    **overrides,
) -> np.ndarray:
    """
    Return the unit-chord contour of `definition` as an (n, 2) array.

    Parameters
    ----------
    definition : AirfoilFile, NACA4, CST or UnitAirfoil
        What to generate. A UnitAirfoil returns a copy of its stored points.
    options : GenerationOptions, optional
        Discretization options; keyword overrides such as num_points=101
        may be given instead. File-backed definitions keep the point count
        of the file.

    Returns
    -------
    np.ndarray
        Freshly allocated array owned by the caller, in boundary ordering.
    """
    if isinstance(definition, UnitAirfoil):
        return definition.coordinates.copy()

    opts = resolve_generation_options(options, **overrides)

    if isinstance(definition, AirfoilFile):
        coords = np.array(read_coordinates(definition.path), dtype=float)
        normalize_inplace(coords)
        return coords

    if isinstance(definition, NACA4):
        return naca4_coordinates(
            definition.max_camber,
            definition.max_camber_position,
            definition.max_thickness,
            open_trailing_edge=definition.open_trailing_edge,
            num_points=opts.num_points,
        )

    if isinstance(definition, CST):
        return cst_coordinates(
            definition.upper_weights,
            definition.lower_weights,
            definition.leading_edge_weight,
            definition.trailing_edge_thickness,
            n1=definition.N1,
            n2=definition.N2,
            num_points=opts.num_points,
        )

    raise TypeError(f"unsupported airfoil definition: {type(definition).__name__}")


def to_canonical(
    definition: AirfoilDefinition,
    options: Optional[GenerationOptions] = None,
    **overrides,
) -> UnitAirfoil:
    """Generate the coordinates of `definition` and wrap them in a UnitAirfoil."""
    if isinstance(definition, UnitAirfoil):
        return definition
    return UnitAirfoil(definition, coordinates(definition, options, **overrides))


def naca4(designation: str, open_trailing_edge: bool = True) -> NACA4:
    """Shorthand for NACA4.from_designation."""
    return NACA4.from_designation(designation, open_trailing_edge=open_trailing_edge)


def fit_cst(coords, options: Optional[CSTFitOptions] = None) -> CST:
    """Fit a CST definition to `coords`; same as CST.fit."""
    return CST.fit(coords, options)
