"""
NACA 4-digit section geometry.

Closed-form thickness and camber-line equations of the classical NACA
four-digit family, evaluated on cosine-spaced stations.
"""
from __future__ import annotations

from typing import Tuple

import numpy as np

from airfoil_definitions.errors import InvalidFormatError, InvalidParameterError
from airfoil_definitions.geometry import assemble_boundary, cosine_stations

# x^4 coefficient of the thickness polynomial
OPEN_TE_COEFF = 0.1015
CLOSED_TE_COEFF = 0.1036


def validate_params(m: float, p: float, t: float) -> None:
    """
    Check camber m, camber position p and thickness t.

    m must lie in [0, 0.1), p and t in [0, 1), and m and p must be zero
    together or nonzero together.
    """
    if not 0.0 <= m < 0.1:
        raise InvalidParameterError(f"the maximum camber should be in [0, 0.1). Got m = {m}")
    if not 0.0 <= p < 1.0:
        raise InvalidParameterError(
            f"the maximum camber position should be in [0, 1). Got p = {p}"
        )
    if not 0.0 <= t < 1.0:
        raise InvalidParameterError(f"the maximum thickness should be in [0, 1). Got t = {t}")
    if (m == 0) != (p == 0):
        raise InvalidParameterError(
            "if either `m` or `p` is zero, then both should be zero. "
            f"Got m = {m} and p = {p}."
        )


def parse_designation(designation: str) -> Tuple[float, float, float]:
    """
    Decode a four-digit designation such as "2412" into (m, p, t).

    "2412" -> m = 0.02, p = 0.4, t = 0.12
    """
    s = str(designation).strip()
    if len(s) != 4 or not s.isdigit() or not s.isascii():
        raise InvalidFormatError(f"expected 4 digits. Got '{designation}'.")

    m = int(s[0]) / 100
    p = int(s[1]) / 10
    t = int(s[2:]) / 100
    return m, p, t


def half_thickness(x: np.ndarray, t: float, open_trailing_edge: bool = True) -> np.ndarray:
    """Half-thickness distribution y_t(x) for maximum thickness t."""
    x = np.asarray(x, dtype=float)
    k = OPEN_TE_COEFF if open_trailing_edge else CLOSED_TE_COEFF
    return 5.0 * t * (
        0.2969 * np.sqrt(x)
        - 0.1260 * x
        - 0.3516 * x**2
        + 0.2843 * x**3
        - k * x**4
    )


def camber_line(x: np.ndarray, m: float, p: float) -> np.ndarray:
    """Mean camber line y_c(x). Requires 0 < p < 1."""
    x = np.asarray(x, dtype=float)
    return np.where(
        x < p,
        m / p**2 * (2.0 * p * x - x**2),
        m / (1.0 - p) ** 2 * ((1.0 - 2.0 * p) + 2.0 * p * x - x**2),
    )


def camber_slope(x: np.ndarray, m: float, p: float) -> np.ndarray:
    """Camber line slope dy_c/dx. Requires 0 < p < 1."""
    x = np.asarray(x, dtype=float)
    return np.where(
        x < p,
        2.0 * m / p**2 * (p - x),
        2.0 * m / (1.0 - p) ** 2 * (p - x),
    )


def naca4_surfaces(
    m: float,
    p: float,
    t: float,
    open_trailing_edge: bool = True,
    num_points: int = 199,
) -> Tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    """
    Upper and lower surface points, each ordered leading edge -> trailing edge.

    Returns
    -------
    xu, yu, xl, yl : np.ndarray
        Surface coordinates at ceil(num_points / 2) cosine-spaced stations.
    """
    x = cosine_stations(num_points)
    yt = half_thickness(x, t, open_trailing_edge)

    if m == 0 or p == 0:
        # Symmetric section: thickness applied about the chord line
        return x.copy(), yt, x.copy(), -yt

    yc = camber_line(x, m, p)
    theta = np.arctan(camber_slope(x, m, p))

    # Thickness applied perpendicular to the camber line
    xu = x - yt * np.sin(theta)
    yu = yc + yt * np.cos(theta)
    xl = x + yt * np.sin(theta)
    yl = yc - yt * np.cos(theta)
    return xu, yu, xl, yl


def naca4_coordinates(
    m: float,
    p: float,
    t: float,
    open_trailing_edge: bool = True,
    num_points: int = 199,
) -> np.ndarray:
    """Full contour of a NACA 4-digit section in boundary ordering, shape (num_points, 2)."""
    xu, yu, xl, yl = naca4_surfaces(m, p, t, open_trailing_edge, num_points)
    return assemble_boundary(xu, yu, xl, yl, num_points)
