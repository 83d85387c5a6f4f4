from __future__ import annotations

import math
from typing import Iterable, Tuple

import numpy as np

from airfoil_definitions.geometry import assemble_boundary, cosine_stations


def bernstein(x: np.ndarray, v: int, n: int) -> np.ndarray:
    """Bernstein basis polynomial B_v^n(x) = C(n, v) x^v (1 - x)^(n - v)."""
    x = np.asarray(x, dtype=float)
    return math.comb(n, v) * x**v * (1.0 - x) ** (n - v)


def bernstein_matrix(n: int, x: np.ndarray) -> np.ndarray:
    """
    Compute Bernstein basis matrix of order n at points x.

    Returns array of shape (len(x), n+1) where column k is B_k^n(x).
    """
    x = np.atleast_1d(np.asarray(x, dtype=float))
    k = np.arange(n + 1)
    binom = np.array([math.comb(n, int(ki)) for ki in k], dtype=float)

    x_col = x[:, None]
    return binom * (x_col**k) * ((1.0 - x_col) ** (n - k))


def class_function(x: np.ndarray, n1: float = 0.5, n2: float = 1.0) -> np.ndarray:
    """Class function C(x) = x^n1 * (1-x)^n2."""
    x = np.asarray(x, dtype=float)
    return (x**n1) * ((1.0 - x) ** n2)


def shape_function(x: np.ndarray, weights: Iterable[float]) -> np.ndarray:
    """Shape function S(x): weighted sum of the Bernstein basis of degree len(weights)-1."""
    weights = np.asarray(list(weights), dtype=float)
    if weights.size == 0:
        raise ValueError("weights must contain at least one value")
    x = np.asarray(x, dtype=float)
    S = bernstein_matrix(weights.size - 1, x) @ weights
    return S.reshape(x.shape)


def leading_edge_term(x: np.ndarray, num_weights: int) -> np.ndarray:
    """Leading-edge modification x * max(1-x, 0)^(N + 0.5), N = number of weights."""
    x = np.asarray(x, dtype=float)
    return x * np.maximum(1.0 - x, 0.0) ** (num_weights + 0.5)


def cst(
    x: np.ndarray,
    weights: Iterable[float],
    leading_edge_weight: float = 0.0,
    trailing_edge_half_thickness: float = 0.0,
    n1: float = 0.5,
    n2: float = 1.0,
) -> np.ndarray:
    """
    Compute CST surface y(x).

    Parameters
    ----------
    x : array_like
        Chordwise positions in [0, 1].
    weights : iterable of float
        Shape function weights (A_0 ... A_{N-1}).
    leading_edge_weight : float
        Scale of the leading-edge modification term.
    trailing_edge_half_thickness : float
        Linear trailing-edge term added as x * dz. Pass +dz_te/2 for the
        upper surface and -dz_te/2 for the lower one.
    n1, n2 : float
        Class function exponents: C(x) = x^n1 * (1-x)^n2.

    Returns
    -------
    y : np.ndarray
        Surface ordinate values at x.
    """
    x = np.asarray(x, dtype=float)
    weights = np.asarray(list(weights), dtype=float)

    C = class_function(x, n1, n2)
    S = shape_function(x, weights)

    return (
        C * S
        + x * trailing_edge_half_thickness
        + leading_edge_weight * leading_edge_term(x, weights.size)
    )


def cst_design_matrix(x: np.ndarray, num_weights: int, n1: float = 0.5, n2: float = 1.0) -> np.ndarray:
    """
    Partial derivatives of cst() with respect to its linear parameters.

    Returns an array of shape (len(x), num_weights + 1): columns 0..N-1 are
    dy/dA_v = C(x) B_v^{N-1}(x), the last column is dy/d(leading_edge_weight).
    The derivative with respect to the trailing-edge half thickness is x.
    """
    x = np.atleast_1d(np.asarray(x, dtype=float))
    C = class_function(x, n1, n2)
    B = bernstein_matrix(num_weights - 1, x)
    return np.column_stack([C[:, None] * B, leading_edge_term(x, num_weights)])


def cst_surfaces(
    num_points: int,
    upper_weights: Iterable[float],
    lower_weights: Iterable[float],
    leading_edge_weight: float = 0.0,
    trailing_edge_thickness: float = 0.0,
    n1: float = 0.5,
    n2: float = 1.0,
) -> Tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    """
    Build CST airfoil surfaces on cosine-spaced stations.

    The trailing-edge thickness is split evenly: +dz/2 on the upper
    surface, -dz/2 on the lower one.

    Returns
    -------
    xu, yu, xl, yl : np.ndarray
        Each of length ceil(num_points / 2), ordered leading edge -> trailing edge.
    """
    x = cosine_stations(num_points)

    yu = cst(x, upper_weights, leading_edge_weight, +trailing_edge_thickness / 2.0, n1, n2)
    yl = cst(x, lower_weights, leading_edge_weight, -trailing_edge_thickness / 2.0, n1, n2)

    return x.copy(), yu, x.copy(), yl


def cst_coordinates(
    upper_weights: Iterable[float],
    lower_weights: Iterable[float],
    leading_edge_weight: float = 0.0,
    trailing_edge_thickness: float = 0.0,
    n1: float = 0.5,
    n2: float = 1.0,
    num_points: int = 199,
) -> np.ndarray:
    """Full CST contour in boundary ordering, shape (num_points, 2)."""
    xu, yu, xl, yl = cst_surfaces(
        num_points,
        upper_weights,
        lower_weights,
        leading_edge_weight,
        trailing_edge_thickness,
        n1,
        n2,
    )
    return assemble_boundary(xu, yu, xl, yl, num_points)
