"""
Reference-frame utilities for airfoil contours.

All routines work on (n, 2) arrays of (x, y) points in boundary (Selig)
ordering: upper surface from trailing edge to leading edge, then lower
surface from leading edge back to trailing edge.
"""
from __future__ import annotations

import math
from typing import Tuple

import numpy as np

from airfoil_definitions.errors import DegenerateGeometryError


def cosine_stations(num_points: int) -> np.ndarray:
    """
    Chordwise stations shared by both surfaces.

    Returns ceil(num_points / 2) values x = (1 - cos(theta)) / 2 with theta
    evenly spaced on [0, pi], which clusters stations at both edges.
    """
    half = math.ceil(num_points / 2)
    theta = np.linspace(0.0, np.pi, half)
    return (1.0 - np.cos(theta)) / 2.0


def assemble_boundary(
    x_upper: np.ndarray,
    y_upper: np.ndarray,
    x_lower: np.ndarray,
    y_lower: np.ndarray,
    num_points: int,
) -> np.ndarray:
    """
    Join two surfaces sampled from leading edge to trailing edge.

    Ordering:
        - upper surface reversed: trailing edge (x ~ 1) to leading edge (x ~ 0)
        - lower surface as given: leading edge to trailing edge

    When num_points is odd the last sample of the reversed upper surface
    (its leading-edge point) is dropped so the point is not counted twice.
    """
    upper = np.column_stack([x_upper, y_upper])[::-1]
    lower = np.column_stack([x_lower, y_lower])

    if num_points % 2 == 1:
        upper = upper[:-1]

    return np.vstack([upper, lower])


def _check_contour(points: np.ndarray) -> None:
    if points.ndim != 2 or points.shape[1] != 2:
        raise ValueError(f"expected an (n, 2) array of points. Got shape {points.shape}")
    if points.shape[0] < 3:
        raise DegenerateGeometryError(
            f"at least 3 points are needed to define a contour. Got {points.shape[0]}"
        )
    if not np.all(np.isfinite(points)):
        raise DegenerateGeometryError("coordinates contain NaN or infinite values")


def normalize_inplace(points: np.ndarray) -> None:
    """
    Map a contour onto the unit-chord reference frame, overwriting `points`.

    1. Translate so that the leading edge lies at (0, 0). The leading edge
       is the point farthest from the trailing-edge midpoint, i.e. the
       average of the first and last points.
    2. Scale so that the chord length is 1.
    3. Rotate so that the trailing-edge midpoint lies at (1, 0).

    Parameters
    ----------
    points : np.ndarray
        Writable floating-point array of shape (n, 2) in boundary ordering,
        first and last rows at the trailing edge.

    Raises
    ------
    DegenerateGeometryError
        If every point coincides with the trailing-edge midpoint.
    """
    if not isinstance(points, np.ndarray) or not np.issubdtype(points.dtype, np.floating):
        raise TypeError(
            "normalize_inplace needs a floating-point numpy array; "
            "use normalize() to obtain a normalized copy of other sequences"
        )
    _check_contour(points)

    x = points[:, 0]
    y = points[:, 1]

    # Step 1: translate the leading edge to the origin
    x_te = 0.5 * (x[0] + x[-1])
    y_te = 0.5 * (y[0] + y[-1])
    distance = np.hypot(x - x_te, y - y_te)
    i_le = int(np.argmax(distance))
    chord = float(distance[i_le])

    if not chord > 0.0:
        raise DegenerateGeometryError(
            "cannot locate a leading edge: all points coincide with the trailing edge"
        )

    x_le, y_le = float(x[i_le]), float(y[i_le])
    x -= x_le
    y -= y_le

    # Step 2: unit chord
    points *= 1.0 / chord

    # Step 3: rotate the trailing edge onto the positive x-axis
    x_te = 0.5 * (x[0] + x[-1])
    y_te = 0.5 * (y[0] + y[-1])
    theta = math.atan2(y_te, x_te)
    cos_t, sin_t = math.cos(theta), math.sin(theta)

    x_rot = cos_t * x + sin_t * y
    y_rot = -sin_t * x + cos_t * y
    x[:] = x_rot
    y[:] = y_rot


def normalize(points) -> np.ndarray:
    """
    Return a normalized copy of `points`; the input is left untouched.

    See normalize_inplace for the algorithm.
    """
    out = np.array(points, dtype=float, copy=True)
    normalize_inplace(out)
    return out


def split_surfaces(points) -> Tuple[np.ndarray, np.ndarray]:
    """
    Split a normalized contour into (upper, lower) at the leading edge.

    The leading edge here is the point of minimum x, which is not the
    distance criterion used by normalize_inplace; the two agree for
    ordinary round-nosed sections.

    upper runs trailing edge -> leading edge and includes the leading-edge
    point. lower runs leading edge -> trailing edge; it starts after the
    leading-edge point when the total count is odd and at it when even.
    """
    points = np.asarray(points, dtype=float)
    _check_contour(points)

    i_le = int(np.argmin(points[:, 0]))
    offset = 1 if points.shape[0] % 2 == 1 else 0

    upper = points[: i_le + 1].copy()
    lower = points[i_le + offset :].copy()
    return upper, lower
