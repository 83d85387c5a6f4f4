"""
Recover CST parameters from arbitrary airfoil coordinates.

The coordinates are normalized, split at the leading edge and both surfaces
are fitted at once with a Levenberg-Marquardt least-squares solve over

    [upper weights, lower weights, leading-edge weight, trailing-edge thickness]

using the closed-form partial derivatives of the CST model as Jacobian.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np
from scipy.optimize import least_squares

from airfoil_definitions.config import CSTFitOptions
from airfoil_definitions.cst import cst, cst_design_matrix
from airfoil_definitions.errors import FitDidNotConvergeError
from airfoil_definitions.geometry import normalize, split_surfaces

logger = logging.getLogger(__name__)


@dataclass
class CSTFitResult:
    """Parameters and solver diagnostics of a CST fit."""
    upper_weights: np.ndarray
    lower_weights: np.ndarray
    leading_edge_weight: float
    trailing_edge_thickness: float
    rms_residual: float
    nfev: int
    thickness_fixed: bool = False


def prepare_surfaces(coords) -> Tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    """
    Normalize `coords` and return (xu, yu, xl, yl).

    x is clipped to [0, 1] so the class function stays real for points that
    rounding or camber place marginally outside the unit chord.
    """
    upper, lower = split_surfaces(normalize(coords))
    xu = np.clip(upper[:, 0], 0.0, 1.0)
    xl = np.clip(lower[:, 0], 0.0, 1.0)
    return xu, upper[:, 1].copy(), xl, lower[:, 1].copy()


def _jacobian(
    xu: np.ndarray,
    xl: np.ndarray,
    options: CSTFitOptions,
    fit_thickness: bool,
) -> np.ndarray:
    k_u = options.num_upper_weights
    k_l = options.num_lower_weights
    n_params = k_u + k_l + 1 + int(fit_thickness)

    Du = cst_design_matrix(xu, k_u, options.N1, options.N2)
    Dl = cst_design_matrix(xl, k_l, options.N1, options.N2)

    J = np.zeros((xu.size + xl.size, n_params))
    rows_l = slice(xu.size, None)
    i_le = k_u + k_l

    J[: xu.size, :k_u] = Du[:, :k_u]
    J[: xu.size, i_le] = Du[:, k_u]
    J[rows_l, k_u:i_le] = Dl[:, :k_l]
    J[rows_l, i_le] = Dl[:, k_l]
    if fit_thickness:
        J[: xu.size, -1] = 0.5 * xu
        J[rows_l, -1] = -0.5 * xl
    return J


def _solve(
    xu: np.ndarray,
    yu: np.ndarray,
    xl: np.ndarray,
    yl: np.ndarray,
    options: CSTFitOptions,
    thickness_guess: Optional[float],
) -> CSTFitResult:
    """Single least-squares solve; thickness_guess=None fixes the thickness at 0."""
    fit_thickness = thickness_guess is not None
    k_u = options.num_upper_weights
    k_l = options.num_lower_weights
    n_params = k_u + k_l + 1 + int(fit_thickness)
    y_obs = np.concatenate([yu, yl])

    if y_obs.size < n_params:
        raise FitDidNotConvergeError(
            f"cannot fit {n_params} CST parameters to {y_obs.size} points"
        )

    J = _jacobian(xu, xl, options, fit_thickness)
    if np.linalg.matrix_rank(J) < n_params:
        raise FitDidNotConvergeError(
            "singular Jacobian: the point distribution cannot resolve "
            f"{n_params} CST parameters"
        )

    def unpack(params):
        a_u = params[:k_u]
        a_l = params[k_u : k_u + k_l]
        le = params[k_u + k_l]
        te = params[-1] if fit_thickness else 0.0
        return a_u, a_l, le, te

    def residuals(params):
        a_u, a_l, le, te = unpack(params)
        y_u = cst(xu, a_u, le, +te / 2.0, options.N1, options.N2)
        y_l = cst(xl, a_l, le, -te / 2.0, options.N1, options.N2)
        return np.concatenate([y_u, y_l]) - y_obs

    x0 = np.ones(n_params)
    if fit_thickness:
        x0[-1] = thickness_guess

    result = least_squares(
        residuals,
        x0,
        jac=lambda params: J,
        method="lm",
        max_nfev=options.max_nfev,
        ftol=options.ftol,
        xtol=options.xtol,
        gtol=options.gtol,
    )

    if not result.success:
        raise FitDidNotConvergeError(
            f"CST fit did not converge after {result.nfev} evaluations: {result.message}"
        )
    if not np.all(np.isfinite(result.fun)) or not np.all(np.isfinite(result.x)):
        raise FitDidNotConvergeError("CST fit produced non-finite values")

    a_u, a_l, le, te = unpack(result.x)
    rms = float(np.sqrt(np.mean(result.fun**2)))
    logger.debug(
        "CST fit status=%d nfev=%d rms=%.3e (%s)",
        result.status, result.nfev, rms, result.message,
    )
    return CSTFitResult(
        upper_weights=np.array(a_u, dtype=float),
        lower_weights=np.array(a_l, dtype=float),
        leading_edge_weight=float(le),
        trailing_edge_thickness=float(te),
        rms_residual=rms,
        nfev=int(result.nfev),
        thickness_fixed=not fit_thickness,
    )


def fit_cst_parameters(coords, options: Optional[CSTFitOptions] = None) -> CSTFitResult:
    """
    Fit CST parameters to a contour given in boundary ordering.

    Parameters
    ----------
    coords : array_like, shape (n, 2)
        Airfoil points, upper surface trailing edge -> leading edge, then
        lower surface leading edge -> trailing edge. Any frame; they are
        normalized before fitting.
    options : CSTFitOptions, optional
        Number of weights per surface, class exponents and solver limits.

    Returns
    -------
    CSTFitResult
        trailing_edge_thickness is never negative: a negative estimate
        triggers a second fit with the thickness held at exactly 0.

    Raises
    ------
    FitDidNotConvergeError
        If the solver stops without converging or the problem is singular.
    """
    options = options or CSTFitOptions()
    xu, yu, xl, yl = prepare_surfaces(coords)

    thickness_guess = float(yu[0] - yl[-1])
    result = _solve(xu, yu, xl, yl, options, thickness_guess)

    if result.trailing_edge_thickness < 0.0:
        logger.info(
            "fitted trailing-edge thickness %.3e is negative; refitting with a closed trailing edge",
            result.trailing_edge_thickness,
        )
        result = _solve(xu, yu, xl, yl, options, None)

    return result
