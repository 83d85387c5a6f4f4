from __future__ import annotations

from dataclasses import dataclass, replace

from airfoil_definitions.errors import InvalidParameterError

DEFAULT_NUM_POINTS = 199
DEFAULT_N1 = 0.5
DEFAULT_N2 = 1.0
DEFAULT_NUM_WEIGHTS = 8


@dataclass(frozen=True)
class GenerationOptions:
    """
    Options for coordinate generation.

    num_points is the total number of points around the contour. Both
    surfaces are sampled at ceil(num_points / 2) stations; an odd value
    drops the duplicated leading-edge sample so the count matches exactly.
    """
    num_points: int = DEFAULT_NUM_POINTS

    def __post_init__(self):
        if isinstance(self.num_points, bool) or not isinstance(self.num_points, int):
            raise InvalidParameterError(
                f"num_points must be an integer. Got {self.num_points!r}"
            )
        if self.num_points < 1:
            raise InvalidParameterError(
                f"num_points must be positive. Got {self.num_points}"
            )


@dataclass(frozen=True)
class CSTFitOptions:
    """
    Configuration for fitting CST parameters to raw coordinates.

    The class exponents N1, N2 are copied to the fitted definition and are
    never refit. max_nfev caps the number of residual evaluations of the
    Levenberg-Marquardt solver.
    """
    num_upper_weights: int = DEFAULT_NUM_WEIGHTS
    num_lower_weights: int = DEFAULT_NUM_WEIGHTS
    N1: float = DEFAULT_N1
    N2: float = DEFAULT_N2

    # Solver controls (scipy.optimize.least_squares)
    max_nfev: int = 2000
    ftol: float = 1e-12
    xtol: float = 1e-12
    gtol: float = 1e-12

    def __post_init__(self):
        if self.num_upper_weights < 1 or self.num_lower_weights < 1:
            raise InvalidParameterError(
                "each surface needs at least one CST weight. "
                f"Got {self.num_upper_weights} upper and {self.num_lower_weights} lower"
            )
        if self.max_nfev < 1:
            raise InvalidParameterError(f"max_nfev must be positive. Got {self.max_nfev}")


def resolve_generation_options(options: GenerationOptions | None = None, **overrides) -> GenerationOptions:
    """Merge an options object with keyword overrides such as num_points=..."""
    if options is None:
        return GenerationOptions(**overrides)
    if overrides:
        return replace(options, **overrides)
    return options
