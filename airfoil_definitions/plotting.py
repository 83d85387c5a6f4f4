from __future__ import annotations

from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np

from airfoil_definitions.definitions import CST, NACA4, AirfoilFile, UnitAirfoil, coordinates
from airfoil_definitions.geometry import split_surfaces


def _as_points(airfoil) -> np.ndarray:
    if isinstance(airfoil, UnitAirfoil):
        return airfoil.coordinates
    if isinstance(airfoil, (AirfoilFile, NACA4, CST)):
        return coordinates(airfoil)
    return np.asarray(airfoil, dtype=float)


def plot_airfoil(airfoil, ax=None, title: str = "Airfoil Geometry", show_points: bool = False):
    """
    Plot upper and lower surfaces of a contour, a definition or a UnitAirfoil.

    Returns the matplotlib Axes.
    """
    points = _as_points(airfoil)
    upper, lower = split_surfaces(points)

    if ax is None:
        _, ax = plt.subplots(figsize=(10, 3))

    marker = "." if show_points else None
    ax.plot(upper[:, 0], upper[:, 1], "b-", marker=marker, label="Upper")
    ax.plot(lower[:, 0], lower[:, 1], "r-", marker=marker, label="Lower")
    ax.axis("equal")
    ax.set_xlabel("x/c")
    ax.set_ylabel("y/c")
    ax.set_title(title)
    ax.grid(True, linestyle=":")
    ax.legend()
    return ax


def save_airfoil_plot(airfoil, outpath, title: str = "Airfoil Geometry", dpi: int = 300) -> Path:
    """Render plot_airfoil to an image file and return its path."""
    outpath = Path(outpath)
    outpath.parent.mkdir(parents=True, exist_ok=True)

    fig, ax = plt.subplots(figsize=(10, 3))
    plot_airfoil(airfoil, ax=ax, title=title)
    fig.savefig(outpath, dpi=dpi, bbox_inches="tight")
    plt.close(fig)
    return outpath
