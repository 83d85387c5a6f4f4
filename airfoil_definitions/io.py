"""
Reading and writing plain-text airfoil coordinate tables.

Supported inputs are UIUC-style ``.dat`` files: an optional name line,
then two numeric columns separated by whitespace or commas. Both the Selig
layout (one contour, trailing edge -> leading edge -> trailing edge) and the
Lednicer layout (a point-count row followed by upper and lower surfaces,
each from leading edge to trailing edge) are accepted.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Tuple

import numpy as np

from airfoil_definitions.errors import InvalidFormatError

logger = logging.getLogger(__name__)


def _parse_row(line: str):
    parts = line.replace(",", " ").split()
    if len(parts) < 2:
        return None
    try:
        return float(parts[0]), float(parts[1])
    except ValueError:
        return None


def _orient_section(section: np.ndarray) -> np.ndarray:
    """Ensure a surface runs from leading edge to trailing edge."""
    if section[0, 0] > section[-1, 0]:
        return section[::-1]
    return section


def _is_point_count_row(row: Tuple[float, float]) -> bool:
    n_upper, n_lower = row
    return n_upper > 1.0 and n_lower > 1.0 and n_upper.is_integer() and n_lower.is_integer()


def _lednicer_sections(
    sections: List[List[Tuple[float, float]]],
) -> Optional[List[List[Tuple[float, float]]]]:
    """
    Upper and lower sections when the first row is a Lednicer point-count row.

    The row only counts as a header when the remaining rows hold exactly
    n_upper + n_lower points, either as two sections of those sizes or as
    one block. Otherwise it is an ordinary coordinate and None is returned.
    """
    first = sections[0][0]
    if not _is_point_count_row(first):
        return None

    n_upper, n_lower = int(first[0]), int(first[1])
    rest = [section for section in [sections[0][1:]] + sections[1:] if section]

    if [len(section) for section in rest] == [n_upper, n_lower]:
        return rest
    if len(rest) == 1 and len(rest[0]) == n_upper + n_lower:
        return [rest[0][:n_upper], rest[0][n_upper:]]
    return None


def _lednicer_to_boundary(sections: List[List[Tuple[float, float]]]) -> np.ndarray:
    upper = np.array(sections[0], dtype=float).reshape(-1, 2)
    lower = np.array(sections[1], dtype=float).reshape(-1, 2)
    if upper.shape[0] == 0 or lower.shape[0] == 0:
        raise InvalidFormatError("Lednicer layout needs points on both surfaces")

    upper = _orient_section(upper)
    lower = _orient_section(lower)

    if np.allclose(upper[0], lower[0]):
        lower = lower[1:]
    return np.vstack([upper[::-1], lower])


def read_airfoil_file(path) -> Tuple[str, np.ndarray]:
    """
    Parse a coordinate file.

    Returns
    -------
    name : str
        First non-numeric line, or the file stem when there is none.
    coords : np.ndarray
        Array of shape (n, 2) in boundary ordering.

    Raises
    ------
    OSError
        Propagated unchanged when the file cannot be read.
    InvalidFormatError
        If the file holds no numeric two-column rows.
    """
    path = Path(path)
    with path.open("r") as f:
        lines = f.readlines()

    name = ""
    sections: List[List[Tuple[float, float]]] = []
    current: List[Tuple[float, float]] = []

    for line in lines:
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            if current:
                sections.append(current)
                current = []
            continue

        row = _parse_row(stripped)
        if row is None:
            if not name and not sections and not current:
                name = stripped
            else:
                logger.debug("skipping unparseable line in %s: %r", path, stripped)
            continue
        current.append(row)

    if current:
        sections.append(current)

    if not sections:
        raise InvalidFormatError(f"no coordinate data in {path}")

    lednicer = _lednicer_sections(sections)
    if lednicer is not None:
        logger.debug(
            "Lednicer layout detected in %s: %d upper, %d lower",
            path, len(lednicer[0]), len(lednicer[1]),
        )
        coords = _lednicer_to_boundary(lednicer)
    else:
        coords = np.array([row for section in sections for row in section], dtype=float)
        logger.debug("Selig layout detected in %s: %d points", path, coords.shape[0])

    return name or path.stem, coords


def read_coordinates(path) -> np.ndarray:
    """Return the (n, 2) coordinate table stored in `path`."""
    return read_airfoil_file(path)[1]


def write_dat(coords, path, name: str = "airfoil") -> Path:
    """
    Write an airfoil .dat file in Selig format.

    Parameters
    ----------
    coords : array_like, shape (n, 2)
        Full airfoil coordinates, starting at upper TE -> LE, then lower LE -> TE.
    path : Path or str
        Output .dat file path.
    name : str
        Airfoil name written on the first line.
    """
    coords = np.asarray(coords, dtype=float)
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with path.open("w") as f:
        f.write(f"{name}\n")
        for xi, yi in coords:
            f.write(f"{xi:.6f} {yi:.6f}\n")

    return path
