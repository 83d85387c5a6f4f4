"""
Command-line entry point.

Examples:
    airfoil-definitions naca 2412 --points 161 -o naca2412.dat
    airfoil-definitions normalize raw.dat -o clean.dat
    airfoil-definitions fit clean.dat --upper 8 --lower 8 --json
    airfoil-definitions plot 0012 -o naca0012.png
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from airfoil_definitions.config import (
    DEFAULT_N1,
    DEFAULT_N2,
    DEFAULT_NUM_POINTS,
    DEFAULT_NUM_WEIGHTS,
    CSTFitOptions,
)
from airfoil_definitions.definitions import CST, NACA4, AirfoilFile, coordinates
from airfoil_definitions.errors import AirfoilDefinitionError
from airfoil_definitions.geometry import normalize
from airfoil_definitions.io import read_airfoil_file, write_dat


def resolve_source(source: str):
    """A path to an existing file, otherwise a NACA 4-digit designation."""
    path = Path(source)
    if path.exists():
        return AirfoilFile(path)
    designation = source.upper().removeprefix("NACA").strip()
    return NACA4.from_designation(designation)


def _emit(coords, output: Optional[str], name: str) -> None:
    if output:
        path = write_dat(coords, output, name=name)
        print(f"Saved {len(coords)} points to {path}")
    else:
        print(name)
        for x, y in coords:
            print(f"{x:.6f} {y:.6f}")


def cmd_naca(args) -> int:
    foil = NACA4.from_designation(args.designation, open_trailing_edge=not args.closed_te)
    coords = coordinates(foil, num_points=args.points)
    _emit(coords, args.output, f"NACA {args.designation}")
    return 0


def cmd_normalize(args) -> int:
    name, raw = read_airfoil_file(args.input)
    _emit(normalize(raw), args.output, name)
    return 0


def cmd_fit(args) -> int:
    options = CSTFitOptions(
        num_upper_weights=args.upper,
        num_lower_weights=args.lower,
        N1=args.n1,
        N2=args.n2,
    )
    source = resolve_source(args.input)
    fitted = CST.fit(coordinates(source, num_points=args.points), options)

    payload = {
        "upper_weights": list(fitted.upper_weights),
        "lower_weights": list(fitted.lower_weights),
        "leading_edge_weight": fitted.leading_edge_weight,
        "trailing_edge_thickness": fitted.trailing_edge_thickness,
        "N1": fitted.N1,
        "N2": fitted.N2,
    }
    if args.json:
        print(json.dumps(payload, indent=2))
    else:
        for key, value in payload.items():
            if isinstance(value, list):
                value = " ".join(f"{v:.6f}" for v in value)
            print(f"{key:<24} {value}")
    return 0


def cmd_plot(args) -> int:
    from airfoil_definitions.plotting import save_airfoil_plot

    source = resolve_source(args.input)
    outpath = save_airfoil_plot(coordinates(source, num_points=args.points), args.output, title=args.input)
    print(f"Saved plot to {outpath}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="airfoil-definitions",
        description="Generate and normalize unit-chord airfoil coordinates.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("naca", help="NACA 4-digit coordinates")
    p.add_argument("designation", type=str, help="Four digits, e.g. 2412")
    p.add_argument("--points", type=int, default=DEFAULT_NUM_POINTS, help="Total number of points")
    p.add_argument("--closed-te", action="store_true", help="Use the closed trailing-edge thickness")
    p.add_argument("-o", "--output", type=str, default=None, help="Output .dat file (default: stdout)")
    p.set_defaults(func=cmd_naca)

    p = sub.add_parser("normalize", help="Normalize a coordinate file to unit chord")
    p.add_argument("input", type=str, help="Input .dat file")
    p.add_argument("-o", "--output", type=str, default=None, help="Output .dat file (default: stdout)")
    p.set_defaults(func=cmd_normalize)

    p = sub.add_parser("fit", help="Fit CST parameters to a file or NACA designation")
    p.add_argument("input", type=str, help="Input .dat file or NACA designation")
    p.add_argument("--upper", type=int, default=DEFAULT_NUM_WEIGHTS, help="Upper surface weights")
    p.add_argument("--lower", type=int, default=DEFAULT_NUM_WEIGHTS, help="Lower surface weights")
    p.add_argument("--n1", type=float, default=DEFAULT_N1, help="Leading-edge class exponent")
    p.add_argument("--n2", type=float, default=DEFAULT_N2, help="Trailing-edge class exponent")
    p.add_argument("--points", type=int, default=DEFAULT_NUM_POINTS, help="Points for generated sources")
    p.add_argument("--json", action="store_true", help="Print parameters as JSON")
    p.set_defaults(func=cmd_fit)

    p = sub.add_parser("plot", help="Plot a file or NACA designation")
    p.add_argument("input", type=str, help="Input .dat file or NACA designation")
    p.add_argument("-o", "--output", type=str, required=True, help="Output image file")
    p.add_argument("--points", type=int, default=DEFAULT_NUM_POINTS, help="Points for generated sources")
    p.set_defaults(func=cmd_plot)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        return args.func(args)
    except (AirfoilDefinitionError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
