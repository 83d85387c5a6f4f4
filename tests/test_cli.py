import json

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest

from airfoil_definitions.cli import main, resolve_source
from airfoil_definitions.definitions import NACA4, AirfoilFile
from airfoil_definitions.io import read_airfoil_file


def test_naca_command_writes_file(tmp_path, capsys):
    out = tmp_path / "naca2412.dat"
    assert main(["naca", "2412", "--points", "61", "-o", str(out)]) == 0

    name, coords = read_airfoil_file(out)
    assert name == "NACA 2412"
    assert coords.shape == (61, 2)
    assert "Saved 61 points" in capsys.readouterr().out


def test_naca_command_prints_to_stdout(capsys):
    assert main(["naca", "0012", "--points", "11", "--closed-te"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "NACA 0012"
    assert len(lines) == 12


def test_invalid_designation_reports_error(capsys):
    assert main(["naca", "24x2"]) == 1
    assert capsys.readouterr().err.startswith("error:")


def test_normalize_command(tmp_path):
    src = tmp_path / "raw.dat"
    src.write_text("RAW\n4.0 1.0\n3.0 1.2\n2.0 1.0\n3.0 0.8\n4.0 1.0\n")
    out = tmp_path / "clean.dat"

    assert main(["normalize", str(src), "-o", str(out)]) == 0
    name, coords = read_airfoil_file(out)
    assert name == "RAW"
    assert np.allclose(coords[2], [0.0, 0.0])
    assert np.allclose(coords[0], [1.0, 0.0])


def test_fit_command_json(capsys):
    assert main(["fit", "NACA0012", "--upper", "6", "--lower", "6", "--json"]) == 0
    payload = json.loads(capsys.readouterr().out)

    assert len(payload["upper_weights"]) == 6
    assert len(payload["lower_weights"]) == 6
    assert payload["N1"] == 0.5 and payload["N2"] == 1.0
    assert payload["trailing_edge_thickness"] >= 0.0


def test_missing_file_is_reported(tmp_path, capsys):
    assert main(["normalize", str(tmp_path / "missing.dat")]) == 1
    assert "error:" in capsys.readouterr().err


def test_plot_command(tmp_path):
    out = tmp_path / "naca4412.png"
    assert main(["plot", "4412", "--points", "81", "-o", str(out)]) == 0
    assert out.exists()


def test_resolve_source(tmp_path):
    path = tmp_path / "foil.dat"
    path.write_text("1.0 0.0\n0.0 0.0\n1.0 0.0\n")
    assert isinstance(resolve_source(str(path)), AirfoilFile)
    assert resolve_source("naca 2412") == NACA4(0.02, 0.4, 0.12)


def test_subcommand_is_required():
    with pytest.raises(SystemExit):
        main([])
