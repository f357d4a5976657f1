import os

import pandas as pd
import pytest

from titrasim.cli import main
from titrasim.output import CURVE_FILENAME, SUMMARY_FILENAME
from titrasim.schema import COLUMNS


def test_cli_runs_timed_titration(tmp_path):
    code = main(
        ["--regime", "weak-acid-strong-base", "--output-dir", str(tmp_path), "--no-plot"]
    )
    assert code == 0
    curve = pd.read_csv(tmp_path / CURVE_FILENAME)
    assert curve[COLUMNS.volume].iloc[-1] == 50.0
    assert len(curve) == 51
    assert os.path.exists(tmp_path / SUMMARY_FILENAME)


def test_cli_manual_doses(tmp_path):
    code = main(
        ["--dose", "0.1", "--dose", "1.0", "--output-dir", str(tmp_path), "--no-plot"]
    )
    assert code == 0
    curve = pd.read_csv(tmp_path / CURVE_FILENAME)
    assert curve[COLUMNS.volume].tolist() == [0.0, 0.1, 1.1]


def test_cli_writes_figure(tmp_path):
    code = main(["--speed", "50", "--output-dir", str(tmp_path)])
    assert code == 0
    assert os.path.exists(tmp_path / "strong-acid-strong-base_curve.png")


def test_cli_rejects_invalid_configuration(tmp_path, capsys):
    code = main(["--acid-molarity", "-0.1", "--output-dir", str(tmp_path)])
    assert code == 2
    assert "acid_molarity" in capsys.readouterr().err
    assert not os.path.exists(tmp_path / CURVE_FILENAME)


def test_cli_dose_presets(tmp_path):
    code = main(
        [
            "--small-dose", "--large-dose", "--small-dose",
            "--output-dir", str(tmp_path), "--no-plot",
        ]
    )
    assert code == 0
    curve = pd.read_csv(tmp_path / CURVE_FILENAME)
    assert curve[COLUMNS.volume].tolist() == pytest.approx([0.0, 0.1, 1.1, 1.2])


def test_cli_presets_mix_with_explicit_doses(tmp_path):
    code = main(
        ["--dose", "5", "--large-dose", "--output-dir", str(tmp_path), "--no-plot"]
    )
    assert code == 0
    curve = pd.read_csv(tmp_path / CURVE_FILENAME)
    assert curve[COLUMNS.volume].tolist() == pytest.approx([0.0, 5.0, 6.0])


def test_cli_accepts_camel_case_regime(tmp_path):
    code = main(
        ["--regime", "weakAcidStrongBase", "--output-dir", str(tmp_path), "--no-plot"]
    )
    assert code == 0
    summary = pd.read_csv(tmp_path / SUMMARY_FILENAME)
    assert summary.loc[0, "regime"] == "weak-acid-strong-base"


def test_cli_rejects_unknown_regime(tmp_path, capsys):
    code = main(["--regime", "polyprotic", "--output-dir", str(tmp_path)])
    assert code == 2
    assert "Unknown reaction regime" in capsys.readouterr().err
