"""Tests for the validation entry scripts."""

import sys

import pytest

import generate_figures
import validate_figures
import validate_outputs
import validate_proofs


def test_proof_checks_pass(tmp_path):
    report = validate_proofs.validate()
    assert report["warnings"] == []
    assert len(report["checks"]) >= 8
    path = validate_proofs.write_report(report, tmp_path / "PROOF_VALIDATION.md")
    text = path.read_text(encoding="utf-8")
    assert text.startswith("# Proof Validation Report")
    assert "## Warnings" not in text


def test_figure_checks_pass(tmp_path):
    report = validate_figures.validate()
    assert report["warnings"] == []
    assert any("α = 1" in check for check in report["checks"])
    assert report["summary"]["male_care_thresholds"]["undefined_points"] == 11
    path = validate_figures.write_report(report, tmp_path / "FIGURE_VALIDATION.md")
    assert "alpha_threshold: 1001 rows" in path.read_text(encoding="utf-8")


def test_output_checks_without_figures(tmp_path):
    with pytest.raises(validate_outputs.ValidationError, match="Missing figure files"):
        validate_outputs.check_files_exist(str(tmp_path))
    validate_outputs.check_sweep_definitions()
    validate_outputs.check_threshold_formulas()
    validate_outputs.check_labels()


def test_generate_then_validate(tmp_path, monkeypatch):
    out_dir = tmp_path / "figures"
    monkeypatch.setattr(sys, "argv", ["generate_figures.py", "--out-dir", str(out_dir), "--format", "png", "--export-tables"])
    generate_figures.main()
    assert (out_dir / "male_care_thresholds.csv").exists()

    monkeypatch.setattr(sys, "argv", ["validate_outputs.py", "--fig-dir", str(out_dir), "--format", "png"])
    assert validate_outputs.main() == 0
