#!/usr/bin/env python3
"""Validation script for generated figure outputs."""

import argparse
import os
import sys
from typing import List

from inbreeding.figures import FigureGrid, figure_grids
from inbreeding.grid import SweepRange, grid_shape
from inbreeding.labels import LabelError, alpha_labels
from inbreeding.model import (
    alpha_threshold,
    care_threshold_female,
    control_threshold_female,
    depression_threshold_female,
    depression_threshold_male,
    reproductive_output,
)


class ValidationError(Exception):
    """Raised when validation check fails."""
    pass


EXPECTED_FIGURES = [
    "reproductive_output",
    "inbreeding_thresholds",
    "male_care_thresholds",
    "alpha_threshold",
]


def check_files_exist(fig_dir: str, fmt: str = "pdf") -> List[str]:
    """Check that all expected figure files exist."""
    expected_files = [f"{name}.{fmt}" for name in EXPECTED_FIGURES]

    missing = []
    for fname in expected_files:
        fpath = os.path.join(fig_dir, fname)
        if not os.path.exists(fpath):
            missing.append(fname)

    if missing:
        raise ValidationError(f"Missing figure files: {missing}")

    print(f"✓ All {len(expected_files)} figure files exist")
    return expected_files


def check_sweep_definitions() -> None:
    """Verify the figure sweeps match the documented steps."""
    expected = {
        "reproductive_output": {"a": 5, "c": 11, "D": 21},
        "inbreeding_thresholds": {"r": 11, "a": 1001},
        "male_care_thresholds": {"a": 5, "r": 11, "N_m": 21},
        "alpha_threshold": {"N_m": 1001},
    }

    grids = figure_grids()
    for name, shape in expected.items():
        actual = grid_shape(grids[name].as_mapping())
        if actual != shape:
            raise ValidationError(f"Sweep mismatch for {name}: {actual}, expected {shape}")

    print("✓ Sweep definitions match documented step sizes")


def check_threshold_formulas() -> None:
    """Verify worked examples of the closed-form thresholds."""
    fitness = float(reproductive_output(0.4, 0.5, 1.0))
    if abs(fitness - 0.8) > 1e-6:
        raise ValidationError(f"Reproductive output at (0.4, 0.5, 1) should be 0.8, got {fitness}")

    female = float(depression_threshold_female(0.5, 0.0))
    male = float(depression_threshold_male(0.5, 0.0))
    if abs(female - 1.0 / 3.0) > 1e-6 or abs(male - 2.0 / 3.0) > 1e-6:
        raise ValidationError(f"Thresholds at r=0.5, α=0 should be 1/3 and 2/3, got {female}, {male}")

    a_star = float(alpha_threshold(0.5))
    if abs(a_star - 2.0 / 3.0) > 1e-6:
        raise ValidationError(f"α* at ΔN_m=0.5 should be 2/3, got {a_star}")

    # Care above α* must beat the control condition.
    if not care_threshold_female(0.5, 0.9, 0.5) > control_threshold_female(0.5):
        raise ValidationError("Care above α* does not raise the female threshold")

    print("✓ Threshold formulas are correct")
    print(f"  - Fitness (δ=0.4, α=0.5, c=1): {fitness:.3f}")
    print(f"  - Female/male thresholds (r=0.5, α=0): {female:.3f} / {male:.3f}")
    print(f"  - α* (ΔN_m=0.5): {a_star:.3f}")


def check_labels() -> None:
    """Verify facet labels are total over the α sweep and reject other values."""
    labels = alpha_labels()
    if labels.categories != ["α = 0", "α = 0.25", "α = 0.5", "α = 0.75", "α = 1"]:
        raise ValidationError(f"Unexpected α labels: {labels.categories}")
    try:
        labels.label(0.3)
    except LabelError:
        pass
    else:
        raise ValidationError("α = 0.3 should have no facet label")

    for name, grid in figure_grids().items():
        try:
            grid.build()
        except ValueError as e:
            raise ValidationError(f"Sweep {name} leaves the unit interval: {e}")

    out_of_range = FigureGrid("out_of_range", (("a", SweepRange(0.0, 1.5, 0.5)),))
    try:
        out_of_range.build()
    except ValueError:
        pass
    else:
        raise ValidationError("Sweep with α = 1.5 should be rejected")

    print("✓ Facet labels and parameter validation behave as documented")


def main() -> int:
    parser = argparse.ArgumentParser(description="Validate generated figure outputs.")
    parser.add_argument(
        "--fig-dir",
        default=os.path.join("documentation", "figures"),
        help="Directory containing generated figures",
    )
    parser.add_argument(
        "--format",
        default="pdf",
        help="Figure file extension to look for (default: pdf)",
    )
    args = parser.parse_args()

    print("=" * 60)
    print("Figure Output Validation")
    print("=" * 60)
    print()

    try:
        check_files_exist(args.fig_dir, args.format)
        print()

        check_sweep_definitions()
        print()

        check_threshold_formulas()
        print()

        check_labels()
        print()

        print("=" * 60)
        print("✓ ALL VALIDATION CHECKS PASSED")
        print("=" * 60)
        return 0

    except ValidationError as e:
        print()
        print("=" * 60)
        print(f"✗ VALIDATION FAILED: {e}")
        print("=" * 60)
        return 1
    except Exception as e:
        print()
        print("=" * 60)
        print(f"✗ UNEXPECTED ERROR: {e}")
        print("=" * 60)
        import traceback
        traceback.print_exc()
        return 2


if __name__ == "__main__":
    sys.exit(main())
