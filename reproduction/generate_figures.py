#!/usr/bin/env python3
"""Generate the four inbreeding threshold figures."""

import argparse
import os

import matplotlib

matplotlib.use("Agg")

from inbreeding.figures import (
    figure_alpha_threshold,
    figure_inbreeding_thresholds,
    figure_male_care_thresholds,
    figure_reproductive_output,
)
from inbreeding.plot_style import default_style

FIGURES = (
    ("reproductive_output", figure_reproductive_output),
    ("inbreeding_thresholds", figure_inbreeding_thresholds),
    ("male_care_thresholds", figure_male_care_thresholds),
    ("alpha_threshold", figure_alpha_threshold),
)


def main() -> None:
    parser = argparse.ArgumentParser(description="Generate inbreeding threshold figures.")
    parser.add_argument(
        "--out-dir",
        default=os.path.join("documentation", "figures"),
        help="Output directory for figures (default: documentation/figures)",
    )
    parser.add_argument(
        "--format",
        default="pdf",
        choices=("pdf", "png", "svg"),
        help="Figure file format (default: pdf)",
    )
    parser.add_argument(
        "--export-tables",
        action="store_true",
        help="Also write each figure's evaluated grid as CSV",
    )
    args = parser.parse_args()

    out_dir = os.path.abspath(args.out_dir)
    os.makedirs(out_dir, exist_ok=True)
    style = default_style()

    for name, render in FIGURES:
        print(f"Generating {name}...")
        table = render(os.path.join(out_dir, f"{name}.{args.format}"), style=style)
        if args.export_tables:
            table.to_csv(os.path.join(out_dir, f"{name}.csv"), index=False)
        print(f"  {len(table)} grid rows")

    print(f"\nAll figures saved to {out_dir}/")
    print(f"  Total: {len(FIGURES)} figures")


if __name__ == "__main__":
    main()
