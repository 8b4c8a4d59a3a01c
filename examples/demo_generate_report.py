"""
Demo: full design check + HTML report for the reference grid.

Writes outputs/report.html and outputs/resistance_vs_side.png.
"""

import os

from grounding_engine.analysis.design_check import evaluate_grid_design
from grounding_engine.analysis.grid_sizing import resistance_curve
from grounding_engine.models.grid_config import GridConfig
from grounding_engine.report.html_report import generate_html_report


def main():
    cfg = GridConfig(rods=20, conductor_spacing_m=5.0)
    design = evaluate_grid_design(cfg)

    inputs_block = {
        "Grid (W x L)": f"{cfg.width_m:.0f} m x {cfg.length_m:.0f} m",
        "Spacing": f"{cfg.conductor_spacing_m:.1f} m",
        "Rods": f"{cfg.rods}",
        "Fault current": f"{cfg.mesh_current_a:.0f} A",
    }

    out_dir = os.path.join(os.getcwd(), "outputs")
    path = generate_html_report(
        out_dir=out_dir,
        report_name="Grounding Grid Design Check (demo)",
        inputs_block=inputs_block,
        design=design,
        curve=resistance_curve(cfg, max_side_m=max(50.0, 1.5 * design.grid_side_m)),
    )
    print(f"Risk: {design.risk_level}  safe={design.safe}")
    for note in design.interpretation:
        print(f"- {note}")
    print(f"Wrote: {path}")


if __name__ == "__main__":
    main()
