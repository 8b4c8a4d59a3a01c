"""
HTML report generator for the grounding grid design check.

- Produces a standalone HTML file.
- Writes the resistance-vs-side plot as a PNG into the same output directory for portability.

Presentation-only: all values come from an already computed GridDesignReport.
"""

from __future__ import annotations

import datetime as _dt
import html
import os
from typing import Dict, Iterable, Optional, Sequence, Tuple

import matplotlib.pyplot as plt
import numpy as np

from grounding_engine.analysis.design_check import GridDesignReport


_BADGE_CLASS = {"LOW": "ok", "PASS": "ok", "MEDIUM": "warn", "HIGH": "bad", "FAIL": "bad"}


def _badge(label: str) -> str:
    label = (label or "").upper()
    return f'<span class="badge {_BADGE_CLASS.get(label, "warn")}">{html.escape(label)}</span>'


def _verdict(ok: bool, detail: str) -> str:
    return _badge("PASS" if ok else "FAIL") + " " + html.escape(detail)


def _rows_table(rows: Iterable[Tuple[str, str]], header: Optional[Sequence[str]] = None) -> str:
    """Two-column table; the left cell is escaped, the right one is inserted as given."""
    head = ""
    if header:
        head = "<tr>" + "".join(f"<th>{html.escape(h)}</th>" for h in header) + "</tr>"
    body = "".join(f"<tr><th>{html.escape(k)}</th><td>{v}</td></tr>" for k, v in rows)
    return f"<table>{head}{body}</table>"


def _write_png_resistance_curve(
    curve: Tuple[np.ndarray, np.ndarray],
    target_ohm: float,
    grid_side_m: float,
    out_dir: str,
    filename: str = "resistance_vs_side.png",
) -> Optional[str]:
    sides, rg = curve
    if len(sides) == 0:
        return None

    plt.figure()
    plt.plot(sides, rg, label="Rg (square trial grid)")
    plt.axhline(target_ohm, linestyle="--", label=f"target {target_ohm:.3g} ohm")
    if sides[0] <= grid_side_m <= sides[-1]:
        plt.axvline(grid_side_m, linestyle=":", label=f"sized side {grid_side_m:.0f} m")
    plt.yscale("log")
    plt.xlabel("Grid side (m)")
    plt.ylabel("Ground resistance Rg (ohm)")
    plt.title("Ground resistance vs grid side")
    plt.grid(True)
    plt.legend()
    plt.savefig(os.path.join(out_dir, filename), dpi=160, bbox_inches="tight")
    plt.close()
    return filename


_CSS = """
body { font-family: sans-serif; margin: 24px; max-width: 960px; }
section { border: 1px solid #ddd; border-radius: 8px; padding: 10px 16px; margin-top: 14px; }
table { width: 100%; border-collapse: collapse; font-size: 14px; }
th, td { border-bottom: 1px solid #eee; padding: 6px 10px; text-align: left; }
th { width: 40%; font-weight: 600; }
.badge { padding: 1px 8px; border-radius: 999px; font-size: 12px; font-weight: 700; }
.ok { background: #d1fae5; }
.warn { background: #fef3c7; }
.bad { background: #fee2e2; }
.note { color: #555; font-size: 13px; }
img { max-width: 100%; }
"""


def generate_html_report(
    *,
    out_dir: str,
    report_name: str,
    inputs_block: Dict[str, str],
    design: GridDesignReport,
    curve: Optional[Tuple[np.ndarray, np.ndarray]] = None,
) -> str:
    os.makedirs(out_dir, exist_ok=True)

    curve_png = (
        _write_png_resistance_curve(curve, design.target_resistance_ohm, design.grid_side_m, out_dir)
        if curve is not None
        else None
    )

    now = _dt.datetime.now().strftime("%Y-%m-%d %H:%M")

    verdict_table = _rows_table([
        ("Overall", _badge(design.risk_level) + (" safe" if design.safe else " not safe")),
        ("Touch (mesh vs tolerable)", _verdict(
            design.touch_pass, f"Em={design.touch_mesh_v:.1f} V / Etouch50={design.touch_tolerable_v:.1f} V")),
        ("Step (mesh vs tolerable)", _verdict(
            design.step_pass, f"Es={design.step_mesh_v:.1f} V / Estep50={design.step_tolerable_v:.1f} V")),
        ("GPR vs tolerable touch", _verdict(design.gpr_below_touch, f"GPR={design.gpr_v:.1f} V")),
    ])
    notes_html = "<ul>" + "".join(f"<li>{html.escape(t)}</li>" for t in design.interpretation) + "</ul>"

    inputs_table = _rows_table(
        ((k, html.escape(v)) for k, v in inputs_block.items()), header=("Input", "Value")
    )

    results_rows = [
        ("Apparent resistivity alpha / beta", f"{design.alpha:.4g} / {design.beta:.4g}"),
        ("Apparent resistivity rho_a", f"{design.rho_a_ohm_m:.1f} ohm-m"),
        ("Surface derating Cs", f"{design.cs:.4f}"),
        ("Conductor", design.conductor_label),
        ("Conductor section", f"{design.cable_section_mm2:.4f} mm2"),
        ("Conductor diameter", f"{design.cable_diameter_m * 1000.0:.4f} mm"),
        ("Km / Ki / Ks", f"{design.km:.4f} / {design.ki:.4f} / {design.ks:.4f}"),
        ("Rg (given geometry)", f"{design.ground_resistance_ohm:.4f} ohm"),
        ("Sized grid side", f"{design.grid_side_m:.0f} m (target {design.target_resistance_ohm:.3g} ohm)"),
        ("Total conductor length", f"{design.total_conductor_length_m:.0f} m"),
        ("Rg (total conductor length)", f"{design.final_ground_resistance_ohm:.4f} ohm"),
    ]
    results_table = _rows_table(
        ((k, html.escape(v)) for k, v in results_rows), header=("Quantity", "Value")
    )

    curve_html = ""
    if curve_png:
        curve_html = f'<img src="{html.escape(curve_png)}" alt="Rg vs side"/>'

    page = f"""<!doctype html>
<html>
<head>
<meta charset="utf-8"/>
<title>{html.escape(report_name)}</title>
<style>{_CSS}</style>
</head>
<body>
<h1>{html.escape(report_name)}</h1>
<p class="note">Generated: {now}</p>

<section>
  <h2>Safety Verdict</h2>
  {verdict_table}
  {notes_html}
</section>

<section>
  <h2>Inputs</h2>
  {inputs_table}
</section>

<section>
  <h2>Calculated Quantities</h2>
  {results_table}
</section>

<section>
  <h2>Grid Sizing</h2>
  <p class="note">Ground resistance of square trial grids; the sized side is the first one meeting the target.</p>
  {curve_html}
</section>

<p class="note"><b>Disclaimer:</b> Simplified IEEE Std 80-2013 screening (uniform-equivalent two-layer soil,
50 kg body, rods counted as 3 m of conductor each). It does not replace a detailed grounding study
for final design signoff.</p>
</body>
</html>
"""

    report_path = os.path.join(out_dir, "report.html")
    with open(report_path, "w", encoding="utf-8") as f:
        f.write(page)

    return report_path
