"""
Grounding grid design check (IEEE Std 80-2013, Figure 32 style procedure)

Runs the formula chain in dependency order for one configuration:
1) apparent resistivity decomposition, Cs
2) tolerable step/touch voltages (50 kg body)
3) conductor section and diameter
4) Km, Ki, Ks
5) Rg of the given grid geometry
6) grid sizing search -> total conductor length Lt (grid + rods)
7) mesh touch/step voltages over Lt
8) final Rg and GPR on a derived config with length = Lt

Verdicts (field reading of the standard):
- GPR <= tolerable touch: the grid is safe without further mesh checks.
- otherwise mesh touch voltage must be <= tolerable touch, and mesh step voltage <= tolerable step.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, List

from grounding_engine.analysis.conductor_sizing import cable_diameter, cable_section
from grounding_engine.analysis.grid_sizing import MAX_GRID_SIDE_M, mesh_calc
from grounding_engine.analysis.ground_resistance import ground_resistance
from grounding_engine.analysis.mesh_factors import ki_factor, km_factor, ks_factor
from grounding_engine.analysis.mesh_voltage import (
    ROD_EQUIVALENT_LENGTH_M,
    gpr,
    step_voltage_mesh,
    touch_voltage_mesh,
)
from grounding_engine.analysis.soil_resistivity import apparent_resistivity, correction_factor
from grounding_engine.analysis.tolerable_voltage import step_voltage_50kg, touch_voltage_50kg
from grounding_engine.models.grid_config import GridConfig
from grounding_engine.models.reference_tables import lookup_conductor, lookup_soil


@dataclass
class GridDesignReport:
    soil_label: str
    conductor_label: str

    # two-layer soil
    alpha: float
    beta: float
    rho_a_ohm_m: float
    cs: float

    # tolerable limits (50 kg)
    step_tolerable_v: float
    touch_tolerable_v: float

    # conductor
    cable_section_mm2: float
    cable_diameter_m: float

    # geometric factors
    km: float
    ki: float
    ks: float

    # resistance / sizing
    ground_resistance_ohm: float
    target_resistance_ohm: float
    grid_side_m: float
    total_conductor_length_m: float
    final_ground_resistance_ohm: float

    # fault-time voltages
    touch_mesh_v: float
    step_mesh_v: float
    gpr_v: float

    # verdicts
    touch_pass: bool
    step_pass: bool
    gpr_below_touch: bool
    safe: bool
    risk_level: str
    interpretation: List[str]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _risk_level(touch_pass: bool, step_pass: bool, gpr_below_touch: bool) -> str:
    if gpr_below_touch or (touch_pass and step_pass):
        return "LOW"
    if touch_pass or step_pass:
        return "MEDIUM"
    return "HIGH"


def _interpret(
    touch_mesh_v: float,
    touch_tol_v: float,
    step_mesh_v: float,
    step_tol_v: float,
    gpr_v: float,
    gpr_below_touch: bool,
) -> List[str]:
    notes: List[str] = []
    if gpr_below_touch:
        notes.append(
            f"GPR ({gpr_v:.0f} V) is below the tolerable touch voltage ({touch_tol_v:.0f} V): "
            "no further mesh voltage analysis is required."
        )
    else:
        notes.append(
            f"GPR ({gpr_v:.0f} V) exceeds the tolerable touch voltage ({touch_tol_v:.0f} V): "
            "mesh and step voltages govern the design."
        )

    if touch_mesh_v > touch_tol_v:
        notes.append(
            f"Mesh voltage {touch_mesh_v:.0f} V exceeds tolerable touch {touch_tol_v:.0f} V: "
            "reduce conductor spacing, add rods, or raise surface layer resistivity."
        )
    if step_mesh_v > step_tol_v:
        notes.append(
            f"Step voltage {step_mesh_v:.0f} V exceeds tolerable step {step_tol_v:.0f} V: "
            "consider deeper burial or perimeter grading."
        )
    if touch_mesh_v <= touch_tol_v and step_mesh_v <= step_tol_v:
        notes.append("Mesh and step voltages are within tolerable 50 kg limits.")
    return notes


def evaluate_grid_design(cfg: GridConfig, max_side_m: float = MAX_GRID_SIDE_M) -> GridDesignReport:
    """
    Full design evaluation for one configuration.

    Raises:
      InvalidInputError   if a formula precondition is violated
      GridNotSizableError if the target resistance cannot be met within max_side_m
    """
    app = apparent_resistivity(cfg)
    cs = correction_factor(cfg)

    step_tol = step_voltage_50kg(cfg)
    touch_tol = touch_voltage_50kg(cfg)

    section = cable_section(cfg)
    diameter = cable_diameter(cfg)

    km = km_factor(cfg)
    ki = ki_factor(cfg)
    ks = ks_factor(cfg)

    rg = ground_resistance(cfg)

    side = mesh_calc(cfg, max_side_m=max_side_m)
    lt = side + cfg.rods * ROD_EQUIVALENT_LENGTH_M

    em = touch_voltage_mesh(cfg, total_length_m=lt)
    es = step_voltage_mesh(cfg, total_length_m=lt)

    final_cfg = cfg.with_overrides(length_m=lt)
    rg_final = ground_resistance(final_cfg)
    gpr_v = gpr(final_cfg)

    touch_pass = em <= touch_tol
    step_pass = es <= step_tol
    gpr_below_touch = gpr_v <= touch_tol

    return GridDesignReport(
        soil_label=lookup_soil(cfg.soil).label,
        conductor_label=lookup_conductor(cfg.conductor).label,
        alpha=float(app.alpha),
        beta=float(app.beta),
        rho_a_ohm_m=float(app.rho_a_ohm_m),
        cs=float(cs),
        step_tolerable_v=float(step_tol),
        touch_tolerable_v=float(touch_tol),
        cable_section_mm2=float(section),
        cable_diameter_m=float(diameter),
        km=float(km),
        ki=float(ki),
        ks=float(ks),
        ground_resistance_ohm=float(rg),
        target_resistance_ohm=float(cfg.min_mesh_resistance_ohm),
        grid_side_m=float(side),
        total_conductor_length_m=float(lt),
        final_ground_resistance_ohm=float(rg_final),
        touch_mesh_v=float(em),
        step_mesh_v=float(es),
        gpr_v=float(gpr_v),
        touch_pass=bool(touch_pass),
        step_pass=bool(step_pass),
        gpr_below_touch=bool(gpr_below_touch),
        safe=bool(gpr_below_touch or (touch_pass and step_pass)),
        risk_level=_risk_level(touch_pass, step_pass, gpr_below_touch),
        interpretation=_interpret(em, touch_tol, es, step_tol, gpr_v, gpr_below_touch),
    )
