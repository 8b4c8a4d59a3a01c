"""
Grounding conductor sizing from fault current and thermal limits (IEEE Std 80-2013, Eq. 37).

Key idea:
- The conductor must carry the symmetrical fault current for tc seconds without exceeding
  its maximum allowable temperature Tm, starting from ambient Ta.

We compute (metric form of Eq. 37, I in A, result in mm^2):
  T0 = TCAP / (tc * alpha_r * rho_r)
  T1 = (K0 + Tm) / (K0 + Ta)
  A_kcmil = I * 197.4 / sqrt(T0 * ln(T1))
  A_mm2   = A_kcmil * 0.000506707     (kcmil -> mm^2, with I in A instead of kA)

and the diameter of a solid round conductor with that section:
  d = 2 * sqrt(A_mm2 / pi) * 0.001    (m)
"""

from __future__ import annotations
import math

from grounding_engine.errors import InvalidInputError
from grounding_engine.models.grid_config import GridConfig
from grounding_engine.models.reference_tables import lookup_conductor


_KCMIL_TO_MM2_PER_KA = 0.000506707


def cable_section(cfg: GridConfig) -> float:
    """Minimum conductor cross-section (mm^2)."""
    c = lookup_conductor(cfg.conductor)

    if c.k0 + cfg.ambient_temp_c <= 0:
        raise InvalidInputError("ambient_temp_c must be above -K0 of the conductor material.")
    if c.k0 + cfg.max_mesh_temp_c <= 0:
        raise InvalidInputError("max_mesh_temp_c must be above -K0 of the conductor material.")
    if cfg.max_mesh_temp_c <= cfg.ambient_temp_c:
        raise InvalidInputError("max_mesh_temp_c must be > ambient_temp_c.")

    t0 = c.tcap / (cfg.fault_duration_s * c.alpha_r * c.rho_r_uohm_cm)
    t1 = (c.k0 + cfg.max_mesh_temp_c) / (c.k0 + cfg.ambient_temp_c)

    return (cfg.mesh_current_a * (197.4 / math.sqrt(t0 * math.log(t1)))) * _KCMIL_TO_MM2_PER_KA


def cable_diameter(cfg: GridConfig) -> float:
    """Conductor diameter (m) for the section returned by cable_section()."""
    return 2 * math.sqrt(cable_section(cfg) / math.pi) * 0.001


def format_conductor_summary(cfg: GridConfig) -> str:
    c = lookup_conductor(cfg.conductor)
    section = cable_section(cfg)
    return (
        "Conductor sizing summary:\n"
        f"- Material: {c.label}\n"
        f"- Fault current: {cfg.mesh_current_a:.1f} A for {cfg.fault_duration_s:.3f} s\n"
        f"- Ambient / max temperature: {cfg.ambient_temp_c:.1f} / {cfg.max_mesh_temp_c:.1f} degC\n"
        f"- Minimum section: {section:.4f} mm^2\n"
        f"- Equivalent diameter: {cable_diameter(cfg) * 1000.0:.4f} mm\n"
    )
