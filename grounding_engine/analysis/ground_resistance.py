"""
Grid ground resistance (IEEE Std 80-2013, Eq. 57, with burial depth correction).

  Rg = rho2 * [ 1/L + 1/sqrt(20*A) * (1 + 1/(1 + h*sqrt(20/A))) ]

Where:
- rho2 is the lower-layer soil resistivity (ohm-m)
- L is the grid length (after the total-conductor-length stage, the total buried length)
- A is the grid area (m^2), h the burial depth (m)

Numerical clamps (kept exactly, they matter for very small or degenerate grids):
- both bracket terms are floored at 0.001
- L is floored at 1.0 m
"""

from __future__ import annotations
import math

from grounding_engine.models.grid_config import GridConfig


_TERM_FLOOR = 0.001
_LENGTH_FLOOR_M = 1.0


def ground_resistance_for_geometry(rho2_ohm_m: float, burial_depth_m: float, width_m: float, length_m: float) -> float:
    """Rg for an explicit width/length; same result as ground_resistance() on a config with that geometry."""
    area = width_m * length_m

    eq1 = 1.0 / math.sqrt(20.0 * area)
    eq2 = 1.0 / (1.0 + burial_depth_m * math.sqrt(20.0 / area))

    length = length_m
    if length < _LENGTH_FLOOR_M:
        length = _LENGTH_FLOOR_M
    if eq1 < _TERM_FLOOR:
        eq1 = _TERM_FLOOR
    if eq2 < _TERM_FLOOR:
        eq2 = _TERM_FLOOR

    return rho2_ohm_m * ((1.0 / length) + eq1 * (1.0 + eq2))


def ground_resistance(cfg: GridConfig) -> float:
    return ground_resistance_for_geometry(cfg.rho2_ohm_m, cfg.burial_depth_m, cfg.width_m, cfg.length_m)
