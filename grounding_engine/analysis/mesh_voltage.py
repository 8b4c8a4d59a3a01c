"""
Aggregate grid quantities: total conductor length, mesh/step voltages, GPR.

  Lt = L_grid + 3 * n_rods                     (each rod counted as 3 m of conductor)
  Em = rho2 * Ig * Km * Ki / Lt                (Eq. 85)
  Es = rho2 * Ig * Ks * Ki / Lt                (Eq. 97)
  GPR = Rg * Ig

L_grid is the side returned by the grid sizing search.

Calling convention for GPR: derive a config with length_m = overall_conductor_length(cfg)
first, then call gpr() on it, so Rg reflects the total buried conductor length:

    final = cfg.with_overrides(length_m=overall_conductor_length(cfg))
    gpr(final)
"""

from __future__ import annotations

from typing import Optional

from grounding_engine.analysis.grid_sizing import MAX_GRID_SIDE_M, mesh_calc
from grounding_engine.analysis.ground_resistance import ground_resistance
from grounding_engine.analysis.mesh_factors import ki_factor, km_factor, ks_factor
from grounding_engine.errors import InvalidInputError
from grounding_engine.models.grid_config import GridConfig


ROD_EQUIVALENT_LENGTH_M = 3.0


def _total_length(cfg: GridConfig, total_length_m: Optional[float]) -> float:
    if total_length_m is None:
        return overall_conductor_length(cfg)
    if total_length_m <= 0:
        raise InvalidInputError("total_length_m must be > 0.")
    return float(total_length_m)


def overall_conductor_length(cfg: GridConfig, max_side_m: float = MAX_GRID_SIDE_M) -> float:
    return mesh_calc(cfg, max_side_m=max_side_m) + cfg.rods * ROD_EQUIVALENT_LENGTH_M


def touch_voltage_mesh(cfg: GridConfig, total_length_m: Optional[float] = None) -> float:
    """Mesh (touch) voltage Em in V. Pass total_length_m to reuse an already computed Lt."""
    lt = _total_length(cfg, total_length_m)
    return (cfg.rho2_ohm_m * cfg.mesh_current_a * km_factor(cfg) * ki_factor(cfg)) / lt


def step_voltage_mesh(cfg: GridConfig, total_length_m: Optional[float] = None) -> float:
    lt = _total_length(cfg, total_length_m)
    return (cfg.rho2_ohm_m * cfg.mesh_current_a * ks_factor(cfg) * ki_factor(cfg)) / lt


def gpr(cfg: GridConfig) -> float:
    """Ground potential rise (V)."""
    return ground_resistance(cfg) * cfg.mesh_current_a
