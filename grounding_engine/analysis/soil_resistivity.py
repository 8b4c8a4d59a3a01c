"""
Two-layer soil utilities.

Apparent resistivity decomposition (simplified two-layer model):
  r     = sqrt(A / pi)         equivalent radius of the grid area
  alpha = r / d1               d1: equivalent mesh diameter reference
  beta  = rho2 / rho1
  rho_a = N * rho1

Surface layer derating factor (IEEE Std 80-2013, Eq. 27):
  Cs = 1 - 0.09 * (1 - rho2/rho1) / (2*h + 0.09)
"""

from __future__ import annotations
from dataclasses import dataclass
import math

from grounding_engine.models.grid_config import GridConfig


@dataclass(frozen=True)
class ApparentResistivity:
    alpha: float
    beta: float
    rho_a_ohm_m: float

    def __iter__(self):
        # allows: alpha, beta, rho_a = apparent_resistivity(cfg)
        return iter((self.alpha, self.beta, self.rho_a_ohm_m))


def apparent_resistivity(cfg: GridConfig) -> ApparentResistivity:
    r = math.sqrt(cfg.area_m2 / math.pi)
    return ApparentResistivity(
        alpha=r / cfg.mesh_diameter_d1_m,
        beta=cfg.rho2_ohm_m / cfg.rho1_ohm_m,
        rho_a_ohm_m=cfg.layer_coefficient_n * cfg.rho1_ohm_m,
    )


def correction_factor(cfg: GridConfig) -> float:
    """Cs surface layer derating factor (Eq. 27)."""
    return 1.0 - (0.09 * (1.0 - cfg.rho2_ohm_m / cfg.rho1_ohm_m)) / (2.0 * cfg.burial_depth_m + 0.09)
