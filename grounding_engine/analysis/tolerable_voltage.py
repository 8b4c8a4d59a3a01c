"""
Tolerable step and touch voltages for a 50 kg body (IEEE Std 80-2013).

  E_step50  = (1000 + 6.0 * Cs * rho_s) * 0.116 / sqrt(ts)     (Eq. 29)
  E_touch50 = (1000 + 1.5 * Cs * rho_s) * 0.116 / sqrt(ts)     (Eq. 32)

Where:
- rho_s is the surface material resistivity, taken from the soil table row selected by cfg.soil
- ts is the shock (short-circuit) duration in seconds
- 0.116 is the 50 kg body current constant k = 0.116 A*sqrt(s)
"""

from __future__ import annotations
import math

from grounding_engine.analysis.soil_resistivity import correction_factor
from grounding_engine.models.grid_config import GridConfig
from grounding_engine.models.reference_tables import lookup_soil


_K_50KG = 0.116


def _body_current_factor(fault_duration_s: float) -> float:
    return _K_50KG / math.sqrt(float(fault_duration_s))


def step_voltage_50kg(cfg: GridConfig) -> float:
    rho_s = lookup_soil(cfg.soil).resistivity_ohm_m
    return (1000.0 + 6.0 * correction_factor(cfg) * rho_s) * _body_current_factor(cfg.fault_duration_s)


def touch_voltage_50kg(cfg: GridConfig) -> float:
    rho_s = lookup_soil(cfg.soil).resistivity_ohm_m
    return (1000.0 + 1.5 * correction_factor(cfg) * rho_s) * _body_current_factor(cfg.fault_duration_s)
