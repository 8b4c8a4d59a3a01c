"""
Grounding grid configuration (one instance per evaluation scenario).

Holds grid geometry, two-layer soil and fault parameters, thermal limits for conductor
sizing, and the soil/conductor table selectors. Defaults are the reference substation
case: 70 m x 70 m grid, 7 m spacing, 0.5 m deep, 10 rods, 1200 A, 0.5 s.

Notes:
- The config is immutable. Multi-stage evaluations (trial grids in the sizing search,
  the total-conductor-length stage before GPR) derive new configs via with_overrides().
- area_m2 and conductor counts are computed on access from width/length, so a derived
  config never carries a stale area.
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
import math
from typing import Any, Dict, Mapping

from grounding_engine.errors import InvalidInputError
from grounding_engine.models.reference_tables import (
    ConductorMaterial,
    SoilType,
    conductor_material_from_key,
    soil_type_from_key,
)


@dataclass(frozen=True)
class GridConfig:
    width_m: float = 70.0                  # grid width (m)
    length_m: float = 70.0                 # grid length (m)
    rho1_ohm_m: float = 2500.0             # upper-layer soil resistivity
    rho2_ohm_m: float = 400.0              # lower-layer soil resistivity
    mesh_current_a: float = 1200.0         # fault current flowing into the grid
    rods: int = 10                         # vertical ground rods
    min_mesh_resistance_ohm: float = 2.78  # target ground resistance for the sizing search
    ambient_temp_c: float = 40.0
    mesh_diameter_d1_m: float = 0.102      # equivalent mesh diameter reference (apparent resistivity)
    layer_coefficient_n: float = 0.67      # N, two-layer decomposition coefficient
    fault_duration_s: float = 0.5
    burial_depth_m: float = 0.5
    conductor_spacing_m: float = 7.0
    max_mesh_temp_c: float = 850.0
    soil: SoilType = SoilType.CRUSHED_STONE
    conductor: ConductorMaterial = ConductorMaterial.COMMERCIAL_COPPER

    def __post_init__(self) -> None:
        positive = (
            "width_m",
            "length_m",
            "rho1_ohm_m",
            "min_mesh_resistance_ohm",
            "mesh_diameter_d1_m",
            "fault_duration_s",
            "burial_depth_m",
            "conductor_spacing_m",
        )
        for name in positive:
            v = getattr(self, name)
            if not math.isfinite(v) or v <= 0:
                raise InvalidInputError(f"{name} must be > 0.")
        for name in ("ambient_temp_c", "max_mesh_temp_c", "layer_coefficient_n"):
            if not math.isfinite(getattr(self, name)):
                raise InvalidInputError(f"{name} must be a finite number.")
        for name in ("rho2_ohm_m", "mesh_current_a"):
            v = getattr(self, name)
            if not math.isfinite(v) or v < 0:
                raise InvalidInputError(f"{name} must be >= 0.")
        if isinstance(self.rods, bool) or not isinstance(self.rods, int) or self.rods < 0:
            raise InvalidInputError("rods must be a non-negative integer.")
        if not isinstance(self.soil, SoilType):
            raise InvalidInputError("soil must be a SoilType.")
        if not isinstance(self.conductor, ConductorMaterial):
            raise InvalidInputError("conductor must be a ConductorMaterial.")

    @property
    def area_m2(self) -> float:
        return self.width_m * self.length_m

    @property
    def n_cond_width(self) -> float:
        """Conductor runs along the width axis."""
        return self.width_m / self.conductor_spacing_m

    @property
    def n_cond_length(self) -> float:
        return self.length_m / self.conductor_spacing_m

    @property
    def n_cond_max(self) -> float:
        return max(self.n_cond_length, self.n_cond_width)

    def with_overrides(self, **changes: Any) -> "GridConfig":
        """New config with some fields replaced (validated like any other)."""
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        for f in fields(self):
            v = getattr(self, f.name)
            out[f.name] = v.name.lower() if isinstance(v, (SoilType, ConductorMaterial)) else v
        return out


def _num(section: Mapping[str, Any], key: str, path: str) -> float:
    if key not in section:
        raise InvalidInputError(f"Missing required config key: {path}.{key}")
    try:
        return float(section[key])
    except (TypeError, ValueError):
        raise InvalidInputError(f"{path}.{key} must be a number, got {section[key]!r}") from None


def grid_config_from_mapping(cfg: Mapping[str, Any]) -> GridConfig:
    """
    Build a GridConfig from a sectioned mapping (the YAML / JSON config shape):

      grid:      width_m, length_m, burial_depth_m, conductor_spacing_m, mesh_diameter_d1_m, rods
      soil:      type, rho1_ohm_m, rho2_ohm_m, layer_coefficient_n
      conductor: material, ambient_temp_c, max_temp_c
      fault:     mesh_current_a, duration_s
      design:    min_mesh_resistance_ohm
    """
    def section(name: str) -> Mapping[str, Any]:
        s = cfg.get(name)
        if not isinstance(s, Mapping):
            raise InvalidInputError(f"Missing required config section: {name}")
        return s

    grid = section("grid")
    soil = section("soil")
    cond = section("conductor")
    fault = section("fault")
    design = section("design")

    rods = grid.get("rods")
    if isinstance(rods, float) and rods.is_integer():
        rods = int(rods)
    if isinstance(rods, bool) or not isinstance(rods, int):
        raise InvalidInputError(f"grid.rods must be an integer, got {rods!r}")

    return GridConfig(
        width_m=_num(grid, "width_m", "grid"),
        length_m=_num(grid, "length_m", "grid"),
        burial_depth_m=_num(grid, "burial_depth_m", "grid"),
        conductor_spacing_m=_num(grid, "conductor_spacing_m", "grid"),
        mesh_diameter_d1_m=_num(grid, "mesh_diameter_d1_m", "grid"),
        rods=rods,
        rho1_ohm_m=_num(soil, "rho1_ohm_m", "soil"),
        rho2_ohm_m=_num(soil, "rho2_ohm_m", "soil"),
        layer_coefficient_n=_num(soil, "layer_coefficient_n", "soil"),
        soil=soil_type_from_key(soil.get("type", SoilType.CRUSHED_STONE)),
        ambient_temp_c=_num(cond, "ambient_temp_c", "conductor"),
        max_mesh_temp_c=_num(cond, "max_temp_c", "conductor"),
        conductor=conductor_material_from_key(cond.get("material", ConductorMaterial.COMMERCIAL_COPPER)),
        mesh_current_a=_num(fault, "mesh_current_a", "fault"),
        fault_duration_s=_num(fault, "duration_s", "fault"),
        min_mesh_resistance_ohm=_num(design, "min_mesh_resistance_ohm", "design"),
    )
