"""
Demo: evaluate the reference substation grid formula by formula.

Order matters:
- conductor diameter (from the thermal section) feeds Km
- the grid sizing search feeds the total conductor length, which feeds the mesh voltages
- GPR is evaluated on a config whose length is the total conductor length
"""

from grounding_engine.analysis.conductor_sizing import cable_diameter, cable_section
from grounding_engine.analysis.ground_resistance import ground_resistance
from grounding_engine.analysis.grid_sizing import mesh_calc
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
from grounding_engine.models.reference_tables import ConductorMaterial, SoilType


def main():
    cfg = GridConfig(soil=SoilType.CRUSHED_STONE, conductor=ConductorMaterial.COMMERCIAL_COPPER)

    alpha, beta, rho_a = apparent_resistivity(cfg)
    print("Apparent resistivity (commercial copper, crushed stone)")
    print(f"  alpha: {alpha:.4f}  beta: {beta:.4f}  rho_a: {rho_a:.1f} ohm-m")
    print(f"Conductor section [mm2]:   {cable_section(cfg):.6f}")
    print(f"Conductor diameter [m]:    {cable_diameter(cfg):.8f}")
    print(f"Correction factor Cs:      {correction_factor(cfg):.6f}")
    print(f"Tolerable touch 50kg [V]:  {touch_voltage_50kg(cfg):.2f}")
    print(f"Tolerable step 50kg [V]:   {step_voltage_50kg(cfg):.2f}")
    print(f"Km: {km_factor(cfg):.6f}  Ki: {ki_factor(cfg):.6f}  Ks: {ks_factor(cfg):.6f}")

    side = mesh_calc(cfg)
    lt = side + cfg.rods * ROD_EQUIVALENT_LENGTH_M
    print(f"Mesh touch voltage [V]:    {touch_voltage_mesh(cfg, total_length_m=lt):.2f}")
    print(f"Mesh step voltage [V]:     {step_voltage_mesh(cfg, total_length_m=lt):.2f}")
    print(f"Sized grid side [m]:       {side:.0f}")
    print(f"Total conductors [m]:      {lt:.0f}")

    final = cfg.with_overrides(length_m=lt)
    print(f"Ground resistance [ohm]:   {ground_resistance(final):.6f}")
    print(f"GPR [V]:                   {gpr(final):.2f}")


if __name__ == "__main__":
    main()
