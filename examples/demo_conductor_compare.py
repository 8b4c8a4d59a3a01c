"""
Demo: compare conductor materials for the same fault current and duration.

Higher-resistivity materials (steel, stainless) need a much larger section for
the same thermal duty, which also raises Km through the conductor diameter.
"""

from grounding_engine.analysis.conductor_sizing import (
    cable_diameter,
    cable_section,
    format_conductor_summary,
)
from grounding_engine.analysis.mesh_factors import km_factor
from grounding_engine.models.grid_config import GridConfig
from grounding_engine.models.reference_tables import ConductorMaterial, lookup_conductor


def main():
    base = GridConfig()
    print(format_conductor_summary(base))

    header = "material".ljust(34) + " | section_mm2 | diameter_mm | Km"
    print("\n" + header)
    print("-" * len(header))
    for material in ConductorMaterial:
        cfg = base.with_overrides(conductor=material)
        print(
            lookup_conductor(material).label.ljust(34)
            + f" | {cable_section(cfg):11.4f} | {cable_diameter(cfg) * 1000.0:11.4f} | {km_factor(cfg):.4f}"
        )
    print()


if __name__ == "__main__":
    main()
