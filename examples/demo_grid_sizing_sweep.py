"""
Demo: sweep the target ground resistance and see the required grid side.

Lower targets need larger grids; below roughly 2 * 0.001 * rho2 the target
cannot be met at any size and the search reports it as not sizable.
"""

from grounding_engine.analysis.grid_sizing import mesh_calc
from grounding_engine.errors import GridNotSizableError
from grounding_engine.models.grid_config import GridConfig


def main():
    base = GridConfig()
    targets = [10.0, 5.0, 2.78, 2.0, 1.5, 1.0, 0.9, 0.79]

    print(f"\nGrid sizing sweep (rho2={base.rho2_ohm_m:.0f} ohm-m, depth={base.burial_depth_m:.2f} m)\n")
    header = "target_ohm | side_m"
    print(header)
    print("-" * len(header))

    for target in targets:
        cfg = base.with_overrides(min_mesh_resistance_ohm=target)
        try:
            side = f"{mesh_calc(cfg, max_side_m=20000.0):.0f}"
        except GridNotSizableError:
            side = "not sizable (> 20000 m)"
        print(f"{target:10.2f} | {side}")
    print()


if __name__ == "__main__":
    main()
