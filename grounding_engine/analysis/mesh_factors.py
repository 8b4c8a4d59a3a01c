"""
Mesh geometric factors for the mesh and step voltage equations (IEEE Std 80-2013).

- Km: spacing factor for mesh voltage (Eq. 86)
- Ki: irregularity factor (Eq. 94 form used here: 0.644 + 0.148 * sqrt(nW * nL))
- Ks: spacing factor for step voltage (Eq. 99)

n is the larger of the two conductor-run counts (width axis / length axis).
Km uses the conductor diameter from the thermal sizing, so it depends on fault
current and material as well as on geometry.
"""

from __future__ import annotations

import math

from grounding_engine.analysis.conductor_sizing import cable_diameter
from grounding_engine.errors import InvalidInputError
from grounding_engine.models.grid_config import GridConfig


# h0, grid reference depth fixed by the standard
_REFERENCE_DEPTH_M = 1.0


def km_factor(cfg: GridConfig) -> float:
    """
    Km = 1/(2*pi) * [ ln( D^2/(16*h*d) + (D+2h)^2/(8*D*d) - h/(4*d) ) + Kii/Kh * ln( 8/(pi*(2n-1)) ) ]

      Kii = (2n)^(-2/n)
      Kh  = sqrt(1 + h/h0)
    """
    d = cable_diameter(cfg)
    n = cfg.n_cond_max
    h = cfg.burial_depth_m
    D = cfg.conductor_spacing_m

    if 2.0 * n - 1.0 <= 0:
        raise InvalidInputError(
            f"Km needs at least half a conductor run per axis (n={n:.4g}); check conductor_spacing_m vs grid size."
        )
    if d <= 0:
        raise InvalidInputError("Km needs a conductor diameter > 0 (mesh_current_a must be > 0).")

    kii = math.pow(2.0 * n, -2.0 / n)
    kh = math.sqrt(1.0 + h / _REFERENCE_DEPTH_M)

    t1 = (D * D) / (16.0 * h * d)
    t2 = ((D + 2.0 * h) * (D + 2.0 * h)) / (8.0 * D * d)
    t3 = h / (4.0 * d)

    spacing_term = t1 + t2 - t3
    if spacing_term <= 0:
        raise InvalidInputError("Km spacing term is not positive; burial depth too large for this conductor spacing.")

    return (1.0 / (2.0 * math.pi)) * (math.log(spacing_term) + (kii / kh) * math.log(8.0 / (math.pi * (2.0 * n - 1.0))))


def ki_factor(cfg: GridConfig) -> float:
    return 0.644 + 0.148 * math.sqrt(cfg.n_cond_width * cfg.n_cond_length)


def ks_factor(cfg: GridConfig) -> float:
    n = cfg.n_cond_max
    h = cfg.burial_depth_m
    D = cfg.conductor_spacing_m

    p1 = (1.0 / math.pi) * (1.0 / (2.0 * h))
    p2 = 1.0 / (D + h)
    p3 = (1.0 / D) * math.pow(0.5, n - 2.0)

    return p1 + p2 + p3
