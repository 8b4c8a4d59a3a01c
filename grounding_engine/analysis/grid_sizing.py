"""
Grid sizing search (after IEEE Std 80-2013, Figure 32 design procedure).

Finds the minimum square grid side (m) whose ground resistance meets the design target:
- start with a 1 m x 1 m trial grid
- grow width and length together in 1 m steps while Rg(trial) > target
- give up once the side exceeds max_side_m (default 1,000,000 m)

Rg decreases monotonically with the side for fixed rho2 and depth, so the first side that
meets the target is the minimum. Some targets are not reachable at all: Rg of a large grid
approaches 2 * 0.001 * rho2 because of the term floors in ground_resistance.

Trial grids use the trial area (width*length recomputed for each side).
"""

from __future__ import annotations

import logging
import math
from typing import Tuple

import numpy as np

from grounding_engine.analysis.ground_resistance import ground_resistance_for_geometry
from grounding_engine.errors import GridNotSizableError, InvalidInputError
from grounding_engine.models.grid_config import GridConfig


logger = logging.getLogger(__name__)

MAX_GRID_SIDE_M = 1_000_000.0
_START_SIDE_M = 1.0
_SIDE_STEP_M = 1.0


def check_side_bound(max_side_m: float, name: str = "max_side_m") -> float:
    """Search/sweep bound as a float in [1, MAX_GRID_SIDE_M]; anything else is rejected."""
    try:
        bound = float(max_side_m)
    except (TypeError, ValueError):
        raise InvalidInputError(f"{name} must be a number, got {max_side_m!r}") from None
    if not math.isfinite(bound) or not _START_SIDE_M <= bound <= MAX_GRID_SIDE_M:
        raise InvalidInputError(f"{name} must be between 1 and {MAX_GRID_SIDE_M:.0f} m.")
    return bound


def mesh_calc(cfg: GridConfig, max_side_m: float = MAX_GRID_SIDE_M) -> float:
    """
    Minimum square grid side (m) with Rg <= cfg.min_mesh_resistance_ohm.

    Equivalent to evaluating ground_resistance(cfg.with_overrides(width_m=s, length_m=s))
    for s = 1, 2, 3, ...; only the geometry changes between trials, so the trial
    configs are not materialized.

    Raises GridNotSizableError if no side up to max_side_m meets the target, and
    InvalidInputError if max_side_m is outside [1, MAX_GRID_SIDE_M].
    """
    max_side_m = check_side_bound(max_side_m)
    target = cfg.min_mesh_resistance_ohm
    rho2 = cfg.rho2_ohm_m
    depth = cfg.burial_depth_m

    side = _START_SIDE_M
    res = ground_resistance_for_geometry(rho2, depth, side, side)

    while res > target:
        side += _SIDE_STEP_M
        if side > max_side_m:
            logger.warning(
                "Grid not sizable: Rg=%.6g ohm at side %.0f m still above target %.6g ohm",
                res, side - _SIDE_STEP_M, target,
            )
            raise GridNotSizableError(target_ohm=target, max_side_m=max_side_m, last_resistance_ohm=res)
        res = ground_resistance_for_geometry(rho2, depth, side, side)

    logger.debug("Grid sized: side=%.0f m, Rg=%.6g ohm (target %.6g ohm)", side, res, target)
    return side


def resistance_curve(cfg: GridConfig, max_side_m: float = 400.0) -> Tuple[np.ndarray, np.ndarray]:
    """
    Rg of square trial grids for sides 1..max_side_m (1 m steps), as (sides, resistances).
    Same trial rule as mesh_calc; used for plotting and sensitivity tables.
    """
    max_side_m = check_side_bound(max_side_m)
    sides = np.arange(_START_SIDE_M, max_side_m + _SIDE_STEP_M, _SIDE_STEP_M)
    rg = np.array(
        [ground_resistance_for_geometry(cfg.rho2_ohm_m, cfg.burial_depth_m, s, s) for s in sides],
        dtype=float,
    )
    return sides, rg
