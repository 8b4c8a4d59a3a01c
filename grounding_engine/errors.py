"""
Error types raised by the grounding engine.

- InvalidInputError: a precondition on the configuration or a formula input is violated
  (would otherwise produce log of a non-positive value, sqrt of a negative, or a zero divisor).
- GridNotSizableError: the grid-sizing search reached its side-length bound without meeting
  the target ground resistance for this soil/depth.
"""

from __future__ import annotations


class InvalidInputError(ValueError):
    pass


class GridNotSizableError(RuntimeError):
    def __init__(self, target_ohm: float, max_side_m: float, last_resistance_ohm: float):
        self.target_ohm = float(target_ohm)
        self.max_side_m = float(max_side_m)
        self.last_resistance_ohm = float(last_resistance_ohm)
        super().__init__(
            f"Cannot size a grid for Rg <= {self.target_ohm:.4g} ohm within {self.max_side_m:.0f} m "
            f"(last trial Rg = {self.last_resistance_ohm:.4g} ohm)."
        )
