"""
Geometry tuning knobs.
Safe to tweak without touching the grid code.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class GridSettings:
    """Numeric tolerances shared by the grid implementations."""

    # Projections must overlap by more than this to count as intersecting,
    # so cells that only touch a rectangle edge are excluded.
    intersect_epsilon: float = 1e-9

    # Cube-space offset added to both ends of a hex line so interpolated
    # points never land exactly on a rounding tie.
    hex_line_nudge: tuple[float, float, float] = (1e-6, 2e-6, -3e-6)

    # Inradius of the unit grid triangle paths are interpolated on.
    path_unit_inradius: float = 1.0


# Global settings instance used throughout the package
SETTINGS = GridSettings()
