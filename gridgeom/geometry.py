"""Polygon helpers shared by the sized grids."""
from __future__ import annotations

from typing import List, Sequence, Tuple

import numpy as np

from .settings import SETTINGS


_RECT_AXES = np.array([[1.0, 0.0], [0.0, 1.0]])


def vertices_to_edges(vertices: Sequence) -> List[Tuple]:
    """Pair each vertex with its successor, closing the loop."""
    n = len(vertices)
    if n < 3:
        raise ValueError("polygon must have at least 3 vertices")
    return [(vertices[i], vertices[(i + 1) % n]) for i in range(n)]


def polygon_axes(vertices: Sequence) -> np.ndarray:
    """Unit normals of every non-degenerate polygon edge."""
    poly = np.asarray(vertices, dtype=float)
    edges = np.roll(poly, -1, axis=0) - poly
    normals = np.column_stack((-edges[:, 1], edges[:, 0]))
    lengths = np.linalg.norm(normals, axis=1)
    keep = lengths > 0.0
    return normals[keep] / lengths[keep, None]


def convex_poly_intersects_rect(
    vertices: Sequence,
    rect_min: Sequence[float],
    rect_max: Sequence[float],
    epsilon: float | None = None,
) -> bool:
    """Separating axis test between a convex polygon and an axis-aligned rectangle.

    Projections must overlap by more than ``epsilon`` on every candidate axis,
    so a polygon that only touches the rectangle does not intersect it.
    """
    if epsilon is None:
        epsilon = SETTINGS.intersect_epsilon

    poly = np.asarray(vertices, dtype=float)
    if len(poly) < 3:
        raise ValueError("polygon must have at least 3 vertices")
    (x0, y0), (x1, y1) = rect_min, rect_max
    corners = np.array([[x0, y0], [x1, y0], [x1, y1], [x0, y1]], dtype=float)

    axes = np.vstack((_RECT_AXES, polygon_axes(poly)))
    poly_proj = poly @ axes.T
    rect_proj = corners @ axes.T

    overlap = (poly_proj.max(axis=0) > rect_proj.min(axis=0) + epsilon) & (
        rect_proj.max(axis=0) > poly_proj.min(axis=0) + epsilon
    )
    return bool(overlap.all())
