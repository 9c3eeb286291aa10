"""
Pure-Python polygon geometry utilities.

All coordinates are integer lattice points, origin top-left as in the
problem files, X = column, Y = row.
"""

from __future__ import annotations

from typing import Sequence

Point = tuple[int, int]  # (x, y)
Hole = Sequence[Point]


# ── core primitives ─────────────────────────────────────────────────


def squared_distance(p: Point, q: Point) -> int:
    """Exact squared Euclidean distance between two lattice points."""
    dx = p[0] - q[0]
    dy = p[1] - q[1]
    return dx * dx + dy * dy


def polygon_area(hole: Hole) -> float:
    """Signed area via shoelace formula (positive = CCW)."""
    n = len(hole)
    if n < 3:
        return 0.0
    area = 0
    for i in range(n):
        x0, y0 = hole[i]
        x1, y1 = hole[(i + 1) % n]
        area += x0 * y1 - x1 * y0
    return area / 2.0


def polygon_bounds(hole: Hole) -> tuple[int, int, int, int]:
    """Return (min_x, min_y, max_x, max_y)."""
    xs = [p[0] for p in hole]
    ys = [p[1] for p in hole]
    return min(xs), min(ys), max(xs), max(ys)


def max_squared_extent(hole: Hole) -> int:
    """Largest squared distance between any two polygon vertices.

    This is the squared diameter of the polygon: no two points covered
    by it can be further apart.
    """
    best = 0
    for p in hole:
        for q in hole:
            d = squared_distance(p, q)
            if d > best:
                best = d
    return best


# ── segment intersection ───────────────────────────────────────────


def _cross(o: Point, a: Point, b: Point) -> int:
    return (a[0] - o[0]) * (b[1] - o[1]) - (a[1] - o[1]) * (b[0] - o[0])


def _on_segment(p: Point, q: Point, r: Point) -> bool:
    return (min(p[0], r[0]) <= q[0] <= max(p[0], r[0]) and
            min(p[1], r[1]) <= q[1] <= max(p[1], r[1]))


def segments_intersect(a1: Point, a2: Point, b1: Point, b2: Point) -> bool:
    """Check if segments (a1-a2) and (b1-b2) intersect or touch."""
    d1 = _cross(b1, b2, a1)
    d2 = _cross(b1, b2, a2)
    d3 = _cross(a1, a2, b1)
    d4 = _cross(a1, a2, b2)
    if ((d1 > 0 and d2 < 0) or (d1 < 0 and d2 > 0)) and \
       ((d3 > 0 and d4 < 0) or (d3 < 0 and d4 > 0)):
        return True
    if d1 == 0 and _on_segment(b1, a1, b2):
        return True
    if d2 == 0 and _on_segment(b1, a2, b2):
        return True
    if d3 == 0 and _on_segment(a1, b1, a2):
        return True
    if d4 == 0 and _on_segment(a1, b2, a2):
        return True
    return False


def is_self_intersecting(hole: Hole) -> bool:
    """O(n²) edge-crossing check between non-adjacent polygon edges."""
    n = len(hole)
    for i in range(n):
        a1, a2 = hole[i], hole[(i + 1) % n]
        for j in range(i + 2, n):
            if i == 0 and j == n - 1:
                continue  # adjacent edges
            b1, b2 = hole[j], hole[(j + 1) % n]
            if segments_intersect(a1, a2, b1, b2):
                return True
    return False


# ── hole validation ────────────────────────────────────────────────


def validate_hole(hole: Hole) -> list[str]:
    """
    Validate a hole polygon for use by the solvers.

    Only simple polygons are supported.  Returns a list of error
    strings (empty = valid).
    """
    errors: list[str] = []

    if len(hole) < 3:
        errors.append(f"Hole has only {len(hole)} vertices, need at least 3.")
        return errors

    for i, p in enumerate(hole):
        if p == hole[(i + 1) % len(hole)]:
            errors.append(f"Hole vertex {i} at {p} repeats the next vertex.")

    if polygon_area(hole) == 0:
        errors.append("Hole polygon has zero area.")

    if is_self_intersecting(hole):
        errors.append("Hole polygon has self-intersecting edges.")

    return errors
