"""Pose transforms for manual editing.

All functions return a new Pose and leave their input untouched.
Coordinates stay on the integer lattice; ``fold`` rounds the mirrored
points to the nearest lattice point.
"""

from __future__ import annotations

from holefit.problem import Figure, Pose


def translate(pose: Pose, dx: int, dy: int) -> Pose:
    out = pose.copy()
    out.vertices = [(x + dx, y + dy) for x, y in pose.vertices]
    return out


def rotate90(pose: Pose, pivot: int, turns: int = 1) -> Pose:
    """Rotate the whole pose by ``turns`` quarter turns about vertex *pivot*.

    One turn maps the offset ``(dx, dy)`` from the pivot to ``(-dy, dx)``.
    """
    cx, cy = pose.vertices[pivot]
    out = pose.copy()
    verts = []
    for x, y in pose.vertices:
        dx, dy = x - cx, y - cy
        for _ in range(turns % 4):
            dx, dy = -dy, dx
        verts.append((cx + dx, cy + dy))
    out.vertices = verts
    return out


def flip(pose: Pose, pivot: int, axis: str = "vertical") -> Pose:
    """Mirror the pose about the vertical or horizontal line through *pivot*."""
    if axis not in ("vertical", "horizontal"):
        raise ValueError(f"axis must be 'vertical' or 'horizontal', got {axis!r}")
    cx, cy = pose.vertices[pivot]
    out = pose.copy()
    if axis == "vertical":
        out.vertices = [(2 * cx - x, y) for x, y in pose.vertices]
    else:
        out.vertices = [(x, 2 * cy - y) for x, y in pose.vertices]
    return out


def components_without(figure: Figure, removed: set[int]) -> list[int]:
    """Connected-component id per vertex once *removed* are cut out.

    Removed vertices get component 0; the others are numbered from 1 in
    order of their lowest vertex index.
    """
    n = len(figure.vertices)
    comp = [-1] * n
    for v in removed:
        comp[v] = 0
    next_id = 1
    for root in range(n):
        if comp[root] != -1:
            continue
        comp[root] = next_id
        stack = [root]
        while stack:
            u = stack.pop()
            for _, w in figure.vertex_edges[u]:
                if comp[w] == -1:
                    comp[w] = next_id
                    stack.append(w)
        next_id += 1
    return comp


def fold(figure: Figure, pose: Pose, v1: int, v2: int, vcomp: int) -> Pose:
    """Mirror the component holding *vcomp* across the line through *v1* and *v2*.

    Components are taken in the figure graph with *v1* and *v2* removed,
    so the fold line's own vertices never move.
    """
    if v1 == v2:
        raise ValueError("fold needs two distinct vertices to define the line")
    x1, y1 = pose.vertices[v1]
    x2, y2 = pose.vertices[v2]
    ax, ay = x2 - x1, y2 - y1
    norm = ax * ax + ay * ay
    if norm == 0:
        raise ValueError(f"vertices {v1} and {v2} coincide; fold line undefined")

    comp = components_without(figure, {v1, v2})
    target = comp[vcomp]
    out = pose.copy()
    if target == 0:
        return out

    verts = list(pose.vertices)
    for u, (x, y) in enumerate(pose.vertices):
        if comp[u] != target:
            continue
        bx, by = x - x1, y - y1
        t = (ax * bx + ay * by) / norm
        # reflection: 2 * projection - b
        rx = 2 * t * ax - bx
        ry = 2 * t * ay - by
        verts[u] = (x1 + round(rx), y1 + round(ry))
    out.vertices = verts
    return out
