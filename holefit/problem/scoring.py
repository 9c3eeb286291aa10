"""Pose evaluation — containment, edge lengths and the dislikes score.

Every function here is pure and deterministic: it reads the problem
and the pose and never mutates either, so an editor can call them after
every manual edit.
"""

from __future__ import annotations

import math

from shapely.geometry import LineString, Point as ShapelyPoint

from holefit.geometry import Point, squared_distance

from .models import EdgeStatus, Pose, Problem


def dislikes(problem: Problem, pose: Pose) -> int:
    """Sum over hole vertices of the squared distance to the nearest pose vertex.

    Distances are summed as floats and the total is truncated (not
    rounded) to an integer.  A pose without vertices scores 0.
    """
    total = 0.0
    verts = pose.vertices
    if not verts:
        return 0
    for hx, hy in problem.hole:
        best = math.inf
        for px, py in verts:
            d = float(px - hx) ** 2 + float(py - hy) ** 2
            if d < best:
                best = d
        total += best
    return math.trunc(total)


def point_inside(problem: Problem, p: Point) -> bool:
    """Full-precision polygon test (interior or boundary)."""
    return problem.prepared.covers(ShapelyPoint(p[0], p[1]))


def segment_inside(problem: Problem, a: Point, b: Point) -> bool:
    """Is the whole segment a–b covered by the hole, boundary included?"""
    if a == b:
        return point_inside(problem, a)
    return problem.prepared.covers(LineString([a, b]))


def contains(problem: Problem, pose: Pose) -> bool:
    """Every vertex and every edge segment lies inside or on the hole."""
    verts = pose.vertices
    for p in verts:
        if not problem.contains_point(p):
            return False
    for e in problem.figure.edges:
        if not segment_inside(problem, verts[e.v0], verts[e.v1]):
            return False
    return True


def edge_status(problem: Problem, pose: Pose, idx: int) -> EdgeStatus:
    """Classify edge *idx* of the pose against its integer length bounds."""
    e = problem.figure.edges[idx]
    lo, hi = problem.figure.edge_len2_bounds(idx)
    d = squared_distance(pose.vertices[e.v0], pose.vertices[e.v1])
    if d < lo:
        return EdgeStatus.TOO_SHORT
    if d > hi:
        return EdgeStatus.TOO_LONG
    return EdgeStatus.OK


def correct_length(problem: Problem, pose: Pose) -> bool:
    return all(
        edge_status(problem, pose, i) is EdgeStatus.OK
        for i in range(len(problem.figure.edges))
    )


def validate(problem: Problem, pose: Pose) -> bool:
    """Full validity: right vertex count, containment and edge lengths."""
    if len(pose.vertices) != len(problem.figure.vertices):
        return False
    return contains(problem, pose) and correct_length(problem, pose)


# ── Soft measures (used by the heuristic solvers) ──────────────────


def min_distance_to(problem: Problem, p: Point) -> float:
    """0 for points covered by the hole, else the Euclidean distance to it."""
    if problem.contains_point(p):
        return 0.0
    return problem.poly.distance(ShapelyPoint(p[0], p[1]))


def edge_outside_length(problem: Problem, a: Point, b: Point) -> float:
    """Length of the part of segment a–b lying outside the hole."""
    if a == b or segment_inside(problem, a, b):
        return 0.0
    return LineString([a, b]).difference(problem.poly).length


def edge_overshoot(problem: Problem, pose: Pose, idx: int) -> int:
    """How far the squared length of edge *idx* lies outside its bounds."""
    e = problem.figure.edges[idx]
    lo, hi = problem.figure.edge_len2_bounds(idx)
    d = squared_distance(pose.vertices[e.v0], pose.vertices[e.v1])
    if d < lo:
        return lo - d
    if d > hi:
        return d - hi
    return 0
