"""Wave relaxation — repair edge lengths by moving one endpoint at a time.

Passes alternate between pushing the endpoint nearer the hole's centre
outward and pulling the farther one inward.  For each edge whose squared
length is out of bounds, the moving endpoint is tried at eight rotations
of the edge vector, stretched slightly past the nominal length so edges
keep moving; the in-hole candidate with the smallest summed length error
over the vertex's edges wins.
"""

from __future__ import annotations

import logging
import math
import threading
from typing import Iterator

from holefit.geometry import Point, squared_distance
from holefit.problem import EdgeStatus, Pose, Problem, edge_status, validate

from .base import Solver
from .jammer import box_center


log = logging.getLogger(__name__)

ROTATIONS = 8
OVERSHOOT = 0.1     # fraction of the length error added past the target


def length_error(problem: Problem, pose: Pose, v: int) -> int:
    """Σ |squared length - nominal squared length| over the edges of *v*."""
    figure = problem.figure
    total = 0
    for edge_index, other in figure.vertex_edges[v]:
        d = squared_distance(pose.vertices[v], pose.vertices[other])
        total += abs(d - figure.edges[edge_index].len2)
    return total


class WaveSolver(Solver):
    name = "wave"

    def solve_gen(
        self,
        problem: Problem,
        pose: Pose | None = None,
        cancel: threading.Event | None = None,
    ) -> Iterator[Pose]:
        current = pose.copy() if pose is not None else problem.initial_pose()
        figure = problem.figure
        center = box_center(problem)
        to_center = True

        for iteration in range(self.config.wave_iterations):
            if cancel is not None and cancel.is_set():
                return
            if validate(problem, current):
                log.info("Wave: valid after %d passes", iteration)
                break

            for idx, e in enumerate(figure.edges):
                if edge_status(problem, current, idx) is EdgeStatus.OK:
                    continue

                d0 = squared_distance(current.vertices[e.v0], center)
                d1 = squared_distance(current.vertices[e.v1], center)
                if (d0 > d1) != to_center:
                    dyn, stat = e.v1, e.v0
                else:
                    dyn, stat = e.v0, e.v1

                sx, sy = current.vertices[stat]
                vx = current.vertices[dyn][0] - sx
                vy = current.vertices[dyn][1] - sy
                base_len = math.hypot(vx, vy)
                target_len = math.sqrt(e.len2)
                rho = target_len + (target_len - base_len) * OVERSHOOT
                phi = math.atan2(vy, vx)

                old = current.vertices[dyn]
                best: Point = old
                best_err: int | None = None
                for k in range(1, ROTATIONS + 1):
                    angle = phi + k * math.pi / 4
                    p = (round(sx + rho * math.cos(angle)), round(sy + rho * math.sin(angle)))
                    if not problem.contains_point(p):
                        continue
                    current.vertices[dyn] = p
                    err = length_error(problem, current, dyn)
                    if best_err is None or err < best_err:
                        best, best_err = p, err
                current.vertices[dyn] = best
                log.debug("Wave: edge %d, vertex %d %s -> %s", idx, dyn, old, best)
                yield current.copy()

            to_center = not to_center

        yield current.copy()
