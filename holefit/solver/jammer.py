"""Jammer — drag vertices lying outside the hole toward its centre."""

from __future__ import annotations

import logging
import threading
from typing import Iterator

from holefit.geometry import Point
from holefit.problem import Pose, Problem

from .base import Solver


log = logging.getLogger(__name__)


def box_center(problem: Problem) -> Point:
    """Integer centre of the hole's bounding box."""
    return (
        problem.min_x + (problem.max_x - problem.min_x) // 2,
        problem.min_y + (problem.max_y - problem.min_y) // 2,
    )


def step_toward(p: Point, center: Point) -> Point:
    """One lattice step toward *center* along the dominant axis."""
    x, y = p
    cx, cy = center
    if abs(x - cx) < abs(y - cy):
        return (x, y - 1) if y > cy else (x, y + 1)
    if x > cx:
        return (x - 1, y)
    if x < cx:
        return (x + 1, y)
    return p


class JammerSolver(Solver):
    """Moves every uncovered vertex in, one vertex at a time.

    Edge lengths are ignored; run a second solver afterwards (see
    ``ChainSolver``) to repair them.
    """

    name = "jammer"

    def solve_gen(
        self,
        problem: Problem,
        pose: Pose | None = None,
        cancel: threading.Event | None = None,
    ) -> Iterator[Pose]:
        current = pose.copy() if pose is not None else problem.initial_pose()
        center = box_center(problem)
        max_steps = self.config.jammer_max_steps

        for v, start in enumerate(list(current.vertices)):
            if cancel is not None and cancel.is_set():
                return
            if problem.contains_point(start):
                continue
            p = start
            for _ in range(max_steps):
                nxt = step_toward(p, center)
                if nxt == p:
                    break
                p = nxt
                if problem.contains_point(p):
                    break
            if not problem.contains_point(p):
                log.debug("Jammer: vertex %d did not reach the hole from %s", v, start)
                continue
            log.debug("Jammer: vertex %d moved %s -> %s", v, start, p)
            current.vertices[v] = p
            yield current.copy()
