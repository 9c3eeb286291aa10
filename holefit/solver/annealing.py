"""Simulated annealing over single-vertex lattice moves.

Energy of a pose (lower is better):

    dislikes
    + w_outside × Σ distance of each vertex to the hole (0 when inside)
    + w_stretch × Σ squared-length overshoot of each edge beyond its bounds
    + w_cross   × Σ length of each edge lying outside the hole

A move shifts one random vertex by a random offset of at most ``step``
in each axis; ``step`` shrinks linearly from ``annealing_max_step`` to 1.
Moves are accepted with the Metropolis rule under a temperature that
decays geometrically from ``annealing_t0`` to ``annealing_t1``.  Only
the vertex's own terms are recomputed per move, plus the dislikes.
"""

from __future__ import annotations

import logging
import math
import random
import threading
from typing import Iterator

from holefit.problem import (
    Pose, Problem, dislikes, edge_outside_length, edge_overshoot, min_distance_to,
)

from .base import Solver
from .models import SolverConfig


log = logging.getLogger(__name__)


def energy(problem: Problem, pose: Pose, config: SolverConfig) -> float:
    """Total annealing energy of *pose*."""
    verts = pose.vertices
    total = float(dislikes(problem, pose))
    total += config.w_outside * sum(min_distance_to(problem, p) for p in verts)
    for i, e in enumerate(problem.figure.edges):
        total += config.w_stretch * edge_overshoot(problem, pose, i)
        total += config.w_cross * edge_outside_length(problem, verts[e.v0], verts[e.v1])
    return total


def _vertex_terms(problem: Problem, pose: Pose, v: int, config: SolverConfig) -> float:
    """The part of the energy that depends on vertex *v*, except dislikes."""
    verts = pose.vertices
    total = config.w_outside * min_distance_to(problem, verts[v])
    for edge_index, other in problem.figure.vertex_edges[v]:
        total += config.w_stretch * edge_overshoot(problem, pose, edge_index)
        total += config.w_cross * edge_outside_length(problem, verts[v], verts[other])
    return total


class AnnealingSolver(Solver):
    name = "annealing"

    def solve_gen(
        self,
        problem: Problem,
        pose: Pose | None = None,
        cancel: threading.Event | None = None,
    ) -> Iterator[Pose]:
        cfg = self.config
        current = pose.copy() if pose is not None else problem.initial_pose()
        n = len(current.vertices)
        if n == 0 or cfg.annealing_iterations <= 0:
            return

        rng = random.Random(cfg.seed)
        iterations = cfg.annealing_iterations
        cooling = cfg.annealing_t1 / cfg.annealing_t0

        e_cur = energy(problem, current, cfg)
        e_best = e_cur
        log.info("Annealing: start energy %.1f, %d iterations", e_cur, iterations)

        for it in range(iterations):
            if cancel is not None and cancel.is_set():
                log.info("Annealing: cancelled at iteration %d", it)
                return
            frac = it / iterations
            temperature = cfg.annealing_t0 * cooling ** frac
            step = max(1, math.ceil(cfg.annealing_max_step * (1.0 - frac)))

            v = rng.randrange(n)
            dx = rng.randint(-step, step)
            dy = rng.randint(-step, step)
            if dx == 0 and dy == 0:
                continue

            old = current.vertices[v]
            before = dislikes(problem, current) + _vertex_terms(problem, current, v, cfg)
            current.vertices[v] = (old[0] + dx, old[1] + dy)
            after = dislikes(problem, current) + _vertex_terms(problem, current, v, cfg)
            delta = after - before

            if delta <= 0 or rng.random() < math.exp(-delta / temperature):
                e_cur += delta
                if e_cur < e_best - 1e-9:
                    e_best = e_cur
                    log.debug("Annealing: iteration %d, best energy %.1f", it, e_best)
                    yield current.copy()
            else:
                current.vertices[v] = old

        log.info("Annealing: finished, best energy %.1f", e_best)
