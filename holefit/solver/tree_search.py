"""Exact backtracking search over lattice placements.

Algorithm overview:
  1. Order the figure's vertices depth-first (see ``ordering``) so every
     vertex after the first has at least one already-placed neighbour.
  2. Precompute the delta table for the hole and, per edge, the list of
     offsets whose squared length lies inside the edge's bounds.
  3. Place vertices in order.  Each placement propagates its forward
     edges into the successors' grids (see ``propagation``); a successor
     left with no feasible cell cuts the branch.
  4. At a complete placement, run the exact containment test and score
     the pose.  Strict improvements are streamed as snapshots.

Deadline:
  An optional timeout is split evenly across the start vertex's
  candidates.  The clock is read every ``check_interval`` node visits;
  an expired slice (or a closed stream) sets ``terminate``, which unwinds
  every active frame.  The root clears it and moves on to the next
  candidate, unless the consumer cancelled.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Iterator

from holefit.problem import Pose, Problem, contains, dislikes

from .base import Emit, Solver, stream_in_thread
from .deltas import DeltaTable
from .models import RATE_LOG_INTERVAL_S, SolverConfig
from .ordering import build_ordering
from .propagation import PropagationGrid


log = logging.getLogger(__name__)


class TreeSearchSolver(Solver):
    name = "tree_search"

    def solve_gen(
        self,
        problem: Problem,
        pose: Pose | None = None,
        cancel: threading.Event | None = None,
    ) -> Iterator[Pose]:
        start = pose.copy() if pose is not None else problem.initial_pose()
        n = len(problem.figure.vertices)
        if len(start.vertices) != n:
            raise ValueError(
                f"Pose has {len(start.vertices)} vertices, figure has {n}"
            )

        if n == 0:
            yield start
            return
        if n > self.config.max_vertices:
            log.warning(
                "Tree search: problem %s has %d vertices (limit %d) — declined",
                problem.id, n, self.config.max_vertices,
            )
            yield start
            return

        runner = SearchRunner(problem, start, self.config)
        yield from stream_in_thread(
            runner.run,
            maxsize=self.config.stream_buffer,
            name=f"tree-search-{problem.id}",
            cancel=cancel,
        )


class SearchRunner:
    """Owns the working pose and the propagation state of one search."""

    def __init__(self, problem: Problem, pose: Pose, config: SolverConfig) -> None:
        t0 = time.monotonic()
        figure = problem.figure

        self.problem = problem
        self.config = config
        self.pose = pose
        self.n = len(figure.vertices)
        self.hole_len = len(problem.hole)

        self.ordering = build_ordering(figure)
        self.deltas = DeltaTable.for_hole(
            problem.hole, shuffle=config.shuffle_deltas, seed=config.seed,
        )
        self.edge_offsets = [
            self.deltas.offsets(*figure.edge_len2_bounds(i))
            for i in range(len(figure.edges))
        ]
        self.grid = PropagationGrid(problem, self.ordering, self.edge_offsets)

        self.best: int | None = None
        self.terminate = False
        self.visits = 0
        self.total_visits = 0
        self._emit: Emit | None = None
        self._cancelled = threading.Event()
        self._rate_t = t0
        self._rate_visits = 0

        log.info(
            "Tree search: precalc %.3fs — %d vertices, %d edges, max_delta=%d, %dx%d grid",
            time.monotonic() - t0, self.n, len(figure.edges),
            self.deltas.max_delta, problem.width, problem.height,
        )
        log.debug("Tree search: order %s", self.ordering.order)

    # ── Entry point ────────────────────────────────────────────────

    def run(self, emit: Emit, cancelled: threading.Event) -> int | None:
        self._emit = emit
        self._cancelled = cancelled
        self.place(0, None)
        self.total_visits += self.visits
        self.visits = 0
        log.info(
            "Tree search: finished — best dislikes=%s, %d node visits%s",
            self.best, self.total_visits,
            " (cancelled)" if cancelled.is_set() else "",
        )
        return self.best

    # ── Recursion ──────────────────────────────────────────────────

    def place(self, index: int, deadline: float | None) -> int | None:
        """Place ``order[index:]``; return the best dislikes seen so far."""
        if self.terminate:
            return self.best

        self.visits += 1
        if self.visits >= self.config.check_interval:
            self._check_clock(deadline)
            if self.terminate:
                return self.best

        if index == self.n:
            return self._evaluate()

        grid = self.grid
        slack = self.config.coverage_slack
        if slack is not None and self.n - index + slack < self.hole_len - grid.covered:
            return self.best

        v = self.ordering.order[index]
        candidates = grid.places[v]
        verts = self.pose.vertices
        saved = verts[v]

        root_slice = None
        if index == 0 and self.config.timeout_s is not None and candidates:
            root_slice = self.config.timeout_s / len(candidates)

        try:
            for x, y in candidates:
                if index == 0:
                    log.info("Tree search: root vertex %d at (%d, %d)", v, x, y)
                    if root_slice is not None:
                        deadline = time.monotonic() + root_slice
                else:
                    log.debug("Placed vertex %d at (%d, %d)", v, x, y)

                verts[v] = (x, y)
                grid.cover(x, y)
                applied, feasible = grid.propagate(v, x, y)
                if feasible:
                    self.place(index + 1, deadline)
                grid.uncover(x, y)
                grid.retract(v, x, y, applied)

                if self.best == 0:
                    break
                if self.terminate:
                    if index == 0 and not self._cancelled.is_set():
                        self.terminate = False
                        continue
                    break
        finally:
            verts[v] = saved
        return self.best

    def _evaluate(self) -> int | None:
        if not contains(self.problem, self.pose):
            return self.best
        score = dislikes(self.problem, self.pose)
        if self.best is None or score < self.best:
            self.best = score
            log.info("Tree search: found better placement, dislikes=%d", score)
            self._emit(self.pose.copy())
            if self._cancelled.is_set():
                self.terminate = True
        return self.best

    def _check_clock(self, deadline: float | None) -> None:
        self.total_visits += self.visits
        self._rate_visits += self.visits
        self.visits = 0

        now = time.monotonic()
        if self._cancelled.is_set() or (deadline is not None and now >= deadline):
            self.terminate = True

        elapsed = now - self._rate_t
        if elapsed >= RATE_LOG_INTERVAL_S:
            log.info(
                "Tree search: %.0f node visits/s (best=%s)",
                self._rate_visits / elapsed, self.best,
            )
            self._rate_t = now
            self._rate_visits = 0
