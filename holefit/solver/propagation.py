"""Propagation grids — per-vertex feasibility counters over the hole's bounding box.

Every vertex owns a slice of one flat ``bytearray``; cell ``(gx, gy)`` of
vertex ``v`` lives at ``v * stride + gy * width + gx``.  A slice starts as
a copy of the problem's inside grid (1 = the "inside the hole" constraint
holds) and each placed predecessor adds 1 to every cell its edge can
reach.  A cell is feasible for ``v`` once its counter equals
``1 + edges_consumed[v]``.

Placing and un-placing are strictly paired: ``retract`` undoes exactly
what ``propagate`` did, and ``uncover`` undoes ``cover``.
"""

from __future__ import annotations

from holefit.geometry import Point
from holefit.problem import Problem

from .ordering import Ordering


class PropagationGrid:
    """Reversible constraint-propagation state for one search."""

    def __init__(
        self,
        problem: Problem,
        ordering: Ordering,
        edge_offsets: list[list[tuple[int, int]]],
    ) -> None:
        self.min_x = problem.min_x
        self.min_y = problem.min_y
        self.width = problem.width
        self.height = problem.height
        self.stride = self.width * self.height

        n = len(ordering)
        self.vertex_count = n
        self._counts = problem.inside_grid() * n
        self.edges_consumed = [0] * n
        self.back_edge_counts = [len(b) for b in ordering.back_edges]
        self.forward_edges = ordering.forward_edges
        self.edge_offsets = edge_offsets

        # Vertices without back edges are never constrained by a
        # predecessor, so they may go anywhere inside the hole.
        inside_cells = problem.inside_cells()
        self.places: list[list[Point]] = [
            list(inside_cells) if count == 0 else []
            for count in self.back_edge_counts
        ]

        # Hole-corner coverage: 1 marks a hole vertex, each pose vertex
        # standing on it adds 1.
        self._corners = bytearray(self.stride)
        for x, y in problem.hole:
            self._corners[self.cell_index(x, y)] = 1
        self.covered = 0

    # ── Cell queries ───────────────────────────────────────────────

    def cell_index(self, x: int, y: int) -> int:
        return (y - self.min_y) * self.width + (x - self.min_x)

    def in_bounds(self, x: int, y: int) -> bool:
        gx = x - self.min_x
        gy = y - self.min_y
        return 0 <= gx < self.width and 0 <= gy < self.height

    def count(self, v: int, x: int, y: int) -> int:
        return self._counts[v * self.stride + self.cell_index(x, y)]

    def is_feasible(self, v: int, x: int, y: int) -> bool:
        """Does cell (x, y) satisfy every constraint applied to *v* so far?"""
        if not self.in_bounds(x, y):
            return False
        return self.count(v, x, y) == 1 + self.edges_consumed[v]

    # ── Hole-corner coverage ───────────────────────────────────────

    def cover(self, x: int, y: int) -> None:
        i = self.cell_index(x, y)
        c = self._corners[i]
        if c:
            self._corners[i] = c + 1
            if c + 1 == 2:
                self.covered += 1

    def uncover(self, x: int, y: int) -> None:
        i = self.cell_index(x, y)
        c = self._corners[i]
        if c:
            assert c > 1, f"uncover of uncovered corner ({x}, {y})"
            self._corners[i] = c - 1
            if c - 1 == 1:
                self.covered -= 1

    # ── Propagation ────────────────────────────────────────────────

    def propagate(self, v: int, x: int, y: int) -> tuple[int, bool]:
        """Apply the forward edges of *v*, placed at (x, y), to its successors.

        Returns ``(applied, feasible)``: the number of forward edges whose
        effect must later be retracted, and whether every successor still
        has a feasible cell.  Propagation stops at the first edge that
        leaves its target with no feasible cell.

        When a successor's last back edge is consumed, its candidate list
        is rebuilt from the cells that satisfy all of its constraints.
        """
        counts = self._counts
        w = self.width
        h = self.height
        gx0 = x - self.min_x
        gy0 = y - self.min_y
        stride = self.stride
        consumed = self.edges_consumed

        applied = 0
        for edge_index, dst in self.forward_edges[v]:
            consumed[dst] += 1
            need = 1 + consumed[dst]
            fill = consumed[dst] == self.back_edge_counts[dst]
            if fill:
                places: list[Point] = []
                self.places[dst] = places
            base = dst * stride
            valid = 0
            for dx, dy in self.edge_offsets[edge_index]:
                gx = gx0 + dx
                if gx < 0 or gx >= w:
                    continue
                gy = gy0 + dy
                if gy < 0 or gy >= h:
                    continue
                i = base + gy * w + gx
                c = counts[i] + 1
                counts[i] = c
                if c == need:
                    valid += 1
                    if fill:
                        places.append((gx + self.min_x, gy + self.min_y))
            applied += 1
            if valid == 0:
                return applied, False
        return applied, True

    def retract(self, v: int, x: int, y: int, applied: int) -> None:
        """Undo the first *applied* forward edges of a ``propagate`` call."""
        counts = self._counts
        w = self.width
        h = self.height
        gx0 = x - self.min_x
        gy0 = y - self.min_y
        stride = self.stride
        consumed = self.edges_consumed

        for edge_index, dst in self.forward_edges[v][:applied]:
            consumed[dst] -= 1
            assert consumed[dst] >= 0, f"edges_consumed[{dst}] went negative"
            base = dst * stride
            for dx, dy in self.edge_offsets[edge_index]:
                gx = gx0 + dx
                if gx < 0 or gx >= w:
                    continue
                gy = gy0 + dy
                if gy < 0 or gy >= h:
                    continue
                # bytearray refuses to go below 0
                counts[base + gy * w + gx] -= 1

    # ── Snapshot (debugging / tests) ───────────────────────────────

    def snapshot(self) -> tuple[bytes, tuple[int, ...], bytes, int]:
        """Immutable copy of every counter, for reversibility checks."""
        return (
            bytes(self._counts),
            tuple(self.edges_consumed),
            bytes(self._corners),
            self.covered,
        )
