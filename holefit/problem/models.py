"""Problem dataclasses — hole, figure, pose and bonus annotations."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from enum import Enum

from shapely.geometry import Polygon, Point as ShapelyPoint
from shapely.prepared import prep as shapely_prep

from holefit.geometry import Point, polygon_bounds, squared_distance, validate_hole


log = logging.getLogger(__name__)

EPSILON_SCALE = 1_000_000   # problem files store epsilon as an integer ppm


class ProblemParseError(ValueError):
    """Raised when problem or pose JSON is malformed."""


class BonusType(str, Enum):
    GLOBALIST = "GLOBALIST"
    BREAK_A_LEG = "BREAK_A_LEG"
    WALLHACK = "WALLHACK"
    SUPERFLEX = "SUPERFLEX"


class EdgeStatus(str, Enum):
    OK = "ok"
    TOO_SHORT = "too_short"
    TOO_LONG = "too_long"


# ── Figure ─────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Edge:
    v0: int
    v1: int
    len2: int       # squared length in the undeformed figure


@dataclass
class Figure:
    """The graph being embedded.  Never mutated after construction."""

    vertices: list[Point]
    edges: list[Edge]
    epsilon: float
    vertex_edges: list[list[tuple[int, int]]] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        # vertex -> [(edge_index, neighbour), ...]
        self.vertex_edges = [[] for _ in self.vertices]
        for i, e in enumerate(self.edges):
            self.vertex_edges[e.v0].append((i, e.v1))
            self.vertex_edges[e.v1].append((i, e.v0))

    @classmethod
    def from_vertices(
        cls, vertices: list[Point], edge_pairs: list[tuple[int, int]], epsilon: float,
    ) -> Figure:
        """Build a figure, deriving each edge's nominal squared length."""
        edges = [
            Edge(v0, v1, squared_distance(vertices[v0], vertices[v1]))
            for v0, v1 in edge_pairs
        ]
        return cls(vertices=list(vertices), edges=edges, epsilon=epsilon)

    def edge_len2_bounds(self, idx: int) -> tuple[int, int]:
        """Integer squared-length interval allowed for edge *idx*.

        The lower bound rounds up and the upper bound rounds down, both
        computed in double precision.
        """
        len2 = self.edges[idx].len2
        return (
            math.ceil((1.0 - self.epsilon) * len2),
            math.floor((1.0 + self.epsilon) * len2),
        )

    def degree(self, v: int) -> int:
        return len(self.vertex_edges[v])


# ── Bonuses ────────────────────────────────────────────────────────


@dataclass(frozen=True)
class BonusUnlock:
    """A bonus unlocked by covering *position* in this problem."""

    position: Point
    bonus: BonusType
    problem: int


@dataclass(frozen=True)
class BonusUse:
    """A bonus (earned in *problem*) spent by a pose."""

    bonus: BonusType
    problem: int


# ── Pose ───────────────────────────────────────────────────────────


@dataclass
class Pose:
    """One coordinate per figure vertex.  The only mutable entity."""

    vertices: list[Point]
    bonuses: list[BonusUse] = field(default_factory=list)

    def copy(self) -> Pose:
        """Owned snapshot; later mutation of either side is invisible to the other."""
        return Pose(vertices=list(self.vertices), bonuses=list(self.bonuses))


# ── Problem ────────────────────────────────────────────────────────


class Problem:
    """A hole, a figure and the precomputed lattice membership of the hole.

    The inside grid covers the bounding box of the hole; a cell is 1 when
    the lattice point lies inside the polygon or on its boundary.
    """

    def __init__(
        self,
        hole: list[Point],
        figure: Figure,
        bonuses: list[BonusUnlock] | None = None,
        *,
        problem_id: int | None = None,
    ) -> None:
        if len(hole) < 3:
            raise ProblemParseError(f"Hole has only {len(hole)} vertices, need at least 3.")
        for err in validate_hole(hole):
            log.warning("Problem %s: %s", problem_id, err)

        self.id = problem_id
        self.hole = [tuple(p) for p in hole]
        self.figure = figure
        self.bonuses = list(bonuses or [])
        self.poly = Polygon(self.hole)
        self.prepared = shapely_prep(self.poly)

        self.min_x, self.min_y, self.max_x, self.max_y = polygon_bounds(self.hole)
        self.width = self.max_x - self.min_x + 1
        self.height = self.max_y - self.min_y + 1

        self._inside = bytearray(self.width * self.height)
        covers = self.prepared.covers
        for gy in range(self.height):
            y = self.min_y + gy
            for gx in range(self.width):
                if covers(ShapelyPoint(self.min_x + gx, y)):
                    self._inside[gy * self.width + gx] = 1

    # ── Bounding box ───────────────────────────────────────────────

    def bounding_box(self) -> tuple[Point, Point]:
        """Return ((min_x, min_y), (max_x, max_y)) of the hole."""
        return (self.min_x, self.min_y), (self.max_x, self.max_y)

    def in_bounds(self, x: int, y: int) -> bool:
        return self.min_x <= x <= self.max_x and self.min_y <= y <= self.max_y

    # ── Inside grid ────────────────────────────────────────────────

    def contains_point(self, p: Point) -> bool:
        """O(1) lattice membership: inside or on the hole boundary."""
        x, y = p
        if not self.in_bounds(x, y):
            return False
        return self._inside[(y - self.min_y) * self.width + (x - self.min_x)] == 1

    def inside_cells(self) -> list[Point]:
        """Every lattice point inside or on the hole, in row-major order."""
        cells = []
        inside = self._inside
        w = self.width
        for gy in range(self.height):
            row = gy * w
            for gx in range(w):
                if inside[row + gx]:
                    cells.append((self.min_x + gx, self.min_y + gy))
        return cells

    def inside_grid(self) -> bytearray:
        """Copy of the inside grid (row-major, ``gy * width + gx``)."""
        return bytearray(self._inside)

    # ── Convenience ────────────────────────────────────────────────

    def initial_pose(self) -> Pose:
        """The undeformed figure, as the default starting pose."""
        return Pose(vertices=list(self.figure.vertices))

    def __repr__(self) -> str:
        return (
            f"Problem(id={self.id}, hole={len(self.hole)} vertices, "
            f"figure={len(self.figure.vertices)} vertices/{len(self.figure.edges)} edges, "
            f"epsilon={self.figure.epsilon})"
        )
