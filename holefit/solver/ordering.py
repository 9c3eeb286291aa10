"""Placement order for the tree search.

The figure is walked depth-first (pre-order) from a start vertex.  Every
incident edge of a vertex is then either a *back* edge, whose other end
is placed earlier and constrains this vertex, or a *forward* edge, whose
other end is placed later and receives this vertex's constraints.
"""

from __future__ import annotations

from dataclasses import dataclass

from holefit.problem import Figure


EdgeRef = tuple[int, int]   # (edge_index, neighbour)


@dataclass
class Ordering:
    order: list[int]                        # placement sequence, a permutation
    position: list[int]                     # vertex -> index in ``order``
    parents: list[tuple[int, int] | None]   # vertex -> (parent, edge_index)
    back_edges: list[list[EdgeRef]]
    forward_edges: list[list[EdgeRef]]

    def __len__(self) -> int:
        return len(self.order)


def pick_start_vertex(figure: Figure) -> int:
    """Lowest-index vertex of degree exactly two, else vertex 0.

    Only affects search speed, never which poses are found feasible.
    """
    for v in range(len(figure.vertices)):
        if figure.degree(v) == 2:
            return v
    return 0


def build_ordering(figure: Figure, start: int | None = None) -> Ordering:
    """DFS pre-order from *start*, then from each unvisited vertex in index order."""
    n = len(figure.vertices)
    if start is None:
        start = pick_start_vertex(figure) if n else 0

    order: list[int] = []
    parents: list[tuple[int, int] | None] = [None] * n
    visited = [False] * n

    roots = [start] + [v for v in range(n) if v != start]
    for root in roots:
        if root >= n or visited[root]:
            continue
        visited[root] = True
        order.append(root)
        # Explicit stack of adjacency iterators reproduces recursive pre-order.
        stack = [iter(figure.vertex_edges[root])]
        parent_of_frame = [root]
        while stack:
            for edge_index, dst in stack[-1]:
                if visited[dst]:
                    continue
                visited[dst] = True
                parents[dst] = (parent_of_frame[-1], edge_index)
                order.append(dst)
                stack.append(iter(figure.vertex_edges[dst]))
                parent_of_frame.append(dst)
                break
            else:
                stack.pop()
                parent_of_frame.pop()

    position = [0] * n
    for i, v in enumerate(order):
        position[v] = i

    back_edges: list[list[EdgeRef]] = [[] for _ in range(n)]
    forward_edges: list[list[EdgeRef]] = [[] for _ in range(n)]
    for v in range(n):
        for edge_index, dst in figure.vertex_edges[v]:
            if position[dst] < position[v]:
                back_edges[v].append((edge_index, dst))
            else:
                forward_edges[v].append((edge_index, dst))

    return Ordering(
        order=order,
        position=position,
        parents=parents,
        back_edges=back_edges,
        forward_edges=forward_edges,
    )
