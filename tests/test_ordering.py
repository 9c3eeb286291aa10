"""Tests for the depth-first placement order."""

from __future__ import annotations

import unittest

from holefit.problem import Figure
from holefit.solver import build_ordering, pick_start_vertex


def _figure(vertices, edges) -> Figure:
    return Figure.from_vertices(vertices, edges, 0.0)


TRIANGLE = _figure([(0, 0), (4, 0), (0, 3)], [(0, 1), (1, 2), (2, 0)])


class TestStartVertex(unittest.TestCase):

    def test_lowest_degree_two_vertex(self):
        path = _figure([(0, 0), (1, 0), (2, 0)], [(0, 1), (1, 2)])
        self.assertEqual(pick_start_vertex(path), 1)

    def test_falls_back_to_zero(self):
        star = _figure([(0, 0), (1, 0), (0, 1), (-1, 0)], [(0, 1), (0, 2), (0, 3)])
        self.assertEqual(pick_start_vertex(star), 0)


class TestOrdering(unittest.TestCase):

    def test_triangle_order_and_parents(self):
        o = build_ordering(TRIANGLE)
        self.assertEqual(o.order, [0, 1, 2])
        self.assertIsNone(o.parents[0])
        self.assertEqual(o.parents[1], (0, 0))
        self.assertEqual(o.parents[2], (1, 1))

    def test_back_and_forward_partition(self):
        o = build_ordering(TRIANGLE)
        self.assertEqual(o.back_edges[0], [])
        self.assertEqual(o.forward_edges[0], [(0, 1), (2, 2)])
        self.assertEqual(o.back_edges[1], [(0, 0)])
        self.assertEqual(o.forward_edges[1], [(1, 2)])
        self.assertEqual(sorted(o.back_edges[2]), [(1, 1), (2, 0)])
        self.assertEqual(o.forward_edges[2], [])

    def test_every_edge_is_back_exactly_once(self):
        fig = _figure(
            [(0, 0), (1, 0), (2, 0), (1, 1), (0, 2)],
            [(0, 1), (1, 2), (1, 3), (3, 4), (4, 0), (2, 3)],
        )
        o = build_ordering(fig)
        back = sorted(e for lst in o.back_edges for e, _ in lst)
        forward = sorted(e for lst in o.forward_edges for e, _ in lst)
        self.assertEqual(back, list(range(len(fig.edges))))
        self.assertEqual(forward, list(range(len(fig.edges))))

    def test_every_later_vertex_has_a_back_edge(self):
        fig = _figure(
            [(0, 0), (1, 0), (2, 0), (1, 1), (0, 2)],
            [(0, 1), (1, 2), (1, 3), (3, 4), (4, 0), (2, 3)],
        )
        o = build_ordering(fig)
        for v in o.order[1:]:
            self.assertTrue(o.back_edges[v])

    def test_disconnected_figure_is_a_permutation(self):
        fig = _figure([(0, 0), (1, 0), (5, 5), (6, 5)], [(0, 1), (2, 3)])
        o = build_ordering(fig)
        self.assertEqual(sorted(o.order), [0, 1, 2, 3])
        roots = [v for v in range(4) if not o.back_edges[v]]
        self.assertEqual(len(roots), 2)
        for v in range(4):
            self.assertEqual(o.order[o.position[v]], v)

    def test_explicit_start(self):
        o = build_ordering(TRIANGLE, start=2)
        self.assertEqual(o.order[0], 2)
        self.assertEqual(len(o), 3)


if __name__ == "__main__":
    unittest.main()
