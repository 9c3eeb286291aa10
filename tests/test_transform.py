"""Tests for the pose transforms used by the editor."""

from __future__ import annotations

import unittest

from holefit.problem import Figure, Pose
from holefit.transform import components_without, flip, fold, rotate90, translate


class TestRigidTransforms(unittest.TestCase):

    def setUp(self):
        self.pose = Pose(vertices=[(1, 1), (3, 1), (3, 4)])

    def test_translate(self):
        moved = translate(self.pose, 2, -1)
        self.assertEqual(moved.vertices, [(3, 0), (5, 0), (5, 3)])
        self.assertEqual(self.pose.vertices, [(1, 1), (3, 1), (3, 4)])

    def test_rotate_quarter_turn(self):
        rotated = rotate90(self.pose, pivot=0)
        self.assertEqual(rotated.vertices, [(1, 1), (1, 3), (-2, 3)])

    def test_four_turns_is_identity(self):
        self.assertEqual(rotate90(self.pose, 1, turns=4).vertices, self.pose.vertices)

    def test_flip_vertical_axis(self):
        self.assertEqual(flip(self.pose, 0).vertices, [(1, 1), (-1, 1), (-1, 4)])

    def test_flip_horizontal_axis(self):
        self.assertEqual(flip(self.pose, 0, "horizontal").vertices, [(1, 1), (3, 1), (3, -2)])

    def test_flip_rejects_unknown_axis(self):
        with self.assertRaises(ValueError):
            flip(self.pose, 0, "diagonal")


class TestFold(unittest.TestCase):

    def setUp(self):
        # A square 0-1-2-3 with a tail 2-4 hanging off vertex 2.
        self.figure = Figure.from_vertices(
            [(0, 0), (2, 0), (2, 2), (0, 2), (4, 2)],
            [(0, 1), (1, 2), (2, 3), (3, 0), (2, 4)],
            0.0,
        )
        self.pose = Pose(vertices=list(self.figure.vertices))

    def test_components_without_cut_vertex(self):
        comp = components_without(self.figure, {2})
        self.assertEqual(comp[2], 0)
        self.assertEqual(comp[0], comp[1])
        self.assertEqual(comp[0], comp[3])
        self.assertNotEqual(comp[4], comp[0])

    def test_fold_across_diagonal(self):
        # Cutting 1 and 3 leaves {0} and {2, 4}; fold {0} across the line 1-3.
        folded = fold(self.figure, self.pose, 1, 3, 0)
        self.assertEqual(folded.vertices[0], (2, 2))
        self.assertEqual(folded.vertices[1:], self.pose.vertices[1:])

    def test_fold_moves_whole_component(self):
        folded = fold(self.figure, self.pose, 1, 3, 4)
        self.assertEqual(folded.vertices[2], (0, 0))
        self.assertEqual(folded.vertices[4], (0, -2))
        self.assertEqual(folded.vertices[0], (0, 0))

    def test_fold_keeps_line_vertices(self):
        folded = fold(self.figure, self.pose, 1, 3, 1)
        self.assertEqual(folded.vertices, self.pose.vertices)

    def test_fold_needs_a_line(self):
        with self.assertRaises(ValueError):
            fold(self.figure, self.pose, 1, 1, 0)


if __name__ == "__main__":
    unittest.main()
