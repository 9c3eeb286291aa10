"""Tests for the pure-python polygon utilities."""

from __future__ import annotations

import unittest

from holefit.geometry import (
    is_self_intersecting, max_squared_extent,
    polygon_area, polygon_bounds, segments_intersect, squared_distance,
    validate_hole,
)


SQUARE = [(0, 0), (4, 0), (4, 4), (0, 4)]


class TestPrimitives(unittest.TestCase):

    def test_squared_distance_exact(self):
        self.assertEqual(squared_distance((0, 0), (3, 4)), 25)
        self.assertEqual(squared_distance((-2, 1), (-2, 1)), 0)

    def test_area_sign_follows_winding(self):
        self.assertEqual(polygon_area(SQUARE), 16.0)
        self.assertEqual(polygon_area(list(reversed(SQUARE))), -16.0)

    def test_bounds(self):
        self.assertEqual(polygon_bounds([(1, 5), (7, -2), (3, 3)]), (1, -2, 7, 5))

    def test_max_squared_extent_is_diagonal(self):
        self.assertEqual(max_squared_extent(SQUARE), 32)


class TestSegments(unittest.TestCase):

    def test_crossing_segments(self):
        self.assertTrue(segments_intersect((0, 0), (4, 4), (0, 4), (4, 0)))

    def test_touching_segments(self):
        self.assertTrue(segments_intersect((0, 0), (2, 0), (2, 0), (2, 3)))

    def test_disjoint_segments(self):
        self.assertFalse(segments_intersect((0, 0), (1, 0), (0, 1), (1, 1)))


class TestValidateHole(unittest.TestCase):

    def test_valid_square(self):
        self.assertEqual(validate_hole(SQUARE), [])
        self.assertFalse(is_self_intersecting(SQUARE))

    def test_too_few_vertices(self):
        errors = validate_hole([(0, 0), (1, 1)])
        self.assertEqual(len(errors), 1)

    def test_bowtie_is_self_intersecting(self):
        bowtie = [(0, 0), (4, 4), (4, 0), (0, 4)]
        self.assertTrue(is_self_intersecting(bowtie))
        self.assertTrue(any("self-intersecting" in e for e in validate_hole(bowtie)))

    def test_repeated_vertex_reported(self):
        errors = validate_hole([(0, 0), (4, 0), (4, 0), (4, 4)])
        self.assertTrue(any("repeats" in e for e in errors))

    def test_zero_area(self):
        errors = validate_hole([(0, 0), (2, 0), (4, 0)])
        self.assertTrue(any("zero area" in e for e in errors))


if __name__ == "__main__":
    unittest.main()
