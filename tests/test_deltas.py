"""Tests for the squared-distance delta table."""

from __future__ import annotations

import unittest

from holefit.solver import DeltaTable
from tests.fixtures import SQUARE_HOLE


class TestDeltaTable(unittest.TestCase):

    def setUp(self):
        self.table = DeltaTable(25)

    def test_radius_is_ceiled_root(self):
        self.assertEqual(DeltaTable(25).radius, 5)
        self.assertEqual(DeltaTable(26).radius, 6)
        self.assertEqual(DeltaTable(0).radius, 0)

    def test_every_offset_realizes_its_bucket(self):
        for d in range(len(self.table)):
            for dx, dy in self.table[d]:
                self.assertEqual(dx * dx + dy * dy, d)

    def test_buckets_complete_and_unique(self):
        r = self.table.radius
        for d in range(len(self.table)):
            expected = {
                (dx, dy)
                for dx in range(-r, r + 1)
                for dy in range(-r, r + 1)
                if dx * dx + dy * dy == d
            }
            self.assertEqual(len(self.table[d]), len(expected))
            self.assertEqual(set(self.table[d]), expected)

    def test_known_buckets(self):
        self.assertEqual(self.table[0], [(0, 0)])
        self.assertEqual(len(self.table[25]), 12)
        self.assertEqual(self.table[3], [])

    def test_out_of_range_lookup(self):
        self.assertEqual(self.table[26], [])
        self.assertEqual(self.table[-1], [])

    def test_offsets_clamped(self):
        self.assertEqual(self.table.offsets(26, 40), [])
        self.assertEqual(self.table.offsets(5, 4), [])
        self.assertEqual(len(self.table.offsets(-3, 1)), 5)
        self.assertEqual(len(self.table.offsets(24, 100)), 12)

    def test_shuffle_is_seeded(self):
        a = DeltaTable(50, seed=7)
        b = DeltaTable(50, seed=7)
        self.assertEqual([a[d] for d in range(51)], [b[d] for d in range(51)])

    def test_unshuffled_is_sorted(self):
        table = DeltaTable(25, shuffle=False)
        self.assertEqual(table[25], sorted(table[25]))

    def test_for_hole_uses_diameter(self):
        table = DeltaTable.for_hole([tuple(p) for p in SQUARE_HOLE])
        self.assertEqual(table.max_delta, 32)
        self.assertEqual(len(table[32]), 4)


if __name__ == "__main__":
    unittest.main()
