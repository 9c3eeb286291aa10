"""Delta table — integer offsets bucketed by the squared distance they realize.

``table[d]`` lists every ``(dx, dy)`` with ``dx² + dy² == d`` and
``|dx|, |dy| <= radius``.  The radius is the ceiling of the square root
of ``max_delta``, the squared diameter of the hole, so every offset
between two points of the hole is represented.
"""

from __future__ import annotations

import math
import random

from holefit.geometry import max_squared_extent

from .models import SEED


Offset = tuple[int, int]


class DeltaTable:
    """Precomputed ``squared distance -> offsets`` lookup."""

    def __init__(self, max_delta: int, *, shuffle: bool = True, seed: int = SEED) -> None:
        self.max_delta = max_delta
        self.radius = math.isqrt(max_delta)
        if self.radius * self.radius < max_delta:
            self.radius += 1

        buckets: list[set[Offset]] = [set() for _ in range(max_delta + 1)]
        r = self.radius
        for dx in range(r + 1):
            for dy in range(r + 1):
                d = dx * dx + dy * dy
                if d > max_delta:
                    break
                bucket = buckets[d]
                bucket.add((dx, dy))
                bucket.add((dx, -dy))
                bucket.add((-dx, dy))
                bucket.add((-dx, -dy))

        rng = random.Random(seed)
        self._table: list[list[Offset]] = []
        for bucket in buckets:
            offsets = sorted(bucket)
            if shuffle:
                rng.shuffle(offsets)
            self._table.append(offsets)

    @classmethod
    def for_hole(cls, hole, *, shuffle: bool = True, seed: int = SEED) -> DeltaTable:
        return cls(max_squared_extent(hole), shuffle=shuffle, seed=seed)

    def __getitem__(self, d: int) -> list[Offset]:
        if d < 0 or d > self.max_delta:
            return []
        return self._table[d]

    def __len__(self) -> int:
        return len(self._table)

    def offsets(self, lo: int, hi: int) -> list[Offset]:
        """Every offset whose squared length lies in ``[lo, hi]``.

        The range is clamped to ``[0, max_delta]``; an empty range gives
        an empty list.
        """
        lo = max(lo, 0)
        hi = min(hi, self.max_delta)
        out: list[Offset] = []
        for d in range(lo, hi + 1):
            out.extend(self._table[d])
        return out
