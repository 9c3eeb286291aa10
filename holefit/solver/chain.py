"""Chain two solvers: the second starts from the last pose of the first."""

from __future__ import annotations

import threading
from typing import Iterator

from holefit.problem import Pose, Problem

from .base import Solver


class ChainSolver(Solver):

    def __init__(self, first: Solver, second: Solver, name: str | None = None) -> None:
        super().__init__(first.config)
        self.first = first
        self.second = second
        self.name = name or f"{first.name}+{second.name}"

    def solve_gen(
        self,
        problem: Problem,
        pose: Pose | None = None,
        cancel: threading.Event | None = None,
    ) -> Iterator[Pose]:
        last = pose.copy() if pose is not None else problem.initial_pose()
        stream = self.first.solve_gen(problem, last.copy(), cancel)
        try:
            for snapshot in stream:
                last = snapshot
                yield snapshot
        finally:
            stream.close()
        yield from self.second.solve_gen(problem, last.copy(), cancel)
