"""Identity solver — streams the starting pose unchanged."""

from __future__ import annotations

import threading
from typing import Iterator

from holefit.problem import Pose, Problem

from .base import Solver


class IdSolver(Solver):
    """Baseline for the runner and the viewer: no search at all."""

    name = "id"

    def solve_gen(
        self,
        problem: Problem,
        pose: Pose | None = None,
        cancel: threading.Event | None = None,
    ) -> Iterator[Pose]:
        start = pose if pose is not None else problem.initial_pose()
        yield start.copy()
