"""
Problem and solution storage — plain files in two directories.

Layout:
  problems/<id>.problem              — problem JSON
  solutions/<id>.solution            — best known pose
  solutions/<id>.meta                — metadata (dislikes, valid, optimal, server_dislikes)
  solutions/<id>.state               — judge-side state (optional)
  solutions/<solver>/<id>.solution   — last valid pose produced by <solver>
  solutions/<solver>/<id>.meta

A solution counts as present only when both its ``.solution`` and
``.meta`` files exist.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import asdict, dataclass, field
from pathlib import Path

from holefit.problem import (
    Pose, Problem, ProblemParseError, pose_from_json, pose_to_json, problem_from_json,
)


log = logging.getLogger(__name__)

_PROBLEM_RE = re.compile(r"^(\d+)\.problem$")


@dataclass
class SolutionMeta:
    dislikes: int
    valid: bool = True
    optimal: bool | None = None
    server_dislikes: int | None = None


@dataclass
class ServerState:
    """What the judge last reported for a problem."""

    dislikes: int | None = None          # judge's score of our best upload
    uploaded: list[str] = field(default_factory=list)   # submission ids


@dataclass
class Solution:
    problem_id: int
    pose: Pose
    meta: SolutionMeta
    server_state: ServerState = field(default_factory=ServerState)


class ProblemStore:

    def __init__(self, problems_dir: Path | str, solutions_dir: Path | str) -> None:
        self.problems_dir = Path(problems_dir)
        self.solutions_dir = Path(solutions_dir)

    # ── Problems ───────────────────────────────────────────────────

    def problem_path(self, problem_id: int) -> Path:
        return self.problems_dir / f"{problem_id}.problem"

    def problem_ids(self) -> list[int]:
        """Ids of every ``N.problem`` file, ascending."""
        if not self.problems_dir.exists():
            return []
        ids = []
        for p in self.problems_dir.iterdir():
            m = _PROBLEM_RE.match(p.name)
            if m and p.is_file():
                ids.append(int(m.group(1)))
        return sorted(ids)

    def load_problem(self, problem_id: int) -> Problem:
        path = self.problem_path(problem_id)
        return problem_from_json(path.read_bytes(), problem_id=problem_id)

    # ── Solutions ──────────────────────────────────────────────────

    def _solution_dir(self, subfolder: str | None) -> Path:
        return self.solutions_dir / subfolder if subfolder else self.solutions_dir

    def solution_path(self, problem_id: int, subfolder: str | None = None) -> Path:
        return self._solution_dir(subfolder) / f"{problem_id}.solution"

    def load_solution(self, problem_id: int, subfolder: str | None = None) -> Solution | None:
        """Return the stored solution, or None when either file is missing."""
        d = self._solution_dir(subfolder)
        pose_path = d / f"{problem_id}.solution"
        meta_path = d / f"{problem_id}.meta"
        if not pose_path.exists() or not meta_path.exists():
            return None
        pose = pose_from_json(pose_path.read_bytes())
        try:
            meta = SolutionMeta(**json.loads(meta_path.read_text(encoding="utf-8")))
        except (TypeError, ValueError) as e:
            raise ProblemParseError(f"{meta_path}: malformed metadata: {e}") from e
        return Solution(
            problem_id=problem_id,
            pose=pose,
            meta=meta,
            server_state=self.load_server_state(problem_id),
        )

    def save_solution(self, solution: Solution, subfolder: str | None = None) -> Path:
        """Write ``N.solution`` and ``N.meta``; returns the solution path."""
        d = self._solution_dir(subfolder)
        d.mkdir(parents=True, exist_ok=True)
        path = d / f"{solution.problem_id}.solution"
        path.write_text(pose_to_json(solution.pose), encoding="utf-8")
        (d / f"{solution.problem_id}.meta").write_text(
            json.dumps(asdict(solution.meta)), encoding="utf-8")
        log.debug("Saved solution %s to %s", solution.problem_id, path)
        return path

    # ── Judge state ────────────────────────────────────────────────

    def load_server_state(self, problem_id: int) -> ServerState:
        path = self.solutions_dir / f"{problem_id}.state"
        if not path.exists():
            return ServerState()
        data = json.loads(path.read_text(encoding="utf-8"))
        return ServerState(
            dislikes=data.get("dislikes"),
            uploaded=list(data.get("uploaded") or []),
        )

    def save_server_state(self, problem_id: int, state: ServerState) -> None:
        self.solutions_dir.mkdir(parents=True, exist_ok=True)
        (self.solutions_dir / f"{problem_id}.state").write_text(
            json.dumps(asdict(state)), encoding="utf-8")


def load_pose(path: Path | str) -> Pose:
    """Load a pose from any file (hand-edited solutions, viewer exports)."""
    return pose_from_json(Path(path).read_bytes())
