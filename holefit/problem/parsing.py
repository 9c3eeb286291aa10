"""Problem / pose parsing — convert raw dicts/JSON into dataclasses."""

from __future__ import annotations

import json

from .models import (
    EPSILON_SCALE, BonusType, BonusUnlock, BonusUse, Figure, Pose, Problem,
    ProblemParseError,
)


def parse_problem(data: dict, *, problem_id: int | None = None) -> Problem:
    """Parse a raw problem dict into a Problem.

    Format:
        {"hole": [[x, y], ...],
         "figure": {"vertices": [[x, y], ...], "edges": [[v0, v1], ...]},
         "epsilon": 150000,
         "bonuses": [{"position": [x, y], "bonus": "GLOBALIST", "problem": 3}]}
    """
    if not isinstance(data, dict):
        raise ProblemParseError(f"Problem must be a JSON object, got {type(data).__name__}")
    try:
        hole = [_parse_point(p, "hole") for p in data["hole"]]
        raw_figure = data["figure"]
        vertices = [_parse_point(p, "figure.vertices") for p in raw_figure["vertices"]]
        edge_pairs = [_parse_edge(e, len(vertices)) for e in raw_figure["edges"]]
        epsilon = int(data["epsilon"]) / EPSILON_SCALE
        bonuses = [
            BonusUnlock(
                position=_parse_point(b["position"], "bonuses.position"),
                bonus=_parse_bonus_type(b["bonus"]),
                problem=int(b["problem"]),
            )
            for b in data.get("bonuses") or []
        ]
    except ProblemParseError:
        raise
    except KeyError as e:
        raise ProblemParseError(f"Problem is missing key {e}") from e
    except (TypeError, ValueError) as e:
        raise ProblemParseError(f"Problem has a malformed value: {e}") from e

    figure = Figure.from_vertices(vertices, edge_pairs, epsilon)
    return Problem(hole, figure, bonuses, problem_id=problem_id)


def parse_pose(data: dict) -> Pose:
    """Parse a raw pose dict.  ``bonuses`` is optional."""
    if not isinstance(data, dict):
        raise ProblemParseError(f"Pose must be a JSON object, got {type(data).__name__}")
    try:
        vertices = [_parse_point(p, "vertices") for p in data["vertices"]]
        bonuses = [
            BonusUse(bonus=_parse_bonus_type(b["bonus"]), problem=int(b["problem"]))
            for b in data.get("bonuses") or []
        ]
    except ProblemParseError:
        raise
    except KeyError as e:
        raise ProblemParseError(f"Pose is missing key {e}") from e
    except (TypeError, ValueError) as e:
        raise ProblemParseError(f"Pose has a malformed value: {e}") from e
    return Pose(vertices=vertices, bonuses=bonuses)


def problem_from_json(text: str | bytes, *, problem_id: int | None = None) -> Problem:
    return parse_problem(_loads(text, "problem"), problem_id=problem_id)


def pose_from_json(text: str | bytes) -> Pose:
    return parse_pose(_loads(text, "pose"))


# ── Helpers ────────────────────────────────────────────────────────


def _loads(text: str | bytes, what: str):
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ProblemParseError(f"Invalid {what} JSON: {e}") from e


def _parse_point(raw, where: str) -> tuple[int, int]:
    if not isinstance(raw, (list, tuple)) or len(raw) != 2:
        raise ProblemParseError(f"{where}: expected [x, y], got {raw!r}")
    x, y = raw
    if isinstance(x, bool) or isinstance(y, bool) or not isinstance(x, int) or not isinstance(y, int):
        raise ProblemParseError(f"{where}: coordinates must be integers, got {raw!r}")
    return (x, y)


def _parse_edge(raw, vertex_count: int) -> tuple[int, int]:
    if not isinstance(raw, (list, tuple)) or len(raw) != 2:
        raise ProblemParseError(f"figure.edges: expected [v0, v1], got {raw!r}")
    v0, v1 = int(raw[0]), int(raw[1])
    for v in (v0, v1):
        if not 0 <= v < vertex_count:
            raise ProblemParseError(
                f"figure.edges: vertex index {v} out of range 0..{vertex_count - 1}"
            )
    if v0 == v1:
        raise ProblemParseError(f"figure.edges: self-loop on vertex {v0}")
    return (v0, v1)


def _parse_bonus_type(raw) -> BonusType:
    try:
        return BonusType(raw)
    except ValueError:
        raise ProblemParseError(f"Unknown bonus type {raw!r}") from None
