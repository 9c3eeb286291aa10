"""Problem / pose serialization — JSON conversion."""

from __future__ import annotations

import json

from .models import EPSILON_SCALE, Pose, Problem


def pose_to_dict(pose: Pose) -> dict:
    """Serialize a Pose to the solution file / judge upload shape."""
    return {
        "vertices": [[x, y] for x, y in pose.vertices],
        "bonuses": [
            {"bonus": b.bonus.value, "problem": b.problem}
            for b in pose.bonuses
        ],
    }


def pose_to_json(pose: Pose) -> str:
    return json.dumps(pose_to_dict(pose))


def problem_to_dict(problem: Problem) -> dict:
    """Serialize a Problem back to the problem file shape."""
    fig = problem.figure
    return {
        "hole": [[x, y] for x, y in problem.hole],
        "figure": {
            "vertices": [[x, y] for x, y in fig.vertices],
            "edges": [[e.v0, e.v1] for e in fig.edges],
        },
        "epsilon": round(fig.epsilon * EPSILON_SCALE),
        "bonuses": [
            {
                "position": [b.position[0], b.position[1]],
                "bonus": b.bonus.value,
                "problem": b.problem,
            }
            for b in problem.bonuses
        ],
    }
