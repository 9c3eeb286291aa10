"""Problem model — dataclasses, parsing, scoring, and serialization."""

from .models import (
    Edge, Figure, Problem, Pose, BonusType, BonusUnlock, BonusUse,
    EdgeStatus, ProblemParseError, EPSILON_SCALE,
)
from .parsing import parse_problem, parse_pose, problem_from_json, pose_from_json
from .scoring import (
    dislikes, contains, validate, correct_length, edge_status,
    segment_inside, min_distance_to, edge_outside_length, edge_overshoot,
)
from .serialization import pose_to_dict, pose_to_json, problem_to_dict

__all__ = [
    # Models
    "Edge", "Figure", "Problem", "Pose", "BonusType", "BonusUnlock",
    "BonusUse", "EdgeStatus", "ProblemParseError", "EPSILON_SCALE",
    # Parsing
    "parse_problem", "parse_pose", "problem_from_json", "pose_from_json",
    # Scoring
    "dislikes", "contains", "validate", "correct_length", "edge_status",
    "segment_inside", "min_distance_to", "edge_outside_length",
    "edge_overshoot",
    # Serialization
    "pose_to_dict", "pose_to_json", "problem_to_dict",
]
