"""Hand-built problems used across the test suite.

  - square:   4×4 square hole, one edge of squared length 4, ε = 0
  - triangle: 3-4-5 right-triangle hole with a congruent (translated)
              triangle figure, ε = 0 — a perfect fit exists
  - long_path: figure with more vertices than the tree search accepts
  - six_corner: more hole corners than a tiny figure can cover
"""

from __future__ import annotations

from holefit.problem import Problem, parse_problem


SQUARE_HOLE = [[0, 0], [4, 0], [4, 4], [0, 4]]
TRIANGLE_HOLE = [[0, 0], [4, 0], [0, 3]]


def square_problem_data() -> dict:
    return {
        "hole": SQUARE_HOLE,
        "figure": {"vertices": [[0, 0], [2, 0]], "edges": [[0, 1]]},
        "epsilon": 0,
    }


def make_square_problem() -> Problem:
    return parse_problem(square_problem_data(), problem_id=1)


def triangle_problem_data() -> dict:
    return {
        "hole": TRIANGLE_HOLE,
        "figure": {
            "vertices": [[10, 10], [14, 10], [10, 13]],
            "edges": [[0, 1], [1, 2], [2, 0]],
        },
        "epsilon": 0,
        "bonuses": [{"position": [1, 1], "bonus": "GLOBALIST", "problem": 7}],
    }


def make_triangle_problem() -> Problem:
    return parse_problem(triangle_problem_data(), problem_id=2)


def make_box_problem(size: int, figure: dict, epsilon: int = 0, problem_id: int = 3) -> Problem:
    """Square hole of side *size* with an arbitrary figure."""
    return parse_problem({
        "hole": [[0, 0], [size, 0], [size, size], [0, size]],
        "figure": figure,
        "epsilon": epsilon,
    }, problem_id=problem_id)


def path_figure(n: int, step: tuple[int, int] = (1, 0)) -> dict:
    """A path of *n* vertices, each offset by *step* from the previous one."""
    dx, dy = step
    return {
        "vertices": [[i * dx, i * dy] for i in range(n)],
        "edges": [[i, i + 1] for i in range(n - 1)],
    }


def make_long_path_problem(n: int = 101) -> Problem:
    return make_box_problem(10, path_figure(n), problem_id=4)


def make_six_corner_problem() -> Problem:
    """6×6 square hole whose bottom side carries two extra collinear corners,
    with a one-edge figure of squared length 4.  Two vertices plus the
    default coverage slack are fewer than the six corners."""
    return parse_problem({
        "hole": [[0, 0], [2, 0], [4, 0], [6, 0], [6, 6], [0, 6]],
        "figure": {"vertices": [[0, 0], [2, 0]], "edges": [[0, 1]]},
        "epsilon": 0,
    }, problem_id=5)
