"""Batch runner — solve every stored problem with one or more solvers.

For each problem and each solver: solve, score and validate.  A valid
pose is written to ``solutions/<solver>/N.solution``; when it beats the
best stored solution it also replaces ``solutions/N.solution`` and its
metadata.  With ``workers > 1`` problems are solved in separate
processes, each loading its own Problem.
"""

from __future__ import annotations

import logging
import time
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass
from pathlib import Path

from holefit.problem import ProblemParseError, dislikes, validate
from holefit.solver import SolverConfig, build_default_registry
from holefit.storage import ProblemStore, Solution, SolutionMeta


log = logging.getLogger(__name__)


@dataclass
class RunRecord:
    problem_id: int
    solver: str
    dislikes: int
    valid: bool
    improved: bool          # replaced the best stored solution
    elapsed_s: float


def run_batch(
    store: ProblemStore,
    solver_names: list[str],
    *,
    config: SolverConfig | None = None,
    problem_ids: list[int] | None = None,
    workers: int = 1,
) -> list[RunRecord]:
    """Run every solver on every problem; return one record per pair."""
    if config is None:
        config = SolverConfig()
    # Fail on unknown names before any work starts.
    registry = build_default_registry(config)
    for name in solver_names:
        registry.create(name)

    ids = problem_ids if problem_ids is not None else store.problem_ids()
    names = sorted(solver_names)
    log.info("Runner: %d problems × %d solvers, %d worker(s)", len(ids), len(names), workers)

    records: list[RunRecord] = []
    if workers <= 1:
        for pid in ids:
            records.extend(solve_problem(store.problems_dir, store.solutions_dir, pid, names, config))
        return records

    with ProcessPoolExecutor(max_workers=workers) as pool:
        futures = [
            pool.submit(solve_problem, store.problems_dir, store.solutions_dir, pid, names, config)
            for pid in ids
        ]
        for fut in futures:
            records.extend(fut.result())
    return records


def solve_problem(
    problems_dir: Path,
    solutions_dir: Path,
    problem_id: int,
    solver_names: list[str],
    config: SolverConfig,
) -> list[RunRecord]:
    """Run each solver on one problem.  Top-level so worker processes can pickle it."""
    store = ProblemStore(problems_dir, solutions_dir)
    registry = build_default_registry(config)
    try:
        problem = store.load_problem(problem_id)
    except (OSError, ProblemParseError) as e:
        log.error("Problem %d: cannot load (%s) — skipped", problem_id, e)
        return []

    best = store.load_solution(problem_id)
    best_dislikes = dislikes(problem, best.pose) if best is not None else None
    log.info("Solving %d (best so far: %s)", problem_id, best_dislikes)

    records = []
    for name in solver_names:
        solver = registry.create(name)
        t0 = time.monotonic()
        pose = solver.solve(problem)
        elapsed = time.monotonic() - t0
        score = dislikes(problem, pose)
        valid = validate(problem, pose)
        log.info("  %s: dislikes=%d, valid=%s (%.2fs)", name, score, valid, elapsed)

        improved = False
        if valid:
            meta = SolutionMeta(dislikes=score, valid=True, optimal=True if score == 0 else None)
            store.save_solution(Solution(problem_id, pose, meta), subfolder=name)
            if best_dislikes is None or score < best_dislikes:
                log.info("  Replacing the current best solution (%s > %d)", best_dislikes, score)
                if best is not None:
                    meta.server_dislikes = best.meta.server_dislikes
                store.save_solution(Solution(problem_id, pose, meta))
                best_dislikes = score
                improved = True

        records.append(RunRecord(problem_id, name, score, valid, improved, elapsed))
    return records


def summarize(store: ProblemStore) -> dict:
    """Totals over the stored best solutions, for the ``stats`` command."""
    solved = 0
    optimal = 0
    total = 0
    missing = []
    for pid in store.problem_ids():
        sol = store.load_solution(pid)
        if sol is None:
            missing.append(pid)
            continue
        solved += 1
        total += sol.meta.dislikes
        if sol.meta.dislikes == 0:
            optimal += 1
    return {
        "problems": solved + len(missing),
        "solved": solved,
        "optimal": optimal,
        "total_dislikes": total,
        "missing": missing,
    }
