import argparse
import logging
import time
from pathlib import Path

from holefit.config import SETTINGS
from holefit.problem import ProblemParseError, dislikes, pose_to_json, problem_from_json, validate
from holefit.runner import run_batch, summarize
from holefit.solver import SolverConfig, UnknownSolverError, build_default_registry
from holefit.storage import ProblemStore, load_pose

_LEVELS = [logging.WARNING, logging.INFO, logging.DEBUG]


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="holefit", description="Fit lattice figures into hole polygons")
    p.add_argument("-v", "--verbose", action="count", default=0, help="-v for INFO, -vv for DEBUG")
    p.add_argument("--timeout", type=float, default=None, help="Tree-search timeout in seconds")
    sub = p.add_subparsers(dest="cmd", required=True)

    r = sub.add_parser("run", help="Run one solver on one problem file")
    r.add_argument("solver", help="Solver name")
    r.add_argument("input", help="Path to N.problem")
    r.add_argument("output", help="Path to write N.solution")

    s = sub.add_parser("solve", help="Run one or all solvers on every stored problem")
    s.add_argument("problems", nargs="?", default=None, help="Problems directory")
    s.add_argument("solutions", nargs="?", default=None, help="Solutions directory")
    s.add_argument("-a", "--solver", default=None, help="Solver name (default: all)")
    s.add_argument("--workers", type=int, default=1, help="Worker processes")

    st = sub.add_parser("stats", help="Print problem sizes and best stored scores")
    st.add_argument("path", nargs="?", default=None, help="Problems directory")
    st.add_argument("--solutions", default=None, help="Solutions directory")

    d = sub.add_parser("download", help="Download a problem from the judge")
    d.add_argument("id", type=int, help="Problem id")
    d.add_argument("path", help="Where to write N.problem")

    u = sub.add_parser("upload", help="Validate and upload a solution to the judge")
    u.add_argument("id", type=int, help="Problem id")
    u.add_argument("path", help="Path to N.solution")

    sv = sub.add_parser("serve", help="Start the viewer backend")
    sv.add_argument("--host", default="127.0.0.1", help="Host to bind")
    sv.add_argument("--port", type=int, default=8000, help="Port to bind")

    return p


def configure_logging(verbose: int) -> None:
    if verbose:
        level = _LEVELS[min(verbose, len(_LEVELS) - 1)]
    else:
        level = getattr(logging, SETTINGS.log_level, logging.WARNING)
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)
    config = SolverConfig(timeout_s=args.timeout)

    try:
        if args.cmd == "run":
            return _cmd_run(args, config)
        if args.cmd == "solve":
            return _cmd_solve(args, config)
        if args.cmd == "stats":
            return _cmd_stats(args)
        if args.cmd == "download":
            from holefit.portal import JudgeClient
            JudgeClient().download_problem(args.id, args.path)
            print(f"Downloaded problem {args.id} to {args.path}")
            return 0
        if args.cmd == "upload":
            return _cmd_upload(args)
        if args.cmd == "serve":
            from holefit.web.server import main as serve_main
            serve_main(host=args.host, port=args.port)
            return 0
    except (UnknownSolverError, ProblemParseError) as e:
        print(f"error: {e}")
        return 1

    return 2


def _cmd_run(args, config: SolverConfig) -> int:
    problem = problem_from_json(Path(args.input).read_bytes())
    print(problem)
    solver = build_default_registry(config).create(args.solver)
    t0 = time.monotonic()
    pose = solver.solve(problem)
    elapsed = time.monotonic() - t0
    print(f"dislikes = {dislikes(problem, pose)}, valid = {validate(problem, pose)}, took {elapsed:.3f}s")
    out = Path(args.output)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(pose_to_json(pose), encoding="utf-8")
    return 0


def _cmd_solve(args, config: SolverConfig) -> int:
    store = ProblemStore(
        args.problems or SETTINGS.problems_dir,
        args.solutions or SETTINGS.solutions_dir,
    )
    names = [args.solver] if args.solver else build_default_registry(config).names()
    records = run_batch(store, names, config=config, workers=args.workers)
    for rec in records:
        mark = " *" if rec.improved else ""
        print(f"{rec.problem_id:>4} {rec.solver:<18} dislikes={rec.dislikes:<8} valid={rec.valid}{mark}")
    return 0


def _cmd_stats(args) -> int:
    store = ProblemStore(args.path or SETTINGS.problems_dir, args.solutions or SETTINGS.solutions_dir)
    for pid in store.problem_ids():
        problem = store.load_problem(pid)
        best = store.load_solution(pid)
        print(f"Problem {pid}:")
        print(f"  Hole: {len(problem.hole)} vertices")
        print(f"  Figure: {len(problem.figure.vertices)} vertices, "
              f"{len(problem.figure.edges)} edges, e={problem.figure.epsilon}")
        if best is not None:
            print(f"  Best: {best.meta.dislikes} dislikes")
    totals = summarize(store)
    print(f"Solved {totals['solved']}/{totals['problems']}, "
          f"optimal {totals['optimal']}, total dislikes {totals['total_dislikes']}")
    return 0


def _cmd_upload(args) -> int:
    from holefit.portal import JudgeClient

    store = ProblemStore(SETTINGS.problems_dir, SETTINGS.solutions_dir)
    problem = store.load_problem(args.id)
    pose = load_pose(args.path)
    if not validate(problem, pose):
        print(f"error: pose in {args.path} does not fit problem {args.id}")
        return 1
    resp = JudgeClient().upload_solution(args.id, pose)
    state = store.load_server_state(args.id)
    if "id" in resp:
        state.uploaded.append(str(resp["id"]))
    store.save_server_state(args.id, state)
    print(f"Uploaded problem {args.id}: {resp}")
    return 0
