"""
FastAPI web server — evaluation and streaming solve endpoints for the viewer.
"""

from __future__ import annotations

import asyncio
import dataclasses
import json
import logging
import threading
import time
import traceback
from queue import Empty, Queue

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import StreamingResponse
from pydantic import BaseModel

from holefit.geometry import squared_distance
from holefit.problem import (
    Pose, Problem, ProblemParseError, contains, dislikes, edge_status,
    parse_pose, parse_problem, validate,
)
from holefit.solver import UnknownSolverError, build_default_registry


log = logging.getLogger(__name__)

KEEPALIVE_S = 15
DEFAULT_STREAM_TIMEOUT_S = 30.0

# ── App ────────────────────────────────────────────────────────────

app = FastAPI(title="holefit")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

app.state.registry = build_default_registry()


# ── Models ─────────────────────────────────────────────────────────

class EvaluateRequest(BaseModel):
    problem: dict
    pose: dict


class SolveRequest(BaseModel):
    problem: dict
    solver: str = "tree_search"
    pose: dict | None = None
    timeout_s: float | None = DEFAULT_STREAM_TIMEOUT_S


# ── Helpers ────────────────────────────────────────────────────────

def _parse(raw_problem: dict, raw_pose: dict | None) -> tuple[Problem, Pose]:
    try:
        problem = parse_problem(raw_problem)
        pose = parse_pose(raw_pose) if raw_pose is not None else problem.initial_pose()
    except ProblemParseError as e:
        raise HTTPException(400, str(e)) from e
    if len(pose.vertices) != len(problem.figure.vertices):
        raise HTTPException(
            400,
            f"Pose has {len(pose.vertices)} vertices, figure has {len(problem.figure.vertices)}.",
        )
    return problem, pose


def _pose_event(event_type: str, problem: Problem, pose: Pose) -> dict:
    return {
        "type": event_type,
        "vertices": [[x, y] for x, y in pose.vertices],
        "dislikes": dislikes(problem, pose),
        "valid": validate(problem, pose),
    }


# ── Routes ─────────────────────────────────────────────────────────

@app.get("/api/solvers")
def list_solvers():
    return {"solvers": app.state.registry.names()}


@app.post("/api/evaluate")
def evaluate(req: EvaluateRequest):
    """Score a pose and report per-edge length status (editor feedback)."""
    problem, pose = _parse(req.problem, req.pose)
    figure = problem.figure
    edges = []
    for i, e in enumerate(figure.edges):
        lo, hi = figure.edge_len2_bounds(i)
        edges.append({
            "index": i,
            "v0": e.v0,
            "v1": e.v1,
            "len2": squared_distance(pose.vertices[e.v0], pose.vertices[e.v1]),
            "bounds": [lo, hi],
            "status": edge_status(problem, pose, i).value,
        })
    return {
        "dislikes": dislikes(problem, pose),
        "valid": validate(problem, pose),
        "contains": contains(problem, pose),
        "edges": edges,
    }


@app.post("/api/solve/stream")
async def solve_stream(req: SolveRequest):
    """
    Streaming endpoint.  Runs the solver in a background thread and
    pushes every improved pose to the client as an SSE event.
    A client disconnect sets the solver's cancel event, which stops it
    even while it is between snapshots.
    """
    problem, pose = _parse(req.problem, req.pose)
    registry = app.state.registry
    config = dataclasses.replace(registry.config, timeout_s=req.timeout_s)
    try:
        solver = registry.create(req.solver, config)
    except UnknownSolverError as e:
        raise HTTPException(404, e.args[0]) from e

    queue: Queue[dict | None] = Queue()
    stop = threading.Event()

    def run_in_thread():
        last = pose
        count = 0
        stream = solver.solve_gen(problem, pose.copy(), stop)
        try:
            for snapshot in stream:
                last = snapshot
                count += 1
                queue.put(_pose_event("pose", problem, snapshot))
            queue.put({**_pose_event("done", problem, last), "count": count})
        except Exception as e:
            log.exception("Solver %s failed", req.solver)
            queue.put({
                "type": "error",
                "message": str(e),
                "traceback": traceback.format_exc(),
            })
        finally:
            stream.close()
            queue.put(None)  # sentinel

    thread = threading.Thread(target=run_in_thread, daemon=True)
    thread.start()

    async def event_generator():
        last_data = time.monotonic()
        try:
            while True:
                try:
                    item = queue.get(timeout=0.05)
                except Empty:
                    # Send keepalive comment to prevent connection drop
                    if time.monotonic() - last_data > KEEPALIVE_S:
                        yield ": keepalive\n\n"
                        last_data = time.monotonic()
                    await asyncio.sleep(0.05)
                    continue

                if item is None:
                    break

                yield f"data: {json.dumps(item)}\n\n"
                last_data = time.monotonic()

                if item.get("type") == "error":
                    break
        finally:
            stop.set()

    return StreamingResponse(
        event_generator(),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",
        },
    )


def main(host: str = "127.0.0.1", port: int = 8000):
    import uvicorn
    uvicorn.run("holefit.web.server:app", host=host, port=port, reload=False)
