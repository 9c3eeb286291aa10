"""Solver interface and the thread-backed pose stream.

Every solver exposes ``solve_gen(problem, pose, cancel=None)``, a lazy
stream of owned ``Pose`` snapshots that improve by the solver's own
measure.  Closing the stream (``close()``, leaving a ``for`` loop, garbage
collection) stops the solver.  A caller that iterates the stream on
another thread can stop it by setting *cancel*, even while the solver is
between snapshots.

The tree search is a deep recursion that cannot be suspended mid-frame,
so it runs on a worker thread and hands snapshots to the consumer through
a bounded ``Queue``, the same pattern the web server uses for its event
stream.
"""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from queue import Empty, Full, Queue
from typing import Callable, Iterator

from holefit.problem import Pose, Problem

from .models import STREAM_BUFFER, SolverConfig


log = logging.getLogger(__name__)

_POLL_S = 0.05
_DONE = object()    # end-of-stream sentinel

Emit = Callable[[Pose], None]
Search = Callable[[Emit, threading.Event], None]


class Solver(ABC):
    """Shared contract of the tree search and the heuristic solvers."""

    name: str = ""

    def __init__(self, config: SolverConfig | None = None) -> None:
        self.config = config if config is not None else SolverConfig()

    @abstractmethod
    def solve_gen(
        self,
        problem: Problem,
        pose: Pose | None = None,
        cancel: threading.Event | None = None,
    ) -> Iterator[Pose]:
        """Stream improving pose snapshots, starting from *pose*.

        The stream ends early once *cancel* is set.
        """

    def solve(self, problem: Problem, pose: Pose | None = None) -> Pose:
        """Run to completion and return the last streamed pose.

        Falls back to a copy of the starting pose when nothing was
        streamed.
        """
        start = pose if pose is not None else problem.initial_pose()
        last: Pose | None = None
        stream = self.solve_gen(problem, start.copy())
        try:
            for snapshot in stream:
                last = snapshot
        finally:
            stream.close()
        return last if last is not None else start.copy()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


def stream_in_thread(
    search: Search,
    *,
    maxsize: int = STREAM_BUFFER,
    name: str = "solver",
    cancel: threading.Event | None = None,
) -> Iterator[Pose]:
    """Run ``search(emit, cancelled)`` on a worker thread and yield what it emits.

    ``emit`` blocks while the queue is full and becomes a no-op once the
    consumer has gone away.  ``cancelled`` is set when the stream is
    closed; the search is expected to poll it and return.  When *cancel*
    is given it is used as ``cancelled``, so setting it from any thread
    ends the stream without waiting for the next snapshot.  An exception
    raised by the search is re-raised in the consumer after the poses
    emitted before it.
    """
    queue: Queue = Queue(maxsize=maxsize)
    cancelled = cancel if cancel is not None else threading.Event()
    errors: list[Exception] = []

    def put(item) -> bool:
        while not cancelled.is_set():
            try:
                queue.put(item, timeout=_POLL_S)
                return True
            except Full:
                continue
        return False

    def emit(pose: Pose) -> None:
        put(pose)

    def run_in_thread() -> None:
        try:
            search(emit, cancelled)
        except Exception as e:
            log.exception("%s: search failed", name)
            errors.append(e)
        finally:
            put(_DONE)

    thread = threading.Thread(target=run_in_thread, name=name, daemon=True)
    thread.start()
    try:
        while not cancelled.is_set():
            try:
                item = queue.get(timeout=_POLL_S)
            except Empty:
                if not thread.is_alive() and queue.empty():
                    break
                continue
            if item is _DONE:
                break
            yield item
        if errors:
            raise errors[0]
    finally:
        cancelled.set()
        thread.join()
