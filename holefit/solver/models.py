"""Solver configuration and shared constants."""

from __future__ import annotations

from dataclasses import dataclass


# ── Solver configuration ──────────────────────────────────────────


@dataclass
class SolverConfig:
    """All tuneable solver parameters in one place."""

    # ── Tree search ─────────────────────────────────────────────
    timeout_s: float | None = None       # split evenly across root candidates
    max_vertices: int = 100              # larger figures are declined
    coverage_slack: int | None = 3       # hole-corner pruning slack; None disables
    check_interval: int = 50_000         # node visits between clock checks
    shuffle_deltas: bool = True          # shuffle each delta-table bucket
    seed: int = 42                       # RNG seed shared by every solver
    stream_buffer: int = 16              # bounded channel size for streamed poses

    # ── Annealing ───────────────────────────────────────────────
    annealing_iterations: int = 20_000
    annealing_t0: float = 100.0          # starting temperature
    annealing_t1: float = 0.01           # final temperature
    annealing_max_step: int = 10         # lattice step at t0, shrinks to 1
    w_outside: float = 1000.0            # per unit of vertex distance outside the hole
    w_stretch: float = 100.0             # per unit of squared-length overshoot
    w_cross: float = 1000.0              # per unit of edge length outside the hole

    # ── Jammer / wave ───────────────────────────────────────────
    jammer_max_steps: int = 10_000       # per vertex
    wave_iterations: int = 1000


# Module-level defaults (used when no SolverConfig is passed)
_DEFAULT_CFG = SolverConfig()

MAX_VERTICES = _DEFAULT_CFG.max_vertices
COVERAGE_SLACK = _DEFAULT_CFG.coverage_slack
CHECK_INTERVAL = _DEFAULT_CFG.check_interval
STREAM_BUFFER = _DEFAULT_CFG.stream_buffer
SEED = _DEFAULT_CFG.seed

RATE_LOG_INTERVAL_S = 10.0              # iteration-rate log cadence
