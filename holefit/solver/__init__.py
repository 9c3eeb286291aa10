"""Solvers — lattice embedding of a figure into a hole.

Submodules:
    models       SolverConfig and module-level defaults
    deltas       integer offsets bucketed by squared distance
    ordering     depth-first placement order, back/forward edges
    propagation  reversible per-vertex feasibility grids
    tree_search  exact backtracking search (streams on a worker thread)
    base         Solver interface and the thread-backed pose stream
    annealing, jammer, wave, chain, identity
                 heuristic solvers behind the same interface
    registry     name -> solver factory
"""

from .models import SolverConfig
from .base import Solver, stream_in_thread
from .deltas import DeltaTable
from .ordering import Ordering, build_ordering, pick_start_vertex
from .propagation import PropagationGrid
from .tree_search import TreeSearchSolver
from .identity import IdSolver
from .annealing import AnnealingSolver, energy
from .jammer import JammerSolver
from .wave import WaveSolver
from .chain import ChainSolver
from .registry import (
    SolverRegistry, UnknownSolverError, build_default_registry,
)

__all__ = [
    # Config
    "SolverConfig",
    # Interface
    "Solver", "stream_in_thread",
    # Tree search
    "DeltaTable", "Ordering", "build_ordering", "pick_start_vertex",
    "PropagationGrid", "TreeSearchSolver",
    # Heuristics
    "IdSolver", "AnnealingSolver", "energy", "JammerSolver", "WaveSolver",
    "ChainSolver",
    # Registry
    "SolverRegistry", "UnknownSolverError", "build_default_registry",
]
