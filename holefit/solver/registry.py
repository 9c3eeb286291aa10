"""Solver registry — explicit name -> factory mapping built at startup."""

from __future__ import annotations

from typing import Callable

from .annealing import AnnealingSolver
from .base import Solver
from .chain import ChainSolver
from .identity import IdSolver
from .jammer import JammerSolver
from .models import SolverConfig
from .tree_search import TreeSearchSolver
from .wave import WaveSolver


SolverFactory = Callable[[SolverConfig], Solver]


class UnknownSolverError(KeyError):
    """Raised when a solver name is not registered."""


class SolverRegistry:

    def __init__(self, config: SolverConfig | None = None) -> None:
        self.config = config if config is not None else SolverConfig()
        self._factories: dict[str, SolverFactory] = {}

    def register(self, name: str, factory: SolverFactory) -> None:
        if name in self._factories:
            raise ValueError(f"Solver {name!r} is already registered")
        self._factories[name] = factory

    def names(self) -> list[str]:
        return sorted(self._factories)

    def __contains__(self, name: object) -> bool:
        return name in self._factories

    def create(self, name: str, config: SolverConfig | None = None) -> Solver:
        """Build a fresh solver; *config* overrides the registry default."""
        try:
            factory = self._factories[name]
        except KeyError:
            raise UnknownSolverError(
                f"Unknown solver {name!r}; available: {', '.join(self.names())}"
            ) from None
        return factory(config if config is not None else self.config)


def build_default_registry(config: SolverConfig | None = None) -> SolverRegistry:
    """Registry with every built-in solver."""
    registry = SolverRegistry(config)
    registry.register("id", IdSolver)
    registry.register("tree_search", TreeSearchSolver)
    registry.register("annealing", AnnealingSolver)
    registry.register("jammer", JammerSolver)
    registry.register("wave", WaveSolver)
    registry.register(
        "jammer+annealing",
        lambda cfg: ChainSolver(JammerSolver(cfg), AnnealingSolver(cfg), name="jammer+annealing"),
    )
    registry.register(
        "jammer+wave",
        lambda cfg: ChainSolver(JammerSolver(cfg), WaveSolver(cfg), name="jammer+wave"),
    )
    return registry
