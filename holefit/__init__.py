"""holefit — embed integer-lattice figures into hole polygons.

Subpackages:
    geometry   pure-python polygon utilities
    problem    problem / pose models, parsing, scoring, serialization
    solver     tree search, heuristics and the solver registry
    web        FastAPI viewer backend
"""
