"""Tests for the heuristic solvers and the solver registry."""

from __future__ import annotations

import threading
import unittest

from holefit.problem import Pose, validate
from holefit.solver import (
    AnnealingSolver, ChainSolver, IdSolver, JammerSolver, Solver, SolverConfig,
    SolverRegistry, UnknownSolverError, WaveSolver, build_default_registry, energy,
)
from tests.fixtures import make_square_problem, make_triangle_problem


class TestIdSolver(unittest.TestCase):

    def test_returns_initial_pose(self):
        problem = make_triangle_problem()
        self.assertEqual(IdSolver().solve(problem).vertices, problem.figure.vertices)

    def test_returns_given_pose(self):
        problem = make_square_problem()
        pose = Pose(vertices=[(1, 1), (1, 3)])
        self.assertEqual(IdSolver().solve(problem, pose).vertices, [(1, 1), (1, 3)])


class TestAnnealing(unittest.TestCase):

    def setUp(self):
        self.problem = make_square_problem()
        self.config = SolverConfig(annealing_iterations=300)

    def test_energy_of_valid_pose_is_dislikes(self):
        pose = Pose(vertices=[(0, 0), (2, 0)])
        self.assertEqual(energy(self.problem, pose, self.config), 40.0)

    def test_energy_penalizes_outside_vertices(self):
        inside = Pose(vertices=[(0, 0), (2, 0)])
        outside = Pose(vertices=[(6, 0), (8, 0)])
        self.assertGreater(
            energy(self.problem, outside, self.config),
            energy(self.problem, inside, self.config),
        )

    def test_never_worse_than_start(self):
        for start in ([(0, 0), (2, 0)], [(9, 9), (11, 9)], [(1, 1), (1, 2)]):
            with self.subTest(start=start):
                pose = Pose(vertices=start)
                result = AnnealingSolver(self.config).solve(self.problem, pose)
                self.assertLessEqual(
                    energy(self.problem, result, self.config),
                    energy(self.problem, pose, self.config) + 1e-6,
                )

    def test_seeded_runs_match(self):
        start = Pose(vertices=[(9, 9), (11, 9)])
        a = AnnealingSolver(self.config).solve(self.problem, start)
        b = AnnealingSolver(self.config).solve(self.problem, start)
        self.assertEqual(a.vertices, b.vertices)

    def test_stream_improves_energy(self):
        start = Pose(vertices=[(9, 9), (11, 9)])
        energies = [
            energy(self.problem, p, self.config)
            for p in AnnealingSolver(self.config).solve_gen(self.problem, start)
        ]
        for before, after in zip(energies, energies[1:]):
            self.assertLess(after, before + 1e-6)

    def test_set_cancel_streams_nothing(self):
        cancel = threading.Event()
        cancel.set()
        start = Pose(vertices=[(9, 9), (11, 9)])
        stream = AnnealingSolver(self.config).solve_gen(self.problem, start, cancel)
        self.assertEqual(list(stream), [])


class TestJammer(unittest.TestCase):

    def test_pulls_outside_vertex_in(self):
        problem = make_square_problem()
        pose = JammerSolver().solve(problem, Pose(vertices=[(8, 2), (2, 2)]))
        self.assertEqual(pose.vertices, [(4, 2), (2, 2)])
        self.assertTrue(validate(problem, pose))

    def test_inside_pose_untouched(self):
        problem = make_square_problem()
        stream = list(JammerSolver().solve_gen(problem, Pose(vertices=[(0, 0), (2, 0)])))
        self.assertEqual(stream, [])

    def test_step_cap(self):
        problem = make_square_problem()
        start = Pose(vertices=[(40, 2), (2, 2)])
        pose = JammerSolver(SolverConfig(jammer_max_steps=3)).solve(problem, start)
        self.assertEqual(pose.vertices, start.vertices)


class TestWave(unittest.TestCase):

    def test_repairs_short_edge(self):
        problem = make_square_problem()
        pose = WaveSolver().solve(problem, Pose(vertices=[(1, 2), (2, 2)]))
        self.assertTrue(validate(problem, pose))

    def test_valid_pose_returned_as_is(self):
        problem = make_square_problem()
        stream = list(WaveSolver().solve_gen(problem, Pose(vertices=[(0, 0), (2, 0)])))
        self.assertEqual(len(stream), 1)
        self.assertEqual(stream[0].vertices, [(0, 0), (2, 0)])


class TestChain(unittest.TestCase):

    def test_second_starts_from_first(self):
        problem = make_square_problem()
        chain = ChainSolver(JammerSolver(), WaveSolver())
        self.assertEqual(chain.name, "jammer+wave")
        pose = chain.solve(problem, Pose(vertices=[(8, 2), (2, 2)]))
        self.assertEqual(pose.vertices, [(4, 2), (2, 2)])

    def test_cancel_reaches_both_stages(self):
        problem = make_square_problem()
        cancel = threading.Event()
        cancel.set()
        chain = ChainSolver(JammerSolver(), WaveSolver())
        stream = chain.solve_gen(problem, Pose(vertices=[(8, 2), (2, 2)]), cancel)
        self.assertEqual(list(stream), [])
        self.assertTrue(validate(problem, pose))


class TestRegistry(unittest.TestCase):

    def test_default_names(self):
        names = build_default_registry().names()
        self.assertEqual(names, sorted([
            "id", "tree_search", "annealing", "jammer", "wave",
            "jammer+annealing", "jammer+wave",
        ]))

    def test_every_solver_builds(self):
        registry = build_default_registry()
        for name in registry.names():
            with self.subTest(name=name):
                solver = registry.create(name)
                self.assertIsInstance(solver, Solver)
                self.assertEqual(solver.name, name)

    def test_unknown_solver(self):
        registry = build_default_registry()
        with self.assertRaises(UnknownSolverError):
            registry.create("telepathy")
        with self.assertRaises(KeyError):
            registry.create("telepathy")
        self.assertNotIn("telepathy", registry)

    def test_duplicate_registration(self):
        registry = SolverRegistry()
        registry.register("id", IdSolver)
        with self.assertRaises(ValueError):
            registry.register("id", IdSolver)

    def test_config_override(self):
        registry = build_default_registry(SolverConfig(seed=1))
        self.assertEqual(registry.create("annealing").config.seed, 1)
        self.assertEqual(registry.create("annealing", SolverConfig(seed=5)).config.seed, 5)


if __name__ == "__main__":
    unittest.main()
