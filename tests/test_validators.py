import unittest
import sys
import os

# Add project root to path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from turnloop.connection_graph import ConnectionGraph
from turnloop.generators.demo_puzzle import DEMO_LOOP_2X2, DEMO_LOOP_4X4
from turnloop.grid import Grid
from turnloop.loop_model import build_turn_map
from turnloop.validators import (
    LoopFeedback, check_all_cells_visited, check_partial_structural_loop,
    check_structural_loop, check_win, check_win_condition, evaluate_loop, hint_status,
)
from turnloop.validators import _component_stats_via_dsu

ALL_CELLS = [(r, c) for r in range(4) for c in range(4)]
TRANSPOSED_LOOP = [(c, r) for r, c in DEMO_LOOP_4X4]
TOP_RING = [(0, 0), (0, 1), (0, 2), (0, 3), (1, 3), (1, 2), (1, 1), (1, 0)]
BOTTOM_RING = [(r + 2, c) for r, c in TOP_RING]


def graph_from_rings(size, *rings):
    graph = ConnectionGraph(size)
    for ring in rings:
        for i, cell in enumerate(ring):
            graph.force_connect(cell, ring[(i + 1) % len(ring)])
    return graph


class TestCheckWin(unittest.TestCase):
    def setUp(self):
        self.grid = Grid(4)

    def test_solution_wins_with_every_hint(self):
        graph = ConnectionGraph.from_loop(DEMO_LOOP_4X4)
        won, reason = check_win_condition(self.grid, graph, DEMO_LOOP_4X4, ALL_CELLS)
        self.assertTrue(won)
        self.assertEqual(reason, "Winner")

    def test_any_full_loop_wins_without_hints(self):
        graph = ConnectionGraph.from_loop(TRANSPOSED_LOOP)
        self.assertTrue(check_win(self.grid, graph, DEMO_LOOP_4X4, []))

    def test_hints_decide_not_solution_identity(self):
        # The transposed loop agrees with the solution around (0,0) only
        graph = ConnectionGraph.from_loop(TRANSPOSED_LOOP)
        self.assertTrue(check_win(self.grid, graph, DEMO_LOOP_4X4, [(0, 0)]))
        won, reason = check_win_condition(self.grid, graph, DEMO_LOOP_4X4, [(1, 2)])
        self.assertFalse(won)
        self.assertEqual(reason, "Hints not satisfied")

    def test_missing_cells(self):
        graph = graph_from_rings(4, DEMO_LOOP_2X2)
        won, reason = check_win_condition(self.grid, graph, DEMO_LOOP_4X4, [])
        self.assertFalse(won)
        self.assertEqual(reason, "Not every cell is on the loop")

    def test_open_end(self):
        graph = ConnectionGraph.from_loop(DEMO_LOOP_4X4)
        graph.remove_connection((0, 0), (0, 1))
        won, reason = check_win_condition(self.grid, graph, DEMO_LOOP_4X4, [])
        self.assertFalse(won)
        self.assertEqual(reason, "Not a closed loop")

    def test_two_loops(self):
        graph = graph_from_rings(4, TOP_RING, BOTTOM_RING)
        won, reason = check_win_condition(self.grid, graph, DEMO_LOOP_4X4, [])
        self.assertFalse(won)
        self.assertEqual(reason, "Multiple loops detected")

    def test_precomputed_turn_map(self):
        graph = ConnectionGraph.from_loop(DEMO_LOOP_4X4)
        turn_map = build_turn_map(DEMO_LOOP_4X4)
        self.assertTrue(check_win(self.grid, graph, [], ALL_CELLS, solution_turn_map=turn_map))


class TestStructure(unittest.TestCase):
    def test_small_loop_is_structural_but_partial(self):
        graph = graph_from_rings(4, DEMO_LOOP_2X2)
        self.assertTrue(check_partial_structural_loop(graph))
        self.assertFalse(check_structural_loop(graph))
        self.assertFalse(check_all_cells_visited(graph))

    def test_two_rings_are_not_one_loop(self):
        graph = graph_from_rings(4, TOP_RING, BOTTOM_RING)
        self.assertFalse(check_partial_structural_loop(graph))

    def test_path_is_not_a_loop(self):
        graph = ConnectionGraph(4)
        graph.force_connect((0, 0), (0, 1))
        graph.force_connect((0, 1), (0, 2))
        self.assertFalse(check_partial_structural_loop(graph))

    def test_full_loop(self):
        self.assertTrue(check_structural_loop(ConnectionGraph.from_loop(DEMO_LOOP_4X4)))

    def test_component_stats(self):
        cells = [(0, 0), (0, 1), (0, 2), (3, 3)]
        edges = {((0, 0), (0, 1)), ((0, 1), (0, 2)), ((3, 3), (3, 2))}
        self.assertEqual(_component_stats_via_dsu(cells, edges), (2, 3))
        self.assertEqual(_component_stats_via_dsu([], set()), (0, 0))


class TestFeedback(unittest.TestCase):
    def setUp(self):
        self.grid = Grid(4)
        self.turn_map = build_turn_map(DEMO_LOOP_4X4)

    def test_open_drawing(self):
        graph = ConnectionGraph(4)
        graph.force_connect((0, 0), (0, 1))
        self.assertEqual(evaluate_loop(self.grid, graph, {}, self.turn_map), LoopFeedback.OPEN)

    def test_small_loop_incomplete(self):
        graph = graph_from_rings(4, DEMO_LOOP_2X2)
        self.assertEqual(evaluate_loop(self.grid, graph, {}, self.turn_map), LoopFeedback.INCOMPLETE)

    def test_small_loop_hint_mismatch(self):
        graph = graph_from_rings(4, DEMO_LOOP_2X2)
        feedback = evaluate_loop(self.grid, graph, {(0, 0): 2}, self.turn_map)
        self.assertEqual(feedback, LoopFeedback.HINTS_MISMATCH)

    def test_solved(self):
        graph = ConnectionGraph.from_loop(DEMO_LOOP_4X4)
        feedback = evaluate_loop(self.grid, graph, {(1, 2): 5}, self.turn_map)
        self.assertEqual(feedback, LoopFeedback.SOLVED)

    def test_hint_status(self):
        graph = ConnectionGraph.from_loop(TRANSPOSED_LOOP)
        status = hint_status(self.grid, graph, {(0, 0): 2, (1, 2): 5})
        self.assertEqual(status, {(0, 0): True, (1, 2): False})


if __name__ == '__main__':
    unittest.main()
