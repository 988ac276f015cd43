import unittest
import sys
import os

# Add project root to path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from turnloop.grid import Grid, are_opposite, is_adjacent


class TestAdjacency(unittest.TestCase):
    def test_edge_neighbours_are_adjacent(self):
        self.assertTrue(is_adjacent((0, 0), (0, 1)))
        self.assertTrue(is_adjacent((2, 3), (1, 3)))

    def test_diagonal_is_not_adjacent(self):
        self.assertFalse(is_adjacent((0, 0), (1, 1)))

    def test_same_cell_is_not_adjacent(self):
        self.assertFalse(is_adjacent((2, 2), (2, 2)))

    def test_distance_two_is_not_adjacent(self):
        self.assertFalse(is_adjacent((2, 2), (2, 4)))

    def test_opposite_sides(self):
        self.assertTrue(are_opposite((1, 1), (0, 1), (2, 1)))
        self.assertTrue(are_opposite((1, 1), (1, 0), (1, 2)))
        self.assertFalse(are_opposite((1, 1), (0, 1), (1, 2)))


class TestGrid(unittest.TestCase):
    def setUp(self):
        self.grid = Grid(4)

    def test_too_small_grid_rejected(self):
        with self.assertRaises(ValueError):
            Grid(1)

    def test_cells_row_major(self):
        cells = list(self.grid.cells())
        self.assertEqual(len(cells), 16)
        self.assertEqual(cells[0], (0, 0))
        self.assertEqual(cells[5], (1, 1))

    def test_index_and_cell_at_agree(self):
        self.assertEqual(self.grid.index((2, 3)), 11)
        self.assertEqual(self.grid.cell_at(11), (2, 3))

    def test_neighbors_clipped_at_corner(self):
        self.assertEqual(sorted(self.grid.neighbors((0, 0))), [(0, 1), (1, 0)])
        self.assertEqual(len(self.grid.neighbors((1, 2))), 4)

    def test_neighborhood_sizes(self):
        self.assertEqual(len(self.grid.neighborhood_3x3((0, 0))), 4)
        self.assertEqual(len(self.grid.neighborhood_3x3((0, 1))), 6)
        self.assertEqual(len(self.grid.neighborhood_3x3((1, 1))), 9)
        self.assertEqual(len(self.grid.neighborhood_3x3((3, 3))), 4)

    def test_neighborhood_includes_center(self):
        self.assertIn((2, 2), self.grid.neighborhood_3x3((2, 2)))

    def test_pixel_resolution(self):
        self.assertEqual(self.grid.cell_at_pixel(130, 70, 60), (1, 2))
        self.assertEqual(self.grid.cell_at_pixel(0, 0, 60), (0, 0))

    def test_pixel_outside_grid(self):
        self.assertIsNone(self.grid.cell_at_pixel(-1, 5, 60))
        self.assertIsNone(self.grid.cell_at_pixel(240, 0, 60))
        self.assertIsNone(self.grid.cell_at_pixel(10, 300, 60))

    def test_pixel_resolution_needs_positive_cell_size(self):
        with self.assertRaises(ValueError):
            self.grid.cell_at_pixel(10, 10, 0)

    def test_shortest_path_walks_adjacent_cells(self):
        path = self.grid.shortest_path((0, 0), (2, 1))
        self.assertEqual(path, [(1, 0), (2, 0), (2, 1)])

    def test_shortest_path_length_is_manhattan_distance(self):
        path = self.grid.shortest_path((3, 0), (0, 3))
        self.assertEqual(len(path), 6)
        self.assertEqual(path[-1], (0, 3))
        prev = (3, 0)
        for cell in path:
            self.assertTrue(is_adjacent(prev, cell))
            prev = cell

    def test_shortest_path_to_self_is_empty(self):
        self.assertEqual(self.grid.shortest_path((1, 1), (1, 1)), [])

    def test_shortest_path_off_grid_is_empty(self):
        self.assertEqual(self.grid.shortest_path((1, 1), (4, 4)), [])


if __name__ == '__main__':
    unittest.main()
