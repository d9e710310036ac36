import unittest

from exam_seating.grid import CategoryGrid, Cell, InvalidGridError, iter_cells, neighbors


class TestNeighbors(unittest.TestCase):
    def test_corner(self):
        self.assertEqual(set(neighbors(0, 0, 3, 3)), {Cell(1, 0), Cell(0, 1)})

    def test_center(self):
        self.assertEqual(
            set(neighbors(1, 1, 3, 3)),
            {Cell(0, 1), Cell(2, 1), Cell(1, 0), Cell(1, 2)},
        )

    def test_single_row_has_no_wraparound(self):
        self.assertEqual(neighbors(0, 0, 1, 4), [Cell(0, 1)])
        self.assertEqual(neighbors(0, 3, 1, 4), [Cell(0, 2)])

    def test_single_column(self):
        self.assertEqual(set(neighbors(1, 0, 3, 1)), {Cell(0, 0), Cell(2, 0)})

    def test_single_cell(self):
        self.assertEqual(neighbors(0, 0, 1, 1), [])

    def test_iter_cells_is_row_major(self):
        self.assertEqual(
            list(iter_cells(2, 2)),
            [Cell(0, 0), Cell(0, 1), Cell(1, 0), Cell(1, 1)],
        )


class TestCategoryGrid(unittest.TestCase):
    def test_init(self):
        g = CategoryGrid(2, 3)
        self.assertEqual(g.rows, 2)
        self.assertEqual(g.cols, 3)
        self.assertFalse(g.is_assigned(0, 0))
        self.assertFalse(g.is_complete())

    def test_non_positive_dimensions_raise(self):
        with self.assertRaises(InvalidGridError):
            CategoryGrid(0, 3)
        with self.assertRaises(InvalidGridError):
            CategoryGrid(2, -1)

    def test_out_of_bounds_raises(self):
        g = CategoryGrid(1, 1)
        with self.assertRaises(InvalidGridError):
            g.get(1, 0)

    def test_can_place_checks_orthogonal_neighbors_only(self):
        g = CategoryGrid(2, 2)
        g.place(0, 0, "A")
        self.assertFalse(g.can_place(0, 1, "A"))
        self.assertFalse(g.can_place(1, 0, "A"))
        # diagonal is not adjacent
        self.assertTrue(g.can_place(1, 1, "A"))
        self.assertTrue(g.can_place(0, 1, "B"))

    def test_place_and_clear(self):
        g = CategoryGrid(1, 2)
        g.place(0, 1, "B")
        self.assertEqual(g.get(0, 1), "B")
        g.clear(0, 1)
        self.assertIsNone(g.get(0, 1))

    def test_frozen_grid_rejects_mutation(self):
        g = CategoryGrid.from_rows([["A", "B"]]).freeze()
        self.assertTrue(g.frozen)
        with self.assertRaises(InvalidGridError):
            g.place(0, 0, "B")
        with self.assertRaises(InvalidGridError):
            g.clear(0, 0)

    def test_counts_and_conflicts(self):
        g = CategoryGrid.from_rows([["A", "A"], ["B", "A"]])
        self.assertEqual(g.counts(), {"A": 3, "B": 1})
        self.assertEqual(
            g.conflicts(),
            [(Cell(0, 0), Cell(0, 1)), (Cell(0, 1), Cell(1, 1))],
        )

    def test_from_rows_rejects_ragged_and_empty(self):
        with self.assertRaises(InvalidGridError):
            CategoryGrid.from_rows([["A", "B"], ["A"]])
        with self.assertRaises(InvalidGridError):
            CategoryGrid.from_rows([])

    def test_dict_round_trip(self):
        g = CategoryGrid.from_rows([["A", None], ["B", "A"]])
        self.assertEqual(CategoryGrid.from_dict(g.to_dict()), g)

    def test_from_dict_invalid(self):
        with self.assertRaises(InvalidGridError):
            CategoryGrid.from_dict({"rows": 1})


if __name__ == "__main__":
    unittest.main()
