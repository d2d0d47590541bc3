import unittest

from opencross.core.constants import Direction
from opencross.core.exceptions import PlacementError
from opencross.core.models import CandidateWord
from opencross.engine.grid import LetterGrid, Placement


def word(text: str) -> CandidateWord:
    return CandidateWord(text, f"Clue for {text}")


def seeded_grid(size: int = 10, seed: str = "GALAXY") -> LetterGrid:
    grid = LetterGrid(size)
    grid.place_seed(word(seed))
    return grid


class LetterGridSeedTests(unittest.TestCase):
    def test_seed_is_centered_across(self) -> None:
        grid = seeded_grid()
        entry = grid.entries[0]
        self.assertEqual((entry.row, entry.col), (5, 2))
        self.assertEqual(entry.direction, Direction.ACROSS)
        self.assertEqual("".join(grid.cells[5][2:8]), "GALAXY")

    def test_seed_too_long_returns_none(self) -> None:
        grid = LetterGrid(4)
        self.assertIsNone(grid.place_seed(word("GALAXY")))
        self.assertEqual(grid.entries, [])

    def test_second_seed_is_rejected(self) -> None:
        grid = seeded_grid()
        with self.assertRaises(PlacementError):
            grid.place_seed(word("STAR"))

    def test_invalid_size(self) -> None:
        with self.assertRaises(ValueError):
            LetterGrid(0)


class LetterGridLegalityTests(unittest.TestCase):
    def setUp(self) -> None:
        self.grid = seeded_grid()

    def test_crossing_on_shared_letter(self) -> None:
        self.assertEqual(self.grid.check_placement("STAR", 3, 3, Direction.DOWN), 1)

    def test_out_of_bounds(self) -> None:
        self.assertIsNone(self.grid.check_placement("STAR", 8, 3, Direction.DOWN))
        self.assertIsNone(self.grid.check_placement("STAR", -1, 3, Direction.DOWN))

    def test_letter_mismatch(self) -> None:
        # STAR's T would land on GALAXY's A
        self.assertIsNone(self.grid.check_placement("STAR", 4, 3, Direction.DOWN))

    def test_requires_intersection_once_grid_is_not_empty(self) -> None:
        self.assertIsNone(self.grid.check_placement("TOY", 0, 0, Direction.ACROSS))

    def test_perpendicular_neighbour_rejected(self) -> None:
        self.grid.place(word("STAR"), Placement(3, 3, Direction.DOWN, 1))
        # O would sit directly above GALAXY's L
        self.assertIsNone(self.grid.check_placement("TOY", 4, 3, Direction.ACROSS))

    def test_word_may_not_run_along_a_parallel_entry(self) -> None:
        grid = seeded_grid(seed="STAR")
        entry = grid.entries[0]
        self.assertIsNone(grid.check_placement("STARE", entry.row, entry.col, Direction.ACROSS))

    def test_cell_after_word_end_must_be_empty(self) -> None:
        self.grid.place(word("ALE"), Placement(5, 3, Direction.DOWN, 1))
        self.grid.place(word("ARM"), Placement(5, 5, Direction.DOWN, 1))
        # TEA would stop right before ARM's M
        self.assertIsNone(self.grid.check_placement("TEA", 7, 2, Direction.ACROSS))
        self.assertEqual(self.grid.check_placement("TEAM", 7, 2, Direction.ACROSS), 2)

    def test_illegal_place_raises(self) -> None:
        with self.assertRaises(PlacementError):
            self.grid.place(word("STAR"), Placement(4, 3, Direction.DOWN, 1))


class LetterGridCandidateTests(unittest.TestCase):
    def test_scan_finds_every_crossing(self) -> None:
        grid = seeded_grid()
        found = {(p.row, p.col, p.direction) for p in grid.scan_placements("STAR")}
        self.assertEqual(found, {(3, 3, Direction.DOWN), (3, 5, Direction.DOWN)})

    def test_crossing_placements_match_scan_on_fresh_grid(self) -> None:
        grid = seeded_grid()
        scanned = {(p.row, p.col, p.direction) for p in grid.scan_placements("STAR")}
        crossing = {(p.row, p.col, p.direction) for p in grid.crossing_placements("STAR")}
        self.assertEqual(scanned, crossing)

    def test_one_entry_per_line(self) -> None:
        grid = LetterGrid(10)
        grid.place(word("CAT"), Placement(0, 0, Direction.ACROSS, 0))
        grid.place(word("COW"), Placement(0, 0, Direction.DOWN, 1))
        self.assertTrue(grid.line_taken(Direction.ACROSS, 0, 7))
        self.assertTrue(grid.line_taken(Direction.DOWN, 9, 0))
        self.assertFalse(grid.line_taken(Direction.DOWN, 0, 2))

        found = {(p.row, p.col, p.direction) for p in grid.crossing_placements("TAG")}
        self.assertIn((0, 2, Direction.DOWN), found)

        grid.place(word("TAG"), Placement(0, 2, Direction.DOWN, 1))
        self.assertTrue(grid.line_taken(Direction.DOWN, 5, 2))

    def test_line_rule_filters_crossings(self) -> None:
        grid = seeded_grid()
        grid._down_cols.add(3)
        strict = {(p.row, p.col) for p in grid.crossing_placements("STAR")}
        relaxed = {(p.row, p.col) for p in grid.crossing_placements("STAR", one_per_line=False)}
        self.assertEqual(strict, {(3, 5)})
        self.assertEqual(relaxed, {(3, 3), (3, 5)})

    def test_place_records_intersections(self) -> None:
        grid = seeded_grid()
        entry = grid.place(word("STAR"), Placement(3, 5, Direction.DOWN, 0))
        self.assertEqual(entry.intersections, 1)
        self.assertEqual(entry.cells, [(3, 5), (4, 5), (5, 5), (6, 5)])

    def test_to_layout_copies_cells(self) -> None:
        grid = seeded_grid()
        layout = grid.to_layout()
        layout.grid[5][2] = None
        self.assertEqual(grid.cells[5][2], "G")
        self.assertEqual(layout.word_count, 1)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
