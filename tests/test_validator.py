import unittest

from opencross.core.constants import Direction
from opencross.core.models import Layout, PlacedEntry
from opencross.engine.validator import LayoutValidator


def layout_from(size, *entries: PlacedEntry) -> Layout:
    grid = [[None] * size for _ in range(size)]
    for entry in entries:
        for (row, col), letter in zip(entry.cells, entry.word):
            grid[row][col] = letter
    return Layout(grid=grid, entries=list(entries), size=size)


GALAXY = PlacedEntry("GALAXY", "c", 5, 2, Direction.ACROSS)
STAR = PlacedEntry("STAR", "c", 3, 3, Direction.DOWN, intersections=1)
TOY = PlacedEntry("TOY", "c", 3, 7, Direction.DOWN, intersections=1)


class LayoutValidatorTests(unittest.TestCase):
    def setUp(self) -> None:
        self.validator = LayoutValidator()

    def assertRejected(self, layout: Layout, fragment: str) -> None:
        result = self.validator.validate(layout)
        self.assertFalse(result.ok)
        self.assertIn(fragment, result.messages[0])

    def test_valid_layout(self) -> None:
        result = self.validator.validate(layout_from(10, GALAXY, STAR, TOY))
        self.assertTrue(result.ok)
        self.assertEqual(result.messages, [])

    def test_empty_layout(self) -> None:
        self.assertRejected(layout_from(5), "no entries")

    def test_out_of_bounds(self) -> None:
        entry = PlacedEntry("GALAXY", "c", 0, 6, Direction.ACROSS)
        layout = Layout(grid=[[None] * 10 for _ in range(10)], entries=[entry], size=10)
        self.assertRejected(layout, "leaves the grid")

    def test_letter_conflict(self) -> None:
        layout = layout_from(10, GALAXY, STAR)
        layout.grid[5][3] = "O"
        self.assertRejected(layout, "Letter conflict")

    def test_orphan_letter(self) -> None:
        layout = layout_from(10, GALAXY, STAR)
        layout.grid[0][0] = "Q"
        self.assertRejected(layout, "Orphan letter")

    def test_duplicate_word(self) -> None:
        other = PlacedEntry("STAR", "c", 3, 5, Direction.DOWN)
        self.assertRejected(layout_from(10, GALAXY, STAR, other), "Duplicate")

    def test_parallel_overlap(self) -> None:
        shorter = PlacedEntry("GALA", "c", 5, 2, Direction.ACROSS)
        self.assertRejected(layout_from(10, GALAXY, shorter), "Parallel")

    def test_entry_running_into_letter(self) -> None:
        short = PlacedEntry("STA", "c", 3, 3, Direction.DOWN)
        layout = layout_from(10, GALAXY, short)
        layout.grid[6][3] = "R"
        layout.entries.append(PlacedEntry("RUG", "c", 6, 3, Direction.ACROSS))
        layout.grid[6][4], layout.grid[6][5] = "U", "G"
        self.assertRejected(layout, "runs into")

    def test_side_by_side_entries(self) -> None:
        below = PlacedEntry("TOY", "c", 6, 3, Direction.ACROSS)
        self.assertRejected(layout_from(10, GALAXY, below), "neighbour")

    def test_disconnected(self) -> None:
        far = PlacedEntry("TOY", "c", 0, 0, Direction.ACROSS)
        self.assertRejected(layout_from(10, GALAXY, far), "not connected")


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
