"""Grid buffer and placement legality helpers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Optional, Set, Tuple

from ..core.constants import Bounds, Direction
from ..core.exceptions import PlacementError
from ..core.models import CandidateWord, Layout, PlacedEntry
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class Placement:
    """A legal position for a word together with its intersection score."""

    row: int
    col: int
    direction: Direction
    intersections: int


class LetterGrid:
    """Square letter buffer owned by a single placement attempt.

    Besides the letters, every cell remembers which orientations already run
    through it, so a new word may cross an existing one but never run along
    it.
    """

    def __init__(self, size: int) -> None:
        if size < 1:
            raise ValueError(f"Grid size must be positive, got {size}")
        self.size = size
        self.bounds = Bounds(rows=size, cols=size)
        self.cells: List[List[Optional[str]]] = [[None] * size for _ in range(size)]
        self._occupancy: List[List[Set[Direction]]] = [
            [set() for _ in range(size)] for _ in range(size)
        ]
        self.entries: List[PlacedEntry] = []
        self._across_rows: Set[int] = set()
        self._down_cols: Set[int] = set()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def letter(self, row: int, col: int) -> Optional[str]:
        if not self.bounds.contains(row, col):
            return None
        return self.cells[row][col]

    def is_filled(self, row: int, col: int) -> bool:
        return self.letter(row, col) is not None

    def filled_cells(self) -> Iterator[Tuple[int, int, str]]:
        for r in range(self.size):
            for c in range(self.size):
                letter = self.cells[r][c]
                if letter is not None:
                    yield r, c, letter

    def line_taken(self, direction: Direction, row: int, col: int) -> bool:
        """True if a parallel entry already occupies this row (ACROSS) or column (DOWN)."""

        if direction == Direction.ACROSS:
            return row in self._across_rows
        return col in self._down_cols

    def check_placement(self, word: str, row: int, col: int, direction: Direction) -> Optional[int]:
        """Return the intersection count for a legal placement, ``None`` otherwise."""

        dr, dc = direction.step
        length = len(word)
        end_row, end_col = row + dr * (length - 1), col + dc * (length - 1)
        if not (self.bounds.contains(row, col) and self.bounds.contains(end_row, end_col)):
            return None
        if self.is_filled(row - dr, col - dc) or self.is_filled(end_row + dr, end_col + dc):
            return None

        pr, pc = dc, dr
        intersections = 0
        for index, letter in enumerate(word):
            r, c = row + dr * index, col + dc * index
            existing = self.cells[r][c]
            if existing is not None:
                if existing != letter or direction in self._occupancy[r][c]:
                    return None
                intersections += 1
            elif self.is_filled(r - pr, c - pc) or self.is_filled(r + pr, c + pc):
                return None

        if self.entries and intersections == 0:
            return None
        return intersections

    # ------------------------------------------------------------------
    # Candidate positions
    # ------------------------------------------------------------------
    def seed_position(self, word: str) -> Tuple[int, int]:
        return self.size // 2, (self.size - len(word)) // 2

    def scan_placements(self, word: str) -> List[Placement]:
        """Every legal placement of ``word`` on the current grid.

        A legal placement must reuse at least one letter, so the scan walks
        the filled cells in row-major order and tries both orientations
        through every cell whose letter occurs in ``word``.
        """

        seen: Set[Tuple[int, int, Direction]] = set()
        placements: List[Placement] = []
        for r, c, letter in self.filled_cells():
            for index, char in enumerate(word):
                if char != letter:
                    continue
                for direction in (Direction.DOWN, Direction.ACROSS):
                    dr, dc = direction.step
                    key = (r - dr * index, c - dc * index, direction)
                    if key in seen:
                        continue
                    seen.add(key)
                    score = self.check_placement(word, *key)
                    if score is not None:
                        placements.append(Placement(key[0], key[1], direction, score))
        return placements

    def crossing_placements(self, word: str, one_per_line: bool = True) -> List[Placement]:
        """Placements crossing a placed entry on a shared letter."""

        seen: Set[Tuple[int, int, Direction]] = set()
        placements: List[Placement] = []
        for anchor in self.entries:
            direction = anchor.direction.other
            for anchor_index, anchor_letter in enumerate(anchor.word):
                for index, char in enumerate(word):
                    if char != anchor_letter:
                        continue
                    if direction == Direction.ACROSS:
                        row, col = anchor.row + anchor_index, anchor.col - index
                    else:
                        row, col = anchor.row - index, anchor.col + anchor_index
                    key = (row, col, direction)
                    if key in seen:
                        continue
                    seen.add(key)
                    if one_per_line and self.line_taken(direction, row, col):
                        continue
                    score = self.check_placement(word, row, col, direction)
                    if score is not None:
                        placements.append(Placement(row, col, direction, score))
        return placements

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------
    def place(self, candidate: CandidateWord, placement: Placement) -> PlacedEntry:
        word = candidate.word
        score = self.check_placement(word, placement.row, placement.col, placement.direction)
        if score is None:
            raise PlacementError(
                f"Illegal placement of {word} at ({placement.row},{placement.col}) "
                f"{placement.direction.value}"
            )

        entry = PlacedEntry(
            word=word,
            clue=candidate.clue,
            row=placement.row,
            col=placement.col,
            direction=placement.direction,
            intersections=score,
        )
        for (r, c), letter in zip(entry.cells, word):
            self.cells[r][c] = letter
            self._occupancy[r][c].add(entry.direction)
        self.entries.append(entry)
        if entry.direction == Direction.ACROSS:
            self._across_rows.add(entry.row)
        else:
            self._down_cols.add(entry.col)
        return entry

    def place_seed(self, candidate: CandidateWord) -> Optional[PlacedEntry]:
        """Place the first word centered and horizontally; ``None`` if it does not fit."""

        if self.entries:
            raise PlacementError("Seed word must be the first entry")
        row, col = self.seed_position(candidate.word)
        if self.check_placement(candidate.word, row, col, Direction.ACROSS) is None:
            return None
        return self.place(candidate, Placement(row, col, Direction.ACROSS, 0))

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------
    def to_layout(self) -> Layout:
        return Layout(
            grid=[row[:] for row in self.cells],
            entries=list(self.entries),
            size=self.size,
        )
