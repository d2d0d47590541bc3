"""Data models supporting the crossword engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .constants import Direction


@dataclass(frozen=True)
class CandidateWord:
    """A word offered to the engine together with its clue."""

    word: str
    clue: str
    source: str = "unknown"


@dataclass(frozen=True)
class PlacedEntry:
    """A word committed to the grid."""

    word: str
    clue: str
    row: int
    col: int
    direction: Direction
    intersections: int = 0
    number: Optional[int] = None

    @property
    def length(self) -> int:
        return len(self.word)

    @property
    def cells(self) -> List[Tuple[int, int]]:
        dr, dc = self.direction.step
        return [(self.row + dr * i, self.col + dc * i) for i in range(self.length)]

    @property
    def end(self) -> Tuple[int, int]:
        dr, dc = self.direction.step
        return self.row + dr * (self.length - 1), self.col + dc * (self.length - 1)

    def covers(self, row: int, col: int) -> bool:
        if self.direction == Direction.ACROSS:
            return row == self.row and self.col <= col < self.col + self.length
        return col == self.col and self.row <= row < self.row + self.length


@dataclass(frozen=True)
class ClueEntry:
    """One line of the across or down clue list."""

    number: int
    row: int
    col: int
    direction: Direction
    length: int
    clue: str
    answer: str


@dataclass
class Layout:
    """A finished grid together with the entries that produced it."""

    grid: List[List[Optional[str]]]
    entries: List[PlacedEntry]
    size: int
    numbers: List[List[Optional[int]]] = field(default_factory=list)
    across: List[ClueEntry] = field(default_factory=list)
    down: List[ClueEntry] = field(default_factory=list)

    @property
    def word_count(self) -> int:
        return len(self.entries)

    @property
    def total_intersections(self) -> int:
        return sum(entry.intersections for entry in self.entries)

    @property
    def is_indexed(self) -> bool:
        return bool(self.numbers)

    def letter(self, row: int, col: int) -> Optional[str]:
        if not (0 <= row < self.size and 0 <= col < self.size):
            return None
        return self.grid[row][col]

    def is_letter_cell(self, row: int, col: int) -> bool:
        return self.letter(row, col) is not None

    def entries_at(self, row: int, col: int) -> List[PlacedEntry]:
        return [entry for entry in self.entries if entry.covers(row, col)]

    def to_jsonable(self) -> Dict[str, Any]:
        def clue_list(clues: List[ClueEntry]) -> List[Dict[str, Any]]:
            return [
                {
                    "number": clue.number,
                    "row": clue.row,
                    "col": clue.col,
                    "direction": clue.direction.value,
                    "length": clue.length,
                    "clue": clue.clue,
                    "answer": clue.answer,
                }
                for clue in clues
            ]

        return {
            "size": self.size,
            "word_count": self.word_count,
            "grid": [row[:] for row in self.grid],
            "numbers": [row[:] for row in self.numbers],
            "across": clue_list(self.across),
            "down": clue_list(self.down),
        }
