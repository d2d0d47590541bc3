"""Crossword numbering and clue list construction."""

from __future__ import annotations

from dataclasses import replace
from typing import Dict, List, Optional, Tuple

from ..core.constants import Direction
from ..core.models import ClueEntry, Layout, PlacedEntry
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


def _filled(grid: List[List[Optional[str]]], row: int, col: int) -> bool:
    size = len(grid)
    return 0 <= row < size and 0 <= col < size and grid[row][col] is not None


def starts_across(grid: List[List[Optional[str]]], row: int, col: int) -> bool:
    return _filled(grid, row, col) and not _filled(grid, row, col - 1) and _filled(grid, row, col + 1)


def starts_down(grid: List[List[Optional[str]]], row: int, col: int) -> bool:
    return _filled(grid, row, col) and not _filled(grid, row - 1, col) and _filled(grid, row + 1, col)


def index_layout(layout: Layout) -> Layout:
    """Number the grid in row-major order and build the across/down clue lists.

    A cell gets the next number when it starts an across run or a down run;
    a cell starting both shares one number. The input layout is not
    modified, so indexing the same layout twice gives identical results.
    """

    grid = layout.grid
    size = layout.size
    by_start: Dict[Tuple[int, int, Direction], PlacedEntry] = {
        (entry.row, entry.col, entry.direction): entry for entry in layout.entries
    }
    numbers: List[List[Optional[int]]] = [[None] * size for _ in range(size)]
    numbered: Dict[Tuple[int, int, Direction], PlacedEntry] = {}
    across: List[ClueEntry] = []
    down: List[ClueEntry] = []

    current = 1
    for row in range(size):
        for col in range(size):
            runs = []
            if starts_across(grid, row, col):
                runs.append(Direction.ACROSS)
            if starts_down(grid, row, col):
                runs.append(Direction.DOWN)
            if not runs:
                continue
            numbers[row][col] = current
            for direction in runs:
                entry = by_start.get((row, col, direction))
                if entry is None:
                    LOGGER.warning(
                        "Run starting at (%s,%s) %s has no placed entry", row, col, direction.value
                    )
                    continue
                numbered[(row, col, direction)] = replace(entry, number=current)
                clue = ClueEntry(
                    number=current,
                    row=row,
                    col=col,
                    direction=direction,
                    length=entry.length,
                    clue=entry.clue,
                    answer=entry.word,
                )
                (across if direction == Direction.ACROSS else down).append(clue)
            current += 1

    entries = [
        numbered.get((entry.row, entry.col, entry.direction), entry) for entry in layout.entries
    ]
    entries.sort(key=lambda entry: (entry.number is None, entry.number or 0, entry.direction.value))
    return Layout(
        grid=[row[:] for row in grid],
        entries=entries,
        size=size,
        numbers=numbers,
        across=across,
        down=down,
    )
