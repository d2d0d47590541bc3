"""Deterministic rule validation for generated layouts."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, List, Set, Tuple

from ..core.exceptions import ValidationError
from ..core.models import Layout, PlacedEntry
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


@dataclass
class ValidationResult:
    ok: bool
    messages: List[str]


class LayoutValidator:
    """Runs deterministic validation over a finished layout."""

    def validate(self, layout: Layout) -> ValidationResult:
        messages: List[str] = []
        try:
            self._check_not_empty(layout)
            self._check_bounds(layout)
            coverage = self._check_letters(layout)
            self._check_no_duplicate_words(layout)
            self._check_no_parallel_runs(coverage)
            self._check_ends(layout)
            self._check_side_neighbors(layout, coverage)
            self._check_connected(layout, coverage)
        except ValidationError as exc:
            messages.append(str(exc))
            LOGGER.debug("Layout validation failed: %s", exc)
            return ValidationResult(ok=False, messages=messages)
        return ValidationResult(ok=True, messages=[])

    @staticmethod
    def _check_not_empty(layout: Layout) -> None:
        if not layout.entries:
            raise ValidationError("Layout has no entries")

    @staticmethod
    def _check_bounds(layout: Layout) -> None:
        for entry in layout.entries:
            for row, col in ((entry.row, entry.col), entry.end):
                if not (0 <= row < layout.size and 0 <= col < layout.size):
                    raise ValidationError(
                        f"Entry {entry.word} leaves the grid at ({row},{col})"
                    )

    @staticmethod
    def _check_letters(layout: Layout) -> Dict[Tuple[int, int], List[PlacedEntry]]:
        """Every entry letter must match the grid; every filled cell must be covered."""

        coverage: Dict[Tuple[int, int], List[PlacedEntry]] = defaultdict(list)
        for entry in layout.entries:
            for (row, col), letter in zip(entry.cells, entry.word):
                if layout.grid[row][col] != letter:
                    raise ValidationError(
                        f"Letter conflict at ({row},{col}): grid has "
                        f"'{layout.grid[row][col]}', {entry.word} needs '{letter}'"
                    )
                coverage[(row, col)].append(entry)

        for row in range(layout.size):
            for col in range(layout.size):
                letter = layout.grid[row][col]
                if letter is None:
                    continue
                if not letter.isalpha() or not letter.isupper():
                    raise ValidationError(f"Invalid letter '{letter}' at ({row},{col})")
                if (row, col) not in coverage:
                    raise ValidationError(f"Orphan letter at ({row},{col})")
        return coverage

    @staticmethod
    def _check_no_duplicate_words(layout: Layout) -> None:
        seen: Set[str] = set()
        for entry in layout.entries:
            if entry.word in seen:
                raise ValidationError(f"Duplicate word '{entry.word}'")
            seen.add(entry.word)

    @staticmethod
    def _check_no_parallel_runs(coverage: Dict[Tuple[int, int], List[PlacedEntry]]) -> None:
        for (row, col), entries in coverage.items():
            directions = [entry.direction for entry in entries]
            if len(entries) > 2 or len(set(directions)) != len(directions):
                words = ", ".join(entry.word for entry in entries)
                raise ValidationError(f"Parallel entries overlap at ({row},{col}): {words}")

    @staticmethod
    def _check_ends(layout: Layout) -> None:
        for entry in layout.entries:
            dr, dc = entry.direction.step
            end_row, end_col = entry.end
            for row, col in ((entry.row - dr, entry.col - dc), (end_row + dr, end_col + dc)):
                if layout.letter(row, col) is not None:
                    raise ValidationError(
                        f"Entry {entry.word} runs into a letter at ({row},{col})"
                    )

    @staticmethod
    def _check_side_neighbors(
        layout: Layout, coverage: Dict[Tuple[int, int], List[PlacedEntry]]
    ) -> None:
        """Cells owned by a single entry must have empty perpendicular neighbours."""

        for (row, col), entries in coverage.items():
            if len(entries) != 1:
                continue
            pr, pc = entries[0].direction.other.step
            for nr, nc in ((row - pr, col - pc), (row + pr, col + pc)):
                if layout.letter(nr, nc) is not None:
                    raise ValidationError(
                        f"Accidental neighbour of {entries[0].word} at ({nr},{nc})"
                    )

    @staticmethod
    def _check_connected(
        layout: Layout, coverage: Dict[Tuple[int, int], List[PlacedEntry]]
    ) -> None:
        if len(layout.entries) < 2:
            return
        links: Dict[int, Set[int]] = defaultdict(set)
        index_of = {id(entry): i for i, entry in enumerate(layout.entries)}
        for entries in coverage.values():
            if len(entries) == 2:
                a, b = (index_of[id(entry)] for entry in entries)
                links[a].add(b)
                links[b].add(a)

        seen = {0}
        frontier = [0]
        while frontier:
            current = frontier.pop()
            for neighbor in links[current]:
                if neighbor not in seen:
                    seen.add(neighbor)
                    frontier.append(neighbor)
        if len(seen) != len(layout.entries):
            isolated = [
                entry.word for i, entry in enumerate(layout.entries) if i not in seen
            ]
            raise ValidationError(f"Entries not connected to the grid: {', '.join(isolated)}")
