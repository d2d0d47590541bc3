"""Randomized greedy placement of candidate words onto a square grid.

Two variants share the legality rules of :class:`LetterGrid`:

* :class:`GridScanPlacer` makes a single pass over the pool, longest words
  first. A word with no legal position is dropped for the rest of the
  attempt.
* :class:`AnchorGrowthPlacer` grows the grid from shared letters over several
  passes and keeps at most one entry per row (ACROSS) or column (DOWN).
"""

from __future__ import annotations

import random
from typing import List, Optional, Protocol, Sequence, Union

from ..core.constants import DEFAULT_GROWTH_CYCLES, MIN_VIABLE_ENTRIES, Strategy
from ..core.models import CandidateWord, Layout
from ..utils.logger import get_logger
from .grid import LetterGrid, Placement


LOGGER = get_logger(__name__)


class Placer(Protocol):
    """Protocol implemented by every placement engine."""

    strategy: Strategy

    def attempt(
        self,
        candidates: Sequence[CandidateWord],
        target: int,
        size: int,
        rng: random.Random,
    ) -> Optional[Layout]:
        ...


class _GreedyPlacer:
    strategy: Strategy

    def __init__(self, min_entries: int = MIN_VIABLE_ENTRIES) -> None:
        self.min_entries = max(MIN_VIABLE_ENTRIES, min_entries)

    @staticmethod
    def _order(candidates: Sequence[CandidateWord]) -> List[CandidateWord]:
        # Stable sort: equal-length words keep the caller's shuffled order.
        return sorted(candidates, key=lambda candidate: len(candidate.word), reverse=True)

    @staticmethod
    def _seed(grid: LetterGrid, pool: List[CandidateWord]) -> List[CandidateWord]:
        """Place the first word that fits and return the rest of the pool."""

        for index, candidate in enumerate(pool):
            if grid.place_seed(candidate) is not None:
                return pool[:index] + pool[index + 1 :]
        return []

    @staticmethod
    def _choose(placements: Sequence[Placement], rng: random.Random) -> Placement:
        best = max(placement.intersections for placement in placements)
        top = [placement for placement in placements if placement.intersections == best]
        return rng.choice(top)

    def _finish(self, grid: LetterGrid, target: int) -> Optional[Layout]:
        placed = len(grid.entries)
        if placed < self.min_entries:
            LOGGER.debug(
                "%s attempt placed %s/%s words (minimum %s); discarding",
                self.strategy.value,
                placed,
                target,
                self.min_entries,
            )
            return None
        return grid.to_layout()


class GridScanPlacer(_GreedyPlacer):
    """Single pass, drop-on-failure placement."""

    strategy = Strategy.SCAN

    def attempt(
        self,
        candidates: Sequence[CandidateWord],
        target: int,
        size: int,
        rng: random.Random,
    ) -> Optional[Layout]:
        grid = LetterGrid(size)
        pool = self._seed(grid, self._order(candidates))
        if not grid.entries:
            return None

        dropped = 0
        for candidate in pool:
            if len(grid.entries) >= target:
                break
            placements = grid.scan_placements(candidate.word)
            if not placements:
                dropped += 1
                continue
            grid.place(candidate, self._choose(placements, rng))

        LOGGER.debug("Grid scan placed %s words, dropped %s", len(grid.entries), dropped)
        return self._finish(grid, target)


class AnchorGrowthPlacer(_GreedyPlacer):
    """Grows the grid from shared letters over a bounded number of passes."""

    strategy = Strategy.ANCHOR

    def __init__(
        self,
        min_entries: int = MIN_VIABLE_ENTRIES,
        cycles: int = DEFAULT_GROWTH_CYCLES,
        one_per_line: bool = True,
    ) -> None:
        super().__init__(min_entries)
        self.cycles = max(1, cycles)
        self.one_per_line = one_per_line

    def attempt(
        self,
        candidates: Sequence[CandidateWord],
        target: int,
        size: int,
        rng: random.Random,
    ) -> Optional[Layout]:
        grid = LetterGrid(size)
        pool = self._seed(grid, self._order(candidates))
        if not grid.entries:
            return None

        cycles_run = 0
        for _ in range(self.cycles):
            if not pool or len(grid.entries) >= target:
                break
            cycles_run += 1
            remaining: List[CandidateWord] = []
            for candidate in pool:
                if len(grid.entries) >= target:
                    remaining.append(candidate)
                    continue
                placements = grid.crossing_placements(candidate.word, self.one_per_line)
                if placements:
                    grid.place(candidate, self._choose(placements, rng))
                else:
                    remaining.append(candidate)
            if len(remaining) == len(pool):
                break
            pool = remaining

        LOGGER.debug(
            "Anchor growth placed %s words in %s cycles, %s left over",
            len(grid.entries),
            cycles_run,
            len(pool),
        )
        return self._finish(grid, target)


def build_placer(
    strategy: Union[Strategy, str],
    min_entries: int = MIN_VIABLE_ENTRIES,
    cycles: int = DEFAULT_GROWTH_CYCLES,
) -> Placer:
    strategy = Strategy(strategy)
    if strategy == Strategy.SCAN:
        return GridScanPlacer(min_entries=min_entries)
    return AnchorGrowthPlacer(min_entries=min_entries, cycles=cycles)
