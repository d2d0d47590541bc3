"""Best-of-N selection over independent placement attempts."""

from __future__ import annotations

import random
from typing import Optional, Sequence

from ..core.constants import DEFAULT_ATTEMPTS, ENTRY_WEIGHT
from ..core.models import CandidateWord, Layout
from ..utils.logger import get_logger
from .placement import Placer
from .validator import LayoutValidator


LOGGER = get_logger(__name__)


def score_layout(layout: Layout) -> int:
    """Entry count dominates; crossings only break ties between equal counts."""

    return ENTRY_WEIGHT * layout.word_count + layout.total_intersections


class LayoutSelector:
    """Runs the randomized placer several times and keeps the best layout."""

    def __init__(
        self,
        placer: Placer,
        attempts: int = DEFAULT_ATTEMPTS,
        rng: Optional[random.Random] = None,
        validator: Optional[LayoutValidator] = None,
    ) -> None:
        if attempts < 1:
            raise ValueError(f"attempts must be positive, got {attempts}")
        self.placer = placer
        self.attempts = attempts
        self.rng = rng or random.Random()
        self.validator = validator or LayoutValidator()

    def select(
        self,
        candidates: Sequence[CandidateWord],
        target: int,
        size: int,
    ) -> Optional[Layout]:
        best: Optional[Layout] = None
        best_score = -1
        for attempt in range(1, self.attempts + 1):
            pool = list(candidates)
            self.rng.shuffle(pool)
            attempt_rng = random.Random(self.rng.randint(0, 2**31))
            layout = self.placer.attempt(pool, target, size, attempt_rng)
            if layout is None:
                LOGGER.debug("Attempt %s/%s produced no layout", attempt, self.attempts)
                continue
            validation = self.validator.validate(layout)
            if not validation.ok:
                LOGGER.warning(
                    "Attempt %s/%s rejected: %s", attempt, self.attempts, validation.messages
                )
                continue
            score = score_layout(layout)
            LOGGER.debug(
                "Attempt %s/%s: %s words, %s crossings, score %s",
                attempt,
                self.attempts,
                layout.word_count,
                layout.total_intersections,
                score,
            )
            if score > best_score:
                best, best_score = layout, score

        if best is None:
            LOGGER.warning(
                "No %s attempt out of %s reached the minimum entry count",
                self.placer.strategy.value,
                self.attempts,
            )
            return None
        LOGGER.info(
            "Selected layout with %s words and %s crossings (score %s, %s strategy)",
            best.word_count,
            best.total_intersections,
            best_score,
            self.placer.strategy.value,
        )
        return best
