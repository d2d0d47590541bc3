"""Crossword generation orchestration.

Pipeline:
  1. Collect a candidate pool from the word providers.
  2. Run the layout selector over randomized placement attempts.
  3. Number the winning layout and build its clue lists.
"""

from __future__ import annotations

import os
import random
from dataclasses import dataclass
from typing import List, Optional, Sequence, Set, Union

from ..core.constants import (
    DEFAULT_ATTEMPTS,
    DEFAULT_GROWTH_CYCLES,
    DEFAULT_SIZE_CLASS,
    MIN_VIABLE_ENTRIES,
    MIN_VIABLE_POOL,
    SizeClass,
    Strategy,
    get_size_class,
)
from ..core.exceptions import InsufficientCandidatesError, LayoutFailureError
from ..core.models import CandidateWord, Layout
from ..data.lexicon import (
    THEMES,
    BuiltinLexicon,
    DatamuseLexiconClient,
    GeminiLexiconClient,
    LexiconClient,
    merge_lexicons,
)
from ..data.normalization import is_playable_word
from ..utils.logger import get_logger
from .indexer import index_layout
from .placement import Placer, build_placer
from .selector import LayoutSelector


LOGGER = get_logger(__name__)


@dataclass
class GeneratorConfig:
    size_class: str = DEFAULT_SIZE_CLASS
    strategy: str = Strategy.ANCHOR.value
    attempts: int = DEFAULT_ATTEMPTS
    cycles: int = DEFAULT_GROWTH_CYCLES
    seed: Optional[int] = None
    pool_margin: int = 50
    request_timeout: float = 10.0

    @property
    def size(self) -> SizeClass:
        return get_size_class(self.size_class)

    @property
    def min_pool(self) -> int:
        return min(self.size.min_words, MIN_VIABLE_POOL)

    def to_placer(self, min_entries: int = MIN_VIABLE_ENTRIES) -> Placer:
        return build_placer(self.strategy, min_entries=min_entries, cycles=self.cycles)


@dataclass
class CrosswordResult:
    layout: Layout
    topic: str
    size_class: SizeClass
    pool_size: int
    seed: Optional[int] = None


def _usable_candidates(candidates: Sequence[CandidateWord]) -> List[CandidateWord]:
    usable: List[CandidateWord] = []
    seen: Set[str] = set()
    for candidate in candidates:
        if not is_playable_word(candidate.word) or not candidate.clue.strip():
            LOGGER.debug("Ignoring unusable candidate %r", candidate.word)
            continue
        if candidate.word in seen:
            continue
        seen.add(candidate.word)
        usable.append(candidate)
    return usable


def generate(
    candidates: Sequence[CandidateWord],
    target_entry_count: int,
    grid_size: int,
    *,
    strategy: Union[Strategy, str] = Strategy.ANCHOR,
    attempts: int = DEFAULT_ATTEMPTS,
    min_entries: int = MIN_VIABLE_ENTRIES,
    cycles: int = DEFAULT_GROWTH_CYCLES,
    seed: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> Optional[Layout]:
    """Build the best numbered layout for ``candidates`` or return ``None``.

    Unusable candidates are skipped. ``None`` means no attempt placed
    enough words; the engine never raises for a poor pool.
    """

    pool = _usable_candidates(candidates)
    if not pool:
        LOGGER.warning("No usable candidates for layout generation")
        return None

    placer = build_placer(strategy, min_entries=min_entries, cycles=cycles)
    selector = LayoutSelector(placer, attempts=attempts, rng=rng or random.Random(seed))
    layout = selector.select(pool, target_entry_count, grid_size)
    if layout is None:
        return None
    return index_layout(layout)


class CrosswordGenerator:
    """High-level orchestrator: word pool, layout selection, numbering."""

    def __init__(
        self,
        config: GeneratorConfig,
        lexicon: Optional[LexiconClient] = None,
        fallbacks: Optional[Sequence[LexiconClient]] = None,
    ) -> None:
        self.config = config
        self.rng = random.Random(config.seed)
        self.lexicon = lexicon or DatamuseLexiconClient(
            rng=random.Random(self.rng.randint(0, 2**31)),
            pool_margin=config.pool_margin,
            timeout_seconds=config.request_timeout,
        )
        self.fallbacks: List[LexiconClient] = (
            list(fallbacks) if fallbacks is not None else self._default_fallbacks()
        )

    def _default_fallbacks(self) -> List[LexiconClient]:
        fallbacks: List[LexiconClient] = []
        if os.environ.get("GEMINI_API_KEY"):
            fallbacks.append(GeminiLexiconClient())
        fallbacks.append(BuiltinLexicon(rng=random.Random(self.rng.randint(0, 2**31))))
        return fallbacks

    def pick_topic(self) -> str:
        return self.rng.choice(sorted(THEMES))

    def collect_candidates(self, topic: str) -> List[CandidateWord]:
        size = self.config.size
        pool = merge_lexicons(
            self.lexicon,
            self.fallbacks,
            topic,
            target=size.max_words,
            limit=size.max_words + self.config.pool_margin,
        )
        floor = self.config.min_pool
        if len(pool) < floor:
            raise InsufficientCandidatesError(
                f"Only {len(pool)} usable words for '{topic}', need at least {floor}",
                received=len(pool),
                needed=size.min_words,
            )
        return pool

    def generate(self, topic: Optional[str] = None) -> CrosswordResult:
        size = self.config.size
        topic = (topic or "").strip() or self.pick_topic()
        LOGGER.info(
            "Generating %s puzzle for '%s' (%s-%s words, %sx%s grid)",
            size.label,
            topic,
            size.min_words,
            size.max_words,
            size.grid_dimension,
            size.grid_dimension,
        )

        pool = self.collect_candidates(topic)
        floor = self.config.min_pool
        placer = self.config.to_placer(min_entries=floor)
        selector = LayoutSelector(
            placer,
            attempts=self.config.attempts,
            rng=random.Random(self.rng.randint(0, 2**31)),
        )
        layout = selector.select(pool, size.max_words, size.grid_dimension)
        if layout is None:
            raise LayoutFailureError(
                f"No layout placed at least {floor} of {len(pool)} words",
                received=len(pool),
                needed=size.min_words,
            )

        layout = index_layout(layout)
        LOGGER.info("Crossword generation completed with %s words", layout.word_count)
        return CrosswordResult(
            layout=layout,
            topic=topic,
            size_class=size,
            pool_size=len(pool),
            seed=self.config.seed,
        )
