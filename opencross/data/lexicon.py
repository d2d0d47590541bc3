"""Candidate word providers.

Every provider answers ``fetch_candidates(topic, target_count)`` with a list of
:class:`CandidateWord`. :func:`merge_lexicons` chains a primary provider with
fallbacks and enforces the normalization contract the engine relies on:
uppercase A-Z words of 3-10 letters, a non-empty clue, no duplicates.
"""

from __future__ import annotations

import random
from typing import Dict, List, Optional, Protocol, Sequence, Set, Tuple

from ..core.exceptions import LexiconError
from ..core.models import CandidateWord
from ..io.datamuse_client import DatamuseClient
from ..io.gemini_client import GeminiClient
from ..utils.logger import get_logger
from .normalization import PLAIN_WORD_RE, clean_clue, clean_word, is_playable_word


LOGGER = get_logger(__name__)


THEMES: Dict[str, Tuple[str, ...]] = {
    "Nature": ("nature", "forest", "wildlife", "ecology", "plants", "animals", "environment", "ocean", "mountain"),
    "Space": ("space", "astronomy", "planets", "cosmos", "galaxy", "stars", "universe", "rocket", "orbit"),
    "Food": ("cuisine", "cooking", "ingredients", "dining", "baking", "spices", "kitchen", "recipe", "fruit"),
    "Technology": ("computing", "digital", "internet", "robotics", "software", "ai", "hardware", "network", "code"),
    "Geography": ("geography", "landscape", "cities", "continents", "oceans", "maps", "travel", "world", "country"),
    "Music": ("music", "melody", "instruments", "rhythm", "jazz", "orchestra", "song", "sound", "band"),
    "Sports": ("athletics", "stadium", "competition", "fitness", "soccer", "tennis", "ball", "game", "team"),
    "Science": ("laboratory", "physics", "chemistry", "biology", "genetics", "energy", "experiment", "formula"),
}


def resolve_theme(topic: str) -> Optional[str]:
    """Return the canonical theme name for ``topic``, or ``None`` for free text."""

    key = (topic or "").strip().lower()
    for name in THEMES:
        if name.lower() == key:
            return name
    return None


def normalize_candidate(word: str, clue: str, source: str) -> Optional[CandidateWord]:
    """Build a candidate if the word and clue satisfy the engine contract."""

    cleaned = clean_word(word)
    clue = (clue or "").strip()
    if not is_playable_word(cleaned) or not clue:
        return None
    return CandidateWord(word=cleaned, clue=clue, source=source)


class LexiconClient(Protocol):
    """Protocol implemented by all candidate word providers."""

    def fetch_candidates(self, topic: str, target_count: int) -> List[CandidateWord]:
        ...


class DatamuseLexiconClient:
    """Builds a themed pool from Datamuse topic and meaning queries."""

    TOPIC_QUERIES = 3
    COMMON_WORDS_PATTERN = "????*"

    def __init__(
        self,
        client: Optional[DatamuseClient] = None,
        rng: Optional[random.Random] = None,
        pool_margin: int = 50,
        timeout_seconds: float = 10.0,
    ) -> None:
        self.client = client or DatamuseClient(timeout_seconds=timeout_seconds)
        self.rng = rng or random.Random()
        self.pool_margin = max(0, pool_margin)

    def fetch_candidates(self, topic: str, target_count: int) -> List[CandidateWord]:
        collected: Dict[str, CandidateWord] = {}
        for stage in self._query_stages(topic):
            if len(collected) >= target_count:
                break
            for params in stage:
                for item in self._run(params):
                    candidate = self._to_candidate(item)
                    if candidate and candidate.word not in collected:
                        collected[candidate.word] = candidate

        pool = list(collected.values())
        limit = target_count + self.pool_margin
        if len(pool) > limit:
            self.rng.shuffle(pool)
            pool = pool[:limit]
        LOGGER.info("Datamuse produced %s candidates for '%s'", len(pool), topic)
        return pool

    def _query_stages(self, topic: str) -> List[List[Dict[str, object]]]:
        common = [{"sp": self.COMMON_WORDS_PATTERN, "max": 100}]
        theme = resolve_theme(topic)
        if theme is None:
            text = topic.strip() or "general"
            return [[{"ml": text, "max": 100}], [{"topics": text, "max": 100}], common]

        topics = list(THEMES[theme])
        self.rng.shuffle(topics)
        primary = [{"topics": name, "max": 100} for name in topics[: self.TOPIC_QUERIES]]
        return [primary, [{"ml": theme.lower(), "max": 150}], common]

    def _run(self, params: Dict[str, object]) -> List[dict]:
        try:
            return self.client.words(**params)
        except LexiconError as exc:
            LOGGER.warning("Skipping Datamuse query %s: %s", params, exc)
            return []

    def _to_candidate(self, item: dict) -> Optional[CandidateWord]:
        raw = item.get("word")
        # Phrases and hyphenated entries are rejected rather than squashed together.
        if not isinstance(raw, str) or not PLAIN_WORD_RE.match(raw):
            return None
        definition = self.client.first_definition(item)
        if definition is None:
            return None
        return normalize_candidate(raw, clean_clue(definition), "datamuse")


class GeminiLexiconClient:
    """LLM-powered provider using the Gemini API."""

    PROMPT = (
        "You are assisting with an English crossword. "
        "Generate between 30 and {limit} JSON lines describing unique words about '{topic}'. "
        "Each JSON line must contain fields: word, clue. "
        "Each word must be a single English word of 3 to 10 letters with no spaces or hyphens. "
        "Each clue must be one short sentence that does not contain the word. "
        "Output no more than {limit} entries."
    )

    def __init__(self, client: Optional[GeminiClient] = None) -> None:
        self._client = client

    def fetch_candidates(self, topic: str, target_count: int) -> List[CandidateWord]:  # pragma: no cover - external
        client = self._client or GeminiClient()
        self._client = client
        prompt = self.PROMPT.format(topic=topic or "general knowledge", limit=max(target_count, 30))
        return self._parse_items(client.generate_json_lines(prompt))

    @staticmethod
    def _parse_items(items: Sequence[dict]) -> List[CandidateWord]:
        results: List[CandidateWord] = []
        for item in items:
            word = item.get("word")
            clue = item.get("clue")
            if isinstance(word, str) and isinstance(clue, str):
                candidate = normalize_candidate(word, clue, "gemini")
                if candidate:
                    results.append(candidate)
        return results


DEFAULT_WORD_BANKS: Dict[str, Dict[str, str]] = {
    "Space": {
        "GALAXY": "A system of millions or billions of stars",
        "PLANET": "A large body orbiting a star",
        "COMET": "Icy body with a glowing tail",
        "ORBIT": "Curved path around a planet or star",
        "NEBULA": "Cloud of interstellar gas and dust",
        "ROCKET": "Vehicle propelled by exhaust gases",
        "METEOR": "Shooting star",
        "ECLIPSE": "One body blocks the light of another",
        "SATURN": "Ringed sixth planet",
        "LUNAR": "Relating to the moon",
        "ASTEROID": "Small rocky body orbiting the sun",
        "COSMOS": "The universe seen as an ordered whole",
        "STAR": "Luminous ball of gas in the night sky",
        "CRATER": "Bowl-shaped hollow on a moon",
        "ZENITH": "Point in the sky directly overhead",
    },
    "Nature": {
        "FOREST": "Large area covered with trees",
        "RIVER": "Large natural stream of water",
        "MEADOW": "Field of grass and wildflowers",
        "CANYON": "Deep gorge cut by a river",
        "GLACIER": "Slowly moving mass of ice",
        "MOSS": "Small green plant of damp places",
        "BOULDER": "Large rounded rock",
        "LAGOON": "Shallow body of water near the sea",
        "FERN": "Flowerless plant with feathery fronds",
        "TUNDRA": "Treeless arctic plain",
        "WILLOW": "Tree with drooping branches",
        "OTTER": "Playful river mammal",
        "MARSH": "Low land flooded in wet seasons",
        "VALLEY": "Low area between hills",
        "ACORN": "Fruit of the oak",
    },
    "Food": {
        "BREAD": "Baked loaf of flour and water",
        "CHEESE": "Food made from pressed curds",
        "PASTA": "Italian dough shaped into noodles",
        "GARLIC": "Pungent bulb used in cooking",
        "TOMATO": "Red fruit used in sauces",
        "BUTTER": "Churned dairy spread",
        "PEPPER": "Hot spice from ground berries",
        "OMELET": "Beaten eggs fried in a pan",
        "LEMON": "Sour yellow citrus fruit",
        "SALAD": "Cold dish of mixed greens",
        "NOODLE": "Long thin strip of dough",
        "GINGER": "Spicy root used in cooking",
        "MANGO": "Sweet tropical stone fruit",
        "RECIPE": "Instructions for preparing a dish",
        "OLIVE": "Small oily fruit of the Mediterranean",
    },
    "Music": {
        "MELODY": "Sequence of notes forming a tune",
        "RHYTHM": "Pattern of beats in music",
        "GUITAR": "Six-stringed instrument",
        "PIANO": "Keyboard instrument with hammers",
        "OPERA": "Drama set to music",
        "TEMPO": "Speed of a piece of music",
        "CHORD": "Notes sounded together",
        "VIOLIN": "Bowed string instrument held under the chin",
        "BALLAD": "Slow sentimental song",
        "TRUMPET": "Brass instrument with valves",
        "CHORUS": "Refrain sung by a group",
        "DRUM": "Percussion instrument struck with sticks",
        "SONATA": "Composition for one or two instruments",
        "LYRIC": "Words of a song",
        "BANJO": "Stringed instrument with a round body",
    },
}


class BuiltinLexicon:
    """Offline provider backed by small bundled word banks."""

    def __init__(
        self,
        banks: Optional[Dict[str, Dict[str, str]]] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.banks = {name.lower(): dict(words) for name, words in (banks or DEFAULT_WORD_BANKS).items()}
        self.rng = rng or random.Random()

    def fetch_candidates(self, topic: str, target_count: int) -> List[CandidateWord]:
        key = (topic or "").strip().lower()
        bank = self.banks.get(key)
        if bank is None:
            raise LexiconError(
                f"Topic '{topic}' has no built-in word bank (known: {', '.join(sorted(self.banks))})"
            )
        words = [CandidateWord(word=word, clue=clue, source="builtin") for word, clue in bank.items()]
        self.rng.shuffle(words)
        LOGGER.info("Built-in bank produced %s candidates for '%s'", len(words), topic)
        return words


class UserWordListLexicon:
    """Returns a user-supplied list of ``WORD`` or ``WORD:Clue`` entries."""

    def __init__(self, raw_words: Sequence[str]) -> None:
        self._candidates: List[CandidateWord] = []
        for item in raw_words:
            item = item.strip()
            if not item:
                continue
            word, _, clue = item.partition(":")
            word = clean_word(word)
            clue = clue.strip() or f"{len(word)}-letter word"
            self._candidates.append(CandidateWord(word=word, clue=clue, source="user"))

    def fetch_candidates(self, topic: str, target_count: int) -> List[CandidateWord]:
        return list(self._candidates)


def merge_lexicons(
    primary: Optional[LexiconClient],
    fallbacks: Sequence[LexiconClient],
    topic: str,
    target: int,
    limit: Optional[int] = None,
) -> List[CandidateWord]:
    """Query the primary provider, then fallbacks until ``target`` words are collected.

    Results are normalized, filtered to playable words with clues and
    deduplicated by word. ``limit`` caps the returned pool.
    """

    collected: List[CandidateWord] = []
    seen: Set[str] = set()

    def extend(candidates: Sequence[CandidateWord]) -> None:
        for candidate in candidates:
            normalized = normalize_candidate(candidate.word, candidate.clue, candidate.source)
            if normalized is None:
                LOGGER.debug("Rejected candidate %r", candidate.word)
                continue
            if normalized.word in seen:
                continue
            collected.append(normalized)
            seen.add(normalized.word)

    providers = ([primary] if primary else []) + list(fallbacks)
    for provider in providers:
        if len(collected) >= target:
            break
        try:
            extend(provider.fetch_candidates(topic, target))
        except LexiconError as exc:
            LOGGER.warning("Word provider %s failed: %s", type(provider).__name__, exc)

    if limit is not None:
        collected = collected[:limit]
    LOGGER.info("Candidate pool for '%s': %s words (target %s)", topic, len(collected), target)
    return collected
