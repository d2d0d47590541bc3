import random
import unittest

from opencross.core.constants import Direction, Strategy
from opencross.core.models import CandidateWord
from opencross.data.lexicon import DEFAULT_WORD_BANKS
from opencross.engine.placement import AnchorGrowthPlacer, GridScanPlacer, build_placer
from opencross.engine.validator import LayoutValidator


def pool(*words: str):
    return [CandidateWord(w, f"Clue for {w}") for w in words]


class GreedyPlacerTests(unittest.TestCase):
    def test_both_strategies_place_small_pool(self) -> None:
        for placer in (GridScanPlacer(), AnchorGrowthPlacer()):
            with self.subTest(strategy=placer.strategy):
                layout = placer.attempt(pool("STAR", "TOY", "GALAXY"), 3, 10, random.Random(3))
                self.assertIsNotNone(layout)
                self.assertEqual(layout.word_count, 3)
                seed = layout.entries[0]
                self.assertEqual(seed.word, "GALAXY")
                self.assertEqual((seed.row, seed.col, seed.direction), (5, 2, Direction.ACROSS))

    def test_single_word_is_below_minimum(self) -> None:
        self.assertIsNone(GridScanPlacer().attempt(pool("GALAXY"), 3, 10, random.Random(0)))
        self.assertIsNone(AnchorGrowthPlacer().attempt(pool("GALAXY"), 3, 10, random.Random(0)))

    def test_minimum_never_drops_below_three(self) -> None:
        self.assertEqual(GridScanPlacer(min_entries=1).min_entries, 3)
        self.assertEqual(AnchorGrowthPlacer(min_entries=5).min_entries, 5)

    def test_seed_skips_words_that_do_not_fit(self) -> None:
        layout = GridScanPlacer().attempt(
            pool("ASTRONOMERS", "GALAXY", "STAR", "TOY"), 3, 10, random.Random(1)
        )
        self.assertIsNotNone(layout)
        self.assertEqual(layout.entries[0].word, "GALAXY")

    def test_stops_at_target(self) -> None:
        layout = AnchorGrowthPlacer().attempt(
            pool("GALAXY", "STAR", "TOY", "MOTH"), 3, 10, random.Random(2)
        )
        self.assertEqual(layout.word_count, 3)


class DropVersusRetryTests(unittest.TestCase):
    """MOTH only fits once TOY is down, but TOY is shorter and comes later."""

    words = ("GALAXY", "MOTH", "TOY")

    def test_scan_drops_word_without_position(self) -> None:
        self.assertIsNone(GridScanPlacer().attempt(pool(*self.words), 3, 10, random.Random(0)))

    def test_single_growth_cycle_behaves_like_a_drop(self) -> None:
        placer = AnchorGrowthPlacer(cycles=1)
        self.assertIsNone(placer.attempt(pool(*self.words), 3, 10, random.Random(0)))

    def test_growth_retries_on_later_cycles(self) -> None:
        layout = AnchorGrowthPlacer().attempt(pool(*self.words), 3, 10, random.Random(0))
        self.assertIsNotNone(layout)
        placed = {entry.word: entry for entry in layout.entries}
        self.assertEqual(set(placed), set(self.words))
        moth = placed["MOTH"]
        self.assertEqual((moth.row, moth.col, moth.direction), (3, 5, Direction.ACROSS))


class PlacerOutputValidityTests(unittest.TestCase):
    """Raw placer output must satisfy the layout invariants before any selection."""

    def test_every_attempt_is_a_valid_layout(self) -> None:
        validator = LayoutValidator()
        for theme, bank in sorted(DEFAULT_WORD_BANKS.items()):
            words = [CandidateWord(word, clue, "builtin") for word, clue in bank.items()]
            for placer in (GridScanPlacer(), AnchorGrowthPlacer()):
                for size in (10, 13, 16):
                    for seed in range(5):
                        rng = random.Random(seed)
                        shuffled = list(words)
                        rng.shuffle(shuffled)
                        layout = placer.attempt(shuffled, 12, size, rng)
                        if layout is None:
                            continue
                        with self.subTest(theme=theme, strategy=placer.strategy, size=size, seed=seed):
                            result = validator.validate(layout)
                            self.assertTrue(result.ok, result.messages)


class BuildPlacerTests(unittest.TestCase):
    def test_builds_requested_strategy(self) -> None:
        self.assertIsInstance(build_placer("scan"), GridScanPlacer)
        placer = build_placer(Strategy.ANCHOR, min_entries=4, cycles=7)
        self.assertIsInstance(placer, AnchorGrowthPlacer)
        self.assertEqual(placer.cycles, 7)
        self.assertEqual(placer.min_entries, 4)

    def test_unknown_strategy(self) -> None:
        with self.assertRaises(ValueError):
            build_placer("zigzag")


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
