import random
import unittest
from unittest.mock import MagicMock

from opencross.core.constants import Direction, Strategy
from opencross.core.models import CandidateWord, Layout, PlacedEntry
from opencross.data.lexicon import DEFAULT_WORD_BANKS
from opencross.engine.placement import AnchorGrowthPlacer
from opencross.engine.selector import LayoutSelector, score_layout
from opencross.engine.validator import LayoutValidator, ValidationResult


def fake_layout(words: int, crossings: int) -> Layout:
    entries = [
        PlacedEntry(f"W{i}", "clue", 0, 0, Direction.ACROSS, intersections=0) for i in range(words)
    ]
    if entries:
        entries[0] = PlacedEntry("W0", "clue", 0, 0, Direction.ACROSS, intersections=crossings)
    return Layout(grid=[[None]], entries=entries, size=1)


class ScriptedPlacer:
    strategy = Strategy.SCAN

    def __init__(self, layouts):
        self.layouts = list(layouts)
        self.calls = 0

    def attempt(self, candidates, target, size, rng):
        layout = self.layouts[self.calls]
        self.calls += 1
        return layout


def always_valid() -> MagicMock:
    validator = MagicMock(spec=LayoutValidator)
    validator.validate.return_value = ValidationResult(ok=True, messages=[])
    return validator


class ScoreTests(unittest.TestCase):
    def test_entries_dominate_crossings(self) -> None:
        self.assertEqual(score_layout(fake_layout(3, 4)), 304)
        self.assertGreater(score_layout(fake_layout(4, 0)), score_layout(fake_layout(3, 99)))


class LayoutSelectorTests(unittest.TestCase):
    def test_keeps_highest_score(self) -> None:
        layouts = [fake_layout(3, 1), None, fake_layout(5, 0), fake_layout(4, 9)]
        placer = ScriptedPlacer(layouts)
        selector = LayoutSelector(placer, attempts=4, rng=random.Random(0), validator=always_valid())
        self.assertIs(selector.select([], 5, 10), layouts[2])
        self.assertEqual(placer.calls, 4)

    def test_ties_keep_earliest_attempt(self) -> None:
        layouts = [fake_layout(3, 2), fake_layout(3, 2)]
        selector = LayoutSelector(ScriptedPlacer(layouts), attempts=2, validator=always_valid())
        self.assertIs(selector.select([], 3, 10), layouts[0])

    def test_invalid_layouts_are_discarded(self) -> None:
        validator = MagicMock(spec=LayoutValidator)
        validator.validate.return_value = ValidationResult(ok=False, messages=["broken"])
        selector = LayoutSelector(ScriptedPlacer([fake_layout(3, 0)]), attempts=1, validator=validator)
        with self.assertLogs("opencross.engine.selector", level="WARNING"):
            self.assertIsNone(selector.select([], 3, 10))

    def test_no_layout_returns_none(self) -> None:
        selector = LayoutSelector(ScriptedPlacer([None, None]), attempts=2)
        self.assertIsNone(selector.select([], 3, 10))

    def test_attempts_must_be_positive(self) -> None:
        with self.assertRaises(ValueError):
            LayoutSelector(ScriptedPlacer([]), attempts=0)

    def test_attempts_do_not_share_the_callers_pool(self) -> None:
        candidates = [CandidateWord(w, "clue") for w in ("GALAXY", "STAR", "TOY")]
        placer = MagicMock()
        placer.strategy = Strategy.ANCHOR
        placer.attempt.return_value = None
        LayoutSelector(placer, attempts=3, rng=random.Random(5)).select(candidates, 3, 10)
        self.assertEqual([c.word for c in candidates], ["GALAXY", "STAR", "TOY"])
        pools = [call.args[0] for call in placer.attempt.call_args_list]
        self.assertEqual(len(pools), 3)
        self.assertIsNot(pools[0], candidates)

    def test_same_seed_same_layout(self) -> None:
        candidates = [CandidateWord(w, c) for w, c in DEFAULT_WORD_BANKS["Space"].items()]

        def run():
            selector = LayoutSelector(AnchorGrowthPlacer(), attempts=10, rng=random.Random(42))
            return selector.select(candidates, 12, 13)

        first, second = run(), run()
        self.assertIsNotNone(first)
        self.assertEqual(first.grid, second.grid)
        self.assertGreaterEqual(first.word_count, 3)
        self.assertTrue(LayoutValidator().validate(first).ok)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
