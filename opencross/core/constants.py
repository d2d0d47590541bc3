"""Shared constants and enumerations for the crossword engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple


class Direction(str, Enum):
    """Word orientations supported by the grid."""

    ACROSS = "ACROSS"
    DOWN = "DOWN"

    @property
    def step(self) -> Tuple[int, int]:
        return (0, 1) if self is Direction.ACROSS else (1, 0)

    @property
    def other(self) -> "Direction":
        return Direction.DOWN if self is Direction.ACROSS else Direction.ACROSS


class MoveDirection(str, Enum):
    """Cursor moves available to the player."""

    UP = "UP"
    DOWN = "DOWN"
    LEFT = "LEFT"
    RIGHT = "RIGHT"


MOVE_STEPS: Dict[MoveDirection, Tuple[int, int]] = {
    MoveDirection.UP: (-1, 0),
    MoveDirection.DOWN: (1, 0),
    MoveDirection.LEFT: (0, -1),
    MoveDirection.RIGHT: (0, 1),
}


class GameState(str, Enum):
    """Lifecycle of a puzzle session."""

    SETUP = "SETUP"
    LOADING = "LOADING"
    PLAYING = "PLAYING"
    WON = "WON"
    ERROR = "ERROR"


class Strategy(str, Enum):
    """Placement engine variants."""

    ANCHOR = "anchor"
    SCAN = "scan"


MIN_WORD_LENGTH = 3
MAX_WORD_LENGTH = 10
MIN_VIABLE_POOL = 5
MIN_VIABLE_ENTRIES = 3
DEFAULT_ATTEMPTS = 40
DEFAULT_GROWTH_CYCLES = 15
ENTRY_WEIGHT = 100


@dataclass(frozen=True)
class Bounds:
    """Simple rectangle bounds helper."""

    rows: int
    cols: int

    def contains(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols


@dataclass(frozen=True)
class SizeClass:
    """Named bundle of word counts and grid dimension."""

    key: str
    label: str
    min_words: int
    max_words: int
    grid_dimension: int


SIZE_CLASSES: Dict[str, SizeClass] = {
    "tiny": SizeClass("tiny", "Tiny", 5, 6, 10),
    "bite": SizeClass("bite", "Bite-sized", 9, 12, 13),
    "normal": SizeClass("normal", "Normal", 16, 19, 16),
    "large": SizeClass("large", "Large", 22, 29, 22),
    "massive": SizeClass("massive", "Massive", 40, 51, 28),
}

DEFAULT_SIZE_CLASS = "bite"


def get_size_class(key: str) -> SizeClass:
    try:
        return SIZE_CLASSES[key.strip().lower()]
    except KeyError as exc:
        raise ValueError(
            f"Unknown size class '{key}' (known: {', '.join(SIZE_CLASSES)})"
        ) from exc
