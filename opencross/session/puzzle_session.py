"""Interactive play state for a generated crossword."""

from __future__ import annotations

import time
from typing import Callable, FrozenSet, List, Optional, Tuple, Union

from ..core.constants import DEFAULT_SIZE_CLASS, MOVE_STEPS, Direction, GameState, MoveDirection
from ..core.exceptions import CrosswordError, GenerationFailed
from ..core.models import ClueEntry, Layout, PlacedEntry
from ..engine.generator import CrosswordGenerator, GeneratorConfig
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)

Cell = Tuple[int, int]

KEY_MOVES = {
    "ArrowUp": MoveDirection.UP,
    "ArrowDown": MoveDirection.DOWN,
    "ArrowLeft": MoveDirection.LEFT,
    "ArrowRight": MoveDirection.RIGHT,
}


def default_generator_factory(size_class: str) -> CrosswordGenerator:
    return CrosswordGenerator(GeneratorConfig(size_class=size_class))


class PuzzleSession:
    """Holds the player's grid, cursor and game state for one puzzle at a time.

    Every play operation is a no-op outside ``GameState.PLAYING``. Invalid
    selections and unknown keys are ignored silently.
    """

    def __init__(
        self,
        generator_factory: Callable[[str], CrosswordGenerator] = default_generator_factory,
        clock: Callable[[], float] = time.monotonic,
        error_window_seconds: float = 3.0,
    ) -> None:
        self.generator_factory = generator_factory
        self.clock = clock
        self.error_window_seconds = error_window_seconds
        self._reset_fields()

    def _reset_fields(self) -> None:
        self.state = GameState.SETUP
        self.layout: Optional[Layout] = None
        self.topic: Optional[str] = None
        self.user_grid: List[List[Optional[str]]] = []
        self.selected: Optional[Cell] = None
        self.direction = Direction.ACROSS
        self.error_stats: Optional[Tuple[int, int]] = None
        self.error_message: Optional[str] = None
        self._error_cells: FrozenSet[Cell] = frozenset()
        self._errors_checked_at: Optional[float] = None

    # ------------------------------------------------------------------
    # Lifecycle

    def new_game(self, topic: Optional[str] = None, size_class: str = DEFAULT_SIZE_CLASS) -> GameState:
        self._reset_fields()
        self.state = GameState.LOADING
        try:
            result = self.generator_factory(size_class).generate(topic)
        except GenerationFailed as exc:
            LOGGER.warning("Puzzle generation failed: %s", exc)
            self.state = GameState.ERROR
            self.error_stats = (exc.received, exc.needed)
            self.error_message = str(exc)
            return self.state
        except (CrosswordError, ValueError) as exc:
            LOGGER.error("Puzzle generation aborted: %s", exc)
            self.state = GameState.ERROR
            self.error_message = str(exc)
            return self.state
        self.start(result.layout, topic=result.topic)
        return self.state

    def start(self, layout: Layout, topic: Optional[str] = None) -> None:
        """Load an already generated, numbered layout and begin play."""

        self._reset_fields()
        self.layout = layout
        self.topic = topic
        self.user_grid = [
            ["" if letter is not None else None for letter in row] for row in layout.grid
        ]
        first = self._first_entry()
        if first is not None:
            self.selected = (first.row, first.col)
            self.direction = first.direction
        self.state = GameState.PLAYING
        LOGGER.info("Puzzle started with %s entries", layout.word_count)

    def reset(self) -> None:
        self._reset_fields()

    def _first_entry(self) -> Optional[PlacedEntry]:
        if self.layout is None or not self.layout.entries:
            return None
        return min(
            self.layout.entries,
            key=lambda entry: (
                entry.number if entry.number is not None else float("inf"),
                entry.direction != Direction.ACROSS,
            ),
        )

    # ------------------------------------------------------------------
    # Queries

    @property
    def playing(self) -> bool:
        return self.state == GameState.PLAYING and self.layout is not None

    def is_letter_cell(self, row: int, col: int) -> bool:
        return self.layout is not None and self.layout.is_letter_cell(row, col)

    @property
    def active_entry(self) -> Optional[PlacedEntry]:
        if self.layout is None or self.selected is None:
            return None
        covering = self.layout.entries_at(*self.selected)
        for entry in covering:
            if entry.direction == self.direction:
                return entry
        return covering[0] if covering else None

    @property
    def active_clue(self) -> Optional[ClueEntry]:
        entry = self.active_entry
        if entry is None or self.layout is None:
            return None
        clues = self.layout.across if entry.direction == Direction.ACROSS else self.layout.down
        for clue in clues:
            if (clue.row, clue.col) == (entry.row, entry.col):
                return clue
        return None

    @property
    def error_cells(self) -> FrozenSet[Cell]:
        if self._errors_checked_at is None:
            return frozenset()
        if self.clock() - self._errors_checked_at >= self.error_window_seconds:
            return frozenset()
        return self._error_cells

    def is_complete(self) -> bool:
        if self.layout is None:
            return False
        for row, letters in enumerate(self.layout.grid):
            for col, letter in enumerate(letters):
                if letter is not None and self.user_grid[row][col] != letter:
                    return False
        return True

    # ------------------------------------------------------------------
    # Cursor

    def select(self, row: int, col: int) -> None:
        if not self.playing or not self.is_letter_cell(row, col):
            return
        if self.selected == (row, col):
            self.toggle_direction()
            return
        self.selected = (row, col)
        directions = {entry.direction for entry in self.layout.entries_at(row, col)}
        if len(directions) == 1:
            self.direction = directions.pop()

    def select_entry(self, entry: Union[PlacedEntry, ClueEntry]) -> None:
        if not self.playing or not self.is_letter_cell(entry.row, entry.col):
            return
        self.selected = (entry.row, entry.col)
        self.direction = entry.direction

    def toggle_direction(self) -> None:
        if self.playing:
            self.direction = self.direction.other

    def move(self, move: Union[MoveDirection, str]) -> None:
        if not self.playing or self.selected is None:
            return
        try:
            dr, dc = MOVE_STEPS[MoveDirection(move)]
        except ValueError:
            return
        row, col = self.selected[0] + dr, self.selected[1] + dc
        if self.is_letter_cell(row, col):
            self.selected = (row, col)

    def _step(self, forward: bool) -> Optional[Cell]:
        dr, dc = self.direction.step
        if not forward:
            dr, dc = -dr, -dc
        row, col = self.selected[0] + dr, self.selected[1] + dc
        return (row, col) if self.is_letter_cell(row, col) else None

    # ------------------------------------------------------------------
    # Editing

    def _clear_errors(self) -> None:
        self._error_cells = frozenset()
        self._errors_checked_at = None

    def _set_cell(self, cell: Cell, value: str) -> None:
        self.user_grid[cell[0]][cell[1]] = value
        self._clear_errors()

    def type_letter(self, char: str) -> None:
        """Write the last ASCII letter of ``char`` and advance the cursor."""

        if not self.playing or self.selected is None or not char:
            return
        letter = char[-1]
        if not (letter.isascii() and letter.isalpha()):
            return
        self._set_cell(self.selected, letter.upper())
        following = self._step(forward=True)
        if following is not None:
            self.selected = following
        self._check_win()

    def backspace(self) -> None:
        if not self.playing or self.selected is None:
            return
        row, col = self.selected
        if self.user_grid[row][col]:
            self._set_cell(self.selected, "")
            return
        previous = self._step(forward=False)
        if previous is not None:
            self.selected = previous
            self._set_cell(previous, "")

    def reveal_letter(self) -> None:
        if not self.playing or self.selected is None:
            return
        row, col = self.selected
        self._set_cell(self.selected, self.layout.grid[row][col])
        self._check_win()

    def reveal_word(self) -> None:
        if not self.playing:
            return
        entry = self.active_entry
        if entry is None:
            return
        for row, col in entry.cells:
            self.user_grid[row][col] = self.layout.grid[row][col]
        self._clear_errors()
        self._check_win()

    def check_errors(self) -> FrozenSet[Cell]:
        """Mark filled cells holding a wrong letter; they stay visible for a short window."""

        if not self.playing:
            return frozenset()
        wrong = set()
        for row, letters in enumerate(self.user_grid):
            for col, value in enumerate(letters):
                if value and value != self.layout.grid[row][col]:
                    wrong.add((row, col))
        self._error_cells = frozenset(wrong)
        self._errors_checked_at = self.clock()
        LOGGER.debug("Check found %s wrong cells", len(wrong))
        return self._error_cells

    def handle_key(self, key: str) -> None:
        if not self.playing or not key:
            return
        if key in KEY_MOVES:
            self.move(KEY_MOVES[key])
        elif key == "Backspace":
            self.backspace()
        elif key == " ":
            self.toggle_direction()
        elif len(key) == 1:
            self.type_letter(key)

    def _check_win(self) -> None:
        if self.is_complete():
            self.state = GameState.WON
            LOGGER.info("Puzzle solved")
