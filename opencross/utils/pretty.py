"""Pretty-print helpers for crossword layouts."""

from __future__ import annotations

import sys
from collections import Counter
from typing import TYPE_CHECKING, Iterable, List, Optional, Set, Tuple

from ..core.constants import Direction

if TYPE_CHECKING:
    from ..core.models import ClueEntry, Layout
    from ..engine.generator import CrosswordResult


BLOCK = "#"
BLANK = "."


def cell_symbol(letter: Optional[str], marked: bool = False) -> str:
    if letter is None:
        return BLOCK
    symbol = letter or BLANK
    return f"{symbol}!" if marked else symbol


def format_grid(
    layout: Layout,
    user_grid: Optional[List[List[Optional[str]]]] = None,
    *,
    cursor: Optional[Tuple[int, int]] = None,
    errors: Iterable[Tuple[int, int]] = (),
) -> str:
    """Render the solution grid, or the player's grid when ``user_grid`` is given."""

    width = layout.size
    wrong: Set[Tuple[int, int]] = set(errors)
    header_cells = [f"{c:>2}" for c in range(width)]
    lines = ["    " + " ".join(header_cells)]
    lines.append("    " + "-" * (3 * width - 1))
    for r in range(width):
        source = user_grid[r] if user_grid is not None else layout.grid[r]
        row_cells = []
        for c in range(width):
            symbol = cell_symbol(source[c], (r, c) in wrong)
            if cursor == (r, c):
                symbol = f"[{symbol}]"
            row_cells.append(symbol)
        row_render = " ".join(f"{symbol:>2}" for symbol in row_cells)
        lines.append(f"{r:>2} | {row_render}")
    return "\n".join(lines)


def format_clues(clues: Iterable[ClueEntry], *, reveal: bool = False) -> str:
    lines = []
    for clue in clues:
        line = f"  {clue.number:>2}. {clue.clue} ({clue.length})"
        if reveal:
            line += f"  {clue.answer}"
        lines.append(line)
    return "\n".join(lines)


def print_layout_stats(result: CrosswordResult, *, stream=None) -> None:
    """Print grid, clues and summary stats for a generated crossword."""

    stream = stream or sys.stdout
    layout = result.layout
    print(format_grid(layout), file=stream)

    print(file=stream)
    print("ACROSS", file=stream)
    print(format_clues(layout.across, reveal=True), file=stream)
    print("DOWN", file=stream)
    print(format_clues(layout.down, reveal=True), file=stream)

    total_cells = layout.size * layout.size
    letter_cells = sum(1 for row in layout.grid for letter in row if letter is not None)
    lengths = [entry.length for entry in layout.entries]
    length_dist = Counter(lengths)
    across = sum(1 for entry in layout.entries if entry.direction == Direction.ACROSS)

    print(file=stream)
    print("--- Grid ---", file=stream)
    print(f"  Size:          {layout.size} x {layout.size} ({total_cells} cells)", file=stream)
    print(f"  Letters:       {letter_cells} ({letter_cells / total_cells * 100:.0f}%)", file=stream)

    print(file=stream)
    print("--- Words ---", file=stream)
    print(f"  Topic:         {result.topic}", file=stream)
    print(f"  Size class:    {result.size_class.label} ({result.size_class.min_words}-{result.size_class.max_words})", file=stream)
    print(f"  Placed:        {layout.word_count} of {result.pool_size} candidates", file=stream)
    print(f"  Across/Down:   {across}/{layout.word_count - across}", file=stream)
    print(f"  Crossings:     {layout.total_intersections}", file=stream)
    if lengths:
        print(f"  Length range:  {min(lengths)}-{max(lengths)} (avg {sum(lengths) / len(lengths):.1f})", file=stream)
        dist_parts = [f"{l}:{c}" for l, c in sorted(length_dist.items())]
        print(f"  Distribution:  {' '.join(dist_parts)}", file=stream)

    if result.seed is not None:
        print(file=stream)
        print(f"Seed: {result.seed}", file=stream)
