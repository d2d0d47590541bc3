"""Themed crossword generator with an interactive play session.

This package exposes the public API surface via:

- ``opencross.engine.generator.generate``: lays out candidate words and numbers the result.
- ``opencross.engine.generator.CrosswordGenerator``: word pool, layout and numbering pipeline.
- ``opencross.session.puzzle_session.PuzzleSession``: player grid, cursor and win state.
"""

from .engine.generator import CrosswordGenerator, CrosswordResult, GeneratorConfig, generate
from .engine.indexer import index_layout
from .session.puzzle_session import PuzzleSession

__all__ = [
    "CrosswordGenerator",
    "CrosswordResult",
    "GeneratorConfig",
    "PuzzleSession",
    "generate",
    "index_layout",
]

__version__ = "0.1.0"
