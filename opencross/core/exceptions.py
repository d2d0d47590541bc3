"""Custom exception hierarchy for crossword generation."""


class CrosswordError(Exception):
    """Base exception for generator failures."""


class GenerationFailed(CrosswordError):
    """Generation could not produce a usable puzzle; carries diagnostic counts."""

    def __init__(self, message: str, received: int, needed: int) -> None:
        super().__init__(message)
        self.received = received
        self.needed = needed


class InsufficientCandidatesError(GenerationFailed):
    """Raised when the lexicon pool falls below the viable floor."""


class LayoutFailureError(GenerationFailed):
    """Raised when no placement attempt reached the minimum entry count."""


class PlacementError(CrosswordError):
    """Raised when a word cannot be written to the grid without breaking rules."""


class LexiconError(CrosswordError):
    """Raised when a word provider cannot answer a request."""


class ValidationError(CrosswordError):
    """Raised when the layout integrity checks fail."""
