"""CLI entrypoint for the themed crossword generator."""

from __future__ import annotations

import argparse
import json
import logging
import random
import sys
from pathlib import Path
from typing import List, Optional, Tuple

from opencross.core.constants import DEFAULT_ATTEMPTS, DEFAULT_SIZE_CLASS, SIZE_CLASSES, GameState, Strategy
from opencross.core.exceptions import CrosswordError, GenerationFailed
from opencross.data.lexicon import THEMES, BuiltinLexicon, LexiconClient, UserWordListLexicon
from opencross.engine.generator import CrosswordGenerator, CrosswordResult, GeneratorConfig
from opencross.session.puzzle_session import PuzzleSession
from opencross.utils.logger import configure_logging, get_logger
from opencross.utils.pretty import format_clues, format_grid, print_layout_stats


LOGGER = get_logger("opencross.cli")

PLAY_HELP = """Commands:
  LETTERS        type letters from the cursor onwards
  ROW COL        select a cell (selecting it again toggles direction)
  :up :down :left :right   move the cursor
  :toggle        switch between across and down
  :back          backspace
  :reveal        reveal the selected letter
  :word          reveal the active word
  :check         mark wrong letters
  :quit          leave the game"""


def parse_words_file(path: Path) -> List[str]:
    """Read words from a file, one entry per line. Blank lines and # comments are skipped."""
    entries: List[str] = []
    for line in path.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        entries.append(line)
    return entries


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate themed free-form crosswords",
    )
    parser.add_argument(
        "--size",
        type=str,
        choices=list(SIZE_CLASSES),
        default=DEFAULT_SIZE_CLASS,
        help="Puzzle size class (word count range and grid dimension)",
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--theme",
        type=str,
        choices=sorted(THEMES),
        help="Named theme; a random one is picked when no theme or topic is given",
    )
    source.add_argument("--topic", type=str, help="Free-text topic for the word search")
    parser.add_argument(
        "--words",
        nargs="+",
        metavar="WORD",
        help="Explicit words (format: WORD or WORD:Clue)",
    )
    parser.add_argument(
        "--words-file",
        type=Path,
        metavar="FILE",
        help="File with one WORD or WORD:Clue entry per line (# comments and blank lines ignored)",
    )
    parser.add_argument(
        "--offline",
        action="store_true",
        help="Use the built-in word banks instead of online word services",
    )
    parser.add_argument(
        "--strategy",
        type=str,
        choices=[s.value for s in Strategy],
        default=Strategy.ANCHOR.value,
        help="Placement strategy",
    )
    parser.add_argument(
        "--attempts",
        type=int,
        default=DEFAULT_ATTEMPTS,
        help="Number of randomized layout attempts",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducibility")
    parser.add_argument("--output", type=Path, help="Optional path to JSON output")
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    parser.add_argument("--play", action="store_true", help="Play the generated puzzle in the terminal")
    return parser


def run_command(session: PuzzleSession, command: str) -> bool:
    """Apply one play-loop command. Returns ``False`` when the player quits."""

    command = command.strip()
    if not command:
        return True
    if command.startswith(":"):
        name = command[1:].lower()
        if name == "quit":
            return False
        if name in ("up", "down", "left", "right"):
            session.move(name.upper())
        elif name == "toggle":
            session.toggle_direction()
        elif name == "back":
            session.backspace()
        elif name == "reveal":
            session.reveal_letter()
        elif name == "word":
            session.reveal_word()
        elif name == "check":
            wrong = session.check_errors()
            print(f"{len(wrong)} wrong letter(s)")
        else:
            print(PLAY_HELP)
        return True

    parts = command.replace(",", " ").split()
    if len(parts) == 2 and all(part.isdigit() for part in parts):
        session.select(int(parts[0]), int(parts[1]))
        return True
    for char in command:
        session.type_letter(char)
    return True


def play(session: PuzzleSession, stream=None) -> None:
    stream = stream or sys.stdin
    layout = session.layout
    print(PLAY_HELP)
    while session.state == GameState.PLAYING:
        print(format_grid(layout, session.user_grid, cursor=session.selected, errors=session.error_cells))
        clue = session.active_clue
        if clue is not None:
            print(f"{clue.number} {clue.direction.value}: {clue.clue} ({clue.length})")
        print("> ", end="", flush=True)
        line = stream.readline()
        if not line or not run_command(session, line):
            break
    if session.state == GameState.WON:
        print(format_grid(layout, session.user_grid))
        print("Solved!")


def build_lexicon(args: argparse.Namespace, rng: random.Random) -> Tuple[Optional[LexiconClient], Optional[List[LexiconClient]]]:
    user_words: List[str] = []
    if args.words:
        user_words.extend(args.words)
    if args.words_file:
        user_words.extend(parse_words_file(args.words_file))

    if user_words:
        return UserWordListLexicon(user_words), []
    if args.offline:
        return BuiltinLexicon(rng=rng), []
    # None: the generator wires Datamuse with its default fallbacks
    return None, None


def result_payload(result: CrosswordResult) -> dict:
    payload = {
        "topic": result.topic,
        "size_class": result.size_class.key,
        "pool_size": result.pool_size,
        "seed": result.seed,
    }
    payload.update(result.layout.to_jsonable())
    return payload


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    level = getattr(logging, args.log_level.upper(), logging.INFO)
    configure_logging(level)

    if args.attempts < 1:
        parser.error("--attempts must be positive")
    if args.offline and args.topic:
        parser.error("--offline only supports named themes (use --theme)")

    config = GeneratorConfig(
        size_class=args.size,
        strategy=args.strategy,
        attempts=args.attempts,
        seed=args.seed,
    )
    lexicon, fallbacks = build_lexicon(args, random.Random(args.seed))
    topic = args.theme or args.topic
    if topic is None and (args.words or args.words_file):
        topic = "Custom"

    generator = CrosswordGenerator(config, lexicon=lexicon, fallbacks=fallbacks)
    try:
        result = generator.generate(topic)
    except GenerationFailed as exc:
        LOGGER.error("%s (received %s, needed %s)", exc, exc.received, exc.needed)
        raise SystemExit(1) from exc
    except CrosswordError as exc:
        LOGGER.error("Crossword generation failed: %s", exc)
        raise SystemExit(1) from exc

    if args.play:
        session = PuzzleSession()
        session.start(result.layout)
        play(session)
        print()
        print("ACROSS")
        print(format_clues(result.layout.across, reveal=True))
        print("DOWN")
        print(format_clues(result.layout.down, reveal=True))
        return

    output_text = json.dumps(result_payload(result), ensure_ascii=False, indent=2)
    if args.output:
        args.output.write_text(output_text, encoding="utf-8")
        print_layout_stats(result)
    else:
        print(output_text)


if __name__ == "__main__":  # pragma: no cover
    main()
