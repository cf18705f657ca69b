"""Application entry point and setup for the monkminal typing trainer."""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from monkminal.core.config import DEFAULT_TIME, TIME_CHOICES, Difficulty, GameMode, SessionConfig
from monkminal.core.corpus import CorpusRepository
from monkminal.core.errors import MonkminalError
from monkminal.core.session import SessionResult
from monkminal.ui.loop import run_session
from monkminal.ui.menu import prompt_config
from monkminal.ui.renderer import format_clock

VERSION = "0.1.0"
DESCRIPTION = "A terminal typing-speed trainer."
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

logger = logging.getLogger(__name__)


def configure_logging(level: str = "WARNING", log_file: Optional[Path] = None) -> None:
    """Configure application-wide logging with a standard format.

    The session owns the terminal, so anything below WARNING is best sent to
    a file.
    """
    handlers: List[logging.Handler] = []
    if log_file is not None:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    else:
        handlers.append(logging.StreamHandler())
    logging.basicConfig(level=getattr(logging, level.upper()), format=LOG_FORMAT, handlers=handlers, force=True)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="monkminal", description=DESCRIPTION)
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    parser.add_argument(
        "--mode",
        choices=[mode.value for mode in GameMode],
        help="game type; the interactive menu is shown when omitted",
    )
    parser.add_argument(
        "--time", type=int, default=None, choices=TIME_CHOICES, help=f"seconds for time mode (default {DEFAULT_TIME})"
    )
    parser.add_argument("--words", type=int, default=None, help="number of words for words mode")
    parser.add_argument(
        "--difficulty",
        choices=[difficulty.value for difficulty in Difficulty],
        default=Difficulty.MEDIUM.value,
    )
    parser.add_argument("--words-file", type=Path, help="YAML word list to use instead of the bundled one")
    parser.add_argument("--quotes-file", type=Path, help="YAML quote list to use instead of the bundled one")
    parser.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    parser.add_argument("--log-file", type=Path, help="write log records here instead of stderr")
    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse ``argv``, rejecting options that do not belong to the chosen mode."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.time is not None and args.mode != GameMode.TIMED.value:
        parser.error("--time can only be used with --mode time")
    if args.words is not None and args.mode != GameMode.WORD_COUNT.value:
        parser.error("--words can only be used with --mode words")
    return args


def config_from_args(args: argparse.Namespace) -> SessionConfig:
    mode = GameMode(args.mode)
    difficulty = Difficulty(args.difficulty)
    if mode is GameMode.TIMED:
        return SessionConfig.timed(args.time or DEFAULT_TIME, difficulty)
    if mode is GameMode.WORD_COUNT:
        return SessionConfig(mode, target_word_count=args.words, difficulty=difficulty)
    return SessionConfig.quote(difficulty)


def print_banner() -> None:
    print(f"monkminal v{VERSION}")
    print(DESCRIPTION)
    print()


def format_summary(result: SessionResult) -> str:
    metrics = result.metrics
    return (
        f"Net WPM {metrics.net_wpm:.0f} | Gross WPM {metrics.gross_wpm:.0f} | "
        f"Accuracy {metrics.accuracy:.2f}% | {result.tokens_completed}/{result.token_count} words "
        f"in {format_clock(result.elapsed_seconds)}"
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging(args.log_level, args.log_file)

    try:
        corpus = CorpusRepository(words_path=args.words_file, quotes_path=args.quotes_file)
    except (FileNotFoundError, ValueError) as e:
        logger.error("Could not load corpus: %s", e)
        return 1

    try:
        if args.mode is None:
            print_banner()
            config = prompt_config()
            print()
        else:
            config = config_from_args(args)
        result = run_session(config, corpus.words(), corpus.quotes())
    except (KeyboardInterrupt, EOFError):
        print()
        return 130
    except MonkminalError as e:
        logger.error("Session failed: %s", e)
        return 1

    print(format_summary(result))
    return 0


def run() -> None:
    sys.exit(main())
