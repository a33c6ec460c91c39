"""Command-line play: human vs engine, or engine vs engine from any position."""

import argparse
import logging
import random
import sys
from typing import Optional, TextIO

from c4engine.config import CONFIG, configure_logging
from c4engine.core.board import Board
from c4engine.core.constants import COLOR_A, COLOR_B, COLUMNS, ROWS, SYMBOLS
from c4engine.core.evaluator import GameState
from c4engine.core.strategy import STRATEGIES
from c4engine.main import Engine

logger = logging.getLogger(__name__)

COLOR_NAMES = {"O": COLOR_A, "X": COLOR_B}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="c4engine", description="Play Connect Four against a search engine.")
    parser.add_argument("--strategy", choices=sorted(STRATEGIES), default=CONFIG.search.strategy)
    parser.add_argument("--budget", type=int, default=None,
                        help="search depth (minimax, alpha_beta) or iterations (mcts)")
    parser.add_argument("--board", default=None,
                        help=f"starting position: {ROWS} lines of {COLUMNS} "
                             "characters, top row first, 'b' for empty")
    parser.add_argument("--to-move", choices=sorted(COLOR_NAMES), default="O")
    parser.add_argument("--human", choices=["O", "X", "none"], default=CONFIG.ui.human_color or "none")
    parser.add_argument("--seed", type=int, default=CONFIG.search.seed)
    parser.add_argument("--log-level", default=CONFIG.log_level)
    return parser


def read_human_move(engine: Engine, stdin: TextIO, stdout: TextIO) -> Optional[int]:
    """Prompt until a playable column is entered. Returns None on EOF."""
    while True:
        stdout.write("where to place? ")
        stdout.flush()
        line = stdin.readline()
        if not line:
            return None
        try:
            column = int(line.strip())
        except ValueError:
            stdout.write("Please enter a column number.\n")
            continue
        if not 0 <= column < COLUMNS:
            stdout.write(f"Invalid column number. It should be no greater than {COLUMNS - 1}.\n")
        elif not engine.make_move(column):
            stdout.write(f"Column {column} is already full! Try again with different column.\n")
        else:
            return column


def play(engine: Engine, human: Optional[int], stdin: TextIO = sys.stdin, stdout: TextIO = sys.stdout) -> Optional[GameState]:
    """
    Alternate turns until someone wins, the board fills up or input ends.
    Returns the final status state, or None if the human quit.
    """
    stdout.write(f"{CONFIG.ui.engine_name} ({engine.strategy.name})\n")
    engine.print_board(stdout)

    status = engine.status()
    while not status.state.is_terminal:
        if engine.board.to_move == human:
            if read_human_move(engine, stdin, stdout) is None:
                return None
        else:
            result = engine.play_engine_move()
            if result.move is None:
                break
            stdout.write(
                f"{SYMBOLS[engine.board.to_move ^ 1]} plays column {result.move} "
                f"({result.nodes} nodes, {result.elapsed:.3f}s)\n"
            )

        status = engine.status()
        engine.print_board(stdout)
        stdout.write(f"Score: {status.score}\n")

    stdout.write(f"{status.state}\n")
    return status.state


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    strategy_kwargs = {}
    if args.strategy == "mcts" and args.seed is not None:
        strategy_kwargs["rng"] = random.Random(args.seed)

    try:
        board = Board.from_notation(args.board, COLOR_NAMES[args.to_move]) if args.board else Board()
        if args.budget is not None and args.budget < 0:
            raise ValueError("Budget must be non-negative")
        # a configured default strategy bypasses argparse choices
        engine = Engine(strategy=args.strategy, budget=args.budget, board=board, **strategy_kwargs)
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    human = None if args.human == "none" else COLOR_NAMES[args.human]
    play(engine, human)
    return 0


if __name__ == "__main__":
    sys.exit(main())
