"""Engine-vs-engine arena: play a series of games between two strategies."""

import argparse
import logging
import random
import sys
from collections import Counter
from typing import Dict, Optional, Tuple

from tqdm import trange

from c4engine.config import CONFIG, configure_logging
from c4engine.core.board import Board
from c4engine.core.constants import COLOR_A
from c4engine.core.evaluator import GameState
from c4engine.core.strategy import STRATEGIES, Strategy, get_strategy

logger = logging.getLogger(__name__)


def play_game(first: Strategy, second: Strategy, first_budget: Optional[int] = None,
              second_budget: Optional[int] = None, board: Optional[Board] = None) -> GameState:
    """Play one game; `first` moves for O and `second` for X. Returns the final state."""
    board = board.copy() if board else Board()
    status = board.evaluate()

    while not status.state.is_terminal:
        if board.to_move == COLOR_A:
            result = first.select_move(board, first_budget)
        else:
            result = second.select_move(board, second_budget)
        if result.move is None:
            break
        board.insert(result.move)
        status = board.evaluate()

    return status.state


def player_labels(first_name: str, second_name: str) -> Tuple[str, str]:
    """Tally keys for the two seats; a mirror match gets `name#1` and `name#2`."""
    if first_name == second_name:
        return f"{first_name}#1", f"{second_name}#2"
    return first_name, second_name


def run_arena(first_name: str, second_name: str, games: int, first_budget: Optional[int] = None,
              second_budget: Optional[int] = None, seed: Optional[int] = None,
              progress: bool = True) -> Dict[str, int]:
    """
    Play `games` games, swapping colors every game so each strategy opens
    half of them. Returns wins per player label (see `player_labels`) plus draws.
    """
    rng = random.Random(seed)
    labels = player_labels(first_name, second_name)
    players = []
    for label, name, budget in zip(labels, (first_name, second_name), (first_budget, second_budget)):
        kwargs = {"rng": random.Random(rng.getrandbits(32))} if name == "mcts" else {}
        players.append((label, get_strategy(name, CONFIG.search, **kwargs), budget))

    tally = Counter({labels[0]: 0, labels[1]: 0, "draw": 0})
    iterator = trange(games, desc=f"{first_name} vs {second_name}") if progress else range(games)
    for game in iterator:
        o_player, x_player = players if game % 2 == 0 else players[::-1]
        state = play_game(o_player[1], x_player[1], o_player[2], x_player[2])

        if state is GameState.COLOR_A_WINS:
            tally[o_player[0]] += 1
        elif state is GameState.COLOR_B_WINS:
            tally[x_player[0]] += 1
        else:
            tally["draw"] += 1
        logger.debug("game %d: O=%s X=%s -> %s", game, o_player[0], x_player[0], state)

    return dict(tally)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="c4arena", description="Pit two search strategies against each other.")
    parser.add_argument("first", choices=sorted(STRATEGIES))
    parser.add_argument("second", choices=sorted(STRATEGIES))
    parser.add_argument("--games", type=int, default=10)
    parser.add_argument("--first-budget", type=int, default=None)
    parser.add_argument("--second-budget", type=int, default=None)
    parser.add_argument("--seed", type=int, default=CONFIG.search.seed)
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    if args.games < 0:
        print("error: --games must be non-negative", file=sys.stderr)
        return 1

    tally = run_arena(args.first, args.second, args.games, args.first_budget, args.second_budget, args.seed)
    for name, count in tally.items():
        print(f"{name}: {count}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
