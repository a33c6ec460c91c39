"""
Search Strategy Pattern

Each strategy exposes select_move(board, budget) and is picked by name from
the registry instead of switching on the algorithm at every call site.
"""

import logging
import random
import threading
import time
from abc import ABC, abstractmethod
from dataclasses import replace
from typing import Optional

from c4engine.config import CONFIG, SearchConfig
from c4engine.core.board import Board
from c4engine.core.evaluator import Evaluator
from c4engine.core.mcts import mcts
from c4engine.core.search import SearchResult, alpha_beta, minimax
from c4engine.core.utils import format_info

logger = logging.getLogger(__name__)


class Strategy(ABC):
    """Abstract base class for move-selection strategies"""

    name = "strategy"

    def __init__(self, cfg: Optional[SearchConfig] = None, evaluator: Optional[Evaluator] = None):
        self.cfg = cfg or CONFIG.search
        self.evaluator = evaluator

    @abstractmethod
    def search(self, board: Board, budget: int) -> SearchResult:
        """Run the underlying pure search function"""

    def default_budget(self) -> int:
        return self.cfg.depth

    def select_move(self, board: Board, budget: Optional[int] = None) -> SearchResult:
        """Search `board` with `budget` (depth or iterations) and time the call."""
        if budget is None:
            budget = self.default_budget()
        start_time = time.perf_counter()
        result = self.search(board, budget)
        result = replace(result, elapsed=time.perf_counter() - start_time)

        score = None
        if result.move is not None:
            after = board.copy()
            after.insert(result.move)
            score = after.evaluate(self.evaluator).score
        logger.info(format_info(self.name, budget, result.move, result.nodes, result.elapsed, score))
        return result


class MinimaxStrategy(Strategy):
    name = "minimax"

    def search(self, board: Board, budget: int) -> SearchResult:
        return minimax(board, budget, self.evaluator)


class AlphaBetaStrategy(Strategy):
    name = "alpha_beta"

    def search(self, board: Board, budget: int) -> SearchResult:
        return alpha_beta(board, budget, self.evaluator)


class MCTSStrategy(Strategy):
    """
    Monte Carlo Tree Search. Holds its own seeded random source so a fixed
    seed replays the same rollouts, and an optional stop event checked
    between iterations.
    """

    name = "mcts"

    def __init__(
        self,
        cfg: Optional[SearchConfig] = None,
        evaluator: Optional[Evaluator] = None,
        rng: Optional[random.Random] = None,
        stop_event: Optional[threading.Event] = None,
    ):
        super().__init__(cfg, evaluator)
        self.rng = rng or random.Random(self.cfg.seed)
        self.stop_event = stop_event

    def default_budget(self) -> int:
        return self.cfg.iterations

    def search(self, board: Board, budget: int) -> SearchResult:
        return mcts(
            board,
            budget,
            rng=self.rng,
            stop_event=self.stop_event,
            progress=self.cfg.show_progress,
            win_scale=self.cfg.ucb_win_scale,
        )


# Strategy Registry
STRATEGIES = {
    MinimaxStrategy.name: MinimaxStrategy,
    AlphaBetaStrategy.name: AlphaBetaStrategy,
    MCTSStrategy.name: MCTSStrategy,
}


def get_strategy(name: str, cfg: Optional[SearchConfig] = None, **kwargs) -> Strategy:
    """
    Factory function returning the strategy registered under `name`.
    Extra keyword arguments go to the strategy constructor.
    """
    strategy_cls = STRATEGIES.get(name)
    if strategy_cls is None:
        raise ValueError(f"Unsupported strategy: {name} (choose from {', '.join(STRATEGIES)})")
    return strategy_cls(cfg, **kwargs)
