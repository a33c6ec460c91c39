import logging
import threading
from typing import Callable, List, Optional

from c4engine.config import CONFIG, SearchConfig
from c4engine.core.board import Board
from c4engine.core.evaluator import Status
from c4engine.core.search import SearchResult
from c4engine.core.strategy import Strategy, get_strategy

logger = logging.getLogger(__name__)


class Engine:
    """Holds the long-lived game board and asks a strategy for a move each turn."""

    def __init__(self, strategy: Optional[str] = None, budget: Optional[int] = None,
                 board: Optional[Board] = None, cfg: Optional[SearchConfig] = None, **strategy_kwargs):
        self.cfg = cfg or CONFIG.search
        self.board = board or Board()
        self.move_history: List[int] = []
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

        name = strategy or self.cfg.strategy
        if name == "mcts":
            strategy_kwargs.setdefault("stop_event", self._stop_event)
        self.strategy: Strategy = get_strategy(name, self.cfg, **strategy_kwargs)
        self.budget = budget

    def reset(self):
        """Reset to an empty board with O to move."""
        self.board = Board()
        self.move_history.clear()

    def get_best_move(self) -> SearchResult:
        self._stop_event.clear()
        return self.strategy.select_move(self.board, self.budget)

    def make_move(self, column: int) -> bool:
        """Apply `column` to the game board. Returns False if the column is full."""
        if not self.board.insert(column):
            return False
        self.move_history.append(column)
        return True

    def play_engine_move(self) -> SearchResult:
        """Search, then apply the chosen move (if any) to the game board."""
        result = self.get_best_move()
        if result.move is not None:
            self.make_move(result.move)
        return result

    def status(self) -> Status:
        return self.board.evaluate(self.strategy.evaluator)

    def is_game_over(self) -> bool:
        return self.status().state.is_terminal

    def start_search(self, callback: Optional[Callable[[SearchResult], None]] = None):
        """Run one search on a daemon thread; `callback` receives the result."""
        if self._thread and self._thread.is_alive():
            return
        self._stop_event.clear()
        search_board = self.board.copy()

        def worker():
            result = self.strategy.select_move(search_board, self.budget)
            if callback:
                callback(result)

        self._thread = threading.Thread(target=worker, daemon=True)
        self._thread.start()

    def stop(self):
        """Ask a running MCTS search to finish after its current iteration."""
        self._stop_event.set()
        if self._thread:
            self._thread.join(timeout=0.2)

    def print_board(self, file=None):
        """Print the game board with the configured indent (stdout by default)."""
        print(self.board.render(CONFIG.ui.render_indent), file=file)
