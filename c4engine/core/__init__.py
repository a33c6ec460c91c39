"""Core engine components: board, evaluator, minimax/alpha-beta, MCTS and strategies."""

from .board import Board
from .evaluator import Evaluator, GameState, Status
from .mcts import mcts
from .search import SearchResult, alpha_beta, minimax
from .strategy import STRATEGIES, Strategy, get_strategy
