"""Fixed-depth minimax and alpha-beta search over a gravity board."""

import math
from dataclasses import dataclass
from typing import Optional, Tuple

from c4engine.core.board import Board
from c4engine.core.constants import COLOR_A, COLUMNS, NO_MOVE
from c4engine.core.evaluator import Evaluator

INF = math.inf


@dataclass(frozen=True)
class SearchResult:
    move: Optional[int]
    nodes: int
    elapsed: float = 0.0  # filled in by the caller that timed the search


class _Counter:
    __slots__ = ("nodes",)

    def __init__(self):
        self.nodes = 0


def minimax(board: Board, max_depth: int, evaluator: Optional[Evaluator] = None) -> SearchResult:
    """
    Plain minimax to `max_depth` plies. X maximizes, O minimizes.

    The board is copied once; the search then mutates and undoes that copy
    along each line, so the caller's board is never touched.
    """
    counter = _Counter()
    move, _score = _minimax(board.copy(), max_depth, evaluator, counter)
    return SearchResult(move, counter.nodes)


def alpha_beta(board: Board, max_depth: int, evaluator: Optional[Evaluator] = None) -> SearchResult:
    """Alpha-beta pruned minimax; picks the same move as `minimax` at equal depth."""
    counter = _Counter()
    move, _score = _alpha_beta(board.copy(), -INF, INF, max_depth, evaluator, counter)
    return SearchResult(move, counter.nodes)


def _minimax(board: Board, depth: int, evaluator, counter: _Counter) -> Tuple[Optional[int], float]:
    if depth == 0 or board.is_full():
        return NO_MOVE, board.evaluate(evaluator).score

    minimizing = board.to_move == COLOR_A
    best_move = NO_MOVE
    best_score = INF if minimizing else -INF

    for col in range(COLUMNS):
        if not board.insert(col):
            continue
        counter.nodes += 1
        _, score = _minimax(board, depth - 1, evaluator, counter)
        board.undo(col)

        if (minimizing and score < best_score) or (not minimizing and score > best_score):
            best_score = score
            best_move = col

    if best_move is NO_MOVE:
        return NO_MOVE, board.evaluate(evaluator).score
    return best_move, best_score


def _alpha_beta(
    board: Board, alpha: float, beta: float, depth: int, evaluator, counter: _Counter
) -> Tuple[Optional[int], float]:
    if depth == 0 or board.is_full():
        return NO_MOVE, board.evaluate(evaluator).score

    minimizing = board.to_move == COLOR_A
    best_move = NO_MOVE
    best_score = INF if minimizing else -INF

    for col in range(COLUMNS):
        if not board.insert(col):
            continue
        counter.nodes += 1
        _, score = _alpha_beta(board, alpha, beta, depth - 1, evaluator, counter)
        board.undo(col)

        if minimizing:
            if score < best_score:
                best_score = score
                best_move = col
            beta = min(beta, score)
        else:
            if score > best_score:
                best_score = score
                best_move = col
            alpha = max(alpha, score)

        # fail-soft cutoff
        if beta <= alpha:
            break

    if best_move is NO_MOVE:
        return NO_MOVE, board.evaluate(evaluator).score
    return best_move, best_score
