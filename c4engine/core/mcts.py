"""
Monte Carlo Tree Search with UCB1 selection.

The tree lives in a flat arena: nodes refer to their parent and children by
index, and the root is the node whose parent index is its own. The arena is
built fresh for every call and dropped when the call returns.
"""

import logging
import math
import random
import threading
from dataclasses import dataclass, field
from typing import List, Optional

from tqdm import trange

from c4engine.core.board import Board
from c4engine.core.constants import NO_MOVE
from c4engine.core.evaluator import GameState, favors
from c4engine.core.search import SearchResult

logger = logging.getLogger(__name__)

ROOT = 0


@dataclass
class Node:
    board: Board
    parent: int
    move: Optional[int] = NO_MOVE
    children: List[int] = field(default_factory=list)
    visits: int = 0
    wins: int = 0


class MonteCarloTree:
    def __init__(self, board: Board, rng: Optional[random.Random] = None, win_scale: float = 2.0):
        self.nodes: List[Node] = [Node(board.copy(), parent=ROOT)]
        self.rng = rng or random.Random()
        self.win_scale = win_scale
        self.expanded = 0
        self.root_player = board.to_move

    def find_best_leaf(self) -> int:
        """Descend from the root along the best UCB1 child until a node without children."""
        current = ROOT
        while self.nodes[current].children:
            current = self.choose_best_child(current)
        return current

    def choose_best_child(self, parent: int) -> Optional[int]:
        """
        Pick the child with the highest UCB1 score. An unvisited child is
        returned immediately since the formula is undefined at zero visits.
        Returns None if `parent` has no children.
        """
        node = self.nodes[parent]
        log_parent = math.log(node.visits) if node.visits > 0 else 0.0
        best_ucb = -math.inf
        best_child = None

        for index in node.children:
            child = self.nodes[index]
            if child.visits == 0:
                return index

            ucb = child.wins / (self.win_scale * child.visits) + math.sqrt(
                2 * log_parent / child.visits
            )
            if ucb > best_ucb:
                best_ucb = ucb
                best_child = index

        return best_child

    def expand(self, leaf: int) -> Optional[int]:
        """
        Materialize one child per legal column of `leaf` and return the first.
        Returns None when the leaf's board has no legal column.
        """
        node = self.nodes[leaf]
        moves = node.board.legal_moves()
        if not moves:
            return None

        for col in moves:
            child_board = node.board.copy()
            child_board.insert(col)
            node.children.append(len(self.nodes))
            self.nodes.append(Node(child_board, parent=leaf, move=col))
            self.expanded += 1

        return node.children[0]

    def rollout(self, leaf: int) -> bool:
        """
        Run one simulate-and-backpropagate step from `leaf`. A leaf that was
        already visited is expanded first. Returns False when expansion fails.
        """
        if self.nodes[leaf].visits > 0:
            leaf = self.expand(leaf)
            if leaf is None:
                return False

        state = self.simulate(self.nodes[leaf].board)
        if state is GameState.DRAW:
            won = 1
        else:
            won = 2 if favors(state, self.root_player) else 0
        self.backpropagate(leaf, won)
        return True

    def simulate(self, board: Board) -> GameState:
        """Play random moves on a copy of `board` until it is full or someone connects four."""
        state = board.evaluate().state
        if state.is_terminal:
            return state

        board = board.copy()
        while not board.is_full():
            col = board.random_legal_move(self.rng)
            board.insert(col)
            if board.connects_four(col):
                break

        return board.evaluate().state

    def backpropagate(self, leaf: int, won: int):
        current = leaf
        while True:
            node = self.nodes[current]
            node.wins += won
            node.visits += 1
            if node.parent == current:
                break
            current = node.parent


def mcts(
    board: Board,
    max_iterations: int,
    rng: Optional[random.Random] = None,
    stop_event: Optional[threading.Event] = None,
    progress: bool = False,
    win_scale: float = 2.0,
) -> SearchResult:
    """
    Grow a search tree for up to `max_iterations` rollouts and return the
    root child that UCB1 would select next. With fewer than two iterations
    the root is never expanded, so the result is NO_MOVE.
    """
    tree = MonteCarloTree(board, rng=rng, win_scale=win_scale)

    iterator = trange(max_iterations, desc="mcts", leave=False) if progress else range(max_iterations)
    for _ in iterator:
        if stop_event is not None and stop_event.is_set():
            logger.debug("MCTS stopped after %d nodes", tree.expanded)
            break
        if not tree.rollout(tree.find_best_leaf()):
            break

    best = tree.choose_best_child(ROOT)
    if best is None:
        return SearchResult(NO_MOVE, 0)
    return SearchResult(tree.nodes[best].move, tree.expanded)
