"""
Evaluator Module
================

Static evaluation of Connect Four positions, shared by every search strategy.

The board is scanned window by window: every cell paired with each of the four
principal directions defines a run of four cells. A window holding four stones
of one color ends the scan with a win. Otherwise single-colored windows whose
trailing cell lies on the grid add a weight (looked up by stone count) to the
running score. Positive scores favor color B ('X'), negative scores color A.
"""

from enum import Enum
from typing import List, NamedTuple, Optional, Tuple

from c4engine.config import CONFIG, EvalConfig
from c4engine.core.constants import COLOR_A, COLOR_B, COLUMNS, DIRECTIONS, ROWS, WINDOW


class GameState(Enum):
    IN_PROGRESS = "Not over"
    DRAW = "Draw"
    COLOR_A_WINS = "O won"
    COLOR_B_WINS = "X won"

    def __str__(self) -> str:
        return self.value

    @property
    def is_terminal(self) -> bool:
        return self is not GameState.IN_PROGRESS


class Status(NamedTuple):
    state: GameState
    score: int


def _build_windows() -> List[Tuple[Tuple[Tuple[int, int], ...], bool]]:
    """
    Pre-computes the scan in column-major, bottom-up order.

    Each entry holds the on-grid cells of one window and whether its trailing
    endpoint is on the grid (only those windows contribute to the score).
    Cells that fall off the grid are dropped here; cells above a column's
    height are filtered at evaluation time.
    """
    windows = []
    for x0 in range(COLUMNS):
        for y0 in range(ROWS):
            for dx, dy in DIRECTIONS:
                cells = []
                x, y = x0, y0
                for step in range(WINDOW):
                    if step:
                        x += dx
                        y += dy
                    if 0 <= x < COLUMNS and 0 <= y < ROWS:
                        cells.append((x, y))
                scored = 0 <= x < COLUMNS and 0 <= y < ROWS
                windows.append((tuple(cells), scored))
    return windows


WINDOWS = _build_windows()


class Evaluator:
    """Scores boards with the window heuristic described in the module docstring."""

    def __init__(self, cfg: Optional[EvalConfig] = None) -> None:
        self.cfg = cfg or CONFIG.eval

    def evaluate(self, board) -> Status:
        """Return the Status of `board`; an early four wins regardless of the score so far."""
        heights = board.heights
        cells = board.cells
        weights = self.cfg.window_weights
        score = 0

        for window, scored in WINDOWS:
            a_count = 0
            b_count = 0
            for x, y in window:
                if y < heights[x]:
                    if cells[x][y] == COLOR_B:
                        b_count += 1
                    else:
                        a_count += 1

            if a_count == WINDOW:
                return Status(GameState.COLOR_A_WINS, -self.cfg.win_score)
            if b_count == WINDOW:
                return Status(GameState.COLOR_B_WINS, self.cfg.win_score)
            if scored:
                if a_count == 0:
                    score += weights[b_count]
                elif b_count == 0:
                    score -= weights[a_count]

        if board.is_full():
            return Status(GameState.DRAW, 0)

        tempo = self.cfg.tempo_bonus if board.to_move == COLOR_B else -self.cfg.tempo_bonus
        return Status(GameState.IN_PROGRESS, score + tempo)


def favors(state: GameState, color: int) -> bool:
    """True if `state` is a win for `color`."""
    if color == COLOR_A:
        return state is GameState.COLOR_A_WINS
    return state is GameState.COLOR_B_WINS
