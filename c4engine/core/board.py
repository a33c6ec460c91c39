"""Gravity board for Connect Four: placement, undo, notation and evaluation."""

import random
from typing import List, Optional

from c4engine.core.constants import (
    BLANK_MARKERS,
    CELLS,
    COLOR_A,
    COLOR_B,
    COLOR_B_MARKERS,
    COLUMNS,
    EMPTY_SYMBOL,
    NO_MOVE,
    ROWS,
    SYMBOLS,
)
from c4engine.core.evaluator import Evaluator, Status

_DEFAULT_EVALUATOR = Evaluator()


class Board:
    def __init__(self, to_move: int = COLOR_A):
        """
        Cells use (column, row) indexing with row 0 at the BOTTOM.
        A cell is occupied only when row < heights[column]; anything
        stored above the height is stale and never read.
        """
        self.cells: List[List[int]] = [[COLOR_A] * ROWS for _ in range(COLUMNS)]
        self.heights: List[int] = [0] * COLUMNS
        self.to_move = to_move

    @classmethod
    def from_notation(cls, text: str, to_move: int = COLOR_A) -> "Board":
        """
        Build a board from ROWS lines of COLUMNS characters, top row first.

        Each column is read from the bottom line upward until a blank marker
        ('b'/'B'); the height is the number of cells below it and anything above
        is ignored. A column without a marker is full. 'x'/'X' is color B and
        every other character is color A. Whitespace is ignored.
        """
        flat = "".join(text.split())
        if len(flat) != CELLS:
            raise ValueError(
                f"Incorrect dimension of the board: expected {CELLS} cells, got {len(flat)}"
            )

        board = cls(to_move=to_move)
        for col in range(COLUMNS):
            height = ROWS
            for line in range(ROWS - 1, -1, -1):
                ch = flat[line * COLUMNS + col]
                row = ROWS - 1 - line
                if ch in BLANK_MARKERS:
                    height = row
                    break
                board.cells[col][row] = COLOR_B if ch in COLOR_B_MARKERS else COLOR_A
            board.heights[col] = height
        return board

    def copy(self) -> "Board":
        clone = Board.__new__(Board)
        clone.cells = [column[:] for column in self.cells]
        clone.heights = self.heights[:]
        clone.to_move = self.to_move
        return clone

    def insert(self, column: int) -> bool:
        """Drop a stone for the side to move. Returns False if the column is full."""
        if not 0 <= column < COLUMNS:
            raise IndexError(f"Column {column} out of range 0..{COLUMNS - 1}")
        height = self.heights[column]
        if height >= ROWS:
            return False
        self.cells[column][height] = self.to_move
        self.heights[column] = height + 1
        self.to_move ^= 1
        return True

    def undo(self, column: int):
        """Take back the most recent stone in `column`. Search backtracking only."""
        if not 0 <= column < COLUMNS:
            raise IndexError(f"Column {column} out of range 0..{COLUMNS - 1}")
        if self.heights[column] == 0:
            raise ValueError(f"Cannot undo column {column}: it is empty")
        self.heights[column] -= 1
        self.to_move ^= 1

    def is_full(self) -> bool:
        """True if every column is filled to the top."""
        return all(h == ROWS for h in self.heights)

    def legal_moves(self) -> List[int]:
        """Return the columns that are not full, in increasing order."""
        return [c for c in range(COLUMNS) if self.heights[c] < ROWS]

    def random_legal_move(self, rng: Optional[random.Random] = None) -> Optional[int]:
        """Return a uniformly random playable column, or NO_MOVE when the board is full."""
        moves = self.legal_moves()
        if not moves:
            return NO_MOVE
        return (rng or random).choice(moves)

    def connects_four(self, column: int) -> bool:
        """Checks for 4-in-a-row through the top stone of `column`."""
        row = self.heights[column] - 1
        if row < 0:
            return False
        color = self.cells[column][row]

        for dx, dy in ((1, 0), (0, 1), (1, 1), (1, -1)):
            count = 1
            for sign in (1, -1):
                for i in range(1, 4):
                    x, y = column + sign * dx * i, row + sign * dy * i
                    if 0 <= x < COLUMNS and 0 <= y < self.heights[x] and self.cells[x][y] == color:
                        count += 1
                    else:
                        break
            if count >= 4:
                return True
        return False

    def evaluate(self, evaluator: Optional[Evaluator] = None) -> Status:
        """Return (state, score); positive scores favor X."""
        return (evaluator or _DEFAULT_EVALUATOR).evaluate(self)

    def color_at(self, column: int, row: int) -> Optional[int]:
        """Return the stone color at (column, row), or None for an empty cell."""
        if row < self.heights[column]:
            return self.cells[column][row]
        return None

    def swapped(self) -> "Board":
        """Return a copy with every stone and the side to move switched to the other color."""
        clone = self.copy()
        for col in range(COLUMNS):
            for row in range(self.heights[col]):
                clone.cells[col][row] ^= 1
        clone.to_move ^= 1
        return clone

    # --- Formatting ---

    def to_notation(self) -> str:
        """Inverse of from_notation: 'X', 'O' and 'b' for empty cells, top row first."""
        lines = []
        for row in range(ROWS - 1, -1, -1):
            line = []
            for col in range(COLUMNS):
                color = self.color_at(col, row)
                line.append("b" if color is None else SYMBOLS[color])
            lines.append("".join(line))
        return "\n".join(lines)

    def render(self, offset: int = 0) -> str:
        """ASCII grid, top row first, '-' for empty cells."""
        lines = []
        for row in range(ROWS - 1, -1, -1):
            symbols = []
            for col in range(COLUMNS):
                color = self.color_at(col, row)
                symbols.append(EMPTY_SYMBOL if color is None else SYMBOLS[color])
            lines.append(" " * offset + " ".join(symbols))
        return "\n".join(lines)

    def _key(self):
        occupied = tuple(tuple(self.cells[c][: self.heights[c]]) for c in range(COLUMNS))
        return occupied, self.to_move

    def __eq__(self, other) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __repr__(self) -> str:
        return f"Board(to_move={SYMBOLS[self.to_move]!r}, heights={self.heights})"
