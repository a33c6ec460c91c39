# c4engine/core/constants.py

# --- Board Dimensions ---
COLUMNS = 7
ROWS = 6
CELLS = COLUMNS * ROWS

# --- Colors ---
# Color A moves first on a fresh board and is rendered as 'O'.
COLOR_A = 0
COLOR_B = 1

# Sentinel for "no legal move" / "search found nothing"
NO_MOVE = None

# --- Evaluation Directions ---
# (dx, dy) with x = column, y = row (row 0 is the bottom).
# Together with their opposites these cover all 8 compass directions.
DIRECTIONS = ((1, -1), (1, 0), (1, 1), (0, 1))
WINDOW = 4

# --- Notation ---
BLANK_MARKERS = "bB"
COLOR_B_MARKERS = "xX"
SYMBOLS = {COLOR_A: "O", COLOR_B: "X"}
EMPTY_SYMBOL = "-"
