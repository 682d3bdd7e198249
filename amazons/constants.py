"""
Engine constants: board geometry, starting layout, glyphs, and search limits.

All numeric constants used throughout the engine are defined here so that
other modules never need to introduce new magic numbers. Runtime-tunable
values (time per turn, heuristic choice, log level) live in settings.py and
take their defaults from this module.
"""

# ---------------------------------------------------------------------------
# Board geometry
# ---------------------------------------------------------------------------
# The board is square. Both axes share the same 10-value dimension domain,
# and a square's integer index is row * BOARD_SIZE + column.

BOARD_SIZE: int = 10
SQUARE_COUNT: int = BOARD_SIZE * BOARD_SIZE

COLUMN_LETTERS: str = "abcdefghij"

# Number of compass directions a queen (or an arrow) can travel in.
DIRECTION_COUNT: int = 8

# ---------------------------------------------------------------------------
# Roster layout
# ---------------------------------------------------------------------------
# The roster is a fixed 8-slot sequence. Slots 0-3 are White, 4-7 are Black.

PIECES_PER_SIDE: int = 4
WHITE_SLOTS: range = range(0, PIECES_PER_SIDE)
BLACK_SLOTS: range = range(PIECES_PER_SIDE, 2 * PIECES_PER_SIDE)

# Standard starting squares, in roster order.
WHITE_START: tuple[str, ...] = ("a4", "d1", "g1", "j4")
BLACK_START: tuple[str, ...] = ("a7", "d10", "g10", "j7")

# ---------------------------------------------------------------------------
# Text rendering
# ---------------------------------------------------------------------------

GLYPH_EMPTY: str = "."
GLYPH_WHITE: str = "W"
GLYPH_BLACK: str = "B"
GLYPH_ARROW: str = "o"

# ---------------------------------------------------------------------------
# Search parameters
# ---------------------------------------------------------------------------
# Every move burns one empty square with an arrow, so no game can last more
# plies than there are empty squares at the start. Iterative deepening past
# this depth cannot discover anything new.
MAX_DEPTH: int = SQUARE_COUNT - 2 * PIECES_PER_SIDE

# Default wall-clock budget per engine move, in seconds.
TIME_PER_TURN: float = 10.0

# Bounds applied to any configured time budget.
MIN_TIME_PER_TURN: float = 0.01
MAX_TIME_PER_TURN: float = 600.0

# Score of a position where the side to move has no legal move. White is the
# maximizer, so a stuck White scores -WIN_SCORE and a stuck Black +WIN_SCORE.
WIN_SCORE: float = float("inf")

DEFAULT_HEURISTIC: str = "weighted_reachability"
