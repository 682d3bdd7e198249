"""
Board geometry: coordinates, compass directions, and the precomputed move table.

A coordinate is a (column, row) pair of dimension values in 0..9. Columns
are written as the letters a-j and rows as the numbers 1-10, so the square
at column 0, row 3 is "a4". Each coordinate maps to an integer index
row * 10 + column, which is how the board addresses its tile grid.

Queen movement is the same for pieces and arrows: walk outward in one of 8
compass directions until something blocks the way. The walk itself depends
only on geometry, so every square's 8 rays are computed once into a
MoveTable and shared read-only by every board built from it. Board methods
then only have to decide where each ray stops.

Ray order matters. Reachability, move enumeration and therefore alpha-beta
tie-breaking all follow the table order exactly:

    Left, Up-Left, Up, Up-Right, Right, Down-Right, Down, Down-Left

where "up" means increasing row number. Within a ray, squares are ordered
nearest first.
"""

from dataclasses import dataclass
from enum import IntEnum
from functools import lru_cache

from amazons.constants import BOARD_SIZE, COLUMN_LETTERS, DIRECTION_COUNT, SQUARE_COUNT
from amazons.errors import InvalidCoordinate, InvalidNotation

# Row tokens are the decimal strings "1".."10"; "10" is the only two-character
# token, and forms like "01" are rejected.
_ROW_TOKENS: dict[str, int] = {str(row + 1): row for row in range(BOARD_SIZE)}


def less_than(dim: int) -> list[int]:
    """Dimension values below ``dim``, nearest first (descending)."""
    return list(range(dim - 1, -1, -1))


def greater_than(dim: int) -> list[int]:
    """Dimension values above ``dim``, nearest first (ascending)."""
    return list(range(dim + 1, BOARD_SIZE))


@dataclass(frozen=True)
class Coord:
    """
    An immutable board square.

    Attributes:
        column: 0..9, rendered as the letters a-j.
        row:    0..9, rendered as the numbers 1-10.

    Raises:
        InvalidCoordinate: if either dimension is outside 0..9.
    """

    column: int
    row: int

    def __post_init__(self) -> None:
        if not (0 <= self.column < BOARD_SIZE and 0 <= self.row < BOARD_SIZE):
            raise InvalidCoordinate(f"({self.column}, {self.row}) is off the board")

    @property
    def index(self) -> int:
        """Integer index of this square in the tile grid (0..99)."""
        return self.row * BOARD_SIZE + self.column

    @classmethod
    def from_index(cls, index: int) -> "Coord":
        """Decode a tile-grid index back into a coordinate."""
        if not 0 <= index < SQUARE_COUNT:
            raise InvalidCoordinate(f"{index} is out of bounds")
        return ALL_COORDS[index]

    @classmethod
    def parse(cls, text: str) -> "Coord":
        """
        Parse ``<column-letter a-j><row-number 1-10>``, e.g. "a4" or "j10".

        Raises:
            InvalidNotation: on any other form.
        """
        if len(text) < 2:
            raise InvalidNotation(f"invalid coordinate {text!r}")
        column = COLUMN_LETTERS.find(text[0])
        row = _ROW_TOKENS.get(text[1:])
        if column < 0 or row is None:
            raise InvalidNotation(f"invalid coordinate {text!r}")
        return ALL_COORDS[row * BOARD_SIZE + column]

    def __str__(self) -> str:
        return f"{COLUMN_LETTERS[self.column]}{self.row + 1}"

    def __repr__(self) -> str:
        return f"Coord({self})"


# Every square in index order. Coord.from_index() and Coord.parse() hand out
# these shared instances rather than allocating new ones.
ALL_COORDS: tuple[Coord, ...] = tuple(
    Coord(index % BOARD_SIZE, index // BOARD_SIZE) for index in range(SQUARE_COUNT)
)


class Direction(IntEnum):
    """The 8 compass directions, in move table order."""

    LEFT = 0
    UP_LEFT = 1
    UP = 2
    UP_RIGHT = 3
    RIGHT = 4
    DOWN_RIGHT = 5
    DOWN = 6
    DOWN_LEFT = 7


def _rays_from(coord: Coord) -> tuple[tuple[int, ...], ...]:
    """Build the 8 rays leaving ``coord`` as tuples of square indices."""
    left = less_than(coord.column)
    right = greater_than(coord.column)
    down = less_than(coord.row)
    up = greater_than(coord.row)

    def line(columns, rows) -> tuple[int, ...]:
        # zip() stops at the shorter axis, which is exactly where a diagonal
        # runs off the board.
        return tuple(row * BOARD_SIZE + column for column, row in zip(columns, rows))

    same_column = [coord.column] * BOARD_SIZE
    same_row = [coord.row] * BOARD_SIZE
    return (
        line(left, same_row),      # Left
        line(left, up),            # Up+Left
        line(same_column, up),     # Up
        line(right, up),           # Up+Right
        line(right, same_row),     # Right
        line(right, down),         # Down+Right
        line(same_column, down),   # Down
        line(left, down),          # Down+Left
    )


class MoveTable:
    """
    Immutable per-square, per-direction ray cache.

    ``rays[index][direction]`` is the tuple of square indices walking outward
    from ``index`` in that direction to the board edge, nearest first. The
    table is pure geometry: it never changes after construction and can be
    shared freely between boards, searches, and threads.

    Build one with MoveTable.build(), or take the process-wide instance from
    default_move_table(), and hand it to every Board that should share it.
    """

    __slots__ = ("_rays",)

    def __init__(self, rays: tuple[tuple[tuple[int, ...], ...], ...]) -> None:
        if len(rays) != SQUARE_COUNT:
            raise ValueError(f"expected {SQUARE_COUNT} squares, got {len(rays)}")
        for index, square_rays in enumerate(rays):
            if len(square_rays) != DIRECTION_COUNT:
                raise ValueError(
                    f"expected {DIRECTION_COUNT} rays from square {index}, got {len(square_rays)}"
                )
        self._rays = rays

    @classmethod
    def build(cls) -> "MoveTable":
        """Compute the rays for all 100 squares."""
        return cls(tuple(_rays_from(coord) for coord in ALL_COORDS))

    @property
    def rays(self) -> tuple[tuple[tuple[int, ...], ...], ...]:
        """Raw index rays, ``rays[square][direction]``. Used by hot loops."""
        return self._rays

    def ray(self, coord: Coord, direction: Direction) -> tuple[Coord, ...]:
        """The squares walked from ``coord`` in ``direction``, nearest first."""
        return tuple(ALL_COORDS[index] for index in self._rays[coord.index][direction])


@lru_cache
def default_move_table() -> MoveTable:
    """Return the process-wide move table, built on first use."""
    return MoveTable.build()
