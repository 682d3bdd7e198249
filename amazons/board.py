"""
Board state, move notation, and lazy legal-move enumeration.

A Board is a fixed 8-slot piece roster plus a 100-tile grid. The roster lets
move generation find each side's pieces without scanning the grid; the grid
answers "is this square free?" in constant time. Both are kept in sync by
apply(), the only mutating operation, which performs no legality checks:
legality comes from only ever applying moves produced by moves().

Everything that walks the board is a generator, so callers pay only for what
they consume. The nesting is:

    moves_boards(side)              one fresh Board per yielded move
      moves(side)                   piece -> destination -> arrow
        reachable_indices(square)   ray by ray, nearest first

and the order of every level is fixed by the move table, which in turn fixes
how the search breaks ties.
"""

from enum import Enum, IntEnum
from typing import Iterable, Iterator, NamedTuple

from amazons.constants import (
    BLACK_SLOTS,
    BLACK_START,
    COLUMN_LETTERS,
    GLYPH_ARROW,
    GLYPH_BLACK,
    GLYPH_EMPTY,
    GLYPH_WHITE,
    BOARD_SIZE,
    PIECES_PER_SIDE,
    SQUARE_COUNT,
    WHITE_SLOTS,
    WHITE_START,
)
from amazons.errors import InvalidNotation, NoPieceAtSource
from amazons.geometry import ALL_COORDS, Coord, MoveTable


class TileState(IntEnum):
    """What occupies a square. ARROW is permanent: it never reverts to EMPTY."""

    EMPTY = 0
    WHITE = 1
    BLACK = 2
    ARROW = 3


_GLYPHS: dict[TileState, str] = {
    TileState.EMPTY: GLYPH_EMPTY,
    TileState.WHITE: GLYPH_WHITE,
    TileState.BLACK: GLYPH_BLACK,
    TileState.ARROW: GLYPH_ARROW,
}


class Side(Enum):
    """A player. White moves first and is the maximizing side in search."""

    WHITE = "white"
    BLACK = "black"

    @property
    def slots(self) -> range:
        """Roster slots owned by this side."""
        return WHITE_SLOTS if self is Side.WHITE else BLACK_SLOTS

    @property
    def tile(self) -> TileState:
        return TileState.WHITE if self is Side.WHITE else TileState.BLACK

    @property
    def opponent(self) -> "Side":
        return Side.BLACK if self is Side.WHITE else Side.WHITE


class Move(NamedTuple):
    """
    One full turn: move a piece from ``origin`` to ``destination``, then fire
    an arrow from ``destination`` to ``arrow``.

    Text form is ``<origin>-<destination>/<arrow>``, e.g. ``a4-a5/a6``.
    """

    origin: Coord
    destination: Coord
    arrow: Coord

    @classmethod
    def parse(cls, notation: str) -> "Move":
        """
        Parse move notation. Surrounding whitespace (such as the trailing
        newline of a protocol line) is ignored. Only syntax is checked; the
        move may still be illegal on any given board.

        Raises:
            InvalidNotation: missing ``-`` or ``/``, extra separators, or a
                             malformed coordinate.
        """
        text = notation.strip()
        origin, dash, rest = text.partition("-")
        destination, slash, arrow = rest.partition("/")
        if not dash or not slash:
            raise InvalidNotation(f"expected <from>-<to>/<arrow>, got {notation!r}")
        return cls(Coord.parse(origin), Coord.parse(destination), Coord.parse(arrow))

    def notation(self) -> str:
        return f"{self.origin}-{self.destination}/{self.arrow}"

    def __str__(self) -> str:
        return self.notation()


class Board:
    """
    Piece roster plus tile grid.

    Attributes:
        table: The shared, read-only MoveTable used for every ray walk.

    Slots 0-3 of the roster are White, 4-7 Black. Every WHITE or BLACK tile
    corresponds to exactly one roster slot; ARROW tiles have no slot.
    """

    __slots__ = ("table", "_pieces", "_tiles")

    def __init__(
        self,
        table: MoveTable,
        pieces: Iterable[Coord],
        tiles: Iterable[TileState],
    ) -> None:
        self.table = table
        self._pieces: list[Coord] = list(pieces)
        self._tiles: list[TileState] = list(tiles)
        if len(self._pieces) != 2 * PIECES_PER_SIDE:
            raise ValueError(f"roster needs {2 * PIECES_PER_SIDE} pieces, got {len(self._pieces)}")
        if len(self._tiles) != SQUARE_COUNT:
            raise ValueError(f"grid needs {SQUARE_COUNT} tiles, got {len(self._tiles)}")

    # -----------------------------------------------------------------------
    # Construction
    # -----------------------------------------------------------------------

    @classmethod
    def starting(cls, table: MoveTable) -> "Board":
        """The standard opening position: White a4 d1 g1 j4, Black a7 d10 g10 j7."""
        return cls.from_pieces(table, WHITE_START, BLACK_START)

    @classmethod
    def from_pieces(
        cls,
        table: MoveTable,
        white: Iterable[Coord | str],
        black: Iterable[Coord | str],
        arrows: Iterable[Coord | str] = (),
    ) -> "Board":
        """
        Build an arbitrary position from piece and arrow squares.

        Squares may be given as Coord values or notation strings ("a4").

        Raises:
            ValueError: wrong piece counts, or two things on one square.
        """
        white = [_as_coord(c) for c in white]
        black = [_as_coord(c) for c in black]
        if len(white) != PIECES_PER_SIDE or len(black) != PIECES_PER_SIDE:
            raise ValueError(f"each side needs exactly {PIECES_PER_SIDE} pieces")

        tiles = [TileState.EMPTY] * SQUARE_COUNT
        placements = (
            [(c, TileState.WHITE) for c in white]
            + [(c, TileState.BLACK) for c in black]
            + [(_as_coord(c), TileState.ARROW) for c in arrows]
        )
        for coord, state in placements:
            if tiles[coord.index] is not TileState.EMPTY:
                raise ValueError(f"square {coord} is occupied twice")
            tiles[coord.index] = state
        return cls(table, white + black, tiles)

    def copy(self) -> "Board":
        """Independent copy. Only the immutable move table is shared."""
        clone = Board.__new__(Board)
        clone.table = self.table
        clone._pieces = self._pieces.copy()
        clone._tiles = self._tiles.copy()
        return clone

    # -----------------------------------------------------------------------
    # Queries
    # -----------------------------------------------------------------------

    @property
    def pieces(self) -> tuple[Coord, ...]:
        """The full roster in slot order."""
        return tuple(self._pieces)

    def pieces_of(self, side: Side) -> tuple[Coord, ...]:
        return tuple(self._pieces[slot] for slot in side.slots)

    def tile(self, coord: Coord) -> TileState:
        return self._tiles[coord.index]

    @property
    def tiles(self) -> tuple[TileState, ...]:
        return tuple(self._tiles)

    def reachable_squares(self, origin: Coord) -> Iterator[Coord]:
        """
        Lazily yield every empty square a queen on ``origin`` could move to.

        Rays are walked in move table order, each nearest first, and each ray
        stops at the first non-empty tile (which is not yielded). The origin
        itself is never yielded. Call again for a fresh pass.
        """
        for index in self.reachable_indices(origin.index):
            yield ALL_COORDS[index]

    def reachable_indices(self, start: int, vacated: int = -1) -> Iterator[int]:
        """
        Index-level reachability. ``vacated`` names one square that counts as
        empty even though its tile says otherwise: the square a piece has just
        left, which its own arrow may fly back through.
        """
        tiles = self._tiles
        empty = TileState.EMPTY
        for ray in self.table.rays[start]:
            for square in ray:
                if tiles[square] is not empty and square != vacated:
                    break
                yield square

    def moves(self, side: Side) -> Iterator[Move]:
        """
        Lazily yield every legal move for ``side``.

        Order: roster slot, then destination in reachability order, then
        arrow in reachability order from the destination. For the arrow walk
        the moving piece is treated as already lifted, so an arrow may land
        on or pass through the square the piece just vacated.
        """
        for slot in side.slots:
            origin = self._pieces[slot]
            start = origin.index
            for destination in self.reachable_indices(start):
                landing = ALL_COORDS[destination]
                for arrow in self.reachable_indices(destination, vacated=start):
                    yield Move(origin, landing, ALL_COORDS[arrow])

    def moves_boards(self, side: Side) -> Iterator[tuple[Move, "Board"]]:
        """Like moves(), paired with a freshly copied board with the move applied."""
        for move in self.moves(side):
            child = self.copy()
            child.apply(move)
            yield move, child

    def has_moves(self, side: Side) -> bool:
        """
        True if ``side`` has at least one legal move.

        A piece can move exactly when some neighbouring square is empty: it
        can step there and fire straight back into the square it left. So
        this only needs the first square of each ray.
        """
        tiles = self._tiles
        rays = self.table.rays
        for slot in side.slots:
            for ray in rays[self._pieces[slot].index]:
                if ray and tiles[ray[0]] is TileState.EMPTY:
                    return True
        return False

    def count_moves(self, side: Side) -> int:
        return sum(1 for _ in self.moves(side))

    # -----------------------------------------------------------------------
    # Mutation
    # -----------------------------------------------------------------------

    def apply(self, move: Move) -> None:
        """
        Play ``move`` in place. No legality checks are made.

        Raises:
            NoPieceAtSource: no roster slot sits on ``move.origin``.
        """
        try:
            slot = self._pieces.index(move.origin)
        except ValueError:
            raise NoPieceAtSource(f"no piece on {move.origin} for move {move}") from None

        self._tiles[move.origin.index] = TileState.EMPTY
        self._pieces[slot] = move.destination
        self._tiles[move.destination.index] = (
            TileState.WHITE if slot < PIECES_PER_SIDE else TileState.BLACK
        )
        self._tiles[move.arrow.index] = TileState.ARROW

    # -----------------------------------------------------------------------
    # Display
    # -----------------------------------------------------------------------

    def render(self) -> str:
        """
        Text grid for debugging, row 10 at the top:

               a b c d e f g h i j
            10 . . . B . . B . . .
            ...
            1  . . . W . . W . . .
        """
        lines = ["   " + " ".join(COLUMN_LETTERS)]
        for row in range(BOARD_SIZE - 1, -1, -1):
            cells = self._tiles[row * BOARD_SIZE:(row + 1) * BOARD_SIZE]
            lines.append(f"{row + 1:<2} " + "".join(_GLYPHS[t] + " " for t in cells))
        return "\n".join(lines) + "\n"

    def __str__(self) -> str:
        return self.render()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._pieces == other._pieces and self._tiles == other._tiles

    __hash__ = None  # mutable


def _as_coord(value: Coord | str) -> Coord:
    return value if isinstance(value, Coord) else Coord.parse(value)
