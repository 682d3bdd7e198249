"""
Shared pytest fixtures for engine tests.

The move table is pure geometry, so one session-scoped instance is shared by
every test. Boards are mutable and therefore function-scoped.
"""

import pytest

from amazons.board import Board
from amazons.geometry import ALL_COORDS, MoveTable


@pytest.fixture(scope="session")
def table() -> MoveTable:
    return MoveTable.build()


@pytest.fixture
def start_board(table: MoveTable) -> Board:
    return Board.starting(table)


@pytest.fixture
def white_walled_in(table: MoveTable) -> Board:
    """
    White's four pieces sit in the corners, each boxed in by arrows except
    a1, whose last free neighbour b1 is held by a Black piece. White has no
    legal move; Black has plenty.
    """
    return Board.from_pieces(
        table,
        white=["a1", "j1", "a10", "j10"],
        black=["b1", "e5", "f5", "e6"],
        arrows=["a2", "b2", "i1", "i2", "j2", "a9", "b9", "b10", "i10", "i9", "j9"],
    )


@pytest.fixture
def endgame_board(table: MoveTable) -> Board:
    """
    A nearly full board with only c1 and d1 empty.

    Black's b1 piece is the only one that can move. Firing its arrow back
    into b1 keeps White's a1 piece trapped and wins at once; any other arrow
    frees b1 for White, after which Black's piece is the one left stranded.
    """
    white = ["a1", "j1", "a10", "j10"]
    black = ["b1", "e5", "f5", "e6"]
    open_squares = {"c1", "d1"}
    occupied = set(white) | set(black) | open_squares
    arrows = [str(c) for c in ALL_COORDS if str(c) not in occupied]
    return Board.from_pieces(table, white=white, black=black, arrows=arrows)
