"""Unit tests for Board, Move notation, reachability and move enumeration."""

import pytest

from amazons.board import Board, Move, Side, TileState
from amazons.errors import InvalidNotation, NoPieceAtSource
from amazons.geometry import ALL_COORDS, Coord, MoveTable


def c(text: str) -> Coord:
    return Coord.parse(text)


def non_empty(board: Board) -> int:
    return sum(1 for t in board.tiles if t is not TileState.EMPTY)


class TestMoveNotation:
    """Tests for Move.parse and Move.notation."""

    def test_parse(self) -> None:
        move = Move.parse("a4-a5/a6")
        assert move == Move(c("a4"), c("a5"), c("a6"))

    def test_format(self) -> None:
        assert Move(c("d1"), c("d7"), c("j10")).notation() == "d1-d7/j10"
        assert str(Move(c("d1"), c("d7"), c("j10"))) == "d1-d7/j10"

    def test_parse_strips_line_endings(self) -> None:
        assert Move.parse("j10-j9/j8\n") == Move(c("j10"), c("j9"), c("j8"))

    @pytest.mark.parametrize(
        "triple",
        [("a1", "a2", "a3"), ("j10", "a1", "e5"), ("b10", "b9", "b10"), ("e5", "e5", "e5")],
    )
    def test_format_parse_recovers_triple(self, triple: tuple[str, str, str]) -> None:
        """Parsing is syntax only, so even nonsense triples survive a round trip."""
        move = Move(*(c(t) for t in triple))
        assert Move.parse(move.notation()) == move

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "a4a5/a6",          # missing dash
            "a4-a5a6",          # missing slash
            "a4-a5/k6",         # bad arrow
            "a4--a5/a6",        # empty destination
            "a4-a5/a6/a7",      # extra slash
            "a4-a5-a6/a7",      # extra dash
            "z9-a5/a6",         # bad origin
        ],
    )
    def test_invalid_notation(self, text: str) -> None:
        with pytest.raises(InvalidNotation):
            Move.parse(text)


class TestStartingPosition:
    """Tests for the standard opening layout."""

    def test_roster(self, start_board: Board) -> None:
        assert [str(p) for p in start_board.pieces_of(Side.WHITE)] == ["a4", "d1", "g1", "j4"]
        assert [str(p) for p in start_board.pieces_of(Side.BLACK)] == ["a7", "d10", "g10", "j7"]

    def test_tiles_match_roster(self, start_board: Board) -> None:
        for slot, coord in enumerate(start_board.pieces):
            expected = TileState.WHITE if slot < 4 else TileState.BLACK
            assert start_board.tile(coord) is expected
        assert non_empty(start_board) == 8

    def test_render(self, start_board: Board) -> None:
        lines = start_board.render().splitlines()
        assert lines[0] == "   a b c d e f g h i j"
        assert lines[1] == "10 . . . B . . B . . . "
        assert lines[4] == "7  B . . . . . . . . B "
        assert lines[7] == "4  W . . . . . . . . W "
        assert lines[10] == "1  . . . W . . W . . . "
        assert len(lines) == 11

    def test_render_shows_arrows(self, start_board: Board) -> None:
        start_board.apply(Move.parse("a4-a5/a6"))
        lines = start_board.render().splitlines()
        assert lines[5] == "6  o . . . . . . . . . "
        assert lines[6] == "5  W . . . . . . . . . "


class TestReachableSquares:
    """Tests for queen-move reachability."""

    def test_ray_order(self, start_board: Board) -> None:
        """Rays are walked Left, Up-Left, Up, Up-Right, ... each nearest first."""
        reached = [str(s) for s in start_board.reachable_squares(c("a4"))]
        assert reached == [
            "a5", "a6",                                  # Up, stopped by a7
            "b5", "c6", "d7", "e8", "f9",                # Up-Right, stopped by g10
            "b4", "c4", "d4", "e4", "f4", "g4", "h4", "i4",  # Right, stopped by j4
            "b3", "c2",                                  # Down-Right, stopped by d1
            "a3", "a2", "a1",                            # Down
        ]

    def test_never_yields_origin_or_occupied(self, start_board: Board) -> None:
        for origin in ALL_COORDS:
            for square in start_board.reachable_squares(origin):
                assert square != origin
                assert start_board.tile(square) is TileState.EMPTY

    def test_corner_reaches_less_than_center(self, table: MoveTable) -> None:
        """With all pieces off a1's and e5's lines, the counts are pure geometry."""
        board = Board.from_pieces(
            table,
            white=["b3", "b4", "c2", "d2"],
            black=["f7", "g9", "h7", "j8"],
        )
        corner = list(board.reachable_squares(c("a1")))
        center = list(board.reachable_squares(c("e5")))
        assert len(corner) == 27
        assert len(center) == 35
        assert len(corner) < len(center)

    def test_restartable(self, start_board: Board) -> None:
        """Each call starts a fresh walk."""
        first = list(start_board.reachable_squares(c("d1")))
        second = list(start_board.reachable_squares(c("d1")))
        assert first == second
        assert first

    def test_arrows_block(self, start_board: Board) -> None:
        start_board.apply(Move.parse("d1-d2/d3"))
        up = [s for s in start_board.reachable_squares(c("d2")) if s.column == 3 and s.row > 1]
        assert up == []


class TestApply:
    """Tests for Board.apply."""

    def test_postconditions(self, start_board: Board) -> None:
        before = non_empty(start_board)
        start_board.apply(Move.parse("a4-a5/a6"))
        assert start_board.tile(c("a4")) is TileState.EMPTY
        assert start_board.tile(c("a5")) is TileState.WHITE
        assert start_board.tile(c("a6")) is TileState.ARROW
        assert non_empty(start_board) == before + 1
        assert start_board.pieces[0] == c("a5")

    def test_black_piece_keeps_color(self, start_board: Board) -> None:
        start_board.apply(Move.parse("g10-g5/b10"))
        assert start_board.tile(c("g5")) is TileState.BLACK
        assert start_board.pieces[6] == c("g5")

    def test_arrow_into_vacated_square(self, start_board: Board) -> None:
        start_board.apply(Move.parse("a4-b4/a4"))
        assert start_board.tile(c("a4")) is TileState.ARROW
        assert start_board.tile(c("b4")) is TileState.WHITE

    def test_no_piece_at_source(self, start_board: Board) -> None:
        with pytest.raises(NoPieceAtSource):
            start_board.apply(Move.parse("e5-e6/e7"))

    def test_no_piece_at_source_is_lookup_error(self, start_board: Board) -> None:
        with pytest.raises(LookupError):
            start_board.apply(Move.parse("e5-e6/e7"))

    def test_copy_is_independent(self, start_board: Board) -> None:
        clone = start_board.copy()
        clone.apply(Move.parse("a4-a5/a6"))
        assert start_board.tile(c("a4")) is TileState.WHITE
        assert start_board.tile(c("a6")) is TileState.EMPTY
        assert clone != start_board
        assert clone.table is start_board.table


class TestMoveEnumeration:
    """Tests for moves(), moves_boards() and has_moves()."""

    def test_starting_counts_are_symmetric(self, start_board: Board) -> None:
        white = start_board.count_moves(Side.WHITE)
        black = start_board.count_moves(Side.BLACK)
        assert white == black
        assert white > 0

    def test_starting_count(self, start_board: Board) -> None:
        """The opening position famously offers 2176 moves."""
        assert start_board.count_moves(Side.WHITE) == 2176

    def test_first_moves(self, start_board: Board) -> None:
        """Enumeration order is piece, then destination, then arrow."""
        assert next(start_board.moves(Side.WHITE)) == Move.parse("a4-a5/a6")
        assert next(start_board.moves(Side.BLACK)) == Move.parse("a7-a8/a9")

    def test_pieces_in_roster_order(self, start_board: Board) -> None:
        origins = []
        for move in start_board.moves(Side.WHITE):
            if not origins or origins[-1] != move.origin:
                origins.append(move.origin)
        assert [str(o) for o in origins] == ["a4", "d1", "g1", "j4"]

    def test_arrow_may_pass_through_vacated_square(self, start_board: Board) -> None:
        moves = set(start_board.moves(Side.WHITE))
        assert Move.parse("a4-b4/a4") in moves
        assert Move.parse("a4-a5/a3") in moves      # fired back through a4
        assert Move.parse("a4-c4/a4") in moves

    def test_moves_are_legal_shape(self, start_board: Board) -> None:
        for move in start_board.moves(Side.BLACK):
            assert move.origin in start_board.pieces_of(Side.BLACK)
            assert move.destination != move.origin
            assert move.arrow != move.destination
            assert start_board.tile(move.destination) is TileState.EMPTY

    def test_moves_boards_are_fresh(self, start_board: Board) -> None:
        snapshot = start_board.copy()
        seen = []
        for index, (move, child) in enumerate(start_board.moves_boards(Side.WHITE)):
            expected = start_board.copy()
            expected.apply(move)
            assert child == expected
            seen.append(child)
            if index == 50:
                break
        assert start_board == snapshot
        assert len({id(b) for b in seen}) == len(seen)

    def test_moves_is_lazy(self, start_board: Board) -> None:
        moves = start_board.moves(Side.WHITE)
        assert next(moves) == Move.parse("a4-a5/a6")
        assert next(moves) == Move.parse("a4-a5/b6")    # Up-Right from a5

    def test_walled_in_side_has_no_moves(self, white_walled_in: Board) -> None:
        assert list(white_walled_in.moves(Side.WHITE)) == []
        assert not white_walled_in.has_moves(Side.WHITE)
        assert white_walled_in.has_moves(Side.BLACK)

    def test_has_moves_agrees_with_enumeration(
        self, start_board: Board, white_walled_in: Board, endgame_board: Board
    ) -> None:
        for board in (start_board, white_walled_in, endgame_board):
            for side in Side:
                assert board.has_moves(side) == (next(board.moves(side), None) is not None)

    def test_endgame_moves(self, endgame_board: Board) -> None:
        assert [m.notation() for m in endgame_board.moves(Side.BLACK)] == [
            "b1-c1/b1",
            "b1-c1/d1",
            "b1-d1/c1",
            "b1-d1/b1",
        ]
        assert endgame_board.count_moves(Side.WHITE) == 0


class TestFromPieces:
    """Tests for building arbitrary positions."""

    def test_rejects_overlap(self, table: MoveTable) -> None:
        with pytest.raises(ValueError):
            Board.from_pieces(table, ["a1", "b1", "c1", "d1"], ["a1", "e5", "f5", "g5"])

    def test_rejects_wrong_count(self, table: MoveTable) -> None:
        with pytest.raises(ValueError):
            Board.from_pieces(table, ["a1", "b1", "c1"], ["e5", "f5", "g5", "h5"])

    def test_arrows_are_placed(self, table: MoveTable) -> None:
        board = Board.from_pieces(
            table, ["a1", "b1", "c1", "d1"], ["e5", "f5", "g5", "h5"], arrows=["j10"]
        )
        assert board.tile(c("j10")) is TileState.ARROW
