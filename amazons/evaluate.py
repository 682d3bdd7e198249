"""
Static board evaluation: mobility and territory heuristics.

A search that cannot see to the end of the game needs a number for every
position it stops at. In Amazons the game is decided by who runs out of
room first, so every heuristic here measures some flavour of "room":

- mobility:              how many moves each side has right now
- flood_fill_territory:  how many squares each side could ever reach
- frontier_territory:    which squares each side reaches first
- weighted_reachability: how quickly and by how many pieces each square is
                         reached (the default)

All of them are pure functions of the board and use a fixed perspective:
positive favours White, negative favours Black. The search treats White as
the maximizer and Black as the minimizer, so no negation is needed.
"""

import math
from typing import Callable

from amazons.board import Board, Side
from amazons.constants import PIECES_PER_SIDE, SQUARE_COUNT

Heuristic = Callable[[Board], float]


def mobility(board: Board) -> int:
    """White's legal-move count minus Black's."""
    return board.count_moves(Side.WHITE) - board.count_moves(Side.BLACK)


def _flood_fill(board: Board, side: Side) -> int:
    """Number of distinct squares reachable in any number of queen hops."""
    seen = [False] * SQUARE_COUNT
    frontier = [piece.index for piece in board.pieces_of(side)]
    count = 0
    while frontier:
        next_frontier = []
        for square in frontier:
            for reached in board.reachable_indices(square):
                if not seen[reached]:
                    seen[reached] = True
                    count += 1
                    next_frontier.append(reached)
        frontier = next_frontier
    return count


def flood_fill_territory(board: Board) -> int:
    """
    Size of White's reachable area minus size of Black's.

    Each side's area is the union over its 4 pieces, so a square two White
    pieces can reach still counts once.
    """
    return _flood_fill(board, Side.WHITE) - _flood_fill(board, Side.BLACK)


# Ownership marks used by frontier_territory.
_UNCLAIMED = 0
_WHITE = 1
_BLACK = 2
_NEUTRAL = 3


def frontier_territory(board: Board) -> int:
    """
    Squares White reaches first minus squares Black reaches first.

    Both sides expand queen-hop frontiers one round at a time, White first.
    A square goes to whichever side reaches it in fewer hops. When both reach
    it in the same round it becomes neutral: it counts for nobody and is not
    expanded further. Expansion stops as soon as either side's frontier is
    empty, which leaves the rest of the board unclaimed.
    """
    owner = [_UNCLAIMED] * SQUARE_COUNT
    claimed_round = [0] * SQUARE_COUNT
    white_frontier = [piece.index for piece in board.pieces_of(Side.WHITE)]
    black_frontier = [piece.index for piece in board.pieces_of(Side.BLACK)]
    white_cells = 0
    black_cells = 0
    hops = 1

    while white_frontier and black_frontier:
        next_white = []
        for seed in white_frontier:
            # Black may have tied this square during the previous round.
            if owner[seed] == _NEUTRAL:
                continue
            for reached in board.reachable_indices(seed):
                if owner[reached] == _UNCLAIMED:
                    owner[reached] = _WHITE
                    claimed_round[reached] = hops
                    next_white.append(reached)
                    white_cells += 1

        next_black = []
        for seed in black_frontier:
            for reached in board.reachable_indices(seed):
                if owner[reached] == _UNCLAIMED:
                    owner[reached] = _BLACK
                    claimed_round[reached] = hops
                    next_black.append(reached)
                    black_cells += 1
                elif owner[reached] == _WHITE and claimed_round[reached] == hops:
                    owner[reached] = _NEUTRAL
                    white_cells -= 1

        white_frontier = next_white
        black_frontier = next_black
        hops += 1

    return white_cells - black_cells


def _hop_distances(board: Board, start: int) -> list[int]:
    """
    Breadth-first queen-hop distance from ``start`` to every square.

    0 means unreached. The start square and every occupied square stay 0.
    """
    distance = [0] * SQUARE_COUNT
    frontier = [start]
    hops = 1
    while frontier:
        next_frontier = []
        for square in frontier:
            for reached in board.reachable_indices(square):
                if distance[reached] == 0:
                    distance[reached] = hops
                    next_frontier.append(reached)
        frontier = next_frontier
        hops += 1
    return distance


def weighted_reachability(board: Board) -> float:
    """
    Contested-territory score from per-piece hop distances.

    One breadth-first expansion is run per piece (8 in total). For every
    square, each piece that reaches it in h hops contributes 1/h**2 to its
    side's sum, and the square scores

        (white_sum - black_sum) / (white_sum + black_sum)

    or 0 when nobody reaches it. The board score is the sum over all 100
    squares, so it lies in [-100, 100].

    Squares that many pieces reach quickly weigh far more than squares one
    piece reaches slowly, which tracks who actually controls a region better
    than counting reachable area does.

    math.fsum keeps the total exact for mirrored positions, so the starting
    position scores exactly 0.
    """
    distances = [_hop_distances(board, piece.index) for piece in board.pieces]
    white = distances[:PIECES_PER_SIDE]
    black = distances[PIECES_PER_SIDE:]

    scores = []
    for square in range(SQUARE_COUNT):
        white_sum = sum(1.0 / d[square] ** 2 for d in white if d[square])
        black_sum = sum(1.0 / d[square] ** 2 for d in black if d[square])
        total = white_sum + black_sum
        if total != 0.0:
            scores.append((white_sum - black_sum) / total)
    return math.fsum(scores)


HEURISTICS: dict[str, Heuristic] = {
    "mobility": mobility,
    "flood_fill_territory": flood_fill_territory,
    "frontier_territory": frontier_territory,
    "weighted_reachability": weighted_reachability,
}


def get_heuristic(name: str) -> Heuristic:
    """Look up a heuristic by its registry name."""
    try:
        return HEURISTICS[name]
    except KeyError:
        raise ValueError(
            f"unknown heuristic {name!r}; expected one of {', '.join(HEURISTICS)}"
        ) from None
