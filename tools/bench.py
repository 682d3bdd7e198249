#!/usr/bin/env python3
"""
Benchmark: time the hot paths of the engine on fixed positions.

Run before and after each change to move generation, a heuristic, or the
search to quantify the effect. Reachability and heuristics are timed over
repeated calls; the search is timed at fixed depths so that node counts are
directly comparable between versions.

Usage: python3 tools/bench.py [--repeat N] [--depth D]
"""
import argparse
import time
from typing import Callable

from amazons.board import Board, Move, Side
from amazons.evaluate import HEURISTICS
from amazons.geometry import ALL_COORDS, MoveTable, default_move_table
from amazons.search import SearchState, minimax

# Fixed positions, given as move sequences from the start. These are fixed
# forever so that results stay comparable across versions.
POSITIONS = [
    ("Start",     []),
    ("Opening",   ["d1-d7/d8", "g10-g4/g2"]),
    ("Crowded",   ["d1-d7/d8", "g10-g4/g2", "a4-c4/e4", "d10-d9/e9",
                   "j4-h4/h3", "a7-b7/c7"]),
]


def _position(moves: list[str], table: MoveTable) -> Board:
    board = Board.starting(table)
    for notation in moves:
        board.apply(Move.parse(notation))
    return board


def _time(fn: Callable[[], object], repeat: int) -> float:
    """Average wall-clock milliseconds per call."""
    start = time.perf_counter()
    for _ in range(repeat):
        fn()
    return (time.perf_counter() - start) * 1000 / repeat


def bench_reachability(board: Board, repeat: int) -> None:
    def from_pieces() -> None:
        for coord in board.pieces:
            for _ in board.reachable_squares(coord):
                pass

    def from_all_squares() -> None:
        for coord in ALL_COORDS:
            for _ in board.reachable_squares(coord):
                pass

    print(f"  reachable from pieces      {_time(from_pieces, repeat):>9.3f} ms")
    print(f"  reachable from all squares {_time(from_all_squares, repeat):>9.3f} ms")


def bench_heuristics(board: Board, repeat: int) -> None:
    for name, heuristic in HEURISTICS.items():
        ms = _time(lambda: heuristic(board), repeat)
        print(f"  {name:<26} {ms:>9.3f} ms  value={heuristic(board):.3f}")


def bench_search(board: Board, max_depth: int) -> None:
    for depth in range(1, max_depth + 1):
        state = SearchState(deadline=float("inf"))
        start = time.perf_counter()
        line, score = minimax(board, depth, Side.WHITE, float("-inf"), float("inf"), state)
        elapsed_ms = max(1e-3, (time.perf_counter() - start) * 1000)
        nps = int(state.node_count * 1000 / elapsed_ms)
        move = line[0].notation() if line else "(none)"
        print(
            f"  depth {depth}: {move:<13} score={score:>8.3f} "
            f"nodes={state.node_count:>9,} nps={nps:>8,} time={elapsed_ms:>9,.1f} ms"
        )


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("--repeat", type=int, default=20, help="calls per timing")
    parser.add_argument("--depth", type=int, default=1, help="deepest fixed-depth search")
    args = parser.parse_args()

    table = default_move_table()
    print("Amazons engine benchmark")
    for label, moves in POSITIONS:
        board = _position(moves, table)
        print()
        print(f"{label} (White {board.count_moves(Side.WHITE)} moves, "
              f"Black {board.count_moves(Side.BLACK)} moves)")
        print("-" * 68)
        bench_reachability(board, args.repeat)
        bench_heuristics(board, args.repeat)
        bench_search(board, args.depth)


if __name__ == "__main__":
    main()
