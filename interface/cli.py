"""
Line-oriented play loop.

The engine plays one side of a game against an external opponent that
speaks move notation over a pipe or a terminal. Each turn is one line:

    engine → opponent (stdout):  a4-a5/a6
    opponent → engine (stdin):   a7-b7/c7

White always moves first. When the engine plays White it opens with a move;
when it plays Black (``--black``) it waits for White's first line.

Critical rule: stdout carries nothing but notation lines, flushed one per
move, so that a controlling program can read them line by line. Board dumps,
diagnostics and the final result go to stderr through logging.

Usage:
    python -m interface.cli [--black] [--time SECONDS] [--heuristic NAME]
                            [--random] [--seed N] [--log-level LEVEL]
"""

import argparse
import logging
import random
import sys
from typing import Iterator, TextIO

from amazons.board import Board, Move, Side
from amazons.errors import InvalidNotation
from amazons.evaluate import HEURISTICS, get_heuristic
from amazons.geometry import MoveTable, default_move_table
from amazons.search import random_move, search
from amazons.settings import EngineSettings, get_settings

_log = logging.getLogger(__name__)


class GameHandler:
    """
    Stateful driver for one game.

    Holds the current board and whose turn it is, and alternates between
    asking the engine for a move and reading the opponent's move.

    Attributes:
        board:       The current position.
        engine_side: The side the engine plays.
        to_move:     The side whose turn it is.
    """

    def __init__(
        self,
        engine_side: Side,
        settings: EngineSettings,
        stdin: TextIO,
        stdout: TextIO,
        use_random: bool = False,
        rng: random.Random | None = None,
        table: MoveTable | None = None,
    ) -> None:
        self.board: Board = Board.starting(table or default_move_table())
        self.engine_side = engine_side
        self.to_move = Side.WHITE
        self.settings = settings
        self.heuristic = get_heuristic(settings.heuristic)
        self.use_random = use_random
        self.rng = rng or random.Random()
        self._lines: Iterator[str] = iter(stdin)
        self._stdout = stdout

    # -----------------------------------------------------------------------
    # Turn handlers
    # -----------------------------------------------------------------------

    def play(self) -> Side | None:
        """
        Run the game to completion.

        Returns:
            The winning side, or None if the opponent's input ended first.
        """
        while True:
            if not self.board.has_moves(self.to_move):
                winner = self.to_move.opponent
                _log.info("%s has no moves: %s wins", self.to_move.value, winner.value)
                return winner

            if self.to_move is self.engine_side:
                self.handle_engine_turn()
            elif not self.handle_opponent_turn():
                _log.info("input closed, stopping")
                return None

            _log.debug("position after %s's move:\n%s", self.to_move.value, self.board)
            self.to_move = self.to_move.opponent

    def handle_engine_turn(self) -> Move:
        """Pick a move for the engine, announce it on stdout, and play it."""
        move = self._choose_move()
        self._send(move.notation())
        self.board.apply(move)
        return move

    def handle_opponent_turn(self) -> bool:
        """
        Read lines until one holds a legal move for the opponent, then play it.

        Malformed or illegal lines are logged and skipped. Returns False if
        the input ends before a legal move arrives.
        """
        legal = set(self.board.moves(self.to_move))
        for raw_line in self._lines:
            line = raw_line.strip()
            if not line:
                continue
            try:
                move = Move.parse(line)
            except InvalidNotation as exc:
                _log.warning("ignoring malformed move %r: %s", line, exc)
                continue
            if move not in legal:
                _log.warning("ignoring illegal move for %s: %s", self.to_move.value, line)
                continue
            self.board.apply(move)
            return True
        return False

    # -----------------------------------------------------------------------
    # Internal helpers
    # -----------------------------------------------------------------------

    def _choose_move(self) -> Move:
        if self.use_random:
            move = random_move(self.board, self.to_move, self.rng)
            if move is None:
                raise RuntimeError(f"{self.to_move.value} has no legal move to play")
        else:
            result = search(
                self.board,
                self.to_move,
                self.settings.time_per_turn,
                heuristic=self.heuristic,
            )
            move = result.move
            if move is None:
                # The budget was too small to finish even depth 1.
                move = next(self.board.moves(self.to_move), None)
                if move is None:
                    raise RuntimeError(f"{self.to_move.value} has no legal move to play")
                _log.warning("search produced no move in time, playing %s", move)
        return move

    def _send(self, line: str) -> None:
        """Write one protocol line to stdout and flush immediately."""
        self._stdout.write(line + "\n")
        self._stdout.flush()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="amazons",
        description="Play one game of Amazons over stdin/stdout.",
    )
    parser.add_argument("--black", action="store_true", help="engine plays Black (default: White)")
    parser.add_argument("--time", type=float, help="seconds per engine move")
    parser.add_argument("--heuristic", choices=sorted(HEURISTICS), help="leaf evaluator")
    parser.add_argument("--random", action="store_true", help="play uniformly random legal moves")
    parser.add_argument("--seed", type=int, help="seed for --random")
    parser.add_argument("--log-level", help="logging level for stderr output")
    return parser


def main(
    argv: list[str] | None = None,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
) -> int:
    """Parse arguments, configure logging, and play one game."""
    args = build_parser().parse_args(argv)

    overrides = {
        key: value
        for key, value in (
            ("time_per_turn", args.time),
            ("heuristic", args.heuristic),
            ("log_level", args.log_level),
        )
        if value is not None
    }
    # Explicit keyword arguments take priority over the environment.
    settings = EngineSettings(**{**get_settings().model_dump(), **overrides})

    logging.basicConfig(
        level=settings.log_level,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    handler = GameHandler(
        engine_side=Side.BLACK if args.black else Side.WHITE,
        settings=settings,
        stdin=stdin or sys.stdin,
        stdout=stdout or sys.stdout,
        use_random=args.random,
        rng=random.Random(args.seed),
    )
    handler.play()
    return 0


if __name__ == "__main__":
    sys.exit(main())
