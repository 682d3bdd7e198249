"""
Search entry point: minimax with alpha-beta pruning and iterative deepening
under a wall-clock deadline.

The engine plays from a fixed perspective: White is the maximizing side and
Black the minimizing side, matching the heuristics in evaluate.py which are
always "positive favours White". Children are searched in exactly the order
Board.moves_boards() yields them (piece, then destination, then arrow); there
is no move ordering beyond that, so ties go to the first child found.

Time management:
    search() computes a single deadline on entry and threads it, together
    with the node counter and the leaf heuristic, through every recursive
    call in a SearchState. Each call checks the deadline before anything
    else. Once it has passed, the call becomes a leaf and returns the static
    heuristic regardless of remaining depth.

    That cut-off makes a late iteration unsound: alpha-beta bounds computed
    from truncated subtrees can prune lines that a full search would have
    kept. So after every depth the deadline is checked again, and an
    iteration that overran it is thrown away in favour of the last iteration
    that finished in time. An iteration that finishes just before the
    deadline is kept even though its deepest calls could in principle have
    straddled it; that is accepted as best effort.

Threading model:
    None. The search is synchronous and single-threaded. Every child board is
    a fresh copy, and the only shared object, the MoveTable, is immutable.
"""

import logging
import random
import time
from dataclasses import dataclass, field
from typing import Callable

from amazons.board import Board, Move, Side
from amazons.constants import MAX_DEPTH, WIN_SCORE
from amazons.evaluate import Heuristic, weighted_reachability

_log = logging.getLogger(__name__)

Clock = Callable[[], float]
Line = tuple[Move, Board]


@dataclass
class SearchState:
    """
    Per-search state passed explicitly through the recursion.

    Attributes:
        deadline:   Clock reading after which every node is treated as a leaf.
        heuristic:  Leaf evaluator, positive favours White.
        clock:      Monotonic time source. Injected so tests can control time.
        node_count: Number of minimax calls made so far, across all depths.
    """

    deadline: float
    heuristic: Heuristic = weighted_reachability
    clock: Clock = time.monotonic
    node_count: int = 0

    def expired(self) -> bool:
        return self.clock() >= self.deadline


@dataclass
class SearchResult:
    """
    Outcome of search().

    Attributes:
        best:  The chosen move and the board it produces, or None. None means
               either the side to move has no legal move (it has lost), or no
               iteration past depth 0 finished inside the budget.
        score: Value of the position for the chosen line, positive favours
               White. ±inf marks a forced win or loss.
        depth: Deepest iteration that completed in time.
        nodes: Total minimax calls across all iterations, including discarded
               ones.
    """

    best: Line | None
    score: float
    depth: int = 0
    nodes: int = 0
    elapsed: float = field(default=0.0, compare=False)

    @property
    def move(self) -> Move | None:
        return self.best[0] if self.best is not None else None


def minimax(
    board: Board,
    depth: int,
    side: Side,
    alpha: float,
    beta: float,
    state: SearchState,
) -> tuple[Line | None, float]:
    """
    Depth-limited minimax with alpha-beta pruning.

    Args:
        board: Position to search. Never modified; children are copies.
        depth: Remaining plies. 0 makes this node a leaf.
        side:  Side to move at this node. White maximizes, Black minimizes.
        alpha: Best score White is already guaranteed elsewhere.
        beta:  Best score Black is already guaranteed elsewhere.
        state: Deadline, heuristic and node counter for this search.

    Returns:
        (best line, score). The line is None at leaves and when ``side`` has
        no legal move, in which case the score is a loss for ``side``
        (-WIN_SCORE for White, +WIN_SCORE for Black).

    Pruning:
        A White node stops scanning as soon as a child scores above beta:
        Black already has a way to keep White below that, so it will never
        let play reach this node. Black nodes mirror this with alpha. The
        cut-off child's score is still returned, which is a safe bound for
        the parent. This is fail-soft on purpose: the cut-off child stays a
        candidate rather than being dropped before comparison, and root
        values still equal plain minimax. Ties keep the first child found.
    """
    state.node_count += 1

    if depth == 0 or state.expired():
        return None, state.heuristic(board)

    best: Line | None = None
    best_score = 0.0
    opponent = side.opponent

    if side is Side.WHITE:
        for move, child in board.moves_boards(side):
            _, score = minimax(child, depth - 1, opponent, alpha, beta, state)
            if best is None or score > best_score:
                best, best_score = (move, child), score
            if score > beta:
                break
            if score > alpha:
                alpha = score
        if best is None:
            return None, -WIN_SCORE
    else:
        for move, child in board.moves_boards(side):
            _, score = minimax(child, depth - 1, opponent, alpha, beta, state)
            if best is None or score < best_score:
                best, best_score = (move, child), score
            if score < alpha:
                break
            if score < beta:
                beta = score
        if best is None:
            return None, WIN_SCORE

    return best, best_score


def search(
    board: Board,
    side: Side,
    time_budget: float,
    heuristic: Heuristic = weighted_reachability,
    clock: Clock = time.monotonic,
) -> SearchResult:
    """
    Choose a move for ``side`` within ``time_budget`` seconds.

    Iterative deepening: depth 0, 1, 2, ... each searched from scratch with
    an unbounded window, until the deadline passes (or MAX_DEPTH, the length
    of the longest possible game, is done). Only iterations that finished
    before the deadline count; if none past depth 0 did, the result carries
    no move and the static value of ``board``.

    Args:
        board:       Current position. Not modified.
        side:        Side to move.
        time_budget: Seconds of wall-clock time to spend.
        heuristic:   Leaf evaluator, positive favours White.
        clock:       Monotonic time source, in seconds.

    Returns:
        SearchResult with the best fully searched line. ``best`` is None when
        ``side`` has no legal move, with a losing score for ``side``.
    """
    start = clock()
    state = SearchState(deadline=start + time_budget, heuristic=heuristic, clock=clock)

    if not board.has_moves(side):
        _log.info("%s has no legal moves", side.value)
        score = -WIN_SCORE if side is Side.WHITE else WIN_SCORE
        return SearchResult(best=None, score=score)

    # Depth-0 fallback, used when nothing deeper completes.
    best: Line | None = None
    score = heuristic(board)
    completed = 0

    depth = 0
    while depth <= MAX_DEPTH and not state.expired():
        line, value = minimax(board, depth, side, -WIN_SCORE, WIN_SCORE, state)

        if state.expired():
            # Truncated iteration: its pruning decisions are not trustworthy.
            _log.debug("depth %d overran the deadline, discarded", depth)
            break

        best, score, completed = line, value, depth
        _log.debug(
            "depth %d complete: move=%s score=%.3f nodes=%d",
            depth,
            line[0] if line else None,
            value,
            state.node_count,
        )
        depth += 1

    elapsed = clock() - start
    _log.info(
        "%s: move=%s score=%.3f depth=%d nodes=%d time=%.2fs",
        side.value,
        best[0] if best else None,
        score,
        completed,
        state.node_count,
        elapsed,
    )
    return SearchResult(
        best=best,
        score=score,
        depth=completed,
        nodes=state.node_count,
        elapsed=elapsed,
    )


def random_move(board: Board, side: Side, rng: random.Random | None = None) -> Move | None:
    """Return a uniformly random legal move for ``side``, or None if it has none."""
    moves = list(board.moves(side))
    if not moves:
        return None
    return (rng or random).choice(moves)
