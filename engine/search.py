"""
Search entry point: negamax with alpha-beta pruning, a transposition table,
quiescence search, and iterative deepening over a fixed depth schedule.

This module defines the stable public interface that interface/uci.py and
web/app.py depend on: SearchEngine.best_move() and SearchEngine.search().

How the pieces fit together:

1. Iterative deepening: SearchEngine runs a root pass at each depth of an
   increasing schedule (1, 2, 3, ...). Shallow passes are cheap, and every
   node they expand leaves its best moves in the transposition table.

2. Transposition table: before expanding a node, negamax probes the table.
   A result searched at least as deep is reused (exact scores directly,
   bounds by narrowing the window); a shallower one only supplies move
   ordering hints. This is how shallow passes speed up deeper ones.

3. Move ordering: cache hints first, then MVV-LVA captures, promotions and
   quiet moves. Good ordering is what makes alpha-beta prune.

4. Quiescence search: at depth 0, instead of returning a static evaluation, we
   continue searching captures until the position is "quiet". This removes
   the horizon effect, e.g. evaluating mid-exchange and missing a recapture.

Scores are always from the side to move's perspective. Mate scores sit at
the extremes of the 32-bit range and are nudged one unit toward zero per ply
on the way up, so the engine prefers the shortest mate it can find.

Threading model:
    The search is single-threaded and cannot be cancelled; each depth pass
    runs to completion. Callers that must stay responsive (UCI, web) run the
    whole search on a worker thread. A SearchEngine and its table must not be
    used from two threads at once.
"""

import logging
from dataclasses import dataclass
from typing import Sequence

import chess
import chess.polyglot

from engine.calibration import Calibration
from engine.constants import (
    DEPTH_SCHEDULE,
    MATE_THRESHOLD,
    MAX_QUIESCENCE_PLY,
    SCORE_MAX,
    SCORE_MIN,
    TT_SIZE,
)
from engine.evaluate import raw_score
from engine.move_ordering import capture_moves, ordered_moves
from engine.statistics import Statistics
from engine.transposition import Bound, Score, TopTargets, TranspositionTable

_log = logging.getLogger(__name__)


@dataclass
class SearchResult:
    """
    Outcome of one iterative-deepening search.

    Attributes:
        move:    Best move, or None if the side to move has no legal moves
                 (checkmate or stalemate).
        score:   Score of ``move`` from the side-to-move's perspective. For a
                 terminal root, the static score (checkmate or 0).
        depth:   Last depth of the schedule that was searched.
        nodes:   Positions visited (negamax and quiescence nodes).
        elapsed: Wall-clock seconds spent.
    """

    move: chess.Move | None
    score: int
    depth: int
    nodes: int
    elapsed: float


def discount_mate(value: int) -> int:
    """
    Nudge a mate score one unit toward zero.

    Scores within MATE_THRESHOLD of either extreme are mates. Discounting them
    once per ply makes a mate found nearer the root score higher than a
    longer one. Ordinary scores pass through unchanged.
    """
    if value >= SCORE_MAX - MATE_THRESHOLD:
        return value - 1
    if value <= SCORE_MIN + MATE_THRESHOLD:
        return value + 1
    return value


def position_key(board: chess.Board) -> int:
    """64-bit Zobrist hash; equal for transposed positions."""
    return chess.polyglot.zobrist_hash(board)


def quiesce(
    board: chess.Board,
    alpha: int,
    beta: int,
    calibration: Calibration,
    stats: Statistics | None = None,
    ply: int = 0,
) -> Score:
    """
    Quiescence search: resolves tactical instability at leaf nodes.

    Stand-pat: the side to move can always choose NOT to capture. The static
    evaluation serves as a lower bound; if it already reaches beta, we cut
    off immediately (the opponent would never allow this position). Otherwise
    it raises alpha, and captures must beat it to matter.

    A side in check is not quiet, so every evasion is searched there, up to
    MAX_QUIESCENCE_PLY plies deep; past that only captures are expanded,
    which always terminates because each capture removes material.

    Args:
        board: Current board position. Modified in-place via push/pop and
               restored before returning.
        alpha: Lower bound of the search window.
        beta:  Upper bound of the search window.
        calibration: Evaluation weights.
        stats: Optional node counter.
        ply:   Quiescence plies below the main search's leaf.

    Returns:
        LowerBound on a beta cutoff, otherwise Exact(alpha).
    """
    if stats is not None:
        stats.increment()

    stand_pat = raw_score(board, calibration)
    if beta <= stand_pat:
        return Score.lower_bound(stand_pat)
    alpha = max(alpha, stand_pat)

    for move in capture_moves(board, evasions=ply < MAX_QUIESCENCE_PLY):
        board.push(move)
        score = -quiesce(board, -beta, -alpha, calibration, stats, ply + 1).value
        board.pop()

        if beta <= score:
            return Score.lower_bound(score)
        alpha = max(alpha, score)

    return Score.exact(alpha)


def negamax(
    board: chess.Board,
    depth: int,
    alpha: int,
    beta: int,
    calibration: Calibration,
    table: TranspositionTable,
    stats: Statistics | None = None,
) -> Score:
    """
    Negamax search with alpha-beta pruning and a transposition table.

    Negamax is a simplification of minimax that exploits the zero-sum property
    of chess: one player's gain is exactly the other player's loss. Instead of
    alternating between maximizing and minimizing, negamax always maximizes but
    negates the score returned by recursive calls.

    Args:
        board: Current board position. Modified in-place via push/pop.
               The board is always restored to its original state on return.
        depth: Remaining search depth in plies. At 0 (or below), or when there
               are no legal moves, drops into quiescence search.
        alpha: Lower bound of the search window (best score we can guarantee).
        beta:  Upper bound of the search window (best score opponent allows).
        calibration: Evaluation weights, never modified.
        table: Transposition table, probed on entry and updated on exit.
        stats: Optional node counter.

    Returns:
        Exact when the value is known, LowerBound after a beta cutoff,
        UpperBound when no move beat the window floor.

    Table usage:
        An entry searched at least ``depth`` deep is trusted: Exact is returned
        as is, a LowerBound raises alpha, an UpperBound lowers beta, and a
        window that closes returns the stored bound. Any other entry only
        supplies its hints to move ordering.
    """
    if stats is not None:
        stats.increment()

    key = position_key(board)
    hints = None
    entry = table.lookup(key)
    if entry is not None:
        if entry.depth >= depth:
            stored = entry.score
            if stored.bound is Bound.EXACT:
                return stored
            if stored.bound is Bound.LOWER:
                alpha = max(alpha, stored.value)
            else:
                beta = min(beta, stored.value)
            if alpha >= beta:
                return stored
        hints = entry.hints.moves()

    moves = ordered_moves(board, hints)

    # Leaf or terminal node. Quiescence evaluates checkmate and stalemate too.
    if depth <= 0 or not moves:
        return Score.exact(quiesce(board, alpha, beta, calibration, stats).value)

    window_floor = alpha
    best_value = SCORE_MIN
    top_targets = TopTargets()

    for move in moves:
        board.push(move)
        # Swap and negate the window for the child (negamax convention).
        child = -negamax(board, depth - 1, -beta, -alpha, calibration, table, stats)
        board.pop()

        value = discount_mate(child.value)
        top_targets.try_insert(value, move)

        best_value = max(best_value, value)
        alpha = max(alpha, best_value)

        # Beta cutoff: the opponent has a better option earlier in the tree
        # and will never allow this line. Remaining siblings are skipped.
        if best_value >= beta:
            score = Score.lower_bound(best_value)
            table.insert_if_better(key, depth, score, top_targets)
            return score

    if best_value > window_floor:
        score = Score.exact(best_value)
    else:
        score = Score.upper_bound(best_value)
    table.insert_if_better(key, depth, score, top_targets)
    return score


def _validate_depths(depths: Sequence[int]) -> tuple[int, ...]:
    depths = tuple(depths)
    if not depths:
        raise ValueError("depth schedule must not be empty")
    if depths[0] < 1:
        raise ValueError(f"depths must be positive, got {depths[0]}")
    for shallower, deeper in zip(depths, depths[1:]):
        if deeper <= shallower:
            raise ValueError(f"depth schedule must be increasing, got {depths}")
    return depths


class SearchEngine:
    """
    Long-lived search engine owning one transposition table.

    The table persists across iterative-deepening passes and across
    consecutive move requests, so later searches start with good move
    ordering. Call reset() between unrelated games to drop it.

    Example:
        >>> engine = SearchEngine(depths=(1, 2))
        >>> engine.best_move(chess.Board()) in chess.Board().legal_moves
        True
    """

    def __init__(
        self,
        depths: Sequence[int] = DEPTH_SCHEDULE,
        calibration: Calibration | None = None,
        max_entries: int = TT_SIZE,
    ) -> None:
        self.depths = _validate_depths(depths)
        self.calibration = calibration if calibration is not None else Calibration()
        self.table = TranspositionTable(max_entries)

    def reset(self) -> None:
        """Forget every cached result."""
        self.table.clear()

    def best_move(
        self,
        board: chess.Board,
        depths: Sequence[int] | None = None,
        calibration: Calibration | None = None,
    ) -> chess.Move | None:
        """
        Return the best move for ``board``, or None if it has no legal moves.

        None is an expected answer for a checkmated or stalemated side, not
        an error; callers must check for it.
        """
        return self.search(board, depths, calibration).move

    def search(
        self,
        board: chess.Board,
        depths: Sequence[int] | None = None,
        calibration: Calibration | None = None,
    ) -> SearchResult:
        """
        Run iterative deepening over ``depths`` and return the final result.

        Every pass updates the shared table; the move from the deepest pass
        is returned.

        Args:
            board:       The current position. Not modified.
            depths:      Increasing depth schedule; defaults to the engine's.
            calibration: Evaluation weights; defaults to the engine's.
        """
        depths = self.depths if depths is None else _validate_depths(depths)
        calibration = self.calibration if calibration is None else calibration
        board = board.copy()
        stats = Statistics()

        if not any(board.legal_moves):
            return SearchResult(None, raw_score(board, calibration), 0, 0, stats.stop())

        best_move = None
        best_score = 0
        for depth in depths:
            best_move, best_score = self._search_root(board, depth, calibration, stats)
            _log.debug(
                "depth %d: best %s score %d nodes %d",
                depth,
                best_move.uci(),
                best_score,
                stats.iterations,
            )

        elapsed = stats.stop()
        _log.info("Best move is %s (score %d, depth %d)", best_move.uci(), best_score, depths[-1])
        return SearchResult(best_move, best_score, depths[-1], stats.iterations, elapsed)

    def _search_root(
        self,
        board: chess.Board,
        depth: int,
        calibration: Calibration,
        stats: Statistics,
    ) -> tuple[chess.Move, int]:
        """
        One root pass at ``depth``: pick the move with the best child score.

        The root's best moves are stored back in the table so the next,
        deeper pass tries them first.
        """
        key = position_key(board)
        entry = self.table.lookup(key)
        hints = entry.hints.moves() if entry is not None else None

        alpha = -SCORE_MAX
        beta = SCORE_MAX
        best_move = None
        best_value = SCORE_MIN
        top_targets = TopTargets()

        for move in ordered_moves(board, hints):
            board.push(move)
            child = -negamax(board, depth - 1, -beta, -alpha, calibration, self.table, stats)
            board.pop()

            value = discount_mate(child.value)
            top_targets.try_insert(value, move)

            # Strict comparison: among equal scores the earlier-ordered move wins.
            if value > best_value:
                best_value = value
                best_move = move
                alpha = max(alpha, value)

        self.table.insert_if_better(key, depth, Score.exact(best_value), top_targets)
        return best_move, best_value

    def principal_variation(self, board: chess.Board, max_length: int = 16) -> list[chess.Move]:
        """
        Reconstruct the expected line by following each position's best hint.

        Stops at the first position with no cached hint, an illegal hint (a
        hash collision), a repeated position, or after ``max_length`` moves.
        """
        board = board.copy()
        line: list[chess.Move] = []
        seen: set[int] = set()

        while len(line) < max_length:
            key = position_key(board)
            if key in seen:
                break
            seen.add(key)

            entry = self.table.lookup(key)
            if entry is None:
                break
            best = entry.hints.best()
            if best is None:
                break
            move = best[1]
            if not board.is_legal(move):
                break
            line.append(move)
            board.push(move)

        return line
