"""
Move ordering: search the moves most likely to cause a cutoff first.

Alpha-beta prunes best when the strongest move at each node is tried first.
Finding it is the search's own job, so we guess with cheap heuristics:

    1. Cache hints: moves that scored best the last time this position was
       searched, in the order the transposition table ranked them.
    2. Captures, by MVV-LVA (Most Valuable Victim - Least Valuable Aggressor):
       PxQ before QxP.
    3. Promotions, by the value of the promotion piece.
    4. Everything else, in generation order.

A move that fits several categories is placed by the first one it matches,
so every legal move is returned exactly once.
"""

from typing import Iterable

import chess

from engine.constants import PIECE_VALUES

_HINT, _CAPTURE, _PROMOTION, _QUIET = range(4)


def mvv_lva(board: chess.Board, move: chess.Move) -> int:
    """
    Victim value minus attacker value for a capturing move.

    En passant: the captured pawn is not on move.to_square; default to pawn value.
    """
    attacker = board.piece_type_at(move.from_square)
    victim = board.piece_type_at(move.to_square)
    attacker_val = PIECE_VALUES.get(attacker, 0) if attacker else 0
    victim_val = PIECE_VALUES.get(victim, 0) if victim else PIECE_VALUES[chess.PAWN]
    return victim_val - attacker_val


def ordered_moves(
    board: chess.Board,
    hints: Iterable[chess.Move] | None = None,
) -> list[chess.Move]:
    """
    Every legal move in ``board``, ordered to front-load likely cutoffs.

    Args:
        board: The position to generate moves for. Not modified.
        hints: Moves to try first, best first (typically the cached
               TopTargets of this position). Illegal or repeated hints
               are ignored.

    Returns:
        A list containing each legal move exactly once; empty when the side
        to move is checkmated or stalemated.
    """
    hint_rank: dict[chess.Move, int] = {}
    if hints is not None:
        for move in hints:
            hint_rank.setdefault(move, len(hint_rank))

    def _sort_key(move: chess.Move) -> tuple[int, int]:
        rank = hint_rank.get(move)
        if rank is not None:
            return (_HINT, rank)
        if board.is_capture(move):
            return (_CAPTURE, -mvv_lva(board, move))
        if move.promotion:
            return (_PROMOTION, -PIECE_VALUES[move.promotion])
        return (_QUIET, 0)

    # sorted() is stable, so quiet moves keep their generation order.
    return sorted(board.legal_moves, key=_sort_key)


def capture_moves(board: chess.Board, evasions: bool = True) -> list[chess.Move]:
    """
    Moves the quiescence search should expand from ``board``.

    A side in check is never quiet, so all legal moves are returned then
    (unless ``evasions`` is False). Otherwise only captures, highest
    MVV-LVA first.
    """
    if evasions and board.is_check():
        return ordered_moves(board)
    return sorted(
        board.generate_legal_captures(),
        key=lambda move: mvv_lva(board, move),
        reverse=True,
    )
