"""
Static evaluation: material balance blended with piece-square tables.

A chess engine needs to assign a numeric score to any board position so the
search function can compare moves and choose the best one. This module
scores a position as

    material balance + positional_weight * positional balance

where the material balance sums PIECE_VALUES over the mover's pieces minus
the opponent's, and the positional balance does the same with the
piece-square tables. The weight comes from the caller's Calibration, so
the blend can be tuned per engine instance without touching global state.

The score is always returned from the perspective of the side to move. This is
the negamax convention: the search always tries to maximize the score, and a
positive score means the current side is ahead. The caller negates the score
when recursing, so the convention propagates automatically.
"""

import chess

from engine.calibration import Calibration
from engine.constants import CHECKMATE_SCORE, DRAW_SCORE, PIECE_VALUES, PST


def material_and_position(board: chess.Board) -> tuple[int, int]:
    """
    Return (material, positional) balances from White's point of view.

    The square indexing convention for PST lookup:
        - White piece on square sq: use index sq ^ 56 (flip rank, since PST
          index 0 = a8 visually but python-chess a1=0 is at the bottom)
        - Black piece on square sq: use index sq directly (mirrored table)
    """
    material = 0
    positional = 0

    for sq, piece in board.piece_map().items():
        pt = piece.piece_type
        table = PST[pt]
        if piece.color == chess.WHITE:
            material += PIECE_VALUES[pt]
            positional += table[sq ^ 56]
        else:
            material -= PIECE_VALUES[pt]
            positional -= table[sq]

    return material, positional


def raw_score(board: chess.Board, calibration: Calibration) -> int:
    """
    Centipawn evaluation from the side-to-move's perspective.

    Terminal positions short-circuit: a checkmated side to move gets
    CHECKMATE_SCORE (one above the representable minimum, leaving room for
    mate-distance discounting), and stalemate is exactly DRAW_SCORE.

    Args:
        board:       The position to score. Not modified.
        calibration: Evaluation weights.

    Returns:
        Score from the side-to-move's perspective. Positive = side to move
        is ahead.

    Example:
        >>> import chess
        >>> from engine.calibration import Calibration
        >>> raw_score(chess.Board(), Calibration())
        0
    """
    if board.is_checkmate():
        return CHECKMATE_SCORE
    if board.is_stalemate():
        return DRAW_SCORE

    material, positional = material_and_position(board)
    balance = material + calibration.positional_weight * positional

    # Convert to side-to-move perspective (negamax convention).
    return balance if board.turn == chess.WHITE else -balance
