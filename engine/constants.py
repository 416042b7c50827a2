"""
Engine constants: piece values, piece-square tables, score bounds, and table sizes.

All numeric constants used throughout the engine are defined here so that
the search modules never need to introduce new magic numbers. Centralizing
constants makes tuning and experimentation much easier.

Piece values follow the standard centipawn convention (1 pawn = 100 cp).
"""

import chess

# ---------------------------------------------------------------------------
# Piece values (centipawns)
# ---------------------------------------------------------------------------
# The king carries no material value: losing it is covered by the checkmate
# score, and MVV-LVA never sees the king as a victim.

PAWN_VALUE: int = 100
KNIGHT_VALUE: int = 300
BISHOP_VALUE: int = 310
ROOK_VALUE: int = 500
QUEEN_VALUE: int = 900
KING_VALUE: int = 0

# Mapping from python-chess piece type constants to centipawn values.
# Used by the evaluation function and MVV-LVA move ordering.
PIECE_VALUES: dict[int, int] = {
    chess.PAWN:   PAWN_VALUE,
    chess.KNIGHT: KNIGHT_VALUE,
    chess.BISHOP: BISHOP_VALUE,
    chess.ROOK:   ROOK_VALUE,
    chess.QUEEN:  QUEEN_VALUE,
    chess.KING:   KING_VALUE,
}

# ---------------------------------------------------------------------------
# Piece-square tables
# ---------------------------------------------------------------------------
# One table per piece type, written as the board is drawn from White's side:
# index 0 is a8, index 63 is h1. A White piece on python-chess square sq reads
# index sq ^ 56; a Black piece reads index sq directly, which reflects the
# table across the rank axis.

PAWN_PST: tuple[int, ...] = (
      0,   0,   0,   0,   0,   0,   0,   0,
     50,  50,  50,  50,  50,  50,  50,  50,
     10,  10,  20,  30,  30,  20,  10,  10,
      5,   5,  10,  25,  25,  10,   5,   5,
      0,   0,   0,  20,  20,   0,   0,   0,
      5,  -5, -10,   0,   0, -10,  -5,   5,
      5,  10,  10, -20, -20,  10,  10,   5,
      0,   0,   0,   0,   0,   0,   0,   0,
)

KNIGHT_PST: tuple[int, ...] = (
    -50, -40, -30, -30, -30, -30, -40, -50,
    -40, -20,   0,   0,   0,   0, -20, -40,
    -30,   0,  10,  15,  15,  10,   0, -30,
    -30,   5,  15,  20,  20,  15,   5, -30,
    -30,   0,  15,  20,  20,  15,   0, -30,
    -30,   5,  10,  15,  15,  10,   5, -30,
    -40, -20,   0,   5,   5,   0, -20, -40,
    -50, -40, -30, -30, -30, -30, -40, -50,
)

BISHOP_PST: tuple[int, ...] = (
    -20, -10, -10, -10, -10, -10, -10, -20,
    -10,   0,   0,   0,   0,   0,   0, -10,
    -10,   0,   5,  10,  10,   5,   0, -10,
    -10,   5,   5,  10,  10,   5,   5, -10,
    -10,   0,  10,  10,  10,  10,   0, -10,
    -10,  10,  10,  10,  10,  10,  10, -10,
    -10,   5,   0,   0,   0,   0,   5, -10,
    -20, -10, -10, -10, -10, -10, -10, -20,
)

ROOK_PST: tuple[int, ...] = (
      0,   0,   0,   0,   0,   0,   0,   0,
      5,  10,  10,  10,  10,  10,  10,   5,
     -5,   0,   0,   0,   0,   0,   0,  -5,
     -5,   0,   0,   0,   0,   0,   0,  -5,
     -5,   0,   0,   0,   0,   0,   0,  -5,
     -5,   0,   0,   0,   0,   0,   0,  -5,
     -5,   0,   0,   0,   0,   0,   0,  -5,
      0,   0,   0,   5,   5,   0,   0,   0,
)

QUEEN_PST: tuple[int, ...] = (
    -20, -10, -10,  -5,  -5, -10, -10, -20,
    -10,   0,   0,   0,   0,   0,   0, -10,
    -10,   0,   5,   5,   5,   5,   0, -10,
     -5,   0,   5,   5,   5,   5,   0,  -5,
      0,   0,   5,   5,   5,   5,   0,  -5,
    -10,   5,   5,   5,   5,   5,   0, -10,
    -10,   0,   5,   0,   0,   0,   0, -10,
    -20, -10, -10,  -5,  -5, -10, -10, -20,
)

KING_PST: tuple[int, ...] = (
    -30, -40, -40, -50, -50, -40, -40, -30,
    -30, -40, -40, -50, -50, -40, -40, -30,
    -30, -40, -40, -50, -50, -40, -40, -30,
    -30, -40, -40, -50, -50, -40, -40, -30,
    -20, -30, -30, -40, -40, -30, -30, -20,
    -10, -20, -20, -20, -20, -20, -20, -10,
     20,  20,   0,   0,   0,   0,  20,  20,
     20,  30,  10,   0,   0,  10,  30,  20,
)

PST: dict[int, tuple[int, ...]] = {
    chess.PAWN:   PAWN_PST,
    chess.KNIGHT: KNIGHT_PST,
    chess.BISHOP: BISHOP_PST,
    chess.ROOK:   ROOK_PST,
    chess.QUEEN:  QUEEN_PST,
    chess.KING:   KING_PST,
}

# ---------------------------------------------------------------------------
# Special scores
# ---------------------------------------------------------------------------
# Scores live in the signed 32-bit range. A checkmated side to move scores
# SCORE_MIN + 1, so negating it still fits (its negation is SCORE_MAX).

SCORE_MIN: int = -(2 ** 31)
SCORE_MAX: int = 2 ** 31 - 1
CHECKMATE_SCORE: int = SCORE_MIN + 1  # Side to move is checkmated
DRAW_SCORE: int = 0                   # Stalemate

# Scores within this distance of either extreme are mate scores; they are
# nudged one unit toward zero per ply so that a shorter mate wins ties.
MATE_THRESHOLD: int = 100

# ---------------------------------------------------------------------------
# Search parameters
# ---------------------------------------------------------------------------
# Default iterative deepening schedule. Each pass seeds the cache with move
# hints for the next, deeper pass.
DEPTH_SCHEDULE: tuple[int, ...] = (1, 2, 3, 4)

# Number of (score, move) hints remembered per cached position.
TOP_TARGETS_SIZE: int = 5

# Quiescence expands every evasion while in check. Past this many quiescence
# plies, in-check nodes only expand captures.
MAX_QUIESCENCE_PLY: int = 16

# ---------------------------------------------------------------------------
# Transposition table
# ---------------------------------------------------------------------------
# TT_SIZE: maximum number of entries before least-recently-used eviction.
# Each entry is a handful of Python objects (CacheEntry, Score, a TopTargets
# list of up to TOP_TARGETS_SIZE moves), roughly 1 KB all told, so 1M entries
# is on the order of 1 GB at the limit.
TT_SIZE: int = 1_000_000
