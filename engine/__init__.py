"""
Chess AI engine package.

This package implements a classical chess search engine: negamax with
alpha-beta pruning over a transposition table, quiescence search, and
iterative deepening. Board rules come from python-chess.

Modules:
    constants     — Piece values, PST arrays, score bounds, search parameters
    evaluate      — Static position evaluation (material + piece-square tables)
    move_ordering — Cache hints, MVV-LVA captures, promotions
    transposition — Tagged scores, TopTargets hints, LRU transposition table
    search        — Negamax, quiescence, iterative deepening driver
    calibration   — Calibration value threaded through search and evaluation
    statistics    — Per-search node counter and timer
"""

from engine.calibration import Calibration
from engine.search import SearchEngine, SearchResult

__all__ = ["Calibration", "SearchEngine", "SearchResult"]
