#!/usr/bin/env python3
"""
Benchmark: measure nodes visited and time per move at a fixed depth schedule.

Run before and after each search change (move ordering, table policy, ...)
to quantify the effect. A lower node count at the same depth indicates more
effective pruning; higher NPS indicates a faster evaluation function.

Usage: python3 tools/bench.py [max_depth]
"""
import logging
import os
import sys

REPO = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if REPO not in sys.path:
    sys.path.insert(0, REPO)

import chess

from engine.search import SearchEngine

# Standard positions spanning opening, middlegame, and endgame.
# These are fixed forever; same positions used for every version comparison.
POSITIONS = [
    ("Start",        chess.STARTING_FEN),
    ("Sicilian",     "rnbqkbnr/pp1ppppp/8/2p5/4P3/8/PPPP1PPP/RNBQKBNR w KQkq c6 0 2"),
    ("Mid-open",     "r1bqkb1r/pppp1ppp/2n2n2/4p3/2B1P3/5N2/PPPP1PPP/RNBQK2R w KQkq - 4 4"),
    ("Complex mid",  "r2q1rk1/ppp2ppp/2np1n2/2b1p1B1/2B1P1b1/2NP1N2/PPP2PPP/R2Q1RK1 w - - 0 8"),
    ("Queen ending", "6k1/ppp2ppp/8/3p4/3P4/8/PPP2PPP/6K1 w - - 0 1"),
    ("Rook ending",  "8/5pk1/6p1/7p/7P/6P1/5PK1/8 w - - 0 1"),
    ("Pawn race",    "8/1p4k1/p7/P1K5/8/8/8/8 w - - 0 1"),
]


def run_position(label: str, fen: str, max_depth: int) -> dict:
    """Search one position with a fresh engine and return its metrics."""
    engine = SearchEngine(depths=range(1, max_depth + 1))
    result = engine.search(chess.Board(fen))
    elapsed_ms = max(1, int(result.elapsed * 1000))
    return {
        "label": label,
        "move": result.move.uci() if result.move else "(none)",
        "depth": result.depth,
        "score": result.score,
        "nodes": result.nodes,
        "nps": result.nodes * 1000 // elapsed_ms,
        "time_ms": elapsed_ms,
    }


def main() -> None:
    """Run all benchmark positions and print a summary table."""
    logging.basicConfig(level=logging.WARNING)
    max_depth = int(sys.argv[1]) if len(sys.argv) > 1 else 3

    print(f"Chess AI engine benchmark, depth schedule 1..{max_depth}")
    print()
    print(
        f"{'Position':<14} {'Move':<7} {'Depth':>5} {'Score':>6} "
        f"{'Nodes':>8} {'NPS':>8} {'Time(ms)':>9}"
    )
    print("-" * 68)

    results = []
    for label, fen in POSITIONS:
        r = run_position(label, fen, max_depth)
        results.append(r)
        print(
            f"{r['label']:<14} {r['move']:<7} {r['depth']:>5} {r['score']:>6} "
            f"{r['nodes']:>8,} {r['nps']:>8,} {r['time_ms']:>9,}"
        )

    valid = [r for r in results if r["nodes"] > 0]
    if valid:
        avg_nodes = sum(r["nodes"] for r in valid) // len(valid)
        avg_time = sum(r["time_ms"] for r in valid) // len(valid)
        avg_nps = sum(r["nps"] for r in valid) // len(valid)
        print("-" * 68)
        print(
            f"{'AVERAGE':<14} {'':<7} {'':<5} {'':<6} "
            f"{avg_nodes:>8,} {avg_nps:>8,} {avg_time:>9,}"
        )


if __name__ == "__main__":
    main()
