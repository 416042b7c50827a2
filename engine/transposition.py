"""
Transposition table: bounded, depth-aware cache of earlier search results.

Different move orders frequently reach the same position (a transposition).
The search stores what it learned about each position here, keyed by the
position's Zobrist hash, so a later visit can either reuse the score outright
or at least search the previously best moves first.

Three small value types live alongside the table:

    Score       a value tagged with whether it is exact or only a bound
    TopTargets  the few best (score, move) pairs seen while expanding a node
    CacheEntry  what the table stores per position: depth, score, hints

Replacement policy:
    A new result for a position that is already cached only overwrites the
    stored one when it was searched at least as deep. Eviction of the least
    recently written entry keeps memory bounded; a missing entry only ever
    means "unknown".
"""

import enum
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Iterator

import chess

from engine.constants import TOP_TARGETS_SIZE, TT_SIZE


class Bound(enum.Enum):
    EXACT = 0  # true minimax value
    LOWER = 1  # true value >= score (fail-high / beta cutoff)
    UPPER = 2  # true value <= score (fail-low)


# Negating a score swaps the direction of the bound.
_NEGATED_BOUND = {
    Bound.EXACT: Bound.EXACT,
    Bound.LOWER: Bound.UPPER,
    Bound.UPPER: Bound.LOWER,
}


@dataclass(frozen=True)
class Score:
    """
    A search score tagged with how much it can be trusted.

    Values are always from the perspective of the side to move at the node
    that produced them. Use unary minus to view the score from the parent's
    side: the value flips sign and a lower bound becomes an upper bound.
    """

    bound: Bound
    value: int

    @classmethod
    def exact(cls, value: int) -> "Score":
        return cls(Bound.EXACT, value)

    @classmethod
    def lower_bound(cls, value: int) -> "Score":
        return cls(Bound.LOWER, value)

    @classmethod
    def upper_bound(cls, value: int) -> "Score":
        return cls(Bound.UPPER, value)

    @property
    def is_exact(self) -> bool:
        return self.bound is Bound.EXACT

    def __neg__(self) -> "Score":
        return Score(_NEGATED_BOUND[self.bound], -self.value)

    def __int__(self) -> int:
        return self.value


class TopTargets:
    """
    Keep only the ``max_size`` best-scoring moves seen while expanding a node.

    Entries are held best-first. Equal scores keep the order in which they
    were first inserted, and a move inserted twice is kept once with its
    higher score. Insertion walks the (short) list once.
    """

    def __init__(self, max_size: int = TOP_TARGETS_SIZE) -> None:
        if max_size <= 0:
            raise ValueError(f"TopTargets max_size must be positive, got {max_size}")
        self.max_size = max_size
        self._entries: list[tuple[int, chess.Move]] = []

    def try_insert(self, score: int, move: chess.Move) -> bool:
        """
        Offer a (score, move) pair; return True if it is now retained.
        """
        entries = self._entries
        for i, (old_score, old_move) in enumerate(entries):
            if old_move == move:
                if score <= old_score:
                    return False
                del entries[i]
                break

        idx = len(entries)
        for i, (old_score, _) in enumerate(entries):
            if old_score < score:
                idx = i
                break

        if idx >= self.max_size:
            return False
        entries.insert(idx, (score, move))
        del entries[self.max_size:]
        return True

    def moves(self) -> list[chess.Move]:
        """Retained moves, best first."""
        return [move for _, move in self._entries]

    def best(self) -> tuple[int, chess.Move] | None:
        return self._entries[0] if self._entries else None

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[tuple[int, chess.Move]]:
        return iter(self._entries)

    def __repr__(self) -> str:
        inner = ", ".join(f"{move.uci()}:{score}" for score, move in self._entries)
        return f"TopTargets([{inner}], max_size={self.max_size})"


@dataclass(frozen=True)
class CacheEntry:
    """
    What the table remembers about one position.

    Attributes:
        depth: Remaining depth the stored score was searched to.
        score: The stored score, from the side to move's perspective.
        hints: Best moves found at that search, used for move ordering.
    """

    depth: int
    score: Score
    hints: TopTargets = field(default_factory=TopTargets)


class TranspositionTable:
    """
    Bounded map from position hash to CacheEntry with LRU eviction.

    The table is owned by a single search engine and mutated only by the
    thread running the search; it does no locking.
    """

    def __init__(self, max_entries: int = TT_SIZE) -> None:
        if max_entries <= 0:
            raise ValueError(f"max_entries must be positive, got {max_entries}")
        self.max_entries = max_entries
        self._table: "OrderedDict[int, CacheEntry]" = OrderedDict()

    def lookup(self, key: int) -> CacheEntry | None:
        """Return the stored entry for ``key`` without touching its recency."""
        return self._table.get(key)

    def insert_if_better(
        self,
        key: int,
        depth: int,
        score: Score,
        hints: TopTargets | None = None,
    ) -> bool:
        """
        Store a result unless a deeper one is already cached.

        An existing entry is replaced when the new depth is greater than or
        equal to the stored depth (ties favor the newer result). Returns True
        if the table was written.
        """
        existing = self._table.get(key)
        if existing is not None and depth < existing.depth:
            return False

        entry = CacheEntry(depth, score, hints if hints is not None else TopTargets())
        table = self._table
        if existing is not None:
            table.move_to_end(key)
        table[key] = entry
        while len(table) > self.max_entries:
            table.popitem(last=False)
        return True

    def clear(self) -> None:
        self._table.clear()

    def __len__(self) -> int:
        return len(self._table)
