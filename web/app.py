"""
FastAPI web application for the Chess AI engine.

Exposes a single REST endpoint (POST /api/move) that accepts a FEN position
and an optional search depth, runs the engine search, and returns the best
move with score and depth information.

Architecture notes:
- Sync endpoint (not async): FastAPI runs sync handlers in a thread pool,
  which is the correct pattern for CPU-bound blocking calls like engine search.
- One engine per process: its transposition table is reused across requests,
  so consecutive moves of a game benefit from earlier searches. The engine
  is not thread-safe, so searches are serialized with a lock.
"""

import logging
import threading

import chess
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field, field_validator

from engine.calibration import Calibration
from engine.search import SearchEngine

# ---------------------------------------------------------------------------
# Setup
# ---------------------------------------------------------------------------

logging.basicConfig(level=logging.INFO)
_log = logging.getLogger(__name__)

MAX_DEPTH: int = 6

app = FastAPI(title="Chess AI", version="5.0.0")

_engine = SearchEngine()
_engine_lock = threading.Lock()


# ---------------------------------------------------------------------------
# Request / response models
# ---------------------------------------------------------------------------


class MoveRequest(BaseModel):
    """
    Client request to the engine.

    Fields:
        fen: Full FEN string representing the current board position.
        depth: Deepest iteration of the search (schedule 1..depth), clamped
               to [1, MAX_DEPTH]. Omit to use the engine default.
        positional_weight: Piece-square-table weight for this request.
    """

    fen: str
    depth: int | None = None
    positional_weight: int = Field(default=1, ge=0, le=10)

    @field_validator("depth")
    @classmethod
    def clamp_depth(cls, v: int | None) -> int | None:
        """Clamp depth to a safe operating range."""
        if v is None:
            return v
        return max(1, min(v, MAX_DEPTH))


class MoveResponse(BaseModel):
    """
    Engine response after computing the best move.

    Fields:
        move: Best move in UCI notation (e.g. "e2e4", "e7e8q").
        fen: Board FEN after the engine's move is applied.
        score: Evaluation from the engine's perspective.
               Positive = engine is ahead; negative = engine is behind.
        depth: Deepest search iteration.
        nodes: Positions visited.
    """

    move: str
    fen: str
    score: int
    depth: int
    nodes: int


# ---------------------------------------------------------------------------
# API routes
# ---------------------------------------------------------------------------


@app.post("/api/move", response_model=MoveResponse)
def api_move(request: MoveRequest) -> MoveResponse:
    """
    Compute the engine's best move for the given position.

    Raises:
        HTTPException 400: Malformed FEN or game already over.
        HTTPException 500: Engine failure.
    """
    try:
        board = chess.Board(request.fen)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=f"Invalid FEN: {exc}") from exc

    if board.is_checkmate() or board.is_stalemate():
        raise HTTPException(
            status_code=400,
            detail=f"Game is already over: {board.result(claim_draw=False)}",
        )

    depths = tuple(range(1, request.depth + 1)) if request.depth is not None else None
    calibration = Calibration(positional_weight=request.positional_weight)

    try:
        with _engine_lock:
            result = _engine.search(board, depths, calibration)
    except Exception as exc:
        _log.exception("Engine search failed for FEN=%s", request.fen)
        raise HTTPException(status_code=500, detail=f"Engine error: {exc}") from exc

    if result.move is None:
        raise HTTPException(status_code=500, detail="Engine returned no move")

    _log.info(
        "Move=%s score=%d depth=%d nodes=%d fen=%s",
        result.move.uci(),
        result.score,
        result.depth,
        result.nodes,
        request.fen[:40],
    )

    board.push(result.move)
    return MoveResponse(
        move=result.move.uci(),
        fen=board.fen(),
        score=result.score,
        depth=result.depth,
        nodes=result.nodes,
    )


@app.post("/api/reset", status_code=204)
def api_reset() -> None:
    """Drop the engine's transposition table (start of a new game)."""
    with _engine_lock:
        _engine.reset()
