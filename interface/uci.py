"""
UCI (Universal Chess Interface) protocol handler.

UCI is the standard text-based protocol that allows chess GUIs and testing
tools (like cutechess-cli) to communicate with chess engines. The engine
reads commands from stdin and writes responses to stdout. All output lines
must be flushed immediately; GUI programs won't block waiting for a newline.

Protocol overview:
    GUI → Engine: uci, isready, ucinewgame, position, go, stop, quit
    Engine → GUI: id name, id author, uciok, readyok, info, bestmove

Threading model:
    The UCI loop runs on the main thread and must never block on the search.
    When the GUI sends "go", we spawn a daemon thread to run the search and
    print "bestmove" when it completes. The search has no cancellation hook,
    so "stop" waits for the running search to finish.

Critical rule: NEVER print to stdout except for valid UCI responses.
Diagnostics go through logging, which writes to stderr.
"""

import logging
import os
import sys
import threading

# ---------------------------------------------------------------------------
# Path setup: make 'engine' importable when this script is run directly.
# When run as `python interface/uci.py` from the repo root, sys.path may not
# include the repo root, so `import engine` would fail.
# ---------------------------------------------------------------------------
_REPO_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _REPO_ROOT not in sys.path:
    sys.path.insert(0, _REPO_ROOT)

import chess

from engine.search import SearchEngine

_log = logging.getLogger(__name__)


def _send(line: str) -> None:
    """
    Write a line to stdout and flush immediately.

    UCI requires every output line to be flushed right away. GUIs read
    line-by-line; if the buffer is not flushed, the GUI will hang waiting
    for output that is already in the buffer.
    """
    print(line, flush=True)


class UciHandler:
    """
    Stateful handler for the UCI protocol.

    Holds the current board position, the search engine (whose transposition
    table survives between "go" commands), and the search thread.

    Attributes:
        board:         The current board position, updated by "position" commands.
        engine:        The search engine shared by every search of this session.
        search_thread: The active search thread, or None if no search is running.
    """

    def __init__(self, engine: SearchEngine | None = None) -> None:
        self.board: chess.Board = chess.Board()
        self.engine: SearchEngine = engine if engine is not None else SearchEngine()
        self.search_thread: threading.Thread | None = None

    # -----------------------------------------------------------------------
    # Command handlers
    # -----------------------------------------------------------------------

    def handle_uci(self) -> None:
        """Identify the engine and finish with "uciok"."""
        _send("id name ChessAI")
        _send("id author Chess AI Project")
        _send("uciok")

    def handle_isready(self) -> None:
        """
        Respond to the "isready" command.

        The GUI uses this as a synchronization barrier, so we reply once any
        running search has finished.
        """
        self._wait_for_search()
        _send("readyok")

    def handle_ucinewgame(self) -> None:
        """
        Start a new game: reset the board and drop the transposition table.
        """
        self._wait_for_search()
        self.board = chess.Board()
        self.engine.reset()

    def handle_position(self, tokens: list[str]) -> None:
        """
        Parse and apply a "position" command.

        Command formats:
            position startpos
            position startpos moves e2e4 e7e5 ...
            position fen <FEN>
            position fen <FEN> moves e2e4 e7e5 ...

        Args:
            tokens: The command tokens with "position" already stripped.
                    tokens[0] is "startpos" or "fen".
        """
        if not tokens:
            return

        try:
            if tokens[0] == "startpos":
                board = chess.Board()
                move_tokens = tokens[2:] if len(tokens) > 1 and tokens[1] == "moves" else []
            elif tokens[0] == "fen":
                # FEN strings have 6 space-separated fields; find where "moves" appears
                if "moves" in tokens:
                    moves_idx = tokens.index("moves")
                    fen = " ".join(tokens[1:moves_idx])
                    move_tokens = tokens[moves_idx + 1:]
                else:
                    fen = " ".join(tokens[1:])
                    move_tokens = []
                board = chess.Board(fen)
            else:
                _log.warning("uci: unknown position type: %s", tokens[0])
                return
        except ValueError as e:
            _log.error("uci: invalid position command: %s", e)
            return

        # Replay the move list to reach the current position.
        for uci_move in move_tokens:
            try:
                move = chess.Move.from_uci(uci_move)
            except ValueError:
                _log.error("uci: malformed move in position command: %s", uci_move)
                break
            if move not in board.legal_moves:
                _log.error("uci: illegal move in position command: %s", uci_move)
                break
            board.push(move)

        self.board = board

    def handle_go(self, tokens: list[str]) -> None:
        """
        Parse a "go" command and start the search in a background thread.

        Supported parameters:
            depth <n>  — search the schedule 1, 2, ..., n
        Anything else (time controls, "infinite") uses the engine's default
        depth schedule.

        Args:
            tokens: The command tokens with "go" already stripped.
        """
        self._wait_for_search()

        depths = self._parse_go_depths(tokens)

        # Copy the board so the search thread has its own state. The main
        # thread may receive the next "position" command while it runs.
        board_copy = self.board.copy()
        engine = self.engine

        def search_and_reply() -> None:
            """Run the search and emit the UCI info + bestmove lines."""
            try:
                result = engine.search(board_copy, depths)
            except Exception:
                _log.exception("search error")
                _send("bestmove (none)")
                return

            if result.move is None:
                # No legal moves: the game is over (checkmate or stalemate).
                # UCI requires a bestmove response; "(none)" is the standard.
                _send("bestmove (none)")
                return

            elapsed_ms = max(1, int(result.elapsed * 1000))
            nps = max(1, result.nodes * 1000 // elapsed_ms)
            _send(
                f"info depth {result.depth} score cp {_uci_score(result.score)} "
                f"nodes {result.nodes} nps {nps} time {elapsed_ms}"
            )
            _send(f"bestmove {result.move.uci()}")

        self.search_thread = threading.Thread(target=search_and_reply, daemon=True)
        self.search_thread.start()

    def handle_stop(self) -> None:
        """
        Respond to the "stop" command.

        The search cannot be interrupted; we wait for the current search
        thread, which always emits its own "bestmove" line.
        """
        self._wait_for_search()

    def handle_quit(self) -> None:
        """Exit the process without waiting for a running search."""
        sys.exit(0)

    # -----------------------------------------------------------------------
    # Internal helpers
    # -----------------------------------------------------------------------

    def _wait_for_search(self) -> None:
        """Block until the running search thread, if any, has finished."""
        if self.search_thread is not None:
            self.search_thread.join()
        self.search_thread = None

    def _parse_go_depths(self, tokens: list[str]) -> tuple[int, ...] | None:
        """
        Extract a depth schedule from "go" command tokens.

        Returns None (use the engine default) when no usable "depth" is given.
        """
        if "depth" not in tokens:
            return None
        idx = tokens.index("depth")
        try:
            depth = int(tokens[idx + 1])
        except (ValueError, IndexError):
            _log.warning("uci: ignoring malformed depth in go command")
            return None
        if depth < 1:
            _log.warning("uci: ignoring non-positive depth %d", depth)
            return None
        return tuple(range(1, depth + 1))


def _uci_score(score: int) -> int:
    """Clamp mate scores into a range GUIs display sensibly as centipawns."""
    return max(-100_000, min(100_000, score))


def run_uci_loop(stream=None) -> None:
    """
    Main UCI protocol loop.

    Reads lines from ``stream`` (stdin by default) and dispatches each command
    to the UciHandler. Runs until the "quit" command is received or the
    stream is closed.

    Error handling:
        Each command is wrapped in a try/except so that a bug in one
        command handler does not crash the engine. Errors are logged to
        stderr and the loop continues.
    """
    handler = UciHandler()
    stream = sys.stdin if stream is None else stream

    for raw_line in stream:
        line = raw_line.strip()
        if not line:
            continue

        tokens = line.split()
        command = tokens[0]
        args = tokens[1:]

        try:
            if command == "uci":
                handler.handle_uci()
            elif command == "isready":
                handler.handle_isready()
            elif command == "ucinewgame":
                handler.handle_ucinewgame()
            elif command == "position":
                handler.handle_position(args)
            elif command == "go":
                handler.handle_go(args)
            elif command == "stop":
                handler.handle_stop()
            elif command == "quit":
                handler.handle_quit()
            else:
                # Unknown commands are ignored per the UCI specification.
                _log.debug("uci: ignoring unknown command: %r", command)

        except Exception:
            _log.exception("uci: unhandled error for command %r", command)

    handler._wait_for_search()


if __name__ == "__main__":
    logging.basicConfig(stream=sys.stderr, level=logging.WARNING)
    run_uci_loop()
