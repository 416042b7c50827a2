"""Tests for the UCI loop and the web API, which wrap the search engine."""

import io

import chess
import pytest
from fastapi.testclient import TestClient

from engine.search import SearchEngine
from engine.statistics import Statistics
from interface.uci import UciHandler, run_uci_loop
from web.app import app

FOOLS_MATE = "rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w KQkq - 1 3"
BACK_RANK_MATE = "6k1/5ppp/8/8/8/8/8/R5K1 w - - 0 1"


def _run(commands: str, capsys) -> list[str]:
    run_uci_loop(io.StringIO(commands))
    return capsys.readouterr().out.splitlines()


class TestUci:
    def test_handshake(self, capsys):
        out = _run("uci\nisready\n", capsys)
        assert out[-2:] == ["uciok", "readyok"]

    def test_go_depth_reports_bestmove(self, capsys):
        out = _run("position startpos moves e2e4\ngo depth 1\nisready\n", capsys)
        bestmoves = [line for line in out if line.startswith("bestmove")]
        assert len(bestmoves) == 1
        move = chess.Move.from_uci(bestmoves[0].split()[1])
        board = chess.Board()
        board.push_uci("e2e4")
        assert move in board.legal_moves
        assert any(line.startswith("info depth 1 ") for line in out)
        assert out[-1] == "readyok"

    def test_mate_in_one_from_fen(self, capsys):
        out = _run(f"position fen {BACK_RANK_MATE}\ngo depth 2\n", capsys)
        assert "bestmove a1a8" in out

    def test_no_move_when_checkmated(self, capsys):
        out = _run(f"position fen {FOOLS_MATE}\ngo depth 2\n", capsys)
        assert out == ["bestmove (none)"]

    def test_illegal_move_stops_replay(self):
        handler = UciHandler(SearchEngine(depths=(1,)))
        handler.handle_position(["startpos", "moves", "e2e4", "e2e4"])
        assert handler.board.move_stack == [chess.Move.from_uci("e2e4")]

    def test_invalid_fen_keeps_previous_board(self):
        handler = UciHandler(SearchEngine(depths=(1,)))
        handler.handle_position(["fen", "not", "a", "fen"])
        assert handler.board == chess.Board()

    def test_ucinewgame_clears_table(self):
        handler = UciHandler(SearchEngine(depths=(1,)))
        handler.engine.search(chess.Board())
        assert len(handler.engine.table) > 0
        handler.handle_ucinewgame()
        assert len(handler.engine.table) == 0

    @pytest.mark.parametrize(
        "tokens, expected",
        [
            (["depth", "3"], (1, 2, 3)),
            (["wtime", "1000", "btime", "1000"], None),
            (["depth", "x"], None),
            (["depth", "0"], None),
        ],
    )
    def test_parse_go_depths(self, tokens, expected):
        assert UciHandler(SearchEngine(depths=(1,)))._parse_go_depths(tokens) == expected


class TestWebApi:
    @pytest.fixture
    def client(self):
        return TestClient(app)

    def test_returns_legal_move(self, client):
        response = client.post("/api/move", json={"fen": chess.STARTING_FEN, "depth": 1})
        assert response.status_code == 200
        body = response.json()
        assert chess.Move.from_uci(body["move"]) in chess.Board().legal_moves
        assert body["depth"] == 1
        assert body["nodes"] > 0

        board = chess.Board()
        board.push_uci(body["move"])
        assert body["fen"] == board.fen()

    def test_finds_mate(self, client):
        response = client.post("/api/move", json={"fen": BACK_RANK_MATE, "depth": 2})
        assert response.status_code == 200
        assert response.json()["move"] == "a1a8"

    def test_invalid_fen(self, client):
        response = client.post("/api/move", json={"fen": "garbage", "depth": 1})
        assert response.status_code == 400

    def test_game_over(self, client):
        response = client.post("/api/move", json={"fen": FOOLS_MATE, "depth": 1})
        assert response.status_code == 400
        assert "over" in response.json()["detail"]

    def test_reset(self, client):
        assert client.post("/api/reset").status_code == 204


class TestStatistics:
    def test_counts_and_times(self, caplog):
        stats = Statistics()
        for _ in range(3):
            stats.increment()
        with caplog.at_level("INFO"):
            elapsed = stats.stop()
        assert stats.iterations == 3
        assert elapsed >= 0
        assert "Considered 3 positions" in caplog.text
