"""Tests for move ordering."""

import chess
import pytest

from engine.move_ordering import capture_moves, mvv_lva, ordered_moves

FOOLS_MATE = "rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w KQkq - 1 3"
QUEEN_EN_PRISE = "4k3/8/8/3q4/4P3/8/8/3QK3 w - - 0 1"
PROMOTION = "8/P7/8/8/8/8/k7/4K3 w - - 0 1"
ROOK_CHECK = "4k3/8/8/8/8/8/4r3/4K3 w - - 0 1"
ITALIAN = "r1bqkb1r/pppp1ppp/2n2n2/4p3/2B1P3/5N2/PPPP1PPP/RNBQK2R w KQkq - 4 4"
KIWIPETE = "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1"


def _uci(moves):
    return [m.uci() for m in moves]


class TestOrderedMoves:
    @pytest.mark.parametrize("fen", [chess.STARTING_FEN, ITALIAN, KIWIPETE, PROMOTION, ROOK_CHECK])
    def test_each_legal_move_exactly_once(self, fen):
        board = chess.Board(fen)
        moves = ordered_moves(board)
        assert len(moves) == board.legal_moves.count()
        assert set(moves) == set(board.legal_moves)

    def test_start_position_has_twenty_moves(self):
        assert len(ordered_moves(chess.Board())) == 20

    def test_no_moves_when_checkmated(self):
        assert ordered_moves(chess.Board(FOOLS_MATE)) == []

    def test_hints_come_first_in_hint_order(self):
        board = chess.Board()
        hints = [chess.Move.from_uci("g1f3"), chess.Move.from_uci("e2e4")]
        moves = ordered_moves(board, hints)
        assert moves[:2] == hints
        assert len(moves) == 20

    def test_illegal_and_repeated_hints_are_ignored(self):
        board = chess.Board()
        hints = [
            chess.Move.from_uci("e2e5"),
            chess.Move.from_uci("d2d4"),
            chess.Move.from_uci("d2d4"),
        ]
        moves = ordered_moves(board, hints)
        assert moves[0] == chess.Move.from_uci("d2d4")
        assert len(moves) == 20
        assert len(set(moves)) == 20

    def test_captures_by_mvv_lva_before_quiet_moves(self):
        board = chess.Board(QUEEN_EN_PRISE)
        moves = _uci(ordered_moves(board))
        assert moves[:2] == ["e4d5", "d1d5"]
        assert not any(board.is_capture(chess.Move.from_uci(m)) for m in moves[2:])

    def test_hinted_capture_is_not_repeated(self):
        board = chess.Board(QUEEN_EN_PRISE)
        hint = chess.Move.from_uci("d1d5")
        moves = ordered_moves(board, [hint])
        assert moves[0] == hint
        assert moves[1] == chess.Move.from_uci("e4d5")
        assert moves.count(hint) == 1

    def test_promotions_by_piece_value(self):
        board = chess.Board(PROMOTION)
        moves = _uci(ordered_moves(board))
        assert moves[:4] == ["a7a8q", "a7a8r", "a7a8b", "a7a8n"]

    def test_does_not_modify_board(self):
        board = chess.Board(KIWIPETE)
        ordered_moves(board, [chess.Move.from_uci("e2a6")])
        assert board.fen() == KIWIPETE


class TestCaptureMoves:
    def test_quiet_position_has_no_captures(self):
        assert capture_moves(chess.Board()) == []

    def test_only_captures_ordered_by_mvv_lva(self):
        board = chess.Board(QUEEN_EN_PRISE)
        assert _uci(capture_moves(board)) == ["e4d5", "d1d5"]

    def test_in_check_returns_every_legal_move(self):
        board = chess.Board(ROOK_CHECK)
        assert board.is_check()
        moves = capture_moves(board)
        assert set(moves) == set(board.legal_moves)
        assert len(moves) == 3

    def test_in_check_without_evasions_returns_captures(self):
        board = chess.Board(ROOK_CHECK)
        assert _uci(capture_moves(board, evasions=False)) == ["e1e2"]

    def test_mvv_lva_values(self):
        board = chess.Board(QUEEN_EN_PRISE)
        assert mvv_lva(board, chess.Move.from_uci("e4d5")) == 800
        assert mvv_lva(board, chess.Move.from_uci("d1d5")) == 0

    def test_en_passant_victim_is_a_pawn(self):
        board = chess.Board("4k3/8/8/3pP3/8/8/8/4K3 w - d6 0 2")
        move = chess.Move.from_uci("e5d6")
        assert board.is_en_passant(move)
        assert mvv_lva(board, move) == 0
        assert capture_moves(board) == [move]
