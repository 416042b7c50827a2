"""Tests for the static evaluation."""

import chess
import pytest

from engine.calibration import Calibration
from engine.constants import CHECKMATE_SCORE, KNIGHT_PST, PST, SCORE_MIN
from engine.evaluate import material_and_position, raw_score

FOOLS_MATE = "rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w KQkq - 1 3"
STALEMATE = "7k/5Q2/6K1/8/8/8/8/8 b - - 0 1"
EXTRA_QUEEN = "4k3/8/8/8/8/8/8/3QK3 w - - 0 1"
ITALIAN = "r1bqkb1r/pppp1ppp/2n2n2/4p3/2B1P3/5N2/PPPP1PPP/RNBQK2R w KQkq - 4 4"


class TestRawScore:
    def test_start_position_is_balanced(self):
        assert raw_score(chess.Board(), Calibration()) == 0

    def test_checkmate_is_one_above_minimum(self):
        board = chess.Board(FOOLS_MATE)
        assert raw_score(board, Calibration()) == CHECKMATE_SCORE == SCORE_MIN + 1

    def test_stalemate_is_zero(self):
        board = chess.Board(STALEMATE)
        assert board.is_stalemate()
        assert raw_score(board, Calibration(positional_weight=3)) == 0

    def test_material_from_side_to_move(self):
        board = chess.Board(EXTRA_QUEEN)
        material_only = Calibration(positional_weight=0)
        assert raw_score(board, material_only) == 900

        board.turn = chess.BLACK
        assert raw_score(board, material_only) == -900

    def test_positional_weight_scales_positional_balance(self):
        board = chess.Board(ITALIAN)
        material, positional = material_and_position(board)
        for weight in (0, 1, 2):
            assert raw_score(board, Calibration(weight)) == material + weight * positional

    @pytest.mark.parametrize("fen", [ITALIAN, EXTRA_QUEEN, FOOLS_MATE, STALEMATE])
    def test_colour_mirror_scores_the_same(self, fen):
        board = chess.Board(fen)
        assert raw_score(board, Calibration()) == raw_score(board.mirror(), Calibration())

    def test_black_table_is_reflected(self):
        board = chess.Board("4k3/8/8/8/8/8/8/1N2K2n w - - 0 1")
        _, positional = material_and_position(board)
        # White knight b1 and black knight h1 (reads the table as if on h8).
        expected = (KNIGHT_PST[chess.B1 ^ 56] - KNIGHT_PST[chess.H1]
                    + PST[chess.KING][chess.E1 ^ 56] - PST[chess.KING][chess.E8])
        assert positional == expected

    def test_does_not_modify_board(self):
        board = chess.Board(ITALIAN)
        raw_score(board, Calibration())
        assert board.fen() == ITALIAN
