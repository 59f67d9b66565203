"""Tests for evaluation and the minimax search engine."""

import pytest

from rookery.core.board import Board
from rookery.core.errors import PreconditionError
from rookery.core.move import Move
from rookery.core.notation import board_from_fen
from rookery.core.rules import Rules
from rookery.engine import (
    MATE_SCORE,
    MinimaxSearchEngine,
    Objective,
    SearchLimits,
    evaluate,
    evaluate_for,
    rating_bar,
    search,
)
from rookery.core.enums import Color

MATE_IN_ONE = "k7/8/1K6/8/8/8/8/7Q w - - 0 1"
MIDDLEGAME = "r1bqkbnr/pppp1ppp/2n5/4p3/4P3/5N2/PPPP1PPP/RNBQKB1R w KQkq - 2 3"


class TestEvaluation:
    def test_initial_position_is_balanced(self) -> None:
        assert evaluate(Board.initial()) == 0

    def test_relative_to_side_to_move(self) -> None:
        board = board_from_fen("4k3/8/8/8/8/8/8/3QK3 w - - 0 1")
        assert evaluate(board) > 0
        assert evaluate(board.change_turn()) == -evaluate(board)
        assert evaluate_for(board, Color.BLACK) == -evaluate_for(board, Color.WHITE)

    def test_rating_bar_grows_with_white_advantage(self) -> None:
        winning = board_from_fen("4k3/8/8/8/8/8/8/QQQ1K3 w - - 0 1")
        losing = board_from_fen("qqq1k3/8/8/8/8/8/8/4K3 w - - 0 1")
        assert rating_bar(winning, 8) == "▓" * 8
        assert rating_bar(losing, 8) == "░" * 8
        assert len(rating_bar(Board.initial(), 7)) == 7

    def test_rating_bar_rejects_negative_length(self) -> None:
        with pytest.raises(ValueError):
            rating_bar(Board.initial(), -1)


class TestMinimaxSearch:
    def test_depth_zero_returns_first_move(self) -> None:
        board = Board.initial()
        move, count, score = search(board, 0)
        assert move == Rules.legal_moves(board)[0]
        assert count == 1
        assert score == evaluate(board)

    def test_depth_one_counts_root_children(self) -> None:
        outcome = search(Board.initial(), 1)
        assert outcome.evaluated_count == 20
        assert outcome.move in Rules.legal_moves(Board.initial())

    def test_deeper_search_visits_more_nodes(self) -> None:
        assert search(Board.initial(), 2).evaluated_count > 20

    def test_finds_mate_in_one(self) -> None:
        board = board_from_fen(MATE_IN_ONE)
        outcome = search(board, 2)
        assert board.apply(outcome.move).is_checkmate()
        assert outcome.score == MATE_SCORE - 1

    def test_captures_hanging_queen(self) -> None:
        board = board_from_fen("4k3/8/8/3q4/8/8/3R4/4K3 w - - 0 1")
        outcome = search(board, 1)
        assert str(outcome.move) == "d2d5"

    @pytest.mark.parametrize("fen", [MIDDLEGAME, MATE_IN_ONE])
    def test_best_is_never_worse_than_worst(self, fen: str) -> None:
        board = board_from_fen(fen)
        for depth in (1, 2):
            best = search(board, depth, Objective.BEST)
            worst = search(board, depth, Objective.WORST)
            assert best.score >= worst.score

    def test_worst_avoids_mate(self) -> None:
        board = board_from_fen(MATE_IN_ONE)
        outcome = search(board, 2, Objective.WORST)
        assert not board.apply(outcome.move).is_checkmate()

    def test_deterministic(self) -> None:
        board = board_from_fen(MIDDLEGAME)
        assert search(board, 2) == search(board, 2)
        assert search(board, 2, Objective.WORST) == search(board, 2, Objective.WORST)

    def test_no_legal_moves_is_precondition_error(self) -> None:
        mated = board_from_fen(
            "rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w KQkq - 1 3"
        )
        with pytest.raises(PreconditionError):
            search(mated, 2)
        stalemated = board_from_fen("7k/8/5KQ1/8/8/8/8/8 b - - 0 1")
        with pytest.raises(PreconditionError):
            search(stalemated, 1)

    def test_negative_depth_is_precondition_error(self) -> None:
        with pytest.raises(PreconditionError):
            MinimaxSearchEngine().search(Board.initial(), SearchLimits(max_depth=-1))

    def test_cancelled_search_still_returns_legal_move(self) -> None:
        board = Board.initial()
        outcome = search(board, 3, is_cancelled=lambda: True)
        assert outcome.move in Rules.legal_moves(board)
        assert outcome.evaluated_count == 0
        assert outcome.score == evaluate(board)

    def test_board_facade(self) -> None:
        board = board_from_fen(MATE_IN_ONE)
        assert board.best_next_move(2) == search(board, 2, Objective.BEST)
        assert board.worst_next_move(1) == search(board, 1, Objective.WORST)

    def test_search_does_not_touch_board(self) -> None:
        board = Board.initial()
        search(board, 2)
        assert board == Board.initial()
        assert Move.parse("e2e4") in board.legal_moves()
