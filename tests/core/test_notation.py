"""Tests for FEN notation."""

import pytest

from rookery.core.board import Board
from rookery.core.enums import CastlingRights, Color, PieceType
from rookery.core.notation import STARTING_FEN, board_from_fen, board_to_fen
from rookery.core.piece import Piece
from rookery.core.types import E1, E3, E8


class TestFenParsing:
    def test_starting_position_matches_initial(self) -> None:
        assert board_from_fen(STARTING_FEN) == Board.initial()

    def test_side_castling_and_en_passant(self) -> None:
        board = board_from_fen(
            "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b Kq e3 0 1"
        )
        assert board.side_to_move == Color.BLACK
        assert board.castling == (
            CastlingRights.WHITE_KINGSIDE | CastlingRights.BLACK_QUEENSIDE
        )
        assert board.en_passant == E3

    def test_clocks_optional(self) -> None:
        board = board_from_fen("4k3/8/8/8/8/8/8/4K3 w - -")
        assert board.halfmove_clock == 0
        assert board.fullmove_number == 1

    def test_pieces_placed(self) -> None:
        board = board_from_fen("4k3/8/8/8/8/8/8/4K3 w - - 5 30")
        assert board[E1] == Piece(Color.WHITE, PieceType.KING)
        assert board[E8] == Piece(Color.BLACK, PieceType.KING)
        assert board.halfmove_clock == 5
        assert board.fullmove_number == 30

    @pytest.mark.parametrize(
        "fen",
        [
            "",
            "8/8/8/8/8/8/8 w - - 0 1",
            "9/8/8/8/8/8/8/8 w - - 0 1",
            "4k3/8/8/8/8/8/8/4K3 x - - 0 1",
            "4k3/8/8/8/8/8/8/4K3 w KK - 0 1",
            "4k3/8/8/8/8/8/8/4K3 w - e4 0 1",
            "4k3/8/8/8/8/8/8/4K3 w - - -1 1",
            "4k3/8/8/8/8/8/8/4X3 w - - 0 1",
        ],
    )
    def test_malformed(self, fen: str) -> None:
        with pytest.raises(ValueError):
            board_from_fen(fen)


class TestFenSerialisation:
    @pytest.mark.parametrize(
        "fen",
        [
            STARTING_FEN,
            "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1",
            "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1",
            "8/2p5/3p4/KP5r/1R3p1k/8/4P1P1/8 w - - 7 42",
        ],
    )
    def test_round_trip(self, fen: str) -> None:
        assert board_to_fen(board_from_fen(fen)) == fen

    def test_initial_board(self) -> None:
        assert board_to_fen(Board.initial()) == STARTING_FEN
