"""Tests for the Piece value object."""

import pytest

from rookery.core.enums import Color, PieceType
from rookery.core.piece import Piece
from rookery.core.types import A1, A8, B2, E2, E7, H1, H8


class TestSerialisation:
    def test_fen_round_trip(self) -> None:
        for char in "PNBRQKpnbrqk":
            assert str(Piece.from_char(char)) == char

    def test_invalid_char(self) -> None:
        with pytest.raises(ValueError):
            Piece.from_char("x")

    def test_symbol_and_name(self) -> None:
        knight = Piece(Color.BLACK, PieceType.KNIGHT)
        assert knight.symbol == "♞"
        assert knight.name == "knight"
        assert knight.material_value == 3


class TestKindPredicates:
    @pytest.mark.parametrize("piece_type", list(PieceType))
    def test_exactly_one_kind(self, piece_type: PieceType) -> None:
        piece = Piece(Color.WHITE, piece_type)
        kinds = [
            piece.is_pawn,
            piece.is_knight,
            piece.is_bishop,
            piece.is_rook,
            piece.is_queen,
            piece.is_king,
        ]
        assert kinds.count(True) == 1
        assert kinds.index(True) == piece_type - 1


class TestPlacementPredicates:
    def test_starting_pawn(self) -> None:
        white = Piece(Color.WHITE, PieceType.PAWN)
        black = Piece(Color.BLACK, PieceType.PAWN)
        assert white.is_starting_pawn(E2)
        assert not white.is_starting_pawn(E7)
        assert black.is_starting_pawn(E7)
        assert not Piece(Color.WHITE, PieceType.ROOK).is_starting_pawn(B2)

    def test_corner_rooks(self) -> None:
        white = Piece(Color.WHITE, PieceType.ROOK)
        black = Piece(Color.BLACK, PieceType.ROOK)
        assert white.is_kingside_rook(H1) and white.is_queenside_rook(A1)
        assert black.is_kingside_rook(H8) and black.is_queenside_rook(A8)
        assert not white.is_kingside_rook(H8)
        assert not Piece(Color.WHITE, PieceType.QUEEN).is_queenside_rook(A1)
