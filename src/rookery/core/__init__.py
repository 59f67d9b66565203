"""Core domain layer — pure chess logic with zero external dependencies.

Quick start::

    from rookery.core import Board, Move

    board = Board.initial()
    result = board.play_move(Move.parse("e2e4"))
    if result.is_continuing():
        board = result.next_board
"""

from rookery.core.board import Board
from rookery.core.enums import CastlingRights, Color, PieceType
from rookery.core.errors import (
    ChessError,
    InvalidAccessError,
    ParseError,
    PreconditionError,
)
from rookery.core.move import KingsideCastle, Move, PieceMove, QueensideCastle, Resign
from rookery.core.move_generator import MoveGenerator
from rookery.core.notation import STARTING_FEN, board_from_fen, board_to_fen
from rookery.core.piece import Piece
from rookery.core.result import Continuing, GameResult, IllegalMove, Stalemate, Victory
from rookery.core.rules import Rules
from rookery.core.types import (
    Square,
    file_of,
    make_square,
    parse_square,
    rank_of,
    square_name,
)

__all__ = [
    # Enums / flags
    "CastlingRights",
    "Color",
    "PieceType",
    # Errors
    "ChessError",
    "InvalidAccessError",
    "ParseError",
    "PreconditionError",
    # Types / helpers
    "Square",
    "file_of",
    "make_square",
    "parse_square",
    "rank_of",
    "square_name",
    # Domain objects
    "Board",
    "Move",
    "PieceMove",
    "KingsideCastle",
    "QueensideCastle",
    "Resign",
    "MoveGenerator",
    "Piece",
    "Rules",
    # Results
    "GameResult",
    "Continuing",
    "Victory",
    "IllegalMove",
    "Stalemate",
    # Notation
    "STARTING_FEN",
    "board_from_fen",
    "board_to_fen",
]
