"""High-level chess rules: move validation and application, game end detection."""

from __future__ import annotations

from rookery.core.board import Board
from rookery.core.enums import Color, PieceType
from rookery.core.move import (
    KingsideCastle,
    Move,
    PieceMove,
    QueensideCastle,
    Resign,
)
from rookery.core.move_generator import MoveGenerator
from rookery.core.result import Continuing, GameResult, IllegalMove, Stalemate, Victory
from rookery.core.types import Square, file_of, rank_of


class Rules:
    """Static rule-checker that operates on a :class:`Board`."""

    # Product policy: the only draw produced by ``apply`` is stalemate.
    # Fifty-move, repetition and insufficient-material draws are left to
    # the caller; ``has_sufficient_material`` is available as a query.

    @staticmethod
    def legal_moves(board: Board) -> list[Move]:
        return MoveGenerator(board).generate_legal_moves()

    @staticmethod
    def successors(board: Board) -> list[tuple[Move, Board]]:
        """``(move, next board)`` for every legal move of the side to move."""
        return MoveGenerator(board).generate_successors()

    @staticmethod
    def is_legal(board: Board, move: Move) -> bool:
        return Rules.normalize(board, move) in Rules.legal_moves(board)

    @staticmethod
    def normalize(board: Board, move: Move) -> Move:
        """Map shorthand piece moves onto their canonical form.

        A bare pawn move onto the last rank becomes a queen promotion and a
        two-file king step from its home square becomes the matching castle.
        """
        if not isinstance(move, PieceMove):
            return move
        piece = board[move.from_sq]
        if piece is None or piece.color != board.side_to_move:
            return move

        if piece.is_pawn and move.promotion is None and rank_of(move.to_sq) in (0, 7):
            return PieceMove(move.from_sq, move.to_sq, PieceType.QUEEN)

        home: Square = 4 if piece.color == Color.WHITE else 60
        if piece.is_king and move.from_sq == home and rank_of(move.to_sq) == rank_of(home):
            if file_of(move.to_sq) == 6:
                return KingsideCastle()
            if file_of(move.to_sq) == 2:
                return QueensideCastle()
        return move

    @staticmethod
    def apply(board: Board, move: Move) -> GameResult:
        """Validate *move* and play it.

        Returns ``Victory`` for the opponent on resignation, ``IllegalMove``
        (carrying *move* as submitted) when the move is not legal, and
        otherwise ``Victory``/``Stalemate``/``Continuing`` depending on the
        position the opponent now faces.
        """
        if isinstance(move, Resign):
            return Victory(board.side_to_move.opposite)

        candidate = Rules.normalize(board, move)
        for legal_move, next_board in Rules.successors(board):
            if legal_move == candidate:
                return Rules.outcome(board.side_to_move, next_board)
        return IllegalMove(move)

    @staticmethod
    def outcome(mover: Color, next_board: Board) -> GameResult:
        """Classify the position *mover* just handed to the opponent."""
        gen = MoveGenerator(next_board)
        if gen.has_legal_move():
            return Continuing(next_board)
        if Rules.is_lost(next_board, gen):
            return Victory(mover)
        return Stalemate()

    @staticmethod
    def is_lost(board: Board, gen: MoveGenerator | None = None) -> bool:
        """Whether the side to move, having no legal move, has lost.

        That is checkmate, or (on king-less boards such as the horde) having
        no pieces left at all.
        """
        side = board.side_to_move
        gen = gen if gen is not None else MoveGenerator(board)
        return gen.is_in_check(side) or not board.all_pieces(side)

    # ── Queries ──────────────────────────────────────────────────────────

    @staticmethod
    def is_in_check(board: Board, color: Color | None = None) -> bool:
        side = board.side_to_move if color is None else color
        return MoveGenerator(board).is_in_check(side)

    @staticmethod
    def is_square_attacked(board: Board, sq: Square, by_color: Color) -> bool:
        return MoveGenerator(board).is_square_attacked(sq, by_color)

    @staticmethod
    def is_checkmate(board: Board) -> bool:
        if not Rules.is_in_check(board):
            return False
        return len(Rules.legal_moves(board)) == 0

    @staticmethod
    def is_stalemate(board: Board) -> bool:
        gen = MoveGenerator(board)
        return not gen.has_legal_move() and not Rules.is_lost(board, gen)

    @staticmethod
    def can_castle(board: Board, color: Color, kingside: bool) -> bool:
        """Whether *color* could castle now, ignoring whose turn it is."""
        return MoveGenerator(board).can_castle(color, kingside)

    @staticmethod
    def has_sufficient_material(board: Board, color: Color) -> bool:
        """Whether *color* still has enough material to deliver mate.

        A lone king, or king plus a single minor piece, cannot mate.
        """
        minors = 0
        for sq in board.all_pieces(color):
            piece = board[sq]
            assert piece is not None
            if piece.piece_type in (PieceType.PAWN, PieceType.ROOK, PieceType.QUEEN):
                return True
            if piece.piece_type in (PieceType.KNIGHT, PieceType.BISHOP):
                minors += 1
        return minors >= 2
