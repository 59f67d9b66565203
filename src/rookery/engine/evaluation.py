"""Static position evaluation: material plus simple piece-square terms."""

from __future__ import annotations

from rookery.core.board import Board
from rookery.core.enums import Color, PieceType
from rookery.core.types import Square, file_of, rank_of

PIECE_VALUES: dict[PieceType, int] = {
    PieceType.PAWN: 100,
    PieceType.KNIGHT: 320,
    PieceType.BISHOP: 330,
    PieceType.ROOK: 500,
    PieceType.QUEEN: 900,
    PieceType.KING: 0,
}

_BAR_CLAMP_CP = 1000.0


def evaluate(board: Board) -> int:
    """Centipawn score from the side to move's point of view."""
    return evaluate_for(board, board.side_to_move)


def evaluate_for(board: Board, color: Color) -> int:
    """Centipawn score from *color*'s point of view."""
    score = white_score(board)
    return score if color == Color.WHITE else -score


def white_score(board: Board) -> int:
    white = 0
    black = 0
    for sq, piece in enumerate(board.squares):
        if piece is None:
            continue
        val = PIECE_VALUES[piece.piece_type]
        val += piece_square_bonus(piece.piece_type, piece.color, sq)
        if piece.color == Color.WHITE:
            white += val
        else:
            black += val
    return white - black


def piece_square_bonus(piece_type: PieceType, color: Color, sq: Square) -> int:
    file_idx = file_of(sq)
    rank_idx = rank_of(sq)
    if color == Color.BLACK:
        rank_idx = 7 - rank_idx

    center_dist = abs(file_idx - 3) + abs(rank_idx - 3)

    if piece_type == PieceType.PAWN:
        return rank_idx * 12 - abs(file_idx - 3) * 2
    if piece_type == PieceType.KNIGHT:
        return 28 - center_dist * 8
    if piece_type == PieceType.BISHOP:
        return 22 - center_dist * 5 + rank_idx * 2
    if piece_type == PieceType.ROOK:
        return 10 + rank_idx * 3 - abs(file_idx - 3)
    if piece_type == PieceType.QUEEN:
        return 6 - center_dist * 2

    # King: stay home.
    if rank_idx <= 1:
        return 18 - abs(file_idx - 4) * 2
    return -rank_idx * 8


def rating_bar(board: Board, length: int) -> str:
    """Text bar of *length* cells; the White share grows with White's score."""
    if length < 0:
        raise ValueError(f"length must be >= 0, got {length}")
    clamped = max(-_BAR_CLAMP_CP, min(_BAR_CLAMP_CP, float(white_score(board))))
    ratio = (clamped + _BAR_CLAMP_CP) / (2 * _BAR_CLAMP_CP)
    white_cells = round(ratio * length)
    return "▓" * white_cells + "░" * (length - white_cells)
