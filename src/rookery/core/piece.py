"""Piece value object."""

from __future__ import annotations

from dataclasses import dataclass

from rookery.core.enums import Color, PieceType
from rookery.core.types import Square, rank_of

# FEN character ↔ (Color, PieceType)
_CHAR_MAP: dict[str, tuple[Color, PieceType]] = {
    "P": (Color.WHITE, PieceType.PAWN),
    "N": (Color.WHITE, PieceType.KNIGHT),
    "B": (Color.WHITE, PieceType.BISHOP),
    "R": (Color.WHITE, PieceType.ROOK),
    "Q": (Color.WHITE, PieceType.QUEEN),
    "K": (Color.WHITE, PieceType.KING),
    "p": (Color.BLACK, PieceType.PAWN),
    "n": (Color.BLACK, PieceType.KNIGHT),
    "b": (Color.BLACK, PieceType.BISHOP),
    "r": (Color.BLACK, PieceType.ROOK),
    "q": (Color.BLACK, PieceType.QUEEN),
    "k": (Color.BLACK, PieceType.KING),
}

_UNICODE: dict[tuple[Color, PieceType], str] = {
    (Color.WHITE, PieceType.PAWN): "♙",
    (Color.WHITE, PieceType.KNIGHT): "♘",
    (Color.WHITE, PieceType.BISHOP): "♗",
    (Color.WHITE, PieceType.ROOK): "♖",
    (Color.WHITE, PieceType.QUEEN): "♕",
    (Color.WHITE, PieceType.KING): "♔",
    (Color.BLACK, PieceType.PAWN): "♟",
    (Color.BLACK, PieceType.KNIGHT): "♞",
    (Color.BLACK, PieceType.BISHOP): "♝",
    (Color.BLACK, PieceType.ROOK): "♜",
    (Color.BLACK, PieceType.QUEEN): "♛",
    (Color.BLACK, PieceType.KING): "♚",
}

_FEN_CHARS: dict[tuple[Color, PieceType], str] = {v: k for k, v in _CHAR_MAP.items()}

# Display-facing material points; the search uses its own centipawn table.
_MATERIAL_POINTS: dict[PieceType, int] = {
    PieceType.PAWN: 1,
    PieceType.KNIGHT: 3,
    PieceType.BISHOP: 3,
    PieceType.ROOK: 5,
    PieceType.QUEEN: 9,
    PieceType.KING: 0,
}


@dataclass(frozen=True, slots=True)
class Piece:
    """Immutable value object representing a chess piece."""

    color: Color
    piece_type: PieceType

    # ── Serialisation ────────────────────────────────────────────────────

    def __str__(self) -> str:
        """FEN character (uppercase = white, lowercase = black)."""
        return _FEN_CHARS[(self.color, self.piece_type)]

    @classmethod
    def from_char(cls, char: str) -> Piece:
        """Create piece from FEN character, e.g. 'N' → white knight."""
        try:
            color, ptype = _CHAR_MAP[char]
        except KeyError:
            raise ValueError(f"Invalid piece character: {char!r}") from None
        return cls(color, ptype)

    @property
    def symbol(self) -> str:
        """Unicode chess symbol, e.g. ♞."""
        return _UNICODE[(self.color, self.piece_type)]

    # ── Queries ──────────────────────────────────────────────────────────

    @property
    def name(self) -> str:
        """Lowercase piece name, e.g. 'knight'."""
        return self.piece_type.name.lower()

    @property
    def material_value(self) -> int:
        return _MATERIAL_POINTS[self.piece_type]

    @property
    def is_king(self) -> bool:
        return self.piece_type == PieceType.KING

    @property
    def is_pawn(self) -> bool:
        return self.piece_type == PieceType.PAWN

    @property
    def is_knight(self) -> bool:
        return self.piece_type == PieceType.KNIGHT

    @property
    def is_bishop(self) -> bool:
        return self.piece_type == PieceType.BISHOP

    @property
    def is_rook(self) -> bool:
        return self.piece_type == PieceType.ROOK

    @property
    def is_queen(self) -> bool:
        return self.piece_type == PieceType.QUEEN

    # ── Placement queries ────────────────────────────────────────────────

    def is_starting_pawn(self, sq: Square) -> bool:
        """Pawn still on its colour's second rank, so it may double-push."""
        return self.is_pawn and rank_of(sq) == (1 if self.color == Color.WHITE else 6)

    def is_kingside_rook(self, sq: Square) -> bool:
        """Rook standing on its colour's h-file corner."""
        return self.is_rook and sq == (7 if self.color == Color.WHITE else 63)

    def is_queenside_rook(self, sq: Square) -> bool:
        """Rook standing on its colour's a-file corner."""
        return self.is_rook and sq == (0 if self.color == Color.WHITE else 56)

    def with_color(self, color: Color) -> Piece:
        return Piece(color, self.piece_type)

    def with_type(self, piece_type: PieceType) -> Piece:
        return Piece(self.color, piece_type)
