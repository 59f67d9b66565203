"""Board — immutable chess position (placement + side to move + rights)."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

from rookery.core.enums import CastlingRights, Color, PieceType
from rookery.core.move import KingsideCastle, Move, PieceMove, QueensideCastle
from rookery.core.piece import Piece
from rookery.core.types import (
    Square,
    SquareLike,
    file_of,
    make_square,
    rank_of,
    to_square,
)

if TYPE_CHECKING:
    from rookery.core.result import GameResult
    from rookery.engine.search import SearchOutcome

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)

# Castling right → (king home, rook home) that must both be in place.
_CASTLING_HOMES: dict[CastlingRights, tuple[Square, Square, Piece]] = {
    CastlingRights.WHITE_KINGSIDE: (4, 7, Piece(Color.WHITE, PieceType.ROOK)),
    CastlingRights.WHITE_QUEENSIDE: (4, 0, Piece(Color.WHITE, PieceType.ROOK)),
    CastlingRights.BLACK_KINGSIDE: (60, 63, Piece(Color.BLACK, PieceType.ROOK)),
    CastlingRights.BLACK_QUEENSIDE: (60, 56, Piece(Color.BLACK, PieceType.ROOK)),
}

_ROOK_CORNERS: dict[Square, CastlingRights] = {
    make_square(0, 0): CastlingRights.WHITE_QUEENSIDE,
    make_square(7, 0): CastlingRights.WHITE_KINGSIDE,
    make_square(0, 7): CastlingRights.BLACK_QUEENSIDE,
    make_square(7, 7): CastlingRights.BLACK_KINGSIDE,
}

_EMPTY_SQUARES: tuple[Piece | None, ...] = (None,) * 64


def _sanitize_castling(
    squares: tuple[Piece | None, ...], castling: CastlingRights
) -> CastlingRights:
    """Drop rights whose king or rook has left its home square."""
    for right, (king_sq, rook_sq, rook) in _CASTLING_HOMES.items():
        if not castling & right:
            continue
        king = Piece(rook.color, PieceType.KING)
        if squares[king_sq] != king or squares[rook_sq] != rook:
            castling &= ~right
    return castling


@dataclass(frozen=True, slots=True)
class Board:
    """Immutable chess position.

    Every transformation (:meth:`apply`, :meth:`change_turn`,
    :meth:`with_piece`, ...) returns a new board. Equality and hashing cover
    placement, side to move, castling rights and the en-passant target; the
    move clocks are carried along but do not distinguish positions.
    """

    squares: tuple[Piece | None, ...] = _EMPTY_SQUARES
    side_to_move: Color = Color.WHITE
    castling: CastlingRights = CastlingRights.NONE
    en_passant: Square | None = None
    halfmove_clock: int = field(default=0, compare=False)
    fullmove_number: int = field(default=1, compare=False)

    def __post_init__(self) -> None:
        if len(self.squares) != 64:
            raise ValueError(f"A board has 64 squares, got {len(self.squares)}")

    # ── Factories ────────────────────────────────────────────────────────

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        squares: list[Piece | None] = [None] * 64
        for f, pt in enumerate(_BACK_RANK):
            squares[make_square(f, 0)] = Piece(Color.WHITE, pt)
            squares[make_square(f, 1)] = Piece(Color.WHITE, PieceType.PAWN)
            squares[make_square(f, 6)] = Piece(Color.BLACK, PieceType.PAWN)
            squares[make_square(f, 7)] = Piece(Color.BLACK, pt)
        return cls(tuple(squares), Color.WHITE, CastlingRights.ALL)

    @classmethod
    def empty(cls) -> Board:
        """Board without pieces, White to move, no castling rights."""
        return cls()

    @classmethod
    def horde(cls) -> Board:
        """Horde variant start: a king-less wall of 36 White pawns.

        Black keeps the standard army and both castling rights. White loses
        once every pawn is gone; Black wins or draws as in normal chess.
        """
        squares = list(cls.initial().squares)
        for sq in range(32):
            squares[sq] = Piece(Color.WHITE, PieceType.PAWN)
        for file in (1, 2, 5, 6):
            squares[make_square(file, 4)] = Piece(Color.WHITE, PieceType.PAWN)
        return cls(tuple(squares), Color.WHITE, CastlingRights.BLACK_BOTH)

    # ── Element access ───────────────────────────────────────────────────

    def __getitem__(self, sq: Square) -> Piece | None:
        return self.squares[sq]

    def piece(self, square: SquareLike) -> Piece | None:
        """Piece on *square* (index or algebraic name), if any."""
        return self.squares[to_square(square)]

    def is_empty(self, sq: Square) -> bool:
        return self.squares[sq] is None

    def has_piece(self, square: SquareLike) -> bool:
        return self.piece(square) is not None

    def has_no_piece(self, square: SquareLike) -> bool:
        return self.piece(square) is None

    def has_ally_piece(self, square: SquareLike, color: Color) -> bool:
        piece = self.piece(square)
        return piece is not None and piece.color == color

    def has_enemy_piece(self, square: SquareLike, color: Color) -> bool:
        piece = self.piece(square)
        return piece is not None and piece.color != color

    # ── Query helpers ────────────────────────────────────────────────────

    @property
    def turn_color(self) -> Color:
        return self.side_to_move

    @property
    def current_player_color(self) -> Color:
        return self.side_to_move

    def pieces(self, color: Color, piece_type: PieceType) -> list[Square]:
        """Squares occupied by *color*'s *piece_type*, ascending."""
        target = Piece(color, piece_type)
        return [sq for sq, p in enumerate(self.squares) if p == target]

    def all_pieces(self, color: Color) -> list[Square]:
        """All squares occupied by *color*, ascending."""
        return [
            sq for sq, p in enumerate(self.squares) if p is not None and p.color == color
        ]

    def king_square(self, color: Color) -> Square | None:
        """Square of *color*'s king, or ``None`` on a king-less setup."""
        try:
            return self.squares.index(Piece(color, PieceType.KING))
        except ValueError:
            return None

    def material(self, color: Color) -> int:
        return sum(
            p.material_value for p in self.squares if p is not None and p.color == color
        )

    def material_advantage(self, color: Color) -> int:
        """Material points of *color* minus those of the opponent."""
        return self.material(color) - self.material(color.opposite)

    # ── Transformations ──────────────────────────────────────────────────

    def change_turn(self) -> Board:
        """Pass: same placement, other side to move, no en-passant target."""
        return replace(self, side_to_move=self.side_to_move.opposite, en_passant=None)

    def set_turn(self, color: Color) -> Board:
        if color == self.side_to_move:
            return self
        return self.change_turn()

    def with_piece(self, square: SquareLike, piece: Piece | None) -> Board:
        """Copy of the board with *square* holding *piece* (or emptied)."""
        squares = list(self.squares)
        squares[to_square(square)] = piece
        return self._with_squares(squares)

    def remove_all(self, color: Color) -> Board:
        """Copy of the board with every non-king piece of *color* removed."""
        squares = [
            None if p is not None and p.color == color and not p.is_king else p
            for p in self.squares
        ]
        return self._with_squares(squares)

    def queen_all(self, color: Color) -> Board:
        """Copy of the board with every non-king piece of *color* a queen."""
        squares = [
            p.with_type(PieceType.QUEEN)
            if p is not None and p.color == color and not p.is_king
            else p
            for p in self.squares
        ]
        return self._with_squares(squares)

    def apply(self, move: Move) -> Board:
        """Play *move* without any legality check and return the new board.

        Use :meth:`play_move` for validated play. Raises ``ValueError`` when
        the move cannot even be carried out (empty origin, wrong colour,
        missing castling pieces, resignation).
        """
        color = self.side_to_move
        squares = list(self.squares)
        castling = self.castling
        en_passant: Square | None = None
        halfmove_clock = self.halfmove_clock + 1

        if isinstance(move, (KingsideCastle, QueensideCastle)):
            back_rank = 0 if color == Color.WHITE else 7
            king_from = make_square(4, back_rank)
            if isinstance(move, KingsideCastle):
                king_to, rook_from, rook_to = (
                    make_square(6, back_rank),
                    make_square(7, back_rank),
                    make_square(5, back_rank),
                )
            else:
                king_to, rook_from, rook_to = (
                    make_square(2, back_rank),
                    make_square(0, back_rank),
                    make_square(3, back_rank),
                )
            king = squares[king_from]
            rook = squares[rook_from]
            if king != Piece(color, PieceType.KING) or rook != Piece(
                color, PieceType.ROOK
            ):
                raise ValueError(f"{move} needs king and rook on their home squares")
            squares[king_from] = None
            squares[rook_from] = None
            squares[king_to] = king
            squares[rook_to] = rook
            castling &= ~CastlingRights.both(color)

        elif isinstance(move, PieceMove):
            piece = squares[move.from_sq]
            if piece is None:
                raise ValueError(f"No piece on {move.from_sq}")
            if piece.color != color:
                raise ValueError(f"{move}: it is {color}'s turn")
            captured = squares[move.to_sq]
            squares[move.from_sq] = None

            if piece.is_pawn:
                halfmove_clock = 0
                from_rank = rank_of(move.from_sq)
                to_rank = rank_of(move.to_sq)
                # En passant: the captured pawn sits beside the origin square
                if (
                    move.to_sq == self.en_passant
                    and captured is None
                    and file_of(move.from_sq) != file_of(move.to_sq)
                ):
                    squares[make_square(file_of(move.to_sq), from_rank)] = None
                if abs(to_rank - from_rank) == 2:
                    en_passant = make_square(
                        file_of(move.from_sq), (from_rank + to_rank) // 2
                    )
                if to_rank in (0, 7):
                    piece = piece.with_type(move.promotion or PieceType.QUEEN)

            if captured is not None:
                halfmove_clock = 0
            squares[move.to_sq] = piece

            if piece.is_king:
                castling &= ~CastlingRights.both(color)
            for sq in (move.from_sq, move.to_sq):
                if sq in _ROOK_CORNERS:
                    castling &= ~_ROOK_CORNERS[sq]

        else:
            raise ValueError(f"{move} does not change the board")

        return Board(
            tuple(squares),
            color.opposite,
            castling,
            en_passant,
            halfmove_clock,
            self.fullmove_number + (1 if color == Color.BLACK else 0),
        )

    def _with_squares(self, squares: list[Piece | None]) -> Board:
        placed = tuple(squares)
        en_passant = self.en_passant
        if en_passant is not None and placed[en_passant] is not None:
            en_passant = None
        return replace(
            self,
            squares=placed,
            castling=_sanitize_castling(placed, self.castling),
            en_passant=en_passant,
        )

    # ── Rules / engine facade ────────────────────────────────────────────
    # Imports stay local: rules and engine both import this module.

    def legal_moves(self) -> list[Move]:
        from rookery.core.rules import Rules

        return Rules.legal_moves(self)

    def play_move(self, move: Move) -> GameResult:
        """Validate and play *move*; see :meth:`Rules.apply`."""
        from rookery.core.rules import Rules

        return Rules.apply(self, move)

    def is_in_check(self, color: Color | None = None) -> bool:
        from rookery.core.rules import Rules

        return Rules.is_in_check(self, color)

    def is_threatened(self, square: SquareLike, color: Color) -> bool:
        """Whether *square* is attacked by the opponent of *color*."""
        from rookery.core.rules import Rules

        return Rules.is_square_attacked(self, to_square(square), color.opposite)

    def is_checkmate(self) -> bool:
        from rookery.core.rules import Rules

        return Rules.is_checkmate(self)

    def is_stalemate(self) -> bool:
        from rookery.core.rules import Rules

        return Rules.is_stalemate(self)

    def can_kingside_castle(self, color: Color) -> bool:
        from rookery.core.rules import Rules

        return Rules.can_castle(self, color, kingside=True)

    def can_queenside_castle(self, color: Color) -> bool:
        from rookery.core.rules import Rules

        return Rules.can_castle(self, color, kingside=False)

    def has_sufficient_material(self, color: Color) -> bool:
        from rookery.core.rules import Rules

        return Rules.has_sufficient_material(self, color)

    def has_insufficient_material(self, color: Color) -> bool:
        return not self.has_sufficient_material(color)

    def value_for(self, color: Color) -> int:
        """Static evaluation in centipawns from *color*'s point of view."""
        from rookery.engine.evaluation import evaluate_for

        return evaluate_for(self, color)

    def rating_bar(self, length: int) -> str:
        from rookery.engine.evaluation import rating_bar

        return rating_bar(self, length)

    def best_next_move(self, depth: int) -> SearchOutcome:
        from rookery.engine.minimax import search
        from rookery.engine.search import Objective

        return search(self, depth, Objective.BEST)

    def worst_next_move(self, depth: int) -> SearchOutcome:
        from rookery.engine.minimax import search
        from rookery.engine.search import Objective

        return search(self, depth, Objective.WORST)

    # ── Dunder helpers ───────────────────────────────────────────────────

    def __str__(self) -> str:
        rows: list[str] = []
        for rank in range(7, -1, -1):
            row = []
            for file in range(8):
                p = self.squares[make_square(file, rank)]
                row.append(str(p) if p else ".")
            rows.append(f"{rank + 1} {' '.join(row)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)

    def __repr__(self) -> str:
        from rookery.core.notation import board_to_fen

        return f"Board({board_to_fen(self)!r})"
