"""Legal and pseudo-legal move generation + attack detection."""

from __future__ import annotations

from rookery.core.board import Board
from rookery.core.enums import CastlingRights, Color, PieceType
from rookery.core.move import KingsideCastle, Move, PieceMove, QueensideCastle
from rookery.core.piece import Piece
from rookery.core.types import Square, file_of, make_square, rank_of

KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS

_PROMOTION_TYPES: tuple[PieceType, ...] = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
)

# Generation order: pawns, knights, bishops, rooks, queens, king.
_GENERATION_ORDER: tuple[PieceType, ...] = (
    PieceType.PAWN,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.ROOK,
    PieceType.QUEEN,
    PieceType.KING,
)


# -- Precomputed lookup tables ---------------------------------------------


def _build_targets(
    offsets: tuple[tuple[int, int], ...],
) -> tuple[tuple[Square, ...], ...]:
    targets: list[tuple[Square, ...]] = []
    for sq in range(64):
        file_idx = sq & 7
        rank_idx = sq >> 3
        moves: list[Square] = []
        for df, dr in offsets:
            af = file_idx + df
            ar = rank_idx + dr
            if 0 <= af < 8 and 0 <= ar < 8:
                moves.append(make_square(af, ar))
        targets.append(tuple(moves))
    return tuple(targets)


def _build_pawn_attackers() -> tuple[tuple[tuple[Square, ...], ...], ...]:
    """[attacker color][sq] -> squares a pawn of that color attacks *sq* from."""
    white: list[tuple[Square, ...]] = []
    black: list[tuple[Square, ...]] = []
    for sq in range(64):
        file_idx = sq & 7
        rank_idx = sq >> 3
        from_white: list[Square] = []
        from_black: list[Square] = []
        for df in (-1, 1):
            af = file_idx + df
            if not 0 <= af < 8:
                continue
            if rank_idx > 0:
                from_white.append(make_square(af, rank_idx - 1))
            if rank_idx < 7:
                from_black.append(make_square(af, rank_idx + 1))
        white.append(tuple(from_white))
        black.append(tuple(from_black))
    return (tuple(white), tuple(black))


def _build_rays(
    directions: tuple[tuple[int, int], ...],
) -> tuple[tuple[tuple[Square, ...], ...], ...]:
    rays_per_square: list[tuple[tuple[Square, ...], ...]] = []
    for sq in range(64):
        file_idx = sq & 7
        rank_idx = sq >> 3
        square_rays: list[tuple[Square, ...]] = []
        for df, dr in directions:
            af = file_idx + df
            ar = rank_idx + dr
            ray: list[Square] = []
            while 0 <= af < 8 and 0 <= ar < 8:
                ray.append(make_square(af, ar))
                af += df
                ar += dr
            square_rays.append(tuple(ray))
        rays_per_square.append(tuple(square_rays))
    return tuple(rays_per_square)


_KNIGHT_TARGETS = _build_targets(KNIGHT_OFFSETS)
_KING_TARGETS = _build_targets(KING_OFFSETS)
_PAWN_ATTACKERS = _build_pawn_attackers()

_BISHOP_RAYS = _build_rays(BISHOP_DIRS)
_ROOK_RAYS = _build_rays(ROOK_DIRS)
_QUEEN_RAYS = _build_rays(QUEEN_DIRS)

_SLIDER_RAYS: dict[PieceType, tuple[tuple[tuple[Square, ...], ...], ...]] = {
    PieceType.BISHOP: _BISHOP_RAYS,
    PieceType.ROOK: _ROOK_RAYS,
    PieceType.QUEEN: _QUEEN_RAYS,
}


class MoveGenerator:
    """Generates moves for a given immutable :class:`Board`.

    Legality is decided by playing each pseudo-legal move on a copy of the
    board and checking the mover's king afterwards.
    """

    __slots__ = ("_board", "_color")

    def __init__(self, board: Board) -> None:
        self._board = board
        self._color = board.side_to_move

    # -- Public API ---------------------------------------------------------

    def generate_legal_moves(self) -> list[Move]:
        """All strictly legal moves for the side to move, in generation order."""
        return [move for move, _ in self.generate_successors()]

    def generate_successors(self) -> list[tuple[Move, Board]]:
        """``(move, board after move)`` for every legal move."""
        successors: list[tuple[Move, Board]] = []
        moving_color = self._color
        append = successors.append

        for move in self.generate_pseudo_legal_moves():
            child = self._board.apply(move)
            if not self._leaves_king_attacked(child, moving_color):
                append((move, child))
        return successors

    def has_legal_move(self) -> bool:
        """Whether the side to move has at least one legal move."""
        moving_color = self._color
        for move in self.generate_pseudo_legal_moves():
            if not self._leaves_king_attacked(self._board.apply(move), moving_color):
                return True
        return False

    def generate_pseudo_legal_moves(self) -> list[Move]:
        """All pseudo-legal moves (may leave own king in check)."""
        moves: list[Move] = []
        color = self._color
        by_type: dict[PieceType, list[Square]] = {pt: [] for pt in _GENERATION_ORDER}
        for sq, piece in enumerate(self._board.squares):
            if piece is not None and piece.color == color:
                by_type[piece.piece_type].append(sq)

        for sq in by_type[PieceType.PAWN]:
            self._gen_pawn(sq, color, moves)
        for sq in by_type[PieceType.KNIGHT]:
            self._gen_steps(sq, color, _KNIGHT_TARGETS[sq], moves)
        for piece_type in (PieceType.BISHOP, PieceType.ROOK, PieceType.QUEEN):
            rays = _SLIDER_RAYS[piece_type]
            for sq in by_type[piece_type]:
                self._gen_sliding(sq, color, rays[sq], moves)
        for sq in by_type[PieceType.KING]:
            self._gen_steps(sq, color, _KING_TARGETS[sq], moves)

        if self.can_castle(color, kingside=True):
            moves.append(KingsideCastle())
        if self.can_castle(color, kingside=False):
            moves.append(QueensideCastle())
        return moves

    # -- Attack detection (public) -----------------------------------------

    def is_in_check(self, color: Color) -> bool:
        """Is *color*'s king attacked by the opponent? False without a king."""
        king_sq = self._board.king_square(color)
        if king_sq is None:
            return False
        return self.is_square_attacked(king_sq, color.opposite)

    def is_square_attacked(self, sq: Square, by_color: Color) -> bool:
        """Is *sq* attacked by any piece of *by_color*?"""
        return _is_square_attacked(self._board, sq, by_color)

    def can_castle(self, color: Color, kingside: bool) -> bool:
        """Castling right held, path empty, king not passing through check."""
        board = self._board
        right = (
            CastlingRights.kingside(color)
            if kingside
            else CastlingRights.queenside(color)
        )
        if not board.castling & right:
            return False

        back_rank = 0 if color == Color.WHITE else 7
        king_sq = make_square(4, back_rank)
        rook_sq = make_square(7 if kingside else 0, back_rank)
        if board[king_sq] != Piece(color, PieceType.KING):
            return False
        if board[rook_sq] != Piece(color, PieceType.ROOK):
            return False

        between = (5, 6) if kingside else (1, 2, 3)
        if any(not board.is_empty(make_square(f, back_rank)) for f in between):
            return False

        opponent = color.opposite
        transit = (4, 5, 6) if kingside else (4, 3, 2)
        return not any(
            _is_square_attacked(board, make_square(f, back_rank), opponent)
            for f in transit
        )

    # -- Piece-specific generators (private) -------------------------------

    def _gen_pawn(self, sq: Square, color: Color, moves: list[Move]) -> None:
        board = self._board
        file_idx = file_of(sq)
        rank_idx = rank_of(sq)
        step = 8 if color == Color.WHITE else -8
        start_rank = 1 if color == Color.WHITE else 6
        last_rank = 7 if color == Color.WHITE else 0

        one_step = sq + step
        if 0 <= one_step < 64 and board.is_empty(one_step):
            self._add_pawn_move(sq, one_step, last_rank, moves)
            two_step = one_step + step
            if rank_idx == start_rank and board.is_empty(two_step):
                moves.append(PieceMove(sq, two_step))

        for df in (-1, 1):
            af = file_idx + df
            if not 0 <= af < 8:
                continue
            cap_sq = one_step + df
            if not 0 <= cap_sq < 64:
                continue
            target = board[cap_sq]
            if target is not None:
                if target.color != color:
                    self._add_pawn_move(sq, cap_sq, last_rank, moves)
            elif cap_sq == board.en_passant:
                victim = board[make_square(af, rank_idx)]
                if victim == Piece(color.opposite, PieceType.PAWN):
                    moves.append(PieceMove(sq, cap_sq))

    @staticmethod
    def _add_pawn_move(
        from_sq: Square, to_sq: Square, last_rank: int, moves: list[Move]
    ) -> None:
        if rank_of(to_sq) == last_rank:
            for pt in _PROMOTION_TYPES:
                moves.append(PieceMove(from_sq, to_sq, pt))
        else:
            moves.append(PieceMove(from_sq, to_sq))

    def _gen_steps(
        self,
        sq: Square,
        color: Color,
        targets: tuple[Square, ...],
        moves: list[Move],
    ) -> None:
        board = self._board
        for to_sq in targets:
            target = board[to_sq]
            if target is None or target.color != color:
                moves.append(PieceMove(sq, to_sq))

    def _gen_sliding(
        self,
        sq: Square,
        color: Color,
        rays: tuple[tuple[Square, ...], ...],
        moves: list[Move],
    ) -> None:
        board = self._board
        for ray in rays:
            for to_sq in ray:
                target = board[to_sq]
                if target is None:
                    moves.append(PieceMove(sq, to_sq))
                    continue
                if target.color != color:
                    moves.append(PieceMove(sq, to_sq))
                break

    @staticmethod
    def _leaves_king_attacked(child: Board, color: Color) -> bool:
        king_sq = child.king_square(color)
        if king_sq is None:
            return False
        return _is_square_attacked(child, king_sq, color.opposite)


def _is_square_attacked(board: Board, sq: Square, by_color: Color) -> bool:
    squares = board.squares

    pawn = Piece(by_color, PieceType.PAWN)
    for from_sq in _PAWN_ATTACKERS[int(by_color)][sq]:
        if squares[from_sq] == pawn:
            return True

    knight = Piece(by_color, PieceType.KNIGHT)
    for from_sq in _KNIGHT_TARGETS[sq]:
        if squares[from_sq] == knight:
            return True

    king = Piece(by_color, PieceType.KING)
    for from_sq in _KING_TARGETS[sq]:
        if squares[from_sq] == king:
            return True

    queen = Piece(by_color, PieceType.QUEEN)
    bishop = Piece(by_color, PieceType.BISHOP)
    for ray in _BISHOP_RAYS[sq]:
        for to_sq in ray:
            piece = squares[to_sq]
            if piece is None:
                continue
            if piece == bishop or piece == queen:
                return True
            break

    rook = Piece(by_color, PieceType.ROOK)
    for ray in _ROOK_RAYS[sq]:
        for to_sq in ray:
            piece = squares[to_sq]
            if piece is None:
                continue
            if piece == rook or piece == queen:
                return True
            break

    return False
