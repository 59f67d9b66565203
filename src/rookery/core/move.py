"""Move value objects.

A move is exactly one of four variants:

* :class:`PieceMove` — a piece travels ``from_sq`` → ``to_sq`` (optionally
  promoting),
* :class:`KingsideCastle` / :class:`QueensideCastle`,
* :class:`Resign`.

The set is closed: :class:`Move` cannot be subclassed outside this module.
``Move.parse`` is purely syntactic; legality is the rules engine's business.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import ClassVar

from rookery.core.enums import PieceType
from rookery.core.errors import InvalidAccessError, ParseError
from rookery.core.types import Square, parse_square, square_name

_PROMO_CHARS: dict[PieceType, str] = {
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
}
_PROMO_TYPES: dict[str, PieceType] = {v: k for k, v in _PROMO_CHARS.items()}

_KINGSIDE_TOKENS = frozenset(
    {"o-o", "0-0", "oo", "castle kingside", "kingside castle", "castles kingside"}
)
_QUEENSIDE_TOKENS = frozenset(
    {
        "o-o-o",
        "0-0-0",
        "ooo",
        "castle queenside",
        "queenside castle",
        "castles queenside",
    }
)
_RESIGN_TOKENS = frozenset({"resign", "resigns", "resignation"})

_COORD_RE = re.compile(
    r"^([a-h][1-8])(?:\s*-\s*|\s+to\s+|\s*)([a-h][1-8])(?:\s*=?\s*([qrbn]))?$"
)
_SQUARE_LIKE_RE = re.compile(r"^[a-z][0-9]")


class Move:
    """Common base of the four move variants."""

    __slots__ = ()

    _VARIANTS: ClassVar[tuple[str, ...]] = (
        "PieceMove",
        "KingsideCastle",
        "QueensideCastle",
        "Resign",
    )

    def __init_subclass__(cls, **kwargs: object) -> None:
        super().__init_subclass__(**kwargs)
        if cls.__module__ != __name__ or cls.__name__ not in Move._VARIANTS:
            raise TypeError("Move is a closed set of variants")

    # ── Classification ───────────────────────────────────────────────────

    def is_piece_move(self) -> bool:
        return isinstance(self, PieceMove)

    def is_kingside_castle(self) -> bool:
        return isinstance(self, KingsideCastle)

    def is_queenside_castle(self) -> bool:
        return isinstance(self, QueensideCastle)

    def is_castle(self) -> bool:
        return isinstance(self, (KingsideCastle, QueensideCastle))

    def is_resign(self) -> bool:
        return isinstance(self, Resign)

    def piece_positions(self) -> tuple[Square, Square]:
        """``(from_sq, to_sq)`` of a piece move."""
        raise InvalidAccessError(f"{self} is not a piece move")

    # ── Parsing ──────────────────────────────────────────────────────────

    @staticmethod
    def parse(text: str) -> Move:
        """Parse move text such as ``e2e4``, ``e7e8=q``, ``O-O`` or ``resign``.

        Raises:
            ParseError: If *text* matches none of the accepted notations.
        """
        normalized = " ".join(text.strip().lower().split())
        if not normalized:
            raise ParseError("empty move text", text)
        if normalized in _RESIGN_TOKENS:
            return Resign()
        if normalized in _KINGSIDE_TOKENS:
            return KingsideCastle()
        if normalized in _QUEENSIDE_TOKENS:
            return QueensideCastle()

        match = _COORD_RE.match(normalized)
        if match is None:
            if _SQUARE_LIKE_RE.match(normalized):
                raise ParseError("expected two squares between a1 and h8", text)
            raise ParseError("unrecognised move notation", text)

        from_text, to_text, promo_text = match.groups()
        promotion = _PROMO_TYPES[promo_text] if promo_text else None
        return PieceMove(parse_square(from_text), parse_square(to_text), promotion)


@dataclass(frozen=True, slots=True)
class PieceMove(Move):
    """A piece travelling between two squares."""

    from_sq: Square
    to_sq: Square
    promotion: PieceType | None = None

    def __post_init__(self) -> None:
        if not (0 <= self.from_sq < 64 and 0 <= self.to_sq < 64):
            raise ValueError(f"Square out of range: {self.from_sq}, {self.to_sq}")
        if self.promotion is not None and self.promotion not in _PROMO_CHARS:
            raise ValueError(f"Cannot promote to {self.promotion.name.lower()}")

    def piece_positions(self) -> tuple[Square, Square]:
        return (self.from_sq, self.to_sq)

    def __str__(self) -> str:
        base = f"{square_name(self.from_sq)}{square_name(self.to_sq)}"
        if self.promotion is not None:
            base += _PROMO_CHARS[self.promotion]
        return base


@dataclass(frozen=True, slots=True)
class KingsideCastle(Move):
    def __str__(self) -> str:
        return "O-O"


@dataclass(frozen=True, slots=True)
class QueensideCastle(Move):
    def __str__(self) -> str:
        return "O-O-O"


@dataclass(frozen=True, slots=True)
class Resign(Move):
    def __str__(self) -> str:
        return "resign"
