"""Outcome of playing one move: a closed set of result variants."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar

from rookery.core.errors import InvalidAccessError

if TYPE_CHECKING:
    from rookery.core.board import Board
    from rookery.core.enums import Color
    from rookery.core.move import Move


class GameResult:
    """Common base of :class:`Continuing`, :class:`Victory`,
    :class:`IllegalMove` and :class:`Stalemate`.

    Accessors for variant-specific data raise :class:`InvalidAccessError` on
    any other variant.
    """

    __slots__ = ()

    _VARIANTS: ClassVar[tuple[str, ...]] = (
        "Continuing",
        "Victory",
        "IllegalMove",
        "Stalemate",
    )

    def __init_subclass__(cls, **kwargs: object) -> None:
        super().__init_subclass__(**kwargs)
        if cls.__module__ != __name__ or cls.__name__ not in GameResult._VARIANTS:
            raise TypeError("GameResult is a closed set of variants")

    def is_continuing(self) -> bool:
        return isinstance(self, Continuing)

    def is_victory(self) -> bool:
        return isinstance(self, Victory)

    def is_illegal_move(self) -> bool:
        return isinstance(self, IllegalMove)

    def is_stalemate(self) -> bool:
        return isinstance(self, Stalemate)

    def is_game_over(self) -> bool:
        return isinstance(self, (Victory, Stalemate))

    @property
    def next_board(self) -> Board:
        raise InvalidAccessError(f"{self!r} carries no next board")

    @property
    def winning_color(self) -> Color:
        raise InvalidAccessError(f"{self!r} has no winner")

    @property
    def illegal_move(self) -> Move:
        raise InvalidAccessError(f"{self!r} is not an illegal move")


@dataclass(frozen=True, slots=True)
class Continuing(GameResult):
    # An explicit field() so the inherited accessor is not taken as a default.
    next_board: Board = field()


@dataclass(frozen=True, slots=True)
class Victory(GameResult):
    winner: Color

    @property
    def winning_color(self) -> Color:
        return self.winner

    def __str__(self) -> str:
        return f"{self.winner} wins"


@dataclass(frozen=True, slots=True)
class IllegalMove(GameResult):
    attempted_move: Move

    @property
    def illegal_move(self) -> Move:
        return self.attempted_move

    def __str__(self) -> str:
        return f"{self.attempted_move} is an illegal move"


@dataclass(frozen=True, slots=True)
class Stalemate(GameResult):
    def __str__(self) -> str:
        return "Drawn game"
