"""Shared engine search models and protocol."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from rookery.core.board import Board
    from rookery.core.move import Move

CancelCheck = Callable[[], bool]


class Objective(Enum):
    """Whether the side to move maximises or minimises its own evaluation."""

    BEST = "best"
    WORST = "worst"


@dataclass(slots=True, frozen=True)
class SearchLimits:
    """Search constraints for a single move computation."""

    max_depth: int = 4


@dataclass(slots=True, frozen=True)
class SearchOutcome:
    """Result produced by the engine search.

    ``score`` is in centipawns from the point of view of the side to move on
    the searched board. Unpacks as ``move, evaluated_count, score``.
    """

    move: Move
    evaluated_count: int
    score: int

    def __iter__(self) -> Iterator[object]:
        return iter((self.move, self.evaluated_count, self.score))


class IEngine(Protocol):
    """Protocol for search engines used by the coordinator and Qt bridge."""

    def search(
        self,
        board: Board,
        limits: SearchLimits,
        objective: Objective = Objective.BEST,
        is_cancelled: CancelCheck | None = None,
    ) -> SearchOutcome: ...
