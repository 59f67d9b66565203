"""Game session: current board plus an explicit, ordered move log."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from rookery.core.board import Board
from rookery.core.move import PieceMove
from rookery.core.result import Continuing, GameResult, Victory
from rookery.core.rules import Rules
from rookery.engine.search import Objective

if TYPE_CHECKING:
    from rookery.core.enums import Color
    from rookery.core.move import Move
    from rookery.engine.coordinator import SearchCoordinator, SearchTicket

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MoveRecord:
    """A single entry in the move history."""

    move: Move
    board_after: Board
    was_capture: bool = False
    was_check: bool = False


@dataclass
class GameSession:
    """Tracks the board, the move log and the final result of one game.

    Pure data and logic, with no threading or I/O. Illegal moves
    leave everything untouched; only ``Continuing`` transitions extend the
    history.
    """

    board: Board = field(default_factory=Board.initial)
    history: list[MoveRecord] = field(default_factory=list, init=False)
    result: GameResult | None = field(default=None, init=False)

    # ── Move application ─────────────────────────────────────────────────

    def play(self, move: Move) -> GameResult:
        """Play *move* on the current board and return the rules' verdict."""
        if self.is_over:
            raise RuntimeError(f"Game is over: {self.result}")

        outcome = Rules.apply(self.board, move)
        if outcome.is_illegal_move():
            _LOGGER.debug("Rejected illegal move %s", move)
            return outcome

        if isinstance(outcome, Continuing):
            played = Rules.normalize(self.board, move)
            self.history.append(self._record(played, outcome.next_board))
            self.board = outcome.next_board
        else:
            self.result = outcome
            _LOGGER.info("Game finished after %d plies: %s", self.ply_count, outcome)
        return outcome

    def pass_turn(self) -> Board:
        """Hand the move to the other side without moving a piece."""
        self.board = self.board.change_turn()
        return self.board

    def engine_move(
        self,
        coordinator: SearchCoordinator,
        objective: Objective = Objective.BEST,
        depth: int | None = None,
    ) -> SearchTicket:
        """Ask *coordinator* for a move on the current board."""
        return coordinator.submit(self.board, objective, depth)

    # ── Query helpers ────────────────────────────────────────────────────

    @property
    def side_to_move(self) -> Color:
        return self.board.side_to_move

    @property
    def is_over(self) -> bool:
        return self.result is not None and self.result.is_game_over()

    @property
    def winner(self) -> Color | None:
        if isinstance(self.result, Victory):
            return self.result.winning_color
        return None

    @property
    def ply_count(self) -> int:
        """Number of half-moves played."""
        return len(self.history)

    def moves(self) -> list[Move]:
        return [record.move for record in self.history]

    def history_lines(self) -> list[str]:
        """Move log two plies per line, e.g. ``["e2e4 e7e5", "g1f3"]``."""
        texts = [str(record.move) for record in self.history]
        return [" ".join(texts[i : i + 2]) for i in range(0, len(texts), 2)]

    # ── Internal ─────────────────────────────────────────────────────────

    def _record(self, move: Move, board_after: Board) -> MoveRecord:
        before = self.board
        was_capture = False
        if isinstance(move, PieceMove):
            was_capture = before[move.to_sq] is not None or (
                move.to_sq == before.en_passant
                and before[move.from_sq] is not None
                and before[move.from_sq].is_pawn
            )
        return MoveRecord(
            move=move,
            board_after=board_after,
            was_capture=was_capture,
            was_check=Rules.is_in_check(board_after),
        )
