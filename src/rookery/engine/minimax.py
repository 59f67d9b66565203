"""Depth-bounded minimax search (negamax + alpha-beta)."""

from __future__ import annotations

import logging

from rookery.core.board import Board
from rookery.core.errors import PreconditionError
from rookery.core.move import Move, PieceMove
from rookery.core.move_generator import MoveGenerator
from rookery.core.rules import Rules
from rookery.engine.evaluation import PIECE_VALUES, evaluate
from rookery.engine.search import (
    CancelCheck,
    IEngine,
    Objective,
    SearchLimits,
    SearchOutcome,
)

_LOGGER = logging.getLogger(__name__)

_INF_SCORE = 1_000_000
MATE_SCORE = 100_000


def _never_cancelled() -> bool:
    return False


class MinimaxSearchEngine(IEngine):
    """Fixed-depth searcher.

    The root tries every legal move in generation order and keeps the first
    one with the best (``Objective.BEST``) or worst (``Objective.WORST``)
    value for the side to move. Below the root both sides play for
    themselves. Mated positions score ``-MATE_SCORE + ply`` for the mated
    side, stalemate scores 0.

    ``evaluated_count`` is the number of nodes visited below the root; a
    depth-0 search evaluates the root itself and reports 1.
    """

    __slots__ = ("_nodes", "_cancel_check", "_cancelled")

    def __init__(self) -> None:
        self._nodes = 0
        self._cancel_check: CancelCheck = _never_cancelled
        self._cancelled = False

    def search(
        self,
        board: Board,
        limits: SearchLimits,
        objective: Objective = Objective.BEST,
        is_cancelled: CancelCheck | None = None,
    ) -> SearchOutcome:
        depth = limits.max_depth
        if depth < 0:
            raise PreconditionError(f"Search depth must be >= 0, got {depth}")

        root = Rules.successors(board)
        if not root:
            raise PreconditionError(
                f"{board.side_to_move} has no legal moves; the game is over"
            )

        self._nodes = 0
        self._cancel_check = is_cancelled or _never_cancelled
        self._cancelled = False

        if depth == 0:
            self._nodes = 1
            return SearchOutcome(root[0][0], self._nodes, evaluate(board))

        if objective is Objective.BEST:
            move, score = self._search_root_best(root, depth)
        else:
            move, score = self._search_root_worst(root, depth)
        if abs(score) == _INF_SCORE:
            # Cancelled before any root move was scored.
            score = evaluate(board)

        _LOGGER.debug(
            "%s search depth=%d nodes=%d move=%s score=%d%s",
            objective.value,
            depth,
            self._nodes,
            move,
            score,
            " (cancelled)" if self._cancelled else "",
        )
        return SearchOutcome(move, self._nodes, score)

    # ── Root ─────────────────────────────────────────────────────────────

    def _search_root_best(
        self, root: list[tuple[Move, Board]], depth: int
    ) -> tuple[Move, int]:
        best_move = root[0][0]
        best_score = -_INF_SCORE
        alpha = -_INF_SCORE

        for move, child in root:
            score = -self._negamax(child, depth - 1, -_INF_SCORE, -alpha, ply=1)
            if self._cancelled:
                break
            if score > best_score:
                best_score = score
                best_move = move
            if score > alpha:
                alpha = score

        return best_move, best_score

    def _search_root_worst(
        self, root: list[tuple[Move, Board]], depth: int
    ) -> tuple[Move, int]:
        worst_move = root[0][0]
        worst_score = _INF_SCORE

        for move, child in root:
            # Only values below the current worst need to be exact.
            score = -self._negamax(child, depth - 1, -worst_score, _INF_SCORE, ply=1)
            if self._cancelled:
                break
            if score < worst_score:
                worst_score = score
                worst_move = move

        return worst_move, worst_score

    # ── Tree ─────────────────────────────────────────────────────────────

    def _negamax(
        self,
        board: Board,
        depth: int,
        alpha: int,
        beta: int,
        ply: int,
    ) -> int:
        if self._should_stop():
            return 0

        self._nodes += 1

        if depth <= 0:
            gen = MoveGenerator(board)
            if gen.has_legal_move():
                return evaluate(board)
            return self._terminal_score(gen, board, ply)

        children = Rules.successors(board)
        if not children:
            return self._terminal_score(MoveGenerator(board), board, ply)

        best_score = -_INF_SCORE
        for _, child in self._order_children(board, children):
            score = -self._negamax(child, depth - 1, -beta, -alpha, ply + 1)
            if self._cancelled:
                break
            if score > best_score:
                best_score = score
            if score > alpha:
                alpha = score
            if alpha >= beta:
                break

        return best_score

    @staticmethod
    def _terminal_score(gen: MoveGenerator, board: Board, ply: int) -> int:
        if Rules.is_lost(board, gen):
            return -MATE_SCORE + ply
        return 0

    def _should_stop(self) -> bool:
        if not self._cancelled and self._cancel_check():
            self._cancelled = True
        return self._cancelled

    # ── Move ordering ────────────────────────────────────────────────────

    def _order_children(
        self,
        board: Board,
        children: list[tuple[Move, Board]],
    ) -> list[tuple[Move, Board]]:
        # Stable: equally scored moves keep generation order.
        return sorted(
            children,
            key=lambda pair: self._move_order_score(board, pair[0]),
            reverse=True,
        )

    def _move_order_score(self, board: Board, move: Move) -> int:
        if not isinstance(move, PieceMove):
            return 0
        moving_piece = board[move.from_sq]
        if moving_piece is None:
            return 0

        score = 0
        if move.promotion is not None:
            score += 20_000 + PIECE_VALUES[move.promotion]
        target_piece = board[move.to_sq]
        if target_piece is not None:
            score += 10_000
            score += 10 * PIECE_VALUES[target_piece.piece_type]
            score -= PIECE_VALUES[moving_piece.piece_type]
        return score


def search(
    board: Board,
    depth: int,
    objective: Objective = Objective.BEST,
    is_cancelled: CancelCheck | None = None,
) -> SearchOutcome:
    """Search *board* to *depth* plies with a fresh engine."""
    return MinimaxSearchEngine().search(
        board, SearchLimits(max_depth=depth), objective, is_cancelled
    )
