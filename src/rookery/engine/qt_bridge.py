"""Qt bridge to run engine search in a worker thread."""

from __future__ import annotations

import threading

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from rookery.config import EngineSettings
from rookery.core.board import Board
from rookery.engine.minimax import MinimaxSearchEngine
from rookery.engine.search import IEngine, Objective, SearchLimits


class EngineWorker(QObject):
    """Thread-affine worker that computes engine moves on demand.

    Move it to a ``QThread`` and connect a queued signal to
    :meth:`request_move`; results come back through the signals below,
    tagged with the caller's request id.
    """

    outcome_ready = pyqtSignal(int, object)
    search_cancelled = pyqtSignal(int)
    search_error = pyqtSignal(int, str)

    __slots__ = ("_cancel_event", "_engine", "_limits")

    def __init__(
        self,
        settings: EngineSettings | None = None,
        engine: IEngine | None = None,
    ) -> None:
        super().__init__()
        settings = settings if settings is not None else EngineSettings()
        self._engine: IEngine = engine if engine is not None else MinimaxSearchEngine()
        self._limits = SearchLimits(max_depth=settings.search_depth)
        self._cancel_event = threading.Event()

    @pyqtSlot(object, int)
    @pyqtSlot(object, int, object)
    def request_move(
        self,
        board_obj: object,
        request_id: int,
        objective: object = Objective.BEST,
    ) -> None:
        """Search *board_obj* and emit the outcome for *request_id*."""
        if not isinstance(board_obj, Board):
            self.search_error.emit(request_id, "Engine received invalid board")
            return
        if not isinstance(objective, Objective):
            self.search_error.emit(request_id, f"Unknown objective: {objective!r}")
            return

        self._cancel_event.clear()
        try:
            outcome = self._engine.search(
                board_obj,
                self._limits,
                objective,
                is_cancelled=self._cancel_event.is_set,
            )
        except Exception as exc:
            self.search_error.emit(request_id, str(exc))
            return

        if self._cancel_event.is_set():
            self.search_cancelled.emit(request_id)
            return

        self.outcome_ready.emit(request_id, outcome)

    @pyqtSlot()
    def cancel(self) -> None:
        """Request cancellation of the current search."""
        self._cancel_event.set()

    @pyqtSlot(int)
    def set_depth(self, max_depth: int) -> None:
        """Update the search depth (takes effect on the next search)."""
        self._limits = SearchLimits(max_depth=max_depth)

    @property
    def limits(self) -> SearchLimits:
        return self._limits
