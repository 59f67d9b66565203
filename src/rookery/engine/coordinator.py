"""Background search: a single worker thread serving requests in FIFO order.

Typical use from an interactive loop::

    with SearchCoordinator() as coordinator:
        ticket = coordinator.submit(board, Objective.BEST)
        outcome = ticket.result(on_progress=lambda: print(".", end=""))
"""

from __future__ import annotations

import logging
import queue
import threading
from collections import deque
from collections.abc import Callable
from time import monotonic
from typing import TYPE_CHECKING

from rookery.config import EngineSettings
from rookery.engine.minimax import MinimaxSearchEngine
from rookery.engine.search import IEngine, Objective, SearchLimits, SearchOutcome

if TYPE_CHECKING:
    from rookery.core.board import Board

_LOGGER = logging.getLogger(__name__)

ProgressCallback = Callable[[], None]

_STOP = object()


class SearchTicket:
    """Handle for one submitted search; resolved exactly once by the worker."""

    __slots__ = (
        "request_id",
        "board",
        "objective",
        "depth",
        "_default_interval",
        "_release",
        "_done",
        "_outcome",
        "_error",
    )

    def __init__(
        self,
        request_id: int,
        board: Board,
        objective: Objective,
        depth: int,
        default_interval: float,
        release: Callable[[SearchTicket], None] | None = None,
    ) -> None:
        self.request_id = request_id
        self.board = board
        self.objective = objective
        self.depth = depth
        self._default_interval = default_interval
        self._release = release
        self._done = threading.Event()
        self._outcome: SearchOutcome | None = None
        self._error: BaseException | None = None

    def done(self) -> bool:
        """Whether the search has finished (successfully or not)."""
        return self._done.is_set()

    def result(
        self,
        timeout: float | None = None,
        on_progress: ProgressCallback | None = None,
        interval: float | None = None,
    ) -> SearchOutcome:
        """Block until the search completes and return its outcome.

        While waiting, *on_progress* is called every *interval* seconds
        (default: the coordinator's ``progress_interval``). Errors raised by
        the engine are re-raised here. Once the outcome has been handed out the
        coordinator no longer tracks the ticket, so it will not show up in
        :meth:`SearchCoordinator.results`.

        Raises:
            TimeoutError: If *timeout* seconds pass without a result.
        """
        if on_progress is None:
            if not self._done.wait(timeout):
                raise TimeoutError(f"Search request {self.request_id} timed out")
        else:
            step = self._default_interval if interval is None else interval
            deadline = None if timeout is None else monotonic() + timeout
            while not self._done.is_set():
                wait_for = step
                if deadline is not None:
                    remaining = deadline - monotonic()
                    if remaining <= 0:
                        raise TimeoutError(
                            f"Search request {self.request_id} timed out"
                        )
                    wait_for = min(step, remaining)
                if self._done.wait(wait_for):
                    break
                on_progress()

        if self._release is not None:
            self._release(self)
        if self._error is not None:
            raise self._error
        assert self._outcome is not None
        return self._outcome

    def _resolve(self, outcome: SearchOutcome) -> None:
        self._outcome = outcome
        self._done.set()

    def _fail(self, error: BaseException) -> None:
        self._error = error
        self._done.set()

    def __repr__(self) -> str:
        state = "done" if self.done() else "pending"
        return (
            f"SearchTicket(id={self.request_id}, {self.objective.value}, "
            f"depth={self.depth}, {state})"
        )


class SearchCoordinator:
    """Owns one worker thread that runs searches one at a time, in order.

    Requests submitted while a search is running queue behind it; nothing is
    dropped or reordered. Boards are immutable, so each request carries its
    own snapshot and the queue is the only shared state.
    """

    __slots__ = (
        "_settings",
        "_engine",
        "_requests",
        "_pending",
        "_thread",
        "_lock",
        "_next_request_id",
        "_closed",
    )

    def __init__(
        self,
        settings: EngineSettings | None = None,
        engine: IEngine | None = None,
    ) -> None:
        self._settings = settings if settings is not None else EngineSettings()
        self._engine: IEngine = engine if engine is not None else MinimaxSearchEngine()
        self._requests: queue.Queue[object] = queue.Queue()
        self._pending: deque[SearchTicket] = deque()
        self._thread: threading.Thread | None = None
        self._lock = threading.Lock()
        self._next_request_id = 0
        self._closed = False

    @property
    def settings(self) -> EngineSettings:
        return self._settings

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    # ── Lifecycle ────────────────────────────────────────────────────────

    def start(self) -> None:
        """Start the worker thread (idempotent; ``submit`` calls it too)."""
        with self._lock:
            self._start_locked()

    def shutdown(self, wait: bool = True) -> None:
        """Finish queued searches, then stop the worker."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            thread = self._thread
            self._requests.put(_STOP)
        _LOGGER.debug("Search coordinator shutting down")
        if wait and thread is not None:
            thread.join()

    def __enter__(self) -> SearchCoordinator:
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.shutdown(wait=True)

    # ── Requests ─────────────────────────────────────────────────────────

    def submit(
        self,
        board: Board,
        objective: Objective = Objective.BEST,
        depth: int | None = None,
    ) -> SearchTicket:
        """Queue a search of *board* and return its ticket immediately."""
        with self._lock:
            if self._closed:
                raise RuntimeError("Search coordinator has been shut down")
            self._start_locked()
            self._next_request_id += 1
            ticket = SearchTicket(
                self._next_request_id,
                board,
                objective,
                self._settings.search_depth if depth is None else depth,
                self._settings.progress_interval,
                self._forget,
            )
            self._pending.append(ticket)
            self._requests.put(ticket)
        _LOGGER.debug("Queued %r", ticket)
        return ticket

    def results(self) -> list[SearchTicket]:
        """Remove and return finished tickets, oldest first.

        Stops at the first unfinished ticket so results always come back in
        request order.
        """
        finished: list[SearchTicket] = []
        with self._lock:
            while self._pending and self._pending[0].done():
                finished.append(self._pending.popleft())
        return finished

    def pending_count(self) -> int:
        """Tickets submitted but not yet handed out."""
        with self._lock:
            return len(self._pending)

    def _forget(self, ticket: SearchTicket) -> None:
        with self._lock:
            if ticket in self._pending:
                self._pending.remove(ticket)

    # ── Worker ───────────────────────────────────────────────────────────

    def _start_locked(self) -> None:
        if self._thread is not None or self._closed:
            return
        self._thread = threading.Thread(
            target=self._run,
            name=self._settings.worker_name,
            daemon=True,
        )
        self._thread.start()

    def _run(self) -> None:
        while True:
            item = self._requests.get()
            if item is _STOP:
                break
            assert isinstance(item, SearchTicket)
            self._serve(item)

    def _serve(self, ticket: SearchTicket) -> None:
        _LOGGER.debug("Searching %r", ticket)
        try:
            outcome = self._engine.search(
                ticket.board,
                SearchLimits(max_depth=ticket.depth),
                ticket.objective,
            )
        except Exception as exc:
            _LOGGER.warning("Search request %d failed: %s", ticket.request_id, exc)
            ticket._fail(exc)
            return
        ticket._resolve(outcome)
