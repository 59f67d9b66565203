"""Chess engine package: evaluation, minimax search and background search.

The Qt worker lives in :mod:`rookery.engine.qt_bridge` and is imported
explicitly so the rest of the package works without a Qt runtime.
"""

from rookery.engine.coordinator import SearchCoordinator, SearchTicket
from rookery.engine.evaluation import evaluate, evaluate_for, rating_bar
from rookery.engine.minimax import MATE_SCORE, MinimaxSearchEngine, search
from rookery.engine.search import IEngine, Objective, SearchLimits, SearchOutcome

__all__ = [
    "IEngine",
    "MATE_SCORE",
    "MinimaxSearchEngine",
    "Objective",
    "SearchCoordinator",
    "SearchLimits",
    "SearchOutcome",
    "SearchTicket",
    "evaluate",
    "evaluate_for",
    "rating_bar",
    "search",
]
