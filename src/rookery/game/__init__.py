"""Game layer: session state and move history on top of the core rules."""

from rookery.game.session import GameSession, MoveRecord

__all__ = ["GameSession", "MoveRecord"]
