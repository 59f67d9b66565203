"""Engine settings shared by the search coordinator and the Qt bridge."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class EngineSettings:
    """All user-configurable engine settings."""

    # Search
    search_depth: int = 4  # plies

    # Coordinator
    progress_interval_ms: int = 250
    worker_name: str = "rookery-search"

    def __post_init__(self) -> None:
        if self.search_depth < 0:
            raise ValueError(f"search_depth must be >= 0, got {self.search_depth}")
        if self.progress_interval_ms <= 0:
            raise ValueError(
                f"progress_interval_ms must be > 0, got {self.progress_interval_ms}"
            )

    @property
    def progress_interval(self) -> float:
        """Progress callback cadence in seconds."""
        return self.progress_interval_ms / 1000.0
