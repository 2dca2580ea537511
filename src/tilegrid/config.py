"""
Configuration for a game session.
"""
from dataclasses import dataclass

from .board import DEFAULT_BOARD_SIZE


@dataclass(frozen=True)
class GameConfig:
    """
    Starting values and limits for a game session.

    Attributes:
        max_health: Ceiling applied by heal.
        initial_health: Health after creation or reset.
        initial_score: Score after creation or reset.
        board_size: Declared grid dimension of a fresh board.
    """

    max_health: int = 100
    initial_health: int = 100
    initial_score: int = 0
    board_size: int = DEFAULT_BOARD_SIZE

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are consistent."""
        if self.max_health < 1:
            raise ValueError("Maximum health must be positive")
        if not 0 <= self.initial_health <= self.max_health:
            raise ValueError(
                f"Initial health must be between 0 and {self.max_health}"
            )
        if self.initial_score < 0:
            raise ValueError("Initial score cannot be negative")
        if self.board_size < 1:
            raise ValueError("Board size must be positive")


DEFAULT_CONFIG = GameConfig()
