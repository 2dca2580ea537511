"""
Game state snapshot.

A GameState is an immutable value; every mutation produces a new snapshot
that shares all untouched fields with the previous one.
"""
from dataclasses import dataclass, field
from typing import Optional

from .board import BoardState
from .config import DEFAULT_CONFIG, GameConfig


@dataclass(frozen=True)
class GameState:
    """
    Full game snapshot at one point in time.

    Attributes:
        health: Player health, kept within [0, max_health] by damage/heal.
        score: Player score, unbounded above.
        ready: Whether the player is ready.
        board: The board submodel.
    """

    health: int = DEFAULT_CONFIG.initial_health
    score: int = DEFAULT_CONFIG.initial_score
    ready: bool = False
    board: BoardState = field(default_factory=BoardState)


def default_game_state(config: Optional[GameConfig] = None) -> GameState:
    """Build the default snapshot for ``config``."""
    config = config or DEFAULT_CONFIG
    return GameState(
        health=config.initial_health,
        score=config.initial_score,
        ready=False,
        board=BoardState(size=config.board_size),
    )


DEFAULT_GAME_STATE = default_game_state()
