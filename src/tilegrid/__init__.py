"""
Tile-grid game state module.

Provides the board and tile model plus the state manager that reads and
mutates a game session's snapshot.
"""
from .tile import Bomb, Tile, TileState
from .handlers import HandlerId, HandlerRegistry
from .board import BoardState, TileLocation, build_grid
from .config import GameConfig, DEFAULT_CONFIG
from .state import GameState, DEFAULT_GAME_STATE, default_game_state
from .store import Store
from .game_state import GameStateManager

__all__ = [
    "Bomb",
    "Tile",
    "TileState",
    "HandlerId",
    "HandlerRegistry",
    "BoardState",
    "TileLocation",
    "build_grid",
    "GameConfig",
    "DEFAULT_CONFIG",
    "GameState",
    "DEFAULT_GAME_STATE",
    "default_game_state",
    "Store",
    "GameStateManager",
]
