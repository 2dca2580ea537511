"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from tilegrid import (
    Bomb, BoardState, GameStateManager, HandlerRegistry, Tile, TileState,
    build_grid,
)


# ============================================================================
# Manager Fixtures
# ============================================================================

@pytest.fixture
def manager() -> GameStateManager:
    """Create a manager in the default state."""
    return GameStateManager()


@pytest.fixture
def populated_manager() -> GameStateManager:
    """Create a manager holding a 3x3 grid with ids r{row}c{col}."""
    manager = GameStateManager()
    manager.set_board_state(build_grid(3))
    return manager


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def small_grid():
    """A 3x3 grid of closed tiles."""
    return build_grid(3)


@pytest.fixture
def small_board(small_grid) -> BoardState:
    """A 3x3 board."""
    return BoardState(grid=small_grid, size=3)


# ============================================================================
# Tile Fixtures
# ============================================================================

@pytest.fixture
def closed_tile() -> Tile:
    """Create a closed tile with a style payload."""
    return Tile(id="a", state=TileState.CLOSED, style={"color": "grey"})


@pytest.fixture
def bomb() -> Bomb:
    """Create a bomb with a detonation token."""
    return Bomb(name="boom", on_detonate="detonate#1")


@pytest.fixture
def registry() -> HandlerRegistry:
    """Create an empty handler registry."""
    return HandlerRegistry()
