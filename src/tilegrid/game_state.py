"""
Game state manager.

Owns the Store holding the GameState snapshot and exposes the accessors
and mutators used by the rendering layer. Every mutator is a functional
update: it derives the next snapshot from the previous one handed to it,
so several mutations queued in the same batch compose without losing
updates.
"""
import logging
from contextlib import contextmanager
from dataclasses import replace
from typing import Any, Callable, Iterator, Mapping, Optional, Sequence, Union

from .board import TileLocation, duplicate_ids, freeze_grid
from .config import DEFAULT_CONFIG, GameConfig
from .handlers import HandlerId
from .state import GameState, default_game_state
from .store import Store
from .tile import Bomb, Tile, TileState, clean_partial


logger = logging.getLogger(__name__)


class GameStateManager:
    """
    Single source of truth for one game session.

    Accessors read the latest committed snapshot. Mutators never raise for
    unknown tile ids or an uninitialised board; they leave the state
    unchanged instead.
    """

    def __init__(self, config: Optional[GameConfig] = None) -> None:
        """
        Initialize the manager with the default snapshot.

        Args:
            config: Session limits and starting values.
        """
        self.config = config or DEFAULT_CONFIG
        self._store: Store[GameState] = Store(default_game_state(self.config))

    # ========================================================================
    # Container
    # ========================================================================

    @property
    def snapshot(self) -> GameState:
        """Get the latest committed snapshot."""
        return self._store.get()

    def subscribe(self, listener: Callable[[GameState], None]) -> Callable[[], None]:
        """Register a listener for new snapshots; returns an unsubscribe function."""
        return self._store.subscribe(listener)

    @contextmanager
    def batch(self) -> Iterator["GameStateManager"]:
        """Queue mutations and apply them in order when the block exits."""
        with self._store.batch():
            yield self

    def reset_gamestate(self) -> None:
        """Restore the default snapshot, clearing the board."""
        default = default_game_state(self.config)
        self._store.set(default)

    # ========================================================================
    # Health / Score
    # ========================================================================

    def set_health(self, health: int) -> None:
        """Replace health verbatim. Not clamped, unlike damage and heal."""
        self._store.update(lambda prev: replace(prev, health=health))

    def damage(self, dmg: int) -> None:
        """Subtract ``dmg`` from health, flooring at 0."""
        self._store.update(
            lambda prev: replace(prev, health=max(0, prev.health - dmg))
        )

    def heal(self, amt: int) -> None:
        """Add ``amt`` to health, capped at the configured maximum."""
        ceiling = self.config.max_health
        self._store.update(
            lambda prev: replace(prev, health=min(ceiling, prev.health + amt))
        )

    def set_score(self, score: int) -> None:
        """Replace the score. No floor or ceiling is applied."""
        self._store.update(lambda prev: replace(prev, score=score))

    def increment_score(self, amt: int) -> None:
        """Add ``amt`` to the score; negative amounts are allowed."""
        self._store.update(lambda prev: replace(prev, score=prev.score + amt))

    def set_ready(self, ready: bool) -> None:
        """Replace the readiness flag."""
        self._store.update(lambda prev: replace(prev, ready=ready))

    # ========================================================================
    # Board
    # ========================================================================

    def set_board_state(self, grid: Optional[Sequence[Sequence[Tile]]]) -> None:
        """
        Replace the grid wholesale, keeping size and hovered tile.

        The caller is responsible for passing a size x size grid with
        unique tile ids. Duplicate ids are reported once, here.
        """
        duplicates = duplicate_ids(grid)
        if duplicates:
            logger.warning("Grid has duplicate tile ids: %s", duplicates)
        frozen = freeze_grid(grid) if grid is not None else None
        self._store.update(
            lambda prev: replace(prev, board=prev.board.with_grid(frozen))
        )

    def set_hovered_tile(self, tile_id: Optional[str]) -> None:
        """Record the tile under the pointer, or None to clear it."""
        def updater(prev: GameState) -> GameState:
            board = prev.board.with_hovered_tile(tile_id)
            return prev if board is prev.board else replace(prev, board=board)

        self._store.update(updater)

    def set_tile_state(self, tile_id: str, partial: Mapping[str, Any]) -> None:
        """
        Merge ``partial`` into the tile with ``tile_id``.

        Fields absent from ``partial`` keep their current values. Does
        nothing if the board has no grid or no tile has that id. Unknown
        fields are dropped, with a warning, before the update is queued.

        Args:
            tile_id: Id of the tile to update.
            partial: Mapping of Tile field name to new value.
        """
        changes = clean_partial(partial, tile_id)
        if not changes:
            return

        def updater(prev: GameState) -> GameState:
            board = prev.board.merge_tile(tile_id, changes)
            return prev if board is prev.board else replace(prev, board=board)

        self._store.update(updater)

    # ========================================================================
    # Accessors
    # ========================================================================

    def get_tile_state(self, tile_id: str) -> Optional[TileLocation]:
        """
        Find a tile and its position.

        Returns:
            TileLocation(tile, row, col) for the first row-major match, or
            None if the grid is absent or the id is unknown.
        """
        return self.snapshot.board.locate(tile_id)

    def get_raw_tile_state(self, tile_id: str) -> Optional[Tile]:
        """Find a tile without its position, or None."""
        return self.snapshot.board.get_tile(tile_id)

    # ========================================================================
    # Tile-field Setters
    # ========================================================================

    def set_tile_contains(self, tile_id: str, bomb: Optional[Bomb] = None) -> None:
        """Set or clear the bomb held by a tile."""
        self._set_tile_field(tile_id, "contains", bomb)

    def set_tile_num(self, tile_id: str, num: Optional[int] = None) -> None:
        """Set or clear the adjacent-bomb count of a tile."""
        self._set_tile_field(tile_id, "num", num)

    def set_tile_open_state(
        self, tile_id: str, state: Union[TileState, str]
    ) -> None:
        """Open or close a tile. Accepts a TileState or "open"/"closed"."""
        coerced = TileState.coerce(state)
        if coerced is None:
            logger.warning("Ignoring invalid state %r for tile %s", state, tile_id)
            return
        self._set_tile_field(tile_id, "state", coerced)

    def set_tile_on_hover(self, tile_id: str, handler: Optional[HandlerId]) -> None:
        """Attach a hover handler token to a tile."""
        self._set_tile_field(tile_id, "on_hover", handler)

    def _set_tile_field(self, tile_id: str, name: str, value: Any) -> None:
        # The tile lookup happens inside the merge, against the snapshot the
        # update is applied to; a missing tile or grid leaves it unchanged.
        self.set_tile_state(tile_id, {name: value})
