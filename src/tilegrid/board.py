"""
Board module for the tile-grid game.

Holds the grid of tiles with its declared size and hovered tile, plus an
id index so lookups and tile merges avoid scanning the whole grid.
"""
import logging
from dataclasses import dataclass, field, replace
from typing import (
    Any, Dict, Iterator, List, Mapping, NamedTuple, Optional, Sequence, Tuple,
)

import numpy as np

from .tile import Tile


logger = logging.getLogger(__name__)

Row = Tuple[Tile, ...]
Grid = Tuple[Row, ...]
Position = Tuple[int, int]

DEFAULT_BOARD_SIZE = 9


class TileLocation(NamedTuple):
    """A tile together with its row and column in the grid."""

    tile: Tile
    row: int
    col: int


# ============================================================================
# Grid Helpers (Low-level)
# ============================================================================

def freeze_grid(grid: Sequence[Sequence[Tile]]) -> Grid:
    """Normalise any nested sequence of tiles to a tuple of tuples."""
    return tuple(tuple(row) for row in grid)


def build_grid(size: int = DEFAULT_BOARD_SIZE, id_format: str = "r{row}c{col}") -> Grid:
    """
    Create a conforming grid of closed, empty tiles.

    Args:
        size: Number of rows and columns.
        id_format: Format string for tile ids, given ``row`` and ``col``.

    Returns:
        A size x size grid with unique ids.
    """
    if size < 0:
        raise ValueError("Board size cannot be negative")
    return tuple(
        tuple(Tile(id=id_format.format(row=row, col=col)) for col in range(size))
        for row in range(size)
    )


def _index_grid(grid: Optional[Grid]) -> Dict[str, Tuple[Position, ...]]:
    """Map each tile id to all of its positions, in row-major order."""
    index: Dict[str, List[Position]] = {}
    if grid is None:
        return {}
    for row, tiles in enumerate(grid):
        for col, tile in enumerate(tiles):
            index.setdefault(tile.id, []).append((row, col))
    return {tile_id: tuple(spots) for tile_id, spots in index.items()}


def duplicate_ids(grid: Optional[Sequence[Sequence[Tile]]]) -> List[str]:
    """Ids that appear on more than one tile, sorted."""
    if grid is None:
        return []
    seen = set()
    duplicates = set()
    for row in grid:
        for tile in row:
            if tile.id in seen:
                duplicates.add(tile.id)
            seen.add(tile.id)
    return sorted(duplicates)


# ============================================================================
# Board State
# ============================================================================

@dataclass(frozen=True)
class BoardState:
    """
    Immutable board snapshot.

    Attributes:
        grid: Rows of tiles, or None until the board is initialised.
        size: Intended grid dimension. Not enforced against ``grid``.
        hovered_tile: Id of the tile under the pointer, if any.
    """

    grid: Optional[Grid] = None
    size: int = DEFAULT_BOARD_SIZE
    hovered_tile: Optional[str] = None
    _index: Dict[str, Tuple[Position, ...]] = field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        """Freeze the grid and build the id index."""
        if self.grid is not None:
            object.__setattr__(self, "grid", freeze_grid(self.grid))
        object.__setattr__(self, "_index", _index_grid(self.grid))

    # ========================================================================
    # Lookups
    # ========================================================================

    def locate(self, tile_id: str) -> Optional[TileLocation]:
        """
        Find the first tile with ``tile_id`` in row-major order.

        Returns:
            The tile with its row and column, or None if the grid is
            absent or no tile matches.
        """
        positions = self._index.get(tile_id)
        if not positions:
            return None
        row, col = positions[0]
        return TileLocation(self.grid[row][col], row, col)

    def get_tile(self, tile_id: str) -> Optional[Tile]:
        """Get the first tile with ``tile_id``, or None."""
        location = self.locate(tile_id)
        return location.tile if location else None

    def positions_of(self, tile_id: str) -> Tuple[Position, ...]:
        """All positions holding ``tile_id``; empty if none."""
        return self._index.get(tile_id, ())

    def iter_tiles(self) -> Iterator[Tile]:
        """Iterate over tiles in row-major order."""
        if self.grid is None:
            return
        for row in self.grid:
            yield from row

    def tile_ids(self) -> List[str]:
        """Tile ids in row-major order."""
        return [tile.id for tile in self.iter_tiles()]

    def is_conforming(self) -> bool:
        """Check that the grid is present and exactly size x size."""
        if self.grid is None:
            return False
        return len(self.grid) == self.size and all(
            len(row) == self.size for row in self.grid
        )

    # ========================================================================
    # Updates
    # ========================================================================

    def _derive(
        self,
        grid: Optional[Grid],
        hovered_tile: Optional[str],
        index: Dict[str, Tuple[Position, ...]],
    ) -> "BoardState":
        """Build a sibling board from already-frozen parts, skipping reindexing."""
        board = object.__new__(BoardState)
        object.__setattr__(board, "grid", grid)
        object.__setattr__(board, "size", self.size)
        object.__setattr__(board, "hovered_tile", hovered_tile)
        object.__setattr__(board, "_index", index)
        return board

    def with_grid(self, grid: Optional[Sequence[Sequence[Tile]]]) -> "BoardState":
        """Replace the grid, keeping size and hovered tile."""
        return replace(self, grid=grid)

    def with_hovered_tile(self, tile_id: Optional[str]) -> "BoardState":
        """Replace the hovered tile id."""
        if tile_id == self.hovered_tile:
            return self
        return self._derive(self.grid, tile_id, self._index)

    def merge_tile(self, tile_id: str, partial: Mapping[str, Any]) -> "BoardState":
        """
        Merge ``partial`` into every tile whose id is ``tile_id``.

        Rows without a matching tile, and all other tiles, are reused as-is.
        The id index is shared, or patched when the merge renames the tile.

        Returns:
            A new board, or this same board if the grid is absent, no tile
            matches, or the merge changes nothing.
        """
        if self.grid is None:
            logger.debug("Ignoring update to %s: board not initialised", tile_id)
            return self
        positions = self.positions_of(tile_id)
        if not positions:
            logger.debug("Ignoring update to unknown tile %s", tile_id)
            return self

        rows = list(self.grid)
        changed = False
        new_id = tile_id
        for row, col in positions:
            current = rows[row][col]
            merged = current.merge(partial)
            if merged is current:
                continue
            rebuilt = list(rows[row])
            rebuilt[col] = merged
            rows[row] = tuple(rebuilt)
            new_id = merged.id
            changed = True
        if not changed:
            return self

        index = self._index
        if new_id != tile_id:
            index = dict(index)
            del index[tile_id]
            index[new_id] = tuple(sorted(index.get(new_id, ()) + positions))
        return self._derive(tuple(rows), self.hovered_tile, index)

    # ========================================================================
    # Observation
    # ========================================================================

    def get_observation(self) -> np.ndarray:
        """
        Get the grid as a numpy array.

        Returns:
            2D int8 array where:
                -1 = closed
                0-8 = open with adjacent count (clamped)
                9 = open bomb
            An empty (0, 0) array when the grid is absent.
        """
        if self.grid is None:
            return np.zeros((0, 0), dtype=np.int8)
        width = max((len(row) for row in self.grid), default=0)
        obs = np.full((len(self.grid), width), -1, dtype=np.int8)
        for row, tiles in enumerate(self.grid):
            for col, tile in enumerate(tiles):
                obs[row, col] = tile.to_observation()
        return obs
