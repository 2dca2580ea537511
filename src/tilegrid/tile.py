"""
Tile module for the tile-grid game.

Represents individual tiles on the board with their open/closed status,
optional bomb, adjacent-bomb count and opaque presentation payloads.
"""
import logging
from dataclasses import dataclass, field, fields, replace
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Union

from .handlers import HandlerId


logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

class TileState(Enum):
    """Open/closed status of a tile."""

    OPEN = "open"
    CLOSED = "closed"

    @classmethod
    def coerce(cls, value: Union["TileState", str]) -> Optional["TileState"]:
        """
        Convert a member or its string value to a TileState.

        Returns:
            The matching member, or None if the value is not recognised.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None


# Observation codes, matching the encoding used for agent input
OBS_CLOSED = -1
OBS_BOMB = 9
OBS_MAX_COUNT = 8


# ============================================================================
# Bomb Data Class
# ============================================================================

@dataclass(frozen=True)
class Bomb:
    """
    A named hazard owned by at most one tile.

    Attributes:
        name: Display name of the bomb.
        on_detonate: Token of the detonation handler, resolved by the
            rendering side through a HandlerRegistry.
    """

    name: str
    on_detonate: Optional[HandlerId] = None


# ============================================================================
# Tile Data Class
# ============================================================================

@dataclass(frozen=True)
class Tile:
    """
    Represents a single tile in the grid.

    Attributes:
        id: Identifier, unique across the whole grid.
        state: Open or closed.
        style: Opaque style descriptor, stored and forwarded untouched.
        contains: Bomb owned by this tile, if any.
        num: Adjacent-bomb count, if known.
        on_hover: Token of the hover handler, if any.
    """

    id: str
    state: TileState = TileState.CLOSED
    style: Mapping[str, Any] = field(default_factory=dict)
    contains: Optional[Bomb] = None
    num: Optional[int] = None
    on_hover: Optional[HandlerId] = None

    def merge(self, partial: Mapping[str, Any]) -> "Tile":
        """
        Return a copy with the fields in ``partial`` overriding this tile's.

        Fields absent from ``partial`` are kept. Unknown field names are
        dropped with a warning.

        Args:
            partial: Mapping of field name to new value.

        Returns:
            The merged tile, or this same tile if nothing applies.
        """
        changes = clean_partial(partial, self.id)
        if not changes:
            return self
        return replace(self, **changes)

    @property
    def is_open(self) -> bool:
        """Check if tile is open."""
        return self.state == TileState.OPEN

    @property
    def has_bomb(self) -> bool:
        """Check if tile holds a bomb."""
        return self.contains is not None

    def to_observation(self) -> int:
        """
        Convert tile to an observation value.

        Returns:
            -1: Closed tile
            0-8: Open tile with adjacent count, clamped (0 when unknown)
            9: Open tile holding a bomb
        """
        if self.state == TileState.CLOSED:
            return OBS_CLOSED
        if self.contains is not None:
            return OBS_BOMB
        return min(max(self.num or 0, 0), OBS_MAX_COUNT)


# ============================================================================
# Partial Updates
# ============================================================================

def clean_partial(partial: Mapping[str, Any], tile_id: str = "?") -> Dict[str, Any]:
    """
    Keep only the Tile fields of ``partial``, with ``state`` coerced.

    Unknown field names and unrecognised states are dropped with a warning.
    A cleaned mapping passes through again without further warnings.

    Args:
        partial: Mapping of field name to new value.
        tile_id: Id of the target tile, used in log messages.

    Returns:
        A new dict safe to pass to ``dataclasses.replace`` on a Tile.
    """
    names = {f.name for f in fields(Tile)}
    unknown = sorted(set(partial) - names)
    if unknown:
        logger.warning("Ignoring unknown tile fields %s for tile %s", unknown, tile_id)
    changes = {key: value for key, value in partial.items() if key in names}
    if "state" in changes:
        state = TileState.coerce(changes["state"])
        if state is None:
            logger.warning(
                "Ignoring invalid state %r for tile %s", changes["state"], tile_id
            )
            del changes["state"]
        else:
            changes["state"] = state
    return changes
