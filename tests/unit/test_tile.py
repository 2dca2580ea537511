"""
Unit tests for Tile, Bomb and TileState.

Tests merge semantics, state coercion and observation conversion.
"""
import logging

import pytest
from tilegrid import Bomb, Tile, TileState


# ============================================================================
# TileState Tests
# ============================================================================

class TestTileState:
    """Test status enumeration and boundary coercion."""

    def test_values_match_wire_strings(self) -> None:
        """Members should carry the 'open'/'closed' strings."""
        assert TileState.OPEN.value == "open"
        assert TileState.CLOSED.value == "closed"

    def test_coerce_accepts_strings(self) -> None:
        """String values should map to members."""
        assert TileState.coerce("open") is TileState.OPEN
        assert TileState.coerce("closed") is TileState.CLOSED

    def test_coerce_passes_members_through(self) -> None:
        """Members should be returned unchanged."""
        assert TileState.coerce(TileState.OPEN) is TileState.OPEN

    def test_coerce_unknown_returns_none(self) -> None:
        """Unknown strings should not raise."""
        assert TileState.coerce("ajar") is None


# ============================================================================
# Tile Initialization Tests
# ============================================================================

class TestTileInitialization:
    """Test tile creation and default values."""

    def test_default_tile_is_closed(self) -> None:
        """New tile should be closed by default."""
        tile = Tile(id="a")
        assert tile.state == TileState.CLOSED
        assert tile.is_open is False

    def test_default_tile_has_no_bomb_or_num(self) -> None:
        """Optional fields should start absent."""
        tile = Tile(id="a")
        assert tile.contains is None
        assert tile.num is None
        assert tile.on_hover is None
        assert tile.has_bomb is False

    def test_tile_is_immutable(self, closed_tile: Tile) -> None:
        """Tiles are frozen values."""
        with pytest.raises(AttributeError):
            closed_tile.num = 3


# ============================================================================
# Tile Merge Tests
# ============================================================================

class TestTileMerge:
    """Test attribute-preserving partial updates."""

    def test_merge_overrides_given_fields(self, closed_tile: Tile) -> None:
        """Fields in the partial should win."""
        merged = closed_tile.merge({"num": 3})
        assert merged.num == 3

    def test_merge_keeps_other_fields(self, closed_tile: Tile, bomb: Bomb) -> None:
        """Fields absent from the partial should be retained."""
        tile = closed_tile.merge({"contains": bomb})
        merged = tile.merge({"num": 2})
        assert merged.id == "a"
        assert merged.contains == bomb
        assert merged.style is closed_tile.style
        assert merged.state == TileState.CLOSED

    def test_merge_explicit_none_clears_field(self, bomb: Bomb) -> None:
        """An explicit None should clear the field."""
        tile = Tile(id="a", contains=bomb, num=1)
        merged = tile.merge({"contains": None})
        assert merged.contains is None
        assert merged.num == 1

    def test_merge_does_not_mutate_original(self, closed_tile: Tile) -> None:
        """The source tile should be untouched."""
        closed_tile.merge({"num": 4})
        assert closed_tile.num is None

    def test_merge_coerces_state_string(self, closed_tile: Tile) -> None:
        """A string state should be stored as a member."""
        merged = closed_tile.merge({"state": "open"})
        assert merged.state is TileState.OPEN

    def test_merge_drops_invalid_state(self, closed_tile: Tile, caplog) -> None:
        """Invalid state values should be ignored with a warning."""
        with caplog.at_level(logging.WARNING):
            merged = closed_tile.merge({"state": "ajar"})
        assert merged is closed_tile
        assert "invalid state" in caplog.text

    def test_merge_ignores_unknown_fields(self, closed_tile: Tile, caplog) -> None:
        """Unknown field names should not raise."""
        with caplog.at_level(logging.WARNING):
            merged = closed_tile.merge({"colour": "red", "num": 1})
        assert merged.num == 1
        assert "colour" in caplog.text

    def test_empty_merge_returns_same_tile(self, closed_tile: Tile) -> None:
        """Nothing to merge should return the same object."""
        assert closed_tile.merge({}) is closed_tile


# ============================================================================
# Observation Tests
# ============================================================================

class TestTileObservation:
    """Test observation conversion."""

    def test_closed_tile_observation(self, closed_tile: Tile) -> None:
        """Closed tile should be -1."""
        assert closed_tile.to_observation() == -1

    def test_closed_bomb_is_hidden(self, bomb: Bomb) -> None:
        """A closed tile hides its bomb."""
        assert Tile(id="a", contains=bomb).to_observation() == -1

    def test_open_tile_shows_num(self) -> None:
        """Open tile should show its count."""
        tile = Tile(id="a", state=TileState.OPEN, num=3)
        assert tile.to_observation() == 3

    def test_open_tile_without_num_is_zero(self) -> None:
        """Unknown count reads as 0."""
        assert Tile(id="a", state=TileState.OPEN).to_observation() == 0

    def test_open_bomb_observation(self, bomb: Bomb) -> None:
        """Open bomb should be 9."""
        tile = Tile(id="a", state=TileState.OPEN, contains=bomb)
        assert tile.to_observation() == 9

    def test_large_num_is_clamped(self) -> None:
        """Counts above 8 read as 8."""
        tile = Tile(id="a", state=TileState.OPEN, num=300)
        assert tile.to_observation() == 8

    def test_negative_num_is_clamped(self) -> None:
        """Negative counts read as 0."""
        tile = Tile(id="a", state=TileState.OPEN, num=-500)
        assert tile.to_observation() == 0
