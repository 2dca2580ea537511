"""
Command line demo for the tile-grid state core.

Usage:
    tilegrid demo [--size N] [--bombs N] [--seed N] [--open N]
    tilegrid status [--damage N] [--heal N] [--score N]
"""
import argparse
import logging
import random
from typing import List, Optional

from .board import build_grid
from .config import GameConfig
from .game_state import GameStateManager
from .handlers import HandlerRegistry
from .state import GameState
from .tile import Bomb


logger = logging.getLogger(__name__)


def render(state: GameState) -> str:
    """
    Render the board as text.

    Closed tiles show as '.', open tiles as their count, open bombs as '*'.
    """
    board = state.board
    if board.grid is None:
        return "(no board)"
    lines = []
    for row in board.grid:
        cells = []
        for tile in row:
            if not tile.is_open:
                cells.append(".")
            elif tile.has_bomb:
                cells.append("*")
            else:
                cells.append(str(tile.num or 0))
        lines.append(" ".join(cells))
    return "\n".join(lines)


def status_line(state: GameState) -> str:
    """Summarise health, score and readiness on one line."""
    return f"Health: {state.health} | Score: {state.score} | Ready: {state.ready}"


def _adjacent_bombs(manager: GameStateManager, row: int, col: int) -> int:
    grid = manager.snapshot.board.grid
    count = 0
    for delta_row in (-1, 0, 1):
        for delta_col in (-1, 0, 1):
            if delta_row == 0 and delta_col == 0:
                continue
            r, c = row + delta_row, col + delta_col
            if 0 <= r < len(grid) and 0 <= c < len(grid[r]) and grid[r][c].has_bomb:
                count += 1
    return count


def demo(args: argparse.Namespace) -> None:
    """Build a board, place bombs, fill counts and open some tiles."""
    manager = GameStateManager(GameConfig(board_size=args.size))
    registry = HandlerRegistry()
    rng = random.Random(args.seed)

    detonate = registry.register(
        lambda tile_id: manager.damage(args.bomb_damage), name="detonate"
    )
    hover = registry.register(manager.set_hovered_tile, name="hover")

    manager.set_board_state(build_grid(args.size))
    ids = manager.snapshot.board.tile_ids()
    bomb_count = min(args.bombs, len(ids))
    bomb_ids = rng.sample(ids, bomb_count)

    with manager.batch():
        for index, tile_id in enumerate(bomb_ids):
            manager.set_tile_contains(tile_id, Bomb(f"bomb-{index}", detonate))
        for tile_id in ids:
            manager.set_tile_on_hover(tile_id, hover)

    for tile_id in ids:
        location = manager.get_tile_state(tile_id)
        if not location.tile.has_bomb:
            manager.set_tile_num(
                tile_id, _adjacent_bombs(manager, location.row, location.col)
            )

    opened = rng.sample(ids, min(args.open, len(ids)))
    for tile_id in opened:
        manager.set_tile_open_state(tile_id, "open")
        tile = manager.get_raw_tile_state(tile_id)
        registry.invoke(tile.on_hover, tile_id)
        if tile.has_bomb:
            registry.invoke(tile.contains.on_detonate, tile_id)
        else:
            manager.increment_score(1)

    state = manager.snapshot
    print(f"Board: {args.size}x{args.size} with {bomb_count} bombs")
    print(render(state))
    print(status_line(state))
    print(f"Hovered: {state.board.hovered_tile}")


def status(args: argparse.Namespace) -> None:
    """Apply health and score changes to a fresh session and print them."""
    manager = GameStateManager()
    manager.subscribe(lambda state: logger.debug(status_line(state)))
    with manager.batch():
        if args.damage:
            manager.damage(args.damage)
        if args.heal:
            manager.heal(args.heal)
        if args.score:
            manager.increment_score(args.score)
    print(status_line(manager.snapshot))


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser with the demo and status commands."""
    parser = argparse.ArgumentParser(
        description="Tile-grid game state - inspect board and player state"
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Log state changes"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    demo_parser = subparsers.add_parser("demo", help="Build and print a board")
    demo_parser.add_argument("--size", type=int, default=9, help="Board size (NxN)")
    demo_parser.add_argument("--bombs", type=int, default=10, help="Number of bombs")
    demo_parser.add_argument("--open", type=int, default=5, help="Tiles to open")
    demo_parser.add_argument("--seed", type=int, default=None, help="Random seed")
    demo_parser.add_argument(
        "--bomb-damage", type=int, default=25, help="Health lost per bomb"
    )

    status_parser = subparsers.add_parser("status", help="Show player status")
    status_parser.add_argument("--damage", type=int, default=0, help="Damage to apply")
    status_parser.add_argument("--heal", type=int, default=0, help="Health to restore")
    status_parser.add_argument("--score", type=int, default=0, help="Score to add")

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Parse arguments and run the appropriate command."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "demo":
        demo(args)
    elif args.command == "status":
        status(args)
    else:
        parser.print_help()
