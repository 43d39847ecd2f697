from __future__ import annotations

import random

from esper import World

from tilt2048.components.tile import Tile
from tilt2048.constants import SPAWN_FOUR_PROBABILITY
from tilt2048.events.bus import EVENT_BOARD_CHANGED, EVENT_TILE_ADDED
from tilt2048.systems.board_ops import add_tile, board_size, get_entity_at
from tilt2048.systems.game_over import check_game_over


def place_tile(world: World, tile: Tile) -> int:
    """Add TILE, refresh the game-over flag and announce the board change."""
    entity = add_tile(world, tile)
    check_game_over(world)
    event_bus = getattr(world, "event_bus", None)
    if event_bus is not None:
        event_bus.emit(EVENT_TILE_ADDED, tile=tile)
        event_bus.emit(EVENT_BOARD_CHANGED, reason="tile_added")
    return entity


def create_tile(world: World, value: int, col: int, row: int) -> int:
    """Create a tile entity with VALUE at absolute (col, row)."""
    return place_tile(world, Tile(value, col, row))


def spawn_random_tile(world: World, rng: random.Random | None = None) -> Tile | None:
    """Drop a 2 (or occasionally a 4) onto a random empty cell.

    Returns the new tile, or None when the board is full.
    """
    candidate_rng = rng or getattr(world, "random", None)
    if not isinstance(candidate_rng, random.Random):
        candidate_rng = random.Random()
    size = board_size(world)
    empty = [
        (col, row)
        for row in range(size)
        for col in range(size)
        if get_entity_at(world, col, row) is None
    ]
    if not empty:
        return None
    col, row = candidate_rng.choice(empty)
    value = 4 if candidate_rng.random() < SPAWN_FOUR_PROBABILITY else 2
    tile = Tile(value, col, row)
    place_tile(world, tile)
    return tile
