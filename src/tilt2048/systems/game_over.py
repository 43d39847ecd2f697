from __future__ import annotations

import logging

from esper import World

from tilt2048.components.side import Direction
from tilt2048.components.tile import Tile
from tilt2048.constants import MAX_PIECE
from tilt2048.events.bus import EVENT_BOARD_CHANGED, EVENT_GAME_OVER, EventBus
from tilt2048.systems.board_ops import board_size, get_entity_at, get_game_state

logger = logging.getLogger(__name__)


def _tile_at(world: World, col: int, row: int) -> Tile | None:
    entity = get_entity_at(world, col, row)
    if entity is None:
        return None
    return world.component_for_entity(entity, Tile)


def empty_space_exists(world: World) -> bool:
    """True if at least one cell holds no tile."""
    size = board_size(world)
    return len(world.get_component(Tile)) < size * size


def max_tile_exists(world: World) -> bool:
    """True if any tile has reached MAX_PIECE."""
    return any(tile.value == MAX_PIECE for _, tile in world.get_component(Tile))


def adjacent_tile(world: World, col: int, row: int, direction: Direction) -> Tile | None:
    """Neighbour of (col, row) in DIRECTION, or None off the board or when empty."""
    size = board_size(world)
    n_col = col + direction.col
    n_row = row + direction.row
    if 0 <= n_col < size and 0 <= n_row < size:
        return _tile_at(world, n_col, n_row)
    return None


def at_least_one_move_exists(world: World) -> bool:
    """True if there is an empty cell or two orthogonally adjacent tiles of equal value."""
    if empty_space_exists(world):
        return True
    for _, tile in world.get_component(Tile):
        for direction in Direction:
            neighbour = adjacent_tile(world, tile.col, tile.row, direction)
            if neighbour is not None and neighbour.value == tile.value:
                return True
    return False


def check_game_over(world: World) -> bool:
    """Recompute and cache whether the game has ended."""
    state = get_game_state(world)
    state.game_over = max_tile_exists(world) or not at_least_one_move_exists(world)
    return state.game_over


class GameOverSystem:
    """Keeps the cached game-over flag current and announces the end of a game once."""

    def __init__(self, world: World, event_bus: EventBus) -> None:
        self.world = world
        self.event_bus = event_bus
        self._announced = False
        self.event_bus.subscribe(EVENT_BOARD_CHANGED, self._on_board_changed)

    def _on_board_changed(self, sender, **payload) -> None:
        if not check_game_over(self.world):
            self._announced = False
            return
        if self._announced:
            return
        self._announced = True
        state = get_game_state(self.world)
        reason = "max_tile" if max_tile_exists(self.world) else "no_moves"
        logger.info("Game over (%s) with score %d", reason, state.score)
        self.event_bus.emit(
            EVENT_GAME_OVER,
            score=state.score,
            max_score=max(state.score, state.max_score),
            reason=reason,
        )
