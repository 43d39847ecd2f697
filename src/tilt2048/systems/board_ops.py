from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, List, Sequence, Tuple

from esper import World

from tilt2048.components.board import Board
from tilt2048.components.game_state import GameState
from tilt2048.components.side import Side
from tilt2048.components.tile import Tile

Position = Tuple[int, int]


def get_board_entity(world: World) -> int:
    for entity, _ in world.get_component(Board):
        return entity
    raise RuntimeError("Board entity not found")


def get_board(world: World) -> Board:
    return world.component_for_entity(get_board_entity(world), Board)


def get_game_state(world: World) -> GameState:
    return world.component_for_entity(get_board_entity(world), GameState)


def board_size(world: World) -> int:
    return get_board(world).size


def _check_bounds(size: int, col: int, row: int) -> None:
    if not (0 <= col < size and 0 <= row < size):
        raise IndexError(f"Position ({col}, {row}) outside {size}x{size} board")


def to_absolute(board: Board, col: int, row: int) -> Position:
    """Map a (col, row) seen from the board's perspective to the absolute frame."""
    _check_bounds(board.size, col, row)
    side = board.perspective
    return side.col(col, row, board.size), side.row(col, row, board.size)


def get_entity_at(world: World, col: int, row: int) -> int | None:
    """Return the tile entity at absolute (col, row), if any."""
    for entity, tile in world.get_component(Tile):
        if tile.col == col and tile.row == row:
            return entity
    return None


def tile_at(world: World, col: int, row: int) -> Tile | None:
    """Return the tile at (col, row) as seen from the current perspective."""
    abs_col, abs_row = to_absolute(get_board(world), col, row)
    entity = get_entity_at(world, abs_col, abs_row)
    if entity is None:
        return None
    return world.component_for_entity(entity, Tile)


def iter_tiles(world: World) -> List[Tile]:
    """All tiles on the board, ordered bottom row first then by column."""
    tiles = [tile for _, tile in world.get_component(Tile)]
    return sorted(tiles, key=lambda t: (t.row, t.col))


def set_perspective(world: World, side: Side) -> None:
    if not isinstance(side, Side):
        raise ValueError(f"Perspective must be a Side, got {side!r}")
    get_board(world).perspective = side


@contextmanager
def viewing_perspective(world: World, side: Side) -> Iterator[Board]:
    """View the board from SIDE for the duration of the block, then reset to NORTH."""
    set_perspective(world, side)
    try:
        yield get_board(world)
    finally:
        set_perspective(world, Side.NORTH)


def is_valid_value(value: int) -> bool:
    """Tile values are powers of two, starting at 2."""
    return isinstance(value, int) and value >= 2 and value & (value - 1) == 0


def _mark_changed(world: World) -> None:
    get_game_state(world).changed = True


def add_tile(world: World, tile: Tile) -> int:
    """Place TILE at its absolute position. The cell must be empty."""
    size = board_size(world)
    _check_bounds(size, tile.col, tile.row)
    if not is_valid_value(tile.value):
        raise ValueError(f"Tile value must be a power of two >= 2, got {tile.value}")
    if get_entity_at(world, tile.col, tile.row) is not None:
        raise ValueError(f"Cell ({tile.col}, {tile.row}) is already occupied")
    entity = world.create_entity(tile)
    _mark_changed(world)
    return entity


def move_tile(world: World, col: int, row: int, tile: Tile) -> bool:
    """Move TILE to perspective position (col, row).

    An occupied destination merges the two tiles into one of double value and
    adds that value to the score. Returns True iff a merge happened.
    """
    board = get_board(world)
    dst_col, dst_row = to_absolute(board, col, row)
    if tile.col == dst_col and tile.row == dst_row:
        return False
    src_entity = get_entity_at(world, tile.col, tile.row)
    if src_entity is None or world.component_for_entity(src_entity, Tile) != tile:
        raise ValueError(f"Tile {tile} is not on the board")
    dst_entity = get_entity_at(world, dst_col, dst_row)
    if dst_entity is None:
        # Same entity, new position.
        world.add_component(src_entity, tile.moved_to(dst_col, dst_row))
        _mark_changed(world)
        return False
    target: Tile = world.component_for_entity(dst_entity, Tile)
    if target.value != tile.value:
        raise ValueError(f"Cannot merge {tile} into {target}")
    merged = tile.merged_at(dst_col, dst_row)
    world.delete_entity(src_entity, immediate=True)
    world.delete_entity(dst_entity, immediate=True)
    world.create_entity(merged)
    state = get_game_state(world)
    state.score += merged.value
    state.changed = True
    return True


def clear_board(world: World) -> None:
    """Remove every tile and reset the score and game-over flag."""
    for entity in [entity for entity, _ in world.get_component(Tile)]:
        world.delete_entity(entity, immediate=True)
    state = get_game_state(world)
    state.score = 0
    state.game_over = False
    state.changed = True


def load_values(world: World, values: Sequence[Sequence[int]]) -> None:
    """Replace the board contents with VALUES[row][col]; row 0 is the bottom, 0 is empty."""
    size = board_size(world)
    if len(values) != size or any(len(line) != size for line in values):
        raise ValueError(f"Expected a {size}x{size} value matrix")
    for entity in [entity for entity, _ in world.get_component(Tile)]:
        world.delete_entity(entity, immediate=True)
    for row, line in enumerate(values):
        for col, value in enumerate(line):
            if value == 0:
                continue
            add_tile(world, Tile(value, col, row))
