import pytest

from tilt2048.components.side import Side
from tilt2048.components.tile import Tile
from tilt2048.events.bus import EventBus
from tilt2048.systems.board_ops import (
    add_tile,
    clear_board,
    get_board,
    get_entity_at,
    get_game_state,
    iter_tiles,
    load_values,
    move_tile,
    set_perspective,
    tile_at,
    viewing_perspective,
)
from tilt2048.world import create_world
from tests.helpers import board_values, make_world


def test_create_world_builds_empty_board():
    world = create_world(EventBus(), size=5)
    board = get_board(world)
    assert board.size == 5
    assert board.perspective is Side.NORTH
    assert iter_tiles(world) == []
    assert get_game_state(world).score == 0


def test_create_world_rejects_non_positive_size():
    with pytest.raises(ValueError):
        create_world(EventBus(), size=0)


def test_add_tile_places_tile_at_absolute_position():
    world = create_world(EventBus())
    add_tile(world, Tile(2, 1, 3))
    assert tile_at(world, 1, 3) == Tile(2, 1, 3)
    assert tile_at(world, 3, 1) is None
    assert get_game_state(world).changed


def test_add_tile_onto_occupied_cell_fails():
    world = create_world(EventBus())
    add_tile(world, Tile(2, 0, 0))
    with pytest.raises(ValueError):
        add_tile(world, Tile(4, 0, 0))
    assert tile_at(world, 0, 0).value == 2


@pytest.mark.parametrize("position", [(-1, 0), (0, 4), (4, 4)])
def test_add_tile_out_of_range_fails(position):
    world = create_world(EventBus())
    with pytest.raises(IndexError):
        add_tile(world, Tile(2, *position))


@pytest.mark.parametrize("value", [0, 1, 3, 6, -2])
def test_add_tile_rejects_non_power_of_two(value):
    world = create_world(EventBus())
    with pytest.raises(ValueError):
        add_tile(world, Tile(value, 0, 0))


def test_tile_at_out_of_range_fails():
    world = create_world(EventBus())
    with pytest.raises(IndexError):
        tile_at(world, 4, 0)


def test_perspective_rotates_reads():
    _, world = make_world([
        [2, 0, 0, 0],
        [0, 0, 0, 0],
        [0, 0, 0, 0],
        [0, 0, 0, 0],
    ])
    # Seen from the west, the lower-left tile leads perspective column 0.
    set_perspective(world, Side.WEST)
    assert tile_at(world, 0, 3).value == 2
    set_perspective(world, Side.SOUTH)
    assert tile_at(world, 3, 3).value == 2
    set_perspective(world, Side.EAST)
    assert tile_at(world, 3, 0).value == 2
    set_perspective(world, Side.NORTH)
    assert tile_at(world, 0, 0).value == 2


def test_set_perspective_rejects_non_side():
    world = create_world(EventBus())
    with pytest.raises(ValueError):
        set_perspective(world, "north")
    assert get_board(world).perspective is Side.NORTH


def test_viewing_perspective_restores_north_on_error():
    world = create_world(EventBus())
    with pytest.raises(RuntimeError):
        with viewing_perspective(world, Side.EAST):
            assert get_board(world).perspective is Side.EAST
            raise RuntimeError("boom")
    assert get_board(world).perspective is Side.NORTH


def test_move_relocates_same_entity():
    _, world = make_world([
        [2, 0, 0, 0],
        [0, 0, 0, 0],
        [0, 0, 0, 0],
        [0, 0, 0, 0],
    ])
    entity = get_entity_at(world, 0, 0)
    merged = move_tile(world, 0, 3, tile_at(world, 0, 0))
    assert merged is False
    assert tile_at(world, 0, 0) is None
    assert tile_at(world, 0, 3) == Tile(2, 0, 3)
    assert get_entity_at(world, 0, 3) == entity
    assert get_game_state(world).score == 0


def test_move_onto_equal_tile_merges_and_scores():
    _, world = make_world([
        [4, 0, 0, 4],
        [0, 0, 0, 0],
        [0, 0, 0, 0],
        [0, 0, 0, 0],
    ])
    left = get_entity_at(world, 0, 0)
    right = get_entity_at(world, 3, 0)
    with viewing_perspective(world, Side.EAST):
        # Seen from the east, absolute (3, 0) is perspective (3, 3).
        assert move_tile(world, 3, 3, tile_at(world, 3, 0)) is True
    assert tile_at(world, 0, 0) is None
    assert tile_at(world, 3, 0) == Tile(8, 3, 0)
    assert get_entity_at(world, 3, 0) not in (left, right)
    assert get_game_state(world).score == 8
    assert len(iter_tiles(world)) == 1


def test_move_onto_different_value_fails():
    _, world = make_world([
        [2, 4, 0, 0],
        [0, 0, 0, 0],
        [0, 0, 0, 0],
        [0, 0, 0, 0],
    ])
    with pytest.raises(ValueError):
        move_tile(world, 1, 0, tile_at(world, 0, 0))


def test_move_to_own_cell_is_noop():
    _, world = make_world([
        [2, 0, 0, 0],
        [0, 0, 0, 0],
        [0, 0, 0, 0],
        [0, 0, 0, 0],
    ])
    get_game_state(world).changed = False
    assert move_tile(world, 0, 0, tile_at(world, 0, 0)) is False
    assert tile_at(world, 0, 0) == Tile(2, 0, 0)
    assert not get_game_state(world).changed


def test_move_of_unknown_tile_fails():
    world = create_world(EventBus())
    with pytest.raises(ValueError):
        move_tile(world, 0, 1, Tile(2, 0, 0))


def test_clear_board_resets_tiles_and_score():
    _, world = make_world([
        [2, 2, 0, 0],
        [0, 0, 0, 0],
        [0, 0, 0, 0],
        [0, 0, 0, 2048],
    ])
    state = get_game_state(world)
    state.score = 40
    state.game_over = True
    clear_board(world)
    assert iter_tiles(world) == []
    assert state.score == 0
    assert state.game_over is False


def test_load_values_uses_bottom_row_first():
    values = [
        [2, 0, 0, 0],
        [0, 4, 0, 0],
        [0, 0, 8, 0],
        [0, 0, 0, 16],
    ]
    _, world = make_world(values)
    assert tile_at(world, 0, 0).value == 2
    assert tile_at(world, 3, 3).value == 16
    assert board_values(world) == values


def test_load_values_replaces_existing_tiles():
    _, world = make_world([[2, 2], [2, 2]])
    assert load_values(world, [[0, 0], [0, 4]]) is None
    assert board_values(world) == [[0, 0], [0, 4]]


def test_load_values_rejects_ragged_matrix():
    world = create_world(EventBus(), size=2)
    with pytest.raises(ValueError):
        load_values(world, [[2, 0], [0]])
