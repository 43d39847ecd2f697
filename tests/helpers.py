from __future__ import annotations

from typing import List, Sequence

from esper import World

from tilt2048.events.bus import EventBus
from tilt2048.systems.board_ops import board_size, load_values, tile_at
from tilt2048.world import create_world


def make_world(values: Sequence[Sequence[int]]) -> tuple[EventBus, World]:
    """Build a world from VALUES[row][col], row 0 at the bottom."""
    bus = EventBus()
    world = create_world(bus, size=len(values))
    load_values(world, values)
    return bus, world


def board_values(world: World) -> List[List[int]]:
    """Read the board back as VALUES[row][col] in the absolute frame."""
    size = board_size(world)
    values: List[List[int]] = []
    for row in range(size):
        line = []
        for col in range(size):
            tile = tile_at(world, col, row)
            line.append(tile.value if tile is not None else 0)
        values.append(line)
    return values
