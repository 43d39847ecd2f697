import random

from esper import World

from tilt2048.components.board import Board
from tilt2048.components.game_state import GameState
from tilt2048.constants import BOARD_SIZE
from tilt2048.events.bus import EventBus


def create_world(
    event_bus: EventBus,
    *,
    size: int = BOARD_SIZE,
    rng: random.Random | None = None,
) -> World:
    """Create a world holding an empty SIZE x SIZE board and a zeroed score."""
    if size < 1:
        raise ValueError(f"Board size must be positive, got {size}")
    world = World()
    setattr(world, "random", rng or random.Random())
    setattr(world, "event_bus", event_bus)

    # Board geometry and the score live on the same singleton entity.
    world.create_entity(Board(size=size), GameState())
    return world
