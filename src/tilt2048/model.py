"""Facade over one game of 2048: a world, its event bus, and the systems that drive it."""
from __future__ import annotations

import random
from typing import Sequence

from tilt2048.components.side import Side
from tilt2048.components.tile import Tile
from tilt2048.constants import BOARD_SIZE, CELL_WIDTH
from tilt2048.events.bus import (
    EventBus,
    EVENT_BOARD_CHANGED,
    EVENT_BOARD_CLEARED,
)
from tilt2048.factories.tiles import place_tile
from tilt2048.systems.board_ops import (
    board_size,
    clear_board,
    get_game_state,
    load_values,
    tile_at,
)
from tilt2048.systems.game_over import GameOverSystem, check_game_over
from tilt2048.systems.tilt_system import TiltSystem
from tilt2048.world import create_world


class Model:
    """State of a game of 2048.

    Column 0, row 0 is the lower-left corner; positions read like (x, y).
    Every call that alters the board sets a dirty flag (see has_changed) and
    emits EVENT_BOARD_CHANGED on the bus so observers can re-render.
    """

    def __init__(
        self,
        size: int = BOARD_SIZE,
        *,
        event_bus: EventBus | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.event_bus = event_bus or EventBus()
        self.world = create_world(self.event_bus, size=size, rng=rng)
        self.tilt_system = TiltSystem(self.world, self.event_bus)
        self.game_over_system = GameOverSystem(self.world, self.event_bus)

    @classmethod
    def from_values(
        cls,
        values: Sequence[Sequence[int]],
        score: int,
        max_score: int,
        game_over: bool,
        *,
        event_bus: EventBus | None = None,
        rng: random.Random | None = None,
    ) -> Model:
        """Rebuild a game from VALUES[row][col] (row 0 at the bottom, 0 for empty).

        The game-over flag is recomputed from the board on every query, so it
        only reads back as given when it agrees with VALUES.
        """
        model = cls(len(values), event_bus=event_bus, rng=rng)
        load_values(model.world, values)
        state = get_game_state(model.world)
        state.score = score
        state.max_score = max_score
        state.game_over = game_over
        state.changed = False
        return model

    def tile(self, col: int, row: int) -> Tile | None:
        return tile_at(self.world, col, row)

    def size(self) -> int:
        return board_size(self.world)

    def score(self) -> int:
        return get_game_state(self.world).score

    def max_score(self) -> int:
        return get_game_state(self.world).max_score

    def game_over(self) -> bool:
        """True if a tile reached the maximum value or no move is left.

        The maximum score catches up with the score whenever the game is seen to be over.
        """
        state = get_game_state(self.world)
        if check_game_over(self.world):
            state.max_score = max(state.score, state.max_score)
        return state.game_over

    def add_tile(self, tile: Tile) -> None:
        """Add TILE to the board. Its cell must be empty."""
        place_tile(self.world, tile)

    def tilt(self, side: Side | str) -> bool:
        """Tilt the board toward SIDE. Return True iff this changes the board."""
        return self.tilt_system.tilt(Side.parse(side))

    def clear(self) -> None:
        """Empty the board and reset the score."""
        clear_board(self.world)
        self.event_bus.emit(EVENT_BOARD_CLEARED)
        self.event_bus.emit(EVENT_BOARD_CHANGED, reason="clear")

    def has_changed(self) -> bool:
        return get_game_state(self.world).changed

    def clear_changed(self) -> None:
        get_game_state(self.world).changed = False

    def __str__(self) -> str:
        size = self.size()
        lines = ["", "["]
        for row in range(size - 1, -1, -1):
            cells = []
            for col in range(size):
                tile = self.tile(col, row)
                if tile is None:
                    cells.append("|" + " " * CELL_WIDTH)
                else:
                    cells.append(f"|{tile.value:{CELL_WIDTH}d}")
            lines.append("".join(cells) + "|")
        over = "over" if self.game_over() else "not over"
        lines.append(f"] {self.score()} (max: {self.max_score()}) (game is {over}) ")
        return "\n".join(lines) + "\n"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Model):
            return NotImplemented
        return str(self) == str(other)

    def __hash__(self) -> int:
        return hash(str(self))
