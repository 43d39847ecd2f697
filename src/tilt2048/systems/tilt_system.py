from __future__ import annotations

import logging
from typing import List, Set, Tuple

from esper import World

from tilt2048.components.side import Side
from tilt2048.components.tile import Tile
from tilt2048.events.bus import (
    EventBus,
    EVENT_BOARD_CHANGED,
    EVENT_TILE_MERGED,
    EVENT_TILT_COMPLETED,
    EVENT_TILT_REQUEST,
)
from tilt2048.systems.board_ops import (
    board_size,
    get_game_state,
    move_tile,
    tile_at,
    viewing_perspective,
)
from tilt2048.systems.game_over import check_game_over

logger = logging.getLogger(__name__)


def highest_empty_row(world: World, col: int) -> int:
    """Topmost empty row of COL in the current perspective, 0 when the column is full."""
    highest = 0
    for row in range(board_size(world)):
        if tile_at(world, col, row) is None:
            highest = row
    return highest


def closest_occupied_row(world: World, col: int, row: int) -> int:
    """Nearest occupied row at or above ROW in COL, the top row when none is."""
    size = board_size(world)
    for candidate in range(row, size):
        if tile_at(world, col, candidate) is not None:
            return candidate
    return size - 1


class TiltSystem:
    """Slides and merges every tile toward one side of the board.

    The scan is written once for tiles moving toward increasing rows; the
    board perspective makes it apply to all four sides.
    """

    def __init__(self, world: World, event_bus: EventBus) -> None:
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_TILT_REQUEST, self.on_tilt_request)

    def on_tilt_request(self, sender, **payload) -> None:
        side = payload.get("side")
        if side is None:
            return
        self.tilt(Side.parse(side))

    def tilt(self, side: Side) -> bool:
        """Tilt the board toward SIDE. Return True iff the board changed."""
        if not isinstance(side, Side):
            raise ValueError(f"Cannot tilt toward {side!r}")
        state = get_game_state(self.world)
        score_before = state.score
        changed = False
        merges: List[Tile] = []
        with viewing_perspective(self.world, side):
            for col in range(board_size(self.world)):
                column_changed, column_merges = self._tilt_column(col)
                changed = changed or column_changed
                merges.extend(column_merges)
        check_game_over(self.world)
        logger.debug(
            "Tilt %s changed=%s score %d -> %d",
            side.name, changed, score_before, state.score,
        )
        for merged in merges:
            self.event_bus.emit(EVENT_TILE_MERGED, tile=merged, points=merged.value)
        self.event_bus.emit(EVENT_TILT_COMPLETED, side=side, changed=changed, score=state.score)
        if changed:
            self.event_bus.emit(EVENT_BOARD_CHANGED, reason="tilt")
        return changed

    def _tilt_column(self, col: int) -> Tuple[bool, List[Tile]]:
        world = self.world
        changed = False
        merges: List[Tile] = []
        upper_tile = None
        just_merged: Set[int] = set()
        empty_row = highest_empty_row(world, col)
        occupied_row = 0

        for row in range(board_size(world) - 1, -1, -1):
            current = tile_at(world, col, row)
            if current is None:
                continue
            if (
                upper_tile is not None
                and upper_tile.value == current.value
                and occupied_row not in just_merged
            ):
                move_tile(world, col, occupied_row, current)
                just_merged.add(occupied_row)
                empty_row = highest_empty_row(world, col)
                changed = True
                merged = tile_at(world, col, occupied_row)
                logger.debug("Merged into %s", merged)
                merges.append(merged)
            elif row < empty_row:
                move_tile(world, col, empty_row, current)
                empty_row = highest_empty_row(world, col)
                changed = True
            occupied_row = closest_occupied_row(world, col, row)
            upper_tile = tile_at(world, col, occupied_row)
        return changed, merges
