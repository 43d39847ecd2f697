from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Tile:
    """Numbered tile at an absolute (col, row) position.

    Tiles never change in place: relocating one swaps the component for a
    copy at the new position, merging two produces a fresh tile.
    """
    value: int
    col: int
    row: int

    def moved_to(self, col: int, row: int) -> Tile:
        return Tile(self.value, col, row)

    def merged_at(self, col: int, row: int) -> Tile:
        return Tile(self.value * 2, col, row)

    def __str__(self) -> str:
        return f"{self.value}@({self.col}, {self.row})"
