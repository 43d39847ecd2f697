from dataclasses import dataclass

from tilt2048.components.side import Side


@dataclass(slots=True)
class Board:
    """Singleton component describing the square grid.

    perspective: side the board is currently viewed from. Position-taking
    board helpers rotate their (col, row) through it; NORTH is the absolute frame.
    """
    size: int
    perspective: Side = Side.NORTH
