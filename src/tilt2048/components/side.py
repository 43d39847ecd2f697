"""Board sides and neighbour offsets."""
from enum import Enum


class Side(Enum):
    """Side of the board a tilt moves tiles toward.

    Each member carries (col0, row0, dcol, drow). Viewed from a side, the
    perspective cell (c, r) maps to the absolute cell returned by col()/row(),
    so that increasing r always moves toward that side. NORTH is the identity.
    """
    NORTH = (0, 0, 0, 1)
    EAST = (0, 1, 1, 0)
    SOUTH = (1, 1, 0, -1)
    WEST = (1, 0, -1, 0)

    def __init__(self, col0: int, row0: int, dcol: int, drow: int) -> None:
        self.col0 = col0
        self.row0 = row0
        self.dcol = dcol
        self.drow = drow

    def col(self, c: int, r: int, size: int) -> int:
        """Absolute column of perspective cell (c, r) on a board of SIZE."""
        return self.col0 * (size - 1) + c * self.drow + r * self.dcol

    def row(self, c: int, r: int, size: int) -> int:
        """Absolute row of perspective cell (c, r) on a board of SIZE."""
        return self.row0 * (size - 1) - c * self.dcol + r * self.drow

    @classmethod
    def parse(cls, value: "Side | str") -> "Side":
        if isinstance(value, Side):
            return value
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError as exc:
                raise ValueError(f"Unknown side '{value}'") from exc
        raise ValueError(f"Unknown side {value!r}")


class Direction(Enum):
    """Orthogonal neighbour offsets as (row, col) in the absolute frame."""
    NORTH = (1, 0)
    SOUTH = (-1, 0)
    EAST = (0, 1)
    WEST = (0, -1)

    def __init__(self, row: int, col: int) -> None:
        self.row = row
        self.col = col
