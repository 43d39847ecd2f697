"""Game state resource stored on the board entity."""
from dataclasses import dataclass


@dataclass
class GameState:
    """Running score plus the cached game-over flag.

    max_score only moves when the game is observed to be over.
    changed is a dirty flag for external observers that re-render.
    """
    score: int = 0
    max_score: int = 0
    game_over: bool = False
    changed: bool = False
