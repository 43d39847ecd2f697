from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # Strong references so systems not kept in a variable still receive events.
        sig.connect(fn, weak=False)

    def unsubscribe(self, name: str, fn):
        sig = self._signals.get(name)
        if sig:
            sig.disconnect(fn)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# PLAYER MOVES
# ============================================================================
EVENT_TILT_REQUEST = "tilt_request"          # payload: side=Side
EVENT_TILT_COMPLETED = "tilt_completed"      # payload: side=Side, changed=bool, score=int


# ============================================================================
# TILE & BOARD MECHANICS
# ============================================================================
EVENT_TILE_ADDED = "tile_added"              # payload: tile=Tile
EVENT_TILE_MERGED = "tile_merged"            # payload: tile=Tile (the merged result), points=int
EVENT_BOARD_CHANGED = "board_changed"        # payload: reason=str
EVENT_BOARD_CLEARED = "board_cleared"        # payload: (none)


# ============================================================================
# GAME FLOW
# ============================================================================
EVENT_GAME_OVER = "game_over"                # payload: score=int, max_score=int, reason=str
