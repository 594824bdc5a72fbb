from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # Use weak=False to retain strong reference to bound methods so systems not kept in a variable still receive events.
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
# SYSTEM & TIMING
# ============================================================================
EVENT_TICK = "tick"                                # payload: dt=float


# ============================================================================
# INPUT & INTERACTION
# ============================================================================
EVENT_MOUSE_PRESS = "mouse_press"                  # payload: x, y, button
EVENT_TILE_CLICK = "tile_click"                    # payload: row, col


# ============================================================================
# SELECTION & SWAP
# ============================================================================
EVENT_TILE_SELECTED = "tile_selected"              # payload: row, col
EVENT_TILE_DESELECTED = "tile_deselected"          # payload: reason=str
EVENT_TILE_TARGETED = "tile_targeted"              # payload: row, col
EVENT_TILE_SWAP_VALID = "tile_swap_valid"          # payload: src=(r,c), dst=(r,c)
EVENT_TILE_SWAP_INVALID = "tile_swap_invalid"      # payload: src=(r,c), dst=(r,c), delay=float
EVENT_TILE_SWAP_REVERTED = "tile_swap_reverted"    # payload: src=(r,c), dst=(r,c)


# ============================================================================
# MATCH RESOLUTION
# ============================================================================
EVENT_MATCH_FOUND = "match_found"                  # payload: positions=[(r,c),...], size=int
EVENT_MATCH_CLEARED = "match_cleared"              # payload: positions=[(r,c),...], types=[(r,c,type),...]
EVENT_GRAVITY_APPLIED = "gravity_applied"          # payload: moves=[{'from','to','type_name'},...]
EVENT_REFILL_COMPLETED = "refill_completed"        # payload: new_tiles=[(r,c),...]
EVENT_BOARD_SETTLED = "board_settled"              # payload: changes=[TileChange,...]
