from dataclasses import dataclass

@dataclass(slots=True)
class ActiveSwitch:
    """Per-tile occupancy flag.

    active: True if the cell currently holds a visible tile; False once it was cleared
    by a match and has not been refilled.
    """
    active: bool = True
