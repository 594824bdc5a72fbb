from dataclasses import dataclass

@dataclass(slots=True)
class BoardPosition:
    """Grid slot of a tile entity. ``index`` is the row-major linear index."""
    row: int
    col: int
    index: int
