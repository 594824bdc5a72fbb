from dataclasses import dataclass

@dataclass(slots=True)
class TileType:
    """Per-tile type assignment (no color data).

    Stores only the semantic type_name. Hidden/cleared state is handled by ActiveSwitch.
    Canonical color lookup resides in the singleton entity with TileTypeRegistry + TileTypes.
    """
    type_name: str


@dataclass(frozen=True, slots=True)
class Tile:
    """Value read from or written to a grid slot."""
    type_id: str
    hidden: bool = False

    def cleared(self) -> "Tile":
        return Tile(self.type_id, True)
