from __future__ import annotations

from typing import List, Sequence

from tilematch.components.tile import Tile
from tilematch.grid.store import ListTileStore, TileStore


def store_from_rows(rows: Sequence[str]) -> ListTileStore:
    """Build a store from space separated rows; a lowercase kind is a hidden tile."""
    tiles: List[Tile] = []
    for row in rows:
        for token in row.split():
            tiles.append(Tile(token.upper(), hidden=token.islower()))
    return ListTileStore(tiles)


def layout_from_rows(rows: Sequence[str]) -> List[str]:
    return [token for row in rows for token in row.split()]


def render_rows(store: TileStore, cols: int) -> List[str]:
    """Inverse of store_from_rows, drawing hidden tiles as '-'."""
    tokens = []
    for index in range(store.size):
        tile = store.read_tile(index)
        tokens.append('-' if tile.hidden else tile.type_id)
    return [' '.join(tokens[i:i + cols]) for i in range(0, len(tokens), cols)]


class Recorder:
    """Collects event payloads per event name."""

    def __init__(self, bus, *names):
        self.events = {name: [] for name in names}
        for name in names:
            bus.subscribe(name, lambda sender, _name=name, **kw: self.events[_name].append(kw))

    def __getitem__(self, name):
        return self.events[name]
