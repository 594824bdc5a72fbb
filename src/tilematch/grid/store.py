"""Tile storage behind linear indices.

The engine only ever talks to a :class:`TileStore`. ``ListTileStore`` keeps tiles in
a plain list; ``WorldTileStore`` reads and writes the esper entities that make up
the playable board.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Protocol, Sequence

from esper import World

from tilematch.components.active_switch import ActiveSwitch
from tilematch.components.board_position import BoardPosition
from tilematch.components.tile import Tile, TileType
from tilematch.errors import UsageError


class TileStore(Protocol):
    size: int

    def read_tile(self, index: int) -> Tile: ...

    def write_tile(self, index: int, tile: Tile) -> None: ...


class ListTileStore:
    """Row-major in-memory store."""

    def __init__(self, tiles: Iterable[Tile]):
        self._tiles: List[Tile] = list(tiles)
        self.size = len(self._tiles)

    @classmethod
    def from_types(cls, type_ids: Sequence[str]) -> "ListTileStore":
        return cls(Tile(type_id) for type_id in type_ids)

    def read_tile(self, index: int) -> Tile:
        self._check(index)
        return self._tiles[index]

    def write_tile(self, index: int, tile: Tile) -> None:
        self._check(index)
        self._tiles[index] = tile

    def _check(self, index: int) -> None:
        if not 0 <= index < self.size:
            raise UsageError(f"Index {index} is outside a store of {self.size} tiles")


class WorldTileStore:
    """Store backed by one esper entity per grid slot.

    Each slot entity carries BoardPosition, TileType and ActiveSwitch; a hidden tile is
    a slot whose switch is off.
    """

    def __init__(self, world: World, entities: Dict[int, int]):
        self.world = world
        self._entities = entities
        self.size = len(entities)

    @classmethod
    def from_world(cls, world: World) -> "WorldTileStore":
        entities = {pos.index: ent for ent, pos in world.get_component(BoardPosition)}
        return cls(world, entities)

    def entity_at(self, index: int) -> int:
        try:
            return self._entities[index]
        except KeyError:
            raise UsageError(f"No board slot at index {index}") from None

    def read_tile(self, index: int) -> Tile:
        ent = self.entity_at(index)
        tile_type = self.world.component_for_entity(ent, TileType)
        switch = self.world.component_for_entity(ent, ActiveSwitch)
        return Tile(tile_type.type_name, hidden=not switch.active)

    def write_tile(self, index: int, tile: Tile) -> None:
        ent = self.entity_at(index)
        self.world.component_for_entity(ent, TileType).type_name = tile.type_id
        self.world.component_for_entity(ent, ActiveSwitch).active = not tile.hidden


def swap_tiles(store: TileStore, a: int, b: int) -> None:
    """Exchange the full content of two slots."""
    tile_a = store.read_tile(a)
    store.write_tile(a, store.read_tile(b))
    store.write_tile(b, tile_a)


def snapshot(store: TileStore) -> List[Tile]:
    return [store.read_tile(index) for index in range(store.size)]
