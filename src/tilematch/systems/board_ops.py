from __future__ import annotations

import random
from typing import Callable, List, Sequence

from esper import World

from tilematch.components.selection import SelectionState
from tilematch.components.tile import Tile
from tilematch.components.tile_type_registry import TileTypeRegistry
from tilematch.components.tile_types import TileTypes
from tilematch.grid.store import TileStore

TileTypeGenerator = Callable[[], str]

# Redraws allowed when a generated kind would complete a run during initial fill.
MAX_REDRAWS = 20


def get_tile_registry(world: World) -> TileTypes:
    for entity, _ in world.get_component(TileTypeRegistry):
        return world.component_for_entity(entity, TileTypes)
    raise RuntimeError("TileTypes definitions not found")


def get_selection_state(world: World) -> SelectionState:
    for _, state in world.get_component(SelectionState):
        return state
    state = SelectionState()
    world.create_entity(state)
    return state


def tile_type_generator(rng: random.Random, type_names: Sequence[str]) -> TileTypeGenerator:
    """Uniform generator over ``type_names``."""
    choices = list(type_names)
    if not choices:
        raise RuntimeError("No spawnable tile types configured")

    def generate() -> str:
        return rng.choice(choices)

    return generate


def generate_layout(rows: int, cols: int, generator: TileTypeGenerator) -> List[str]:
    """Row-major list of kinds where no three equal kinds line up.

    A kind that would complete a horizontal or vertical triple is redrawn; after
    MAX_REDRAWS the last draw is kept and the caller's board check rejects it.
    """
    layout: List[str] = []
    for row in range(rows):
        for col in range(cols):
            excluded = set()
            if col >= 2 and layout[-1] == layout[-2]:
                excluded.add(layout[-1])
            if row >= 2:
                up1 = layout[(row - 1) * cols + col]
                up2 = layout[(row - 2) * cols + col]
                if up1 == up2:
                    excluded.add(up1)
            type_name = generator()
            for _ in range(MAX_REDRAWS):
                if type_name not in excluded:
                    break
                type_name = generator()
            layout.append(type_name)
    return layout


def refill_hidden_tiles(store: TileStore, generator: TileTypeGenerator) -> List[int]:
    """Spawn a fresh tile into every hidden slot."""
    spawned: List[int] = []
    for index in range(store.size):
        if store.read_tile(index).hidden:
            store.write_tile(index, Tile(generator()))
            spawned.append(index)
    return spawned
