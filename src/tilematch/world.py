import random
from typing import Dict, Iterable, Optional, Tuple

from esper import World
from tilematch.events.bus import EventBus
from tilematch.constants import DEFAULT_TILE_TYPES
from tilematch.components.selection import SelectionState
from tilematch.components.tile_type_registry import TileTypeRegistry
from tilematch.components.tile_types import TileTypes


def create_world(
    event_bus: EventBus,
    *,
    tile_types: Optional[Dict[str, Tuple[int, int, int]]] = None,
    spawnable: Optional[Iterable[str]] = None,
    rng: random.Random | None = None,
) -> World:
    """Create the world holding game-wide singletons.

    The board itself is added by BoardSystem, which owns the grid shape.
    """
    world = World()
    setattr(world, "random", rng or random.Random())

    # Per-game selection state (picked/target positions).
    world.create_entity(SelectionState())

    # Create single registry entity with canonical types
    world.create_entity(
        TileTypeRegistry(),
        TileTypes(
            types=dict(tile_types or DEFAULT_TILE_TYPES),
            spawnable=list(spawnable or []),
        ),
    )
    return world
