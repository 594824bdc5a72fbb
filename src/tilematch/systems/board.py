from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from esper import World

from tilematch.constants import GRID_COLS, GRID_ROWS, MAX_LAYOUT_ATTEMPTS
from tilematch.components.active_switch import ActiveSwitch
from tilematch.components.board import Board
from tilematch.components.board_position import BoardPosition
from tilematch.components.tile import Tile, TileType
from tilematch.engine import MatchEngine
from tilematch.events.bus import EventBus
from tilematch.grid.store import WorldTileStore
from tilematch.systems.board_ops import (TileTypeGenerator, generate_layout, get_tile_registry,
                                         refill_hidden_tiles, tile_type_generator)

logger = logging.getLogger(__name__)


class BoardSystem:
    """Owns the board entities and the engine that plays on them.

    ``generator`` supplies tile kinds for the initial fill and, with ``refill``
    enabled, for slots left empty at the top of a column after a resolution.
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        rows: int = GRID_ROWS,
        cols: int = GRID_COLS,
        *,
        generator: Optional[TileTypeGenerator] = None,
        layout: Optional[Sequence[str]] = None,
        refill: bool = False,
        max_attempts: int = MAX_LAYOUT_ATTEMPTS,
    ):
        self.world = world
        self.event_bus = event_bus
        self.refill = refill
        if generator is None:
            registry = get_tile_registry(world)
            generator = tile_type_generator(getattr(world, "random"), registry.spawnable_types())
        self.generator = generator
        # Create a single board entity with Board component
        self.board_entity = self.world.create_entity(Board(rows=rows, cols=cols))
        self._create_slots(rows, cols)
        self.store = WorldTileStore.from_world(world)
        self.engine = MatchEngine(self.store, rows, cols)
        if layout is not None:
            self.load_layout(layout)
        else:
            self._init_board(max_attempts)

    @property
    def rows(self) -> int:
        return self.engine.topology.rows

    @property
    def cols(self) -> int:
        return self.engine.topology.cols

    def _create_slots(self, rows: int, cols: int) -> None:
        for r in range(rows):
            for c in range(cols):
                self.world.create_entity(
                    BoardPosition(row=r, col=c, index=r * cols + c),
                    TileType(type_name=""),
                    ActiveSwitch(active=True),
                )

    def _init_board(self, max_attempts: int) -> None:
        # A board is playable when nothing matches yet and at least one swap would.
        for attempt in range(max_attempts):
            self.load_layout(generate_layout(self.rows, self.cols, self.generator))
            if self.engine.find_all_runs():
                continue
            if not self.engine.find_valid_swaps():
                continue
            logger.debug("Board %dx%d ready after %d attempt(s)", self.rows, self.cols, attempt + 1)
            return
        raise RuntimeError("Unable to build a board without matches and with a valid swap")

    def load_layout(self, layout: Sequence[str]) -> None:
        """Overwrite every slot with visible tiles of the given kinds (row-major)."""
        if len(layout) != self.store.size:
            raise ValueError(f"Layout has {len(layout)} tiles, board has {self.store.size}")
        for index, type_name in enumerate(layout):
            self.store.write_tile(index, Tile(type_name))

    def refill_hidden(self) -> List[int]:
        return refill_hidden_tiles(self.store, self.generator)

    def tile_at(self, row: int, col: int) -> Tile:
        return self.store.read_tile(self.engine.topology.index_of(row, col))

    def get_entity_at(self, row: int, col: int) -> int:
        return self.store.entity_at(self.engine.topology.index_of(row, col))
