from __future__ import annotations

import logging
from typing import Iterable, List, Set

from tilematch.grid.store import TileStore
from tilematch.grid.topology import Direction, GridTopology
from tilematch.matching.match_info import GravityMove

logger = logging.getLogger(__name__)


class CascadeEngine:
    """Lets visible tiles fall into cleared slots until every column is stable.

    Emptiness bubbles upward one row per step. A bubbling position reaches its
    ground state at the top edge or under a hidden tile; in both cases it stays
    hidden. Holes above are always settled first, so a hidden tile above is
    permanent emptiness.
    """

    def __init__(self, topology: GridTopology):
        self.topology = topology

    def settle(self, store: TileStore, cleared: Iterable[int]) -> List[GravityMove]:
        working: Set[int] = {self.topology.validate(index) for index in cleared}
        moves: List[GravityMove] = []
        passes = 0
        while working:
            passes += 1
            upcoming: Set[int] = set()
            # Top rows first: a hole above is filled or settled before the hole below it.
            for index in sorted(working):
                if self.topology.is_edge(index, Direction.UP):
                    continue
                above = self.topology.neighbor(index, Direction.UP)
                tile_above = store.read_tile(above)
                if tile_above.hidden:
                    continue
                store.write_tile(index, tile_above)
                store.write_tile(above, tile_above.cleared())
                moves.append(GravityMove(source=above, target=index, type_name=tile_above.type_id))
                upcoming.add(above)
            working = upcoming
        if passes:
            logger.debug("Cascade settled after %d passes with %d moves", passes, len(moves))
        return moves
