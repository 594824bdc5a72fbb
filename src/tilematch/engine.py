"""Swap evaluation, resolution and revert over a tile store."""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from tilematch.constants import MIN_RUN_LENGTH
from tilematch.errors import UsageError
from tilematch.grid.store import ListTileStore, TileStore, snapshot, swap_tiles
from tilematch.grid.topology import Direction, GridTopology
from tilematch.matching.cascade import CascadeEngine
from tilematch.matching.combo import ComboResolver
from tilematch.matching.detector import MatchDetector
from tilematch.matching.match_info import ComboMatchInfo, GravityMove, Run, SwapResult, TileChange

logger = logging.getLogger(__name__)


class MatchEngine:
    def __init__(self, store: TileStore, rows: int, cols: int, *, min_run: int = MIN_RUN_LENGTH):
        self.topology = GridTopology(rows, cols)
        if store.size != self.topology.size:
            raise UsageError(f"Store holds {store.size} tiles, expected {self.topology.size}")
        self.store = store
        self.detector = MatchDetector(self.topology, min_run)
        self.resolver = ComboResolver()
        self.cascade = CascadeEngine(self.topology)
        self.last_moves: List[GravityMove] = []

    def attempt_swap(self, a: Optional[int], b: Optional[int]) -> SwapResult:
        """Swap two tiles and report whether the swap produced a combo.

        Non-adjacent pairs are rejected without touching storage. An adjacent swap
        that matches nothing stays applied; the caller reverts it with revert_swap.
        """
        if a is None or b is None:
            raise UsageError("Tile swapping failed: at least one of the two positions is not set")
        if not self.topology.is_adjacent(a, b):
            logger.debug("Rejected swap %s <-> %s: not adjacent", a, b)
            return SwapResult(accepted=False)
        swap_tiles(self.store, a, b)
        combo = self.evaluate(a, b)
        logger.debug("Swap %s <-> %s %s", a, b, "matched" if combo else "matched nothing")
        return SwapResult(accepted=combo is not None, combo=combo, swapped=True)

    def evaluate(self, a: int, b: int) -> Optional[ComboMatchInfo]:
        return self.resolver.resolve(
            self.detector.detect_around_position(self.store, a),
            self.detector.detect_around_position(self.store, b),
        )

    def resolve_combo(self, combo: ComboMatchInfo) -> List[TileChange]:
        """Clear the combo, settle the board and return the slots that changed."""
        before = snapshot(self.store)
        cleared = self.resolver.mark_cleared(self.store, combo)
        self.last_moves = self.cascade.settle(self.store, cleared)
        changes = []
        for index, tile in enumerate(snapshot(self.store)):
            if tile != before[index]:
                changes.append(TileChange(index, tile.type_id, tile.hidden))
        return changes

    def revert_swap(self, a: Optional[int], b: Optional[int]) -> None:
        if a is None or b is None:
            raise UsageError("Tile swap revert failed: at least one of the two positions is not set")
        self.topology.validate(a)
        self.topology.validate(b)
        swap_tiles(self.store, a, b)

    def find_all_runs(self) -> List[Run]:
        return self.detector.find_all_runs(self.store)

    def find_valid_swaps(self) -> List[Tuple[int, int]]:
        """Adjacent pairs whose swap would produce a combo; the board is left untouched."""
        scratch = MatchEngine(ListTileStore(snapshot(self.store)), self.topology.rows, self.topology.cols,
                              min_run=self.detector.min_run)
        swaps: List[Tuple[int, int]] = []
        for index in range(self.topology.size):
            if scratch.store.read_tile(index).hidden:
                continue
            for neighbor in scratch._forward_neighbors(index):
                if scratch.store.read_tile(neighbor).hidden:
                    continue
                swap_tiles(scratch.store, index, neighbor)
                if scratch.evaluate(index, neighbor) is not None:
                    swaps.append((index, neighbor))
                swap_tiles(scratch.store, index, neighbor)
        return swaps

    def _forward_neighbors(self, index: int) -> List[int]:
        return [self.topology.neighbor(index, d) for d in (Direction.RIGHT, Direction.DOWN)
                if not self.topology.is_edge(index, d)]
