from __future__ import annotations

from typing import Dict, Iterator, List, Optional, Tuple

from tilematch.constants import MIN_RUN_LENGTH
from tilematch.grid.store import TileStore
from tilematch.grid.topology import DIRECTIONS, Direction, GridTopology
from tilematch.matching.match_info import MatchInfo, Run


class MatchDetector:
    """Finds horizontal and vertical runs passing through a single position."""

    def __init__(self, topology: GridTopology, min_run: int = MIN_RUN_LENGTH):
        self.topology = topology
        self.min_run = min_run

    def seek_in_direction(self, store: TileStore, index: int, direction: Direction, type_name: str) -> Iterator[int]:
        """Yield matching positions from nearest to farthest.

        The walk stops at the grid edge or at the first tile that is hidden or of
        another type, even if a matching tile lies further on.
        """
        for candidate in self.topology.walk(index, direction):
            tile = store.read_tile(candidate)
            if tile.hidden or tile.type_id != type_name:
                return
            yield candidate

    def directional_runs(self, store: TileStore, index: int) -> Dict[Direction, List[int]]:
        type_name = store.read_tile(index).type_id
        return {
            direction: list(self.seek_in_direction(store, index, direction, type_name))
            for direction in DIRECTIONS
        }

    def detect_around_position(self, store: TileStore, index: int) -> Optional[MatchInfo]:
        self.topology.validate(index)
        if store.read_tile(index).hidden:
            return None
        runs = self.directional_runs(store, index)
        along_x = self._axis(runs[Direction.LEFT], index, runs[Direction.RIGHT])
        along_y = self._axis(runs[Direction.UP], index, runs[Direction.DOWN])
        if along_x is None and along_y is None:
            return None
        return MatchInfo(along_x, along_y)

    def _axis(self, before: List[int], index: int, after: List[int]) -> Optional[Run]:
        # ``before`` was collected walking away from index, so flip it back to grid order.
        if not before and not after:
            return None
        run = (*reversed(before), index, *after)
        return run if len(run) >= self.min_run else None

    def find_all_runs(self, store: TileStore) -> List[Run]:
        """Every maximal horizontal or vertical run on the board, rows first."""
        rows, cols = self.topology.rows, self.topology.cols
        lines = [[r * cols + c for c in range(cols)] for r in range(rows)]
        lines += [[r * cols + c for r in range(rows)] for c in range(cols)]
        runs: List[Run] = []
        for line in lines:
            run: List[int] = []
            last: Tuple[str, bool] | None = None
            for index in line:
                tile = store.read_tile(index)
                key = (tile.type_id, tile.hidden)
                if not tile.hidden and key == last:
                    run.append(index)
                    continue
                if len(run) >= self.min_run:
                    runs.append(tuple(run))
                run = [] if tile.hidden else [index]
                last = key
            if len(run) >= self.min_run:
                runs.append(tuple(run))
        return runs
