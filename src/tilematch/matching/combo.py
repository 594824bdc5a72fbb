from __future__ import annotations

import logging
from typing import List, Optional

from tilematch.grid.store import TileStore
from tilematch.matching.match_info import ComboMatchInfo, MatchInfo

logger = logging.getLogger(__name__)


class ComboResolver:
    """Merges the matches found around both swapped tiles into one combo."""

    def resolve(self, first: Optional[MatchInfo], second: Optional[MatchInfo]) -> Optional[ComboMatchInfo]:
        if first is None and second is None:
            return None
        positions = set()
        for info in (first, second):
            if info is not None:
                positions.update(info.positions())
        combo = ComboMatchInfo(first, second, tuple(sorted(positions)))
        logger.debug("Combo of %d tiles: %s", len(combo), combo.sorted_positions)
        return combo

    def mark_cleared(self, store: TileStore, combo: ComboMatchInfo) -> List[int]:
        """Hide every tile of the combo; returns the positions in document order."""
        for index in combo.sorted_positions:
            store.write_tile(index, store.read_tile(index).cleared())
        return list(combo.sorted_positions)
