from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, NamedTuple, Optional, Tuple

Run = Tuple[int, ...]


@dataclass(frozen=True, slots=True)
class MatchInfo:
    """Runs found around one position.

    Each axis is ordered from one extreme to the other (left to right, top to
    bottom) and is None unless it holds a valid run.
    """

    along_x: Optional[Run] = None
    along_y: Optional[Run] = None

    def positions(self) -> Iterator[int]:
        """Every matched index once; the centre is shared by both axes."""
        seen = set()
        for run in (self.along_x, self.along_y):
            for index in run or ():
                if index not in seen:
                    seen.add(index)
                    yield index


@dataclass(frozen=True, slots=True)
class ComboMatchInfo:
    """Deduplicated union of the matches around both tiles of a swap."""

    first: Optional[MatchInfo]
    second: Optional[MatchInfo]
    sorted_positions: Tuple[int, ...]

    def __len__(self) -> int:
        return len(self.sorted_positions)

    def __contains__(self, index: object) -> bool:
        return index in self.sorted_positions


@dataclass(frozen=True, slots=True)
class SwapResult:
    accepted: bool
    combo: Optional[ComboMatchInfo] = None
    # True when storage was changed and the caller owes a revert on rejection.
    swapped: bool = False


@dataclass(slots=True)
class GravityMove:
    source: int
    target: int
    type_name: str


class TileChange(NamedTuple):
    """A slot whose content differs after a resolution."""
    position: int
    type_name: str
    hidden: bool
