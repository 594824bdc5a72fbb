"""Index arithmetic over a flat, row-major ``rows x cols`` store."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional, Tuple

from tilematch.errors import UsageError


class Direction(Enum):
    """Cardinal direction of a single step on the grid."""

    LEFT = "left"
    UP = "up"
    RIGHT = "right"
    DOWN = "down"


# Walk order used by the match detector.
DIRECTIONS: Tuple[Direction, ...] = (Direction.LEFT, Direction.UP, Direction.RIGHT, Direction.DOWN)


@dataclass(frozen=True, slots=True)
class GridTopology:
    """Stateless neighbour lookup for a fixed grid shape."""

    rows: int
    cols: int

    def __post_init__(self) -> None:
        if self.rows <= 0 or self.cols <= 0:
            raise UsageError(f"Grid shape must be positive, got {self.rows}x{self.cols}")

    @property
    def size(self) -> int:
        return self.rows * self.cols

    def validate(self, index: int) -> int:
        if not 0 <= index < self.size:
            raise UsageError(f"Index {index} is outside a {self.rows}x{self.cols} grid")
        return index

    def index_of(self, row: int, col: int) -> int:
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            raise UsageError(f"Cell ({row}, {col}) is outside a {self.rows}x{self.cols} grid")
        return row * self.cols + col

    def position_of(self, index: int) -> Tuple[int, int]:
        self.validate(index)
        return divmod(index, self.cols)

    def is_edge(self, index: int, direction: Direction) -> bool:
        """True if one step in ``direction`` from ``index`` leaves the grid."""
        if direction is Direction.LEFT:
            return index % self.cols == 0
        if direction is Direction.RIGHT:
            return (index + 1) % self.cols == 0
        if direction is Direction.UP:
            return index < self.cols
        return index >= self.size - self.cols

    def neighbor(self, index: int, direction: Direction) -> int:
        if self.is_edge(index, direction):
            raise UsageError(f"No {direction.value} neighbour for index {index}")
        return index + self._step(direction)

    def _step(self, direction: Direction) -> int:
        if direction is Direction.LEFT:
            return -1
        if direction is Direction.RIGHT:
            return 1
        if direction is Direction.UP:
            return -self.cols
        return self.cols

    def walk(self, index: int, direction: Direction) -> Iterator[int]:
        """Yield successive indices from ``index`` (exclusive) up to the edge."""
        while not self.is_edge(index, direction):
            index = self.neighbor(index, direction)
            yield index

    def direction_between(self, a: int, b: int) -> Optional[Direction]:
        """Direction of ``b`` as seen from ``a`` when they are adjacent, else None."""
        self.validate(a)
        self.validate(b)
        for direction in DIRECTIONS:
            if not self.is_edge(a, direction) and self.neighbor(a, direction) == b:
                return direction
        return None

    def is_adjacent(self, a: int, b: int) -> bool:
        return self.direction_between(a, b) is not None
