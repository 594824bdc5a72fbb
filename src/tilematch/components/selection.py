from dataclasses import dataclass
from typing import Optional


@dataclass(slots=True)
class SelectionState:
    """Singleton holding the player's current pick.

    ``picked`` is set by the first click, ``target`` by an adjacent second click.
    Both are linear indices and both return to None once the swap is resolved or
    reverted.
    """

    picked: Optional[int] = None
    target: Optional[int] = None

    def clear(self) -> None:
        self.picked = None
        self.target = None
