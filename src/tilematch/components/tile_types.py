from dataclasses import dataclass, field
from typing import Dict, Iterable, Tuple, List

@dataclass(slots=True)
class TileTypes:
    """Canonical tile type definitions stored on a single entity.

    ``types`` maps each kind to the colour the presenter draws it with; ``spawnable``
    is the ordered subset the tile generator may choose from.
    """
    types: Dict[str, Tuple[int,int,int]]
    spawnable: List[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.spawnable:
            self.spawnable = self._known(self.spawnable) or list(self.types.keys())
        else:
            self.spawnable = list(self.types.keys())

    def _known(self, type_names: Iterable[str]) -> List[str]:
        # Preserve order while filtering unknown and repeated names.
        seen: set[str] = set()
        filtered: List[str] = []
        for name in type_names:
            if name in self.types and name not in seen:
                filtered.append(name)
                seen.add(name)
        return filtered

    def color_for(self, type_name: str) -> Tuple[int,int,int]:
        return self.types[type_name]

    def spawnable_types(self) -> List[str]:
        return list(self.spawnable)

    def defined_types(self) -> List[str]:
        return list(self.types.keys())

    def set_spawnable(self, type_names: Iterable[str]) -> None:
        self.spawnable = self._known(type_names) or list(self.types.keys())
