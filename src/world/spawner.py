import random
from typing import List, Optional

from .entities import Position, WorldObject, ObjectCategory


class Spawner:
    """Places interactable objects around an anchor point."""

    def __init__(
        self,
        anchor: Optional[Position] = None,
        spread: float = 60.0,
        min_separation: float = 3.0,
        seed: Optional[int] = None,
    ):
        self.anchor = anchor or Position(0.0, 0.0, 0.0)
        self.spread = spread
        self.min_separation = min_separation
        self.rng = random.Random(seed)

    def _random_position(self) -> Position:
        x = self.anchor.x + self.rng.uniform(-self.spread, self.spread)
        y = self.anchor.y + self.rng.uniform(-self.spread, self.spread)
        return Position(x, y, self.anchor.z)

    def _is_valid_position(
        self, pos: Position, existing: List[Position]
    ) -> bool:
        for other in existing:
            if pos.distance_to(other) < self.min_separation:
                return False
        return True

    def _find_valid_position(
        self, existing: List[Position], max_attempts: int = 100
    ) -> Position:
        for _ in range(max_attempts):
            pos = self._random_position()
            if self._is_valid_position(pos, existing):
                return pos
        raise RuntimeError(
            f"Could not find valid position after {max_attempts} attempts. "
            f"Try reducing min_separation or number of objects."
        )

    def spawn_object(
        self,
        object_id: str,
        entry_id: int,
        category: ObjectCategory,
        existing_positions: List[Position],
        name: str = "object",
        despawn_on_interact: bool = False,
        quest_credit: Optional[int] = None,
    ) -> WorldObject:
        pos = self._find_valid_position(existing_positions)
        return WorldObject(
            position=pos,
            entity_id=object_id,
            entry_id=entry_id,
            category=category,
            name=name,
            despawn_on_interact=despawn_on_interact,
            quest_credit=quest_credit,
        )

    def spawn_group(
        self,
        count: int,
        entry_id: int,
        category: ObjectCategory,
        existing_positions: List[Position],
        name: str = "object",
        despawn_on_interact: bool = False,
        quest_credit: Optional[int] = None,
        id_prefix: str = "obj",
    ) -> List[WorldObject]:
        """Spawn `count` copies of one object template."""
        positions = list(existing_positions)
        objects: List[WorldObject] = []
        for i in range(count):
            obj = self.spawn_object(
                f"{id_prefix}_{entry_id}_{i}",
                entry_id,
                category,
                positions,
                name=name,
                despawn_on_interact=despawn_on_interact,
                quest_credit=quest_credit,
            )
            objects.append(obj)
            positions.append(obj.position)
        return objects
