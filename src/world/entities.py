from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Tuple

import numpy as np


class ObjectCategory(Enum):
    """Kinds of world objects the agent can interact with."""
    NPC = auto()
    GAMEOBJECT = auto()

    @classmethod
    def parse(cls, value: str) -> "ObjectCategory":
        """Case-insensitive lookup ("Npc", "gameobject", ...)."""
        try:
            return cls[value.strip().upper()]
        except KeyError:
            raise ValueError(f"unknown object category: {value!r}") from None


@dataclass
class Position:
    x: float
    y: float
    z: float = 0.0

    def as_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=float)

    @classmethod
    def from_array(cls, arr: np.ndarray) -> "Position":
        return cls(float(arr[0]), float(arr[1]), float(arr[2]))

    def distance_to(self, other: "Position") -> float:
        return float(np.linalg.norm(self.as_array() - other.as_array()))

    def to_tuple(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.z)

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y, "z": self.z}


@dataclass
class Entity:
    position: Position
    entity_id: str

    def to_dict(self) -> dict:
        return {
            "entity_id": self.entity_id,
            "position": self.position.to_dict(),
        }


@dataclass
class Agent(Entity):
    speed: float = 0.5  # world units per tick
    interact_range: float = 5.0

    def to_dict(self) -> dict:
        base = super().to_dict()
        base["type"] = "agent"
        base["speed"] = self.speed
        base["interact_range"] = self.interact_range
        return base


@dataclass
class WorldObject(Entity):
    """
    Something the agent can interact with.

    `entry_id` is the shared template id (what a profile calls MobId);
    `entity_id` is unique per spawned instance.
    """
    entry_id: int = 0
    category: ObjectCategory = ObjectCategory.GAMEOBJECT
    name: str = "object"
    despawn_on_interact: bool = False
    interactions: int = 0
    quest_credit: Optional[int] = None  # quest id credited per interaction

    def to_dict(self) -> dict:
        base = super().to_dict()
        base["type"] = self.category.name.lower()
        base["entry_id"] = self.entry_id
        base["name"] = self.name
        base["interactions"] = self.interactions
        return base
