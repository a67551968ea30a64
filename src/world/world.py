import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

import numpy as np

from .entities import Agent, WorldObject, Position, ObjectCategory
from .quests import QuestLog
from .spawner import Spawner

logger = logging.getLogger(__name__)


@dataclass
class WorldConfig:
    agent_speed: float = 0.5
    interact_range: float = 5.0
    arrival_threshold: float = 0.25
    spread: float = 60.0  # half-width of the spawn square around the anchor
    min_separation: float = 3.0


@dataclass
class SpawnGroup:
    """A batch of identical objects for World.populate()."""
    entry_id: int
    count: int
    category: ObjectCategory = ObjectCategory.GAMEOBJECT
    name: str = "object"
    despawn_on_interact: bool = False
    quest_credit: Optional[int] = None


class World:
    """
    Small simulated game world.

    Holds one agent, a list of interactable objects and the agent's quest
    log. Movement is delegated to a Navigator and applied by step().
    """

    def __init__(
        self,
        config: Optional[WorldConfig] = None,
        quest_log: Optional[QuestLog] = None,
        navigator=None,
        agent_position: Optional[Position] = None,
    ):
        self.config = config or WorldConfig()
        self.tick_count: int = 0
        self.quest_log = quest_log or QuestLog()
        if navigator is None:
            # Local import: src.navigation depends on src.world.entities
            from src.navigation.base import DirectNavigator
            navigator = DirectNavigator(
                arrival_threshold=self.config.arrival_threshold
            )
        self.navigator = navigator
        self.agent = Agent(
            position=agent_position or Position(0.0, 0.0, 0.0),
            entity_id="agent",
            speed=self.config.agent_speed,
            interact_range=self.config.interact_range,
        )
        self.objects: List[WorldObject] = []
        self.interaction_log: List[str] = []

    def populate(
        self,
        groups: List[SpawnGroup],
        anchor: Optional[Position] = None,
        seed: Optional[int] = None,
    ) -> None:
        """Spawn object groups around `anchor` (defaults to the agent position)."""
        spawner = Spawner(
            anchor=anchor or self.agent.position,
            spread=self.config.spread,
            min_separation=self.config.min_separation,
            seed=seed,
        )
        positions = [self.agent.position] + [obj.position for obj in self.objects]
        for group in groups:
            spawned = spawner.spawn_group(
                group.count,
                group.entry_id,
                group.category,
                positions,
                name=group.name,
                despawn_on_interact=group.despawn_on_interact,
                quest_credit=group.quest_credit,
            )
            self.objects.extend(spawned)
            positions.extend(obj.position for obj in spawned)

    def add_object(self, obj: WorldObject) -> None:
        self.objects.append(obj)

    def remove_object(self, entity_id: str) -> Optional[WorldObject]:
        obj = self.get_object_by_id(entity_id)
        if obj is not None:
            self.objects.remove(obj)
        return obj

    def get_object_by_id(self, entity_id: str) -> Optional[WorldObject]:
        for obj in self.objects:
            if obj.entity_id == entity_id:
                return obj
        return None

    # =========================================================================
    # Queries
    # =========================================================================

    def distances_from_agent(self, objects: List[WorldObject]) -> np.ndarray:
        if not objects:
            return np.zeros(0, dtype=float)
        positions = np.array([obj.position.as_array() for obj in objects])
        return np.linalg.norm(positions - self.agent.position.as_array(), axis=1)

    def enumerate(self, category: ObjectCategory) -> List[Dict]:
        """
        Snapshot of every visible object of one category.

        Each row carries the distance from the agent and whether the agent
        is close enough to interact.
        """
        objects = [obj for obj in self.objects if obj.category == category]
        distances = self.distances_from_agent(objects)
        rows = []
        for obj, distance in zip(objects, distances):
            row = obj.to_dict()
            row["category"] = obj.category.name.lower()
            row["distance"] = float(distance)
            row["in_range"] = bool(distance <= self.agent.interact_range)
            rows.append(row)
        return rows

    # =========================================================================
    # Actions
    # =========================================================================

    def move_agent_to(self, position: Position) -> bool:
        return self.navigator.set_goal(self.agent.position, position)

    def stop_agent(self) -> None:
        self.navigator.stop()

    @property
    def agent_is_moving(self) -> bool:
        return self.navigator.is_moving

    def interact(self, entity_id: str) -> bool:
        """
        Interact with an object.

        Returns False when the object is gone or out of range; the caller
        is expected to simply look again next tick.
        """
        obj = self.get_object_by_id(entity_id)
        if obj is None:
            logger.debug("interact: %s no longer exists", entity_id)
            return False
        if self.agent.position.distance_to(obj.position) > self.agent.interact_range:
            logger.debug("interact: %s is out of range", entity_id)
            return False

        obj.interactions += 1
        self.interaction_log.append(entity_id)
        if obj.quest_credit is not None:
            self.quest_log.credit(obj.quest_credit)
        if obj.despawn_on_interact:
            self.objects.remove(obj)
        return True

    def step(self) -> Dict:
        """Advance the world one tick."""
        if self.navigator.is_moving:
            self.agent.position = self.navigator.update(
                self.agent.position, self.agent.speed
            )
        self.tick_count += 1
        return self.get_state()

    def get_state(self) -> Dict:
        return {
            "tick": self.tick_count,
            "agent": self.agent.to_dict(),
            "agent_is_moving": self.agent_is_moving,
            "objects": [obj.to_dict() for obj in self.objects],
            "quests": self.quest_log.to_dict(),
        }
