from .entities import ObjectCategory, Position, Entity, Agent, WorldObject
from .quests import Quest, QuestLog, QuestStatus
from .spawner import Spawner
from .world import World, WorldConfig, SpawnGroup

__all__ = [
    "ObjectCategory",
    "Position",
    "Entity",
    "Agent",
    "WorldObject",
    "Quest",
    "QuestLog",
    "QuestStatus",
    "Spawner",
    "World",
    "WorldConfig",
    "SpawnGroup",
]
