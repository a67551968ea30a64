"""GameBridge backed by the simulated World."""
from typing import List, Optional

from src.controller.bridge import GameBridge
from src.controller.world_query import Candidate, WorldQuery
from src.world import World, ObjectCategory, Position, QuestStatus


class SimulatedGameBridge(GameBridge):
    """
    Connects an InteractWithTask to a World.

    Status and goal text are kept on the bridge (latest value plus history)
    so demos can print them and tests can assert on them.
    """

    def __init__(self, world: World, lag_seconds: float = 0.0):
        self.world = world
        self.lag_seconds = lag_seconds
        self.status_text: Optional[str] = None
        self.goal_text: Optional[str] = None
        self.status_history: List[str] = []

    def enumerate(self, category: ObjectCategory) -> List[Candidate]:
        return WorldQuery(self.world.enumerate(category)).candidates()

    def request_move_to(self, position: Position) -> None:
        self.world.move_agent_to(position)

    def is_moving(self) -> bool:
        return self.world.agent_is_moving

    def stop_movement(self) -> None:
        self.world.stop_agent()

    def interact(self, identity: str) -> bool:
        return self.world.interact(identity)

    def lag_duration(self) -> float:
        return self.lag_seconds

    def get_quest_status(self, quest_id: int) -> QuestStatus:
        return self.world.quest_log.status(quest_id)

    def get_quest_name(self, quest_id: int) -> Optional[str]:
        quest = self.world.quest_log.get_quest_by_id(quest_id)
        return quest.name if quest is not None else None

    def report_status_text(self, text: str) -> None:
        self.status_text = text
        self.status_history.append(text)

    def report_goal_text(self, text: str) -> None:
        self.goal_text = text
