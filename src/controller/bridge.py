"""
Boundary between the interaction task and the game.

The task never touches the game directly; everything it needs (object
enumeration, movement, interaction, lag, quest log, status text) goes
through a GameBridge. Implementations wrap a live client or, for demos and
tests, the simulated World (see src.runtime.simulated_bridge).
"""
from abc import ABC, abstractmethod
from typing import List, Optional

from src.world.entities import ObjectCategory, Position
from src.world.quests import QuestStatus
from .world_query import Candidate


class GameBridge(ABC):

    @abstractmethod
    def enumerate(self, category: ObjectCategory) -> List[Candidate]:
        """Current visible objects of one category. No caching across calls."""
        pass

    @abstractmethod
    def request_move_to(self, position: Position) -> None:
        """Fire-and-forget navigation request. Safe to repeat."""
        pass

    @abstractmethod
    def is_moving(self) -> bool:
        pass

    @abstractmethod
    def stop_movement(self) -> None:
        pass

    @abstractmethod
    def interact(self, identity: str) -> bool:
        """
        Trigger the in-game interaction.

        Returns:
            False if the object was no longer valid; not an error
        """
        pass

    @abstractmethod
    def lag_duration(self) -> float:
        """Seconds to wait for the server to settle after a command."""
        pass

    @abstractmethod
    def get_quest_status(self, quest_id: int) -> QuestStatus:
        pass

    def get_quest_name(self, quest_id: int) -> Optional[str]:
        return None

    def report_status_text(self, text: str) -> None:
        pass

    def report_goal_text(self, text: str) -> None:
        pass
