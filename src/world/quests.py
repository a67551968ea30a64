"""
Quest log for the simulated world.

A quest is ACTIVE until its interaction objective is met, COMPLETED after
that, and NOT_FOUND once it has been turned in (removed from the log) or
was never picked up.
"""
from dataclasses import dataclass
from enum import Enum, auto
from typing import Dict, List, Optional


class QuestStatus(Enum):
    ACTIVE = auto()
    COMPLETED = auto()
    NOT_FOUND = auto()


@dataclass
class Quest:
    quest_id: int
    name: str
    required: int = 1  # interactions needed to complete the objective
    progress: int = 0

    @property
    def is_completed(self) -> bool:
        return self.progress >= self.required

    def to_dict(self) -> dict:
        return {
            "quest_id": self.quest_id,
            "name": self.name,
            "progress": self.progress,
            "required": self.required,
            "is_completed": self.is_completed,
        }


class QuestLog:
    def __init__(self, quests: Optional[List[Quest]] = None):
        self._quests: Dict[int, Quest] = {}
        for quest in quests or []:
            self.add(quest)

    def add(self, quest: Quest) -> None:
        self._quests[quest.quest_id] = quest

    def get_quest_by_id(self, quest_id: int) -> Optional[Quest]:
        return self._quests.get(quest_id)

    def status(self, quest_id: int) -> QuestStatus:
        quest = self._quests.get(quest_id)
        if quest is None:
            return QuestStatus.NOT_FOUND
        if quest.is_completed:
            return QuestStatus.COMPLETED
        return QuestStatus.ACTIVE

    def credit(self, quest_id: int, amount: int = 1) -> None:
        """Advance a quest objective; unknown quests are ignored."""
        quest = self._quests.get(quest_id)
        if quest is not None and not quest.is_completed:
            quest.progress = min(quest.required, quest.progress + amount)

    def turn_in(self, quest_id: int) -> Optional[Quest]:
        return self._quests.pop(quest_id, None)

    def to_dict(self) -> dict:
        return {qid: q.to_dict() for qid, q in self._quests.items()}
