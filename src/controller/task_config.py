"""
Configuration for the interact-with task.

Profiles hand the task a flat attribute dictionary (QuestId, MobId,
NumOfTimes, ObjectType, X, Y, Z, optional CollectionDistance). Validation
collects every problem before giving up, so one diagnostic names all the
bad fields.
"""
import logging
from dataclasses import dataclass, field
from typing import Optional, List, Mapping

from src.world.entities import ObjectCategory, Position

logger = logging.getLogger(__name__)

DEFAULT_COLLECTION_DISTANCE = 100.0


class ConfigurationError(ValueError):
    """Raised when a task is built from an invalid profile."""

    def __init__(self, problems: List["ConfigProblem"]):
        self.problems = problems
        details = "; ".join(str(p) for p in problems)
        super().__init__(f"invalid InteractWith configuration: {details}")


@dataclass(frozen=True)
class ConfigProblem:
    attribute: str
    message: str

    def __str__(self) -> str:
        return f"{self.attribute}: {self.message}"


@dataclass(frozen=True)
class TaskConfig:
    """Immutable settings for one interact-with task."""
    quest_id: int
    entry_id: int  # MobId: template id shared by every copy of the object
    num_of_times: int
    object_category: ObjectCategory
    anchor: Position  # where the objects can be found; not used for selection
    collection_distance: float = DEFAULT_COLLECTION_DISTANCE

    def __post_init__(self):
        if self.quest_id < 0 or self.entry_id < 0:
            raise ValueError("quest_id and entry_id must be unsigned")
        if self.num_of_times < 0:
            raise ValueError("num_of_times must not be negative")
        if self.collection_distance <= 0:
            raise ValueError("collection_distance must be positive")

    @classmethod
    def from_profile_args(cls, args: Mapping[str, str]) -> "ConfigResult":
        """
        Validate profile attributes.

        Returns:
            ConfigResult holding either a TaskConfig or the list of problems
        """
        parser = _AttributeParser(args)

        quest_id = parser.unsigned("QuestId")
        entry_id = parser.unsigned("MobId")
        num_of_times = parser.unsigned("NumOfTimes")
        category = parser.category("ObjectType")
        x = parser.real("X")
        y = parser.real("Y")
        z = parser.real("Z")
        distance = parser.optional_distance("CollectionDistance")

        if parser.problems:
            for problem in parser.problems:
                logger.error("InteractWith profile error: %s", problem)
            return ConfigResult(problems=parser.problems)

        return ConfigResult(config=cls(
            quest_id=quest_id,
            entry_id=entry_id,
            num_of_times=num_of_times,
            object_category=category,
            anchor=Position(x, y, z),
            collection_distance=distance,
        ))


@dataclass
class ConfigResult:
    config: Optional[TaskConfig] = None
    problems: List[ConfigProblem] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.config is not None and not self.problems

    def unwrap(self) -> TaskConfig:
        if not self.ok:
            raise ConfigurationError(self.problems)
        return self.config


class _AttributeParser:
    """Reads typed attributes out of a profile dict, recording failures."""

    def __init__(self, args: Mapping[str, str]):
        self._args = args
        self.problems: List[ConfigProblem] = []

    def _raw(self, name: str) -> Optional[str]:
        value = self._args.get(name)
        if value is None:
            self.problems.append(ConfigProblem(name, "missing required attribute"))
            return None
        return str(value).strip()

    def _fail(self, name: str, raw: str, expected: str) -> None:
        self.problems.append(ConfigProblem(name, f"expected {expected}, got {raw!r}"))

    def unsigned(self, name: str) -> Optional[int]:
        raw = self._raw(name)
        if raw is None:
            return None
        try:
            value = int(raw)
        except ValueError:
            value = -1
        if value < 0:
            self._fail(name, raw, "an unsigned integer")
            return None
        return value

    def real(self, name: str) -> Optional[float]:
        raw = self._raw(name)
        if raw is None:
            return None
        try:
            return float(raw)
        except ValueError:
            self._fail(name, raw, "a number")
            return None

    def category(self, name: str) -> Optional[ObjectCategory]:
        raw = self._raw(name)
        if raw is None:
            return None
        try:
            return ObjectCategory.parse(raw)
        except ValueError:
            self._fail(name, raw, "Npc or Gameobject")
            return None

    def optional_distance(self, name: str) -> float:
        # Missing, unparsable or non-positive falls back to the default
        raw = self._args.get(name)
        if raw is None:
            return DEFAULT_COLLECTION_DISTANCE
        try:
            value = int(str(raw).strip())
        except ValueError:
            return DEFAULT_COLLECTION_DISTANCE
        return float(value) if value > 0 else DEFAULT_COLLECTION_DISTANCE
