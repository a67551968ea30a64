"""
Controller module - decision core of the interact-with quest task.

This module consolidates:
- InteractWithTask: per-tick priority state machine
- select_target / WorldQuery: nearest eligible object selection
- Blacklist, ProgressCounter: per-task mutable state
- is_task_done: completion oracle (counter flag + quest log)
- TaskConfig: validated profile configuration
- GameBridge: everything the task needs from the game

Usage:
    from src.controller import InteractWithTask, TaskConfig

Flow:
    GameBridge.enumerate → select_target → decide → GameBridge command
"""

from .interact_task import (
    InteractWithTask,
    TaskAction,
    TaskPhase,
    TaskTimings,
    TickResult,
    DecisionContext,
    DECISION_RULES,
    decide,
    CancellationToken,
)
from .world_query import Candidate, WorldQuery, select_target
from .progress import Blacklist, ProgressCounter
from .completion import is_task_done
from .task_config import (
    TaskConfig,
    ConfigResult,
    ConfigProblem,
    ConfigurationError,
    DEFAULT_COLLECTION_DISTANCE,
)
from .bridge import GameBridge
from .events import Event, EventType, EventQueue

__all__ = [
    # Task
    "InteractWithTask",
    "TaskAction",
    "TaskPhase",
    "TaskTimings",
    "TickResult",
    "DecisionContext",
    "DECISION_RULES",
    "decide",
    "CancellationToken",
    # Selection
    "Candidate",
    "WorldQuery",
    "select_target",
    # State
    "Blacklist",
    "ProgressCounter",
    "is_task_done",
    # Config
    "TaskConfig",
    "ConfigResult",
    "ConfigProblem",
    "ConfigurationError",
    "DEFAULT_COLLECTION_DISTANCE",
    # Game boundary
    "GameBridge",
    # Events
    "Event",
    "EventType",
    "EventQueue",
]
