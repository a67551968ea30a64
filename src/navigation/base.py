"""
Abstract base classes for navigation systems.

The interaction task only needs fire-and-forget movement: request a goal,
ask whether the agent is still moving, and stop. Navigators hide how the
agent actually gets there.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

import numpy as np

from src.world.entities import Position


@dataclass
class NavigationTarget:
    """Represents a navigation goal."""
    x: float
    y: float
    z: float = 0.0

    @classmethod
    def from_position(cls, position: Position) -> "NavigationTarget":
        return cls(position.x, position.y, position.z)

    def as_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=float)


@dataclass
class NavigationState:
    """Current state of navigation progress."""
    has_goal: bool
    current_target: Optional[NavigationTarget]
    is_moving: bool
    is_complete: bool
    distance_remaining: float = 0.0


class Navigator(ABC):
    """
    Abstract base class for navigation strategies.

    - set_goal(): Define where to go (may be called again with the same goal)
    - update(): Advance the agent one tick, returns its new position
    - stop(): Drop the current goal immediately
    - is_moving: Whether the agent is currently under way
    """

    @abstractmethod
    def set_goal(self, start: Position, goal: Position) -> bool:
        """
        Set the navigation goal.

        Returns:
            True if a valid path/strategy was found, False otherwise
        """
        pass

    @abstractmethod
    def get_current_target(self) -> Optional[NavigationTarget]:
        pass

    @abstractmethod
    def update(self, position: Position, speed: float) -> Position:
        """
        Move from `position` toward the goal for one tick.

        Returns:
            The agent's position after this tick
        """
        pass

    @abstractmethod
    def stop(self) -> None:
        pass

    @property
    @abstractmethod
    def is_moving(self) -> bool:
        pass

    @abstractmethod
    def get_state(self) -> NavigationState:
        pass

    @abstractmethod
    def reset(self) -> None:
        """Reset navigator to initial state."""
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name of this navigation strategy."""
        pass


class DirectNavigator(Navigator):
    """
    Straight-line navigator, no obstacle avoidance.

    Moves `speed` units per update toward the goal and snaps onto it once
    within `arrival_threshold`.
    """

    def __init__(self, arrival_threshold: float = 0.25):
        self._arrival_threshold = arrival_threshold
        self._goal: Optional[NavigationTarget] = None
        self._is_complete = False
        self._distance_remaining = 0.0

    def set_goal(self, start: Position, goal: Position) -> bool:
        self._goal = NavigationTarget.from_position(goal)
        self._distance_remaining = start.distance_to(goal)
        self._is_complete = self._distance_remaining <= self._arrival_threshold
        return True  # Direct navigation always "succeeds" (no pathfinding)

    def get_current_target(self) -> Optional[NavigationTarget]:
        if self._is_complete:
            return None
        return self._goal

    def update(self, position: Position, speed: float) -> Position:
        if self._goal is None or self._is_complete:
            return position

        current = position.as_array()
        delta = self._goal.as_array() - current
        distance = float(np.linalg.norm(delta))

        if distance <= max(speed, self._arrival_threshold):
            self._is_complete = True
            self._distance_remaining = 0.0
            return Position.from_array(self._goal.as_array())

        step = current + delta / distance * speed
        self._distance_remaining = distance - speed
        return Position.from_array(step)

    def stop(self) -> None:
        self._goal = None
        self._is_complete = False
        self._distance_remaining = 0.0

    @property
    def is_moving(self) -> bool:
        return self._goal is not None and not self._is_complete

    def get_state(self) -> NavigationState:
        return NavigationState(
            has_goal=self._goal is not None,
            current_target=self.get_current_target(),
            is_moving=self.is_moving,
            is_complete=self._is_complete,
            distance_remaining=self._distance_remaining,
        )

    def reset(self) -> None:
        self.stop()

    @property
    def name(self) -> str:
        return "DirectNavigator"
