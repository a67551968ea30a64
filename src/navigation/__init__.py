"""
Navigation module for agent movement.

The interaction task only issues "move toward point" requests and reads a
"currently moving" flag; navigators decide how the agent gets there.

- DirectNavigator: straight line to the goal, no obstacle avoidance

Example usage:
    from src.navigation import DirectNavigator

    navigator = DirectNavigator(arrival_threshold=0.25)
    navigator.set_goal(agent.position, target_position)

    # Each world tick
    agent.position = navigator.update(agent.position, agent.speed)
"""

from .base import (
    Navigator,
    NavigationTarget,
    NavigationState,
    DirectNavigator,
)

__all__ = [
    "Navigator",
    "NavigationTarget",
    "NavigationState",
    "DirectNavigator",
]
