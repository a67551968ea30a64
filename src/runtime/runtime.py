"""
Runtime loop that drives an InteractWithTask against the simulated World.

Flow per step:
1. Advance the world one tick (navigation moves the agent)
2. Advance the simulated clock
3. Tick the task once with the new time
4. Drain the task's events into the step result
"""
import logging
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List

from src.controller import InteractWithTask, TickResult, Event
from src.world import World

logger = logging.getLogger(__name__)


@dataclass
class RuntimeConfig:
    """Configuration for the runtime loop."""
    ticks_per_second: int = 16
    max_ticks: Optional[int] = None  # None = run until the task is done
    enable_logging: bool = True  # keep per-step history


@dataclass
class StepResult:
    """Result of a single runtime step."""
    tick: int
    time: float
    tick_result: TickResult
    world_state: Dict[str, Any]
    events: List[Event] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tick": self.tick,
            "time": self.time,
            "task": self.tick_result.to_dict(),
            "agent": self.world_state["agent"],
            "events": [e.to_dict() for e in self.events],
        }


@dataclass
class RunSummary:
    ticks: int
    finished: bool
    canceled: bool
    progress: int
    interactions: List[str]
    elapsed: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ticks": self.ticks,
            "finished": self.finished,
            "canceled": self.canceled,
            "progress": self.progress,
            "interactions": list(self.interactions),
            "elapsed": self.elapsed,
        }


class TaskRunner:
    """
    Cooperative scheduler for one task.

    Time is simulated: each step advances the clock by 1 / ticks_per_second,
    so waits inside the task resolve deterministically.

    Usage:
        runner = TaskRunner(task, world)
        summary = runner.run()
    """

    def __init__(
        self,
        task: InteractWithTask,
        world: World,
        config: Optional[RuntimeConfig] = None,
        start_time: float = 0.0,
    ):
        self.config = config or RuntimeConfig()
        self.task = task
        self.world = world
        self._time = start_time
        self._start_time = start_time
        self._steps = 0
        self._step_history: List[StepResult] = []

    @property
    def time(self) -> float:
        return self._time

    @property
    def tick_interval(self) -> float:
        return 1.0 / self.config.ticks_per_second

    def step(self) -> StepResult:
        """Advance world and task by one tick."""
        world_state = self.world.step()
        self._time += self.tick_interval
        self._steps += 1

        tick_result = self.task.tick(now=self._time)
        events = self.task.events.pop_all()
        for event in events:
            self.task.events.record_processed(event)

        result = StepResult(
            tick=self._steps,
            time=self._time,
            tick_result=tick_result,
            world_state=world_state,
            events=events,
        )
        if self.config.enable_logging:
            self._step_history.append(result)
        return result

    def run(self, max_ticks: Optional[int] = None) -> RunSummary:
        """Tick until the task is done, canceled or the tick budget runs out."""
        limit = max_ticks if max_ticks is not None else self.config.max_ticks
        self.task.start()

        while not self.task.is_done:
            if limit is not None and self._steps >= limit:
                logger.warning("tick budget of %d exhausted", limit)
                break
            self.step()

        summary = RunSummary(
            ticks=self._steps,
            finished=self.task.is_done,
            canceled=self.task.cancel_token.is_cancelled,
            progress=self.task.progress.value,
            interactions=list(self.world.interaction_log),
            elapsed=self._time - self._start_time,
        )
        logger.info("run ended after %d ticks: %s", self._steps, summary.to_dict())
        return summary

    def get_step_history(self, last_n: Optional[int] = None) -> List[Dict[str, Any]]:
        """Get step history for analysis."""
        history = self._step_history[-last_n:] if last_n else self._step_history
        return [r.to_dict() for r in history]

    def clear_history(self) -> None:
        """Drop recorded steps and processed task events."""
        self._step_history.clear()
        self.task.events.clear_history()
