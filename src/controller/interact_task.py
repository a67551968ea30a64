"""
InteractWithTask - interact with N nearby objects for a quest.

Each tick the task looks at the nearest eligible object and does exactly one
thing, chosen by the first matching rule in DECISION_RULES:

1. FINISH   - the counter reached the target
2. MOVE     - a candidate exists but is out of interaction range
3. STOP     - a candidate is in range but the agent is still moving
   INTERACT - a candidate is in range and the agent is standing still
4. ADVANCE  - nothing eligible around: credit progress anyway

ADVANCE is a fallback that keeps the task from hanging forever when no
object ever shows up. It also means the counter can finish without a
single real interaction.

Waits (server lag after a stop or interaction, the cooldown after an
interaction) are pending sub-states with a resume time rather than sleeps,
so a shared scheduler is never blocked. While a wait is pending, tick()
returns WAIT and evaluates no rule. An interaction is credited on the tick it
happens; only the settle and cooldown after it are deferred.

Every tick first asks the completion oracle; once the counter is reached or
the quest is no longer active the task finishes without acting.
"""
import logging
import threading
import time
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, List, Callable, Tuple, Dict, Any

from .bridge import GameBridge
from .completion import is_task_done
from .events import Event, EventType, EventQueue
from .progress import Blacklist, ProgressCounter
from .task_config import TaskConfig
from .world_query import Candidate, select_target

logger = logging.getLogger(__name__)


class TaskAction(Enum):
    """What a single tick did."""
    FINISH = auto()
    MOVE = auto()
    STOP = auto()
    INTERACT = auto()
    ADVANCE = auto()
    WAIT = auto()       # a settle/cooldown wait is still pending
    CANCEL = auto()     # cancellation observed this tick
    IDLE = auto()       # task already terminal, nothing to do


class TaskPhase(Enum):
    READY = auto()
    AWAITING_SETTLE = auto()
    AWAITING_COOLDOWN = auto()
    DONE = auto()
    CANCELED = auto()


@dataclass
class TaskTimings:
    cooldown_seconds: float = 3.0  # pause after each interaction


@dataclass
class DecisionContext:
    """Inputs of one decision."""
    progress: int
    required: int
    candidate: Optional[Candidate]
    is_moving: bool


DECISION_RULES: List[Tuple[TaskAction, Callable[[DecisionContext], bool]]] = [
    (TaskAction.FINISH, lambda ctx: ctx.progress >= ctx.required),
    (TaskAction.MOVE, lambda ctx: ctx.candidate is not None and not ctx.candidate.in_range),
    (TaskAction.STOP, lambda ctx: ctx.candidate is not None and ctx.is_moving),
    (TaskAction.INTERACT, lambda ctx: ctx.candidate is not None),
    (TaskAction.ADVANCE, lambda ctx: True),
]


def decide(ctx: DecisionContext) -> TaskAction:
    """Return the action of the first rule whose guard holds."""
    for action, guard in DECISION_RULES:
        if guard(ctx):
            return action
    raise ValueError("no decision rule matched")  # unreachable: ADVANCE always matches


class CancellationToken:
    """Lets a hosting scheduler (possibly on another thread) abort a task."""

    def __init__(self):
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()


@dataclass
class PendingWait:
    phase: TaskPhase
    resume_at: float
    on_resume: Optional[Callable[[float], None]] = None


@dataclass
class TickResult:
    """Outcome of one InteractWithTask.tick() call."""
    tick: int
    action: TaskAction
    phase: TaskPhase
    progress: int
    candidate: Optional[Candidate] = None

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "tick": self.tick,
            "action": self.action.name.lower(),
            "phase": self.phase.name.lower(),
            "progress": self.progress,
        }
        if self.candidate is not None:
            result["candidate"] = self.candidate.identity
        return result


class InteractWithTask:
    """
    Interact with `num_of_times` objects of one entry id, nearest first.

    Usage:
        config = TaskConfig.from_profile_args(profile_args).unwrap()
        task = InteractWithTask(config, bridge)
        task.start()

        while not task.is_done:
            result = task.tick()
            ...
    """

    def __init__(
        self,
        config: TaskConfig,
        bridge: GameBridge,
        timings: Optional[TaskTimings] = None,
        clock: Callable[[], float] = time.monotonic,
        cancel_token: Optional[CancellationToken] = None,
        events: Optional[EventQueue] = None,
    ):
        self.config = config
        self._bridge = bridge
        self.timings = timings or TaskTimings()
        self._clock = clock
        self.cancel_token = cancel_token or CancellationToken()
        self.events = events or EventQueue()

        self.blacklist = Blacklist()
        self.progress = ProgressCounter()

        self._phase = TaskPhase.READY
        self._pending: Optional[PendingWait] = None
        self._done = False
        self._started = False
        self._tick = 0

    # =========================================================================
    # State
    # =========================================================================

    @property
    def phase(self) -> TaskPhase:
        return self._phase

    @property
    def tick_count(self) -> int:
        return self._tick

    @property
    def done_flag(self) -> bool:
        return self._done or self.progress.reached(self.config.num_of_times)

    @property
    def is_done(self) -> bool:
        if self._phase == TaskPhase.CANCELED:
            return True
        status = self._bridge.get_quest_status(self.config.quest_id)
        return is_task_done(self.done_flag, status)

    def get_state(self) -> Dict[str, Any]:
        """Serializable snapshot for debugging."""
        return {
            "quest_id": self.config.quest_id,
            "entry_id": self.config.entry_id,
            "phase": self._phase.name.lower(),
            "progress": self.progress.value,
            "required": self.config.num_of_times,
            "blacklisted": sorted(self.blacklist),
            "tick": self._tick,
        }

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def start(self) -> None:
        """Announce the goal. Called once; later calls are ignored."""
        if self._started:
            return
        self._started = True

        quest_name = self._bridge.get_quest_name(self.config.quest_id)
        if quest_name is not None:
            self._report_goal(
                f"Interacting with Mob Id:{self.config.entry_id} "
                f"{self.config.num_of_times} Times for quest:{quest_name}"
            )
        logger.info(
            "InteractWith started: quest=%s entry=%s times=%s distance=%s",
            self.config.quest_id,
            self.config.entry_id,
            self.config.num_of_times,
            self.config.collection_distance,
        )
        self._emit(EventType.TASK_STARTED, {
            "quest_id": self.config.quest_id,
            "entry_id": self.config.entry_id,
        })

    def cancel(self) -> None:
        self.cancel_token.cancel()

    def tick(self, now: Optional[float] = None) -> TickResult:
        """
        Run one scheduling tick.

        Args:
            now: Current time in seconds; defaults to the task clock

        Returns:
            TickResult describing the single action taken
        """
        now = self._clock() if now is None else now

        if self._phase in (TaskPhase.DONE, TaskPhase.CANCELED):
            return self._result(TaskAction.IDLE)

        self._tick += 1

        if self.cancel_token.is_cancelled:
            self._pending = None
            self._phase = TaskPhase.CANCELED
            logger.info("InteractWith canceled at %s/%s",
                        self.progress.value, self.config.num_of_times)
            self._emit(EventType.TASK_CANCELED, {"progress": self.progress.value})
            return self._result(TaskAction.CANCEL)

        if not self._started:
            self.start()

        if self.is_done:
            # Counter reached or quest no longer active: no further actions
            self._finish()
            return self._result(TaskAction.FINISH)

        if not self._resolve_waits(now):
            return self._result(TaskAction.WAIT)

        candidate = self._current_candidate()
        ctx = DecisionContext(
            progress=self.progress.value,
            required=self.config.num_of_times,
            candidate=candidate,
            is_moving=self._bridge.is_moving(),
        )
        action = decide(ctx)
        logger.debug("tick %d: %s", self._tick, action.name)

        if action == TaskAction.FINISH:
            self._finish()
        elif action == TaskAction.MOVE:
            self._move_toward(candidate)
        elif action == TaskAction.STOP:
            self._stop_movement(candidate, now)
        elif action == TaskAction.INTERACT:
            self._interact(candidate, now)
        else:
            self._advance_without_target()

        return self._result(action, candidate)

    # =========================================================================
    # Actions
    # =========================================================================

    def _current_candidate(self) -> Optional[Candidate]:
        snapshot = self._bridge.enumerate(self.config.object_category)
        candidate = select_target(
            snapshot,
            self.config.entry_id,
            self.config.collection_distance,
            self.blacklist,
            category=self.config.object_category,
        )
        if candidate is not None:
            logger.debug("selected %s at %.1f", candidate.describe(), candidate.distance)
        return candidate

    def _finish(self) -> None:
        self._pending = None
        self._done = True
        self._phase = TaskPhase.DONE
        logger.info("InteractWith finished: %s interactions", self.progress.value)
        self._emit(EventType.TASK_COMPLETED, {"progress": self.progress.value})

    def _move_toward(self, candidate: Candidate) -> None:
        self._report_status(f"Moving to interact with - {candidate.name}")
        self._bridge.request_move_to(candidate.position)
        self._emit(EventType.MOVE_REQUESTED, {
            "target_id": candidate.identity,
            "position": candidate.position.to_dict(),
            "distance": candidate.distance,
        })

    def _stop_movement(self, candidate: Candidate, now: float) -> None:
        self._report_status(f"Stopping to interact with - {candidate.name}")
        self._bridge.stop_movement()
        self._emit(EventType.MOVEMENT_STOPPED, {"target_id": candidate.identity})
        self._wait(TaskPhase.AWAITING_SETTLE, now, self._bridge.lag_duration())
        self._resolve_waits(now)

    def _interact(self, candidate: Candidate, now: float) -> None:
        self._report_status(f"Interacting with - {candidate.name}")
        accepted = self._bridge.interact(candidate.identity)
        if not accepted:
            # Gone or moved out of range since selection; still blacklisted
            logger.debug("interaction with %s was not accepted", candidate.identity)
        self.blacklist.add(candidate.identity)
        # Credit belongs to the interaction; only the pauses after it are deferred
        self.progress.increment()
        self._emit(EventType.INTERACTED, {
            "target_id": candidate.identity,
            "accepted": accepted,
            "progress": self.progress.value,
        })
        self._wait(
            TaskPhase.AWAITING_SETTLE,
            now,
            self._bridge.lag_duration(),
            on_resume=self._start_cooldown,
        )
        self._resolve_waits(now)

    def _start_cooldown(self, resumed_at: float) -> None:
        self._wait(TaskPhase.AWAITING_COOLDOWN, resumed_at, self.timings.cooldown_seconds)

    def _advance_without_target(self) -> None:
        self.progress.increment()
        self._emit(EventType.PROGRESS_ADVANCED, {"progress": self.progress.value})

    # =========================================================================
    # Waits
    # =========================================================================

    def _wait(
        self,
        phase: TaskPhase,
        now: float,
        duration: float,
        on_resume: Optional[Callable[[float], None]] = None,
    ) -> None:
        self._pending = PendingWait(phase, now + max(0.0, duration), on_resume)
        self._phase = phase

    def _resolve_waits(self, now: float) -> bool:
        """
        Complete every wait whose resume time has passed.

        A resumed wait may schedule the next one (settle -> cooldown), which
        is resolved from its own resume time, not from `now`.

        Returns:
            True if nothing is pending any more
        """
        while self._pending is not None and now >= self._pending.resume_at:
            pending = self._pending
            self._pending = None
            self._phase = TaskPhase.READY
            if pending.on_resume is not None:
                pending.on_resume(pending.resume_at)
        return self._pending is None

    # =========================================================================
    # Helpers
    # =========================================================================

    def _result(self, action: TaskAction, candidate: Optional[Candidate] = None) -> TickResult:
        return TickResult(
            tick=self._tick,
            action=action,
            phase=self._phase,
            progress=self.progress.value,
            candidate=candidate,
        )

    def _emit(self, event_type: EventType, data: Dict[str, Any]) -> None:
        self.events.push(Event(event_type=event_type, tick=self._tick, data=data))

    def _report_status(self, text: str) -> None:
        try:
            self._bridge.report_status_text(text)
        except Exception:
            logger.warning("status text sink failed", exc_info=True)

    def _report_goal(self, text: str) -> None:
        try:
            self._bridge.report_goal_text(text)
        except Exception:
            logger.warning("goal text sink failed", exc_info=True)
