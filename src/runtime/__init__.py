from .runtime import TaskRunner, RuntimeConfig, StepResult, RunSummary
from .simulated_bridge import SimulatedGameBridge

__all__ = [
    "TaskRunner",
    "RuntimeConfig",
    "StepResult",
    "RunSummary",
    "SimulatedGameBridge",
]
