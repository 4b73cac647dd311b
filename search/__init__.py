"""Search engines used by the timetable generator."""

from .restarts import AttemptOutcome, RestartConfig, RestartResult, run_with_restarts

__all__ = ["AttemptOutcome", "RestartConfig", "RestartResult", "run_with_restarts"]
