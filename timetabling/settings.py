"""Generator configuration.

All tunables live here as frozen dataclasses with defaults. The relaxation
thresholds and scoring penalties are heuristics; the defaults are the values
the generator has always used, exposed so they can be tuned per school.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple


SECTION_ORDERS = ("input", "most_periods_first")


@dataclass(frozen=True)
class TimeSlotOptions:
    """Wall-clock layout of one school day.

    Attributes:
        start_time: "HH:MM" start of period 1.
        end_time: Optional "HH:MM" end of the school day. Only used to warn
            when the generated day runs past it.
        period_duration: Minutes per period.
        break_duration: Minutes per short break.
        break_after_periods: 1-indexed periods followed by a short break.
        lunch_after_period: 1-indexed period followed by lunch (None = no lunch).
        lunch_duration: Minutes for lunch; None reuses ``break_duration``.
    """

    start_time: str = "08:00"
    end_time: Optional[str] = None
    period_duration: int = 45
    break_duration: int = 10
    break_after_periods: Tuple[int, ...] = (2,)
    lunch_after_period: Optional[int] = None
    lunch_duration: Optional[int] = None


@dataclass(frozen=True)
class RelaxationPolicy:
    # A constraint is relaxed once attempt > threshold (attempts are 0-based).
    adjacent_repeat_after: int = 25
    daily_cap_slack_after: int = 30
    same_day_repeat_after: int = 35

    # How far a teacher may exceed max_per_day once slack is active.
    daily_cap_slack: int = 1


@dataclass(frozen=True)
class GeneratorSettings:
    # Search budget per class-section
    max_attempts: int = 50
    seed: Optional[int] = None

    relaxation: RelaxationPolicy = field(default_factory=RelaxationPolicy)

    # Teacher scoring (lower is better)
    last_period_penalty: float = 1000.0
    weekly_load_weight: float = 0.1
    same_subject_today_penalty: float = 50.0

    # "input" | "most_periods_first"
    section_order: str = "input"

    compute_quality: bool = True
