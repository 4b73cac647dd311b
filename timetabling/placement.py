"""Greedy placement of one subject-period for one class-section.

For a single subject instance we look for the first (day, period, teacher)
that satisfies the active constraints:

1. days ordered by how many empty periods the section still has that day
   (most empty first), so load spreads over the week
2. periods of each day tried in random order
3. skip occupied periods and periods that break the current relaxation tier
   (no same subject back-to-back, no same subject twice a day)
4. qualified teachers must be free at that slot and under their daily cap
   (plus the tier's slack)
5. the lowest scoring teacher wins; the slot is reserved in the attempt's
   ledger clone and written into the grid

There is no look-ahead: the first feasible slot wins.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

import random

from .ledger import TeacherAvailability
from .models import PeriodAssignment, SectionGrid, Teacher
from .settings import GeneratorSettings, RelaxationPolicy


@dataclass(frozen=True)
class RelaxationTier:
    """Which soft rules are switched off for a given attempt."""

    allow_adjacent_repeat: bool = False
    allow_same_day_repeat: bool = False
    daily_cap_slack: int = 0

    @property
    def strict(self) -> bool:
        return not (self.allow_adjacent_repeat or self.allow_same_day_repeat or self.daily_cap_slack)

    @classmethod
    def for_attempt(cls, attempt: int, policy: RelaxationPolicy = RelaxationPolicy()) -> "RelaxationTier":
        return cls(
            allow_adjacent_repeat=attempt > policy.adjacent_repeat_after,
            allow_same_day_repeat=attempt > policy.same_day_repeat_after,
            daily_cap_slack=int(policy.daily_cap_slack) if attempt > policy.daily_cap_slack_after else 0,
        )

    def describe(self) -> str:
        if self.strict:
            return "strict"
        parts = []
        if self.allow_adjacent_repeat:
            parts.append("adjacent repeats")
        if self.allow_same_day_repeat:
            parts.append("same-day repeats")
        if self.daily_cap_slack:
            parts.append(f"daily cap +{self.daily_cap_slack}")
        return "relaxed: " + ", ".join(parts)


def _order_days(grid: SectionGrid) -> List[str]:
    # sorted() is stable, so equally empty days keep input order
    return sorted(grid.days, key=lambda d: grid.empty_count(d), reverse=True)


def slot_allowed(grid: SectionGrid, day: str, period: int, subject: str, tier: RelaxationTier) -> bool:
    if grid.is_occupied(day, period):
        return False
    if not tier.allow_adjacent_repeat and grid.would_repeat_adjacent(day, period, subject):
        return False
    if not tier.allow_same_day_repeat and grid.day_has_subject(day, subject):
        return False
    return True


def eligible_teachers(
    qualified: Sequence[str],
    teachers: Dict[str, Teacher],
    ledger: TeacherAvailability,
    day: str,
    period: int,
    tier: RelaxationTier,
) -> List[str]:
    out: List[str] = []
    for name in qualified:
        if not ledger.is_free(name, day, period):
            continue
        cap = teachers[name].max_per_day
        if cap is not None and ledger.daily_count(name, day) + 1 > int(cap) + tier.daily_cap_slack:
            continue
        out.append(name)
    return out


def teacher_score(
    name: str,
    *,
    subject: str,
    day: str,
    period: int,
    grid: SectionGrid,
    teachers: Dict[str, Teacher],
    ledger: TeacherAvailability,
    settings: GeneratorSettings,
) -> float:
    """Lower is better: today's load, last-period preference, weekly load, repeats."""

    score = float(ledger.daily_count(name, day))
    if teachers[name].prefer_no_last_period and period == grid.periods_per_day - 1:
        score += settings.last_period_penalty
    score += ledger.weekly_load(name) * settings.weekly_load_weight
    if grid.teacher_teaches_subject_on(day, subject, name):
        score += settings.same_subject_today_penalty
    return score


def place_subject_period(
    subject: str,
    grid: SectionGrid,
    ledger: TeacherAvailability,
    qualified: Sequence[str],
    teachers: Dict[str, Teacher],
    tier: RelaxationTier,
    rng: random.Random,
    settings: GeneratorSettings = GeneratorSettings(),
) -> Optional[PeriodAssignment]:
    """Place one period of ``subject``; returns the assignment or None if no slot fits.

    Mutates ``grid`` and ``ledger`` only on success.
    """

    if not qualified:
        return None

    for day in _order_days(grid):
        periods = list(range(grid.periods_per_day))
        rng.shuffle(periods)

        for period in periods:
            if not slot_allowed(grid, day, period, subject, tier):
                continue

            candidates = eligible_teachers(qualified, teachers, ledger, day, period, tier)
            if not candidates:
                continue

            chosen = min(
                candidates,
                key=lambda name: teacher_score(
                    name,
                    subject=subject,
                    day=day,
                    period=period,
                    grid=grid,
                    teachers=teachers,
                    ledger=ledger,
                    settings=settings,
                ),
            )

            assignment = PeriodAssignment(subject=subject, teacher=chosen)
            ledger.reserve(chosen, day, period)
            grid.place(day, period, assignment)
            return assignment

    return None
