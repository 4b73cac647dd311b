"""Schedule one class-section against the shared teacher ledger.

Each attempt:

- clones the canonical ledger
- builds a fresh, empty grid for the section
- expands the section's subjects into one entry per weekly period and
  shuffles that list
- places every entry with the greedy heuristic under the attempt's
  relaxation tier

The first attempt that places every entry is committed: its ledger clone is
merged into the canonical ledger and its grid becomes the section's
timetable. A failed attempt is discarded wholesale, so nothing it reserved
survives. After ``max_attempts`` failures the section is exhausted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import logging
import random

from search import AttemptOutcome, RestartConfig, run_with_restarts

from .ledger import TeacherAvailability
from .models import ClassSection, SectionGrid, Teacher, expand_subject_periods
from .placement import RelaxationTier, place_subject_period
from .settings import GeneratorSettings


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SectionFailure:
    """Why the last attempt for a section got stuck."""

    class_name: str
    section: str
    subject: Optional[str]
    qualified_teachers: Tuple[str, ...] = ()
    empty_slots_per_day: Dict[str, int] = field(default_factory=dict)
    placed: int = 0
    required: int = 0
    attempts: int = 0

    def describe(self) -> str:
        if self.subject is None:
            return f"Class {self.class_name} section {self.section}: no periods could be placed"
        teachers = ", ".join(self.qualified_teachers) or "none"
        empty = ", ".join(f"{d}={n}" for d, n in self.empty_slots_per_day.items())
        return (
            f"Class {self.class_name} section {self.section}: could not place {self.subject} "
            f"({self.placed}/{self.required} periods placed; qualified teachers: {teachers}; "
            f"empty slots: {empty})"
        )


@dataclass(frozen=True)
class SectionReport:
    class_name: str
    section: str
    attempts: int
    tier: RelaxationTier


@dataclass
class _AttemptState:
    grid: SectionGrid
    ledger: TeacherAvailability
    tier: RelaxationTier


@dataclass
class SectionOutcome:
    grid: Optional[SectionGrid]
    report: Optional[SectionReport] = None
    failure: Optional[SectionFailure] = None

    @property
    def committed(self) -> bool:
        return self.grid is not None


def schedule_section(
    class_section: ClassSection,
    section: str,
    ledger: TeacherAvailability,
    teachers: Dict[str, Teacher],
    subject_teachers: Dict[str, Tuple[str, ...]],
    settings: GeneratorSettings,
    rng: random.Random,
) -> SectionOutcome:
    """Try to fill one class-section; commit into ``ledger`` only on success."""

    days = ledger.days
    periods_per_day = ledger.periods_per_day
    required = expand_subject_periods(class_section)

    def attempt(attempt_idx: int, rng: random.Random) -> AttemptOutcome[_AttemptState]:
        tier = RelaxationTier.for_attempt(attempt_idx, settings.relaxation)
        trial = ledger.clone()
        grid = SectionGrid(days=days, periods_per_day=periods_per_day)

        order: List[str] = list(required)
        rng.shuffle(order)

        for placed, subject in enumerate(order):
            qualified = subject_teachers.get(subject, ())
            ok = place_subject_period(subject, grid, trial, qualified, teachers, tier, rng, settings)
            if ok is None:
                return AttemptOutcome.failed(
                    SectionFailure(
                        class_name=class_section.name,
                        section=section,
                        subject=subject,
                        qualified_teachers=tuple(qualified),
                        empty_slots_per_day={d: grid.empty_count(d) for d in days},
                        placed=placed,
                        required=len(order),
                        attempts=attempt_idx + 1,
                    )
                )

        return AttemptOutcome.succeeded(_AttemptState(grid=grid, ledger=trial, tier=tier))

    def on_attempt(attempt: int, outcome: AttemptOutcome) -> None:
        if not outcome.ok and outcome.failure is not None:
            logger.debug(
                "Attempt %d for %s/%s failed on %s",
                attempt,
                class_section.name,
                section,
                outcome.failure.subject,
            )

    result = run_with_restarts(
        attempt,
        RestartConfig(max_attempts=settings.max_attempts),
        rng=rng,
        callback=on_attempt,
    )

    if not result.succeeded or result.value is None:
        failure = result.last_failure
        if failure is None:
            failure = SectionFailure(
                class_name=class_section.name, section=section, subject=None, required=len(required)
            )
        logger.warning(
            "Failed to schedule %s section %s after %d attempts. %s",
            class_section.name,
            section,
            result.attempts,
            failure.describe(),
        )
        return SectionOutcome(grid=None, failure=failure)

    state = result.value
    ledger.merge(state.ledger)

    report = SectionReport(
        class_name=class_section.name,
        section=section,
        attempts=result.attempts,
        tier=state.tier,
    )
    logger.info(
        "Scheduled %s section %s in %d attempt(s) (%s)",
        class_section.name,
        section,
        result.attempts,
        state.tier.describe(),
    )
    return SectionOutcome(grid=state.grid, report=report)
