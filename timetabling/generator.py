"""Weekly timetable generation for every class-section of a school.

Pipeline
--------
1. validate the input (fail fast with a descriptive message)
2. build the wall-clock day template
3. create the global teacher availability ledger
4. schedule each class-section in turn against the shared ledger
   (randomized restarts with graduated relaxation, clone/commit per attempt)
5. on any exhausted section the whole run fails; no partial timetable is
   returned

The generator is single threaded and deterministic for a given RNG: pass
``rng`` or set ``GeneratorSettings.seed``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence, Tuple

import logging
import random

from .ledger import TeacherAvailability
from .models import ClassSection, Teacher, Timetable, build_subject_teacher_map, empty_timetable
from .quality import QualityReport, compute_quality
from .section_scheduler import SectionFailure, SectionReport, schedule_section
from .settings import GeneratorSettings, TimeSlotOptions
from .time_slots import TimeSlotTemplate, build_time_slots
from .validation import collect_warnings, validate_inputs, validate_settings


logger = logging.getLogger(__name__)


EXHAUSTED_MESSAGE = "Unable to generate valid timetable. Constraints may be too restrictive."

ProgressFn = Callable[[int, int, str, str], None]


@dataclass
class GenerationResult:
    success: bool
    timetable: Optional[Timetable] = None
    time_slots: Optional[TimeSlotTemplate] = None
    error: Optional[str] = None
    error_kind: Optional[str] = None  # validation | exhausted | internal
    failure: Optional[SectionFailure] = None
    sections: List[SectionReport] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    quality: Optional[QualityReport] = None

    @classmethod
    def failed(cls, error: str, kind: str, **kwargs) -> "GenerationResult":
        return cls(success=False, error=error, error_kind=kind, **kwargs)

    @property
    def strict(self) -> bool:
        """True if every section succeeded without any relaxation."""

        return self.success and all(r.tier.strict for r in self.sections)

    def as_dict(self) -> dict:
        if not self.success:
            return {"success": False, "error": self.error}

        timetable = {
            class_name: {
                section: {
                    day: [None if cell is None else {"subject": cell.subject, "teacher": cell.teacher} for cell in row]
                    for day, row in by_day.items()
                }
                for section, by_day in sections.items()
            }
            for class_name, sections in (self.timetable or {}).items()
        }
        out = {
            "success": True,
            "timetable": timetable,
            "timeSlots": self.time_slots.as_dict() if self.time_slots is not None else None,
        }
        if self.quality is not None:
            out["quality"] = dict(self.quality.metrics, grade=self.quality.grade)
        return out


def _section_order(classes: Sequence[ClassSection], order: str) -> List[Tuple[ClassSection, str]]:
    units = [(c, label) for c in classes for label in c.section_labels]
    if order == "most_periods_first":
        # stable: equal demand keeps input order
        units.sort(key=lambda u: u[0].weekly_periods, reverse=True)
    return units


def _run(
    classes: Sequence[ClassSection],
    teachers: Sequence[Teacher],
    days: Sequence[str],
    periods_per_day: int,
    options: TimeSlotOptions,
    settings: GeneratorSettings,
    rng: random.Random,
    progress: Optional[ProgressFn],
) -> GenerationResult:
    ok, msg = validate_inputs(classes, teachers, days, periods_per_day, options)
    if ok:
        ok, msg = validate_settings(settings)
    if not ok:
        logger.info("Timetable input rejected: %s", msg)
        return GenerationResult.failed(msg, "validation")

    days = tuple(days)
    warnings = collect_warnings(classes, teachers, days, periods_per_day, options)
    for w in warnings:
        logger.warning(w)

    time_slots = build_time_slots(periods_per_day, options, days)

    teacher_map: Dict[str, Teacher] = {t.name: t for t in teachers}
    subject_teachers = build_subject_teacher_map(teachers)
    ledger = TeacherAvailability.initialize(teachers, days, periods_per_day)

    timetable = empty_timetable(classes, days, periods_per_day)
    units = _section_order(classes, settings.section_order)
    reports: List[SectionReport] = []

    for done, (class_section, label) in enumerate(units, start=1):
        outcome = schedule_section(
            class_section,
            label,
            ledger,
            teacher_map,
            subject_teachers,
            settings,
            rng,
        )
        if not outcome.committed:
            return GenerationResult.failed(
                EXHAUSTED_MESSAGE,
                "exhausted",
                failure=outcome.failure,
                sections=reports,
                warnings=warnings,
            )

        timetable[class_section.name][label] = outcome.grid.to_section_timetable()
        reports.append(outcome.report)
        if progress is not None:
            progress(done, len(units), class_section.name, label)

    quality = compute_quality(timetable, teachers) if settings.compute_quality else None
    logger.info(
        "Generated timetable for %d class-section(s)%s",
        len(units),
        f" (quality {quality.overall_score:.1f}, {quality.grade})" if quality is not None else "",
    )

    return GenerationResult(
        success=True,
        timetable=timetable,
        time_slots=time_slots,
        sections=reports,
        warnings=warnings,
        quality=quality,
    )


def generate_timetable(
    classes: Sequence[ClassSection],
    teachers: Sequence[Teacher],
    days: Sequence[str],
    periods_per_day: int,
    options: Optional[TimeSlotOptions] = None,
    settings: GeneratorSettings = GeneratorSettings(),
    rng: Optional[random.Random] = None,
    progress: Optional[ProgressFn] = None,
) -> GenerationResult:
    """Generate a weekly timetable for every class-section.

    Never raises for bad input or an unsatisfiable problem: the result carries
    ``success=False`` with ``error`` / ``error_kind`` instead.
    """

    if options is None:
        options = TimeSlotOptions()
    if rng is None:
        rng = random.Random(settings.seed)

    try:
        return _run(classes, teachers, days, periods_per_day, options, settings, rng, progress)
    except Exception as exc:
        logger.exception("Unexpected error while generating timetable")
        return GenerationResult.failed(f"Error generating timetable: {exc}", "internal")
