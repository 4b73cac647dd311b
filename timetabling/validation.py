"""Input checks run before any search starts.

``validate_inputs`` returns ``(ok, message)``; the message names the first
violated rule and the offending class/subject/teacher. ``collect_warnings``
lists things that are allowed but likely to hurt the search.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Tuple

from .models import ClassSection, Teacher, build_subject_teacher_map
from .settings import SECTION_ORDERS, GeneratorSettings, TimeSlotOptions
from .time_slots import build_time_slots, ends_after, parse_clock


HIGH_USAGE_RATIO = 0.9


def _is_positive_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def validate_time_slot_options(options: TimeSlotOptions) -> Tuple[bool, str]:
    try:
        parse_clock(options.start_time)
    except (TypeError, ValueError):
        return False, f"Start time must be HH:MM (got {options.start_time!r})"
    if options.end_time is not None:
        try:
            parse_clock(options.end_time)
        except (TypeError, ValueError):
            return False, f"End time must be HH:MM (got {options.end_time!r})"
    if not _is_positive_int(options.period_duration):
        return False, "Period duration must be a positive integer (minutes)"
    if not isinstance(options.break_duration, int) or options.break_duration < 0:
        return False, "Break duration must be >= 0 minutes"
    if options.lunch_duration is not None and (
        not isinstance(options.lunch_duration, int) or options.lunch_duration < 0
    ):
        return False, "Lunch duration must be >= 0 minutes"
    return True, ""


def validate_settings(settings: GeneratorSettings) -> Tuple[bool, str]:
    if not _is_positive_int(settings.max_attempts):
        return False, "max_attempts must be a positive integer"
    if settings.section_order not in SECTION_ORDERS:
        return False, f"section_order must be one of: {', '.join(SECTION_ORDERS)}"
    return True, ""


def validate_inputs(
    classes: Sequence[ClassSection],
    teachers: Sequence[Teacher],
    days: Sequence[str],
    periods_per_day: int,
    options: Optional[TimeSlotOptions] = None,
) -> Tuple[bool, str]:
    """Structural completeness check; first violated rule wins."""

    if not classes:
        return False, "At least one class must be defined"
    if not teachers:
        return False, "At least one teacher must be defined"
    if not days:
        return False, "At least one day must be defined"
    if not _is_positive_int(periods_per_day):
        return False, "Periods per day must be a positive integer"

    if len(set(days)) != len(days):
        return False, "Days contain duplicates"

    seen_classes = set()
    for c in classes:
        if not c.name or not str(c.name).strip():
            return False, "Every class must have a name"
        if c.name in seen_classes:
            return False, f"Duplicate class name: {c.name}"
        seen_classes.add(c.name)
        if len(set(c.section_labels)) != len(c.section_labels):
            return False, f"Class {c.name} has duplicate section labels"

    seen_teachers = set()
    for t in teachers:
        if not t.name or not str(t.name).strip():
            return False, "Every teacher must have a name"
        if t.name in seen_teachers:
            return False, f"Duplicate teacher name: {t.name}"
        seen_teachers.add(t.name)
        for s in t.subjects:
            if not isinstance(s, str) or not s.strip():
                return False, f"Teacher {t.name} has an invalid subject entry"
        if t.max_per_day is not None and not _is_positive_int(t.max_per_day):
            return False, f"Teacher {t.name} max periods per day must be a positive integer"

    subject_teachers = build_subject_teacher_map(teachers)
    for c in classes:
        for subj in c.subjects:
            if subj is None or not subj.name or not str(subj.name).strip():
                return False, f"Invalid subject in class {c.name}"
            if not _is_positive_int(subj.periods_per_week):
                return False, (
                    f"Class {c.name}, subject {subj.name} has invalid periods per week: {subj.periods_per_week}"
                )

    missing: List[str] = []
    for c in classes:
        for subj in c.subjects:
            if subj.name not in subject_teachers and subj.name not in missing:
                missing.append(subj.name)
    if missing:
        return False, f"No teacher assigned for subjects: {', '.join(missing)}"

    total_slots = len(days) * int(periods_per_day)
    for c in classes:
        required = c.weekly_periods
        if required > total_slots:
            return False, (
                f"Class {c.name} requires {required} periods/week but only {total_slots} slots "
                f"available per section. Reduce subject periods or increase periods per day/days."
            )

    if options is not None:
        ok, msg = validate_time_slot_options(options)
        if not ok:
            return ok, msg

    return True, ""


def collect_warnings(
    classes: Sequence[ClassSection],
    teachers: Sequence[Teacher],
    days: Sequence[str],
    periods_per_day: int,
    options: Optional[TimeSlotOptions] = None,
) -> List[str]:
    """Non-fatal advisories. Assumes ``validate_inputs`` passed."""

    warnings: List[str] = []
    total_slots = len(days) * int(periods_per_day)

    for c in classes:
        required = c.weekly_periods
        if total_slots and required > total_slots * HIGH_USAGE_RATIO:
            warnings.append(
                f"Class {c.name} uses {required / total_slots * 100:.1f}% of available slots; "
                f"consider leaving some free periods for flexibility"
            )
        names = [s.name for s in c.subjects]
        for name in sorted({n for n in names if names.count(n) > 1}):
            warnings.append(f"Class {c.name} lists subject {name} more than once")

    # Potential load if a teacher had to cover every section of every subject they can teach.
    potential: Dict[str, int] = {t.name: 0 for t in teachers}
    for c in classes:
        n_sections = len(c.section_labels)
        for subj in c.subjects:
            for t in teachers:
                if t.can_teach(subj.name):
                    potential[t.name] += int(subj.periods_per_week) * n_sections
    for name, load in potential.items():
        if load > total_slots:
            warnings.append(
                f"Teacher {name} may be over-allocated: up to {load} periods/week (max possible: {total_slots})"
            )

    day_set = set(days)
    for t in teachers:
        for (day, period1) in t.unavailable_slots or ():
            if day not in day_set:
                warnings.append(f"Teacher {t.name} unavailable slot references unknown day {day!r}")
            elif not (1 <= int(period1) <= int(periods_per_day)):
                warnings.append(f"Teacher {t.name} unavailable slot period {period1} is out of range")

    if options is not None:
        markers = list(options.break_after_periods or ())
        if options.lunch_after_period is not None:
            markers.append(options.lunch_after_period)
        for m in markers:
            if not (1 <= int(m) < int(periods_per_day)):
                warnings.append(f"Break/lunch after period {m} is outside 1..{int(periods_per_day) - 1} and is ignored")

        template = build_time_slots(periods_per_day, options, tuple(days))
        if ends_after(template, options.end_time):
            warnings.append(f"School day ends at {template.day_end}, after the configured end time {options.end_time}")

    return warnings
