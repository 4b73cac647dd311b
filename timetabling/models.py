"""Domain model for weekly class timetable generation.

Inputs
------
- ``Subject``: a subject taught to a class and how many periods per week it needs.
- ``Teacher``: who can teach what, how many periods a day at most, which
  (day, period) slots are blocked, and whether the last period of the day
  should be avoided.
- ``ClassSection``: a class ("10", "Grade 9") with one or more section labels.
  Every (class, section) pair is scheduled independently but shares the
  global teacher pool.

Outputs
-------
- ``PeriodAssignment``: one filled period (subject + teacher).
- ``SectionGrid``: one section's day x period grid.
- ``Timetable``: class -> section -> day -> list of periods (``None`` = free).

Periods are 0-indexed internally. Caller-facing period numbers (for example
in ``Teacher.unavailable_slots``) are 1-indexed, like the slot numbers shown
on a printed timetable.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple


# ----------------------------
# Inputs
# ----------------------------


@dataclass(frozen=True)
class Subject:
    name: str
    periods_per_week: int


@dataclass(frozen=True)
class Teacher:
    name: str
    subjects: Tuple[str, ...] = ()
    # None => unbounded
    max_per_day: Optional[int] = None
    # ((day, period), ...) with 1-indexed periods, e.g. (("Mon", 2),)
    unavailable_slots: Tuple[Tuple[str, int], ...] = ()
    prefer_no_last_period: bool = False

    def can_teach(self, subject_name: str) -> bool:
        return subject_name in self.subjects


@dataclass(frozen=True)
class ClassSection:
    name: str
    sections: Tuple[str, ...] = ("A",)
    subjects: Tuple[Subject, ...] = ()

    @property
    def section_labels(self) -> Tuple[str, ...]:
        # An empty section list means a single default section.
        return tuple(self.sections) or ("A",)

    @property
    def weekly_periods(self) -> int:
        return sum(int(s.periods_per_week or 0) for s in self.subjects)


# ----------------------------
# Outputs
# ----------------------------


@dataclass(frozen=True)
class PeriodAssignment:
    subject: str
    teacher: str


DayRow = List[Optional[PeriodAssignment]]
SectionTimetable = Dict[str, DayRow]  # day -> periods
Timetable = Dict[str, Dict[str, SectionTimetable]]  # class -> section -> day -> periods


@dataclass
class SectionGrid:
    """Mutable day x period grid for one class-section.

    A fresh grid is built for every scheduling attempt and only becomes part
    of the timetable once the attempt succeeds.
    """

    days: Tuple[str, ...]
    periods_per_day: int
    rows: Dict[str, DayRow] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for day in self.days:
            if day not in self.rows:
                self.rows[day] = [None] * int(self.periods_per_day)

    def empty_count(self, day: str) -> int:
        return sum(1 for cell in self.rows[day] if cell is None)

    def is_occupied(self, day: str, period: int) -> bool:
        return self.rows[day][period] is not None

    def would_repeat_adjacent(self, day: str, period: int, subject: str) -> bool:
        """True if ``subject`` already sits right before or right after ``period``."""

        row = self.rows[day]
        if period > 0:
            prev = row[period - 1]
            if prev is not None and prev.subject == subject:
                return True
        if period < len(row) - 1:
            nxt = row[period + 1]
            if nxt is not None and nxt.subject == subject:
                return True
        return False

    def day_has_subject(self, day: str, subject: str) -> bool:
        return any(cell is not None and cell.subject == subject for cell in self.rows[day])

    def teacher_teaches_subject_on(self, day: str, subject: str, teacher: str) -> bool:
        return any(
            cell is not None and cell.subject == subject and cell.teacher == teacher
            for cell in self.rows[day]
        )

    def place(self, day: str, period: int, assignment: PeriodAssignment) -> None:
        if self.rows[day][period] is not None:
            raise ValueError(f"Period {period + 1} on {day} is already filled")
        self.rows[day][period] = assignment

    def filled_count(self) -> int:
        return sum(len(row) - self.empty_count(day) for day, row in self.rows.items())

    def to_section_timetable(self) -> SectionTimetable:
        return {day: list(self.rows[day]) for day in self.days}


# ----------------------------
# Helpers
# ----------------------------


def build_subject_teacher_map(teachers: Iterable[Teacher]) -> Dict[str, Tuple[str, ...]]:
    """Map subject name -> names of teachers qualified for it (input order)."""

    out: Dict[str, List[str]] = {}
    for t in teachers:
        for subject_name in t.subjects:
            names = out.setdefault(subject_name, [])
            if t.name not in names:
                names.append(t.name)
    return {k: tuple(v) for k, v in out.items()}


def expand_subject_periods(section: ClassSection) -> List[str]:
    """One entry per required weekly period, e.g. Math x 5 -> five "Math" entries."""

    out: List[str] = []
    for subj in section.subjects:
        out.extend([subj.name] * int(subj.periods_per_week or 0))
    return out


def empty_timetable(classes: Iterable[ClassSection], days: Iterable[str], periods_per_day: int) -> Timetable:
    days = tuple(days)
    timetable: Timetable = {}
    for c in classes:
        timetable[c.name] = {}
        for label in c.section_labels:
            timetable[c.name][label] = {d: [None] * int(periods_per_day) for d in days}
    return timetable
