"""Audits and quality metrics for a generated timetable.

The audits (double bookings, adjacent repeats, subject counts, daily loads)
are exact checks. The quality report turns them into 0..100 scores:

- teacher workload balance: 100 minus the coefficient of variation of weekly loads
- subject distribution: share of section-days without a repeated subject
- constraint satisfaction: share of placements not breaking a daily cap
  or double-booking a teacher
- free periods: closeness of the free-period share to ~7.5%

The overall score is a weighted average (0.3 / 0.3 / 0.25 / 0.15).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Tuple

import math

from .models import Teacher, Timetable


OPTIMAL_FREE_PERCENT = 7.5

SCORE_WEIGHTS = {
    "teacher_workload_balance": 0.3,
    "subject_distribution": 0.3,
    "constraint_satisfaction": 0.25,
    "free_periods": 0.15,
}


def _iter_cells(timetable: Timetable):
    for class_name, sections in timetable.items():
        for section, by_day in sections.items():
            for day, row in by_day.items():
                for period, cell in enumerate(row):
                    yield class_name, section, day, period, cell


# ----------------------------
# Audits
# ----------------------------


def find_double_bookings(timetable: Timetable) -> List[Tuple[str, str, int, List[Tuple[str, str]]]]:
    """Return (teacher, day, period, [(class, section), ...]) for every clash."""

    seen: Dict[Tuple[str, str, int], List[Tuple[str, str]]] = {}
    for class_name, section, day, period, cell in _iter_cells(timetable):
        if cell is None:
            continue
        seen.setdefault((cell.teacher, day, period), []).append((class_name, section))
    return [(t, d, p, where) for (t, d, p), where in seen.items() if len(where) > 1]


def find_adjacent_repeats(timetable: Timetable) -> List[Tuple[str, str, str, int, str]]:
    """Return (class, section, day, period, subject) where period and period+1 share a subject."""

    out = []
    for class_name, sections in timetable.items():
        for section, by_day in sections.items():
            for day, row in by_day.items():
                for p in range(len(row) - 1):
                    a, b = row[p], row[p + 1]
                    if a is not None and b is not None and a.subject == b.subject:
                        out.append((class_name, section, day, p, a.subject))
    return out


def subject_counts(timetable: Timetable, class_name: str, section: str) -> Dict[str, int]:
    counts: Dict[str, int] = {}
    for row in timetable[class_name][section].values():
        for cell in row:
            if cell is not None:
                counts[cell.subject] = counts.get(cell.subject, 0) + 1
    return counts


def teacher_daily_loads(timetable: Timetable) -> Dict[str, Dict[str, int]]:
    """teacher -> day -> number of periods taught."""

    loads: Dict[str, Dict[str, int]] = {}
    for _c, _s, day, _p, cell in _iter_cells(timetable):
        if cell is None:
            continue
        by_day = loads.setdefault(cell.teacher, {})
        by_day[day] = by_day.get(day, 0) + 1
    return loads


# ----------------------------
# Quality report
# ----------------------------


@dataclass(frozen=True)
class QualityReport:
    metrics: Dict[str, float]
    grade: str
    teacher_loads: Dict[str, int] = field(default_factory=dict)

    @property
    def overall_score(self) -> float:
        return self.metrics["overall_score"]


def grade_for(score: float) -> str:
    if score >= 90:
        return "Excellent"
    if score >= 75:
        return "Good"
    if score >= 60:
        return "Fair"
    return "Needs Improvement"


def compute_quality(timetable: Timetable, teachers: Sequence[Teacher]) -> QualityReport:
    teacher_map = {t.name: t for t in teachers}

    # 1. workload balance
    daily = teacher_daily_loads(timetable)
    weekly = {t.name: sum(daily.get(t.name, {}).values()) for t in teachers}
    loads = list(weekly.values())
    avg = sum(loads) / len(loads) if loads else 0.0
    variance = sum((x - avg) ** 2 for x in loads) / len(loads) if loads else 0.0
    std_dev = math.sqrt(variance)
    balance = max(0.0, 100.0 - (std_dev / (avg if avg > 0 else 1.0)) * 100.0)

    # 2. subject distribution
    section_days = 0
    clean_days = 0
    for sections in timetable.values():
        for by_day in sections.values():
            for row in by_day.values():
                subjects = [cell.subject for cell in row if cell is not None]
                section_days += 1
                if len(subjects) == len(set(subjects)):
                    clean_days += 1
    distribution = (clean_days / section_days) * 100.0 if section_days else 100.0

    # 3. constraint satisfaction
    clashes = find_double_bookings(timetable)
    clash_cells = {(t, d, p) for (t, d, p, _where) in clashes}
    placements = 0
    violations = 0
    for _c, _s, day, period, cell in _iter_cells(timetable):
        if cell is None:
            continue
        placements += 1
        teacher = teacher_map.get(cell.teacher)
        cap = teacher.max_per_day if teacher is not None else None
        if cap is not None and daily.get(cell.teacher, {}).get(day, 0) > int(cap):
            violations += 1
        elif (cell.teacher, day, period) in clash_cells:
            violations += 1
    satisfaction = max(0.0, 100.0 - (violations / placements) * 100.0) if placements else 100.0

    # 4. free periods
    total_cells = 0
    free_cells = 0
    for _c, _s, _d, _p, cell in _iter_cells(timetable):
        total_cells += 1
        if cell is None:
            free_cells += 1
    free_percent = (free_cells / total_cells) * 100.0 if total_cells else 0.0
    free_score = max(0.0, min(100.0, 100.0 - abs(free_percent - OPTIMAL_FREE_PERCENT) * 5))

    metrics = {
        "teacher_workload_balance": float(balance),
        "subject_distribution": float(distribution),
        "constraint_satisfaction": float(satisfaction),
        "free_periods": float(free_score),
    }
    overall = sum(metrics[k] * w for k, w in SCORE_WEIGHTS.items())
    metrics.update(
        {
            "overall_score": float(overall),
            "avg_teacher_load": float(avg),
            "workload_std_dev": float(std_dev),
            "duplicate_subject_days": float(section_days - clean_days),
            "constraint_violations": float(violations),
            "free_slots": float(free_cells),
            "total_slots": float(total_cells),
            "free_period_percent": float(free_percent),
        }
    )

    return QualityReport(metrics=metrics, grade=grade_for(overall), teacher_loads=weekly)
