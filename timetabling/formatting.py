from __future__ import annotations

from typing import List, Sequence

from .models import Timetable


def format_section_timetable(timetable: Timetable, class_name: str, section: str, days: Sequence[str]) -> List[List[str]]:
    """Return a table (rows=days, cols=periods) with 'SUBJECT (TEACHER)' or ''."""

    by_day = timetable[class_name][section]
    table: List[List[str]] = []
    for day in days:
        table.append(["" if cell is None else f"{cell.subject} ({cell.teacher})" for cell in by_day[day]])
    return table


def format_teacher_timetable(
    timetable: Timetable,
    teacher: str,
    days: Sequence[str],
    periods_per_day: int,
) -> List[List[str]]:
    """Return a table (rows=days, cols=periods) with 'SUBJECT (CLASS-SECTION)' or ''."""

    day_idx = {d: i for i, d in enumerate(days)}
    table = [["" for _ in range(int(periods_per_day))] for _ in range(len(days))]

    for class_name, sections in timetable.items():
        for section, by_day in sections.items():
            for day, row in by_day.items():
                if day not in day_idx:
                    continue
                for period, cell in enumerate(row):
                    if cell is None or cell.teacher != teacher:
                        continue
                    table[day_idx[day]][period] = f"{cell.subject} ({class_name}-{section})"

    return table
