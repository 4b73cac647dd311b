from __future__ import annotations

from typing import List, Optional, Sequence

import pandas as pd

from timetabling.formatting import format_section_timetable, format_teacher_timetable
from timetabling.models import Teacher, Timetable
from timetabling.quality import teacher_daily_loads
from timetabling.time_slots import TimeSlotTemplate


def _column_label(slot) -> str:
    if slot.kind == "period":
        return f"P{slot.period_index} ({slot.start}-{slot.end})"
    return f"{slot.kind.upper()} ({slot.start}-{slot.end})"


def _timetable_df_from_table(
    *,
    day_names: Sequence[str],
    periods_per_day: int,
    table: List[List[str]],
    time_slots: Optional[TimeSlotTemplate] = None,
) -> pd.DataFrame:
    """Convert a (days x periods) table into a spreadsheet-style DataFrame.

    With a time-slot template, columns follow the template and break/lunch
    entries become empty labeled columns; without one, columns are 1..N.
    """

    columns: List[str] = []
    col_map: List[Optional[int]] = []  # None => break/lunch column
    if time_slots is not None:
        for slot in time_slots.slots:
            columns.append(_column_label(slot))
            col_map.append(slot.period_index if slot.kind == "period" else None)
    else:
        for p1 in range(1, int(periods_per_day) + 1):
            columns.append(str(p1))
            col_map.append(p1)

    out_rows: List[List[str]] = []
    for row in table:
        out_rows.append(["" if c is None else row[int(c) - 1] for c in col_map])

    df = pd.DataFrame(out_rows, columns=columns)
    df.insert(0, "DAY", list(day_names))
    return df


def section_timetable_df(
    *,
    timetable: Timetable,
    class_name: str,
    section: str,
    days: Sequence[str],
    periods_per_day: int,
    time_slots: Optional[TimeSlotTemplate] = None,
) -> pd.DataFrame:
    """Per class-section timetable, one row per day."""

    table = format_section_timetable(timetable, class_name, section, days)
    return _timetable_df_from_table(
        day_names=days,
        periods_per_day=periods_per_day,
        table=table,
        time_slots=time_slots,
    )


def teacher_timetable_df(
    *,
    timetable: Timetable,
    teacher: str,
    days: Sequence[str],
    periods_per_day: int,
    time_slots: Optional[TimeSlotTemplate] = None,
) -> pd.DataFrame:
    """Individual teacher timetable, one row per day."""

    table = format_teacher_timetable(timetable, teacher, days, periods_per_day)
    return _timetable_df_from_table(
        day_names=days,
        periods_per_day=periods_per_day,
        table=table,
        time_slots=time_slots,
    )


def teacher_workload_df(*, timetable: Timetable, teachers: Sequence[Teacher], days: Sequence[str]) -> pd.DataFrame:
    """Periods per teacher per day, with weekly total, busiest day and cap overload."""

    loads = teacher_daily_loads(timetable)
    rows = []
    for t in teachers:
        row = {"teacher": t.name, "max_per_day": t.max_per_day}
        for d in days:
            row[d] = int(loads.get(t.name, {}).get(d, 0))
        rows.append(row)

    out = pd.DataFrame(rows, columns=["teacher", "max_per_day", *days])
    if out.empty:
        return out

    day_cols = list(days)
    out["Total"] = out[day_cols].sum(axis=1)
    out["Peak"] = out[day_cols].max(axis=1)
    cap = pd.to_numeric(out["max_per_day"], errors="coerce")
    out["Overload"] = (out["Peak"] - cap).clip(lower=0).fillna(0).astype(int)
    return out.sort_values(["Total", "teacher"], ascending=[False, True]).reset_index(drop=True)


def df_to_markdown(df: pd.DataFrame) -> str:
    """Render a DataFrame as a GitHub-flavored Markdown table (no tabulate needed)."""

    def cell(v) -> str:
        return str(v).replace("\n", " ").replace("|", "\\|")

    lines = [
        "| " + " | ".join(cell(c) for c in df.columns) + " |",
        "| " + " | ".join("---" for _ in df.columns) + " |",
    ]
    for values in df.astype(str).values.tolist():
        lines.append("| " + " | ".join(cell(v) for v in values) + " |")
    return "\n".join(lines) + "\n"
