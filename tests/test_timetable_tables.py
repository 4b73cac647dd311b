from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pandas as pd

from reports.timetable_tables import (
    df_to_markdown,
    section_timetable_df,
    teacher_timetable_df,
    teacher_workload_df,
)
from timetabling import PeriodAssignment, Teacher, TimeSlotOptions, build_time_slots


DAYS = ("Mon", "Tue")


def _timetable():
    return {
        "10": {
            "A": {
                "Mon": [PeriodAssignment("Math", "T1"), None, PeriodAssignment("Art", "T2")],
                "Tue": [None, PeriodAssignment("Math", "T1"), None],
            }
        }
    }


def test_section_df_with_break_columns() -> None:
    slots = build_time_slots(3, TimeSlotOptions(break_after_periods=(1,)))

    df = section_timetable_df(
        timetable=_timetable(), class_name="10", section="A", days=DAYS, periods_per_day=3, time_slots=slots
    )

    assert list(df.columns) == [
        "DAY",
        "P1 (08:00-08:45)",
        "BREAK (08:45-08:55)",
        "P2 (08:55-09:40)",
        "P3 (09:40-10:25)",
    ]
    assert df.iloc[0].tolist() == ["Mon", "Math (T1)", "", "", "Art (T2)"]
    assert df.iloc[1].tolist() == ["Tue", "", "", "Math (T1)", ""]


def test_teacher_df_without_time_slots() -> None:
    df = teacher_timetable_df(timetable=_timetable(), teacher="T1", days=DAYS, periods_per_day=3)

    assert list(df.columns) == ["DAY", "1", "2", "3"]
    assert df.iloc[0].tolist() == ["Mon", "Math (10-A)", "", ""]
    assert df.iloc[1].tolist() == ["Tue", "", "Math (10-A)", ""]


def test_workload_df() -> None:
    teachers = [
        Teacher("T1", subjects=("Math",), max_per_day=1),
        Teacher("T2", subjects=("Art",)),
        Teacher("T3", subjects=("Music",)),
    ]

    df = teacher_workload_df(timetable=_timetable(), teachers=teachers, days=DAYS)

    assert df["teacher"].tolist() == ["T1", "T2", "T3"]
    assert df["Total"].tolist() == [2, 1, 0]
    assert df["Peak"].tolist() == [1, 1, 0]
    assert df["Overload"].tolist() == [0, 0, 0]
    assert df.loc[df["teacher"] == "T1", "Mon"].item() == 1


def test_df_to_markdown_basic() -> None:
    df = pd.DataFrame([["A", "B|C"], ["D", "E"]], columns=["Col1", "Col2"])

    md = df_to_markdown(df)

    assert "| Col1 | Col2 |" in md
    assert "| --- | --- |" in md
    assert "| A | B\\|C |" in md
