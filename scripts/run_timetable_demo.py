"""Demo runner: generate a weekly timetable for a small sample school.

This is meant for quick validation and for demos.

Usage:
    python scripts/run_timetable_demo.py [--seed 7] [--markdown]

"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

# Ensure project root is on PYTHONPATH when running as a script
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from reports.timetable_tables import (
    df_to_markdown,
    section_timetable_df,
    teacher_timetable_df,
    teacher_workload_df,
)
from timetabling import (
    ClassSection,
    GeneratorSettings,
    Subject,
    Teacher,
    TimeSlotOptions,
    generate_timetable,
)


DAYS = ("Mon", "Tue", "Wed", "Thu", "Fri")
PERIODS_PER_DAY = 6


def sample_school():
    classes = [
        ClassSection(
            name="9",
            sections=("A", "B"),
            subjects=(
                Subject("Math", 5),
                Subject("Science", 5),
                Subject("English", 5),
                Subject("History", 4),
                Subject("Art", 2),
            ),
        ),
        ClassSection(
            name="10",
            sections=("A",),
            subjects=(
                Subject("Math", 5),
                Subject("Physics", 4),
                Subject("Chemistry", 4),
                Subject("English", 5),
                Subject("History", 3),
            ),
        ),
    ]

    teachers = [
        Teacher("Ms. Rao", subjects=("Math",), max_per_day=4),
        Teacher("Mr. Singh", subjects=("Math", "Physics"), max_per_day=5, prefer_no_last_period=True),
        Teacher("Dr. Iyer", subjects=("Science", "Chemistry"), max_per_day=5),
        Teacher("Ms. Das", subjects=("Science",), unavailable_slots=(("Mon", 1), ("Fri", 6))),
        Teacher("Mr. Brown", subjects=("English",), max_per_day=4),
        Teacher("Ms. Khan", subjects=("English", "History"), max_per_day=5),
        Teacher("Mr. Patel", subjects=("History", "Art"), max_per_day=4),
    ]
    return classes, teachers


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--seed", type=int, default=7)
    parser.add_argument("--markdown", action="store_true", help="print tables as Markdown")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    classes, teachers = sample_school()
    options = TimeSlotOptions(
        start_time="08:00",
        end_time="14:00",
        period_duration=45,
        break_duration=10,
        break_after_periods=(2,),
        lunch_after_period=4,
        lunch_duration=30,
    )

    result = generate_timetable(
        classes,
        teachers,
        DAYS,
        PERIODS_PER_DAY,
        options=options,
        settings=GeneratorSettings(seed=args.seed),
    )

    if not result.success:
        print(f"\nGeneration failed ({result.error_kind}): {result.error}")
        if result.failure is not None:
            print(result.failure.describe())
        sys.exit(1)

    def show(title, df) -> None:
        print(f"\n=== {title} ===")
        print(df_to_markdown(df) if args.markdown else df.to_string(index=False))

    for c in classes:
        for label in c.section_labels:
            df = section_timetable_df(
                timetable=result.timetable,
                class_name=c.name,
                section=label,
                days=DAYS,
                periods_per_day=PERIODS_PER_DAY,
                time_slots=result.time_slots,
            )
            show(f"Class {c.name}-{label}", df)

    for t in teachers[:2]:
        df = teacher_timetable_df(
            timetable=result.timetable,
            teacher=t.name,
            days=DAYS,
            periods_per_day=PERIODS_PER_DAY,
            time_slots=result.time_slots,
        )
        show(f"Teacher {t.name}", df)

    show("Teacher workload", teacher_workload_df(timetable=result.timetable, teachers=teachers, days=DAYS))

    print("\n=== Sections ===")
    for r in result.sections:
        print(f"{r.class_name}-{r.section}: {r.attempts} attempt(s), {r.tier.describe()}")

    if result.quality is not None:
        print("\n=== Quality ===")
        for k, v in result.quality.metrics.items():
            print(f"{k}: {v:.2f}")
        print(f"grade: {result.quality.grade}")

    for w in result.warnings:
        print(f"warning: {w}")


if __name__ == "__main__":
    main()
