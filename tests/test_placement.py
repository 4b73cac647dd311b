from __future__ import annotations

import random
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from timetabling import (
    GeneratorSettings,
    PeriodAssignment,
    RelaxationPolicy,
    RelaxationTier,
    SectionGrid,
    Teacher,
    TeacherAvailability,
    place_subject_period,
)


STRICT = RelaxationTier()


def _setup(teachers, days=("Mon",), periods_per_day=3):
    ledger = TeacherAvailability.initialize(teachers, days, periods_per_day)
    grid = SectionGrid(days=tuple(days), periods_per_day=periods_per_day)
    return {t.name: t for t in teachers}, ledger, grid


def test_tier_thresholds_follow_attempt_index() -> None:
    assert RelaxationTier.for_attempt(0).strict
    assert RelaxationTier.for_attempt(25).strict

    t26 = RelaxationTier.for_attempt(26)
    assert t26.allow_adjacent_repeat and not t26.allow_same_day_repeat and t26.daily_cap_slack == 0

    t31 = RelaxationTier.for_attempt(31)
    assert t31.allow_adjacent_repeat and not t31.allow_same_day_repeat and t31.daily_cap_slack == 1

    t36 = RelaxationTier.for_attempt(36)
    assert t36.allow_adjacent_repeat and t36.allow_same_day_repeat and t36.daily_cap_slack == 1


def test_tier_thresholds_are_tunable() -> None:
    policy = RelaxationPolicy(adjacent_repeat_after=0, daily_cap_slack_after=100, same_day_repeat_after=1, daily_cap_slack=2)

    assert RelaxationTier.for_attempt(0, policy).strict
    assert RelaxationTier.for_attempt(1, policy).allow_adjacent_repeat
    assert RelaxationTier.for_attempt(2, policy).allow_same_day_repeat
    assert RelaxationTier.for_attempt(2, policy).daily_cap_slack == 0
    assert RelaxationTier.for_attempt(101, policy).daily_cap_slack == 2


def test_same_subject_twice_a_day_is_blocked_when_strict() -> None:
    teachers, ledger, grid = _setup([Teacher("T1", subjects=("Math",))])
    grid.place("Mon", 0, PeriodAssignment("Math", "T1"))
    ledger.reserve("T1", "Mon", 0)

    out = place_subject_period("Math", grid, ledger, ("T1",), teachers, STRICT, random.Random(1))

    assert out is None
    assert grid.empty_count("Mon") == 2
    assert ledger.daily_count("T1", "Mon") == 1


def test_adjacency_still_blocked_when_only_same_day_is_relaxed() -> None:
    teachers, ledger, grid = _setup([Teacher("T1", subjects=("Math",))])
    grid.place("Mon", 0, PeriodAssignment("Math", "T1"))
    ledger.reserve("T1", "Mon", 0)
    tier = RelaxationTier(allow_same_day_repeat=True)

    for seed in range(5):
        g = SectionGrid(days=("Mon",), periods_per_day=3, rows={"Mon": list(grid.rows["Mon"])})
        lg = ledger.clone()
        out = place_subject_period("Math", g, lg, ("T1",), teachers, tier, random.Random(seed))
        assert out == PeriodAssignment("Math", "T1")
        assert g.rows["Mon"][1] is None
        assert g.rows["Mon"][2] == PeriodAssignment("Math", "T1")


def test_busiest_day_is_tried_last() -> None:
    teachers, ledger, grid = _setup([Teacher("T1", subjects=("Math", "Art"))], days=("Mon", "Tue"), periods_per_day=2)
    grid.place("Mon", 0, PeriodAssignment("Art", "T1"))

    place_subject_period("Math", grid, ledger, ("T1",), teachers, STRICT, random.Random(3))

    assert grid.day_has_subject("Tue", "Math")
    assert not grid.day_has_subject("Mon", "Math")


def test_teacher_with_fewer_periods_today_wins() -> None:
    teachers, ledger, grid = _setup(
        [Teacher("A", subjects=("Math",)), Teacher("B", subjects=("Math",))],
        periods_per_day=2,
    )
    ledger.reserve("A", "Mon", 0)  # A already teaches another section today

    out = place_subject_period("Math", grid, ledger, ("A", "B"), teachers, STRICT, random.Random(0))

    assert out.teacher == "B"


def test_last_period_preference_is_honoured_when_possible() -> None:
    teachers, ledger, grid = _setup(
        [Teacher("A", subjects=("Math",), prefer_no_last_period=True), Teacher("B", subjects=("Math",))],
        periods_per_day=1,
    )

    out = place_subject_period("Math", grid, ledger, ("A", "B"), teachers, STRICT, random.Random(0))

    assert out.teacher == "B"


def test_last_period_preference_is_only_a_penalty() -> None:
    teachers, ledger, grid = _setup(
        [Teacher("A", subjects=("Math",), prefer_no_last_period=True)],
        periods_per_day=1,
    )

    out = place_subject_period("Math", grid, ledger, ("A",), teachers, STRICT, random.Random(0))

    assert out == PeriodAssignment("Math", "A")


def test_ties_keep_teacher_input_order() -> None:
    teachers, ledger, grid = _setup([Teacher("A", subjects=("Math",)), Teacher("B", subjects=("Math",))])

    out = place_subject_period("Math", grid, ledger, ("A", "B"), teachers, STRICT, random.Random(9))

    assert out.teacher == "A"


def test_daily_cap_and_slack() -> None:
    teachers, ledger, grid = _setup([Teacher("A", subjects=("Math",), max_per_day=1)], periods_per_day=2)
    ledger.reserve("A", "Mon", 0)

    assert place_subject_period("Math", grid, ledger, ("A",), teachers, STRICT, random.Random(0)) is None

    out = place_subject_period(
        "Math", grid, ledger, ("A",), teachers, RelaxationTier(daily_cap_slack=1), random.Random(0)
    )
    assert out == PeriodAssignment("Math", "A")
    assert grid.rows["Mon"][1] == out
    assert ledger.daily_count("A", "Mon") == 2


def test_no_qualified_teacher_means_no_placement() -> None:
    teachers, ledger, grid = _setup([Teacher("A", subjects=("Math",))])

    assert place_subject_period("Music", grid, ledger, (), teachers, STRICT, random.Random(0)) is None
    assert grid.filled_count() == 0


def test_scoring_weights_come_from_settings() -> None:
    teachers, ledger, grid = _setup(
        [Teacher("A", subjects=("Math",), prefer_no_last_period=True), Teacher("B", subjects=("Math",))],
        periods_per_day=1,
        days=("Mon", "Tue"),
    )
    # B carries a heavy weekly load; with a tiny last-period penalty A wins.
    ledger.reserve("B", "Tue", 0)
    settings = GeneratorSettings(last_period_penalty=0.01, weekly_load_weight=1.0)

    out = place_subject_period("Math", grid, ledger, ("A", "B"), teachers, STRICT, random.Random(0), settings)

    assert out.teacher == "A"
