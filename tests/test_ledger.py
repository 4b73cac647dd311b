import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest

from timetabling import Teacher, TeacherAvailability


DAYS = ("Mon", "Tue")


def _ledger() -> TeacherAvailability:
    teachers = [
        Teacher("T1", subjects=("Math",), unavailable_slots=(("Mon", 2),)),
        # unknown day and out-of-range period are ignored
        Teacher("T2", subjects=("Science",), unavailable_slots=(("Sun", 1), ("Tue", 9))),
    ]
    return TeacherAvailability.initialize(teachers, DAYS, 3)


def test_initialize_blocks_unavailable_slots_one_indexed():
    ledger = _ledger()

    assert ledger.is_free("T1", "Mon", 0)
    assert not ledger.is_free("T1", "Mon", 1)
    assert ledger.is_free("T1", "Tue", 1)
    assert all(all(row) for row in ledger.snapshot()["T2"].values())
    assert ledger.count_snapshot() == {"T1": {"Mon": 0, "Tue": 0}, "T2": {"Mon": 0, "Tue": 0}}


def test_unknown_teacher_or_slot_is_never_free():
    ledger = _ledger()

    assert not ledger.is_free("Nobody", "Mon", 0)
    assert not ledger.is_free("T1", "Sun", 0)
    assert not ledger.is_free("T1", "Mon", 3)


def test_reserve_marks_busy_and_counts():
    ledger = _ledger()

    ledger.reserve("T1", "Tue", 2)

    assert not ledger.is_free("T1", "Tue", 2)
    assert ledger.daily_count("T1", "Tue") == 1
    assert ledger.weekly_load("T1") == 1


def test_reserve_twice_is_rejected():
    ledger = _ledger()
    ledger.reserve("T2", "Mon", 0)

    with pytest.raises(ValueError):
        ledger.reserve("T2", "Mon", 0)
    with pytest.raises(ValueError):
        ledger.reserve("T1", "Mon", 1)  # blocked by availability

    assert ledger.daily_count("T2", "Mon") == 1


def test_clone_is_isolated_until_merged():
    ledger = _ledger()
    before = ledger.snapshot()

    trial = ledger.clone()
    trial.reserve("T1", "Mon", 0)
    trial.reserve("T2", "Tue", 2)

    assert ledger.snapshot() == before
    assert ledger.weekly_load("T1") == 0

    ledger.merge(trial)

    assert not ledger.is_free("T1", "Mon", 0)
    assert not ledger.is_free("T2", "Tue", 2)
    assert ledger.daily_count("T2", "Tue") == 1
    assert ledger.snapshot() == trial.snapshot()


def test_discarded_clone_leaves_no_trace():
    ledger = _ledger()
    ledger.reserve("T1", "Tue", 0)
    committed = (ledger.snapshot(), ledger.count_snapshot())

    trial = ledger.clone()
    trial.reserve("T1", "Tue", 1)
    del trial

    assert (ledger.snapshot(), ledger.count_snapshot()) == committed
