"""Global teacher availability ledger.

One ledger is created per generation run and shared by every class-section.
It holds, per teacher:

- a day -> period -> free/busy grid
- a day -> number of periods already taught

The scheduler never writes into the canonical ledger directly. Each attempt
works on ``clone()``; a successful attempt is folded back with ``merge()``, a
failed one is simply dropped. That keeps failed attempts from leaving any
trace on slots committed by earlier sections.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List

from .models import Teacher


logger = logging.getLogger(__name__)


class TeacherAvailability:
    def __init__(
        self,
        days: Iterable[str],
        periods_per_day: int,
        free: Dict[str, Dict[str, List[bool]]],
        counts: Dict[str, Dict[str, int]],
    ) -> None:
        self.days = tuple(days)
        self.periods_per_day = int(periods_per_day)
        self._free = free
        self._counts = counts

    @classmethod
    def initialize(cls, teachers: Iterable[Teacher], days: Iterable[str], periods_per_day: int) -> "TeacherAvailability":
        """Build a fresh ledger with every teacher's unavailable slots blocked.

        Unavailable slots naming an unknown day or an out-of-range period are
        ignored.
        """

        days = tuple(days)
        n = int(periods_per_day)
        free: Dict[str, Dict[str, List[bool]]] = {}
        counts: Dict[str, Dict[str, int]] = {}
        for t in teachers:
            free[t.name] = {d: [True] * n for d in days}
            counts[t.name] = {d: 0 for d in days}
            for (day, period1) in t.unavailable_slots or ():
                if day in free[t.name] and 1 <= int(period1) <= n:
                    free[t.name][day][int(period1) - 1] = False
                else:
                    logger.debug("Ignoring unavailable slot %s/%s for teacher %s", day, period1, t.name)
        return cls(days, n, free, counts)

    @property
    def teachers(self) -> List[str]:
        return list(self._free.keys())

    def is_free(self, teacher: str, day: str, period: int) -> bool:
        row = self._free.get(teacher, {}).get(day)
        if row is None or not (0 <= period < len(row)):
            return False
        return row[period]

    def daily_count(self, teacher: str, day: str) -> int:
        return self._counts.get(teacher, {}).get(day, 0)

    def weekly_load(self, teacher: str) -> int:
        return sum(self._counts.get(teacher, {}).values())

    def reserve(self, teacher: str, day: str, period: int) -> None:
        """Mark (day, period) busy for ``teacher`` and bump the daily count."""

        if not self.is_free(teacher, day, period):
            raise ValueError(f"Teacher {teacher} is not free on {day} period {period + 1}")
        self._free[teacher][day][period] = False
        self._counts[teacher][day] += 1

    def clone(self) -> "TeacherAvailability":
        """Structural copy for a speculative attempt."""

        free = {t: {d: list(row) for d, row in by_day.items()} for t, by_day in self._free.items()}
        counts = {t: dict(by_day) for t, by_day in self._counts.items()}
        return TeacherAvailability(self.days, self.periods_per_day, free, counts)

    def merge(self, source: "TeacherAvailability") -> None:
        """Overwrite every grid entry and count with the values from ``source``.

        ``source`` must be a clone of this ledger (same teachers and days).
        """

        for t, by_day in source._free.items():
            if t not in self._free:
                raise ValueError(f"Cannot merge unknown teacher {t}")
            for d, row in by_day.items():
                self._free[t][d][:] = row
        for t, by_day in source._counts.items():
            self._counts[t].update(by_day)

    def snapshot(self) -> Dict[str, Dict[str, List[bool]]]:
        """Copy of the free/busy grid (for inspection and tests)."""

        return {t: {d: list(row) for d, row in by_day.items()} for t, by_day in self._free.items()}

    def count_snapshot(self) -> Dict[str, Dict[str, int]]:
        return {t: dict(by_day) for t, by_day in self._counts.items()}

