"""Wall-clock template for one school day.

Walks periods 1..periods_per_day from ``start_time``, emitting a period entry
for each and inserting lunch / short breaks after the configured periods.
Nothing is emitted after the last period. The template is the same for every
day of the week.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import List, Optional, Tuple

from .settings import TimeSlotOptions


_FMT = "%H:%M"


@dataclass(frozen=True)
class TimeSlot:
    kind: str  # period | break | lunch
    start: str
    end: str
    duration: int
    period_index: Optional[int] = None  # 1-indexed, periods only
    label: Optional[str] = None

    def as_dict(self) -> dict:
        out = {
            "type": self.kind,
            "start_time": self.start,
            "end_time": self.end,
            "duration": self.duration,
        }
        if self.period_index is not None:
            out["periodIndex"] = self.period_index
        if self.label is not None:
            out["label"] = self.label
        return out


@dataclass(frozen=True)
class TimeSlotTemplate:
    slots: Tuple[TimeSlot, ...]
    days: Tuple[str, ...] = ()

    def for_day(self, day: str) -> Tuple[TimeSlot, ...]:
        # Identical for every day; shared by reference.
        return self.slots

    @property
    def periods(self) -> Tuple[TimeSlot, ...]:
        return tuple(s for s in self.slots if s.kind == "period")

    @property
    def day_start(self) -> Optional[str]:
        return self.slots[0].start if self.slots else None

    @property
    def day_end(self) -> Optional[str]:
        return self.slots[-1].end if self.slots else None

    def as_dict(self) -> dict:
        return {
            "dayTemplate": [s.as_dict() for s in self.slots],
            "generatedForDays": len(self.days),
        }


def parse_clock(value: str) -> datetime:
    """Parse "HH:MM"; raises ValueError on anything else."""

    return datetime.strptime(str(value).strip(), _FMT)


def build_time_slots(
    periods_per_day: int,
    options: TimeSlotOptions = TimeSlotOptions(),
    days: Tuple[str, ...] = (),
) -> TimeSlotTemplate:
    current = parse_clock(options.start_time)
    period_len = timedelta(minutes=int(options.period_duration))
    break_len = timedelta(minutes=int(options.break_duration))
    lunch_minutes = options.lunch_duration if options.lunch_duration is not None else options.break_duration
    lunch_len = timedelta(minutes=int(lunch_minutes))

    breaks_after = {int(p) for p in options.break_after_periods or ()}
    lunch_after = options.lunch_after_period
    n = int(periods_per_day)

    slots: List[TimeSlot] = []
    for p1 in range(1, n + 1):
        end = current + period_len
        slots.append(
            TimeSlot(
                kind="period",
                start=current.strftime(_FMT),
                end=end.strftime(_FMT),
                duration=int(options.period_duration),
                period_index=p1,
            )
        )
        current = end

        if p1 == n:
            break

        if lunch_after is not None and int(lunch_after) == p1:
            end = current + lunch_len
            slots.append(
                TimeSlot(
                    kind="lunch",
                    start=current.strftime(_FMT),
                    end=end.strftime(_FMT),
                    duration=int(lunch_minutes),
                    label="Lunch",
                )
            )
            current = end

        if p1 in breaks_after:
            end = current + break_len
            slots.append(
                TimeSlot(
                    kind="break",
                    start=current.strftime(_FMT),
                    end=end.strftime(_FMT),
                    duration=int(options.break_duration),
                    label=f"Break after P{p1}",
                )
            )
            current = end

    return TimeSlotTemplate(slots=tuple(slots), days=tuple(days))


def ends_after(template: TimeSlotTemplate, end_time: Optional[str]) -> bool:
    """True if the generated day runs past ``end_time`` (None never does)."""

    if end_time is None or template.day_end is None:
        return False
    # Compare within the same day; a template that wrapped past midnight is
    # treated as ending late.
    start = parse_clock(template.day_start)
    last = parse_clock(template.day_end)
    limit = parse_clock(end_time)
    if last < start:
        return True
    return last > limit
