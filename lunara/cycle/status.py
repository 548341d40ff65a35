"""Cycle status for a single reference date.

Summarises where "today" sits in the cycle: cycle day, phase, the next
period estimate, and the fertile window of the current cycle.  Uses the
same alignment as the projector, so the phase reported here always matches
the calendar for that day.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date

from lunara.cycle.projector import (
    CycleModel,
    PhaseLabel,
    cycle_start_for,
    default_baseline,
    shift,
)

logger = logging.getLogger("lunara.cycle.status")

DEFAULT_FERTILE_WINDOW_DAYS = 6


@dataclass
class CycleStatus:
    """Position of a reference date within its cycle.

    Attributes:
        reference_date:          The date being described.
        cycle_start:             First day of the current cycle.
        cycle_day:               Day within the current cycle (1-indexed).
        phase:                   Phase of the reference date.  Never
                                 ``predicted_period``; the current cycle is real.
        period_end:              Last day of the current cycle's period.
        ovulation_date:          Ovulation day of the current cycle.
        fertile_window_start:    First day of the current fertile window.
        fertile_window_end:      Last day of the fertile window (ovulation day).
        next_period_start:       First day of the next cycle.
        days_until_next_period:  Days from the reference date to the next period.
        in_fertile_window:       Whether the reference date is in the fertile window.
    """

    reference_date: date
    cycle_start: date
    cycle_day: int
    phase: PhaseLabel
    period_end: date
    ovulation_date: date
    fertile_window_start: date
    fertile_window_end: date
    next_period_start: date
    days_until_next_period: int
    in_fertile_window: bool

    @property
    def is_period_day(self) -> bool:
        return self.phase == PhaseLabel.menstrual


def cycle_status(
    reference_date: date,
    model: CycleModel,
    anchor: date | None = None,
    fertile_window_days: int = DEFAULT_FERTILE_WINDOW_DAYS,
) -> CycleStatus:
    """Describe the cycle containing ``reference_date``.

    Args:
        reference_date:      Date to describe ("today").
        model:               Validated cycle model.
        anchor:              Known first day of some cycle.  Defaults to the
                             baseline derived from the reference month.
        fertile_window_days: Length of the fertile window ending on ovulation.

    Returns:
        CycleStatus for the reference date.

    Raises:
        DateRangeError: If a reported date falls outside the calendar range.
    """
    if fertile_window_days <= 0:
        raise ValueError(f"fertile_window_days must be positive, got {fertile_window_days}")

    length = model.cycle_length
    baseline = anchor if anchor is not None else default_baseline(reference_date, length)
    start = cycle_start_for(reference_date, baseline, length)
    day = (reference_date - start).days + 1

    ovulation = shift(start, model.ovulation_day - 1)
    fertile_start = shift(ovulation, 1 - fertile_window_days)
    next_start = shift(start, length)

    status = CycleStatus(
        reference_date=reference_date,
        cycle_start=start,
        cycle_day=day,
        phase=model.base_phase(day),
        period_end=shift(start, model.period_length - 1),
        ovulation_date=ovulation,
        fertile_window_start=fertile_start,
        fertile_window_end=ovulation,
        next_period_start=next_start,
        days_until_next_period=(next_start - reference_date).days,
        in_fertile_window=fertile_start <= reference_date <= ovulation,
    )
    logger.debug(
        "Cycle day %d (%s) on %s; next period %s",
        status.cycle_day,
        status.phase.value,
        reference_date,
        next_start,
    )
    return status


def upcoming_period_starts(
    reference_date: date,
    model: CycleModel,
    count: int = 3,
    anchor: date | None = None,
) -> list[date]:
    """Return the next ``count`` predicted period start dates after ``reference_date``.

    Fewer are returned when the calendar range ends first.
    """
    if count < 0:
        raise ValueError(f"count must not be negative, got {count}")
    length = model.cycle_length
    baseline = anchor if anchor is not None else default_baseline(reference_date, length)
    start = cycle_start_for(reference_date, baseline, length)
    starts: list[date] = []
    for i in range(1, count + 1):
        ordinal = start.toordinal() + length * i
        if ordinal > date.max.toordinal():
            break
        starts.append(date.fromordinal(ordinal))
    return starts
