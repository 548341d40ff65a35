"""Cycle phase projection for calendar views.

Classifies every day of a date window into one of five phases using a
fixed-length cycle model:

- Cycles are aligned on a baseline date (a known period start, or a
  baseline derived from the reference month when none is known).
- Within a cycle, day ``d`` (1-indexed) is menstrual up to the period
  length, follicular until the ovulation day, ovulation on that day, and
  luteal afterwards.
- The period days of every cycle that starts after the reference date are
  relabelled ``predicted_period``.  The current cycle's period is never
  displaced by a prediction.

Everything here is a pure function of its arguments.
"""

from __future__ import annotations

import calendar
import logging
from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum

logger = logging.getLogger("lunara.cycle.projector")

# Luteal phase length used when deriving the ovulation day
DEFAULT_LUTEAL_PHASE_DAYS = 14


class PhaseLabel(str, Enum):
    menstrual = "menstrual"
    follicular = "follicular"
    ovulation = "ovulation"
    luteal = "luteal"
    predicted_period = "predicted_period"


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class ProjectionError(ValueError):
    """Base class for rejected projection inputs."""


class InvalidModel(ProjectionError):
    """Raised when a CycleModel violates its invariants."""


class InvalidWindow(ProjectionError):
    """Raised when a window ends before it starts."""


class DateRangeError(ProjectionError):
    """Raised when a derived date falls outside the representable calendar."""


# ---------------------------------------------------------------------------
# Inputs / outputs
# ---------------------------------------------------------------------------


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class CycleModel:
    """Fixed-length cycle parameters, validated on construction.

    Attributes:
        cycle_length:  Total cycle length in days.
        period_length: Menstruation length in days (shorter than the cycle).
        ovulation_day: 1-indexed cycle day of ovulation, after the period
                       and no later than the last cycle day.

    Raises:
        InvalidModel: If any invariant is violated.
    """

    cycle_length: int = 28
    period_length: int = 5
    ovulation_day: int = 14

    def __post_init__(self) -> None:
        problems: list[str] = []
        for name in ("cycle_length", "period_length", "ovulation_day"):
            value = getattr(self, name)
            if not _is_int(value):
                problems.append(f"{name} must be an integer, got {value!r}")
            elif value <= 0:
                problems.append(f"{name} must be positive, got {value}")
        if problems:
            raise InvalidModel("; ".join(problems))

        if self.period_length >= self.cycle_length:
            problems.append(
                f"period_length ({self.period_length}) must be shorter than "
                f"cycle_length ({self.cycle_length})"
            )
        if not (self.period_length < self.ovulation_day <= self.cycle_length):
            problems.append(
                f"ovulation_day ({self.ovulation_day}) must be after the period "
                f"(> {self.period_length}) and within the cycle "
                f"(<= {self.cycle_length})"
            )
        if problems:
            raise InvalidModel("; ".join(problems))

    @classmethod
    def from_lengths(
        cls,
        cycle_length: int,
        period_length: int,
        ovulation_day: int | None = None,
        luteal_phase_days: int = DEFAULT_LUTEAL_PHASE_DAYS,
    ) -> CycleModel:
        """Build a model, deriving the ovulation day when it is not given.

        The derived day sits ``luteal_phase_days`` before the next period,
        pushed to the first day after the period for very short cycles.
        """
        if ovulation_day is None and _is_int(cycle_length) and _is_int(period_length):
            ovulation_day = max(cycle_length - luteal_phase_days, period_length + 1)
        return cls(
            cycle_length=cycle_length,
            period_length=period_length,
            ovulation_day=ovulation_day,  # type: ignore[arg-type]
        )

    def base_phase(self, day_of_cycle: int) -> PhaseLabel:
        """Return the phase for a 1-indexed cycle day, ignoring predictions."""
        if day_of_cycle <= self.period_length:
            return PhaseLabel.menstrual
        if day_of_cycle < self.ovulation_day:
            return PhaseLabel.follicular
        if day_of_cycle == self.ovulation_day:
            return PhaseLabel.ovulation
        return PhaseLabel.luteal


@dataclass(frozen=True)
class DateWindow:
    """Inclusive range of calendar days."""

    start: date
    end: date

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise InvalidWindow(
                f"window start {self.start.isoformat()} is after end {self.end.isoformat()}"
            )

    @property
    def days(self) -> int:
        return (self.end - self.start).days + 1

    def __contains__(self, day: object) -> bool:
        return isinstance(day, date) and self.start <= day <= self.end

    @classmethod
    def for_month(cls, year: int, month: int) -> DateWindow:
        """The window covering one calendar month."""
        last_day = calendar.monthrange(year, month)[1]
        return cls(start=date(year, month, 1), end=date(year, month, last_day))

    @classmethod
    def containing_month(cls, day: date) -> DateWindow:
        return cls.for_month(day.year, day.month)


@dataclass(frozen=True)
class DayClassification:
    date: date
    phase: PhaseLabel


# ---------------------------------------------------------------------------
# Alignment helpers
# ---------------------------------------------------------------------------


def shift(day: date, days: int) -> date:
    """Move ``day`` by ``days``.

    Raises:
        DateRangeError: If the result falls outside the supported calendar.
    """
    try:
        return day + timedelta(days=days)
    except OverflowError as exc:
        raise DateRangeError(
            f"{day.isoformat()} shifted by {days} days is outside "
            f"{date.min.isoformat()}..{date.max.isoformat()}"
        ) from exc


def default_baseline(reference_date: date, cycle_length: int) -> date:
    """Baseline used when no period start is known.

    First day of the month containing (first day of the reference month
    minus one cycle), clamped to the first representable date.
    """
    month_start = reference_date.replace(day=1)
    if month_start.toordinal() - cycle_length < date.min.toordinal():
        return date.min
    return (month_start - timedelta(days=cycle_length)).replace(day=1)


def cycle_start_for(day: date, baseline: date, cycle_length: int) -> date:
    """Return the start of the cycle containing ``day``.

    Cycles repeat every ``cycle_length`` days in both directions from
    ``baseline``.

    Raises:
        DateRangeError: If that cycle starts before the first representable date.
    """
    return shift(day, 1 - cycle_day(day, baseline, cycle_length))


def cycle_day(day: date, cycle_start: date, cycle_length: int) -> int:
    """Return the 1-indexed position of ``day`` in cycles aligned on ``cycle_start``."""
    return (day - cycle_start).days % cycle_length + 1


# ---------------------------------------------------------------------------
# Projection
# ---------------------------------------------------------------------------


def project(
    reference_date: date,
    window: DateWindow,
    model: CycleModel,
    anchor: date | None = None,
) -> list[DayClassification]:
    """Classify every day of ``window`` into a cycle phase.

    Only dates inside the window are ever constructed, so windows touching
    either end of the calendar are safe.

    Args:
        reference_date: "Today"; cycles starting after it are predictions.
        window:         Inclusive range of days to classify.
        model:          Validated cycle model.
        anchor:         Known first day of some cycle.  Defaults to the
                        baseline derived from the reference month.

    Returns:
        One DayClassification per day of the window, ordered by date.
    """
    if not isinstance(model, CycleModel):
        raise InvalidModel(f"expected a CycleModel, got {type(model).__name__}")

    baseline = (
        anchor if anchor is not None else default_baseline(reference_date, model.cycle_length)
    )
    phases = _base_phases(window, baseline, model)
    _overlay_predictions(phases, baseline, model, reference_date)

    result = [DayClassification(date=day, phase=phase) for day, phase in sorted(phases.items())]
    logger.debug(
        "Projected %d days (%s..%s) aligned on %s",
        len(result),
        window.start,
        window.end,
        baseline,
    )
    return result


def _base_phases(window: DateWindow, baseline: date, model: CycleModel) -> dict[date, PhaseLabel]:
    phases: dict[date, PhaseLabel] = {}
    for i in range(window.days):
        day = window.start + timedelta(days=i)
        phases[day] = model.base_phase(cycle_day(day, baseline, model.cycle_length))
    return phases


def _overlay_predictions(
    phases: dict[date, PhaseLabel],
    baseline: date,
    model: CycleModel,
    reference_date: date,
) -> None:
    """Relabel the period days of every cycle starting after ``reference_date``.

    A day on cycle day ``d`` belongs to a cycle starting ``d - 1`` days
    earlier; that start is after the reference date when the day is at
    least ``d`` days past it.
    """
    for day in list(phases):
        day_of_cycle = cycle_day(day, baseline, model.cycle_length)
        if day_of_cycle > model.period_length:
            continue
        if (day - reference_date).days >= day_of_cycle:
            phases[day] = PhaseLabel.predicted_period


def classify_day(
    day: date,
    reference_date: date,
    model: CycleModel,
    anchor: date | None = None,
) -> PhaseLabel:
    """Phase of a single day, consistent with ``project``."""
    return project(reference_date, DateWindow(day, day), model, anchor)[0].phase


def group_by_phase(days: list[DayClassification]) -> dict[PhaseLabel, list[date]]:
    """Group classified days into per-phase date lists.

    Every phase is present in the result, possibly with an empty list.
    """
    grouped: dict[PhaseLabel, list[date]] = {phase: [] for phase in PhaseLabel}
    for entry in days:
        grouped[entry.phase].append(entry.date)
    return grouped
