"""Cycle calendar endpoints: phase calendar, status, guidance, facts, legend."""

from __future__ import annotations

import logging
from datetime import date
from typing import Any

from fastapi import APIRouter, HTTPException, Query

from lunara.cycle.config_loader import CycleConfig
from lunara.cycle.guidance import exercise_for, nutrition_for, random_fact
from lunara.cycle.legend import legend_items
from lunara.cycle.projector import (
    CycleModel,
    DateWindow,
    PhaseLabel,
    ProjectionError,
    group_by_phase,
    project,
)
from lunara.cycle.status import cycle_status, upcoming_period_starts
from lunara.dependencies import AppSettings, CycleSettings
from lunara.models.cycle import (
    CalendarRead,
    CycleModelRead,
    CycleStatusRead,
    ExerciseSuggestionRead,
    FactRead,
    GuidanceRead,
    LegendItemRead,
)

router = APIRouter(prefix="/cycle", tags=["cycle"])
logger = logging.getLogger("lunara.routers.cycle")


def _build_model(
    config: CycleConfig,
    cycle_length: int | None,
    period_length: int | None,
    ovulation_day: int | None,
) -> CycleModel:
    """Apply config defaults and profile bounds, then validate the model."""
    d = config.defaults
    if cycle_length is None and period_length is None and ovulation_day is None:
        return CycleModel(d.cycle_length, d.period_length, d.ovulation_day)

    cycle_length = d.cycle_length if cycle_length is None else cycle_length
    period_length = d.period_length if period_length is None else period_length

    bounds = config.profile_bounds
    if cycle_length < bounds.cycle_length.min:
        raise HTTPException(status_code=422, detail="Cycle length seems too short.")
    if cycle_length > bounds.cycle_length.max:
        raise HTTPException(status_code=422, detail="Cycle length seems too long.")
    if period_length < bounds.period_length.min:
        raise HTTPException(
            status_code=422,
            detail=f"Period length must be at least {bounds.period_length.min} day(s).",
        )
    if period_length > bounds.period_length.max:
        raise HTTPException(status_code=422, detail="Period length seems too long.")

    try:
        return CycleModel.from_lengths(
            cycle_length,
            period_length,
            ovulation_day,
            luteal_phase_days=config.phases.luteal_phase_days,
        )
    except ProjectionError as exc:
        logger.warning("Rejected cycle model: %s", exc)
        raise HTTPException(status_code=422, detail=str(exc)) from exc


def _model_read(model: CycleModel) -> CycleModelRead:
    return CycleModelRead(
        cycle_length=model.cycle_length,
        period_length=model.period_length,
        ovulation_day=model.ovulation_day,
    )


# ---------- Calendar ----------

@router.get("/calendar", response_model=CalendarRead)
async def get_calendar(
    settings: AppSettings,
    config: CycleSettings,
    reference_date: date | None = Query(default=None),
    start_date: date | None = Query(default=None),
    end_date: date | None = Query(default=None),
    cycle_length: int | None = Query(default=None, ge=1),
    period_length: int | None = Query(default=None, ge=1),
    ovulation_day: int | None = Query(default=None, ge=1),
    anchor_date: date | None = Query(default=None),
) -> Any:
    today = reference_date or date.today()
    model = _build_model(config, cycle_length, period_length, ovulation_day)

    # A missing bound comes from the month of the given one
    month = DateWindow.containing_month(start_date or end_date or today)
    try:
        window = DateWindow(start_date or month.start, end_date or month.end)
    except ProjectionError as exc:
        logger.warning("Rejected calendar window: %s", exc)
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    if window.days > settings.max_window_days:
        raise HTTPException(
            status_code=422,
            detail=f"Window spans {window.days} days; the limit is {settings.max_window_days}",
        )

    days = project(today, window, model, anchor=anchor_date)
    return CalendarRead(
        reference_date=today,
        start_date=window.start,
        end_date=window.end,
        anchor_date=anchor_date,
        cycle_model=_model_read(model),
        days=[{"date": d.date, "phase": d.phase} for d in days],
        phases=group_by_phase(days),
    )


# ---------- Status ----------

@router.get("/status", response_model=CycleStatusRead)
async def get_status(
    config: CycleSettings,
    reference_date: date | None = Query(default=None),
    cycle_length: int | None = Query(default=None, ge=1),
    period_length: int | None = Query(default=None, ge=1),
    ovulation_day: int | None = Query(default=None, ge=1),
    anchor_date: date | None = Query(default=None),
    upcoming: int = Query(default=3, ge=0, le=12),
) -> Any:
    today = reference_date or date.today()
    model = _build_model(config, cycle_length, period_length, ovulation_day)
    try:
        status = cycle_status(
            today,
            model,
            anchor=anchor_date,
            fertile_window_days=config.phases.fertile_window_days,
        )
        upcoming_starts = upcoming_period_starts(
            today, model, count=upcoming, anchor=anchor_date
        )
    except ProjectionError as exc:
        logger.warning("Rejected status request: %s", exc)
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return CycleStatusRead(
        reference_date=status.reference_date,
        cycle_start=status.cycle_start,
        cycle_day=status.cycle_day,
        phase=status.phase,
        is_period_day=status.is_period_day,
        period_end=status.period_end,
        ovulation_date=status.ovulation_date,
        fertile_window_start=status.fertile_window_start,
        fertile_window_end=status.fertile_window_end,
        in_fertile_window=status.in_fertile_window,
        next_period_start=status.next_period_start,
        days_until_next_period=status.days_until_next_period,
        upcoming_period_starts=upcoming_starts,
        cycle_model=_model_read(model),
    )


# ---------- Guidance ----------

@router.get("/guidance/{phase}", response_model=GuidanceRead)
async def get_guidance(phase: PhaseLabel) -> Any:
    nutrition = nutrition_for(phase)
    exercise = exercise_for(phase)
    return GuidanceRead(
        phase=phase.value,
        food_suggestions=nutrition.food_suggestions,
        exercise_suggestions=exercise.exercise_suggestions,
        detailed_suggestions=[
            ExerciseSuggestionRead(
                name=s.name, description=s.description, image_seed=s.image_seed
            )
            for s in exercise.detailed_suggestions
        ],
    )


@router.get("/facts/random", response_model=FactRead)
async def get_random_fact() -> Any:
    return FactRead(fact=random_fact().fact)


# ---------- Legend ----------

@router.get("/legend", response_model=list[LegendItemRead])
async def get_legend(config: CycleSettings) -> Any:
    return [LegendItemRead.model_validate(item, from_attributes=True) for item in legend_items(config)]
