"""Pydantic response models for the cycle calendar endpoints."""

from __future__ import annotations

from datetime import date

from pydantic import Field

from lunara.cycle.projector import PhaseLabel
from lunara.models.base import LunaraBase


class CycleModelRead(LunaraBase):
    cycle_length: int
    period_length: int
    ovulation_day: int


class DayPhaseRead(LunaraBase):
    date: date
    phase: PhaseLabel


class CalendarRead(LunaraBase):
    reference_date: date
    start_date: date
    end_date: date
    anchor_date: date | None = None
    cycle_model: CycleModelRead
    days: list[DayPhaseRead]
    phases: dict[PhaseLabel, list[date]] = Field(
        description="Dates grouped by phase; every phase is present"
    )


class CycleStatusRead(LunaraBase):
    reference_date: date
    cycle_start: date
    cycle_day: int
    phase: PhaseLabel
    is_period_day: bool
    period_end: date
    ovulation_date: date
    fertile_window_start: date
    fertile_window_end: date
    in_fertile_window: bool
    next_period_start: date
    days_until_next_period: int
    upcoming_period_starts: list[date] = Field(default_factory=list)
    cycle_model: CycleModelRead


class ExerciseSuggestionRead(LunaraBase):
    name: str
    description: str
    image_seed: str = ""


class GuidanceRead(LunaraBase):
    phase: str
    food_suggestions: list[str]
    exercise_suggestions: list[str]
    detailed_suggestions: list[ExerciseSuggestionRead]


class FactRead(LunaraBase):
    fact: str


class LegendItemRead(LunaraBase):
    phase: PhaseLabel
    name: str
    color: str
    text_color: str
