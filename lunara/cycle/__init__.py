"""Menstrual cycle phase calendar for Lunara.

Modules:
    projector     — Classify calendar days into cycle phases, with predictions
    status        — Cycle day, phase and next period for a reference date
    guidance      — Per-phase nutrition and exercise suggestions, health facts
    legend        — Phase legend entries and colour contrast checks
    config_loader — Load/validate/hot-reload cycle_config.yaml
"""

from lunara.cycle.config_loader import CycleConfig, get_cycle_config
from lunara.cycle.projector import (
    CycleModel,
    DateWindow,
    DayClassification,
    InvalidModel,
    InvalidWindow,
    PhaseLabel,
    ProjectionError,
    DateRangeError,
    classify_day,
    group_by_phase,
    project,
)
from lunara.cycle.status import CycleStatus, cycle_status

__all__ = [
    "CycleConfig",
    "get_cycle_config",
    "CycleModel",
    "DateWindow",
    "DayClassification",
    "InvalidModel",
    "InvalidWindow",
    "PhaseLabel",
    "ProjectionError",
    "DateRangeError",
    "classify_day",
    "group_by_phase",
    "project",
    "CycleStatus",
    "cycle_status",
]
