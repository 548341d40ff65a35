"""Shared FastAPI dependencies injected into route handlers."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends

from lunara.config import Settings, get_settings
from lunara.cycle.config_loader import CycleConfig, get_cycle_config

# Annotated shortcuts for route signatures
AppSettings = Annotated[Settings, Depends(get_settings)]
CycleSettings = Annotated[CycleConfig, Depends(get_cycle_config)]
