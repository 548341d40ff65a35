"""Load, validate, and hot-reload the Lunara cycle configuration.

The config lives in ``cycle_config.yaml`` alongside this module.  At startup
it is loaded once and cached.  Call ``reload_cycle_config()`` to re-read from
disk after an edit — no restart required.

Usage::

    from lunara.cycle.config_loader import get_cycle_config

    config = get_cycle_config()
    config.defaults.cycle_length            # 28
    config.legend_item("ovulation").color   # "#0F766E"
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger("lunara.cycle.config")

# Path to the YAML file sitting next to this module
_CONFIG_PATH = Path(__file__).parent / "cycle_config.yaml"

# Phase labels the legend must cover, in display order
LEGEND_PHASES: tuple[str, ...] = (
    "menstrual",
    "follicular",
    "ovulation",
    "luteal",
    "predicted_period",
)


# ---------------------------------------------------------------------------
# Typed config sections
# ---------------------------------------------------------------------------


@dataclass
class CycleDefaults:
    """Cycle model used when the caller does not supply one."""

    cycle_length: int = 28
    period_length: int = 5
    ovulation_day: int = 14


@dataclass
class Bounds:
    """Inclusive accepted range for one profile value."""

    min: int
    max: int

    def contains(self, value: int) -> bool:
        return self.min <= value <= self.max


@dataclass
class ProfileBounds:
    """Accepted ranges for user-entered cycle profile values."""

    cycle_length: Bounds
    period_length: Bounds


@dataclass
class PhaseSettings:
    """Phase lengths used to derive ovulation day and fertile window."""

    luteal_phase_days: int = 14
    fertile_window_days: int = 6


@dataclass
class LegendEntry:
    """Display treatment for one phase label."""

    phase: str
    name: str
    color: str
    text_color: str


@dataclass
class LegendConfig:
    """Calendar legend settings."""

    min_contrast_ratio: float
    items: list[LegendEntry]


@dataclass
class CycleConfig:
    """Complete, validated cycle configuration.

    This is the single in-memory representation of cycle_config.yaml.

    Attributes:
        version:        Config schema version string.
        defaults:       Default cycle model values.
        profile_bounds: Accepted ranges for profile input.
        phases:         Luteal phase and fertile window lengths.
        legend:         Legend colours and minimum contrast.
    """

    version: str
    defaults: CycleDefaults
    profile_bounds: ProfileBounds
    phases: PhaseSettings
    legend: LegendConfig

    def legend_item(self, phase: str) -> LegendEntry | None:
        """Return the legend entry for a phase label, or None if absent."""
        for item in self.legend.items:
            if item.phase == phase:
                return item
        return None


# ---------------------------------------------------------------------------
# Loader / validation
# ---------------------------------------------------------------------------


class ConfigValidationError(ValueError):
    """Raised when cycle_config.yaml fails validation."""


def _load_yaml(path: Path) -> dict:
    """Read and parse a YAML file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigValidationError: If the YAML is malformed.
    """
    if not path.exists():
        raise FileNotFoundError(f"Cycle config not found: {path}")

    with path.open("r", encoding="utf-8") as fh:
        try:
            return yaml.safe_load(fh) or {}
        except yaml.YAMLError as exc:
            raise ConfigValidationError(f"YAML parse error in {path}: {exc}") from exc


def _validate_and_build(raw: dict) -> CycleConfig:
    """Validate the raw YAML dict and construct a CycleConfig.

    Every problem is collected before raising so a single run reports them
    all.

    Args:
        raw: Parsed YAML dict.

    Returns:
        Validated CycleConfig instance.

    Raises:
        ConfigValidationError: If values are missing or out of range.
    """
    errors: list[str] = []

    def _int(section: dict, key: str, path: str, default: int) -> int:
        value = section.get(key, default)
        if isinstance(value, bool):
            errors.append(f"{path}.{key} must be an integer, got {value!r}")
            return default
        try:
            number = int(value)
        except (TypeError, ValueError):
            errors.append(f"{path}.{key} must be an integer, got {value!r}")
            return default
        if number <= 0:
            errors.append(f"{path}.{key} must be positive, got {number}")
        return number

    version = str(raw.get("version", "1.0"))

    # ── Defaults ──
    d_raw = raw.get("defaults") or {}
    defaults = CycleDefaults(
        cycle_length=_int(d_raw, "cycle_length", "defaults", 28),
        period_length=_int(d_raw, "period_length", "defaults", 5),
        ovulation_day=_int(d_raw, "ovulation_day", "defaults", 14),
    )
    if defaults.period_length >= defaults.cycle_length:
        errors.append(
            f"defaults.period_length ({defaults.period_length}) must be shorter "
            f"than defaults.cycle_length ({defaults.cycle_length})"
        )
    if not (defaults.period_length < defaults.ovulation_day <= defaults.cycle_length):
        errors.append(
            f"defaults.ovulation_day ({defaults.ovulation_day}) must fall after the "
            f"period and within the cycle"
        )

    # ── Profile bounds ──
    pb_raw = raw.get("profile_bounds") or {}

    def _bounds(key: str, lo: int, hi: int) -> Bounds:
        section = pb_raw.get(key) or {}
        bounds = Bounds(
            min=_int(section, "min", f"profile_bounds.{key}", lo),
            max=_int(section, "max", f"profile_bounds.{key}", hi),
        )
        if bounds.min > bounds.max:
            errors.append(
                f"profile_bounds.{key}: min ({bounds.min}) exceeds max ({bounds.max})"
            )
        return bounds

    profile_bounds = ProfileBounds(
        cycle_length=_bounds("cycle_length", 15, 60),
        period_length=_bounds("period_length", 1, 15),
    )
    if not profile_bounds.cycle_length.contains(defaults.cycle_length):
        errors.append("defaults.cycle_length is outside profile_bounds.cycle_length")
    if not profile_bounds.period_length.contains(defaults.period_length):
        errors.append("defaults.period_length is outside profile_bounds.period_length")

    # ── Phases ──
    ph_raw = raw.get("phases") or {}
    phases = PhaseSettings(
        luteal_phase_days=_int(ph_raw, "luteal_phase_days", "phases", 14),
        fertile_window_days=_int(ph_raw, "fertile_window_days", "phases", 6),
    )

    # ── Legend ──
    lg_raw = raw.get("legend") or {}
    items_raw: dict[str, Any] = lg_raw.get("items") or {}
    items: list[LegendEntry] = []
    for phase in LEGEND_PHASES:
        cfg = items_raw.get(phase)
        if not isinstance(cfg, dict):
            errors.append(f"legend.items.{phase} is missing or not a mapping")
            continue
        entry = LegendEntry(
            phase=phase,
            name=str(cfg.get("name", phase.replace("_", " ").title())),
            color=str(cfg.get("color", "")),
            text_color=str(cfg.get("text_color", "#FFFFFF")),
        )
        for attr in ("color", "text_color"):
            if not _is_hex_color(getattr(entry, attr)):
                errors.append(
                    f"legend.items.{phase}.{attr} must be a #RRGGBB colour, "
                    f"got {getattr(entry, attr)!r}"
                )
        items.append(entry)
    unknown = sorted(set(items_raw) - set(LEGEND_PHASES))
    if unknown:
        errors.append(f"legend.items has unknown phases: {', '.join(unknown)}")

    try:
        min_contrast = float(lg_raw.get("min_contrast_ratio", 3.0))
    except (TypeError, ValueError):
        errors.append(
            f"legend.min_contrast_ratio must be a number, got "
            f"{lg_raw.get('min_contrast_ratio')!r}"
        )
        min_contrast = 3.0
    if not (1.0 <= min_contrast <= 21.0):
        errors.append(
            f"legend.min_contrast_ratio = {min_contrast} is out of range [1.0, 21.0]"
        )

    if errors:
        raise ConfigValidationError(
            f"cycle_config.yaml has {len(errors)} validation error(s):\n"
            + "\n".join(f"  • {e}" for e in errors)
        )

    return CycleConfig(
        version=version,
        defaults=defaults,
        profile_bounds=profile_bounds,
        phases=phases,
        legend=LegendConfig(min_contrast_ratio=min_contrast, items=items),
    )


def _is_hex_color(value: str) -> bool:
    if len(value) != 7 or not value.startswith("#"):
        return False
    try:
        int(value[1:], 16)
    except ValueError:
        return False
    return True


def load_cycle_config(path: Path | None = None) -> CycleConfig:
    """Load and validate the cycle config from disk.

    Args:
        path: Override path to YAML. Uses the bundled cycle_config.yaml by default.

    Returns:
        Validated CycleConfig instance.
    """
    target = path or _CONFIG_PATH
    raw = _load_yaml(target)
    config = _validate_and_build(raw)
    logger.info("Loaded cycle config v%s from %s", config.version, target)
    return config


# ---------------------------------------------------------------------------
# Global singleton with hot-reload support
# ---------------------------------------------------------------------------

_config: CycleConfig | None = None
_config_lock = threading.Lock()


def get_cycle_config() -> CycleConfig:
    """Return the global CycleConfig singleton, loading it on first call.

    Thread-safe.  Use ``reload_cycle_config()`` to refresh after YAML changes.
    """
    global _config
    if _config is None:
        with _config_lock:
            if _config is None:  # double-checked locking
                _config = load_cycle_config()
    return _config


def reload_cycle_config(path: Path | None = None) -> CycleConfig:
    """Reload the cycle config from disk and replace the global singleton.

    If validation fails, the old config is retained and the error is
    re-raised.

    Args:
        path: Override path to YAML. Defaults to bundled cycle_config.yaml.

    Returns:
        The newly loaded CycleConfig.

    Raises:
        ConfigValidationError: If the new config is invalid.
        FileNotFoundError:     If the config file is missing.
    """
    global _config
    new_config = load_cycle_config(path)  # validate before acquiring lock
    with _config_lock:
        old_version = _config.version if _config else "none"
        _config = new_config
    logger.info("Reloaded cycle config: %s → %s", old_version, new_config.version)
    return new_config
