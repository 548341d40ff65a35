"""Tests for cycle_config.yaml loading and validation."""

from __future__ import annotations

import copy
from pathlib import Path

import pytest

from lunara.cycle.config_loader import (
    ConfigValidationError,
    CycleConfig,
    _validate_and_build,
    get_cycle_config,
    load_cycle_config,
    reload_cycle_config,
)

VALID_RAW: dict = {
    "version": "1.0",
    "defaults": {"cycle_length": 28, "period_length": 5, "ovulation_day": 14},
    "legend": {
        "min_contrast_ratio": 3.0,
        "items": {
            "menstrual": {"name": "Menstrual", "color": "#B23A48", "text_color": "#FFFFFF"},
            "follicular": {"name": "Follicular", "color": "#7A4FA3", "text_color": "#FFFFFF"},
            "ovulation": {"name": "Ovulation", "color": "#0F766E", "text_color": "#FFFFFF"},
            "luteal": {"name": "Luteal", "color": "#B03A78", "text_color": "#FFFFFF"},
            "predicted_period": {"color": "#F6D5D9", "text_color": "#7F1D1D"},
        },
    },
}


def raw_config(**overrides: dict) -> dict:
    raw = copy.deepcopy(VALID_RAW)
    raw.update(overrides)
    return raw


class TestConfigLoading:
    """Tests for loading the bundled cycle_config.yaml."""

    def test_load_default_config(self, cycle_config: CycleConfig) -> None:
        assert cycle_config.version == "1.0"
        assert cycle_config.defaults.cycle_length == 28
        assert cycle_config.defaults.period_length == 5
        assert cycle_config.defaults.ovulation_day == 14

    def test_profile_bounds(self, cycle_config: CycleConfig) -> None:
        bounds = cycle_config.profile_bounds
        assert (bounds.cycle_length.min, bounds.cycle_length.max) == (15, 60)
        assert (bounds.period_length.min, bounds.period_length.max) == (1, 15)
        assert bounds.cycle_length.contains(28)
        assert not bounds.cycle_length.contains(61)

    def test_phase_settings(self, cycle_config: CycleConfig) -> None:
        assert cycle_config.phases.luteal_phase_days == 14
        assert cycle_config.phases.fertile_window_days == 6

    def test_legend_has_every_phase(self, cycle_config: CycleConfig) -> None:
        phases = [item.phase for item in cycle_config.legend.items]
        assert phases == ["menstrual", "follicular", "ovulation", "luteal", "predicted_period"]
        assert cycle_config.legend_item("ovulation").color == "#0F766E"

    def test_unknown_legend_phase_returns_none(self, cycle_config: CycleConfig) -> None:
        assert cycle_config.legend_item("fertile") is None

    def test_singleton_is_cached(self) -> None:
        assert get_cycle_config() is get_cycle_config()


class TestConfigValidation:
    """Tests for config validation logic."""

    def test_valid_minimal_config(self) -> None:
        config = _validate_and_build(raw_config())
        assert config.version == "1.0"
        assert config.profile_bounds.cycle_length.max == 60
        assert config.legend_item("predicted_period").name == "Predicted Period"

    def test_missing_legend_raises(self) -> None:
        raw = raw_config()
        del raw["legend"]
        with pytest.raises(ConfigValidationError, match="legend.items.menstrual"):
            _validate_and_build(raw)

    def test_bad_colour_raises(self) -> None:
        raw = raw_config()
        raw["legend"]["items"]["luteal"]["color"] = "pink"
        with pytest.raises(ConfigValidationError, match="#RRGGBB"):
            _validate_and_build(raw)

    def test_unknown_legend_phase_raises(self) -> None:
        raw = raw_config()
        raw["legend"]["items"]["fertile"] = {"color": "#000000", "text_color": "#FFFFFF"}
        with pytest.raises(ConfigValidationError, match="unknown phases: fertile"):
            _validate_and_build(raw)

    def test_period_not_shorter_than_cycle_raises(self) -> None:
        raw = raw_config(defaults={"cycle_length": 20, "period_length": 20, "ovulation_day": 20})
        with pytest.raises(ConfigValidationError, match="shorter"):
            _validate_and_build(raw)

    def test_ovulation_inside_period_raises(self) -> None:
        raw = raw_config(defaults={"cycle_length": 28, "period_length": 5, "ovulation_day": 4})
        with pytest.raises(ConfigValidationError, match="ovulation_day"):
            _validate_and_build(raw)

    def test_non_integer_value_raises(self) -> None:
        raw = raw_config(phases={"luteal_phase_days": "two weeks"})
        with pytest.raises(ConfigValidationError, match="luteal_phase_days"):
            _validate_and_build(raw)

    def test_boolean_value_raises(self) -> None:
        raw = raw_config(phases={"fertile_window_days": True})
        with pytest.raises(ConfigValidationError, match="fertile_window_days"):
            _validate_and_build(raw)

    def test_inverted_bounds_raise(self) -> None:
        raw = raw_config(profile_bounds={"cycle_length": {"min": 40, "max": 20}})
        with pytest.raises(ConfigValidationError, match="exceeds max"):
            _validate_and_build(raw)

    def test_default_outside_bounds_raises(self) -> None:
        raw = raw_config(profile_bounds={"cycle_length": {"min": 30, "max": 60}})
        with pytest.raises(ConfigValidationError, match="outside profile_bounds"):
            _validate_and_build(raw)

    def test_errors_are_collected(self) -> None:
        raw = raw_config(phases={"luteal_phase_days": -1, "fertile_window_days": 0})
        with pytest.raises(ConfigValidationError, match="2 validation error"):
            _validate_and_build(raw)

    def test_hot_reload(self, tmp_path: Path) -> None:
        """reload_cycle_config() should replace the global singleton."""
        config_content = """
version: "2.0-test"
defaults:
  cycle_length: 30
  period_length: 4
  ovulation_day: 16
legend:
  items:
    menstrual: {color: "#B23A48", text_color: "#FFFFFF"}
    follicular: {color: "#7A4FA3", text_color: "#FFFFFF"}
    ovulation: {color: "#0F766E", text_color: "#FFFFFF"}
    luteal: {color: "#B03A78", text_color: "#FFFFFF"}
    predicted_period: {color: "#F6D5D9", text_color: "#7F1D1D"}
"""
        config_file = tmp_path / "cycle_config.yaml"
        config_file.write_text(config_content.strip())

        try:
            new_config = reload_cycle_config(path=config_file)
            assert new_config.version == "2.0-test"
            assert get_cycle_config() is new_config
            assert get_cycle_config().defaults.cycle_length == 30
        finally:
            reload_cycle_config()

    def test_failed_reload_keeps_previous_config(self, tmp_path: Path) -> None:
        before = get_cycle_config()
        config_file = tmp_path / "cycle_config.yaml"
        config_file.write_text("version: broken\nlegend: {}\n")

        with pytest.raises(ConfigValidationError):
            reload_cycle_config(path=config_file)
        assert get_cycle_config() is before

    def test_malformed_yaml_raises(self, tmp_path: Path) -> None:
        config_file = tmp_path / "cycle_config.yaml"
        config_file.write_text("defaults: [unclosed\n")
        with pytest.raises(ConfigValidationError, match="YAML parse error"):
            load_cycle_config(path=config_file)

    def test_load_nonexistent_file_raises(self) -> None:
        with pytest.raises(FileNotFoundError):
            load_cycle_config(path=Path("/nonexistent/path/config.yaml"))
