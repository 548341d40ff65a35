"""Calendar phase legend and WCAG contrast checks for its colours."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from lunara.cycle.config_loader import CycleConfig, get_cycle_config
from lunara.cycle.projector import PhaseLabel

logger = logging.getLogger("lunara.cycle.legend")


@dataclass(frozen=True)
class LegendItem:
    phase: PhaseLabel
    name: str
    color: str
    text_color: str


def hex_to_rgb(h: str) -> tuple[int, int, int]:
    h = h.lstrip("#")
    return (int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16))


def srgb_to_linear(c: int) -> float:
    s = c / 255.0
    return s / 12.92 if s <= 0.04045 else math.pow((s + 0.055) / 1.055, 2.4)


def relative_luminance(hex_color: str) -> float:
    r, g, b = hex_to_rgb(hex_color)
    return 0.2126 * srgb_to_linear(r) + 0.7152 * srgb_to_linear(g) + 0.0722 * srgb_to_linear(b)


def contrast_ratio(fg_hex: str, bg_hex: str) -> float:
    """WCAG 2.x contrast ratio between two ``#RRGGBB`` colours (1.0 to 21.0)."""
    l1 = relative_luminance(fg_hex)
    l2 = relative_luminance(bg_hex)
    return (max(l1, l2) + 0.05) / (min(l1, l2) + 0.05)


def legend_items(config: CycleConfig | None = None) -> list[LegendItem]:
    """Legend entries in phase order."""
    cfg = config or get_cycle_config()
    items = []
    for phase in PhaseLabel:
        entry = cfg.legend_item(phase.value)
        if entry is None:
            raise KeyError(f"No legend entry configured for phase {phase.value!r}")
        items.append(
            LegendItem(
                phase=phase,
                name=entry.name,
                color=entry.color,
                text_color=entry.text_color,
            )
        )
    return items


def check_legend_contrast(items: list[LegendItem], minimum: float) -> list[str]:
    """Return the names of items whose text is below ``minimum`` contrast."""
    failing = []
    for item in items:
        ratio = contrast_ratio(item.text_color, item.color)
        if ratio < minimum:
            logger.warning(
                "Legend item %s has contrast %.2f:1 (minimum %.1f:1)",
                item.name,
                ratio,
                minimum,
            )
            failing.append(item.name)
    return failing
