from __future__ import annotations

import math
import os
from dataclasses import dataclass

from geometry import CorkscrewInput, Gap


def _as_int(val: str | None, default: int) -> int:
    try:
        return int(val) if val is not None and str(val).strip() != "" else default
    except Exception:
        return default


def _as_float(val: str | None, default: float) -> float:
    try:
        return float(val) if val is not None and str(val).strip() != "" else default
    except Exception:
        return default


def _as_bool(val: str | None, default: bool) -> bool:
    if val is None:
        return default
    s = str(val).strip().lower()
    if s in ("1", "true", "yes", "y", "on"):
        return True
    if s in ("0", "false", "no", "n", "off"):
        return False
    return default


@dataclass(frozen=True)
class Settings:
    # Helix winding
    total_turns: float
    num_leds: int
    invert: bool

    # Gap after every N LEDs (0 disables)
    gap_every_n_leds: int
    gap_extra_width: float

    # Sampling
    cache_enabled: bool
    multi_sampling: bool

    # Visualizer export
    screen_map_diameter: float

    @property
    def gap(self) -> Gap:
        return Gap(every_n_leds=self.gap_every_n_leds, extra_width=self.gap_extra_width)

    def corkscrew_input(self) -> CorkscrewInput:
        return CorkscrewInput(
            total_turns=self.total_turns,
            num_leds=self.num_leds,
            invert=self.invert,
            gap=self.gap,
        )


def load_settings() -> Settings:
    total_turns = _as_float(os.environ.get("CORKSCREW_TOTAL_TURNS"), 19.0)
    if not math.isfinite(total_turns) or total_turns <= 0:
        total_turns = 1.0
    num_leds = max(1, _as_int(os.environ.get("CORKSCREW_NUM_LEDS"), 144))
    invert = _as_bool(os.environ.get("CORKSCREW_INVERT"), False)

    gap_every_n_leds = max(0, _as_int(os.environ.get("CORKSCREW_GAP_EVERY_N_LEDS"), 0))
    gap_extra_width = max(
        0.0, _as_float(os.environ.get("CORKSCREW_GAP_EXTRA_WIDTH"), 0.0)
    )
    if gap_every_n_leds == 0:
        gap_extra_width = 0.0

    cache_enabled = _as_bool(os.environ.get("CORKSCREW_CACHE_ENABLED"), True)
    multi_sampling = _as_bool(os.environ.get("CORKSCREW_MULTI_SAMPLING"), True)

    screen_map_diameter = _as_float(os.environ.get("CORKSCREW_SCREEN_MAP_DIAMETER"), 0.5)
    if not math.isfinite(screen_map_diameter) or screen_map_diameter <= 0:
        screen_map_diameter = 0.5

    return Settings(
        total_turns=total_turns,
        num_leds=num_leds,
        invert=invert,
        gap_every_n_leds=gap_every_n_leds,
        gap_extra_width=gap_extra_width,
        cache_enabled=cache_enabled,
        multi_sampling=multi_sampling,
        screen_map_diameter=screen_map_diameter,
    )
