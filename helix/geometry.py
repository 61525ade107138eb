from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from functools import lru_cache
from typing import Tuple


@dataclass(frozen=True)
class Vec2f:
    x: float
    y: float


@dataclass(frozen=True)
class Vec2i:
    x: int
    y: int


@dataclass(frozen=True)
class Gap:
    """Extra spacing inserted after every `every_n_leds` pixels of the strip.

    `extra_width` is measured in pixel pitches. A gap with `every_n_leds < 1`
    or `extra_width <= 0` never triggers.
    """

    every_n_leds: int = 0
    extra_width: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "every_n_leds", max(0, int(self.every_n_leds)))
        w = float(self.extra_width)
        if not math.isfinite(w) or w < 0.0:
            w = 0.0
        object.__setattr__(self, "extra_width", w)

    def active_for(self, num_leds: int) -> bool:
        return (
            self.every_n_leds >= 1
            and self.extra_width > 0.0
            and int(num_leds) > self.every_n_leds
        )

    def gaps_before(self, idx: int) -> int:
        """Number of gaps crossed before pixel `idx`."""
        if self.every_n_leds < 1:
            return 0
        return max(0, int(idx)) // self.every_n_leds


@dataclass(frozen=True)
class CorkscrewInput:
    total_turns: float = 19.0
    num_leds: int = 144
    invert: bool = False
    gap: Gap = field(default_factory=Gap)

    def normalized(self) -> "CorkscrewInput":
        """Return the minimum viable configuration (1 turn, 1 pixel) for degenerate values."""
        turns, leds = _normalize(self.total_turns, self.num_leds)
        if turns == self.total_turns and leds == self.num_leds:
            return self
        return replace(self, total_turns=turns, num_leds=leds)


@dataclass(frozen=True)
class CorkscrewState:
    width: int
    height: int

    @property
    def cells(self) -> int:
        return self.width * self.height


def _normalize(total_turns: float, num_leds: int) -> Tuple[float, int]:
    turns = float(total_turns)
    if not math.isfinite(turns) or turns <= 0.0:
        turns = 1.0
    return turns, max(1, int(num_leds))


def _ceil_div(a: int, b: int) -> int:
    return -(-a // b)


@lru_cache(maxsize=256)
def solve_dimensions(
    total_turns: float, num_leds: int, gap: Gap = Gap()
) -> Tuple[int, int]:
    """Smallest-waste (width, height) grid for a helix of `num_leds` pixels.

    The target width is the pixels-per-turn, widened by the gap budget when a
    gap is active. Widths next to it (and the plain pixels-per-turn ceiling)
    are tried; the one leaving the fewest unused cells wins, ties going to the
    width closest to the target.
    """
    turns, leds = _normalize(total_turns, num_leds)
    per_turn = leds / turns
    nominal = max(1, math.ceil(per_turn))
    target = nominal
    if gap.active_for(leds):
        n = gap.every_n_leds
        target = max(1, math.ceil(per_turn * (n + gap.extra_width) / n))

    candidates = {max(1, target - 1), target, target + 1, nominal}
    best = min(
        candidates,
        key=lambda w: (w * _ceil_div(leds, w) - leds, abs(w - target), w),
    )
    return best, _ceil_div(leds, best)


def calculate_corkscrew_width(
    total_turns: float, num_leds: int, gap: Gap = Gap()
) -> int:
    return solve_dimensions(total_turns, num_leds, gap)[0]


def calculate_corkscrew_height(
    total_turns: float, num_leds: int, gap: Gap = Gap()
) -> int:
    return solve_dimensions(total_turns, num_leds, gap)[1]


def generate_state(inp: CorkscrewInput) -> CorkscrewState:
    width, height = solve_dimensions(inp.total_turns, inp.num_leds, inp.gap)
    return CorkscrewState(width=width, height=height)


def unwrapped_position(idx: int, num_leds: int, width: int, gap: Gap) -> Vec2f:
    """Position of pixel `idx` on the uncoiled helix.

    One turn spans `width` units of x and 1.0 of y. Without a gap every pixel
    advances x by one unit. With a gap, a run of `every_n_leds` pixels plus its
    gap spans one full turn of x. The row always follows the pixel count
    (`idx / width`), so the gap never pushes pixels past the last row.
    """
    w = float(max(1, width))
    i = max(0, int(idx))
    if not gap.active_for(num_leds):
        x = float(i)
    else:
        pitch = w / (gap.every_n_leds + gap.extra_width)
        x = pitch * (i + gap.extra_width * gap.gaps_before(i))
    return Vec2f(x, i / w)


def wrap_x(x: float, width: int) -> float:
    """Fold x onto the cylinder circumference, result in [0, width)."""
    w = float(max(1, width))
    out = x % w
    if out >= w:
        # x % w rounds up to w for tiny negative inputs.
        out = 0.0
    return out
