from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Tuple


def clamp8(x: float) -> int:
    if x <= 0:
        return 0
    if x >= 255:
        return 255
    return int(x)


@dataclass(frozen=True)
class CRGB:
    """8-bit RGB colour."""

    r: int = 0
    g: int = 0
    b: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "r", clamp8(self.r))
        object.__setattr__(self, "g", clamp8(self.g))
        object.__setattr__(self, "b", clamp8(self.b))

    @classmethod
    def from_hex(cls, code: int) -> "CRGB":
        code = int(code)
        return cls((code >> 16) & 0xFF, (code >> 8) & 0xFF, code & 0xFF)

    def as_tuple(self) -> Tuple[int, int, int]:
        return self.r, self.g, self.b

    def is_black(self) -> bool:
        return self.r == 0 and self.g == 0 and self.b == 0

    def scaled(self, bri: int) -> "CRGB":
        bri = max(0, min(255, int(bri)))
        if bri >= 255:
            return self
        s = bri / 255.0
        return CRGB(clamp8(self.r * s), clamp8(self.g * s), clamp8(self.b * s))


BLACK = CRGB(0, 0, 0)
WHITE = CRGB(255, 255, 255)
RED = CRGB(255, 0, 0)
GREEN = CRGB(0, 128, 0)
BLUE = CRGB(0, 0, 255)


def blend_weighted(samples: Iterable[Tuple[CRGB, int]]) -> CRGB:
    """Mix colours by 8-bit weights that add up to 255."""
    r = g = b = 0
    for color, weight in samples:
        w = max(0, min(255, int(weight)))
        r += color.r * w
        g += color.g * w
        b += color.b * w
    return CRGB((r + 127) // 255, (g + 127) // 255, (b + 127) // 255)
