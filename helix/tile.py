from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator, List, Tuple

from geometry import Vec2f, Vec2i

# Neighbour order: (0,0), (1,0), (0,1), (1,1)
_OFFSETS: Tuple[Tuple[int, int], ...] = ((0, 0), (1, 0), (0, 1), (1, 1))


def _quantize(weights: List[float]) -> List[int]:
    """Scale weights summing to 1.0 into bytes summing to exactly 255."""
    scaled = [max(0.0, w) * 255.0 for w in weights]
    out = [int(math.floor(s)) for s in scaled]
    short = 255 - sum(out)
    # hand the leftover units to the largest fractional parts
    order = sorted(range(len(out)), key=lambda k: (-(scaled[k] - out[k]), k))
    for k in order[: max(0, short)]:
        out[k] += 1
    return out


@dataclass(frozen=True)
class Tile2x2Wrap:
    """Bilinear 2x2 splat of a fractional point on the cylinder surface.

    x neighbours wrap around the circumference, y neighbours are clamped to
    the grid rows. Weights add up to 255.
    """

    entries: Tuple[Tuple[Vec2i, int], ...]

    @classmethod
    def from_position(cls, pos: Vec2f, width: int, height: int) -> "Tile2x2Wrap":
        width = max(1, int(width))
        height = max(1, int(height))
        ix = int(math.floor(pos.x))
        iy = int(math.floor(pos.y))
        fx = pos.x - ix
        fy = pos.y - iy

        entries = []
        raw = []
        for dx, dy in _OFFSETS:
            x = (ix + dx) % width
            y = max(0, min(height - 1, iy + dy))
            entries.append(Vec2i(x, y))
            raw.append((1.0 - abs(fx - dx)) * (1.0 - abs(fy - dy)))

        return cls(entries=tuple(zip(entries, _quantize(raw))))

    def at(self, x: int, y: int) -> Tuple[Vec2i, int]:
        return self.entries[y * 2 + x]

    def __iter__(self) -> Iterator[Tuple[Vec2i, int]]:
        return iter(self.entries)

    @property
    def total_weight(self) -> int:
        return sum(w for _, w in self.entries)
